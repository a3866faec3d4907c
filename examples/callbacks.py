"""
React to labels being added
===========================

Callbacks connected to the ``"add"`` event can restyle new labels; here,
labels are drawn in the color of the line they identify.
"""

import matplotlib.pyplot as plt
import numpy as np
import mpllinelabel

data = np.outer(range(10), range(1, 5))

fig, ax = plt.subplots()
ax.set_title("Labels match their line's color")
lines = ax.plot(data)
colors = {str(i): line.get_color() for i, line in enumerate(lines, 1)}

labeler = mpllinelabel.enable(lines, label_kwargs={"fontweight": "bold"})
labeler.connect(
    "add", lambda label: label.artist.set(color=colors[label.text]))

plt.show()
