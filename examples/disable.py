"""
Lock labels in place
====================

Disabling labeling keeps existing labels but prevents adding, moving, or
deleting them.  Here, labels are added programmatically, then locked.
"""

import matplotlib.pyplot as plt
import numpy as np
import mpllinelabel

x = np.linspace(0, 10, 100)

fig, ax = plt.subplots()
ax.set_title("These labels are locked in place")
lines = [ax.plot(x, i * x)[0] for i in range(1, 6)]

labeler = mpllinelabel.enable(lines, [f"{i}x" for i in range(1, 6)])
for i, line in enumerate(lines, 1):
    labeler.add_label(line, (8, 8 * i))
mpllinelabel.disable(fig)

plt.show()
