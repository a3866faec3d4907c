"""
Label lines by clicking on them
===============================

Lines are identified by their index, starting at 1.  Click on a line to drop a
label, drag a label to move it, and right-click on it to delete it.
"""

import matplotlib.pyplot as plt
import numpy as np
import mpllinelabel

s = np.sin(2 * np.pi * np.linspace(0, 1)[:, None]) * np.arange(1, 6)

fig, ax = plt.subplots()
lines = ax.plot(s)
ax.set_title("Click on a line to label it.\nDrag labels to move them, "
             "right-click to delete them.")
fig.tight_layout()

mpllinelabel.enable(lines)

plt.show()
