"""
Use the legend entries as identifiers
=====================================

With ``ids="legend"``, each line is identified by the corresponding entry of
the legend of its axes.
"""

import matplotlib.pyplot as plt
import numpy as np
import mpllinelabel

s = np.sin(2 * np.pi * np.linspace(0, 1)[:, None]) * np.arange(1, 6)

fig, ax = plt.subplots()
lines = ax.plot(s)
ax.legend(["Ch1", "Ch2", "Ch3", "Ch4", "Ch5"], loc="upper right")
ax.set_title("Click on a line to label it with its legend entry")

mpllinelabel.enable(lines, "legend")

plt.show()
