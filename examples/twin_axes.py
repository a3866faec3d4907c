"""
Label lines on twinned axes
===========================

Labels are placed in the data coordinates of the axes owning the clicked line.
"""

import matplotlib.pyplot as plt
import numpy as np
import mpllinelabel

t = np.linspace(0, 10, 200)

fig, ax1 = plt.subplots()
ax2 = ax1.twinx()
l1, = ax1.plot(t, np.sin(t), "C0")
l2, = ax2.plot(t, 100 * np.cos(t), "C1")
ax1.set_title("Lines on both axes can be labeled")

mpllinelabel.enable([l1, l2], ["sin", "100 cos"])

plt.show()
