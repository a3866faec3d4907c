"""
Provide your own identifiers
============================

Identifiers can be numbers or arbitrary strings, one per line.
"""

import matplotlib.pyplot as plt
import numpy as np
import mpllinelabel

s = np.sin(2 * np.pi * np.linspace(0, 1)[:, None]) * np.arange(1, 6)

fig, (ax1, ax2) = plt.subplots(2, sharex=True)
lines1 = ax1.plot(s)
lines2 = ax2.plot(-s)
ax1.set_title("Numbered 11 to 15 (top), named (bottom)")

# A figure has a single labeler; enabling again replaces the labelable lines,
# so pass all of them at once.
mpllinelabel.enable(
    lines1 + lines2,
    [*map(str, range(11, 16)),
     "michelle", "writes", "useful", "plotting", "utilities"])

plt.show()
