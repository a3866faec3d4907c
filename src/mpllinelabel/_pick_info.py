from collections import namedtuple
from contextlib import suppress
from enum import Enum

import numpy as np


class HitKind(Enum):
    Nothing, Line, Label = range(3)


Hit = namedtuple("Hit", "kind ref target")
Hit.__doc__ = """
    The result of hit-testing a mouse event.

    Dispatch on `kind`; `ref` is the hit line or `Label` (or None), and
    `target` is the event position in the data coordinates of the axes that
    own `ref`.
"""
Hit.kind.__doc__ = "The `HitKind` of the hit artist."
Hit.ref.__doc__ = "The hit `.Line2D` or `Label`, or None."
Hit.target.__doc__ = "The event position, in data coordinates, or None."

_no_hit = Hit(HitKind.Nothing, None, None)


def _data_point(event, ax):
    """Return the position of *event* in the data coordinates of *ax*."""
    # Not `event.xdata`, which refers to `event.inaxes` (e.g., a twin).
    return tuple(ax.transData.inverted().transform((event.x, event.y)))


def _display_rank(line):
    ax = line.axes
    return ax.get_zorder(), line.get_zorder(), ax.lines.index(line)


def _set_valid_props(artist, kwargs):
    """Set valid properties for the artist, dropping the others."""
    artist.set(**{k: kwargs[k] for k in kwargs if hasattr(artist, "set_" + k)})
    return artist


class Label:
    """
    A text label placed on an axes by clicking a line.

    A label is independent of the line it was created from: it keeps no
    reference to it, and a line can carry any number of labels.
    """

    def __init__(self, artist, deletable=True):
        self.artist = artist
        self.deletable = deletable

    def __repr__(self):
        return (f"<{type(self).__name__}({self.text!r}, "
                f"position={self.position})>")

    axes = property(lambda self: self.artist.axes)
    text = property(lambda self: self.artist.get_text())
    position = property(
        lambda self: tuple(self.artist.get_position()),
        doc="The label position, in data coordinates.")

    def contains(self, event):
        return self.artist.contains(event)[0]

    def move_to(self, point):
        self.artist.set_position(point)

    def remove(self):
        # ValueError is raised if the artist has already been removed.
        with suppress(ValueError):
            self.artist.remove()


def make_label(axes, point, text, *, deletable=True, label_kwargs=None):
    """
    Create, add, and return a `Label` with *text* at *point* on *axes*.

    *point* is in data coordinates.  Entries of *label_kwargs* that are not
    properties of the text artist (e.g., a background ``bbox`` on a backend
    artist that lacks one) are dropped.
    """
    artist = axes.text(
        *point, text,
        horizontalalignment="center", verticalalignment="center",
        zorder=np.inf)
    _set_valid_props(artist, label_kwargs or {})
    return Label(artist, deletable=deletable)


def compute_hit(event, lines, labels):
    """
    Find what *event* hits, among *labels* and then *lines*.

    Labels are tested newest first.  Among the lines, invisible ones and
    those cropped by their axes at the event position are skipped, and the
    topmost one (as drawn) wins.
    """
    for label in reversed(labels):
        if (label.axes is not None
                and event.canvas is label.artist.figure.canvas
                and label.contains(event)):
            return Hit(HitKind.Label, label, _data_point(event, label.axes))
    candidates = [
        line for line in lines
        if (line.axes is not None
            and event.canvas is line.figure.canvas
            and line.get_visible()
            and line.axes.contains(event)[0]
            and line.contains(event)[0])]
    if not candidates:
        return _no_hit
    line = max(candidates, key=_display_rank)
    return Hit(HitKind.Line, line, _data_point(event, line.axes))
