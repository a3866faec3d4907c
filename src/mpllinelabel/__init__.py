import json
import os

import importlib.metadata as _im
try:
    __version__ = _im.version("mpllinelabel")
except ImportError:
    __version__ = "0+unknown"

from ._identifiers import (
    LineLabelError, InvalidInput, CardinalityMismatch, NoLegendFound,
    LegendResolutionAmbiguous, LineRegistry, resolve_identifiers)
from ._mpllinelabel import LineLabeler, State, disable, enable, get_labeler
from ._pick_info import Hit, HitKind, Label, compute_hit, make_label


__all__ = ["LineLabeler", "State", "enable", "disable", "get_labeler",
           "LineRegistry", "resolve_identifiers", "Label", "make_label",
           "Hit", "HitKind", "compute_hit", "LineLabelError", "InvalidInput",
           "CardinalityMismatch", "NoLegendFound",
           "LegendResolutionAmbiguous", "install"]


def install(figure):
    """
    A hook function that can be registered into ``rcParams["figure.hooks"]``.

    This hook arranges for line labeling to be enabled on all lines of each
    figure the first time it is drawn, if the :envvar:`MPLLINELABEL`
    environment variable is not empty (at first-draw time).  That variable
    must contain a JSON-encoded dict of options passed to `.enable`, e.g.
    ``{"ids": "legend"}``.
    """

    def connect(event):
        figure.canvas.mpl_disconnect(cid)
        envopt = os.environ.get("MPLLINELABEL")
        if not envopt or not any(ax.lines for ax in figure.axes):
            return
        enable(figure, **json.loads(envopt))

    cid = figure.canvas.mpl_connect("draw_event", connect)
