from collections.abc import Iterable
from numbers import Integral, Real
import weakref
from weakref import WeakKeyDictionary

from matplotlib.legend import Legend
import numpy as np


class LineLabelError(Exception):
    """Base class for errors raised while enabling line labels."""


class InvalidInput(LineLabelError, TypeError):
    """Something other than a labelable line was passed as a line."""


class CardinalityMismatch(LineLabelError, ValueError):
    """The identifier source does not have one entry per line."""


class NoLegendFound(LineLabelError, LookupError):
    """Legend identifiers were requested but the figure has no legend."""


class LegendResolutionAmbiguous(LineLabelError, LookupError):
    """No single legend on the figure belongs to the lines' axes."""


def _is_alive(artist):
    """Check whether *artist* is still present on its parent axes."""
    # `remove()` and `cla()` clear `.axes` since Matplotlib 3.7.
    return bool(artist is not None and artist.axes)


class LineRegistry:
    """
    An immutable mapping of lines to their identifier strings.

    Lines are held weakly; lines that have been removed from their axes are
    skipped when iterating.
    """

    def __init__(self, pairs=()):
        self._ids = WeakKeyDictionary()
        self._refs = []
        for line, identifier in pairs:
            if line in self._ids:
                raise InvalidInput(f"{line} is listed more than once")
            self._ids[line] = identifier
            self._refs.append(weakref.ref(line))

    def __getitem__(self, line):
        return self._ids[line]

    def __contains__(self, line):
        try:
            return line in self._ids and _is_alive(line)
        except TypeError:  # Unhashable.
            return False

    def __iter__(self):
        return filter(_is_alive, (ref() for ref in self._refs))

    def __len__(self):
        return sum(1 for _ in self)

    def __repr__(self):
        return f"<{type(self).__name__}({dict(self.items())!r})>"

    @property
    def lines(self):
        """The tuple of registered lines still present on their axes."""
        return tuple(iter(self))

    def get(self, line, default=None):
        return self._ids[line] if line in self else default

    def items(self):
        return [(line, self._ids[line]) for line in self]


def _format_number(value):
    if isinstance(value, Integral):
        return str(int(value))
    value = float(value)
    return str(int(value)) if value.is_integer() else format(value, "g")


def _find_legend(axes):
    """Return the `.Legend` belonging to *axes*, searching its whole figure."""
    figure = axes.figure
    legends = [*dict.fromkeys(figure.findobj(Legend))]
    if not legends:
        raise NoLegendFound(f"{figure} has no legend")
    candidates = [legend for legend in legends if legend.axes is axes]
    if len(candidates) == 1:
        return candidates[0]
    if axes.get_legend() in candidates:
        return axes.get_legend()
    raise LegendResolutionAmbiguous(
        f"None of the {len(legends)} legend(s) on {figure} can be matched to "
        f"{axes}")


def resolve_identifiers(lines, ids=None):
    """
    Compute one identifier string per line.

    Parameters
    ----------

    lines : List[Line2D]
        The lines to identify, in order.

    ids : None, Sequence[float], Sequence[str], or "legend"
        The identifier source:

        - None: lines are numbered from 1, in order;
        - a sequence of numbers, which are formatted (integral values without
          a decimal point);
        - a sequence of strings, used verbatim;
        - ``"legend"``: the entries of the legend attached to the axes of the
          first line.

    Returns
    -------
    List[str]

    Raises
    ------
    InvalidInput
        If *ids* is none of the above.
    CardinalityMismatch
        If the identifier source does not have exactly one entry per line.
    NoLegendFound, LegendResolutionAmbiguous
        If ``ids="legend"`` and the legend cannot be found.
    """
    n = len(lines)
    if ids is None:
        return [str(i) for i in range(1, n + 1)]
    if isinstance(ids, str):
        if ids != "legend":
            raise InvalidInput(
                f"{ids!r} is not a valid identifier source; did you mean "
                f"'legend' or [{ids!r}]?")
        if not lines or getattr(lines[0], "axes", None) is None:
            raise InvalidInput(
                "Legend identifiers require a first line placed on an axes")
        legend = _find_legend(lines[0].axes)
        identifiers = [text.get_text() for text in legend.get_texts()]
        source = "Legend"
    else:
        if isinstance(ids, Real):
            ids = [ids]
        elif isinstance(ids, np.ndarray):
            ids = ids.ravel()
        elif (isinstance(ids, (bytes, bytearray))
              or not isinstance(ids, Iterable)):
            raise InvalidInput(
                f"Identifiers must be a sequence, not {type(ids).__name__}")
        ids = [*ids]
        if all(isinstance(i, str) for i in ids):
            identifiers = [str(i) for i in ids]
        elif all(isinstance(i, Real) and not isinstance(i, bool)
                 for i in ids):
            identifiers = [*map(_format_number, ids)]
        else:
            raise InvalidInput(
                "Identifiers must be all numbers or all strings")
        source = "Identifier sequence"
    if len(identifiers) != n:
        raise CardinalityMismatch(
            f"{source} has {len(identifiers)} entries, but {n} line(s) were "
            f"given")
    return identifiers
