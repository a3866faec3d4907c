from collections.abc import Iterable
import copy
from enum import IntEnum
from functools import partial
import sys
import warnings
import weakref
from weakref import WeakKeyDictionary

from matplotlib.axes import Axes
from matplotlib.figure import FigureBase
from matplotlib.lines import Line2D

from . import _pick_info
from ._identifiers import InvalidInput, LineRegistry, resolve_identifiers
from ._pick_info import HitKind


_default_bindings = dict(
    select=1,
    delete=3,
)
_default_label_kwargs = dict(
    bbox=dict(
        boxstyle="round,pad=.3",
        fc="yellow",
        alpha=.8,
        ec="k",
    ),
)


def _mouse_event_matches(event, spec):
    """
    Return whether a mouse event "matches" an event spec, which is either a
    single mouse button, or a mapping matched against ``vars(event)``, e.g.
    ``{"button": 1, "key": "control"}``.
    """
    if spec is None:
        return False
    if isinstance(spec, int):
        spec = {"button": spec}
    return all(getattr(event, k) == v for k, v in spec.items())


def _check_bindings(bindings):
    bindings = {**_default_bindings,
                **(bindings if bindings is not None else {})}
    unknown_bindings = {*bindings} - {*_default_bindings}
    if unknown_bindings:
        raise ValueError("Unknown binding(s): {}".format(
            ", ".join(sorted(unknown_bindings))))
    bindings_items = list(bindings.items())
    for i in range(len(bindings)):
        action, key = bindings_items[i]
        for j in range(i):
            other_action, other_key = bindings_items[j]
            if key == other_key and key is not None:
                raise ValueError(
                    f"Duplicate bindings: {key} is used for "
                    f"{other_action} and for {action}")
    return bindings


def _current_pyplot_figure():
    # Do not import pyplot ourselves to avoid forcing the backend.
    plt = sys.modules.get("matplotlib.pyplot")
    return plt.gcf() if plt and plt.get_fignums() else None


def _unpack_lines(lines):
    r"""
    Normalize *lines* to a list of `.Line2D`\s on a single figure.

    *lines* may be None (the lines on pyplot's current axes), a figure, an
    axes, a single line, or an iterable of lines.
    """
    if lines is None:
        figure = _current_pyplot_figure()
        lines = figure.gca() if figure else []
    if isinstance(lines, FigureBase):
        lines = [line for ax in lines.axes for line in ax.lines]
    elif isinstance(lines, Axes):
        lines = [*lines.lines]
    elif isinstance(lines, Line2D) or not isinstance(lines, Iterable):
        lines = [lines]
    lines = [*lines]
    if not lines:
        raise InvalidInput("No lines to label")
    for line in lines:
        if not isinstance(line, Line2D):
            raise InvalidInput(f"{line!r} is not a Line2D")
        if line.axes is None:
            raise InvalidInput(f"{line} is not on any axes")
    figures = {line.figure for line in lines}
    if len(figures) > 1:
        raise InvalidInput("All lines must belong to the same figure")
    return lines


class State(IntEnum):
    Disabled, Idle, Dragging = range(3)


class LineLabeler:
    """
    Click-to-label controller for the lines of a figure.

    Clicking on a registered line places a `Label` carrying the line's
    identifier at the clicked point; clicking on a label and dragging moves
    it; right-clicking on a label deletes it.  There is at most one
    `LineLabeler` per figure; use `get_labeler` to retrieve it.

    Attributes
    ----------
    bindings : dict
        See the *bindings* keyword argument to `enable`.
    label_kwargs : dict
        See the *label_kwargs* keyword argument to `enable`.
    deletable : bool
        See the *deletable* keyword argument to `enable`.
    """

    _keep_alive = WeakKeyDictionary()

    def __init__(self, figure):
        if figure in type(self)._keep_alive:
            raise ValueError(
                f"{figure} already has a {type(self).__name__}; use "
                f"get_labeler() to retrieve it")
        # Be careful with GC.
        self._figure = weakref.ref(figure)
        type(self)._keep_alive[figure] = self

        self._state = State.Disabled
        self._registry = LineRegistry()
        self._labels = []
        self._session = None
        self._callbacks = {"add": [], "remove": []}
        self._press_disconnectors = []
        self._drag_disconnectors = []

        self.bindings = copy.deepcopy(_default_bindings)
        self.label_kwargs = copy.deepcopy(_default_label_kwargs)
        self.deletable = True

    @property
    def figure(self):
        """The figure on which labels are created."""
        return self._figure()

    @property
    def state(self):
        """The current `State`."""
        return self._state

    @property
    def enabled(self):
        """Whether clicks on lines currently create labels."""
        return self._state is not State.Disabled

    @property
    def registry(self):
        """The `LineRegistry` of labelable lines and their identifiers."""
        return self._registry

    @property
    def labels(self):
        r"""The tuple of `Label`\s still present on the figure."""
        self._labels = [label for label in self._labels
                        if label.axes is not None]
        return tuple(self._labels)

    def enable(self, lines, ids=None, *,
               bindings=None, label_kwargs=None, deletable=True):
        """
        Enable labeling of *lines*, replacing any previous set of lines.

        Parameters
        ----------

        lines : Union[Line2D, Axes, Figure, List[Line2D]]
            The lines that can be labeled; axes and figures stand for all the
            lines they contain.  All lines must be on this labeler's figure.

        ids : None, Sequence[float], Sequence[str], or "legend"
            The identifier source, see `resolve_identifiers`.

        bindings : dict, optional
            A mapping of actions to mouse buttons.  Valid keys are:

            ========= ========================================================
            'select'  mouse button to create a label on a line, or to start
                      dragging a label (default: :data:`.MouseButton.LEFT`)
            'delete'  mouse button to delete a label
                      (default: :data:`.MouseButton.RIGHT`)
            ========= ========================================================

            Missing entries will be set to the defaults (when omitted
            altogether, the current `bindings` are kept).  In order to not
            assign any binding to an action, set it to ``None``.  Modifier
            keys (or other event properties) can be set by passing them as
            e.g. ``{"button": 1, "key": "control"}``.

        label_kwargs : dict, optional
            Properties applied to new label `.Text` artists.  The default
            draws the text on a yellow box.

        deletable : bool, default: True
            Whether new labels can be deleted with the "delete" binding.

        Returns
        -------
        self

        Raises
        ------
        InvalidInput, CardinalityMismatch
            If the lines or the identifier source are invalid.
        NoLegendFound, LegendResolutionAmbiguous
            If ``ids="legend"`` and no legend belongs to the lines' axes.

        In all these cases, the labeler is left unchanged.
        """
        figure = self.figure
        lines = _unpack_lines(lines)
        if lines[0].figure is not figure:
            raise InvalidInput(f"The lines do not belong to {figure}")
        registry = LineRegistry(zip(lines, resolve_identifiers(lines, ids)))
        bindings = _check_bindings(
            bindings if bindings is not None else self.bindings)
        for line in lines:
            if not line.get_visible():
                warnings.warn(
                    f"{line} is not visible and cannot be labeled until "
                    f"shown")

        if self._state is not State.Disabled:
            self.disable()
        self._registry = registry
        self.bindings = bindings
        if label_kwargs is not None:
            self.label_kwargs = label_kwargs
        self.deletable = deletable
        canvas = figure.canvas
        self._press_disconnectors = [
            partial(canvas.mpl_disconnect,
                    canvas.mpl_connect(
                        "button_press_event", self._on_button_press))]
        self._state = State.Idle
        return self

    def disable(self):
        """
        Stop labeling.

        Existing labels are kept, but can no longer be moved or deleted with
        the mouse.
        """
        self._end_drag()
        for disconnector in self._press_disconnectors:
            disconnector()
        self._press_disconnectors = []
        self._state = State.Disabled

    def add_label(self, line, point):
        """
        Create a `Label` for a registered *line* at data coordinates *point*.

        Emits the ``"add"`` event with the new `Label` as argument.
        """
        text = self._registry.get(line)
        if text is None:
            raise ValueError(f"{line} is not a registered line")
        label = _pick_info.make_label(
            line.axes, point, text,
            deletable=self.deletable, label_kwargs=self.label_kwargs)
        self._labels.append(label)
        for cb in self._callbacks["add"]:
            cb(label)
        self.figure.canvas.draw_idle()
        return label

    def remove_label(self, label):
        """Remove a `Label`; emits the ``"remove"`` event."""
        if label is self._session:
            self._end_drag()
        self._labels.remove(label)
        label.remove()
        for cb in self._callbacks["remove"]:
            cb(label)
        self.figure.canvas.draw_idle()

    def connect(self, event, func=None):
        """
        Connect a callback to a `LineLabeler` event; return the callback.

        Two events can be connected to:

        - callbacks connected to the ``"add"`` event are called when a
          `Label` is created, with that label as only argument;
        - callbacks connected to the ``"remove"`` event are called when a
          `Label` is deleted, with that label as only argument.

        This method can also be used as a decorator::

            @labeler.connect("add")
            def on_add(label):
                ...
        """
        if event not in self._callbacks:
            raise ValueError(f"{event!r} is not a valid labeler event")
        if func is None:
            return partial(self.connect, event)
        self._callbacks[event].append(func)
        return func

    def disconnect(self, event, cb):
        """
        Disconnect a previously connected callback.

        If a callback is connected multiple times, only one connection is
        removed.
        """
        try:
            self._callbacks[event].remove(cb)
        except KeyError:
            raise ValueError(f"{event!r} is not a valid labeler event")
        except ValueError:
            raise ValueError(f"Callback {cb} is not registered to {event}")

    def _filter_mouse_event(self, event):
        # Accept the event iff no other widget is active, or this is a double
        # click (to bypass the widget lock).
        return not event.canvas.widgetlock.locked() or event.dblclick

    def _on_button_press(self, event):
        if (self._state is not State.Idle
                or not self._filter_mouse_event(event)):
            return
        hit = _pick_info.compute_hit(event, self._registry, self.labels)
        if hit.kind is HitKind.Line:
            if _mouse_event_matches(event, self.bindings["select"]):
                self.add_label(hit.ref, hit.target)
        elif hit.kind is HitKind.Label:
            if _mouse_event_matches(event, self.bindings["delete"]):
                if hit.ref.deletable:
                    self.remove_label(hit.ref)
            elif _mouse_event_matches(event, self.bindings["select"]):
                self._begin_drag(hit.ref)

    def _begin_drag(self, label):
        canvas = self.figure.canvas
        self._session = label
        self._drag_disconnectors = [
            partial(canvas.mpl_disconnect, canvas.mpl_connect(*pair))
            for pair in [
                ("motion_notify_event", self._on_motion_notify),
                ("button_release_event", self._on_button_release),
            ]]
        self._state = State.Dragging

    def _end_drag(self):
        for disconnector in self._drag_disconnectors:
            disconnector()
        self._drag_disconnectors = []
        self._session = None
        if self._state is State.Dragging:
            self._state = State.Idle

    def _on_motion_notify(self, event):
        label = self._session
        if (self._state is not State.Dragging
                or label is None or label.axes is None
                or event.x is None or event.y is None):
            return
        label.move_to(_pick_info._data_point(event, label.axes))
        self.figure.canvas.draw_idle()

    def _on_button_release(self, event):
        if self._state is State.Dragging:
            self._end_drag()


def get_labeler(figure):
    """Return the `LineLabeler` of *figure*, or None if there is none."""
    return LineLabeler._keep_alive.get(figure)


def enable(lines=None, ids=None, **kwargs):
    """
    Label lines when they are clicked.

    Parameters
    ----------

    lines : Optional[Union[Line2D, Axes, Figure, List[Line2D]]]
        The lines that can be labeled.  Axes and figures stand for all the
        lines they contain.  Defaults to the lines on :mod:`~.pyplot`'s
        current axes, in the order in which they were created.

    ids : None, Sequence[float], Sequence[str], or "legend"
        How lines are identified: by their index in *lines* starting at 1
        (the default), by the corresponding number or string, or by the
        entries of the legend attached to the lines' axes.

    **kwargs
        Keyword arguments are passed to `LineLabeler.enable`.

    Returns
    -------
    LineLabeler
        The labeler of the lines' figure.
    """
    lines = _unpack_lines(lines)
    figure = lines[0].figure
    labeler = get_labeler(figure)
    if labeler is not None:
        return labeler.enable(lines, ids, **kwargs)
    labeler = LineLabeler(figure)
    try:
        return labeler.enable(lines, ids, **kwargs)
    except Exception:
        # A figure keeps no labeler from a failed first call.
        del LineLabeler._keep_alive[figure]
        raise


def disable(figure=None):
    """
    Turn off line labeling on *figure* (or on an axes' figure).

    Defaults to :mod:`~.pyplot`'s current figure.  Existing labels stay in
    place.
    """
    if figure is None:
        figure = _current_pyplot_figure()
    elif isinstance(figure, Axes):
        figure = figure.figure
    labeler = get_labeler(figure) if figure is not None else None
    if labeler:
        labeler.disable()
