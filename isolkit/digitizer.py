"""Operator-assisted digitization of hysteresis envelopes.

The recorded loops are drawn on a matplotlib figure and an operator picks the
envelope vertices. Where the picks come from is a ``PointSource``: the
interactive ``GinputPointSource`` for real runs, ``ScriptedPointSource`` for
tests and for replaying picks saved from an earlier session.
"""

import logging
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from isolkit.exceptions import IncompleteSelection, InconsistentWinding
from isolkit.geometry import N_VERTICES, EnvelopeCycle, signed_area
from isolkit.plotting import OVERLAY_COLOR, save_figure
from isolkit.records import HysteresisSeries

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

INITIAL_TITLE = "Initial Envelope Approximation\nSelect 4 Extreme Points (Clockwise)"
REFINED_TITLE = "Refined Envelope Selection\nSelect 4 Final Points (Clockwise)"


class PointSource(Protocol):
    """Anything that can supply ``count`` (displacement, force) picks."""

    def pick(self, axes: Axes, count: int, timeout: Optional[float] = None) -> List[Point]:
        ...


class GinputPointSource:
    """Collects picks with mouse clicks on the figure (``plt.ginput``).

    The operator may finish early with Enter or the middle mouse button;
    that yields fewer points than requested.
    """

    def __init__(self, show_clicks: bool = True):
        self.show_clicks = show_clicks

    def pick(self, axes: Axes, count: int, timeout: Optional[float] = None) -> List[Point]:
        fig = axes.figure
        plt.figure(fig.number)
        plt.sca(axes)
        fig.canvas.draw()
        # matplotlib treats a non-positive timeout as "wait forever"
        points = plt.ginput(
            count,
            timeout=0 if timeout is None else timeout,
            show_clicks=self.show_clicks,
        )
        return [(float(x), float(y)) for x, y in points]


class ScriptedPointSource:
    """Replays fixed rounds of picks, one round per ``pick`` call.

    A round with fewer points than requested behaves like an aborted
    interaction, and so does calling ``pick`` after all rounds are used.
    """

    def __init__(self, rounds: Sequence[Sequence[Sequence[float]]]):
        self._rounds = [
            [(float(p[0]), float(p[1])) for p in points] for points in rounds
        ]
        self.calls = 0

    def pick(self, axes: Axes, count: int, timeout: Optional[float] = None) -> List[Point]:
        index = self.calls
        self.calls += 1
        if index >= len(self._rounds):
            return []
        return self._rounds[index][:count]


def check_clockwise(cycle: EnvelopeCycle) -> None:
    """Raise ``InconsistentWinding`` unless the vertices run clockwise."""
    area = signed_area(cycle)
    if area >= 0.0:
        raise InconsistentWinding(
            f"Envelope vertices enclose a signed area of {area:.6g}; "
            "pick them clockwise starting from an extreme point."
        )


def _draw_selection_axes(
    series: HysteresisSeries, overlay: Optional[EnvelopeCycle], title: str
):
    fig, ax = plt.subplots()
    fig.patch.set_facecolor("white")
    ax.plot(series.displacement, series.force, "b-", linewidth=1.2)
    if overlay is not None:
        ax.plot(
            overlay.displacement,
            overlay.force,
            "--",
            color=OVERLAY_COLOR,
            linewidth=1.2,
        )
    ax.grid(True)
    ax.set_title(title)
    ax.set_xlabel("Displacement (m)")
    ax.set_ylabel("Force (kN)")
    return fig, ax


def select_points(
    series: HysteresisSeries,
    point_source: PointSource,
    overlay: Optional[EnvelopeCycle] = None,
    count: int = N_VERTICES,
    snapshot_path: Optional[Union[str, Path]] = None,
    title: str = INITIAL_TITLE,
    timeout: Optional[float] = None,
    dpi: int = 300,
    strict: bool = False,
) -> EnvelopeCycle:
    """Show the series (and an optional overlay) and collect one closed cycle.

    Args:
        series: Recorded force-displacement history, non-empty.
        point_source: Supplier of the operator picks.
        overlay: Cycle from a previous round, drawn dashed for reference.
        count: Number of vertices to pick; envelope cycles have 4.
        snapshot_path: If given, the figure of an accepted round is saved here.
        title: Figure title with the instructions for the operator.
        timeout: Seconds to wait for the picks; ``None`` waits indefinitely.
        dpi: Snapshot resolution.
        strict: Reject picks that are not ordered clockwise.

    Returns:
        The picks closed into an ``EnvelopeCycle``.

    Raises:
        IncompleteSelection: If fewer than ``count`` picks were supplied.
        InconsistentWinding: In strict mode, if the picks are not clockwise.
    """
    if count != N_VERTICES:
        raise ValueError(f"Envelope cycles have {N_VERTICES} vertices, got count={count}")
    if len(series) == 0:
        raise ValueError("Cannot digitize an empty series")

    fig, ax = _draw_selection_axes(series, overlay, title)
    try:
        picks = list(point_source.pick(ax, count, timeout))
        if len(picks) < count:
            raise IncompleteSelection(expected=count, received=len(picks))
        picks = picks[:count]
        logger.debug("Operator picks: %s", picks)

        cycle = EnvelopeCycle.from_picks(picks)
        if strict:
            check_clockwise(cycle)

        if snapshot_path is not None:
            save_figure(fig, snapshot_path, dpi=dpi)
    finally:
        plt.close(fig)

    return cycle
