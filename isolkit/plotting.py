"""
Report helpers for the hysteresis envelope analysis.

Static figures are written with matplotlib (PNG), the interactive version of
the envelope comparison with Plotly (HTML). Scalar results go to the package
logger and, optionally, to a text stream or report file.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, TextIO, Union

import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go
from matplotlib.figure import Figure

from isolkit.geometry import EnvelopeCycle, EnvelopeMetrics
from isolkit.records import HysteresisSeries

logger = logging.getLogger(__name__)

PathType = Union[str, Path]

# Centralized styling for consistent plots.
DATA_COLOR = "#808080"
ENVELOPE_COLOR = "#000000"
OVERLAY_COLOR = "#d62728"


def save_figure(fig: Figure, path: PathType, dpi: int = 300) -> Path:
    """Save a matplotlib figure as PNG, creating the parent directory."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(p, dpi=dpi, bbox_inches="tight")
    logger.info("Figure saved to %s", p)
    return p


def render_comparison(
    series: HysteresisSeries,
    cycles: Sequence[EnvelopeCycle],
    path: PathType,
    displacement_limit: float = 0.3,
    force_limit: float = 800.0,
    dpi: int = 300,
) -> Path:
    """Plot the recorded loops against the digitized envelope(s).

    The last cycle in ``cycles`` is drawn as the final envelope; earlier ones
    are drawn as dashed approximations.

    Args:
        series: The recorded force-displacement history.
        cycles: Envelope cycles in the order they were digitized.
        path: Output PNG path.
        displacement_limit: Symmetric x-axis limit (m).
        force_limit: Symmetric y-axis limit (kN).
        dpi: Output resolution.

    Returns:
        The path that was written.
    """
    fig, ax = plt.subplots(figsize=(6, 4))
    try:
        ax.plot(
            series.displacement,
            series.force,
            "--",
            color=DATA_COLOR,
            linewidth=0.8,
            label="Experimental Data",
        )
        for i, cycle in enumerate(cycles):
            is_final = i == len(cycles) - 1
            ax.plot(
                cycle.displacement,
                cycle.force,
                "-" if is_final else ":",
                color=ENVELOPE_COLOR if is_final else OVERLAY_COLOR,
                linewidth=1.5 if is_final else 1.0,
                label="Hysteresis Envelope" if is_final else "Initial Approximation",
            )

        # Axis cross through the origin
        ax.plot([-displacement_limit, displacement_limit], [0, 0], "k", linewidth=0.8)
        ax.plot([0, 0], [-force_limit, force_limit], "k", linewidth=0.8)

        ax.set_xlim(-displacement_limit, displacement_limit)
        ax.set_ylim(-force_limit, force_limit)
        ax.set_xticks(np.linspace(-displacement_limit, displacement_limit, 7))
        ax.set_yticks(np.linspace(-force_limit, force_limit, 5))
        ax.minorticks_on()
        ax.set_xlabel("Displacement (m)", fontweight="bold")
        ax.set_ylabel("Force (kN)", fontweight="bold")
        ax.legend(loc="lower right", frameon=False)
        return save_figure(fig, path, dpi=dpi)
    finally:
        plt.close(fig)


def plot_envelope_html(
    series: HysteresisSeries,
    cycles: Sequence[EnvelopeCycle],
    output_path: PathType,
    show_fig: bool = False,
) -> Path:
    """Creates and saves an interactive Plotly version of the envelope figure.

    Args:
        series: The recorded force-displacement history.
        cycles: Envelope cycles in the order they were digitized.
        output_path: The output HTML file.
        show_fig: If True, displays the figure interactively.
    """
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=series.displacement,
            y=series.force,
            mode="lines",
            name="Experimental Data",
            line=dict(color=DATA_COLOR, dash="dash", width=1),
        )
    )
    for i, cycle in enumerate(cycles):
        is_final = i == len(cycles) - 1
        fig.add_trace(
            go.Scatter(
                x=cycle.displacement,
                y=cycle.force,
                mode="lines+markers",
                name="Hysteresis Envelope" if is_final else f"Approximation {i + 1}",
                line=dict(
                    color=ENVELOPE_COLOR if is_final else OVERLAY_COLOR,
                    dash="solid" if is_final else "dot",
                    width=2.5 if is_final else 1.5,
                ),
            )
        )
    fig.update_xaxes(title_text="Displacement (m)", zeroline=True)
    fig.update_yaxes(title_text="Force (kN)", zeroline=True)
    fig.update_layout(
        height=600,
        width=800,
        title_text="Hysteresis Envelope",
        legend=dict(orientation="h", yanchor="top", y=-0.15, xanchor="center", x=0.5),
    )

    p = Path(output_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(p))
    logger.info("Interactive envelope plot saved to %s", p)
    if show_fig:
        fig.show()
    return p


def format_metrics(metrics: EnvelopeMetrics) -> list[str]:
    return [
        f"Effective Stiffness: {metrics.effective_stiffness:.6g} kN/m",
        f"Equivalent Viscous Damping: {metrics.equivalent_damping:.1f}%",
    ]


def write_metrics(metrics: EnvelopeMetrics, sink: Optional[TextIO] = None) -> None:
    """Report k_eff and xi_eff through the logger and, if given, a text stream."""
    for line in format_metrics(metrics):
        logger.info(line)
        if sink is not None:
            sink.write(line + "\n")


def write_metrics_report(metrics: EnvelopeMetrics, path: PathType) -> Path:
    """Write a plain-text report of the envelope metrics."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        f.write("Hysteresis Envelope Characterization\n")
        f.write("------------------------------------\n")
        for line in format_metrics(metrics):
            f.write(line + "\n")
        f.write(f"Dissipated Energy: {metrics.dissipated_energy:.6g} kN*m\n")
    logger.info("Metrics report written to %s", p)
    return p
