"""Tests for isolkit.plotting module."""

import io
import logging

import matplotlib.pyplot as plt

from isolkit.geometry import EnvelopeMetrics
from isolkit.plotting import (
    format_metrics,
    plot_envelope_html,
    render_comparison,
    save_figure,
    write_metrics,
    write_metrics_report,
)

METRICS = EnvelopeMetrics(effective_stiffness=1234.5678, dissipated_energy=40.0, equivalent_damping=8.0)


def test_save_figure_creates_directories(tmp_path):
    fig, ax = plt.subplots()
    ax.plot([0, 1], [0, 1])
    path = tmp_path / "a" / "b" / "figure.png"

    result = save_figure(fig, path, dpi=50)
    plt.close(fig)

    assert result == path
    assert path.exists()


def test_render_comparison(tmp_path, loop_series, rhombus_cycle):
    path = tmp_path / "HysteresisEnvelope.png"
    figures_before = plt.get_fignums()

    render_comparison(loop_series, [rhombus_cycle], path, dpi=50)

    assert path.exists()
    assert plt.get_fignums() == figures_before


def test_render_comparison_with_approximation(tmp_path, loop_series, rhombus_cycle):
    path = tmp_path / "comparison.png"

    render_comparison(
        loop_series, [rhombus_cycle, rhombus_cycle], path,
        displacement_limit=0.25, force_limit=500.0, dpi=50,
    )

    assert path.exists()


def test_plot_envelope_html(tmp_path, loop_series, rhombus_cycle):
    path = tmp_path / "html" / "envelope.html"

    plot_envelope_html(loop_series, [rhombus_cycle], path)

    assert path.exists()
    content = path.read_text(encoding="utf-8")
    assert "Hysteresis Envelope" in content


def test_format_metrics():
    lines = format_metrics(METRICS)

    assert lines == [
        "Effective Stiffness: 1234.57 kN/m",
        "Equivalent Viscous Damping: 8.0%",
    ]


def test_write_metrics_to_sink_and_log(caplog):
    sink = io.StringIO()

    with caplog.at_level(logging.INFO, logger="isolkit"):
        write_metrics(METRICS, sink=sink)

    assert sink.getvalue() == "Effective Stiffness: 1234.57 kN/m\nEquivalent Viscous Damping: 8.0%\n"
    assert "Effective Stiffness: 1234.57 kN/m" in caplog.text
    assert "Equivalent Viscous Damping: 8.0%" in caplog.text


def test_write_metrics_without_sink(caplog):
    with caplog.at_level(logging.INFO, logger="isolkit"):
        write_metrics(METRICS)

    assert "kN/m" in caplog.text


def test_write_metrics_report(tmp_path):
    path = tmp_path / "reports" / "envelope_results.txt"

    write_metrics_report(METRICS, path)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Hysteresis Envelope Characterization"
    assert "Effective Stiffness: 1234.57 kN/m" in lines
    assert "Equivalent Viscous Damping: 8.0%" in lines
    assert "Dissipated Energy: 40 kN*m" in lines
