"""End-to-end hysteresis envelope characterization.

Runs the stages in their fixed order:

    load -> digitize (round 1) -> digitize (round 2, with round-1 overlay)
         -> geometry -> report

Any failure aborts the run. The failing stage is logged before the original
exception propagates, and no partial metrics are reported.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO

from isolkit.config import EnvelopeConfig
from isolkit.digitizer import (
    INITIAL_TITLE,
    REFINED_TITLE,
    GinputPointSource,
    PointSource,
    select_points,
)
from isolkit.geometry import EnvelopeMetrics, compute_metrics
from isolkit.plotting import (
    plot_envelope_html,
    render_comparison,
    write_metrics,
    write_metrics_report,
)
from isolkit.records import load_hysteresis_record

logger = logging.getLogger(__name__)


@contextmanager
def _stage(name: str) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        logger.error("%s stage failed: %s", name, exc)
        raise


def run_envelope_analysis(
    config: EnvelopeConfig,
    point_source: Optional[PointSource] = None,
    sink: Optional[TextIO] = None,
) -> EnvelopeMetrics:
    """Characterize the hysteresis envelope of one force-displacement record.

    Args:
        config: Input/output locations and analysis settings.
        point_source: Supplier of operator picks; defaults to mouse picking
            on an interactive matplotlib figure.
        sink: Optional text stream that also receives the metric lines.

    Returns:
        Metrics derived from the refined envelope cycle.
    """
    if point_source is None:
        point_source = GinputPointSource()

    with _stage("Load"):
        series = load_hysteresis_record(
            config.input_path,
            displacement_scale=config.displacement_scale,
            force_scale=config.force_scale,
        )

    with _stage("Initial selection"):
        initial = select_points(
            series,
            point_source,
            count=config.n_points,
            snapshot_path=config.initial_snapshot_path,
            title=INITIAL_TITLE,
            timeout=config.pick_timeout,
            dpi=config.dpi,
            strict=config.strict_winding,
        )
    logger.info("Initial envelope vertices: %s", initial.vertices)

    with _stage("Refined selection"):
        refined = select_points(
            series,
            point_source,
            overlay=initial,
            count=config.n_points,
            snapshot_path=config.refined_snapshot_path,
            title=REFINED_TITLE,
            timeout=config.pick_timeout,
            dpi=config.dpi,
            strict=config.strict_winding,
        )
    logger.info("Refined envelope vertices: %s", refined.vertices)

    with _stage("Geometry"):
        metrics = compute_metrics(refined)

    with _stage("Report"):
        write_metrics(metrics, sink=sink)
        write_metrics_report(metrics, config.report_path)
        render_comparison(
            series,
            [refined],
            config.envelope_figure_path,
            displacement_limit=config.displacement_limit,
            force_limit=config.force_limit,
            dpi=config.dpi,
        )
        if config.envelope_html:
            plot_envelope_html(
                series, [initial, refined], Path(config.output_dir) / config.envelope_html
            )

    return metrics
