"""Center-of-mass maximum displacement statistics.

Each record holds the X and Y displacement history (mm) of the center of
mass above the isolation level for one earthquake. The resultant
displacement is computed per time step and the maxima are averaged over the
record set. Records are independent, so they are processed with joblib.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Union, cast

import matplotlib.pyplot as plt
import numpy as np
from joblib import Parallel, delayed

from isolkit.config import DisplacementConfig
from isolkit.plotting import save_figure
from isolkit.records import load_columns

logger = logging.getLogger(__name__)

PathType = Union[str, Path]


@dataclass
class RecordDisplacement:
    """Resultant displacement history of one record (cm)."""

    name: str
    resultant_cm: np.ndarray

    @property
    def max_cm(self) -> float:
        return float(np.max(self.resultant_cm))


@dataclass
class DisplacementSummary:
    records: List[RecordDisplacement] = field(default_factory=list)

    @property
    def names(self) -> List[str]:
        return [r.name for r in self.records]

    @property
    def maxima_cm(self) -> np.ndarray:
        return np.array([r.max_cm for r in self.records])

    @property
    def average_max_cm(self) -> float:
        if not self.records:
            raise ValueError("No records were analyzed")
        return float(np.mean(self.maxima_cm))


def resultant_displacement(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Magnitude of the horizontal displacement vector, sqrt(x^2 + y^2)."""
    return np.sqrt(np.asarray(x) ** 2 + np.asarray(y) ** 2)


def _process_record(name: str, path: PathType) -> RecordDisplacement:
    data = load_columns(path, 2)
    x_cm = data[:, 0] / 10.0
    y_cm = data[:, 1] / 10.0
    return RecordDisplacement(name=name, resultant_cm=resultant_displacement(x_cm, y_cm))


def analyze_records(
    records: Mapping[str, PathType],
    n_jobs: Optional[int] = 1,
    verbose: int = 0,
) -> DisplacementSummary:
    """Compute resultant displacement histories for every record.

    Args:
        records: Mapping of record name to ``[x_mm, y_mm]`` file, in report order.
        n_jobs: Number of joblib workers (-1 for all CPUs).
        verbose: Joblib verbosity level.

    Returns:
        DisplacementSummary with the records in the order given.

    Raises:
        FileNotFoundError, MalformedRecord: From the first record that fails.
    """
    if not records:
        raise ValueError("At least one record is required")

    results = Parallel(n_jobs=n_jobs, verbose=verbose, return_as="list")(
        delayed(_process_record)(name, path) for name, path in records.items()
    )
    summary = DisplacementSummary(records=cast(List[RecordDisplacement], list(results)))
    for record in summary.records:
        logger.info("%s: maximum displacement %.2f cm", record.name, record.max_cm)
    return summary


def plot_displacement_history(record: RecordDisplacement, path: PathType) -> Path:
    """Plot the resultant displacement of one record against the time step."""
    fig, ax = plt.subplots()
    try:
        ax.plot(record.resultant_cm, linewidth=1.5)
        ax.set_title(f"CoM Displacement - {record.name.replace('_', ' ')}")
        ax.set_xlabel("Time Step")
        ax.set_ylabel("Displacement (cm)")
        ax.grid(True)
        return save_figure(fig, path, dpi=150)
    finally:
        plt.close(fig)


def write_displacement_report(summary: DisplacementSummary, path: PathType) -> Path:
    """Write the average and per-record maxima in tab-separated form."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        f.write("Seismic Isolation Performance Report\n")
        f.write("------------------------------------\n")
        f.write(f"Average Maximum Displacement: {summary.average_max_cm:.2f} cm\n")
        f.write("\nIndividual Event Maxima (cm):\n")
        f.write("\t".join(summary.names) + "\n")
        f.write("\t".join(f"{m:.2f}" for m in summary.maxima_cm) + "\n")
    logger.info("Displacement report written to %s", p)
    return p


def run_displacement_statistics(config: DisplacementConfig) -> DisplacementSummary:
    """Analyze all configured records, write plots and the text report."""
    summary = analyze_records(config.records, n_jobs=config.n_jobs)
    output_dir = Path(config.output_dir)
    if config.plot_histories:
        for record in summary.records:
            plot_displacement_history(record, output_dir / f"{record.name}_displacement.png")
    write_displacement_report(summary, config.report_path)
    logger.info("Average maximum displacement: %.2f cm", summary.average_max_cm)
    return summary
