"""Readers for the numeric time-history records used by the analyses.

All records are headerless, whitespace-separated numeric text with one row
per time step. Readers convert units on load so that downstream code only
sees SI-like engineering units (m, kN) or cm where the analysis reports cm.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, NamedTuple, Union

import numpy as np

from isolkit.exceptions import MalformedRecord

logger = logging.getLogger(__name__)

PathType = Union[str, Path]


class HysteresisSample(NamedTuple):
    displacement: float  # m
    force: float  # kN


@dataclass(frozen=True, eq=False)
class HysteresisSeries:
    """Force-displacement history in temporal order.

    Both arrays are copied and made read-only on construction.
    """

    displacement: np.ndarray
    force: np.ndarray

    def __post_init__(self):
        displacement = np.array(self.displacement, dtype=float)
        force = np.array(self.force, dtype=float)
        if displacement.ndim != 1 or force.ndim != 1:
            raise ValueError("displacement and force must be one-dimensional")
        if displacement.shape != force.shape:
            raise ValueError(
                f"displacement length {displacement.size} != force length {force.size}"
            )
        displacement.setflags(write=False)
        force.setflags(write=False)
        object.__setattr__(self, "displacement", displacement)
        object.__setattr__(self, "force", force)

    def __len__(self) -> int:
        return int(self.displacement.size)

    def __getitem__(self, index: int) -> HysteresisSample:
        return HysteresisSample(float(self.displacement[index]), float(self.force[index]))

    def __iter__(self) -> Iterator[HysteresisSample]:
        for d, f in zip(self.displacement, self.force):
            yield HysteresisSample(float(d), float(f))


def load_columns(path: PathType, n_columns: int) -> np.ndarray:
    """Read a headerless numeric table and check its column count.

    Args:
        path: File to read.
        n_columns: Exact number of columns every row must have.

    Returns:
        Array of shape (n_rows, n_columns).

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedRecord: If the file is empty, non-numeric, ragged or has
            the wrong number of columns.
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Record file not found: {p}")

    if not p.read_text(encoding="utf-8", errors="ignore").strip():
        raise MalformedRecord(f"Record file {p} is empty")

    try:
        data = np.loadtxt(p, ndmin=2)
    except ValueError as exc:
        raise MalformedRecord(f"Record file {p} could not be parsed: {exc}") from exc

    if data.shape[1] != n_columns:
        raise MalformedRecord(
            f"Record file {p} has {data.shape[1]} columns, expected {n_columns}"
        )
    logger.debug("Loaded %d rows from %s", data.shape[0], p)
    return data


def load_hysteresis_record(
    path: PathType,
    displacement_scale: float = -1.0e-3,
    force_scale: float = 1.0,
) -> HysteresisSeries:
    """Load a ``[displacement_mm, force_kN]`` record as a hysteresis series.

    The default scales negate the displacement and convert it from mm to m;
    force is kept in kN.
    """
    data = load_columns(path, 2)
    series = HysteresisSeries(
        displacement=data[:, 0] * displacement_scale,
        force=data[:, 1] * force_scale,
    )
    logger.info("Loaded hysteresis record %s (%d samples)", path, len(series))
    return series
