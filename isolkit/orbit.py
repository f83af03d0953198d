"""Displacement orbit comparison for the isolation level.

Compares the measured horizontal displacement orbit of the isolation system
with the circular design orbit of radius ``OrbitConfig.radius_cm``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

import matplotlib.pyplot as plt
import numpy as np

from isolkit.config import OrbitConfig
from isolkit.plotting import save_figure
from isolkit.records import load_columns

logger = logging.getLogger(__name__)


@dataclass
class OrbitRecord:
    time: np.ndarray  # s
    x_cm: np.ndarray
    y_cm: np.ndarray


def load_orbit_record(path: Union[str, Path]) -> OrbitRecord:
    """Load a ``[time_s, x_mm, y_mm]`` record, converting displacements to cm."""
    data = load_columns(path, 3)
    return OrbitRecord(time=data[:, 0], x_cm=data[:, 1] / 10.0, y_cm=data[:, 2] / 10.0)


def theoretical_orbit(
    radius: float,
    center: Tuple[float, float] = (0.0, 0.0),
    n_segments: int = 100,
) -> Tuple[np.ndarray, np.ndarray]:
    """Circle sampled at ``n_segments + 1`` angles from 0 to 2*pi inclusive."""
    if n_segments < 3:
        raise ValueError("n_segments must be at least 3")
    theta = np.linspace(0.0, 2.0 * np.pi, n_segments + 1)
    return radius * np.cos(theta) + center[0], radius * np.sin(theta) + center[1]


def orbit_radius(record: OrbitRecord, center: Tuple[float, float] = (0.0, 0.0)) -> np.ndarray:
    """Radial excursion of every sample from ``center`` (cm)."""
    return np.hypot(record.x_cm - center[0], record.y_cm - center[1])


def orbit_exceedance(
    record: OrbitRecord, radius: float, center: Tuple[float, float] = (0.0, 0.0)
) -> float:
    """Fraction of samples lying outside the design circle."""
    r = orbit_radius(record, center)
    if r.size == 0:
        return 0.0
    return float(np.count_nonzero(r > radius) / r.size)


def plot_orbit_comparison(
    record: OrbitRecord, config: OrbitConfig, path: Union[str, Path]
) -> Path:
    """Plot the measured orbit over the theoretical circle and save it as PNG."""
    tx, ty = theoretical_orbit(config.radius_cm, config.center, config.n_segments)
    limit = config.axis_limit_cm
    ticks = np.arange(-limit + (limit % config.tick_step_cm), limit, config.tick_step_cm)

    fig, ax = plt.subplots(figsize=(6, 6))
    try:
        ax.plot(tx, ty, "k--", linewidth=1.5, label="Theoretical Displacement")
        ax.plot(record.x_cm, record.y_cm, "k-", linewidth=1.5, label="Measured Displacement")
        ax.set_xlim(-limit, limit)
        ax.set_ylim(-limit, limit)
        ax.set_xticks(ticks)
        ax.set_yticks(ticks)
        ax.set_aspect("equal")
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)
        ax.set_xlabel(r"$\Delta_x$ [cm]", fontsize=14)
        ax.set_ylabel(r"$\Delta_y$ [cm]", fontsize=14)
        ax.legend(loc="best", frameon=False, fontsize=12)
        return save_figure(fig, path, dpi=config.dpi)
    finally:
        plt.close(fig)


def run_orbit_comparison(
    record_path: Union[str, Path], output_dir: Union[str, Path], config: OrbitConfig
) -> float:
    """Load, plot and summarize one orbit record.

    Returns:
        The maximum radial excursion in cm.
    """
    record = load_orbit_record(record_path)
    plot_orbit_comparison(record, config, Path(output_dir) / config.output_file)
    max_radius = float(orbit_radius(record, config.center).max())
    logger.info(
        "Maximum orbit radius %.2f cm (design %.2f cm, %.1f%% of samples outside)",
        max_radius,
        config.radius_cm,
        100.0 * orbit_exceedance(record, config.radius_cm, config.center),
    )
    return max_radius
