"""Design curves for base-isolated structures.

Evaluates, over a range of effective periods, the normalized base shear and
superstructure shear (V/W) and the isolation-system displacement, following
the ZUCS spectral formulation. The superstructure shear is never taken below
the shear of the equivalent fixed-base structure nor below an absolute
minimum.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import matplotlib.pyplot as plt
import numpy as np

from isolkit.config import DesignCurveConfig
from isolkit.plotting import save_figure

logger = logging.getLogger(__name__)


@dataclass
class DesignCurves:
    periods: np.ndarray  # s
    pseudo_acceleration: np.ndarray  # cm/s^2
    base_shear: np.ndarray  # V_b / W
    superstructure_shear: np.ndarray  # V_s / W
    displacement: np.ndarray  # D_M, cm
    design_displacement: np.ndarray  # D_TM, cm


def design_periods(config: DesignCurveConfig) -> np.ndarray:
    n = int(round((config.period_stop - config.period_start) / config.period_step)) + 1
    return np.linspace(config.period_start, config.period_stop, n)


def spectral_shape_factor(
    periods: np.ndarray, tp: float, tl: float, isolated: bool = True
) -> np.ndarray:
    """Spectral amplification factor C(T).

    The isolated spectrum has a linear ramp up to 0.2*Tp; the fixed-base
    spectrum is flat at 2.5 below Tp.
    """
    T = np.asarray(periods, dtype=float)
    # Branches are evaluated everywhere; T = 0 only ever selects a flat branch
    with np.errstate(divide="ignore", invalid="ignore"):
        plateau_decay = 2.5 * tp / T
        tail = 2.5 * tp * tl / T**2
    if isolated:
        conditions = [T <= 0.2 * tp, T <= tp, T <= tl]
        choices = [1.0 + 7.5 * T / tp, np.full_like(T, 2.5), plateau_decay]
    else:
        conditions = [T < tp, T <= tl]
        choices = [np.full_like(T, 2.5), plateau_decay]
    return np.select(conditions, choices, default=tail)


def compute_design_curves(config: DesignCurveConfig) -> DesignCurves:
    """Evaluate the design curves over the configured period range."""
    periods = design_periods(config)
    if np.any(periods <= 0.0):
        raise ValueError("Design periods must be positive")

    # Isolated system spectrum
    base_acceleration = (
        config.mce_amplification
        * config.zone_factor
        * config.redundancy_factor
        * config.soil_factor
        / (
            config.isolated_base_reduction
            * config.height_irregularity
            * config.plan_irregularity_isolated
        )
    )
    c_iso = spectral_shape_factor(periods, config.short_period, config.long_period, True)
    pseudo_acceleration = base_acceleration * c_iso * config.gravity
    displacement = (
        pseudo_acceleration * periods**2 / (4.0 * np.pi**2 * config.displacement_reduction)
    )

    superstructure_shear = (
        pseudo_acceleration
        / (config.gravity * config.damping_reduction)
        / config.superstructure_reduction
        * config.weight_ratio ** (1.0 - 2.5 * config.target_damping)
    )

    # Equivalent fixed-base structure sets the lower bound
    fixed_base_acceleration = (
        config.zone_factor
        * config.redundancy_factor
        * config.soil_factor
        / (
            config.non_isolated_reduction
            * config.height_irregularity
            * config.plan_irregularity
        )
    )
    c_fixed = spectral_shape_factor(periods, config.short_period, config.long_period, False)
    minimum_shear = np.maximum(fixed_base_acceleration * c_fixed, config.minimum_shear)
    superstructure_shear = np.maximum(superstructure_shear, minimum_shear)

    base_shear = pseudo_acceleration / (config.gravity * config.damping_reduction)

    return DesignCurves(
        periods=periods,
        pseudo_acceleration=pseudo_acceleration,
        base_shear=base_shear,
        superstructure_shear=superstructure_shear,
        displacement=displacement,
        design_displacement=displacement * config.displacement_amplification,
    )


def plot_design_curves(curves: DesignCurves, path: Union[str, Path]) -> Path:
    """Plot shears (left axis) and displacements (right axis) against period."""
    cm = 1.0 / 2.54
    fig, ax_shear = plt.subplots(figsize=(12.5 * cm, 10 * cm))
    ax_disp = ax_shear.twinx()
    try:
        lines = [
            ax_shear.plot(curves.periods, curves.base_shear, "b-", linewidth=1.5,
                          label="Base Shear ($V_b$)")[0],
            ax_shear.plot(curves.periods, curves.superstructure_shear, "b--", linewidth=1.5,
                          label="Superstructure Shear ($V_s$)")[0],
            ax_disp.plot(curves.periods, curves.displacement, "r-", linewidth=1.5,
                         label="Calculated Displacement ($D_M$)")[0],
            ax_disp.plot(curves.periods, curves.design_displacement, "r--", linewidth=1.5,
                         label="Design Displacement ($D_{TM}$)")[0],
        ]

        ax_shear.set_ylabel("Normalized Design Shear, V/W", color="b", fontsize=12)
        ax_shear.set_ylim(0.0, 0.3)
        ax_shear.set_yticks(np.arange(0.0, 0.31, 0.05))
        ax_shear.tick_params(axis="y", colors="b")
        ax_disp.set_ylabel("Isolation System Displacement (cm)", color="r", fontsize=12)
        ax_disp.tick_params(axis="y", colors="r")

        t0, t1 = curves.periods[0], curves.periods[-1]
        ax_shear.set_xlabel("Effective Period (s)", fontsize=14)
        ax_shear.set_xlim(t0, t1)
        ax_shear.set_xticks(np.arange(t0, t1 + 0.25, 0.5))
        ax_shear.grid(True)
        ax_shear.legend(handles=lines, loc="upper right", fontsize=8)
        return save_figure(fig, path, dpi=300)
    finally:
        plt.close(fig)


def run_design_curves(config: DesignCurveConfig, output_dir: Union[str, Path]) -> DesignCurves:
    curves = compute_design_curves(config)
    plot_design_curves(curves, Path(output_dir) / "SeismicDesignCurves.png")
    logger.info(
        "Design curves for T = %.2f-%.2f s: max D_TM = %.2f cm",
        curves.periods[0],
        curves.periods[-1],
        float(curves.design_displacement.max()),
    )
    return curves
