# File: config.py
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional


@dataclass
class EnvelopeConfig:
    """Configuration settings for a hysteresis envelope characterization run."""

    # Input / Output
    input_path: Path = Path("datasets") / "Fuerza_aislamientototal_Concepcion2010_FuerteY.txt"
    output_dir: Path = Path("outputs")

    # Unit conversion (record columns are [displacement_mm, force_kN])
    displacement_scale: float = -1.0e-3  # mm -> m, sign flipped
    force_scale: float = 1.0  # kN kept as kN

    # Operator Interaction
    n_points: int = 4
    pick_timeout: Optional[float] = None  # seconds; None waits for the operator
    strict_winding: bool = False  # reject picks that are not clockwise

    # Artifacts
    initial_snapshot: str = "InitialPointSelection.png"
    refined_snapshot: str = "RefinedPointSelection.png"
    envelope_figure: str = "HysteresisEnvelope.png"
    envelope_html: Optional[str] = None  # e.g. "HysteresisEnvelope.html"
    report_file: str = "envelope_results.txt"
    dpi: int = 300

    # Final figure axis limits
    displacement_limit: float = 0.3  # m
    force_limit: float = 800.0  # kN

    @property
    def initial_snapshot_path(self) -> Path:
        return Path(self.output_dir) / self.initial_snapshot

    @property
    def refined_snapshot_path(self) -> Path:
        return Path(self.output_dir) / self.refined_snapshot

    @property
    def envelope_figure_path(self) -> Path:
        return Path(self.output_dir) / self.envelope_figure

    @property
    def report_path(self) -> Path:
        return Path(self.output_dir) / self.report_file


@dataclass
class OrbitConfig:
    """Settings for comparing a measured displacement orbit to a design circle."""

    radius_cm: float = 29.6
    center: tuple[float, float] = field(default_factory=lambda: (0.0, 0.0))
    n_segments: int = 100  # theta step = 2*pi / n_segments
    axis_limit_cm: float = 35.0
    tick_step_cm: float = 10.0
    output_file: str = "Displacement_Orbit_Comparison.png"
    dpi: int = 300


@dataclass
class DisplacementConfig:
    """Settings for the center-of-mass maximum displacement statistics."""

    records: Dict[str, Path] = field(default_factory=dict)  # name -> [x_mm, y_mm] file
    output_dir: Path = Path("outputs")
    report_file: str = "max_displacement_results.txt"
    plot_histories: bool = True
    n_jobs: int = 1  # joblib workers; -1 uses all cores

    @property
    def report_path(self) -> Path:
        return Path(self.output_dir) / self.report_file


@dataclass
class DesignCurveConfig:
    """Code parameters for the isolated-structure design curves.

    Periods are in seconds, gravity in cm/s^2 and weights in kN, so the
    resulting displacements are in cm.
    """

    # Period range
    period_start: float = 1.5
    period_stop: float = 4.5
    period_step: float = 0.01

    # Seismic hazard
    zone_factor: float = 0.45
    soil_factor: float = 1.05
    gravity: float = 981.0

    # Structural configuration factors
    redundancy_factor: float = 1.0
    isolated_base_reduction: float = 1.0
    superstructure_reduction: float = 1.5
    non_isolated_reduction: float = 4.0
    height_irregularity: float = 1.0
    plan_irregularity_isolated: float = 1.0
    plan_irregularity: float = 0.75
    short_period: float = 0.6  # Tp
    long_period: float = 2.0  # Tl

    # Mass properties
    structural_weight: float = 3800.0
    total_weight: float = 4815.0

    # Damping
    target_damping: float = 0.26
    damping_reduction: float = 2.4  # B for accelerations
    displacement_reduction: float = 2.1  # B for displacements

    # Design limits
    minimum_shear: float = 0.030
    displacement_amplification: float = 1.15
    mce_amplification: float = 1.5  # isolated spectrum scale

    @property
    def weight_ratio(self) -> float:
        """Superstructure to total seismic weight ratio."""
        return self.structural_weight / self.total_weight
