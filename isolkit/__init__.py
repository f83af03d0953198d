"""isolkit package: tools for evaluating the seismic performance of base-isolated structures.

The core is the hysteresis envelope characterization: an operator digitizes
an idealized quadrilateral loop over a recorded force-displacement history
and the effective stiffness and equivalent viscous damping ratio are derived
from its geometry. Orbit, center-of-mass displacement and design-curve
analyses complete the toolkit.
"""

from . import (
    design_curves,
    digitizer,
    displacement,
    geometry,
    orbit,
    pipeline,
    plotting,
    records,
)
from .config import DesignCurveConfig, DisplacementConfig, EnvelopeConfig, OrbitConfig
from .digitizer import (
    GinputPointSource,
    PointSource,
    ScriptedPointSource,
    check_clockwise,
    select_points,
)
from .exceptions import (
    DegenerateCycle,
    IncompleteSelection,
    InconsistentWinding,
    IsolkitError,
    MalformedRecord,
)
from .geometry import (
    EnvelopeCycle,
    EnvelopeMetrics,
    compute_metrics,
    dissipated_energy,
    effective_stiffness,
    equivalent_damping,
)
from .pipeline import run_envelope_analysis
from .records import HysteresisSample, HysteresisSeries, load_hysteresis_record

__all__ = [
    # Main modules
    "design_curves",
    "digitizer",
    "displacement",
    "geometry",
    "orbit",
    "pipeline",
    "plotting",
    "records",
    # Configuration
    "DesignCurveConfig",
    "DisplacementConfig",
    "EnvelopeConfig",
    "OrbitConfig",
    # Data model
    "EnvelopeCycle",
    "EnvelopeMetrics",
    "HysteresisSample",
    "HysteresisSeries",
    # Envelope characterization
    "GinputPointSource",
    "PointSource",
    "ScriptedPointSource",
    "check_clockwise",
    "compute_metrics",
    "dissipated_energy",
    "effective_stiffness",
    "equivalent_damping",
    "load_hysteresis_record",
    "run_envelope_analysis",
    "select_points",
    # Errors
    "DegenerateCycle",
    "IncompleteSelection",
    "InconsistentWinding",
    "IsolkitError",
    "MalformedRecord",
]
