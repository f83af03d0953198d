"""Orbit, center-of-mass displacement and design-curve analyses.

Expects the records in ``../datasets`` and writes everything to
``../outputs``.
"""

import os
import sys
from pathlib import Path

from isolkit.config import DesignCurveConfig, DisplacementConfig, OrbitConfig
from isolkit.design_curves import run_design_curves
from isolkit.displacement import run_displacement_statistics
from isolkit.exceptions import IsolkitError
from isolkit.orbit import run_orbit_comparison
from isolkit.setup_logger import setup_basic_logger

EARTHQUAKES = [
    # Peruvian earthquakes
    "Arequipa2001",
    "Lima1966",
    "Lima1974",
    "Pisco2007",
    # Chilean earthquakes
    "Concepcion2010",
    "Curico2010",
    "Hualane2010",
]

if __name__ == "__main__":
    os.chdir(os.path.dirname(os.path.abspath(__file__)))
    setup_basic_logger()

    DATASETS = Path("..") / "datasets"
    OUTPUTS = Path("..") / "outputs"

    try:
        # 1. Displacement orbit against the design circle
        run_orbit_comparison(
            DATASETS / "Orb_Slip_Concepcion2010_Strong_Y.txt", OUTPUTS, OrbitConfig()
        )

        # 2. Center-of-mass maximum displacements
        displacement_config = DisplacementConfig(
            records={
                name: DATASETS / f"CM_{name}_FuerY_nominal.txt" for name in EARTHQUAKES
            },
            output_dir=OUTPUTS,
            n_jobs=-1,
        )
        run_displacement_statistics(displacement_config)
    except (FileNotFoundError, IsolkitError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # 3. Design curves (no input files)
    run_design_curves(DesignCurveConfig(), OUTPUTS)
