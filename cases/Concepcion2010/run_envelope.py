"""Hysteresis envelope of the isolation system, Concepcion 2010 (strong Y).

Run from this folder. Without ``--picks`` the operator selects the envelope
vertices on screen; with ``--picks`` a file of 8 rows ``[displacement_m,
force_kN]`` (4 initial + 4 refined points) is replayed instead.
"""

import argparse
import os
import sys
from pathlib import Path

import numpy as np

from isolkit.config import EnvelopeConfig
from isolkit.digitizer import GinputPointSource, ScriptedPointSource
from isolkit.exceptions import IsolkitError
from isolkit.pipeline import run_envelope_analysis
from isolkit.setup_logger import setup_basic_logger

if __name__ == "__main__":
    # Change to the script's directory
    os.chdir(os.path.dirname(os.path.abspath(__file__)))

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--input",
        type=Path,
        default=Path("..") / "datasets" / "Fuerza_aislamientototal_Concepcion2010_FuerteY.txt",
    )
    parser.add_argument("--output-dir", type=Path, default=Path("..") / "outputs")
    parser.add_argument("--picks", type=Path, default=None)
    parser.add_argument("--timeout", type=float, default=None)
    parser.add_argument("--strict", action="store_true", help="require clockwise picks")
    args = parser.parse_args()

    setup_basic_logger()

    config = EnvelopeConfig(
        input_path=args.input,
        output_dir=args.output_dir,
        pick_timeout=args.timeout,
        strict_winding=args.strict,
        envelope_html="HysteresisEnvelope.html",
    )

    if args.picks is not None:
        picks = np.loadtxt(args.picks, ndmin=2)
        source = ScriptedPointSource([picks[:4], picks[4:8]])
    else:
        source = GinputPointSource()

    try:
        run_envelope_analysis(config, point_source=source, sink=sys.stdout)
    except (FileNotFoundError, IsolkitError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
