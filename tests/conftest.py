"""Shared fixtures for the isolkit tests."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from isolkit.geometry import EnvelopeCycle
from isolkit.records import HysteresisSeries

# Clockwise rhombus: k_eff = 2000 kN/m, E = 40 kN*m, xi_eff = 8.0 %
RHOMBUS = [(-0.2, -400.0), (0.0, 100.0), (0.2, 400.0), (0.0, -100.0)]


@pytest.fixture
def rhombus_cycle():
    return EnvelopeCycle.from_picks(RHOMBUS)


@pytest.fixture
def loop_series():
    """A few noisy loops around the rhombus envelope."""
    t = np.linspace(0.0, 6.0 * np.pi, 600)
    displacement = 0.2 * np.sin(t)
    force = 400.0 * np.sin(t) + 100.0 * np.cos(t)
    return HysteresisSeries(displacement=displacement, force=force)


@pytest.fixture
def record_file(tmp_path, loop_series):
    """The loop series written back in record units ([displacement_mm, force_kN])."""
    path = tmp_path / "record.txt"
    data = np.column_stack([-loop_series.displacement * 1000.0, loop_series.force])
    np.savetxt(path, data)
    return path
