"""Tests for isolkit.orbit module."""

import numpy as np
import pytest

from isolkit.config import OrbitConfig
from isolkit.exceptions import MalformedRecord
from isolkit.orbit import (
    OrbitRecord,
    load_orbit_record,
    orbit_exceedance,
    orbit_radius,
    plot_orbit_comparison,
    run_orbit_comparison,
    theoretical_orbit,
)


@pytest.fixture
def orbit_file(tmp_path):
    """Spiral orbit growing from 0 to 400 mm."""
    t = np.linspace(0.0, 10.0, 501)
    r_mm = 40.0 * t
    data = np.column_stack([t, r_mm * np.cos(t), r_mm * np.sin(t)])
    path = tmp_path / "orbit.txt"
    np.savetxt(path, data)
    return path


def test_theoretical_orbit():
    x, y = theoretical_orbit(29.6, n_segments=100)

    assert x.shape == (101,)
    assert y.shape == (101,)
    np.testing.assert_allclose(np.hypot(x, y), 29.6)
    assert x[0] == pytest.approx(x[-1])
    assert y[0] == pytest.approx(y[-1], abs=1e-9)


def test_theoretical_orbit_center():
    x, y = theoretical_orbit(5.0, center=(1.0, -2.0), n_segments=4)

    np.testing.assert_allclose(x, [6.0, 1.0, -4.0, 1.0, 6.0], atol=1e-12)
    np.testing.assert_allclose(y, [-2.0, 3.0, -2.0, -7.0, -2.0], atol=1e-12)


def test_theoretical_orbit_rejects_few_segments():
    with pytest.raises(ValueError):
        theoretical_orbit(1.0, n_segments=2)


def test_load_orbit_record_converts_to_cm(tmp_path):
    path = tmp_path / "orbit.txt"
    path.write_text("0.0 100 -50\n0.01 200 30\n")

    record = load_orbit_record(path)

    np.testing.assert_allclose(record.time, [0.0, 0.01])
    np.testing.assert_allclose(record.x_cm, [10.0, 20.0])
    np.testing.assert_allclose(record.y_cm, [-5.0, 3.0])


def test_load_orbit_record_requires_three_columns(tmp_path):
    path = tmp_path / "orbit.txt"
    path.write_text("100 -50\n")

    with pytest.raises(MalformedRecord):
        load_orbit_record(path)


def test_orbit_radius_and_exceedance():
    record = OrbitRecord(
        time=np.arange(4.0),
        x_cm=np.array([3.0, 0.0, 40.0, 0.0]),
        y_cm=np.array([4.0, 10.0, 0.0, -30.0]),
    )

    np.testing.assert_allclose(orbit_radius(record), [5.0, 10.0, 40.0, 30.0])
    assert orbit_exceedance(record, 29.6) == pytest.approx(0.5)
    assert orbit_exceedance(record, 50.0) == 0.0


def test_plot_orbit_comparison(tmp_path, orbit_file):
    record = load_orbit_record(orbit_file)
    path = tmp_path / "out" / "orbit.png"

    plot_orbit_comparison(record, OrbitConfig(dpi=50), path)

    assert path.exists()


def test_run_orbit_comparison(tmp_path, orbit_file):
    config = OrbitConfig(dpi=50)

    max_radius = run_orbit_comparison(orbit_file, tmp_path / "outputs", config)

    assert max_radius == pytest.approx(40.0)
    assert (tmp_path / "outputs" / config.output_file).exists()
