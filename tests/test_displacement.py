"""Tests for isolkit.displacement module."""

import numpy as np
import pytest

from isolkit.config import DisplacementConfig
from isolkit.displacement import (
    DisplacementSummary,
    analyze_records,
    resultant_displacement,
    run_displacement_statistics,
    write_displacement_report,
)


@pytest.fixture
def record_paths(tmp_path):
    """Two records with known peak resultant displacements (5 cm and 13 cm)."""
    first = tmp_path / "CM_A.txt"
    np.savetxt(first, np.array([[0.0, 0.0], [30.0, 40.0], [-10.0, 10.0]]))
    second = tmp_path / "CM_B.txt"
    np.savetxt(second, np.array([[50.0, -120.0], [0.0, 0.0]]))
    return {"Event_A": first, "Event_B": second}


def test_resultant_displacement():
    result = resultant_displacement(np.array([3.0, 0.0, -6.0]), np.array([4.0, 2.0, 8.0]))

    np.testing.assert_allclose(result, [5.0, 2.0, 10.0])


def test_analyze_records(record_paths):
    summary = analyze_records(record_paths)

    assert summary.names == ["Event_A", "Event_B"]
    np.testing.assert_allclose(summary.maxima_cm, [5.0, 13.0])
    assert summary.average_max_cm == pytest.approx(9.0)


def test_analyze_records_parallel(record_paths):
    summary = analyze_records(record_paths, n_jobs=2)

    assert summary.names == ["Event_A", "Event_B"]
    np.testing.assert_allclose(summary.maxima_cm, [5.0, 13.0])


def test_analyze_records_requires_records():
    with pytest.raises(ValueError):
        analyze_records({})


def test_analyze_records_missing_file(tmp_path, record_paths):
    records = dict(record_paths)
    records["Missing"] = tmp_path / "nope.txt"

    with pytest.raises(FileNotFoundError):
        analyze_records(records, n_jobs=1)


def test_empty_summary_average():
    with pytest.raises(ValueError):
        DisplacementSummary().average_max_cm


def test_write_displacement_report(tmp_path, record_paths):
    summary = analyze_records(record_paths)
    path = tmp_path / "reports" / "max_displacement_results.txt"

    write_displacement_report(summary, path)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Seismic Isolation Performance Report"
    assert lines[2] == "Average Maximum Displacement: 9.00 cm"
    assert lines[4] == "Individual Event Maxima (cm):"
    assert lines[5] == "Event_A\tEvent_B"
    assert lines[6] == "5.00\t13.00"


def test_run_displacement_statistics(tmp_path, record_paths):
    config = DisplacementConfig(records=record_paths, output_dir=tmp_path / "outputs")

    summary = run_displacement_statistics(config)

    assert summary.average_max_cm == pytest.approx(9.0)
    assert config.report_path.exists()
    assert (tmp_path / "outputs" / "Event_A_displacement.png").exists()
    assert (tmp_path / "outputs" / "Event_B_displacement.png").exists()


def test_run_displacement_statistics_without_plots(tmp_path, record_paths):
    config = DisplacementConfig(
        records=record_paths, output_dir=tmp_path / "outputs", plot_histories=False
    )

    run_displacement_statistics(config)

    assert config.report_path.exists()
    assert not (tmp_path / "outputs" / "Event_A_displacement.png").exists()
