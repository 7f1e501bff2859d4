"""
Tests for the registration workflow script.
"""

import importlib.util
import json
from pathlib import Path

import pytest

from beacon_registration.alignment.orientation import AxisOrder, Flip, Orientation
from beacon_registration.preprocessing.loader import format_reports
from beacon_registration.utils.geometry import Point

from helpers import distinct_distance_points, observe

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "run_registration.py"


@pytest.fixture(scope="module")
def run_registration():
    spec = importlib.util.spec_from_file_location("run_registration", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _write_reports(path, reports):
    path.write_text(format_reports(reports), encoding="utf-8")
    return str(path)


def _connected_reports():
    world = distinct_distance_points(30, seed=21)
    s0 = observe(0, world[:20], Point.origin(), Orientation.identity())
    s1 = observe(1, world[8:30], Point(68, -1246, -43), Orientation(AxisOrder.ZXY, Flip.XY))
    return [s0, s1]


def test_connected_dataset_writes_summary(run_registration, tmp_path):
    input_file = _write_reports(tmp_path / "scan.txt", _connected_reports())
    out = tmp_path / "out"

    assert run_registration.main(["--input", input_file, "--output-dir", str(out)]) == 0

    summary = json.loads((out / "scan_registration.json").read_text(encoding="utf-8"))
    assert summary["total_beacons"] == 30
    assert summary["max_scanner_separation"] == 68 + 1246 + 43


def test_malformed_input(run_registration, tmp_path):
    bad = tmp_path / "bad.txt"
    bad.write_text("--- scanner 0 ---\n1,2\n", encoding="utf-8")
    assert run_registration.main(["--input", str(bad), "--output-dir", str(tmp_path / "out")]) == 1


def test_missing_input_file(run_registration, tmp_path):
    missing = str(tmp_path / "nope.txt")
    assert run_registration.main(["--input", missing, "--output-dir", str(tmp_path / "out")]) == 1


def test_disconnected_dataset(run_registration, tmp_path):
    world = distinct_distance_points(36, seed=22)
    s0 = observe(0, world[:18], Point.origin(), Orientation.identity())
    s1 = observe(1, world[18:], Point(500, 0, 0), Orientation.identity())
    input_file = _write_reports(tmp_path / "split.txt", [s0, s1])
    out = tmp_path / "out"

    assert run_registration.main(["--input", input_file, "--output-dir", str(out)]) == 1
    assert not (out / "split_registration.json").exists()


def test_no_input(run_registration, tmp_path):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("paths:\n  input_file: null\n", encoding="utf-8")
    assert run_registration.main(["--config", str(cfg)]) == 1
