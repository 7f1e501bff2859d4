"""
Tests for the registration visualizer (figure construction only).
"""

import pytest

pytest.importorskip("plotly")

from beacon_registration.alignment.orientation import Orientation
from beacon_registration.alignment.scanner import SolvedScanner
from beacon_registration.utils.geometry import Point
from beacon_registration.visualization import RegistrationVisualizer


def _solved():
    return [
        SolvedScanner(0, Point(0, 0, 0), Orientation.identity(), (Point(1, 1, 1), Point(2, 2, 2))),
        SolvedScanner(1, Point(1, 0, 0), Orientation.identity(), (Point(0, 1, 1),)),
    ]


def test_build_figure_with_scanners():
    fig = RegistrationVisualizer().build_figure(_solved())
    assert len(fig.data) == 2
    assert fig.data[0].name == "beacons (2)"
    assert list(fig.data[1].text) == ["0", "1"]


def test_build_figure_beacons_only():
    fig = RegistrationVisualizer(show_scanners=False).build_figure(_solved())
    assert len(fig.data) == 1


def test_empty_input():
    with pytest.raises(ValueError, match="no solved scanners"):
        RegistrationVisualizer().build_figure([])


def test_write_html(tmp_path):
    out = RegistrationVisualizer().write_html(_solved(), str(tmp_path / "scene.html"))
    assert (tmp_path / "scene.html").exists()
    assert out.endswith("scene.html")
