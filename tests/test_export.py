"""
Tests for GIF export.
"""
import pytest
from PIL import Image

from basis_playground.camera import Viewport
from basis_playground.export import export_animation_gif, ping_pong_values
from basis_playground.state import AppState

from conftest import SHEAR


def test_ping_pong_values():
    assert ping_pong_values(5) == pytest.approx([0.0, 0.5, 1.0, 0.5, 0.0])


def test_ping_pong_short():
    assert ping_pong_values(1) == [0.0]
    assert ping_pong_values(0) == []


def test_ping_pong_covers_both_ends():
    values = ping_pong_values(121)
    assert len(values) == 121
    assert values[0] == 0.0
    assert values[60] == 1.0
    assert values[-1] == 0.0
    assert all(0.0 <= t <= 1.0 for t in values)


@pytest.mark.parametrize("n_frames", [2, 3, 120, 121])
def test_ping_pong_closes_the_cycle(n_frames):
    values = ping_pong_values(n_frames)
    assert values[-1] == 0.0
    # falling half mirrors the rising half
    assert values == pytest.approx(values[::-1])


def test_export_writes_gif(tmp_path):
    filename = tmp_path / "sweep.gif"
    state = AppState(matrix=SHEAR, is_playing=True)
    result = export_animation_gif(state, filename, viewport=Viewport(120, 90),
                                  n_frames=4, fps=10)
    assert result == filename
    with Image.open(filename) as image:
        assert image.format == "GIF"
        assert abs(image.size[0] - 120) <= 1
        assert abs(image.size[1] - 90) <= 1
        assert image.n_frames >= 2
