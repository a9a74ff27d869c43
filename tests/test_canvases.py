"""
Tests for the matplotlib and plotly drawing surfaces.
"""
import matplotlib.pyplot as plt
import pytest

from basis_playground.camera import Viewport
from basis_playground.linalg import PinnedVector
from basis_playground.mpl_canvas import (create_figure, figure_viewport, paint,
                                         plot_scene, render)
from basis_playground.plotly_canvas import (click_lattice, click_point, hex_to_rgb,
                                            render_figure, rgba)
from basis_playground.scene import build_scene
from basis_playground.state import AppState, GridMode

from conftest import SHEAR

# traces for the default scene: two batched grids, 2 per arrow (8 arrows),
# 1 per stroked square and 2 for the filled one
N_TRACES = 2 + 2 * 8 + 4
N_LABELS = 5


@pytest.fixture
def figure(viewport):
    fig, ax = create_figure(viewport)
    yield fig, ax
    plt.close(fig)


class TestMatplotlib:

    def test_axes_map_pixels_y_down(self, figure):
        fig, ax = figure
        assert ax.get_xlim() == (0.0, 800.0)
        assert ax.get_ylim() == (600.0, 0.0)
        assert not ax.axison

    def test_dpi_follows_pixel_ratio(self, viewport):
        fig, _ = create_figure(viewport, device_pixel_ratio=2.0)
        try:
            assert fig.dpi == 144
            assert figure_viewport(fig) == pytest.approx(Viewport(800, 600))
        finally:
            plt.close(fig)

    def test_render_paints_every_item(self, figure, viewport):
        fig, ax = figure
        render(ax, AppState(matrix=SHEAR, t=0.5), viewport)
        # 84 grid lines + 8 arrow shafts
        assert len(ax.lines) == 84 + 8
        # 4 square patches + 8 arrow heads
        assert len(ax.patches) == 4 + 8
        assert len(ax.texts) == N_LABELS

    def test_repaint_replaces_previous_frame(self, figure, viewport):
        fig, ax = figure
        render(ax, AppState(), viewport)
        render(ax, AppState(grid_mode=GridMode.ORIGINAL), viewport)
        assert len(ax.lines) == 42 + 8
        assert ax.get_ylim() == (600.0, 0.0)

    def test_pins_are_painted(self, figure, viewport):
        fig, ax = figure
        pins = (PinnedVector(1.0, 0.0, 2.0, 0.0),)
        render(ax, AppState(pinned=pins, grid_mode=GridMode.TRANSFORMED), viewport)
        assert len(ax.lines) == 42 + 9

    def test_unknown_item(self, figure, viewport):
        fig, ax = figure
        with pytest.raises(TypeError):
            paint(ax, ["not a primitive"], viewport)

    def test_plot_scene(self, viewport):
        fig = plot_scene(AppState(), viewport)
        try:
            assert len(fig.axes) == 1
        finally:
            plt.close(fig)


class TestPlotly:

    def test_trace_count_and_lattice(self, viewport):
        fig = render_figure(AppState(), viewport, clickable=True)
        assert len(fig.data) == N_TRACES + 1
        assert fig.data[-1].name == "click-lattice"
        assert len(fig.layout.annotations) == N_LABELS

    def test_not_clickable(self, viewport):
        fig = render_figure(AppState(), viewport, clickable=False)
        assert len(fig.data) == N_TRACES
        assert all(trace.name != "click-lattice" for trace in fig.data)

    def test_grid_is_batched(self, viewport):
        fig = render_figure(AppState(grid_mode=GridMode.ORIGINAL), viewport, clickable=False)
        grid = fig.data[0]
        assert grid.name == "grid-original"
        assert sum(x is None for x in grid.x) == 42

    def test_axes_in_screen_pixels(self, viewport):
        fig = render_figure(AppState(), viewport)
        assert list(fig.layout.xaxis.range) == [0, 800]
        assert list(fig.layout.yaxis.range) == [600, 0]
        assert fig.layout.width == 800 and fig.layout.height == 600

    def test_labels_match_scene(self, viewport):
        state = AppState(matrix=SHEAR)
        scene = build_scene(state, viewport)
        labels = [item.label for item in scene if getattr(item, "label", None)]
        fig = render_figure(state, viewport)
        assert [a.text for a in fig.layout.annotations] == labels

    def test_lattice_covers_viewport(self):
        lattice = click_lattice(Viewport(100, 50), spacing=10)
        assert len(lattice.x) == 10 * 5
        assert min(lattice.x) == 5 and max(lattice.y) == 45

    def test_colors(self):
        assert hex_to_rgb("#ff8000") == (255, 128, 0)
        assert rgba("#000000", 0.5) == "rgba(0, 0, 0, 0.500)"

    @pytest.mark.parametrize("event, expected", [
        ({"x": 10, "y": 20.5, "curveNumber": 22, "pointNumber": 7}, (10.0, 20.5)),
        ({"x": 10}, None),
        ({"x": None, "y": 3}, None),
        ("click", None),
        (None, None),
    ])
    def test_click_point(self, event, expected):
        assert click_point(event) == expected
