"""
Tests for the matplotlib desktop window, driven with synthetic events on Agg.
"""
from types import SimpleNamespace

import matplotlib.pyplot as plt
import pytest

from basis_playground.camera import DEFAULT_CAMERA, Viewport
from basis_playground.desktop import (PlaygroundWindow, TimerFrameScheduler,
                                      build_parser, hud_text)
from basis_playground.linalg import Matrix, Vector2
from basis_playground.presets import PRESETS
from basis_playground.state import AppState, GridMode, SetT

from conftest import PROJECT_X


class FakeTimer:

    def __init__(self, interval):
        self.interval = interval
        self.single_shot = False
        self.callbacks = []
        self.started = False

    def add_callback(self, func):
        self.callbacks.append(func)

    def start(self):
        self.started = True

    def stop(self):
        self.started = False

    def fire(self):
        for func in self.callbacks:
            func()


class FakeCanvas:

    def __init__(self):
        self.timers = []

    def new_timer(self, interval):
        timer = FakeTimer(interval)
        self.timers.append(timer)
        return timer


@pytest.fixture
def window(store, viewport):
    win = PlaygroundWindow(store, viewport)
    yield win
    win.close()
    plt.close(win.fig)


def mouse(window, x, y, button=1, step=0):
    return SimpleNamespace(inaxes=window.ax, xdata=x, ydata=y, button=button, step=step)


def key(name):
    return SimpleNamespace(key=name)


class TestHud:

    def test_identity(self):
        text = hud_text(AppState())
        assert text.splitlines()[0] == "Identity"
        assert "det(A) = 1.00" in text
        assert "T(v) = (1.00, 1.00)" in text

    def test_flags(self):
        text = hud_text(AppState(matrix=Matrix(-1.0, 0.0, 0.0, 1.0)))
        assert "orientation flipped" in text
        assert "collapsed" in hud_text(AppState(matrix=PROJECT_X))

    def test_non_finite(self):
        text = hud_text(AppState(matrix=Matrix(float("nan"), 0.0, 0.0, 1.0)))
        assert "det(A) = —" in text


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.preset == "identity"
        assert args.pixel_ratio == 1.0
        assert not args.verbose

    def test_options(self):
        args = build_parser().parse_args(["--preset", "shear-x-1", "--width", "640", "-v"])
        assert args.preset == "shear-x-1"
        assert args.width == 640
        assert args.verbose

    def test_unknown_preset(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--preset", "warp"])


class TestTimerScheduler:

    def test_single_shot_with_timestamp(self):
        canvas = FakeCanvas()
        stamps = []
        handle = TimerFrameScheduler(canvas, interval=16).request_frame(stamps.append)
        assert handle.single_shot and handle.started
        assert handle.interval == 16
        handle.fire()
        assert len(stamps) == 1 and isinstance(stamps[0], float)

    def test_cancel_stops_timer(self):
        canvas = FakeCanvas()
        scheduler = TimerFrameScheduler(canvas)
        handle = scheduler.request_frame(lambda ts: None)
        scheduler.cancel_frame(handle)
        assert not handle.started


class TestWindow:

    def test_click_moves_probe(self, window, store):
        window._on_press(mouse(window, 560.0, 380.0))
        window._on_release(mouse(window, 560.0, 380.0))
        assert store.state.probe == Vector2(2.0, -1.0)

    def test_drag_pans(self, window, store):
        window._on_press(mouse(window, 100.0, 500.0))
        window._on_motion(mouse(window, 180.0, 500.0))
        window._on_release(mouse(window, 180.0, 500.0))
        assert store.state.camera.offset_x == pytest.approx(-1.0)
        assert store.state.probe == Vector2(1.0, 1.0)

    def test_right_button_ignored(self, window, store):
        window._on_press(mouse(window, 560.0, 380.0, button=3))
        window._on_release(mouse(window, 560.0, 380.0, button=3))
        assert store.state.probe == Vector2(1.0, 1.0)

    def test_release_outside_ends_gesture(self, window, store):
        window._on_press(mouse(window, 100.0, 500.0))
        window._on_release(SimpleNamespace(inaxes=None, xdata=None, ydata=None, button=1))
        assert store.state.probe == Vector2(1.0, 1.0)

    def test_scroll_zooms(self, window, store):
        window._on_scroll(mouse(window, 400.0, 300.0, step=1))
        assert store.state.camera.zoom > DEFAULT_CAMERA.zoom

    def test_keys(self, window, store):
        window._on_key(key("p"))
        assert len(store.state.pinned) == 1
        window._on_key(key("g"))
        assert store.state.grid_mode is GridMode.ORIGINAL
        window._on_key(key("n"))
        assert store.state.preset_id == PRESETS[1].id
        window._on_key(key("b"))
        window._on_key(key("b"))
        assert store.state.preset_id == PRESETS[-1].id
        window._on_key(key(None))

    def test_space_toggles_playback_and_frames(self, window, store):
        window._on_key(key(" "))
        assert store.state.is_playing
        assert window.loop.active
        store.dispatch(SetT(0.3))
        assert not window.loop.active

    def test_reset_camera_key(self, window, store):
        window._on_scroll(mouse(window, 10.0, 10.0, step=-2))
        window._on_key(key("r"))
        assert store.state.camera == DEFAULT_CAMERA

    def test_redraw_on_state_change(self, window, store):
        window._on_key(key("g"))
        assert len(window.ax.lines) == 42 + 8
        assert window.ax.texts[-1].get_text() == hud_text(store.state)

    def test_close_unsubscribes(self, store, viewport):
        win = PlaygroundWindow(store, viewport)
        win.close()
        plt.close(win.fig)
        store.dispatch(SetT(0.5))
        assert win.loop.active is False

    def test_resize_reads_figure(self, window):
        window.fig.set_size_inches(400 / 72, 300 / 72)
        window._on_resize(None)
        assert window.viewport == pytest.approx(Viewport(400, 300))
