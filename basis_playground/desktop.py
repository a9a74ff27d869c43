"""
Interactive desktop window for the playground (matplotlib).

Controls:
- drag the probe tip  : move the probe
- drag empty canvas   : pan
- click empty canvas  : move the probe there
- mouse wheel         : zoom around the cursor
- SPACE               : play / pause the t sweep
- P                   : pin the probe
- G                   : cycle grid view (original / transformed / both)
- R                   : reset the camera
- N / B               : next / previous preset
"""

import argparse
import logging
import sys
import time

import matplotlib.pyplot as plt

from .animation import AnimationDriver, FrameLoop
from .camera import Viewport
from .constants import (DEFAULT_VIEWPORT_HEIGHT, DEFAULT_VIEWPORT_WIDTH,
                        FRAME_INTERVAL_MS, WHEEL_NOTCH_DELTA)
from .controller import PointerController
from .linalg import determinant_insight, format_number
from .mpl_canvas import create_figure, figure_viewport, render
from .presets import PRESETS, get_preset, preset_index
from .state import (AppState, PinProbe, ResetCamera, SelectPreset, SetGridMode,
                    StateStore, TogglePlayback)

logger = logging.getLogger(__name__)

KEYS = (" ", "p", "g", "r", "n", "b")


class TimerFrameScheduler:
    """
    FrameScheduler on top of matplotlib's backend timers: one single-shot
    timer per requested frame.
    """

    def __init__(self, canvas, interval=FRAME_INTERVAL_MS):
        self.canvas = canvas
        self.interval = interval

    def request_frame(self, callback):
        timer = self.canvas.new_timer(interval=self.interval)
        timer.single_shot = True
        timer.add_callback(lambda: callback(time.perf_counter() * 1000.0))
        timer.start()
        return timer

    def cancel_frame(self, handle):
        handle.stop()


def hud_text(state):
    insight = determinant_insight(state.matrix)
    a, b, c, d = (format_number(v) for v in state.matrix)
    lines = [
        get_preset(state.preset_id).label,
        f"A = [[{a}, {b}], [{c}, {d}]]",
        f"det(A) = {format_number(insight.det)}   area x{format_number(insight.area_scale)}",
    ]
    if insight.orientation_flipped:
        lines.append("orientation flipped (reflection)")
    if not insight.invertible:
        lines.append("collapsed (not invertible)")
    image = state.transformed_probe
    lines.append(f"v = ({format_number(state.probe.x)}, {format_number(state.probe.y)})"
                 f" -> T(v) = ({format_number(image.x)}, {format_number(image.y)})")
    lines.append(f"t = {format_number(state.t)}{'  (playing)' if state.is_playing else ''}"
                 f"   grid: {state.grid_mode.value}   pins: {len(state.pinned)}")
    return "\n".join(lines)


class PlaygroundWindow:
    """
    Wires a StateStore to a matplotlib figure: canvas events go to the
    PointerController, state changes redraw, and playback runs a FrameLoop on
    backend timers.
    """

    def __init__(self, store, viewport, device_pixel_ratio=1.0):
        self.store = store
        self.fig, self.ax = create_figure(viewport, device_pixel_ratio)
        self.viewport = viewport
        self.controller = PointerController(store)
        self.driver = AnimationDriver(store)
        self.loop = FrameLoop(TimerFrameScheduler(self.fig.canvas), self.driver.tick)
        self._unsubscribe = store.subscribe(self._on_state)

        canvas = self.fig.canvas
        self._cids = [
            canvas.mpl_connect('button_press_event', self._on_press),
            canvas.mpl_connect('motion_notify_event', self._on_motion),
            canvas.mpl_connect('button_release_event', self._on_release),
            canvas.mpl_connect('axes_leave_event', self._on_leave),
            canvas.mpl_connect('scroll_event', self._on_scroll),
            canvas.mpl_connect('key_press_event', self._on_key),
            canvas.mpl_connect('resize_event', self._on_resize),
            canvas.mpl_connect('close_event', self._on_close),
        ]
        manager = canvas.manager
        if manager is not None:
            manager.set_window_title("Basis Playground")
        self.redraw()

    # ----- drawing -----

    def redraw(self):
        state = self.store.state
        render(self.ax, state, self.viewport)
        self.ax.text(0.01, 0.99, hud_text(state), transform=self.ax.transAxes,
                     ha="left", va="top", fontsize=12, family="monospace",
                     color="#0f172a",
                     bbox=dict(facecolor="white", alpha=0.8, edgecolor="#cbd5e1"))
        self.fig.canvas.draw_idle()

    def _on_state(self, state):
        self.loop.set_active(state.is_playing)
        self.redraw()

    # ----- pointer events -----

    def _screen_point(self, event):
        if event.inaxes is not self.ax or event.xdata is None:
            return None
        return event.xdata, event.ydata

    def _on_press(self, event):
        point = self._screen_point(event)
        if point is None or event.button != 1:
            return
        self.controller.pointer_down(point, self.viewport)

    def _on_motion(self, event):
        point = self._screen_point(event)
        if point is None:
            return
        self.controller.pointer_move(point, self.viewport)

    def _on_release(self, event):
        if event.button != 1:
            return
        point = self._screen_point(event)
        if point is None:
            self.controller.pointer_leave()
            return
        self.controller.pointer_up(point, self.viewport)

    def _on_leave(self, event):
        self.controller.pointer_leave()

    def _on_scroll(self, event):
        point = self._screen_point(event)
        if point is None:
            return
        # wheel up (step > 0) zooms in, like a negative browser deltaY
        self.controller.wheel(point, -event.step * WHEEL_NOTCH_DELTA, self.viewport)

    # ----- keyboard / window -----

    def _on_key(self, event):
        key = (event.key or "").lower()
        state = self.store.state
        if key == " ":
            self.store.dispatch(TogglePlayback())
        elif key == "p":
            self.store.dispatch(PinProbe())
        elif key == "g":
            self.store.dispatch(SetGridMode(state.grid_mode.next()))
        elif key == "r":
            self.store.dispatch(ResetCamera())
        elif key in ("n", "b"):
            step = 1 if key == "n" else -1
            index = (preset_index(state.preset_id) + step) % len(PRESETS)
            self.store.dispatch(SelectPreset(PRESETS[index].id))

    def _on_resize(self, event):
        self.viewport = figure_viewport(self.fig)
        self.redraw()

    def _on_close(self, event):
        self.close()

    def close(self):
        self.loop.close()
        self._unsubscribe()
        for cid in self._cids:
            self.fig.canvas.mpl_disconnect(cid)
        self._cids = []


def _free_keys():
    """Drop matplotlib's default shortcuts that collide with ours."""
    for name, keys in plt.rcParams.items():
        if name.startswith("keymap.") and isinstance(keys, list):
            plt.rcParams[name] = [k for k in keys if k.lower() not in KEYS]


def build_parser():
    parser = argparse.ArgumentParser(
        description='Explore how 2x2 matrices reshape the plane.',
    )
    parser.add_argument(
        '--preset',
        default='identity',
        choices=[preset.id for preset in PRESETS],
        help='Preset transformation to start with.',
    )
    parser.add_argument('--width', type=int, default=DEFAULT_VIEWPORT_WIDTH,
                        help='Canvas width in pixels.')
    parser.add_argument('--height', type=int, default=DEFAULT_VIEWPORT_HEIGHT,
                        help='Canvas height in pixels.')
    parser.add_argument('--pixel-ratio', type=float, default=1.0,
                        help='Extra device pixel ratio for the canvas.')
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    _free_keys()
    store = StateStore(AppState())
    store.dispatch(SelectPreset(args.preset))
    window = PlaygroundWindow(store, Viewport(args.width, args.height),
                              device_pixel_ratio=args.pixel_ratio)
    logger.info("Starting with preset %s", args.preset)
    plt.show()
    window.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
