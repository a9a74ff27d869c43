"""
Pointer / gesture controller for the canvas.

Turns pointer-down/move/up/leave and wheel events (screen pixels, y down)
into commands on the StateStore:

- press near the probe tip and drag  -> move the probe
- press anywhere else and drag       -> pan the camera
- press and release without moving   -> relocate the probe to the click
- wheel                              -> zoom around the cursor
"""

import enum
import logging
import math

from .camera import pan, screen_to_world, world_to_screen, zoom_at
from .constants import DRAG_RADIUS_PX
from .linalg import Vector2
from .state import SetCamera, SetProbe

logger = logging.getLogger(__name__)


class DragMode(enum.Enum):
    IDLE = "idle"
    DRAGGING_VECTOR = "dragging_vector"
    PANNING = "panning"


class PointerController:
    """
    Gesture state machine bound to a StateStore.

    Every handler takes the pointer position in screen pixels and the current
    viewport, reads the latest state from the store and runs synchronously.
    """

    def __init__(self, store, drag_radius=DRAG_RADIUS_PX):
        self.store = store
        self.drag_radius = drag_radius
        self.mode = DragMode.IDLE
        self.moved = False
        self.last_point = Vector2(0.0, 0.0)

    def _set_mode(self, mode):
        if mode is not self.mode:
            logger.debug("gesture %s -> %s", self.mode.value, mode.value)
        self.mode = mode

    def hits_probe(self, point, viewport):
        state = self.store.state
        tip = world_to_screen(state.camera, state.probe, viewport)
        return math.hypot(tip.x - point.x, tip.y - point.y) < self.drag_radius

    def pointer_down(self, point, viewport):
        point = Vector2(*point)
        self.last_point = point
        self.moved = False
        if self.hits_probe(point, viewport):
            self._set_mode(DragMode.DRAGGING_VECTOR)
        else:
            self._set_mode(DragMode.PANNING)

    def pointer_move(self, point, viewport):
        point = Vector2(*point)
        dx = point.x - self.last_point.x
        dy = point.y - self.last_point.y

        if self.mode is DragMode.DRAGGING_VECTOR:
            self.moved = True
            world = screen_to_world(self.store.state.camera, point, viewport)
            self.store.dispatch(SetProbe(world))
        elif self.mode is DragMode.PANNING:
            self.moved = True
            self.store.dispatch(SetCamera(pan(self.store.state.camera, dx, dy)))

        self.last_point = point

    def pointer_up(self, point, viewport):
        point = Vector2(*point)
        if self.mode is DragMode.PANNING and not self.moved:
            # plain click on empty canvas
            world = screen_to_world(self.store.state.camera, point, viewport)
            self.store.dispatch(SetProbe(world))
        self._end_gesture()

    def pointer_leave(self, point=None, viewport=None):
        """Leaving the canvas ends any gesture; it never counts as a click."""
        self._end_gesture()

    def _end_gesture(self):
        self._set_mode(DragMode.IDLE)
        self.moved = False

    def wheel(self, point, delta_y, viewport):
        camera = zoom_at(self.store.state.camera, Vector2(*point), delta_y, viewport)
        self.store.dispatch(SetCamera(camera))
