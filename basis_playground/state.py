"""
Application state and the commands that change it.

AppState is a frozen value. The only way to change what is on screen is to
dispatch a command to the StateStore, which runs reduce() and hands the new
state to every subscriber in order.
"""

import enum
import logging
from dataclasses import dataclass, field, replace
from functools import singledispatch
from typing import Callable, List, Optional, Tuple

from .camera import DEFAULT_CAMERA, Camera, clamp_zoom
from .constants import MAX_PINNED
from .linalg import (IDENTITY, Matrix, PinnedVector, Vector2, clamp,
                     matrices_equal, multiply, parse_number)
from .presets import CUSTOM_ID, get_preset

logger = logging.getLogger(__name__)


class GridMode(str, enum.Enum):
    ORIGINAL = "original"
    TRANSFORMED = "transformed"
    BOTH = "both"

    @property
    def shows_original(self):
        return self in (GridMode.ORIGINAL, GridMode.BOTH)

    @property
    def shows_transformed(self):
        return self in (GridMode.TRANSFORMED, GridMode.BOTH)

    def next(self):
        modes = list(GridMode)
        return modes[(modes.index(self) + 1) % len(modes)]


@dataclass(frozen=True)
class AppState:
    matrix: Matrix = IDENTITY
    t: float = 1.0
    probe: Vector2 = Vector2(1.0, 1.0)
    pinned: Tuple[PinnedVector, ...] = ()
    camera: Camera = DEFAULT_CAMERA
    grid_mode: GridMode = GridMode.BOTH
    preset_id: Optional[str] = "identity"
    is_playing: bool = False

    @property
    def transformed_probe(self):
        return multiply(self.matrix, self.probe)


# ---------- Commands ----------

@dataclass(frozen=True)
class SelectPreset:
    preset_id: str


@dataclass(frozen=True)
class SetMatrix:
    matrix: Matrix


@dataclass(frozen=True)
class SetMatrixEntry:
    """Edit one entry ('a', 'b', 'c' or 'd') from raw input text."""
    key: str
    text: str


@dataclass(frozen=True)
class SetT:
    """Scrub t by hand. Pauses playback."""
    value: float


@dataclass(frozen=True)
class AdvanceAnimation:
    """t computed by the animation driver. Playback keeps going."""
    value: float


@dataclass(frozen=True)
class TogglePlayback:
    pass


@dataclass(frozen=True)
class SetProbe:
    vector: Vector2


@dataclass(frozen=True)
class SetProbeComponent:
    """Edit 'x' or 'y' of the probe from raw input text."""
    key: str
    text: str


@dataclass(frozen=True)
class PinProbe:
    pass


@dataclass(frozen=True)
class SetGridMode:
    mode: GridMode


@dataclass(frozen=True)
class SetCamera:
    camera: Camera


@dataclass(frozen=True)
class ResetCamera:
    pass


# ---------- Transitions ----------

def _preset_id_for(matrix):
    return "identity" if matrices_equal(matrix, IDENTITY) else CUSTOM_ID


@singledispatch
def _transition(command, state):
    raise TypeError(f"Unsupported command: {command!r}")


@_transition.register
def _(command: SelectPreset, state):
    preset = get_preset(command.preset_id)
    return replace(state, matrix=preset.matrix, preset_id=preset.id)


@_transition.register
def _(command: SetMatrix, state):
    matrix = Matrix(*command.matrix)
    return replace(state, matrix=matrix, preset_id=_preset_id_for(matrix))


@_transition.register
def _(command: SetMatrixEntry, state):
    if command.key not in Matrix._fields:
        raise ValueError(f"Unknown matrix entry: {command.key!r}")
    matrix = state.matrix._replace(**{command.key: parse_number(command.text)})
    return replace(state, matrix=matrix, preset_id=_preset_id_for(matrix))


@_transition.register
def _(command: SetT, state):
    return replace(state, t=clamp(float(command.value), 0.0, 1.0), is_playing=False)


@_transition.register
def _(command: AdvanceAnimation, state):
    return replace(state, t=clamp(float(command.value), 0.0, 1.0))


@_transition.register
def _(command: TogglePlayback, state):
    return replace(state, is_playing=not state.is_playing)


@_transition.register
def _(command: SetProbe, state):
    return replace(state, probe=Vector2(*command.vector))


@_transition.register
def _(command: SetProbeComponent, state):
    if command.key not in Vector2._fields:
        raise ValueError(f"Unknown probe component: {command.key!r}")
    probe = state.probe._replace(**{command.key: parse_number(command.text)})
    return replace(state, probe=probe)


@_transition.register
def _(command: PinProbe, state):
    image = state.transformed_probe
    pin = PinnedVector(state.probe.x, state.probe.y, image.x, image.y)
    # oldest pins fall off the front
    pinned = (state.pinned + (pin,))[-MAX_PINNED:]
    return replace(state, pinned=pinned)


@_transition.register
def _(command: SetGridMode, state):
    return replace(state, grid_mode=GridMode(command.mode))


@_transition.register
def _(command: SetCamera, state):
    offset_x, offset_y, zoom = command.camera
    return replace(state, camera=Camera(offset_x, offset_y, clamp_zoom(zoom)))


@_transition.register
def _(command: ResetCamera, state):
    return replace(state, camera=DEFAULT_CAMERA)


def reduce(state, command):
    """
    Pure transition: the state that results from applying command to state.
    Raises TypeError for objects that are not commands.
    """
    return _transition(command, state)


# ---------- Store ----------

@dataclass
class StateStore:
    """
    Single owner of the AppState.

    dispatch() applies the command at once. Subscribers are notified before
    the outermost dispatch() returns; a command dispatched from inside a
    subscriber is notified after the current round, so every subscriber sees
    states in the order they were applied.
    """
    state: AppState = field(default_factory=AppState)
    _listeners: List[Callable] = field(default_factory=list, repr=False)
    _pending: List[AppState] = field(default_factory=list, repr=False)
    _notifying: bool = field(default=False, repr=False)

    def dispatch(self, command):
        new_state = reduce(self.state, command)
        logger.debug("dispatch %s", command)
        if new_state == self.state:
            return self.state
        self.state = new_state
        self._pending.append(new_state)
        if not self._notifying:
            self._notify()
        return new_state

    def _notify(self):
        self._notifying = True
        try:
            while self._pending:
                state = self._pending.pop(0)
                for listener in list(self._listeners):
                    listener(state)
        finally:
            self._notifying = False
            self._pending.clear()

    def subscribe(self, listener):
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
