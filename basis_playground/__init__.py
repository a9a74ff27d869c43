"""
Basis Playground: explore how 2x2 matrices reshape the plane.
"""

from .linalg import (IDENTITY, Matrix, PinnedVector, Vector2, clamp,
                     determinant, format_number, interpolate, multiply)
from .camera import Camera, Viewport, screen_to_world, world_to_screen
from .state import AppState, GridMode, StateStore

__version__ = "0.1.0"
