"""
Camera model: world (mathematical plane, y up) <-> screen (pixels, y down).

    screen.x = (world.x - offset_x) * zoom + width / 2
    screen.y = height / 2 - (world.y - offset_y) * zoom
"""

import math
from typing import NamedTuple

import numpy as np

from .constants import (DEFAULT_OFFSET_X, DEFAULT_OFFSET_Y, DEFAULT_ZOOM,
                        MAX_ZOOM, MIN_ZOOM, WHEEL_ZOOM_RATE)
from .linalg import Vector2, clamp


class Camera(NamedTuple):
    offset_x: float    # world point shown at the viewport centre
    offset_y: float
    zoom: float        # pixels per world unit


class Viewport(NamedTuple):
    width: float
    height: float


DEFAULT_CAMERA = Camera(DEFAULT_OFFSET_X, DEFAULT_OFFSET_Y, DEFAULT_ZOOM)


def clamp_zoom(zoom):
    return clamp(zoom, MIN_ZOOM, MAX_ZOOM)


def world_to_screen(camera, point, viewport):
    return Vector2((point.x - camera.offset_x) * camera.zoom + viewport.width / 2,
                   viewport.height / 2 - (point.y - camera.offset_y) * camera.zoom)


def screen_to_world(camera, point, viewport):
    return Vector2((point.x - viewport.width / 2) / camera.zoom + camera.offset_x,
                   -(point.y - viewport.height / 2) / camera.zoom + camera.offset_y)


def world_to_screen_array(camera, points, viewport):
    """
    world_to_screen() for an (N, 2) array of world points.
    """
    points = np.asarray(points, dtype=float)
    out = np.empty_like(points)
    out[:, 0] = (points[:, 0] - camera.offset_x) * camera.zoom + viewport.width / 2
    out[:, 1] = viewport.height / 2 - (points[:, 1] - camera.offset_y) * camera.zoom
    return out


def pan(camera, dx, dy):
    """
    Shift the camera by a pixel drag (dx, dy). Dragging right moves the
    world right, so the offset moves left; screen y is flipped.
    """
    return camera._replace(offset_x=camera.offset_x - dx / camera.zoom,
                           offset_y=camera.offset_y + dy / camera.zoom)


def zoom_at(camera, screen_point, delta_y, viewport):
    """
    Wheel zoom around the cursor: the world point under screen_point stays
    put on screen. Zoom is clamped to [MIN_ZOOM, MAX_ZOOM].
    """
    # any step wider than the whole zoom range lands on a bound anyway
    limit = math.log(MAX_ZOOM / MIN_ZOOM)
    factor = math.exp(clamp(-delta_y * WHEEL_ZOOM_RATE, -limit, limit))
    new_zoom = clamp_zoom(camera.zoom * factor)

    before = screen_to_world(camera, screen_point, viewport)
    zoomed = camera._replace(zoom=new_zoom)
    after = screen_to_world(zoomed, screen_point, viewport)

    return zoomed._replace(offset_x=zoomed.offset_x + before.x - after.x,
                           offset_y=zoomed.offset_y + before.y - after.y)
