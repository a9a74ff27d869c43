"""
Scene renderer.

build_scene() turns an AppState into an ordered display list of primitives in
screen pixels. Later primitives are painted on top of earlier ones. The
drawing surfaces (mpl_canvas, plotly_canvas) only paint what they are given.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .camera import world_to_screen, world_to_screen_array
from .constants import (ARROW_HEAD_PX, AXIS_EXTENT, COLORS, GRID_RANGE,
                        GRID_SAMPLES, GRID_STEP, LABEL_OFFSET_PX)
from .linalg import (Vector2, format_number, interpolate, interpolate_points,
                     lerp, multiply)

ORIGIN = Vector2(0.0, 0.0)
BASIS_I = Vector2(1.0, 0.0)
BASIS_J = Vector2(0.0, 1.0)
UNIT_SQUARE = (Vector2(0.0, 0.0), Vector2(1.0, 0.0),
               Vector2(1.0, 1.0), Vector2(0.0, 1.0))


# ---------- Primitives ----------

@dataclass(frozen=True)
class Background:
    color: str
    layer: str = "background"


@dataclass(frozen=True, eq=False)
class Polyline:
    points: np.ndarray          # (N, 2) screen pixels
    color: str
    width: float = 1.0
    alpha: float = 1.0
    dash: Optional[Tuple[float, ...]] = None
    layer: str = ""


@dataclass(frozen=True, eq=False)
class Polygon:
    points: np.ndarray          # (N, 2) screen pixels, implicitly closed
    stroke: Optional[str] = None
    fill: Optional[str] = None
    fill_alpha: float = 1.0
    width: float = 2.0
    alpha: float = 1.0
    dash: Optional[Tuple[float, ...]] = None
    layer: str = ""


@dataclass(frozen=True, eq=False)
class Arrow:
    origin: Vector2             # screen pixels
    tip: Vector2
    head: np.ndarray            # (3, 2) filled triangle at the tip
    color: str
    width: float = 2.0
    alpha: float = 1.0
    dash: Optional[Tuple[float, ...]] = None
    label: Optional[str] = None
    label_pos: Optional[Vector2] = None
    layer: str = ""


# ---------- Builders ----------

def arrow_head(origin, tip, length=ARROW_HEAD_PX):
    """
    Triangle for an arrow head in screen space: two barbs at +/-30 degrees
    from the shaft, pointing back from the tip.
    """
    angle = math.atan2(tip.y - origin.y, tip.x - origin.x)
    return np.array([
        [tip.x, tip.y],
        [tip.x - length * math.cos(angle - math.pi / 6),
         tip.y - length * math.sin(angle - math.pi / 6)],
        [tip.x - length * math.cos(angle + math.pi / 6),
         tip.y - length * math.sin(angle + math.pi / 6)],
    ])


def make_arrow(camera, viewport, origin, tip, color, width=2.0, alpha=1.0,
               dash=None, label=None, layer=""):
    origin_s = world_to_screen(camera, origin, viewport)
    tip_s = world_to_screen(camera, tip, viewport)
    label_pos = None
    if label:
        label_pos = Vector2(tip_s.x + LABEL_OFFSET_PX[0], tip_s.y + LABEL_OFFSET_PX[1])
    return Arrow(origin=origin_s, tip=tip_s, head=arrow_head(origin_s, tip_s),
                 color=color, width=width, alpha=alpha, dash=dash,
                 label=label, label_pos=label_pos, layer=layer)


def make_polygon(camera, viewport, points, layer="", **style):
    screen = world_to_screen_array(camera, [(p.x, p.y) for p in points], viewport)
    return Polygon(points=screen, layer=layer, **style)


def grid_lines():
    """
    World-space sample points for every grid line: vertical lines first,
    then horizontal ones, each sampled at GRID_SAMPLES segments.
    """
    values = np.arange(-GRID_RANGE, GRID_RANGE + GRID_STEP / 2, GRID_STEP, dtype=float)
    samples = np.linspace(-GRID_RANGE, GRID_RANGE, GRID_SAMPLES + 1)
    lines = []
    for x in values:
        lines.append(np.column_stack([np.full_like(samples, x), samples]))
    for y in values:
        lines.append(np.column_stack([samples, np.full_like(samples, y)]))
    return lines


def grid_polylines(state, viewport, transformed):
    """
    The 'original' grid is drawn at its t-interpolated position, the
    'transformed' grid at t = 1.
    """
    if transformed:
        t, color, alpha, layer = 1.0, COLORS["grid_transformed"], 0.5, "grid-transformed"
    else:
        t, color, alpha, layer = state.t, COLORS["grid_original"], 0.8, "grid-original"

    out = []
    for line in grid_lines():
        world = interpolate_points(line, state.matrix, t)
        screen = world_to_screen_array(state.camera, world, viewport)
        out.append(Polyline(points=screen, color=color, width=1.0,
                            alpha=alpha, layer=layer))
    return out


def vector_label(prefix, vector):
    return f"{prefix}({format_number(vector.x)}, {format_number(vector.y)})"


def build_scene(state, viewport):
    """
    Ordered display list for one frame of the given state.

    1. background
    2. original grid (at t), 3. transformed grid (at 1), per grid mode
    4. axes
    5. unit square: original (dashed), transformed, current (filled)
    6. basis vectors at rest and at t, labelled with their images
    7. pinned ghosts (dashed, from their captured pairs)
    8. probe at rest and at t, labelled with its image
    """
    matrix, t, camera = state.matrix, state.t, state.camera
    scene = [Background(COLORS["background"])]

    if state.grid_mode.shows_original:
        scene.extend(grid_polylines(state, viewport, transformed=False))
    if state.grid_mode.shows_transformed:
        scene.extend(grid_polylines(state, viewport, transformed=True))

    for start, end in (((-AXIS_EXTENT, 0.0), (AXIS_EXTENT, 0.0)),
                       ((0.0, -AXIS_EXTENT), (0.0, AXIS_EXTENT))):
        scene.append(make_arrow(camera, viewport, Vector2(*start), Vector2(*end),
                                COLORS["axes"], width=1.0, alpha=0.6, layer="axes"))

    transformed_square = [multiply(matrix, p) for p in UNIT_SQUARE]
    current_square = [interpolate(p, matrix, t) for p in UNIT_SQUARE]
    scene.append(make_polygon(camera, viewport, UNIT_SQUARE, layer="square-original",
                              stroke=COLORS["square_original"], dash=(6, 6), alpha=0.7))
    scene.append(make_polygon(camera, viewport, transformed_square,
                              layer="square-transformed",
                              stroke=COLORS["square_transformed"], alpha=0.7))
    scene.append(make_polygon(camera, viewport, current_square, layer="square-current",
                              fill=COLORS["square_current_fill"], fill_alpha=0.18,
                              stroke=COLORS["square_current_stroke"], alpha=0.9))

    # Basis vectors: faint at rest, bold at t
    scene.append(make_arrow(camera, viewport, ORIGIN, BASIS_I, COLORS["basis_rest"],
                            width=2.0, alpha=0.6, label="(1, 0)", layer="basis-rest"))
    scene.append(make_arrow(camera, viewport, ORIGIN, BASIS_J, COLORS["basis_rest"],
                            width=2.0, alpha=0.6, label="(0, 1)", layer="basis-rest"))
    for basis, prefix, color in ((BASIS_I, "T(1,0) = ", COLORS["basis_i"]),
                                 (BASIS_J, "T(0,1) = ", COLORS["basis_j"])):
        scene.append(make_arrow(camera, viewport, ORIGIN, interpolate(basis, matrix, t),
                                color, width=3.0,
                                label=vector_label(prefix, multiply(matrix, basis)),
                                layer="basis"))

    # Pins keep their captured pair; they do not follow later matrix edits
    for pin in state.pinned:
        ghost = Vector2(lerp(pin.x, pin.tx, t), lerp(pin.y, pin.ty, t))
        scene.append(make_arrow(camera, viewport, ORIGIN, ghost, COLORS["pinned"],
                                width=1.5, alpha=0.6, dash=(4, 4), layer="pinned"))

    probe = state.probe
    scene.append(make_arrow(camera, viewport, ORIGIN, probe, COLORS["probe_rest"],
                            width=2.0, alpha=0.4, layer="probe-rest"))
    scene.append(make_arrow(camera, viewport, ORIGIN, interpolate(probe, matrix, t),
                            COLORS["probe"], width=3.0,
                            label=vector_label("v → ", multiply(matrix, probe)),
                            layer="probe"))
    return scene


def layers(scene):
    """Layer names of a display list, in paint order."""
    return [item.layer for item in scene]
