"""
Named preset transformations shown in the preset picker.

Every description states the determinant ("det = N") so the sidebar can
teach the area / orientation story alongside the picture.
"""

import math
from typing import NamedTuple

from .linalg import IDENTITY, Matrix, rotation_matrix


class Preset(NamedTuple):
    id: str
    label: str
    description: str
    matrix: Matrix


def rotation_preset(degrees):
    return Preset(
        id=f"rotation-{degrees}",
        label=f"Rotation {degrees}°",
        description=(f"Rotates all vectors {degrees}° counterclockwise around "
                     "the origin. det = 1, area preserved."),
        matrix=rotation_matrix(math.radians(degrees)),
    )


def shear_x_preset(k):
    return Preset(
        id=f"shear-x-{k}",
        label=f"Shear X (k={k})",
        description=(f"Slides points horizontally by {k} times their y-coordinate. "
                     "det = 1, area preserved."),
        matrix=Matrix(1.0, k, 0.0, 1.0),
    )


def shear_y_preset(k):
    return Preset(
        id=f"shear-y-{k}",
        label=f"Shear Y (k={k})",
        description=(f"Slides points vertically by {k} times their x-coordinate. "
                     "det = 1, area preserved."),
        matrix=Matrix(1.0, 0.0, k, 1.0),
    )


PRESETS = [
    Preset("identity", "Identity",
           "Leaves every vector unchanged. det = 1, area preserved.",
           IDENTITY),
    *[rotation_preset(deg) for deg in (15, 30, 45, 60, 90, 120, 180)],
    Preset("scale-x2", "Scale x2, y1",
           "Stretches horizontally by 2 and leaves vertical length unchanged. "
           "det = 2, area doubles.",
           Matrix(2.0, 0.0, 0.0, 1.0)),
    Preset("scale-y-half", "Scale x1, y0.5",
           "Keeps horizontal length and squishes vertical length by 0.5. "
           "det = 0.5, area halves.",
           Matrix(1.0, 0.0, 0.0, 0.5)),
    Preset("scale-x2-y-half", "Scale x2, y0.5",
           "Stretches horizontally by 2 and squishes vertically by 0.5. "
           "det = 1, area preserved.",
           Matrix(2.0, 0.0, 0.0, 0.5)),
    shear_x_preset(0.5),
    shear_x_preset(1),
    shear_y_preset(0.5),
    shear_y_preset(1),
    Preset("reflect-x", "Reflection across x-axis",
           "Flips vectors over the x-axis. det = -1, orientation flips, area preserved.",
           Matrix(1.0, 0.0, 0.0, -1.0)),
    Preset("reflect-y", "Reflection across y-axis",
           "Flips vectors over the y-axis. det = -1, orientation flips, area preserved.",
           Matrix(-1.0, 0.0, 0.0, 1.0)),
    Preset("reflect-yx", "Reflection across line y = x",
           "Swaps x and y coordinates. det = -1, orientation flips, area preserved.",
           Matrix(0.0, 1.0, 1.0, 0.0)),
    Preset("proj-x", "Projection onto x-axis",
           "Flattens every vector onto the x-axis. det = 0, not invertible.",
           Matrix(1.0, 0.0, 0.0, 0.0)),
    Preset("proj-y", "Projection onto y-axis",
           "Flattens every vector onto the y-axis. det = 0, not invertible.",
           Matrix(0.0, 0.0, 0.0, 1.0)),
    Preset("custom", "Custom",
           "Edit the matrix entries below to explore any linear transformation you like.",
           IDENTITY),
]

PRESET_MAP = {preset.id: preset for preset in PRESETS}

CUSTOM_ID = "custom"


def get_preset(preset_id):
    """
    Look up a preset by id; unknown or missing ids fall back to Custom.
    """
    if preset_id is None:
        return PRESET_MAP[CUSTOM_ID]
    return PRESET_MAP.get(preset_id, PRESET_MAP[CUSTOM_ID])


def preset_index(preset_id):
    """Position of a preset in PRESETS (Custom for unknown ids)."""
    return PRESETS.index(get_preset(preset_id))
