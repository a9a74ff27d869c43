"""
2x2 linear algebra helpers for the playground.

Matrices use the entries (a, b, c, d) of

    [[a, b],
     [c, d]]

so column 1 = (a, c) is where (1, 0) lands and column 2 = (b, d) is where
(0, 1) lands.
"""

import math
from typing import NamedTuple

import numpy as np

from .constants import INVALID_NUMBER


# ---------- Value types ----------

class Matrix(NamedTuple):
    a: float
    b: float
    c: float
    d: float


class Vector2(NamedTuple):
    x: float
    y: float


class PinnedVector(NamedTuple):
    """A probe snapshot: the vector (x, y) and its image (tx, ty) at pin time."""
    x: float
    y: float
    tx: float
    ty: float


class DeterminantInsight(NamedTuple):
    det: float
    area_scale: float
    orientation_flipped: bool
    invertible: bool


IDENTITY = Matrix(1.0, 0.0, 0.0, 1.0)

# Anything this close to zero is treated as singular
SINGULAR_TOL = 1e-12


# ---------- Core math functions ----------

def multiply(matrix, vector):
    """
    Apply the 2x2 map to a vector: x' = a x + b y, y' = c x + d y.
    """
    a, b, c, d = matrix
    return Vector2(a * vector.x + b * vector.y,
                   c * vector.x + d * vector.y)


def determinant(matrix):
    a, b, c, d = matrix
    return a * d - b * c


def lerp(a, b, t):
    return (1 - t) * a + t * b


def interpolate(point, matrix, t):
    """
    Blend between a point and its image under the matrix.

    t = 0 gives the point itself (identity display), t = 1 gives
    multiply(matrix, point).
    """
    transformed = multiply(matrix, point)
    return Vector2(lerp(point.x, transformed.x, t),
                   lerp(point.y, transformed.y, t))


def as_array(matrix):
    a, b, c, d = matrix
    return np.array([[a, b],
                     [c, d]], dtype=float)


def interpolate_points(points, matrix, t):
    """
    Vectorised interpolate() for an (N, 2) array of points (rows).
    Uses row-vector convention: y = x A^T.
    """
    points = np.asarray(points, dtype=float)
    transformed = points @ as_array(matrix).T
    return (1 - t) * points + t * transformed


def is_invertible(matrix):
    return abs(determinant(matrix)) > SINGULAR_TOL


def determinant_insight(matrix):
    """
    Summarise what det(A) says about the map: area scale, orientation and
    whether it can be undone.
    """
    det = determinant(matrix)
    return DeterminantInsight(
        det=det,
        area_scale=abs(det),
        orientation_flipped=det < 0,
        invertible=is_invertible(matrix),
    )


def matrices_equal(m1, m2):
    return tuple(m1) == tuple(m2)


def rotation_matrix(theta):
    """
    2D rotation matrix for angle theta (radians).
    """
    c, s = math.cos(theta), math.sin(theta)
    return Matrix(c, -s, s, c)


# ---------- Scalar helpers ----------

def clamp(value, lo, hi):
    return min(hi, max(lo, value))


def format_number(value, precision=2):
    """
    Fixed-precision text for a scalar; NaN and +/-inf render as a dash.
    """
    try:
        value = float(value)
    except (TypeError, ValueError):
        return INVALID_NUMBER
    if not math.isfinite(value):
        return INVALID_NUMBER
    return f"{value:.{precision}f}"


def parse_number(text):
    """
    Parse user-typed numeric text. Anything malformed or non-finite is 0.0.
    """
    try:
        value = float(str(text).strip())
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value
