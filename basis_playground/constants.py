"""
Basis Playground - constants and configuration

- Grid sampling for the plane overlays
- Camera bounds and defaults
- Pointer / wheel tuning
- Animation speed and pin capacity
- Colours for every scene layer
"""

# ----------------------------------------------------------------------
# Grid
# ----------------------------------------------------------------------
GRID_RANGE = 10       # grid covers [-GRID_RANGE, GRID_RANGE] on both axes
GRID_STEP = 1
GRID_SAMPLES = 32     # segments per grid line (curves stay smooth under t)

# Far enough out that the axes look infinite at any allowed zoom
AXIS_EXTENT = 1000.0

# ----------------------------------------------------------------------
# Camera
# ----------------------------------------------------------------------
MIN_ZOOM = 20.0       # pixels per world unit
MAX_ZOOM = 400.0
DEFAULT_OFFSET_X = 0.0
DEFAULT_OFFSET_Y = 0.0
DEFAULT_ZOOM = 80.0

DEFAULT_VIEWPORT_WIDTH = 900
DEFAULT_VIEWPORT_HEIGHT = 700

# ----------------------------------------------------------------------
# Pointer / wheel
# ----------------------------------------------------------------------
DRAG_RADIUS_PX = 16.0       # grab distance around the probe tip
WHEEL_ZOOM_RATE = 0.001     # zoom *= exp(-deltaY * rate)
WHEEL_NOTCH_DELTA = 100.0   # deltaY reported for one wheel notch

# ----------------------------------------------------------------------
# Animation
# ----------------------------------------------------------------------
ANIMATION_SPEED = 0.0004    # t units per millisecond (2.5 s per sweep)
FRAME_INTERVAL_MS = 16      # ~60 Hz refresh for timer-driven hosts

# ----------------------------------------------------------------------
# Pinned vectors
# ----------------------------------------------------------------------
MAX_PINNED = 6

# ----------------------------------------------------------------------
# Drawing
# ----------------------------------------------------------------------
# 72 dpi makes one matplotlib point equal one logical pixel
BASE_DPI = 72
ARROW_HEAD_PX = 12.0
LABEL_OFFSET_PX = (6.0, -6.0)
LABEL_FONT_PX = 14
INVALID_NUMBER = "—"   # em dash shown for NaN / inf

# Exported sweep, written next to Home.py
GIF_FILENAME = "basis_playground.gif"

COLORS = {
    "background": "#f8fafc",
    "grid_original": "#cbd5f5",
    "grid_transformed": "#6366f1",
    "axes": "#94a3b8",
    "square_original": "#9ca3af",
    "square_transformed": "#4f46e5",
    "square_current_fill": "#6366f1",
    "square_current_stroke": "#312e81",
    "basis_rest": "#0f172a",
    "basis_i": "#2563eb",
    "basis_j": "#16a34a",
    "pinned": "#94a3b8",
    "probe_rest": "#f97316",
    "probe": "#ea580c",
}
