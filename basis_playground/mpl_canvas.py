"""
Matplotlib drawing surface for the scene display list.

The axes fill the whole figure and are mapped 1:1 to logical pixels with
y pointing down, so primitives are drawn exactly where build_scene() put
them. Figure dpi is BASE_DPI * device pixel ratio: one point is one logical
pixel, and hi-dpi screens get proportionally more physical pixels.
"""

import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as PolygonPatch

from .camera import Viewport
from .constants import BASE_DPI, LABEL_FONT_PX
from .scene import Arrow, Background, Polygon, Polyline, build_scene


def _linestyle(dash):
    if not dash:
        return "solid"
    return (0, tuple(dash))


# ---------- Figure setup ----------

def create_figure(viewport, device_pixel_ratio=1.0):
    """
    Figure + full-bleed axes sized to the viewport in logical pixels.
    """
    dpr = device_pixel_ratio or 1.0
    fig = plt.figure(figsize=(viewport.width / BASE_DPI, viewport.height / BASE_DPI),
                     dpi=BASE_DPI * dpr)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    configure_axes(ax, viewport)
    return fig, ax


def configure_axes(ax, viewport):
    ax.set_xlim(0, viewport.width)
    ax.set_ylim(viewport.height, 0)   # screen y grows downward
    ax.set_axis_off()
    ax.set_autoscale_on(False)


def figure_viewport(fig):
    """Logical pixel size of a figure (independent of its dpi)."""
    width_in, height_in = fig.get_size_inches()
    return Viewport(max(1.0, width_in * BASE_DPI), max(1.0, height_in * BASE_DPI))


# ---------- Painting ----------

def draw_polyline(ax, item):
    ax.plot(item.points[:, 0], item.points[:, 1],
            color=item.color, linewidth=item.width, alpha=item.alpha,
            linestyle=_linestyle(item.dash), solid_capstyle="butt")


def draw_polygon(ax, item):
    if item.fill:
        ax.add_patch(PolygonPatch(item.points, closed=True, facecolor=item.fill,
                                  edgecolor="none", alpha=item.fill_alpha * item.alpha))
    if item.stroke:
        ax.add_patch(PolygonPatch(item.points, closed=True, fill=False,
                                  edgecolor=item.stroke, linewidth=item.width,
                                  alpha=item.alpha, linestyle=_linestyle(item.dash)))


def draw_arrow(ax, item):
    ax.plot([item.origin.x, item.tip.x], [item.origin.y, item.tip.y],
            color=item.color, linewidth=item.width, alpha=item.alpha,
            linestyle=_linestyle(item.dash))
    ax.add_patch(PolygonPatch(item.head, closed=True, facecolor=item.color,
                              edgecolor="none", alpha=item.alpha))
    if item.label:
        ax.text(item.label_pos.x, item.label_pos.y, item.label,
                color=item.color, fontsize=LABEL_FONT_PX,
                ha="left", va="baseline", clip_on=True)


def paint(ax, scene, viewport):
    """
    Clear the axes and paint a display list in order.
    """
    ax.clear()
    configure_axes(ax, viewport)
    for item in scene:
        if isinstance(item, Background):
            ax.set_facecolor(item.color)
            ax.figure.set_facecolor(item.color)
        elif isinstance(item, Polyline):
            draw_polyline(ax, item)
        elif isinstance(item, Polygon):
            draw_polygon(ax, item)
        elif isinstance(item, Arrow):
            draw_arrow(ax, item)
        else:
            raise TypeError(f"Cannot paint {type(item).__name__}")


def render(ax, state, viewport):
    """Build and paint one frame of state."""
    scene = build_scene(state, viewport)
    paint(ax, scene, viewport)
    return scene


def plot_scene(state, viewport, device_pixel_ratio=1.0):
    """
    Standalone figure of one frame.
    """
    fig, ax = create_figure(viewport, device_pixel_ratio)
    render(ax, state, viewport)
    return fig
