"""
Plotly drawing surface for the scene display list.

Axes are in screen pixels with a reversed y axis, so a point reported by a
plotly click event is already a screen position the PointerController can
use. Plotly only reports clicks on trace points, so an invisible lattice of
markers covers the viewport to make every spot clickable.
"""

import numpy as np
import plotly.graph_objects as go

from .constants import LABEL_FONT_PX
from .scene import Arrow, Background, Polygon, Polyline, build_scene

CLICK_LATTICE_PX = 10


def hex_to_rgb(hex_str):
    """Converts #RRGGBB to (R, G, B) tuple."""
    hex_str = hex_str.lstrip('#')
    return tuple(int(hex_str[i:i+2], 16) for i in (0, 2, 4))


def rgba(hex_str, alpha=1.0):
    r, g, b = hex_to_rgb(hex_str)
    return f"rgba({r}, {g}, {b}, {alpha:.3f})"


def _dash(dash):
    if not dash:
        return "solid"
    return ",".join(f"{int(d)}px" for d in dash)


def _closed(points):
    return np.vstack([points, points[:1]])


# ---------- Trace builders ----------

def polyline_traces(lines):
    """
    One trace for a run of polylines sharing a style (the grid is 42 lines),
    segments separated by None.
    """
    first = lines[0]
    xs, ys = [], []
    for line in lines:
        xs.extend(line.points[:, 0].tolist() + [None])
        ys.extend(line.points[:, 1].tolist() + [None])
    return [go.Scatter(x=xs, y=ys, mode="lines", hoverinfo="skip", showlegend=False,
                       name=first.layer,
                       line=dict(color=rgba(first.color, first.alpha), width=first.width,
                                 dash=_dash(first.dash)))]


def polygon_traces(item):
    pts = _closed(item.points)
    traces = []
    if item.fill:
        traces.append(go.Scatter(x=pts[:, 0], y=pts[:, 1], mode="lines", fill="toself",
                                 fillcolor=rgba(item.fill, item.fill_alpha * item.alpha),
                                 line=dict(width=0), hoverinfo="skip",
                                 showlegend=False, name=item.layer))
    if item.stroke:
        traces.append(go.Scatter(x=pts[:, 0], y=pts[:, 1], mode="lines",
                                 line=dict(color=rgba(item.stroke, item.alpha),
                                           width=item.width, dash=_dash(item.dash)),
                                 hoverinfo="skip", showlegend=False, name=item.layer))
    return traces


def arrow_traces(item):
    color = rgba(item.color, item.alpha)
    head = _closed(item.head)
    return [
        go.Scatter(x=[item.origin.x, item.tip.x], y=[item.origin.y, item.tip.y],
                   mode="lines", line=dict(color=color, width=item.width,
                                           dash=_dash(item.dash)),
                   hoverinfo="skip", showlegend=False, name=item.layer),
        go.Scatter(x=head[:, 0], y=head[:, 1], mode="lines", fill="toself",
                   fillcolor=color, line=dict(width=0), hoverinfo="skip",
                   showlegend=False, name=item.layer),
    ]


def click_lattice(viewport, spacing=CLICK_LATTICE_PX):
    xs = np.arange(spacing / 2, viewport.width, spacing)
    ys = np.arange(spacing / 2, viewport.height, spacing)
    gx, gy = np.meshgrid(xs, ys)
    return go.Scatter(x=gx.ravel(), y=gy.ravel(), mode="markers",
                      marker=dict(size=spacing, color="rgba(0, 0, 0, 0)"),
                      hoverinfo="none", showlegend=False, name="click-lattice")


# ---------- Figure ----------

def scene_figure(scene, viewport, clickable=True):
    """
    Plotly figure for a display list. With clickable=True the click lattice is
    added as the last trace.
    """
    fig = go.Figure()
    background = "white"
    annotations = []
    pending = []

    def flush():
        if pending:
            fig.add_traces(polyline_traces(pending))
            pending.clear()

    for item in scene:
        if isinstance(item, Polyline):
            if pending and (pending[0].layer, pending[0].color, pending[0].alpha) != \
                    (item.layer, item.color, item.alpha):
                flush()
            pending.append(item)
            continue
        flush()
        if isinstance(item, Background):
            background = item.color
        elif isinstance(item, Polygon):
            fig.add_traces(polygon_traces(item))
        elif isinstance(item, Arrow):
            fig.add_traces(arrow_traces(item))
            if item.label:
                annotations.append(dict(x=item.label_pos.x, y=item.label_pos.y,
                                        text=item.label, showarrow=False,
                                        xanchor="left", yanchor="bottom",
                                        font=dict(color=item.color, size=LABEL_FONT_PX)))
        else:
            raise TypeError(f"Cannot paint {type(item).__name__}")
    flush()

    if clickable:
        fig.add_trace(click_lattice(viewport))

    fig.update_layout(
        width=int(viewport.width),
        height=int(viewport.height),
        margin=dict(l=0, r=0, t=0, b=0),
        plot_bgcolor=background,
        paper_bgcolor=background,
        annotations=annotations,
        dragmode=False,
        xaxis=dict(range=[0, viewport.width], visible=False, fixedrange=True),
        yaxis=dict(range=[viewport.height, 0], visible=False, fixedrange=True),
    )
    return fig


def render_figure(state, viewport, clickable=True):
    return scene_figure(build_scene(state, viewport), viewport, clickable=clickable)


def click_point(event):
    """
    Screen position from a streamlit_plotly_events click record, or None.
    """
    if not isinstance(event, dict):
        return None
    try:
        return float(event["x"]), float(event["y"])
    except (KeyError, TypeError, ValueError):
        return None
