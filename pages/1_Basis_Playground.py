# In the web UI:
# Pick a preset or type the matrix entries in the sidebar.
# Click the canvas to move the probe vector, press Play to sweep t.
# Scroll to the bottom and click Generate GIF animation.

from pathlib import Path

import streamlit as st
from streamlit_plotly_events import plotly_events

from basis_playground.animation import AnimationDriver, FrameLoop, SteppedFrameScheduler
from basis_playground.camera import Viewport, pan
from basis_playground.constants import (DEFAULT_VIEWPORT_HEIGHT, DEFAULT_VIEWPORT_WIDTH,
                                        GIF_FILENAME, MAX_ZOOM, MIN_ZOOM, WHEEL_NOTCH_DELTA)
from basis_playground.controller import PointerController
from basis_playground.export import export_animation_gif
from basis_playground.linalg import determinant_insight, format_number, parse_number
from basis_playground.plotly_canvas import click_point, render_figure
from basis_playground.presets import PRESETS, get_preset
from basis_playground.state import (AppState, GridMode, PinProbe, ResetCamera,
                                    SelectPreset, SetCamera, SetGridMode,
                                    SetMatrixEntry, SetProbeComponent, SetT,
                                    StateStore, TogglePlayback)

VIEWPORT = Viewport(DEFAULT_VIEWPORT_WIDTH, DEFAULT_VIEWPORT_HEIGHT)
# app root (where Home.py lives), whatever directory streamlit was started from
GIF_PATH = Path(__file__).resolve().parent.parent / GIF_FILENAME

# Frames rendered per script run while playing; the page reruns afterwards
PLAYBACK_FRAMES_PER_RUN = 90
PLAYBACK_INTERVAL_MS = 33

PAN_STEP_PX = 60


# ---------- Session state ----------

def get_session():
    """
    The store, controller and driver live for the whole browser session.
    """
    if "store" not in st.session_state:
        store = StateStore(AppState())
        st.session_state.store = store
        st.session_state.controller = PointerController(store)
        st.session_state.driver = AnimationDriver(store)
        st.session_state.canvas_rev = 0
    return (st.session_state.store,
            st.session_state.controller,
            st.session_state.driver)


def sync_text_widget(key, value):
    """
    Show the store's value in a text widget unless the widget already holds
    text that means the same number (so half-typed input is not clobbered).
    """
    current = st.session_state.get(key)
    if current is None or parse_number(current) != value:
        st.session_state[key] = format_number(value, 3)


# ---------- Callbacks (sidebar -> commands) ----------

def on_preset_change():
    st.session_state.store.dispatch(SelectPreset(st.session_state.preset_select))


def on_matrix_entry(entry):
    text = st.session_state[f"matrix_{entry}"]
    st.session_state.store.dispatch(SetMatrixEntry(entry, text))


def on_probe_component(component):
    text = st.session_state[f"probe_{component}"]
    st.session_state.store.dispatch(SetProbeComponent(component, text))


def on_grid_mode():
    st.session_state.store.dispatch(SetGridMode(GridMode(st.session_state.grid_mode)))


def on_t_slider():
    st.session_state.store.dispatch(SetT(st.session_state.t_slider))


def on_zoom(direction):
    # same path as a wheel notch at the canvas centre
    centre = (VIEWPORT.width / 2, VIEWPORT.height / 2)
    st.session_state.controller.wheel(centre, -direction * WHEEL_NOTCH_DELTA, VIEWPORT)


def on_pan(dx, dy):
    store = st.session_state.store
    store.dispatch(SetCamera(pan(store.state.camera, dx, dy)))


# ---------- Sidebar ----------

def sidebar_controls(store):
    state = store.state

    st.sidebar.header("Preset transformations")
    st.session_state.preset_select = get_preset(state.preset_id).id
    st.sidebar.selectbox(
        "Preset",
        [preset.id for preset in PRESETS],
        format_func=lambda preset_id: get_preset(preset_id).label,
        key="preset_select",
        on_change=on_preset_change,
    )
    st.sidebar.info(get_preset(state.preset_id).description)

    st.sidebar.markdown("---")
    st.sidebar.header("Matrix editor")
    st.sidebar.caption("First column is where (1,0) goes; second column is where (0,1) goes.")
    for entry, value in zip("abcd", state.matrix):
        sync_text_widget(f"matrix_{entry}", value)
    c1, c2 = st.sidebar.columns(2)
    with c1:
        st.text_input("a", key="matrix_a", on_change=on_matrix_entry, args=("a",))
        st.text_input("c", key="matrix_c", on_change=on_matrix_entry, args=("c",))
    with c2:
        st.text_input("b", key="matrix_b", on_change=on_matrix_entry, args=("b",))
        st.text_input("d", key="matrix_d", on_change=on_matrix_entry, args=("d",))

    st.sidebar.markdown("---")
    st.sidebar.header("Grid view")
    st.session_state.grid_mode = state.grid_mode.value
    st.sidebar.radio(
        "Show grid",
        [mode.value for mode in GridMode],
        format_func=str.capitalize,
        key="grid_mode",
        horizontal=True,
        on_change=on_grid_mode,
    )

    st.sidebar.markdown("---")
    st.sidebar.header("Animation")
    st.sidebar.button("Pause" if state.is_playing else "Play",
                      on_click=store.dispatch, args=(TogglePlayback(),),
                      type="primary")
    st.session_state.t_slider = float(state.t)
    st.sidebar.slider(
        "t (0 = identity, 1 = full transform)",
        min_value=0.0,
        max_value=1.0,
        step=0.01,
        key="t_slider",
        on_change=on_t_slider,
    )

    st.sidebar.markdown("---")
    st.sidebar.header("Vector probe")
    for component, value in zip("xy", state.probe):
        sync_text_widget(f"probe_{component}", value)
    p1, p2 = st.sidebar.columns(2)
    with p1:
        st.text_input("x", key="probe_x", on_change=on_probe_component, args=("x",))
    with p2:
        st.text_input("y", key="probe_y", on_change=on_probe_component, args=("y",))
    image = state.transformed_probe
    st.sidebar.write(f"T(v) = ({format_number(image.x)}, {format_number(image.y)})")
    st.sidebar.button("Pin this vector", on_click=store.dispatch, args=(PinProbe(),))
    if state.pinned:
        st.sidebar.markdown("**Pinned comparisons**")
        for pin in state.pinned:
            st.sidebar.text(f"({format_number(pin.x)}, {format_number(pin.y)}) → "
                            f"({format_number(pin.tx)}, {format_number(pin.ty)})")

    st.sidebar.markdown("---")
    st.sidebar.header("Camera")
    z1, z2, z3 = st.sidebar.columns(3)
    z1.button("Zoom in", on_click=on_zoom, args=(1,))
    z2.button("Zoom out", on_click=on_zoom, args=(-1,))
    z3.button("Reset view", on_click=store.dispatch, args=(ResetCamera(),))
    a1, a2, a3, a4 = st.sidebar.columns(4)
    a1.button("←", on_click=on_pan, args=(PAN_STEP_PX, 0))
    a2.button("→", on_click=on_pan, args=(-PAN_STEP_PX, 0))
    a3.button("↑", on_click=on_pan, args=(0, PAN_STEP_PX))
    a4.button("↓", on_click=on_pan, args=(0, -PAN_STEP_PX))
    st.sidebar.caption(f"Zoom {state.camera.zoom:.0f} px/unit "
                       f"(range {MIN_ZOOM:.0f}–{MAX_ZOOM:.0f})")


# ---------- Read-outs ----------

def determinant_panel(state):
    insight = determinant_insight(state.matrix)
    a, b, c, d = state.matrix

    st.subheader("Transformation matrix A")
    st.latex(
        r"""
        A =
        \begin{bmatrix}
        %.3f & %.3f \\
        %.3f & %.3f
        \end{bmatrix}
        """ % (a, b, c, d)
    )

    st.subheader("Determinant insight")
    st.latex(r"\det(A) = %s,\quad \text{area scale} = %s"
             % (format_number(insight.det), format_number(insight.area_scale)))
    if insight.orientation_flipped:
        st.warning("Orientation flipped (reflection).")
    if not insight.invertible:
        st.error("Collapsed (not invertible): det(A) = 0 means everything lies "
                 "in a line. You can't undo this transform.")
    else:
        st.caption("det(A) is how area scales. Negative det means it flips orientation.")

    st.markdown(
        r"""
The **columns** of $A$ are the images of the basis vectors:
$T(1,0) = (a, c)$ and $T(0,1) = (b, d)$, so every vector
$v = x\,(1,0) + y\,(0,1)$ lands on $T(v) = x\,T(1,0) + y\,T(0,1)$.

The slider blends every point between where it starts ($t = 0$) and where
$A$ sends it ($t = 1$):
$$
p(t) = (1 - t)\,p + t\,A p .
$$
"""
    )


# ---------- Canvas ----------

def canvas(store, controller):
    """
    Clickable plotly canvas. A click is a pointer down + up at the same spot,
    which the controller turns into "move the probe here".
    """
    fig = render_figure(store.state, VIEWPORT, clickable=True)
    events = plotly_events(
        fig,
        click_event=True,
        select_event=False,
        hover_event=False,
        override_height=int(VIEWPORT.height),
        override_width=int(VIEWPORT.width),
        key=f"canvas_{st.session_state.canvas_rev}",
    )
    for event in events or []:
        point = click_point(event)
        if point is None:
            continue
        controller.pointer_down(point, VIEWPORT)
        controller.pointer_up(point, VIEWPORT)
        # fresh component so the same click is not replayed on the next run
        st.session_state.canvas_rev += 1
        st.rerun()


def play(store, driver, placeholder):
    """
    Sweep t for a burst of frames, drawing each one, then rerun so the
    sidebar catches up. A fresh FrameLoop per run means time spent between
    runs is never added to t.
    """
    scheduler = SteppedFrameScheduler(interval_ms=PLAYBACK_INTERVAL_MS)
    loop = FrameLoop(scheduler, driver.tick)
    frame = {"n": 0}

    def draw():
        frame["n"] += 1
        placeholder.plotly_chart(render_figure(store.state, VIEWPORT, clickable=False),
                                 key=f"playback_{frame['n']}")

    loop.set_active(True)
    scheduler.run(PLAYBACK_FRAMES_PER_RUN, after_frame=draw)
    loop.close()
    st.rerun()


# ---------- Streamlit app ----------

def main():
    st.set_page_config(page_title="Basis Playground", layout="wide")

    st.title("Basis Playground: 2×2 Linear Transformations")
    st.write(
        """
        Edit a **2×2 matrix** and watch it reshape the plane: the grid, the unit square,
        the basis vectors and a draggable **probe vector** all move together.
        Click anywhere on the canvas to move the probe, pin it to compare vectors,
        and press **Play** to sweep between the identity ($t = 0$) and the full
        transformation ($t = 1$).
        """
    )

    store, controller, driver = get_session()
    sidebar_controls(store)

    col1, col2 = st.columns([3, 2])
    with col2:
        determinant_panel(store.state)

    with col1:
        st.subheader("Canvas")
        if store.state.is_playing:
            play(store, driver, st.empty())
        else:
            canvas(store, controller)

    # ---------- GIF generation section ----------
    st.markdown("---")
    st.markdown("## GIF animation of the t sweep")

    if st.button("Generate GIF animation (basis_playground.gif)"):
        with st.spinner("Generating GIF animation (this may take a bit)..."):
            try:
                export_animation_gif(store.state, GIF_PATH, viewport=VIEWPORT,
                                     n_frames=120, fps=30)
                st.success(f"Animation saved as {GIF_PATH.name}")
            except Exception as e:
                st.error(f"Failed to create animation. Error: {e}")

    if GIF_PATH.exists():
        c1, c2, c3 = st.columns([1, 2, 1])
        with c2:
            st.image(str(GIF_PATH))


if __name__ == "__main__":
    main()
