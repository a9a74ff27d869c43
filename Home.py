# Home page for Basis Playground

import base64
from pathlib import Path

import matplotlib.pyplot as plt
import streamlit as st

from basis_playground.camera import Viewport
from basis_playground.constants import GIF_FILENAME
from basis_playground.mpl_canvas import plot_scene
from basis_playground.presets import PRESETS, get_preset
from basis_playground.state import AppState


st.set_page_config(
    page_title="Basis Playground",
    layout="wide"
)

st.title("Basis Playground")

st.write(
    """
    Explore how 2×2 matrices reshape the plane.

    - **Pick or type a matrix**: presets cover rotations, scalings, shears,
      reflections and projections, or enter any four numbers yourself.
    - **Watch the plane move**: the grid, the unit square and the basis vectors
      (1, 0) and (0, 1) follow the transformation; their images are the columns
      of the matrix.
    - **Probe it**: click the canvas to place a vector and read off T(v); pin
      up to six vectors to compare them.
    - **Animate**: sweep t back and forth between the identity (t = 0) and the
      full transformation (t = 1), or export the sweep as a GIF.

    For drag-to-pan, wheel zoom and a draggable probe, run the desktop window:
    `basis-playground` (or `python -m basis_playground`).
    """
)

# ----------------------------
# Caching helper
# ----------------------------
@st.cache_data(show_spinner=False)
def load_gif_b64(path_str: str, file_mtime: float) -> str:
    """
    Read a local GIF and return base64 string.
    Cached across Streamlit reruns. Cache invalidates automatically when the file changes
    because we include file_mtime in the cache key.
    """
    with open(path_str, "rb") as f:
        return base64.b64encode(f.read()).decode("utf-8")


def animation_panel(gif_path: Path, title: str) -> None:
    """
    Show the last exported sweep animation, if there is one.
    """
    if gif_path.exists():
        st.markdown(title)
        b64 = load_gif_b64(str(gif_path), gif_path.stat().st_mtime)
        st.markdown(
            f'<img src="data:image/gif;base64,{b64}" width="100%">',
            unsafe_allow_html=True,
        )
    else:
        st.info(f"{gif_path.name} not found yet. Generate it from the playground page.")
        preset = get_preset("shear-x-1")
        fig = plot_scene(AppState(matrix=preset.matrix, preset_id=preset.id), Viewport(560, 420))
        st.pyplot(fig)
        plt.close(fig)
        st.caption(preset.description)


col1, col2 = st.columns(2)

with col1:
    st.subheader("Playground")
    st.write(
        """
        Edit the matrix, drag the t slider, move the probe and pin vectors.
        The determinant panel explains what happens to area and orientation.
        """
    )
    if st.button("Go to Basis Playground"):
        st.switch_page("pages/1_Basis_Playground.py")

    st.markdown("##### Presets")
    st.table({
        "Preset": [preset.label for preset in PRESETS],
        "What it does": [preset.description for preset in PRESETS],
    })

with col2:
    animation_panel(
        Path(__file__).resolve().parent / GIF_FILENAME,
        "##### Last exported sweep",
    )
