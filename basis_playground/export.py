"""
GIF export of the ping-pong animation.
"""

import logging
from dataclasses import replace

import matplotlib.pyplot as plt
from matplotlib.animation import PillowWriter

from .camera import Viewport
from .constants import DEFAULT_VIEWPORT_HEIGHT, DEFAULT_VIEWPORT_WIDTH
from .mpl_canvas import create_figure, render

logger = logging.getLogger(__name__)


def ping_pong_values(n_frames):
    """
    t for each frame of one full cycle 0 -> 1 -> 0. The rising and falling
    halves use the same evenly spaced steps, so the last frame is t = 0 again.
    """
    if n_frames < 2:
        return [0.0] * max(n_frames, 0)
    values = []
    for i in range(n_frames):
        phase = 2.0 * i / (n_frames - 1)
        values.append(phase if phase <= 1.0 else 2.0 - phase)
    return values


def export_animation_gif(state, filename,
                         viewport=Viewport(DEFAULT_VIEWPORT_WIDTH, DEFAULT_VIEWPORT_HEIGHT),
                         n_frames=120, fps=30, device_pixel_ratio=1.0):
    """
    Render one ping-pong cycle of the given state to an animated GIF.
    Saves to 'filename', using PillowWriter (no ffmpeg needed).
    """
    fig, ax = create_figure(viewport, device_pixel_ratio)
    writer = PillowWriter(fps=fps)
    logger.info("Writing %d frames to %s", n_frames, filename)

    try:
        with writer.saving(fig, filename, dpi=fig.dpi):
            for t in ping_pong_values(n_frames):
                render(ax, replace(state, t=t, is_playing=False), viewport)
                writer.grab_frame()
    finally:
        plt.close(fig)
    return filename
