# connections.py
"""
Faint lines between nearby particles.

Only every CONNECTION_STRIDE-th particle takes part, which keeps the pair
count at roughly n^2 / 50 instead of n^2 / 2.
"""
import numpy as np

from colors import RGBA
from constants import (
    CONNECTION_STRIDE, CONNECTION_DISTANCE, CONNECTION_ALPHA,
    CONNECTION_COLOR, CONNECTION_WIDTH,
)


def connection_pairs(positions: np.ndarray, stride: int = CONNECTION_STRIDE,
                     max_distance: float = CONNECTION_DISTANCE) -> np.ndarray:
    """
    Finds the sampled particle pairs that are close enough to be connected.

    Particles at indices 0, stride, 2*stride, ... are sampled and each one is
    compared with the sampled particles after it.

    Returns:
        np.ndarray: (K, 2) array of particle indices (i < j), ordered by i then j.
    """
    sampled = np.arange(0, positions.shape[0], stride)
    if sampled.size < 2:
        return np.empty((0, 2), dtype=np.int64)

    points = positions[sampled]
    delta = points[:, np.newaxis, :] - points[np.newaxis, :, :]
    distance = np.sqrt(np.sum(delta ** 2, axis=-1))

    # Upper triangle only: each later sampled particle, never itself
    close = np.triu(distance < max_distance, k=1)
    rows, cols = np.nonzero(close)
    return np.stack([sampled[rows], sampled[cols]], axis=1)


def draw_connections(canvas, positions: np.ndarray) -> None:
    canvas.save()
    canvas.global_alpha = CONNECTION_ALPHA
    canvas.stroke_style = RGBA(*CONNECTION_COLOR)
    canvas.line_width = CONNECTION_WIDTH

    for i, j in connection_pairs(positions):
        canvas.begin_path()
        canvas.move_to(positions[i, 0], positions[i, 1])
        canvas.line_to(positions[j, 0], positions[j, 1])
        canvas.stroke()
    canvas.restore()
