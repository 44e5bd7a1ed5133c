"""Utility functions for composite operations."""

from typing import Tuple

import numpy as np
from numpy.typing import NDArray


def intersect(
    a: Tuple[int, int, int, int], b: Tuple[int, int, int, int]
) -> Tuple[int, int, int, int]:
    """Calculate intersection of two bounding boxes."""
    inter = (max(a[0], b[0]), max(a[1], b[1]), min(a[2], b[2]), min(a[3], b[3]))
    if inter[0] >= inter[2] or inter[1] >= inter[3]:
        return (0, 0, 0, 0)
    return inter


def clip(x: NDArray[np.floating]) -> NDArray[np.floating]:
    """Clip between [0, 1]."""
    return np.clip(x, 0.0, 1.0)


def flatten(
    color: NDArray[np.floating],
    alpha: NDArray[np.floating],
    background: NDArray[np.floating],
) -> NDArray[np.floating]:
    """Composite ``color`` with opacity ``alpha`` over an opaque background."""
    return clip(alpha * color + (1.0 - alpha) * background)


def to_uint8(x: NDArray[np.floating]) -> NDArray[np.uint8]:
    """Quantize [0, 1] values to 8 bits."""
    return np.rint(clip(x) * 255.0).astype(np.uint8)
