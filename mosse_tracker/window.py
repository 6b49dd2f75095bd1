import logging

import numpy as np

from .errors import DegenerateGeometryError

logger = logging.getLogger(__name__)


def check_geometry(width, height):
    if int(width) != width or int(height) != height:
        raise DegenerateGeometryError(f"window size must be integral, got {width}x{height}")
    if width < 1 or height < 1:
        raise DegenerateGeometryError(f"window size must be positive, got {width}x{height}")
    return int(width), int(height)


def axis_weights(n):
    """
    Raised-cosine weights 0.5 * (1 - cos(2*pi*k / (n - 1))) for k in [0, n).

    A single-sample axis has no extent to taper over and gets weight 1.0.
    """
    if n < 1:
        raise DegenerateGeometryError(f"axis length must be positive, got {n}")
    if n == 1:
        return np.ones(1, dtype=np.float32)
    return np.hanning(n).astype(np.float32)


def hann_window(width, height):
    """
    Builds the separable tapering window applied to every normalized patch.

    Args:
        width (int): Window width in pixels.
        height (int): Window height in pixels.

    Returns:
        np.ndarray: Flat, row-major float32 array of width * height weights in [0, 1],
                    entry (x, y) being rowWeight(y) * colWeight(x).
    """
    width, height = check_geometry(width, height)
    window = np.outer(axis_weights(height), axis_weights(width)).ravel()
    window.flags.writeable = False
    logger.debug("Built %dx%d Hann window", width, height)
    return window
