import logging

import numpy as np

from .errors import DimensionMismatchError
from .window import check_geometry

logger = logging.getLogger(__name__)


def gaussian_response(width, height):
    """
    Ideal spatial correlation output: a unit-sigma Gaussian bump centered on the window.

    The center is (width / 2, height / 2) in floating point, and the bump is divided by
    its own maximum so the largest value is exactly 1.0.

    Returns:
        np.ndarray: Flat, row-major float32 array of width * height values.
    """
    width, height = check_geometry(width, height)
    center_x, center_y = width / 2.0, height / 2.0
    yy, xx = np.mgrid[0:height, 0:width].astype(np.float32)
    gaussian = np.exp(-((xx - center_x) ** 2 + (yy - center_y) ** 2) / 2.0).astype(np.float32)
    gaussian /= gaussian.max()
    return gaussian.ravel()


def target_spectrum(width, height, plan):
    """
    Frequency-domain target the filter is trained to reproduce.

    Args:
        width (int): Window width in pixels.
        height (int): Window height in pixels.
        plan (FFTPlan): Transform plan of the same size, used for the forward transform.

    Returns:
        np.ndarray: Read-only flat complex64 array of width * height values.
    """
    width, height = check_geometry(width, height)
    if (plan.width, plan.height) != (width, height):
        raise DimensionMismatchError("transform plan", (width, height), (plan.width, plan.height))

    spectrum = gaussian_response(width, height).astype(np.complex64)
    plan.forward(spectrum)
    spectrum.flags.writeable = False
    logger.debug("Built %dx%d target spectrum", width, height)
    return spectrum
