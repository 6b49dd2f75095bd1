from collections import namedtuple

import numpy as np

from .config import EPS, PSR_EPS, RATE, SIDELOBE_WINDOW
from .errors import DimensionMismatchError

Detection = namedtuple("Detection", ["dx", "dy", "psr", "found", "response"])
Detection.__doc__ = """\
Outcome of correlating one patch against the learned filter.

dx, dy: peak offset from the window center, in pixels.
psr: peak-to-sidelobe ratio of the response map.
found: True when psr passed the detection threshold.
response: (height, width) spatial response map.
"""


def _check_shapes(reference, **arrays):
    for name, array in arrays.items():
        if np.shape(array) != reference.shape:
            raise DimensionMismatchError(name, reference.shape, np.shape(array))


def update_accumulators(model_A, model_B, F, G, rate=RATE):
    """
    Blends one observed patch spectrum into the filter accumulators.

    A = rate * G * conj(F) + (1 - rate) * A
    B = rate * F * conj(F) + (1 - rate) * B

    Returns:
        tuple: The new (A, B); the inputs are not modified.
    """
    _check_shapes(model_A, model_B=model_B, F=F, G=G)
    F_conj = np.conj(F)
    new_A = rate * (G * F_conj) + (1 - rate) * model_A
    new_B = rate * (F * F_conj) + (1 - rate) * model_B
    return new_A.astype(model_A.dtype, copy=False), new_B.astype(model_B.dtype, copy=False)


def filter_response(model_A, model_B, eps=EPS):
    _check_shapes(model_A, model_B=model_B)
    return model_A / (model_B + eps)


def locate_peak(response):
    """(x, y) of the largest value in a 2D response map."""
    peak_y, peak_x = np.unravel_index(np.argmax(response), response.shape)
    return int(peak_x), int(peak_y)


def calculate_psr(response, sidelobe_window=SIDELOBE_WINDOW, eps=PSR_EPS):
    """
    Peak-to-sidelobe ratio of a 2D response map.

    The sidelobe is everything outside a sidelobe_window x sidelobe_window square
    around the peak; `eps` keeps a perfectly flat sidelobe from dividing by zero.
    Returns 0.0 for an empty map or an empty sidelobe.
    """
    if not isinstance(response, np.ndarray) or response.size == 0:
        return 0.0
    peak_x, peak_y = locate_peak(response)
    peak_value = response[peak_y, peak_x]

    half = sidelobe_window // 2
    h, w = response.shape
    mask = np.ones_like(response, dtype=bool)
    mask[max(0, peak_y - half):min(h, peak_y + half + 1),
         max(0, peak_x - half):min(w, peak_x + half + 1)] = False
    sidelobe = response[mask]
    if sidelobe.size == 0:
        return 0.0
    return float((peak_value - np.mean(sidelobe)) / (np.std(sidelobe) + eps))
