import math

import cv2
import numpy as np

from .config import EPS
from .errors import DimensionMismatchError, PatchBoundsError
from .window import check_geometry


# --- Extraction ---

def patch_origin(center, width, height):
    """Top-left corner of a width x height patch around `center`, clamped to >= 0."""
    cx, cy = center
    x = max(0, math.floor(cx - width / 2))
    y = max(0, math.floor(cy - height / 2))
    return x, y


def _to_gray(frame):
    if frame.ndim == 2:
        return frame
    if frame.ndim == 3 and frame.shape[2] == 3:
        return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
    if frame.ndim == 3 and frame.shape[2] == 1:
        return frame[:, :, 0]
    raise ValueError(f"expected a grayscale or BGR raster, got shape {frame.shape}")


def extract_patch(frame, center, width, height):
    """
    Crops the pixel intensities of a width x height patch centered on `center`.

    The origin is clamped at the top and left edges. A patch that would run past the
    right or bottom edge is rejected rather than shrunk or padded.

    Args:
        frame (np.ndarray): Grayscale (rows, cols) or BGR (rows, cols, 3) raster.
        center (tuple): Floating-point (x, y) patch center.
        width (int): Patch width in pixels.
        height (int): Patch height in pixels.

    Returns:
        np.ndarray: Flat, row-major float32 array of width * height intensities.

    Raises:
        PatchBoundsError: If the patch extends beyond the raster.
    """
    width, height = check_geometry(width, height)
    gray = _to_gray(np.asarray(frame))
    rows, cols = gray.shape
    x, y = patch_origin(center, width, height)

    if x + width > cols or y + height > rows:
        raise PatchBoundsError(
            f"{width}x{height} patch at origin ({x}, {y}) exceeds {cols}x{rows} raster"
        )

    return gray[y:y + height, x:x + width].astype(np.float32).ravel()


# --- Normalization ---

def normalize_patch(patch, window, bias=EPS):
    """
    Log-compresses, standardizes and tapers a patch in place.

    Steps, in order: v = ln(v + 1); mean; population variance; std = sqrt(var) + bias;
    v = (v - mean) / std * window. A uniform patch leaves std == bias, so the output
    stays finite.

    Args:
        patch (np.ndarray): Flat floating-point patch, modified in place.
        window (np.ndarray): Tapering weights of the same length.
        bias (float): Added to the standard deviation to avoid dividing by zero.

    Returns:
        np.ndarray: `patch`, normalized.
    """
    if not isinstance(patch, np.ndarray) or not np.issubdtype(patch.dtype, np.floating):
        raise TypeError("patch must be a floating-point numpy array")
    if patch.ndim != 1 or patch.shape != window.shape:
        raise DimensionMismatchError("patch", window.shape, patch.shape)

    np.log(patch + 1.0, out=patch)
    mean = patch.mean()
    variance = np.mean((patch - mean) ** 2)
    std = np.sqrt(variance) + bias

    patch -= mean
    patch /= std
    patch *= window
    return patch
