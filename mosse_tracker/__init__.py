"""MOSSE adaptive correlation filter: window, target, patch normalization and tracking."""

from .config import EPS, RATE, THRESHOLD
from .correlation import Detection, calculate_psr, filter_response, locate_peak, update_accumulators
from .errors import DegenerateGeometryError, DimensionMismatchError, PatchBoundsError, TrackerError
from .fft_plan import FFTPlan, PlanPool, default_pool
from .patch import extract_patch, normalize_patch, patch_origin
from .target import gaussian_response, target_spectrum
from .tracker import MOSSETracker
from .window import axis_weights, hann_window

__version__ = "0.1.0"
