import logging

import numpy as np

from .config import EPS, RATE, THRESHOLD
from .correlation import Detection, calculate_psr, filter_response, locate_peak, update_accumulators
from .errors import DimensionMismatchError, TrackerError
from .fft_plan import default_pool
from .patch import extract_patch, normalize_patch, patch_origin
from .target import target_spectrum
from .window import check_geometry, hann_window

logger = logging.getLogger(__name__)


class MOSSETracker:
    """
    MOSSE correlation filter state for one fixed window size.

    Construction builds everything that depends only on the window size: the Hann
    tapering window, the target spectrum G of a centered Gaussian, and zeroed filter
    accumulators A and B. Transform plans are borrowed from a PlanPool so trackers of
    the same size share them.
    """

    def __init__(self, width, height, pool=None, learning_rate=RATE, eps=EPS, psr_threshold=THRESHOLD):
        width, height = check_geometry(width, height)
        pool = default_pool if pool is None else pool

        # --- Parameters ---
        self.LEARNING_RATE = learning_rate
        self.EPS = eps
        self.PSR_THRESHOLD = psr_threshold

        # --- Fixed per window size ---
        self.window_size = (width, height)
        self.length = width * height
        # One plan object serves both directions
        self.fwd_fft = pool.get(width, height)
        self.inv_fft = self.fwd_fft
        self.hann_window = hann_window(width, height)
        self.G = target_spectrum(width, height, self.fwd_fft)

        # --- Filter accumulators ---
        self.model_A = np.zeros(self.length, dtype=np.complex64)
        self.model_B = np.zeros(self.length, dtype=np.complex64)

        # --- Tracking state ---
        self.center = None
        self.is_tracking = False
        self.psr_score = 0.0

        logger.debug("MOSSE tracker ready for %dx%d window", width, height)

    def __repr__(self):
        return f"MOSSETracker(width={self.window_size[0]}, height={self.window_size[1]})"

    # --- Per-frame building blocks ---

    def normalize(self, patch, bias=None):
        """Normalizes an extracted patch in place with this tracker's window."""
        return normalize_patch(patch, self.hann_window, self.EPS if bias is None else bias)

    def extract(self, frame, center):
        return extract_patch(frame, center, *self.window_size)

    def preprocess(self, frame, center):
        """
        Extracts and normalizes the patch around `center` and returns its spectrum.

        Args:
            frame (np.ndarray): Grayscale or BGR raster.
            center (tuple): (x, y) patch center.

        Returns:
            np.ndarray: Flat complex64 spectrum F of the normalized patch.
        """
        patch = self.normalize(self.extract(frame, center))
        spectrum = patch.astype(np.complex64)
        return self.fwd_fft.forward(spectrum)

    def train(self, F):
        """Blends the patch spectrum F into the accumulators at LEARNING_RATE."""
        if F.shape != self.model_A.shape:
            raise DimensionMismatchError("patch spectrum", self.model_A.shape, F.shape)
        self.model_A, self.model_B = update_accumulators(
            self.model_A, self.model_B, F, self.G, self.LEARNING_RATE
        )

    @property
    def filter(self):
        """Learned filter H = A / (B + EPS)."""
        return filter_response(self.model_A, self.model_B, self.EPS)

    def patch_center(self, center):
        """
        Center of the patch actually read for `center`.

        Near the top and left edges the patch origin is clamped to 0, so the window is
        centered further in than requested. The tracked center always follows the
        patch, so detection offsets apply to the point the filter learned.
        """
        width, height = self.window_size
        x, y = patch_origin(center, width, height)
        return (x + width / 2, y + height / 2)

    @property
    def bbox(self):
        if self.center is None:
            return None
        width, height = self.window_size
        return (self.center[0] - width / 2, self.center[1] - height / 2, width, height)

    def detect(self, frame, center):
        """
        Correlates the patch around `center` with the learned filter.

        Returns:
            Detection: Peak offset from the window center, PSR and validity.
        """
        width, height = self.window_size
        correlation = self.filter * self.preprocess(frame, center)
        self.inv_fft.inverse(correlation)
        response = (correlation.real / self.length).reshape(height, width)

        peak_x, peak_y = locate_peak(response)
        psr = calculate_psr(response)
        return Detection(
            dx=peak_x - width // 2,
            dy=peak_y - height // 2,
            psr=psr,
            found=psr > self.PSR_THRESHOLD,
            response=response,
        )

    # --- Public API Methods ---

    def init(self, frame, center):
        """
        Starts tracking the window centered on `center` in the first frame.

        Args:
            frame (np.ndarray): The first frame.
            center (tuple): (x, y) center of the tracked window. Moved inwards when
                            the window would cross the top or left edge.
        """
        center = self.patch_center(center)
        F = self.preprocess(frame, center)
        self.center = center
        self.train(F)
        self.is_tracking = True
        self.psr_score = 0.0
        logger.debug("Tracking initialized at (%.1f, %.1f)", *self.center)

    def update(self, frame):
        """
        Locates the target in a new frame and adapts the filter to it.

        The filter is only trained when the detection passes PSR_THRESHOLD, so a weak
        response leaves both the center and the accumulators untouched.

        Args:
            frame (np.ndarray): The new frame.

        Returns:
            tuple: (success, center) where success is False when the detection was
                   rejected.
        """
        if not self.is_tracking:
            raise TrackerError("update() called before init()")

        detection = self.detect(frame, self.center)
        self.psr_score = detection.psr
        if not detection.found:
            logger.info("Detection rejected: PSR %.2f <= %.2f", detection.psr, self.PSR_THRESHOLD)
            return False, self.center

        new_center = self.patch_center((self.center[0] + detection.dx, self.center[1] + detection.dy))
        # Extract before moving so a patch past the far edge leaves the state untouched
        F = self.preprocess(frame, new_center)
        self.center = new_center
        self.train(F)
        logger.debug("Moved by (%d, %d), PSR %.2f", detection.dx, detection.dy, detection.psr)
        return True, self.center
