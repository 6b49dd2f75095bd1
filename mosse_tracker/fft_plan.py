import logging
import threading

import numpy as np

from .errors import DimensionMismatchError
from .window import check_geometry

logger = logging.getLogger(__name__)


class FFTPlan:
    """
    Forward/inverse 2D Fourier transform bound to one window size.

    Buffers are flat, row-major complex arrays of exactly width * height elements and
    are transformed in place. Both directions are unnormalized: inverse(forward(x))
    gives x * length, and callers apply whatever scaling they need.
    A plan holds no mutable state and can be shared freely between trackers and threads.
    """

    __slots__ = ("_shape",)

    def __init__(self, width, height):
        width, height = check_geometry(width, height)
        object.__setattr__(self, "_shape", (height, width))

    def __setattr__(self, name, value):
        raise AttributeError("FFTPlan is immutable")

    def __repr__(self):
        return f"FFTPlan(width={self.width}, height={self.height})"

    @property
    def width(self):
        return self._shape[1]

    @property
    def height(self):
        return self._shape[0]

    @property
    def length(self):
        return self._shape[0] * self._shape[1]

    # --- Transforms ---

    def forward(self, buffer):
        """Forward transform of `buffer` in place. Returns the same buffer."""
        grid = self._as_grid(buffer)
        grid[...] = np.fft.fft2(grid)
        return buffer

    def inverse(self, buffer):
        """Inverse transform of `buffer` in place. Returns the same buffer."""
        grid = self._as_grid(buffer)
        # norm="forward" leaves the inverse direction unscaled
        grid[...] = np.fft.ifft2(grid, norm="forward")
        return buffer

    def _as_grid(self, buffer):
        if not isinstance(buffer, np.ndarray):
            raise TypeError(f"expected a numpy array, got {type(buffer).__name__}")
        if not np.iscomplexobj(buffer):
            raise TypeError(f"transform buffer must be complex, got dtype {buffer.dtype}")
        if buffer.ndim != 1 or buffer.size != self.length:
            raise DimensionMismatchError("transform buffer", (self.length,), buffer.shape)
        if not buffer.flags.writeable:
            raise ValueError("transform buffer is read-only")
        if not buffer.flags.c_contiguous:
            raise ValueError("transform buffer must be contiguous")
        # Contiguous, so this is a view and writes land in `buffer`
        return buffer.reshape(self._shape)


class PlanPool:
    """
    Hands out one shared FFTPlan per window size.

    Trackers of identical size borrow the same plan object instead of building their own.
    Plans are kept until clear() is called; the module-level default_pool therefore
    holds one plan for every window size used in the process.
    """

    def __init__(self):
        self._plans = {}
        self._lock = threading.Lock()

    def get(self, width, height):
        key = check_geometry(width, height)
        with self._lock:
            plan = self._plans.get(key)
            if plan is None:
                plan = FFTPlan(*key)
                self._plans[key] = plan
                logger.debug("Created %r", plan)
            return plan

    def clear(self):
        """Drops every cached plan. Trackers keep the plans they already hold."""
        with self._lock:
            self._plans.clear()

    def __len__(self):
        with self._lock:
            return len(self._plans)

    def __contains__(self, size):
        with self._lock:
            return tuple(size) in self._plans


default_pool = PlanPool()
