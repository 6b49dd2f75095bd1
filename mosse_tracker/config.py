# Tracking constants shared by the filter update and detection steps.
# Passed explicitly into MOSSETracker and the correlation functions.

EPS = 1e-5          # Regularizer for A / (B + EPS) and the normalizer bias
RATE = 0.2          # Learning rate of the accumulator blend
THRESHOLD = 5.7     # Minimum peak-to-sidelobe ratio for a valid detection

# Side of the square region around the peak excluded from the sidelobe
SIDELOBE_WINDOW = 11
# Added to the sidelobe std when computing the peak-to-sidelobe ratio
PSR_EPS = 1e-5

# Benchmark defaults
BENCH_WIDTH = 640
BENCH_HEIGHT = 640
BENCH_COUNT = 2
