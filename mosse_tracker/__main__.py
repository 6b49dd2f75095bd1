import argparse
import logging
import time

from .config import BENCH_COUNT, BENCH_HEIGHT, BENCH_WIDTH
from .fft_plan import PlanPool
from .tracker import MOSSETracker


def build_trackers(width, height, count, pool=None):
    """Constructs `count` trackers of one size that share a single plan pool."""
    pool = PlanPool() if pool is None else pool
    return [MOSSETracker(width, height, pool=pool) for _ in range(count)]


def main(argv=None):
    ap = argparse.ArgumentParser(prog="mosse_tracker",
                                 description="Time construction of MOSSE tracker state")
    ap.add_argument("--width", type=int, default=BENCH_WIDTH, help="Window width in pixels")
    ap.add_argument("--height", type=int, default=BENCH_HEIGHT, help="Window height in pixels")
    ap.add_argument("--count", type=int, default=BENCH_COUNT, help="Number of trackers to build")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    args = ap.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    start = time.perf_counter()
    build_trackers(args.width, args.height, args.count)
    elapsed = time.perf_counter() - start
    print(f"Built {args.count} tracker(s) of {args.width}x{args.height} in {elapsed * 1000:.2f} ms")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
