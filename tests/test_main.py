# tests/test_main.py
from mosse_tracker import PlanPool
from mosse_tracker.__main__ import build_trackers, main


def test_build_trackers_shares_one_plan():
    pool = PlanPool()
    trackers = build_trackers(16, 16, 3, pool=pool)
    assert len(trackers) == 3
    assert all(t.fwd_fft is trackers[0].fwd_fft for t in trackers)
    assert len(pool) == 1


def test_main_reports_timing(capsys):
    assert main(["--width", "8", "--height", "8", "--count", "2"]) == 0
    out = capsys.readouterr().out
    assert "Built 2 tracker(s) of 8x8" in out
