# tests/test_tracker.py
import numpy as np
import pytest

from mosse_tracker import (
    THRESHOLD,
    DimensionMismatchError,
    MOSSETracker,
    PatchBoundsError,
    PlanPool,
    TrackerError,
    gaussian_response,
    target_spectrum,
)


def _noise_frame(seed, size=128):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(size, size), dtype=np.uint8)


def test_construction_builds_window_target_and_zero_accumulators():
    pool = PlanPool()
    tracker = MOSSETracker(16, 8, pool=pool)
    assert tracker.window_size == (16, 8)
    assert tracker.length == 128
    assert tracker.hann_window.shape == (128,)
    assert tracker.G.shape == (128,)
    assert not np.any(tracker.model_A) and not np.any(tracker.model_B)
    assert tracker.fwd_fft is pool.get(16, 8)
    np.testing.assert_array_equal(tracker.G, target_spectrum(16, 8, pool.get(16, 8)))


def test_end_to_end_small_window():
    tracker = MOSSETracker(4, 4, pool=PlanPool())
    buffer = tracker.G.copy()
    tracker.inv_fft.inverse(buffer)
    spatial = (buffer.real / tracker.length).reshape(4, 4)
    assert spatial[2, 2] == pytest.approx(1.0, abs=1e-5)
    assert spatial[0, 0] == pytest.approx(np.exp(-4), abs=1e-5)
    assert gaussian_response(4, 4).reshape(4, 4)[2, 2] == 1.0


def test_trackers_sharing_a_pool_are_identical():
    pool = PlanPool()
    first = MOSSETracker(32, 24, pool=pool)
    second = MOSSETracker(32, 24, pool=pool)
    assert first.fwd_fft is second.fwd_fft
    assert first.G.tobytes() == second.G.tobytes()
    assert first.hann_window.tobytes() == second.hann_window.tobytes()
    assert len(pool) == 1


def test_normalize_uses_tracker_window():
    tracker = MOSSETracker(4, 4, pool=PlanPool())
    out = tracker.normalize(np.zeros(16, dtype=np.float32))
    assert np.all(np.isfinite(out)) and not np.any(out)


def test_detect_on_training_frame_finds_center():
    frame = _noise_frame(0)
    tracker = MOSSETracker(48, 48, pool=PlanPool())
    tracker.init(frame, (64.0, 64.0))

    detection = tracker.detect(frame, tracker.center)
    assert (detection.dx, detection.dy) == (0, 0)
    assert detection.found
    assert detection.psr > THRESHOLD
    assert detection.response.shape == (48, 48)
    assert detection.response.max() == pytest.approx(1.0, abs=0.05)


def test_update_follows_shifted_content():
    frame = _noise_frame(1)
    tracker = MOSSETracker(48, 48, pool=PlanPool())
    tracker.init(frame, (64.0, 64.0))

    shifted = np.roll(frame, shift=(2, 3), axis=(0, 1))
    success, center = tracker.update(shifted)
    assert success
    assert center == (67.0, 66.0)
    assert tracker.psr_score > THRESHOLD
    assert np.all(tracker.model_B.real >= 0)


def test_update_rejects_featureless_frame():
    frame = _noise_frame(2)
    tracker = MOSSETracker(32, 32, pool=PlanPool())
    tracker.init(frame, (64.0, 64.0))
    model_A = tracker.model_A.copy()

    success, center = tracker.update(np.zeros_like(frame))
    assert not success
    assert center == (64.0, 64.0)
    assert tracker.psr_score == 0.0
    np.testing.assert_array_equal(tracker.model_A, model_A)


def test_update_before_init_raises():
    tracker = MOSSETracker(8, 8, pool=PlanPool())
    with pytest.raises(TrackerError):
        tracker.update(_noise_frame(3))


def test_init_near_far_edge_raises():
    tracker = MOSSETracker(32, 32, pool=PlanPool())
    with pytest.raises(PatchBoundsError):
        tracker.init(_noise_frame(4), (120.0, 64.0))
    assert tracker.center is None
    assert not tracker.is_tracking


def test_train_rejects_wrong_spectrum_length():
    tracker = MOSSETracker(8, 8, pool=PlanPool())
    with pytest.raises(DimensionMismatchError):
        tracker.train(np.zeros(63, dtype=np.complex64))
    with pytest.raises(ValueError):
        tracker.train(np.zeros(1, dtype=np.complex64))


def test_bbox_follows_center():
    tracker = MOSSETracker(32, 16, pool=PlanPool())
    assert tracker.bbox is None
    tracker.init(_noise_frame(5), (64.0, 64.0))
    assert tracker.bbox == (48.0, 56.0, 32, 16)


def test_update_toward_far_edge_keeps_previous_state():
    frame = _noise_frame(6)
    tracker = MOSSETracker(32, 32, pool=PlanPool())
    tracker.init(frame, (110.0, 64.0))
    model_A = tracker.model_A.copy()
    model_B = tracker.model_B.copy()

    # content moves right by 3, so the new window would end at x=129 on a 128 wide frame
    with pytest.raises(PatchBoundsError):
        tracker.update(np.roll(frame, shift=3, axis=1))
    assert tracker.center == (110.0, 64.0)
    np.testing.assert_array_equal(tracker.model_A, model_A)
    np.testing.assert_array_equal(tracker.model_B, model_B)


def test_center_follows_clamped_patch_near_top_left():
    frame = _noise_frame(7)
    tracker = MOSSETracker(32, 32, pool=PlanPool())
    tracker.init(frame, (8.0, 4.0))
    assert tracker.center == (16.0, 16.0)
    assert tracker.bbox == (0.0, 0.0, 32, 32)

    success, center = tracker.update(np.roll(frame, shift=(2, 3), axis=(0, 1)))
    assert success
    assert center == (19.0, 18.0)
    assert tracker.bbox == (3.0, 2.0, 32, 32)


def test_patch_center_matches_extracted_block():
    tracker = MOSSETracker(32, 16, pool=PlanPool())
    assert tracker.patch_center((64.0, 64.0)) == (64.0, 64.0)
    assert tracker.patch_center((64.7, 64.2)) == (64.0, 64.0)
    assert tracker.patch_center((-5.0, 3.0)) == (16.0, 8.0)
