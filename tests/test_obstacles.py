"""Tests for obstacle spawning, motion and retirement."""
import numpy as np
import pytest

from racer.obstacles import ObstacleManager
from racer.physics import Rect
from racer.track import Track


@pytest.fixture
def manager(config) -> ObstacleManager:
    return ObstacleManager(config, Track.from_config(config), rng=np.random.default_rng(99))


def test_starts_empty(manager):
    assert len(manager) == 0
    assert manager.rects() == ()


def test_spawn_samples_within_configured_ranges(manager):
    track = manager.track
    for _ in range(2_000):
        ob = manager.spawn()
        assert 0 <= ob.lane < track.lane_count
        assert 0.9 <= ob.speed_factor < 1.5
        assert ob.x == pytest.approx(track.lane_x(ob.lane, 48))
        # Fully above the visible area, with up to 80px of extra jitter
        assert -160 <= ob.y <= -80
        assert (ob.width, ob.height) == (48, 80)
    assert len(manager) == 2_000


def test_spawn_uses_every_lane(manager):
    lanes = {manager.spawn().lane for _ in range(300)}
    assert lanes == {0, 1, 2}


def test_spawn_is_reproducible_with_seed(config):
    track = Track.from_config(config)
    a = ObstacleManager(config, track, rng=np.random.default_rng(5))
    b = ObstacleManager(config, track, rng=np.random.default_rng(5))
    for _ in range(20):
        oa, ob = a.spawn(), b.spawn()
        assert (oa.lane, oa.y, oa.speed_factor) == (ob.lane, ob.y, ob.speed_factor)


def test_advance_moves_by_speed_factor_and_dt(manager):
    ob = manager.spawn()
    start_y = ob.y
    result = manager.advance(dt=32.0, speed=5.0)
    assert result.passed == 0
    assert result.hit is None
    assert ob.y == pytest.approx(start_y + 5.0 * ob.speed_factor * 2.0)


def test_advance_with_zero_dt_does_not_move(manager):
    ob = manager.spawn()
    start_y = ob.y
    manager.advance(dt=0.0, speed=14.0)
    assert ob.y == start_y


def test_obstacle_past_threshold_removed_exactly_once(manager):
    ob = manager.spawn()
    ob.y = 720 + 50 + 0.5
    assert manager.advance(dt=16.0, speed=4.0).passed == 1
    assert len(manager) == 0
    assert manager.advance(dt=16.0, speed=4.0).passed == 0


def test_obstacle_at_threshold_is_kept(manager):
    ob = manager.spawn()
    ob.y = 770.0
    assert manager.advance(dt=0.0, speed=4.0).passed == 0
    assert len(manager) == 1


def test_removal_keeps_survivor_order_without_skipping(manager):
    obs = [manager.spawn() for _ in range(6)]
    for i, ob in enumerate(obs):
        ob.y = 900.0 if i % 2 == 0 else 100.0 + i
    # Adjacent removals must not cause the next element to be skipped
    obs[1].y = 900.0
    result = manager.advance(dt=16.0, speed=2.0)
    assert result.passed == 4
    assert list(manager.obstacles) == [obs[3], obs[5]]


def test_clear_drops_everything(manager):
    for _ in range(5):
        manager.spawn()
    manager.clear()
    assert len(manager) == 0


def test_advance_reports_hit(manager):
    ob = manager.spawn()
    ob.y = 600.0
    result = manager.advance(dt=16.0, speed=4.0, target=Rect(ob.x, 610.0, 48, 80))
    assert result.hit is ob
    assert len(manager) == 1


def test_advance_without_overlap_reports_no_hit(manager):
    ob = manager.spawn()
    ob.y = 0.0
    assert manager.advance(dt=16.0, speed=4.0, target=Rect(ob.x, 600.0, 48, 80)).hit is None


def test_hit_on_newer_obstacle_stops_the_pass(manager):
    older = manager.spawn()
    middle = manager.spawn()
    newer = manager.spawn()
    older.y = 769.9
    middle.y = 100.0
    newer.y = 600.0
    target = Rect(newer.x, 610.0, 48, 80)

    result = manager.advance(dt=16.0, speed=4.0, target=target)

    assert result.hit is newer
    assert result.passed == 0
    # Obstacles older than the hit are left untouched this tick
    assert middle.y == 100.0
    assert older.y == 769.9
    assert list(manager.obstacles) == [older, middle, newer]


def test_newer_obstacle_retired_before_older_hit(manager):
    older = manager.spawn()
    newer = manager.spawn()
    older.y = 600.0
    newer.y = 771.0
    result = manager.advance(dt=16.0, speed=4.0, target=Rect(older.x, 610.0, 48, 80))
    assert result.passed == 1
    assert result.hit is older
    assert list(manager.obstacles) == [older]


def test_rects_snapshot_is_detached(manager):
    ob = manager.spawn()
    rects = manager.rects()
    ob.y += 100
    assert rects[0].y == ob.y - 100
