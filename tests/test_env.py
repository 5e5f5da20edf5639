"""Tests for the headless Gymnasium environment."""
import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from racer.intents import Intents
from racer_env import LaneRacerEnv
from racer_env.observations import build_observation, lane_gaps
from racer_env.rewards import StepInfo, compute_reward


@pytest.fixture
def env(config):
    env = LaneRacerEnv(config=config)
    yield env
    env.close()


def test_env_checker(env):
    """check_env must pass with no errors."""
    check_env(env, skip_render_check=True)


def test_reset_observation(env):
    obs, info = env.reset(seed=3)
    assert obs.shape == (6,)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    # Centre lane, at rest, all lanes clear
    assert obs[0] == pytest.approx(0.5)
    assert obs[1] == pytest.approx(0.5)
    assert obs[2] == pytest.approx((4.0 - 2.0) / 12.0)
    assert np.all(obs[3:] == 1.0)
    assert info == {"score": 0}


def test_action_quantization(env):
    assert env.action_to_intents(np.array([-0.5, 0.5])) == Intents(steer_left=True, accelerate=True)
    assert env.action_to_intents(np.array([0.5, -0.5])) == Intents(steer_right=True, brake=True)
    assert env.action_to_intents(np.array([0.05, -0.05])) == Intents()


def test_random_agent_episodes_end(env):
    env.action_space.seed(0)
    for ep in range(5):
        obs, _ = env.reset(seed=ep)
        done = False
        steps = 0
        while not done:
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
            assert env.observation_space.contains(obs)
            assert np.isfinite(reward)
            done = terminated or truncated
            steps += 1
            assert steps <= 3000, f"Episode {ep} exceeded max_episode_steps"
        assert set(info["reward_breakdown"]) == {"score", "pass", "crash"}


def test_crash_terminates_with_penalty(env):
    env.reset(seed=0)
    sim = env.simulation
    sim.player.reset(lane=0)
    ob = sim.obstacles.spawn()
    ob.x = sim.player.x
    ob.y = sim.player.y
    _, reward, terminated, truncated, info = env.step(np.array([0.0, 0.0], dtype=np.float32))
    assert terminated
    assert not truncated
    assert info["reward_breakdown"]["crash"] == -20.0
    assert reward < 0


def test_truncation_at_max_steps(config):
    config["ai"]["max_episode_steps"] = 5
    env = LaneRacerEnv(config=config)
    env.reset(seed=0)
    results = [env.step(np.array([0.0, 0.0], dtype=np.float32)) for _ in range(5)]
    assert [r[3] for r in results] == [False] * 4 + [True]
    env.close()


def test_seeded_resets_are_deterministic(config):
    def rollout(seed):
        env = LaneRacerEnv(config=config)
        env.reset(seed=seed)
        obs = [env.step(np.array([0.0, 1.0], dtype=np.float32))[0] for _ in range(300)]
        env.close()
        return np.stack(obs)

    np.testing.assert_array_equal(rollout(11), rollout(11))


def test_lane_gaps_track_nearest_obstacle(env):
    env.reset(seed=0)
    sim = env.simulation
    ob = sim.obstacles.spawn()
    ob.y = sim.player.y - ob.height - 360.0  # bottom edge 360px ahead of the player
    gaps = lane_gaps(sim)
    assert gaps[ob.lane] == pytest.approx(0.5)
    assert build_observation(sim)[3 + ob.lane] == pytest.approx(0.5)


def test_closed_env_raises(config):
    env = LaneRacerEnv(config=config)
    env.close()
    with pytest.raises(RuntimeError, match="closed"):
        env.reset()


def test_compute_reward_breakdown(config):
    total, breakdown = compute_reward(StepInfo(score_gained=12.0, passed=1, crashed=False), config)
    assert breakdown == {"score": pytest.approx(1.2), "pass": 1.0, "crash": 0.0}
    assert total == pytest.approx(2.2)
