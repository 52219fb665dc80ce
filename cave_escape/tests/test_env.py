# cave_escape/tests/test_env.py
"""
Quick tests for CaveEnv (Gymnasium environment), its observations and the
sanity rollout script.
"""
from __future__ import annotations
from typing import List, Tuple

import numpy as np
import pytest

from cave_escape.env.cave_env import CaveEnv
from cave_escape.env.observations import build_observation, OBS_SIZE, PROBE_OFFSETS
from cave_escape.game.cave import Cave
from cave_escape.game.config import HEIGHT
from cave_escape.game.rocket import Rocket
from cave_escape.game.stages import get_stage


def test_observation_on_flat_cave():
    params = get_stage(1)
    cave = Cave(params, safe_dist_px=1e9, seed=1.0)
    rocket = Rocket(y=HEIGHT / 2)
    obs = build_observation(rocket, cave)
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
    assert obs[0] == pytest.approx(0.5)
    assert obs[1] == pytest.approx(0.0)
    for i in range(len(PROBE_OFFSETS)):
        ceil_n, floor_n = obs[2 + 2 * i], obs[3 + 2 * i]
        assert ceil_n == pytest.approx((HEIGHT - params.min_gap) / 2 / HEIGHT)
        assert floor_n == pytest.approx((HEIGHT + params.min_gap) / 2 / HEIGHT)


def test_reset_and_step_contract():
    env = CaveEnv(frame_skip=4)
    try:
        obs, info = env.reset(seed=123)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["seed"] == 123.0 and info["stage"] == 1

        for t in range(50):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
    finally:
        env.close()


def test_invalid_action_rejected():
    env = CaveEnv()
    env.reset(seed=1)
    with pytest.raises(AssertionError):
        env.step(2)
    env.close()


def test_noop_crashes_into_floor():
    env = CaveEnv(frame_skip=4)
    env.reset(seed=7)
    term = False
    r = 0.0
    for _ in range(200):
        _, r, term, trunc, info = env.step(0)
        if term or trunc:
            break
    assert term, "falling rocket should hit the floor"
    assert r == -1.0
    assert info["death_cause"] == "wall"
    env.close()


def test_time_limit_truncates():
    env = CaveEnv(frame_skip=4, time_limit_seconds=0.1)
    env.reset(seed=7)
    trunc = False
    for _ in range(10):
        _, _, term, trunc, _ = env.step(0)
        assert not term
        if trunc:
            break
    assert trunc
    env.close()


def test_determinism():
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = CaveEnv(frame_skip=4)
        traj = []
        try:
            env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.randint(0, 2)) for _ in range(300)]
    t1 = rollout(99, action_seq)
    t2 = rollout(99, action_seq)
    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        assert np.array_equal(o1, o2), f"Determinism: obs mismatch at step {i}"
        assert (r1, te1, tr1) == (r2, te2, tr2), f"Determinism: transition mismatch at step {i}"


def test_rgb_array_render():
    env = CaveEnv(render_mode="rgb_array")
    try:
        env.reset(seed=5)
        frame = env.render()
        assert frame.shape == (HEIGHT, 800, 3)
        assert frame.dtype == np.uint8
    finally:
        env.close()


def test_sanity_rollout_writes_traces(tmp_path):
    from experiments.sanity_rollout import run_one_episode

    ep_len, ret_sum, dist, stage, terminated, truncated, cause = run_one_episode(
        policy_name="heuristic", seed=101, frame_skip=4, steps_limit=40,
        save_traces=True, save_obs=True, out_dir=tmp_path,
    )
    assert 1 <= ep_len <= 40
    assert dist > 0.0 and stage >= 1
    trace_dir = tmp_path / "traces" / "heuristic"
    actions = np.load(trace_dir / "101_actions.npy")
    assert actions.shape == (ep_len,)
    assert np.load(trace_dir / "101_obs.npy").shape == (ep_len + 1, OBS_SIZE)
    assert "seed=101" in (trace_dir / "101_meta.txt").read_text(encoding="utf-8")
