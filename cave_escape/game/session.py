# cave_escape/game/session.py
from __future__ import annotations
import logging
import random
from typing import Optional

from .cave import Cave
from .config import HEIGHT, SAFE_DIST_PX, SIM_DT, MAX_FRAME_DT
from .rocket import Rocket
from .stages import StageParams, get_stage, is_last_stage

logger = logging.getLogger(__name__)

TITLE = "title"
PLAYING = "playing"
PAUSED = "paused"
GAMEOVER = "gameover"
STAGECLEAR = "stageclear"
ALLCLEAR = "allclear"

STAGE_SEED_STRIDE = 101.0


class FixedStep:
    """Turns variable frame time into a whole number of fixed simulation ticks."""
    def __init__(self, dt: float = SIM_DT, max_frame_dt: float = MAX_FRAME_DT):
        assert dt > 0, "dt must be > 0"
        self.dt = dt
        self.max_frame_dt = max_frame_dt
        self.acc = 0.0

    def advance(self, frame_dt: float) -> int:
        self.acc += min(max(frame_dt, 0.0), self.max_frame_dt)
        n = int(self.acc // self.dt)
        self.acc -= n * self.dt
        return n

    def reset(self):
        self.acc = 0.0


class Session:
    """
    Game-state machine driving one Cave per stage.

    Shared by the pygame front-end and the agent environment: the caller
    feeds fixed ticks through step(), everything else is bookkeeping.
    """
    def __init__(self, seed: Optional[float] = None, start_stage: int = 1,
                 continuous: bool = False, safe_dist_px: float = SAFE_DIST_PX):
        get_stage(start_stage)
        self.seed = float(seed) if seed is not None else random.random() * 1000.0
        self.start_stage = start_stage
        self.continuous = continuous
        self.safe_dist_px = safe_dist_px

        self.state = TITLE
        self.best_distance = 0.0
        self.death_cause: Optional[str] = None
        self._new_run()

    # -------------------- Properties --------------------

    @property
    def params(self) -> StageParams:
        return get_stage(self.stage)

    @property
    def alive(self) -> bool:
        return self.state != GAMEOVER

    # -------------------- Transitions --------------------

    def _stage_seed(self, stage: int) -> float:
        return self.seed + STAGE_SEED_STRIDE * (stage - 1)

    def _new_run(self):
        self.stage = self.start_stage
        self.distance = 0.0
        self.total_distance = 0.0
        self.death_cause = None
        self.cave = Cave(self.params, self.safe_dist_px, seed=self._stage_seed(self.stage))
        self.rocket = Rocket()
        self.rocket.reset(self.cave.center_at_x(self.rocket.x))

    def start(self):
        if self.state in (TITLE, PAUSED):
            self.state = PLAYING
            logger.debug("playing stage %d", self.stage)

    def toggle_pause(self):
        if self.state == PLAYING:
            self.state = PAUSED
        elif self.state == PAUSED:
            self.state = PLAYING

    def show_title(self):
        self._new_run()
        self.state = TITLE

    def restart(self, same_seed: bool = True):
        if not same_seed:
            self.seed = random.random() * 1000.0
        self._new_run()
        self.state = PLAYING
        logger.info("restart seed=%.3f stage=%d", self.seed, self.stage)

    def next_stage(self):
        """Advance after a stage clear. Continuous sessions keep the current cave."""
        if self.state != STAGECLEAR:
            return
        self.stage += 1
        self.distance = 0.0
        if self.continuous:
            self.cave.set_params(self.params)
        else:
            self.cave = Cave(self.params, self.safe_dist_px, seed=self._stage_seed(self.stage))
            self.rocket.reset(self.cave.center_at_x(self.rocket.x))
        self.state = PLAYING
        logger.info("stage %d: %s", self.stage, self.params.description)

    def _crash(self, cause: str):
        self.state = GAMEOVER
        self.death_cause = cause
        self.best_distance = max(self.best_distance, self.total_distance)
        logger.info("crash (%s) at stage %d, distance %.1f", cause, self.stage, self.total_distance)

    def _clear(self):
        self.best_distance = max(self.best_distance, self.total_distance)
        self.state = ALLCLEAR if is_last_stage(self.stage) else STAGECLEAR
        logger.info("%s stage %d", self.state, self.stage)

    # -------------------- Tick --------------------

    def step(self, dt: float, thrust: bool):
        """One fixed tick. Scroll first, then test collision on the new geometry."""
        if self.state != PLAYING:
            return
        self.rocket.update_physics(dt, thrust)

        dx = self.params.speed * dt
        self.cave.update(dx)
        self.distance += dx
        self.total_distance += dx

        if self.cave.collides(self.rocket.polygon()):
            self._crash("wall")
        elif not (0.0 <= self.rocket.y <= HEIGHT):
            self._crash("oob")
        elif self.distance >= self.params.target_distance:
            self._clear()
