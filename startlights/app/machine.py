from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from startlights.api.config import TrainerConfig
from startlights.api.snapshot import Attempt, GameState, Snapshot
from startlights.calib.latency import LatencyCalibrator, Sampler, asyncio_sampler
from startlights.errors import SchedulingError
from startlights.results.hints import hint_for
from startlights.results.ledger import ResultLedger
from startlights.results.store import FileStore, KeyValueStore
from startlights.timing.recorder import ReactionRecorder
from startlights.timing.scheduler import FrameScheduler, monotonic_ms
from startlights.timing.sequencer import LightSequencer

logger = logging.getLogger(__name__)


@dataclass
class _RoundContext:
    # Scheduling state kept out of the published snapshot.
    active: bool = False
    number: int = 0


class GameStateMachine:
    """
    Sequences calibration, lights and reactions.

    The presentation layer only calls begin() / react() and reads `snapshot`,
    which is rebuilt at each transition.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        sequencer: LightSequencer,
        recorder: ReactionRecorder,
        ledger: ResultLedger,
        calibrator: Optional[LatencyCalibrator] = None,
        wall_clock: Callable[[], datetime] = datetime.now,
    ):
        self.scheduler = scheduler
        self.sequencer = sequencer
        self.recorder = recorder
        self.ledger = ledger
        self.calibrator = calibrator
        self.wall_clock = wall_clock

        self.state: GameState = GameState.Idle
        self.progress: int = 0
        self._round = _RoundContext()
        self._calibrating = False
        self._calibrated = False
        self._last: Optional[Attempt] = None
        self._snapshot = self._build_snapshot()

    # ---------- public ----------
    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def round_active(self) -> bool:
        return self._round.active

    def calibrate(self) -> float:
        """Measure host latency once; later calls return the stored value."""
        if self._calibrated or self.calibrator is None:
            return self.recorder.compensation_ms

        self._calibrating = True
        self._publish()
        try:
            self.recorder.compensation_ms = self.calibrator.calibrate()
        finally:
            self._calibrating = False
            self._calibrated = True
            self._publish()
        return self.recorder.compensation_ms

    def begin(self) -> bool:
        """Start a round. Ignored while calibrating or while a round is running."""
        if self._calibrating or self._round.active:
            return False

        # guard first: the sequencer may call back before start() returns
        self._round.active = True
        self._round.number += 1
        self.sequencer.cancel()
        self.recorder.reset()
        self._last = None
        self.progress = 0
        self.state = GameState.Countdown

        try:
            self.sequencer.start(self._on_lights_out, self._on_progress)
        except SchedulingError as e:
            logger.warning("round %d abandoned: %s", self._round.number, e)
            self._abandon_round()
            return False

        logger.debug("round %d: countdown", self._round.number)
        self._publish()
        return True

    def react(self, now: Optional[float] = None) -> Optional[Attempt]:
        """
        Handle the reaction signal. In Idle/Result it starts a round instead and
        returns None; otherwise the round ends and its Attempt is returned.
        """
        if self._calibrating:
            return None
        if self.state in (GameState.Idle, GameState.Result):
            self.begin()
            return None

        if now is None:
            now = self.scheduler.now()
        self.sequencer.cancel()
        attempt = self.recorder.react(now, self.wall_clock())

        self._round.active = False
        self.recorder.reset()
        self.progress = 0
        self._last = attempt
        self.state = GameState.Result
        self.ledger.record(attempt)

        if attempt.is_jump_start:
            logger.debug("round %d: jump start", self._round.number)
        else:
            logger.debug("round %d: %d ms", self._round.number, attempt.elapsed_ms)
        self._publish()
        return attempt

    def reset(self) -> None:
        """Drop any running round and go back to Idle."""
        self._abandon_round()

    # ---------- sequencer callbacks ----------
    def _on_progress(self, lit: int) -> None:
        self.progress = lit
        if lit == self.sequencer.light_count:
            self.state = GameState.Waiting
        self._publish()

    def _on_lights_out(self, now: float) -> None:
        self.progress = 0
        self.recorder.arm_at(now)
        self.state = GameState.Reacting
        logger.debug("round %d: lights out", self._round.number)
        self._publish()

    # ---------- internals ----------
    def _abandon_round(self) -> None:
        self.sequencer.cancel()
        self.recorder.reset()
        self._round.active = False
        self.progress = 0
        self.state = GameState.Idle
        self._publish()

    def _build_snapshot(self) -> Snapshot:
        last = self._last
        return Snapshot(
            state=self.state,
            progress=self.progress,
            calibrating=self._calibrating,
            reaction_time_ms=last.elapsed_ms if last else None,
            jump_start=bool(last and last.is_jump_start),
            latency_compensation_ms=self.recorder.compensation_ms,
            history=self.ledger.history,
            average_ms=self.ledger.average_of_valid(),
            best_ms=self.ledger.best,
            hint=hint_for(last.elapsed_ms) if last else None,
        )

    def _publish(self) -> None:
        self._snapshot = self._build_snapshot()


def build_machine(
    cfg: TrainerConfig,
    scheduler: Optional[FrameScheduler] = None,
    store: Optional[KeyValueStore] = None,
    sampler: Sampler = asyncio_sampler,
    rng: Optional[random.Random] = None,
) -> GameStateMachine:
    """Wire up a machine from config; host-facing defaults for anything not injected."""
    scheduler = scheduler or FrameScheduler(clock=monotonic_ms)
    store = store if store is not None else FileStore(root=cfg.data_dir)
    rng = rng or random.Random(cfg.seed)

    sequencer = LightSequencer(
        scheduler,
        rng=rng,
        light_count=cfg.light_count,
        interval_ms=cfg.light_interval_ms,
        min_delay_ms=cfg.min_delay_ms,
        max_delay_ms=cfg.max_delay_ms,
    )
    calibrator = LatencyCalibrator(
        trials=cfg.calibration_trials, buffer_ms=cfg.latency_buffer_ms, sampler=sampler)
    ledger = ResultLedger(store, capacity=cfg.history_size, best_key=cfg.best_key)
    return GameStateMachine(scheduler, sequencer, ReactionRecorder(), ledger, calibrator=calibrator)
