# physlab/loop.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional
import numpy

from physlab.body import SimulationState, Trajectory
from physlab.demos.base import Demo
from physlab.event import Event, EventKind
from physlab.scheduler import FrameScheduler

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class SimulationLoop:
    """
    데모 하나를 실시간 시계에 맞춰 진행시키는 루프
        Idle -> Running -> (Stopped | Idle)
    - start 는 멱등 재시작: 대기 중인 틱을 취소하고 상태를 처음부터 다시 만듦
    - 예약된 틱은 자신을 예약한 실행(epoch)에서만 상태를 바꿀 수 있음
    - 실행 중 파라미터 변경은 다음 start 까지 보류됨
    - 정지(STOPPED) 상태는 마지막 값으로 고정. 미리보기는 대기(IDLE) 상태에서만 갱신
    """
    def __init__(self, demo: Demo, params=None, scheduler: Optional[FrameScheduler] = None):
        self.demo = demo
        self.params = params if params is not None else demo.default_parameters()
        self.scheduler = scheduler or FrameScheduler()
        self.status = RunStatus.IDLE
        self.state: SimulationState = demo.initial_state(self.params)
        self.trajectory: Optional[Trajectory] = Trajectory() if demo.tracks_trajectory else None
        self.events: List[Event] = []
        self.steps = 0 # 이번 실행에서 적분기를 호출한 횟수

        self._timestep = demo.make_timestep()
        self._run_params = self.params
        self._epoch = 0
        self._handle: Optional[int] = None
        self._last_frame: Optional[float] = None

    @property
    def running(self) -> bool:
        return self.status is RunStatus.RUNNING

    @property
    def last_event(self) -> Optional[Event]:
        return self.events[-1] if self.events else None

    # ---- commands ----
    def start(self, params=None) -> None:
        self._cancel_pending()
        self._epoch += 1
        if params is not None:
            self.params = params
        self._run_params = self.params
        self._fresh_state()
        self.status = RunStatus.RUNNING
        logger.info(f"{self.demo.name}: start (run {self._epoch})")
        self._schedule()

    def restart(self) -> None:
        self.start()

    def stop(self) -> None:
        if self.status is not RunStatus.RUNNING:
            return
        self._cancel_pending()
        self.status = RunStatus.STOPPED
        logger.info(f"{self.demo.name}: stop at t={self.state.time:.3f}s")

    def reset(self) -> None:
        self._cancel_pending()
        self._epoch += 1
        self._run_params = self.params
        self._fresh_state()
        self.status = RunStatus.IDLE
        logger.info(f"{self.demo.name}: reset")

    def update_parameters(self, params) -> None:
        """UI 쪽 파라미터 변경. 대기 상태가 아니면 다음 start(또는 reset) 에 반영"""
        self.params = params
        if self.status is not RunStatus.IDLE:
            logger.debug(f"{self.demo.name}: parameter change deferred until next start")
            return
        if self.demo.live_preview:
            self._run_params = params
            self.state = self.demo.initial_state(params)
            if self.trajectory is not None:
                self.trajectory.clear()

    def metrics(self) -> Dict[str, Any]:
        return self.demo.metrics(self.state, self._run_params)

    # ---- ticks ----
    def tick(self, now: float) -> None:
        """프레임 하나 처리: dt 계산 -> 스텝 정책 -> 적분 -> 종료 정책 -> 경로 기록"""
        if self.status is not RunStatus.RUNNING:
            return
        if self._last_frame is None:
            self._last_frame = float(now)
            return
        frame_dt = float(now) - self._last_frame
        self._last_frame = float(now)
        for h in self._timestep.plan(frame_dt):
            self._step(h)
            if self.status is not RunStatus.RUNNING:
                break

    def _step(self, dt: float) -> None:
        with numpy.errstate(all="ignore"):
            self.demo.advance(self.state, self._run_params, dt)
        self.steps += 1
        if not self.state.is_finite():
            self._stop_non_finite()
            return
        found = self.demo.check(self.state, self._run_params)
        # 종료 정책이 상태를 보정한 뒤에도 다시 확인
        if not self.state.is_finite():
            self._stop_non_finite()
            return
        if self.trajectory is not None:
            self.trajectory.append(self.state.time, self.state.position)
        if isinstance(found, Event):
            found = [found]
        for event in found or ():
            if event.terminal:
                self._finish(event)
                return
            self.events.append(event)
            logger.debug(f"{self.demo.name}: {event}")

    def _stop_non_finite(self) -> None:
        logger.warning(f"{self.demo.name}: state became non-finite at t={self.state.time:.3f}s, stopping")
        self._finish(Event(EventKind.NON_FINITE, self.state.time, terminal=True))

    def _finish(self, event: Event) -> None:
        self.events.append(event)
        self._cancel_pending()
        self.status = RunStatus.STOPPED
        logger.info(f"{self.demo.name}: stopped by {event.kind.value} at t={event.time:.3f}s")

    # ---- scheduling ----
    def _fresh_state(self) -> None:
        self.state = self.demo.initial_state(self._run_params)
        self.events = []
        self.steps = 0
        self._timestep.reset()
        self._last_frame = None
        if self.trajectory is not None:
            self.trajectory.clear()
            self.trajectory.append(self.state.time, self.state.position)

    def _schedule(self) -> None:
        epoch = self._epoch
        self._handle = self.scheduler.request(lambda now: self._on_frame(now, epoch))

    def _on_frame(self, now: float, epoch: int) -> None:
        if epoch != self._epoch:
            return
        self._handle = None
        self.tick(now)
        if self.status is RunStatus.RUNNING and epoch == self._epoch:
            self._schedule()

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
