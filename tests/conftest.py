import pytest

from physlab.loop import RunStatus, SimulationLoop
from physlab.scheduler import FrameScheduler


class ManualClock:
    def __init__(self, t=0.0):
        self.t = float(t)

    def __call__(self):
        return self.t

    def advance(self, dt):
        self.t += dt
        return self.t


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return FrameScheduler(clock=clock)


def run_frames(loop, clock, frames, frame_dt=1.0 / 60.0):
    """frame_dt 간격으로 최대 frames 프레임 진행, 실행한 프레임 수 반환"""
    n = 0
    for _ in range(frames):
        if loop.status is not RunStatus.RUNNING:
            break
        clock.advance(frame_dt)
        loop.scheduler.run_frame()
        n += 1
    return n


@pytest.fixture
def make_loop(scheduler):
    def _make(demo, params=None):
        return SimulationLoop(demo, params=params, scheduler=scheduler)
    return _make


@pytest.fixture
def run(clock):
    def _run(loop, frames, frame_dt=1.0 / 60.0):
        return run_frames(loop, clock, frames, frame_dt)
    return _run
