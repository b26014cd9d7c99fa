import dataclasses
import logging

import numpy as np

from physlab.demos import DropDemo, PendulumDemo, SpringDemo
from physlab.demos.spring import SpringParameters
from physlab.event import EventKind
from physlab.loop import RunStatus


class BrokenSpring(SpringDemo):
    def acceleration(self, state, params):
        return np.array([np.inf])


class CorruptingSpring(SpringDemo):
    def check(self, state, params):
        state.velocity[0] = np.nan
        return None


def test_starts_idle_without_scheduling(make_loop):
    loop = make_loop(SpringDemo())
    assert loop.status is RunStatus.IDLE
    assert loop.scheduler.pending == 0


def test_first_frame_only_sets_baseline(make_loop, run):
    loop = make_loop(SpringDemo())
    loop.start()
    assert loop.status is RunStatus.RUNNING
    run(loop, 1)
    assert loop.steps == 0
    run(loop, 1)
    assert loop.steps == 1


def test_idempotent_restart(make_loop, run):
    demo = SpringDemo()
    loop = make_loop(demo)
    loop.start()
    run(loop, 30)
    assert loop.state.time > 0.0
    loop.start()
    loop.start()
    fresh = demo.initial_state(loop.params)
    assert np.array_equal(loop.state.position, fresh.position)
    assert np.array_equal(loop.state.velocity, fresh.velocity)
    assert loop.state.time == 0.0
    assert loop.scheduler.pending == 1
    assert len(loop.trajectory) == 1


def test_stop_cancels_pending_tick(make_loop, run, clock):
    loop = make_loop(SpringDemo())
    loop.start()
    run(loop, 10)
    loop.stop()
    assert loop.status is RunStatus.STOPPED
    assert loop.scheduler.pending == 0
    frozen = loop.state.copy()
    clock.advance(1.0 / 60.0)
    loop.scheduler.run_frame()
    assert np.array_equal(loop.state.position, frozen.position)
    assert loop.state.time == frozen.time
    loop.stop()
    assert loop.status is RunStatus.STOPPED


def test_stale_tick_from_previous_run_is_ignored(make_loop, run):
    loop = make_loop(SpringDemo())
    loop.start()
    run(loop, 5)
    old_epoch = loop._epoch
    loop.start()
    snapshot = loop.state.copy()
    loop._on_frame(100.0, old_epoch)
    assert np.array_equal(loop.state.position, snapshot.position)
    assert loop.state.time == 0.0
    assert loop.steps == 0


def test_long_frames_are_skipped_not_clamped(make_loop, run):
    loop = make_loop(DropDemo())
    loop.start()
    run(loop, 1)
    run(loop, 5, frame_dt=0.5)
    assert loop.steps == 0
    assert loop.state.time == 0.0
    assert loop.status is RunStatus.RUNNING


def test_applied_dt_is_always_in_range(make_loop, clock):
    for demo in (DropDemo(), SpringDemo()):
        applied = []
        original = demo.advance

        def recording(state, params, dt, original=original):
            applied.append(dt)
            original(state, params, dt)

        demo.advance = recording
        loop = make_loop(demo)
        loop.start()
        for frame_dt in [0.0, 0.016, 0.2, -0.05, 0.033, 0.1, 0.5, 0.008, 0.09]:
            clock.advance(frame_dt)
            loop.scheduler.run_frame()
        assert applied
        assert all(0.0 < dt <= 0.1 for dt in applied)


def test_non_finite_state_stops_run(make_loop, run, caplog):
    loop = make_loop(BrokenSpring())
    loop.start()
    with caplog.at_level(logging.WARNING):
        run(loop, 10)
    assert loop.status is RunStatus.STOPPED
    assert loop.last_event.kind is EventKind.NON_FINITE
    assert loop.scheduler.pending == 0
    assert "non-finite" in caplog.text


def test_parameter_change_deferred_while_running(make_loop, run):
    loop = make_loop(SpringDemo())
    loop.start()
    run(loop, 3)
    before = loop.state.copy()
    loop.update_parameters(SpringParameters(displacement=0.25))
    assert loop.state.time == before.time
    assert loop._run_params.displacement == 1.0
    loop.start()
    assert np.isclose(loop.state.x, 0.25)


def test_live_preview_applies_while_idle(make_loop):
    loop = make_loop(PendulumDemo())
    loop.update_parameters(dataclasses.replace(loop.params, angle=10.0))
    assert np.isclose(loop.state.theta, np.radians(10.0))


def test_without_live_preview_idle_change_waits_for_start(make_loop):
    loop = make_loop(DropDemo())
    loop.update_parameters(dataclasses.replace(loop.params, height=2.0))
    assert np.isclose(loop.state.x, 4.0)
    loop.start()
    assert np.isclose(loop.state.x, 2.0)


def test_reset_returns_to_idle(make_loop, run):
    loop = make_loop(SpringDemo())
    loop.start()
    run(loop, 20)
    loop.reset()
    assert loop.status is RunStatus.IDLE
    assert loop.scheduler.pending == 0
    assert loop.state.time == 0.0
    assert loop.events == []
    assert len(loop.trajectory) == 1


def test_independent_loops_share_scheduler(make_loop, run):
    a = make_loop(SpringDemo())
    b = make_loop(SpringDemo())
    a.start()
    b.start()
    run(a, 10)
    b.stop()
    run(a, 10)
    assert a.status is RunStatus.RUNNING
    assert a.state.time > b.state.time


def test_non_finite_state_from_termination_check_stops_run(make_loop, run):
    loop = make_loop(CorruptingSpring())
    loop.start()
    run(loop, 10)
    assert loop.status is RunStatus.STOPPED
    assert loop.last_event.kind is EventKind.NON_FINITE
    assert len(loop.trajectory) == 1


def test_stopped_state_stays_frozen_on_parameter_change(make_loop, run):
    loop = make_loop(PendulumDemo())
    loop.start()
    run(loop, 10)
    loop.stop()
    frozen = loop.state.copy()
    loop.update_parameters(dataclasses.replace(loop.params, angle=5.0))
    assert loop.state.theta == frozen.theta
    assert loop.state.time == frozen.time
    loop.reset()
    assert np.isclose(loop.state.theta, np.radians(5.0))
