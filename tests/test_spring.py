import dataclasses

import numpy as np
import pytest

from physlab.demos import SpringDemo, SpringParameters
from physlab.demos.spring import (
    CRITICALLY_DAMPED, OVERDAMPED, UNDERDAMPED,
    damped_frequency, damping_ratio, natural_frequency, regime, total_energy,
)
from physlab.event import EventKind
from physlab.loop import RunStatus


def test_natural_frequency_and_damping_ratio():
    params = SpringParameters(mass=1.0, spring_constant=4.0, damping=2.0)
    assert np.isclose(natural_frequency(params), 2.0)
    assert np.isclose(damping_ratio(params), 0.5)
    assert np.isclose(damped_frequency(params), 2.0 * np.sqrt(0.75))


@pytest.mark.parametrize("damping, expected", [
    (1.0, UNDERDAMPED),
    (2.0, CRITICALLY_DAMPED),
    (2.01, CRITICALLY_DAMPED),
    (1.99, CRITICALLY_DAMPED),
    (3.0, OVERDAMPED),
])
def test_regime_classification(damping, expected):
    assert regime(SpringParameters(mass=1.0, spring_constant=1.0, damping=damping)) == expected


def test_acceleration_is_hooke_plus_damping():
    demo = SpringDemo()
    params = SpringParameters(mass=2.0, spring_constant=10.0, damping=1.0)
    s = demo.initial_state(params)
    s.x, s.v = 0.5, -2.0
    assert np.isclose(demo.acceleration(s, params)[0], (-10.0 * 0.5 + 1.0 * 2.0) / 2.0)


def test_undamped_energy_is_conserved(make_loop, clock):
    params = SpringParameters(mass=1.0, spring_constant=10.0, damping=0.0, displacement=1.0)
    loop = make_loop(SpringDemo(), params)
    loop.start()
    e0 = total_energy(loop.state, params)
    for _ in range(1200):
        clock.advance(1.0 / 60.0)
        loop.scheduler.run_frame()
        assert abs(total_energy(loop.state, params) - e0) < 0.05 * e0
    assert loop.status is RunStatus.RUNNING


def test_damped_spring_comes_to_rest(make_loop, run):
    params = SpringParameters(mass=1.0, spring_constant=10.0, damping=2.0)
    loop = make_loop(SpringDemo(), params)
    loop.start()
    run(loop, 60 * 60)
    assert loop.status is RunStatus.STOPPED
    assert loop.last_event.kind is EventKind.REST
    assert loop.state.v == 0.0
    assert abs(loop.state.x) < params.rest_displacement


def test_turning_point_is_not_rest():
    demo = SpringDemo()
    params = SpringParameters(damping=1.0)
    s = demo.initial_state(params)
    assert s.v == 0.0
    assert demo.check(s, params) is None


def test_trajectory_is_time_ordered(make_loop, run):
    loop = make_loop(SpringDemo())
    loop.start()
    run(loop, 60)
    times = loop.trajectory.times()
    assert len(times) == loop.steps + 1
    assert np.all(np.diff(times) > 0.0)


def test_displacement_preview_while_idle(make_loop):
    loop = make_loop(SpringDemo())
    loop.update_parameters(dataclasses.replace(loop.params, displacement=-0.3))
    assert np.isclose(loop.state.x, -0.3)
