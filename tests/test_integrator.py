import numpy as np
import pytest

from physlab.body import PointState
from physlab.integrator import Method, average_velocity, semi_implicit_euler, step
from physlab.timestep import FixedStep, VariableStep


def constant(a):
    return lambda state: np.array([a])


def test_semi_implicit_euler_uses_new_velocity():
    s = PointState(position=[0.0], velocity=[0.0])
    semi_implicit_euler(s, 0.1, constant(-10.0))
    assert np.isclose(s.v, -1.0)
    assert np.isclose(s.x, -0.1)
    assert np.isclose(s.time, 0.1)


def test_average_velocity_uses_mean_of_old_and_new():
    s = PointState(position=[0.0], velocity=[0.0])
    average_velocity(s, 0.1, constant(-10.0))
    assert np.isclose(s.v, -1.0)
    assert np.isclose(s.x, -0.05)


def test_average_velocity_is_exact_for_constant_acceleration():
    s = PointState(position=[0.0], velocity=[3.0])
    for _ in range(100):
        step(Method.AVERAGE_VELOCITY, s, 0.01, constant(-2.0))
    # x = v0 t + 1/2 a t^2
    assert np.isclose(s.x, 3.0 * 1.0 - 1.0)


@pytest.mark.parametrize("dt", [0.0, -0.01])
def test_step_rejects_non_positive_dt(dt):
    s = PointState(position=[0.0], velocity=[0.0])
    with pytest.raises(ValueError):
        step(Method.SEMI_IMPLICIT_EULER, s, dt, constant(1.0))


def test_variable_step_skips_out_of_range_frames():
    ts = VariableStep(max_dt=0.1)
    assert ts.plan(0.016) == [0.016]
    assert ts.plan(0.1) == [0.1]
    assert ts.plan(0.25) == []
    assert ts.plan(0.0) == []
    assert ts.plan(-0.01) == []


def test_fixed_step_accumulates_remainder():
    ts = FixedStep(h=1.0 / 60.0, max_dt=0.1)
    assert ts.plan(0.01) == []
    steps = ts.plan(0.01)
    assert len(steps) == 1
    assert np.isclose(ts.accumulator, 0.02 - 1.0 / 60.0)
    assert len(ts.plan(0.05)) == 3


def test_fixed_step_discards_long_frames_without_feeding_accumulator():
    ts = FixedStep(h=1.0 / 60.0, max_dt=0.1)
    ts.plan(0.01)
    assert ts.plan(0.5) == []
    assert np.isclose(ts.accumulator, 0.01)
    ts.reset()
    assert ts.accumulator == 0.0


def test_fixed_step_caps_substeps():
    ts = FixedStep(h=0.01, max_dt=0.1, max_substeps=5)
    assert ts.plan(0.1) == [0.01] * 5
    assert ts.accumulator == 0.0
