import numpy as np

from physlab.demos import GravityPairDemo, GravityPairParameters
from physlab.demos.gravity_pair import force, momentum, time_to_collision
from physlab.event import EventKind
from physlab.loop import RunStatus


def test_momentum_change_is_equal_and_opposite_each_step():
    demo = GravityPairDemo()
    params = GravityPairParameters(velocity1=(0.0, 0.3), velocity2=(0.0, -0.6))
    s = demo.initial_state(params)
    for _ in range(40):
        v1, v2 = s.v1.copy(), s.v2.copy()
        demo.advance(s, params, 1.0 / 60.0)
        dp1 = params.mass1 * (s.v1 - v1)
        dp2 = params.mass2 * (s.v2 - v2)
        assert np.allclose(dp1, -dp2, rtol=1e-9, atol=1e-12)
        if demo.check(s, params) is not None:
            break


def test_total_momentum_stays_zero(make_loop, run):
    loop = make_loop(GravityPairDemo())
    loop.start()
    run(loop, 20)
    assert np.allclose(momentum(loop.state, loop.params), 0.0, atol=1e-9)


def test_bodies_stop_on_contact(make_loop, run):
    params = GravityPairParameters(gravity_multiplier=1.0e9)
    loop = make_loop(GravityPairDemo(), params)
    loop.start()
    run(loop, 600)
    assert loop.status is RunStatus.STOPPED
    assert loop.last_event.kind is EventKind.CONTACT
    assert loop.state.separation() <= params.radius1 + params.radius2
    expected = time_to_collision(params.separation, params)
    assert abs(loop.state.time - expected) < 0.06


def test_leaving_domain_stops(make_loop, run):
    params = GravityPairParameters(velocity1=(-50.0, 0.0), velocity2=(50.0, 0.0), domain_radius=10.0)
    loop = make_loop(GravityPairDemo(), params)
    loop.start()
    run(loop, 600)
    assert loop.last_event.kind is EventKind.BOUNDARY


def test_force_metric_is_physical():
    demo = GravityPairDemo()
    params = GravityPairParameters()
    s = demo.initial_state(params)
    expected = params.G * params.mass1 * params.mass2 / params.separation**2
    assert np.isclose(force(s, params), expected)
    m = demo.metrics(s, params)
    assert np.isclose(m["display_force"], expected * params.gravity_multiplier)
    assert np.isclose(m["distance"], params.separation)


def test_separation_is_clamped_to_contact_distance():
    params = GravityPairParameters(separation=0.1)
    assert params.separation == params.radius1 + params.radius2
    assert time_to_collision(params.separation, params) == 0.0
