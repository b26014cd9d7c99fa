import numpy as np

from physlab.demos import FrictionSlideDemo, FrictionSlideParameters
from physlab.demos.friction_slide import friction_force, stopping_distance
from physlab.event import EventKind
from physlab.integrator import Method
from physlab.loop import RunStatus


def test_uses_average_velocity_update():
    assert FrictionSlideDemo.method is Method.AVERAGE_VELOCITY


def test_slides_to_rest_near_stopping_distance(make_loop, clock):
    params = FrictionSlideParameters(velocity=8.0, friction=0.3, track_length=20.0)
    loop = make_loop(FrictionSlideDemo(), params)
    loop.start()
    for _ in range(1200):
        clock.advance(1.0 / 60.0)
        loop.scheduler.run_frame()
        assert loop.state.v >= 0.0
        if loop.status is not RunStatus.RUNNING:
            break
    assert loop.status is RunStatus.STOPPED
    assert loop.last_event.kind is EventKind.REST
    assert loop.state.v == 0.0
    travelled = loop.state.x - params.start
    assert abs(travelled - stopping_distance(params)) < 0.1


def test_acceleration_opposes_motion():
    demo = FrictionSlideDemo()
    params = FrictionSlideParameters(velocity=-3.0, start=10.0, mass=2.0, friction=0.5, gravity=10.0)
    s = demo.initial_state(params)
    assert np.isclose(demo.acceleration(s, params)[0], 5.0)


def test_rolling_resistance_and_drag_add_deceleration():
    demo = FrictionSlideDemo()
    base = FrictionSlideParameters(velocity=5.0)
    extra = FrictionSlideParameters(velocity=5.0, rolling_resistance=0.05, drag=True)
    s = demo.initial_state(base)
    assert demo.acceleration(s, extra)[0] < demo.acceleration(s, base)[0] < 0.0
    assert stopping_distance(extra) < stopping_distance(base)


def test_wall_reflects_and_slides_back(make_loop, run):
    params = FrictionSlideParameters(velocity=8.0, friction=0.1, track_length=4.0, restitution=0.5)
    loop = make_loop(FrictionSlideDemo(), params)
    loop.start()
    run(loop, 3000)
    bounces = [e for e in loop.events if e.kind is EventKind.BOUNCE]
    assert bounces
    assert loop.status is RunStatus.STOPPED
    lo, hi = params.bounds
    assert lo <= loop.state.x <= hi


def test_wall_without_restitution_stops(make_loop, run):
    params = FrictionSlideParameters(velocity=8.0, friction=0.1, track_length=4.0, restitution=0.0)
    loop = make_loop(FrictionSlideDemo(), params)
    loop.start()
    run(loop, 600)
    assert loop.last_event.kind is EventKind.WALL
    assert loop.state.x == params.bounds[1]


def test_friction_force_metric():
    params = FrictionSlideParameters(mass=2.0, friction=0.3, gravity=10.0)
    assert np.isclose(friction_force(params), 6.0)


def test_slow_wall_bounce_is_recorded_before_rest(make_loop, run):
    params = FrictionSlideParameters(velocity=8.0, friction=0.1, track_length=4.0, restitution=0.5)
    loop = make_loop(FrictionSlideDemo(), params)
    loop.start()
    _, hi = params.bounds
    loop.state.x = hi - 0.001
    loop.state.v = 0.8
    run(loop, 5)
    assert loop.status is RunStatus.STOPPED
    assert [e.kind for e in loop.events] == [EventKind.BOUNCE, EventKind.REST]
    assert loop.state.bounces == 1
    assert loop.state.v == 0.0
    assert loop.state.x == hi
