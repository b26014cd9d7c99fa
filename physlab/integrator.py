# physlab/integrator.py

# 상태를 시간 간격 dt 만큼 진행시키는 적분기 모음
# 진동계에서 에너지가 쌓이지 않도록 속도를 먼저 갱신하고 새 속도로 위치를 갱신하는 반암시적(심플렉틱) 오일러를 기본으로 사용
# 데모 하나는 실행 내내 한 가지 방법만 사용함

from enum import Enum
from typing import Callable
import numpy

from physlab.body import SimulationState

AccelFn = Callable[[SimulationState], numpy.ndarray]  # (state) -> acceleration


class Method(Enum):
    SEMI_IMPLICIT_EULER = "semi_implicit_euler"
    AVERAGE_VELOCITY = "average_velocity"
    CLOSED_FORM = "closed_form" # 적분하지 않고 경과 시간에서 해를 직접 계산 (데모가 advance 를 직접 구현)


def semi_implicit_euler(state: SimulationState, dt: float, acceleration: AccelFn) -> None:
    """단일 반암시적 오일러 스텝
        v <- v + a(x, v) * dt
        x <- x + v * dt   (갱신된 v 사용)
    """
    a = numpy.asarray(acceleration(state), dtype=float)
    state.velocity += a * dt
    state.position += state.velocity * dt
    state.time += dt


def average_velocity(state: SimulationState, dt: float, acceleration: AccelFn) -> None:
    """이전 속도와 새 속도의 평균으로 위치를 갱신 (사다리꼴/Heun 유사)
        v1 <- v0 + a(x, v0) * dt
        x  <- x + (v0 + v1) / 2 * dt
    """
    a = numpy.asarray(acceleration(state), dtype=float)
    v0 = state.velocity.copy()
    state.velocity += a * dt
    state.position += 0.5 * (v0 + state.velocity) * dt
    state.time += dt


_STEPPERS = {
    Method.SEMI_IMPLICIT_EULER: semi_implicit_euler,
    Method.AVERAGE_VELOCITY: average_velocity,
}

def step(method: Method, state: SimulationState, dt: float, acceleration: AccelFn) -> None:
    """method 로 state 를 dt 만큼 진행. 결과가 유한한지는 호출하는 쪽(시뮬레이션 루프)이 확인함"""
    dt = float(dt)
    if not dt > 0.0:
        raise ValueError(f"dt must be > 0, got {dt}")
    if method not in _STEPPERS:
        raise ValueError(f"{method} is not a stepping method")
    _STEPPERS[method](state, dt, acceleration)
