# physlab/collision.py
# 종료 정책에서 공통으로 쓰는 충돌/정지 판정 및 보정

from __future__ import annotations

import numpy

from physlab.body import SimulationState, PointState
from physlab.event import Event, EventKind


def snap_to_rest(state: SimulationState) -> None:
    """속도를 정확히 0으로 고정"""
    state.velocity[...] = 0.0

def rest(state: SimulationState, detail: str = "") -> Event:
    snap_to_rest(state)
    return Event(EventKind.REST, state.time, terminal=True, detail=detail)


def ground_bounce(state: PointState, floor: float, restitution: float, rest_speed: float) -> Event | None:
    """
    1차원 바닥 충돌 (위쪽이 +, floor 는 물체 중심이 닿을 수 있는 가장 낮은 위치)
        - 바닥을 뚫으면 floor 로 되돌리고 v' = -e v
        - 반발 후 속도가 rest_speed 미만이거나 e == 0 이면 정지
    """
    if state.x > floor:
        return None
    state.x = floor
    if state.v >= 0.0:
        return None
    state.v = -float(restitution) * state.v
    state.bounces += 1
    if restitution <= 0.0 or abs(state.v) < rest_speed:
        return rest(state, detail=f"after {state.bounces} bounces")
    return Event(EventKind.BOUNCE, state.time, terminal=False, detail=f"bounce {state.bounces}")


def wall_bounce(state: PointState, lo: float, hi: float, restitution: float) -> Event | None:
    """
    1차원 양쪽 벽 충돌 (lo, hi 는 물체 중심이 움직일 수 있는 범위)
        - restitution 이 0 이면 벽에서 정지 (WALL)
        - 그 외에는 v' = -e v 로 반사하고 진행 방향(heading)도 뒤집음
    """
    if lo < state.x < hi:
        return None
    moving_out = (state.x >= hi and state.v > 0.0) or (state.x <= lo and state.v < 0.0)
    state.x = min(max(state.x, lo), hi)
    if not moving_out:
        return None
    if restitution <= 0.0:
        state.v = 0.0
        return Event(EventKind.WALL, state.time, terminal=True)
    state.v = -float(restitution) * state.v
    state.heading = -state.heading
    state.bounces += 1
    return Event(EventKind.BOUNCE, state.time, terminal=False, detail=f"wall bounce {state.bounces}")


def bodies_touching(r1, r2, radius1: float, radius2: float) -> bool:
    """두 원의 중심 거리 <= 반지름 합 이면 접촉 (모두 미터 단위)"""
    d = numpy.asarray(r2, dtype=float) - numpy.asarray(r1, dtype=float)
    return float(numpy.hypot(d[0], d[1])) <= float(radius1) + float(radius2)
