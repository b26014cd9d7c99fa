# physlab/demos/friction_slide.py
# 운동 마찰 (+ 선택적 공기 저항, 구름 저항) 으로 감속하는 상자

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional
import numpy

import config
from physlab.body import PointState
from physlab.collision import rest, wall_bounce
from physlab.demos.base import Demo
from physlab.drag_coefficient import CD
from physlab.event import Event
from physlab.force import Force
from physlab.integrator import Method
from physlab.shape import Box
from physlab.units import clamp_min, clamp_range, sign


@dataclass(frozen=True)
class FrictionSlideParameters:
    mass: float = config.Defaults.FrictionSlide.mass # [kg]
    gravity: float = config.g
    friction: float = config.Defaults.FrictionSlide.friction # 운동 마찰 계수 μ
    velocity: float = config.Defaults.FrictionSlide.velocity # 초기 속도 [m/s]
    rolling_resistance: float = 0.0 # 구름 저항 계수 C_rr
    drag: bool = False
    drag_coefficient: Optional[float] = None # None 이면 상자 형태 기본값
    air_density: float = config.Density.Gas.Air
    box: Box = field(default_factory=lambda: Box(*config.Defaults.FrictionSlide.box))
    track_length: float = config.Defaults.FrictionSlide.track_length # 왼쪽 벽(0) ~ 오른쪽 벽 [m]
    start: Optional[float] = None # 상자 중심 시작 위치 [m], None 이면 왼쪽 벽에 붙여서
    restitution: float = config.Defaults.FrictionSlide.restitution # 벽 반발 계수
    rest_speed: float = config.Rest.SPEED

    def __post_init__(self) -> None:
        object.__setattr__(self, "mass", clamp_min("mass", self.mass, config.Limits.MASS))
        object.__setattr__(self, "gravity", clamp_min("gravity", self.gravity, 0.0))
        object.__setattr__(self, "friction", clamp_min("friction", self.friction, 0.0))
        object.__setattr__(self, "rolling_resistance", clamp_min("rolling_resistance", self.rolling_resistance, 0.0))
        object.__setattr__(self, "track_length", clamp_min("track_length", self.track_length, self.box.w + config.Limits.LENGTH))
        object.__setattr__(self, "restitution", clamp_range("restitution", self.restitution, 0.0, 0.99))
        lo, hi = self.bounds
        x0 = lo if self.start is None else clamp_range("start", self.start, lo, hi)
        object.__setattr__(self, "start", x0)

    @property
    def bounds(self):
        """상자 중심이 움직일 수 있는 범위"""
        return self.box.half_width(), self.track_length - self.box.half_width()

    @property
    def cd(self) -> float:
        return CD.for_shape(self.box) if self.drag_coefficient is None else float(self.drag_coefficient)


class FrictionSlideDemo(Demo):
    """
    마찰 미끄럼 데모
        - 가속도는 항상 현재 진행 방향(heading)의 반대
        - 이전/새 속도 평균으로 위치 갱신
        - 속도 부호가 뒤집히거나 임계값 아래면 0으로 고정하고 정지 (운동 마찰이 운동 방향을 바꾸지 않음)
    """
    name = "friction_slide"
    Parameters = FrictionSlideParameters
    method = Method.AVERAGE_VELOCITY
    fixed_step = False

    def initial_state(self, params: FrictionSlideParameters) -> PointState:
        return PointState(position=[params.start], velocity=[params.velocity], heading=sign(params.velocity))

    def acceleration(self, state: PointState, params: FrictionSlideParameters) -> numpy.ndarray:
        direction = state.heading
        F = Force.kinetic_friction(params.friction, params.mass, params.gravity, direction)
        F += Force.rolling_resistance(params.rolling_resistance, params.mass, params.gravity, direction)
        if params.drag:
            F += float(Force.drag(state.v, params.air_density, params.box.ref_area(), params.cd))
        return numpy.array([F / params.mass], dtype=float)

    def check(self, state: PointState, params: FrictionSlideParameters) -> List[Event]:
        lo, hi = params.bounds
        events = []
        bounce = wall_bounce(state, lo, hi, params.restitution)
        if bounce is not None:
            events.append(bounce)
            if bounce.terminal:
                return events
        if state.heading == 0.0 or state.v * state.heading <= 0.0 or abs(state.v) < params.rest_speed:
            events.append(rest(state))
        return events

    def metrics(self, state: PointState, params: FrictionSlideParameters) -> dict:
        return {
            "time": state.time,
            "position": state.x,
            "speed": abs(state.v),
            "friction_force": friction_force(params),
            "stopping_distance": stopping_distance(params),
            "distance_from_start": abs(state.x - params.start),
            "kinetic_energy": 0.5 * params.mass * state.v**2,
        }


def friction_force(params: FrictionSlideParameters) -> float:
    """운동 마찰력 크기 μ m g [N]"""
    return params.friction * params.mass * params.gravity

def stopping_distance(params: FrictionSlideParameters) -> float:
    """공기 저항/벽 없이 정지까지 이동 거리 v0^2 / (2 (μ + C_rr) g)"""
    decel = (params.friction + params.rolling_resistance) * params.gravity
    if decel <= 0.0:
        return math.inf
    return params.velocity**2 / (2.0 * decel)
