# physlab/demos/drop.py
# 자유 낙하 (선택적 이차 공기 저항) + 바닥 반발

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional
import numpy

import config
from physlab.body import PointState
from physlab.collision import ground_bounce
from physlab.demos.base import Demo
from physlab.drag_coefficient import CD
from physlab.event import Event
from physlab.force import Force
from physlab.integrator import Method
from physlab.shape import Sphere
from physlab.units import clamp_min, clamp_range


@dataclass(frozen=True)
class DropParameters:
    mass: float = config.Defaults.Drop.mass # [kg]
    gravity: float = config.g # [m/s^2]
    height: float = config.Defaults.Drop.height # 시작 시 공 중심 높이 [m]
    radius: float = config.Defaults.Drop.radius # [m]
    restitution: float = config.Defaults.Drop.restitution # 반발 계수 e
    drag: bool = False # 공기 저항 사용 여부
    drag_coefficient: Optional[float] = None # None 이면 구의 기본값
    air_density: float = config.Defaults.Drop.air_density # [kg/m^3]
    rest_speed: float = config.Rest.SPEED # [m/s]

    def __post_init__(self) -> None:
        object.__setattr__(self, "mass", clamp_min("mass", self.mass, config.Limits.MASS))
        object.__setattr__(self, "gravity", clamp_min("gravity", self.gravity, 0.0))
        object.__setattr__(self, "radius", clamp_min("radius", self.radius, config.Limits.RADIUS))
        object.__setattr__(self, "height", clamp_min("height", self.height, self.radius))
        # e = 1 이면 영원히 튀므로 [0, 1) 로 제한
        object.__setattr__(self, "restitution", clamp_range("restitution", self.restitution, 0.0, 0.99))
        object.__setattr__(self, "air_density", clamp_min("air_density", self.air_density, 0.0))

    @property
    def shape(self) -> Sphere:
        return Sphere(self.radius)

    @property
    def cd(self) -> float:
        return CD.for_shape(self.shape) if self.drag_coefficient is None else float(self.drag_coefficient)


class DropDemo(Demo):
    """
    공 낙하 데모
        - 상태: 바닥에서 공 중심까지 높이 y (위쪽 +), 수직 속도 v
        - 단조 운동이라 프레임 간격을 그대로 쓰고 0.1 s 보다 긴 프레임은 버림
        - 바닥 충돌 시에만 정지 판정 (최고점에서는 속도가 0이어도 정지하지 않음)
    """
    name = "drop"
    Parameters = DropParameters
    method = Method.SEMI_IMPLICIT_EULER
    fixed_step = False

    def initial_state(self, params: DropParameters) -> PointState:
        return PointState(position=[params.height], velocity=[0.0])

    def acceleration(self, state: PointState, params: DropParameters) -> numpy.ndarray:
        F = Force.gravity(params.mass, params.gravity)
        if params.drag:
            F = F + Force.drag(state.velocity, params.air_density, params.shape.ref_area(), params.cd)
        return numpy.asarray(F, dtype=float).reshape(1) / params.mass

    def check(self, state: PointState, params: DropParameters) -> Optional[Event]:
        return ground_bounce(state, floor=params.shape.half_width(), restitution=params.restitution, rest_speed=params.rest_speed)

    def metrics(self, state: PointState, params: DropParameters) -> dict:
        return {
            "time": state.time,
            "height": state.x - params.radius,
            "speed": abs(state.v),
            "kinetic_energy": kinetic_energy(state, params),
            "potential_energy": potential_energy(state, params),
            "terminal_velocity": terminal_velocity(params),
            "time_to_ground": time_to_ground(state, params),
            "bounces": state.bounces,
        }


def kinetic_energy(state: PointState, params: DropParameters) -> float:
    return 0.5 * params.mass * state.v**2

def potential_energy(state: PointState, params: DropParameters) -> float:
    """바닥 접촉 위치 기준 위치 에너지"""
    return params.mass * params.gravity * (state.x - params.radius)

def terminal_velocity(params: DropParameters) -> float:
    """종단 속도 sqrt(2 m g / (ρ C_D A)), 공기 저항이 없으면 inf"""
    k = params.air_density * params.cd * params.shape.ref_area()
    if not params.drag or k <= 0.0:
        return math.inf
    return math.sqrt(2.0 * params.mass * params.gravity / k)

def time_to_ground(state: PointState, params: DropParameters) -> float:
    """공기 저항을 무시했을 때 현재 상태에서 바닥까지 남은 시간
        h + v t - 1/2 g t^2 = 0 의 양의 근
    """
    h = max(state.x - params.radius, 0.0)
    v, g = state.v, params.gravity
    if g <= 0.0:
        return h / -v if v < 0.0 else math.inf
    return (v + math.sqrt(v * v + 2.0 * g * h)) / g
