# physlab/demos/pendulum.py
# 비선형 감쇠 진자  θ'' = -(g/L) sin θ - b θ'

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple
import numpy

import config
from physlab.body import PendulumState
from physlab.collision import rest
from physlab.demos.base import Demo
from physlab.event import Event
from physlab.force import Angular
from physlab.integrator import Method
from physlab.units import clamp_min, clamp_range, deg_to_rad, px_to_m, rad_to_deg


@dataclass(frozen=True)
class PendulumParameters:
    length: float = config.Defaults.Pendulum.length # [m]
    gravity: float = config.g
    angle: float = config.Defaults.Pendulum.angle # 초기 각도 [deg], 수직 아래가 0
    damping: float = 0.0 # b [1/s]
    angular_velocity: float = 0.0 # 초기 각속도 [rad/s]
    mass: float = config.Defaults.Pendulum.mass # 에너지 표시용 [kg]
    rest_angular_speed: float = config.Rest.ANGULAR_SPEED
    rest_angle: float = config.Rest.ANGLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "length", clamp_min("length", self.length, config.Limits.LENGTH))
        object.__setattr__(self, "gravity", clamp_min("gravity", self.gravity, 0.0))
        object.__setattr__(self, "angle", clamp_range("angle", self.angle, -180.0, 180.0))
        object.__setattr__(self, "damping", clamp_min("damping", self.damping, 0.0))
        object.__setattr__(self, "mass", clamp_min("mass", self.mass, config.Limits.MASS))

    @classmethod
    def from_pixels(cls, length_px: float, scale: float = config.PIXELS_PER_METER, **kwargs) -> "PendulumParameters":
        """화면 입력(px 단위 줄 길이)으로부터 생성"""
        return cls(length=px_to_m(float(length_px), scale), **kwargs)

    @property
    def theta0(self) -> float:
        return deg_to_rad(self.angle)


class PendulumDemo(Demo):
    """
    진자 데모
    1/60 s 고정 스텝 누산기 + 반암시적 오일러 (각속도 먼저, 새 각속도로 각도 갱신)
    정지 상태에서는 초기 각도 변경이 바로 화면에 반영됨. 실행 중에는 다음 시작까지 보류
    """
    name = "pendulum"
    Parameters = PendulumParameters
    method = Method.SEMI_IMPLICIT_EULER
    fixed_step = True
    live_preview = True

    def initial_state(self, params: PendulumParameters) -> PendulumState:
        return PendulumState(position=[params.theta0], velocity=[params.angular_velocity])

    def acceleration(self, state: PendulumState, params: PendulumParameters) -> numpy.ndarray:
        alpha = Angular.gravity(state.theta, params.gravity, params.length) + Angular.damping(params.damping, state.omega)
        return numpy.array([alpha], dtype=float)

    def check(self, state: PendulumState, params: PendulumParameters) -> Optional[Event]:
        if params.damping <= 0.0:
            return None
        if abs(state.omega) < params.rest_angular_speed and abs(state.theta) < params.rest_angle:
            return rest(state)
        return None

    def metrics(self, state: PendulumState, params: PendulumParameters) -> dict:
        return {
            "time": state.time,
            "angle": rad_to_deg(state.theta),
            "angular_velocity": state.omega,
            "period_small_angle": small_angle_period(params),
            "period": period(params),
            "kinetic_energy": kinetic_energy(state, params),
            "potential_energy": potential_energy(state, params),
            "bob_position": bob_position(state, params),
        }


def small_angle_period(params: PendulumParameters) -> float:
    """T0 = 2π sqrt(L/g)"""
    if params.gravity <= 0.0:
        return math.inf
    return 2.0 * math.pi * math.sqrt(params.length / params.gravity)

def period(params: PendulumParameters) -> float:
    """|θ0| > 0.1 rad 이면 큰 진폭 급수 보정  T ≈ T0 (1 + θ0^2/16 + 11 θ0^4/3072)"""
    T0 = small_angle_period(params)
    theta0 = abs(params.theta0)
    if theta0 <= 0.1:
        return T0
    return T0 * (1.0 + theta0**2 / 16.0 + 11.0 * theta0**4 / 3072.0)

def kinetic_energy(state: PendulumState, params: PendulumParameters) -> float:
    return 0.5 * params.mass * (params.length * state.omega)**2

def potential_energy(state: PendulumState, params: PendulumParameters) -> float:
    """최저점 기준 m g L (1 - cos θ)"""
    return params.mass * params.gravity * params.length * (1.0 - math.cos(state.theta))

def bob_position(state: PendulumState, params: PendulumParameters) -> Tuple[float, float]:
    """고정점 기준 추 위치 (x 오른쪽 +, y 위쪽 +) [m]"""
    return (params.length * math.sin(state.theta), -params.length * math.cos(state.theta))
