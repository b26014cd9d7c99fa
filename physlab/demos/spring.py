# physlab/demos/spring.py
# 감쇠 스프링-질량 진동자

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional
import numpy

import config
from physlab.body import PointState
from physlab.collision import rest
from physlab.demos.base import Demo
from physlab.event import Event
from physlab.force import Force
from physlab.integrator import Method
from physlab.units import clamp_min

UNDERDAMPED = "underdamped"
CRITICALLY_DAMPED = "critically damped"
OVERDAMPED = "overdamped"


@dataclass(frozen=True)
class SpringParameters:
    mass: float = config.Defaults.Spring.mass # [kg]
    spring_constant: float = config.Defaults.Spring.spring_constant # k [N/m]
    damping: float = config.Defaults.Spring.damping # c [N*s/m]
    displacement: float = config.Defaults.Spring.displacement # 초기 변위 [m]
    velocity: float = 0.0 # 초기 속도 [m/s]
    rest_speed: float = config.Rest.SPEED
    rest_displacement: float = config.Rest.DISPLACEMENT

    def __post_init__(self) -> None:
        object.__setattr__(self, "mass", clamp_min("mass", self.mass, config.Limits.MASS))
        object.__setattr__(self, "spring_constant", clamp_min("spring_constant", self.spring_constant, config.Limits.SPRING_CONSTANT))
        object.__setattr__(self, "damping", clamp_min("damping", self.damping, 0.0))


class SpringDemo(Demo):
    """
    스프링 데모 (평형점 기준 변위 x)
    진동계라 1/60 s 고정 스텝 누산기 + 반암시적 오일러 사용
    정지 상태에서는 초기 변위 변경이 바로 화면에 반영됨
    """
    name = "spring"
    Parameters = SpringParameters
    method = Method.SEMI_IMPLICIT_EULER
    fixed_step = True
    tracks_trajectory = True
    live_preview = True

    def initial_state(self, params: SpringParameters) -> PointState:
        return PointState(position=[params.displacement], velocity=[params.velocity])

    def acceleration(self, state: PointState, params: SpringParameters) -> numpy.ndarray:
        F = Force.hooke(params.spring_constant, state.position) + Force.viscous(params.damping, state.velocity)
        return F / params.mass

    def check(self, state: PointState, params: SpringParameters) -> Optional[Event]:
        # 전환점에서는 속도만 0이므로 변위도 함께 확인
        if params.damping <= 0.0:
            return None
        if abs(state.v) < params.rest_speed and abs(state.x) < params.rest_displacement:
            return rest(state)
        return None

    def metrics(self, state: PointState, params: SpringParameters) -> dict:
        return {
            "time": state.time,
            "displacement": state.x,
            "velocity": state.v,
            "natural_frequency": natural_frequency(params),
            "damping_ratio": damping_ratio(params),
            "regime": regime(params),
            "damped_frequency": damped_frequency(params),
            "period": period(params),
            "kinetic_energy": kinetic_energy(state, params),
            "potential_energy": potential_energy(state, params),
            "total_energy": total_energy(state, params),
        }


def natural_frequency(params: SpringParameters) -> float:
    """고유 각진동수 ω0 = sqrt(k/m) [rad/s]"""
    return math.sqrt(params.spring_constant / params.mass)

def damping_ratio(params: SpringParameters) -> float:
    """감쇠비 ζ = c / (2 sqrt(k m))"""
    return params.damping / (2.0 * math.sqrt(params.spring_constant * params.mass))

def regime(params: SpringParameters) -> str:
    zeta = damping_ratio(params)
    if abs(zeta - 1.0) < 0.01:
        return CRITICALLY_DAMPED
    if zeta < 1.0:
        return UNDERDAMPED
    return OVERDAMPED

def damped_frequency(params: SpringParameters) -> float:
    """감쇠 각진동수 ωd = ω0 sqrt(1 - ζ^2), 과감쇠/임계감쇠면 0"""
    zeta = damping_ratio(params)
    if regime(params) != UNDERDAMPED:
        return 0.0
    return natural_frequency(params) * math.sqrt(1.0 - zeta * zeta)

def period(params: SpringParameters) -> float:
    """비감쇠 주기 2π/ω0 [s]"""
    return 2.0 * math.pi / natural_frequency(params)

def kinetic_energy(state: PointState, params: SpringParameters) -> float:
    return 0.5 * params.mass * state.v**2

def potential_energy(state: PointState, params: SpringParameters) -> float:
    return 0.5 * params.spring_constant * state.x**2

def total_energy(state: PointState, params: SpringParameters) -> float:
    return kinetic_energy(state, params) + potential_energy(state, params)
