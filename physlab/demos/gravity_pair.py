# physlab/demos/gravity_pair.py
# 두 질점 사이 만유인력

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple
import numpy

import config
from physlab.body import PairState
from physlab.collision import bodies_touching
from physlab.demos.base import Demo
from physlab.event import Event, EventKind
from physlab.force import Force
from physlab.integrator import Method
from physlab.units import clamp_min


@dataclass(frozen=True)
class GravityPairParameters:
    mass1: float = config.Defaults.GravityPair.mass1 # [kg]
    mass2: float = config.Defaults.GravityPair.mass2 # [kg]
    radius1: float = config.Defaults.GravityPair.radius1 # [m]
    radius2: float = config.Defaults.GravityPair.radius2 # [m]
    separation: float = config.Defaults.GravityPair.separation # 초기 중심 거리 [m]
    velocity1: Tuple[float, float] = (0.0, 0.0) # [m/s]
    velocity2: Tuple[float, float] = (0.0, 0.0) # [m/s]
    G: float = config.G
    # 화면에서 빨리 보이도록 힘에 곱하는 배율. 실제 물리 상수가 아님
    gravity_multiplier: float = config.Defaults.GravityPair.gravity_multiplier
    domain_radius: float = math.inf # 질량 중심에서 이 거리를 벗어나면 정지 [m]

    def __post_init__(self) -> None:
        object.__setattr__(self, "mass1", clamp_min("mass1", self.mass1, config.Limits.MASS))
        object.__setattr__(self, "mass2", clamp_min("mass2", self.mass2, config.Limits.MASS))
        object.__setattr__(self, "radius1", clamp_min("radius1", self.radius1, config.Limits.RADIUS))
        object.__setattr__(self, "radius2", clamp_min("radius2", self.radius2, config.Limits.RADIUS))
        object.__setattr__(self, "separation", clamp_min("separation", self.separation, self.radius1 + self.radius2))
        object.__setattr__(self, "gravity_multiplier", clamp_min("gravity_multiplier", self.gravity_multiplier, 0.0))

    @property
    def effective_G(self) -> float:
        """화면 배율을 곱한 G"""
        return self.G * self.gravity_multiplier


class GravityPairDemo(Demo):
    """
    두 물체 인력 데모
        - 물체 1은 (-d/2, 0), 물체 2는 (+d/2, 0) 에서 출발 (원점이 처음 두 중심의 가운데)
        - 각 물체 가속도는 F/m_i, 서로 반대 방향 (운동량 보존)
        - 두 원이 닿으면 반발 없이 정지
    """
    name = "gravity_pair"
    Parameters = GravityPairParameters
    method = Method.SEMI_IMPLICIT_EULER
    fixed_step = True
    tracks_trajectory = True

    def initial_state(self, params: GravityPairParameters) -> PairState:
        half = 0.5 * params.separation
        return PairState(
            position=[[-half, 0.0], [half, 0.0]],
            velocity=[list(params.velocity1), list(params.velocity2)],
        )

    def acceleration(self, state: PairState, params: GravityPairParameters) -> numpy.ndarray:
        F = Force.newton_gravity(state.r1, state.r2, params.mass1, params.mass2, params.G, params.gravity_multiplier)
        return numpy.stack([F / params.mass1, -F / params.mass2])

    def check(self, state: PairState, params: GravityPairParameters) -> Optional[Event]:
        if bodies_touching(state.r1, state.r2, params.radius1, params.radius2):
            return Event(EventKind.CONTACT, state.time, terminal=True, detail=f"separation {state.separation():.3f} m")
        if math.isfinite(params.domain_radius):
            com = center_of_mass(state, params)
            for r in (state.r1, state.r2):
                if numpy.linalg.norm(r - com) > params.domain_radius:
                    return Event(EventKind.BOUNDARY, state.time, terminal=True)
        return None

    def metrics(self, state: PairState, params: GravityPairParameters) -> dict:
        return {
            "time": state.time,
            "distance": state.separation(),
            "force": force(state, params),
            "display_force": force(state, params) * params.gravity_multiplier,
            "potential_energy": potential_energy(state, params),
            "kinetic_energy": kinetic_energy(state, params),
            "momentum": momentum(state, params),
            "time_to_collision": time_to_collision(state.separation(), params),
        }


def force(state: PairState, params: GravityPairParameters) -> float:
    """실제 만유인력 크기 G m1 m2 / r^2 [N] (화면 배율 미적용)"""
    r = state.separation()
    return params.G * params.mass1 * params.mass2 / (r * r)

def potential_energy(state: PairState, params: GravityPairParameters) -> float:
    """-G' m1 m2 / r (G' 는 화면 배율을 곱한 값, 시뮬레이션과 같은 기준)"""
    return -params.effective_G * params.mass1 * params.mass2 / state.separation()

def kinetic_energy(state: PairState, params: GravityPairParameters) -> float:
    return 0.5 * params.mass1 * float(numpy.dot(state.v1, state.v1)) + 0.5 * params.mass2 * float(numpy.dot(state.v2, state.v2))

def momentum(state: PairState, params: GravityPairParameters) -> numpy.ndarray:
    return params.mass1 * state.v1 + params.mass2 * state.v2

def center_of_mass(state: PairState, params: GravityPairParameters) -> numpy.ndarray:
    return (params.mass1 * state.r1 + params.mass2 * state.r2) / (params.mass1 + params.mass2)

def time_to_collision(separation: float, params: GravityPairParameters) -> float:
    """
    정지 상태에서 출발한 두 물체가 반지름 합 거리까지 가까워지는 시간 (직선 낙하 해)
        t = sqrt(r0^3 / (2μ)) * (sqrt(x(1-x)) + arccos(sqrt(x))),  x = r_c / r0, μ = G'(m1+m2)
    """
    mu = params.effective_G * (params.mass1 + params.mass2)
    rc = params.radius1 + params.radius2
    r0 = float(separation)
    if r0 <= rc:
        return 0.0
    if mu <= 0.0:
        return math.inf
    x = rc / r0
    return math.sqrt(r0**3 / (2.0 * mu)) * (math.sqrt(x * (1.0 - x)) + math.acos(math.sqrt(x)))
