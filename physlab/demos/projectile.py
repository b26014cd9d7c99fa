# physlab/demos/projectile.py
# 공기 저항 없는 포물선 운동 (닫힌 해를 경과 시간에서 직접 계산)

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional
import numpy

import config
from physlab.body import ProjectileState
from physlab.demos.base import Demo
from physlab.event import Event, EventKind
from physlab.integrator import Method
from physlab.units import clamp_min, clamp_range, deg_to_rad


@dataclass(frozen=True)
class ProjectileParameters:
    angle: float = config.Defaults.Projectile.angle # 발사각 [deg]
    velocity: float = config.Defaults.Projectile.velocity # 발사 속력 [m/s]
    gravity: float = config.g
    height: float = config.Defaults.Projectile.height # 발사 높이 y0 [m]
    domain_width: float = config.Defaults.Projectile.domain_width # 이 x 를 넘으면 정지 [m]

    def __post_init__(self) -> None:
        object.__setattr__(self, "angle", clamp_range("angle", self.angle, 0.0, 90.0))
        object.__setattr__(self, "velocity", clamp_min("velocity", self.velocity, 0.0))
        object.__setattr__(self, "gravity", clamp_min("gravity", self.gravity, 0.0))
        object.__setattr__(self, "height", clamp_min("height", self.height, 0.0))

    @property
    def vx(self) -> float:
        return self.velocity * math.cos(deg_to_rad(self.angle))

    @property
    def vy(self) -> float:
        return self.velocity * math.sin(deg_to_rad(self.angle))


def position_at(t: float, params: ProjectileParameters) -> numpy.ndarray:
    """x = vx t,  y = y0 + vy t - 1/2 g t^2"""
    return numpy.array([params.vx * t, params.height + params.vy * t - 0.5 * params.gravity * t * t], dtype=float)

def velocity_at(t: float, params: ProjectileParameters) -> numpy.ndarray:
    return numpy.array([params.vx, params.vy - params.gravity * t], dtype=float)


class ProjectileDemo(Demo):
    """
    포물선 데모
    적분기를 쓰지 않고 매 스텝 경과 시간에서 닫힌 해를 다시 계산함 (한 실행 안에서 섞지 않음)
    정지 상태에서는 발사각/속력 변경이 초기 속도 화살표에 바로 반영됨
    """
    name = "projectile"
    Parameters = ProjectileParameters
    method = Method.CLOSED_FORM
    fixed_step = False
    tracks_trajectory = True
    live_preview = True

    def initial_state(self, params: ProjectileParameters) -> ProjectileState:
        return ProjectileState(position=position_at(0.0, params), velocity=velocity_at(0.0, params))

    def acceleration(self, state: ProjectileState, params: ProjectileParameters) -> numpy.ndarray:
        return numpy.array([0.0, -params.gravity], dtype=float)

    def advance(self, state: ProjectileState, params: ProjectileParameters, dt: float) -> None:
        t = state.time + float(dt)
        state.position[...] = position_at(t, params)
        state.velocity[...] = velocity_at(t, params)
        state.time = t

    def check(self, state: ProjectileState, params: ProjectileParameters) -> Optional[Event]:
        if state.time > 0.0 and state.y <= 0.0:
            t_land = time_of_flight(params)
            if not math.isfinite(t_land):
                # 중력이 0: 바닥에서 위로 올라갈 수 없으면 현재 위치에서 착지 처리
                if params.vy > 0.0:
                    return None
                state.position[1] = 0.0
                return Event(EventKind.LANDED, state.time, terminal=True, detail=f"range {state.x:.2f} m")
            # 정확한 착지 순간으로 되돌림
            state.time = t_land
            state.position[...] = position_at(t_land, params)
            state.position[1] = 0.0
            state.velocity[...] = velocity_at(t_land, params)
            return Event(EventKind.LANDED, t_land, terminal=True, detail=f"range {state.x:.2f} m")
        if state.x >= params.domain_width:
            return Event(EventKind.BOUNDARY, state.time, terminal=True)
        return None

    def metrics(self, state: ProjectileState, params: ProjectileParameters) -> dict:
        return {
            "time": state.time,
            "x": state.x,
            "y": state.y,
            "speed": state.speed(),
            "time_of_flight": time_of_flight(params),
            "max_height": max_height(params),
            "range": flight_range(params),
        }


def time_of_flight(params: ProjectileParameters) -> float:
    """y(t) = 0 의 양의 근. 중력이 0이면 inf"""
    g, vy, y0 = params.gravity, params.vy, params.height
    if g <= 0.0:
        return math.inf
    return (vy + math.sqrt(vy * vy + 2.0 * g * y0)) / g

def max_height(params: ProjectileParameters) -> float:
    if params.gravity <= 0.0:
        return math.inf if params.vy > 0.0 else params.height
    return params.height + params.vy**2 / (2.0 * params.gravity)

def flight_range(params: ProjectileParameters) -> float:
    return params.vx * time_of_flight(params)

def preview_path(params: ProjectileParameters, n: int = 50) -> numpy.ndarray:
    """발사 전 미리보기 경로 (n, 2). 착지 또는 영역 끝까지"""
    T = time_of_flight(params)
    if not math.isfinite(T):
        T = params.domain_width / params.vx if params.vx > 0.0 else 10.0
    ts = numpy.linspace(0.0, T, int(n))
    return numpy.stack([position_at(t, params) for t in ts])
