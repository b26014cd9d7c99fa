# physlab/body.py

from __future__ import annotations

import copy
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Tuple
import numpy

import config


@dataclass
class SimulationState:
    """
    데모 하나의 실행 상태 (시뮬레이션 루프만 변경함)
        - position, velocity 는 같은 모양의 numpy 배열
        - 적분기는 이 두 배열과 time 만 다룸
        - 데모별 파생 필드는 하위 클래스의 속성으로 제공
    """
    position: numpy.ndarray
    velocity: numpy.ndarray
    time: float = 0.0 # 경과한 시뮬레이션 시간 [s]

    def __post_init__(self) -> None:
        self.position = numpy.array(self.position, dtype=float)
        self.velocity = numpy.array(self.velocity, dtype=float)
        if self.position.shape != self.velocity.shape:
            raise ValueError(f"position {self.position.shape} and velocity {self.velocity.shape} shapes differ")
        self.time = float(self.time)

    def is_finite(self) -> bool:
        return bool(numpy.all(numpy.isfinite(self.position)) and numpy.all(numpy.isfinite(self.velocity)) and numpy.isfinite(self.time))

    def copy(self):
        return copy.deepcopy(self)

    def speed(self) -> float:
        return float(numpy.linalg.norm(self.velocity))


@dataclass
class PointState(SimulationState):
    """1차원 점 물체 (낙하, 스프링, 마찰 미끄럼)"""
    bounces: int = 0 # 바닥/벽 충돌 횟수
    heading: float = 0.0 # 출발 시 운동 방향 부호 (마찰 미끄럼 전용)

    @property
    def x(self) -> float: return float(self.position[0])
    @x.setter
    def x(self, value: float) -> None: self.position[0] = float(value)

    @property
    def v(self) -> float: return float(self.velocity[0])
    @v.setter
    def v(self, value: float) -> None: self.velocity[0] = float(value)


@dataclass
class PendulumState(SimulationState):
    """진자 상태: position = [θ], velocity = [ω]"""
    @property
    def theta(self) -> float: return float(self.position[0])
    @theta.setter
    def theta(self, value: float) -> None: self.position[0] = float(value)

    @property
    def omega(self) -> float: return float(self.velocity[0])
    @omega.setter
    def omega(self, value: float) -> None: self.velocity[0] = float(value)


@dataclass
class PairState(SimulationState):
    """두 물체 상태: position, velocity 모양은 (2, 2) [물체, xy]"""
    @property
    def r1(self) -> numpy.ndarray: return self.position[0]
    @property
    def r2(self) -> numpy.ndarray: return self.position[1]
    @property
    def v1(self) -> numpy.ndarray: return self.velocity[0]
    @property
    def v2(self) -> numpy.ndarray: return self.velocity[1]

    def separation(self) -> float:
        return float(numpy.linalg.norm(self.position[1] - self.position[0]))


@dataclass
class ProjectileState(SimulationState):
    """포물선 상태: position = [x, y], velocity = [vx, vy]"""
    @property
    def x(self) -> float: return float(self.position[0])
    @property
    def y(self) -> float: return float(self.position[1])


@dataclass
class Trajectory:
    """경로 표시용 (시간, 위치) 샘플 목록. 실행 중에는 추가만 하고 (재)시작 시 비움
    최근 max_samples 개만 보관 (오래 도는 실행에서 메모리가 늘지 않도록)
    """
    max_samples: int = config.Display.TRAJECTORY_SAMPLES
    samples: Deque[Tuple[float, numpy.ndarray]] = field(init=False)

    def __post_init__(self) -> None:
        self.samples = deque(maxlen=int(self.max_samples))

    def append(self, t: float, position: numpy.ndarray) -> None:
        self.samples.append((float(t), numpy.array(position, dtype=float)))

    def clear(self) -> None:
        self.samples.clear()

    def times(self) -> numpy.ndarray:
        return numpy.array([t for t, _ in self.samples], dtype=float)

    def positions(self) -> numpy.ndarray:
        if not self.samples:
            return numpy.zeros((0,), dtype=float)
        return numpy.stack([p for _, p in self.samples])

    def recent(self, duration: float) -> List[Tuple[float, numpy.ndarray]]:
        """마지막 샘플 기준 duration 초 이내의 샘플 (시간 순)"""
        if not self.samples:
            return []
        t_end = self.samples[-1][0]
        out = []
        for t, p in reversed(self.samples):
            if t < t_end - duration:
                break
            out.append((t, p))
        out.reverse()
        return out

    def __len__(self) -> int:
        return len(self.samples)
