# physlab/shape.py

from __future__ import annotations

import math
from dataclasses import dataclass
from abc import ABC, abstractmethod


class Shape(ABC):
    """물체의 기하학적 형태 추상 클래스"""
    @abstractmethod
    def ref_area(self) -> float: """항력 계산에 쓰이는 기준(투영) 면적 A [m^2]"""; raise NotImplementedError
    @abstractmethod
    def half_width(self) -> float: """중심에서 수평 방향 끝까지 거리 [m]"""; raise NotImplementedError

@dataclass(frozen=True)
class Sphere(Shape):
    R: float  # radius [m]
    def ref_area(self) -> float: return math.pi * self.R**2
    def half_width(self) -> float: return self.R

@dataclass(frozen=True)
class Box(Shape):
    w: float
    h: float
    d: float
    def ref_area(self) -> float: return self.h * self.d  # x축 방향으로 움직일 때의 정면 면적
    def half_width(self) -> float: return 0.5 * self.w
