# physlab/force.py
# 각종 힘을 계산하는 함수 모음 (중력Fg, 항력Fd, 탄성력Fs, 점성 감쇠Fc, 마찰력Ff, 구름 저항Frr, 만유인력Fgrav)
# 모든 입력과 출력은 SI 단위. 화면 좌표(px)를 넣지 말 것

import math
import numpy

import config
from physlab.units import sign, unit


class Force:
    """병진 운동에 관한 힘 계산 함수 모음"""
    @staticmethod
    def gravity(mass: float, g: float = config.g) -> float:
        """중력 계산

        Args:
            mass (float): 질량 [kg]
            g (float): 중력 가속도 [m/s^2]

        Returns:
            float: 수직(y, 위쪽이 +) 방향 중력(무게)
        """
        return -float(mass) * float(g)

    @staticmethod
    def drag(velocity, density_fluid: float, area: float, cd: float) -> numpy.ndarray:
        """이차 공기 저항 F = -1/2 ρ A C_D |v| v (속도 반대 방향)

        Args:
            velocity: 속도 [m/s] (스칼라 또는 벡터)
            density_fluid (float): 유체 밀도 [kg/m^3]
            area (float): 투영 단면적 [m^2]
            cd (float): 항력 계수

        Returns:
            numpy.ndarray: 항력 (velocity 와 같은 모양)
        """
        v = numpy.asarray(velocity, dtype=float)
        return -0.5 * density_fluid * area * cd * numpy.linalg.norm(v) * v

    @staticmethod
    def hooke(k: float, displacement):
        """탄성력 F = -k x"""
        return -float(k) * displacement

    @staticmethod
    def viscous(c: float, velocity):
        """선형 점성 감쇠 F = -c v"""
        return -float(c) * velocity

    @staticmethod
    def kinetic_friction(mu: float, mass: float, g: float, direction: float) -> float:
        """운동 마찰력 크기 μ m g, 운동 방향(direction 부호)의 반대로 작용"""
        return -sign(direction) * float(mu) * float(mass) * float(g)

    @staticmethod
    def rolling_resistance(crr: float, mass: float, g: float, direction: float) -> float:
        """구름 저항 C_rr m g, 운동 방향의 반대로 작용"""
        return -sign(direction) * float(crr) * float(mass) * float(g)

    @staticmethod
    def newton_gravity(r1, r2, m1: float, m2: float, G: float = config.G, multiplier: float = 1.0) -> numpy.ndarray:
        """두 질점 사이 만유인력 F = G m1 m2 / r^2 (물체 1이 받는 힘, 물체 2 방향)

        Args:
            r1, r2: 두 물체의 위치 [m]
            m1, m2 (float): 질량 [kg]
            G (float): 만유인력 상수
            multiplier (float): 화면 진행 속도 조절용 배율. 물리 상수가 아님

        Returns:
            numpy.ndarray: 물체 1이 받는 힘 (물체 2는 크기가 같고 방향이 반대)
        """
        d = numpy.asarray(r2, dtype=float) - numpy.asarray(r1, dtype=float)
        dist = numpy.linalg.norm(d)
        Fmag = float(multiplier) * float(G) * float(m1) * float(m2) / (dist * dist)
        return Fmag * unit(d)


class Angular:
    """진자 회전 운동에 관한 각가속도 계산 함수 모음"""
    @staticmethod
    def gravity(theta: float, g: float, length: float) -> float:
        """비선형 복원 각가속도 -(g/L) sin θ"""
        return -(float(g) / float(length)) * math.sin(theta)

    @staticmethod
    def damping(b: float, omega: float) -> float:
        """선형 감쇠 각가속도 -b ω"""
        return -float(b) * float(omega)
