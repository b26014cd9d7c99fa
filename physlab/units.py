# physlab/units.py
# 단위 변환 및 벡터 보조 함수 모음
# 화면(px) 값은 상태<->화면 경계에서만 변환하고 힘 계산에는 항상 SI 단위를 사용함

from __future__ import annotations

import logging
import math
import numpy

import config

logger = logging.getLogger(__name__)

EPS = 1e-12


def m_to_px(meters, scale: float = config.PIXELS_PER_METER):
    """미터 -> 픽셀"""
    return meters * scale

def px_to_m(pixels, scale: float = config.PIXELS_PER_METER):
    """픽셀 -> 미터"""
    return pixels / scale

def deg_to_rad(deg: float) -> float:
    return math.radians(float(deg))

def rad_to_deg(rad: float) -> float:
    return math.degrees(float(rad))


def norm(v) -> float:
    v = numpy.asarray(v, dtype=float).reshape(-1)
    return float(numpy.sqrt(numpy.dot(v, v)))

def unit(v) -> numpy.ndarray:
    """단위 벡터 (길이가 0이거나 유한하지 않으면 x축 단위 벡터)"""
    v = numpy.asarray(v, dtype=float).reshape(-1)
    if not numpy.all(numpy.isfinite(v)):
        out = numpy.zeros_like(v); out[0] = 1.0
        return out
    n = norm(v)
    if (not math.isfinite(n)) or n < EPS:
        out = numpy.zeros_like(v); out[0] = 1.0
        return out
    return v / n

def sign(x: float) -> float:
    """부호 (0이면 0)"""
    x = float(x)
    if x > 0.0:
        return 1.0
    if x < 0.0:
        return -1.0
    return 0.0


def clamp_min(name: str, value: float, minimum: float) -> float:
    """입력 경계에서 파라미터를 최솟값 이상으로 강제

    Args:
        name (str): 파라미터 이름 (로그용)
        value (float): 입력값
        minimum (float): 허용 최솟값

    Returns:
        float: 보정된 값
    """
    value = float(value)
    if not math.isfinite(value) or value < minimum:
        logger.warning(f"{name}={value} is below the minimum, clamped to {minimum}")
        return float(minimum)
    return value

def clamp_range(name: str, value: float, lo: float, hi: float) -> float:
    """입력 경계에서 파라미터를 [lo, hi] 범위로 강제"""
    value = float(value)
    if not math.isfinite(value):
        logger.warning(f"{name}={value} is not finite, clamped to {lo}")
        return float(lo)
    if value < lo or value > hi:
        clamped = max(lo, min(hi, value))
        logger.warning(f"{name}={value} is out of range [{lo}, {hi}], clamped to {clamped}")
        return float(clamped)
    return value
