# physlab/timestep.py
# 프레임 사이 실제 경과 시간을 물리 스텝 목록으로 바꾸는 정책

from __future__ import annotations

import logging
from typing import List

import config

logger = logging.getLogger(__name__)


class VariableStep:
    """프레임 간격을 그대로 dt 로 사용. 범위 (0, max_dt] 밖의 프레임은 잘라 쓰지 않고 통째로 버림"""
    def __init__(self, max_dt: float = config.Step.MAX_FRAME_DT):
        self.max_dt = float(max_dt)

    def reset(self) -> None:
        pass

    def plan(self, frame_dt: float) -> List[float]:
        frame_dt = float(frame_dt)
        if not (0.0 < frame_dt <= self.max_dt):
            logger.debug(f"skipping frame with dt={frame_dt:.4f}s")
            return []
        return [frame_dt]


class FixedStep:
    """
    누산기 방식 고정 스텝
        - 프레임 간격을 누산기에 더하고 h 단위로 꺼내 씀
        - 범위 (0, max_dt] 밖의 프레임은 누산기에 더하지 않음
        - 남은 시간(< h)은 다음 프레임으로 넘김
    """
    def __init__(self, h: float = config.Step.FIXED_DT, max_dt: float = config.Step.MAX_FRAME_DT, max_substeps: int = config.Step.MAX_SUBSTEPS):
        self.h = float(h)
        self.max_dt = float(max_dt)
        self.max_substeps = int(max_substeps)
        self.accumulator = 0.0

    def reset(self) -> None:
        self.accumulator = 0.0

    def plan(self, frame_dt: float) -> List[float]:
        frame_dt = float(frame_dt)
        if not (0.0 < frame_dt <= self.max_dt):
            logger.debug(f"skipping frame with dt={frame_dt:.4f}s")
            return []
        self.accumulator += frame_dt
        # 부동소수점 오차로 h 가 한 번 덜 빠지는 것 방지
        n = int((self.accumulator + 1e-9) // self.h)
        if n > self.max_substeps:
            logger.debug(f"dropping {n - self.max_substeps} fixed steps")
            n = self.max_substeps
            self.accumulator = 0.0
        else:
            self.accumulator = max(self.accumulator - n * self.h, 0.0)
        return [self.h] * n
