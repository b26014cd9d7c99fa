# physlab/scheduler.py

from __future__ import annotations

import itertools
import time
from typing import Callable, Dict, Optional

FrameCallback = Callable[[float], None]  # (now) -> None


class FrameScheduler:
    """
    애니메이션 프레임 콜백 큐 (브라우저 requestAnimationFrame 대용)
        - request 로 다음 프레임에 한 번 호출될 콜백을 등록하고 핸들을 받음
        - cancel 은 대기 중인 콜백을 실제로 제거함
        - run_frame 도중 새로 등록된 콜백은 그 다음 프레임에 실행됨
    """
    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self.clock = clock
        self._pending: Dict[int, FrameCallback] = {}
        self._due: Dict[int, FrameCallback] = {}  # 이번 프레임에 실행할 콜백
        self._ids = itertools.count(1)

    def request(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: Optional[int]) -> bool:
        if handle is None:
            return False
        if self._pending.pop(handle, None) is not None:
            return True
        return self._due.pop(handle, None) is not None

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_frame(self, now: Optional[float] = None) -> int:
        """대기 중인 콜백을 모두 실행하고 실행한 개수를 반환"""
        if now is None:
            now = self.clock()
        self._due, self._pending = self._pending, {}
        count = 0
        while self._due:
            handle = min(self._due)
            callback = self._due.pop(handle)
            callback(float(now))
            count += 1
        return count
