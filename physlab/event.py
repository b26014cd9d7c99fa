# physlab/event.py

from enum import Enum


class EventKind(Enum):
    BOUNCE = "bounce" # 반발 후 계속 진행
    WALL = "wall" # 벽 도달로 정지
    BOUNDARY = "boundary" # 영역 밖으로 나가 정지
    REST = "rest" # 속도가 임계값 아래로 떨어져 정지
    CONTACT = "contact" # 두 물체 접촉 (반발 없음)
    LANDED = "landed" # 포물선 착지
    NON_FINITE = "non_finite" # 상태가 NaN/Inf


class Event:
    """종료 정책이 만든 사건 정보 저장"""
    def __init__(self, kind: EventKind, time: float, terminal: bool, detail: str = ""):
        self.kind = kind
        self.time = float(time)  # 발생 시각 [s]
        self.terminal = bool(terminal)  # True 면 실행 정지
        self.detail = detail

    def __repr__(self) -> str:
        return f"Event({self.kind.value}, t={self.time:.3f}, terminal={self.terminal})"
