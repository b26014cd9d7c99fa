# physlab/demos/base.py

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union
import numpy

from physlab.body import SimulationState
from physlab.event import Event
from physlab.integrator import Method, step
from physlab.timestep import FixedStep, VariableStep


class Demo(ABC):
    """
    데모 하나의 힘 모델 + 종료 정책 묶음
    시뮬레이션 루프는 이 인터페이스만 사용함
        - acceleration: (상태, 파라미터) -> 가속도 순수 함수
        - advance: 적분기(또는 닫힌 해)로 dt 만큼 진행
        - check: 위치 갱신 직후 한 번 호출되는 종료 정책 (사건 하나, 또는 발생 순서대로 사건 목록)
        - metrics: 현재 상태/파라미터에서 매번 다시 계산하는 표시용 값
    """
    name: str = ""
    Parameters: type = object
    method: Method = Method.SEMI_IMPLICIT_EULER
    fixed_step: bool = False # True 면 누산기 고정 스텝, False 면 프레임 간격 사용
    tracks_trajectory: bool = False
    live_preview: bool = False # 대기(IDLE) 상태에서 파라미터 변경 시 초기 상태를 바로 다시 보여줌

    def default_parameters(self):
        return self.Parameters()

    def make_timestep(self):
        return FixedStep() if self.fixed_step else VariableStep()

    @abstractmethod
    def initial_state(self, params) -> SimulationState: """파라미터로부터 초기 상태 생성"""; raise NotImplementedError

    @abstractmethod
    def acceleration(self, state: SimulationState, params) -> numpy.ndarray: """가속도 (velocity 와 같은 모양)"""; raise NotImplementedError

    def advance(self, state: SimulationState, params, dt: float) -> None:
        step(self.method, state, dt, lambda s: self.acceleration(s, params))

    @abstractmethod
    def check(self, state: SimulationState, params) -> Union[Event, List[Event], None]: """종료 정책"""; raise NotImplementedError

    def metrics(self, state: SimulationState, params) -> Dict[str, Any]:
        return {"time": state.time}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(method={self.method.value}, fixed_step={self.fixed_step})"
