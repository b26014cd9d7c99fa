# physlab/__init__.py

from physlab.loop import RunStatus, SimulationLoop
from physlab.scheduler import FrameScheduler
from physlab.demos import DEMOS, available_demos, get_demo
