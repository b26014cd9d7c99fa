# physlab/demos/__init__.py

from physlab.demos.base import Demo
from physlab.demos.drop import DropDemo, DropParameters
from physlab.demos.spring import SpringDemo, SpringParameters
from physlab.demos.gravity_pair import GravityPairDemo, GravityPairParameters
from physlab.demos.pendulum import PendulumDemo, PendulumParameters
from physlab.demos.friction_slide import FrictionSlideDemo, FrictionSlideParameters
from physlab.demos.projectile import ProjectileDemo, ProjectileParameters

DEMOS = {
    cls.name: cls
    for cls in (DropDemo, SpringDemo, GravityPairDemo, PendulumDemo, FrictionSlideDemo, ProjectileDemo)
}


def available_demos():
    return sorted(DEMOS)


def get_demo(name: str) -> Demo:
    try:
        return DEMOS[name]()
    except KeyError:
        raise ValueError(f"Unknown demo: {name!r} (available: {', '.join(available_demos())})") from None
