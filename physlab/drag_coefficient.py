# physlab/drag_coefficient.py
# 형태별 기본 항력계수 모음 (난류 영역, 레이놀즈 수 1e3~2e5 기준 상수값)

import math

from physlab.shape import Shape, Sphere, Box


class CD:
    """형태별 항력계수"""
    SPHERE = 0.47
    CUBE = 1.05
    BOX = 1.20

    @staticmethod
    def for_shape(shape: Shape) -> float:
        """
        형태에 맞는 항력계수 반환
        Args:
            shape (Shape): 물체 형태
        Returns:
            float: 항력 계수 (C_D)
        """
        if isinstance(shape, Sphere):
            return CD.SPHERE
        if isinstance(shape, Box):
            w, h, d = float(shape.w), float(shape.h), float(shape.d)
            if math.isclose(w, h, rel_tol=0.0, abs_tol=1e-12) and math.isclose(h, d, rel_tol=0.0, abs_tol=1e-12):
                return CD.CUBE
            return CD.BOX
        raise TypeError(f"Unsupported shape type: {type(shape)}")
