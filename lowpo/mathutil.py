"""Small quaternion and matrix helpers used by components and animation."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

_SLERP_EPSILON = np.finfo(np.float32).eps


@dataclass(frozen=True)
class Quat:
    """A rotation quaternion stored as (w, x, y, z)."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def _components(self) -> tuple[float, float, float, float]:
        return (self.w, self.x, self.y, self.z)

    def normalized(self) -> Quat:
        """Return a unit-length copy; a zero quaternion becomes the identity."""
        length = math.sqrt(sum(c * c for c in self._components()))
        if length <= 0.0:
            return Quat()
        return Quat(*(c / length for c in self._components()))

    def conjugate(self) -> Quat:
        """Return the conjugate quaternion."""
        return Quat(self.w, -self.x, -self.y, -self.z)

    def to_matrix(self) -> np.ndarray:
        """Return the 4x4 rotation matrix of this (unit) quaternion."""
        w, x, y, z = self._components()
        xx, yy, zz = x * x, y * y, z * z
        xy, xz, yz = x * y, x * z, y * z
        wx, wy, wz = w * x, w * y, w * z
        return np.array(
            [
                [1 - 2 * (yy + zz), 2 * (xy - wz), 2 * (xz + wy), 0.0],
                [2 * (xy + wz), 1 - 2 * (xx + zz), 2 * (yz - wx), 0.0],
                [2 * (xz - wy), 2 * (yz + wx), 1 - 2 * (xx + yy), 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )


def slerp(a: Quat, b: Quat, t: float) -> Quat:
    """Spherical interpolation along the shortest path from ``a`` to ``b``."""
    qa = a._components()
    qb = b._components()
    cos_theta = sum(p * q for p, q in zip(qa, qb))
    if cos_theta < 0.0:
        qb = tuple(-q for q in qb)
        cos_theta = -cos_theta
    if cos_theta > 1.0 - _SLERP_EPSILON:
        return Quat(*(p * (1.0 - t) + q * t for p, q in zip(qa, qb)))
    angle = math.acos(cos_theta)
    sin_angle = math.sin(angle)
    wa = math.sin((1.0 - t) * angle) / sin_angle
    wb = math.sin(t * angle) / sin_angle
    return Quat(*(p * wa + q * wb for p, q in zip(qa, qb)))


def translation_matrix(x: float, y: float, z: float) -> np.ndarray:
    """Return a 4x4 matrix translating by (x, y, z)."""
    matrix = np.eye(4)
    matrix[:3, 3] = (x, y, z)
    return matrix