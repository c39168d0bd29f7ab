################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Quaternion value type using the wxyz convention."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .units import NumericalConstants
from .units import assert_finite


@dataclass(frozen=True)
class Quaternion:
    """Quaternion stored in wxyz order."""

    wxyz: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate quaternion inputs and normalize storage."""
        wxyz: NDArray[np.float64] = np.array(self.wxyz, dtype=np.float64)
        if wxyz.shape != (4,):
            raise ValueError("wxyz must be shape (4,)")
        assert_finite(wxyz, "wxyz")
        object.__setattr__(self, "wxyz", wxyz)

    @staticmethod
    def identity() -> Quaternion:
        """Return the identity quaternion."""
        return Quaternion.from_wxyz(1.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_wxyz(w: float, x: float, y: float, z: float) -> Quaternion:
        """Create a quaternion from components."""
        return Quaternion(np.array([w, x, y, z], dtype=np.float64))

    @staticmethod
    def from_axis_angle(axis: Sequence[float], angle: float) -> Quaternion:
        """Create the unit quaternion rotating by `angle` radians about `axis`."""
        vec: NDArray[np.float64] = np.asarray(axis, dtype=np.float64)
        if vec.shape != (3,):
            raise ValueError("axis must be shape (3,)")
        assert_finite(vec, "axis")
        norm: float = float(np.linalg.norm(vec))
        if norm < NumericalConstants.EPSILON:
            raise ValueError("axis has near-zero norm")
        half: float = 0.5 * angle
        xyz: NDArray[np.float64] = vec * (math.sin(half) / norm)
        return Quaternion.from_wxyz(
            math.cos(half), float(xyz[0]), float(xyz[1]), float(xyz[2])
        )

    @staticmethod
    def from_uniform(rand: Sequence[float]) -> Quaternion:
        """Map three uniform deviates in [0, 1) to a uniform random rotation.

        The deviates come from the caller's generator. The mapping is
        Shoemake's subgroup algorithm, which is uniform on the unit
        3-sphere.
        """
        u: NDArray[np.float64] = np.asarray(rand, dtype=np.float64)
        if u.shape != (3,):
            raise ValueError("rand must be shape (3,)")
        if np.any(u < 0.0) or np.any(u >= 1.0):
            raise ValueError("rand must lie in [0, 1)")
        r1: float = math.sqrt(1.0 - float(u[0]))
        r2: float = math.sqrt(float(u[0]))
        t1: float = 2.0 * math.pi * float(u[1])
        t2: float = 2.0 * math.pi * float(u[2])
        return Quaternion.from_wxyz(
            math.cos(t2) * r2,
            math.sin(t1) * r1,
            math.cos(t1) * r1,
            math.sin(t2) * r2,
        )

    def as_matrix(self) -> NDArray[np.float64]:
        """Return the rotation matrix representation."""
        q: NDArray[np.float64] = self.normalized().wxyz
        w: float = float(q[0])
        x: float = float(q[1])
        y: float = float(q[2])
        z: float = float(q[3])
        return np.array(
            [
                [
                    1.0 - 2.0 * (y * y + z * z),
                    2.0 * (x * y - z * w),
                    2.0 * (x * z + y * w),
                ],
                [
                    2.0 * (x * y + z * w),
                    1.0 - 2.0 * (x * x + z * z),
                    2.0 * (y * z - x * w),
                ],
                [
                    2.0 * (x * z - y * w),
                    2.0 * (y * z + x * w),
                    1.0 - 2.0 * (x * x + y * y),
                ],
            ],
            dtype=np.float64,
        )

    def normalized(self) -> Quaternion:
        """Return a normalized quaternion."""
        norm: float = float(np.linalg.norm(self.wxyz))
        if norm < NumericalConstants.EPSILON:
            raise ValueError("Quaternion norm is too small")
        return Quaternion(self.wxyz / norm)

    def to_wxyz(self) -> NDArray[np.float64]:
        """Return a copy of the quaternion components."""
        return np.array(self.wxyz, dtype=np.float64)

    def almost_equal(self, other: Quaternion, atol: float = 1e-9) -> bool:
        """Check approximate equality, accounting for sign ambiguity."""
        q1: NDArray[np.float64] = self.wxyz
        q2: NDArray[np.float64] = other.wxyz
        if np.allclose(q1, q2, atol=atol):
            return True
        return bool(np.allclose(q1, -q2, atol=atol))
