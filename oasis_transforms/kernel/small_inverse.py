################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Closed-form inverses and determinants of 2x2, 3x3 and 4x4 matrices."""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from oasis_transforms.config.kernel_params import KernelParams
from oasis_transforms.config.kernel_params import resolve_params
from oasis_transforms.kernel.kernel_errors import SingularMatrixError
from oasis_transforms.math_utils.validation import MatrixLike
from oasis_transforms.math_utils.validation import infer_size
from oasis_transforms.math_utils.validation import reshape_matrix


_LOG: logging.Logger = logging.getLogger(__name__)


def determinant22(matrix: MatrixLike) -> float:
    """Return the determinant of a 2x2 matrix."""
    m: NDArray[np.float64] = reshape_matrix(matrix, 2, "matrix", check_finite=False)
    return float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])


def determinant33(matrix: MatrixLike) -> float:
    """Return the determinant of a 3x3 matrix by cofactor expansion on row 0."""
    m: NDArray[np.float64] = reshape_matrix(matrix, 3, "matrix", check_finite=False)
    c00: float = float(m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
    c01: float = float(m[1, 2] * m[2, 0] - m[1, 0] * m[2, 2])
    c02: float = float(m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0])
    return float(m[0, 0] * c00 + m[0, 1] * c01 + m[0, 2] * c02)


def determinant44(matrix: MatrixLike) -> float:
    """Return the determinant of a 4x4 matrix from complementary 2x2 minors."""
    m: NDArray[np.float64] = reshape_matrix(matrix, 4, "matrix", check_finite=False)
    upper: list[float] = _pair_minors(m[0], m[1])
    lower: list[float] = _pair_minors(m[2], m[3])
    return _laplace_determinant(upper, lower)


def invert_matrix22(
    matrix: MatrixLike,
    params: KernelParams | None = None,
) -> NDArray[np.float64]:
    """Return the inverse of a 2x2 matrix.

    Raises:
        SingularMatrixError: If |det| is below epsilon
    """
    resolved: KernelParams = resolve_params(params)
    m: NDArray[np.float64] = reshape_matrix(
        matrix, 2, "matrix", check_finite=resolved.check_finite
    )

    det: float = float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])
    _require_invertible(2, det, resolved.epsilon)

    return np.array(
        [
            [m[1, 1] / det, -m[0, 1] / det],
            [-m[1, 0] / det, m[0, 0] / det],
        ],
        dtype=np.float64,
    )


def invert_matrix33(
    matrix: MatrixLike,
    params: KernelParams | None = None,
) -> NDArray[np.float64]:
    """Return the inverse of a 3x3 matrix as its adjugate over the determinant.

    Raises:
        SingularMatrixError: If |det| is below epsilon
    """
    resolved: KernelParams = resolve_params(params)
    m: NDArray[np.float64] = reshape_matrix(
        matrix, 3, "matrix", check_finite=resolved.check_finite
    )

    # Cofactors of row 0 double as the first column of the adjugate
    c00: float = float(m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
    c01: float = float(m[1, 2] * m[2, 0] - m[1, 0] * m[2, 2])
    c02: float = float(m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0])

    det: float = float(m[0, 0] * c00 + m[0, 1] * c01 + m[0, 2] * c02)
    _require_invertible(3, det, resolved.epsilon)

    adjugate: NDArray[np.float64] = np.array(
        [
            [
                c00,
                m[0, 2] * m[2, 1] - m[0, 1] * m[2, 2],
                m[0, 1] * m[1, 2] - m[0, 2] * m[1, 1],
            ],
            [
                c01,
                m[0, 0] * m[2, 2] - m[0, 2] * m[2, 0],
                m[0, 2] * m[1, 0] - m[0, 0] * m[1, 2],
            ],
            [
                c02,
                m[0, 1] * m[2, 0] - m[0, 0] * m[2, 1],
                m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0],
            ],
        ],
        dtype=np.float64,
    )
    return adjugate / det


def invert_matrix44(
    matrix: MatrixLike,
    params: KernelParams | None = None,
) -> NDArray[np.float64]:
    """Return the inverse of a 4x4 matrix by blocked cofactor expansion.

    Rows of the inverse are cofactors of the columns of the input, so the
    expansion runs over the transpose. The 2x2 minors of its lower two rows
    are shared by every cofactor in the first two result rows, and the
    minors of its upper two rows by every cofactor in the last two.

    Raises:
        SingularMatrixError: If |det| is below epsilon
    """
    resolved: KernelParams = resolve_params(params)
    m: NDArray[np.float64] = reshape_matrix(
        matrix, 4, "matrix", check_finite=resolved.check_finite
    )
    t: NDArray[np.float64] = m.T

    upper: list[float] = _pair_minors(t[0], t[1])
    lower: list[float] = _pair_minors(t[2], t[3])

    det: float = _laplace_determinant(upper, lower)
    _require_invertible(4, det, resolved.epsilon)

    result: NDArray[np.float64] = np.empty((4, 4), dtype=np.float64)

    # First two rows from the minors of the lower pair
    result[0] = _cofactor_rows(t[1], lower, sign=1.0)
    result[1] = _cofactor_rows(t[0], lower, sign=-1.0)

    # Last two rows from the minors of the upper pair
    result[2] = _cofactor_rows(t[3], upper, sign=1.0)
    result[3] = _cofactor_rows(t[2], upper, sign=-1.0)

    return result / det


_INVERTERS: dict[int, Callable[..., NDArray[np.float64]]] = {
    2: invert_matrix22,
    3: invert_matrix33,
    4: invert_matrix44,
}


def invert_matrix(
    matrix: MatrixLike,
    params: KernelParams | None = None,
) -> NDArray[np.float64]:
    """Invert a 2x2, 3x3 or 4x4 matrix, dispatching on its size."""
    size: int = infer_size(matrix, "matrix")
    return _INVERTERS[size](matrix, params)


def _require_invertible(size: int, det: float, eps: float) -> None:
    if abs(det) < eps:
        _LOG.debug("Rejecting %dx%d inverse, determinant %.3e", size, size, det)
        raise SingularMatrixError(size, det)


def _pair_minors(r0: NDArray[np.float64], r1: NDArray[np.float64]) -> list[float]:
    """Return the six 2x2 minors of a pair of rows.

    Ordered by column pair: (0,1), (0,2), (0,3), (1,2), (1,3), (2,3).
    """
    return [
        float(r0[0] * r1[1] - r0[1] * r1[0]),
        float(r0[0] * r1[2] - r0[2] * r1[0]),
        float(r0[0] * r1[3] - r0[3] * r1[0]),
        float(r0[1] * r1[2] - r0[2] * r1[1]),
        float(r0[1] * r1[3] - r0[3] * r1[1]),
        float(r0[2] * r1[3] - r0[3] * r1[2]),
    ]


def _laplace_determinant(upper: list[float], lower: list[float]) -> float:
    """Combine complementary minors of rows (0, 1) and (2, 3) into det."""
    s0, s1, s2, s3, s4, s5 = upper
    c0, c1, c2, c3, c4, c5 = lower
    return s0 * c5 - s1 * c4 + s2 * c3 + s3 * c2 - s4 * c1 + s5 * c0


def _cofactor_rows(
    row: NDArray[np.float64],
    minors: list[float],
    sign: float,
) -> NDArray[np.float64]:
    """Return four cofactors that expand `row` against a pair of minors.

    Entry j is the determinant of the 3x3 matrix formed by `row` and the
    minor pair with column j removed, expanded along `row`.
    """
    m01, m02, m03, m12, m13, m23 = minors
    a0: float = float(row[0])
    a1: float = float(row[1])
    a2: float = float(row[2])
    a3: float = float(row[3])
    return sign * np.array(
        [
            a1 * m23 - a2 * m13 + a3 * m12,
            -a0 * m23 + a2 * m03 - a3 * m02,
            a0 * m13 - a1 * m03 + a3 * m01,
            -a0 * m12 + a1 * m02 - a2 * m01,
        ],
        dtype=np.float64,
    )
