################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Householder reduction of symmetric 4x4 matrices to tridiagonal form."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from oasis_transforms.config.kernel_params import KernelParams
from oasis_transforms.config.kernel_params import resolve_params
from oasis_transforms.math_utils.validation import reshape_vector


_LOG: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TridiagonalForm:
    """
    Symmetric tridiagonal 4x4 matrix stored as two vectors

    Fields:
        diagonal: Main diagonal, shape (4,)
        subdiagonal: First sub-diagonal, shape (3,)
    """

    diagonal: NDArray[np.float64]
    subdiagonal: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Coerce both vectors into float64 arrays of the expected length."""
        object.__setattr__(
            self, "diagonal", reshape_vector(self.diagonal, 4, "diagonal")
        )
        object.__setattr__(
            self, "subdiagonal", reshape_vector(self.subdiagonal, 3, "subdiagonal")
        )


def tridiagonalize_symmetric_44(
    matrix: NDArray[np.float64],
    params: KernelParams | None = None,
) -> TridiagonalForm:
    """Reduce a symmetric 4x4 matrix to tridiagonal form in place.

    The matrix is consumed: its contents are overwritten with the reduced
    matrix. Callers that need the original must pass a scratch copy.

    Two Householder reflections are applied. The first zeroes column 0
    below row 1, the second zeroes column 1 below row 2. Either reflection
    is skipped when the column it would eliminate already has a norm at or
    below epsilon.

    Non-finite entries are not rejected and propagate into the result.
    """
    if not isinstance(matrix, np.ndarray) or matrix.dtype != np.float64:
        raise ValueError("matrix must be a float64 numpy array")
    if matrix.shape != (4, 4):
        raise ValueError("matrix must have shape (4, 4)")
    if not matrix.flags.writeable:
        raise ValueError("matrix must be writeable")

    eps: float = resolve_params(params).epsilon

    for pivot in (0, 1):
        _householder_step(matrix, pivot, eps)

    return TridiagonalForm(
        diagonal=np.array(
            [matrix[0, 0], matrix[1, 1], matrix[2, 2], matrix[3, 3]], dtype=np.float64
        ),
        subdiagonal=np.array(
            [matrix[0, 1], matrix[1, 2], matrix[2, 3]], dtype=np.float64
        ),
    )


def tridiagonal_matrix(form: TridiagonalForm) -> NDArray[np.float64]:
    """Expand a tridiagonal form into a dense symmetric 4x4 matrix."""
    dense: NDArray[np.float64] = np.diag(form.diagonal)
    dense += np.diag(form.subdiagonal, k=1)
    dense += np.diag(form.subdiagonal, k=-1)
    return dense


def _householder_step(matrix: NDArray[np.float64], pivot: int, eps: float) -> None:
    """Apply one reflection that zeroes row/column `pivot` past the subdiagonal.

    With x the part of row `pivot` right of the diagonal, the reflector is
    P = I - u u^T / h where u = x + sign(x0) |x| e0 and h = u.u / 2, so that
    P x = -sign(x0) |x| e0. The trailing block A becomes P A P, computed as
    A - u q^T - q u^T with p = A u / h and q = p - (u.p / 2h) u.
    """
    start: int = pivot + 1

    u: NDArray[np.float64] = np.array(matrix[pivot, start:], dtype=np.float64)
    tail: float = float(np.dot(u[1:], u[1:]))
    n: float = float(np.sqrt(u[0] * u[0] + tail))

    if not n > eps:
        _LOG.debug("Skipping reflection %d, column norm %.3e", pivot, n)
        return

    # Match the sign of the pivot to avoid cancellation
    if u[0] < 0.0:
        n = -n
    u[0] += n

    h: float = (u[0] * u[0] + tail) / 2.0

    block: NDArray[np.float64] = matrix[start:, start:]
    p: NDArray[np.float64] = (block @ u) / h
    g: float = float(np.dot(u, p)) / (2.0 * h)
    q: NDArray[np.float64] = p - g * u

    block -= np.outer(u, q) + np.outer(q, u)

    matrix[pivot, start:] = 0.0
    matrix[start:, pivot] = 0.0
    matrix[pivot, start] = -n
    matrix[start, pivot] = -n
