################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Eigenvector of a symmetric 4x4 matrix for a known eigenvalue."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from oasis_transforms.config.kernel_params import KernelParams
from oasis_transforms.config.kernel_params import resolve_params
from oasis_transforms.kernel.kernel_errors import DegenerateEigenspaceError
from oasis_transforms.kernel.small_inverse import determinant33
from oasis_transforms.math_utils.validation import MatrixLike
from oasis_transforms.math_utils.validation import reshape_matrix


_LOG: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdjugateColumn:
    """
    Eigenvector candidate taken from one column of the adjugate

    For a shifted matrix A = M - lambda * I of rank 3, every column of
    adj(A) lies in the null space of A, so each is proportional to the
    eigenvector. Column k is built from the signed 3x3 cofactors of row k
    (Cramer's rule), and its norm scales with the k-th eigenvector
    component, which is why a column can vanish for some inputs.

    Fields:
        row: Row of A whose cofactors form the candidate
    """

    row: int

    def __call__(self, shifted: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the unnormalized candidate vector."""
        rows: list[int] = [r for r in range(4) if r != self.row]
        candidate: NDArray[np.float64] = np.empty(4, dtype=np.float64)
        for col in range(4):
            cols: list[int] = [c for c in range(4) if c != col]
            sign: float = -1.0 if (self.row + col) % 2 else 1.0
            candidate[col] = sign * determinant33(shifted[np.ix_(rows, cols)])
        return candidate


def eigenvector_candidates() -> tuple[AdjugateColumn, ...]:
    """Return the candidate strategies in the order they are tried."""
    return tuple(AdjugateColumn(row) for row in range(4))


def shifted_matrix(
    matrix: MatrixLike,
    eigenvalue: float,
    check_finite: bool = True,
) -> NDArray[np.float64]:
    """Return a copy of M - eigenvalue * I."""
    shifted: NDArray[np.float64] = reshape_matrix(
        matrix, 4, "matrix", check_finite=check_finite
    )
    shifted[np.diag_indices(4)] -= eigenvalue
    return shifted


def candidate_threshold(
    shifted: NDArray[np.float64],
    params: KernelParams | None = None,
) -> float:
    """Return the minimum squared norm a candidate must reach.

    The threshold is relative to the magnitude of the shifted matrix,
    scaled down and squared, and never falls below epsilon. The floor is
    absolute: adjugate entries are cubic in the matrix scale, so matrices
    with entries around 1e-3 or smaller fall below it unless epsilon is
    lowered.
    """
    resolved: KernelParams = resolve_params(params)
    a: NDArray[np.float64] = shifted
    scale: float = float(
        a[0, 0] * a[1, 1] * a[2, 2] * a[3, 3]
        - a[0, 1] * a[0, 1] * a[1, 2] * a[1, 2]
    )
    scale *= resolved.eigenvector_scale
    threshold: float = scale * scale
    if threshold < resolved.epsilon:
        threshold = resolved.epsilon
    return threshold


def eigenvector_of_symmetric_44(
    matrix: MatrixLike,
    eigenvalue: float,
    params: KernelParams | None = None,
) -> NDArray[np.float64]:
    """Return the unit eigenvector of a symmetric 4x4 matrix.

    The matrix must be the original, untridiagonalized matrix; it is not
    modified. Candidates are tried in order and the first whose squared
    norm reaches the threshold is normalized and returned.

    Matrices with entries around 1e-3 or smaller are reported degenerate
    under the default epsilon; see candidate_threshold.

    Raises:
        DegenerateEigenspaceError: If every candidate is too short
    """
    resolved: KernelParams = resolve_params(params)
    shifted: NDArray[np.float64] = shifted_matrix(
        matrix, eigenvalue, check_finite=resolved.check_finite
    )
    threshold: float = candidate_threshold(shifted, resolved)

    for strategy in eigenvector_candidates():
        vector: NDArray[np.float64] = strategy(shifted)
        norm_sq: float = float(np.dot(vector, vector))
        if norm_sq < threshold:
            _LOG.debug(
                "Rejecting adjugate column %d, squared norm %.3e below %.3e",
                strategy.row,
                norm_sq,
                threshold,
            )
            continue
        return vector / np.sqrt(norm_sq)

    raise DegenerateEigenspaceError(threshold)
