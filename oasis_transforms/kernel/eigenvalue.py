################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Largest eigenvalue of a symmetric tridiagonal 4x4 matrix by bisection."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from oasis_transforms.config.kernel_params import KernelParams
from oasis_transforms.config.kernel_params import resolve_params
from oasis_transforms.math_utils.validation import reshape_vector


_LOG: logging.Logger = logging.getLogger(__name__)


def gerschgorin_bounds(
    diagonal: Sequence[float] | NDArray[np.float64],
    subdiagonal: Sequence[float] | NDArray[np.float64],
) -> tuple[float, float]:
    """Return an interval containing every eigenvalue of the tridiagonal matrix.

    Each disk is centered on a diagonal entry with a radius equal to the sum
    of the magnitudes of its neighboring off-diagonal entries.
    """
    a: NDArray[np.float64] = reshape_vector(diagonal, 4, "diagonal")
    b: NDArray[np.float64] = reshape_vector(subdiagonal, 3, "subdiagonal")

    radius: NDArray[np.float64] = np.zeros(4, dtype=np.float64)
    radius[:3] += np.abs(b)
    radius[1:] += np.abs(b)

    lower: float = float(np.min(a - radius))
    upper: float = float(np.max(a + radius))
    return lower, upper


def count_pivots_below(
    diagonal: Sequence[float] | NDArray[np.float64],
    subdiagonal: Sequence[float] | NDArray[np.float64],
    shift: float,
    tolerance: float,
) -> int:
    """Count the eigenvalues strictly below `shift` from the Sturm pivots.

    The pivots of the LDL^T factorization of T - shift * I follow
    d0 = a0 - shift and d_k = a_k - shift - b_{k-1}^2 / d_{k-1}. Each
    negative pivot marks one eigenvalue below the shift. A pivot whose
    magnitude is below `tolerance` is clamped to `tolerance` before it is
    used as a divisor.
    """
    a: NDArray[np.float64] = reshape_vector(diagonal, 4, "diagonal")
    b: NDArray[np.float64] = reshape_vector(subdiagonal, 3, "subdiagonal")
    return _count_pivots(a, b, shift, tolerance)


def max_eigenvalue_of_tridiag_44(
    diagonal: Sequence[float] | NDArray[np.float64],
    subdiagonal: Sequence[float] | NDArray[np.float64],
    params: KernelParams | None = None,
) -> float:
    """Return the largest eigenvalue of a symmetric tridiagonal 4x4 matrix.

    The Gerschgorin interval is bisected. When all four pivots at the
    midpoint are negative the largest eigenvalue lies below it and the
    upper bound moves down, otherwise the lower bound moves up. Bisection
    stops once the interval is no wider than the bisection tolerance, or
    as soon as the midpoint can no longer be distinguished from a bound.
    """
    resolved: KernelParams = resolve_params(params)
    a: NDArray[np.float64] = reshape_vector(diagonal, 4, "diagonal")
    b: NDArray[np.float64] = reshape_vector(subdiagonal, 3, "subdiagonal")

    lower: float
    upper: float
    lower, upper = gerschgorin_bounds(a, b)

    while abs(upper - lower) > resolved.bisection_tolerance:
        midpoint: float = (upper + lower) / 2.0

        if midpoint == upper or midpoint == lower:
            _LOG.debug("Bisection stagnated at %.17g", midpoint)
            return midpoint

        pivots: int = _count_pivots(a, b, midpoint, resolved.pivot_tolerance)
        if pivots < 4:
            lower = midpoint
        else:
            upper = midpoint

    return (upper + lower) / 2.0


def _count_pivots(
    a: NDArray[np.float64],
    b: NDArray[np.float64],
    shift: float,
    tolerance: float,
) -> int:
    count: int = 0
    d: float = float(a[0]) - shift
    for k in range(4):
        if k > 0:
            d = float(a[k]) - shift - float(b[k - 1]) * float(b[k - 1]) / d
        if d < 0.0:
            count += 1
        # Keeps an exactly zero pivot from dividing the next step
        if abs(d) < tolerance:
            d = tolerance

    return count
