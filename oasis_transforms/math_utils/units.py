################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Numerical constants shared by the kernel."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


class NumericalConstants:
    """Fixed floating-point thresholds used by the kernel."""

    # 4.0 * DBL_EPSILON, the singularity and numerical noise threshold
    EPSILON: float = 8.881784197001252e-16
    # Clamp applied to near-zero Sturm pivots before the next division
    PIVOT_TOLERANCE: float = 1e-18
    # Interval width at which eigenvalue bisection stops
    BISECTION_TOLERANCE: float = 1e-18
    # Relative scale of the eigenvector candidate norm threshold
    EIGENVECTOR_SCALE: float = 1e-6


def assert_finite(x: NDArray[np.float64], name: str) -> None:
    """Raise ValueError when the array contains non-finite values."""
    if not np.all(np.isfinite(x)):
        raise ValueError(f"{name} must be finite")
