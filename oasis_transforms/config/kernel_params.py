################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for the transform kernel."""

from __future__ import annotations

import math
from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any
from typing import Mapping

from oasis_transforms.math_utils.units import NumericalConstants


# Singularity threshold for determinants and eigenvector norms
KERNEL_EPSILON: float = NumericalConstants.EPSILON
# Clamp for near-zero Sturm pivots
KERNEL_PIVOT_TOLERANCE: float = NumericalConstants.PIVOT_TOLERANCE
# Stopping width for eigenvalue bisection
KERNEL_BISECTION_TOLERANCE: float = NumericalConstants.BISECTION_TOLERANCE
# Relative scale of the eigenvector candidate threshold
KERNEL_EIGENVECTOR_SCALE: float = NumericalConstants.EIGENVECTOR_SCALE
# Reject non-finite inputs at public entry points
KERNEL_CHECK_FINITE: bool = True


class KernelParamsError(Exception):
    """Raised when kernel parameter validation fails."""


def _require_positive_finite(value: float, name: str) -> None:
    """Require a positive, finite float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise KernelParamsError(f"{name} must be a float")
    if not math.isfinite(value):
        raise KernelParamsError(f"{name} must be finite")
    if value <= 0.0:
        raise KernelParamsError(f"{name} must be positive")


@dataclass(frozen=True)
class KernelParams:
    """Tolerances and policy flags for the transform kernel."""

    # Singularity threshold for determinants and eigenvector norms
    epsilon: float = KERNEL_EPSILON
    # Clamp for near-zero Sturm pivots
    pivot_tolerance: float = KERNEL_PIVOT_TOLERANCE
    # Stopping width for eigenvalue bisection
    bisection_tolerance: float = KERNEL_BISECTION_TOLERANCE
    # Relative scale of the eigenvector candidate threshold
    eigenvector_scale: float = KERNEL_EIGENVECTOR_SCALE
    # Reject non-finite inputs at public entry points
    check_finite: bool = KERNEL_CHECK_FINITE

    @classmethod
    def defaults(cls) -> KernelParams:
        """Return the default kernel parameters."""
        return DEFAULT_PARAMS

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> KernelParams:
        """Build validated parameters from a flat mapping of overrides."""
        known: set[str] = {f.name for f in fields(cls)}
        unknown: list[str] = sorted(key for key in values if key not in known)
        if unknown:
            raise KernelParamsError(f"Unknown kernel parameters: {unknown}")
        params: KernelParams = cls(**dict(values))
        params.validate()
        return params

    def validate(self) -> None:
        """Validate parameter invariants."""
        _require_positive_finite(self.epsilon, "epsilon")
        _require_positive_finite(self.pivot_tolerance, "pivot_tolerance")
        _require_positive_finite(self.bisection_tolerance, "bisection_tolerance")
        _require_positive_finite(self.eigenvector_scale, "eigenvector_scale")
        if not isinstance(self.check_finite, bool):
            raise KernelParamsError("check_finite must be a bool")

    def replace(self, **overrides: Any) -> KernelParams:
        """Return a modified, validated copy of the parameters."""
        params: KernelParams = replace(self, **overrides)
        params.validate()
        return params

    def as_dict(self) -> dict[str, Any]:
        """Return a dict representation for debugging."""
        return asdict(self)


DEFAULT_PARAMS: KernelParams = KernelParams()


def resolve_params(params: KernelParams | None) -> KernelParams:
    """Return the given parameters, or the defaults when None."""
    if params is None:
        return DEFAULT_PARAMS
    return params
