################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Error taxonomy and status codes for the transform kernel."""

from __future__ import annotations

import enum


class KernelStatus(enum.IntEnum):
    """
    Status codes reported across the flat buffer interface
    """

    # Operation succeeded
    OK = 0

    # Determinant magnitude below epsilon during inversion
    SINGULAR = 1

    # No eigenvector candidate cleared its norm threshold
    DEGENERATE_EIGENSPACE = 2

    # Buffer had the wrong length or contained non-finite values
    INVALID_ARGUMENT = 3


class TransformKernelError(Exception):
    """Base class for failures reported by kernel operations."""

    status: KernelStatus = KernelStatus.INVALID_ARGUMENT


class SingularMatrixError(TransformKernelError):
    """Raised when a matrix is too close to singular to invert."""

    status = KernelStatus.SINGULAR

    def __init__(self, size: int, determinant: float) -> None:
        super().__init__(
            f"{size}x{size} matrix is singular (determinant {determinant:.3e})"
        )
        self.size: int = size
        self.determinant: float = determinant


class DegenerateEigenspaceError(TransformKernelError):
    """Raised when no eigenvector candidate has sufficient norm."""

    status = KernelStatus.DEGENERATE_EIGENSPACE

    def __init__(self, threshold: float) -> None:
        super().__init__(
            "No eigenvector candidate cleared the squared norm threshold "
            f"{threshold:.3e}"
        )
        self.threshold: float = threshold
