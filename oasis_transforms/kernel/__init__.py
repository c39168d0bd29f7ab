################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Fixed-size linear algebra kernel and quaternion fitting."""

from __future__ import annotations

from oasis_transforms.kernel.buffer_api import KernelResult
from oasis_transforms.kernel.eigenvalue import max_eigenvalue_of_tridiag_44
from oasis_transforms.kernel.eigenvector import eigenvector_of_symmetric_44
from oasis_transforms.kernel.kernel_errors import DegenerateEigenspaceError
from oasis_transforms.kernel.kernel_errors import KernelStatus
from oasis_transforms.kernel.kernel_errors import SingularMatrixError
from oasis_transforms.kernel.kernel_errors import TransformKernelError
from oasis_transforms.kernel.quaternion_fit import Eigenpair
from oasis_transforms.kernel.quaternion_fit import dominant_eigenpair
from oasis_transforms.kernel.quaternion_fit import quaternion_from_rotation
from oasis_transforms.kernel.small_inverse import invert_matrix
from oasis_transforms.kernel.small_inverse import invert_matrix22
from oasis_transforms.kernel.small_inverse import invert_matrix33
from oasis_transforms.kernel.small_inverse import invert_matrix44
from oasis_transforms.kernel.tridiagonalize import TridiagonalForm
from oasis_transforms.kernel.tridiagonalize import tridiagonalize_symmetric_44


__all__ = [
    "DegenerateEigenspaceError",
    "Eigenpair",
    "KernelResult",
    "KernelStatus",
    "SingularMatrixError",
    "TransformKernelError",
    "TridiagonalForm",
    "dominant_eigenpair",
    "eigenvector_of_symmetric_44",
    "invert_matrix",
    "invert_matrix22",
    "invert_matrix33",
    "invert_matrix44",
    "max_eigenvalue_of_tridiag_44",
    "quaternion_from_rotation",
    "tridiagonalize_symmetric_44",
]
