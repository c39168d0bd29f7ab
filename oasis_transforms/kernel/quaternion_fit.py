################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Best-fit unit quaternion from a rotation matrix candidate.

The symmetric key matrix K is built so that, for a proper rotation R, the
quaternion of R (in xyzw order) is the eigenvector of K's largest
eigenvalue. For a noisy or non-orthonormal R the same eigenvector is the
quaternion closest to R in the least-squares sense.

Equations:
    K = 1/3 * [[m00-m11-m22, m01+m10,     m02+m20,     m21-m12    ],
               [m01+m10,     m11-m00-m22, m12+m21,     m02-m20    ],
               [m02+m20,     m12+m21,     m22-m00-m11, m10-m01    ],
               [m21-m12,     m02-m20,     m10-m01,     m00+m11+m22]]
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from oasis_transforms.config.kernel_params import KernelParams
from oasis_transforms.config.kernel_params import resolve_params
from oasis_transforms.kernel.eigenvalue import max_eigenvalue_of_tridiag_44
from oasis_transforms.kernel.eigenvector import eigenvector_of_symmetric_44
from oasis_transforms.kernel.tridiagonalize import TridiagonalForm
from oasis_transforms.kernel.tridiagonalize import tridiagonalize_symmetric_44
from oasis_transforms.math_utils.quat import Quaternion
from oasis_transforms.math_utils.validation import MatrixLike
from oasis_transforms.math_utils.validation import reshape_matrix
from oasis_transforms.math_utils.validation import rotation_block


@dataclass(frozen=True)
class Eigenpair:
    """
    Dominant eigenvalue and unit eigenvector of one symmetric matrix

    Fields:
        eigenvalue: Largest eigenvalue, found on the tridiagonal reduction
        eigenvector: Unit eigenvector, found on the original matrix
    """

    eigenvalue: float
    eigenvector: NDArray[np.float64]


def key_matrix(rotation: MatrixLike) -> NDArray[np.float64]:
    """Return the symmetric 4x4 key matrix of a rotation candidate.

    Accepts a 3x3 rotation, a 4x4 homogeneous transform, or their flat
    row-major buffers. The eigenvector order is xyzw.
    """
    m: NDArray[np.float64] = rotation_block(rotation, "rotation")

    m00: float = float(m[0, 0])
    m01: float = float(m[0, 1])
    m02: float = float(m[0, 2])
    m10: float = float(m[1, 0])
    m11: float = float(m[1, 1])
    m12: float = float(m[1, 2])
    m20: float = float(m[2, 0])
    m21: float = float(m[2, 1])
    m22: float = float(m[2, 2])

    K: NDArray[np.float64] = np.array(
        [
            [m00 - m11 - m22, m01 + m10, m02 + m20, m21 - m12],
            [m01 + m10, m11 - m00 - m22, m12 + m21, m02 - m20],
            [m02 + m20, m12 + m21, m22 - m00 - m11, m10 - m01],
            [m21 - m12, m02 - m20, m10 - m01, m00 + m11 + m22],
        ],
        dtype=np.float64,
    )
    return K / 3.0


def dominant_eigenpair(
    matrix: MatrixLike,
    params: KernelParams | None = None,
) -> Eigenpair:
    """Return the largest eigenvalue and its unit eigenvector.

    The eigenvalue comes from a tridiagonalized scratch copy; the
    eigenvector comes from the untouched original.

    Raises:
        DegenerateEigenspaceError: If the eigenvector cannot be recovered
    """
    resolved: KernelParams = resolve_params(params)
    original: NDArray[np.float64] = reshape_matrix(
        matrix, 4, "matrix", check_finite=resolved.check_finite
    )
    scratch: NDArray[np.float64] = original.copy()

    form: TridiagonalForm = tridiagonalize_symmetric_44(scratch, resolved)
    eigenvalue: float = max_eigenvalue_of_tridiag_44(
        form.diagonal, form.subdiagonal, resolved
    )
    eigenvector: NDArray[np.float64] = eigenvector_of_symmetric_44(
        original, eigenvalue, resolved
    )

    return Eigenpair(eigenvalue=eigenvalue, eigenvector=eigenvector)


def quaternion_from_rotation(
    rotation: MatrixLike,
    precise: bool = False,
    params: KernelParams | None = None,
) -> Quaternion:
    """Return the unit quaternion best representing a rotation candidate.

    By default the input may be noisy or not orthonormal and the quaternion
    is the dominant eigenvector of the key matrix. With `precise` the input
    is trusted to be an exact rotation and a faster closed form is used.

    The sign is chosen so that w >= 0.

    Raises:
        DegenerateEigenspaceError: If the eigenvector cannot be recovered
    """
    m: NDArray[np.float64] = rotation_block(rotation, "rotation")

    wxyz: NDArray[np.float64]
    if precise:
        wxyz = _quaternion_from_exact_rotation(m)
    else:
        pair: Eigenpair = dominant_eigenpair(key_matrix(m), params)
        x, y, z, w = (float(value) for value in pair.eigenvector)
        wxyz = np.array([w, x, y, z], dtype=np.float64)

    if wxyz[0] < 0.0:
        wxyz = -wxyz

    return Quaternion(wxyz).normalized()


def _quaternion_from_exact_rotation(mat: NDArray[np.float64]) -> NDArray[np.float64]:
    """Closed-form quaternion branching on the largest diagonal term."""
    trace: float = float(np.trace(mat))
    if trace > 0.0:
        s: float = float(np.sqrt(trace + 1.0) * 2.0)
        w: float = 0.25 * s
        x: float = float((mat[2, 1] - mat[1, 2]) / s)
        y: float = float((mat[0, 2] - mat[2, 0]) / s)
        z: float = float((mat[1, 0] - mat[0, 1]) / s)
    else:
        idx: int = int(np.argmax(np.diag(mat)))
        if idx == 0:
            s = float(np.sqrt(1.0 + mat[0, 0] - mat[1, 1] - mat[2, 2]) * 2.0)
            w = float((mat[2, 1] - mat[1, 2]) / s)
            x = 0.25 * s
            y = float((mat[0, 1] + mat[1, 0]) / s)
            z = float((mat[0, 2] + mat[2, 0]) / s)
        elif idx == 1:
            s = float(np.sqrt(1.0 + mat[1, 1] - mat[0, 0] - mat[2, 2]) * 2.0)
            w = float((mat[0, 2] - mat[2, 0]) / s)
            x = float((mat[0, 1] + mat[1, 0]) / s)
            y = 0.25 * s
            z = float((mat[1, 2] + mat[2, 1]) / s)
        else:
            s = float(np.sqrt(1.0 + mat[2, 2] - mat[0, 0] - mat[1, 1]) * 2.0)
            w = float((mat[1, 0] - mat[0, 1]) / s)
            x = float((mat[0, 2] + mat[2, 0]) / s)
            y = float((mat[1, 2] + mat[2, 1]) / s)
            z = 0.25 * s
    return np.array([w, x, y, z], dtype=np.float64)
