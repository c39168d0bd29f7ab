################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Validation helpers for kernel matrix buffers."""

from __future__ import annotations

from typing import Sequence
from typing import Union

import numpy as np
from numpy.typing import NDArray

from .units import assert_finite


# Matrix sizes supported by the kernel
SUPPORTED_SIZES: tuple[int, ...] = (2, 3, 4)

MatrixLike = Union[NDArray[np.float64], Sequence[float], Sequence[Sequence[float]]]


def infer_size(values: MatrixLike, name: str) -> int:
    """Return N for a square (N, N) matrix or a flat buffer of N*N values."""
    array: NDArray[np.float64] = np.asarray(values, dtype=np.float64)
    if array.ndim == 2 and array.shape[0] == array.shape[1]:
        size: int = int(array.shape[0])
    elif array.ndim == 1:
        size = int(round(np.sqrt(array.size)))
        if size * size != array.size:
            raise ValueError(f"{name} must hold a square number of elements")
    else:
        raise ValueError(f"{name} must be a square matrix or a flat buffer")

    if size not in SUPPORTED_SIZES:
        raise ValueError(f"{name} must be 2x2, 3x3 or 4x4")

    return size


def reshape_matrix(
    values: MatrixLike,
    size: int,
    name: str,
    check_finite: bool = True,
) -> NDArray[np.float64]:
    """Return a float64 copy of the values reshaped to (size, size).

    Accepts either a (size, size) matrix or a flat row-major buffer of
    size * size elements. The caller's data is never aliased.
    """
    array: NDArray[np.float64] = np.array(values, dtype=np.float64)
    if array.size != size * size:
        raise ValueError(f"{name} must have {size * size} elements")
    if array.ndim not in (1, 2) or (array.ndim == 2 and array.shape != (size, size)):
        raise ValueError(f"{name} must have shape ({size}, {size})")

    matrix: NDArray[np.float64] = array.reshape((size, size))
    if check_finite:
        assert_finite(matrix, name)

    return matrix


def rotation_block(
    values: MatrixLike,
    name: str,
    check_finite: bool = True,
) -> NDArray[np.float64]:
    """Return the 3x3 rotation block of a rotation or homogeneous matrix."""
    size: int = infer_size(values, name)
    if size == 3:
        return reshape_matrix(values, 3, name, check_finite)
    if size == 4:
        homogeneous: NDArray[np.float64] = reshape_matrix(
            values, 4, name, check_finite
        )
        return np.array(homogeneous[:3, :3], dtype=np.float64)

    raise ValueError(f"{name} must be 3x3 or 4x4")


def reshape_vector(
    values: Sequence[float] | NDArray[np.float64],
    length: int,
    name: str,
) -> NDArray[np.float64]:
    """Return a float64 copy of a vector with the expected length."""
    array: NDArray[np.float64] = np.array(values, dtype=np.float64)
    if array.shape != (length,):
        raise ValueError(f"{name} must have shape ({length},)")
    return array
