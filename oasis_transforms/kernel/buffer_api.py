################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Status-code interface over flat row-major buffers.

Binding layers exchange raw buffers of doubles with the kernel: lengths 4,
9 or 16, row-major. Each call returns a KernelResult instead of raising, so
kernel failures map onto status codes. Buffers that are ragged, non-numeric
or of the wrong length map to INVALID_ARGUMENT. A failing call leaves no state
behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from oasis_transforms.config.kernel_params import KernelParams
from oasis_transforms.kernel.eigenvector import eigenvector_of_symmetric_44
from oasis_transforms.kernel.kernel_errors import KernelStatus
from oasis_transforms.kernel.kernel_errors import TransformKernelError
from oasis_transforms.kernel.quaternion_fit import quaternion_from_rotation
from oasis_transforms.kernel.small_inverse import invert_matrix


_LOG: logging.Logger = logging.getLogger(__name__)

# Accepted buffer lengths, by operation
INVERT_LENGTHS: frozenset[int] = frozenset({4, 9, 16})
ROTATION_LENGTHS: frozenset[int] = frozenset({9, 16})
SYMMETRIC_LENGTHS: frozenset[int] = frozenset({16})


@dataclass(frozen=True)
class KernelResult:
    """
    Outcome of a buffer call

    Fields:
        status: Status code of the call
        values: Flat row-major output on success, otherwise None
    """

    status: KernelStatus
    values: NDArray[np.float64] | None = None

    @property
    def ok(self) -> bool:
        """True when the call succeeded."""
        return self.status == KernelStatus.OK


def invert_buffer(
    values: Sequence[float],
    params: KernelParams | None = None,
) -> KernelResult:
    """Invert a flat 2x2, 3x3 or 4x4 matrix."""
    return _call(
        values, INVERT_LENGTHS, lambda buffer: invert_matrix(buffer, params)
    )


def quaternion_buffer(
    values: Sequence[float],
    precise: bool = False,
    params: KernelParams | None = None,
) -> KernelResult:
    """Return the wxyz quaternion of a flat 3x3 or 4x4 rotation."""
    return _call(
        values,
        ROTATION_LENGTHS,
        lambda buffer: quaternion_from_rotation(buffer, precise, params).to_wxyz(),
    )


def eigenvector_buffer(
    values: Sequence[float],
    eigenvalue: float,
    params: KernelParams | None = None,
) -> KernelResult:
    """Return the unit eigenvector of a flat symmetric 4x4 matrix."""
    return _call(
        values,
        SYMMETRIC_LENGTHS,
        lambda buffer: eigenvector_of_symmetric_44(buffer, eigenvalue, params),
    )


def _call(
    values: Sequence[float],
    lengths: frozenset[int],
    operation: Callable[[NDArray[np.float64]], NDArray[np.float64]],
) -> KernelResult:
    try:
        buffer: NDArray[np.float64] = np.asarray(values, dtype=np.float64)
        if buffer.ndim != 1 or buffer.size not in lengths:
            return KernelResult(status=KernelStatus.INVALID_ARGUMENT)

        output: NDArray[np.float64] = operation(buffer)
    except TransformKernelError as exc:
        _LOG.debug("Kernel call failed, %s", exc)
        return KernelResult(status=exc.status)
    except (TypeError, ValueError) as exc:
        _LOG.debug("Kernel call rejected its input, %s", exc)
        return KernelResult(status=KernelStatus.INVALID_ARGUMENT)

    return KernelResult(status=KernelStatus.OK, values=np.ravel(output))
