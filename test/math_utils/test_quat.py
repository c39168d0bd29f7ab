################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the quaternion value type."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_transforms.math_utils.quat import Quaternion


def test_identity_properties() -> None:
    """Checks identity quaternion properties."""
    q: Quaternion = Quaternion.identity()
    mat: NDArray[np.float64] = q.as_matrix()
    assert np.allclose(mat, np.eye(3))


def test_rejects_bad_input() -> None:
    """Checks shape and finiteness validation."""
    with pytest.raises(ValueError):
        Quaternion(np.zeros(3))
    with pytest.raises(ValueError):
        Quaternion(np.array([1.0, np.nan, 0.0, 0.0]))
    with pytest.raises(ValueError):
        Quaternion(np.zeros(4)).normalized()


def test_from_axis_angle_quarter_turn() -> None:
    """Checks a quarter turn about z."""
    q: Quaternion = Quaternion.from_axis_angle([0.0, 0.0, 2.0], math.pi / 2.0)
    expected: NDArray[np.float64] = np.array(
        [math.cos(math.pi / 4.0), 0.0, 0.0, math.sin(math.pi / 4.0)]
    )
    assert np.allclose(q.wxyz, expected)
    R: NDArray[np.float64] = q.as_matrix()
    assert np.allclose(R @ np.array([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])


def test_from_axis_angle_zero_axis() -> None:
    """Checks a zero axis is rejected."""
    with pytest.raises(ValueError):
        Quaternion.from_axis_angle([0.0, 0.0, 0.0], 1.0)


def test_from_uniform_unit_norm() -> None:
    """Checks uniform deviates map to unit quaternions with proper matrices."""
    rng: np.random.Generator = np.random.default_rng(7)
    for _ in range(20):
        q: Quaternion = Quaternion.from_uniform(rng.random(3))
        assert np.isclose(float(np.linalg.norm(q.wxyz)), 1.0)
        R: NDArray[np.float64] = q.as_matrix()
        assert np.allclose(R.T @ R, np.eye(3), atol=1e-12)
        assert np.isclose(float(np.linalg.det(R)), 1.0)


def test_from_uniform_range() -> None:
    """Checks deviates outside [0, 1) are rejected."""
    with pytest.raises(ValueError):
        Quaternion.from_uniform([0.5, 1.5, 0.2])
    with pytest.raises(ValueError):
        Quaternion.from_uniform([1.0, 0.5, 0.2])
    with pytest.raises(ValueError):
        Quaternion.from_uniform([0.5, -0.1, 0.2])
    q: Quaternion = Quaternion.from_uniform([0.0, 0.0, 0.0])
    assert np.isclose(float(np.linalg.norm(q.wxyz)), 1.0)
    with pytest.raises(ValueError):
        Quaternion.from_uniform([0.5, 0.2])


def test_almost_equal_sign_flip() -> None:
    """Checks almost_equal handles sign flips."""
    q: Quaternion = Quaternion.from_axis_angle([1.0, -2.0, 1.0], 0.3)
    q_neg: Quaternion = Quaternion(-q.wxyz)
    assert q.almost_equal(q_neg)
    assert not q.almost_equal(Quaternion.identity())


def test_to_wxyz_copies() -> None:
    """Checks to_wxyz returns an independent copy."""
    q: Quaternion = Quaternion.identity()
    values: NDArray[np.float64] = q.to_wxyz()
    values[0] = 0.0
    assert q.wxyz[0] == 1.0
