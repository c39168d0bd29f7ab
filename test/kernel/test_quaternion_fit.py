################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the quaternion-from-rotation driver."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_transforms.kernel.kernel_errors import DegenerateEigenspaceError
from oasis_transforms.kernel.quaternion_fit import Eigenpair
from oasis_transforms.kernel.quaternion_fit import dominant_eigenpair
from oasis_transforms.kernel.quaternion_fit import key_matrix
from oasis_transforms.kernel.quaternion_fit import quaternion_from_rotation
from oasis_transforms.math_utils.quat import Quaternion


def test_identity_rotation() -> None:
    """Checks the identity matrix yields the identity quaternion."""
    q: Quaternion = quaternion_from_rotation(np.eye(3))
    assert np.allclose(q.wxyz, [1.0, 0.0, 0.0, 0.0], atol=1e-12)


def test_quarter_turn_about_z() -> None:
    """Checks a quarter turn about z built from axis-angle."""
    R: NDArray[np.float64] = Quaternion.from_axis_angle(
        [0.0, 0.0, 1.0], math.pi / 2.0
    ).as_matrix()
    q: Quaternion = quaternion_from_rotation(R)
    expected: Quaternion = Quaternion.from_wxyz(
        math.cos(math.pi / 4.0), 0.0, 0.0, math.sin(math.pi / 4.0)
    )
    assert q.almost_equal(expected, atol=1e-12)


@pytest.mark.parametrize("axis", [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [1.0, 1.0, 1.0]])
def test_axis_rotations(axis: list[float]) -> None:
    """Checks rotations about several axes, including half turns."""
    for angle in (0.1, 1.0, 2.5, math.pi):
        q_true: Quaternion = Quaternion.from_axis_angle(axis, angle)
        q: Quaternion = quaternion_from_rotation(q_true.as_matrix())
        assert q.almost_equal(q_true, atol=1e-9)


def test_random_roundtrip() -> None:
    """Checks random unit quaternions survive a matrix roundtrip up to sign."""
    rng: np.random.Generator = np.random.default_rng(42)
    for _ in range(200):
        q_true: Quaternion = Quaternion.from_uniform(rng.random(3))
        q: Quaternion = quaternion_from_rotation(q_true.as_matrix())
        assert np.isclose(float(np.linalg.norm(q.wxyz)), 1.0)
        assert q.almost_equal(q_true, atol=1e-8)


def test_sign_convention() -> None:
    """Checks the scalar part is never negative."""
    rng: np.random.Generator = np.random.default_rng(43)
    for _ in range(50):
        q_true: Quaternion = Quaternion.from_uniform(rng.random(3))
        q: Quaternion = quaternion_from_rotation(q_true.as_matrix())
        assert q.wxyz[0] >= 0.0


def test_precise_matches_eigen_path() -> None:
    """Checks the closed form agrees with the eigen solution for exact input."""
    rng: np.random.Generator = np.random.default_rng(44)
    for _ in range(50):
        R: NDArray[np.float64] = Quaternion.from_uniform(rng.random(3)).as_matrix()
        fitted: Quaternion = quaternion_from_rotation(R)
        exact: Quaternion = quaternion_from_rotation(R, precise=True)
        assert fitted.almost_equal(exact, atol=1e-8)


def test_homogeneous_and_flat_inputs() -> None:
    """Checks 4x4 transforms and flat buffers are accepted."""
    q_true: Quaternion = Quaternion.from_axis_angle([0.3, -0.2, 0.9], 0.7)
    transform: NDArray[np.float64] = np.eye(4)
    transform[:3, :3] = q_true.as_matrix()
    transform[:3, 3] = [4.0, 5.0, 6.0]
    assert quaternion_from_rotation(transform).almost_equal(q_true, atol=1e-9)
    assert quaternion_from_rotation(transform.ravel().tolist()).almost_equal(
        q_true, atol=1e-9
    )
    assert quaternion_from_rotation(
        q_true.as_matrix().ravel().tolist(), precise=True
    ).almost_equal(q_true, atol=1e-9)


def test_noisy_rotation() -> None:
    """Checks a perturbed rotation still yields a nearby unit quaternion."""
    rng: np.random.Generator = np.random.default_rng(45)
    q_true: Quaternion = Quaternion.from_axis_angle([1.0, 2.0, 3.0], 1.2)
    R_noisy: NDArray[np.float64] = q_true.as_matrix() + rng.normal(
        scale=1e-3, size=(3, 3)
    )
    q: Quaternion = quaternion_from_rotation(R_noisy)
    assert np.isclose(float(np.linalg.norm(q.wxyz)), 1.0)
    assert q.almost_equal(q_true, atol=1e-2)


def test_improper_rotation_is_degenerate() -> None:
    """Checks a point reflection has no unique best-fit quaternion."""
    with pytest.raises(DegenerateEigenspaceError):
        quaternion_from_rotation(-np.eye(3))


def test_rejects_non_finite_rotation() -> None:
    """Checks non-finite rotations raise ValueError."""
    R: NDArray[np.float64] = np.eye(3)
    R[0, 2] = np.inf
    with pytest.raises(ValueError):
        quaternion_from_rotation(R)


def test_key_matrix_structure() -> None:
    """Checks the key matrix is symmetric with top eigenvalue one."""
    R: NDArray[np.float64] = Quaternion.from_axis_angle([0.0, 1.0, 1.0], 0.9).as_matrix()
    K: NDArray[np.float64] = key_matrix(R)
    assert np.allclose(K, K.T)
    eigvals: NDArray[np.float64] = np.linalg.eigvalsh(K)
    assert np.allclose(eigvals, [-1.0 / 3.0, -1.0 / 3.0, -1.0 / 3.0, 1.0])


def test_dominant_eigenpair_matches_numpy() -> None:
    """Checks the eigenpair against a dense symmetric solver."""
    rng: np.random.Generator = np.random.default_rng(46)
    for _ in range(20):
        mat: NDArray[np.float64] = rng.uniform(-1.0, 1.0, size=(4, 4))
        mat = 0.5 * (mat + mat.T)
        original: NDArray[np.float64] = mat.copy()
        pair: Eigenpair = dominant_eigenpair(mat)
        eigvals: NDArray[np.float64]
        eigvecs: NDArray[np.float64]
        eigvals, eigvecs = np.linalg.eigh(mat)
        assert np.array_equal(mat, original)
        assert np.isclose(pair.eigenvalue, eigvals[-1], atol=1e-12)
        assert np.isclose(abs(float(np.dot(pair.eigenvector, eigvecs[:, -1]))), 1.0)


def test_small_scale_rotation_is_degenerate() -> None:
    """Checks a rotation scaled to 1e-3 falls below the eigenvector floor."""
    with pytest.raises(DegenerateEigenspaceError):
        quaternion_from_rotation(1e-3 * np.eye(3))
