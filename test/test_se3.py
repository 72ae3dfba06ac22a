################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from __future__ import annotations

import math
import unittest
from typing import Sequence

import numpy as np

from oasis_localization.filter_utils.se3 import get_yaw
from oasis_localization.filter_utils.se3 import quat_conjugate
from oasis_localization.filter_utils.se3 import quat_from_rpy
from oasis_localization.filter_utils.se3 import quat_identity
from oasis_localization.filter_utils.se3 import quat_multiply
from oasis_localization.filter_utils.se3 import quat_normalize
from oasis_localization.filter_utils.se3 import quat_to_rotmat
from oasis_localization.filter_utils.se3 import quat_to_rpy
from oasis_localization.filter_utils.se3 import rotate_vector
from oasis_localization.filter_utils.se3 import rotmat_to_rpy
from oasis_localization.filter_utils.se3 import rpy_to_rotmat


def _assert_vec_close(
    testcase: unittest.TestCase,
    a: Sequence[float],
    b: Sequence[float],
    tol: float = 1e-9,
) -> None:
    """Assert two vectors are close within tolerance."""
    testcase.assertEqual(len(a), len(b))
    for i in range(len(a)):
        testcase.assertTrue(math.isfinite(a[i]))
        testcase.assertTrue(math.isfinite(b[i]))
        testcase.assertLessEqual(abs(a[i] - b[i]), tol)


def _axis_quat(axis: int, angle: float) -> np.ndarray:
    q: np.ndarray = np.zeros(4, dtype=float)
    q[0] = math.cos(0.5 * angle)
    q[1 + axis] = math.sin(0.5 * angle)
    return q


class TestSe3(unittest.TestCase):
    """Tests for rotation helpers."""

    def test_normalize_zero_is_identity(self) -> None:
        """A zero quaternion normalizes to identity."""
        _assert_vec_close(self, quat_normalize(np.zeros(4)), quat_identity())

    def test_normalize_scales_to_unit(self) -> None:
        q: np.ndarray = quat_normalize(np.array([2.0, 0.0, 0.0, 2.0]))
        self.assertAlmostEqual(float(np.linalg.norm(q)), 1.0)
        _assert_vec_close(self, q, [math.sqrt(0.5), 0.0, 0.0, math.sqrt(0.5)])

    def test_multiply_conjugate_is_identity(self) -> None:
        q: np.ndarray = quat_normalize(np.array([0.7, -0.1, 0.2, 0.1]))
        _assert_vec_close(self, quat_multiply(q, quat_conjugate(q)), quat_identity())

    def test_from_rpy_single_axes(self) -> None:
        """Each Euler angle rotates about its own fixed axis."""
        _assert_vec_close(self, quat_from_rpy(0.4, 0.0, 0.0), _axis_quat(0, 0.4))
        _assert_vec_close(self, quat_from_rpy(0.0, -0.3, 0.0), _axis_quat(1, -0.3))
        _assert_vec_close(self, quat_from_rpy(0.0, 0.0, 1.2), _axis_quat(2, 1.2))

    def test_from_rpy_composition_order(self) -> None:
        """Roll is applied first, then pitch, then yaw."""
        roll: float = 0.3
        pitch: float = -0.5
        yaw: float = 2.0
        expected: np.ndarray = quat_multiply(
            _axis_quat(2, yaw),
            quat_multiply(_axis_quat(1, pitch), _axis_quat(0, roll)),
        )
        _assert_vec_close(self, quat_from_rpy(roll, pitch, yaw), expected)

    def test_to_rotmat_yaw(self) -> None:
        R: np.ndarray = quat_to_rotmat(_axis_quat(2, 0.5 * math.pi))
        np.testing.assert_allclose(
            R, [[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]], atol=1e-12
        )

    def test_rotate_vector(self) -> None:
        rotated: np.ndarray = rotate_vector(
            _axis_quat(2, 0.5 * math.pi), np.array([1.0, 0.0, 0.0])
        )
        _assert_vec_close(self, rotated, [0.0, 1.0, 0.0])

    def test_rpy_round_trip(self) -> None:
        angles: tuple[float, float, float] = (0.25, -0.8, -2.9)
        _assert_vec_close(self, quat_to_rpy(quat_from_rpy(*angles)), angles)

    def test_rpy_negated_quaternion(self) -> None:
        """q and -q decompose to the same angles."""
        q: np.ndarray = quat_from_rpy(-1.0, 0.4, 0.9)
        _assert_vec_close(self, quat_to_rpy(-q), quat_to_rpy(q))

    def test_gimbal_lock_positive_pitch(self) -> None:
        """Pitch +90 deg puts the coupled angle in roll and zeroes yaw."""
        R: np.ndarray = rpy_to_rotmat(0.3, 0.5 * math.pi, -0.7)
        roll, pitch, yaw = rotmat_to_rpy(R)
        self.assertAlmostEqual(pitch, 0.5 * math.pi)
        self.assertEqual(yaw, 0.0)
        self.assertAlmostEqual(roll, 0.3 - (-0.7))
        np.testing.assert_allclose(rpy_to_rotmat(roll, pitch, yaw), R, atol=1e-9)

    def test_gimbal_lock_negative_pitch(self) -> None:
        R: np.ndarray = rpy_to_rotmat(0.3, -0.5 * math.pi, -0.7)
        roll, pitch, yaw = rotmat_to_rpy(R)
        self.assertAlmostEqual(pitch, -0.5 * math.pi)
        self.assertEqual(yaw, 0.0)
        self.assertAlmostEqual(roll, 0.3 + (-0.7))
        np.testing.assert_allclose(rpy_to_rotmat(roll, pitch, yaw), R, atol=1e-9)

    def test_near_gimbal_lock_reconstructs(self) -> None:
        R: np.ndarray = rpy_to_rotmat(1.1, 0.5 * math.pi - 1.0e-4, 0.2)
        np.testing.assert_allclose(rpy_to_rotmat(*rotmat_to_rpy(R)), R, atol=1e-9)

    def test_get_yaw(self) -> None:
        self.assertAlmostEqual(get_yaw(quat_from_rpy(0.1, 0.2, -1.3)), -1.3)


if __name__ == "__main__":
    unittest.main()
