################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Rotation helpers for rigid transforms and roll/pitch/yaw state

Quaternions are numpy arrays in [w, x, y, z] order. Euler angles follow the
fixed-axis X-Y-Z convention: R = Rz(yaw) * Ry(pitch) * Rx(roll).
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np


# Units: unitless. Meaning: quaternion norm below which no rotation can be
# recovered
QUAT_NORM_EPS: float = 1.0e-12

# Units: unitless. Meaning: distance of |R[2][0]| from 1 below which the
# decomposition treats pitch as exactly +/-90 degrees
_GIMBAL_EPS: float = 1.0e-12


def quat_identity() -> np.ndarray:
    return np.array([1.0, 0.0, 0.0, 0.0], dtype=float)


def quat_normalize(q_wxyz: np.ndarray) -> np.ndarray:
    """
    Normalize a quaternion in [w, x, y, z] order
    """

    norm: float = float(np.linalg.norm(q_wxyz))
    if norm < QUAT_NORM_EPS:
        return quat_identity()
    return np.asarray(q_wxyz, dtype=float) / norm


def quat_multiply(q1_wxyz: np.ndarray, q2_wxyz: np.ndarray) -> np.ndarray:
    """
    Multiply two quaternions in [w, x, y, z] order
    """

    w1: float = float(q1_wxyz[0])
    x1: float = float(q1_wxyz[1])
    y1: float = float(q1_wxyz[2])
    z1: float = float(q1_wxyz[3])

    w2: float = float(q2_wxyz[0])
    x2: float = float(q2_wxyz[1])
    y2: float = float(q2_wxyz[2])
    z2: float = float(q2_wxyz[3])

    return np.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ],
        dtype=float,
    )


def quat_conjugate(q_wxyz: np.ndarray) -> np.ndarray:
    """
    Conjugate a quaternion in [w, x, y, z] order
    """

    return np.array(
        [float(q_wxyz[0]), -float(q_wxyz[1]), -float(q_wxyz[2]), -float(q_wxyz[3])],
        dtype=float,
    )


def quat_to_rotmat(q_wxyz: np.ndarray) -> np.ndarray:
    """
    Convert quaternion to 3x3 rotation matrix
    """

    q_unit: np.ndarray = quat_normalize(q_wxyz)
    w: float = float(q_unit[0])
    x: float = float(q_unit[1])
    y: float = float(q_unit[2])
    z: float = float(q_unit[3])

    ww: float = w * w
    xx: float = x * x
    yy: float = y * y
    zz: float = z * z

    wx: float = w * x
    wy: float = w * y
    wz: float = w * z

    xy: float = x * y
    xz: float = x * z
    yz: float = y * z

    return np.array(
        [
            [ww + xx - yy - zz, 2.0 * (xy - wz), 2.0 * (xz + wy)],
            [2.0 * (xy + wz), ww - xx + yy - zz, 2.0 * (yz - wx)],
            [2.0 * (xz - wy), 2.0 * (yz + wx), ww - xx - yy + zz],
        ],
        dtype=float,
    )


def rotate_vector(q_wxyz: np.ndarray, vector: np.ndarray) -> np.ndarray:
    """
    Rotate a 3D vector by a quaternion
    """

    return quat_to_rotmat(q_wxyz) @ np.asarray(vector, dtype=float)


def quat_from_rpy(roll: float, pitch: float, yaw: float) -> np.ndarray:
    """
    Build a quaternion from roll about X, pitch about Y and yaw about Z

    The result is R = Rz(yaw) * Ry(pitch) * Rx(roll), so roll is applied first.
    No range checks are applied to the angles.
    """

    half_roll: float = 0.5 * float(roll)
    half_pitch: float = 0.5 * float(pitch)
    half_yaw: float = 0.5 * float(yaw)

    cr: float = math.cos(half_roll)
    sr: float = math.sin(half_roll)
    cp: float = math.cos(half_pitch)
    sp: float = math.sin(half_pitch)
    cy: float = math.cos(half_yaw)
    sy: float = math.sin(half_yaw)

    return np.array(
        [
            cr * cp * cy + sr * sp * sy,
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
        ],
        dtype=float,
    )


def rotmat_to_rpy(rotation: np.ndarray) -> Tuple[float, float, float]:
    """
    Decompose a rotation matrix into roll, pitch, yaw in radians

    Pitch is in [-pi/2, pi/2], roll and yaw in [-pi, pi]. At pitch = +/-90
    degrees roll and yaw are coupled; yaw is reported as 0 and the combined
    angle is carried by roll, so the triple still reproduces the rotation.
    """

    m: np.ndarray = np.asarray(rotation, dtype=float)
    m20: float = float(m[2, 0])

    if abs(m20) >= 1.0 - _GIMBAL_EPS:
        yaw: float = 0.0
        if m20 < 0.0:
            pitch: float = 0.5 * math.pi
            roll: float = math.atan2(float(m[0, 1]), float(m[0, 2]))
        else:
            pitch = -0.5 * math.pi
            roll = math.atan2(-float(m[0, 1]), -float(m[0, 2]))
        return roll, pitch, yaw

    pitch = -math.asin(m20)
    cos_pitch: float = math.cos(pitch)
    roll = math.atan2(float(m[2, 1]) / cos_pitch, float(m[2, 2]) / cos_pitch)
    yaw = math.atan2(float(m[1, 0]) / cos_pitch, float(m[0, 0]) / cos_pitch)

    return roll, pitch, yaw


def quat_to_rpy(q_wxyz: np.ndarray) -> Tuple[float, float, float]:
    """
    Convert quaternion to roll, pitch, yaw in radians
    """

    return rotmat_to_rpy(quat_to_rotmat(q_wxyz))


def get_yaw(q_wxyz: np.ndarray) -> float:
    """
    Return the yaw component of a quaternion in radians
    """

    yaw: float
    _, _, yaw = quat_to_rpy(q_wxyz)
    return yaw


def rpy_to_rotmat(roll: float, pitch: float, yaw: float) -> np.ndarray:
    return quat_to_rotmat(quat_from_rpy(roll, pitch, yaw))
