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
Conversions between the filter pose state and rigid transforms
"""

from __future__ import annotations

import numpy as np

from oasis_localization.filter_utils.filter_common import MIN_POSE_STATE_SIZE
from oasis_localization.filter_utils.filter_common import STATE_MEMBER_PITCH
from oasis_localization.filter_utils.filter_common import STATE_MEMBER_ROLL
from oasis_localization.filter_utils.filter_common import STATE_MEMBER_X
from oasis_localization.filter_utils.filter_common import STATE_MEMBER_Y
from oasis_localization.filter_utils.filter_common import STATE_MEMBER_YAW
from oasis_localization.filter_utils.filter_common import STATE_MEMBER_Z
from oasis_localization.filter_utils.filter_types import RigidTransform
from oasis_localization.filter_utils.se3 import quat_from_rpy
from oasis_localization.filter_utils.se3 import quat_to_rpy


class PoseStateError(Exception):
    """Raised when a state vector cannot hold a pose."""


def state_to_transform(state: np.ndarray) -> RigidTransform:
    """
    Build a rigid transform from the pose members of a filter state

    The translation is (X, Y, Z) and the rotation is built from (Roll, Pitch,
    Yaw) with roll about X applied first, then pitch about Y, then yaw about Z.
    Angles are used as given; wrapping is left to the filter.

    Args:
        state: Filter state vector indexed by the STATE_MEMBER_* constants

    Returns:
        The transform described by the state's pose members
    """

    _require_pose_state(state)

    translation_m: np.ndarray = np.array(
        [
            float(state[STATE_MEMBER_X]),
            float(state[STATE_MEMBER_Y]),
            float(state[STATE_MEMBER_Z]),
        ],
        dtype=float,
    )
    rotation_wxyz: np.ndarray = quat_from_rpy(
        float(state[STATE_MEMBER_ROLL]),
        float(state[STATE_MEMBER_PITCH]),
        float(state[STATE_MEMBER_YAW]),
    )

    return RigidTransform(translation_m=translation_m, rotation_wxyz=rotation_wxyz)


def transform_to_state(transform: RigidTransform, state: np.ndarray) -> None:
    """
    Write a rigid transform into the pose members of a filter state

    Only X, Y, Z, Roll, Pitch and Yaw are written; velocity and acceleration
    members are left untouched. Near pitch = +/-90 degrees roll and yaw are
    not unique; the written triple reproduces the rotation but may split the
    angle differently from the one that built it.

    Args:
        transform: Transform to decompose
        state: Filter state vector, modified in place
    """

    _require_pose_state(state)

    roll: float
    pitch: float
    yaw: float
    roll, pitch, yaw = quat_to_rpy(transform.rotation_wxyz)

    state[STATE_MEMBER_X] = float(transform.translation_m[0])
    state[STATE_MEMBER_Y] = float(transform.translation_m[1])
    state[STATE_MEMBER_Z] = float(transform.translation_m[2])
    state[STATE_MEMBER_ROLL] = roll
    state[STATE_MEMBER_PITCH] = pitch
    state[STATE_MEMBER_YAW] = yaw


def _require_pose_state(state: np.ndarray) -> None:
    if np.ndim(state) != 1:
        raise PoseStateError("state must be a 1-D vector")
    if len(state) < MIN_POSE_STATE_SIZE:
        raise PoseStateError(
            f"state must have at least {MIN_POSE_STATE_SIZE} elements, got {len(state)}"
        )
