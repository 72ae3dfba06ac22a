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
Transform store backed by a tf2_ros buffer
"""

from __future__ import annotations

import numpy as np
from geometry_msgs.msg import Quaternion
from geometry_msgs.msg import Transform
from geometry_msgs.msg import TransformStamped
from geometry_msgs.msg import Vector3
from tf2_ros import Buffer
from tf2_ros import TransformException

from oasis_localization.filter_utils.filter_types import FilterTime
from oasis_localization.filter_utils.filter_types import FrameId
from oasis_localization.filter_utils.filter_types import RigidTransform
from oasis_localization.filter_utils.filter_types import RigidTransformError
from oasis_localization.filter_utils.ros_time_adapter import filter_time_to_rclpy_time
from oasis_localization.filter_utils.ros_time_adapter import seconds_to_rclpy_duration
from oasis_localization.filter_utils.transform_store import TransformStoreError


def ros_transform_to_rigid(transform: Transform) -> RigidTransform:
    """
    Convert a geometry_msgs/Transform into a rigid transform
    """

    return RigidTransform(
        translation_m=np.array(
            [
                float(transform.translation.x),
                float(transform.translation.y),
                float(transform.translation.z),
            ],
            dtype=float,
        ),
        rotation_wxyz=np.array(
            [
                float(transform.rotation.w),
                float(transform.rotation.x),
                float(transform.rotation.y),
                float(transform.rotation.z),
            ],
            dtype=float,
        ),
    )


def rigid_to_ros_transform(rigid: RigidTransform) -> Transform:
    """
    Convert a rigid transform into a geometry_msgs/Transform
    """

    translation: Vector3 = Vector3(
        x=float(rigid.translation_m[0]),
        y=float(rigid.translation_m[1]),
        z=float(rigid.translation_m[2]),
    )
    rotation: Quaternion = Quaternion(
        w=float(rigid.rotation_wxyz[0]),
        x=float(rigid.rotation_wxyz[1]),
        y=float(rigid.rotation_wxyz[2]),
        z=float(rigid.rotation_wxyz[3]),
    )
    transform: Transform = Transform()
    transform.translation = translation
    transform.rotation = rotation
    return transform


class Tf2TransformStore:
    """
    Read-only transform store over a tf2_ros.Buffer

    The tolerance is passed to tf2 as the lookup timeout. LATEST_TIME maps to
    a zero stamp, which tf2 answers with the most recent transform.
    """

    def __init__(self, buffer: Buffer) -> None:
        self._buffer: Buffer = buffer

    def can_relate(
        self,
        target_frame: FrameId,
        source_frame: FrameId,
        time: FilterTime,
        tolerance_sec: float,
    ) -> bool:
        try:
            return bool(
                self._buffer.can_transform(
                    target_frame,
                    source_frame,
                    filter_time_to_rclpy_time(time),
                    timeout=seconds_to_rclpy_duration(tolerance_sec),
                )
            )
        except TransformException as exc:
            raise TransformStoreError(str(exc)) from exc

    def relate(
        self,
        target_frame: FrameId,
        source_frame: FrameId,
        time: FilterTime,
        tolerance_sec: float,
    ) -> RigidTransform:
        try:
            stamped: TransformStamped = self._buffer.lookup_transform(
                target_frame,
                source_frame,
                filter_time_to_rclpy_time(time),
                timeout=seconds_to_rclpy_duration(tolerance_sec),
            )
        except TransformException as exc:
            raise TransformStoreError(str(exc)) from exc

        try:
            return ros_transform_to_rigid(stamped.transform)
        except RigidTransformError as exc:
            raise TransformStoreError(
                f"Invalid transform from {source_frame} to {target_frame}: {exc}"
            ) from exc
