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
ROS conversions for filter time types
"""

from builtin_interfaces.msg import Time as RosTime
from rclpy.duration import Duration
from rclpy.time import Time

from oasis_localization.filter_utils.filter_types import FilterTime
from oasis_localization.filter_utils.filter_types import from_ns
from oasis_localization.filter_utils.filter_types import to_ns


# Nanoseconds per second for time conversions
_NS_PER_S: int = 1_000_000_000


def ros_time_to_filter_time(msg: RosTime) -> FilterTime:
    return FilterTime(sec=msg.sec, nanosec=msg.nanosec)


def filter_time_to_ros_time(t: FilterTime) -> RosTime:
    stamp: RosTime = RosTime()
    stamp.sec = t.sec
    stamp.nanosec = t.nanosec
    return stamp


def filter_time_to_rclpy_time(t: FilterTime) -> Time:
    # A zero stamp maps to Time(), which tf2 reads as "latest available"
    return Time(nanoseconds=to_ns(t))


def rclpy_time_to_filter_time(t: Time) -> FilterTime:
    return from_ns(t.nanoseconds)


def seconds_to_rclpy_duration(seconds: float) -> Duration:
    return Duration(nanoseconds=int(round(seconds * _NS_PER_S)))
