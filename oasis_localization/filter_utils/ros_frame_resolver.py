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
ROS node integration for the frame resolver
"""

from __future__ import annotations

import rclpy.node

from oasis_localization.filter_utils import frame_resolver_params as params
from oasis_localization.filter_utils.frame_resolver import FrameResolver
from oasis_localization.filter_utils.frame_resolver_config import FrameResolverConfig


class RosThrottleClock:
    """
    Nanosecond clock backed by a node's time source, for LogThrottle
    """

    def __init__(self, node: rclpy.node.Node) -> None:
        self._node: rclpy.node.Node = node

    def __call__(self) -> int:
        return int(self._node.get_clock().now().nanoseconds)


def declare_frame_resolver_params(node: rclpy.node.Node) -> None:
    node.declare_parameter(
        params.PARAM_TRANSFORM_TIMEOUT, params.DEFAULT_TRANSFORM_TIMEOUT
    )
    node.declare_parameter(
        params.PARAM_STALE_WARNING_INTERVAL, params.DEFAULT_STALE_WARNING_INTERVAL
    )
    node.declare_parameter(
        params.PARAM_UNAVAILABLE_WARNING_INTERVAL,
        params.DEFAULT_UNAVAILABLE_WARNING_INTERVAL,
    )


def load_frame_resolver_config(node: rclpy.node.Node) -> FrameResolverConfig:
    """
    Read the frame resolver parameters declared on node
    """

    return FrameResolverConfig.from_mapping(
        {
            name: float(node.get_parameter(name).value)
            for name in (
                params.PARAM_TRANSFORM_TIMEOUT,
                params.PARAM_STALE_WARNING_INTERVAL,
                params.PARAM_UNAVAILABLE_WARNING_INTERVAL,
            )
        }
    )


def create_frame_resolver(node: rclpy.node.Node) -> FrameResolver:
    """
    Build a resolver that warns through the node's logger on the node's clock

    The parameters must already be declared with declare_frame_resolver_params().
    """

    return FrameResolver.from_config(
        load_frame_resolver_config(node),
        logger=node.get_logger(),
        clock_ns=RosThrottleClock(node),
    )
