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
Centralized frame resolver ROS parameter names and defaults
"""

# Time window around the requested stamp searched for a transform, seconds
PARAM_TRANSFORM_TIMEOUT: str = "transform_timeout"

# Default time window around the requested stamp, seconds
DEFAULT_TRANSFORM_TIMEOUT: float = 0.0

# Minimum time between "using latest transform" warnings, seconds
PARAM_STALE_WARNING_INTERVAL: str = "stale_transform_warning_interval"

# Default minimum time between "using latest transform" warnings, seconds
DEFAULT_STALE_WARNING_INTERVAL: float = 2.0

# Minimum time between "could not transform" warnings, seconds
PARAM_UNAVAILABLE_WARNING_INTERVAL: str = "unavailable_transform_warning_interval"

# Default minimum time between "could not transform" warnings, seconds
DEFAULT_UNAVAILABLE_WARNING_INTERVAL: float = 3.0

# Key under a node name that holds its parameters in a ROS 2 parameter file
ROS_PARAMETERS_KEY: str = "ros__parameters"
