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
Pose state layout shared with the estimation filter
"""

# Index of each state member in the 15-element filter state vector. The
# binding is fixed; consumers index the vector with these constants only.
STATE_MEMBER_X: int = 0
STATE_MEMBER_Y: int = 1
STATE_MEMBER_Z: int = 2
STATE_MEMBER_ROLL: int = 3
STATE_MEMBER_PITCH: int = 4
STATE_MEMBER_YAW: int = 5
STATE_MEMBER_VX: int = 6
STATE_MEMBER_VY: int = 7
STATE_MEMBER_VZ: int = 8
STATE_MEMBER_VROLL: int = 9
STATE_MEMBER_VPITCH: int = 10
STATE_MEMBER_VYAW: int = 11
STATE_MEMBER_AX: int = 12
STATE_MEMBER_AY: int = 13
STATE_MEMBER_AZ: int = 14

# Number of elements in the full filter state
STATE_SIZE: int = 15

# Offsets of the pose blocks within the state
POSITION_OFFSET: int = STATE_MEMBER_X
ORIENTATION_OFFSET: int = STATE_MEMBER_ROLL

# Number of pose elements (XYZ + RPY)
POSE_SIZE: int = 6

# Minimum state length the pose codec can read from or write into
MIN_POSE_STATE_SIZE: int = POSITION_OFFSET + POSE_SIZE
