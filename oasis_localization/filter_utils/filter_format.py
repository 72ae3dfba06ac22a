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
Text formatting of vectors, rotations and transforms for debug output
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from oasis_localization.filter_utils.filter_types import RigidTransform
from oasis_localization.filter_utils.se3 import quat_to_rpy


# Significant digits printed for floating point values
_PRECISION: int = 20


def _format_float(value: float) -> str:
    # Adding 0.0 prints negative zero as "0"
    return f"{float(value) + 0.0:.{_PRECISION}g}"


def format_vector(values: Iterable[float]) -> str:
    """Format a vector as "(v0 v1 ... )"."""
    return "(" + "".join(_format_float(value) + " " for value in values) + ")"


def format_bool_vector(values: Iterable[bool]) -> str:
    """Format a boolean vector as "(true false ... )"."""
    return "(" + "".join(("true" if value else "false") + " " for value in values) + ")"


def format_position(translation_m: np.ndarray) -> str:
    return "(" + " ".join(_format_float(value) for value in translation_m) + ")"


def format_quaternion(q_wxyz: np.ndarray) -> str:
    """Format a quaternion as its roll, pitch and yaw in radians."""
    roll: float
    pitch: float
    yaw: float
    roll, pitch, yaw = quat_to_rpy(q_wxyz)
    return "(" + ", ".join(_format_float(angle) for angle in (roll, pitch, yaw)) + ")"


def format_transform(transform: RigidTransform) -> str:
    return (
        f"Origin: {format_position(transform.translation_m)}\n"
        f"Rotation (RPY): {format_quaternion(transform.rotation_wxyz)}\n"
    )
