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
Types and helpers for frame resolution and pose conversion
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from dataclasses import field
from typing import Optional

import numpy as np

from oasis_localization.filter_utils.se3 import QUAT_NORM_EPS
from oasis_localization.filter_utils.se3 import quat_conjugate
from oasis_localization.filter_utils.se3 import quat_identity
from oasis_localization.filter_utils.se3 import quat_multiply
from oasis_localization.filter_utils.se3 import quat_normalize
from oasis_localization.filter_utils.se3 import quat_to_rotmat
from oasis_localization.filter_utils.se3 import rotate_vector


# Nanoseconds per second for converting filter timestamps
_NS_PER_S: int = 1_000_000_000

# Coordinate frame name, compared by value
FrameId = str


class RigidTransformError(Exception):
    """Raised when rigid transform inputs are invalid."""


@dataclass(frozen=True)
class FilterTime:
    """
    Filter timestamp stored as seconds and nanoseconds

    Fields:
        sec: Whole seconds since the time reference
        nanosec: Sub-second remainder in nanoseconds [0, 1e9)
    """

    sec: int
    nanosec: int


# Sentinel asking a transform store for the most recent available transform
LATEST_TIME: FilterTime = FilterTime(sec=0, nanosec=0)


def is_latest(t: FilterTime) -> bool:
    return t.sec == 0 and t.nanosec == 0


def to_ns(t: FilterTime) -> int:
    return t.sec * _NS_PER_S + t.nanosec


def from_ns(ns: int) -> FilterTime:
    sec, nanosec = divmod(ns, _NS_PER_S)
    return FilterTime(sec=sec, nanosec=nanosec)


def to_seconds(t: FilterTime) -> float:
    return float(t.sec) + float(t.nanosec) / _NS_PER_S


def from_seconds(seconds: float) -> FilterTime:
    total_ns: int = int(round(seconds * _NS_PER_S))
    return from_ns(total_ns)


@dataclass(frozen=True, eq=False)
class RigidTransform:
    """
    Rigid transform between two coordinate frames

    Maps a point expressed in the source frame into the target frame:
    p_target = R * p_source + t.

    Fields:
        translation_m: Translation in meters, XYZ order
        rotation_wxyz: Quaternion rotation in wxyz order, normalized on
            construction

    Equality compares the stored arrays exactly; use is_close() for a
    tolerance. Instances are not hashable.
    """

    translation_m: np.ndarray
    rotation_wxyz: np.ndarray

    def __post_init__(self) -> None:
        translation_m: np.ndarray = np.asarray(self.translation_m, dtype=float)
        if translation_m.shape != (3,):
            raise RigidTransformError("translation_m must be shape (3,)")
        if not np.all(np.isfinite(translation_m)):
            raise RigidTransformError("translation_m must be finite")

        rotation_wxyz: np.ndarray = np.asarray(self.rotation_wxyz, dtype=float)
        if rotation_wxyz.shape != (4,):
            raise RigidTransformError("rotation_wxyz must be shape (4,)")
        if not np.all(np.isfinite(rotation_wxyz)):
            raise RigidTransformError("rotation_wxyz must be finite")
        norm: float = float(np.linalg.norm(rotation_wxyz))
        if norm < QUAT_NORM_EPS:
            raise RigidTransformError("rotation_wxyz must have a non-zero norm")

        # Store private copies of the caller arrays
        object.__setattr__(self, "translation_m", translation_m.copy())
        object.__setattr__(self, "rotation_wxyz", quat_normalize(rotation_wxyz))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RigidTransform):
            return NotImplemented
        return bool(
            np.array_equal(self.translation_m, other.translation_m)
            and np.array_equal(self.rotation_wxyz, other.rotation_wxyz)
        )

    @classmethod
    def identity(cls) -> RigidTransform:
        return cls(translation_m=np.zeros(3, dtype=float), rotation_wxyz=quat_identity())

    def rotation_matrix(self) -> np.ndarray:
        return quat_to_rotmat(self.rotation_wxyz)

    def compose(self, other: RigidTransform) -> RigidTransform:
        """
        Return self * other, applying other first
        """

        translation_m: np.ndarray = self.translation_m + rotate_vector(
            self.rotation_wxyz, other.translation_m
        )
        rotation_wxyz: np.ndarray = quat_multiply(
            self.rotation_wxyz, other.rotation_wxyz
        )
        return RigidTransform(translation_m=translation_m, rotation_wxyz=rotation_wxyz)

    def inverse(self) -> RigidTransform:
        rotation_inv: np.ndarray = quat_conjugate(self.rotation_wxyz)
        translation_m: np.ndarray = -rotate_vector(rotation_inv, self.translation_m)
        return RigidTransform(translation_m=translation_m, rotation_wxyz=rotation_inv)

    def transform_point(self, point: np.ndarray) -> np.ndarray:
        return self.translation_m + rotate_vector(self.rotation_wxyz, point)

    def is_close(self, other: RigidTransform, tol: float = 1.0e-9) -> bool:
        """
        True when both transforms describe the same motion within tolerance

        Quaternions q and -q are treated as the same rotation.
        """

        if not np.allclose(self.translation_m, other.translation_m, rtol=0.0, atol=tol):
            return False
        return bool(
            np.allclose(self.rotation_matrix(), other.rotation_matrix(), rtol=0.0, atol=tol)
        )


class ResolveStatus(enum.Enum):
    """
    Outcome of a frame resolution

    Attributes:
        IDENTITY: Source and target frames are the same frame
        EXACT: Transform resolved within tolerance of the requested time
        LATEST: Requested time unavailable, most recent transform substituted
        UNAVAILABLE: Frames could not be related at all
    """

    IDENTITY = "identity"
    EXACT = "exact"
    LATEST = "latest"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ResolveResult:
    """
    Result of resolving the transform between two frames

    Fields:
        status: How the transform was obtained
        target_frame: Frame the transform maps into
        source_frame: Frame the transform maps from
        transform: Resolved transform, None when unavailable
        reason: Error text from the transform store, if any
    """

    status: ResolveStatus
    target_frame: FrameId
    source_frame: FrameId
    # Excluded from the hash because transforms are unhashable
    transform: Optional[RigidTransform] = field(default=None, hash=False)
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != ResolveStatus.UNAVAILABLE

    @property
    def is_stale(self) -> bool:
        return self.status == ResolveStatus.LATEST
