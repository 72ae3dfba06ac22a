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
Interface to the time-indexed transform store queried by the frame resolver
"""

from __future__ import annotations

from typing import Protocol

from oasis_localization.filter_utils.filter_types import FilterTime
from oasis_localization.filter_utils.filter_types import FrameId
from oasis_localization.filter_utils.filter_types import RigidTransform


class TransformStoreError(Exception):
    """Raised by a transform store when a lookup fails."""


class TransformStore(Protocol):
    """
    Read-only view of a transform history

    Passing LATEST_TIME as the time asks for the most recent transform the
    store has for the frame pair. Implementations must be safe for
    concurrent reads; the resolver never writes to the store.

    Lookup failures should be raised as TransformStoreError. The resolver
    converts any exception raised by a store into an UNAVAILABLE result, so
    no store error propagates out of FrameResolver.resolve().
    """

    def can_relate(
        self,
        target_frame: FrameId,
        source_frame: FrameId,
        time: FilterTime,
        tolerance_sec: float,
    ) -> bool:
        """
        True when source_frame can be transformed into target_frame near time
        """
        ...

    def relate(
        self,
        target_frame: FrameId,
        source_frame: FrameId,
        time: FilterTime,
        tolerance_sec: float,
    ) -> RigidTransform:
        """
        Return the transform from source_frame into target_frame

        Raises:
            TransformStoreError: If the transform can't be looked up
        """
        ...
