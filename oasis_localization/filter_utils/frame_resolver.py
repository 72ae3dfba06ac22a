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
Best-effort lookup of the transform between two frames

Lookups try the requested time first and fall back to the most recent
transform in the store, so a filter can keep running while transform
publication lags. Falling back is reported through throttled warnings, never
through the result's success status.
"""

from __future__ import annotations

import logging
import math
from typing import Callable
from typing import Optional

from oasis_localization.filter_utils.filter_format import format_transform
from oasis_localization.filter_utils.filter_types import LATEST_TIME
from oasis_localization.filter_utils.filter_types import FilterTime
from oasis_localization.filter_utils.filter_types import FrameId
from oasis_localization.filter_utils.filter_types import ResolveResult
from oasis_localization.filter_utils.filter_types import ResolveStatus
from oasis_localization.filter_utils.filter_types import RigidTransform
from oasis_localization.filter_utils.filter_types import is_latest
from oasis_localization.filter_utils.filter_types import to_seconds
from oasis_localization.filter_utils.frame_resolver_config import FrameResolverConfig
from oasis_localization.filter_utils.log_throttle import DiagnosticSink
from oasis_localization.filter_utils.log_throttle import LogThrottle
from oasis_localization.filter_utils.transform_store import TransformStore
from oasis_localization.filter_utils.transform_store import TransformStoreError


# Throttle sites for resolver diagnostics
STALE_TRANSFORM_SITE: str = "stale_transform"
TRANSFORM_UNAVAILABLE_SITE: str = "transform_unavailable"

_LOG: logging.Logger = logging.getLogger(__name__)


class FrameResolverError(Exception):
    """Raised when resolver arguments are invalid."""


class FrameResolver:
    """
    Resolve rigid transforms between frames with a latest-available fallback

    The resolver holds no transform data. Its only mutable state is the
    throttle, which is thread-safe, so one resolver may serve several threads.
    """

    def __init__(
        self,
        throttle: LogThrottle,
        logger: Optional[DiagnosticSink] = None,
        default_tolerance_sec: float = 0.0,
    ) -> None:
        """
        Args:
            throttle: Rate limiter for the stale and unavailable warnings
            logger: Diagnostic sink, defaults to this module's logger
            default_tolerance_sec: Lookup window used when resolve() is called
                without a tolerance
        """
        self._throttle: LogThrottle = throttle
        self._logger: DiagnosticSink = logger if logger is not None else _LOG
        self._default_tolerance_sec: float = _require_tolerance(default_tolerance_sec)

    @classmethod
    def from_config(
        cls,
        config: FrameResolverConfig,
        logger: Optional[DiagnosticSink] = None,
        clock_ns: Optional[Callable[[], int]] = None,
    ) -> FrameResolver:
        throttle: LogThrottle = LogThrottle(
            interval_sec=config.unavailable_warning_interval_sec,
            clock_ns=clock_ns,
            site_intervals_sec={
                STALE_TRANSFORM_SITE: config.stale_warning_interval_sec,
                TRANSFORM_UNAVAILABLE_SITE: config.unavailable_warning_interval_sec,
            },
        )
        return cls(
            throttle=throttle,
            logger=logger,
            default_tolerance_sec=config.default_tolerance_sec,
        )

    @property
    def default_tolerance_sec(self) -> float:
        return self._default_tolerance_sec

    @property
    def throttle(self) -> LogThrottle:
        return self._throttle

    def resolve(
        self,
        store: TransformStore,
        target_frame: FrameId,
        source_frame: FrameId,
        time: FilterTime,
        tolerance_sec: Optional[float] = None,
        *,
        silent: bool = False,
    ) -> ResolveResult:
        """
        Look up the transform from source_frame into target_frame at time

        Resolution order, first success wins:

          1. Identical frames resolve to identity without touching the store
          2. The store's transform within tolerance_sec of time
          3. The store's most recent transform, with a throttled warning
          4. UNAVAILABLE, with a throttled warning

        Args:
            store: Transform history to query, read only
            target_frame: Frame the result maps into
            source_frame: Frame the result maps from
            time: Requested stamp, or LATEST_TIME
            tolerance_sec: Lookup window in seconds, defaults to the
                resolver's default tolerance
            silent: Suppress warnings; the result is unaffected

        Returns:
            The resolution result. Store failures never raise.

        Raises:
            FrameResolverError: If tolerance_sec is negative or not finite
        """

        if target_frame == source_frame:
            return ResolveResult(
                status=ResolveStatus.IDENTITY,
                target_frame=target_frame,
                source_frame=source_frame,
                transform=RigidTransform.identity(),
            )

        tolerance: float = (
            self._default_tolerance_sec
            if tolerance_sec is None
            else _require_tolerance(tolerance_sec)
        )

        transform: Optional[RigidTransform]
        reason: Optional[str]
        transform, reason = _lookup(store, target_frame, source_frame, time, tolerance)
        if transform is not None:
            return ResolveResult(
                status=ResolveStatus.EXACT,
                target_frame=target_frame,
                source_frame=source_frame,
                transform=transform,
            )

        # The latest query is the one that just failed
        if not is_latest(time):
            transform, latest_reason = _lookup(
                store, target_frame, source_frame, LATEST_TIME, tolerance
            )
            if transform is not None:
                if not silent:
                    self._throttle.warn(
                        self._logger,
                        STALE_TRANSFORM_SITE,
                        f"Transform from {source_frame} to {target_frame} was "
                        "unavailable for the time requested. Using latest instead.",
                    )
                return ResolveResult(
                    status=ResolveStatus.LATEST,
                    target_frame=target_frame,
                    source_frame=source_frame,
                    transform=transform,
                    reason=reason,
                )
            if latest_reason is not None:
                reason = latest_reason

        if not silent:
            message: str = f"Could not transform from {source_frame} to {target_frame}"
            if reason:
                message += f". Error was {reason}"
            self._throttle.warn(self._logger, TRANSFORM_UNAVAILABLE_SITE, message)

        return ResolveResult(
            status=ResolveStatus.UNAVAILABLE,
            target_frame=target_frame,
            source_frame=source_frame,
            reason=reason,
        )

    def resolve_without_tolerance(
        self,
        store: TransformStore,
        target_frame: FrameId,
        source_frame: FrameId,
        time: FilterTime,
        *,
        silent: bool = False,
    ) -> ResolveResult:
        """
        Look up a transform with a zero-width window around time
        """

        return self.resolve(
            store, target_frame, source_frame, time, 0.0, silent=silent
        )


def _lookup(
    store: TransformStore,
    target_frame: FrameId,
    source_frame: FrameId,
    time: FilterTime,
    tolerance_sec: float,
) -> tuple[Optional[RigidTransform], Optional[str]]:
    """
    Query the store once, returning (transform, error text)
    """

    transform: RigidTransform
    try:
        if not store.can_relate(target_frame, source_frame, time, tolerance_sec):
            return None, None
        transform = store.relate(target_frame, source_frame, time, tolerance_sec)
    except TransformStoreError as exc:
        _LOG.debug(
            "Transform lookup from %s to %s failed: %s", source_frame, target_frame, exc
        )
        return None, str(exc)
    except Exception as exc:
        # Stores of any kind must not raise out of resolve()
        _LOG.debug(
            "Transform store raised %s looking up %s to %s",
            type(exc).__name__,
            source_frame,
            target_frame,
            exc_info=True,
        )
        return None, f"{type(exc).__name__}: {exc}"

    if _LOG.isEnabledFor(logging.DEBUG):
        _LOG.debug(
            "Transform from %s to %s at %.9f s:\n%s",
            source_frame,
            target_frame,
            to_seconds(time),
            format_transform(transform),
        )

    return transform, None


def _require_tolerance(tolerance_sec: float) -> float:
    if isinstance(tolerance_sec, bool) or not isinstance(tolerance_sec, (int, float)):
        raise FrameResolverError("tolerance_sec must be a number")
    tolerance: float = float(tolerance_sec)
    if not math.isfinite(tolerance) or tolerance < 0.0:
        raise FrameResolverError("tolerance_sec must be finite and non-negative")
    return tolerance
