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
Rate limiting for diagnostics keyed by call site
"""

from __future__ import annotations

import threading
import time
from typing import Callable
from typing import Optional
from typing import Protocol


# Nanoseconds per second for time conversions
_NS_PER_S: int = 1_000_000_000


class LogThrottleError(Exception):
    """Raised when throttle configuration is invalid."""


class DiagnosticSink(Protocol):
    """
    Anything that accepts warning messages, such as a logging.Logger or the
    logger returned by rclpy.node.Node.get_logger()
    """

    def warning(self, msg: str) -> object: ...


class LogThrottle:
    """
    Allow at most one message per interval for each call site

    The "last emitted" timestamp of each site is guarded by a lock, so one
    throttle may be shared by threads resolving different frame pairs.
    """

    def __init__(
        self,
        interval_sec: float,
        clock_ns: Optional[Callable[[], int]] = None,
        site_intervals_sec: Optional[dict[str, float]] = None,
    ) -> None:
        """
        Args:
            interval_sec: Minimum time between messages for a site, in seconds
            clock_ns: Monotonic clock returning nanoseconds, defaults to
                time.monotonic_ns
            site_intervals_sec: Per-site overrides of interval_sec
        """
        self._interval_ns: int = _interval_to_ns(interval_sec, "interval_sec")
        self._site_intervals_ns: dict[str, int] = {}
        if site_intervals_sec is not None:
            for site, site_interval_sec in site_intervals_sec.items():
                self._site_intervals_ns[site] = _interval_to_ns(
                    site_interval_sec, f"site_intervals_sec[{site!r}]"
                )
        self._clock_ns: Callable[[], int] = (
            clock_ns if clock_ns is not None else time.monotonic_ns
        )
        self._lock: threading.Lock = threading.Lock()
        self._last_emit_ns: dict[str, int] = {}

    def interval_ns(self, site: str) -> int:
        return self._site_intervals_ns.get(site, self._interval_ns)

    def should_emit(self, site: str) -> bool:
        """
        Return True and record the emission if site is outside its window
        """

        now_ns: int = int(self._clock_ns())
        with self._lock:
            last_ns: Optional[int] = self._last_emit_ns.get(site)
            if last_ns is not None and now_ns - last_ns < self.interval_ns(site):
                return False
            self._last_emit_ns[site] = now_ns
            return True

    def warn(self, sink: DiagnosticSink, site: str, message: str) -> bool:
        """
        Emit a warning through sink unless the site is throttled

        Returns:
            True if the message was emitted
        """

        if not self.should_emit(site):
            return False
        sink.warning(message)
        return True

    def reset(self, site: Optional[str] = None) -> None:
        with self._lock:
            if site is None:
                self._last_emit_ns.clear()
            else:
                self._last_emit_ns.pop(site, None)


def _interval_to_ns(interval_sec: float, name: str) -> int:
    if isinstance(interval_sec, bool) or not isinstance(interval_sec, (int, float)):
        raise LogThrottleError(f"{name} must be a number")
    interval: float = float(interval_sec)
    if not interval >= 0.0 or interval == float("inf"):
        raise LogThrottleError(f"{name} must be finite and non-negative")
    return int(round(interval * _NS_PER_S))
