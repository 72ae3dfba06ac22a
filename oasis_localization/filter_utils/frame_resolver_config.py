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
Configuration data for frame resolution
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any
from typing import Union

import yaml

from oasis_localization.filter_utils import frame_resolver_params as params


# Nanoseconds per second for time conversions
_NS_PER_S: int = 1_000_000_000


class FrameResolverConfigError(Exception):
    """Raised when frame resolver configuration validation fails."""


@dataclass(frozen=True)
class FrameResolverConfig:
    """
    Frame resolver configuration values

    Fields:
        default_tolerance_sec: Lookup window used when the caller gives none
        stale_warning_interval_sec: Min seconds between stale-transform warnings
        unavailable_warning_interval_sec: Min seconds between lookup failure
            warnings
        stale_warning_interval_ns: stale_warning_interval_sec in nanoseconds
        unavailable_warning_interval_ns: unavailable_warning_interval_sec in
            nanoseconds
    """

    default_tolerance_sec: float = params.DEFAULT_TRANSFORM_TIMEOUT
    stale_warning_interval_sec: float = params.DEFAULT_STALE_WARNING_INTERVAL
    unavailable_warning_interval_sec: float = (
        params.DEFAULT_UNAVAILABLE_WARNING_INTERVAL
    )

    stale_warning_interval_ns: int = field(init=False)
    unavailable_warning_interval_ns: int = field(init=False)

    def __post_init__(self) -> None:
        self.validate()
        object.__setattr__(
            self,
            "stale_warning_interval_ns",
            int(round(self.stale_warning_interval_sec * _NS_PER_S)),
        )
        object.__setattr__(
            self,
            "unavailable_warning_interval_ns",
            int(round(self.unavailable_warning_interval_sec * _NS_PER_S)),
        )

    def validate(self) -> None:
        """Validate that every duration is finite and non-negative."""
        _require_duration(self.default_tolerance_sec, "default_tolerance_sec")
        _require_duration(
            self.stale_warning_interval_sec, "stale_warning_interval_sec"
        )
        _require_duration(
            self.unavailable_warning_interval_sec, "unavailable_warning_interval_sec"
        )

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> FrameResolverConfig:
        """
        Build a configuration from ROS parameter names to values

        Missing parameters take their defaults; unknown names are ignored.
        """

        return cls(
            default_tolerance_sec=_as_float(
                values.get(
                    params.PARAM_TRANSFORM_TIMEOUT, params.DEFAULT_TRANSFORM_TIMEOUT
                ),
                params.PARAM_TRANSFORM_TIMEOUT,
            ),
            stale_warning_interval_sec=_as_float(
                values.get(
                    params.PARAM_STALE_WARNING_INTERVAL,
                    params.DEFAULT_STALE_WARNING_INTERVAL,
                ),
                params.PARAM_STALE_WARNING_INTERVAL,
            ),
            unavailable_warning_interval_sec=_as_float(
                values.get(
                    params.PARAM_UNAVAILABLE_WARNING_INTERVAL,
                    params.DEFAULT_UNAVAILABLE_WARNING_INTERVAL,
                ),
                params.PARAM_UNAVAILABLE_WARNING_INTERVAL,
            ),
        )


def load_frame_resolver_config_yaml(
    path: Union[str, Path], node_name: str
) -> FrameResolverConfig:
    """
    Load a configuration from a ROS 2 parameter file

    The file uses the standard layout:

        <node_name>:
          ros__parameters:
            transform_timeout: 0.1

    A node name of "/**" in the file applies to every node.
    """

    text: str = Path(path).read_text(encoding="utf-8")
    try:
        document: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise FrameResolverConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if document is None:
        return FrameResolverConfig()
    if not isinstance(document, dict):
        raise FrameResolverConfigError("Parameter file must contain a mapping")

    merged: dict[str, Any] = {}
    for key in ("/**", node_name, node_name.lstrip("/")):
        node_section: Any = document.get(key)
        if node_section is None:
            continue
        if not isinstance(node_section, dict):
            raise FrameResolverConfigError(f"Section '{key}' must be a mapping")
        node_params: Any = node_section.get(params.ROS_PARAMETERS_KEY, {})
        if not isinstance(node_params, dict):
            raise FrameResolverConfigError(
                f"'{key}.{params.ROS_PARAMETERS_KEY}' must be a mapping"
            )
        merged.update(node_params)

    return FrameResolverConfig.from_mapping(merged)


def _as_float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FrameResolverConfigError(f"{name} must be a number")
    return float(value)


def _require_duration(value: float, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FrameResolverConfigError(f"{name} must be a number")
    if not math.isfinite(value) or value < 0.0:
        raise FrameResolverConfigError(f"{name} must be finite and non-negative")
