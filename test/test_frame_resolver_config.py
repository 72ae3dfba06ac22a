################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for frame resolver configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from oasis_localization.filter_utils import frame_resolver_params as params
from oasis_localization.filter_utils.frame_resolver_config import FrameResolverConfig
from oasis_localization.filter_utils.frame_resolver_config import (
    FrameResolverConfigError,
)
from oasis_localization.filter_utils.frame_resolver_config import (
    load_frame_resolver_config_yaml,
)


PACKAGE_ROOT: Path = Path(__file__).resolve().parents[1]


def test_defaults() -> None:
    config: FrameResolverConfig = FrameResolverConfig()
    assert config.default_tolerance_sec == 0.0
    assert config.stale_warning_interval_sec == 2.0
    assert config.unavailable_warning_interval_sec == 3.0
    assert config.stale_warning_interval_ns == 2_000_000_000
    assert config.unavailable_warning_interval_ns == 3_000_000_000


@pytest.mark.parametrize(
    "field_name",
    [
        "default_tolerance_sec",
        "stale_warning_interval_sec",
        "unavailable_warning_interval_sec",
    ],
)
@pytest.mark.parametrize("value", [-0.5, float("nan"), float("inf"), True, "1.0"])
def test_invalid_values_rejected(field_name: str, value: object) -> None:
    with pytest.raises(FrameResolverConfigError):
        FrameResolverConfig(**{field_name: value})  # type: ignore[arg-type]


def test_from_mapping_uses_param_names() -> None:
    config: FrameResolverConfig = FrameResolverConfig.from_mapping(
        {
            params.PARAM_TRANSFORM_TIMEOUT: 0.1,
            params.PARAM_STALE_WARNING_INTERVAL: 5,
            "unrelated": "ignored",
        }
    )
    assert config.default_tolerance_sec == pytest.approx(0.1)
    assert config.stale_warning_interval_sec == 5.0
    assert config.unavailable_warning_interval_sec == 3.0


def test_yaml_node_section_overrides_wildcard(tmp_path: Path) -> None:
    path: Path = tmp_path / "params.yaml"
    path.write_text(
        "/**:\n"
        "  ros__parameters:\n"
        "    transform_timeout: 0.05\n"
        "    stale_transform_warning_interval: 4.0\n"
        "ekf_localizer:\n"
        "  ros__parameters:\n"
        "    transform_timeout: 0.1\n",
        encoding="utf-8",
    )

    config: FrameResolverConfig = load_frame_resolver_config_yaml(
        path, "/ekf_localizer"
    )

    assert config.default_tolerance_sec == pytest.approx(0.1)
    assert config.stale_warning_interval_sec == 4.0
    assert config.unavailable_warning_interval_sec == 3.0


def test_yaml_other_node_ignored(tmp_path: Path) -> None:
    path: Path = tmp_path / "params.yaml"
    path.write_text(
        "other_node:\n  ros__parameters:\n    transform_timeout: 9.0\n",
        encoding="utf-8",
    )
    assert load_frame_resolver_config_yaml(path, "ekf_localizer") == (
        FrameResolverConfig()
    )


def test_yaml_empty_file_gives_defaults(tmp_path: Path) -> None:
    path: Path = tmp_path / "params.yaml"
    path.write_text("", encoding="utf-8")
    assert load_frame_resolver_config_yaml(path, "node") == FrameResolverConfig()


@pytest.mark.parametrize(
    "text",
    [
        "[1, 2, 3]\n",
        "node: [1, 2]\n",
        "node:\n  ros__parameters: 3\n",
        "node:\n  ros__parameters:\n    transform_timeout: -1.0\n",
        "node: {ros__parameters: {transform_timeout: [\n",
    ],
)
def test_yaml_invalid_rejected(tmp_path: Path, text: str) -> None:
    path: Path = tmp_path / "params.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(FrameResolverConfigError):
        load_frame_resolver_config_yaml(path, "node")


def test_installed_params_file_matches_defaults() -> None:
    config: FrameResolverConfig = load_frame_resolver_config_yaml(
        PACKAGE_ROOT / "config" / "frame_resolver_params.yaml", "any_node"
    )
    assert config == FrameResolverConfig()
