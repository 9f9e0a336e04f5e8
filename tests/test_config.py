# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for extension models and build settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from appruntime.catalog import Runtime
from appruntime.config import (
    BuildInvocation,
    RuntimeExtension,
    load_build_settings,
    parse_property_assignments,
    resolve_version,
)
from appruntime.errors import ConfigError, UnknownRuntimeError


def test_extension_defaults_to_standalone_runtime() -> None:
    extension = RuntimeExtension()

    assert extension.runtime is Runtime.NETTY
    assert extension.version is None


def test_extension_accepts_runtime_names() -> None:
    assert RuntimeExtension(runtime="lambda").runtime is Runtime.LAMBDA
    assert RuntimeExtension(runtime="GOOGLE_FUNCTION").runtime is Runtime.GOOGLE_FUNCTION


def test_extension_rejects_unknown_runtime_names() -> None:
    with pytest.raises(ValidationError):
        RuntimeExtension(runtime="heroku")


def test_invocation_defaults() -> None:
    invocation = BuildInvocation(os_name="Linux")

    assert invocation.properties == {}
    assert invocation.continuous is False


def test_resolve_version_prefers_extension() -> None:
    extension = RuntimeExtension(version="2.0.0")

    assert resolve_version(extension, {"micronautVersion": "1.3.0"}) == "2.0.0"
    assert resolve_version(RuntimeExtension(), {"micronautVersion": " 1.3.0 "}) == "1.3.0"


def test_resolve_version_requires_a_declaration() -> None:
    with pytest.raises(ConfigError, match="micronautVersion"):
        resolve_version(RuntimeExtension(), {})


def test_parse_property_assignments() -> None:
    assert parse_property_assignments(["a=b", "c=d=e", "empty="]) == {"a": "b", "c": "d=e", "empty": ""}

    with pytest.raises(ConfigError, match="KEY=VALUE"):
        parse_property_assignments(["novalue"])
    with pytest.raises(ConfigError):
        parse_property_assignments(["=value"])


def test_missing_settings_file_yields_defaults(tmp_path: Path) -> None:
    settings = load_build_settings(tmp_path / "appruntime.toml")

    assert settings.extension.runtime is Runtime.NETTY
    assert settings.extension.version is None
    assert settings.properties == {}


def test_settings_file_is_loaded(tmp_path: Path) -> None:
    path = tmp_path / "appruntime.toml"
    path.write_text(
        '[micronaut]\nruntime = "oracle-function"\nversion = "2.1.0"\n\n'
        '[properties]\n"micronaut.runtime" = "lambda"\nport = 8080\n',
        encoding="utf-8",
    )

    settings = load_build_settings(path)

    assert settings.extension.runtime is Runtime.ORACLE_FUNCTION
    assert settings.extension.version == "2.1.0"
    assert settings.properties == {"micronaut.runtime": "lambda", "port": "8080"}


def test_settings_file_with_unknown_runtime(tmp_path: Path) -> None:
    path = tmp_path / "appruntime.toml"
    path.write_text('[micronaut]\nruntime = "heroku"\n', encoding="utf-8")

    with pytest.raises(UnknownRuntimeError):
        load_build_settings(path)


@pytest.mark.parametrize(
    "content",
    [
        "[micronaut\n",
        'micronaut = "lambda"\n',
        '[micronaut]\nversion = ["2.0.0"]\n',
    ],
)
def test_malformed_settings_file(tmp_path: Path, content: str) -> None:
    path = tmp_path / "appruntime.toml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_build_settings(path)
