# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the runtime extension and the build invocation."""

from __future__ import annotations

import tomllib
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .catalog import Runtime, lookup
from .errors import ConfigError
from .platform import current_os_name

VERSION_PROPERTY: Final[str] = "micronautVersion"
EXTENSION_SECTION: Final[str] = "micronaut"
PROPERTIES_SECTION: Final[str] = "properties"


class RuntimeExtension(BaseModel):
    """User-declared runtime settings, mutable until the build is finalized."""

    model_config = ConfigDict(validate_assignment=True)

    runtime: Runtime = Runtime.NETTY
    version: str | None = None

    @field_validator("runtime", mode="before")
    @classmethod
    def _coerce_runtime(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, Runtime):
            return lookup(value)
        return value


class BuildInvocation(BaseModel):
    """Invocation-level inputs: properties, continuous mode and host platform."""

    model_config = ConfigDict(validate_assignment=True, frozen=True)

    properties: dict[str, str] = Field(default_factory=dict)
    continuous: bool = False
    os_name: str = Field(default_factory=current_os_name)


class BuildSettings(BaseModel):
    """Extension and properties loaded from a build settings file."""

    model_config = ConfigDict(validate_assignment=True)

    extension: RuntimeExtension = Field(default_factory=RuntimeExtension)
    properties: dict[str, str] = Field(default_factory=dict)


def resolve_version(extension: RuntimeExtension, properties: Mapping[str, str]) -> str:
    """Return the framework version declared for the build.

    Args:
        extension: Runtime extension that may declare ``version``.
        properties: Invocation properties that may declare ``micronautVersion``.

    Returns:
        str: The declared version.

    Raises:
        ConfigError: If neither source declares a version.
    """

    version = extension.version or properties.get(VERSION_PROPERTY)
    if version is None or not str(version).strip():
        raise ConfigError(
            "Micronaut version not set. Use micronaut { version '..' } or "
            f"'{VERSION_PROPERTY}' in gradle.properties to set the version",
        )
    return str(version).strip()


def parse_property_assignments(assignments: Iterable[str]) -> dict[str, str]:
    """Translate ``KEY=VALUE`` tokens into a property mapping.

    Raises:
        ConfigError: If a token has no ``=`` or an empty key.
    """

    properties: dict[str, str] = {}
    for token in assignments:
        key, sep, value = token.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Invalid property assignment '{token}', expected KEY=VALUE")
        properties[key.strip()] = value
    return properties


def _expect_table(document: Mapping[str, Any], key: str, path: Path) -> Mapping[str, Any]:
    section = document.get(key, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{key}] in {path} must be a table")
    return section


def load_build_settings(path: Path) -> BuildSettings:
    """Load the runtime extension and properties from a TOML settings file.

    A missing file yields the defaults. The ``[micronaut]`` table accepts
    ``runtime`` and ``version``; ``[properties]`` holds invocation properties.

    Raises:
        ConfigError: If the document is malformed.
        UnknownRuntimeError: If ``runtime`` does not name a catalog entry.
    """

    if not path.exists():
        return BuildSettings()
    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Unable to parse {path}: {exc}") from exc

    extension_table = dict(_expect_table(document, EXTENSION_SECTION, path))
    if isinstance(extension_table.get("runtime"), str):
        extension_table["runtime"] = lookup(extension_table["runtime"])
    properties_table = _expect_table(document, PROPERTIES_SECTION, path)
    try:
        return BuildSettings(
            extension=RuntimeExtension(**extension_table),
            properties={str(key): str(value) for key, value in properties_table.items()},
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid build settings in {path}: {exc}") from exc


__all__ = [
    "BuildInvocation",
    "BuildSettings",
    "RuntimeExtension",
    "load_build_settings",
    "parse_property_assignments",
    "resolve_version",
]
