# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Decide which runtime is active for a build invocation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from .catalog import Runtime, lookup

RUNTIME_PROPERTY: Final[str] = "micronaut.runtime"


@dataclass(frozen=True, slots=True)
class ResolvedRuntimeContext:
    """Runtime and framework version chosen for one build invocation."""

    runtime: Runtime
    version: str


def override_from_properties(properties: Mapping[str, str]) -> str | None:
    """Return the runtime override supplied as an invocation property, if any."""

    value = properties.get(RUNTIME_PROPERTY)
    return None if value is None else str(value)


def resolve(override: str | None, declared_default: Runtime) -> Runtime:
    """Return the active runtime.

    Only a missing override (``None``) selects the declared default. Any
    supplied value wins and is looked up case-insensitively, so an unknown or
    blank override raises instead of falling back.

    Args:
        override: Optional selector supplied on the command line.
        declared_default: Runtime declared by the build configuration.

    Returns:
        Runtime: The runtime to configure the build for.

    Raises:
        UnknownRuntimeError: If ``override`` does not name a catalog entry.
    """

    if override is None:
        return declared_default
    return lookup(override)


__all__ = ["RUNTIME_PROPERTY", "ResolvedRuntimeContext", "override_from_properties", "resolve"]
