# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Closed catalog of deployment runtimes and their support libraries."""

from __future__ import annotations

from enum import Enum
from typing import Final

from .errors import UnknownRuntimeError


class Runtime(str, Enum):
    """Enumerate the deployment runtimes an application build can target.

    Each member's value is the dependency coordinate providing the runtime's
    core integration.
    """

    NETTY = "io.micronaut:micronaut-http-server-netty"
    LAMBDA = "io.micronaut.aws:micronaut-function-aws"
    ORACLE_FUNCTION = "io.micronaut.oraclecloud:micronaut-oraclecloud-function-http"
    GOOGLE_FUNCTION = "io.micronaut.gcp:micronaut-gcp-function-http"
    AZURE_FUNCTION = "io.micronaut.azure:micronaut-azure-function-http"

    @property
    def support_library(self) -> str:
        """Return the dependency coordinate providing this runtime's integration."""

        return self.value

    @property
    def display_name(self) -> str:
        """Return the kebab-case name shown to users."""

        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: Final[dict[Runtime, str]] = {
    Runtime.NETTY: "standalone-jvm",
    Runtime.LAMBDA: "lambda",
    Runtime.ORACLE_FUNCTION: "oracle-function",
    Runtime.GOOGLE_FUNCTION: "google-function",
    Runtime.AZURE_FUNCTION: "azure-function",
}

_ALIASES: Final[dict[str, Runtime]] = {
    "STANDALONE_JVM": Runtime.NETTY,
}


def _normalise(name: str) -> str:
    return name.strip().upper().replace("-", "_").replace(" ", "_")


def runtimes() -> tuple[Runtime, ...]:
    """Return every catalog entry in declaration order."""

    return tuple(Runtime)


def lookup(name: str) -> Runtime:
    """Return the runtime identified by ``name``.

    Matching is case-insensitive and treats ``-`` and spaces as ``_``, so
    ``"lambda"``, ``"LAMBDA"`` and ``"Lambda"`` name the same runtime and
    ``"oracle-function"`` matches ``ORACLE_FUNCTION``.

    Args:
        name: Runtime selector supplied by configuration or an override.

    Returns:
        Runtime: Matching catalog entry.

    Raises:
        UnknownRuntimeError: If ``name`` does not match any runtime.
    """

    key = _normalise(name)
    member = Runtime.__members__.get(key) or _ALIASES.get(key)
    if member is None:
        raise UnknownRuntimeError(name, (runtime.name for runtime in Runtime))
    return member


def support_library(runtime: Runtime) -> str:
    """Return the support library coordinate for ``runtime``."""

    return runtime.support_library


__all__ = ["Runtime", "lookup", "runtimes", "support_library"]
