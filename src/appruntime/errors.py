# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while configuring a runtime-specific build."""

from __future__ import annotations

from collections.abc import Iterable


class AppRuntimeError(RuntimeError):
    """Base class for configuration failures surfaced by appruntime."""


class UnknownRuntimeError(AppRuntimeError, ValueError):
    """Raised when a runtime selector does not match any catalog entry."""

    def __init__(self, value: str, valid: Iterable[str]) -> None:
        """Create the error naming the rejected ``value`` and the valid choices.

        Args:
            value: Raw selector supplied by the caller.
            valid: Names accepted by the runtime catalog.
        """

        self.value = value
        self.valid = tuple(valid)
        super().__init__(f"Unknown runtime '{value}'. Valid values are: {', '.join(self.valid)}")


class ConfigError(AppRuntimeError):
    """Raised when configuration input is invalid or incomplete."""


class MissingCollaboratorError(AppRuntimeError):
    """Raised when a task or bucket required by a runtime step is absent."""


class LifecycleError(AppRuntimeError):
    """Raised when configuration phases run out of order."""


class RuntimeDispatchError(AppRuntimeError):
    """Raised when a runtime has no registered mutation step."""


__all__ = (
    "AppRuntimeError",
    "ConfigError",
    "LifecycleError",
    "MissingCollaboratorError",
    "RuntimeDispatchError",
    "UnknownRuntimeError",
)
