# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Host operating system detection."""

from __future__ import annotations

import platform as _platform


def current_os_name() -> str:
    """Return the host operating system name as reported by :mod:`platform`."""

    return _platform.system()


def is_macos(os_name: str | None = None) -> bool:
    """Return ``True`` when ``os_name`` (or the host) belongs to the macOS family."""

    name = (os_name if os_name is not None else current_os_name()).lower()
    return "mac" in name or "darwin" in name


__all__ = ["current_os_name", "is_macos"]
