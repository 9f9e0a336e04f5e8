# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for configuration reports."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout is a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Hand out one Rich :class:`Console` per colour, emoji and TTY combination."""

    def __init__(self) -> None:
        self._consoles: dict[tuple[bool, bool, bool], Console] = {}

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return the console for ``color`` and ``emoji``.

        Colour is only enabled when stdout is also a terminal, so piped
        output and captured test output stay free of ANSI escapes.

        Args:
            color: Whether colour output is requested.
            emoji: Whether Rich should render emoji codes.

        Returns:
            Console: Console shared by every caller with the same settings.
        """

        tty = detect_tty()
        key = (color, emoji, tty)
        console = self._consoles.get(key)
        if console is None:
            styled = color and tty
            console = self._consoles[key] = Console(
                color_system="auto" if styled else None,
                force_terminal=tty,
                no_color=not styled,
                emoji=emoji,
                soft_wrap=True,
            )
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = ["RichConsoleManager", "detect_tty", "get_console_manager"]
