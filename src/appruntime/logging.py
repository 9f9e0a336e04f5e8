# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console reporting for runtime configuration steps."""

from __future__ import annotations

from typing import Final

from rich.rule import Rule
from rich.text import Text

from .console import detect_tty, get_console_manager

# level -> (emoji prefix, colour style)
_LEVELS: Final[dict[str, tuple[str, str]]] = {
    "info": ("ℹ️ ", "cyan"),
    "ok": ("✅ ", "green"),
    "fail": ("❌ ", "red"),
}


def _report(level: str, msg: str, *, use_emoji: bool, use_color: bool | None) -> None:
    """Print ``msg`` styled for ``level``.

    Args:
        level: Key into the level table selecting prefix and style.
        msg: Message text.
        use_emoji: Whether the level's emoji prefix is printed.
        use_color: Explicit colour flag; ``None`` follows TTY detection.
    """

    prefix, style = _LEVELS[level]
    color_enabled = detect_tty() if use_color is None else use_color
    text = Text(f"{prefix if use_emoji else ''}{msg}")
    if color_enabled:
        text.stylize(style)
    get_console_manager().get(color=color_enabled, emoji=use_emoji).print(text)


def section(title: str, *, use_color: bool) -> None:
    """Print a titled rule, or a plain marker line without colour."""

    console = get_console_manager().get(color=use_color, emoji=True)
    if use_color:
        console.print()
        console.print(Rule(title))
    else:
        console.print(f"\n--- {title} ---")


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Report a configuration effect such as the resolved runtime."""

    _report("info", msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _report("ok", msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _report("fail", msg, use_emoji=use_emoji, use_color=use_color)


__all__ = ["fail", "info", "ok", "section"]
