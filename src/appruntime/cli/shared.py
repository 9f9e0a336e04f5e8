# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Output and failure helpers shared by the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass

import typer
from rich.console import Console

from ..logging import fail as core_fail
from ..logging import ok as core_ok
from ..logging import section as core_section


class CLIError(RuntimeError):
    """Command failure already reported to the user, carrying the exit status."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Per-invocation reporter binding the emoji and colour flags of one command."""

    console: Console
    use_emoji: bool
    use_color: bool = True

    def fail(self, message: str) -> None:
        """Report a failed step."""

        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        """Report a completed step."""

        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def section(self, title: str) -> None:
        """Print a rule separating output blocks."""

        core_section(title, use_color=self.use_color)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)


def build_cli_logger(*, emoji: bool, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` bound to a dedicated Rich console.

    Args:
        emoji: Whether log output may include emoji glyphs.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger instance for one command invocation.
    """

    console = Console(no_color=no_color, highlight=False, soft_wrap=True)
    return CLILogger(console=console, use_emoji=emoji, use_color=not no_color)


__all__ = ["CLIError", "CLILogger", "build_cli_logger"]
