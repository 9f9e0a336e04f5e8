# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command listing the runtime catalog."""

from __future__ import annotations

from typing import Annotated

import typer
from rich import box
from rich.table import Table

from ..catalog import Runtime, runtimes
from .shared import build_cli_logger

NO_COLOR_OPTION = Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")]


def build_runtime_table(entries: tuple[Runtime, ...]) -> Table:
    """Return a rich table with one row per runtime."""

    table = Table(title="Runtimes", box=box.SIMPLE)
    table.add_column("Name", style="bold")
    table.add_column("Selector")
    table.add_column("Support Library", overflow="fold")
    for runtime in entries:
        table.add_row(runtime.display_name, runtime.name, runtime.support_library)
    return table


def runtimes_command(no_color: NO_COLOR_OPTION = False) -> None:
    """List the deployment runtimes a build can target."""

    logger = build_cli_logger(emoji=False, no_color=no_color)
    logger.console.print(build_runtime_table(runtimes()))


__all__ = ["build_runtime_table", "runtimes_command"]
