# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .plan import plan_command
from .runtimes import runtimes_command

app = typer.Typer(
    name="appruntime",
    help="Adapt an application build to its deployment runtime.",
    no_args_is_help=True,
    add_completion=False,
)
app.command("plan")(plan_command)
app.command("runtimes")(runtimes_command)

__all__ = ["app"]
