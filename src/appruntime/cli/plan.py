# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command printing the build graph configured for a runtime."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import typer
from rich import box
from rich.table import Table

from ..config import BuildInvocation, load_build_settings, parse_property_assignments
from ..errors import AppRuntimeError
from ..graph import BuildGraph, LaunchTask
from ..plugin import ApplicationPlugin
from ..platform import current_os_name
from ..resolver import RUNTIME_PROPERTY, ResolvedRuntimeContext
from .shared import CLIError, CLILogger, build_cli_logger

CONFIG_OPTION = Annotated[
    Path,
    typer.Option("--config", "-c", help="TOML build settings with [micronaut] and [properties] tables."),
]
RUNTIME_OPTION = Annotated[
    str | None,
    typer.Option("--runtime", "-r", help=f"Runtime override, equivalent to -P {RUNTIME_PROPERTY}=NAME."),
]
VERSION_OPTION = Annotated[
    str | None,
    typer.Option("--framework-version", help="Framework version declared by the build."),
]
PROPERTY_OPTION = Annotated[
    list[str] | None,
    typer.Option("--property", "-P", help="Invocation property as KEY=VALUE (repeatable)."),
]
MAIN_CLASS_OPTION = Annotated[
    str | None,
    typer.Option("--main-class", help="Application entry point before runtime overrides."),
]
CONTINUOUS_OPTION = Annotated[
    bool,
    typer.Option("--continuous", "-t", help="Configure the build for continuous mode."),
]
OS_OPTION = Annotated[
    str | None,
    typer.Option("--os", help="Host operating system name (defaults to the current host)."),
]
JSON_OPTION = Annotated[bool, typer.Option("--json", help="Print the graph as JSON.")]
VERBOSE_OPTION = Annotated[bool, typer.Option("--verbose", "-v", help="Report resolution steps.")]
EMOJI_OPTION = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji output.")]
NO_COLOR_OPTION = Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")]


@dataclass(slots=True)
class PlanOptions:
    """Normalised CLI inputs for the plan command."""

    config: Path
    runtime: str | None = None
    version: str | None = None
    properties: list[str] = field(default_factory=list)
    main_class: str | None = None
    continuous: bool = False
    os_name: str | None = None
    as_json: bool = False
    verbose: bool = False


def build_plan(options: PlanOptions) -> tuple[BuildGraph, ResolvedRuntimeContext]:
    """Configure an application graph according to ``options``.

    Settings are layered: the settings file first, then ``--property`` values,
    then ``--runtime`` and ``--framework-version``.

    Raises:
        AppRuntimeError: If configuration or runtime resolution fails.
    """

    settings = load_build_settings(options.config)
    properties = {**settings.properties, **parse_property_assignments(options.properties)}
    if options.runtime:
        properties[RUNTIME_PROPERTY] = options.runtime
    extension = settings.extension
    if options.version:
        extension.version = options.version

    invocation = BuildInvocation(
        properties=properties,
        continuous=options.continuous,
        os_name=options.os_name or current_os_name(),
    )
    graph = BuildGraph.for_application(options.main_class)
    plugin = ApplicationPlugin(extension, verbose=options.verbose and not options.as_json)
    plugin.configure(graph, invocation)
    context = plugin.finalize()
    return graph, context


def build_dependency_table(graph: BuildGraph) -> Table:
    table = Table(title="Dependencies", box=box.SIMPLE, expand=True)
    table.add_column("Configuration", style="bold")
    table.add_column("Coordinate", overflow="fold")
    for name, bucket in graph.configurations.items():
        for coordinate in bucket.dependencies:
            table.add_row(name, coordinate)
    return table


def build_task_table(graph: BuildGraph) -> Table:
    table = Table(title="Tasks", box=box.SIMPLE, expand=True)
    table.add_column("Task", style="bold")
    table.add_column("Kind")
    table.add_column("Details", overflow="fold")
    for name, payload in graph.to_dict()["tasks"].items():
        task = graph.tasks.get(name)
        if isinstance(task, LaunchTask):
            details = [
                f"main={payload['main_class'] or '-'}",
                f"classpath={','.join(payload['classpath']) or '-'}",
            ]
            if payload["args"]:
                details.append(f"args={' '.join(payload['args'])}")
            for key, value in payload["system_properties"].items():
                details.append(f"-D{key}={value}")
            if payload["pre_run_actions"]:
                details.append(f"doFirst={','.join(payload['pre_run_actions'])}")
        else:
            details = [f"transformers={','.join(payload['transformers']) or '-'}"]
        table.add_row(name, payload["type"], "\n".join(details))
    return table


def render_plan(graph: BuildGraph, context: ResolvedRuntimeContext, logger: CLILogger) -> None:
    logger.ok(f"Runtime: {context.runtime.display_name} (version {context.version})")
    logger.echo(f"Main class: {graph.main_class or '-'}")
    logger.echo(f"Plugins: {', '.join(graph.plugins) or '-'}")
    logger.echo(f"Repositories: {', '.join(graph.repositories) or '-'}")
    logger.section("Build graph")
    logger.console.print(build_dependency_table(graph))
    logger.console.print(build_task_table(graph))


def perform_plan(options: PlanOptions, *, logger: CLILogger) -> None:
    """Build the plan and print it as JSON or tables.

    Raises:
        CLIError: If configuration or runtime resolution fails.
    """

    try:
        graph, context = build_plan(options)
    except AppRuntimeError as exc:
        logger.fail(str(exc))
        raise CLIError(str(exc)) from exc

    if options.as_json:
        payload = {
            "runtime": context.runtime.display_name,
            "version": context.version,
            "graph": graph.to_dict(),
        }
        logger.echo(json.dumps(payload, indent=2))
        return
    render_plan(graph, context, logger)


def plan_command(
    config: CONFIG_OPTION = Path("appruntime.toml"),
    runtime: RUNTIME_OPTION = None,
    framework_version: VERSION_OPTION = None,
    prop: PROPERTY_OPTION = None,
    main_class: MAIN_CLASS_OPTION = None,
    continuous: CONTINUOUS_OPTION = False,
    os_name: OS_OPTION = None,
    as_json: JSON_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    emoji: EMOJI_OPTION = True,
    no_color: NO_COLOR_OPTION = False,
) -> None:
    """Resolve the runtime and print the resulting build graph.

    Raises:
        typer.Exit: With status 1 when configuration fails.
    """

    logger = build_cli_logger(emoji=emoji, no_color=no_color)
    options = PlanOptions(
        config=config,
        runtime=runtime,
        version=framework_version,
        properties=list(prop or []),
        main_class=main_class,
        continuous=continuous,
        os_name=os_name,
        as_json=as_json,
        verbose=verbose,
    )
    try:
        perform_plan(options, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc


__all__ = ["PlanOptions", "build_plan", "perform_plan", "plan_command", "render_plan"]
