# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Apply runtime-specific mutations to the build graph.

Each runtime maps to one step in a dispatch table. A step only adds
dependencies and repositories or overrides the entry point and launch-task
settings, so supporting a new runtime means adding a catalog member and a
step here. Every graph operation used by the steps is idempotent: applying
the same :class:`ResolvedRuntimeContext` twice leaves the graph exactly as a
single application would.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from .catalog import Runtime, support_library
from .errors import MissingCollaboratorError, RuntimeDispatchError
from .graph import (
    COMPILE_ONLY,
    IMPLEMENTATION,
    INVOKER,
    RUN_TASK,
    RUNTIME_CLASSPATH,
    RUNTIME_ONLY,
    SHADOW_PLUGIN,
    TEST_IMPLEMENTATION,
)
from .interfaces import BuildGraphLike, LaunchTaskLike
from .logging import info
from .resolver import ResolvedRuntimeContext

AWS_API_PROXY: Final[str] = "io.micronaut.aws:micronaut-function-aws-api-proxy"

FN_PROJECT_REPOSITORY: Final[str] = "https://dl.bintray.com/fnproject/fnproject"
FN_RUNTIME: Final[str] = "com.fnproject.fn:runtime:1.0.105"
FN_ENTRY_POINT: Final[str] = "com.fnproject.fn.runtime.EntryPoint"

FUNCTIONS_FRAMEWORK_API: Final[str] = "com.google.cloud.functions:functions-framework-api"
JAVA_FUNCTION_INVOKER: Final[str] = "com.google.cloud.functions.invoker:java-function-invoker:1.0.0-beta2"
INVOKER_RUNNER: Final[str] = "com.google.cloud.functions.invoker.runner.Invoker"
GCP_FUNCTION_HTTP: Final[str] = "io.micronaut.gcp:micronaut-gcp-function-http"
GCP_HTTP_FUNCTION: Final[str] = "io.micronaut.gcp.function.http.HttpFunction"
INVOKER_PORT: Final[str] = "8080"
INVOKER_CLASSPATH_ACTION: Final[str] = "invoker-classpath"

AZURE_FUNCTIONS_LIBRARY: Final[str] = "com.microsoft.azure.functions:azure-functions-java-library"

RuntimeStep = Callable[[ResolvedRuntimeContext, BuildGraphLike], None]


@dataclass(frozen=True, slots=True)
class InvokerClasspathAction:
    """Append ``--classpath`` for the cloud invoker just before ``run`` executes.

    The runtime classpath is only complete at execution time, so the value is
    computed from ``graph`` when the action fires instead of when it is registered.
    """

    graph: BuildGraphLike

    def __call__(self, task: LaunchTaskLike) -> None:
        entries = [*self.graph.classpath(RUNTIME_CLASSPATH), *self.graph.main_output()]
        value = os.pathsep.join(entries)
        if "--classpath" in task.args:
            index = task.args.index("--classpath")
            task.args[index + 1 : index + 2] = [value]
            return
        task.args.extend(["--classpath", value])


def _standalone(ctx: ResolvedRuntimeContext, graph: BuildGraphLike) -> None:
    """The standalone server needs nothing beyond its support library."""


def _lambda(ctx: ResolvedRuntimeContext, graph: BuildGraphLike) -> None:
    graph.add_dependency(IMPLEMENTATION, AWS_API_PROXY)


def _oracle_function(ctx: ResolvedRuntimeContext, graph: BuildGraphLike) -> None:
    graph.add_repository(FN_PROJECT_REPOSITORY)
    graph.add_dependency(RUNTIME_ONLY, FN_RUNTIME)
    # the fn runtime bridge owns the process entry point
    graph.set_main_class(FN_ENTRY_POINT)


def _google_function(ctx: ResolvedRuntimeContext, graph: BuildGraphLike) -> None:
    """Run through the cloud invoker and force shaded packaging.

    Raises:
        MissingCollaboratorError: If the build has no ``run`` launch task.
    """

    run = graph.tasks.find_launch_task(RUN_TASK)
    if run is None:
        raise MissingCollaboratorError(
            f"Runtime {ctx.runtime.display_name} requires a '{RUN_TASK}' launch task",
        )

    graph.add_dependency(COMPILE_ONLY, FUNCTIONS_FRAMEWORK_API)
    graph.add_dependency(TEST_IMPLEMENTATION, FUNCTIONS_FRAMEWORK_API)
    graph.create_configuration(INVOKER)
    graph.add_dependency(INVOKER, JAVA_FUNCTION_INVOKER)

    run.main_class = INVOKER_RUNNER
    run.set_classpath([INVOKER])
    run.set_args(["--target", GCP_HTTP_FUNCTION, "--port", INVOKER_PORT])
    run.do_first(INVOKER_CLASSPATH_ACTION, InvokerClasspathAction(graph))

    graph.add_dependency(IMPLEMENTATION, GCP_FUNCTION_HTTP)
    graph.set_main_class(GCP_HTTP_FUNCTION)
    if not graph.has_plugin(SHADOW_PLUGIN):
        graph.apply_plugin(SHADOW_PLUGIN)


def _azure_function(ctx: ResolvedRuntimeContext, graph: BuildGraphLike) -> None:
    graph.add_dependency(IMPLEMENTATION, AZURE_FUNCTIONS_LIBRARY)


DEFAULT_STEPS: Final[Mapping[Runtime, RuntimeStep]] = MappingProxyType(
    {
        Runtime.NETTY: _standalone,
        Runtime.LAMBDA: _lambda,
        Runtime.ORACLE_FUNCTION: _oracle_function,
        Runtime.GOOGLE_FUNCTION: _google_function,
        Runtime.AZURE_FUNCTION: _azure_function,
    }
)


class BuildGraphMutator:
    """Apply the support library and the runtime-specific step to a build graph."""

    def __init__(
        self,
        steps: Mapping[Runtime, RuntimeStep] | None = None,
        *,
        verbose: bool = False,
        use_emoji: bool = True,
    ) -> None:
        """Initialise the mutator.

        Args:
            steps: Optional dispatch table replacing :data:`DEFAULT_STEPS`.
            verbose: Report the applied runtime on the console when ``True``.
            use_emoji: Flag indicating whether emoji output is desired.
        """

        self._steps = dict(DEFAULT_STEPS if steps is None else steps)
        self._verbose = verbose
        self._use_emoji = use_emoji

    def apply(self, ctx: ResolvedRuntimeContext, graph: BuildGraphLike) -> None:
        """Mutate ``graph`` for ``ctx.runtime``.

        Args:
            ctx: Runtime and version resolved for this invocation.
            graph: Build graph to mutate.

        Raises:
            RuntimeDispatchError: If ``ctx.runtime`` has no registered step.
            MissingCollaboratorError: If a task the step reconfigures is absent.
        """

        step = self._steps.get(ctx.runtime)
        if step is None:
            raise RuntimeDispatchError(f"No build mutation registered for runtime {ctx.runtime.name}")

        graph.add_dependency(IMPLEMENTATION, support_library(ctx.runtime))
        step(ctx, graph)
        if self._verbose:
            info(
                f"Configured build for runtime {ctx.runtime.display_name} (version {ctx.version})",
                use_emoji=self._use_emoji,
            )


__all__ = [
    "AWS_API_PROXY",
    "AZURE_FUNCTIONS_LIBRARY",
    "BuildGraphMutator",
    "DEFAULT_STEPS",
    "FN_ENTRY_POINT",
    "FN_PROJECT_REPOSITORY",
    "FN_RUNTIME",
    "FUNCTIONS_FRAMEWORK_API",
    "GCP_FUNCTION_HTTP",
    "GCP_HTTP_FUNCTION",
    "INVOKER_CLASSPATH_ACTION",
    "INVOKER_PORT",
    "INVOKER_RUNNER",
    "InvokerClasspathAction",
    "JAVA_FUNCTION_INVOKER",
    "RuntimeStep",
]
