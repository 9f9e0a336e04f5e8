# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Two-phase driver adapting an application build to its deployment runtime."""

from __future__ import annotations

from .config import BuildInvocation, RuntimeExtension, resolve_version
from .devloop import DevelopmentLoopConfigurer
from .errors import LifecycleError
from .interfaces import BuildGraphLike
from .logging import info
from .mutator import BuildGraphMutator
from .packaging import PackagingFixup
from .platform import is_macos
from .resolver import ResolvedRuntimeContext, override_from_properties, resolve


class ApplicationPlugin:
    """Configure a build graph for the runtime the invocation selects.

    ``configure`` runs when the plugin is applied and only registers what does
    not depend on the runtime. ``finalize`` runs once every declaration has been
    processed; it resolves the version and runtime and mutates the graph.
    Resolving earlier could read a default that has not been declared yet.
    """

    def __init__(
        self,
        extension: RuntimeExtension | None = None,
        *,
        mutator: BuildGraphMutator | None = None,
        packaging: PackagingFixup | None = None,
        devloop: DevelopmentLoopConfigurer | None = None,
        verbose: bool = False,
        use_emoji: bool = True,
    ) -> None:
        self.extension = extension or RuntimeExtension()
        self._mutator = mutator or BuildGraphMutator(verbose=verbose, use_emoji=use_emoji)
        self._packaging = packaging or PackagingFixup()
        self._devloop = devloop or DevelopmentLoopConfigurer()
        self._verbose = verbose
        self._use_emoji = use_emoji
        self._graph: BuildGraphLike | None = None
        self._invocation: BuildInvocation | None = None
        self._context: ResolvedRuntimeContext | None = None

    @property
    def context(self) -> ResolvedRuntimeContext | None:
        """Return the context resolved by :meth:`finalize`, if it has run."""

        return self._context

    def configure(self, graph: BuildGraphLike, invocation: BuildInvocation) -> None:
        """Register runtime-independent configuration on ``graph``.

        Args:
            graph: Build graph owned by the build engine.
            invocation: Invocation-level inputs for this build.

        Raises:
            LifecycleError: If the plugin was already configured for another graph.
        """

        if self._graph is not None:
            if self._graph is graph and self._invocation == invocation:
                return
            raise LifecycleError("ApplicationPlugin is already configured for another build")
        self._graph = graph
        self._invocation = invocation
        self._devloop.configure(
            graph,
            is_macos=is_macos(invocation.os_name),
            continuous=invocation.continuous,
        )
        self._packaging.register(graph)

    def finalize(self) -> ResolvedRuntimeContext:
        """Resolve the runtime and apply its mutations to the configured graph.

        Returns:
            ResolvedRuntimeContext: Runtime and version the graph was configured for.

        Raises:
            LifecycleError: If called before :meth:`configure`, or again with a
                different resolution.
            ConfigError: If no framework version is declared.
            UnknownRuntimeError: If the runtime override is not in the catalog.
        """

        if self._graph is None or self._invocation is None:
            raise LifecycleError("finalize() called before configure()")
        properties = self._invocation.properties
        version = resolve_version(self.extension, properties)
        runtime = resolve(override_from_properties(properties), self.extension.runtime)
        context = ResolvedRuntimeContext(runtime=runtime, version=version)
        if self._context is not None:
            if self._context == context:
                return context
            raise LifecycleError(
                f"Build already finalized for {self._context.runtime.display_name}; "
                f"cannot switch to {context.runtime.display_name}",
            )

        if self._verbose:
            info(f"Resolved runtime {runtime.display_name}", use_emoji=self._use_emoji)
        self._devloop.finalize(self._graph, version)
        self._mutator.apply(context, self._graph)
        self._context = context
        return context


__all__ = ["ApplicationPlugin"]
