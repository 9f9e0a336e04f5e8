# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Development-only dependencies and continuous-build restart support."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final

from .graph import DEVELOPMENT_ONLY, platform_dependency
from .interfaces import BuildGraphLike, LaunchTaskLike

OSX_RUNTIME: Final[str] = "io.micronaut:micronaut-runtime-osx"
BOM_COORDINATE: Final[str] = "io.micronaut:micronaut-bom"

WATCH_PROPERTIES: Final[MappingProxyType[str, Any]] = MappingProxyType(
    {
        "micronaut.io.watch.restart": True,
        "micronaut.io.watch.enabled": True,
        "micronaut.io.watch.paths": "src/main",
    }
)


@dataclass(frozen=True, slots=True)
class _LaunchTaskRule:
    """Configure one launch task for the local development loop."""

    continuous: bool

    def __call__(self, task: LaunchTaskLike) -> None:
        task.add_classpath(DEVELOPMENT_ONLY)
        # restart the process when sources change under `-t`
        if self.continuous:
            task.add_system_properties(WATCH_PROPERTIES)


class DevelopmentLoopConfigurer:
    """Manage the ``developmentOnly`` bucket and launch-task watch settings."""

    def configure(self, graph: BuildGraphLike, *, is_macos: bool, continuous: bool) -> None:
        """Create the development bucket and register the launch-task rule.

        Args:
            graph: Build graph receiving the bucket and subscription.
            is_macos: ``True`` on macOS, where a native file watcher is added.
            continuous: ``True`` when the build runs in continuous mode.
        """

        graph.create_configuration(DEVELOPMENT_ONLY)
        if is_macos:
            graph.add_dependency(DEVELOPMENT_ONLY, OSX_RUNTIME)
        graph.tasks.when_launch_task_created(_LaunchTaskRule(continuous=continuous))

    def finalize(self, graph: BuildGraphLike, version: str) -> None:
        """Pin the development bucket to the framework BOM at ``version``."""

        graph.add_dependency(DEVELOPMENT_ONLY, platform_dependency(f"{BOM_COORDINATE}:{version}"))


__all__ = ["BOM_COORDINATE", "DevelopmentLoopConfigurer", "OSX_RUNTIME", "WATCH_PROPERTIES"]
