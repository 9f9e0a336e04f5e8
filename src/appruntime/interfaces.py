# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Collaborator interfaces the runtime configuration core depends on."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ArchiveTransformer(Protocol):
    """Transform resources while a fat archive is assembled."""

    def matches(self, path: str) -> bool:
        """Return ``True`` when ``path`` is handled by the transformer."""

        raise NotImplementedError


@runtime_checkable
class LaunchTaskLike(Protocol):
    """Execution task launching the application process."""

    name: str
    main_class: str | None
    args: list[str]

    def set_classpath(self, entries: Sequence[str]) -> None:
        """Replace the classpath with ``entries``."""

        raise NotImplementedError

    def add_classpath(self, entry: str) -> None:
        """Append ``entry`` to the classpath."""

        raise NotImplementedError

    def set_args(self, args: Sequence[str]) -> None:
        """Replace the program arguments."""

        raise NotImplementedError

    def add_system_properties(self, properties: Mapping[str, Any]) -> None:
        """Merge ``properties`` into the process system properties."""

        raise NotImplementedError

    def do_first(self, name: str, action: Callable[[LaunchTaskLike], None]) -> None:
        """Register ``action`` to run before the task executes."""

        raise NotImplementedError


@runtime_checkable
class FatArchiveTaskLike(Protocol):
    """Packaging task bundling the application with all dependencies."""

    name: str

    def transform(self, transformer: ArchiveTransformer) -> None:
        """Attach ``transformer`` to the archive assembly."""

        raise NotImplementedError


@runtime_checkable
class TaskHooks(Protocol):
    """Task container exposing creation events."""

    def when_launch_task_created(self, hook: Callable[[LaunchTaskLike], None]) -> None:
        """Invoke ``hook`` for existing and future launch tasks."""

        raise NotImplementedError

    def when_fat_archive_task_created(self, hook: Callable[[FatArchiveTaskLike], None]) -> None:
        """Invoke ``hook`` for existing and future fat-archive tasks."""

        raise NotImplementedError

    def find_launch_task(self, name: str) -> LaunchTaskLike | None:
        """Return the launch task called ``name`` when it exists."""

        raise NotImplementedError


@runtime_checkable
class BuildGraphLike(Protocol):
    """Mutable build configuration consumed by the external build engine."""

    @property
    def tasks(self) -> TaskHooks:
        """Return the task container."""

        raise NotImplementedError

    def create_configuration(self, name: str) -> None:
        """Create the dependency bucket ``name`` unless it already exists."""

        raise NotImplementedError

    def add_dependency(self, configuration: str, coordinate: str) -> None:
        """Add ``coordinate`` to ``configuration`` once."""

        raise NotImplementedError

    def add_repository(self, url: str) -> None:
        """Add the repository ``url`` once."""

        raise NotImplementedError

    def set_main_class(self, main_class: str) -> None:
        """Override the application entry point."""

        raise NotImplementedError

    def has_plugin(self, plugin_id: str) -> bool:
        """Return ``True`` when ``plugin_id`` is applied."""

        raise NotImplementedError

    def apply_plugin(self, plugin_id: str) -> None:
        """Apply ``plugin_id`` to the build."""

        raise NotImplementedError

    def classpath(self, name: str) -> list[str]:
        """Return the resolved entries of the classpath configuration ``name``."""

        raise NotImplementedError

    def main_output(self) -> list[str]:
        """Return the main source set output directories."""

        raise NotImplementedError


__all__ = [
    "ArchiveTransformer",
    "BuildGraphLike",
    "FatArchiveTaskLike",
    "LaunchTaskLike",
    "TaskHooks",
]
