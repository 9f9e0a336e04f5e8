# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fat-archive packaging rules applied regardless of the selected runtime."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from .interfaces import BuildGraphLike, FatArchiveTaskLike

SERVICES_PREFIX: Final[str] = "META-INF/services/"


@dataclass(frozen=True, slots=True)
class ServiceFileMerger:
    """Merge same-named service registration files from every bundled archive.

    Without this transformer the last archive to contribute a
    ``META-INF/services`` entry wins and the providers declared by the other
    archives disappear from the fat archive.
    """

    path_prefix: str = SERVICES_PREFIX

    def matches(self, path: str) -> bool:
        """Return whether ``path`` is a service registration file."""

        return path.startswith(self.path_prefix) and len(path) > len(self.path_prefix)

    def merge(self, entries: Iterable[tuple[str, str]]) -> dict[str, str]:
        """Combine service files in archive order.

        Args:
            entries: ``(path, content)`` pairs in the order archives are merged.

        Returns:
            dict[str, str]: Merged content per service path. Blank lines,
            ``#`` comments and repeated provider names are dropped.
        """

        merged: dict[str, list[str]] = {}
        for path, content in entries:
            if not self.matches(path):
                continue
            providers = merged.setdefault(path, [])
            for line in content.splitlines():
                provider = line.split("#", 1)[0].strip()
                if provider and provider not in providers:
                    providers.append(provider)
        return {path: "".join(f"{provider}\n" for provider in providers) for path, providers in merged.items()}


class PackagingFixup:
    """Register the service-file merge rule on every fat-archive task."""

    def __init__(self, merger: ServiceFileMerger | None = None) -> None:
        self._merger = merger or ServiceFileMerger()

    def register(self, graph: BuildGraphLike) -> None:
        """Subscribe to fat-archive task creation on ``graph``.

        Tasks that already exist are configured immediately; tasks created later,
        such as the one contributed when shading is forced, are configured as the
        build engine creates them.
        """

        graph.tasks.when_fat_archive_task_created(self._configure)

    def _configure(self, task: FatArchiveTaskLike) -> None:
        task.transform(self._merger)


__all__ = ["PackagingFixup", "SERVICES_PREFIX", "ServiceFileMerger"]
