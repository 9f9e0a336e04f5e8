# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""In-memory build graph implementing the collaborator interfaces.

The graph mirrors the small slice of a JVM build model the runtime
configuration core touches: named dependency buckets, repositories, the
application entry point, applied plugins and a task container that notifies
subscribers when tasks are created. Every mutation is additive and
idempotent, so re-applying the same configuration leaves the graph unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final, TypeVar

from .errors import ConfigError, MissingCollaboratorError
from .interfaces import ArchiveTransformer

IMPLEMENTATION: Final[str] = "implementation"
COMPILE_ONLY: Final[str] = "compileOnly"
TEST_IMPLEMENTATION: Final[str] = "testImplementation"
RUNTIME_ONLY: Final[str] = "runtimeOnly"
RUNTIME_CLASSPATH: Final[str] = "runtimeClasspath"
DEVELOPMENT_ONLY: Final[str] = "developmentOnly"
INVOKER: Final[str] = "invoker"

RUN_TASK: Final[str] = "run"
JAR_TASK: Final[str] = "jar"
SHADOW_PLUGIN: Final[str] = "shadow"
SHADOW_JAR_TASK: Final[str] = "shadowJar"

DEFAULT_MAIN_OUTPUT: Final[tuple[str, ...]] = ("build/classes/java/main", "build/resources/main")

TaskT = TypeVar("TaskT", bound="Task")


def platform_dependency(coordinate: str) -> str:
    """Return the notation importing ``coordinate`` as a platform (BOM)."""

    return f"platform({coordinate})"


@dataclass(slots=True)
class DependencyBucket:
    """Named, ordered set of dependency coordinates."""

    name: str
    dependencies: list[str] = field(default_factory=list)
    extends_from: list[str] = field(default_factory=list)

    def add(self, coordinate: str) -> bool:
        """Append ``coordinate`` unless present and report whether it was added."""

        if coordinate in self.dependencies:
            return False
        self.dependencies.append(coordinate)
        return True


@dataclass(slots=True)
class Task:
    """Base class for tasks held by :class:`TaskContainer`."""

    name: str


@dataclass(slots=True)
class LaunchTask(Task):
    """Execution task launching the application in a separate process."""

    main_class: str | None = None
    classpath: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)
    system_properties: dict[str, Any] = field(default_factory=dict)
    pre_run_actions: dict[str, Callable[[LaunchTask], None]] = field(default_factory=dict)

    def set_classpath(self, entries: Sequence[str]) -> None:
        """Replace the classpath with ``entries``, dropping repeats."""

        self.classpath = list(dict.fromkeys(entries))

    def add_classpath(self, entry: str) -> None:
        """Append ``entry`` to the classpath unless already present."""

        if entry not in self.classpath:
            self.classpath.append(entry)

    def set_args(self, args: Sequence[str]) -> None:
        """Replace the program arguments."""

        self.args = [str(arg) for arg in args]

    def add_args(self, *args: str) -> None:
        """Append program arguments."""

        self.args.extend(str(arg) for arg in args)

    def add_system_properties(self, properties: Mapping[str, Any]) -> None:
        """Merge ``properties`` into the JVM system properties."""

        self.system_properties.update(properties)

    def do_first(self, name: str, action: Callable[[LaunchTask], None]) -> None:
        """Register ``action`` under ``name``; a second registration replaces the first."""

        self.pre_run_actions[name] = action

    def prepare_execution(self) -> None:
        """Run the pre-run actions in registration order.

        The build engine calls this immediately before the process starts, once
        the runtime classpath can be resolved.
        """

        for action in self.pre_run_actions.values():
            action(self)


@dataclass(slots=True)
class ArchiveTask(Task):
    """Packaging task producing a plain archive of the application classes."""

    transformers: list[ArchiveTransformer] = field(default_factory=list)

    def transform(self, transformer: ArchiveTransformer) -> None:
        """Attach ``transformer`` once; equal transformers are not repeated."""

        if transformer not in self.transformers:
            self.transformers.append(transformer)


@dataclass(slots=True)
class FatArchiveTask(ArchiveTask):
    """Packaging task bundling the application with all of its dependencies."""


@dataclass(slots=True)
class _Subscription:
    task_type: type[Task]
    hook: Callable[[Any], None]


class TaskContainer:
    """Named task collection that notifies subscribers on task creation."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._subscriptions: list[_Subscription] = []

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def add(self, task: TaskT) -> TaskT:
        """Register ``task`` and fire every matching creation hook.

        Args:
            task: Newly created task.

        Returns:
            TaskT: The registered task.

        Raises:
            ConfigError: If a task with the same name already exists.
        """

        if task.name in self._tasks:
            raise ConfigError(f"Task '{task.name}' already exists")
        self._tasks[task.name] = task
        for subscription in list(self._subscriptions):
            if isinstance(task, subscription.task_type):
                subscription.hook(task)
        return task

    def create_launch_task(self, name: str, *, main_class: str | None = None) -> LaunchTask:
        """Create and register a launch task called ``name``."""

        return self.add(LaunchTask(name=name, main_class=main_class))

    def create_archive_task(self, name: str, *, fat: bool = False) -> ArchiveTask:
        """Create and register an archive task, bundling dependencies when ``fat``."""

        task = FatArchiveTask(name=name) if fat else ArchiveTask(name=name)
        return self.add(task)

    def when_created(self, task_type: type[TaskT], hook: Callable[[TaskT], None]) -> None:
        """Invoke ``hook`` for every existing and future task of ``task_type``."""

        self._subscriptions.append(_Subscription(task_type=task_type, hook=hook))
        for task in list(self._tasks.values()):
            if isinstance(task, task_type):
                hook(task)

    def when_launch_task_created(self, hook: Callable[[LaunchTask], None]) -> None:
        """Invoke ``hook`` for every existing and future launch task."""

        self.when_created(LaunchTask, hook)

    def when_fat_archive_task_created(self, hook: Callable[[FatArchiveTask], None]) -> None:
        """Invoke ``hook`` for every existing and future fat-archive task."""

        self.when_created(FatArchiveTask, hook)

    def get(self, name: str) -> Task | None:
        """Return the task called ``name``, if any."""

        return self._tasks.get(name)

    def find_launch_task(self, name: str) -> LaunchTask | None:
        """Return the launch task called ``name``, or ``None`` when absent or of another kind."""

        task = self._tasks.get(name)
        return task if isinstance(task, LaunchTask) else None

    def of_type(self, task_type: type[TaskT]) -> list[TaskT]:
        """Return every task of ``task_type`` in creation order."""

        return [task for task in self._tasks.values() if isinstance(task, task_type)]


class BuildGraph:
    """Concrete build configuration graph consumed by an external build engine."""

    def __init__(self, *, main_output: Sequence[str] = DEFAULT_MAIN_OUTPUT) -> None:
        self.configurations: dict[str, DependencyBucket] = {}
        self.repositories: list[str] = []
        self.main_class: str | None = None
        self.plugins: list[str] = []
        self._tasks = TaskContainer()
        self._main_output = list(main_output)

    @classmethod
    def for_application(cls, main_class: str | None = None) -> BuildGraph:
        """Return a graph pre-populated like a freshly applied application build.

        The graph holds the standard dependency buckets, a ``run`` launch task
        and a plain ``jar`` archive task.
        """

        graph = cls()
        for name in (IMPLEMENTATION, COMPILE_ONLY, TEST_IMPLEMENTATION, RUNTIME_ONLY):
            graph.create_configuration(name)
        graph.create_configuration(RUNTIME_CLASSPATH, extends_from=(IMPLEMENTATION, RUNTIME_ONLY))
        graph.main_class = main_class
        graph.tasks.create_launch_task(RUN_TASK)
        graph.tasks.create_archive_task(JAR_TASK)
        return graph

    @property
    def tasks(self) -> TaskContainer:
        """Return the container holding the graph's tasks."""

        return self._tasks

    def create_configuration(self, name: str, *, extends_from: Sequence[str] = ()) -> DependencyBucket:
        """Return the bucket called ``name``, creating it and recording its parents."""

        bucket = self.configurations.get(name)
        if bucket is None:
            bucket = self.configurations[name] = DependencyBucket(name=name)
        for parent in extends_from:
            if parent not in bucket.extends_from:
                bucket.extends_from.append(parent)
        return bucket

    def configuration(self, name: str) -> DependencyBucket:
        """Return the bucket called ``name``.

        Raises:
            MissingCollaboratorError: If the bucket was never created.
        """

        try:
            return self.configurations[name]
        except KeyError as exc:
            raise MissingCollaboratorError(f"Configuration '{name}' does not exist") from exc

    def add_dependency(self, configuration: str, coordinate: str) -> None:
        """Add ``coordinate`` to ``configuration`` once."""

        self.configuration(configuration).add(coordinate)

    def dependencies(self, configuration: str) -> list[str]:
        """Return the coordinates declared directly on ``configuration``."""

        return list(self.configuration(configuration).dependencies)

    def add_repository(self, url: str) -> None:
        """Register the repository at ``url`` once."""

        if url not in self.repositories:
            self.repositories.append(url)

    def set_main_class(self, main_class: str) -> None:
        """Override the application entry point."""

        self.main_class = main_class

    def has_plugin(self, plugin_id: str) -> bool:
        """Return whether ``plugin_id`` has been applied."""

        return plugin_id in self.plugins

    def apply_plugin(self, plugin_id: str) -> None:
        """Apply ``plugin_id`` once; the shadow plugin contributes ``shadowJar``."""

        if plugin_id in self.plugins:
            return
        self.plugins.append(plugin_id)
        if plugin_id == SHADOW_PLUGIN and SHADOW_JAR_TASK not in self._tasks:
            self._tasks.create_archive_task(SHADOW_JAR_TASK, fat=True)

    def classpath(self, name: str) -> list[str]:
        """Return the coordinates of ``name`` and every bucket it extends, in order."""

        resolved: list[str] = []
        seen: set[str] = set()
        pending = [name]
        while pending:
            bucket = self.configuration(pending.pop(0))
            if bucket.name in seen:
                continue
            seen.add(bucket.name)
            pending.extend(bucket.extends_from)
            resolved.extend(dep for dep in bucket.dependencies if dep not in resolved)
        return resolved

    def main_output(self) -> list[str]:
        """Return the compiled class and resource directories of the main source set."""

        return list(self._main_output)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible snapshot of the graph."""

        tasks: dict[str, dict[str, Any]] = {}
        for task in self._tasks:
            if isinstance(task, LaunchTask):
                tasks[task.name] = {
                    "type": "launch",
                    "main_class": task.main_class or self.main_class,
                    "classpath": list(task.classpath),
                    "args": list(task.args),
                    "system_properties": dict(task.system_properties),
                    "pre_run_actions": list(task.pre_run_actions),
                }
            elif isinstance(task, ArchiveTask):
                tasks[task.name] = {
                    "type": "fat-archive" if isinstance(task, FatArchiveTask) else "archive",
                    "transformers": [type(transformer).__name__ for transformer in task.transformers],
                }
        return {
            "main_class": self.main_class,
            "plugins": list(self.plugins),
            "repositories": list(self.repositories),
            "configurations": {
                name: list(bucket.dependencies) for name, bucket in self.configurations.items()
            },
            "tasks": tasks,
        }


__all__ = [
    "ArchiveTask",
    "BuildGraph",
    "COMPILE_ONLY",
    "DEVELOPMENT_ONLY",
    "DependencyBucket",
    "FatArchiveTask",
    "IMPLEMENTATION",
    "INVOKER",
    "JAR_TASK",
    "LaunchTask",
    "RUNTIME_CLASSPATH",
    "RUNTIME_ONLY",
    "RUN_TASK",
    "SHADOW_JAR_TASK",
    "SHADOW_PLUGIN",
    "TEST_IMPLEMENTATION",
    "Task",
    "TaskContainer",
    "platform_dependency",
]
