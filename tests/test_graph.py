# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the in-memory build graph."""

from __future__ import annotations

import pytest

from appruntime.errors import ConfigError, MissingCollaboratorError
from appruntime.graph import (
    IMPLEMENTATION,
    RUN_TASK,
    RUNTIME_CLASSPATH,
    RUNTIME_ONLY,
    SHADOW_JAR_TASK,
    SHADOW_PLUGIN,
    BuildGraph,
    FatArchiveTask,
    LaunchTask,
)


def test_creation_hooks_fire_for_existing_and_future_tasks(graph: BuildGraph) -> None:
    seen: list[str] = []
    graph.tasks.when_launch_task_created(lambda task: seen.append(task.name))

    graph.tasks.create_launch_task("runWorker")
    graph.tasks.create_archive_task("distJar")

    assert seen == [RUN_TASK, "runWorker"]


def test_fat_archive_hooks_only_see_fat_archives(graph: BuildGraph) -> None:
    seen: list[str] = []
    graph.tasks.when_fat_archive_task_created(lambda task: seen.append(task.name))

    graph.apply_plugin(SHADOW_PLUGIN)
    graph.apply_plugin(SHADOW_PLUGIN)

    assert seen == [SHADOW_JAR_TASK]
    assert [task.name for task in graph.tasks.of_type(FatArchiveTask)] == [SHADOW_JAR_TASK]


def test_duplicate_task_names_are_rejected(graph: BuildGraph) -> None:
    with pytest.raises(ConfigError):
        graph.tasks.create_launch_task(RUN_TASK)


def test_dependencies_are_added_once(graph: BuildGraph) -> None:
    graph.add_dependency(IMPLEMENTATION, "org.example:lib:1.0")
    graph.add_dependency(IMPLEMENTATION, "org.example:lib:1.0")
    graph.add_repository("https://repo.example.com")
    graph.add_repository("https://repo.example.com")

    assert graph.dependencies(IMPLEMENTATION) == ["org.example:lib:1.0"]
    assert graph.repositories == ["https://repo.example.com"]


def test_unknown_configuration_is_missing_collaborator(graph: BuildGraph) -> None:
    with pytest.raises(MissingCollaboratorError, match="invoker"):
        graph.add_dependency("invoker", "org.example:lib:1.0")


def test_runtime_classpath_follows_extended_buckets(graph: BuildGraph) -> None:
    graph.add_dependency(RUNTIME_ONLY, "org.example:driver:1.0")
    graph.add_dependency(IMPLEMENTATION, "org.example:lib:1.0")

    assert graph.classpath(RUNTIME_CLASSPATH) == ["org.example:lib:1.0", "org.example:driver:1.0"]


def test_to_dict_snapshot(graph: BuildGraph) -> None:
    snapshot = graph.to_dict()

    assert snapshot["main_class"] == "com.example.Application"
    assert snapshot["plugins"] == []
    assert snapshot["tasks"][RUN_TASK]["type"] == "launch"
    assert snapshot["tasks"][RUN_TASK]["main_class"] == "com.example.Application"
    assert snapshot["tasks"]["jar"] == {"type": "archive", "transformers": []}


def test_pre_run_actions_replace_by_name() -> None:
    task = LaunchTask(name="run")
    task.do_first("extra", lambda t: t.add_args("--one"))
    task.do_first("extra", lambda t: t.add_args("--two"))

    task.prepare_execution()

    assert task.args == ["--two"]
