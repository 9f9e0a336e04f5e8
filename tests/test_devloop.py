# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the development loop configuration."""

from __future__ import annotations

from appruntime.devloop import OSX_RUNTIME, WATCH_PROPERTIES, DevelopmentLoopConfigurer
from appruntime.graph import DEVELOPMENT_ONLY, RUN_TASK, BuildGraph


def test_configure_creates_empty_bucket_off_macos(graph: BuildGraph) -> None:
    DevelopmentLoopConfigurer().configure(graph, is_macos=False, continuous=False)

    assert graph.dependencies(DEVELOPMENT_ONLY) == []


def test_configure_adds_file_watcher_on_macos(graph: BuildGraph) -> None:
    DevelopmentLoopConfigurer().configure(graph, is_macos=True, continuous=False)

    assert graph.dependencies(DEVELOPMENT_ONLY) == [OSX_RUNTIME]


def test_launch_tasks_receive_development_classpath(graph: BuildGraph) -> None:
    DevelopmentLoopConfigurer().configure(graph, is_macos=False, continuous=False)
    late = graph.tasks.create_launch_task("runWorker")

    run = graph.tasks.find_launch_task(RUN_TASK)
    assert run is not None
    assert run.classpath == [DEVELOPMENT_ONLY]
    assert late.classpath == [DEVELOPMENT_ONLY]


def test_continuous_mode_injects_watch_properties(graph: BuildGraph) -> None:
    DevelopmentLoopConfigurer().configure(graph, is_macos=False, continuous=True)
    late = graph.tasks.create_launch_task("runWorker")

    run = graph.tasks.find_launch_task(RUN_TASK)
    assert run is not None
    expected = {
        "micronaut.io.watch.restart": True,
        "micronaut.io.watch.enabled": True,
        "micronaut.io.watch.paths": "src/main",
    }
    assert run.system_properties == expected
    assert late.system_properties == expected
    assert dict(WATCH_PROPERTIES) == expected


def test_non_continuous_mode_injects_no_watch_properties(graph: BuildGraph) -> None:
    DevelopmentLoopConfigurer().configure(graph, is_macos=False, continuous=False)
    late = graph.tasks.create_launch_task("runWorker")

    run = graph.tasks.find_launch_task(RUN_TASK)
    assert run is not None
    for task in (run, late):
        assert not set(WATCH_PROPERTIES) & set(task.system_properties)


def test_finalize_pins_bom_version(graph: BuildGraph) -> None:
    configurer = DevelopmentLoopConfigurer()
    configurer.configure(graph, is_macos=True, continuous=False)

    configurer.finalize(graph, "2.1.0")

    assert graph.dependencies(DEVELOPMENT_ONLY) == [
        OSX_RUNTIME,
        "platform(io.micronaut:micronaut-bom:2.1.0)",
    ]
