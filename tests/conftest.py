# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from appruntime.console import get_console_manager
from appruntime.graph import BuildGraph


@pytest.fixture
def graph() -> BuildGraph:
    """Return a freshly applied application build graph."""
    return BuildGraph.for_application("com.example.Application")


@pytest.fixture(autouse=True)
def _reset_consoles() -> None:
    get_console_manager.cache_clear()
