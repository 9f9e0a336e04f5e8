# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for runtime resolution."""

from __future__ import annotations

import pytest

from appruntime.catalog import Runtime
from appruntime.errors import UnknownRuntimeError
from appruntime.resolver import RUNTIME_PROPERTY, override_from_properties, resolve


@pytest.mark.parametrize("default", list(Runtime))
def test_resolve_without_override_returns_declared_default(default: Runtime) -> None:
    assert resolve(None, default) is default


@pytest.mark.parametrize("blank", ["", "   "])
def test_blank_override_is_rejected(blank: str) -> None:
    with pytest.raises(UnknownRuntimeError):
        resolve(blank, Runtime.LAMBDA)


def test_override_wins_over_declared_default() -> None:
    assert resolve("azure_function", Runtime.LAMBDA) is Runtime.AZURE_FUNCTION
    assert resolve("GOOGLE_FUNCTION", Runtime.NETTY) is Runtime.GOOGLE_FUNCTION


def test_unknown_override_never_falls_back() -> None:
    with pytest.raises(UnknownRuntimeError):
        resolve("kubernetes", Runtime.NETTY)


def test_override_from_properties() -> None:
    assert override_from_properties({RUNTIME_PROPERTY: "lambda"}) == "lambda"
    assert override_from_properties({RUNTIME_PROPERTY: ""}) == ""
    assert override_from_properties({"other": "lambda"}) is None
