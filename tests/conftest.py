"""Shared pytest fixtures and configuration for the entry-driver test suite.

Guidelines
----------
* Entry points are plain Python callables — no external backend.
* Core tests must be pure — no side effects.
* Process streams are only touched through ``capsys``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from entry_driver.core.models import EntryPoint, ParameterSpec
from entry_driver.core.types import DomainType


def make_echo(
    domain_type: DomainType,
    name: str = "n",
    *,
    doc: str = "",
) -> EntryPoint:
    """Entry point taking one parameter and returning it unchanged."""
    return EntryPoint(
        name="Echo",
        callable=lambda **kwargs: kwargs[name],
        parameters=(ParameterSpec(name=name, type=domain_type, doc=doc),),
        return_type=domain_type,
    )


@pytest.fixture
def echo() -> Callable[..., EntryPoint]:
    """Factory fixture building single-parameter echo entry points."""
    return make_echo


@pytest.fixture
def constant() -> Callable[[DomainType | None, Any], EntryPoint]:
    """Factory fixture for parameterless entry points returning *value*."""

    def _build(return_type: DomainType | None, value: Any) -> EntryPoint:
        return EntryPoint(
            name="Constant",
            callable=lambda: value,
            return_type=return_type,
        )

    return _build
