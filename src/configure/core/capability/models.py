"""Capability models: helper names and the structural protocol.

Semantics and CapabilityMeta live in core.types so key path operations can use
them; they are re-exported here with the rest of the capability models.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, Self, runtime_checkable

from configure.core.keypath import Locator
from configure.core.types import CapabilityMeta, Semantics

# Names every configurable host exposes
HELPER_NAMES = ("set", "then", "mutate", "let", "do")


@runtime_checkable
class SupportsConfigure(Protocol):
    """Anything exposing the chainable configure helpers."""

    def set(self, locator: Locator, value: Any) -> Self: ...
    def then(self, block: Callable[[Self], object]) -> Self: ...
    def mutate(self, block: Callable[[Self], object]) -> None: ...
    def let[R](self, block: Callable[[Self], R]) -> R: ...
    def do(self, block: Callable[[Self], object]) -> None: ...
