"""Pure functions behind the configure helpers.

These work on any object, whether or not its type opted into the capability.
None of them catch what a block raises: the exception reaches the caller
unchanged, and whatever the block did before raising stays done.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

from configure.config import CopyMode, get_settings
from configure.core.capability.models import Semantics
from configure.core.keypath import Attr, KeyPath, Locator, assign, replace
from configure.core.types import Copy


def _stored(value: Any) -> Any:
    # Value hosts are copied on assignment, so later mutation of the caller's
    # value never leaks into the field it was stored in.
    if not isinstance(value, type) and Semantics.of(value) is Semantics.VALUE:
        return copy_value(value)
    return value


# Reference semantics


def set_field[H](host: H, locator: Locator, value: Any) -> H:
    """Assign a field on the live host and return the same host.

    Raises:
        KeyPathError: If the path does not exist on host.
        FieldTypeError: If value does not match the field annotation.
    """
    assign(host, locator, _stored(value), validate=get_settings().validate_types)
    return host


def then[H](host: H, block: Callable[[H], object]) -> H:
    """Run block against the live host and return the same host."""
    block(host)
    return host


# Value semantics


def copy_value[H](host: H, mode: CopyMode | None = None) -> Copy[H]:
    """Copy a host the way value-semantics helpers do.

    Args:
        host: Value to copy.
        mode: "deep" or "shallow"; defaults to the configured copy_mode.

    Returns:
        Independent copy of host.
    """
    if (mode or get_settings().copy_mode) == "deep":
        return copy.deepcopy(host)
    return copy.copy(host)


def replace_field[H](host: H, locator: Locator, value: Any) -> Copy[H]:
    """Return a copy of host with one field replaced; host itself is untouched.

    Raises:
        KeyPathError: If the path does not exist on host.
        FieldTypeError: If value does not match the field annotation.
    """
    return replace(host, locator, _stored(value), validate=get_settings().validate_types)


def then_copy[H](host: H, block: Callable[[H], object]) -> Copy[H]:
    """Run block against a copy of host and return that copy."""
    result = copy_value(host)
    block(result)
    return result


# Shared by both semantics


def mutate[H](host: H, block: Callable[[H], object]) -> None:
    """Run block against the live host. Nothing is returned."""
    block(host)


def let[H, R](host: H, block: Callable[[H], R]) -> R:
    """Return whatever block computes from host."""
    return block(host)


def do[H](host: H, block: Callable[[H], object]) -> None:
    """Run block for its side effects only."""
    block(host)


def configure[H](host: H, **fields: Any) -> H:
    """Set several top-level fields at once, honouring the host's semantics.

    Reference hosts are updated in place and returned; value hosts yield a
    new value and stay untouched.

    Usage:
        label = configure(Label(), text="hi", color="red")
        point = configure(Point(0, 0), x=5, y=10)

    Raises:
        KeyPathError: If a field does not exist on host.
        FieldTypeError: If a value does not match its field annotation.
    """
    value_semantics = Semantics.of(host) is Semantics.VALUE
    for name, value in fields.items():
        path = KeyPath((Attr(name),))
        if value_semantics:
            host = replace_field(host, path, value)
        else:
            set_field(host, path, value)
    return host
