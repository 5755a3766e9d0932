"""Capability declaration: mixins and the configurable decorator.

Usage:
    # Reference identity: helpers mutate and return the same instance
    class Label(Configurable):
        def __init__(self) -> None:
            self.text = ""
            self.alignment = "left"

    label = Label().set(K.text, "hi").set("alignment", "center")

    # Value semantics: helpers return new values, the receiver never changes
    @dataclass(slots=True)
    class Point(ValueConfigurable):
        x: int = 0
        y: int = 0

    moved = Point().set(K.x, 5).set(K.y, 10)  # Point(x=5, y=10)

    # Or opt in without changing the bases
    @configurable(semantics=Semantics.VALUE)
    @dataclass
    class Size:
        width: float
        height: float
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, Self, overload

from configure.core.capability import operations
from configure.core.capability.models import HELPER_NAMES, CapabilityMeta, Semantics
from configure.core.keypath import Locator


def _type_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class _ConfigurableBase:
    """Helpers shared by both semantics, plus capability bookkeeping."""

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declared = {
            vars(base)["_semantics"] for base in cls.__mro__ if "_semantics" in vars(base)
        }
        if len(declared) > 1:
            raise TypeError(
                f"{cls.__name__} cannot be both Configurable and ValueConfigurable"
            )
        if declared:
            cls.__configurable_meta__ = CapabilityMeta(  # type: ignore[attr-defined]
                semantics=declared.pop(), type_name=_type_name(cls)
            )

    def mutate(self, block: Callable[[Self], object]) -> None:
        """Mutate this instance with the given block. Ends the chain.

        ```
        view.frame.mutate(lambda frame: setattr(frame, "width", 150))
        ```

        Args:
            block: Callable receiving this very instance.
        """
        operations.mutate(self, block)

    def let[R](self, block: Callable[[Self], R]) -> R:
        """Apply block to this instance and return its result.

        ```
        date_string = today.let(lambda d: d.strftime("%Y-%m-%d"))
        ```

        Args:
            block: Callable computing a derived value.

        Returns:
            Whatever block returns, unchanged.
        """
        return operations.let(self, block)

    def do(self, block: Callable[[Self], object]) -> None:
        """Run block with this instance for its side effects. Ends the chain.

        Args:
            block: Callable receiving this instance; its return value is ignored.
        """
        operations.do(self, block)


class Configurable(_ConfigurableBase):
    """Capability marker for reference-identity hosts.

    ``set`` and ``then`` act on this very instance and return it, so every
    other holder of a reference sees the change. Copying a value that holds
    one shares the instance instead of cloning it.
    """

    __slots__ = ()

    _semantics = Semantics.REFERENCE

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        """Reference hosts keep their identity inside deep-copied values."""
        return self

    def set(self, locator: Locator, value: Any) -> Self:
        """Set the field identified by a key path and return this instance.

        ```
        label = Label().set(K.text, "text").set(K.alignment, "center")
        ```

        Args:
            locator: Key path of the field (``K.text``, ``"frame.width"``, ...).
            value: Value to set.

        Returns:
            This instance.

        Raises:
            KeyPathError: If the path does not exist.
            FieldTypeError: If value does not match the field annotation.
        """
        return operations.set_field(self, locator, value)

    def then(self, block: Callable[[Self], object]) -> Self:
        """Run block with this instance and return the instance.

        Args:
            block: Callable receiving this instance; its return value is ignored.

        Returns:
            This instance.
        """
        return operations.then(self, block)


class ValueConfigurable(_ConfigurableBase):
    """Capability marker for value-semantics hosts.

    ``set`` and ``then`` never touch the receiver: they return a new value.
    ``mutate`` is the only helper that changes the receiver itself.
    """

    __slots__ = ()

    _semantics = Semantics.VALUE

    def set(self, locator: Locator, value: Any) -> Self:
        """Return a copy of this value with the field at a key path replaced.

        Args:
            locator: Key path of the field.
            value: Value to set.

        Returns:
            New value; this one is unchanged.

        Raises:
            KeyPathError: If the path does not exist.
            FieldTypeError: If value does not match the field annotation.
        """
        return operations.replace_field(self, locator, value)

    def then(self, block: Callable[[Self], object]) -> Self:
        """Run block against a copy of this value and return the copy.

        ```
        wide = frame.then(lambda f: setattr(f, "width", 300))
        ```

        Args:
            block: Callable receiving the copy.

        Returns:
            The copy, with whatever block did to it.
        """
        return operations.then_copy(self, block)


@overload
def configurable[C: type](cls: C) -> C: ...


@overload
def configurable[C: type](
    cls: None = None, *, semantics: Semantics = Semantics.REFERENCE
) -> Callable[[C], C]: ...


def configurable(
    cls: type | None = None, *, semantics: Semantics = Semantics.REFERENCE
) -> type | Callable[[type], type]:
    """Opt a class into the configure helpers without changing its bases.

    Reference classes without their own ``__deepcopy__`` also get one that
    returns the instance, as ``Configurable`` does.

    Supports three forms:
        @configurable                              # reference semantics
        @configurable()                            # same, parenthesized
        @configurable(semantics=Semantics.VALUE)   # value semantics

    Args:
        cls: The class to decorate, or None if called with arguments.
        semantics: Which helper set to install.

    Returns:
        Decorated class or decorator function.

    Raises:
        TypeError: If target is not a class, already defines a helper name
            itself, or already declared the other semantics.
    """
    mixin = ValueConfigurable if semantics is Semantics.VALUE else Configurable

    def decorator(c: type) -> type:
        if not isinstance(c, type):
            raise TypeError(f"@configurable must decorate a class, got {type(c).__name__}")
        existing = getattr(c, "__configurable_meta__", None)
        if isinstance(existing, CapabilityMeta) and existing.semantics is not semantics:
            raise TypeError(
                f"{c.__name__} already declares {existing.semantics.name} semantics"
            )
        clashes = [name for name in HELPER_NAMES if name in vars(c)]
        if clashes:
            raise TypeError(
                f"{c.__name__} already defines {', '.join(clashes)}; "
                f"cannot install configure helpers"
            )

        for name in HELPER_NAMES:
            setattr(c, name, inspect.getattr_static(mixin, name))
        if semantics is Semantics.REFERENCE and not hasattr(c, "__deepcopy__"):
            c.__deepcopy__ = Configurable.__deepcopy__  # type: ignore[attr-defined]
        c.__configurable_meta__ = CapabilityMeta(  # type: ignore[attr-defined]
            semantics=semantics, type_name=_type_name(c)
        )
        return c

    if cls is None:
        return decorator
    return decorator(cls)
