"""Core type definitions for configure."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

type Copy[T] = T
"""Type alias indicating a value is an independent copy of a host.

When you see `Copy[T]` in a return type, mutating the returned value does NOT
affect the host it was derived from. Value-semantics helpers return copies;
to keep the change, rebind: `point = point.set(K.x, 5)`.
"""


class Semantics(Enum):
    """How a host type shares its instances."""

    REFERENCE = auto()  # Shared by reference, helpers mutate the instance
    VALUE = auto()  # Copied on write, helpers return new instances

    @classmethod
    def of(cls, host: object) -> Semantics:
        """Semantics declared by a host instance or class.

        Args:
            host: Instance or class to inspect.

        Returns:
            Declared semantics, REFERENCE for anything that never opted in.
        """
        meta = getattr(host, "__configurable_meta__", None)
        if isinstance(meta, CapabilityMeta):
            return meta.semantics
        return cls.REFERENCE


@dataclass(slots=True, frozen=True)
class CapabilityMeta:
    """Metadata recorded on configurable host types."""

    semantics: Semantics
    type_name: str
