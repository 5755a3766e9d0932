"""configure: chainable, functional-style configuration helpers for Python objects.

Usage:
    from dataclasses import dataclass

    from configure import K, Configurable, ValueConfigurable

    class Label(Configurable):
        def __init__(self) -> None:
            self.text = ""

    label = Label().set(K.text, "hi")          # same instance, mutated

    @dataclass
    class Point(ValueConfigurable):
        x: int = 0
        y: int = 0

    origin = Point()
    moved = origin.set(K.x, 5).set(K.y, 10)    # new value, origin untouched
    moved.mutate(lambda p: setattr(p, "x", 6))  # mutates moved itself
    length = moved.let(lambda p: (p.x**2 + p.y**2) ** 0.5)
"""

__version__ = "0.1.0"

# Configuration
from configure.config import ConfigureSettings, get_settings, use_settings

# Core primitives
from configure.core import (
    K,
    Configurable,
    Copy,
    FieldTypeError,
    KeyPath,
    KeyPathError,
    Semantics,
    SupportsConfigure,
    ValueConfigurable,
    configurable,
    configure,
)

__all__ = [
    # Version
    "__version__",
    # Capability
    "Configurable",
    "ValueConfigurable",
    "configurable",
    "configure",
    "Semantics",
    "SupportsConfigure",
    "Copy",
    # Key paths
    "K",
    "KeyPath",
    "KeyPathError",
    "FieldTypeError",
    # Configuration
    "ConfigureSettings",
    "get_settings",
    "use_settings",
]
