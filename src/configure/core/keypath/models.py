"""Key path models: typed, hashable references to a field of an object graph.

Usage:
    from configure import K, KeyPath

    KeyPath.parse("frame.origin.x")
    K.frame.origin.x                  # same path, built by attribute access
    K.items[0].name                   # attribute and subscript steps mixed
    KeyPath.parse('headers["Host"]')  # string keys use quotes
"""

from __future__ import annotations

import re
from collections.abc import Hashable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Attr:
    """Attribute step: ``obj.name``."""

    name: str

    def __str__(self) -> str:
        return f".{self.name}"


@dataclass(frozen=True, slots=True)
class Item:
    """Subscript step: ``obj[key]``."""

    key: Hashable

    def __str__(self) -> str:
        return f"[{self.key!r}]"


type Segment = Attr | Item

_TOKEN = re.compile(
    r"""
      (?P<attr>[A-Za-z_][A-Za-z0-9_]*)
    | \[(?P<index>-?\d+)\]
    | \[(?P<quote>["'])(?P<key>.*?)(?P=quote)\]
    | (?P<dot>\.)
    """,
    re.VERBOSE,
)


@dataclass(frozen=True, slots=True)
class KeyPath:
    """Ordered sequence of attribute and subscript steps from a root object.

    A key path never holds a reference to the object it is applied to, so the
    same path can be reused across instances (and types sharing the field).
    """

    segments: tuple[Segment, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("Key path must have at least one segment")

    @classmethod
    def parse(cls, text: str) -> KeyPath:
        """Parse dotted/subscripted path syntax.

        Args:
            text: Path such as ``"frame.origin.x"`` or ``'rows[0]["id"]'``.

        Returns:
            Parsed key path.

        Raises:
            ValueError: If text is empty or not valid path syntax.
        """
        segments: list[Segment] = []
        prev: str | None = None  # None at start, then "dot" or "seg"
        pos = 0
        while pos < len(text):
            match = _TOKEN.match(text, pos)
            if match is None:
                raise ValueError(f"Invalid key path {text!r}: unexpected character at {pos}")

            if match.group("attr") is not None:
                if prev == "seg":
                    raise ValueError(f"Invalid key path {text!r}: missing '.' before position {pos}")
                segments.append(Attr(match.group("attr")))
                prev = "seg"
            elif match.group("dot") is not None:
                if prev != "seg":
                    raise ValueError(f"Invalid key path {text!r}: unexpected '.' at {pos}")
                prev = "dot"
            else:
                if prev == "dot":
                    raise ValueError(f"Invalid key path {text!r}: subscript after '.' at {pos}")
                index = match.group("index")
                segments.append(Item(int(index) if index is not None else match.group("key")))
                prev = "seg"
            pos = match.end()

        if prev != "seg":
            raise ValueError(f"Invalid key path {text!r}: path must end with a field or subscript")
        return cls(tuple(segments))

    @classmethod
    def of(cls, locator: Locator) -> KeyPath:
        """Normalize any accepted locator form to a KeyPath.

        Raises:
            TypeError: If locator is not a str, KeyPath or K-builder.
        """
        if isinstance(locator, KeyPath):
            return locator
        if isinstance(locator, str):
            return cls.parse(locator)
        if isinstance(locator, KeyPathBuilder):
            return locator.key_path
        raise TypeError(
            f"Expected a key path, path string or K-builder, got {type(locator).__name__}"
        )

    @property
    def leaf(self) -> Segment:
        """Last step of the path (the field that gets written)."""
        return self.segments[-1]

    @property
    def parent(self) -> KeyPath | None:
        """Path to the object owning the leaf, None when the leaf is on the root."""
        if len(self.segments) == 1:
            return None
        return KeyPath(self.segments[:-1])

    def appending(self, segment: Segment) -> KeyPath:
        return KeyPath((*self.segments, segment))

    def __str__(self) -> str:
        text = "".join(str(segment) for segment in self.segments)
        return text[1:] if text.startswith(".") else text


class KeyPathBuilder:
    """Builds key paths from attribute access and subscripts.

    ``K.frame.origin.x`` is equivalent to ``KeyPath.parse("frame.origin.x")``.
    Dunder names are not captured, so copying and pickling behave normally.
    """

    __slots__ = ("__path",)

    def __init__(self, path: KeyPath | None = None) -> None:
        self.__path = path

    @property
    def key_path(self) -> KeyPath:
        if self.__path is None:
            raise ValueError("Empty key path: access at least one attribute on K")
        return self.__path

    def __extend(self, segment: Segment) -> KeyPathBuilder:
        if self.__path is None:
            return KeyPathBuilder(KeyPath((segment,)))
        return KeyPathBuilder(self.__path.appending(segment))

    def __getattr__(self, name: str) -> KeyPathBuilder:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return self.__extend(Attr(name))

    def __getitem__(self, key: Hashable) -> KeyPathBuilder:
        return self.__extend(Item(key))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeyPathBuilder):
            return self.__path == other.__path
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.__path)

    def __repr__(self) -> str:
        if self.__path is None:
            return "K"
        text = str(self.__path)
        return f"K{text}" if text.startswith("[") else f"K.{text}"


K = KeyPathBuilder()

type Locator = str | KeyPath | KeyPathBuilder
