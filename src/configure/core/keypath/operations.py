"""Pure functions for reading and writing through key paths.

Two write flavours exist, mirroring the two host semantics:

- ``assign`` writes the leaf on the existing object graph. Every holder of a
  reference to the owning object sees the change.
- ``replace`` returns a new root with the leaf replaced. Only the objects on
  the path are copied; untouched siblings are shared with the original, and the
  original root is never mutated.

Both validate the new value against the owner's annotation (``check_type``)
unless told not to. A subscript leaf directly under an annotated field is
checked against the element type of that field (``list[int]`` -> ``int``).
"""

from __future__ import annotations

import copy
import dataclasses
import functools
import reprlib
import types
import typing
import warnings
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, PydanticUserError, TypeAdapter, ValidationError

from configure.config import get_settings
from configure.core.keypath.models import Attr, Item, KeyPath, Locator, Segment
from configure.core.types import Semantics

_MISSING = object()


class KeyPathError(AttributeError):
    """Raised when a key path step does not exist on the object it is applied to."""

    def __init__(self, path: KeyPath, segment: Segment, owner: object, reason: str) -> None:
        self.path = path
        self.segment = segment
        self.owner_type = type(owner)
        super().__init__(
            f"Key path {str(path)!r} failed at {str(segment)!r} on "
            f"{type(owner).__qualname__}: {reason}"
        )


class FieldTypeError(TypeError):
    """Raised when a value does not match the annotated type of the field it is set on."""

    def __init__(self, owner_type: type, field_name: str, expected: Any, value: Any) -> None:
        self.owner_type = owner_type
        self.field_name = field_name
        self.expected = expected
        self.value = value
        super().__init__(
            f"Cannot set {owner_type.__qualname__}.{field_name}: expected "
            f"{_type_repr(expected)}, got {type(value).__qualname__} ({reprlib.repr(value)})"
        )


def _type_repr(hint: Any) -> str:
    if isinstance(hint, type):
        return hint.__qualname__
    return repr(hint).removeprefix("typing.")


# Type validation


@functools.lru_cache(maxsize=256)
def _field_hints(owner_type: type) -> dict[str, Any]:
    """Resolved instance-field annotations of a type, cached per type.

    Annotations that cannot be resolved (e.g. forward references to names that
    do not exist at runtime) disable validation for the whole type.
    """
    if issubclass(owner_type, BaseModel):
        return {name: info.annotation for name, info in owner_type.model_fields.items()}
    try:
        hints = typing.get_type_hints(owner_type)
    except (NameError, TypeError) as e:
        if get_settings().warn_unresolved_annotations:
            warnings.warn(
                f"Cannot resolve annotations of {owner_type.__qualname__} ({e}); "
                f"values set on it will not be type-checked",
                RuntimeWarning,
                stacklevel=4,
            )
        return {}
    return {
        name: hint
        for name, hint in hints.items()
        if typing.get_origin(hint) is not typing.ClassVar
        and not isinstance(hint, dataclasses.InitVar)
    }


@functools.lru_cache(maxsize=256)
def _adapter(hint: Any) -> TypeAdapter[Any] | None:
    """Strict pydantic adapter for a non-class annotation (generics, unions, literals)."""
    try:
        return TypeAdapter(hint, config=ConfigDict(arbitrary_types_allowed=True, strict=True))
    except PydanticUserError:
        warnings.warn(
            f"Annotation {_type_repr(hint)} is not supported for validation; skipping it",
            RuntimeWarning,
            stacklevel=5,
        )
        return None


def _matches_class(value: Any, hint: type) -> bool:
    # Numeric tower as in strict pydantic: int is a float, bool is not an int.
    if hint is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if hint is complex:
        return isinstance(value, (int, float, complex)) and not isinstance(value, bool)
    if hint is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, hint)


def _check_against(owner_type: type, label: str, hint: Any, value: Any) -> None:
    if hint is _MISSING or hint is Any or hint is object:
        return

    if (
        isinstance(hint, type)
        and typing.get_origin(hint) is None
        and not typing.is_typeddict(hint)
    ):
        # Plain Protocols only describe structure; isinstance() refuses them.
        if getattr(hint, "_is_protocol", False) and not getattr(
            hint, "_is_runtime_protocol", False
        ):
            return
        if not _matches_class(value, hint):
            raise FieldTypeError(owner_type, label, hint, value)
        return

    try:
        adapter = _adapter(hint)
    except TypeError:  # unhashable annotation metadata, nothing to cache on
        adapter = _adapter.__wrapped__(hint)
    if adapter is None:
        return
    try:
        adapter.validate_python(value)
    except ValidationError as e:
        raise FieldTypeError(owner_type, label, hint, value) from e


def _item_hint(hint: Any, key: Any) -> Any:
    """Element annotation addressed by a subscript on a container annotation."""
    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if origin is typing.Union or origin is types.UnionType:
        present = [arg for arg in args if arg is not type(None)]
        return _item_hint(present[0], key) if len(present) == 1 else _MISSING
    if not isinstance(origin, type) or not args:
        return _MISSING

    if issubclass(origin, tuple):
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        if isinstance(key, int) and -len(args) <= key < len(args):
            return args[key]
        return _MISSING
    if issubclass(origin, Mapping):
        return args[1] if len(args) == 2 else _MISSING
    if issubclass(origin, Sequence):
        return args[0]
    return _MISSING


def check_type(owner: object, field_name: str, value: Any) -> None:
    """Validate a value against the owner's annotation for a field.

    Unannotated fields and ``Any``/``object`` annotations accept every value.
    Fields annotated with a Protocol that is not ``@runtime_checkable`` are
    not checked.

    Raises:
        FieldTypeError: If value does not match the annotation.
    """
    hint = _field_hints(type(owner)).get(field_name, _MISSING)
    _check_against(type(owner), field_name, hint, value)


def check_item_type(owner: object, field_name: str, key: Any, value: Any) -> None:
    """Validate a value stored under ``owner.field_name[key]``.

    The container annotation decides the element type: the item type of
    sequences, the value type of mappings, the positional type of tuples.
    Unparameterised containers accept every value.

    Raises:
        FieldTypeError: If value does not match the element annotation.
    """
    hint = _field_hints(type(owner)).get(field_name, _MISSING)
    if hint is _MISSING:
        return
    _check_against(type(owner), f"{field_name}[{key!r}]", _item_hint(hint, key), value)


# Traversal


def _step(obj: Any, segment: Segment, path: KeyPath) -> Any:
    if isinstance(segment, Attr):
        try:
            return getattr(obj, segment.name)
        except AttributeError as e:
            raise KeyPathError(path, segment, obj, "no such attribute") from e
    try:
        return obj[segment.key]
    except (KeyError, IndexError) as e:
        raise KeyPathError(path, segment, obj, "no such key or index") from e
    except TypeError as e:
        raise KeyPathError(path, segment, obj, "not subscriptable with this key") from e


def _require_attr(owner: Any, segment: Attr, path: KeyPath) -> None:
    # Declared-but-unset fields (annotations without a value yet) are writable too.
    if hasattr(owner, segment.name) or segment.name in _field_hints(type(owner)):
        return
    raise KeyPathError(path, segment, owner, "no such attribute")


def resolve(root: Any, locator: Locator) -> Any:
    """Read the value a key path points to.

    Raises:
        KeyPathError: If any step of the path does not exist.
    """
    path = KeyPath.of(locator)
    value = root
    for segment in path.segments:
        value = _step(value, segment, path)
    return value


def _write(owner: Any, segment: Segment, value: Any, path: KeyPath) -> None:
    if isinstance(segment, Attr):
        setattr(owner, segment.name, value)
        return
    try:
        owner[segment.key] = value
    except IndexError as e:
        raise KeyPathError(path, segment, owner, "index out of range") from e
    except TypeError as e:
        raise KeyPathError(path, segment, owner, "does not support item assignment") from e


def assign(root: Any, locator: Locator, value: Any, *, validate: bool = True) -> None:
    """Write a value at a key path on the live object graph.

    Objects on the path that declare value semantics are not written in place:
    the part of the path below the deepest other object is rebuilt with
    ``replace`` and stored back there, so aliases of those values never see
    the change.

    Args:
        root: Object the path starts from.
        locator: Path to the field.
        value: New field value.
        validate: Check value against the owning type's annotation first.

    Raises:
        KeyPathError: If the path does not exist or its last step is not writable.
        FieldTypeError: If validate is True and value does not match the annotation.
    """
    path = KeyPath.of(locator)
    segments = path.segments
    owners = [root]
    for segment in segments[:-1]:
        owners.append(_step(owners[-1], segment, path))

    anchor = 0
    for i in range(len(owners) - 1, 0, -1):
        if Semantics.of(owners[i]) is not Semantics.VALUE:
            anchor = i
            break

    if anchor < len(owners) - 1:
        head = segments[anchor]
        parent = (owners[anchor], head.name) if isinstance(head, Attr) else None
        rebuilt = _replaced(
            owners[anchor + 1], segments[anchor + 1 :], value, path, validate, parent
        )
        _write(owners[anchor], head, rebuilt, path)
        return

    owner, leaf = owners[-1], segments[-1]
    if isinstance(leaf, Attr):
        _require_attr(owner, leaf, path)
        if validate:
            check_type(owner, leaf.name, value)
    elif validate and len(segments) > 1 and isinstance(segments[-2], Attr):
        check_item_type(owners[-2], segments[-2].name, leaf.key, value)
    _write(owner, leaf, value, path)


def _with_attr(obj: Any, segment: Attr, value: Any, path: KeyPath) -> Any:
    _require_attr(obj, segment, path)
    name = segment.name

    if isinstance(obj, BaseModel):
        return obj.model_copy(update={name: value})
    if isinstance(obj, tuple) and hasattr(obj, "_replace"):
        return obj._replace(**{name: value})
    if dataclasses.is_dataclass(obj) and obj.__dataclass_params__.frozen:  # type: ignore[union-attr]
        init_fields = {f.name for f in dataclasses.fields(obj) if f.init}
        if name in init_fields:
            return dataclasses.replace(obj, **{name: value})  # type: ignore[type-var]
        clone = copy.copy(obj)
        object.__setattr__(clone, name, value)
        return clone

    clone = copy.copy(obj)
    setattr(clone, name, value)
    return clone


def _with_item(obj: Any, segment: Item, value: Any, path: KeyPath) -> Any:
    key = segment.key
    if isinstance(obj, tuple):
        if not isinstance(key, int):
            raise KeyPathError(path, segment, obj, "tuple indices must be integers")
        items = list(obj)
        try:
            items[key] = value
        except IndexError as e:
            raise KeyPathError(path, segment, obj, "index out of range") from e
        return type(obj)(*items) if hasattr(obj, "_replace") else type(obj)(items)

    if isinstance(obj, Mapping) and not hasattr(obj, "__setitem__"):
        raise KeyPathError(path, segment, obj, "read-only mapping")

    clone = copy.copy(obj)
    try:
        clone[key] = value
    except IndexError as e:
        raise KeyPathError(path, segment, obj, "index out of range") from e
    except TypeError as e:
        raise KeyPathError(path, segment, obj, "does not support item assignment") from e
    return clone


def _replaced(
    obj: Any,
    segments: tuple[Segment, ...],
    value: Any,
    path: KeyPath,
    validate: bool,
    parent: tuple[Any, str] | None = None,
) -> Any:
    # parent is (owner, field name) when obj was reached through an attribute
    head, rest = segments[0], segments[1:]
    if rest:
        child_parent = (obj, head.name) if isinstance(head, Attr) else None
        value = _replaced(_step(obj, head, path), rest, value, path, validate, child_parent)
    elif validate and isinstance(head, Attr):
        check_type(obj, head.name, value)
    elif validate and parent is not None:
        check_item_type(parent[0], parent[1], head.key, value)

    if isinstance(head, Attr):
        return _with_attr(obj, head, value, path)
    return _with_item(obj, head, value, path)


def replace[T](root: T, locator: Locator, value: Any, *, validate: bool = True) -> T:
    """Return a copy of root with the value at a key path replaced.

    Copy-on-write along the path: each object between root and the leaf is
    copied (frozen dataclasses via ``dataclasses.replace``, pydantic models via
    ``model_copy``, namedtuples via ``_replace``), everything else is shared.

    Args:
        root: Object the path starts from. Never mutated.
        locator: Path to the field.
        value: New field value.
        validate: Check value against the owning type's annotation first.

    Returns:
        New root with the field replaced.

    Raises:
        KeyPathError: If the path does not exist or its last step is not writable.
        FieldTypeError: If validate is True and value does not match the annotation.
    """
    path = KeyPath.of(locator)
    return _replaced(root, path.segments, value, path, validate)  # type: ignore[no-any-return]
