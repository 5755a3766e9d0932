"""Key paths: models, parsing, and read/write operations."""

from configure.core.keypath.models import (
    K,
    Attr,
    Item,
    KeyPath,
    KeyPathBuilder,
    Locator,
    Segment,
)
from configure.core.keypath.operations import (
    FieldTypeError,
    KeyPathError,
    assign,
    check_item_type,
    check_type,
    replace,
    resolve,
)

__all__ = [
    # Models
    "K",
    "Attr",
    "Item",
    "KeyPath",
    "KeyPathBuilder",
    "Locator",
    "Segment",
    # Errors
    "KeyPathError",
    "FieldTypeError",
    # Operations
    "resolve",
    "assign",
    "replace",
    "check_type",
    "check_item_type",
]
