"""Core functionalities: stateless helpers, models, and the capability markers.

Architecture Note:
    core/ holds everything the helpers need: key path parsing and traversal
    (keypath/) and the capability declaration plus the operations behind it
    (capability/). The only process-wide state lives in config/.
"""

from configure.core.capability import (
    HELPER_NAMES,
    CapabilityMeta,
    Configurable,
    Semantics,
    SupportsConfigure,
    ValueConfigurable,
    configurable,
    configure,
    copy_value,
    do,
    let,
    mutate,
    replace_field,
    set_field,
    then,
    then_copy,
)
from configure.core.keypath import (
    K,
    Attr,
    FieldTypeError,
    Item,
    KeyPath,
    KeyPathBuilder,
    KeyPathError,
    Locator,
    assign,
    check_item_type,
    check_type,
    replace,
    resolve,
)
from configure.core.types import Copy

__all__ = [
    # Types
    "Copy",
    # Key paths
    "K",
    "KeyPath",
    "KeyPathBuilder",
    "Attr",
    "Item",
    "Locator",
    "KeyPathError",
    "FieldTypeError",
    "resolve",
    "assign",
    "replace",
    "check_type",
    "check_item_type",
    # Capability
    "Configurable",
    "ValueConfigurable",
    "configurable",
    "Semantics",
    "SupportsConfigure",
    "CapabilityMeta",
    "HELPER_NAMES",
    "configure",
    "copy_value",
    "set_field",
    "replace_field",
    "then",
    "then_copy",
    "mutate",
    "let",
    "do",
]
