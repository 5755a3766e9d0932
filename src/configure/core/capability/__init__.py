"""Configurable capability: models, mixins, decorator, and operations."""

from configure.core.capability.core import Configurable, ValueConfigurable, configurable
from configure.core.capability.models import (
    HELPER_NAMES,
    CapabilityMeta,
    Semantics,
    SupportsConfigure,
)
from configure.core.capability.operations import (
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

__all__ = [
    # Models
    "HELPER_NAMES",
    "CapabilityMeta",
    "Semantics",
    "SupportsConfigure",
    # Core
    "Configurable",
    "ValueConfigurable",
    "configurable",
    # Operations
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
