"""
Core package providing type stamping and dispatch.

Architecture:
- Records carry a type identity and a layered capability record
- The registry holds single-parent inheritance edges
- Policies install read, write and operator overrides on records

Cross-cutting:
- Identity-only type comparison
- Explicit absence marker for missing base handlers
- Registry access guarded by a re-entrant lock
"""

# Import order matters to avoid circular dependencies
from .errors import (
    InheritanceCycleError,
    MissingHandlerError,
    NotARecordError,
    PolicyError,
    TypeStampError,
)
from .missing import MISSING
from .registry import TypeRegistry, get_default_registry, set_default_registry
from .table import TypeTable, lookup_member, read_member
from .record import Record, concat, fields, rawdel, rawget, rawhas, rawset
from .policy import CapabilityRecord, DispatchPolicy
from .tagging import ancestors_of, extends, is_instance, snapshot_policy, stamp, type_of

__all__ = [
    # Errors
    "TypeStampError",
    "NotARecordError",
    "InheritanceCycleError",
    "PolicyError",
    "MissingHandlerError",
    # Registry
    "TypeRegistry",
    "get_default_registry",
    "set_default_registry",
    # Types and records
    "MISSING",
    "TypeTable",
    "lookup_member",
    "read_member",
    "Record",
    "concat",
    "fields",
    "rawdel",
    "rawget",
    "rawhas",
    "rawset",
    # Dispatch
    "CapabilityRecord",
    "DispatchPolicy",
    "ancestors_of",
    "extends",
    "is_instance",
    "snapshot_policy",
    "stamp",
    "type_of",
]
