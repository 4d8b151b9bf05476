"""typestamp: runtime type tagging and layered dispatch for plain records

This package lets a plain record be stamped with a type identity, checks
single-parent inheritance between such identities, and lets callers override
field reads, field writes and five binary operators per record, with each
override able to call the one it replaced.

Responsibilities:
    - Type registry holding child -> parent edges
    - Instance tagging and layered capability records
    - Dispatch chaining through explicit base handlers
    - Type predicate walking the ancestry chain
    - Partial application for bound callbacks

Interactions:
    - Client code through the public API below
    - Logging system for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - The type registry is guarded by a re-entrant lock
        - Records are single-owner; stamping one is not synchronized

    Error Handling:
        - Structured error hierarchy rooted at TypeStampError
        - Errors raised by user overrides propagate untouched

    Logging:
        - Module loggers under the "typestamp" namespace
        - No handlers installed by the library
"""

from typestamp.core import (
    MISSING,
    CapabilityRecord,
    DispatchPolicy,
    InheritanceCycleError,
    MissingHandlerError,
    NotARecordError,
    PolicyError,
    Record,
    TypeRegistry,
    TypeStampError,
    TypeTable,
    ancestors_of,
    concat,
    extends,
    fields,
    get_default_registry,
    is_instance,
    rawdel,
    rawget,
    rawhas,
    rawset,
    set_default_registry,
    snapshot_policy,
    stamp,
    type_of,
)
from typestamp.runtime import Bound, bind

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "Bound",
    "CapabilityRecord",
    "DispatchPolicy",
    "InheritanceCycleError",
    "MissingHandlerError",
    "NotARecordError",
    "PolicyError",
    "Record",
    "TypeRegistry",
    "TypeStampError",
    "TypeTable",
    "ancestors_of",
    "bind",
    "concat",
    "extends",
    "fields",
    "get_default_registry",
    "is_instance",
    "rawdel",
    "rawget",
    "rawhas",
    "rawset",
    "set_default_registry",
    "snapshot_policy",
    "stamp",
    "type_of",
]
