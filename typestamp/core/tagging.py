# typestamp/core/tagging.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, Optional, Union

from typestamp.core.errors import NotARecordError
from typestamp.core.policy import CapabilityRecord, DispatchPolicy
from typestamp.core.record import Record, get_capabilities, get_stamp, install
from typestamp.core.registry import TypeRegistry, resolve_registry
from typestamp.interfaces.types import TypeIdentity

logger = logging.getLogger(__name__)


def type_of(obj: Any) -> Optional[TypeIdentity]:
    """Return the type identity stamped on obj, or None."""
    return get_stamp(obj)


def stamp(
    obj: Record,
    type_: TypeIdentity,
    policy: Union[DispatchPolicy, Mapping, None] = None,
) -> Record:
    """
    Give a record a type identity and layer dispatch behavior on top of
    whatever an earlier ``stamp()`` installed.

    Reading a field that is not stored raw returns the type's member of that
    name; failing that, the policy's ``get`` override is asked. Handlers for
    slots the policy does not name stay as they were.

    Example:
        Base = TypeTable("Base")
        Base["new"] = lambda n: stamp(Record(n=n), Base, {"add": add_bases})

    :param obj: The record to stamp.
    :param type_: The type identity; compared by identity only.
    :param policy: Overrides as a DispatchPolicy or a mapping of slot names.
    :return: obj, for chaining.
    :raises NotARecordError: If obj is not a Record.
    :raises ValueError: If type_ is None.
    :raises PolicyError: If the policy is malformed.
    """
    if not isinstance(obj, Record):
        raise NotARecordError(f"Only Record instances can be stamped, got {type(obj).__name__}")
    if type_ is None:
        raise ValueError("A type identity is required to stamp a record")

    policy = DispatchPolicy.coerce(policy)
    base = get_capabilities(obj)
    capabilities = CapabilityRecord.layer(type_, policy, base)
    install(obj, type_, capabilities)

    if base is None:
        logger.debug(f"Stamped record {id(obj):#x} as {type_!r}")
    else:
        logger.debug(f"Re-stamped record {id(obj):#x} as {type_!r} over {base.type!r} (depth {capabilities.depth()})")
    return obj


def extends(child: TypeIdentity, parent: Optional[TypeIdentity], registry: Optional[TypeRegistry] = None) -> None:
    """Record that child's direct parent is parent."""
    resolve_registry(registry).extends(child, parent)


def ancestors_of(type_: TypeIdentity, registry: Optional[TypeRegistry] = None) -> Iterator[TypeIdentity]:
    """Lazily yield the ancestors of type_, nearest first."""
    return resolve_registry(registry).ancestors_of(type_)


def is_instance(obj: Any, type_: TypeIdentity, registry: Optional[TypeRegistry] = None) -> bool:
    """
    Check if obj was stamped with type_ or with a descendant of type_.

    Values that are not records, and records never stamped, are instances of
    nothing; this returns False for them instead of raising.
    """
    if not isinstance(obj, Record):
        return False
    tag = get_stamp(obj)
    if tag is None:
        return False
    return resolve_registry(registry).is_subtype(tag, type_)


def snapshot_policy(obj: Any) -> Dict[str, Callable]:
    """
    Return a copy of the handlers installed on obj keyed by slot name, or an
    empty dict when nothing is installed. Changing the copy changes nothing
    on obj.
    """
    capabilities = get_capabilities(obj)
    if capabilities is None:
        return {}
    return capabilities.snapshot()
