# typestamp/core/policy.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Dispatch policies and the capability records built from them.

A DispatchPolicy is what a caller hands to ``stamp()``: up to seven override
callables. A CapabilityRecord is what ends up installed on the record: one
handler per slot, each closing over the handler it shadows. Stamping the
same record again builds a new CapabilityRecord whose ``base`` is the old
one, so overrides can cooperate instead of silently replacing each other.

Override signatures (the last argument is the shadowed handler or MISSING):
    get(obj, key, base_get)
    set(obj, key, value, base_set)
    add/sub/mul/div/concat(lhs, rhs, base_op)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Union

from typestamp.core.errors import PolicyError
from typestamp.core.missing import MISSING
from typestamp.core.record import rawhas, rawset
from typestamp.core.table import read_member
from typestamp.interfaces.types import (
    OPERATOR_SLOTS,
    POLICY_SLOTS,
    READ_SLOT,
    WRITE_SLOT,
    BinaryHandler,
    BinaryOverride,
    ReadHandler,
    ReadOverride,
    TypeIdentity,
    WriteHandler,
    WriteOverride,
)
from typestamp.runtime.binding import bind


@dataclass(frozen=True)
class DispatchPolicy:
    """
    Optional overrides for one stamping layer. Every field left as None
    keeps whatever an earlier layer installed for that slot.
    """

    get: Optional[ReadOverride] = None
    set: Optional[WriteOverride] = None
    add: Optional[BinaryOverride] = None
    sub: Optional[BinaryOverride] = None
    mul: Optional[BinaryOverride] = None
    div: Optional[BinaryOverride] = None
    concat: Optional[BinaryOverride] = None

    def __post_init__(self) -> None:
        for f in fields(self):
            handler = getattr(self, f.name)
            if handler is not None and not callable(handler):
                raise PolicyError(f"Policy slot '{f.name}' must be callable, got {type(handler).__name__}")

    @classmethod
    def coerce(cls, policy: Union["DispatchPolicy", Mapping, None]) -> Optional["DispatchPolicy"]:
        """
        Accept a DispatchPolicy, a mapping of slot names to callables, or None.

        :raises PolicyError: On unknown slot names, non-callable entries, or
            any other kind of value.
        """
        if policy is None or isinstance(policy, cls):
            return policy
        if isinstance(policy, Mapping):
            unknown = [key for key in policy if key not in POLICY_SLOTS]
            if unknown:
                raise PolicyError(f"Unknown policy slots: {', '.join(map(repr, unknown))}")
            return cls(**policy)
        raise PolicyError(f"A policy must be a DispatchPolicy or a mapping, got {type(policy).__name__}")

    def operators(self) -> Iterator[Tuple[str, BinaryOverride]]:
        """Yield (slot, override) for each operator override present."""
        for slot in OPERATOR_SLOTS:
            override = getattr(self, slot)
            if override is not None:
                yield slot, override


def _read_member(type_: TypeIdentity, obj: Any, key: str) -> Any:
    member = read_member(type_, key, obj)
    if member is MISSING:
        raise AttributeError(f"{obj!r} has no field or member '{key}'")
    return member


def _read_with_override(
    type_: TypeIdentity, override: ReadOverride, base_read: ReadHandler, obj: Any, key: str
) -> Any:
    member = read_member(type_, key, obj)
    if member is not MISSING:
        return member
    return override(obj, key, base_read)


def _write_with_override(override: WriteOverride, base_write: WriteHandler, obj: Any, key: str, value: Any) -> None:
    # Fields that already exist raw are written plainly; only new keys reach the override.
    # The read handler is never consulted: a key it resolves still reaches the override
    if rawhas(obj, key):
        rawset(obj, key, value)
        return
    override(obj, key, value, base_write)


def _apply_operator(override: BinaryOverride, base_op: BinaryHandler, lhs: Any, rhs: Any) -> Any:
    return override(lhs, rhs, base_op)


class CapabilityRecord:
    """
    The handlers one stamping layer installed on a record.

    Each record copies forward every handler of its base, then replaces the
    slots its policy names. The read slot is always replaced, because member
    lookup must follow the record's current type.

    Class Invariants:
    1. Type members are looked up before any custom getter.
    2. An override always receives the handler it shadows, or MISSING.
    3. Slots a policy does not name keep the base layer's handler.
    """

    __slots__ = ("type", "base", "_handlers")

    def __init__(self, type_: TypeIdentity, base: Optional["CapabilityRecord"] = None) -> None:
        self.type = type_
        self.base = base
        self._handlers: Dict[str, Callable] = dict(base._handlers) if base is not None else {}

    @classmethod
    def layer(
        cls,
        type_: TypeIdentity,
        policy: Optional[DispatchPolicy] = None,
        base: Optional["CapabilityRecord"] = None,
    ) -> "CapabilityRecord":
        """
        Build the capability record for stamping ``type_`` with ``policy`` on
        top of ``base``.
        """
        record = cls(type_, base)
        if policy is not None and policy.get is not None:
            record._handlers[READ_SLOT] = bind(_read_with_override, type_, policy.get, record.shadowed(READ_SLOT))
        else:
            record._handlers[READ_SLOT] = bind(_read_member, type_)

        if policy is None:
            return record

        if policy.set is not None:
            record._handlers[WRITE_SLOT] = bind(_write_with_override, policy.set, record.shadowed(WRITE_SLOT))
        for slot, override in policy.operators():
            record._handlers[slot] = bind(_apply_operator, override, record.shadowed(slot))
        return record

    def shadowed(self, slot: str) -> Callable:
        """The base layer's handler for slot, or MISSING."""
        if self.base is None:
            return MISSING
        return self.base.handler(slot)

    def handler(self, slot: str) -> Callable:
        """The installed handler for slot, or MISSING."""
        return self._handlers.get(slot, MISSING)

    def has(self, slot: str) -> bool:
        return slot in self._handlers

    def snapshot(self) -> Dict[str, Callable]:
        """Shallow copy of the installed handlers keyed by slot name."""
        return dict(self._handlers)

    def depth(self) -> int:
        """Number of layers, this one included."""
        count = 0
        layer: Optional[CapabilityRecord] = self
        while layer is not None:
            count += 1
            layer = layer.base
        return count

    def __repr__(self) -> str:
        slots = ", ".join(slot for slot in POLICY_SLOTS if slot in self._handlers)
        return f"CapabilityRecord(type={self.type!r}, slots=[{slots}], depth={self.depth()})"
