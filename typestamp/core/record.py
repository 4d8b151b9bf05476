# typestamp/core/record.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Dict, Optional

from typestamp.core.errors import NotARecordError
from typestamp.core.missing import MISSING
from typestamp.interfaces.types import READ_SLOT, WRITE_SLOT, BinaryHandler, TypeIdentity

if TYPE_CHECKING:
    from typestamp.core.policy import CapabilityRecord

_RESERVED = frozenset(("__stamp__", "__capabilities__", "__dict__", "__weakref__", "__class__"))


class Record:
    """
    A mutable key/value record that can carry a type identity.

    Fields live in the record's raw store. Reading a field that is not stored
    raw, and writing a field that is not stored raw, goes through the
    capability record installed by ``stamp()``. The type identity and the
    capability record sit in slots outside the raw store, so they never show
    up as fields.

    Equality and hashing are by identity.

    Runtime Invariants:
    - A raw field always wins over dispatch on read.
    - Writes to a raw field never reach a write handler.
    - Dunder names are never dispatched.

    Error Handling:
    - Reading an unknown field raises AttributeError unless a handler
      resolves it.
    - Binary operators with no handler on either operand raise TypeError.
    """

    __slots__ = ("__dict__", "__weakref__", "__stamp__", "__capabilities__")

    def __init__(self, fields: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        """
        :param fields: Initial raw fields.
        :param kwargs: More initial raw fields.
        """
        object.__setattr__(self, "__stamp__", None)
        object.__setattr__(self, "__capabilities__", None)
        raw = self.__dict__
        if fields:
            raw.update(fields)
        raw.update(kwargs)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        capabilities = self.__capabilities__
        if capabilities is None:
            raise AttributeError(f"Record has no field '{name}'")
        return capabilities.handler(READ_SLOT)(self, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _RESERVED:
            raise AttributeError(f"'{name}' is reserved; use stamp() to change a record's type")
        raw = self.__dict__
        if name in raw or (name.startswith("__") and name.endswith("__")):
            raw[name] = value
            return
        capabilities = self.__capabilities__
        handler = MISSING if capabilities is None else capabilities.handler(WRITE_SLOT)
        if handler is MISSING:
            raw[name] = value
        else:
            handler(self, name, value)

    def __delattr__(self, name: str) -> None:
        raw = self.__dict__
        if name not in raw:
            raise AttributeError(f"Record has no field '{name}'")
        del raw[name]

    def __contains__(self, key: object) -> bool:
        return key in self.__dict__

    def __copy__(self) -> "Record":
        clone = Record(self.__dict__)
        return install(clone, self.__stamp__, self.__capabilities__)

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Record":
        # Fields are copied; the type identity and installed handlers are shared
        clone = Record()
        memo[id(self)] = clone
        clone.__dict__.update(copy.deepcopy(self.__dict__, memo))
        return install(clone, self.__stamp__, self.__capabilities__)

    def __repr__(self) -> str:
        body = ", ".join(f"{key}={value!r}" for key, value in self.__dict__.items())
        tag = self.__stamp__
        if tag is None:
            return f"Record({body})"
        name = getattr(tag, "name", None) if not isinstance(tag, dict) else None
        if not isinstance(name, str):
            name = getattr(tag, "__name__", None) or f"type@{id(tag):#x}"
        return f"<{name} Record({body})>"

    def __add__(self, other: Any) -> Any:
        return _binary("add", self, other)

    def __radd__(self, other: Any) -> Any:
        return _binary("add", other, self)

    def __sub__(self, other: Any) -> Any:
        return _binary("sub", self, other)

    def __rsub__(self, other: Any) -> Any:
        return _binary("sub", other, self)

    def __mul__(self, other: Any) -> Any:
        return _binary("mul", self, other)

    def __rmul__(self, other: Any) -> Any:
        return _binary("mul", other, self)

    def __truediv__(self, other: Any) -> Any:
        return _binary("div", self, other)

    def __rtruediv__(self, other: Any) -> Any:
        return _binary("div", other, self)

    def __matmul__(self, other: Any) -> Any:
        return _binary("concat", self, other)

    def __rmatmul__(self, other: Any) -> Any:
        return _binary("concat", other, self)


def _operator_handler(value: Any, slot: str) -> BinaryHandler:
    if not isinstance(value, Record):
        return MISSING
    capabilities = value.__capabilities__
    if capabilities is None:
        return MISSING
    return capabilities.handler(slot)


def _binary(slot: str, lhs: Any, rhs: Any) -> Any:
    """Run the left operand's handler for slot, else the right operand's."""
    handler = _operator_handler(lhs, slot)
    if handler is MISSING:
        handler = _operator_handler(rhs, slot)
    if handler is MISSING:
        return NotImplemented
    return handler(lhs, rhs)


def concat(lhs: Any, rhs: Any) -> Any:
    """
    Concatenate two values through their concat handlers. Equivalent to
    ``lhs @ rhs`` when either operand is a Record.

    :raises TypeError: If neither operand has a concat handler.
    """
    result = _binary("concat", lhs, rhs)
    if result is NotImplemented:
        raise TypeError(
            f"unsupported operand types for concat: '{type(lhs).__name__}' and '{type(rhs).__name__}'"
        )
    return result


def _raw(record: Any) -> Dict[Any, Any]:
    if not isinstance(record, Record):
        raise NotARecordError(f"Expected a Record, got {type(record).__name__}")
    return object.__getattribute__(record, "__dict__")


def rawget(record: Record, key: Any, default: Any = MISSING) -> Any:
    """
    Read a raw field, bypassing every handler.

    :raises KeyError: If the field is absent and no default is given.
    """
    raw = _raw(record)
    if key in raw:
        return raw[key]
    if default is MISSING:
        raise KeyError(key)
    return default


def rawset(record: Record, key: Any, value: Any) -> Record:
    """Write a raw field, bypassing every handler. Returns the record."""
    _raw(record)[key] = value
    return record


def rawhas(record: Record, key: Any) -> bool:
    """Check raw presence of a field without consulting any handler."""
    return key in _raw(record)


def rawdel(record: Record, key: Any) -> None:
    """
    Remove a raw field.

    :raises KeyError: If the field is absent.
    """
    del _raw(record)[key]


def fields(record: Record) -> Dict[Any, Any]:
    """Return a copy of the record's raw fields."""
    return dict(_raw(record))


def get_stamp(value: Any) -> Optional[TypeIdentity]:
    """The type identity of a Record, or None for untagged records and other values."""
    if not isinstance(value, Record):
        return None
    return value.__stamp__


def get_capabilities(value: Any) -> Optional["CapabilityRecord"]:
    """The installed capability record of a Record, or None."""
    if not isinstance(value, Record):
        return None
    return value.__capabilities__


def install(record: Record, type_: TypeIdentity, capabilities: "CapabilityRecord") -> Record:
    """Write the type slot and capability slot of a record."""
    object.__setattr__(record, "__stamp__", type_)
    object.__setattr__(record, "__capabilities__", capabilities)
    return record
