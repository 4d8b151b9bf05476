# typestamp/core/table.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import inspect
import types
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Dict, Iterator, Optional, Set

from typestamp.core.missing import MISSING
from typestamp.core.registry import TypeRegistry, resolve_registry
from typestamp.interfaces.types import TypeIdentity
from typestamp.runtime.binding import bind


def lookup_member(type_: TypeIdentity, key: Any) -> Any:
    """
    Look ``key`` up in a type's own member table.

    TypeTables search their parent chain, other mappings are read with
    ``.get``, and any other object (a class, a namespace, a module) is read
    with ``getattr``. Returns MISSING when the type has no such member.
    """
    if isinstance(type_, TypeTable):
        return type_.lookup(key)
    if isinstance(type_, Mapping):
        return type_.get(key, MISSING)
    if not isinstance(key, str):
        return MISSING
    return getattr(type_, key, MISSING)


def read_member(type_: TypeIdentity, key: Any, obj: Any) -> Any:
    """
    Member ``key`` of ``type_`` as seen through the instance ``obj``, or
    MISSING.

    Only functions registered with ``TypeTable.method`` and plain functions
    defined on a class come back bound to ``obj``. Every other member is
    returned as stored, so ``obj.m is T.m`` for constructors, callbacks
    and static methods.
    """
    if isinstance(type_, TypeTable):
        return type_.member_for(key, obj)
    if isinstance(type_, type) and isinstance(key, str):
        return _class_member(type_, key, obj)
    return lookup_member(type_, key)


def _class_member(cls: type, key: str, obj: Any) -> Any:
    try:
        member = inspect.getattr_static(cls, key)
    except AttributeError:
        return MISSING
    if isinstance(member, staticmethod):
        return member.__func__
    if isinstance(member, types.FunctionType):
        return bind(member, obj)
    return getattr(cls, key, MISSING)


class TypeTable(MutableMapping):
    """
    Member table for a user-defined type.

    A TypeTable is the type's identity: two tables are equal only when they
    are the same object, whatever their members. When a base is given the
    table registers the inheritance edge. Reads of missing members fall back
    to the table's current parent in its registry, so methods defined on a
    parent are visible through a child, and re-parenting with ``extends``
    changes where members are inherited from.

    Members registered with ``@table.method`` are bound to the instance when
    read through a record. Members stored any other way (item assignment,
    ``members=``, ``@table.static``) are returned as they are.

    Iteration and ``len()`` cover the table's own members only.

    Example:
        Point = TypeTable("Point")

        @Point.method
        def norm(self):
            return (self.x ** 2 + self.y ** 2) ** 0.5

        @Point.static
        def new(x, y):
            return stamp(Record(x=x, y=y), Point)
    """

    def __init__(
        self,
        name: str,
        members: Optional[Dict[str, Any]] = None,
        base: Optional[TypeIdentity] = None,
        registry: Optional[TypeRegistry] = None,
    ) -> None:
        """
        :param name: Name used in reprs and error messages.
        :param members: Initial members, none of them bound on read.
        :param base: Optional parent type.
        :param registry: Registry holding the inheritance edge. Defaults to
            the default registry at construction time.
        :raises ValueError: If name is empty.
        """
        if not name or not isinstance(name, str):
            raise ValueError("Type name must be a non-empty string")
        self._name = name
        self._members: Dict[Any, Any] = dict(members or {})
        self._methods: Set[Any] = set()
        self._registry = resolve_registry(registry)
        if base is not None:
            self._registry.extends(self, base)

    @property
    def name(self) -> str:
        return self._name

    @property
    def base(self) -> Optional[TypeIdentity]:
        """The table's current parent in its registry."""
        return self._registry.parent_of(self)

    def lookup(self, key: Any) -> Any:
        """Return the member for key, searching parent types, or MISSING."""
        if key in self._members:
            return self._members[key]
        parent = self.base
        if parent is None:
            return MISSING
        return lookup_member(parent, key)

    def member_for(self, key: Any, obj: Any) -> Any:
        """Like ``lookup``, with methods bound to ``obj``."""
        if key in self._members:
            member = self._members[key]
            return bind(member, obj) if key in self._methods else member
        parent = self.base
        if parent is None:
            return MISSING
        return read_member(parent, key, obj)

    def method(self, func: Optional[Callable] = None, *, name: Optional[str] = None):
        """
        Register a function as a method, under its own name or ``name``.
        Usable as ``@table.method`` or ``@table.method(name="...")``.
        """

        def register(f: Callable) -> Callable:
            key = name or f.__name__
            self._members[key] = f
            self._methods.add(key)
            return f

        if func is not None:
            return register(func)
        return register

    def static(self, func: Optional[Callable] = None, *, name: Optional[str] = None):
        """
        Register a function that is never bound to an instance, such as a
        constructor. Usable as ``@table.static`` or ``@table.static(name="...")``.
        """

        def register(f: Callable) -> Callable:
            self[name or f.__name__] = f
            return f

        if func is not None:
            return register(func)
        return register

    def __getitem__(self, key: Any) -> Any:
        member = self.lookup(key)
        if member is MISSING:
            raise KeyError(key)
        return member

    def __setitem__(self, key: Any, value: Any) -> None:
        self._members[key] = value
        self._methods.discard(key)

    def __delitem__(self, key: Any) -> None:
        del self._members[key]
        self._methods.discard(key)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, key: object) -> bool:
        return self.lookup(key) is not MISSING

    def __getattr__(self, name: str) -> Any:
        # Private and dunder names stay ordinary attributes; use item access for those members
        if name.startswith("_"):
            raise AttributeError(name)
        member = self.lookup(name)
        if member is MISSING:
            raise AttributeError(f"Type '{self._name}' has no member '{name}'")
        return member

    def __eq__(self, other: object) -> bool:
        return self is other

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"TypeTable({self._name!r})"
