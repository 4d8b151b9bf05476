# typestamp/core/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Set, Tuple

from typestamp.core.errors import InheritanceCycleError
from typestamp.interfaces.types import TypeIdentity
from typestamp.runtime.concurrency import get_lock, with_lock

logger = logging.getLogger(__name__)


class TypeRegistry:
    """
    Records single-parent inheritance edges between type identities and walks
    the resulting ancestry chains.

    Types are compared by identity only. A type may be unhashable (a plain
    dict used as a method table), so edges are keyed by ``id()`` and the
    registry holds a strong reference to every child it has seen, which keeps
    those ids from being reused.
    """

    def __init__(self, detect_cycles: bool = True, max_depth: Optional[int] = None) -> None:
        """
        :param detect_cycles: Refuse edges that would close a cycle and fail
            ancestry walks that revisit a type.
        :param max_depth: Optional bound on the number of ancestors a walk may
            yield before it is treated as runaway.
        :raises ValueError: If max_depth is not a positive integer.
        """
        if max_depth is not None and (isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1):
            raise ValueError("max_depth must be a positive integer or None")
        self._detect_cycles = bool(detect_cycles)
        self._max_depth = max_depth
        self._parent_map: Dict[int, Tuple[TypeIdentity, Optional[TypeIdentity]]] = {}
        self._lock = get_lock()

    @property
    def detect_cycles(self) -> bool:
        return self._detect_cycles

    @property
    def max_depth(self) -> Optional[int]:
        return self._max_depth

    def extends(self, child: TypeIdentity, parent: Optional[TypeIdentity]) -> None:
        """
        Record that ``child``'s direct parent is ``parent``, replacing any
        earlier parent. A parent of None ends the chain at ``child``.

        :raises InheritanceCycleError: If cycle detection is on and the edge
            would make ``child`` its own ancestor.
        """
        with with_lock(self._lock):
            if self._detect_cycles and parent is not None and self._would_create_cycle(child, parent):
                logger.error(f"Refusing inheritance edge {child!r} -> {parent!r}: it would create a cycle")
                raise InheritanceCycleError(f"Making {child!r} extend {parent!r} would create a cycle")

            previous = self._parent_map.get(id(child))
            if previous is not None and previous[1] is not parent:
                logger.debug(f"Re-parenting {child!r} from {previous[1]!r} to {parent!r}")
            else:
                logger.debug(f"Registered {child!r} extends {parent!r}")
            self._parent_map[id(child)] = (child, parent)

    def _would_create_cycle(self, child: TypeIdentity, new_parent: TypeIdentity) -> bool:
        """Check if giving child new_parent would put child among its own ancestors."""
        current = new_parent
        while current is not None:
            if current is child:
                return True
            current = self._parent_of_unlocked(current)
        return False

    def _parent_of_unlocked(self, type_: TypeIdentity) -> Optional[TypeIdentity]:
        entry = self._parent_map.get(id(type_))
        if entry is None or entry[0] is not type_:
            return None
        return entry[1]

    def parent_of(self, type_: TypeIdentity) -> Optional[TypeIdentity]:
        """Get the direct parent of a type, or None when none is registered."""
        with with_lock(self._lock):
            return self._parent_of_unlocked(type_)

    def ancestors_of(self, type_: TypeIdentity) -> Iterator[TypeIdentity]:
        """
        Lazily yield the ancestors of ``type_``, from its direct parent up to
        the root. Each link is read under the registry lock.

        Without cycle detection or a depth bound a cyclic registry makes this
        walk endless.

        :raises InheritanceCycleError: If a type repeats (with detection on)
            or the walk passes ``max_depth``.
        """
        seen: Set[int] = {id(type_)}
        depth = 0
        current = type_
        while True:
            parent = self.parent_of(current)
            if parent is None:
                return
            depth += 1
            if self._max_depth is not None and depth > self._max_depth:
                raise InheritanceCycleError(f"Ancestry of {type_!r} exceeds max_depth={self._max_depth}")
            if self._detect_cycles:
                if id(parent) in seen:
                    raise InheritanceCycleError(f"Cycle detected in the ancestry of {type_!r} at {parent!r}")
                seen.add(id(parent))
            yield parent
            current = parent

    def is_subtype(self, type_: TypeIdentity, target: TypeIdentity) -> bool:
        """True if ``type_`` is ``target`` or has ``target`` among its ancestors."""
        if type_ is target:
            return True
        for ancestor in self.ancestors_of(type_):
            if ancestor is target:
                return True
        return False

    def clear(self) -> None:
        """Forget every registered edge."""
        with with_lock(self._lock):
            self._parent_map.clear()
        logger.debug("Type registry cleared")

    def __contains__(self, type_: object) -> bool:
        return self.parent_of(type_) is not None

    def __len__(self) -> int:
        with with_lock(self._lock):
            return sum(1 for _, parent in self._parent_map.values() if parent is not None)

    def __repr__(self) -> str:
        return f"TypeRegistry(edges={len(self)}, detect_cycles={self._detect_cycles}, max_depth={self._max_depth})"


_default_registry = TypeRegistry()


def get_default_registry() -> TypeRegistry:
    """Return the process-wide registry used when no registry is passed."""
    return _default_registry


def set_default_registry(registry: TypeRegistry) -> TypeRegistry:
    """
    Replace the process-wide registry and return the previous one.

    :raises TypeError: If registry is not a TypeRegistry.
    """
    global _default_registry
    if not isinstance(registry, TypeRegistry):
        raise TypeError(f"Expected a TypeRegistry, got {type(registry).__name__}")
    previous = _default_registry
    _default_registry = registry
    return previous


def resolve_registry(registry: Optional[TypeRegistry] = None) -> TypeRegistry:
    """Return ``registry``, or the default registry when it is None."""
    return _default_registry if registry is None else registry
