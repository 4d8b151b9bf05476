# typestamp/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Union

LockType = Union["threading.Lock", "threading.RLock"]


class _LockFactory:
    """
    Internal factory producing the locks that guard shared registry state.
    Re-entrant locks are the default so that a registry method may call
    another registry method while holding the lock.
    """

    def __init__(self, reentrant: bool = True) -> None:
        self._reentrant = reentrant

    def create_lock(self) -> LockType:
        """
        Return a new lock instance.
        """
        return threading.RLock() if self._reentrant else threading.Lock()


def get_lock(reentrant: bool = True) -> LockType:
    """
    Provide a new lock instance to be used for registry synchronization.
    """
    return _LockFactory(reentrant).create_lock()


@contextmanager
def with_lock(lock: LockType) -> Iterator[None]:
    """
    Acquire the given lock upon entry and release it upon exit, even when
    the guarded block raises.
    """
    lock.acquire()
    try:
        yield
    finally:
        lock.release()
