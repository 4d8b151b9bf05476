# typestamp/runtime/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typestamp.runtime.binding import Bound, bind
from typestamp.runtime.concurrency import get_lock, with_lock

__all__ = ["Bound", "bind", "get_lock", "with_lock"]
