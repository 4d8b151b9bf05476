# typestamp/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Callable, Tuple

TypeIdentity = Any
FieldKey = str

# Slot names, in installation order
READ_SLOT = "get"
WRITE_SLOT = "set"
OPERATOR_SLOTS: Tuple[str, ...] = ("add", "sub", "mul", "div", "concat")
POLICY_SLOTS: Tuple[str, ...] = (READ_SLOT, WRITE_SLOT) + OPERATOR_SLOTS

# Installed handler types
ReadHandler = Callable[[Any, FieldKey], Any]
WriteHandler = Callable[[Any, FieldKey, Any], None]
BinaryHandler = Callable[[Any, Any], Any]

# User override types; the last argument is the shadowed handler or MISSING
ReadOverride = Callable[[Any, FieldKey, Any], Any]
WriteOverride = Callable[[Any, FieldKey, Any, Any], None]
BinaryOverride = Callable[[Any, Any, Any], Any]
