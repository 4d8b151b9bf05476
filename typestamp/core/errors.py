# typestamp/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class TypeStampError(Exception):
    """
    Base exception class for errors within the type stamping library.
    """


class NotARecordError(TypeStampError, TypeError):
    """
    Raised when an operation that needs a Record's raw storage or type slot is
    given some other value.
    """


class InheritanceCycleError(TypeStampError, ValueError):
    """
    Raised when an inheritance edge would close a cycle, or when an ancestry
    walk revisits a type or exceeds the configured depth bound.
    """


class PolicyError(TypeStampError, ValueError):
    """
    Raised when a dispatch policy names an unknown slot or supplies a
    non-callable handler.
    """


class MissingHandlerError(TypeStampError):
    """
    Raised when an override invokes the base handler of a slot that no
    earlier stamping layer filled.
    """
