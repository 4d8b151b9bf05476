# typestamp/core/missing.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, NoReturn

from typestamp.core.errors import MissingHandlerError


class _Missing:
    """
    Marker for "no handler" and "no value". It is falsy, it is only ever
    compared by identity, and calling it raises MissingHandlerError, so an
    override that calls its base handler without checking fails where the
    mistake is made.
    """

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self) -> str:
        return "MISSING"

    def __call__(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise MissingHandlerError("No base handler is installed for this slot")


MISSING = _Missing()
