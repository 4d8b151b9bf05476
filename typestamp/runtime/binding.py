# typestamp/runtime/binding.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, Callable, Dict, Tuple


class Bound:
    """
    A callable holding a function and a prefix of its arguments. Calling it
    appends the later arguments to the captured ones, keeping every position,
    ``None`` values included.
    """

    __slots__ = ("func", "args", "keywords")

    def __init__(self, func: Callable[..., Any], args: Tuple[Any, ...], keywords: Dict[str, Any]) -> None:
        self.func = func
        self.args = args
        self.keywords = keywords

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if self.keywords:
            kwargs = {**self.keywords, **kwargs}
        return self.func(*self.args, *args, **kwargs)

    def __repr__(self) -> str:
        parts = [repr(self.func)]
        parts.extend(repr(a) for a in self.args)
        parts.extend(f"{k}={v!r}" for k, v in self.keywords.items())
        return f"bind({', '.join(parts)})"


def bind(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Bound:
    """
    Partially apply ``func``.

    ``bind(f, 1, 2)(3, 4)`` calls ``f(1, 2, 3, 4)``. Binding a Bound again
    flattens into a single Bound over the original function.

    :param func: The callable to bind.
    :param args: Leading positional arguments to capture.
    :param kwargs: Keyword arguments to capture; later keywords win.
    :raises TypeError: If func is not callable.
    """
    if not callable(func):
        raise TypeError(f"bind() expects a callable, got {type(func).__name__}")
    if isinstance(func, Bound):
        return Bound(func.func, func.args + args, {**func.keywords, **kwargs})
    return Bound(func, args, kwargs)
