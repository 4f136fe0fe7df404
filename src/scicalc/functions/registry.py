"""Central registry for the unary and binary calculator primitives."""

from __future__ import annotations

from typing import Any, Callable


_UNARY_FUNCTIONS: dict[str, Callable[..., Any]] = {}
_BINARY_FUNCTIONS: dict[str, Callable[..., Any]] = {}


def register_unary(name: str) -> Callable:
    """Decorator that registers a unary function by keyword.

    Args:
        name: The lookup name for this function, e.g. ``"sin"``.

    Returns:
        The original function, unmodified.
    """

    def decorator(fn: Callable) -> Callable:
        _UNARY_FUNCTIONS[name] = fn
        return fn

    return decorator


def register_binary(symbol: str) -> Callable:
    """Decorator that registers a binary operation by operator symbol.

    Args:
        symbol: The operator character, e.g. ``"*"``.

    Returns:
        The original function, unmodified.
    """

    def decorator(fn: Callable) -> Callable:
        _BINARY_FUNCTIONS[symbol] = fn
        return fn

    return decorator


def get_unary_fn(name: str) -> Callable[[float], float]:
    """Look up a registered unary function.

    Raises:
        KeyError: If no function is registered under *name*.
    """
    if name not in _UNARY_FUNCTIONS:
        raise KeyError(f"Unknown unary function: {name!r}")
    return _UNARY_FUNCTIONS[name]


def get_binary_fn(symbol: str) -> Callable[[float, float], float]:
    """Look up a registered binary operation.

    Raises:
        KeyError: If no operation is registered under *symbol*.
    """
    if symbol not in _BINARY_FUNCTIONS:
        raise KeyError(f"Unknown binary operator: {symbol!r}")
    return _BINARY_FUNCTIONS[symbol]


def unary_names() -> list[str]:
    return sorted(_UNARY_FUNCTIONS)


def binary_symbols() -> list[str]:
    return sorted(_BINARY_FUNCTIONS)
