"""Numeric primitives consumed by the parser and evaluator.

Importing this package registers every built-in primitive.
"""

import scicalc.functions.arithmetic  # noqa: F401
import scicalc.functions.scientific  # noqa: F401
from scicalc.functions.registry import (
    binary_symbols,
    get_binary_fn,
    get_unary_fn,
    register_binary,
    register_unary,
    unary_names,
)

__all__ = [
    "binary_symbols",
    "get_binary_fn",
    "get_unary_fn",
    "register_binary",
    "register_unary",
    "unary_names",
]
