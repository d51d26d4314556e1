"""
Shared Kernel primitives.

This package re-exports the domain primitives so that other modules can import them
from one place:

    from maytrix.shared_kernel.primitives import Symbol, SymbolError
"""

from .symbol import SYMBOL_PATTERN, Symbol, SymbolError

__all__ = [
    "SYMBOL_PATTERN",
    "Symbol",
    "SymbolError",
]
