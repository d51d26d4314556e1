from .symbol_catalog import (
    SymbolCatalog,
    load_symbol_catalog,
    load_symbol_catalog_from_yaml,
)

__all__ = [
    "SymbolCatalog",
    "load_symbol_catalog",
    "load_symbol_catalog_from_yaml",
]
