"""
Runtime loader for the catalog of known symbols.

Related: maytrix.shared_kernel.primitives.symbol,
  apps.cli.commands.check_symbols
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping

import yaml

from maytrix.shared_kernel.primitives import Symbol, SymbolError

log = logging.getLogger(__name__)

_ENV_NAME_KEY = "MAYTRIX_ENV"
_CONFIG_PATH_KEY = "MAYTRIX_SYMBOLS_CONFIG"
_ALLOWED_ENVS = ("dev", "prod", "test")
_SUPPORTED_SCHEMA_VERSION = 1

_STRING_ONLY_TAGS = ("tag:yaml.org,2002:bool", "tag:yaml.org,2002:null")


class _CatalogYamlLoader(yaml.SafeLoader):
    """
    SafeLoader without YAML 1.1 bool/null implicit resolvers.

    Bare `on`, `no`, `true`, `null` are valid identifiers and must stay strings.
    """


_CatalogYamlLoader.yaml_implicit_resolvers = {
    first_char: [
        (tag, regexp) for tag, regexp in resolvers if tag not in _STRING_ONLY_TAGS
    ]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True, slots=True)
class SymbolCatalog:
    """
    Immutable ordered set of known symbols with hash lookup by `Symbol` or plain `str`.

    Related: maytrix.shared_kernel.primitives.symbol,
      apps.cli.commands.check_symbols
    """

    symbols: tuple[Symbol, ...] = ()
    _index: frozenset[Symbol] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """
        Validate catalog items and build lookup index.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Catalog order is the order of `symbols`.
        Raises:
            ValueError: If an item is not a `Symbol` or appears more than once.
        Side Effects:
            Normalizes `symbols` to tuple and fills internal `_index` slot.
        """
        symbols = tuple(self.symbols)
        for item in symbols:
            if not isinstance(item, Symbol):
                raise ValueError(
                    f"SymbolCatalog items must be Symbol, got {type(item).__name__}"
                )
        index = frozenset(symbols)
        if len(index) != len(symbols):
            raise ValueError("SymbolCatalog items must be unique")

        object.__setattr__(self, "symbols", symbols)
        object.__setattr__(self, "_index", index)

    def contains(self, value: Symbol | str) -> bool:
        return value in self._index

    def sorted_symbols(self) -> tuple[Symbol, ...]:
        return tuple(sorted(self.symbols))

    def __contains__(self, value: object) -> bool:
        return value in self._index

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)


def load_symbol_catalog(*, environ: Mapping[str, str]) -> SymbolCatalog:
    """
    Load symbol catalog from YAML resolved via environment.

    Args:
        environ: Environment mapping used to resolve env name and override path.
    Returns:
        SymbolCatalog: Validated catalog.
    Assumptions:
        `MAYTRIX_SYMBOLS_CONFIG` has priority over `configs/<env>/symbols.yaml`.
    Raises:
        FileNotFoundError: If catalog YAML path does not exist.
        ValueError: If env value or YAML content is invalid.
    Side Effects:
        Reads one YAML file from disk.
    """
    return load_symbol_catalog_from_yaml(_resolve_catalog_path(environ=environ))


def load_symbol_catalog_from_yaml(path: str | Path) -> SymbolCatalog:
    """
    Load symbol catalog from explicit YAML path.

    Contract:
    - top-level mapping with `schema_version: 1` and `symbols: [..]`
    - every symbol is parsed as-is (no strip / lower) via `Symbol.from_string`
    - duplicates: last-win with warning, position of the last occurrence is kept
    - empty document -> empty catalog
    - bare `on`, `no`, `true`, `null` etc. are read as strings, not YAML 1.1 bool/null
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"symbol catalog not found: {p}")

    raw = yaml.load(p.read_text(encoding="utf-8"), Loader=_CatalogYamlLoader)
    raw_symbols = _extract_symbols_section(raw)

    acc: "OrderedDict[Symbol, None]" = OrderedDict()
    for idx, raw_symbol in enumerate(raw_symbols):
        if not isinstance(raw_symbol, str):
            raise ValueError(
                f"symbols[{idx}] must be a string, got {type(raw_symbol).__name__}"
            )
        try:
            symbol = Symbol.from_string(raw_symbol)
        except SymbolError as e:
            raise ValueError(f"invalid symbol at symbols[{idx}]: {e}") from e

        if symbol in acc:
            log.warning("duplicate symbol %s at symbols[%s]: last-win applied", symbol, idx)
            del acc[symbol]
        acc[symbol] = None

    catalog = SymbolCatalog(symbols=tuple(acc))
    log.info("loaded symbol catalog from %s: %s symbols", p, len(catalog))
    return catalog


def _extract_symbols_section(raw: Any) -> list[Any]:
    """
    Validate top-level catalog document and return raw `symbols` list.

    Args:
        raw: Parsed YAML document.
    Returns:
        list[Any]: Raw `symbols` items, or empty list.
    Assumptions:
        Unknown top-level keys are ignored by this loader.
    Raises:
        ValueError: If document structure or schema version is invalid.
    Side Effects:
        None.
    """
    if raw is None:
        return []
    if not isinstance(raw, dict):
        raise ValueError("symbol catalog must be a mapping at top-level")

    schema_version = raw.get("schema_version")
    if isinstance(schema_version, bool) or schema_version != _SUPPORTED_SCHEMA_VERSION:
        raise ValueError(
            f"symbol catalog schema_version must be {_SUPPORTED_SCHEMA_VERSION}, "
            f"got {schema_version!r}"
        )

    symbols = raw.get("symbols")
    if symbols is None:
        return []
    if not isinstance(symbols, list):
        raise ValueError(
            f"symbols section must be a list, got {type(symbols).__name__}"
        )
    return symbols


def _resolve_catalog_path(*, environ: Mapping[str, str]) -> Path:
    override = environ.get(_CONFIG_PATH_KEY, "").strip()
    if override:
        return Path(override)

    env_name = _resolve_env_name(environ=environ)
    return Path("configs") / env_name / "symbols.yaml"


def _resolve_env_name(*, environ: Mapping[str, str]) -> str:
    raw_env = environ.get(_ENV_NAME_KEY, "dev").strip().lower()
    if raw_env not in _ALLOWED_ENVS:
        raise ValueError(
            f"{_ENV_NAME_KEY} must be one of {_ALLOWED_ENVS}, got {raw_env!r}"
        )
    return raw_env
