from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

SYMBOL_PATTERN = "^[a-z][a-z0-9_]*$"

_LEADING_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz")
_TRAILING_CHARS = _LEADING_CHARS | frozenset("0123456789_")


class SymbolError(ValueError):
    """
    SymbolError — the only failure mode of `Symbol`: input does not match the identifier pattern.

    Related:
      - src/maytrix/shared_kernel/primitives/symbol.py
      - src/maytrix/platform/config/symbol_catalog.py
    """

    code = "invalid_symbol"
    message = f"value must match {SYMBOL_PATTERN}"

    def __init__(self) -> None:
        super().__init__(self.message)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SymbolError):
            return True
        return NotImplemented

    def __hash__(self) -> int:
        return hash((SymbolError, self.message))

    def __reduce__(self) -> tuple[type[SymbolError], tuple[()]]:
        return (SymbolError, ())

    def to_payload(self) -> dict[str, Any]:
        """
        Build deterministic API payload representation.

        Args:
            None.
        Returns:
            dict[str, Any]: `{"error": {"code", "message", "details"}}` payload.
        Assumptions:
            Error carries no input-specific details.
        Raises:
            None.
        Side Effects:
            None.
        """
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": {},
            }
        }


@dataclass(frozen=True, slots=True, eq=False)
class Symbol:
    """
    Symbol — validated lowercase identifier matching `^[a-z][a-z0-9_]*$` (e.g. "alpha_1").

    Rules:
    - no normalization: value is stored exactly as given
    - invariant: first char a-z, then a-z / 0-9 / "_", length >= 1
    - equality, ordering and hash use only `value`, so Symbol and `str` with the same
      text are interchangeable as dict/set keys

    Related:
      - src/maytrix/platform/config/symbol_catalog.py
      - apps/cli/commands/check_symbols.py
    """

    value: str

    def __post_init__(self) -> None:
        """
        Validate identifier value.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            `value` is a plain `str`; any other type is rejected as invalid format.
        Raises:
            SymbolError: If `value` does not match the identifier pattern.
        Side Effects:
            None.
        """
        if not Symbol.is_valid(self.value):
            raise SymbolError()

    @classmethod
    def try_new(cls, value: str | Symbol) -> Symbol:
        """
        Build symbol from raw text, or pass an existing symbol through unchanged.

        Args:
            value: Raw identifier text or already validated symbol.
        Returns:
            Symbol: Validated symbol.
        Assumptions:
            Symbols are immutable, so an existing instance is shared instead of copied.
        Raises:
            SymbolError: If text does not match the identifier pattern.
        Side Effects:
            None.
        """
        if isinstance(value, Symbol):
            return value
        return cls(value)

    @classmethod
    def from_string(cls, raw_value: str) -> Symbol:
        """
        Parse symbol from string without any stripping or case folding.

        Args:
            raw_value: Raw identifier text.
        Returns:
            Symbol: Parsed symbol value object.
        Assumptions:
            Whitespace and uppercase are invalid rather than normalized.
        Raises:
            SymbolError: If text does not match the identifier pattern.
        Side Effects:
            None.
        """
        return cls(raw_value)

    @staticmethod
    def is_valid(value: object) -> bool:
        """
        Check text against `^[a-z][a-z0-9_]*$` with a single left-to-right scan.

        Args:
            value: Candidate text.
        Returns:
            bool: True when the constructor would accept `value`.
        Assumptions:
            Non-`str` input is never valid.
        Raises:
            None.
        Side Effects:
            None.
        """
        if not isinstance(value, str):
            return False

        chars = iter(value)
        first = next(chars, None)
        if first is None or first not in _LEADING_CHARS:
            return False
        for char in chars:
            if char not in _TRAILING_CHARS:
                return False
        return True

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value

    def __format__(self, format_spec: str) -> str:
        return format(self.value, format_spec)

    def __len__(self) -> int:
        return len(self.value)

    def __eq__(self, other: object) -> bool:
        other_text = _text_of(other)
        if other_text is None:
            return NotImplemented
        return self.value == other_text

    def __hash__(self) -> int:
        # Must match hash(str) so that str keys find Symbol keys and vice versa.
        return hash(self.value)

    def __lt__(self, other: object) -> bool:
        other_text = _text_of(other)
        if other_text is None:
            return NotImplemented
        return self.value < other_text

    def __le__(self, other: object) -> bool:
        other_text = _text_of(other)
        if other_text is None:
            return NotImplemented
        return self.value <= other_text

    def __gt__(self, other: object) -> bool:
        other_text = _text_of(other)
        if other_text is None:
            return NotImplemented
        return self.value > other_text

    def __ge__(self, other: object) -> bool:
        other_text = _text_of(other)
        if other_text is None:
            return NotImplemented
        return self.value >= other_text

    def __reduce__(self) -> tuple[type[Symbol], tuple[str]]:
        # pickle/copy rebuild through the constructor, never via raw slot state.
        return (Symbol, (self.value,))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Describe `Symbol` for pydantic models: validate via `try_new`, serialize as plain str.

        Args:
            source_type: Annotated source type (unused).
            handler: pydantic schema handler (unused).
        Returns:
            CoreSchema: Plain-validator schema with string serialization.
        Assumptions:
            Invalid input raises `SymbolError`, which pydantic reports as `value_error`.
        Raises:
            None.
        Side Effects:
            None.
        """
        return core_schema.no_info_plain_validator_function(
            cls.try_new,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.as_str,
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "pattern": SYMBOL_PATTERN}


def _text_of(value: object) -> str | None:
    if isinstance(value, Symbol):
        return value.value
    if isinstance(value, str):
        return value
    return None
