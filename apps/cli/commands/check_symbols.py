from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel

from maytrix.platform.config import SymbolCatalog, load_symbol_catalog_from_yaml
from maytrix.shared_kernel.primitives import Symbol, SymbolError

log = logging.getLogger(__name__)


class CheckSymbolsReport(BaseModel):
    """
    Report payload for `check` command.

    Related:
      - src/maytrix/shared_kernel/primitives/symbol.py
      - src/maytrix/platform/config/symbol_catalog.py
    """

    valid: list[Symbol]
    invalid: list[str]
    unknown: list[str]
    message: str | None = None

    @property
    def ok(self) -> bool:
        return not self.invalid and not self.unknown


class CheckSymbolsCli:
    def run(self, argv: Sequence[str]) -> int:
        parser = _build_parser()
        ns = parser.parse_args(list(argv))

        catalog: SymbolCatalog | None = None
        if ns.catalog is not None:
            try:
                catalog = load_symbol_catalog_from_yaml(Path(ns.catalog))
            except (FileNotFoundError, ValueError) as e:
                log.error("failed to load symbol catalog %s: %s", ns.catalog, e)
                print(f"error: {e}")
                return 2

        report = build_check_report(ns.values, catalog=catalog)

        if ns.report_format == "json":
            print(report.model_dump_json())
        else:
            print(_render_text(report))

        return 0 if report.ok else 1


def build_check_report(
    values: Sequence[str],
    *,
    catalog: SymbolCatalog | None = None,
) -> CheckSymbolsReport:
    """
    Validate raw values and optionally check membership in catalog.

    Args:
        values: Raw candidate identifiers in input order.
        catalog: Optional catalog of known symbols.
    Returns:
        CheckSymbolsReport: Valid symbols, invalid inputs and unknown (valid but not cataloged).
    Assumptions:
        Input order is preserved in every report list; repeats are reported as given.
    Raises:
        None.
    Side Effects:
        None.
    """
    valid: list[Symbol] = []
    invalid: list[str] = []
    unknown: list[str] = []
    message: str | None = None

    for raw in values:
        try:
            symbol = Symbol.try_new(raw)
        except SymbolError as e:
            log.debug("rejected symbol %r", raw)
            invalid.append(raw)
            message = str(e)
            continue

        valid.append(symbol)
        if catalog is not None and not catalog.contains(symbol):
            unknown.append(symbol.as_str())

    return CheckSymbolsReport(valid=valid, invalid=invalid, unknown=unknown, message=message)


def _render_text(report: CheckSymbolsReport) -> str:
    lines = ["check report:"]
    lines.append(f"- valid: {len(report.valid)}")
    for symbol in report.valid:
        lines.append(f"    {symbol}")
    lines.append(f"- invalid: {len(report.invalid)}")
    for raw in report.invalid:
        lines.append(f"    {raw!r}")
    if report.unknown:
        lines.append(f"- unknown: {len(report.unknown)}")
        for raw in report.unknown:
            lines.append(f"    {raw}")
    if report.message is not None:
        lines.append(f"- error: {report.message}")
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="check")
    p.add_argument(
        "values",
        nargs="+",
        help="Identifiers to validate against ^[a-z][a-z0-9_]*$",
    )
    p.add_argument(
        "--catalog",
        default=None,
        help="Optional path to symbols.yaml; valid values missing from it are reported as unknown",
    )
    p.add_argument(
        "--report-format",
        choices=("text", "json"),
        default="text",
        help="Report output format (default: text)",
    )
    return p
