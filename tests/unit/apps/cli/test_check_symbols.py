from __future__ import annotations

import json
from pathlib import Path

import pytest

from apps.cli.commands.check_symbols import (
    CheckSymbolsCli,
    CheckSymbolsReport,
    build_check_report,
)
from apps.cli.main.main import main
from maytrix.platform.config import SymbolCatalog
from maytrix.shared_kernel.primitives import Symbol


def test_build_check_report_splits_valid_and_invalid() -> None:
    report = build_check_report(["task1", "Bad-Name", "a0_b", "_bad"])

    assert report.valid == [Symbol("task1"), Symbol("a0_b")]
    assert report.invalid == ["Bad-Name", "_bad"]
    assert report.unknown == []
    assert report.message == "value must match ^[a-z][a-z0-9_]*$"
    assert not report.ok


def test_build_check_report_marks_values_missing_from_catalog() -> None:
    catalog = SymbolCatalog(symbols=(Symbol("alpha"), Symbol("beta")))

    report = build_check_report(["alpha", "gamma"], catalog=catalog)

    assert report.valid == ["alpha", "gamma"]
    assert report.unknown == ["gamma"]
    assert report.message is None
    assert not report.ok


def test_check_cli_json_report_serializes_symbols_as_strings(
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = CheckSymbolsCli().run(["alpha", "beta_2", "--report-format", "json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload == {
        "valid": ["alpha", "beta_2"],
        "invalid": [],
        "unknown": [],
        "message": None,
    }


def test_check_cli_text_report_and_exit_code_for_invalid(
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = CheckSymbolsCli().run(["alpha", "Nope"])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "- valid: 1" in out
    assert "- invalid: 1" in out
    assert "'Nope'" in out
    assert "- error: value must match ^[a-z][a-z0-9_]*$" in out


def test_check_cli_uses_catalog_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    catalog_path = tmp_path / "symbols.yaml"
    catalog_path.write_text("schema_version: 1\nsymbols: [alpha]\n", encoding="utf-8")

    assert CheckSymbolsCli().run(["alpha", "--catalog", str(catalog_path)]) == 0
    assert CheckSymbolsCli().run(["beta", "--catalog", str(catalog_path)]) == 1
    assert "- unknown: 1" in capsys.readouterr().out


def test_main_dispatches_check_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check", "task1"]) == 0
    assert "- valid: 1" in capsys.readouterr().out


def test_main_without_args_or_with_unknown_command_prints_usage(
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert main([]) == 2
    assert "Usage:" in capsys.readouterr().out

    assert main(["frobnicate"]) == 2
    out = capsys.readouterr().out
    assert "unknown command: frobnicate" in out
    assert "Usage:" in out


def test_check_cli_requires_at_least_one_value() -> None:
    with pytest.raises(SystemExit) as exc_info:
        CheckSymbolsCli().run([])

    assert exc_info.value.code == 2


def test_check_cli_reports_missing_catalog_with_exit_code_2(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = CheckSymbolsCli().run(["alpha", "--catalog", str(tmp_path / "missing.yaml")])

    assert exit_code == 2
    assert "error: symbol catalog not found" in capsys.readouterr().out


def test_check_cli_reports_invalid_catalog_with_exit_code_2(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    catalog_path = tmp_path / "symbols.yaml"
    catalog_path.write_text("schema_version: 1\nsymbols: [Bad-Name]\n", encoding="utf-8")

    exit_code = CheckSymbolsCli().run(["alpha", "--catalog", str(catalog_path)])

    assert exit_code == 2
    assert "error: invalid symbol at symbols[0]" in capsys.readouterr().out


def test_check_report_model_json_schema_describes_symbols_as_strings() -> None:
    schema = CheckSymbolsReport.model_json_schema()

    assert schema["properties"]["valid"]["items"]["pattern"] == "^[a-z][a-z0-9_]*$"
