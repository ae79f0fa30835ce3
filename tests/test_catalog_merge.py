"""Tests for the command-line merge runner."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

import pytest

from catalog_merge import _parse_args, main, run_merge
from catalog_merger.errors import InputExhaustedError
from catalog_merger.models import MergeSettings

MASTER = """\
_published,sku,Att1
true,1,hello
,2,bye
"""
PARTNER = "msku,Att1\n2,bye2\n"


def _write_csv(path: Path, content: str) -> None:
    """Write CSV text fixture content to a file."""

    path.write_text(content, encoding="utf-8")


@pytest.fixture
def exports(tmp_path: Path) -> tuple[Path, Path, Path]:
    master = tmp_path / "master.csv"
    partner = tmp_path / "partner.csv"
    _write_csv(master, MASTER)
    _write_csv(partner, PARTNER)
    return master, partner, tmp_path / "result.csv"


def test_run_merge_in_batch_mode_writes_partner_values(exports, console, console_output) -> None:
    master, partner, result = exports

    summary = run_merge(master, partner, result, MergeSettings(accept_all=True), console=console)

    assert result.read_text(encoding="utf-8") == "_published,sku,Att1\ntrue,1,bye2\n,2,bye2\n"
    assert summary.conflicts == 1
    assert "(accept-all=true)" in console_output.getvalue()


def test_run_merge_interactive_mode_reads_operator_choice(exports, console) -> None:
    master, partner, result = exports

    run_merge(master, partner, result, MergeSettings(), console=console, stream=io.StringIO("m\n"))

    # The variant keeps its own value and the parent inherits it.
    assert result.read_text(encoding="utf-8") == "_published,sku,Att1\ntrue,1,bye\n,2,bye\n"


def test_run_merge_leaves_no_output_when_input_runs_out(exports, console) -> None:
    master, partner, result = exports

    with pytest.raises(InputExhaustedError):
        run_merge(master, partner, result, MergeSettings(), console=console, stream=io.StringIO(""))

    assert not result.exists()
    assert sorted(path.name for path in result.parent.iterdir()) == ["master.csv", "partner.csv"]


def test_run_merge_handles_utf8_bom_and_custom_delimiter(tmp_path: Path, console) -> None:
    master = tmp_path / "master.csv"
    partner = tmp_path / "partner.csv"
    result = tmp_path / "result.csv"
    master.write_text("\ufeff_published;sku;Att1\ntrue;1;Größe M\n;2;Größe M\n", encoding="utf-8")
    partner.write_text("msku;Att1\n2;Größe L\n", encoding="utf-8")

    run_merge(master, partner, result, MergeSettings(accept_all=True, delimiter=";"), console=console)

    assert result.read_text(encoding="utf-8") == "_published;sku;Att1\ntrue;1;Größe L\n;2;Größe L\n"


def test_parse_args_accept_all_forms(tmp_path: Path) -> None:
    paths = ["m.csv", "p.csv", "r.csv"]
    assert _parse_args(paths).accept_all is False
    assert _parse_args([*paths, "--accept-all"]).accept_all is True
    assert _parse_args([*paths, "--accept-all=true"]).accept_all is True
    assert _parse_args([*paths, "--accept-all=false"]).accept_all is False
    assert _parse_args(paths).master == Path("m.csv")


def test_parse_args_accept_all_before_file_arguments() -> None:
    """Ahead of the paths the flag needs an explicit value; bare, it would take the master path."""
    paths = ["m.csv", "p.csv", "r.csv"]

    args = _parse_args(["--accept-all=true", *paths])
    assert args.accept_all is True
    assert args.master == Path("m.csv")
    assert _parse_args(["--accept-all", "false", *paths]).accept_all is False

    with pytest.raises(SystemExit):
        _parse_args(["--accept-all", *paths])


def test_main_returns_one_for_non_utf8_input(exports, caplog: pytest.LogCaptureFixture) -> None:
    master, partner, result = exports
    master.write_bytes("_published,sku,Att1\ntrue,1,Größe\n".encode("latin-1"))

    with caplog.at_level(logging.ERROR):
        status = main([str(master), str(partner), str(result), "--accept-all"])

    assert status == 1
    assert "Merge failed" in caplog.text
    assert not result.exists()


def test_main_returns_one_for_oversized_field(exports, caplog: pytest.LogCaptureFixture) -> None:
    master, partner, result = exports
    oversized = "x" * (csv.field_size_limit() + 1)
    _write_csv(master, f"_published,sku,Att1\ntrue,1,{oversized}\n")

    with caplog.at_level(logging.ERROR):
        status = main([str(master), str(partner), str(result), "--accept-all"])

    assert status == 1
    assert "Merge failed" in caplog.text
    assert not result.exists()


def test_main_returns_zero_on_success(exports) -> None:
    master, partner, result = exports

    assert main([str(master), str(partner), str(result), "--accept-all=true"]) == 0
    assert result.read_text(encoding="utf-8").endswith(",2,bye2\n")


def test_main_returns_one_for_missing_input(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    missing = tmp_path / "missing.csv"
    partner = tmp_path / "partner.csv"
    _write_csv(partner, PARTNER)

    with caplog.at_level(logging.ERROR):
        status = main([str(missing), str(partner), str(tmp_path / "result.csv"), "--accept-all"])

    assert status == 1
    assert "Merge failed" in caplog.text


def test_main_returns_one_when_partner_lacks_msku(exports, caplog: pytest.LogCaptureFixture) -> None:
    master, partner, result = exports
    _write_csv(partner, "sku,Att1\n2,bye2\n")

    with caplog.at_level(logging.ERROR):
        status = main([str(master), str(partner), str(result), "--accept-all"])

    assert status == 1
    assert "msku" in caplog.text
    assert not result.exists()
