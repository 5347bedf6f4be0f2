from __future__ import annotations

from pathlib import Path
from typing import Iterator

from loguru import logger
import pytest
from rich.console import Console

from json2php import cli
from json2php.cli import _build_overrides, _build_parser, run
from json2php.config.loader import ENV_LOG_LEVEL, ENV_OUTPUT_DIR


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (ENV_OUTPUT_DIR, ENV_LOG_LEVEL):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield
    # run() points a stderr sink at the captured stream of this test.
    logger.remove()


def test_convert_defaults_to_stdin_and_both_panes() -> None:
    parser = _build_parser()
    args = parser.parse_args(["convert"])

    assert args.input is None
    assert args.text is None
    assert args.only is None
    assert args.export is False


def test_convert_input_and_text_are_exclusive() -> None:
    parser = _build_parser()

    with pytest.raises(SystemExit):
        parser.parse_args(["convert", "--input", "a.json", "--text", "{}"])


def test_build_overrides_collects_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--output-dir", "out", "--log-level", "debug", "convert", "--no-sanitize"])

    overrides = _build_overrides(args)

    assert overrides == {
        "app": {"output_dir": "out", "log_level": "debug"},
        "convert": {"sanitize": False},
    }


def test_build_overrides_empty_for_config_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["config"])

    assert _build_overrides(args) == {}


def test_run_convert_prints_both_outputs(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(["convert", "--text", '{"name": "it\'s"}'])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Formatted JSON" in out
    assert '"name": "it\'s"' in out
    assert "PHP Array" in out
    assert "'name' => 'it\\'s'" in out
    assert "Conversion successful" in out


def test_run_convert_only_php(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(["convert", "--text", "[1, 2]", "--only", "php"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "PHP Array" in out
    assert "Formatted JSON" not in out


def test_run_convert_reads_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "payload.json"
    source.write_text('{\\"k\\": \\"v\\"}', encoding="utf-8")

    exit_code = run(["convert", "--input", str(source)])

    assert exit_code == 0
    assert "'k' => 'v'" in capsys.readouterr().out


def test_run_convert_invalid_json_exits_with_error(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(["convert", "--text", "{not json"])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "Invalid JSON. Check the syntax." in out
    assert "PHP Array" not in out


def test_run_convert_empty_input_message(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(["convert", "--text", "   "])

    assert exit_code == 1
    assert "Please enter valid JSON" in capsys.readouterr().out


def test_run_convert_export_writes_files(tmp_path: Path) -> None:
    out_dir = tmp_path / "exports"

    exit_code = run(["--output-dir", str(out_dir), "convert", "--text", '{"a": 1}', "--export"])

    assert exit_code == 0
    assert (out_dir / "formatted.json").read_text(encoding="utf-8") == '{\n  "a": 1\n}\n'
    assert (out_dir / "array.php").read_text(encoding="utf-8") == "[\n    'a' => 1\n]\n"


def test_run_config_prints_effective_config(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(["config"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Effective Config" in out
    assert "sanitize" in out


def test_run_export_path_with_brackets_is_printed_verbatim(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(cli, "console", Console(width=400))
    out_dir = tmp_path / "out[bold]"

    exit_code = run(["--output-dir", str(out_dir), "convert", "--text", "[]", "--export"])

    assert exit_code == 0
    assert (out_dir / "array.php").read_text(encoding="utf-8") == "[]\n"
    assert f"Exported to {out_dir}" in capsys.readouterr().out
