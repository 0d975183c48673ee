from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterator

import pytest

from erdplain.cli import CliOptions, main, parse_args, run
from erdplain.config import GeneratorDefaults
from erdplain.enums import ColorPair
from erdplain.errors import ErdplainError, ModelParseError
from erdplain.styles import Notation, RankDirection


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    yield
    package_logger = logging.getLogger("erdplain")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


def make_options(input_path: Path, **settings: object) -> CliOptions:
    return CliOptions(
        input_path=input_path,
        output_path=None,
        settings=GeneratorDefaults(**settings),
        messages_path=None,
    )


def test_run_renders_dot(fixtures_dir: Path) -> None:
    result = run(make_options(fixtures_dir / "orders.erd"))
    assert result.startswith('digraph "Shop" {')
    assert "//R [Customer]--[Order]" in result
    assert "arrowhead=crowodot" in result


def test_run_raises_with_every_parse_error(fixtures_dir: Path) -> None:
    with pytest.raises(ModelParseError) as exc_info:
        run(make_options(fixtures_dir / "broken.erd"))
    assert [error.line.number for error in exc_info.value.errors] == [1, 4]


def test_parse_args_priority(fixtures_dir: Path) -> None:
    options = parse_args(
        [
            "-i",
            str(fixtures_dir / "orders.erd"),
            "--config",
            str(fixtures_dir / "config.yaml"),
            "-n",
            "ie-strict",
            "-c",
            "red",
        ]
    )
    assert options.settings.notation is Notation.IE_STRICT
    assert options.settings.color_pair is ColorPair.RED
    assert options.settings.font_name == "Helvetica"
    assert options.settings.rank_direction is RankDirection.TB
    assert options.output_path is None


def test_parse_args_defaults() -> None:
    options = parse_args([])
    assert options.input_path is None
    assert options.settings == GeneratorDefaults()
    assert not options.debug


def test_missing_input_file(tmp_path: Path) -> None:
    with pytest.raises(ErdplainError, match="Input file not found"):
        parse_args(["-i", str(tmp_path / "missing.erd")])


def test_main_writes_output_file(fixtures_dir: Path, tmp_path: Path) -> None:
    output = tmp_path / "out" / "orders.dot"
    code = main(["-i", str(fixtures_dir / "orders.erd"), "-o", str(output), "-n", "idef1x"])
    assert code == 0
    assert "arrowhead=dot" in output.read_text(encoding="utf-8")


def test_main_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("[A] 1--* [B]\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "//E [A]" in out and "//E [B]" in out


def test_main_reports_parse_errors(fixtures_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["-i", str(fixtures_dir / "broken.erd")])
    assert code == 1
    err = capsys.readouterr().err
    assert "The entity name is blank" in err
    assert "line 4:   *id" in err


def test_main_reports_other_errors(fixtures_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["-i", str(fixtures_dir / "orders.erd"), "--config", str(fixtures_dir / "config_invalid.yaml")])
    assert code == 1
    assert capsys.readouterr().err.startswith("Error: Config validation failed")
