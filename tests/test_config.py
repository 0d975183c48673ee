from __future__ import annotations

from pathlib import Path

import pytest

from erdplain.config import GeneratorDefaults, load_config
from erdplain.enums import ColorPair
from erdplain.errors import ErdplainError
from erdplain.styles import Notation, RankDirection


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


def test_builtin_defaults() -> None:
    defaults = load_config(None)
    assert defaults == GeneratorDefaults()
    assert defaults.notation is Notation.IE
    assert defaults.color_pair is ColorPair.WHITE
    assert defaults.font_name == ""
    assert defaults.rank_direction is RankDirection.LR


def test_config_file_overrides_defaults(fixtures_dir: Path) -> None:
    settings = load_config(fixtures_dir / "config.yaml")
    assert settings.notation is Notation.IDEF1X
    assert settings.color_pair is ColorPair.GREEN
    assert settings.font_name == "Helvetica"
    assert settings.rank_direction is RankDirection.TB


def test_empty_config_file_keeps_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == GeneratorDefaults()


def test_invalid_config_is_rejected(fixtures_dir: Path) -> None:
    with pytest.raises(ErdplainError) as exc_info:
        load_config(fixtures_dir / "config_invalid.yaml")
    message = str(exc_info.value)
    assert "Config validation failed" in message
    assert "$/notation" in message
    assert "shape" in message


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- ie\n- idef1x\n", encoding="utf-8")
    with pytest.raises(ErdplainError, match="mapping"):
        load_config(path)


def test_unknown_color_name(tmp_path: Path) -> None:
    path = tmp_path / "color.yaml"
    path.write_text("color: purple\n", encoding="utf-8")
    with pytest.raises(ErdplainError, match="purple"):
        load_config(path)


def test_override_ignores_missing_values() -> None:
    settings = GeneratorDefaults().override(notation="ie-strict", color=None)
    assert settings.notation is Notation.IE_STRICT
    assert settings.color_pair is ColorPair.WHITE
