"""Generator defaults and the optional YAML config file that overrides them."""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft202012Validator

from .enums import ColorPair
from .errors import ErdplainError
from .styles import Notation, RankDirection

CONFIG_SCHEMA_PATH = Path(__file__).resolve().parent / "schema" / "config.schema.yaml"


@dataclass(frozen=True)
class GeneratorDefaults:
    notation: Notation = Notation.IE
    color_pair: ColorPair = ColorPair.WHITE
    font_name: str = ""
    rank_direction: RankDirection = RankDirection.LR

    def override(
        self,
        notation: Optional[str] = None,
        color: Optional[str] = None,
        font: Optional[str] = None,
        rankdir: Optional[str] = None,
    ) -> "GeneratorDefaults":
        """Return a copy with every given (non-``None``) setting replaced."""
        changes: Dict[str, Any] = {}
        try:
            if notation is not None:
                changes["notation"] = Notation.from_text(notation)
            if color is not None:
                changes["color_pair"] = ColorPair.from_name(color)
            if rankdir is not None:
                changes["rank_direction"] = RankDirection.from_text(rankdir)
        except ValueError as exc:
            raise ErdplainError(str(exc)) from exc
        if font is not None:
            changes["font_name"] = font
        return replace(self, **changes)


def load_config_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        raise ErdplainError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ErdplainError(f"Failed to parse YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ErdplainError("Top level YAML structure must be a mapping/object.")
    return data


def validate_config(document: Dict[str, Any]) -> None:
    schema = yaml.safe_load(CONFIG_SCHEMA_PATH.read_text(encoding="utf-8"))
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path])
    if not errors:
        return

    details = []
    for error in errors:
        path = "$" + "".join(f"/{segment}" for segment in error.absolute_path)
        details.append(f"- {path}: {error.message}")
    raise ErdplainError("Config validation failed:\n" + "\n".join(details))


def load_config(path: Optional[Path], defaults: GeneratorDefaults = GeneratorDefaults()) -> GeneratorDefaults:
    """Apply a config file on top of ``defaults``. ``None`` keeps the defaults."""
    if path is None:
        return defaults
    document = load_config_yaml(path)
    validate_config(document)
    return defaults.override(
        notation=document.get("notation"),
        color=document.get("color"),
        font=document.get("font"),
        rankdir=document.get("rankdir"),
    )
