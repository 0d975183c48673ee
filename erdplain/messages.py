"""YAML message catalog used to word parse errors."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from string import Formatter
from typing import Any, Dict, Mapping, Optional, Set

import yaml
from jsonschema import Draft202012Validator

from .errors import ErdplainError, ErrorKind

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_MESSAGES_PATH = PACKAGE_DIR / "resources" / "messages.yaml"
SCHEMA_PATH = PACKAGE_DIR / "schema" / "messages.schema.yaml"


@dataclass(frozen=True)
class MessageCatalog:
    line_label: str
    line_types: Mapping[str, str]
    parts: Mapping[str, str]
    errors: Mapping[str, str]

    def line_type(self, key: str) -> str:
        return self.line_types.get(key, key)

    def part(self, key: str) -> str:
        return self.parts.get(key, key)

    def format(self, kind: ErrorKind, *params: object) -> str:
        template = self.errors.get(kind.value)
        if template is None:
            return kind.value
        try:
            return template.format(*params)
        except (IndexError, KeyError, ValueError) as exc:
            raise ErdplainError(f"Message {kind.value!r} cannot be formatted: {exc}") from exc


def load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        raise ErdplainError(f"Cannot read message catalog {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ErdplainError(f"Failed to parse YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ErdplainError("Message catalog must be a mapping/object.")
    return data


def validate_against_schema(document: Dict[str, Any]) -> None:
    schema = yaml.safe_load(SCHEMA_PATH.read_text(encoding="utf-8"))
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path])
    if not errors:
        return

    details = []
    for error in errors:
        path = "$" + "".join(f"/{segment}" for segment in error.absolute_path)
        details.append(f"- {path}: {error.message}")
    raise ErdplainError("Message catalog validation failed:\n" + "\n".join(details))


def placeholders(template: str) -> Set[str]:
    """Return the replacement field names used by ``template``."""
    try:
        return {field for _, field, _, _ in Formatter().parse(template) if field is not None}
    except ValueError as exc:
        raise ErdplainError(f"Malformed message template {template!r}: {exc}") from exc


def check_placeholders(errors: Mapping[str, str], reference: Optional[Mapping[str, str]]) -> None:
    """Reject templates using fields their error never supplies.

    Fields must be positional indexes such as ``{0}``. With a ``reference``
    catalog, a template may only use the indexes of its reference template.
    """
    details = []
    for key, template in sorted(errors.items()):
        fields = placeholders(template)
        bad = sorted(field for field in fields if not field.isdigit())
        if bad:
            details.append(f"- $/errors/{key}: unsupported placeholders {bad}")
            continue
        if reference is not None and key in reference:
            extra = sorted(fields - placeholders(reference[key]))
            if extra:
                details.append(f"- $/errors/{key}: unknown placeholders {extra}")
    if details:
        raise ErdplainError("Message catalog validation failed:\n" + "\n".join(details))


def load_messages(path: Optional[Path] = None) -> MessageCatalog:
    """Read and validate a catalog. ``None`` selects the bundled English one.

    Other catalogs may only use the placeholders of the bundled templates.
    """
    if path is None:
        return _bundled_messages()
    return _build_catalog(load_yaml(path), _bundled_messages().errors)


@lru_cache(maxsize=1)
def _bundled_messages() -> MessageCatalog:
    return _build_catalog(load_yaml(DEFAULT_MESSAGES_PATH))


def _build_catalog(document: Dict[str, Any], reference: Optional[Mapping[str, str]] = None) -> MessageCatalog:
    validate_against_schema(document)
    check_placeholders(document["errors"], reference)
    return MessageCatalog(
        line_label=document["line_label"],
        line_types=MappingProxyType(dict(document["line_types"])),
        parts=MappingProxyType(dict(document["parts"])),
        errors=MappingProxyType(dict(document["errors"])),
    )
