"""Plain-text ER diagram parsing and Graphviz DOT generation."""

from importlib.metadata import version, PackageNotFoundError

from .context import ParseContext
from .errors import ErdplainError, ModelParseError, ParseError
from .model import Entity, EntityAttribute, LineRecord, Model, Relationship
from .parser import ModelParser, parse_lines, parse_text
from .render_dot import render_dot

try:
    __version__ = version("erdplain")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "Entity",
    "EntityAttribute",
    "ErdplainError",
    "LineRecord",
    "Model",
    "ModelParseError",
    "ModelParser",
    "ParseContext",
    "ParseError",
    "Relationship",
    "__version__",
    "parse_lines",
    "parse_text",
    "render_dot",
]
