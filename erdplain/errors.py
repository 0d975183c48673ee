"""Exception types raised while reading the ER notation."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .model import LineRecord


class ErdplainError(RuntimeError):
    """Raised when a diagram cannot be read, configured or generated."""


class ErrorCategory(Enum):
    LEXICAL = "lexical"
    STRUCTURAL = "structural"
    FIELD = "field"
    SEMANTIC = "semantic"


class ErrorKind(Enum):
    """Every user-facing parse failure. The value is the message key."""

    # lexical
    INVALID_BRACKETS = "invalid_brackets"

    # structural
    UNKNOWN_LINE_TYPE = "unknown_line_type"
    ENTITY_NOT_OPENED = "entity_not_opened"
    RELATIONSHIP_LINE_COUNT = "relationship_line_count"
    TEXT_BEFORE = "text_before"
    TEXT_BETWEEN = "text_between"
    TEXT_AFTER = "text_after"

    # field level
    BLANK_ENTITY_NAME = "blank_entity_name"
    BLANK_ATTR_NAME = "blank_attr_name"
    BLANK_CARDINALITY = "blank_cardinality"
    BLANK_VERB_PHRASE = "blank_verb_phrase"
    INVALID_CARDINALITY_FORMAT = "invalid_cardinality_format"
    INVALID_CARDINALITY_CHAR = "invalid_cardinality_char"
    ONE_SIDED_CARDINALITY = "one_sided_cardinality"
    INVALID_VERB_DIRECTION = "invalid_verb_direction"
    INVALID_OPTION_CHAR = "invalid_option_char"
    INVALID_OPTION_VALUE = "invalid_option_value"
    BLANK_OPTION_PAIR = "blank_option_pair"
    BLANK_OPTION_NAME = "blank_option_name"
    COLON_NOT_FOUND = "colon_not_found"
    TOO_MANY_COLONS = "too_many_colons"
    DUPLICATE_OPTION_NAME = "duplicate_option_name"

    # semantic
    DUPLICATE_ENTITY_NAME = "duplicate_entity_name"
    DUPLICATE_ATTR_NAME = "duplicate_attr_name"
    DEPENDENT_ENTITIES = "dependent_entities"
    DEPENDENT_PARENT = "dependent_parent"
    DEPENDENT_MANY_TO_MANY = "dependent_many_to_many"

    @property
    def category(self) -> ErrorCategory:
        return _CATEGORIES.get(self, ErrorCategory.FIELD)


_CATEGORIES = {
    ErrorKind.INVALID_BRACKETS: ErrorCategory.LEXICAL,
    ErrorKind.UNKNOWN_LINE_TYPE: ErrorCategory.STRUCTURAL,
    ErrorKind.ENTITY_NOT_OPENED: ErrorCategory.STRUCTURAL,
    ErrorKind.RELATIONSHIP_LINE_COUNT: ErrorCategory.STRUCTURAL,
    ErrorKind.TEXT_BEFORE: ErrorCategory.STRUCTURAL,
    ErrorKind.TEXT_BETWEEN: ErrorCategory.STRUCTURAL,
    ErrorKind.TEXT_AFTER: ErrorCategory.STRUCTURAL,
    ErrorKind.DUPLICATE_ENTITY_NAME: ErrorCategory.SEMANTIC,
    ErrorKind.DUPLICATE_ATTR_NAME: ErrorCategory.SEMANTIC,
    ErrorKind.DEPENDENT_ENTITIES: ErrorCategory.SEMANTIC,
    ErrorKind.DEPENDENT_PARENT: ErrorCategory.SEMANTIC,
    ErrorKind.DEPENDENT_MANY_TO_MANY: ErrorCategory.SEMANTIC,
}


class ParseError(ErdplainError):
    """One problem found in the input, tied to its line when known."""

    def __init__(
        self,
        kind: ErrorKind,
        description: str,
        params: Sequence[object] = (),
        line: Optional["LineRecord"] = None,
        line_label: str = "line",
    ) -> None:
        self.kind = kind
        self.description = description
        self.params: Tuple[object, ...] = tuple(params)
        self.line = line
        message = description
        if line is not None:
            message = f"{description}\n{line_label} {line.number}: {line.text}"
        super().__init__(message)

    @property
    def category(self) -> ErrorCategory:
        return self.kind.category


class ModelParseError(ErdplainError):
    """Carries every error accumulated by one parse of a whole document."""

    def __init__(self, errors: Sequence[ParseError]) -> None:
        self.errors = list(errors)
        details = "\n".join(f"- {str(error)}".replace("\n", "\n  ") for error in self.errors)
        super().__init__(f"Parsing failed with {len(self.errors)} error(s):\n{details}")
