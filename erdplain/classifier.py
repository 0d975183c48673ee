"""Decide what kind of line a raw input line is."""
from __future__ import annotations

from enum import Enum

from .lexer import ALL_BRACKETS, ENTITY_BRACKETS, BracketPair, is_enclosed, remove_comment, split, starts_with_left
from .model import LineRecord


class LineKind(Enum):
    UNKNOWN = "unknown"
    BLANK = "blank"
    COMMENT_ONLY = "comment_only"
    GLOBAL_OPTIONS = "global_options"
    ENTITY_NAME = "entity_name"
    ENTITY_ATTRIBUTE = "entity_attribute"
    RELATIONSHIP = "relationship"


def count_entity_groups(text: str) -> int:
    """Number of fields enclosed in square or round brackets."""
    count = 0
    for token in split(text, ALL_BRACKETS):
        enclosing = next((pair for pair in ALL_BRACKETS if is_enclosed(token, pair)), None)
        if enclosing in ENTITY_BRACKETS:
            count += 1
    return count


def classify_line(line: LineRecord) -> LineKind:
    text = line.text.strip()
    if not text:
        return LineKind.BLANK

    text = remove_comment(text).strip()
    if not text:
        return LineKind.COMMENT_ONLY

    if is_enclosed(text, BracketPair.CURLY):
        return LineKind.GLOBAL_OPTIONS

    # attribute lines never open with an entity bracket
    if not starts_with_left(text, *ENTITY_BRACKETS):
        return LineKind.ENTITY_ATTRIBUTE

    groups = count_entity_groups(text)
    if groups == 1:
        return LineKind.ENTITY_NAME
    if groups == 2:
        return LineKind.RELATIONSHIP
    return LineKind.UNKNOWN
