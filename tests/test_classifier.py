from __future__ import annotations

import pytest

from erdplain.classifier import LineKind, classify_line, count_entity_groups
from erdplain.model import LineRecord


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", LineKind.BLANK),
        ("   \t", LineKind.BLANK),
        ("# only a comment", LineKind.COMMENT_ONLY),
        ("   # indented comment", LineKind.COMMENT_ONLY),
        ("{title: Shop}", LineKind.GLOBAL_OPTIONS),
        ("{title: Shop} # diagram title", LineKind.GLOBAL_OPTIONS),
        ("*id", LineKind.ENTITY_ATTRIBUTE),
        ("name {mark: x}", LineKind.ENTITY_ATTRIBUTE),
        ('"[quoted]" attr', LineKind.ENTITY_ATTRIBUTE),
        ("[Customer]", LineKind.ENTITY_NAME),
        ("(Order) {color: red}", LineKind.ENTITY_NAME),
        ('[A] "[B]"', LineKind.ENTITY_NAME),
        ("[Customer] 1--* (Order)", LineKind.RELATIONSHIP),
        ("[A] ?--+ [B] <has> {n1: x} # comment", LineKind.RELATIONSHIP),
        ("[A] [B] [C]", LineKind.UNKNOWN),
        ("[A", LineKind.UNKNOWN),
    ],
)
def test_classify_line(text: str, expected: LineKind) -> None:
    assert classify_line(LineRecord(1, text)) is expected


def test_count_entity_groups_ignores_other_brackets() -> None:
    assert count_entity_groups("[A] <verb> {x: y} (B)") == 2
    assert count_entity_groups("<verb>") == 0
