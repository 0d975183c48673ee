from __future__ import annotations

import itertools
import logging

import pytest

from erdplain.enums import CardinalityElement, ColorPair, OptionalityElement, VerbDirection
from erdplain.errors import ErrorKind, ParseError
from erdplain.fields import (
    parse_attr_name,
    parse_cardinality,
    parse_entity_name,
    parse_option_list,
    parse_options,
    parse_verb_phrase,
)
from erdplain.model import LineRecord
from erdplain.options import (
    ENTITY_OPTION_NAMES,
    GLOBAL_OPTION_NAMES,
    RELATIONSHIP_OPTION_NAMES,
    OptionMap,
    OptionName,
)

SYMBOLS = {
    "-": (CardinalityElement.UNSPECIFIED, OptionalityElement.UNSPECIFIED),
    "?": (CardinalityElement.ONE, OptionalityElement.OPTIONAL),
    "1": (CardinalityElement.ONE, OptionalityElement.MANDATORY),
    "*": (CardinalityElement.MANY, OptionalityElement.OPTIONAL),
    "+": (CardinalityElement.MANY, OptionalityElement.MANDATORY),
}


@pytest.mark.parametrize("left, right", list(itertools.product(SYMBOLS, repeat=2)))
def test_cardinality_symbol_combinations(left: str, right: str) -> None:
    text = f"{left}--{right}"
    if (left == "-") != (right == "-"):
        with pytest.raises(ParseError) as exc_info:
            parse_cardinality(text)
        assert exc_info.value.kind is ErrorKind.ONE_SIDED_CARDINALITY
        return

    result = parse_cardinality(text)
    assert (result.cardinality1, result.optionality1) == SYMBOLS[left]
    assert (result.cardinality2, result.optionality2) == SYMBOLS[right]


@pytest.mark.parametrize(
    "text, kind",
    [
        ("", ErrorKind.BLANK_CARDINALITY),
        ("   ", ErrorKind.BLANK_CARDINALITY),
        ("1-*", ErrorKind.INVALID_CARDINALITY_FORMAT),
        ("1--*-", ErrorKind.INVALID_CARDINALITY_FORMAT),
        ("1-=*", ErrorKind.INVALID_CARDINALITY_FORMAT),
        ("1==*", ErrorKind.INVALID_CARDINALITY_FORMAT),
        ("x--1", ErrorKind.INVALID_CARDINALITY_CHAR),
        ("1--x", ErrorKind.INVALID_CARDINALITY_CHAR),
    ],
)
def test_malformed_cardinality(text: str, kind: ErrorKind) -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_cardinality(text, LineRecord(7, f"[A] {text} [B]"))
    assert exc_info.value.kind is kind
    assert exc_info.value.line.number == 7


def test_cardinality_is_trimmed() -> None:
    result = parse_cardinality("  ?--+ ")
    assert result.cardinality1 is CardinalityElement.ONE
    assert result.optionality2 is OptionalityElement.MANDATORY


def test_entity_name() -> None:
    assert parse_entity_name(" Customer ") == "Customer"
    assert parse_entity_name('"Sales Order"') == "Sales Order"
    for text in ("", '""', "   "):
        with pytest.raises(ParseError) as exc_info:
            parse_entity_name(text)
        assert exc_info.value.kind is ErrorKind.BLANK_ENTITY_NAME


@pytest.mark.parametrize(
    "text, expected",
    [
        ("id", ("id", False, False)),
        ("*id", ("id", True, False)),
        ("id*", ("id", False, True)),
        ("*id*", ("id", True, True)),
        ('* "order id" *', ("order id", True, True)),
    ],
)
def test_attr_name(text: str, expected: tuple) -> None:
    assert tuple(parse_attr_name(text)) == expected


@pytest.mark.parametrize("text", ["", "*", "**", '*""*'])
def test_blank_attr_name(text: str) -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_attr_name(text)
    assert exc_info.value.kind is ErrorKind.BLANK_ATTR_NAME


@pytest.mark.parametrize(
    "text, phrase, direction",
    [
        ("places", "places", VerbDirection.UNSPECIFIED),
        ("places-", "places", VerbDirection.FIRST_TO_SECOND),
        ("-places", "places", VerbDirection.SECOND_TO_FIRST),
        ('"is part of" -', "is part of", VerbDirection.FIRST_TO_SECOND),
        ('"ends-"', "ends-", VerbDirection.UNSPECIFIED),
    ],
)
def test_verb_phrase(text: str, phrase: str, direction: VerbDirection) -> None:
    result = parse_verb_phrase(text)
    assert result.text == phrase
    assert result.direction is direction


def test_verb_phrase_errors() -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_verb_phrase("-places-")
    assert exc_info.value.kind is ErrorKind.INVALID_VERB_DIRECTION

    for text in ("", '""'):
        with pytest.raises(ParseError) as exc_info:
            parse_verb_phrase(text)
        assert exc_info.value.kind is ErrorKind.BLANK_VERB_PHRASE


def test_option_list_normalizes_names() -> None:
    result = parse_option_list('title: Hello; Title-Size: 20; link-files: "a;b:c"')
    assert result == {"TITLE": "Hello", "TITLE-SIZE": "20", "LINK-FILES": "a;b:c"}


def test_option_list_allows_empty_value() -> None:
    assert parse_option_list("mark:") == {"MARK": ""}


@pytest.mark.parametrize(
    "text, kind",
    [
        ("title Hello", ErrorKind.COLON_NOT_FOUND),
        ("title: a: b", ErrorKind.TOO_MANY_COLONS),
        (": value", ErrorKind.BLANK_OPTION_NAME),
        ("a: x;; b: y", ErrorKind.BLANK_OPTION_PAIR),
        ("a: x; A: y", ErrorKind.DUPLICATE_OPTION_NAME),
        ("a: <x>", ErrorKind.INVALID_OPTION_CHAR),
        ("a(: x", ErrorKind.INVALID_OPTION_CHAR),
    ],
)
def test_malformed_option_list(text: str, kind: ErrorKind) -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_option_list(text)
    assert exc_info.value.kind is kind


def test_verb_reverse_coerces_case_insensitively() -> None:
    options = parse_options("verb-reverse: TRUE", RELATIONSHIP_OPTION_NAMES)
    assert options[OptionName.VERB_REVERSE] is True


def test_invalid_boolean_value() -> None:
    line = LineRecord(3, "[A] 1--1 [B] {verb-reverse: maybe}")
    with pytest.raises(ParseError) as exc_info:
        parse_options("verb-reverse: maybe", RELATIONSHIP_OPTION_NAMES, line)
    error = exc_info.value
    assert error.kind is ErrorKind.INVALID_OPTION_VALUE
    assert error.params == ("verb-reverse", "maybe")
    assert "line 3" in str(error)


def test_numeric_and_color_options() -> None:
    options = parse_options("title-size: 20; title: Shop", GLOBAL_OPTION_NAMES)
    assert options[OptionName.TITLE_SIZE] == 20
    assert options[OptionName.TITLE] == "Shop"

    assert parse_options("title-size:", GLOBAL_OPTION_NAMES)[OptionName.TITLE_SIZE] == 12
    assert parse_options("color: Red", ENTITY_OPTION_NAMES)[OptionName.COLOR] is ColorPair.RED

    for text, names in (("title-size: big", GLOBAL_OPTION_NAMES), ("color: purple", ENTITY_OPTION_NAMES)):
        with pytest.raises(ParseError) as exc_info:
            parse_options(text, names)
        assert exc_info.value.kind is ErrorKind.INVALID_OPTION_VALUE


def test_unrecognized_option_is_ignored(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="erdplain.fields"):
        options = parse_options("bogus: 1; mark: X", ENTITY_OPTION_NAMES)
    assert options[OptionName.MARK] == "X"
    assert options == parse_options("mark: X", ENTITY_OPTION_NAMES)
    assert "bogus" in caplog.text
    assert isinstance(options, OptionMap)
