"""Parsers for a single, already isolated part of a line."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, NamedTuple, Optional

from .context import ParseContext
from .enums import CardinalityElement, OptionalityElement, VerbDirection
from .errors import ErrorKind
from .lexer import BracketPair, find_first_char, is_quoted, split_unquoted, unquote
from .model import NO_LINE, CardinalityWithOptionality, LineRecord, VerbPhrase
from .options import OptionMap, OptionName, coerce_option_value

logger = logging.getLogger(__name__)

PK_CHAR = "*"
FK_CHAR = "*"
VERB_DIRECTION_CHAR = "-"
OPTION_ASSIGNMENT_CHAR = ":"
OPTION_SEPARATOR_CHAR = ";"
OPTION_INVALID_CHARS = tuple(
    char for pair in BracketPair for char in (pair.left, pair.right)
) + (OPTION_ASSIGNMENT_CHAR, OPTION_SEPARATOR_CHAR)

# symbol -> (cardinality, optionality)
CARDINALITY_SYMBOLS = {
    "-": (CardinalityElement.UNSPECIFIED, OptionalityElement.UNSPECIFIED),
    "?": (CardinalityElement.ONE, OptionalityElement.OPTIONAL),
    "1": (CardinalityElement.ONE, OptionalityElement.MANDATORY),
    "*": (CardinalityElement.MANY, OptionalityElement.OPTIONAL),
    "+": (CardinalityElement.MANY, OptionalityElement.MANDATORY),
}


class AttributeName(NamedTuple):
    name: str
    is_primary_key: bool
    is_foreign_key: bool


def _context(context: Optional[ParseContext]) -> ParseContext:
    return context if context is not None else ParseContext.default()


def parse_entity_name(
    text: str, line: LineRecord = NO_LINE, context: Optional[ParseContext] = None
) -> str:
    text = text.strip()
    name = unquote(text)
    if not name:
        raise _context(context).error(ErrorKind.BLANK_ENTITY_NAME, line, text)
    return name


def parse_attr_name(
    text: str, line: LineRecord = NO_LINE, context: Optional[ParseContext] = None
) -> AttributeName:
    """Read ``*name``, ``name*`` or ``*name*``; the marks flag primary/foreign keys."""
    name = text.strip()
    is_primary_key = name.startswith(PK_CHAR)
    is_foreign_key = name.endswith(FK_CHAR)

    if is_primary_key:
        name = name[1:].strip()
    if is_foreign_key:
        name = name[:-1].strip()
    name = unquote(name)

    if not name:
        raise _context(context).error(ErrorKind.BLANK_ATTR_NAME, line)
    return AttributeName(name, is_primary_key, is_foreign_key)


def parse_cardinality(
    text: str, line: LineRecord = NO_LINE, context: Optional[ParseContext] = None
) -> CardinalityWithOptionality:
    """Read an ``X--Y`` token where X and Y are one of ``- ? 1 * +``."""
    ctx = _context(context)
    text = text.strip()
    if not text:
        raise ctx.error(ErrorKind.BLANK_CARDINALITY, line)
    if len(text) != 4 or text[1:3] != "--":
        raise ctx.error(ErrorKind.INVALID_CARDINALITY_FORMAT, line, text)

    sides = []
    for symbol in (text[0], text[3]):
        try:
            sides.append(CARDINALITY_SYMBOLS[symbol])
        except KeyError:
            raise ctx.error(ErrorKind.INVALID_CARDINALITY_CHAR, line, symbol) from None

    (c1, o1), (c2, o2) = sides
    if (c1 is CardinalityElement.UNSPECIFIED) != (c2 is CardinalityElement.UNSPECIFIED):
        raise ctx.error(ErrorKind.ONE_SIDED_CARDINALITY, line, text)
    return CardinalityWithOptionality(c1, o1, c2, o2)


def parse_verb_phrase(
    text: str, line: LineRecord = NO_LINE, context: Optional[ParseContext] = None
) -> VerbPhrase:
    """Read a verb phrase; a trailing ``-`` points to the second entity, a leading one to the first."""
    ctx = _context(context)
    text = text.strip()
    leading = text.startswith(VERB_DIRECTION_CHAR)
    trailing = text.endswith(VERB_DIRECTION_CHAR)

    if leading and trailing:
        raise ctx.error(ErrorKind.INVALID_VERB_DIRECTION, line, text)
    if trailing:
        direction = VerbDirection.FIRST_TO_SECOND
        phrase = text[:-1].strip()
    elif leading:
        direction = VerbDirection.SECOND_TO_FIRST
        phrase = text[1:].strip()
    else:
        direction = VerbDirection.UNSPECIFIED
        phrase = text

    phrase = unquote(phrase)
    if not phrase:
        raise ctx.error(ErrorKind.BLANK_VERB_PHRASE, line)
    return VerbPhrase(phrase, direction)


def parse_option_list(
    text: str, line: LineRecord = NO_LINE, context: Optional[ParseContext] = None
) -> Dict[str, str]:
    """Read ``name: value; ...`` into an upper-cased name -> raw value mapping."""
    ctx = _context(context)
    options: Dict[str, str] = {}

    for index, pair in enumerate(split_unquoted(text, OPTION_SEPARATOR_CHAR)):
        if not pair:
            raise ctx.error(ErrorKind.BLANK_OPTION_PAIR, line, index)

        tokens = split_unquoted(pair, OPTION_ASSIGNMENT_CHAR)
        if len(tokens) < 2:
            raise ctx.error(ErrorKind.COLON_NOT_FOUND, line, pair)
        if len(tokens) > 2:
            raise ctx.error(ErrorKind.TOO_MANY_COLONS, line, pair)

        name = tokens[0].upper()
        value = tokens[1]
        if not name:
            raise ctx.error(ErrorKind.BLANK_OPTION_NAME, line, pair)

        bad_char = find_first_char(name, OPTION_INVALID_CHARS)
        if bad_char is not None:
            raise ctx.error(ErrorKind.INVALID_OPTION_CHAR, line, bad_char)

        if is_quoted(value):
            value = unquote(value)
        else:
            bad_char = find_first_char(value, OPTION_INVALID_CHARS)
            if bad_char is not None:
                raise ctx.error(ErrorKind.INVALID_OPTION_CHAR, line, bad_char)

        if name in options:
            raise ctx.error(ErrorKind.DUPLICATE_OPTION_NAME, line, name)
        options[name] = value

    return options


def apply_options(
    raw: Dict[str, str],
    allowed: Iterable[OptionName],
    base: OptionMap,
    line: LineRecord = NO_LINE,
    context: Optional[ParseContext] = None,
) -> OptionMap:
    """Return ``base`` with the recognised entries of ``raw`` coerced into it.

    Names that are not in ``allowed`` are ignored.
    """
    allowed = tuple(allowed)
    known = {name.name_in_files.upper(): name for name in allowed}
    for key in raw:
        if key not in known:
            logger.warning("line %d: option %r is not recognized here and is ignored", line.number, key.lower())

    values: Dict[OptionName, Any] = {}
    for key, name in known.items():
        if key not in raw:
            continue
        text = raw[key]
        try:
            value = coerce_option_value(name, text)
        except ValueError:
            raise _context(context).error(ErrorKind.INVALID_OPTION_VALUE, line, name.name_in_files, text) from None
        if value is not None:
            values[name] = value
    return base.updated(values)


def parse_options(
    text: str,
    allowed: Iterable[OptionName],
    line: LineRecord = NO_LINE,
    context: Optional[ParseContext] = None,
) -> OptionMap:
    """Parse an option list and return a fresh map holding the allowed options."""
    allowed = tuple(allowed)
    raw = parse_option_list(text, line, context)
    return apply_options(raw, allowed, OptionMap(allowed), line, context)
