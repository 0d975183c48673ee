"""Parsers for complete entity-name, attribute and relationship lines.

Each parser first cuts the line into its parts (see the ``split_*``
functions), checks that nothing but whitespace sits in the gaps around
the parts, and then hands every part to the matching field parser.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .context import ParseContext
from .enums import CardinalityElement, Dependency
from .errors import ErrorKind
from .fields import parse_attr_name, parse_cardinality, parse_entity_name, parse_options, parse_verb_phrase
from .lexer import ALL_BRACKETS, ENTITY_BRACKETS, BracketPair, is_enclosed, remove_comment, split, starts_with_left, strip_brackets
from .model import CardinalityWithOptionality, LineRecord, VerbPhrase
from .options import ATTR_OPTION_NAMES, ENTITY_OPTION_NAMES, RELATIONSHIP_OPTION_NAMES, OptionMap


class EntityNameParts(NamedTuple):
    gap_before: str
    entity: str
    gap_between: str
    options: str
    gap_after: str


class AttributeParts(NamedTuple):
    name: str
    options: str
    gap_after: str


class RelationshipParts(NamedTuple):
    gap_before: str
    entity1: str
    cardinality: str
    entity2: str
    gap_before_verb: str
    verb_phrase: str
    gap_before_options: str
    options: str
    gap_after: str


@dataclass(frozen=True)
class EntityNameLine:
    name: str
    dependency: Dependency
    options: OptionMap = field(default_factory=lambda: OptionMap(ENTITY_OPTION_NAMES))


@dataclass(frozen=True)
class AttributeLine:
    name: str
    is_primary_key: bool
    is_foreign_key: bool
    options: OptionMap = field(default_factory=lambda: OptionMap(ATTR_OPTION_NAMES))


@dataclass(frozen=True)
class RelationshipLine:
    entity1_name: str
    entity1_dependency: Dependency
    entity2_name: str
    entity2_dependency: Dependency
    cardinality: CardinalityWithOptionality
    verb_phrase: VerbPhrase = VerbPhrase()
    options: OptionMap = field(default_factory=lambda: OptionMap(RELATIONSHIP_OPTION_NAMES))


def _fields(line_text: str) -> List[str]:
    return split(remove_comment(line_text.strip()), ALL_BRACKETS)


def _find(fields: Sequence[str], pairs: Sequence[BracketPair], start: int) -> Optional[int]:
    for index in range(start, len(fields)):
        if starts_with_left(fields[index], *pairs):
            return index
    return None


def _context(context: Optional[ParseContext]) -> ParseContext:
    return context if context is not None else ParseContext.default()


def split_entity_name_line(text: str) -> EntityNameParts:
    fields = _fields(text)
    entity_index = _find(fields, ENTITY_BRACKETS, 0)
    if entity_index is None:
        entity_index = len(fields)
    option_index = _find(fields, (BracketPair.CURLY,), entity_index + 1)
    if option_index is None:
        option_index = entity_index

    buckets = [""] * 5
    for index, current in enumerate(fields):
        if index < entity_index:
            buckets[0] += current
        elif index == entity_index:
            buckets[1] += current
        elif index < option_index:
            buckets[2] += current
        elif index == option_index:
            buckets[3] += current
        else:
            buckets[4] += current
    return EntityNameParts(*(bucket.strip() for bucket in buckets))


def split_attribute_line(text: str) -> AttributeParts:
    fields = _fields(text)
    option_index = _find(fields, (BracketPair.CURLY,), 0)
    if option_index is None:
        option_index = len(fields)

    buckets = [""] * 3
    for index, current in enumerate(fields):
        if index < option_index:
            buckets[0] += current
        elif index == option_index:
            buckets[1] += current
        else:
            buckets[2] += current
    return AttributeParts(*(bucket.strip() for bucket in buckets))


def split_relationship_line(text: str) -> RelationshipParts:
    """Cut a relationship line; the cardinality is whatever sits between the entities."""
    fields = _fields(text)
    entity1_index = _find(fields, ENTITY_BRACKETS, 0)
    if entity1_index is None:
        entity1_index = len(fields)
    entity2_index = _find(fields, ENTITY_BRACKETS, entity1_index + 1)
    if entity2_index is None:
        entity2_index = len(fields)
    # an absent optional part takes the index of the part before it
    verb_index = _find(fields, (BracketPair.ANGLE,), entity2_index + 1)
    if verb_index is None:
        verb_index = entity2_index
    option_index = _find(fields, (BracketPair.CURLY,), verb_index + 1)
    if option_index is None:
        option_index = verb_index

    buckets = [""] * 9
    for index, current in enumerate(fields):
        if index < entity1_index:
            slot = 0
        elif index == entity1_index:
            slot = 1
        elif index < entity2_index:
            slot = 2
        elif index == entity2_index:
            slot = 3
        elif index < verb_index:
            slot = 4
        elif index == verb_index:
            slot = 5
        elif index < option_index:
            slot = 6
        elif index == option_index:
            slot = 7
        else:
            slot = 8
        buckets[slot] += current
    return RelationshipParts(*(bucket.strip() for bucket in buckets))


def _entity_part(
    part: str, part_key: str, line: LineRecord, ctx: ParseContext
) -> Tuple[str, Dependency]:
    if not is_enclosed(part, *ENTITY_BRACKETS):
        raise ctx.error(ErrorKind.INVALID_BRACKETS, line, ctx.messages.part(part_key), part)
    name = parse_entity_name(strip_brackets(part, *ENTITY_BRACKETS), line, ctx)
    dependency = Dependency.INDEPENDENT if is_enclosed(part, BracketPair.SQUARE) else Dependency.DEPENDENT
    return name, dependency


def _option_part(part: str, allowed, line: LineRecord, ctx: ParseContext) -> OptionMap:
    if not part:
        return OptionMap(allowed)
    if not is_enclosed(part, BracketPair.CURLY):
        raise ctx.error(ErrorKind.INVALID_BRACKETS, line, ctx.messages.part("option_list"), part)
    return parse_options(strip_brackets(part, BracketPair.CURLY), allowed, line, ctx)


def _check_gap_before(gap: str, part_key: str, line_type: str, line: LineRecord, ctx: ParseContext) -> None:
    if gap:
        raise ctx.error(
            ErrorKind.TEXT_BEFORE, line, ctx.messages.part(part_key), ctx.messages.line_type(line_type), gap
        )


def _check_gap_between(
    gap: str, first_key: str, second_key: str, line_type: str, line: LineRecord, ctx: ParseContext
) -> None:
    if gap:
        raise ctx.error(
            ErrorKind.TEXT_BETWEEN,
            line,
            ctx.messages.part(first_key),
            ctx.messages.part(second_key),
            ctx.messages.line_type(line_type),
            gap,
        )


def _check_gap_after(gap: str, part_key: str, line_type: str, line: LineRecord, ctx: ParseContext) -> None:
    if gap:
        raise ctx.error(
            ErrorKind.TEXT_AFTER, line, ctx.messages.part(part_key), ctx.messages.line_type(line_type), gap
        )


def parse_entity_name_line(line: LineRecord, context: Optional[ParseContext] = None) -> EntityNameLine:
    ctx = _context(context)
    parts = split_entity_name_line(line.text)

    _check_gap_before(parts.gap_before, "entity_name", "entity", line, ctx)
    name, dependency = _entity_part(parts.entity, "entity_name", line, ctx)
    _check_gap_between(parts.gap_between, "entity_name", "option_list", "entity", line, ctx)
    options = _option_part(parts.options, ENTITY_OPTION_NAMES, line, ctx)
    _check_gap_after(parts.gap_after, "option_list", "entity", line, ctx)

    return EntityNameLine(name, dependency, options)


def parse_attribute_line(line: LineRecord, context: Optional[ParseContext] = None) -> AttributeLine:
    ctx = _context(context)
    parts = split_attribute_line(line.text)

    attr = parse_attr_name(parts.name, line, ctx)
    options = _option_part(parts.options, ATTR_OPTION_NAMES, line, ctx)
    _check_gap_after(parts.gap_after, "option_list", "attribute", line, ctx)

    return AttributeLine(attr.name, attr.is_primary_key, attr.is_foreign_key, options)


def parse_relationship_line(line: LineRecord, context: Optional[ParseContext] = None) -> RelationshipLine:
    ctx = _context(context)
    parts = split_relationship_line(line.text)

    _check_gap_before(parts.gap_before, "entity_name_1", "relationship", line, ctx)
    name1, dependency1 = _entity_part(parts.entity1, "entity_name_1", line, ctx)
    cardinality = parse_cardinality(parts.cardinality, line, ctx)
    name2, dependency2 = _entity_part(parts.entity2, "entity_name_2", line, ctx)
    _check_gap_between(parts.gap_before_verb, "entity_name_2", "verb_phrase", "relationship", line, ctx)

    verb_phrase = VerbPhrase()
    if parts.verb_phrase:
        if not is_enclosed(parts.verb_phrase, BracketPair.ANGLE):
            raise ctx.error(ErrorKind.INVALID_BRACKETS, line, ctx.messages.part("verb_phrase"), parts.verb_phrase)
        verb_phrase = parse_verb_phrase(strip_brackets(parts.verb_phrase, BracketPair.ANGLE), line, ctx)

    _check_gap_between(parts.gap_before_options, "verb_phrase", "option_list", "relationship", line, ctx)
    options = _option_part(parts.options, RELATIONSHIP_OPTION_NAMES, line, ctx)
    _check_gap_after(parts.gap_after, "option_list", "relationship", line, ctx)

    result = RelationshipLine(name1, dependency1, name2, dependency2, cardinality, verb_phrase, options)
    validate_relationship_line(result, line, ctx)
    return result


def validate_relationship_line(rel: RelationshipLine, line: LineRecord, context: ParseContext) -> None:
    """Reject dependency flags that contradict the cardinality."""
    one = CardinalityElement.ONE
    many = CardinalityElement.MANY
    c1 = rel.cardinality.cardinality1
    c2 = rel.cardinality.cardinality2
    dependent1 = rel.entity1_dependency is Dependency.DEPENDENT
    dependent2 = rel.entity2_dependency is Dependency.DEPENDENT

    if dependent1 and dependent2:
        raise context.error(ErrorKind.DEPENDENT_ENTITIES, line)
    if (c1, c2) == (one, many) and dependent1:
        raise context.error(ErrorKind.DEPENDENT_PARENT, line)
    if (c1, c2) == (many, one) and dependent2:
        raise context.error(ErrorKind.DEPENDENT_PARENT, line)
    if (c1, c2) == (many, many) and (dependent1 or dependent2):
        raise context.error(ErrorKind.DEPENDENT_MANY_TO_MANY, line)
