"""Whole-document parsing: line grouping first, then semantic assembly."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .blocks import EntityParser, RelationshipParser
from .classifier import LineKind, classify_line
from .context import ParseContext
from .enums import Dependency
from .errors import ErrorKind, ModelParseError, ParseError
from .fields import apply_options, parse_option_list
from .inference import align_relationships, propagate_dependency
from .lexer import BracketPair, remove_comment, strip_brackets
from .model import Entity, LineRecord, Model, Relationship, records_from_lines
from .options import GLOBAL_OPTION_NAMES, OptionMap

logger = logging.getLogger(__name__)


class ModelParser:
    """Parse numbered lines into a :class:`Model`.

    ``parse()`` returns every error it found. The model is only built when
    that list is empty; otherwise ``model`` stays ``None``.

    Grouping the lines (stage 1) stops at the first line that does not fit.
    The semantic stage (stage 2) runs in three steps: global options,
    entities, relationships. Each step reports all of its errors but the
    next step only runs when the previous one found none.
    """

    def __init__(self, lines: Sequence[LineRecord], context: Optional[ParseContext] = None) -> None:
        self.lines = list(lines)
        self.context = context if context is not None else ParseContext.default()
        self.model: Optional[Model] = None

        self._option_lines: List[LineRecord] = []
        self._entity_parsers: List[EntityParser] = []
        self._relationship_parsers: List[RelationshipParser] = []

    def parse(self) -> List[ParseError]:
        self.model = None
        self._option_lines = []
        self._entity_parsers = []
        self._relationship_parsers = []

        errors = self._group_lines()
        if errors:
            return errors
        logger.debug(
            "grouped %d option line(s), %d entity block(s), %d relationship(s)",
            len(self._option_lines),
            len(self._entity_parsers),
            len(self._relationship_parsers),
        )
        return self._assemble()

    def _group_lines(self) -> List[ParseError]:
        current: Optional[EntityParser] = None
        for line in self.lines:
            kind = classify_line(line)
            if kind in (LineKind.BLANK, LineKind.COMMENT_ONLY):
                continue
            if kind is LineKind.GLOBAL_OPTIONS:
                self._option_lines.append(line)
            elif kind is LineKind.ENTITY_NAME:
                current = EntityParser(line, context=self.context)
                self._entity_parsers.append(current)
            elif kind is LineKind.ENTITY_ATTRIBUTE:
                if current is None:
                    return [self.context.error(ErrorKind.ENTITY_NOT_OPENED, line)]
                current.add_attribute_line(line)
            elif kind is LineKind.RELATIONSHIP:
                current = None
                self._relationship_parsers.append(RelationshipParser([line], self.context))
            else:
                logger.debug("line %d cannot be classified", line.number)
                return [self.context.error(ErrorKind.UNKNOWN_LINE_TYPE, line)]
        return []

    def _assemble(self) -> List[ParseError]:
        errors: List[ParseError] = []

        options = OptionMap(GLOBAL_OPTION_NAMES)
        for line in self._option_lines:
            text = remove_comment(line.text.strip()).strip()
            try:
                raw = parse_option_list(strip_brackets(text, BracketPair.CURLY), line, self.context)
                options = apply_options(raw, GLOBAL_OPTION_NAMES, options, line, self.context)
            except ParseError as exc:
                errors.append(exc)
        if errors:
            logger.debug("global options failed with %d error(s)", len(errors))
            return errors

        entities: List[Entity] = []
        by_name: Dict[str, Entity] = {}
        for entity_parser in self._entity_parsers:
            try:
                entity = entity_parser.parse()
            except ParseError as exc:
                errors.append(exc)
                continue
            if entity.name in by_name:
                errors.append(
                    self.context.error(ErrorKind.DUPLICATE_ENTITY_NAME, entity_parser.name_line, entity.name)
                )
                continue
            by_name[entity.name] = entity
            entities.append(entity)
        if errors:
            logger.debug("entities failed with %d error(s)", len(errors))
            return errors

        relationships: List[Relationship] = []
        for relationship_parser in self._relationship_parsers:
            try:
                relationship = relationship_parser.parse()
            except ParseError as exc:
                errors.append(exc)
                continue
            relationships.append(relationship)
            for name in (relationship.entity1_name, relationship.entity2_name):
                if name not in by_name:
                    logger.debug("entity %r is only used in relationships, adding it", name)
                    entity = Entity(id=self.context.ids.entity_id(), name=name, dependency=Dependency.INDEPENDENT)
                    by_name[name] = entity
                    entities.append(entity)
        if errors:
            logger.debug("relationships failed with %d error(s)", len(errors))
            return errors

        entities = propagate_dependency(entities, relationships)
        relationships = align_relationships(entities, relationships)
        self.model = Model(entities=entities, relationships=relationships, options=options)
        logger.debug("built model with %d entities and %d relationships", len(entities), len(relationships))
        return []


def parse_lines(lines: Sequence[str], context: Optional[ParseContext] = None) -> Model:
    """Parse raw text lines, numbering them from 1.

    Raises :class:`ModelParseError` carrying every error found.
    """
    parser = ModelParser(records_from_lines(lines), context)
    errors = parser.parse()
    if errors or parser.model is None:
        raise ModelParseError(errors)
    return parser.model


def parse_text(text: str, context: Optional[ParseContext] = None) -> Model:
    return parse_lines(text.splitlines(), context)
