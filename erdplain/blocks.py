"""Turn groups of classified lines into entities and relationships."""
from __future__ import annotations

from typing import List, Optional, Sequence, Set

from .context import ParseContext
from .errors import ErrorKind
from .lines import parse_attribute_line, parse_entity_name_line, parse_relationship_line
from .model import Entity, EntityAttribute, LineRecord, Relationship


class EntityParser:
    """One entity name line followed by its attribute lines."""

    def __init__(
        self,
        name_line: LineRecord,
        attribute_lines: Sequence[LineRecord] = (),
        context: Optional[ParseContext] = None,
    ) -> None:
        self.name_line = name_line
        self.attribute_lines: List[LineRecord] = list(attribute_lines)
        self.context = context if context is not None else ParseContext.default()

    def add_attribute_line(self, line: LineRecord) -> None:
        self.attribute_lines.append(line)

    def parse(self) -> Entity:
        attributes: List[EntityAttribute] = []
        seen: Set[str] = set()
        for line in self.attribute_lines:
            parsed = parse_attribute_line(line, self.context)
            if parsed.name in seen:
                raise self.context.error(ErrorKind.DUPLICATE_ATTR_NAME, line, parsed.name)
            seen.add(parsed.name)
            attributes.append(
                EntityAttribute(parsed.name, parsed.is_primary_key, parsed.is_foreign_key, parsed.options)
            )

        head = parse_entity_name_line(self.name_line, self.context)
        return Entity(
            id=self.context.ids.entity_id(),
            name=head.name,
            dependency=head.dependency,
            attributes=attributes,
            options=head.options,
        )


class RelationshipParser:
    def __init__(self, lines: Sequence[LineRecord], context: Optional[ParseContext] = None) -> None:
        self.lines = list(lines)
        self.context = context if context is not None else ParseContext.default()

    def parse(self) -> Relationship:
        if len(self.lines) != 1:
            raise self.context.error(ErrorKind.RELATIONSHIP_LINE_COUNT, None)

        parsed = parse_relationship_line(self.lines[0], self.context)
        return Relationship(
            id=self.context.ids.relationship_id(),
            entity1_name=parsed.entity1_name,
            entity1_dependency=parsed.entity1_dependency,
            entity2_name=parsed.entity2_name,
            entity2_dependency=parsed.entity2_dependency,
            cardinality=parsed.cardinality,
            verb_phrase=parsed.verb_phrase,
            options=parsed.options,
        )
