"""Domain objects produced by parsing the ER notation."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .enums import (
    CardinalityElement,
    Dependency,
    OptionalityElement,
    ParentOrChild,
    RelationshipType,
    VerbDirection,
)
from .inference import judge_parent_or_child, judge_relationship_type
from .options import (
    ATTR_OPTION_NAMES,
    ENTITY_OPTION_NAMES,
    GLOBAL_OPTION_NAMES,
    RELATIONSHIP_OPTION_NAMES,
    OptionMap,
)


@dataclass(frozen=True)
class LineRecord:
    """One input line. ``number`` is 1-based, or 0 for synthetic lines."""

    number: int
    text: str


NO_LINE = LineRecord(0, "")


def records_from_lines(lines: Sequence[str]) -> List[LineRecord]:
    return [LineRecord(index + 1, text if text is not None else "") for index, text in enumerate(lines)]


@dataclass(frozen=True)
class CardinalityWithOptionality:
    cardinality1: CardinalityElement
    optionality1: OptionalityElement
    cardinality2: CardinalityElement
    optionality2: OptionalityElement


UNSPECIFIED_CARDINALITY = CardinalityWithOptionality(
    CardinalityElement.UNSPECIFIED,
    OptionalityElement.UNSPECIFIED,
    CardinalityElement.UNSPECIFIED,
    OptionalityElement.UNSPECIFIED,
)


@dataclass(frozen=True)
class VerbPhrase:
    text: str = ""
    direction: VerbDirection = VerbDirection.UNSPECIFIED

    def reversed(self) -> "VerbPhrase":
        return VerbPhrase(self.text, self.direction.reverse())


@dataclass(frozen=True)
class EntityAttribute:
    name: str
    is_primary_key: bool = False
    is_foreign_key: bool = False
    options: OptionMap = field(default_factory=lambda: OptionMap(ATTR_OPTION_NAMES))

    @property
    def is_primary_foreign_key(self) -> bool:
        return self.is_primary_key and self.is_foreign_key


@dataclass(frozen=True)
class Entity:
    id: str
    name: str
    dependency: Dependency = Dependency.INDEPENDENT
    attributes: Tuple[EntityAttribute, ...] = ()
    options: OptionMap = field(default_factory=lambda: OptionMap(ENTITY_OPTION_NAMES))

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", tuple(self.attributes))

    def as_dependent(self) -> "Entity":
        """Return this entity marked dependent, keeping its id."""
        if self.dependency is Dependency.DEPENDENT:
            return self
        return replace(self, dependency=Dependency.DEPENDENT)


@dataclass(frozen=True)
class Relationship:
    id: str
    entity1_name: str
    entity1_dependency: Dependency
    entity2_name: str
    entity2_dependency: Dependency
    cardinality: CardinalityWithOptionality = UNSPECIFIED_CARDINALITY
    verb_phrase: VerbPhrase = VerbPhrase()
    options: OptionMap = field(default_factory=lambda: OptionMap(RELATIONSHIP_OPTION_NAMES))
    relationship_type: RelationshipType = field(init=False)
    parent_or_child: Tuple[ParentOrChild, ParentOrChild] = field(init=False)

    def __post_init__(self) -> None:
        c1 = self.cardinality.cardinality1
        c2 = self.cardinality.cardinality2
        d1 = self.entity1_dependency
        d2 = self.entity2_dependency
        object.__setattr__(self, "relationship_type", judge_relationship_type(c1, c2, d1, d2))
        object.__setattr__(self, "parent_or_child", judge_parent_or_child(c1, c2, d1, d2))

    def with_dependencies(self, dependency1: Dependency, dependency2: Dependency) -> "Relationship":
        return replace(self, entity1_dependency=dependency1, entity2_dependency=dependency2)

    def with_verb_phrase(self, verb_phrase: VerbPhrase) -> "Relationship":
        return replace(self, verb_phrase=verb_phrase)

    def is_dependent_side(self, entity_name: str) -> bool:
        """True if ``entity_name`` takes part in this relationship flagged dependent."""
        return (
            self.entity1_name == entity_name and self.entity1_dependency is Dependency.DEPENDENT
        ) or (
            self.entity2_name == entity_name and self.entity2_dependency is Dependency.DEPENDENT
        )


@dataclass(frozen=True)
class Model:
    entities: Tuple[Entity, ...] = ()
    relationships: Tuple[Relationship, ...] = ()
    options: OptionMap = field(default_factory=lambda: OptionMap(GLOBAL_OPTION_NAMES))

    def __post_init__(self) -> None:
        object.__setattr__(self, "entities", tuple(self.entities))
        object.__setattr__(self, "relationships", tuple(self.relationships))

    def entity_by_name(self) -> Dict[str, Entity]:
        return {entity.name: entity for entity in self.entities}

    def entity(self, name: str) -> Optional[Entity]:
        return self.entity_by_name().get(name)
