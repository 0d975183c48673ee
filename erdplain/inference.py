"""Derivation of relationship semantics and entity dependency."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Sequence, Tuple

from .enums import CardinalityElement, Dependency, ParentOrChild, RelationshipType

if TYPE_CHECKING:
    from .model import Entity, Relationship

logger = logging.getLogger(__name__)

ONE = CardinalityElement.ONE
MANY = CardinalityElement.MANY
UNSPECIFIED = CardinalityElement.UNSPECIFIED
INDEPENDENT = Dependency.INDEPENDENT
DEPENDENT = Dependency.DEPENDENT

PARENT_CHILD = (ParentOrChild.PARENT, ParentOrChild.CHILD)
CHILD_PARENT = (ParentOrChild.CHILD, ParentOrChild.PARENT)
CHILD_CHILD = (ParentOrChild.CHILD, ParentOrChild.CHILD)
NONE_NONE = (ParentOrChild.NONE, ParentOrChild.NONE)

# keyed by (dependency1, dependency2); pairs missing from a table give NONE_NONE
ONE_TO_ONE_ROLES = {
    (INDEPENDENT, INDEPENDENT): PARENT_CHILD,
    (INDEPENDENT, DEPENDENT): PARENT_CHILD,
    (DEPENDENT, INDEPENDENT): CHILD_PARENT,
}
UNSPECIFIED_ROLES = {
    (INDEPENDENT, DEPENDENT): PARENT_CHILD,
    (DEPENDENT, INDEPENDENT): CHILD_PARENT,
}


def judge_relationship_type(
    cardinality1: CardinalityElement,
    cardinality2: CardinalityElement,
    dependency1: Dependency,
    dependency2: Dependency,
) -> RelationshipType:
    both_independent = dependency1 is INDEPENDENT and dependency2 is INDEPENDENT
    pair = (cardinality1, cardinality2)

    if pair in ((ONE, ONE), (ONE, MANY), (MANY, ONE)):
        return RelationshipType.NON_IDENTIFYING if both_independent else RelationshipType.IDENTIFYING
    if pair == (MANY, MANY):
        return RelationshipType.NON_SPECIFIC
    if pair == (UNSPECIFIED, UNSPECIFIED):
        return RelationshipType.UNSPECIFIED if both_independent else RelationshipType.IDENTIFYING
    # one side given, the other not: cannot be judged
    return RelationshipType.UNSPECIFIED


def judge_parent_or_child(
    cardinality1: CardinalityElement,
    cardinality2: CardinalityElement,
    dependency1: Dependency,
    dependency2: Dependency,
) -> Tuple[ParentOrChild, ParentOrChild]:
    """Roles of side 1 and side 2. ``(NONE, NONE)`` when they cannot be judged."""
    pair = (cardinality1, cardinality2)
    dependencies = (dependency1, dependency2)

    if pair == (ONE, ONE):
        return ONE_TO_ONE_ROLES.get(dependencies, NONE_NONE)
    if pair == (ONE, MANY):
        return PARENT_CHILD
    if pair == (MANY, ONE):
        return CHILD_PARENT
    if pair == (MANY, MANY):
        return CHILD_CHILD
    if pair == (UNSPECIFIED, UNSPECIFIED):
        return UNSPECIFIED_ROLES.get(dependencies, NONE_NONE)
    return NONE_NONE


def must_be_dependent(entity: "Entity", relationships: Iterable["Relationship"]) -> bool:
    """True if an independent entity has to be upgraded to dependent."""
    if any(attr.is_primary_foreign_key for attr in entity.attributes):
        return True
    return any(
        rel.relationship_type is RelationshipType.IDENTIFYING and rel.is_dependent_side(entity.name)
        for rel in relationships
    )


def propagate_dependency(
    entities: Sequence["Entity"], relationships: Sequence["Relationship"]
) -> List["Entity"]:
    """Return ``entities`` with every entity that must be dependent upgraded.

    Only independent entities are considered; declared dependents are kept. Upgraded
    entities replace the original at the same index and keep their id.
    """
    result = list(entities)
    for index, entity in enumerate(result):
        if entity.dependency is not INDEPENDENT:
            continue
        if must_be_dependent(entity, relationships):
            logger.debug("entity %r is inferred to be dependent", entity.name)
            result[index] = entity.as_dependent()
    return result


def allows_dependencies(
    cardinality1: CardinalityElement,
    cardinality2: CardinalityElement,
    dependency1: Dependency,
    dependency2: Dependency,
) -> bool:
    """Whether the dependency flags fit the cardinality.

    At most one side may be dependent, the one side of a one-to-many is
    never dependent, and many-to-many sides are always independent.
    """
    dependent1 = dependency1 is DEPENDENT
    dependent2 = dependency2 is DEPENDENT
    if dependent1 and dependent2:
        return False
    if (cardinality1, cardinality2) == (ONE, MANY):
        return not dependent1
    if (cardinality1, cardinality2) == (MANY, ONE):
        return not dependent2
    if (cardinality1, cardinality2) == (MANY, MANY):
        return not (dependent1 or dependent2)
    return True


def align_relationships(
    entities: Sequence["Entity"], relationships: Sequence["Relationship"]
) -> List["Relationship"]:
    """Mark relationship sides dependent where their entity ended up dependent.

    A side is only flagged when the relationship still passes
    :func:`allows_dependencies` afterwards; side 1 is tried before side 2.
    Relationships rebuilt this way get their type and roles judged again;
    ids are kept.
    """
    dependent = {entity.name for entity in entities if entity.dependency is DEPENDENT}
    result = []
    for rel in relationships:
        c1 = rel.cardinality.cardinality1
        c2 = rel.cardinality.cardinality2
        d1, d2 = rel.entity1_dependency, rel.entity2_dependency
        if rel.entity1_name in dependent and allows_dependencies(c1, c2, DEPENDENT, d2):
            d1 = DEPENDENT
        if rel.entity2_name in dependent and allows_dependencies(c1, c2, d1, DEPENDENT):
            d2 = DEPENDENT
        if (d1, d2) != (rel.entity1_dependency, rel.entity2_dependency):
            logger.debug("relationship %s is judged again with dependent entities", rel.id)
            rel = rel.with_dependencies(d1, d2)
        result.append(rel)
    return result
