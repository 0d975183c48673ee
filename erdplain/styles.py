"""Central place for the notation-dependent DOT styling rules."""
from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple

from .enums import CardinalityElement, Dependency, OptionalityElement, ParentOrChild, RelationshipType

ONE = CardinalityElement.ONE
MANY = CardinalityElement.MANY
OPTIONAL = OptionalityElement.OPTIONAL
MANDATORY = OptionalityElement.MANDATORY


class Notation(Enum):
    DEFAULT = "default"
    IE = "ie"
    IE_STRICT = "ie-strict"
    IDEF1X = "idef1x"

    @classmethod
    def from_text(cls, text: str) -> "Notation":
        key = text.strip().lower()
        for notation in cls:
            if notation.value == key:
                return notation
        raise ValueError(f"unknown notation: {text}")


class RankDirection(Enum):
    LR = "LR"
    TB = "TB"

    @classmethod
    def from_text(cls, text: str) -> "RankDirection":
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown rank direction: {text}") from None


IE_ARROWS: Dict[Tuple[CardinalityElement, OptionalityElement], str] = {
    (ONE, OPTIONAL): "teeodot",
    (ONE, MANDATORY): "teetee",
    (MANY, OPTIONAL): "crowodot",
    (MANY, MANDATORY): "crowtee",
}

IDEF1X_CHILD_LABELS: Dict[Tuple[CardinalityElement, OptionalityElement], str] = {
    (ONE, MANDATORY): "1",
    (ONE, OPTIONAL): "Z",
    (MANY, MANDATORY): "P",
}


def _idef1x_arrow(cardinality: CardinalityElement, optionality: OptionalityElement, role: ParentOrChild) -> str:
    if cardinality is CardinalityElement.UNSPECIFIED:
        return "none"
    if role is ParentOrChild.PARENT:
        return "none" if optionality is MANDATORY else "odiamond"
    if role is ParentOrChild.CHILD:
        return "dot"
    return "none"


def arrow_style(
    notation: Notation,
    cardinality: CardinalityElement,
    optionality: OptionalityElement,
    role: ParentOrChild,
) -> str:
    if notation in (Notation.IE, Notation.IE_STRICT):
        return IE_ARROWS.get((cardinality, optionality), "none")
    if notation is Notation.IDEF1X:
        return _idef1x_arrow(cardinality, optionality, role)
    return "none"


def arrow_label(
    notation: Notation,
    cardinality: CardinalityElement,
    optionality: OptionalityElement,
    role: ParentOrChild,
) -> str:
    """Unescaped end label; only IDEF1X labels the child end."""
    if notation is Notation.IDEF1X and role is ParentOrChild.CHILD:
        return IDEF1X_CHILD_LABELS.get((cardinality, optionality), "")
    return ""


def edge_style(notation: Notation, relationship_type: RelationshipType) -> str:
    if notation is Notation.IE_STRICT:
        return "solid"
    return "dashed" if relationship_type is RelationshipType.NON_IDENTIFYING else "solid"


def node_shape(notation: Notation, dependency: Optional[Dependency]) -> str:
    if notation is Notation.IE_STRICT:
        return "record"
    return "record" if dependency is Dependency.INDEPENDENT else "Mrecord"
