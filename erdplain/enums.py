"""Enumerations shared by the parser, the model and the generator."""
from __future__ import annotations

from enum import Enum


class Dependency(Enum):
    UNSPECIFIED = "unspecified"
    INDEPENDENT = "independent"
    DEPENDENT = "dependent"


class CardinalityElement(Enum):
    UNSPECIFIED = "unspecified"
    ONE = "one"
    MANY = "many"


class OptionalityElement(Enum):
    UNSPECIFIED = "unspecified"
    OPTIONAL = "optional"
    MANDATORY = "mandatory"


class VerbDirection(Enum):
    UNSPECIFIED = "unspecified"
    FIRST_TO_SECOND = "first_to_second"
    SECOND_TO_FIRST = "second_to_first"

    def reverse(self) -> "VerbDirection":
        if self is VerbDirection.FIRST_TO_SECOND:
            return VerbDirection.SECOND_TO_FIRST
        if self is VerbDirection.SECOND_TO_FIRST:
            return VerbDirection.FIRST_TO_SECOND
        return self


class RelationshipType(Enum):
    UNSPECIFIED = "unspecified"
    IDENTIFYING = "identifying"
    NON_IDENTIFYING = "non_identifying"
    NON_SPECIFIC = "non_specific"


class ParentOrChild(Enum):
    NONE = "none"
    PARENT = "parent"
    CHILD = "child"


class ColorPair(Enum):
    """Named (dark, light) color pairs usable in ``color`` options."""

    NONE = ("", "")
    WHITE = ("#000000", "#ffffff")
    RED = ("#c00000", "#fcecec")
    BLUE = ("#000040", "#ececfc")
    GREEN = ("#002000", "#d0e0d0")
    YELLOW = ("#606000", "#fbfbdb")
    ORANGE = ("#804000", "#eee0a0")

    @property
    def dark(self) -> str:
        return self.value[0]

    @property
    def light(self) -> str:
        return self.value[1]

    @classmethod
    def from_name(cls, name: str) -> "ColorPair":
        """Look up a pair by name, case-insensitively. Blank means NONE."""
        if not name:
            return cls.NONE
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"invalid color pair value: {name}") from None
