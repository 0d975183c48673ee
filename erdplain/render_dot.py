"""Graphviz DOT renderer for parsed ER models."""
from __future__ import annotations

import logging
from typing import Dict, List

from .enums import ColorPair, VerbDirection
from .model import Entity, Model, Relationship
from .options import OptionName
from .styles import Notation, RankDirection, arrow_label, arrow_style, edge_style, node_shape

logger = logging.getLogger(__name__)

MARK_SEPARATOR = "  "
LINK_PLACEHOLDER = "${entity}"

_ESCAPES = (
    ("\\", "\\\\"),  # must come first
    ("[", "\\["),
    ("]", "\\]"),
    ("(", "\\("),
    (")", "\\)"),
    ("<", "\\<"),
    (">", "\\>"),
    ("{", "\\{"),
    ("}", "\\}"),
    ("|", "\\|"),
    (" ", "\\ "),
    ("\t", "\\ \\ \\ \\ "),
)


def escape_label(text: str) -> str:
    """Escape text for use inside a record label."""
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def wrap_label(text: str) -> str:
    return f" {text} " if text else ""


def join_attributes(*attributes: str) -> str:
    return ", ".join(attr.strip() for attr in attributes if attr and attr.strip())


def quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class DotRenderer:
    def __init__(
        self,
        model: Model,
        notation: Notation = Notation.IE,
        font_name: str = "",
        color_pair: ColorPair = ColorPair.WHITE,
        rank_direction: RankDirection = RankDirection.LR,
    ) -> None:
        self.model = model
        self.notation = notation
        self.font_name = font_name
        self.color_pair = color_pair
        self.rank_direction = rank_direction

    def render(self) -> str:
        lines: List[str] = [f"digraph {quote(self._title() or 'erd')} {{"]
        lines.extend(f"  {line}" for line in self._default_lines())

        for entity in self.model.entities:
            lines.append("")
            lines.append(f"  //E [{entity.name}]")
            lines.append(f"  {self._entity_line(entity)}")

        ids = {entity.name: entity.id for entity in self.model.entities}
        for relationship in self.model.relationships:
            if relationship.options.get(OptionName.VERB_REVERSE, False):
                relationship = relationship.with_verb_phrase(relationship.verb_phrase.reversed())
            lines.append("")
            lines.append(f"  //R [{relationship.entity1_name}]--[{relationship.entity2_name}]")
            lines.append(f"  {self._relationship_line(relationship, ids)}")

        lines.append("}")
        logger.debug(
            "rendered %d entities and %d relationships as %s",
            len(self.model.entities),
            len(self.model.relationships),
            self.notation.value,
        )
        return "\n".join(lines) + "\n"

    def _title(self) -> str:
        return self.model.options.get(OptionName.TITLE, "")

    def _default_lines(self) -> List[str]:
        font = f"fontname={quote(self.font_name)}" if self.font_name else ""
        title = self._title()
        graph = join_attributes(
            f"label={quote(title)}" if title else "",
            "labelloc=t" if title else "",
            f"fontsize={self.model.options.get(OptionName.TITLE_SIZE, OptionName.TITLE_SIZE.default)}",
            f"rankdir={self.rank_direction.value}",
            font,
        )
        colored = self.color_pair is not ColorPair.NONE
        node = join_attributes(
            "shape=record",
            "style=filled" if colored else "",
            f"color={quote(self.color_pair.dark)}" if colored else "",
            f"fillcolor={quote(self.color_pair.light)}" if colored else "",
            "fontsize=10",
            font,
        )
        edge = join_attributes("dir=both", "fontsize=9", font)
        return [f"graph [{graph}];", f"node [{node}];", f"edge [{edge}];"]

    def _entity_line(self, entity: Entity) -> str:
        label = self._node_label(entity)
        if self.rank_direction is RankDirection.TB:
            label = "{" + label + "}"

        color: ColorPair = entity.options.get(OptionName.COLOR, ColorPair.NONE)
        colored = color is not ColorPair.NONE
        link = self.model.options.get(OptionName.LINK_FILES, "")
        attributes = join_attributes(
            f"shape={node_shape(self.notation, entity.dependency)}",
            f'label="{label}"',
            "style=filled" if colored else "",
            f'color="{color.dark}"' if colored else "",
            f'fillcolor="{color.light}"' if colored else "",
            f'URL="{link.replace(LINK_PLACEHOLDER, entity.name)}"' if link else "",
            f'tooltip="{escape_label(entity.name)}"',
        )
        return f"{entity.id} [{attributes}]"

    def _node_label(self, entity: Entity) -> str:
        name = entity.name
        mark = entity.options.get(OptionName.MARK, "")
        if mark:
            name += MARK_SEPARATOR + mark
        label = escape_label(name)
        if not entity.attributes:
            return label

        keys = "|".join("*" if attr.is_primary_key else " " for attr in entity.attributes)
        names = []
        for attr in entity.attributes:
            text = escape_label(attr.name)
            if attr.is_foreign_key:
                text += escape_label(" (FK)")
            attr_mark = attr.options.get(OptionName.MARK, "")
            if attr_mark:
                text += escape_label(MARK_SEPARATOR + attr_mark)
            names.append(text + "\\l")
        return label + "|{{" + keys + "}|{" + "|".join(names) + "}}"

    def _relationship_line(self, relationship: Relationship, ids: Dict[str, str]) -> str:
        cardinality = relationship.cardinality
        sides = (
            (cardinality.cardinality1, cardinality.optionality1, relationship.parent_or_child[0], OptionName.N1),
            (cardinality.cardinality2, cardinality.optionality2, relationship.parent_or_child[1], OptionName.N2),
        )
        attributes = []
        for (card, opt, role, number), (arrow_name, label_name) in zip(
            sides, (("arrowtail", "taillabel"), ("arrowhead", "headlabel"))
        ):
            attributes.append(f"{arrow_name}={arrow_style(self.notation, card, opt, role)}")
            text = relationship.options.get(number, "") or arrow_label(self.notation, card, opt, role)
            attributes.append(f'{label_name}="{escape_label(wrap_label(text))}"')

        attributes.append(f"style={edge_style(self.notation, relationship.relationship_type)}")
        attributes.append(f'label="{self._edge_label(relationship)}"')

        source = ids.get(relationship.entity1_name, relationship.entity1_name)
        target = ids.get(relationship.entity2_name, relationship.entity2_name)
        return f"{source} -> {target} [{join_attributes(*attributes)}]"

    def _edge_label(self, relationship: Relationship) -> str:
        verb = relationship.verb_phrase
        if not verb.text:
            return ""
        if verb.direction is VerbDirection.FIRST_TO_SECOND:
            text = f"[{verb.text}>"
        elif verb.direction is VerbDirection.SECOND_TO_FIRST:
            text = f"<{verb.text}]"
        else:
            text = verb.text
        return escape_label(wrap_label(text))


def render_dot(
    model: Model,
    notation: Notation = Notation.IE,
    font_name: str = "",
    color_pair: ColorPair = ColorPair.WHITE,
    rank_direction: RankDirection = RankDirection.LR,
) -> str:
    return DotRenderer(model, notation, font_name, color_pair, rank_direction).render()
