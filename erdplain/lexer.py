"""Quote-aware helpers for splitting notation lines into bracketed fields.

Every search in this module skips characters that sit between a pair of
double quotes, so ``"[not a bracket]"`` is ordinary text.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional, Sequence

QUOTE = '"'
COMMENT_CHAR = "#"


class BracketPair(Enum):
    SQUARE = ("[", "]")
    ROUND = ("(", ")")
    ANGLE = ("<", ">")
    CURLY = ("{", "}")

    @property
    def left(self) -> str:
        return self.value[0]

    @property
    def right(self) -> str:
        return self.value[1]

    @classmethod
    def by_left(cls, char: str) -> Optional["BracketPair"]:
        for pair in cls:
            if pair.left == char:
                return pair
        return None


ALL_BRACKETS = tuple(BracketPair)
ENTITY_BRACKETS = (BracketPair.SQUARE, BracketPair.ROUND)


def index_unquoted(text: str, char: str) -> int:
    """Like ``str.find`` but ignores occurrences inside double quotes."""
    quoted = False
    for index, current in enumerate(text):
        if not quoted and current == char:
            return index
        if current == QUOTE:
            quoted = not quoted
    return -1


def first_unquoted(text: str, chars: Iterable[str]) -> int:
    """Position of the earliest unquoted character out of ``chars``, or -1."""
    found = [pos for pos in (index_unquoted(text, char) for char in chars) if pos >= 0]
    return min(found) if found else -1


def find_first_char(text: str, chars: Iterable[str]) -> Optional[str]:
    pos = first_unquoted(text, chars)
    return text[pos] if pos >= 0 else None


def remove_comment(text: str) -> str:
    pos = index_unquoted(text, COMMENT_CHAR)
    return text if pos < 0 else text[:pos]


def split(text: str, pairs: Sequence[BracketPair] = ALL_BRACKETS) -> List[str]:
    """Split ``text`` into free-text runs and single bracketed groups.

    A group runs from the first unquoted left bracket of any pair in
    ``pairs`` to the first unquoted right bracket of the same pair. If
    that right bracket is missing, the rest of the text becomes the last
    field unchanged. Joining the result gives back ``text``.
    """
    fields: List[str] = []
    while text:
        pos = first_unquoted(text, [pair.left for pair in pairs])
        if pos < 0:
            fields.append(text)
            break
        if pos > 0:
            fields.append(text[:pos])
            text = text[pos:]

        pair = BracketPair.by_left(text[0])
        end = index_unquoted(text, pair.right)
        if end < 0:
            fields.append(text)
            break
        fields.append(text[: end + 1])
        text = text[end + 1 :]
    return fields


def split_unquoted(text: str, delimiter: str) -> List[str]:
    """Split on ``delimiter`` outside quotes; every piece is stripped.

    Blank input gives an empty list.
    """
    text = (text or "").strip()
    if not text:
        return []

    pieces: List[str] = []
    current: List[str] = []
    quoted = False
    for char in text:
        if char == QUOTE:
            quoted = not quoted
            current.append(char)
        elif not quoted and char == delimiter:
            pieces.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    pieces.append("".join(current).strip())
    return pieces


def is_enclosed(text: str, *pairs: BracketPair) -> bool:
    return any(text.startswith(pair.left) and text.endswith(pair.right) for pair in pairs)


def starts_with_left(text: str, *pairs: BracketPair) -> bool:
    return any(text.startswith(pair.left) for pair in pairs)


def strip_brackets(text: str, *pairs: BracketPair) -> str:
    """Drop the enclosing brackets of the first matching pair and strip."""
    for pair in pairs:
        if is_enclosed(text, pair):
            return text[1:-1].strip()
    return text


def is_quoted(text: str) -> bool:
    return len(text) >= 2 and text.startswith(QUOTE) and text.endswith(QUOTE)


def unquote(text: str) -> str:
    """Remove one layer of surrounding double quotes, if present."""
    return text[1:-1] if is_quoted(text) else text
