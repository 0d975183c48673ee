"""Per-parse state threaded through every parser call."""
from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from .errors import ErrorKind, ParseError
from .messages import MessageCatalog, load_messages
from .model import LineRecord


class IdAllocator:
    """Hands out ``entity_<n>`` / ``relationship_<n>`` ids, never reusing one."""

    def __init__(self) -> None:
        self._counters: Dict[str, Iterator[int]] = {}
        self._lock = threading.Lock()

    def next_id(self, prefix: str) -> str:
        with self._lock:
            counter = self._counters.setdefault(prefix, itertools.count(1))
            return f"{prefix}_{next(counter)}"

    def entity_id(self) -> str:
        return self.next_id("entity")

    def relationship_id(self) -> str:
        return self.next_id("relationship")


@dataclass(frozen=True)
class ParseContext:
    messages: MessageCatalog
    ids: IdAllocator = field(default_factory=IdAllocator)

    @classmethod
    def default(cls) -> "ParseContext":
        return cls(messages=load_messages())

    def error(self, kind: ErrorKind, line: Optional[LineRecord], *params: object) -> ParseError:
        """Build a :class:`ParseError` worded with this context's messages."""
        return ParseError(
            kind,
            self.messages.format(kind, *params),
            params=params,
            line=line,
            line_label=self.messages.line_label,
        )
