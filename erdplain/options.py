"""Typed option names, per-context option sets and the option map."""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple, Type

from .enums import ColorPair


class OptionName(Enum):
    """Every option the notation knows, with its spelling, value type and default."""

    TITLE = ("title", str, "")
    TITLE_SIZE = ("title-size", int, 12)
    LINK_FILES = ("link-files", str, "")
    COLOR = ("color", ColorPair, ColorPair.NONE)
    MARK = ("mark", str, "")
    N1 = ("n1", str, "")
    N2 = ("n2", str, "")
    VERB_REVERSE = ("verb-reverse", bool, False)

    @property
    def name_in_files(self) -> str:
        """The spelling used in source text, e.g. ``title-size``."""
        return self.value[0]

    @property
    def value_type(self) -> Type[Any]:
        return self.value[1]

    @property
    def default(self) -> Any:
        return self.value[2]

    @classmethod
    def from_text(cls, text: str) -> Optional["OptionName"]:
        key = text.strip().lower()
        for name in cls:
            if name.name_in_files == key:
                return name
        return None


GLOBAL_OPTION_NAMES: Tuple[OptionName, ...] = (
    OptionName.TITLE,
    OptionName.TITLE_SIZE,
    OptionName.LINK_FILES,
)
ENTITY_OPTION_NAMES: Tuple[OptionName, ...] = (OptionName.COLOR, OptionName.MARK)
ATTR_OPTION_NAMES: Tuple[OptionName, ...] = (OptionName.MARK,)
RELATIONSHIP_OPTION_NAMES: Tuple[OptionName, ...] = (
    OptionName.N1,
    OptionName.N2,
    OptionName.VERB_REVERSE,
)


def check_option_value(name: OptionName, value: Any) -> None:
    if type(value) is not name.value_type:
        raise TypeError(
            f"option {name.name} expects {name.value_type.__name__}, "
            f"got {type(value).__name__}"
        )


class OptionMap(Mapping):
    """Read-only option values keyed by :class:`OptionName`.

    Every name in ``names`` starts at its default; ``values`` overrides
    some of them. Values must match the declared type of their option
    exactly; a mismatch is a programming error and raises :class:`TypeError`.
    """

    def __init__(
        self,
        names: Iterable[OptionName] = tuple(OptionName),
        values: Optional[Mapping] = None,
    ) -> None:
        self._values: Dict[OptionName, Any] = {name: name.default for name in names}
        for name, value in (values or {}).items():
            if name not in self._values:
                raise KeyError(f"option {name.name} is not part of this map")
            check_option_value(name, value)
            self._values[name] = value

    def updated(self, values: Mapping) -> "OptionMap":
        """Return a copy with ``values`` laid over the current ones."""
        merged = dict(self._values)
        merged.update(values)
        return OptionMap(self._values, merged)

    def __getitem__(self, name: OptionName) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[OptionName]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OptionMap):
            return self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        body = ", ".join(f"{name.name_in_files}={value!r}" for name, value in self._values.items())
        return f"OptionMap({body})"


def to_bool(text: str) -> bool:
    if text == "":
        return False
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"invalid boolean value: {text}")


def to_int(text: str) -> Optional[int]:
    if text == "":
        return None
    return int(text)


def to_float(text: str) -> Optional[float]:
    if text == "":
        return None
    return float(text)


COERCERS: Dict[type, Callable[[str], Any]] = {
    str: str,
    bool: to_bool,
    int: to_int,
    float: to_float,
    ColorPair: ColorPair.from_name,
}


def coerce_option_value(name: OptionName, text: str) -> Any:
    """Convert raw option text to the declared type of ``name``.

    Returns ``None`` when a blank numeric value should keep the default.
    Raises :class:`ValueError` for text that does not fit the type.
    """
    try:
        coercer = COERCERS[name.value_type]
    except KeyError:
        raise TypeError(f"no coercion for option type {name.value_type.__name__}") from None
    return coercer(text)
