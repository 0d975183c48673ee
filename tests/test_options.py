from __future__ import annotations

import pytest

from erdplain.enums import ColorPair
from erdplain.options import (
    GLOBAL_OPTION_NAMES,
    OptionMap,
    OptionName,
    coerce_option_value,
    to_bool,
)


def test_option_map_is_seeded_with_defaults() -> None:
    options = OptionMap(GLOBAL_OPTION_NAMES)
    assert list(options) == [OptionName.TITLE, OptionName.TITLE_SIZE, OptionName.LINK_FILES]
    assert options[OptionName.TITLE_SIZE] == 12
    assert len(OptionMap()) == len(OptionName)


def test_every_option_name_is_its_own_member() -> None:
    assert len(OptionName) == 8
    assert len({name.name_in_files for name in OptionName}) == 8
    assert OptionName.MARK is not OptionName.TITLE
    assert OptionName.LINK_FILES.default == ""
    assert OptionName.N2.value_type is str


def test_option_map_rejects_wrong_value_type() -> None:
    options = OptionMap(values={OptionName.COLOR: ColorPair.RED})
    assert options[OptionName.COLOR] is ColorPair.RED
    with pytest.raises(TypeError):
        OptionMap(values={OptionName.TITLE_SIZE: "12"})
    with pytest.raises(TypeError):
        options.updated({OptionName.TITLE_SIZE: True})


def test_option_map_only_holds_its_own_names() -> None:
    with pytest.raises(KeyError):
        OptionMap(GLOBAL_OPTION_NAMES, {OptionName.MARK: "m"})


def test_updated_returns_a_new_map() -> None:
    options = OptionMap(GLOBAL_OPTION_NAMES)
    changed = options.updated({OptionName.TITLE: "Shop"})
    assert options[OptionName.TITLE] == ""
    assert changed[OptionName.TITLE] == "Shop"
    assert list(changed) == list(GLOBAL_OPTION_NAMES)
    assert hash(changed) == hash(OptionMap(GLOBAL_OPTION_NAMES, {OptionName.TITLE: "Shop"}))


def test_option_names_in_files() -> None:
    assert OptionName.TITLE_SIZE.name_in_files == "title-size"
    assert OptionName.from_text("Verb-Reverse") is OptionName.VERB_REVERSE
    assert OptionName.from_text("unknown") is None


@pytest.mark.parametrize("text, expected", [("", False), ("true", True), ("TRUE", True), ("False", False)])
def test_to_bool(text: str, expected: bool) -> None:
    assert to_bool(text) is expected


def test_to_bool_rejects_other_words() -> None:
    with pytest.raises(ValueError):
        to_bool("yes")


def test_coerce_option_value() -> None:
    assert coerce_option_value(OptionName.TITLE_SIZE, "14") == 14
    assert coerce_option_value(OptionName.TITLE_SIZE, "") is None
    assert coerce_option_value(OptionName.COLOR, "") is ColorPair.NONE
    assert coerce_option_value(OptionName.COLOR, "yellow") is ColorPair.YELLOW
    with pytest.raises(ValueError):
        coerce_option_value(OptionName.TITLE_SIZE, "1.5")
