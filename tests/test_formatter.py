import copy
from dataclasses import dataclass
import enum
import functools
import weakref

from diffpack.core.types import MISSING
from diffpack.render import align_rows, format_full, format_short, indent_continuation, sorted_keys


@dataclass
class Point:
    x: int
    y: int


class Shade(enum.Enum):
    DARK = "dark"


class Box:
    def __init__(self, value: object) -> None:
        self.value = value


def _sample_function() -> None:
    return None


def test_short_scalars_show_type_when_asked() -> None:
    assert format_short(1) == "int(1)"
    assert format_short(1, False) == "1"
    assert format_short(1.5) == "float(1.5)"
    assert format_short(1 + 2j) == "complex(1+2j)"
    assert format_short(1 + 2j, False) == "(1+2j)"
    assert format_short(True) == "True"
    assert format_short("x") == "'x'"
    assert format_short(b"x") == "b'x'"


def test_short_absent_values() -> None:
    assert format_short(None) == "None"
    assert format_short(MISSING) == "<missing>"


def test_short_composites_show_first_entry_only() -> None:
    assert format_short([1, 2, 3]) == "[1, ...]"
    assert format_short([7]) == "[7]"
    assert format_short([]) == "[]"
    assert format_short((1,)) == "(1,)"
    assert format_short(()) == "()"
    assert format_short(set()) == "set()"
    assert format_short({3, 1, 2}) == "{1, ...}"
    assert format_short({"b": 2, "a": 1}) == "{'a': 1, ...}"


def test_short_elides_content_below_two_levels() -> None:
    assert format_short([[1, 2]]) == "[[...]]"
    assert format_short({"a": [1, 2], "b": 1}, False) == "{'a': [...], ...}"
    assert format_short([[]]) == "[[]]"


def test_structs_are_always_named() -> None:
    assert format_short(Point(1, 2)) == "Point(x=1, ...)"
    assert format_short(Point(1, 2), False) == "Point(x=1, ...)"
    assert format_short([Point(1, 2)]) == "[Point(...)]"


def test_enum_function_and_handle_renderings() -> None:
    assert format_short(Shade.DARK) == "Shade.DARK"
    assert format_short(_sample_function) == "<function _sample_function>"
    assert format_short(functools.partial(_sample_function)) == "<partial _sample_function>"
    assert format_short(int) == "<class 'int'>"
    assert format_short(object()).startswith("<object at 0x")


def test_weak_reference_rendering() -> None:
    target = Box(1)
    live = weakref.ref(target)
    dead = weakref.ref(Box(1))

    assert format_short(live) == "weakref(Box(value=1))"
    assert format_short(dead) == "weakref(None)"
    assert format_short(dead, False) == "None"


def test_cycles_render_marker() -> None:
    looped: list[object] = []
    looped.append(looped)

    assert format_short(looped) == "[<cycle>]"
    assert format_full(looped) == "[<cycle>]"

    box = Box(None)
    box.value = box
    assert format_full(box) == "Box(value=<cycle>)"


def test_full_lists_one_entry_per_line() -> None:
    assert format_full(["a", "b"]) == "[\n    'a',\n    'b',\n]"
    assert format_full(["a"]) == "['a']"
    assert format_full(7) == "int(7)"


def test_full_aligns_keys_in_a_column() -> None:
    rendered = format_full({"bbb": 2, "a": 1})

    assert rendered == "{\n    'a':   1,\n    'bbb': 2,\n}"


def test_full_nested_blocks_indent_each_level() -> None:
    rendered = format_full({"b": 1, "a": [1, 2]})

    assert rendered == (
        "{\n"
        "    'a': [\n"
        "        1,\n"
        "        2,\n"
        "    ],\n"
        "    'b': 1,\n"
        "}"
    )


def test_full_struct_fields() -> None:
    assert format_full(Point(1, 2)) == "Point(\n    x= 1,\n    y= 2,\n)"


def test_rendering_is_independent_of_insertion_order_and_copies() -> None:
    left = {"x": [1, {"k": 2}], "y": {3, 4}}
    right = {"y": {4, 3}, "x": [1, {"k": 2}]}

    assert format_full(left) == format_full(right)
    assert format_full(left) == format_full(copy.deepcopy(left))
    assert format_short(left) == format_short(right)


def test_sorted_keys_falls_back_for_mixed_types() -> None:
    assert sorted_keys([3, 1, 2]) == [1, 2, 3]
    assert sorted_keys(["b", 1]) == [1, "b"]


def test_align_rows_pads_labels_and_breaks_on_multiline_rows() -> None:
    rows = [("a:", "1,"), ("bbb:", "2,"), ("c:", "[\n    1,\n],"), ("d:", "4,")]

    assert align_rows(rows) == [
        "a:   1,",
        "bbb: 2,",
        "c:   [",
        "    1,",
        "],",
        "d: 4,",
    ]
    assert align_rows([("", "x,"), ("", "y,")]) == ["x,", "y,"]


def test_indent_continuation_keeps_first_line() -> None:
    assert indent_continuation("one") == "one"
    assert indent_continuation("one\ntwo") == "one\n    two"


def test_frozenset_keys_render_in_a_stable_order() -> None:
    first = frozenset({1})
    second = frozenset({2})
    expected = "{\n    {1}: 1,\n    {2}: 2,\n}"

    assert format_full({first: 1, second: 2}) == expected
    assert format_full({second: 2, first: 1}) == expected
    assert sorted_keys([second, first]) == [first, second]
    assert sorted_keys([first, second]) == [first, second]


def test_sorted_keys_orders_nested_sets_and_nan() -> None:
    nan = float("nan")

    assert sorted_keys([frozenset({3, 1}), frozenset({2})]) == sorted_keys(
        [frozenset({2}), frozenset({1, 3})]
    )
    assert sorted_keys([(frozenset({2}),), (frozenset({1}),)]) == [
        (frozenset({1}),),
        (frozenset({2}),),
    ]
    assert sorted_keys([2.0, nan, 1.0])[:2] == [1.0, 2.0]
    assert sorted_keys([nan, 2.0, 1.0])[:2] == [1.0, 2.0]
