from dataclasses import dataclass
import logging

import pytest

from diffpack.core.config import EMIT_FULL, EMIT_PATH_ONLY, Config, verbosity
from diffpack.core.exceptions import DiffConfigError
from diffpack.diff import (
    CountEmitter,
    IdentityTracker,
    PrintEmitter,
    assert_equal,
    check,
    compare,
    each,
    log,
    render_differences,
    render_summary,
)
from diffpack.diff.models import Difference


@dataclass
class Point:
    x: int
    y: int


def test_each_reports_one_line_per_difference() -> None:
    lines: list[str] = []

    each(lines.append, {"a": 1, "b": [1, 2]}, {"a": 2, "b": [1, 2, 3]})

    assert lines == ["['a']: 1 != 2", "['b']: {len 2} != {len 3}"]


def test_path_only_verbosity_reports_paths() -> None:
    lines: list[str] = []

    each(lines.append, {"a": 1, "b": 2}, {"a": 3, "b": 4}, EMIT_PATH_ONLY)

    assert lines == ["['a']", "['b']"]


def test_full_verbosity_renders_both_values() -> None:
    lines: list[str] = []

    each(lines.append, Point(1, 2), Point(1, 3), EMIT_FULL)
    each(lines.append, ["a"], ["a", "b"], verbosity("full"))

    assert lines == [
        ".y: int(2) != int(3)",
        "['a'] != [\n        'a',\n        'b',\n    ]",
    ]


def test_config_argument_is_the_base_for_options() -> None:
    lines: list[str] = []
    base = Config(level="path-only")

    each(lines.append, [1], [2], config=base)
    each(lines.append, [1], [2], verbosity("auto"), config=base)

    assert lines == ["[0]", "[0]: 1 != 2"]


def test_bad_level_fails_before_comparing() -> None:
    reported: list[str] = []

    with pytest.raises(DiffConfigError, match="bad verbosity level"):
        each(reported.append, 1, 2, config=Config(level="loud"))  # type: ignore[arg-type]

    assert reported == []


def test_log_attributes_records_to_the_caller(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("diffkit.tests")
    caplog.set_level(logging.INFO, logger="diffkit.tests")

    log(logger, {"a": 1}, {"a": 2, "b": 3})

    records = [record for record in caplog.records if record.name == "diffkit.tests"]
    assert [record.getMessage() for record in records] == ["['a']: 1 != 2", "['b']: (added) 3"]
    for record in records:
        assert record.funcName == "test_log_attributes_records_to_the_caller"
        assert record.pathname == __file__
        assert record.levelno == logging.INFO


def test_log_uses_requested_level(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("diffkit.tests.level")
    caplog.set_level(logging.DEBUG, logger="diffkit.tests.level")

    log(logger, [1], [2], level=logging.WARNING)

    assert [record.levelname for record in caplog.records] == ["WARNING"]


def test_check_calls_helper_and_reports() -> None:
    calls: list[None] = []
    lines: list[str] = []

    check(lines.append, [1, 2], [1, 3], helper=lambda: calls.append(None))

    assert lines == ["[1]: 2 != 3"]
    assert len(calls) > 2


def test_check_with_pytest_fail_stops_at_first_difference() -> None:
    with pytest.raises(pytest.fail.Exception, match=r"\[0\]: 1 != 2"):
        check(pytest.fail, [1, 5], [2, 6])


def test_compare_collects_structured_records() -> None:
    result = compare({"a": 1}, {"a": 2})

    assert result.identical is False
    assert result.first_difference == Difference(path=("['a']",), message="1 != 2", left=1, right=2)
    assert result.to_dict() == {
        "identical": False,
        "difference_count": 1,
        "differences": [
            {"path": "['a']", "message": "1 != 2", "left": "int(1)", "right": "int(2)"}
        ],
    }


def test_render_helpers_summarize_results() -> None:
    result = compare([1, 2, 3], [4, 5, 6])

    assert render_summary(result) == "3 differences"
    assert render_summary(compare(1, 1)) == "no differences"
    assert render_differences(compare(1, 1)) == "no differences"
    assert render_differences(result, max_differences=2) == (
        "[0]: 1 != 4\n[1]: 2 != 5\n... additional differences omitted"
    )
    assert render_differences(result, level="path-only") == "[0]\n[1]\n[2]"


def test_assert_equal_passes_for_equal_values() -> None:
    assert_equal({"a": [1, 2]}, {"a": [1, 2]})


def test_assert_equal_lists_every_difference() -> None:
    with pytest.raises(AssertionError) as error:
        assert_equal({"a": 1, "b": 2}, {"a": 3, "b": 4})

    assert str(error.value) == (
        "values differ (2 differences):\n  ['a']: 1 != 3\n  ['b']: 2 != 4"
    )


def test_print_emitter_extends_paths_and_marks_ancestors() -> None:
    seen: list[Difference] = []
    root = PrintEmitter(seen.append)
    child = root.descend(".a")
    grandchild = child.descend("[0]")

    assert root.did_emit() is False
    grandchild.emit(1, 2, "1 != 2")

    assert seen == [Difference(path=(".a", "[0]"), message="1 != 2", left=1, right=2)]
    assert grandchild.did_emit() is True
    assert child.did_emit() is True
    assert root.did_emit() is True
    assert root.descend(".b").did_emit() is False


def test_count_emitter_counts_without_paths() -> None:
    emitter = CountEmitter()

    assert emitter.descend("[0]") is emitter
    emitter.emit(1, 2, "ignored")
    emitter.descend(".x").emit(1, 2, "ignored")

    assert emitter.count == 2
    assert emitter.did_emit() is True


def test_identity_tracker_pairs_one_to_one() -> None:
    tracker = IdentityTracker()
    left: list[int] = []
    right: list[int] = []
    other: list[int] = []

    assert tracker.pair(left, right) == "new"
    assert tracker.pair(left, right) == "seen"
    assert tracker.pair(left, other) == "uneven"
    assert tracker.pair(other, right) == "uneven"
    assert len(tracker) == 1
