"""Assertion helper for test suites."""

from __future__ import annotations

from typing import Any

from diffpack.core.config import DEFAULT_CONFIG, Config, Option
from diffpack.diff.entrypoints import check


def assert_equal(
    left: Any,
    right: Any,
    *options: Option,
    config: Config = DEFAULT_CONFIG,
) -> None:
    """Fail with every difference between left and right, if there are any."""
    __tracebackhide__ = True
    lines: list[str] = []
    check(lines.append, left, right, *options, config=config)
    if not lines:
        return
    noun = "difference" if len(lines) == 1 else "differences"
    details = "\n".join(f"  {line}" for line in lines)
    raise AssertionError(f"values differ ({len(lines)} {noun}):\n{details}")
