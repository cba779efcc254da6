"""Text rendering for differences at each verbosity level."""

from __future__ import annotations

from collections.abc import Callable

from diffpack.core.exceptions import DiffConfigError
from diffpack.core.types import LEVELS
from diffpack.diff.models import ComparisonResult, Difference
from diffpack.render.formatter import format_full
from diffpack.render.layout import indent_continuation


def format_difference(difference: Difference, level: str = "auto") -> str:
    """Render one difference as a single report line (or block, for ``full``)."""
    path = difference.path_text
    prefix = f"{path}: " if path else ""
    if level == "auto":
        return prefix + difference.message
    if level == "path-only":
        return path
    if level == "full":
        left = format_full(difference.left)
        right = format_full(difference.right)
        return indent_continuation(f"{prefix}{left} != {right}")
    raise DiffConfigError(f"bad verbosity level: {level!r}")


def text_sink(report: Callable[[str], object], level: str) -> Callable[[Difference], None]:
    """Adapt a one-line reporting function into a difference sink."""
    if level not in LEVELS:
        raise DiffConfigError(f"bad verbosity level: {level!r}")

    def deliver(difference: Difference) -> None:
        report(format_difference(difference, level))

    return deliver


def render_summary(result: ComparisonResult) -> str:
    count = len(result.differences)
    if count == 0:
        return "no differences"
    noun = "difference" if count == 1 else "differences"
    return f"{count} {noun}"


def render_differences(
    result: ComparisonResult,
    *,
    level: str = "auto",
    max_differences: int | None = None,
) -> str:
    if result.identical:
        return "no differences"
    shown = result.differences
    if max_differences is not None:
        shown = shown[:max_differences]
    lines = [format_difference(difference, level) for difference in shown]
    if len(shown) < len(result.differences):
        lines.append("... additional differences omitted")
    return "\n".join(lines)
