"""Diff subsystem for diffkit."""

from diffpack.diff.assertion import assert_equal
from diffpack.diff.emitter import CountEmitter, Emitter, PrintEmitter
from diffpack.diff.engine import Differ
from diffpack.diff.entrypoints import check, compare, each, log
from diffpack.diff.formatting import (
    format_difference,
    render_differences,
    render_summary,
    text_sink,
)
from diffpack.diff.models import ComparisonResult, Difference
from diffpack.diff.tracker import IdentityTracker

__all__ = [
    "Differ",
    "IdentityTracker",
    "Emitter",
    "PrintEmitter",
    "CountEmitter",
    "Difference",
    "ComparisonResult",
    "each",
    "log",
    "check",
    "compare",
    "assert_equal",
    "format_difference",
    "render_differences",
    "render_summary",
    "text_sink",
]
