"""Stable public API surface for diffkit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from diffpack.core.config import (
    DEFAULT_CONFIG,
    EMIT_AUTO,
    EMIT_FULL,
    EMIT_PATH_ONLY,
    Config,
    Option,
    equal_funcs,
    formatter,
    load_config_file,
    option_list,
    transform,
    verbosity,
)
from diffpack.core.exceptions import DiffConfigError, DiffError, UnsupportedKindError
from diffpack.core.types import MISSING
from diffpack.diff.assertion import assert_equal
from diffpack.diff.entrypoints import check, compare, each, log
from diffpack.diff.models import ComparisonResult, Difference
from diffpack.render.formatter import format_full, format_short

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Config",
    "Option",
    "ComparisonResult",
    "Difference",
    "DiffError",
    "DiffConfigError",
    "UnsupportedKindError",
    "MISSING",
    "DEFAULT_CONFIG",
    "EMIT_AUTO",
    "EMIT_PATH_ONLY",
    "EMIT_FULL",
    "verbosity",
    "equal_funcs",
    "transform",
    "formatter",
    "option_list",
    "load_config_file",
    "each",
    "log",
    "check",
    "compare",
    "assert_equal",
    "format_short",
    "format_full",
]
