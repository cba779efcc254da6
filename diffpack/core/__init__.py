"""Core types, value kinds and configuration for diffkit."""

from diffpack.core.config import (
    DEFAULT_CONFIG,
    DEFAULT_OPTIONS,
    EMIT_AUTO,
    EMIT_FULL,
    EMIT_PATH_ONLY,
    Config,
    Option,
    equal_funcs,
    formatter,
    load_config_file,
    normalize_level,
    option_list,
    transform,
    verbosity,
)
from diffpack.core.exceptions import DiffConfigError, DiffError, UnsupportedKindError
from diffpack.core.kinds import kind_of
from diffpack.core.types import KINDS, LEVELS, MISSING, Kind, Level

__all__ = [
    "Config",
    "Option",
    "DEFAULT_CONFIG",
    "DEFAULT_OPTIONS",
    "EMIT_AUTO",
    "EMIT_PATH_ONLY",
    "EMIT_FULL",
    "equal_funcs",
    "formatter",
    "load_config_file",
    "normalize_level",
    "option_list",
    "transform",
    "verbosity",
    "DiffError",
    "DiffConfigError",
    "UnsupportedKindError",
    "kind_of",
    "KINDS",
    "LEVELS",
    "MISSING",
    "Kind",
    "Level",
]
