"""Comparison configuration: verbosity, function equality and per-type hooks."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Protocol

from diffpack.core.exceptions import DiffConfigError
from diffpack.core.types import LEVELS, Level

Transform = Callable[[Any], Any]
Format = Callable[[Any, Any], str]

_CONFIG_FILE_KEYS: frozenset[str] = frozenset({"verbosity", "equal_funcs"})


def _empty_hooks() -> Mapping[type, Any]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Config:
    """Read-only settings for one comparison run.

    ``transforms`` and ``formats`` are keyed by exact type; a subclass does
    not inherit its base class registration.
    """

    level: Level = "auto"
    equal_funcs: bool = False
    transforms: Mapping[type, Transform] = field(default_factory=_empty_hooks)
    formats: Mapping[type, Format] = field(default_factory=_empty_hooks)

    def with_options(self, *options: Option) -> Config:
        """Return a copy with options applied left to right."""
        config = self
        for option in options:
            config = option.apply(config)
        return config

    def without_hooks(self) -> Config:
        return replace(self, transforms=_empty_hooks(), formats=_empty_hooks())


class Option(Protocol):
    def apply(self, config: Config) -> Config: ...


@dataclass(frozen=True, slots=True)
class _Verbosity:
    level: Level

    def apply(self, config: Config) -> Config:
        return replace(config, level=self.level)


@dataclass(frozen=True, slots=True)
class _EqualFuncs:
    enabled: bool

    def apply(self, config: Config) -> Config:
        return replace(config, equal_funcs=self.enabled)


@dataclass(frozen=True, slots=True)
class _TransformHook:
    hook_type: type
    func: Transform

    def apply(self, config: Config) -> Config:
        hooks = dict(config.transforms)
        hooks[self.hook_type] = self.func
        return replace(config, transforms=MappingProxyType(hooks))


@dataclass(frozen=True, slots=True)
class _FormatHook:
    hook_type: type
    func: Format

    def apply(self, config: Config) -> Config:
        hooks = dict(config.formats)
        hooks[self.hook_type] = self.func
        return replace(config, formats=MappingProxyType(hooks))


@dataclass(frozen=True, slots=True)
class _OptionList:
    options: tuple[Option, ...]

    def apply(self, config: Config) -> Config:
        return config.with_options(*self.options)


def normalize_level(value: str) -> Level:
    normalized = str(value).strip().lower()
    if normalized not in LEVELS:
        raise DiffConfigError(
            f"Invalid verbosity level '{value}'. "
            "Supported levels: auto, path-only, full"
        )
    return normalized  # type: ignore[return-value]


def verbosity(level: str) -> Option:
    """Choose how each difference is written: auto, path-only or full."""
    return _Verbosity(normalize_level(level))


def equal_funcs(enabled: bool = True) -> Option:
    """Treat any two function values as equal."""
    return _EqualFuncs(bool(enabled))


def transform(tp: type, func: Transform) -> Option:
    """Compare values of exactly type ``tp`` through ``func``.

    ``func`` must be pure: it runs more than once per compared node.
    """
    _check_hook(tp, func, name="transform")
    return _TransformHook(tp, func)


def formatter(tp: type, func: Format) -> Option:
    """Describe a mismatch between two values of exactly type ``tp`` with ``func(a, b)``."""
    _check_hook(tp, func, name="formatter")
    return _FormatHook(tp, func)


def option_list(*options: Option) -> Option:
    """Bundle several options into one, applied in order."""
    return _OptionList(tuple(options))


EMIT_AUTO: Option = _Verbosity("auto")
EMIT_PATH_ONLY: Option = _Verbosity("path-only")
EMIT_FULL: Option = _Verbosity("full")

DEFAULT_OPTIONS: Option = option_list(EMIT_AUTO, equal_funcs(False))
DEFAULT_CONFIG: Config = Config().with_options(DEFAULT_OPTIONS)


def config_from_mapping(raw: Mapping[str, Any], *, base: Config = DEFAULT_CONFIG) -> Config:
    unknown = sorted(set(raw) - _CONFIG_FILE_KEYS)
    if unknown:
        raise DiffConfigError(f"Unknown config keys: {', '.join(unknown)}")

    options: list[Option] = []
    if "verbosity" in raw:
        level = raw["verbosity"]
        if not isinstance(level, str):
            raise DiffConfigError("Config key 'verbosity' must be a string.")
        options.append(verbosity(level))
    if "equal_funcs" in raw:
        flag = raw["equal_funcs"]
        if not isinstance(flag, bool):
            raise DiffConfigError("Config key 'equal_funcs' must be a boolean.")
        options.append(equal_funcs(flag))
    return base.with_options(*options)


def load_config_file(path: str | Path, *, base: Config = DEFAULT_CONFIG) -> Config:
    """Load comparison settings from a JSON file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except UnicodeDecodeError as error:
        raise DiffConfigError(f"Config is not valid UTF-8 text ({config_path}).") from error
    except json.JSONDecodeError as error:
        raise DiffConfigError(f"Invalid config JSON ({config_path}): {error}") from error

    if not isinstance(raw, dict):
        raise DiffConfigError(f"Config must be a JSON object ({config_path}).")

    return config_from_mapping(raw, base=base)


def _check_hook(tp: Any, func: Any, *, name: str) -> None:
    if not isinstance(tp, type):
        raise DiffConfigError(f"{name} hook needs a type, got {tp!r}")
    if not callable(func):
        raise DiffConfigError(f"{name} hook for {tp.__qualname__} is not callable")
