"""Short and full textual renderings of arbitrary values.

``format_short`` is what difference messages embed: one line, at most two
levels of nesting, and only the first entry of each composite. ``format_full``
is a pretty-printer: every entry, one per line, four spaces of indentation per
level, with keys and field names aligned in a column.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Set as AbstractSet
import enum
import functools
import numbers
import types
from typing import Any

from diffpack.core.exceptions import UnsupportedKindError
from diffpack.core.kinds import box_contents, field_names, field_value, kind_of, type_label
from diffpack.core.types import MISSING
from diffpack.render.layout import align_rows, indent

SHORT_DEPTH = 2
FULL_DEPTH = 100_000_000
ELLIPSIS = "..."
CYCLE_MARKER = "<cycle>"

_COMPOSITE_KINDS = frozenset({"tuple", "list", "dict", "set", "struct"})

Entry = tuple[str, Any]


def format_short(value: Any, want_type: bool = True) -> str:
    """Render value on one line, eliding content nested deeper than two levels."""
    return _Formatter(full=False, allow_depth=SHORT_DEPTH).render(value, want_type)


def format_full(value: Any) -> str:
    """Render value completely, across as many lines as it needs."""
    return _Formatter(full=True, allow_depth=FULL_DEPTH).render(value, True)


def sorted_keys(keys: Iterable[Any]) -> list[Any]:
    """Order map keys or set elements independently of insertion order.

    Natural ordering is used only where it is total: all strings, all bytes,
    or all real numbers without NaN. Anything else (sets, which order by
    subset, or mixed types) sorts by type name and then canonical text.
    """
    items = list(keys)
    if _naturally_ordered(items):
        return sorted(items)
    return sorted(items, key=_canonical_key)


def _naturally_ordered(items: list[Any]) -> bool:
    if all(isinstance(item, str) for item in items):
        return True
    if all(isinstance(item, bytes) for item in items):
        return True
    return all(
        isinstance(item, numbers.Real) and item == item and not isinstance(item, enum.Enum)
        for item in items
    )


def _canonical_key(item: Any) -> tuple[str, str]:
    return (type_label(type(item)), _canonical_text(item))


def _canonical_text(item: Any) -> str:
    if isinstance(item, AbstractSet):
        inner = sorted(_canonical_key(member) for member in item)
        return "{" + ", ".join(f"{label}:{text}" for label, text in inner) + "}"
    if isinstance(item, tuple):
        return "(" + ", ".join(_canonical_text(member) for member in item) + ")"
    return repr(item)


def quote(value: str | bytes) -> str:
    if isinstance(value, str):
        return str.__repr__(value)
    return bytes.__repr__(value)


class _Formatter:
    __slots__ = ("full", "allow_depth", "_active")

    def __init__(self, *, full: bool, allow_depth: int) -> None:
        self.full = full
        self.allow_depth = allow_depth
        self._active: set[int] = set()

    def render(self, value: Any, want_type: bool) -> str:
        return self._write(value, want_type, 1)

    def _write(self, value: Any, want_type: bool, depth: int) -> str:
        kind = kind_of(value)
        if kind in _COMPOSITE_KINDS:
            marker = id(value)
            if marker in self._active:
                return CYCLE_MARKER
            self._active.add(marker)
            try:
                return self._write_composite(kind, value, want_type, depth)
            finally:
                self._active.discard(marker)

        if kind == "absent":
            return "None" if value is None else repr(MISSING)
        if kind == "bool":
            return _simple(repr(bool(value)), value, want_type and type(value) is not bool)
        if kind == "int":
            return _simple(int.__repr__(value), value, want_type)
        if kind == "float":
            return _simple(float.__repr__(value), value, want_type)
        if kind == "complex":
            text = complex.__repr__(value)
            if want_type and text.startswith("("):
                text = text[1:-1]
            return _simple(text, value, want_type)
        if kind == "str":
            return _simple(quote(value), value, want_type and type(value) is not str)
        if kind == "bytes":
            return _simple(quote(value), value, want_type and type(value) is not bytes)
        if kind == "enum":
            return f"{type_label(type(value))}.{value.name}"
        if kind == "value":
            return repr(value)
        if kind == "func":
            return _function_text(value)
        if kind == "ref":
            target = value()
            if target is None:
                return _typed_nil("weakref", want_type)
            # two references in a row read ambiguously without the type
            inner_want = want_type or kind_of(target) == "ref"
            return f"weakref({self._write(target, inner_want, depth)})"
        if kind == "box":
            return self._write(box_contents(value), True, depth)
        if kind == "handle":
            if isinstance(value, (type, types.ModuleType)):
                return repr(value)
            return f"<{type_label(type(value))} at {id(value):#x}>"
        raise UnsupportedKindError(f"no rendering rule for value kind: {kind}")

    def _write_composite(self, kind: str, value: Any, want_type: bool, depth: int) -> str:
        tp = type(value)
        if kind == "list":
            items = list(value)
            body = self._write_entries(
                "[", "]", len(items), (("", item) for item in items), depth
            )
            return _wrap(body, tp, want_type and tp is not list)
        if kind == "tuple":
            body = self._write_entries(
                "(", ")", len(value), (("", item) for item in value), depth, single=","
            )
            return _wrap(body, tp, want_type and tp is not tuple)
        if kind == "dict":
            keys = sorted_keys(value.keys())
            entries = ((self._key_text(key) + ": ", value[key]) for key in keys)
            body = self._write_entries("{", "}", len(keys), entries, depth)
            return _wrap(body, tp, want_type and tp is not dict)
        if kind == "set":
            if not value:
                return f"{type_label(tp)}()"
            items = sorted_keys(value)
            body = self._write_entries(
                "{", "}", len(items), (("", item) for item in items), depth
            )
            return _wrap(body, tp, want_type and tp is not set)
        names = field_names(value)
        entries = ((f"{name}=", field_value(value, name)) for name in names)
        return type_label(tp) + self._write_entries("(", ")", len(names), entries, depth)

    def _key_text(self, key: Any) -> str:
        text = self._write(key, False, 0)
        if "\n" in text:
            return repr(key)
        return text

    def _write_entries(
        self,
        opener: str,
        closer: str,
        count: int,
        entries: Iterator[Entry],
        depth: int,
        *,
        single: str = "",
    ) -> str:
        if count == 0:
            return opener + closer
        if depth >= self.allow_depth:
            return f"{opener}{ELLIPSIS}{closer}"

        if self.full and count > 1:
            rows = [
                (label.rstrip(), self._write(item, False, depth + 1) + ",")
                for label, item in entries
            ]
            body = "\n".join(align_rows(rows))
            return f"{opener}\n{indent(body)}\n{closer}"

        label, item = next(entries)
        text = label + self._write(item, False, depth + 1)
        if count > 1:
            text += ", " + ELLIPSIS
        elif single:
            text += single
        return opener + text + closer


def _simple(text: str, value: Any, show_type: bool) -> str:
    if show_type:
        return f"{type_label(type(value))}({text})"
    return text


def _wrap(body: str, tp: type, show_type: bool) -> str:
    if show_type:
        return f"{type_label(tp)}({body})"
    return body


def _typed_nil(label: str, show_type: bool) -> str:
    if not show_type:
        return "None"
    if not label.replace(".", "_").isidentifier():
        label = f"({label})"
    return f"{label}(None)"


def _function_text(value: Any) -> str:
    target = value.func if isinstance(value, functools.partial) else value
    name = getattr(target, "__qualname__", None) or getattr(target, "__name__", None)
    if name is None:
        name = type_label(type(target))
    return f"<{type(value).__name__} {name}>"
