"""Type definitions for diffkit core values."""

from typing import Final, Literal

Level = Literal["auto", "path-only", "full"]

LEVELS: tuple[str, ...] = ("auto", "path-only", "full")

Kind = Literal[
    "absent",
    "bool",
    "int",
    "float",
    "complex",
    "str",
    "bytes",
    "enum",
    "tuple",
    "list",
    "dict",
    "set",
    "struct",
    "func",
    "ref",
    "box",
    "value",
    "handle",
]

KINDS: tuple[str, ...] = (
    "absent",
    "bool",
    "int",
    "float",
    "complex",
    "str",
    "bytes",
    "enum",
    "tuple",
    "list",
    "dict",
    "set",
    "struct",
    "func",
    "ref",
    "box",
    "value",
    "handle",
)

# Kinds whose values carry an identity worth tracking for cycles.
REFERENCE_KINDS: frozenset[str] = frozenset({"list", "dict", "set", "struct"})


class _Missing:
    """Marker for a value that is not there at all (unset attribute, absent key)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()
