"""Value kind classification shared by the walker and the renderer.

Every Python value lands in exactly one kind. The walker and the renderer
both dispatch on the result, so a kind added here needs a rule in each.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping, Set
import dataclasses
import enum
import functools
import types
from typing import Any
import weakref

from diffpack.core.types import MISSING, Kind

_FUNCTION_TYPES: tuple[type, ...] = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    types.ClassMethodDescriptorType,
    functools.partial,
)

_SEQUENCE_TYPES: tuple[type, ...] = (list, deque, bytearray)

_HIDDEN_SLOTS = frozenset({"__dict__", "__weakref__"})


def is_absent(value: Any) -> bool:
    return value is None or value is MISSING


def kind_of(value: Any) -> Kind:
    """Classify value into the kind that decides how it is compared and shown."""
    if value is None or value is MISSING:
        return "absent"
    if isinstance(value, enum.Enum):
        return "enum"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, complex):
        return "complex"
    if isinstance(value, str):
        return "str"
    if isinstance(value, bytes):
        return "bytes"
    if isinstance(value, (type, types.ModuleType)):
        return "handle"
    if isinstance(value, _FUNCTION_TYPES):
        return "func"
    if isinstance(value, weakref.ReferenceType):
        return "ref"
    if isinstance(value, types.CellType):
        return "box"
    if dataclasses.is_dataclass(value):
        return "struct"
    if isinstance(value, tuple):
        return "struct" if _is_namedtuple(value) else "tuple"
    if isinstance(value, _SEQUENCE_TYPES):
        return "list"
    if isinstance(value, Mapping):
        return "dict"
    if isinstance(value, Set):
        return "set"
    if type(value).__eq__ is not object.__eq__:
        return "value"
    if hasattr(value, "__dict__") or _slot_names(type(value)):
        return "struct"
    return "handle"


def field_names(value: Any) -> tuple[str, ...]:
    """Return the declared field names of a struct-kind value, in order."""
    if dataclasses.is_dataclass(value):
        return tuple(item.name for item in dataclasses.fields(value) if item.compare)
    if _is_namedtuple(value):
        return tuple(type(value)._fields)

    names: list[str] = []
    if isinstance(value, BaseException):
        names.append("args")
    for name in _slot_names(type(value)):
        if name not in names:
            names.append(name)
    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, dict):
        names.extend(name for name in instance_dict if name not in names)
    return tuple(names)


def union_field_names(left: Any, right: Any) -> tuple[str, ...]:
    names = list(field_names(left))
    names.extend(name for name in field_names(right) if name not in names)
    return tuple(names)


def field_value(value: Any, name: str) -> Any:
    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, dict) and name in instance_dict:
        return instance_dict[name]
    return getattr(value, name, MISSING)


def box_contents(cell: types.CellType) -> Any:
    try:
        return cell.cell_contents
    except ValueError:
        # empty cell
        return MISSING


def type_label(tp: type) -> str:
    return tp.__qualname__


def type_labels(left: type, right: type) -> tuple[str, str]:
    """Labels for two types, module-qualified when the short names collide."""
    left_label = type_label(left)
    right_label = type_label(right)
    if left_label == right_label:
        return (
            f"{left.__module__}.{left_label}",
            f"{right.__module__}.{right_label}",
        )
    return left_label, right_label


def _is_namedtuple(value: Any) -> bool:
    return isinstance(value, tuple) and isinstance(getattr(type(value), "_fields", None), tuple)


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in _HIDDEN_SLOTS:
                continue
            if slot.startswith("__") and not slot.endswith("__"):
                slot = f"_{klass.__name__.lstrip('_')}{slot}"
            if slot not in names:
                names.append(slot)
    return names
