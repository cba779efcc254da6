"""Recursive, cycle-safe structural comparison engine."""

from __future__ import annotations

from typing import Any

from diffpack.core.config import Config
from diffpack.core.exceptions import UnsupportedKindError
from diffpack.core.kinds import (
    box_contents,
    field_names,
    field_value,
    is_absent,
    kind_of,
    type_labels,
    union_field_names,
)
from diffpack.core.types import MISSING, REFERENCE_KINDS
from diffpack.diff.emitter import CountEmitter, Emitter, Helper, no_helper
from diffpack.diff.tracker import IdentityTracker
from diffpack.render.formatter import format_short, quote, sorted_keys

_SCALAR_KINDS = frozenset({"bool", "int", "float", "complex"})
_SEQUENCE_KINDS = frozenset({"tuple", "list"})


class Differ:
    """Walks two values side by side and reports what differs.

    Equality rules follow ``==`` only at the leaves; containers and plain
    objects are compared structurally, the way ``copy.deepcopy`` sees them.
    One ``Differ`` serves one top-level comparison.
    """

    __slots__ = ("config", "tracker", "helper")

    def __init__(self, config: Config, *, helper: Helper = no_helper) -> None:
        self.config = config
        self.tracker = IdentityTracker()
        self.helper = helper

    def equal(self, left: Any, right: Any) -> bool:
        """Whether left and right are equal under the default rules.

        Runs with its own tracker and without hooks, so it neither sees nor
        disturbs the cycle state of the enclosing walk.
        """
        checker = Differ(self.config.without_hooks(), helper=self.helper)
        emitter = CountEmitter()
        checker.walk(emitter, left, right, True, True)
        return not emitter.did_emit()

    def walk(
        self,
        e: Emitter,
        a: Any,
        b: Any,
        xform_ok: bool,
        want_type: bool,
    ) -> None:
        self.helper()
        a_absent = is_absent(a)
        b_absent = is_absent(b)
        if a_absent and b_absent:
            return
        if a_absent:
            e.emit(a, b, f"{format_short(a)} != {format_short(b, True)}")
            return
        if b_absent:
            e.emit(a, b, f"{format_short(a, True)} != {format_short(b)}")
            return

        if type(a) is not type(b):
            a_label, b_label = type_labels(type(a), type(b))
            e.emit(a, b, f"{a_label} != {b_label}")
            return

        kind = kind_of(a)

        # Check for cycles.
        if kind in REFERENCE_KINDS:
            status = self.tracker.pair(a, b)
            if status == "uneven":
                e.emit(a, b, "uneven cycle")
                return
            if status == "seen":
                return

        # Check for a transform hook.
        have_xform = False
        ax: Any = None
        bx: Any = None
        if xform_ok:
            xform = self.config.transforms.get(type(a))
            if xform is not None:
                have_xform = True
                ax = xform(a)
                bx = xform(b)
                if self.equal(ax, bx):
                    return

        # Check for a format hook.
        fmt = self.config.formats.get(type(a))
        if fmt is not None and not self.equal(a, b):
            e.emit(a, b, str(fmt(a, b)))
            return

        self._walk_kind(kind, e, a, b, want_type)

        # The transform check returns early when the transformed values are
        # equal, so here they differ. If the raw values showed no difference,
        # say so and show where the transformed values diverge.
        if have_xform and not e.did_emit():
            e.emit(a, b, "(transformed values differ)")
            self.walk(e.descend("->"), ax, bx, False, True)

    def _walk_kind(self, kind: str, e: Emitter, a: Any, b: Any, want_type: bool) -> None:
        if kind in _SEQUENCE_KINDS:
            if a is b:
                return
            if len(a) != len(b):
                e.emit(a, b, f"{{len {len(a)}}} != {{len {len(b)}}}")
                return
            for index, (a_item, b_item) in enumerate(zip(a, b)):
                self.walk(e.descend(f"[{index}]"), a_item, b_item, True, False)
        elif kind == "struct":
            if a is b:
                return
            for name in union_field_names(a, b):
                self.walk(
                    e.descend(f".{name}"),
                    field_value(a, name),
                    field_value(b, name),
                    True,
                    False,
                )
        elif kind == "func":
            if self.config.equal_funcs or a == b:
                return
            self._emit_pointers(e, a, b, want_type)
        elif kind == "box":
            self.walk(e, box_contents(a), box_contents(b), True, True)
        elif kind == "dict":
            if a is b:
                return
            a_only, both, b_only = _key_diff(a, b)
            for key in a_only:
                e.descend(f"[{key!r}]").emit(a[key], MISSING, "(removed)")
            for key in both:
                self.walk(e.descend(f"[{key!r}]"), a[key], b[key], True, False)
            for key in b_only:
                e.descend(f"[{key!r}]").emit(
                    MISSING, b[key], f"(added) {format_short(b[key], False)}"
                )
        elif kind == "set":
            if a is b:
                return
            for item in sorted_keys(item for item in a if item not in b):
                e.descend(f"[{item!r}]").emit(item, MISSING, "(removed)")
            for item in sorted_keys(item for item in b if item not in a):
                e.descend(f"[{item!r}]").emit(MISSING, item, "(added)")
        elif kind == "ref":
            if a is b:
                return
            a_target = a()
            b_target = b()
            if (a_target is None) != (b_target is None):
                self._emit_pointers(e, a, b, want_type)
                return
            if a_target is None:
                return
            self.walk(e, a_target, b_target, True, want_type)
        elif kind in _SCALAR_KINDS:
            self._eqtest(e, a, b, a != b, want_type)
        elif kind == "enum":
            self._eqtest(e, a, b, a is not b, want_type)
        elif kind == "value":
            try:
                same = bool(a == b)
            except (TypeError, ValueError):
                # __eq__ without a usable truth value, e.g. elementwise results
                self._walk_opaque_value(e, a, b, want_type)
                return
            self._eqtest(e, a, b, not same, want_type)
        elif kind in ("str", "bytes"):
            if a != b:
                e.emit(a, b, f"{quote(a)} != {quote(b)}")
        elif kind == "handle":
            if a is not b:
                self._emit_pointers(e, a, b, want_type)
        else:
            raise UnsupportedKindError(f"no comparison rule for value kind: {kind}")

    def _walk_opaque_value(self, e: Emitter, a: Any, b: Any, want_type: bool) -> None:
        self.helper()
        if a is b:
            return
        if not (field_names(a) or field_names(b)):
            self._emit_pointers(e, a, b, want_type)
            return
        status = self.tracker.pair(a, b)
        if status == "uneven":
            e.emit(a, b, "uneven cycle")
            return
        if status == "seen":
            return
        self._walk_kind("struct", e, a, b, want_type)

    def _eqtest(self, e: Emitter, a: Any, b: Any, differ: bool, want_type: bool) -> None:
        self.helper()
        if differ:
            e.emit(a, b, f"{format_short(a, want_type)} != {format_short(b, want_type)}")

    def _emit_pointers(self, e: Emitter, a: Any, b: Any, want_type: bool) -> None:
        self.helper()
        e.emit(a, b, f"{format_short(a, want_type)} != {format_short(b, want_type)}")


def _key_diff(a: Any, b: Any) -> tuple[list[Any], list[Any], list[Any]]:
    a_only: list[Any] = []
    both: list[Any] = []
    for key in a:
        if key in b:
            both.append(key)
        else:
            a_only.append(key)
    b_only = [key for key in b if key not in a]
    return a_only, both, b_only
