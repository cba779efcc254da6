"""Pairing of reference identities across the two sides of a comparison."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

PairStatus = Literal["new", "seen", "uneven"]

Visit = tuple[int, type]


def _visit(value: Any) -> Visit:
    return (id(value), type(value))


@dataclass(slots=True)
class IdentityTracker:
    """Remembers which left object was matched with which right object.

    A left identity may pair with one right identity only, and the reverse.
    Tracked objects are kept alive for the tracker's lifetime so their ids
    stay unique, even for temporaries produced by transform hooks.
    """

    a_seen: dict[Visit, Visit] = field(default_factory=dict)
    b_seen: dict[Visit, Visit] = field(default_factory=dict)
    _retained: list[tuple[Any, Any]] = field(default_factory=list, repr=False)

    def pair(self, left: Any, right: Any) -> PairStatus:
        a_visit = _visit(left)
        b_visit = _visit(right)
        paired = self.a_seen.get(a_visit)
        if paired is not None:
            return "seen" if paired == b_visit else "uneven"
        if b_visit in self.b_seen:
            return "uneven"
        self.a_seen[a_visit] = b_visit
        self.b_seen[b_visit] = a_visit
        self._retained.append((left, right))
        return "new"

    def __len__(self) -> int:
        return len(self.a_seen)
