"""Data models for reported differences."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from diffpack.render.formatter import format_short


@dataclass(slots=True)
class Difference:
    """A single point of divergence between the left and right values."""

    path: tuple[str, ...]
    message: str
    left: Any
    right: Any

    @property
    def path_text(self) -> str:
        return "".join(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path_text,
            "message": self.message,
            "left": format_short(self.left),
            "right": format_short(self.right),
        }


@dataclass(slots=True)
class ComparisonResult:
    """Every difference found by one comparison, in the order it was found."""

    differences: list[Difference] = field(default_factory=list)

    @property
    def identical(self) -> bool:
        return not self.differences

    @property
    def first_difference(self) -> Difference | None:
        if not self.differences:
            return None
        return self.differences[0]

    def to_dict(self) -> dict[str, Any]:
        return {
            "identical": self.identical,
            "difference_count": len(self.differences),
            "differences": [difference.to_dict() for difference in self.differences],
        }
