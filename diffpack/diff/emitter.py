"""Path-aware sinks that receive differences as the walker finds them."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from diffpack.diff.models import Difference

Sink = Callable[[Difference], None]
Helper = Callable[[], None]


def no_helper() -> None:
    return None


class Emitter(Protocol):
    def emit(self, left: Any, right: Any, message: str) -> None: ...

    def descend(self, segment: str) -> Emitter: ...

    def did_emit(self) -> bool: ...


class PrintEmitter:
    """Builds a ``Difference`` at the current path and hands it to a sink.

    Children created by ``descend`` forward through their parent, so an
    emission anywhere below marks every ancestor as having emitted.
    """

    __slots__ = ("path", "helper", "_sink", "_did")

    def __init__(
        self,
        sink: Sink,
        *,
        helper: Helper = no_helper,
        path: tuple[str, ...] = (),
    ) -> None:
        self.path = path
        self.helper = helper
        self._sink = sink
        self._did = False

    def emit(self, left: Any, right: Any, message: str) -> None:
        self.helper()
        self._did = True
        self._sink(Difference(path=self.path, message=message, left=left, right=right))

    def descend(self, segment: str) -> PrintEmitter:
        def forward(difference: Difference) -> None:
            self.helper()
            self._did = True
            self._sink(difference)

        return PrintEmitter(forward, helper=self.helper, path=self.path + (segment,))

    def did_emit(self) -> bool:
        return self._did


class CountEmitter:
    """Counts emissions without rendering anything; used for equality checks."""

    __slots__ = ("count",)

    def __init__(self) -> None:
        self.count = 0

    def emit(self, left: Any, right: Any, message: str) -> None:
        self.count += 1

    def descend(self, segment: str) -> CountEmitter:
        return self

    def did_emit(self) -> bool:
        return self.count > 0
