"""Call styles for running a comparison: callback, logger, test helper."""

from __future__ import annotations

from collections.abc import Callable
import logging
import sys
from typing import Any, Protocol

from diffpack.core.config import DEFAULT_CONFIG, Config, Option
from diffpack.diff.emitter import Helper, PrintEmitter, Sink, no_helper
from diffpack.diff.engine import Differ
from diffpack.diff.formatting import text_sink
from diffpack.diff.models import ComparisonResult

Report = Callable[[str], object]


class Outputter(Protocol):
    def log(self, level: int, msg: str, *, stacklevel: int = ...) -> None: ...


def each(
    report: Report,
    left: Any,
    right: Any,
    *options: Option,
    config: Config = DEFAULT_CONFIG,
) -> None:
    """Compare left and right, calling ``report(line)`` for each difference.

        each(print, a, b)

    Options apply on top of ``config`` (the defaults unless given), later
    options overriding earlier ones.
    """
    _run(no_helper, report, left, right, options, config)


def log(
    logger: Outputter,
    left: Any,
    right: Any,
    *options: Option,
    level: int = logging.INFO,
    config: Config = DEFAULT_CONFIG,
) -> None:
    """Compare left and right, logging one record per difference.

    Records carry the file and line of the call to ``log`` rather than a
    location inside the comparison engine.
    """
    depth = _stack_depth()

    def output(line: str) -> None:
        offset = _stack_depth() - depth
        logger.log(level, line, stacklevel=offset + 2)

    _run(no_helper, output, left, right, options, config)


def check(
    report: Report,
    left: Any,
    right: Any,
    *options: Option,
    helper: Helper | None = None,
    config: Config = DEFAULT_CONFIG,
) -> None:
    """Compare left and right from inside a test.

    ``helper`` is called on entry to every internal function of the walk, for
    test frameworks that mark helper frames; these frames are also hidden
    from pytest tracebacks.

        check(pytest.fail, got, want)
    """
    __tracebackhide__ = True
    hook = helper if helper is not None else no_helper
    hook()
    _run(hook, report, left, right, options, config)


def compare(
    left: Any,
    right: Any,
    *options: Option,
    config: Config = DEFAULT_CONFIG,
) -> ComparisonResult:
    """Compare left and right and collect the differences as records."""
    result = ComparisonResult()
    _walk_root(no_helper, result.differences.append, left, right, config.with_options(*options))
    return result


def _run(
    helper: Helper,
    report: Report,
    left: Any,
    right: Any,
    options: tuple[Option, ...],
    config: Config,
) -> None:
    __tracebackhide__ = True
    helper()
    resolved = config.with_options(*options)
    _walk_root(helper, text_sink(report, resolved.level), left, right, resolved)


def _walk_root(helper: Helper, sink: Sink, left: Any, right: Any, config: Config) -> None:
    __tracebackhide__ = True
    differ = Differ(config, helper=helper)
    emitter = PrintEmitter(sink, helper=helper)
    differ.walk(emitter, left, right, True, True)


def _stack_depth() -> int:
    """Number of frames on the stack, counted from the caller."""
    depth = 0
    frame = sys._getframe(1)
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth
