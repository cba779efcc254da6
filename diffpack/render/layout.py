"""Indentation and column alignment for multi-line renderings."""

from __future__ import annotations

INDENT = "    "


def indent(text: str, prefix: str = INDENT) -> str:
    """Prefix every line of text."""
    return "\n".join(prefix + line for line in text.split("\n"))


def indent_continuation(text: str, prefix: str = INDENT) -> str:
    """Prefix every line of text except the first."""
    first, sep, rest = text.partition("\n")
    if not sep:
        return text
    return first + "\n" + indent(rest, prefix)


def align_rows(rows: list[tuple[str, str]]) -> list[str]:
    """Lay out (label, text) rows with the texts starting in one column.

    Labels in a block are padded to the widest label plus one space. A row
    whose text spans several lines closes the block it belongs to, and an
    empty label never takes part in alignment.
    """
    lines: list[str] = []
    block: list[tuple[str, str]] = []

    def flush() -> None:
        if not block:
            return
        width = max(len(label) for label, _ in block) + 1
        for label, text in block:
            first, _, rest = text.partition("\n")
            lines.append(label.ljust(width) + first)
            if rest:
                lines.extend(rest.split("\n"))
        block.clear()

    for label, text in rows:
        if not label:
            flush()
            lines.extend(text.split("\n"))
            continue
        block.append((label, text))
        if "\n" in text:
            flush()
    flush()
    return lines
