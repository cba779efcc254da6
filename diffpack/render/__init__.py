"""Value rendering for diffkit messages and pretty-printing."""

from diffpack.render.formatter import format_full, format_short, quote, sorted_keys
from diffpack.render.layout import align_rows, indent, indent_continuation

__all__ = [
    "format_short",
    "format_full",
    "quote",
    "sorted_keys",
    "align_rows",
    "indent",
    "indent_continuation",
]
