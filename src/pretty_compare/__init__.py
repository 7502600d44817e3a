"""Colored, line- and word-level diffs of two values' representations.

    from pretty_compare import Comparison, assert_eq

    print(Comparison(expected, actual))
    assert_eq(expected, actual)
"""

from pretty_compare.assertions import assert_eq, assert_ne
from pretty_compare.comparison import Comparison, debug_text
from pretty_compare.engine import diff_lines, diff_texts, edit_script, intraline_diff
from pretty_compare.errors import SinkWriteError
from pretty_compare.models import Changeset, Insert, IntraSpan, Keep, Remove, Replace
from pretty_compare.render import format_changeset, render_changeset
from pretty_compare.segment import join_lines, segment
from pretty_compare.styles import StyleSpec, Styler, init_terminal, strip_styles
from pretty_compare.version import __version__

__all__ = [
    "Changeset",
    "Comparison",
    "Insert",
    "IntraSpan",
    "Keep",
    "Remove",
    "Replace",
    "SinkWriteError",
    "StyleSpec",
    "Styler",
    "__version__",
    "assert_eq",
    "assert_ne",
    "debug_text",
    "diff_lines",
    "diff_texts",
    "edit_script",
    "format_changeset",
    "init_terminal",
    "intraline_diff",
    "join_lines",
    "render_changeset",
    "segment",
    "strip_styles",
]
