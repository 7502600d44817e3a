"""Render changesets as marked, styled lines."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from pretty_compare.config.models import AppSettings
from pretty_compare.engine import diff_texts
from pretty_compare.errors import SinkWriteError
from pretty_compare.models import Changeset, Insert, IntraSpan, Keep, Remove, Replace
from pretty_compare.runtime_logging import get_runtime_logger
from pretty_compare.styles import StyleRole, Styler

SIGN_LEFT = "<"
SIGN_RIGHT = ">"
SIGN_COMMON = " "


class Sink(Protocol):
    def write(self, text: str, /) -> object: ...


def render_header(styler: Styler, left_label: str = "left", right_label: str = "right") -> str:
    diff = styler.paint("Diff", "header")
    left = styler.paint(f"{SIGN_LEFT} {left_label}", "removed")
    right = styler.paint(f"{right_label} {SIGN_RIGHT}", "added")
    return f"{diff} {left} / {right} :"


def render_line(styler: Styler, sign: str, line: str, role: StyleRole | None) -> str:
    text = f"{sign} {line}"
    return styler.paint(text, role) if role is not None else text


def render_spans(
    styler: Styler,
    sign: str,
    spans: Sequence[IntraSpan],
    role: StyleRole,
    highlight: StyleRole,
) -> str:
    """Render one side of a replaced pair, emphasising the side-only spans."""
    parts = [styler.paint(f"{sign} ", role)]
    for span in spans:
        parts.append(styler.paint(span.text, role if span.kind == "common" else highlight))
    return "".join(parts)


def changeset_lines(changeset: Changeset, styler: Styler) -> list[str]:
    lines: list[str] = []
    for op in changeset:
        if isinstance(op, Keep):
            lines.append(render_line(styler, SIGN_COMMON, op.line, None))
        elif isinstance(op, Remove):
            lines.append(render_line(styler, SIGN_LEFT, op.line, "removed"))
        elif isinstance(op, Insert):
            lines.append(render_line(styler, SIGN_RIGHT, op.line, "added"))
        elif isinstance(op, Replace):
            if op.intra is None:
                lines.append(render_line(styler, SIGN_LEFT, op.left, "removed"))
                lines.append(render_line(styler, SIGN_RIGHT, op.right, "added"))
            else:
                lines.append(
                    render_spans(styler, SIGN_LEFT, op.left_spans(), "removed", "removed_highlight")
                )
                lines.append(
                    render_spans(styler, SIGN_RIGHT, op.right_spans(), "added", "added_highlight")
                )
    return lines


def render_changeset(
    changeset: Changeset,
    sink: Sink,
    *,
    styler: Styler | None = None,
    left_label: str = "left",
    right_label: str = "right",
) -> None:
    """Write the header and one line per entry to ``sink``.

    Lines are separated by ``\\n`` and no trailing newline is written. Write
    failures are raised as ``SinkWriteError`` without retrying.
    """
    styler = styler or Styler.disabled()
    try:
        sink.write(render_header(styler, left_label, right_label))
        for line in changeset_lines(changeset, styler):
            sink.write("\n" + line)
    except OSError as exc:
        get_runtime_logger().error(
            "render.sink_failed",
            error_type=exc.__class__.__name__,
            error_message=str(exc),
        )
        raise SinkWriteError(f"failed to write comparison: {exc}") from exc


def format_changeset(
    left: str,
    right: str,
    sink: Sink,
    *,
    settings: AppSettings | None = None,
    styler: Styler | None = None,
) -> Changeset:
    """Diff two texts and render the result; returns the changeset written."""
    settings = settings or AppSettings()
    changeset = diff_texts(
        left,
        right,
        granularity=settings.diff.granularity,
        min_similarity=settings.diff.min_similarity,
    )
    render_changeset(
        changeset,
        sink,
        styler=styler,
        left_label=settings.output.left_label,
        right_label=settings.output.right_label,
    )
    return changeset
