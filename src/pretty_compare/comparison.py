"""Lazy comparison of two values through their pretty representations."""

from __future__ import annotations

import io
from typing import Any, Generic, TypeVar

from rich.pretty import pretty_repr

from pretty_compare.config.models import AppSettings, PrettySettings
from pretty_compare.config.store import load_settings
from pretty_compare.engine import diff_texts
from pretty_compare.models import Changeset
from pretty_compare.render import Sink, render_changeset
from pretty_compare.styles import Styler, styler_for

L = TypeVar("L")
R = TypeVar("R")


def debug_text(value: Any, settings: PrettySettings | None = None) -> str:
    """Multi-line representation of ``value`` used as diff input."""
    settings = settings or PrettySettings()
    if settings.raw_strings and isinstance(value, str):
        return value
    return pretty_repr(
        value,
        max_width=settings.max_width,
        indent_size=settings.indent_size,
        expand_all=settings.expand_all,
    )


class Comparison(Generic[L, R]):
    """A comparison of two values, rendered as a diff on demand.

    Construction only stores the references; representations, the changeset
    and the styled output are all produced when the comparison is rendered.

        print(Comparison({"a": 1}, {"a": 2}))
    """

    __slots__ = ("left", "right", "settings", "left_label", "right_label")

    def __init__(
        self,
        left: L,
        right: R,
        *,
        settings: AppSettings | None = None,
        left_label: str | None = None,
        right_label: str | None = None,
    ) -> None:
        self.left = left
        self.right = right
        self.settings = settings
        self.left_label = left_label
        self.right_label = right_label

    def resolved_settings(self) -> AppSettings:
        return self.settings if self.settings is not None else load_settings()

    def debug_texts(self, settings: AppSettings | None = None) -> tuple[str, str]:
        pretty = (settings or self.resolved_settings()).pretty
        return debug_text(self.left, pretty), debug_text(self.right, pretty)

    def changeset(self, settings: AppSettings | None = None) -> Changeset:
        settings = settings or self.resolved_settings()
        left, right = self.debug_texts(settings)
        return diff_texts(
            left,
            right,
            granularity=settings.diff.granularity,
            min_similarity=settings.diff.min_similarity,
        )

    @property
    def differs(self) -> bool:
        left, right = self.debug_texts()
        return left != right

    def render(self, sink: Sink, *, styler: Styler | None = None) -> None:
        settings = self.resolved_settings()
        if styler is None:
            styler = styler_for(settings.styles, mode=settings.output.color)
        output = settings.output
        render_changeset(
            self.changeset(settings),
            sink,
            styler=styler,
            left_label=self.left_label if self.left_label is not None else output.left_label,
            right_label=self.right_label if self.right_label is not None else output.right_label,
        )

    def __str__(self) -> str:
        buffer = io.StringIO()
        self.render(buffer)
        return buffer.getvalue()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.left!r}, {self.right!r})"
