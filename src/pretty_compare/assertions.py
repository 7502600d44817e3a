"""Drop-in equality assertions that explain failures with a diff."""

from __future__ import annotations

from typing import Any

from pretty_compare.comparison import Comparison, debug_text
from pretty_compare.config.models import AppSettings
from pretty_compare.config.store import load_settings
from pretty_compare.styles import styler_for


def assert_eq(
    left: Any,
    right: Any,
    msg: str | None = None,
    *,
    settings: AppSettings | None = None,
) -> None:
    __tracebackhide__ = True
    if left == right:
        return
    comparison = Comparison(left, right, settings=settings)
    raise AssertionError(
        f"assertion failed: `(left == right)`{_suffix(msg)}\n\n{comparison}\n"
    )


def assert_ne(
    left: Any,
    right: Any,
    msg: str | None = None,
    *,
    settings: AppSettings | None = None,
) -> None:
    __tracebackhide__ = True
    if left != right:
        return

    settings = settings or load_settings()
    styler = styler_for(settings.styles, mode=settings.output.color)
    header = f"assertion failed: `(left != right)`{_suffix(msg)}"

    if repr(left) != repr(right):
        comparison = Comparison(left, right, settings=settings)
        note = styler.paint("Note", "note")
        raise AssertionError(
            f"{header}\n\n{comparison}\n{note}: According to the `__eq__` implementation, "
            "both of the values are equivalent, even if their representations differ.\n\n"
        )

    both = styler.paint("Both sides", "header")
    raise AssertionError(f"{header}\n\n{both}:\n{debug_text(left, settings.pretty)}\n\n")


def _suffix(msg: str | None) -> str:
    return f": {msg}" if msg else ""
