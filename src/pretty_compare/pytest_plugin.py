"""pytest hook rendering failed ``==`` assertions as a colored diff.

Enable with ``pytest -p pretty_compare.pytest_plugin``.
"""

from __future__ import annotations

from typing import Any

from pretty_compare.comparison import Comparison
from pretty_compare.config.store import load_settings


def pytest_assertrepr_compare(config: Any, op: str, left: Any, right: Any) -> list[str] | None:
    if op != "==":
        return None
    if isinstance(left, str) != isinstance(right, str):
        return None

    settings = load_settings()
    if isinstance(left, str):
        if "\n" not in left and "\n" not in right:
            return None
        settings = settings.model_copy(
            update={"pretty": settings.pretty.model_copy(update={"raw_strings": True})}
        )

    comparison = Comparison(left, right, settings=settings)
    return ["left == right failed", "", *str(comparison).split("\n")]
