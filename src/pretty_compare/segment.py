"""Line segmentation of debug text."""

from __future__ import annotations

from collections.abc import Sequence

LINE_BREAK = "\n"


def segment(text: str) -> list[str]:
    """Split ``text`` on ``\\n`` only.

    The empty string has no lines. A text ending in a line break yields a
    trailing empty line, so ``join_lines(segment(text)) == text`` always holds.
    """
    if not text:
        return []
    return text.split(LINE_BREAK)


def join_lines(lines: Sequence[str]) -> str:
    return LINE_BREAK.join(lines)
