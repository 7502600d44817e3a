"""Edit script data model: operations, intra-line spans and changesets."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

from pretty_compare.segment import join_lines

SpanKind = Literal["common", "left", "right"]


@dataclass(frozen=True, slots=True)
class IntraSpan:
    """A run of a changed line pair that is common or only on one side."""

    kind: SpanKind
    text: str


@dataclass(frozen=True, slots=True)
class Keep:
    line: str


@dataclass(frozen=True, slots=True)
class Remove:
    line: str


@dataclass(frozen=True, slots=True)
class Insert:
    line: str


@dataclass(frozen=True, slots=True)
class Replace:
    """A removed line paired with the inserted line that took its place.

    ``intra`` is set only when the two lines are similar enough for
    intra-line highlighting; otherwise the pair renders as a plain removal
    followed by a plain insertion.
    """

    left: str
    right: str
    intra: tuple[IntraSpan, ...] | None = None

    def left_spans(self) -> list[IntraSpan]:
        return [span for span in self.intra or () if span.kind != "right"]

    def right_spans(self) -> list[IntraSpan]:
        return [span for span in self.intra or () if span.kind != "left"]


EditOp = Keep | Remove | Insert | Replace


@dataclass(frozen=True, slots=True)
class Changeset:
    """Ordered edit script turning the left lines into the right lines."""

    ops: tuple[EditOp, ...] = ()

    def __iter__(self) -> Iterator[EditOp]:
        return iter(self.ops)

    def __len__(self) -> int:
        return len(self.ops)

    @property
    def identical(self) -> bool:
        return all(isinstance(op, Keep) for op in self.ops)

    def left_lines(self) -> list[str]:
        lines: list[str] = []
        for op in self.ops:
            if isinstance(op, (Keep, Remove)):
                lines.append(op.line)
            elif isinstance(op, Replace):
                lines.append(op.left)
        return lines

    def right_lines(self) -> list[str]:
        lines: list[str] = []
        for op in self.ops:
            if isinstance(op, (Keep, Insert)):
                lines.append(op.line)
            elif isinstance(op, Replace):
                lines.append(op.right)
        return lines

    def left_text(self) -> str:
        return join_lines(self.left_lines())

    def right_text(self) -> str:
        return join_lines(self.right_lines())

    def counts(self) -> dict[str, int]:
        counts = {"keep": 0, "remove": 0, "insert": 0, "replace": 0}
        for op in self.ops:
            counts[type(op).__name__.lower()] += 1
        return counts
