"""LCS diff engine producing line changesets with intra-line detail.

Lines are aligned with a longest-common-subsequence table. Within every gap
between kept lines all removals precede all insertions; the k-th removal of a
gap is then paired with the k-th insertion. A lone removed/inserted pair is
always a ``Replace``; in larger gaps only similar pairs become a ``Replace``
(with a token-level sub-diff) and the rest stay a removed block followed by an
inserted block.
"""

from __future__ import annotations

import re
from collections.abc import Hashable, Sequence
from typing import Literal, TypeVar

from pretty_compare.config.models import Granularity
from pretty_compare.models import Changeset, EditOp, Insert, IntraSpan, Keep, Remove, Replace
from pretty_compare.segment import segment

T = TypeVar("T", bound=Hashable)
Tag = Literal["keep", "remove", "insert"]

# Token pairs above this size skip intra-line detail instead of filling a huge table.
MAX_INTRALINE_CELLS = 250_000

_WORD_RE = re.compile(r"\s+|\w+|[^\w\s]")


def edit_script(a: Sequence[T], b: Sequence[T]) -> list[tuple[Tag, T]]:
    """Return a minimal keep/remove/insert script turning ``a`` into ``b``."""
    limit = min(len(a), len(b))
    prefix = 0
    while prefix < limit and a[prefix] == b[prefix]:
        prefix += 1
    suffix = 0
    while suffix < limit - prefix and a[len(a) - 1 - suffix] == b[len(b) - 1 - suffix]:
        suffix += 1

    script: list[tuple[Tag, T]] = [("keep", item) for item in a[:prefix]]
    script.extend(_align(a[prefix : len(a) - suffix], b[prefix : len(b) - suffix]))
    script.extend(("keep", item) for item in a[len(a) - suffix :])
    return script


def _align(a: Sequence[T], b: Sequence[T]) -> list[tuple[Tag, T]]:
    n = len(a)
    m = len(b)
    if n == 0:
        return [("insert", item) for item in b]
    if m == 0:
        return [("remove", item) for item in a]

    # lengths[i][j] is the LCS length of a[i:] and b[j:].
    lengths = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        row = lengths[i]
        below = lengths[i + 1]
        item = a[i]
        for j in range(m - 1, -1, -1):
            if item == b[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = below[j] if below[j] >= row[j + 1] else row[j + 1]

    script: list[tuple[Tag, T]] = []
    i = j = 0
    while i < n and j < m:
        if a[i] == b[j]:
            script.append(("keep", a[i]))
            i += 1
            j += 1
        elif lengths[i + 1][j] >= lengths[i][j + 1]:
            script.append(("remove", a[i]))
            i += 1
        else:
            script.append(("insert", b[j]))
            j += 1
    script.extend(("remove", item) for item in a[i:])
    script.extend(("insert", item) for item in b[j:])
    return script


def tokenize(line: str, granularity: Granularity = "word") -> list[str]:
    if granularity == "char":
        return list(line)
    return _WORD_RE.findall(line)


def intraline_diff(
    left: str,
    right: str,
    granularity: Granularity = "word",
) -> tuple[IntraSpan, ...]:
    """Split a changed line pair into common, left-only and right-only spans."""
    spans: list[IntraSpan] = []
    for tag, token in edit_script(tokenize(left, granularity), tokenize(right, granularity)):
        kind = {"keep": "common", "remove": "left", "insert": "right"}[tag]
        if spans and spans[-1].kind == kind:
            spans[-1] = IntraSpan(kind=kind, text=spans[-1].text + token)
        else:
            spans.append(IntraSpan(kind=kind, text=token))
    return tuple(spans)


def is_similar(
    left: str,
    right: str,
    spans: Sequence[IntraSpan],
    min_similarity: float = 0.5,
) -> bool:
    """Decide whether a changed pair deserves intra-line highlighting.

    A pair qualifies when it shares visible text and either starts or ends
    with a visible common span, or its common spans cover at least
    ``min_similarity`` of both lines together.
    """
    if not left or not right:
        return False
    if not any(_visible_common(span) for span in spans):
        return False
    if _visible_common(spans[0]) or _visible_common(spans[-1]):
        return True
    common = sum(len(span.text) for span in spans if span.kind == "common")
    return 2 * common / (len(left) + len(right)) >= min_similarity


def _visible_common(span: IntraSpan) -> bool:
    return span.kind == "common" and bool(span.text.strip())


def pair_lines(
    left: str,
    right: str,
    *,
    granularity: Granularity = "word",
    min_similarity: float = 0.5,
) -> Replace:
    left_tokens = tokenize(left, granularity)
    right_tokens = tokenize(right, granularity)
    if len(left_tokens) * len(right_tokens) > MAX_INTRALINE_CELLS:
        return Replace(left=left, right=right)
    spans = intraline_diff(left, right, granularity)
    if not is_similar(left, right, spans, min_similarity):
        return Replace(left=left, right=right)
    return Replace(left=left, right=right, intra=spans)


def diff_lines(
    left_lines: Sequence[str],
    right_lines: Sequence[str],
    *,
    granularity: Granularity = "word",
    min_similarity: float = 0.5,
) -> Changeset:
    ops: list[EditOp] = []
    removed: list[str] = []
    inserted: list[str] = []

    def flush() -> None:
        if len(removed) == 1 and len(inserted) == 1:
            ops.append(
                pair_lines(
                    removed[0],
                    inserted[0],
                    granularity=granularity,
                    min_similarity=min_similarity,
                )
            )
            removed.clear()
            inserted.clear()
            return

        # Dissimilar lines of a larger gap stay as a removed block then an inserted block.
        loose_left: list[str] = []
        loose_right: list[str] = []

        def release() -> None:
            ops.extend(Remove(line) for line in loose_left)
            ops.extend(Insert(line) for line in loose_right)
            loose_left.clear()
            loose_right.clear()

        for left, right in zip(removed, inserted):
            pair = pair_lines(left, right, granularity=granularity, min_similarity=min_similarity)
            if pair.intra is None:
                loose_left.append(left)
                loose_right.append(right)
                continue
            release()
            ops.append(pair)
        paired = min(len(removed), len(inserted))
        loose_left.extend(removed[paired:])
        loose_right.extend(inserted[paired:])
        release()
        removed.clear()
        inserted.clear()

    for tag, line in edit_script(left_lines, right_lines):
        if tag == "remove":
            removed.append(line)
        elif tag == "insert":
            inserted.append(line)
        else:
            flush()
            ops.append(Keep(line))
    flush()
    return Changeset(ops=tuple(ops))


def diff_texts(
    left: str,
    right: str,
    *,
    granularity: Granularity = "word",
    min_similarity: float = 0.5,
) -> Changeset:
    return diff_lines(
        segment(left),
        segment(right),
        granularity=granularity,
        min_similarity=min_similarity,
    )
