from __future__ import annotations

import unittest

from pretty_compare.engine import (
    diff_lines,
    diff_texts,
    edit_script,
    intraline_diff,
    is_similar,
    pair_lines,
    tokenize,
)
from pretty_compare.models import Changeset, Insert, IntraSpan, Keep, Remove, Replace
from pretty_compare.segment import join_lines, segment

LEFT_64 = "mohmie9luchohw5eizeichugh0xoa4ro4naePeMuVie1aihi7pheshuotoosah2e"
RIGHT_64 = "ot4Fae8iete1ahYa2phei7ephai5iefeet7vaeng1itho6erahy5aichuS3Thee2"

ROUND_TRIP_CASES = [
    ("", ""),
    ("", "a\nb"),
    ("a\nb\n", ""),
    ("A\nB\nC", "A\nX\nC"),
    ("same\n", "same"),
    ("one\ntwo\nthree\nfour", "zero\none\nthree\n4\nfive"),
    ("{\n    'lorem': 'Hello World!',\n    'ipsum': 42\n}", "{\n    'lorem': 'Hello Wrold!',\n}"),
    ("x\r\ny", "x\ny"),
    ("\n\n\n", "\n"),
]


class SegmentTests(unittest.TestCase):
    def test_empty_text_has_no_lines(self) -> None:
        self.assertEqual(segment(""), [])

    def test_trailing_break_yields_empty_line(self) -> None:
        self.assertEqual(segment("a\n"), ["a", ""])
        self.assertEqual(segment("\n"), ["", ""])

    def test_only_newline_breaks_lines(self) -> None:
        self.assertEqual(segment("a\r\nb\tc"), ["a\r", "b\tc"])

    def test_join_inverts_segment(self) -> None:
        for text in ["", "a", "a\n", "\n\n", "  padded  \nline "]:
            self.assertEqual(join_lines(segment(text)), text)


class EditScriptTests(unittest.TestCase):
    def test_identical_sequences_are_kept(self) -> None:
        self.assertEqual(edit_script(["a", "b"], ["a", "b"]), [("keep", "a"), ("keep", "b")])

    def test_disjoint_sequences_remove_then_insert(self) -> None:
        self.assertEqual(
            edit_script(["a", "b"], ["c", "d"]),
            [("remove", "a"), ("remove", "b"), ("insert", "c"), ("insert", "d")],
        )

    def test_script_is_minimal(self) -> None:
        a = list("ABCABBA")
        b = list("CBABAC")
        script = edit_script(a, b)

        tags = [tag for tag, _ in script]
        self.assertEqual(tags.count("keep"), 4)
        self.assertEqual(tags.count("remove"), 3)
        self.assertEqual(tags.count("insert"), 2)
        self.assertEqual([item for tag, item in script if tag != "insert"], a)
        self.assertEqual([item for tag, item in script if tag != "remove"], b)

    def test_insertions_never_precede_removals_within_a_gap(self) -> None:
        script = edit_script(list("xaby"), list("xcdey"))
        self.assertEqual(
            [tag for tag, _ in script],
            ["keep", "remove", "remove", "insert", "insert", "insert", "keep"],
        )

    def test_one_side_empty(self) -> None:
        self.assertEqual(edit_script([], ["a"]), [("insert", "a")])
        self.assertEqual(edit_script(["a"], []), [("remove", "a")])
        self.assertEqual(edit_script([], []), [])


class DiffLinesTests(unittest.TestCase):
    def test_identity_yields_only_keep(self) -> None:
        text = "first\n  second\n\nlast"
        changeset = diff_texts(text, text)
        self.assertTrue(changeset.identical)
        self.assertTrue(all(isinstance(op, Keep) for op in changeset))
        self.assertEqual(len(changeset), 4)

    def test_both_empty_is_empty_changeset(self) -> None:
        changeset = diff_texts("", "")
        self.assertEqual(changeset, Changeset())
        self.assertEqual(len(changeset), 0)

    def test_scenario_same_single_line(self) -> None:
        changeset = diff_texts("foo", "foo")
        self.assertEqual(changeset.ops, (Keep("foo"),))
        self.assertTrue(changeset.identical)

    def test_scenario_middle_line_replaced(self) -> None:
        changeset = diff_texts("A\nB\nC", "A\nX\nC")
        self.assertEqual(changeset.ops, (Keep("A"), Replace("B", "X"), Keep("C")))
        self.assertFalse(changeset.identical)

    def test_scenario_single_characters_have_no_common_span(self) -> None:
        changeset = diff_texts("L", "R")
        self.assertEqual(changeset.ops, (Replace("L", "R"),))
        self.assertIsNone(changeset.ops[0].intra)

    def test_scenario_unrelated_long_strings(self) -> None:
        changeset = diff_texts(LEFT_64, RIGHT_64)
        self.assertEqual(changeset.ops, (Replace(LEFT_64, RIGHT_64),))

    def test_surplus_lines_follow_pairs(self) -> None:
        changeset = diff_lines(["value = 1", "extra", "k"], ["value = 2", "k"])
        self.assertIsInstance(changeset.ops[0], Replace)
        self.assertIsNotNone(changeset.ops[0].intra)
        self.assertEqual(changeset.ops[1:], (Remove("extra"), Keep("k")))

        changeset = diff_lines(["k"], ["k", "n1", "n2"])
        self.assertEqual(changeset.ops, (Keep("k"), Insert("n1"), Insert("n2")))

    def test_dissimilar_gap_keeps_removed_block_before_inserted_block(self) -> None:
        changeset = diff_texts("apple\nbanana", "cherry\ndates")
        self.assertEqual(
            changeset.ops,
            (Remove("apple"), Remove("banana"), Insert("cherry"), Insert("dates")),
        )

        changeset = diff_lines(["a", "b", "k"], ["c", "k"])
        self.assertEqual(changeset.ops, (Remove("a"), Remove("b"), Insert("c"), Keep("k")))

    def test_similar_pair_splits_dissimilar_blocks(self) -> None:
        changeset = diff_lines(["alpha", "total = 1", "omega"], ["beta", "total = 2", "psi"])
        self.assertEqual(changeset.ops[:2], (Remove("alpha"), Insert("beta")))
        self.assertIsInstance(changeset.ops[2], Replace)
        self.assertIsNotNone(changeset.ops[2].intra)
        self.assertEqual(changeset.ops[3:], (Remove("omega"), Insert("psi")))

    def test_counts(self) -> None:
        changeset = diff_texts("one\ntwo\nthree", "one\n2\nthree\nfour")
        self.assertEqual(
            changeset.counts(),
            {"keep": 2, "remove": 0, "insert": 1, "replace": 1},
        )

    def test_round_trips_reconstruct_both_sides(self) -> None:
        for left, right in ROUND_TRIP_CASES:
            with self.subTest(left=left, right=right):
                changeset = diff_texts(left, right)
                self.assertEqual(changeset.left_text(), left)
                self.assertEqual(changeset.right_text(), right)


class IntralineTests(unittest.TestCase):
    def test_word_tokens_cover_line(self) -> None:
        line = "    'lorem': \"Hello World!\","
        self.assertEqual("".join(tokenize(line)), line)
        self.assertIn("World", tokenize(line))

    def test_changed_word_is_isolated(self) -> None:
        left = '    lorem: "Hello World!",'
        right = '    lorem: "Hello Wrold!",'
        self.assertEqual(
            intraline_diff(left, right),
            (
                IntraSpan("common", '    lorem: "Hello '),
                IntraSpan("left", "World"),
                IntraSpan("right", "Wrold"),
                IntraSpan("common", '!",'),
            ),
        )
        replaced = pair_lines(left, right)
        self.assertIsNotNone(replaced.intra)

    def test_spans_reconstruct_each_line(self) -> None:
        pairs = [
            ("dolor: Ok(\"hey\"),", "dolor: Ok(\"hey ho!\"),"),
            ("a b c", "a c d"),
            ("x = 1", "y = 12"),
            ("", "added"),
        ]
        for granularity in ("word", "char"):
            for left, right in pairs:
                with self.subTest(granularity=granularity, left=left, right=right):
                    spans = intraline_diff(left, right, granularity)
                    self.assertEqual("".join(s.text for s in spans if s.kind != "right"), left)
                    self.assertEqual("".join(s.text for s in spans if s.kind != "left"), right)

    def test_granularity_changes_similarity(self) -> None:
        self.assertIsNone(pair_lines("foo", "fob").intra)
        self.assertEqual(
            pair_lines("foo", "fob", granularity="char").intra,
            (IntraSpan("common", "fo"), IntraSpan("left", "o"), IntraSpan("right", "b")),
        )

    def test_whitespace_only_overlap_is_not_similar(self) -> None:
        spans = intraline_diff("    alpha", "    beta")
        self.assertFalse(is_similar("    alpha", "    beta", spans))

    def test_empty_line_is_never_similar(self) -> None:
        self.assertFalse(is_similar("", "x", intraline_diff("", "x")))

    def test_ratio_threshold_applies_without_shared_edges(self) -> None:
        left = "a shared middle b"
        right = "c shared middle d"
        spans = intraline_diff(left, right)
        self.assertTrue(is_similar(left, right, spans, min_similarity=0.5))
        self.assertFalse(is_similar(left, right, spans, min_similarity=0.95))


if __name__ == "__main__":
    unittest.main()
