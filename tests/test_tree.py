import unittest
from typing import Iterator

import numpy as np

from progressive_anagram import (
    Branch,
    Leaf,
    Node,
    SplitMode,
    build_tree,
    count_words,
    follow,
    iter_leaves,
    preprocess,
    render_tree,
    select_split_letter,
    tree_depth,
)
from progressive_anagram.tree import binary_entropy, letter_counts

PLANETS = ["Mercury", "Venus", "Earth", "Mars", "Jupiter", "Saturn", "Uranus", "Neptune", "Pluto"]

# Nine words contain "s", one does not; "a" splits them exactly in half.
SKEWED = ["as", "bas", "cas", "das", "fas", "is", "os", "us", "ys", "o"]


def _branches(node: Node) -> Iterator[Branch]:
    if isinstance(node, Branch):
        yield node
        yield from _branches(node.yes)
        yield from _branches(node.no)


class LetterCountTests(unittest.TestCase):
    def test_counts_ignore_used_letters(self) -> None:
        words = preprocess(["ab", "b", "bc"])
        counts = letter_counts(words)
        self.assertEqual(counts[0], 1)
        self.assertEqual(counts[1], 3)
        self.assertEqual(counts[2], 1)

        masked = letter_counts(words, used_mask=0b10)
        self.assertEqual(masked[1], 0)
        self.assertEqual(masked[0], 1)

    def test_counts_for_empty_input(self) -> None:
        counts = letter_counts([])
        self.assertEqual(counts.shape, (26,))
        self.assertEqual(int(counts.sum()), 0)

    def test_binary_entropy_edges(self) -> None:
        h = binary_entropy(np.array([0.0, 0.5, 1.0]))
        self.assertEqual(h[0], 0.0)
        self.assertAlmostEqual(h[1], 1.0)
        self.assertEqual(h[2], 0.0)


class SelectSplitLetterTests(unittest.TestCase):
    def test_no_split_for_single_word(self) -> None:
        self.assertIsNone(select_split_letter(preprocess(["cat"]), 0))
        self.assertIsNone(select_split_letter([], 0))

    def test_no_split_for_anagrams(self) -> None:
        self.assertIsNone(select_split_letter(preprocess(["cat", "act", "tac"]), 0))

    def test_balanced_prefers_even_split_and_first_letter_on_ties(self) -> None:
        words = preprocess(["cat", "dog"])
        self.assertEqual(select_split_letter(words, 0), 0)

        words = preprocess(["ab", "ac", "bd", "cd"])
        # a, b, c, d all split 2/2; "a" comes first.
        self.assertEqual(select_split_letter(words, 0, "balanced"), 0)
        self.assertEqual(select_split_letter(words, 0b1, "balanced"), 1)

    def test_used_letters_are_never_selected(self) -> None:
        words = preprocess(["cat", "dog"])
        used = (1 << 0) | (1 << 2) | (1 << 3)
        self.assertEqual(select_split_letter(words, used), ord("g") - ord("a"))

        all_used = (1 << 26) - 1
        self.assertIsNone(select_split_letter(words, all_used))

    def test_entropy_and_balanced_modes_can_disagree(self) -> None:
        words = preprocess(SKEWED)
        counts = letter_counts(words)
        self.assertEqual(counts[ord("s") - ord("a")], 9)
        self.assertEqual(counts[0], 5)

        balanced = select_split_letter(words, 0, SplitMode.BALANCED)
        entropy = select_split_letter(words, 0, SplitMode.ENTROPY)

        self.assertEqual(balanced, 0)
        self.assertIsNotNone(entropy)
        self.assertNotEqual(entropy, balanced)
        self.assertIn(int(counts[entropy]), (1, 9))

    def test_mode_parsing(self) -> None:
        words = preprocess(["cat", "dog"])
        self.assertEqual(select_split_letter(words, 0, " Entropy "), 0)
        with self.assertRaises(ValueError):
            select_split_letter(words, 0, "minimax")
        with self.assertRaises(ValueError):
            select_split_letter(words, 0, 3)  # type: ignore[arg-type]


class BuildTreeTests(unittest.TestCase):
    def test_two_words_make_one_branch(self) -> None:
        root = build_tree(["cat", "dog"])
        self.assertEqual(root, Branch(letter="a", yes=Leaf(("cat",)), no=Leaf(("dog",))))
        self.assertEqual(tree_depth(root), 1)

    def test_anagrams_collapse_into_single_leaf(self) -> None:
        root = build_tree(["cat", "act", "tac"])
        self.assertEqual(root, Leaf(("cat", "act", "tac")))

    def test_empty_input_gives_empty_leaf(self) -> None:
        root = build_tree([])
        self.assertEqual(root, Leaf(()))
        self.assertEqual(count_words(root), 0)

    def test_ligature_and_plain_spelling_collapse(self) -> None:
        root = build_tree(["Æther", "aether"])
        self.assertEqual(root, Leaf(("Æther", "aether")))

    def test_blank_words_are_dropped(self) -> None:
        root = build_tree(["", "   ", "cat", "dog"])
        self.assertEqual(count_words(root), 2)

    def test_build_is_deterministic(self) -> None:
        for entropy in (False, True):
            first = build_tree(PLANETS, entropy=entropy)
            second = build_tree(list(PLANETS), entropy=entropy)
            self.assertEqual(first, second)

    def test_every_word_lands_in_exactly_one_leaf(self) -> None:
        for entropy in (False, True):
            root = build_tree(PLANETS, entropy=entropy)
            leaf_words = [w for _, leaf in iter_leaves(root) for w in leaf.words]
            self.assertEqual(sorted(leaf_words), sorted(PLANETS))

    def test_no_letter_repeats_on_a_path(self) -> None:
        for entropy in (False, True):
            root = build_tree(PLANETS + SKEWED, entropy=entropy)
            for trail, _ in iter_leaves(root):
                letters = [letter for letter, _ in trail]
                self.assertEqual(len(letters), len(set(letters)))

    def test_branches_partition_their_words(self) -> None:
        root = build_tree(PLANETS + SKEWED)
        for branch in _branches(root):
            yes = count_words(branch.yes)
            no = count_words(branch.no)
            self.assertGreater(yes, 0)
            self.assertGreater(no, 0)
            self.assertEqual(yes + no, count_words(branch))

    def test_yes_side_contains_split_letter(self) -> None:
        root = build_tree(PLANETS)
        for trail, leaf in iter_leaves(root):
            for word in preprocess(leaf.words):
                for letter, yes in trail:
                    self.assertEqual(letter in word.normalized, yes)

    def test_entropy_mode_changes_the_first_question(self) -> None:
        balanced = build_tree(SKEWED)
        entropy = build_tree(SKEWED, entropy=True)
        assert isinstance(balanced, Branch)
        assert isinstance(entropy, Branch)
        self.assertEqual(balanced.letter, "a")
        self.assertNotEqual(entropy.letter, "a")


class TreeHelperTests(unittest.TestCase):
    def test_follow_replays_a_trail(self) -> None:
        root = build_tree(PLANETS)
        for trail, leaf in iter_leaves(root):
            self.assertIs(follow(root, trail), leaf)

    def test_follow_accepts_upper_case_letters(self) -> None:
        root = build_tree(["cat", "dog"])
        self.assertEqual(follow(root, [("A", False)]), Leaf(("dog",)))

    def test_follow_rejects_mismatched_trails(self) -> None:
        root = build_tree(["cat", "dog"])
        with self.assertRaises(ValueError):
            follow(root, [("z", True)])
        with self.assertRaises(ValueError):
            follow(root, [("a", True), ("c", True)])

    def test_render_tree(self) -> None:
        text = render_tree(build_tree(["cat", "dog"]))
        self.assertIn("[a]", text)
        self.assertIn("cat", text)
        self.assertIn("dog", text)
        self.assertEqual(render_tree(Leaf(())), "(empty)")


if __name__ == "__main__":
    unittest.main()
