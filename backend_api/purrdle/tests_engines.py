from django.test import SimpleTestCase

from purrdle.puzzles.engines import LetterState, evaluate, feedback_to_compact, keyboard_states

C, P, A = LetterState.CORRECT, LetterState.PRESENT, LetterState.ABSENT


class EvaluateTests(SimpleTestCase):
    def test_exact_match_is_all_correct(self):
        self.assertEqual(evaluate("APPLE", "APPLE"), [C, C, C, C, C])

    def test_loose_matches_follow_letter_pool(self):
        # L and E occur in APPLE, the rest do not.
        self.assertEqual(evaluate("LEMON", "APPLE"), [P, P, A, A, A])

    def test_duplicate_letters_limited_to_target_count(self):
        # SPEED holds two E's, so both E's in ERASE count; nothing is in place.
        self.assertEqual(evaluate("ERASE", "SPEED"), [P, A, A, P, P])

    def test_exact_match_consumes_letter_before_loose_match(self):
        # APPLE has two P's; the P in position 2 is exact, only one P is left.
        self.assertEqual(evaluate("PUPPY", "APPLE"), [P, A, C, A, A])

    def test_repeated_guess_letter_with_single_target_occurrence(self):
        self.assertEqual(evaluate("EERIE", "CRANE"), [A, A, P, A, C])

    def test_case_insensitive(self):
        self.assertEqual(evaluate("aPpLe", "Apple"), [C, C, C, C, C])

    def test_length_mismatch_raises(self):
        with self.assertRaises(ValueError):
            evaluate("CAT", "CRANE")

    def test_evaluation_is_pure(self):
        first = evaluate("CRATE", "CRANE")
        second = evaluate("CRATE", "CRANE")
        self.assertEqual(first, second)
        self.assertEqual(first, [C, C, C, A, C])


class FeedbackHelpersTests(SimpleTestCase):
    def test_compact_representation(self):
        self.assertEqual(feedback_to_compact([C, P, A]), "gyb")

    def test_keyboard_keeps_best_state(self):
        rows = [
            ("lemon", evaluate("lemon", "apple")),
            ("apple", evaluate("apple", "apple")),
        ]
        states = keyboard_states(rows)
        self.assertEqual(states["l"], C)
        self.assertEqual(states["e"], C)
        self.assertEqual(states["m"], A)

    def test_keyboard_ignores_non_letters(self):
        states = keyboard_states([("cat nap", evaluate("cat nap", "cat nap"))])
        self.assertNotIn(" ", states)
        self.assertEqual(set(states), {"c", "a", "t", "n", "p"})
