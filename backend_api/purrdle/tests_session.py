from django.test import SimpleTestCase

from purrdle.puzzles.catalog import WordEntry
from purrdle.puzzles.engines import LetterState
from purrdle.puzzles.session import (
    GameSession,
    GameStatus,
    InvalidSubmission,
    SessionClock,
    share_summary,
)

C, P, A = LetterState.CORRECT, LetterState.PRESENT, LetterState.ABSENT

CRANE = WordEntry(
    word="CRANE",
    definitions=("A tall crane-like wading bird", "A lifting machine", "To stretch the neck"),
    quality=5,
    example="She had to crane her neck.",
)
CAT_NAP = WordEntry(word="cat nap", definitions=("A short sleep", "", ""), quality=4)


class FakeTime:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def _type(session, word):
    for ch in word:
        session.add_letter(ch)


class GameSessionFlowTests(SimpleTestCase):
    def setUp(self):
        self.time = FakeTime()
        self.session = GameSession(CRANE, max_attempts=6, clock=SessionClock(self.time))

    def test_crate_then_crane_wins_in_two(self):
        _type(self.session, "CRATE")
        first = self.session.submit_guess()
        self.assertEqual(first.feedback, (C, C, C, A, C))
        self.assertEqual(self.session.status, GameStatus.PLAYING)

        _type(self.session, "crane")
        second = self.session.submit_guess()
        self.assertTrue(second.is_correct)
        self.assertEqual(self.session.status, GameStatus.WON)
        self.assertEqual(self.session.attempts_used, 2)

    def test_win_on_first_attempt(self):
        self.session.submit_guess("crane")
        self.assertEqual(self.session.status, GameStatus.WON)

    def test_exhausting_attempts_loses_on_final_guess(self):
        for i in range(5):
            self.session.submit_guess("lemon")
            self.assertEqual(self.session.status, GameStatus.PLAYING, msg=f"after guess {i + 1}")
        self.session.submit_guess("lemon")
        self.assertEqual(self.session.status, GameStatus.LOST)
        self.assertEqual(self.session.attempts_used, 6)

    def test_terminal_state_rejects_further_mutation(self):
        self.session.submit_guess("crane")
        with self.assertRaises(InvalidSubmission):
            self.session.submit_guess("crane")
        self.assertFalse(self.session.add_letter("a"))
        self.assertFalse(self.session.delete_letter())
        self.assertFalse(self.session.reveal_definition())
        self.assertEqual(self.session.reveal_letter(), [])
        self.assertEqual(self.session.attempts_used, 1)
        self.assertEqual(self.session.status, GameStatus.WON)

    def test_wrong_length_is_rejected_without_consuming_attempt(self):
        _type(self.session, "cra")
        with self.assertRaises(InvalidSubmission):
            self.session.submit_guess()
        self.assertEqual(self.session.attempts_used, 0)
        self.assertEqual(self.session.buffer, ["c", "r", "a"])
        with self.assertRaises(InvalidSubmission):
            self.session.submit_guess("cranes")
        with self.assertRaises(InvalidSubmission):
            self.session.submit_guess("cr4ne")
        self.assertEqual(self.session.attempts_used, 0)

    def test_buffer_editing(self):
        self.assertFalse(self.session.delete_letter())
        self.assertTrue(self.session.add_letter("C"))
        self.assertFalse(self.session.add_letter("1"))
        self.assertFalse(self.session.add_letter("é"))
        self.assertFalse(self.session.add_letter("ab"))
        _type(self.session, "rane")
        self.assertFalse(self.session.add_letter("x"))
        self.assertEqual("".join(self.session.buffer), "crane")
        self.assertTrue(self.session.delete_letter())
        self.assertEqual("".join(self.session.buffer), "cran")

    def test_submission_clears_buffer(self):
        _type(self.session, "lemon")
        self.session.submit_guess()
        self.assertEqual(self.session.buffer, [])

    def test_clock_stops_when_game_ends(self):
        self.time.now = 42
        self.session.submit_guess("crane")
        self.time.now = 500
        self.assertEqual(self.session.elapsed, 42)


class SessionHintTests(SimpleTestCase):
    def setUp(self):
        self.time = FakeTime()
        self.session = GameSession(CRANE, clock=SessionClock(self.time))

    def test_definitions_unlock_with_time_and_guesses(self):
        self.assertEqual(self.session.disclosure().unlocked_definition_count, 1)
        self.session.submit_guess("lemon")
        self.session.submit_guess("lemon")
        self.assertEqual(self.session.disclosure().unlocked_definition_count, 2)
        self.time.now = 60
        self.assertEqual(self.session.disclosure().unlocked_definition_count, 3)

    def test_definitions_censored_while_playing(self):
        self.assertEqual(self.session.visible_definitions(), ["A tall _____-like wading bird"])
        self.assertIsNone(self.session.visible_example())
        self.session.submit_guess("crane")
        self.assertEqual(list(self.session.visible_definitions()), list(CRANE.definitions))
        self.assertEqual(self.session.visible_example(), CRANE.example)

    def test_loss_discloses_every_definition(self):
        for _ in range(6):
            self.session.submit_guess("lemon")
        self.assertEqual(self.session.disclosure().unlocked_definition_count, 3)

    def test_tick_marks_hinted_cells(self):
        self.time.now = 95
        self.assertEqual(self.session.tick(), [0])
        self.assertEqual(self.session.tick(), [])
        self.assertEqual(self.session.hinted_positions, [0])
        row = self.session.current_row()
        self.assertEqual(row[0], ("c", LetterState.HINTED))
        self.assertEqual(row[1], ("", LetterState.EMPTY))

    def test_typed_letters_cover_hints(self):
        self.session.reveal_letter()
        self.session.add_letter("x")
        self.assertEqual(self.session.current_row()[0], ("x", LetterState.EMPTY))

    def test_manual_reveals(self):
        self.assertTrue(self.session.reveal_definition())
        self.assertEqual(self.session.disclosure().unlocked_definition_count, 2)
        self.assertEqual(self.session.reveal_letter(), [0])
        self.assertEqual(self.session.reveal_letter(), [1])
        self.assertEqual(self.session.hinted_positions, [0, 1])

    def test_letter_hints_skip_solved_positions(self):
        self.session.submit_guess("crate")
        self.assertEqual(self.session.reveal_letter(), [3])
        self.assertEqual(self.session.reveal_letter(), [])
        self.assertEqual(self.session.timeline.letter_slots, 1)

    def test_timed_letter_hints_skip_solved_positions(self):
        self.session.submit_guess("cxxxx")
        self.time.now = 125
        self.assertEqual(self.session.tick(), [1, 2])
        self.assertEqual(self.session.hinted_positions, [1, 2])

    def test_closed_session_ignores_timers(self):
        self.session.close()
        self.time.now = 1000
        self.assertEqual(self.session.tick(), [])
        self.assertEqual(self.session.hinted_positions, [])
        self.assertFalse(self.session.clock.running)
        self.assertFalse(self.session.add_letter("c"))
        with self.assertRaises(InvalidSubmission):
            self.session.submit_guess("crane")


class MultiWordTargetTests(SimpleTestCase):
    def setUp(self):
        self.session = GameSession(CAT_NAP, clock=SessionClock(FakeTime()))

    def test_fixed_characters_are_revealed_and_skipped(self):
        self.assertEqual(self.session.current_row()[3], (" ", LetterState.REVEALED))
        _type(self.session, "catnapx")
        self.assertEqual("".join(self.session.buffer), "catnap")
        record = self.session.submit_guess()
        self.assertEqual(record.word, "cat nap")
        self.assertEqual(self.session.status, GameStatus.WON)

    def test_whole_guess_may_include_the_space(self):
        self.session.submit_guess("CAT NAP")
        self.assertEqual(self.session.status, GameStatus.WON)

    def test_letter_hints_skip_fixed_positions(self):
        self.assertEqual(self.session.timeline.letter_slots, 6)
        self.assertNotIn(3, self.session.timeline.letter_positions)


class BoardViewTests(SimpleTestCase):
    def setUp(self):
        self.session = GameSession(CRANE, max_attempts=2, clock=SessionClock(FakeTime()))

    def test_solution_row_after_loss(self):
        self.assertIsNone(self.session.solution_row())
        self.session.submit_guess("crate")
        self.session.submit_guess("lemon")
        self.assertEqual(self.session.status, GameStatus.LOST)
        states = [state for _, state in self.session.solution_row()]
        self.assertEqual(states, [C, C, C, LetterState.REVEALED, C])

    def test_keyboard(self):
        self.session.submit_guess("crate")
        keys = self.session.keyboard()
        self.assertEqual(keys["c"], C)
        self.assertEqual(keys["t"], A)


class ShareSummaryTests(SimpleTestCase):
    def setUp(self):
        self.session = GameSession(CRANE, label="#12", clock=SessionClock(FakeTime()))

    def test_share_text_for_win(self):
        self.session.submit_guess("crate")
        self.session.submit_guess("crane")
        text = self.session.share_summary()
        lines = text.split("\n")
        self.assertEqual(lines[0], "Purrdle #12")
        self.assertEqual(lines[1], "\U0001F7E9" * 3 + "⬜" + "\U0001F7E9")
        self.assertEqual(lines[2], "\U0001F7E9" * 5)
        self.assertEqual(lines[3], "guessed in 2/6")
        self.assertEqual(lines[4], "hints: 1 definition, 0 letters")

    def test_share_text_is_deterministic_and_printable(self):
        self.session.submit_guess("lemon")
        first = self.session.share_summary()
        self.assertEqual(first, self.session.share_summary())
        self.assertTrue(all(ch == "\n" or ch.isprintable() for ch in first))
        self.assertIn("in progress 1/6", first)

    def test_share_text_for_loss(self):
        session = GameSession(CRANE, max_attempts=1, clock=SessionClock(FakeTime()))
        session.submit_guess("lemon")
        text = share_summary(session.guesses, session.status, session.max_attempts, label="x")
        self.assertEqual(text.split("\n")[-1], "guessed in X/1")

    def test_multi_word_share_rows_cover_letters_only(self):
        session = GameSession(CAT_NAP, clock=SessionClock(FakeTime()))
        session.submit_guess("catnap")
        self.assertEqual(session.share_summary().split("\n")[1], "\U0001F7E9" * 6)
