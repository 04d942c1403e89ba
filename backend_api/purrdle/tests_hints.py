from django.test import SimpleTestCase

from purrdle.puzzles.hints import HintSchedule, HintTimeline, censor_definition, letter_hint_order


class DefinitionUnlockTests(SimpleTestCase):
    def setUp(self):
        self.timeline = HintTimeline("crane")

    def test_time_thresholds(self):
        self.assertEqual(self.timeline.definition_count(0, 0), 1)
        self.assertEqual(self.timeline.definition_count(29.9, 0), 1)
        self.assertEqual(self.timeline.definition_count(30, 0), 2)
        self.assertEqual(self.timeline.definition_count(60, 0), 3)
        self.assertEqual(self.timeline.definition_count(6000, 0), 3)

    def test_guess_thresholds(self):
        self.assertEqual(self.timeline.definition_count(0, 1), 1)
        self.assertEqual(self.timeline.definition_count(0, 2), 2)
        self.assertEqual(self.timeline.definition_count(0, 4), 3)

    def test_sources_merge_by_max_not_sum(self):
        # Time and guesses each unlock two slots; together still two.
        self.assertEqual(self.timeline.definition_count(30, 2), 2)

    def test_manual_reveal_advances_one_slot(self):
        self.assertTrue(self.timeline.reveal_next_definition(0, 0))
        self.assertEqual(self.timeline.definition_count(0, 0), 2)
        self.assertTrue(self.timeline.reveal_next_definition(0, 0))
        self.assertEqual(self.timeline.definition_count(0, 0), 3)
        self.assertFalse(self.timeline.reveal_next_definition(0, 0))
        self.assertEqual(self.timeline.definition_count(0, 0), 3)

    def test_manual_reveal_builds_on_current_count(self):
        self.assertEqual(self.timeline.definition_count(30, 0), 2)
        self.assertTrue(self.timeline.reveal_next_definition(30, 0))
        self.assertEqual(self.timeline.definition_count(30, 0), 3)

    def test_game_end_discloses_every_definition(self):
        self.assertEqual(self.timeline.definition_count(0, 1, playing=False), 3)
        self.assertFalse(self.timeline.reveal_next_definition(0, 1, playing=False))

    def test_next_definition_countdown(self):
        self.assertEqual(self.timeline.next_definition_in(10, 0), 20.0)
        self.assertEqual(self.timeline.next_definition_in(45, 0), 15.0)
        self.assertIsNone(self.timeline.next_definition_in(60, 0))
        self.assertIsNone(self.timeline.next_definition_in(10, 0, playing=False))


class LetterUnlockTests(SimpleTestCase):
    def setUp(self):
        self.timeline = HintTimeline("crane")
        self.notified = []
        self.timeline.add_listener(self.notified.append)

    def test_time_based_letter_hints(self):
        self.assertEqual(self.timeline.letter_count(89), 0)
        self.assertEqual(self.timeline.letter_count(90), 1)
        self.assertEqual(self.timeline.letter_count(120), 2)
        self.assertEqual(self.timeline.letter_count(10000), 5)

    def test_each_slot_is_announced_once_in_order(self):
        self.assertEqual(self.timeline.advance(95), [0])
        self.assertEqual(self.timeline.advance(95), [])
        self.assertEqual(self.timeline.advance(150), [1, 2])
        self.assertEqual(self.timeline.advance(150), [])
        self.assertEqual(self.notified, [0, 1, 2])

    def test_manual_letter_is_announced_immediately(self):
        self.assertEqual(self.timeline.reveal_next_letter(0), [0])
        # The time threshold for slot 1 is already covered by the manual reveal.
        self.assertEqual(self.timeline.advance(90), [])
        self.assertEqual(self.timeline.advance(120), [1])
        self.assertEqual(self.notified, [0, 1])

    def test_manual_letter_reveals_are_capped(self):
        timeline = HintTimeline("cat")
        revealed = [timeline.reveal_next_letter(0) for _ in range(5)]
        self.assertEqual(revealed, [[0], [1], [2], [], []])

    def test_letters_freeze_when_game_ends(self):
        self.timeline.advance(95)
        self.assertEqual(self.timeline.advance(500, playing=False), [])
        self.assertEqual(self.timeline.letter_count(500, playing=False), 1)
        self.assertEqual(self.timeline.reveal_next_letter(500, playing=False), [])
        self.assertIsNone(self.timeline.next_letter_in(500, playing=False))

    def test_listeners_can_be_detached(self):
        self.timeline.clear_listeners()
        self.timeline.advance(200)
        self.assertEqual(self.notified, [])

    def test_next_letter_countdown(self):
        self.assertEqual(self.timeline.next_letter_in(60), 30.0)
        self.timeline.reveal_next_letter(60)
        self.assertEqual(self.timeline.next_letter_in(60), 60.0)


class DisclosureMonotonicityTests(SimpleTestCase):
    def test_counts_never_decrease(self):
        timeline = HintTimeline("whisker")
        history = []
        steps = [(0, 0), (10, 0), (31, 1), (20, 1), (45, 2), (61, 2), (91, 3), (80, 3), (125, 5), (400, 6)]
        for i, (elapsed, guesses) in enumerate(steps):
            if i == 3:
                timeline.reveal_next_letter(elapsed)
            timeline.advance(elapsed)
            disclosure = timeline.disclosure(elapsed, guesses)
            history.append((disclosure.unlocked_definition_count, len(disclosure.unlocked_letter_positions)))
        for (d1, l1), (d2, l2) in zip(history, history[1:]):
            self.assertLessEqual(d1, d2)
            self.assertLessEqual(l1, l2)
        self.assertEqual(history[-1], (3, 7))

    def test_disclosed_positions_match_slot_order(self):
        timeline = HintTimeline("crane")
        disclosure = timeline.disclosure(125, 0)
        self.assertEqual(disclosure.unlocked_letter_positions, frozenset({0, 1}))


class LetterOrderTests(SimpleTestCase):
    def test_left_to_right_skips_non_letters(self):
        self.assertEqual(letter_hint_order("cat nap"), [0, 1, 2, 4, 5, 6])

    def test_scattered_order_is_stable_permutation(self):
        first = letter_hint_order("whiskers", "scattered")
        second = letter_hint_order("WHISKERS", "scattered")
        self.assertEqual(first, second)
        self.assertEqual(sorted(first), list(range(8)))

    def test_unknown_order_rejected(self):
        with self.assertRaises(ValueError):
            letter_hint_order("crane", "random")

    def test_timeline_uses_schedule_order(self):
        schedule = HintSchedule(letter_order="scattered")
        timeline = HintTimeline("whiskers", schedule)
        self.assertEqual(list(timeline.letter_positions), letter_hint_order("whiskers", "scattered"))


class HintScheduleTests(SimpleTestCase):
    def test_custom_pacing(self):
        schedule = HintSchedule(
            definition_time_thresholds=(0, 10),
            definition_guess_thresholds=(0, 1),
            letter_hint_start=5,
            letter_hint_interval=5,
        )
        timeline = HintTimeline("cat", schedule)
        self.assertEqual(timeline.definition_slots, 2)
        self.assertEqual(timeline.definition_count(0, 1), 2)
        self.assertEqual(timeline.letter_count(10), 2)

    def test_invalid_schedules_rejected(self):
        with self.assertRaises(ValueError):
            HintSchedule(definition_time_thresholds=(30, 0, 60))
        with self.assertRaises(ValueError):
            HintSchedule(definition_guess_thresholds=(0, 1, 2, 3))
        with self.assertRaises(ValueError):
            HintSchedule(letter_hint_interval=0)
        with self.assertRaises(ValueError):
            HintSchedule(letter_order="sideways")


class CensorDefinitionTests(SimpleTestCase):
    def test_masks_word_and_inflections(self):
        text = "A crane lifts; Cranes are tall"
        self.assertEqual(censor_definition(text, "crane"), "A _____ lifts; ______ are tall")

    def test_masks_each_part_of_multi_word_target(self):
        self.assertEqual(censor_definition("A catnap is a short nap", "cat nap"), "A ______ is a short ___")

    def test_leaves_unrelated_words(self):
        self.assertEqual(censor_definition("A small bird", "crane"), "A small bird")


class SolvedPositionTests(SimpleTestCase):
    def setUp(self):
        self.timeline = HintTimeline("crane")

    def test_solved_positions_are_skipped(self):
        self.timeline.exclude_positions([0, 1])
        self.assertEqual(self.timeline.letter_slots, 3)
        self.assertEqual(self.timeline.reveal_next_letter(0), [2])
        self.assertEqual(self.timeline.advance(10000), [3, 4])

    def test_hinted_position_keeps_its_slot_once_solved(self):
        self.assertEqual(self.timeline.advance(95), [0])
        self.timeline.exclude_positions([0, 1, 2])
        self.assertEqual(self.timeline.letter_slots, 3)
        self.assertEqual(self.timeline.advance(125), [3])
        self.assertEqual(self.timeline.advance(155), [4])
        self.assertIsNone(self.timeline.next_letter_in(155))

    def test_nothing_left_to_hint(self):
        self.timeline.exclude_positions(range(5))
        self.assertEqual(self.timeline.letter_slots, 0)
        self.assertEqual(self.timeline.reveal_next_letter(0), [])
        self.assertEqual(self.timeline.advance(10000), [])
