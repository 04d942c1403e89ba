import threading

from django.test import SimpleTestCase

from purrdle.puzzles.catalog import WordEntry
from purrdle.puzzles.registry import SessionNotFound, SessionRegistry
from purrdle.puzzles.session import GameSession, InvalidSubmission

ENTRY = WordEntry(word="purr", definitions=("a", "b", "c"), quality=5)


class SessionRegistryTests(SimpleTestCase):
    def setUp(self):
        self.registry = SessionRegistry(max_sessions=2)

    def test_add_and_get(self):
        session = GameSession(ENTRY)
        session_id = self.registry.add(session)
        self.assertIs(self.registry.get(session_id), session)
        self.assertIn(session_id, self.registry)

    def test_unknown_session(self):
        with self.assertRaises(SessionNotFound):
            self.registry.get("missing")
        self.assertFalse(self.registry.discard("missing"))

    def test_discard_closes_session(self):
        session = GameSession(ENTRY)
        session_id = self.registry.add(session)
        self.assertTrue(self.registry.discard(session_id))
        self.assertTrue(session.closed)
        with self.assertRaises(SessionNotFound):
            self.registry.get(session_id)

    def test_replacing_a_session_closes_the_old_one(self):
        old = GameSession(ENTRY)
        old_id = self.registry.add(old)
        new_id = self.registry.add(GameSession(ENTRY), replaces=old_id)
        self.assertTrue(old.closed)
        self.assertNotIn(old_id, self.registry)
        self.assertIn(new_id, self.registry)

    def test_oldest_session_evicted_over_capacity(self):
        sessions = [GameSession(ENTRY) for _ in range(3)]
        ids = [self.registry.add(s) for s in sessions]
        self.assertEqual(len(self.registry), 2)
        self.assertTrue(sessions[0].closed)
        self.assertNotIn(ids[0], self.registry)
        self.assertFalse(sessions[2].closed)

    def test_id_collisions_are_retried(self):
        ids = iter(["a", "a", "b"])
        registry = SessionRegistry(id_factory=lambda: next(ids))
        self.assertEqual(registry.add(GameSession(ENTRY)), "a")
        self.assertEqual(registry.add(GameSession(ENTRY)), "b")

    def test_clear_closes_everything(self):
        sessions = [GameSession(ENTRY) for _ in range(2)]
        for s in sessions:
            self.registry.add(s)
        self.registry.clear()
        self.assertEqual(len(self.registry), 0)
        self.assertTrue(all(s.closed for s in sessions))


class SessionLockTests(SimpleTestCase):
    def setUp(self):
        self.registry = SessionRegistry()

    def test_locked_yields_live_session(self):
        session = GameSession(ENTRY)
        session_id = self.registry.add(session)
        with self.registry.locked(session_id) as locked:
            self.assertIs(locked, session)
        with self.assertRaises(SessionNotFound):
            with self.registry.locked("missing"):
                pass

    def test_commands_on_one_session_run_one_at_a_time(self):
        session_id = self.registry.add(GameSession(ENTRY, max_attempts=1))
        holding = threading.Event()
        release = threading.Event()
        events = []

        def final_guess():
            with self.registry.locked(session_id) as session:
                holding.set()
                release.wait(5)
                session.submit_guess("meow")
                events.append("first")

        def late_guess():
            with self.registry.locked(session_id) as session:
                events.append("second")
                try:
                    session.submit_guess("mews")
                except InvalidSubmission:
                    events.append("rejected")

        first = threading.Thread(target=final_guess)
        first.start()
        self.assertTrue(holding.wait(5))
        second = threading.Thread(target=late_guess)
        second.start()
        second.join(0.2)
        self.assertTrue(second.is_alive())
        self.assertEqual(events, [])

        release.set()
        first.join(5)
        second.join(5)
        self.assertEqual(events, ["first", "second", "rejected"])
        self.assertEqual(self.registry.get(session_id).attempts_used, 1)

    def test_discard_waits_for_running_command(self):
        session = GameSession(ENTRY)
        session_id = self.registry.add(session)
        with self.registry.locked(session_id):
            worker = threading.Thread(target=self.registry.discard, args=(session_id,))
            worker.start()
            worker.join(0.2)
            self.assertFalse(session.closed)
        worker.join(5)
        self.assertTrue(session.closed)
