from django.apps import apps
from django.urls import reverse
from rest_framework.test import APISimpleTestCase


class GameFlowTests(APISimpleTestCase):
    def setUp(self):
        app = apps.get_app_config("purrdle")
        self.crane_id = app.codec.encode(app.catalog.index_of("crane"))

    def _start(self, **payload):
        resp = self.client.post(reverse("start-game"), payload, format="json")
        self.assertEqual(resp.status_code, 201)
        return resp.json()

    def _submit(self, session_id, guess=None):
        payload = {} if guess is None else {"guess": guess}
        return self.client.post(reverse("submit-guess", kwargs={"session_id": session_id}), payload, format="json")

    def test_health(self):
        resp = self.client.get(reverse("Health"))
        self.assertEqual(resp.status_code, 200)

    def test_start_daily_game(self):
        data = self._start()
        self.assertEqual(data["mode"], "daily")
        self.assertEqual(data["status"], "playing")
        self.assertEqual(data["attempts_used"], 0)
        self.assertEqual(data["max_attempts"], 6)
        self.assertTrue(data["word_id"])
        self.assertEqual(len(data["current_row"]), data["word_length"])
        self.assertEqual(data["hints"]["unlocked_definition_count"], 1)
        self.assertIsNone(data["solution"])

    def test_daily_game_is_the_same_word_twice(self):
        self.assertEqual(self._start()["word_id"], self._start()["word_id"])

    def test_specific_word_and_win(self):
        start = self._start(mode="specific", word_id=self.crane_id)
        self.assertEqual(start["mode"], "specific")
        self.assertEqual(start["word_id"], self.crane_id)
        session_id = start["session_id"]

        first = self._submit(session_id, "crate")
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["guesses"][0]["feedback"], ["correct", "correct", "correct", "absent", "correct"])
        self.assertEqual(first.json()["guesses"][0]["result"], "gggbg")
        self.assertEqual(first.json()["status"], "playing")

        second = self._submit(session_id, "crane")
        data = second.json()
        self.assertEqual(data["status"], "won")
        self.assertEqual(data["attempts_used"], 2)
        self.assertTrue(data["guesses"][1]["is_correct"])
        self.assertEqual(data["hints"]["unlocked_definition_count"], 3)
        self.assertEqual(data["keyboard"]["T"], "absent")

    def test_unknown_identifier_falls_back_to_daily(self):
        data = self._start(mode="specific", word_id="!!nope")
        self.assertEqual(data["mode"], "daily")

    def test_overlong_identifier_falls_back_to_daily(self):
        data = self._start(mode="specific", word_id="x" * 20)
        self.assertEqual(data["mode"], "daily")
        data = self._start(path="#/w/" + "z" * 70)
        self.assertEqual(data["mode"], "daily")

    def test_unknown_mode_falls_back_to_daily(self):
        self.assertEqual(self._start(mode="bogus")["mode"], "daily")
        self.assertEqual(self._start(mode="")["mode"], "daily")

    def test_path_routes(self):
        self.assertEqual(self._start(path=f"#/w/{self.crane_id}")["word_id"], self.crane_id)
        self.assertEqual(self._start(path="#/random")["mode"], "random")

    def test_typing_letters(self):
        session_id = self._start(mode="specific", word_id=self.crane_id)["session_id"]
        url = reverse("add-letter", kwargs={"session_id": session_id})
        for ch in "cran":
            self.assertTrue(self.client.post(url, {"letter": ch}, format="json").json()["accepted"])
        self.assertFalse(self.client.post(url, {"letter": "7"}, format="json").json()["accepted"])
        resp = self.client.post(reverse("delete-letter", kwargs={"session_id": session_id}), format="json")
        self.assertTrue(resp.json()["accepted"])
        self.assertEqual([c["letter"] for c in resp.json()["current_row"]], ["C", "R", "A", "", ""])

    def test_invalid_submission_does_not_consume_attempt(self):
        session_id = self._start(mode="specific", word_id=self.crane_id)["session_id"]
        resp = self._submit(session_id)
        self.assertEqual(resp.status_code, 400)
        self.assertTrue(resp.json()["invalid"])
        detail = self.client.get(reverse("session-detail", kwargs={"session_id": session_id})).json()
        self.assertEqual(detail["attempts_used"], 0)

    def test_submission_after_game_over_is_rejected(self):
        session_id = self._start(mode="specific", word_id=self.crane_id)["session_id"]
        self._submit(session_id, "crane")
        resp = self._submit(session_id, "crane")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["status"], "won")

    def test_manual_hints(self):
        session_id = self._start(mode="specific", word_id=self.crane_id)["session_id"]
        url = reverse("request-hint", kwargs={"session_id": session_id})
        resp = self.client.post(url, {"type": "definition"}, format="json").json()
        self.assertTrue(resp["changed"])
        self.assertEqual(resp["hints"]["unlocked_definition_count"], 2)
        self.assertEqual(len(resp["hints"]["definitions"]), 2)

        resp = self.client.post(url, {"type": "letter"}, format="json").json()
        self.assertEqual(resp["revealed_positions"], [0])
        detail = self.client.get(reverse("session-detail", kwargs={"session_id": session_id})).json()
        self.assertEqual(detail["current_row"][0], {"letter": "C", "state": "hinted"})

    def test_bad_hint_type(self):
        session_id = self._start()["session_id"]
        resp = self.client.post(reverse("request-hint", kwargs={"session_id": session_id}), {"type": "x"}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_share_text(self):
        session_id = self._start(mode="specific", word_id=self.crane_id)["session_id"]
        self._submit(session_id, "crate")
        self._submit(session_id, "crane")
        resp = self.client.get(reverse("share-session", kwargs={"session_id": session_id}))
        self.assertEqual(resp.status_code, 200)
        text = resp.json()["text"]
        self.assertTrue(text.startswith(f"Purrdle {self.crane_id}"))
        self.assertIn("guessed in 2/6", text)

    def test_discard_and_replace(self):
        first = self._start()["session_id"]
        second = self._start(replaces=first)["session_id"]
        self.assertEqual(self.client.get(reverse("session-detail", kwargs={"session_id": first})).status_code, 404)
        resp = self.client.delete(reverse("session-detail", kwargs={"session_id": second}))
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(self.client.delete(reverse("session-detail", kwargs={"session_id": second})).status_code, 404)

    def test_unknown_session(self):
        resp = self._submit("does-not-exist", "crane")
        self.assertEqual(resp.status_code, 404)

    def test_modes(self):
        resp = self.client.get(reverse("get-modes"))
        self.assertEqual(resp.json(), ["daily", "random", "specific"])
