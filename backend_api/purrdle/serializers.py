from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from .puzzles import MODES, route_from_path

STATUS_CHOICES = ["playing", "won", "lost"]
CELL_STATES = ["empty", "correct", "present", "absent", "revealed", "hinted"]


# PUBLIC_INTERFACE
class StartGameRequestSerializer(serializers.Serializer):
    """Request payload to start a new game session.

    Fields:
    - mode (optional, default 'daily'): daily, random or specific; an
      unknown mode falls back to daily
    - word_id (optional): public word identifier, used with mode 'specific'
    - path (optional): client route fragment ("#/random", "#/w/<id>"); when
      given it decides mode and word_id
    - replaces (optional): id of an earlier session to discard first
    """

    mode = serializers.CharField(
        required=False,
        allow_blank=True,
        default="daily",
        help_text=f"One of {', '.join(MODES)}; anything else plays the daily word.",
    )
    word_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    path = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    replaces = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        if attrs.get("path") is not None:
            attrs["mode"], attrs["word_id"] = route_from_path(attrs["path"])
        # Unknown modes and unresolvable identifiers fall back to the daily
        # word later on, so neither is an error here.
        return attrs


# PUBLIC_INTERFACE
class LetterRequestSerializer(serializers.Serializer):
    """Request payload to type one letter."""

    letter = serializers.CharField(max_length=1, trim_whitespace=False)


# PUBLIC_INTERFACE
class SubmitRequestSerializer(serializers.Serializer):
    """Request payload to submit the current row, or a whole guess at once."""

    guess = serializers.CharField(required=False, allow_blank=True, max_length=64)


# PUBLIC_INTERFACE
class HintRequestSerializer(serializers.Serializer):
    """Request payload for a manual hint reveal.

    Fields:
    - type: definition (next definition slot) or letter (next letter position)
    """

    type = serializers.ChoiceField(choices=[("definition", "definition"), ("letter", "letter")])


class CellSerializer(serializers.Serializer):
    letter = serializers.CharField(allow_blank=True)
    state = serializers.ChoiceField(choices=CELL_STATES)


class GuessRowSerializer(serializers.Serializer):
    attempt_number = serializers.IntegerField()
    guess = serializers.CharField()
    feedback = serializers.ListField(child=serializers.ChoiceField(choices=["correct", "present", "absent"]))
    result = serializers.CharField(help_text="Compact feedback (g=correct, y=present, b=absent).")
    is_correct = serializers.BooleanField()


class HintStateSerializer(serializers.Serializer):
    definitions = serializers.ListField(child=serializers.CharField(allow_blank=True))
    unlocked_definition_count = serializers.IntegerField()
    definition_slots = serializers.IntegerField()
    hinted_positions = serializers.ListField(child=serializers.IntegerField())
    letter_slots = serializers.IntegerField()
    next_definition_in = serializers.FloatField(allow_null=True)
    next_letter_in = serializers.FloatField(allow_null=True)


# PUBLIC_INTERFACE
class SessionSnapshotSerializer(serializers.Serializer):
    """Read-only game state for rendering the board."""

    session_id = serializers.CharField()
    mode = serializers.ChoiceField(choices=list(MODES))
    word_id = serializers.CharField()
    word_length = serializers.IntegerField()
    max_attempts = serializers.IntegerField()
    attempts_used = serializers.IntegerField()
    status = serializers.ChoiceField(choices=STATUS_CHOICES)
    elapsed_secs = serializers.FloatField()
    guesses = GuessRowSerializer(many=True)
    current_row = CellSerializer(many=True)
    solution = CellSerializer(many=True, allow_null=True)
    keyboard = serializers.DictField(child=serializers.ChoiceField(choices=["correct", "present", "absent"]))
    hints = HintStateSerializer()
    example = serializers.CharField(allow_null=True)


# PUBLIC_INTERFACE
class HintResponseSerializer(serializers.Serializer):
    """Response payload for a manual hint reveal."""

    session_id = serializers.CharField()
    type = serializers.CharField()
    changed = serializers.BooleanField()
    revealed_positions = serializers.ListField(child=serializers.IntegerField())
    hints = HintStateSerializer()


# PUBLIC_INTERFACE
class ShareResponseSerializer(serializers.Serializer):
    session_id = serializers.CharField()
    text = serializers.CharField()
