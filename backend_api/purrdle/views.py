from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from django.apps import apps
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from .conf import epoch, game_settings, hint_schedule, reference_timezone
from .puzzles import (
    MODES,
    GameSession,
    InvalidSubmission,
    LetterState,
    SessionNotFound,
    resolve_word,
    today,
)
from .puzzles.engines import feedback_to_compact
from .serializers import (
    HintRequestSerializer,
    HintResponseSerializer,
    LetterRequestSerializer,
    SessionSnapshotSerializer,
    ShareResponseSerializer,
    StartGameRequestSerializer,
    SubmitRequestSerializer,
)

logger = logging.getLogger(__name__)


def _app():
    return apps.get_app_config("purrdle")


def _cells(row: Optional[Sequence[Tuple[str, LetterState]]]) -> Optional[List[Dict[str, str]]]:
    if row is None:
        return None
    return [{"letter": letter.upper(), "state": state.value} for letter, state in row]


def _hint_state(session: GameSession) -> Dict[str, Any]:
    disclosure = session.disclosure()
    playing = session.playing
    return {
        "definitions": session.visible_definitions(),
        "unlocked_definition_count": disclosure.unlocked_definition_count,
        "definition_slots": session.timeline.definition_slots,
        "hinted_positions": list(session.hinted_positions),
        "letter_slots": session.timeline.letter_slots,
        "next_definition_in": session.timeline.next_definition_in(session.elapsed, session.attempts_used, playing),
        "next_letter_in": session.timeline.next_letter_in(session.elapsed, playing),
    }


def _snapshot(session_id: str, session: GameSession) -> Dict[str, Any]:
    """Advance the hint timeline and describe the session for rendering."""
    session.tick()
    return {
        "session_id": session_id,
        "mode": session.mode,
        "word_id": session.identifier or "",
        "word_length": session.word_length,
        "max_attempts": session.max_attempts,
        "attempts_used": session.attempts_used,
        "status": session.status.value,
        "elapsed_secs": round(session.elapsed, 1),
        "guesses": [
            {
                "attempt_number": i,
                "guess": record.word.upper(),
                "feedback": [state.value for state in record.feedback],
                "result": feedback_to_compact(record.feedback),
                "is_correct": record.is_correct,
            }
            for i, record in enumerate(session.guesses, start=1)
        ],
        "current_row": _cells(session.current_row()),
        "solution": _cells(session.solution_row()),
        "keyboard": {letter.upper(): state.value for letter, state in session.keyboard().items()},
        "hints": _hint_state(session),
        "example": session.visible_example(),
    }


def _snapshot_response(session_id: str, session: GameSession, code: int = status.HTTP_200_OK) -> Response:
    return Response(SessionSnapshotSerializer(_snapshot(session_id, session)).data, status=code)


def _not_found(session_id: str) -> Response:
    return Response({"error": f"Session {session_id} not found."}, status=status.HTTP_404_NOT_FOUND)


# PUBLIC_INTERFACE
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def health(request):
    """Health check endpoint for the API.

    Returns:
    - 200 OK with {"message": "Server is up!"}
    """
    return Response({"message": "Server is up!"})


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="start_game",
    operation_summary="Start a new game session",
    operation_description="""
Create a game session for the daily word, a random word, or a specific word.

Request body:
- mode (optional, default 'daily'): daily | random | specific
- word_id (optional): public identifier for mode 'specific'
- path (optional): client route fragment, e.g. '#/w/<id>' or '#/random'
- replaces (optional): session id to discard before starting

An identifier that does not resolve falls back to the daily word.

Response:
- session snapshot; word_id is the shareable identifier of the target
""",
    request_body=StartGameRequestSerializer,
    responses={201: SessionSnapshotSerializer},
    tags=["game"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def start_game(request):
    """Start a new game session.

    Parameters:
    - mode: Optional route mode (daily default).
    - word_id: Optional public word identifier.
    - replaces: Optional id of a session to discard.

    Returns:
    - JSON snapshot of the new session, including session_id.
    """
    serializer = StartGameRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    vd = serializer.validated_data

    app = _app()
    resolved = resolve_word(
        app.catalog,
        app.codec,
        vd.get("mode", "daily"),
        vd.get("word_id"),
        day=today(reference_timezone()),
        epoch=epoch(),
    )
    session = GameSession(
        resolved.entry,
        mode=resolved.mode,
        identifier=resolved.identifier,
        label=resolved.label,
        max_attempts=int(game_settings()["MAX_ATTEMPTS"]),
        schedule=hint_schedule(),
    )
    logger.debug("Session target %r (index %d)", resolved.entry.word, resolved.index)
    session_id = app.registry.add(session, replaces=vd.get("replaces") or None)
    return _snapshot_response(session_id, session, code=status.HTTP_201_CREATED)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="session_detail",
    operation_summary="Get session state",
    operation_description="Advance time-based hints and return the current session snapshot.",
    responses={200: SessionSnapshotSerializer},
    tags=["game"],
)
@swagger_auto_schema(
    method="delete",
    operation_id="discard_session",
    operation_summary="Discard a session",
    operation_description="Stop the session clock and forget the session.",
    responses={204: "Discarded"},
    tags=["game"],
)
@api_view(["GET", "DELETE"])
@permission_classes([permissions.AllowAny])
def session_detail(request, session_id: str):
    """Retrieve (GET) or discard (DELETE) a session by id."""
    registry = _app().registry
    if request.method == "DELETE":
        if not registry.discard(session_id):
            return _not_found(session_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    try:
        with registry.locked(session_id) as session:
            return _snapshot_response(session_id, session)
    except SessionNotFound:
        return _not_found(session_id)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="add_letter",
    operation_summary="Type a letter",
    operation_description="Append a letter to the current row. Ignored when the row is full, the game is over, "
    "or the input is not a letter; 'accepted' tells which.",
    request_body=LetterRequestSerializer,
    responses={200: SessionSnapshotSerializer},
    tags=["game"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def add_letter(request, session_id: str):
    """Append one letter to the in-progress guess."""
    serializer = LetterRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    try:
        with _app().registry.locked(session_id) as session:
            accepted = session.add_letter(serializer.validated_data["letter"])
            data = dict(SessionSnapshotSerializer(_snapshot(session_id, session)).data)
    except SessionNotFound:
        return _not_found(session_id)

    data["accepted"] = accepted
    return Response(data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="delete_letter",
    operation_summary="Delete the last letter",
    responses={200: SessionSnapshotSerializer},
    tags=["game"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def delete_letter(request, session_id: str):
    """Remove the last typed letter."""
    try:
        with _app().registry.locked(session_id) as session:
            accepted = session.delete_letter()
            data = dict(SessionSnapshotSerializer(_snapshot(session_id, session)).data)
    except SessionNotFound:
        return _not_found(session_id)

    data["accepted"] = accepted
    return Response(data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="submit_guess",
    operation_summary="Submit the current row",
    operation_description="""
Submit the typed row, or a whole guess given in the body, as the next attempt.

Request body:
- guess (string, optional): replaces the typed row

A guess with the wrong number of letters, or one sent after the game ended,
is rejected with 400 and 'invalid': true; no attempt is consumed.
""",
    request_body=SubmitRequestSerializer,
    responses={200: SessionSnapshotSerializer},
    tags=["game"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def submit_guess(request, session_id: str):
    """Evaluate the next attempt and update the session status."""
    serializer = SubmitRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    guess = serializer.validated_data.get("guess") or None
    try:
        with _app().registry.locked(session_id) as session:
            try:
                session.submit_guess(guess)
            except InvalidSubmission as e:
                return Response(
                    {"error": str(e), "invalid": True, "status": session.status.value},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            return _snapshot_response(session_id, session)
    except SessionNotFound:
        return _not_found(session_id)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="request_hint",
    operation_summary="Reveal the next hint",
    operation_description="""
Manually unlock the next definition or letter hint. Requests beyond the last
slot, or after the game ended, change nothing ('changed': false).

Request body:
- type (string, required): definition | letter
""",
    request_body=HintRequestSerializer,
    responses={200: HintResponseSerializer},
    tags=["game", "hints"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def request_hint(request, session_id: str):
    """Reveal one more hint of the requested type."""
    serializer = HintRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    hint_type = serializer.validated_data["type"]
    try:
        with _app().registry.locked(session_id) as session:
            session.tick()
            if hint_type == "definition":
                changed = session.reveal_definition()
                revealed: List[int] = []
            else:
                revealed = session.reveal_letter()
                changed = bool(revealed)
            hints = _hint_state(session)
    except SessionNotFound:
        return _not_found(session_id)

    resp = {
        "session_id": session_id,
        "type": hint_type,
        "changed": changed,
        "revealed_positions": revealed,
        "hints": hints,
    }
    return Response(HintResponseSerializer(resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="share_session",
    operation_summary="Get share text",
    operation_description="Plain-text result grid plus a 'guessed in X/Y' line.",
    responses={200: ShareResponseSerializer},
    tags=["game"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def share_session(request, session_id: str):
    """Return the copy-paste share summary for a session."""
    try:
        with _app().registry.locked(session_id) as session:
            text = session.share_summary()
    except SessionNotFound:
        return _not_found(session_id)

    return Response(ShareResponseSerializer({"session_id": session_id, "text": text}).data)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="get_modes",
    operation_summary="List available modes",
    operation_description="Returns supported route modes.",
    tags=["meta"],
    responses={200: openapi.Response("OK", schema=openapi.Schema(type=openapi.TYPE_ARRAY, items=openapi.Items(type=openapi.TYPE_STRING)))},
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def get_modes(request):
    """List available route modes."""
    return Response(list(MODES), status=status.HTTP_200_OK)
