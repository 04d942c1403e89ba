from django.urls import path
from .views import (
    health,
    start_game,
    session_detail,
    add_letter,
    delete_letter,
    submit_guess,
    request_hint,
    share_session,
    get_modes,
)

urlpatterns = [
    path('health/', health, name='Health'),
    path('start-game', start_game, name='start-game'),
    path('session/<str:session_id>', session_detail, name='session-detail'),
    path('session/<str:session_id>/letter', add_letter, name='add-letter'),
    path('session/<str:session_id>/delete', delete_letter, name='delete-letter'),
    path('session/<str:session_id>/submit', submit_guess, name='submit-guess'),
    path('session/<str:session_id>/hint', request_hint, name='request-hint'),
    path('session/<str:session_id>/share', share_session, name='share-session'),
    path('modes', get_modes, name='get-modes'),
]
