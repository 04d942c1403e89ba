from __future__ import annotations

from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured


# PUBLIC_INTERFACE
class PurrdleConfig(AppConfig):
    """App config; loads the word catalog once at startup.

    The catalog, identifier codec and session registry are process-wide and
    read through this config (``apps.get_app_config("purrdle")``).
    """

    name = "purrdle"
    verbose_name = "Purrdle"

    catalog = None
    codec = None
    registry = None

    def ready(self) -> None:
        # Imports stay local so importing the app module never loads settings.
        from .conf import game_settings
        from .puzzles import CatalogError, SessionRegistry, WordIdentifierCodec, load_catalog

        cfg = game_settings()
        try:
            self.catalog = load_catalog(cfg["DICTIONARY_PATH"])
        except CatalogError as e:
            raise ImproperlyConfigured(f"Purrdle cannot start without a word catalog: {e}") from e
        self.codec = WordIdentifierCodec(len(self.catalog), key=int(cfg["CODEC_KEY"]))
        self.registry = SessionRegistry(max_sessions=int(cfg["MAX_SESSIONS"]))
