"""Translation vocabularies for localized scenarios."""

from .catalog import DEFAULT_ACTOR, Translation, available_locales, load_translation

__all__ = ["DEFAULT_ACTOR", "Translation", "available_locales", "load_translation"]
