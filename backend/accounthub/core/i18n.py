import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Dict, Set

from fastapi import Request

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "zh"
SUPPORTED_LANGUAGES: Set[str] = {"zh", "en"}


class Translator:
    """Loads the notification catalogs and looks messages up by key."""

    def __init__(self):
        self.translations: Dict[str, Dict[str, str]] = {}
        self._load_translations()

    def _load_translations(self) -> None:
        """Load all translation files from the translations directory."""
        translations_dir = Path(__file__).parent.parent / "translations"

        if not translations_dir.exists():
            raise FileNotFoundError(f"Translations directory not found: {translations_dir}")

        for lang in SUPPORTED_LANGUAGES:
            lang_file = translations_dir / f"{lang}.json"
            if lang_file.exists():
                with open(lang_file, "r", encoding="utf-8") as f:
                    self.translations[lang] = json.load(f)
            else:
                logger.warning("Translation file not found for language: %s", lang)
                self.translations[lang] = {}

    def get(self, key: str, language: str = DEFAULT_LANGUAGE, **kwargs) -> str:
        """
        Get a translation for a key in the specified language.

        Falls back to the default language, then to the key itself.
        Keyword arguments are substituted with ``str.format``.
        """
        if language not in SUPPORTED_LANGUAGES:
            language = DEFAULT_LANGUAGE

        translation = self.translations.get(language, {}).get(key)
        if translation is None:
            translation = self.translations.get(DEFAULT_LANGUAGE, {}).get(key, key)

        if kwargs and isinstance(translation, str):
            return translation.format(**kwargs)

        return translation


@lru_cache()
def get_translator() -> Translator:
    """Get or create a cached translator instance."""
    return Translator()


def get_language_from_request(request: Request) -> str:
    """
    Extract the preferred language from the Accept-Language header.
    """
    accept_language = request.headers.get("Accept-Language")
    if accept_language:
        for lang in re.split(r",\s*", accept_language):
            lang_code = lang.split(";")[0].strip().lower()
            short_lang = lang_code.split("-")[0]  # "zh" from "zh-CN"
            if short_lang in SUPPORTED_LANGUAGES:
                return short_lang

    return DEFAULT_LANGUAGE


def get_translation(key: str, language: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """Convenience function to get a translation by key."""
    translator = get_translator()
    return translator.get(key, language, **kwargs)
