from __future__ import annotations

"""
Internationalization (i18n) Utility.

Resolves user-facing titles and messages from JSON locale files using
dot-notation keys, with optional variable interpolation.
"""

import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SYSTEM DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_LOCALE = "en"
LOCALES_REL_PATH = os.path.join("..", "interface", "locales")

# -----------------------------------------------------------------------------
# I18N MANAGER SERVICE
# -----------------------------------------------------------------------------

class I18n:
    """
    Locale dictionary holder with safe key lookup.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self._locale = locale
        self._translations: Dict[str, Any] = {}
        self.is_loaded = False

        base_dir = os.path.dirname(os.path.abspath(__file__))
        self._locales_path = os.path.abspath(os.path.join(base_dir, LOCALES_REL_PATH))

        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def load_locale(self, locale: str) -> None:
        """
        Load a translation dictionary from the locales directory.

        Args:
            locale: ISO identifier of the target language.
        """
        file_path = os.path.join(self._locales_path, f"{locale}.json")

        if not os.path.exists(file_path):
            logger.warning(f"I18n: Locale resource missing at '{file_path}'. Keys will be echoed.")
            self._translations = {}
            self.is_loaded = False
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._translations = json.load(f)
            self._locale = locale
            self.is_loaded = True
        except (OSError, ValueError) as e:
            logger.error(f"I18n: Unreadable locale file {file_path}: {e}")
            self._translations = {}
            self.is_loaded = False

    def t(self, key: str, **kwargs: Any) -> str:
        """
        Resolve a dotted key and interpolate `kwargs` into it.

        Returns:
            str: The formatted string, or the key itself when unresolved.
        """
        current: Any = self._translations
        for part in key.split("."):
            if not isinstance(current, dict):
                return key
            current = current.get(part)

        if not isinstance(current, str):
            return key

        if not kwargs:
            return current
        try:
            return current.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: Interpolation error for '{key}': {e}")
            return current

# -----------------------------------------------------------------------------
# SERVICE INITIALIZATION
# -----------------------------------------------------------------------------

i18n = I18n(DEFAULT_LOCALE)
