"""Appearance (light/dark) preference.

One process-wide value, stored under its own preference key so it survives
independently of the journal blob. It is read once at startup and again
whenever it is toggled.
"""

from __future__ import annotations

from enum import StrEnum

from loguru import logger

from photojournal.core.exceptions import StorageError
from photojournal.core.storage import PreferenceStore

DARK_MODE_KEY = "isDarkMode"


class Appearance(StrEnum):
    LIGHT = "light"
    DARK = "dark"

    @property
    def toggled(self) -> Appearance:
        return Appearance.LIGHT if self is Appearance.DARK else Appearance.DARK


class AppearanceSetting:
    """Reads and writes the dark-mode flag."""

    def __init__(self, preferences: PreferenceStore, key: str = DARK_MODE_KEY):
        self.preferences = preferences
        self.key = key
        self.value = self.load()

    def load(self) -> Appearance:
        """Read the stored flag; anything unreadable means light."""
        try:
            stored = self.preferences.get(self.key, False)
        except StorageError as e:
            logger.warning(f"Could not read appearance, using light: {e}")
            stored = False
        self.value = Appearance.DARK if stored is True else Appearance.LIGHT
        return self.value

    def set(self, appearance: Appearance) -> Appearance:
        self.value = Appearance(appearance)
        try:
            self.preferences.set(self.key, self.value is Appearance.DARK)
        except StorageError as e:
            logger.warning(f"Appearance not saved: {e}")
        return self.value

    def toggle(self) -> Appearance:
        return self.set(self.value.toggled)
