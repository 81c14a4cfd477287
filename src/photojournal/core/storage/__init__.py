"""
Local key-value preference storage.

One JSON file holds every preference key. Writes replace the whole file
atomically, so each ``set`` is all-or-nothing at key granularity.
"""

from .preferences import PreferenceStore

__all__ = ["PreferenceStore"]
