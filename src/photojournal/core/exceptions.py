"""
photojournal exception hierarchy.

All photojournal exceptions inherit from PhotoJournalError. Most of them
never escape the library: stores catch them at their boundary and collapse
them into a default value (see ``photojournal.core.result``).
"""


class PhotoJournalError(Exception):
    """Base exception class for all photojournal errors."""


class ConfigurationError(PhotoJournalError):
    """Raised for configuration errors (missing keys, invalid values)."""


class StorageError(PhotoJournalError):
    """Raised when the preference file cannot be read or written."""


class SerializationError(PhotoJournalError):
    """Raised when entries cannot be encoded or decoded."""


class ImageStoreError(PhotoJournalError):
    """Raised when an image cannot be encoded, written, read or deleted."""


class EntryNotFoundError(PhotoJournalError, KeyError):
    """Raised when no entry matches the requested id."""


class DraftClosedError(PhotoJournalError):
    """Raised when committing a draft that was already saved or dismissed."""
