"""photojournal: a local, single-user photo journal.

Entries (title, body, photos, tags) are kept in a local preference file;
photos live as JPEG files in a private directory next to it.
"""

__version__ = "0.1.0"
