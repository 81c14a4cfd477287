"""Shared type aliases used across photojournal."""

from pathlib import Path
from typing import Any

# Config value types
ConfigDict = dict[str, Any]

# Path types
PathLike = str | Path

# Raw JSON values stored in the preference file
JSONValue = str | int | float | bool | list | dict | None
