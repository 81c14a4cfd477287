"""Application layer: explicit state, view models, photo picking and appearance."""

from .picker import ImagePicker, MainThreadQueue
from .settings import Appearance, AppearanceSetting
from .state import AppState
from .views import DetailView, EditorView, EntryCard, ListView, project_detail, project_editor, project_list

__all__ = [
    "AppState",
    "Appearance",
    "AppearanceSetting",
    "DetailView",
    "EditorView",
    "EntryCard",
    "ImagePicker",
    "ListView",
    "MainThreadQueue",
    "project_detail",
    "project_editor",
    "project_list",
]
