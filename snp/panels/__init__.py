"""The three session panels and the row types they render."""

from .content import ContentPanel
from .folders import FolderPanel
from .items import FolderItem, ListItem, SnippetItem, Treatment
from .snippets import SnippetPanel

__all__ = [
    "ContentPanel",
    "FolderItem",
    "FolderPanel",
    "ListItem",
    "SnippetItem",
    "SnippetPanel",
    "Treatment",
]
