"""List row types shared by the folder and snippet panels.

Both panels render through the same ``rows(theme, focused)`` capability, and
``ListItem`` is the closed union of the two row kinds.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from ..snippet import Snippet
from ..theme import UITheme

SNIPPET_ROW_HEIGHT = 2
SNIPPET_ROW_SPACING = 1


class Treatment(enum.Enum):
    """Visual treatment for the selected snippet row."""

    NONE = "none"
    COPIED = "copied"
    DELETING = "deleting"


@dataclass(frozen=True)
class FolderItem:
    name: str
    selected: bool

    def rows(self, theme: UITheme, focused: bool) -> list[str]:
        if self.selected:
            return [f"  {theme.folder_selected}• {self.name}{theme.reset}"]
        style = theme.folder_unselected if focused else theme.folder_unselected_blurred
        return [f"  {style}  {self.name}{theme.reset}"]


@dataclass(frozen=True)
class SnippetItem:
    snippet: Snippet
    selected: bool
    placeholder: bool = False
    label: str | None = None
    treatment: Treatment = Treatment.NONE

    @property
    def title(self) -> str:
        return self.label if self.label is not None else self.snippet.name

    @property
    def subtitle(self) -> str:
        if self.label is not None:
            return ""
        return f"{self.snippet.folder} • {self.snippet.language}"

    def rows(self, theme: UITheme, focused: bool) -> list[str]:
        if self.placeholder:
            return [
                f"  {theme.empty_hint}{self.title}{theme.reset}",
                f"  {theme.empty_hint}{self.subtitle}{theme.reset}",
            ]
        if not self.selected:
            title_style = theme.snippet_title_unselected if focused else theme.snippet_subtitle_unselected
            return [
                f"  {title_style}{self.title}{theme.reset}",
                f"  {theme.snippet_subtitle_unselected}{self.subtitle}{theme.reset}",
            ]
        if self.treatment is Treatment.COPIED:
            title_style, subtitle_style = theme.copied_title, theme.copied_subtitle
        elif self.treatment is Treatment.DELETING:
            title_style, subtitle_style = theme.deleted_title, theme.deleted_subtitle
        else:
            title_style, subtitle_style = theme.snippet_title_selected, theme.snippet_subtitle_selected
        return [
            f"  {title_style}{self.title}{theme.reset}",
            f"  {subtitle_style}{self.subtitle}{theme.reset}",
        ]


ListItem = Union[FolderItem, SnippetItem]
