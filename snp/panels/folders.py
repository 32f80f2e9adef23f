"""Folder panel: the sorted folder list that drives the snippet panel."""

from __future__ import annotations

from collections.abc import Iterable

from ..snippet import DEFAULT_FOLDER
from .items import FolderItem


class FolderPanel:
    """Lexicographically sorted, de-duplicated folder names with one selection."""

    def __init__(self, names: Iterable[str], default_folder: str = DEFAULT_FOLDER) -> None:
        folders = sorted(set(names))
        if not folders:
            folders = [default_folder]
        self.folders: list[str] = folders
        self.selected = 0

    @property
    def selected_name(self) -> str:
        return self.folders[self.selected]

    def move(self, delta: int) -> bool:
        """Move selection by ``delta`` without wrapping; return whether it moved."""
        target = max(0, min(len(self.folders) - 1, self.selected + delta))
        if target == self.selected:
            return False
        self.selected = target
        return True

    def select(self, name: str) -> bool:
        try:
            self.selected = self.folders.index(name)
        except ValueError:
            return False
        return True

    def ensure(self, name: str) -> None:
        """Add a folder created during the session, keeping sort order and selection."""
        if name in self.folders:
            return
        current = self.selected_name
        self.folders = sorted([*self.folders, name])
        self.selected = self.folders.index(current)

    def items(self) -> list[FolderItem]:
        return [FolderItem(name=name, selected=idx == self.selected) for idx, name in enumerate(self.folders)]
