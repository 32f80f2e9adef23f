"""Snippet panel: per-folder snippet lists, selection, and live filtering."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from ..fuzzy import rank_snippets
from ..snippet import DEFAULT_LANGUAGE, DEFAULT_NAME, Snippet
from .items import SnippetItem, Treatment

NO_MATCHES_LABEL = "No matches."
_UNSET = object()


class SnippetPanel:
    """Ordered snippet sublists keyed by folder, one of which is visible.

    Sublists keep discovery order. The visible list is either the active
    folder's sublist or, while a filter query is set, its fuzzy-ranked subset.
    ``on_select`` fires whenever the selected snippet changes.
    """

    def __init__(
        self,
        snippets: Iterable[Snippet],
        folder: str,
        *,
        default_language: str = DEFAULT_LANGUAGE,
        on_select: Callable[[Snippet | None], None] | None = None,
    ) -> None:
        self._lists: dict[str, list[Snippet]] = {}
        for snippet in snippets:
            self._lists.setdefault(snippet.folder, []).append(snippet)
        self.default_language = default_language
        self.on_select = on_select
        self.folder = folder
        self.filter_query = ""
        self.selected = 0
        self._visible: list[Snippet] = self.sublist(folder)
        self._last_emitted: object = _UNSET

    def sublist(self, folder: str) -> list[Snippet]:
        return list(self._lists.get(folder, []))

    def all_snippets(self) -> list[Snippet]:
        return [snippet for sublist in self._lists.values() for snippet in sublist]

    @property
    def visible(self) -> list[Snippet]:
        return list(self._visible)

    @property
    def filtering(self) -> bool:
        return bool(self.filter_query)

    @property
    def selected_snippet(self) -> Snippet | None:
        """Return the selected snippet, or ``None`` when only a placeholder shows."""
        if 0 <= self.selected < len(self._visible):
            return self._visible[self.selected]
        return None

    def _emit(self, force: bool = False) -> None:
        current = self.selected_snippet
        if not force and current == self._last_emitted:
            return
        self._last_emitted = current
        if self.on_select is not None:
            self.on_select(current)

    def _refresh_visible(self) -> None:
        base = self.sublist(self.folder)
        self._visible = rank_snippets(self.filter_query, base) if self.filter_query else base

    def reselect(self) -> None:
        """Emit the current selection again, e.g. to reload content from disk."""
        self._emit(force=True)

    def select_folder(self, folder: str) -> None:
        """Show ``folder``'s sublist unfiltered with its first entry selected."""
        self.folder = folder
        self.filter_query = ""
        self._refresh_visible()
        self.selected = 0
        self._emit()

    def move(self, delta: int) -> bool:
        """Move selection by ``delta`` without wrapping; return whether it moved."""
        if not self._visible:
            return False
        target = max(0, min(len(self._visible) - 1, self.selected + delta))
        if target == self.selected:
            return False
        self.selected = target
        self._emit()
        return True

    def select_snippet(self, snippet: Snippet) -> bool:
        try:
            self.selected = self._visible.index(snippet)
        except ValueError:
            return False
        self._emit()
        return True

    def set_filter(self, query: str) -> None:
        """Narrow the visible list to fuzzy matches of ``query``, best first.

        An empty query shows the full sublist in discovery order.
        """
        self.filter_query = query
        self._refresh_visible()
        self.selected = 0
        self._emit()

    def clear_filter(self) -> None:
        self.set_filter("")

    def append(self, snippet: Snippet) -> None:
        """Add a snippet to the end of its folder's sublist."""
        self._lists.setdefault(snippet.folder, []).append(snippet)
        if snippet.folder == self.folder:
            self._refresh_visible()
            self._emit()

    def remove(self, snippet: Snippet) -> bool:
        """Drop a snippet from its sublist, clamping selection to the new end."""
        sublist = self._lists.get(snippet.folder)
        if not sublist or snippet not in sublist:
            return False
        sublist.remove(snippet)
        if snippet.folder == self.folder:
            self._refresh_visible()
            self.selected = max(0, min(self.selected, len(self._visible) - 1))
            self._emit()
        return True

    def replace(self, old: Snippet, new: Snippet) -> None:
        """Swap ``old`` for ``new``, in place when the folder is unchanged."""
        if old.folder == new.folder:
            sublist = self._lists.get(old.folder, [])
            if old in sublist:
                sublist[sublist.index(old)] = new
            if old.folder == self.folder:
                self._refresh_visible()
                self._emit()
            return
        self.remove(old)
        self.append(new)

    def placeholder(self) -> SnippetItem:
        snippet = Snippet(folder=self.folder, name=DEFAULT_NAME, language=self.default_language)
        if self.filtering:
            return SnippetItem(snippet=snippet, selected=True, placeholder=True, label=NO_MATCHES_LABEL)
        return SnippetItem(snippet=snippet, selected=True, placeholder=True)

    def items(self, treatment: Treatment = Treatment.NONE) -> list[SnippetItem]:
        """Return rows to render; ``treatment`` applies to the selected row only."""
        if not self._visible:
            return [self.placeholder()]
        return [
            SnippetItem(
                snippet=snippet,
                selected=idx == self.selected,
                treatment=treatment if idx == self.selected else Treatment.NONE,
            )
            for idx, snippet in enumerate(self._visible)
        ]
