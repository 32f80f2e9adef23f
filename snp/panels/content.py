"""Content panel: scrollable preview of the selected snippet's text."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..highlight import sanitize_terminal_text
from ..snippet import Snippet
from ..store import read_content

logger = logging.getLogger(__name__)

Highlighter = Callable[[str, str], str]


class ContentPanel:
    """Read-only view over one snippet's text, reloaded from disk on every load.

    ``highlighter(text, language)`` colorizes content; when it raises, the
    plain text is shown instead.
    """

    def __init__(
        self,
        highlighter: Highlighter | None = None,
        reader: Callable[[Snippet | None], str] = read_content,
    ) -> None:
        self.highlighter = highlighter
        self.reader = reader
        self.snippet: Snippet | None = None
        self.text = ""
        self.highlight_enabled = highlighter is not None
        self.offset = 0
        self.visible_rows = 1
        self._plain_lines: list[str] = []
        self._highlighted_lines: list[str] | None = None

    def load(self, snippet: Snippet | None) -> None:
        """Show ``snippet``'s current file content from the top."""
        self.snippet = snippet
        self.text = self.reader(snippet)
        safe = sanitize_terminal_text(self.text)
        self._plain_lines = safe.splitlines()
        self._highlighted_lines = None
        self.offset = 0

    def _highlighted(self) -> list[str]:
        if self._highlighted_lines is not None:
            return self._highlighted_lines
        lines = self._plain_lines
        if self.highlighter is not None and self.snippet is not None and self._plain_lines:
            try:
                rendered = self.highlighter("\n".join(self._plain_lines), self.snippet.language)
            except Exception:
                logger.debug("highlighter failed for %s", self.snippet.identity, exc_info=True)
            else:
                highlighted = rendered.splitlines()
                # Keep row alignment with the plain text.
                if len(highlighted) == len(self._plain_lines):
                    lines = highlighted
        self._highlighted_lines = lines
        return lines

    def lines(self) -> list[str]:
        if self.highlight_enabled:
            return self._highlighted()
        return self._plain_lines

    def toggle_highlight(self) -> bool:
        self.highlight_enabled = not self.highlight_enabled
        return self.highlight_enabled

    def max_offset(self) -> int:
        return max(0, len(self._plain_lines) - max(1, self.visible_rows))

    def scroll_to(self, line: int) -> bool:
        target = max(0, min(self.max_offset(), line))
        if target == self.offset:
            return False
        self.offset = target
        return True

    def scroll(self, delta: int) -> bool:
        return self.scroll_to(self.offset + delta)

    def set_visible_rows(self, rows: int) -> None:
        """Record the viewport height so scrolling clamps to real content."""
        self.visible_rows = max(1, rows)
        self.offset = min(self.offset, self.max_offset())
