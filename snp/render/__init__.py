"""Rendering engine for the three-panel snippet view.

``build_frame`` turns session state into fully composed ANSI rows without
writing anything; ``render_frame`` writes one such frame to the terminal.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from ..ansi import clip_ansi_line, display_width, fit_ansi_line
from ..panels.items import SNIPPET_ROW_HEIGHT, SNIPPET_ROW_SPACING
from ..session.state import FORM_LABELS, FORM_MODES, Focus, FormStep, Mode
from ..theme import UITheme
from .help import help_lines, help_row_count, mode_hint

if TYPE_CHECKING:
    from ..session import Session

FOLDER_PANEL_WIDTH = 22
SNIPPET_PANEL_WIDTH = 35
DIVIDER = "│"
# Title row plus one spacer row above every list.
HEADER_ROWS = 2


def column_widths(width: int) -> tuple[int, int, int]:
    """Return folder, snippet, and content widths for a terminal ``width`` wide."""
    usable = max(3, width - 2)
    folders = min(FOLDER_PANEL_WIDTH, max(1, usable // 4))
    snippets = min(SNIPPET_PANEL_WIDTH, max(1, usable // 3))
    content = max(1, usable - folders - snippets)
    return folders, snippets, content


def build_status_line(left_text: str, width: int, right_text: str = "│ ? help") -> str:
    usable = max(1, width - 1)
    right_width = display_width(right_text)
    if usable <= right_width:
        return right_text[-usable:]
    left_limit = max(0, usable - right_width - 1)
    left = clip_ansi_line(left_text, left_limit)
    gap = " " * (usable - display_width(left) - right_width)
    return f"{left}{gap}{right_text}"


def _title(text: str, focused: bool, theme: UITheme) -> str:
    style = theme.title_focused if focused else theme.title_blurred
    return f"{style} {text} {theme.reset}"


def _window_start(selected: int, count: int, capacity: int) -> int:
    """First visible index so that ``selected`` stays inside a ``capacity`` window."""
    if capacity <= 0 or count <= capacity:
        return 0
    return max(0, min(selected - capacity + 1, count - capacity))


def _folder_column(session: Session, rows: int, theme: UITheme) -> list[str]:
    focused = session.focus is Focus.FOLDERS
    out = [_title("Folders", focused, theme), ""]
    items = session.folder_panel.items()
    capacity = max(0, rows - HEADER_ROWS)
    start = _window_start(session.folder_panel.selected, len(items), capacity)
    for item in items[start : start + capacity]:
        out.extend(item.rows(theme, focused))
    return out


def _snippet_title(session: Session) -> str:
    panel = session.snippet_panel
    if session.mode is Mode.FILTERING:
        return f"Find: {panel.filter_query}_"
    if panel.filtering:
        return f"Find: {panel.filter_query}"
    return "Snippets"


def _snippet_column(session: Session, rows: int, theme: UITheme) -> list[str]:
    focused = session.focus is Focus.SNIPPETS
    out = [_title(_snippet_title(session), focused, theme), ""]
    items = session.snippet_panel.items(session.row_treatment())
    per_item = SNIPPET_ROW_HEIGHT + SNIPPET_ROW_SPACING
    capacity = max(1, (rows - HEADER_ROWS + SNIPPET_ROW_SPACING) // per_item)
    start = _window_start(session.snippet_panel.selected, len(items), capacity)
    for item in items[start : start + capacity]:
        out.extend(item.rows(theme, focused))
        out.extend([""] * SNIPPET_ROW_SPACING)
    return out


def _content_column(session: Session, rows: int, width: int, theme: UITheme) -> list[str]:
    panel = session.content_panel
    snippet = panel.snippet
    title = snippet.identity if snippet is not None else "Content"
    out = [_title(title, session.focus is Focus.CONTENT, theme), ""]
    visible = max(1, rows - HEADER_ROWS)
    panel.set_visible_rows(visible)
    lines = panel.lines()
    if not lines:
        return out
    gutter = max(2, len(str(len(lines))))
    text_width = max(1, width - gutter - 1)
    for idx in range(panel.offset, min(len(lines), panel.offset + visible)):
        number = f"{theme.line_number}{idx + 1:>{gutter}}{theme.reset} "
        out.append(number + clip_ansi_line(lines[idx], text_width))
    return out


def _form_column(session: Session, rows: int, theme: UITheme) -> list[str]:
    form = session.form
    heading = "Rename snippet" if session.mode is Mode.RENAMING else "New snippet"
    out = [_title(heading, True, theme), ""]
    if form is None:
        return out
    for step in FormStep:
        active = step == form.step
        style = theme.input_active if active else theme.input_label
        cursor = "_" if active else ""
        out.append(f"  {theme.input_label}{FORM_LABELS[step]}{theme.reset}")
        out.append(f"  {style}{'> ' if active else '  '}{form.values[step]}{cursor}{theme.reset}")
        out.append("")
    return out[:rows]


def _bottom_line(session: Session, width: int, theme: UITheme) -> str:
    snippet = session.selected_snippet
    name = snippet.name if snippet is not None else ""
    usable = max(1, width - 1)
    if session.mode is Mode.CONFIRMING_COPY:
        return fit_ansi_line(f"{theme.copied_bar} Copy {name}? (y/n) {theme.reset}", usable)
    if session.mode is Mode.CONFIRMING_DELETE:
        return fit_ansi_line(f"{theme.deleted_bar} Delete {name}? (y/n) {theme.reset}", usable)
    if session.status_message:
        style = theme.status_error if session.status_is_error else theme.status_info
        return f"{style}{build_status_line(' ' + session.status_message, width)}{theme.reset}"
    hint = mode_hint(session.mode, session.focus)
    return f"{theme.status_bar}{build_status_line(' ' + hint, width)}{theme.reset}"


def build_frame(session: Session, width: int, height: int, theme: UITheme) -> list[str]:
    """Compose exactly ``height`` rows for the current session state."""
    width = max(1, width)
    height = max(1, height)
    bottom = _bottom_line(session, width, theme)
    if height == 1:
        return [bottom]

    help_rows = help_row_count(height, session.show_help)
    body_rows = height - 1 - help_rows
    folder_w, snippet_w, content_w = column_widths(width)

    columns = [
        _folder_column(session, body_rows, theme),
        _snippet_column(session, body_rows, theme),
    ]
    if session.mode in FORM_MODES:
        columns.append(_form_column(session, body_rows, theme))
    else:
        columns.append(_content_column(session, body_rows, content_w, theme))

    divider = f"{theme.divider}{DIVIDER}{theme.reset}"
    frame: list[str] = []
    for row in range(body_rows):
        cells = [column[row] if row < len(column) else "" for column in columns]
        left = fit_ansi_line(cells[0], folder_w)
        middle = fit_ansi_line(cells[1], snippet_w)
        # The last column is clipped, not padded; the line is cleared on redraw.
        right = clip_ansi_line(cells[2], max(1, content_w - 1))
        if "\x1b" in right:
            right += "\033[0m"
        frame.append(f"{left}{divider}{middle}{divider}{right}")

    for line in help_lines(theme)[:help_rows]:
        frame.append(fit_ansi_line(line, max(1, width - 1)))

    frame.append(bottom)
    return frame


def render_frame(session: Session, width: int, height: int, theme: UITheme) -> None:
    """Write one full frame to stdout, replacing whatever was on screen."""
    rows = build_frame(session, width, height, theme)
    out = "\033[H\033[J" + "\r\n".join(rows)
    os.write(sys.stdout.fileno(), out.encode("utf-8", errors="replace"))


__all__ = [
    "build_frame",
    "build_status_line",
    "column_widths",
    "render_frame",
]
