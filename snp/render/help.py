"""Help panel content and per-mode key hints for the status bar.

Everything here is presentation-only and side-effect free.
"""

from __future__ import annotations

from ..session.state import Focus, Mode
from ..theme import UITheme

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "MOVE",
        (
            ("tab/shift+tab", "next/prev panel"),
            ("h/l", "left/right panel"),
            ("j/k", "down/up"),
            ("d/u", "half page"),
            ("g/G", "top/bottom"),
        ),
    ),
    (
        "SNIPPETS",
        (
            ("enter", "open"),
            ("/", "find"),
            ("esc", "clear find"),
            ("c", "copy"),
            ("x", "delete"),
            ("n", "new"),
            ("r", "rename"),
            ("e", "edit in $EDITOR"),
        ),
    ),
    (
        "VIEW",
        (
            ("s", "syntax on/off"),
            ("?", "help"),
            ("q", "quit"),
        ),
    ),
)

NAVIGATING_HINTS = {
    Focus.FOLDERS: "j/k folder  enter open  n new  ? help  q quit",
    Focus.SNIPPETS: "/ find  c copy  x delete  n new  r rename  e edit  ? help  q quit",
    Focus.CONTENT: "j/k scroll  d/u page  g/G top/bottom  s syntax  ? help  q quit",
}
FILTERING_HINT = "type to find  enter keep  esc clear"
CONFIRM_HINT = "y confirm  n cancel"
FORM_HINT = "enter next  shift+tab back  esc cancel"


def help_lines(theme: UITheme) -> list[str]:
    """Return one row per help section: a title followed by its key bindings."""
    lines: list[str] = []
    for title, bindings in HELP_SECTIONS:
        parts = [f"{theme.empty_hint_key}{keys}{theme.reset} {desc}" for keys, desc in bindings]
        lines.append(f" {theme.input_label}{title}{theme.reset}  " + "  ".join(parts))
    return lines


def help_row_count(height: int, show_help: bool) -> int:
    """Rows reserved for help, leaving room for titles, one list row, and status."""
    if not show_help:
        return 0
    return max(0, min(len(HELP_SECTIONS), height - 4))


def mode_hint(mode: Mode, focus: Focus) -> str:
    if mode is Mode.FILTERING:
        return FILTERING_HINT
    if mode in {Mode.CONFIRMING_COPY, Mode.CONFIRMING_DELETE}:
        return CONFIRM_HINT
    if mode in {Mode.CREATING, Mode.RENAMING}:
        return FORM_HINT
    return NAVIGATING_HINTS[focus]
