"""Syntax highlighting and control-byte sanitization for snippet text.

Pygments is imported on first use to keep CLI startup fast. Any highlighting
failure returns the raw text, so callers never have to handle errors.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

FALLBACK_STYLE = "monokai"
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_PYGMENTS_FORMATTERS: dict[str, object] = {}
_PYGMENTS_VALID_STYLES: set[str] = set()
_PYGMENTS_INVALID_STYLES: set[str] = set()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _normalize_style(style: str) -> str:
    if style in _PYGMENTS_VALID_STYLES:
        return style
    if style in _PYGMENTS_INVALID_STYLES:
        return FALLBACK_STYLE

    from pygments.styles import get_style_by_name
    from pygments.util import ClassNotFound

    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.warning("unknown highlight theme %r, using %s", style, FALLBACK_STYLE)
        _PYGMENTS_INVALID_STYLES.add(style)
        return FALLBACK_STYLE
    _PYGMENTS_VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str):
    formatter = _PYGMENTS_FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    from pygments.formatters import TerminalTrueColorFormatter

    formatter = TerminalTrueColorFormatter(style=style)
    _PYGMENTS_FORMATTERS[style] = formatter
    return formatter


def _lexer_for_language(language: str, source: str):
    from pygments.lexers import TextLexer, get_lexer_by_name, get_lexer_for_filename
    from pygments.util import ClassNotFound

    try:
        return get_lexer_by_name(language, stripnl=False)
    except ClassNotFound:
        pass
    try:
        return get_lexer_for_filename(f"snippet.{language}", source, stripnl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False)


def highlight(source: str, language: str, style: str = FALLBACK_STYLE) -> str:
    """Return ``source`` colorized for a truecolor terminal.

    The output has the same number of lines as the input.
    """
    if not source:
        return source
    try:
        lexer = _lexer_for_language(language, source)
        formatter = _formatter_for_style(_normalize_style(style))
        from pygments import highlight as pygments_highlight

        rendered = pygments_highlight(source, lexer, formatter)
    except Exception:
        logger.debug("highlighting failed for language %r", language, exc_info=True)
        return source
    # Pygments always terminates output with a newline.
    if not source.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered
