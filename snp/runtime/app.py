"""Runtime composition layer for snp.

Builds the session from config and loaded snippets, wires side-effecting
helpers into it, and starts the loop.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from functools import partial

from ..config import Config
from ..highlight import highlight
from ..session import Session
from ..snippet import Snippet
from ..terminal import TerminalController
from ..theme import resolve_theme
from .helpers import copy_text_to_clipboard, launch_editor
from .loop import run_main_loop

logger = logging.getLogger(__name__)


def build_session(
    config: Config,
    snippets: Iterable[Snippet],
    terminal: TerminalController | None = None,
    no_color: bool = False,
) -> Session:
    """Create a session wired to the clipboard, highlighter and, given a terminal, the editor."""
    highlighter = None if no_color else partial(highlight, style=config.theme)
    edit_file = None
    if terminal is not None:
        edit_file = partial(
            launch_editor,
            disable_tui_mode=terminal.disable_tui_mode,
            enable_tui_mode=terminal.enable_tui_mode,
        )
    return Session(
        config,
        snippets,
        copy_to_clipboard=copy_text_to_clipboard,
        highlighter=highlighter,
        edit_file=edit_file,
    )


def run_session(config: Config, snippets: Iterable[Snippet], no_color: bool = False) -> None:
    """Run the interactive three-panel session until the user quits."""
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    session = build_session(config, snippets, terminal=terminal, no_color=no_color)
    theme = resolve_theme(config, no_color=no_color)
    logger.info("starting session with %d snippets under %s", len(session.snippet_panel.all_snippets()), config.root)
    run_main_loop(session, terminal, stdin_fd, theme)
