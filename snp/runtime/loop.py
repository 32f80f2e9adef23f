"""Main interactive event loop for the terminal UI.

Polls the terminal size, renders when the session is dirty, then reads and
dispatches exactly one key. Feature logic lives on the session.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from ..render import render_frame
from ..session import Session
from ..terminal import TerminalController
from ..theme import UITheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 120


def run_main_loop(
    session: Session,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
    render: Callable[[Session, int, int, UITheme], None] = render_frame,
) -> None:
    """Run the interactive loop until the session asks to quit."""
    last_size: tuple[int, int] | None = None
    skip_next_lf = False

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                session.dirty = True
            session.tick()

            if session.dirty:
                render(session, term.columns, term.lines, theme)
                session.end_render_cycle()

            try:
                key = read_key(stdin_fd, timeout_ms=timing.key_timeout_ms)
            except KeyboardInterrupt:
                key = "CTRL_C"
            if not key:
                continue

            # Terminals may send CR, LF, or CRLF for one Enter press.
            if skip_next_lf and key == "ENTER_LF":
                skip_next_lf = False
                continue
            if key == "ENTER_CR":
                key = "ENTER"
                skip_next_lf = True
            elif key == "ENTER_LF":
                key = "ENTER"
                skip_next_lf = False
            else:
                skip_next_lf = False

            if session.handle_key(key):
                logger.debug("session ended by %s", key)
                break
