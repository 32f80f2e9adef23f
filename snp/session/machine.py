"""Interactive session state machine.

One ``Session`` owns the three panels, the focused panel, the interaction
mode, and the transient input/visual state. ``handle_key`` runs exactly one
transition to completion per key token and reports whether the user quit.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from pathlib import Path

from ..config import Config
from ..panels import ContentPanel, FolderPanel, SnippetPanel, Treatment
from ..panels.content import Highlighter
from ..snippet import DEFAULT_NAME, Snippet, normalize_identity
from ..store import delete_snippet, move_snippet, read_content, write_snippet
from .keys import KeyBinding, KeyMap
from .state import FOCUS_ORDER, Focus, IdentityForm, Mode

logger = logging.getLogger(__name__)

STATUS_SECONDS = 1.5
PAGE_ROWS_FALLBACK = 10
CONFIRM_KEYS = frozenset({"y", "Y", "ENTER"})
CANCEL_KEYS = frozenset({"n", "N", "ESC"})


def _is_text_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class Session:
    """Presentation state for one interactive run over a loaded snippet list.

    Side effects that leave the process (clipboard, editor) are injected so the
    machine can be driven entirely from tests.
    """

    def __init__(
        self,
        config: Config,
        snippets: Iterable[Snippet],
        *,
        copy_to_clipboard: Callable[[str], bool] | None = None,
        highlighter: Highlighter | None = None,
        edit_file: Callable[[Path], str | None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        snippets = list(snippets)
        self.config = config
        self.copy_to_clipboard = copy_to_clipboard
        self.edit_file = edit_file
        self.clock = clock

        self.mode = Mode.NAVIGATING
        self.focus = Focus.SNIPPETS
        self.flash = Treatment.NONE
        self.show_help = False
        self.status_message = ""
        self.status_is_error = False
        self.status_until = 0.0
        self.form: IdentityForm | None = None
        self.rename_target: Snippet | None = None
        self.dirty = True

        self.content_panel = ContentPanel(highlighter)
        self.folder_panel = FolderPanel(snippet.folder for snippet in snippets)
        self.snippet_panel = SnippetPanel(
            snippets,
            self.folder_panel.selected_name,
            default_language=config.default_language,
            on_select=self.content_panel.load,
        )
        self.snippet_panel.reselect()
        self._quit_requested = False
        self._navigation_keys = self._build_navigation_keys()

    # -- status and transient visuals ------------------------------------

    def set_status(self, message: str, *, error: bool = False) -> None:
        self.status_message = message
        self.status_is_error = error
        self.status_until = self.clock() + STATUS_SECONDS
        self.dirty = True

    def tick(self) -> bool:
        """Expire the status message; return whether the screen needs redrawing."""
        if self.status_message and self.clock() >= self.status_until:
            self.status_message = ""
            self.status_is_error = False
            self.status_until = 0.0
            self.dirty = True
            return True
        return False

    def row_treatment(self) -> Treatment:
        """Treatment for the selected snippet row in the frame being built."""
        if self.mode is Mode.CONFIRMING_DELETE:
            return Treatment.DELETING
        return self.flash

    def end_render_cycle(self) -> None:
        """Drop one-shot visuals after a frame has been drawn."""
        self.flash = Treatment.NONE
        self.dirty = False

    @property
    def selected_snippet(self) -> Snippet | None:
        return self.snippet_panel.selected_snippet

    # -- dispatch ---------------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Apply one key token; return ``True`` when the session should end."""
        self.dirty = True
        if self.mode is Mode.NAVIGATING:
            self._handle_navigating(key)
        elif self.mode is Mode.FILTERING:
            self._handle_filtering(key)
        elif self.mode is Mode.CONFIRMING_COPY:
            self._handle_confirm(key, self._copy_selected)
        elif self.mode is Mode.CONFIRMING_DELETE:
            self._handle_confirm(key, self._delete_selected)
        else:
            self._handle_form(key)
        quit_requested = self._quit_requested
        self._quit_requested = False
        return quit_requested

    def _build_navigation_keys(self) -> KeyMap:
        return KeyMap(
            KeyBinding(("TAB", "RIGHT", "l"), lambda: self.cycle_focus(1)),
            KeyBinding(("SHIFT_TAB", "LEFT", "h"), lambda: self.cycle_focus(-1)),
            KeyBinding(("UP", "k"), lambda: self.move_selection(-1)),
            KeyBinding(("DOWN", "j"), lambda: self.move_selection(1)),
            KeyBinding(("PAGE_UP", "u"), lambda: self.page_content(-1)),
            KeyBinding(("PAGE_DOWN", "d"), lambda: self.page_content(1)),
            KeyBinding(("HOME", "g"), lambda: self.content_panel.scroll_to(0)),
            KeyBinding(("END", "G"), lambda: self.content_panel.scroll_to(self.content_panel.max_offset())),
            KeyBinding(("ENTER",), self.select),
            KeyBinding(("/",), self.start_filter),
            KeyBinding(("c",), lambda: self._start_confirm(Mode.CONFIRMING_COPY, "copy")),
            KeyBinding(("x",), lambda: self._start_confirm(Mode.CONFIRMING_DELETE, "delete")),
            KeyBinding(("n",), self.start_create),
            KeyBinding(("r",), self.start_rename),
            KeyBinding(("e",), self.edit_selected),
            KeyBinding(("s",), self.content_panel.toggle_highlight),
            KeyBinding(("?",), self.toggle_help),
            KeyBinding(("ESC",), self.clear_filter),
            KeyBinding(("q", "CTRL_C"), self.request_quit),
        )

    def _handle_navigating(self, key: str) -> None:
        self._navigation_keys.dispatch(key)

    # -- navigating actions ----------------------------------------------

    def request_quit(self) -> None:
        self._quit_requested = True

    def cycle_focus(self, delta: int) -> None:
        idx = FOCUS_ORDER.index(self.focus)
        self.focus = FOCUS_ORDER[(idx + delta) % len(FOCUS_ORDER)]

    def move_selection(self, delta: int) -> bool:
        """Move within the focused panel: folders, snippets, or content scroll."""
        if self.focus is Focus.FOLDERS:
            if not self.folder_panel.move(delta):
                return False
            self.snippet_panel.select_folder(self.folder_panel.selected_name)
            return True
        if self.focus is Focus.SNIPPETS:
            return self.snippet_panel.move(delta)
        return self.content_panel.scroll(delta)

    def page_content(self, direction: int) -> bool:
        rows = self.content_panel.visible_rows
        step = max(1, rows // 2) if rows > 1 else PAGE_ROWS_FALLBACK
        return self.content_panel.scroll(direction * step)

    def select(self) -> None:
        if self.focus is Focus.FOLDERS:
            self.focus = Focus.SNIPPETS
        elif self.focus is Focus.SNIPPETS:
            self.snippet_panel.reselect()
            self.focus = Focus.CONTENT

    def toggle_help(self) -> None:
        self.show_help = not self.show_help

    def clear_filter(self) -> None:
        if self.snippet_panel.filtering:
            self.snippet_panel.clear_filter()

    def _require_selection(self, verb: str) -> Snippet | None:
        snippet = self.selected_snippet
        if snippet is None:
            self.set_status(f"Nothing to {verb}.", error=True)
        return snippet

    def _start_confirm(self, mode: Mode, verb: str) -> None:
        if self._require_selection(verb) is not None:
            self.mode = mode

    def start_filter(self) -> None:
        if self.focus is not Focus.SNIPPETS:
            return
        self.mode = Mode.FILTERING

    def start_create(self) -> None:
        self.form = IdentityForm.prefilled(
            self.folder_panel.selected_name,
            DEFAULT_NAME,
            self.config.default_language,
        )
        self.rename_target = None
        self.mode = Mode.CREATING

    def start_rename(self) -> None:
        snippet = self._require_selection("rename")
        if snippet is None:
            return
        self.form = IdentityForm.prefilled(snippet.folder, snippet.name, snippet.language)
        self.rename_target = snippet
        self.mode = Mode.RENAMING

    def edit_selected(self) -> None:
        snippet = self._require_selection("edit")
        if snippet is None or snippet.path is None:
            return
        if self.edit_file is None:
            self.set_status("Editing is not available here.", error=True)
            return
        error = self.edit_file(snippet.path)
        if error:
            self.set_status(error, error=True)
        self.snippet_panel.reselect()

    # -- filtering ----------------------------------------------------------

    def _handle_filtering(self, key: str) -> None:
        panel = self.snippet_panel
        if key == "ESC":
            panel.clear_filter()
            self.mode = Mode.NAVIGATING
        elif key == "ENTER":
            self.mode = Mode.NAVIGATING
        elif key == "UP":
            panel.move(-1)
        elif key == "DOWN":
            panel.move(1)
        elif key == "BACKSPACE":
            if panel.filter_query:
                panel.set_filter(panel.filter_query[:-1])
        elif key == "CTRL_U":
            panel.set_filter("")
        elif _is_text_key(key):
            panel.set_filter(panel.filter_query + key)

    # -- confirmations ------------------------------------------------------

    def _handle_confirm(self, key: str, action: Callable[[Snippet], None]) -> None:
        if key in CANCEL_KEYS:
            self.mode = Mode.NAVIGATING
            return
        if key not in CONFIRM_KEYS:
            return
        self.mode = Mode.NAVIGATING
        snippet = self.selected_snippet
        if snippet is not None:
            action(snippet)

    def _copy_selected(self, snippet: Snippet) -> None:
        text = read_content(snippet)
        copied = self.copy_to_clipboard(text) if self.copy_to_clipboard is not None else False
        if not copied:
            logger.warning("clipboard copy failed for %s", snippet.identity)
            self.set_status("Could not copy: no clipboard available.", error=True)
            return
        self.flash = Treatment.COPIED
        self.set_status(f"Copied {snippet.name}.")

    def _delete_selected(self, snippet: Snippet) -> None:
        try:
            delete_snippet(snippet)
        except OSError as exc:
            logger.warning("cannot delete %s: %s", snippet.identity, exc)
            self.set_status(f"Could not delete {snippet.name}: {exc.strerror or exc}", error=True)
            return
        self.snippet_panel.remove(snippet)
        self.set_status(f"Deleted {snippet.name}.")

    # -- create / rename form ---------------------------------------------

    def _handle_form(self, key: str) -> None:
        form = self.form
        if form is None:
            self.mode = Mode.NAVIGATING
            return
        if key == "ESC":
            self._close_form()
        elif key in {"ENTER", "TAB"}:
            if form.advance():
                if self.mode is Mode.RENAMING:
                    self._commit_rename(form)
                else:
                    self._commit_create(form)
        elif key == "SHIFT_TAB":
            form.back()
        elif key == "BACKSPACE":
            form.backspace()
        elif key == "CTRL_U":
            form.clear()
        elif _is_text_key(key):
            form.insert(key)

    def _close_form(self) -> None:
        self.form = None
        self.rename_target = None
        self.mode = Mode.NAVIGATING

    def _identity_taken(self, key: tuple[str, str, str]) -> bool:
        return any(snippet.key == key for snippet in self.snippet_panel.all_snippets())

    def _adopt(self, snippet: Snippet) -> None:
        """Show ``snippet`` selected in its folder, adding the folder if new."""
        self.folder_panel.ensure(snippet.folder)
        self.folder_panel.select(snippet.folder)
        if self.snippet_panel.folder != snippet.folder or self.snippet_panel.filtering:
            self.snippet_panel.select_folder(snippet.folder)
        self.snippet_panel.select_snippet(snippet)
        self.focus = Focus.SNIPPETS

    def _commit_create(self, form: IdentityForm) -> None:
        self._close_form()
        try:
            folder, name, language = normalize_identity(*form.triple(), self.config.default_language)
            if self._identity_taken((folder, name, language)):
                raise FileExistsError(f"{folder}/{name}.{language} already exists")
            snippet = write_snippet(self.config.root, folder, name, language, "")
        except FileExistsError:
            self.set_status("Could not create snippet: it already exists.", error=True)
            return
        except (OSError, ValueError) as exc:
            logger.warning("cannot create snippet %s: %s", form.triple(), exc)
            self.set_status(f"Could not create snippet: {exc}", error=True)
            return
        self.snippet_panel.append(snippet)
        self._adopt(snippet)
        self.set_status(f"Created {snippet.identity}.")

    def _commit_rename(self, form: IdentityForm) -> None:
        target = self.rename_target
        self._close_form()
        if target is None:
            return
        try:
            folder, name, language = normalize_identity(*form.triple(), self.config.default_language)
            if (folder, name, language) == target.key:
                return
            if self._identity_taken((folder, name, language)):
                raise FileExistsError(f"{folder}/{name}.{language} already exists")
            renamed = move_snippet(target, self.config.root, folder, name, language)
        except FileExistsError:
            self.set_status("Could not rename snippet: the new name is taken.", error=True)
            return
        except (OSError, ValueError) as exc:
            logger.warning("cannot rename %s: %s", target.identity, exc)
            self.set_status(f"Could not rename snippet: {exc}", error=True)
            return
        self.snippet_panel.replace(target, renamed)
        self._adopt(renamed)
        self.set_status(f"Renamed to {renamed.identity}.")
