from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from snp.ansi import display_width, strip_ansi
from snp.config import Config
from snp.render import build_frame, build_status_line, column_widths, render_frame
from snp.session import Session
from snp.store import read_snippets
from snp.theme import PLAIN_THEME, build_theme


class RenderBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        for relative, content in (
            ("misc/a.go", "package a\nfunc A() {}\n"),
            ("misc/b.py", "print('b')\n"),
            ("notes/c.md", "# c\n"),
        ):
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        self.session = Session(Config(root=self.root), read_snippets(self.root), clock=lambda: 0.0)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _plain_frame(self, width: int = 100, height: int = 20) -> list[str]:
        return [strip_ansi(row) for row in build_frame(self.session, width, height, PLAIN_THEME)]

    def test_frame_has_exact_height_and_fits_width(self) -> None:
        rows = build_frame(self.session, 100, 20, build_theme(Config()))
        self.assertEqual(len(rows), 20)
        for row in rows:
            self.assertLessEqual(display_width(row), 99)

    def test_three_panels_are_drawn(self) -> None:
        frame = "\n".join(self._plain_frame())
        self.assertIn("Folders", frame)
        self.assertIn("Snippets", frame)
        self.assertIn("misc/a.go", frame)
        self.assertIn("• misc", frame)
        self.assertIn("notes", frame)
        self.assertIn("misc • go", frame)
        self.assertIn(" 1 package a", frame)
        self.assertIn(" 2 func A() {}", frame)

    def test_status_line_shows_mode_hints(self) -> None:
        self.assertIn("/ find", self._plain_frame()[-1])

    def test_filter_prompt_replaces_snippet_title(self) -> None:
        self.session.handle_key("/")
        self.session.handle_key("b")
        frame = "\n".join(self._plain_frame())
        self.assertIn("Find: b_", frame)

    def test_delete_confirmation_prompt(self) -> None:
        self.session.handle_key("x")
        self.assertIn("Delete a? (y/n)", self._plain_frame()[-1])

    def test_copy_confirmation_prompt(self) -> None:
        self.session.handle_key("c")
        self.assertIn("Copy a? (y/n)", self._plain_frame()[-1])

    def test_create_form_replaces_content(self) -> None:
        self.session.handle_key("n")
        frame = "\n".join(self._plain_frame())
        self.assertIn("New snippet", frame)
        self.assertIn("Folder", frame)
        self.assertIn("> misc_", frame)
        self.assertIn("Untitled", frame)
        self.assertNotIn("package a", frame)

    def test_status_message_replaces_hints(self) -> None:
        self.session.set_status("Copied a.")
        self.assertIn("Copied a.", self._plain_frame()[-1])

    def test_help_rows_are_shown(self) -> None:
        self.session.handle_key("?")
        frame = "\n".join(self._plain_frame())
        self.assertIn("SNIPPETS", frame)
        self.assertIn("rename", frame)

    def test_empty_store_shows_placeholder(self) -> None:
        session = Session(Config(root=self.root / "empty"), [], clock=lambda: 0.0)
        frame = "\n".join(strip_ansi(row) for row in build_frame(session, 100, 12, PLAIN_THEME))
        self.assertIn("Untitled", frame)
        self.assertNotIn(" 1 ", frame)

    def test_content_rows_track_frame_height(self) -> None:
        build_frame(self.session, 100, 20, PLAIN_THEME)
        self.assertEqual(self.session.content_panel.visible_rows, 17)

    def test_tiny_terminal_still_renders(self) -> None:
        self.assertEqual(len(build_frame(self.session, 10, 1, PLAIN_THEME)), 1)
        self.assertEqual(len(build_frame(self.session, 10, 3, PLAIN_THEME)), 3)

    def test_render_frame_writes_one_frame(self) -> None:
        writes: list[bytes] = []

        def capture(_fd: int, data: bytes) -> int:
            writes.append(data)
            return len(data)

        with mock.patch("snp.render.os.write", side_effect=capture):
            render_frame(self.session, 80, 10, PLAIN_THEME)

        output = b"".join(writes).decode("utf-8")
        self.assertTrue(output.startswith("\033[H\033[J"))
        self.assertEqual(output.count("\r\n"), 9)


class LayoutTests(unittest.TestCase):
    def test_column_widths_on_wide_terminal(self) -> None:
        self.assertEqual(column_widths(120), (22, 35, 61))

    def test_column_widths_on_narrow_terminal(self) -> None:
        folders, snippets, content = column_widths(40)
        self.assertEqual(folders + snippets + content + 2, 40)

    def test_status_line_right_aligns_help_hint(self) -> None:
        line = build_status_line("left", 30)
        self.assertEqual(len(line), 29)
        self.assertTrue(line.endswith("│ ? help"))

    def test_status_line_measures_wide_characters(self) -> None:
        line = build_status_line(" Copied 日本語のメモ.", 20)
        self.assertEqual(display_width(line), 19)
        self.assertTrue(line.endswith("│ ? help"))
        self.assertTrue(line.startswith(" Copied 日"))


if __name__ == "__main__":
    unittest.main()
