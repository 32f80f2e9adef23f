from __future__ import annotations

import unittest
from pathlib import Path

from snp.snippet import (
    InvalidSnippetName,
    Snippet,
    normalize_identity,
    parse_name,
    split_file_name,
    validate_identity,
)


class ParseNameTests(unittest.TestCase):
    def test_folder_name_and_language(self) -> None:
        self.assertEqual(parse_name("Notes/Hello.go"), ("Notes", "Hello", "go"))

    def test_missing_folder_uses_misc(self) -> None:
        self.assertEqual(parse_name("Hello.go"), ("misc", "Hello", "go"))

    def test_missing_language_uses_default(self) -> None:
        self.assertEqual(parse_name("Notes/Hello", default_language="py"), ("Notes", "Hello", "py"))

    def test_last_dot_segment_is_language(self) -> None:
        self.assertEqual(parse_name("a.b.rs"), ("misc", "a.b", "rs"))

    def test_empty_text_gives_defaults(self) -> None:
        self.assertEqual(parse_name("", default_language="go"), ("misc", "Untitled", "go"))


class SplitFileNameTests(unittest.TestCase):
    def test_dotless_name_is_txt(self) -> None:
        self.assertEqual(split_file_name("README"), ("README", "txt"))

    def test_multi_dot_name_keeps_inner_dots(self) -> None:
        self.assertEqual(split_file_name("a.b.go"), ("a.b", "go"))


class SnippetModelTests(unittest.TestCase):
    def test_identity_string(self) -> None:
        snippet = Snippet(folder="notes", name="c", language="md")
        self.assertEqual(snippet.identity, "notes/c.md")
        self.assertEqual(str(snippet), "notes/c.md")
        self.assertEqual(snippet.file_name, "c.md")

    def test_renamed_returns_new_value(self) -> None:
        original = Snippet(folder="misc", name="a", language="go", path=Path("/tmp/misc/a.go"))
        renamed = original.renamed("todo", "b", "py", Path("/tmp/todo/b.py"))
        self.assertEqual(original.key, ("misc", "a", "go"))
        self.assertEqual(renamed.key, ("todo", "b", "py"))
        self.assertEqual(renamed.path, Path("/tmp/todo/b.py"))


class ValidationTests(unittest.TestCase):
    def test_blank_fields_fall_back_to_defaults(self) -> None:
        self.assertEqual(normalize_identity(" ", "", "", "py"), ("misc", "Untitled", "py"))

    def test_path_separators_are_rejected(self) -> None:
        for triple in (("a/b", "x", "go"), ("a", "x\\y", "go"), ("a", "x", "g\x00o")):
            with self.subTest(triple=triple):
                with self.assertRaises(InvalidSnippetName):
                    validate_identity(*triple)

    def test_dot_segments_are_rejected(self) -> None:
        with self.assertRaises(InvalidSnippetName):
            validate_identity("..", "x", "go")
        with self.assertRaises(InvalidSnippetName):
            validate_identity("misc", "x", "tar.gz")

    def test_invalid_name_is_value_error(self) -> None:
        self.assertTrue(issubclass(InvalidSnippetName, ValueError))


if __name__ == "__main__":
    unittest.main()
