"""Snippet value type, default identity parts, and name parsing."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_FOLDER = "misc"
DEFAULT_NAME = "Untitled"
DEFAULT_LANGUAGE = "go"
UNKNOWN_LANGUAGE = "txt"

_FORBIDDEN_CHARS = ("/", "\\", "\x00")


class InvalidSnippetName(ValueError):
    """Raised when a folder, name, or language cannot map to a single file."""


@dataclass(frozen=True)
class Snippet:
    """One stored text unit identified by ``(folder, name, language)``."""

    folder: str
    name: str
    language: str
    path: Path | None = None

    @property
    def identity(self) -> str:
        """Return ``folder/name.language``, the string fuzzy matching runs against."""
        return f"{self.folder}/{self.name}.{self.language}"

    @property
    def file_name(self) -> str:
        return f"{self.name}.{self.language}"

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.folder, self.name, self.language)

    def renamed(self, folder: str, name: str, language: str, path: Path) -> Snippet:
        return replace(self, folder=folder, name=name, language=language, path=path)

    def __str__(self) -> str:
        return self.identity


def split_file_name(file_name: str) -> tuple[str, str]:
    """Split ``a.b.go`` into ``("a.b", "go")``; dotless names are ``txt``."""
    if "." not in file_name:
        return file_name, UNKNOWN_LANGUAGE
    name, _, language = file_name.rpartition(".")
    return name, language


def parse_name(text: str, default_language: str = DEFAULT_LANGUAGE) -> tuple[str, str, str]:
    """Return ``(folder, name, language)`` for a command-line snippet name.

    ``Notes/Hello.go`` gives ``(Notes, Hello, go)``, ``Hello.go`` gives
    ``(misc, Hello, go)`` and ``Notes/Hello`` falls back to the default
    language. Only the first ``/`` separates the folder.
    """
    folder = DEFAULT_FOLDER
    remaining = text.strip()
    if "/" in remaining:
        head, _, remaining = remaining.partition("/")
        folder = head.strip() or DEFAULT_FOLDER

    language = default_language or DEFAULT_LANGUAGE
    if "." in remaining:
        name, _, ext = remaining.rpartition(".")
        language = ext.strip() or language
    else:
        name = remaining
    name = name.strip() or DEFAULT_NAME
    return folder, name, language


def normalize_identity(
    folder: str,
    name: str,
    language: str,
    default_language: str = DEFAULT_LANGUAGE,
) -> tuple[str, str, str]:
    """Apply defaults to blank fields and validate the resulting triple."""
    folder = folder.strip() or DEFAULT_FOLDER
    name = name.strip() or DEFAULT_NAME
    language = language.strip() or default_language or DEFAULT_LANGUAGE
    validate_identity(folder, name, language)
    return folder, name, language


def validate_identity(folder: str, name: str, language: str) -> None:
    for label, value in (("folder", folder), ("name", name), ("language", language)):
        if not value:
            raise InvalidSnippetName(f"{label} is empty")
        if value in {".", ".."}:
            raise InvalidSnippetName(f"{label} cannot be {value!r}")
        if any(ch in value for ch in _FORBIDDEN_CHARS):
            raise InvalidSnippetName(f"{label} cannot contain path separators")
    if "." in language:
        raise InvalidSnippetName("language cannot contain '.'")
