"""Filesystem-backed snippet store.

The root directory is authoritative: top-level files form the default folder,
top-level subdirectories are folders, and each file is one snippet. Nothing
is cached; every read and write goes straight to disk.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .snippet import DEFAULT_FOLDER, Snippet, split_file_name, validate_identity

logger = logging.getLogger(__name__)


def _scan_sorted(directory: Path) -> list[os.DirEntry]:
    """Return directory entries in name order, raising ``OSError`` on failure."""
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def _entry_is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def _entry_is_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


def read_snippets(root: Path) -> list[Snippet]:
    """Enumerate snippets under ``root`` in discovery order.

    A missing or unreadable root yields an empty list so a fresh install
    still opens a usable session. Only one directory level is scanned.
    """
    try:
        top_entries = _scan_sorted(root)
    except OSError as exc:
        logger.info("snippet root %s is not readable: %s", root, exc)
        return []

    snippets: list[Snippet] = []
    seen: set[tuple[str, str, str]] = set()

    def add_file(entry: os.DirEntry, folder: str) -> None:
        name, language = split_file_name(entry.name)
        snippet = Snippet(folder=folder, name=name, language=language, path=Path(entry.path))
        if snippet.key in seen:
            logger.warning("skipping %s: identity %s is already taken", entry.path, snippet.identity)
            return
        seen.add(snippet.key)
        snippets.append(snippet)

    for entry in top_entries:
        if _entry_is_dir(entry):
            try:
                children = _scan_sorted(Path(entry.path))
            except OSError as exc:
                logger.info("skipping unreadable folder %s: %s", entry.path, exc)
                continue
            for child in children:
                if _entry_is_file(child):
                    add_file(child, entry.name)
        elif _entry_is_file(entry):
            add_file(entry, DEFAULT_FOLDER)
    return snippets


def snippet_path(root: Path, folder: str, name: str, language: str) -> Path:
    """Return the file path a new snippet with this identity is written to."""
    return root / folder / f"{name}.{language}"


def read_text(path: Path) -> str:
    """Decode ``path`` as UTF-8, falling back to Latin-1, which accepts any byte."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return path.read_text(encoding="latin-1")


def read_content(snippet: Snippet | None) -> str:
    """Return the snippet's text, or ``""`` when it cannot be read."""
    if snippet is None or snippet.path is None:
        return ""
    try:
        return read_text(snippet.path)
    except OSError as exc:
        logger.debug("cannot read %s: %s", snippet.path, exc)
        return ""


def write_snippet(
    root: Path,
    folder: str,
    name: str,
    language: str,
    content: str,
    *,
    overwrite: bool = False,
    path: Path | None = None,
) -> Snippet:
    """Write ``content`` as a snippet file, creating its folder when absent.

    ``path`` names the file already backing this identity, if any; otherwise
    the file goes to ``snippet_path``.

    Raises ``InvalidSnippetName`` for identities that do not map to a single
    file, ``FileExistsError`` when the file exists and ``overwrite`` is false,
    and ``OSError`` for any other filesystem failure.
    """
    validate_identity(folder, name, language)
    if path is None:
        path = snippet_path(root, folder, name, language)
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = "w" if overwrite else "x"
    with path.open(mode, encoding="utf-8") as handle:
        handle.write(content)
    logger.info("wrote snippet %s/%s.%s", folder, name, language)
    return Snippet(folder=folder, name=name, language=language, path=path)


def delete_snippet(snippet: Snippet) -> None:
    """Remove the snippet's backing file."""
    if snippet.path is None:
        raise FileNotFoundError(f"{snippet.identity} has no backing file")
    snippet.path.unlink()
    logger.info("deleted snippet %s", snippet.identity)


def move_snippet(snippet: Snippet, root: Path, folder: str, name: str, language: str) -> Snippet:
    """Rename the snippet's backing file to a new identity.

    The target must not exist; the source file is left untouched on failure.
    """
    if snippet.path is None:
        raise FileNotFoundError(f"{snippet.identity} has no backing file")
    validate_identity(folder, name, language)
    target = snippet_path(root, folder, name, language)
    if target.exists():
        raise FileExistsError(f"{folder}/{name}.{language} already exists")
    target.parent.mkdir(parents=True, exist_ok=True)
    snippet.path.rename(target)
    logger.info("renamed snippet %s to %s/%s.%s", snippet.identity, folder, name, language)
    return snippet.renamed(folder, name, language, target)
