"""Command-line front door for snp.

Loads config and logging, reads the snippet store, and then either answers a
one-shot command (``list``, a lookup, a piped save) or launches the
interactive session.
"""

from __future__ import annotations

import argparse
import logging
import sys
import termios
from typing import TextIO

from .config import load_config
from .fuzzy import best_match
from .highlight import highlight
from .logs import configure_logging
from .runtime import run_session
from .snippet import parse_name
from .store import read_content, read_snippets, write_snippet

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snp",
        description="Browse, search and save code snippets from the terminal.",
        epilog="With piped input, saves stdin as a snippet named by ARGS (folder/name.language).",
    )
    parser.add_argument(
        "args",
        nargs="*",
        help="'list' to print every snippet, or a query to print the best match.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    return parser


def _isatty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def save_piped(config, words: list[str], data: str, stdout: TextIO) -> None:
    """Store ``data`` under the name given by ``words``, replacing any existing file."""
    folder, name, language = parse_name(" ".join(words), config.default_language)
    existing = next(
        (snippet for snippet in read_snippets(config.root) if snippet.key == (folder, name, language)),
        None,
    )
    try:
        snippet = write_snippet(
            config.root,
            folder,
            name,
            language,
            data,
            overwrite=True,
            path=existing.path if existing is not None else None,
        )
    except (OSError, ValueError) as exc:
        logger.error("cannot save piped snippet %s/%s.%s: %s", folder, name, language, exc)
        raise SystemExit(f"unable to create snippet: {exc}") from exc
    logger.info("saved piped snippet %s", snippet.identity)
    stdout.write(f"Saved {snippet.identity}\n")


def print_list(snippets, stdout: TextIO) -> None:
    for snippet in snippets:
        stdout.write(f"{snippet.identity}\n")


def print_lookup(config, snippets, query: str, stdout: TextIO, no_color: bool) -> None:
    """Print the content of the snippet whose identity best matches ``query``."""
    snippet = best_match(query, snippets)
    if snippet is None:
        raise SystemExit(f"no snippet matches {query!r}")
    content = read_content(snippet)
    if not no_color and _isatty(stdout):
        content = highlight(content, snippet.language, config.theme)
    stdout.write(content)
    if content and not content.endswith("\n"):
        stdout.write("\n")


def main(argv: list[str] | None = None, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    """Parse CLI arguments and run the requested snp command.

    ``stdin`` and ``stdout`` default to the process streams and exist for tests.
    """
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    args = _build_parser().parse_args(argv)

    config = load_config()
    configure_logging(config.log_level)
    logger.debug("snippet root is %s", config.root)

    if not _isatty(stdin):
        data = stdin.read()
        if data:
            save_piped(config, args.args, data, stdout)
            return

    snippets = read_snippets(config.root)

    if args.args == ["list"]:
        print_list(snippets, stdout)
        return

    if args.args:
        print_lookup(config, snippets, " ".join(args.args), stdout, args.no_color)
        return

    try:
        run_session(config, snippets, no_color=args.no_color)
    except (OSError, termios.error) as exc:
        logger.error("terminal session failed: %s", exc)
        raise SystemExit(f"snp: terminal error: {exc}") from exc


if __name__ == "__main__":
    main()
