"""Fuzzy ranking of snippet identity strings.

Scores fall into three tiers so a better kind of match always outranks a
worse one: exact identity, substring, then ordered subsequence. Every match
scores strictly positive; a non-match scores zero.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .snippet import Snippet

EXACT_SCORE = 30_000
# Case-folded exact hits rank just below the identity typed verbatim.
FOLDED_EXACT_SCORE = EXACT_SCORE - 1
SUBSTRING_BASE = 10_000
SUBSTRING_SPAN = 9_999
SUBSEQUENCE_BASE = 1_000
SUBSEQUENCE_SPAN = 8_999
_WORD_BOUNDARIES = "/_- ."


@dataclass(frozen=True)
class FuzzyMatch:
    """One ranked candidate: its position in the input, label, and score."""

    index: int
    label: str
    score: int


def subsequence_score(query: str, candidate: str) -> int | None:
    """Score ``query`` as an ordered subsequence of ``candidate``.

    Contiguous runs and hits right after a word boundary earn bonuses, gaps
    cost points. Returns ``None`` when some query character is missing.
    """
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in _WORD_BOUNDARIES:
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def match_score(query: str, candidate: str) -> int:
    """Return a positive score when ``candidate`` matches ``query``, else ``0``."""
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()
    if candidate == query:
        return EXACT_SCORE
    if candidate_folded == query_folded:
        return FOLDED_EXACT_SCORE

    substring_idx = candidate_folded.find(query_folded)
    if substring_idx >= 0:
        penalty = substring_idx * 50 + len(candidate_folded)
        return SUBSTRING_BASE + max(1, SUBSTRING_SPAN - penalty)

    raw = subsequence_score(query, candidate)
    if raw is None:
        return 0
    return SUBSEQUENCE_BASE + max(1, min(SUBSEQUENCE_SPAN, SUBSEQUENCE_BASE + raw))


def rank(query: str, labels: Sequence[str]) -> list[FuzzyMatch]:
    """Rank ``labels`` against ``query`` by descending score.

    Ties keep input order. An empty query matches nothing.
    """
    if not query:
        return []
    matches = []
    for idx, label in enumerate(labels):
        score = match_score(query, label)
        if score > 0:
            matches.append(FuzzyMatch(index=idx, label=label, score=score))
    matches.sort(key=lambda match: (-match.score, match.index))
    return matches


def rank_snippets(query: str, snippets: Sequence[Snippet]) -> list[Snippet]:
    """Return the snippets matching ``query``, best first."""
    return [snippets[match.index] for match in rank(query, [snippet.identity for snippet in snippets])]


def best_match(query: str, snippets: Sequence[Snippet]) -> Snippet | None:
    ranked = rank_snippets(query, snippets)
    return ranked[0] if ranked else None
