# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Fuzzy search over catalog names.

Scores are normalized errors in [0, 1] (0 = perfect). A candidate is kept
when its error is at or below the threshold. The whole query is aligned
against every window of each name, penalized by how far from the start of
the name the window sits (position / distance), and the lowest combined
error is kept. Multi-word queries are
also scored word by word, order-independent, and the better of the two wins.
Matched character ranges come from the equal blocks of the alignment.
"""

import re
from typing import Iterable, NamedTuple, Optional, Sequence

from rapidfuzz import fuzz
from rapidfuzz.distance import Levenshtein

from oncall_finder.core.config import settings
from oncall_finder.metrics.prometheus import SEARCHES_TOTAL
from oncall_finder.models.domain import CatalogEntry, HighlightSegment, SearchMatch

TOKEN_SPLIT = re.compile(r"[\s\-]+")

Span = tuple[int, int]


class _Alignment(NamedTuple):
    error: float
    start: int
    spans: list[Span]


def fold(text: str) -> str:
    """Lower-case without changing length, so spans index the original text."""
    return "".join(c if len(c.lower()) != 1 else c.lower() for c in text)


def _equal_spans(src: str, dest: str, offset: int) -> list[Span]:
    return [
        (offset + op.dest_start, offset + op.dest_end - 1)
        for op in Levenshtein.opcodes(src, dest)
        if op.tag == "equal" and op.dest_end > op.dest_start
    ]


def _align(pattern: str, key: str) -> _Alignment:
    alignment = fuzz.partial_ratio_alignment(pattern, key)
    error = 1.0 - alignment.score / 100.0
    if len(pattern) > len(key):
        # Query characters with nowhere to land count against it.
        error = 1.0 - (1.0 - error) * len(key) / len(pattern)
    src = pattern[alignment.src_start:alignment.src_end]
    dest = key[alignment.dest_start:alignment.dest_end]
    spans = _equal_spans(src, dest, alignment.dest_start)
    return _Alignment(error, alignment.dest_start, spans)


def _proximity(start: int, distance: int) -> float:
    if distance > 0:
        return start / distance
    return 0.0 if start == 0 else 1.0


def _closest(pattern: str, key: str, distance: int) -> tuple[float, _Alignment]:
    """
    Lowest error plus proximity over every window of the key. The aligner
    returns one best-scoring window, not necessarily the nearest, so each
    window in front of it is scored as well.
    """
    found = _align(pattern, key)
    best = (found.error + _proximity(found.start, distance), found)
    width = len(pattern)
    if width > len(key):
        return best
    for start in range(len(key) - width + 1):
        proximity = _proximity(start, distance)
        if proximity >= best[0]:
            break
        window = key[start:start + width]
        error = 1.0 - fuzz.ratio(pattern, window) / 100.0
        if error + proximity < best[0]:
            spans = _equal_spans(pattern, window, start)
            best = (error + proximity, _Alignment(error, start, spans))
    return best


def merge_spans(spans: Iterable[Span]) -> tuple[Span, ...]:
    """Sort inclusive ranges and fuse the ones that overlap or touch."""
    merged: list[list[int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1] + 1:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])
    return tuple((start, end) for start, end in merged)


class FuzzyIndex:
    """Read-only after construction; safe to share between concurrent lookups."""

    def __init__(
        self,
        entries: Iterable[CatalogEntry],
        threshold: float | None = None,
        distance: int | None = None,
    ) -> None:
        self._entries: tuple[CatalogEntry, ...] = tuple(entries)
        self._keys: tuple[str, ...] = tuple(fold(e.name) for e in self._entries)
        self._threshold = settings.FUZZY_THRESHOLD if threshold is None else threshold
        self._distance = settings.FUZZY_DISTANCE if distance is None else distance

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def search(self, query: str, limit: Optional[int] = None) -> list[SearchMatch]:
        """Ranked best-first; ties keep catalog order."""
        pattern = fold(query.strip())
        if not pattern:
            return []
        tokens = [t for t in TOKEN_SPLIT.split(pattern) if t]
        SEARCHES_TOTAL.inc()

        hits: list[tuple[float, int, SearchMatch]] = []
        for position, (entry, key) in enumerate(zip(self._entries, self._keys)):
            if not key:
                continue
            scored = self._score(pattern, tokens, key)
            if scored is None:
                continue
            score, spans = scored
            hits.append((score, position, SearchMatch(entry=entry, score=score, indices=spans)))

        hits.sort(key=lambda hit: (hit[0], hit[1]))
        matches = [match for _, _, match in hits]
        return matches[:limit] if limit else matches

    def _score(
        self, pattern: str, tokens: Sequence[str], key: str
    ) -> Optional[tuple[float, tuple[Span, ...]]]:
        combined, whole = _closest(pattern, key, self._distance)
        best = min(1.0, combined)
        spans = whole.spans

        if len(tokens) > 1:
            per_token = [_closest(token, key, self._distance)[1] for token in tokens]
            token_score = sum(a.error for a in per_token) / len(per_token)
            if token_score < best:
                best = token_score
                spans = [span for a in per_token for span in a.spans]

        if best > self._threshold:
            return None
        return round(best, 6), merge_spans(spans)


def highlight(text: str, indices: Iterable[Span]) -> list[HighlightSegment]:
    """
    Split text into literal and matched segments. Concatenating the segment
    texts always gives back the original text; ranges are clamped to it.
    """
    segments: list[HighlightSegment] = []
    pos = 0
    for start, end in sorted(indices):
        start = max(start, pos)
        end = min(end, len(text) - 1)
        if start > end:
            continue
        if pos < start:
            segments.append(HighlightSegment(text=text[pos:start]))
        segments.append(HighlightSegment(text=text[start:end + 1], matched=True))
        pos = end + 1
    if pos < len(text):
        segments.append(HighlightSegment(text=text[pos:]))
    return segments


def highlight_match(match: SearchMatch) -> list[HighlightSegment]:
    return highlight(match.entry.name, match.indices)
