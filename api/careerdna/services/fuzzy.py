from __future__ import annotations

import math
from typing import Iterable

from rapidfuzz.distance import Levenshtein

DEFAULT_THRESHOLD = 0.35


def fold_title(value: str | None) -> str:
    return str(value or "").lower().strip()


def best_fuzzy_match(
    query: str,
    candidates: Iterable[str],
    threshold: float = DEFAULT_THRESHOLD,
) -> str | None:
    """Closest candidate by edit distance, or None if it is too far off.

    The query is lowercased and stripped; candidates are compared as given. A
    candidate is accepted when its distance is at most ``threshold`` of the
    longer of the two strings (rounded up). The first candidate wins ties.
    """
    q = fold_title(query)
    best: str | None = None
    best_dist = math.inf
    for cand in candidates:
        dist = Levenshtein.distance(q, cand)
        if dist < best_dist:
            best_dist = dist
            best = cand
    if best is None:
        return None
    max_dist = math.ceil(max(len(q), len(best)) * threshold)
    return best if best_dist <= max_dist else None
