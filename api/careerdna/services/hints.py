from __future__ import annotations

from typing import Iterable, Sequence

from ..models import ContentItem
from ..traits import TRAIT_MATRIX


def derive_hints(item_tags: Sequence[str], allowed_subdims: Sequence[str], n: int = 1) -> list[str]:
    allowed = list(allowed_subdims)
    tags = [t for t in item_tags if t]
    if n <= 0:
        return []
    if not tags or not allowed:
        return allowed[:n]
    scored: list[tuple[str, float]] = []
    for sd in allowed:
        row = TRAIT_MATRIX.get(sd, {})
        total = sum(row.get(t, 0.0) for t in tags)
        if total != 0:
            scored.append((sd, total))
    if not scored:
        return allowed[:n]
    scored.sort(key=lambda kv: kv[1], reverse=True)
    return [sd for sd, _ in scored[:n]]


def item_hint_map(items: Iterable[ContentItem], allowed_subdims: Sequence[str], n: int = 1) -> dict[str, list[str]]:
    return {it.title: derive_hints(it.archetypes, allowed_subdims, n) for it in items}


def item_archetype_map(items: Iterable[ContentItem], included_names: Sequence[str]) -> dict[str, list[str]]:
    inc = set(included_names)
    return {it.title: [t for t in it.archetypes if t in inc] for it in items}
