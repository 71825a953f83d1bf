from __future__ import annotations

import logging
from typing import Sequence

from ..config import ScoringConfig
from ..models import ArchetypeScore, ArchetypeSelection, ExcludedArchetype, IncludedArchetype

logger = logging.getLogger(__name__)


def sort_scores(scores: Sequence[ArchetypeScore]) -> list[ArchetypeScore]:
    # sorted() is stable, so equal scores keep input order.
    return sorted(scores, key=lambda a: a.score, reverse=True)


def pick_included(scores: Sequence[ArchetypeScore], k: int = 3, min_percent: float = 60.0) -> list[ArchetypeScore]:
    ranked = sort_scores(scores)
    if not ranked or k <= 0:
        return []
    included = [ranked[0]]
    for a in ranked[1:]:
        if len(included) >= k:
            break
        if a.score < min_percent:
            break
        included.append(a)
    return included


def compute_weights(
    included: Sequence[ArchetypeScore],
    *,
    exponent: float = 1.7,
    auto_include: float = 80.0,
    hard_bonus: float = 5.0,
) -> list[IncludedArchetype]:
    transformed: list[float] = []
    for a in included:
        bonus = hard_bonus if a.score >= auto_include else 0.0
        base = max(0.0, a.score + bonus)
        transformed.append(base ** exponent)
    total = sum(transformed)
    if total <= 0:
        uniform = 1.0 / len(included) if included else 0.0
        return [IncludedArchetype(name=a.name, score=a.score, weight=uniform) for a in included]
    return [
        IncludedArchetype(name=a.name, score=a.score, weight=w / total)
        for a, w in zip(included, transformed)
    ]


def _dominance_note(ranked: Sequence[ArchetypeScore]) -> str:
    if not ranked:
        return "No scores provided."
    top = ranked[0]
    if len(ranked) == 1:
        return f"Single-archetype profile dominated by {top.name}."
    second = ranked[1]
    gap = top.score - second.score
    if gap > 10:
        return f"Strong dominance: {top.name} leads by {gap:g} pts over #2."
    if len(ranked) > 2 and abs(top.score - ranked[2].score) <= 5:
        third = ranked[2]
        return f"Tight cluster among the top 3 ({top.score:g}/{second.score:g}/{third.score:g})."
    return f"Moderate lead for {top.name}."


def select_included(scores: Sequence[ArchetypeScore], config: ScoringConfig | None = None) -> ArchetypeSelection:
    cfg = config or ScoringConfig()
    ranked = sort_scores(scores)
    picked = pick_included(ranked, k=cfg.top_k, min_percent=cfg.min_include)
    weighted = compute_weights(
        picked,
        exponent=cfg.weight_exponent,
        auto_include=cfg.auto_include,
        hard_bonus=cfg.hard_bonus,
    )
    picked_names = {a.name for a in picked}
    excluded: list[ExcludedArchetype] = []
    for a in ranked:
        if a.name in picked_names:
            continue
        if a.score >= cfg.min_include:
            reason = f"Dropped to respect cap of {cfg.top_k}."
        else:
            reason = f"Below threshold {cfg.min_include:g}%."
        excluded.append(ExcludedArchetype(name=a.name, score=a.score, reason=reason))

    selection = ArchetypeSelection(
        included=tuple(weighted),
        excluded=tuple(excluded),
        dominance_note=_dominance_note(ranked),
    )
    logger.debug(
        "[select] included=%s excluded=%s",
        [(a.name, round(a.weight, 3)) for a in selection.included],
        [a.name for a in selection.excluded],
    )
    return selection
