from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from ..models import ArchetypeScore, ContentItem, IncludedArchetype, ScoredItem

logger = logging.getLogger(__name__)

# (first-tag reward, anywhere reward) for A1, A2, A3
POSITION_REWARDS = ((3.0, 2.0), (2.0, 1.0), (1.5, 0.7))
COVERAGE_BONUS = {3: 0.75, 2: 0.4, 1: 0.1}

WEAK_BELOW = 50.0
WEAK_PENALTY = 1.2
MID_BELOW = 60.0
MID_PENALTY = 0.8
PENALTY_POSITION_WEIGHTS = (1.0, 0.6, 0.4)
PENALTY_DEFAULT_POSITION_WEIGHT = 0.4
MAX_PENALTY = 1.2


def _positive_part(tags: Sequence[str], included: Sequence[IncludedArchetype]) -> tuple[float, int]:
    score = 0.0
    matched = 0
    for (first_reward, any_reward), arch in zip(POSITION_REWARDS, included):
        if tags[0] == arch.name:
            score += first_reward * arch.weight
            matched += 1
        elif arch.name in tags:
            score += any_reward * arch.weight
            matched += 1
    return score + COVERAGE_BONUS.get(matched, 0.0), matched


def _tag_penalty(raw_score: float | None, idx: int) -> float:
    if raw_score is None:
        return 0.0
    if raw_score < WEAK_BELOW:
        base = WEAK_PENALTY
    elif raw_score < MID_BELOW:
        base = MID_PENALTY
    else:
        return 0.0
    pos_weight = PENALTY_POSITION_WEIGHTS[idx] if idx < len(PENALTY_POSITION_WEIGHTS) else PENALTY_DEFAULT_POSITION_WEIGHT
    return base * pos_weight


def fit_breakdown(
    item: ContentItem,
    included: Sequence[IncludedArchetype],
    full_scores: Iterable[ArchetypeScore] = (),
) -> dict[str, Any]:
    tags = list(item.archetypes)
    if not tags:
        return {"positive": 0.0, "penalty": 0.0, "matched": 0, "score": 0.0}

    positive, matched = _positive_part(tags, included)

    raw_by_name = {a.name: a.score for a in full_scores}
    penalty = 0.0
    for idx, tag in enumerate(tags):
        p = _tag_penalty(raw_by_name.get(tag), idx)
        if p:
            logger.debug("[score] penalty item=%r tag=%s raw=%s pos=%d penalty=%.3f", item.title, tag, raw_by_name.get(tag), idx, p)
        penalty += p
    penalty = min(penalty, MAX_PENALTY)

    return {
        "positive": positive,
        "penalty": penalty,
        "matched": matched,
        "score": positive - penalty,
    }


def score_item(
    item: ContentItem,
    included: Sequence[IncludedArchetype],
    full_scores: Iterable[ArchetypeScore] = (),
) -> float:
    """Fit of one content item to the user's included archetypes.

    Rewards the first three included archetypes by where they sit in the item's
    tags, adds a coverage bonus for how many of them matched, then subtracts a
    capped penalty for tags the user scored low on in the full archetype table.
    The result has no floor.
    """
    return fit_breakdown(item, included, full_scores)["score"]


def rank_key(scored: ScoredItem) -> tuple[bool, float, int, str, str]:
    title = scored.item.title
    untagged = not scored.item.archetypes
    return (untagged, -scored.score, len(scored.item.archetypes), title.lower(), title)


def score_items(
    items: Iterable[ContentItem],
    included: Sequence[IncludedArchetype],
    full_scores: Sequence[ArchetypeScore] = (),
) -> list[ScoredItem]:
    scored = [ScoredItem(item=it, score=score_item(it, included, full_scores)) for it in items]
    return sorted(scored, key=rank_key)
