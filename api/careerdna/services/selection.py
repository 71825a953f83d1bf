from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from ..models import ArchetypeScore, ContentItem, IncludedArchetype, ScoredItem
from .fuzzy import DEFAULT_THRESHOLD, best_fuzzy_match, fold_title
from .scoring import rank_key, score_items

logger = logging.getLogger(__name__)


def norm_title(value: str | None) -> str:
    s = str(value or "").lower()
    s = re.sub(r"\s*&\s*", " & ", s)
    return re.sub(r"\s+", " ", s).strip()


def dedupe_by_title(scored: Iterable[ScoredItem]) -> list[ScoredItem]:
    seen: set[str] = set()
    out: list[ScoredItem] = []
    for s in scored:
        if s.item.title in seen:
            continue
        seen.add(s.item.title)
        out.append(s)
    return out


def _carries(scored: ScoredItem, archetype: str) -> bool:
    return archetype in scored.item.archetypes


def _is_sole_carrier(result: list[ScoredItem], idx: int, included_names: Sequence[str], target: str) -> bool:
    for arch in included_names:
        if arch == target or not _carries(result[idx], arch):
            continue
        if not any(_carries(s, arch) for j, s in enumerate(result) if j != idx):
            return True
    return False


def _pick_victim(
    result: list[ScoredItem],
    included_names: Sequence[str],
    target: str,
    protected: frozenset[str],
) -> int | None:
    worst_first = sorted(range(len(result)), key=lambda i: rank_key(result[i]), reverse=True)
    for i in worst_first:
        if result[i].item.title not in protected and not _is_sole_carrier(result, i, included_names, target):
            return i
    # coverage outranks a reserved slot
    for i in worst_first:
        if not _is_sole_carrier(result, i, included_names, target):
            return i
    for i in worst_first:
        if result[i].item.title not in protected:
            return i
    return None


def ensure_coverage(
    chosen: Sequence[ScoredItem],
    ranked: Sequence[ScoredItem],
    included_names: Sequence[str],
    protected: Iterable[str] = (),
) -> list[ScoredItem]:
    """Swap in the best carrier for any included archetype the chosen list misses.

    The lowest-ranked chosen item is replaced, skipping protected titles and items
    that are the only carrier of another included archetype where possible. A
    protected item is given up before another archetype's only carrier is.
    Archetypes with no carrier anywhere in ``ranked`` are left uncovered.
    """
    result = list(chosen)
    if not result:
        return result
    protected_titles = frozenset(protected)
    for arch in included_names:
        if any(_carries(s, arch) for s in result):
            continue
        taken = {s.item.title for s in result}
        candidate = next((s for s in ranked if _carries(s, arch) and s.item.title not in taken), None)
        if candidate is None:
            logger.debug("[select] no candidate carries %s; coverage skipped", arch)
            continue
        victim = _pick_victim(result, included_names, arch, protected_titles)
        if victim is None:
            continue
        logger.debug("[select] coverage %s: %r replaces %r", arch, candidate.item.title, result[victim].item.title)
        result[victim] = candidate
    return result


def select_top(
    candidates: Sequence[ContentItem],
    included: Sequence[IncludedArchetype],
    full_scores: Sequence[ArchetypeScore],
    count: int,
) -> list[ContentItem]:
    if count <= 0 or not candidates:
        return []
    ranked = dedupe_by_title(score_items(candidates, included, full_scores))
    chosen = ensure_coverage(ranked[:count], ranked, [a.name for a in included])
    return [s.item for s in chosen]


def _fill_with_reserved(
    reserved: Sequence[ScoredItem],
    ranked: Sequence[ScoredItem],
    count: int,
    included_names: Sequence[str],
) -> list[ContentItem]:
    picked = dedupe_by_title(reserved)[:count]
    taken = {s.item.title for s in picked}
    for s in ranked:
        if len(picked) >= count:
            break
        if s.item.title in taken:
            continue
        picked.append(s)
        taken.add(s.item.title)
    chosen = ensure_coverage(picked, ranked, included_names, protected=[s.item.title for s in reserved])
    return [s.item for s in chosen]


def match_user_subjects(
    user_subjects: Iterable[str],
    subjects_bank: Sequence[ContentItem],
    threshold: float = DEFAULT_THRESHOLD,
) -> list[ContentItem]:
    by_title: dict[str, ContentItem] = {}
    for s in subjects_bank:
        by_title.setdefault(fold_title(s.title), s)
    titles = list(by_title)
    matched: list[ContentItem] = []
    for raw in user_subjects:
        q = fold_title(raw)
        if not q:
            continue
        key = q if q in by_title else best_fuzzy_match(q, titles, threshold=threshold)
        if key is None:
            continue
        item = by_title[key]
        if item not in matched:
            matched.append(item)
    return matched


def select_fit_areas(
    fit_areas: Sequence[ContentItem],
    included: Sequence[IncludedArchetype],
    full_scores: Sequence[ArchetypeScore],
    count: int,
    *,
    user_subjects: Sequence[str] = (),
    subjects_bank: Sequence[ContentItem] = (),
    subject_slots: int = 3,
    threshold: float = DEFAULT_THRESHOLD,
) -> list[ContentItem]:
    if count <= 0 or not fit_areas:
        return []
    ranked = dedupe_by_title(score_items(fit_areas, included, full_scores))
    matched = match_user_subjects(user_subjects, subjects_bank, threshold=threshold)
    reserved: list[ScoredItem] = []
    if matched and subject_slots > 0:
        subject_archetypes = {a for s in matched for a in s.archetypes}
        related = [s for s in ranked if any(a in subject_archetypes for a in s.item.archetypes)]
        reserved = related[:subject_slots]
    return _fill_with_reserved(reserved, ranked, count, [a.name for a in included])


def select_subjects(
    subjects_bank: Sequence[ContentItem],
    included: Sequence[IncludedArchetype],
    full_scores: Sequence[ArchetypeScore],
    count: int,
    *,
    user_subjects: Sequence[str] = (),
    subject_slots: int = 3,
    threshold: float = DEFAULT_THRESHOLD,
) -> list[ContentItem]:
    if count <= 0 or not subjects_bank:
        return []
    ranked = dedupe_by_title(score_items(subjects_bank, included, full_scores))
    scored_by_title = {s.item.title: s for s in ranked}
    reserved: list[ScoredItem] = []
    if subject_slots > 0:
        matched = match_user_subjects(user_subjects, subjects_bank, threshold=threshold)
        reserved = [scored_by_title[m.title] for m in matched[:subject_slots]]
    return _fill_with_reserved(reserved, ranked, count, [a.name for a in included])


def roles_for_fit_areas(roles: Sequence[ContentItem], fit_areas: Sequence[ContentItem]) -> list[ContentItem]:
    selected = {norm_title(fa.title) for fa in fit_areas}
    return [r for r in roles if r.fit_area and norm_title(r.fit_area) in selected]


def select_roles(
    roles: Sequence[ContentItem],
    fit_areas: Sequence[ContentItem],
    included: Sequence[IncludedArchetype],
    full_scores: Sequence[ArchetypeScore],
    *,
    classic_count: int,
    emerging_count: int,
) -> tuple[list[ContentItem], list[ContentItem]]:
    linked = roles_for_fit_areas(roles, fit_areas)
    classic = [r for r in linked if r.kind == "classic"]
    emerging = [r for r in linked if r.kind == "emerging"]
    return (
        select_top(classic, included, full_scores, classic_count),
        select_top(emerging, included, full_scores, emerging_count),
    )
