from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Any, Collection, Iterable, Mapping

from .models import UserSubdimScore

logger = logging.getLogger(__name__)

ARCHETYPES = ("Achiever", "Connector", "Creator", "Explorer", "Organizer", "Thinker", "Visionary")


def _row(**weights: float) -> Mapping[str, float]:
    return MappingProxyType({a: float(weights.get(a, 0.0)) for a in ARCHETYPES})


# Sub-dimension -> archetype affinity (0..1). 24 rows x 7 archetypes.
TRAIT_MATRIX: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        # who you are
        "Curiosity & Openness": _row(Creator=0.6, Explorer=1.0, Visionary=0.8),
        "Reliability & Focus": _row(Achiever=0.8, Organizer=1.0, Thinker=0.5),
        "Emotional Stability": _row(Connector=0.5, Organizer=0.5),
        "Uncertainty Tolerance": _row(Achiever=0.5, Creator=0.5, Explorer=1.0, Visionary=0.5),
        "Perseverance": _row(Achiever=1.0, Organizer=0.5),
        "Sociability & Extroversion": _row(Connector=1.0),
        # what you love
        "Investigative Curiosity": _row(Explorer=0.8, Thinker=1.0),
        "Creative Expression": _row(Creator=1.0),
        "Helping Orientation": _row(Connector=1.0),
        "Entrepreneurial Drive": _row(Visionary=1.0),
        "Hands-On Engagement": _row(Creator=1.0, Explorer=0.5),
        "Novelty & Variety Seeking": _row(Creator=0.8, Explorer=1.0, Visionary=0.5),
        # what matters
        "Purpose & Impact": _row(Connector=0.5, Visionary=1.0),
        "Independence & Autonomy": _row(Achiever=0.5, Creator=0.8, Explorer=0.5, Thinker=0.5, Visionary=1.0),
        "Stability & Predictability": _row(Organizer=1.0),
        "Recognition & Visibility": _row(Achiever=1.0, Creator=0.5, Visionary=0.5),
        "Financial Ambition": _row(Achiever=1.0),
        "Belonging & Connection": _row(Connector=1.0),
        # how you work best
        "Pace & Intensity Preference": _row(Achiever=1.0, Organizer=0.5, Visionary=0.5),
        "Organisation & Systems Orientation": _row(Organizer=1.0, Thinker=0.5),
        "Clarity & Structure Preference": _row(Organizer=1.0, Thinker=0.8),
        "Team Collaboration": _row(Connector=1.0, Organizer=0.5, Visionary=0.5),
        "Independent Working Approach": _row(Creator=0.5, Explorer=1.0, Thinker=0.5, Visionary=0.5),
        "Attention to Detail": _row(Achiever=0.5, Organizer=0.8, Thinker=1.0),
    }
)

SUBDIM_GROUPS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "who_you_are": (
            "Curiosity & Openness",
            "Reliability & Focus",
            "Emotional Stability",
            "Uncertainty Tolerance",
            "Perseverance",
            "Sociability & Extroversion",
        ),
        "what_you_love": (
            "Investigative Curiosity",
            "Creative Expression",
            "Helping Orientation",
            "Entrepreneurial Drive",
            "Hands-On Engagement",
            "Novelty & Variety Seeking",
        ),
        "what_matters": (
            "Purpose & Impact",
            "Independence & Autonomy",
            "Stability & Predictability",
            "Recognition & Visibility",
            "Financial Ambition",
            "Belonging & Connection",
        ),
        "how_you_work_best": (
            "Pace & Intensity Preference",
            "Organisation & Systems Orientation",
            "Clarity & Structure Preference",
            "Team Collaboration",
            "Independent Working Approach",
            "Attention to Detail",
        ),
    }
)

# Group order per report section; the first group that lists a sub-dimension wins.
SECTION_SUBDIM_GROUPS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "strengths": ("who_you_are", "what_you_love", "what_matters"),
        "environments": ("how_you_work_best", "what_matters"),
        "fit_areas": ("what_you_love", "what_matters"),
        "subjects": ("what_you_love", "who_you_are"),
        "roles_classic": ("what_you_love", "how_you_work_best", "what_matters"),
        "roles_emerging": ("what_you_love", "how_you_work_best", "what_matters"),
    }
)

_ARCHETYPE_ALIASES = {"organiser": "Organizer"}


def canonical_archetype(name: Any) -> str | None:
    key = str(name or "").strip().lower()
    if not key:
        return None
    if key in _ARCHETYPE_ALIASES:
        return _ARCHETYPE_ALIASES[key]
    for a in ARCHETYPES:
        if a.lower() == key:
            return a
    return None


def canon_subdim_name(name: Any) -> str:
    s = str(name or "").lower()
    s = re.sub(r"\s*&\s*", " & ", s)
    s = re.sub(r"\s*/\s*", "/", s)
    s = re.sub(r"\s+", " ", s).strip()
    return s.replace("extraversion/sociability", "extroversion/sociability")


_CANON_INDEX = {canon_subdim_name(k): k for k in TRAIT_MATRIX}


def resolve_subdim_name(name: Any) -> str | None:
    raw = str(name or "").strip()
    if raw in TRAIT_MATRIX:
        return raw
    return _CANON_INDEX.get(canon_subdim_name(raw))


def normalize_personal_score(value: float) -> float:
    v = float(value)
    if v > 1.0:
        v = v / 100.0
    return max(0.0, min(1.0, v))


def subdim_belongs_to(subdim: str, included_names: Iterable[str]) -> bool:
    row = TRAIT_MATRIX.get(subdim)
    if not row:
        return False
    # Any non-zero link counts, negative included.
    return any(row.get(a, 0.0) != 0 for a in included_names)


def build_personal_weights(
    user_scores: Iterable[UserSubdimScore],
    included_names: Collection[str],
    *,
    min_score: float = 0.30,
) -> dict[str, float]:
    """Personal-salience weights for sub-dimensions relevant to the included archetypes.

    Scores may arrive on a 0..1 or 0..100 scale. Names are resolved against the
    trait matrix (exact, then canonical); unresolvable names are dropped. The
    result is ordered by weight, highest first, ties keeping input order.
    """
    kept: dict[str, float] = {}
    for row in user_scores:
        key = resolve_subdim_name(row.name)
        if key is None:
            logger.debug("[traits] dropping unknown sub-dimension %r", row.name)
            continue
        if not subdim_belongs_to(key, included_names):
            continue
        personal = normalize_personal_score(row.score)
        if personal < min_score:
            kept.pop(key, None)
            continue
        kept[key] = personal
    ranked = sorted(kept.items(), key=lambda kv: kv[1], reverse=True)
    return dict(ranked)


def allowed_subdims(weights: Mapping[str, float], prefer_min: float = 0.60) -> list[str]:
    ordered = [k for k, _ in sorted(weights.items(), key=lambda kv: kv[1], reverse=True)]
    preferred = [k for k in ordered if weights[k] >= prefer_min]
    return preferred or ordered


def section_subdims(allowed: Iterable[str], groups: Iterable[str]) -> list[str]:
    allowed_list = list(allowed)
    out: list[str] = []
    for group in groups:
        members = SUBDIM_GROUPS.get(group, ())
        for sd in allowed_list:
            if sd in members and sd not in out:
                out.append(sd)
    return out
