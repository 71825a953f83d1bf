from __future__ import annotations

import logging

from ..config import ScoringConfig
from ..library import CareerLibrary
from ..models import ContentItem, ReportPlan, SummaryRequest
from ..traits import SECTION_SUBDIM_GROUPS, allowed_subdims, build_personal_weights, section_subdims
from .archetypes import select_included
from .hints import item_archetype_map, item_hint_map
from .selection import select_fit_areas, select_roles, select_subjects, select_top

logger = logging.getLogger(__name__)

_CAREER_HEADINGS = (
    ("strengths", "Strengths"),
    ("environments", "Ideal Environments"),
    ("fit_areas", "Career Fit Areas"),
    ("roles_classic", "Classic Roles"),
    ("roles_emerging", "Emerging / Future Roles"),
)

_SCHOOL_HEADINGS = (
    ("strengths", "Strengths"),
    ("environments", "Ideal Environments"),
    ("fit_areas", "Career Fit Areas"),
    ("subjects", "University Subject Suggestions"),
    ("roles_classic", "Graduate Role Ideas"),
)


def section_headings(status: str) -> tuple[tuple[str, str], ...]:
    return _SCHOOL_HEADINGS if status == "school" else _CAREER_HEADINGS


def _titles(items: list[ContentItem]) -> list[str]:
    return [it.title for it in items]


def build_report_plan(
    request: SummaryRequest,
    library: CareerLibrary,
    config: ScoringConfig | None = None,
) -> ReportPlan:
    """Run selection, weighting, ranking and hinting for one request.

    School users get a subjects section and one list of graduate role ideas;
    everyone else gets separate classic and emerging career role lists. Role candidates are limited to the fit
    areas chosen for this user.
    """
    cfg = config or ScoringConfig()
    full = list(request.archetype_scores)
    selection = select_included(full, cfg)
    included = list(selection.included)
    names = selection.names

    weights = build_personal_weights(request.subdim_scores, names, min_score=cfg.min_subdim_score)
    allowed = allowed_subdims(weights, prefer_min=cfg.preferred_subdim_score)

    chosen: dict[str, list[ContentItem]] = {
        "strengths": select_top(library.strengths, included, full, cfg.strengths_count),
        "environments": select_top(library.environments, included, full, cfg.environments_count),
    }
    chosen["fit_areas"] = select_fit_areas(
        library.fit_areas,
        included,
        full,
        cfg.fit_areas_count,
        user_subjects=request.subjects,
        subjects_bank=library.subjects,
        subject_slots=cfg.subject_slots,
        threshold=cfg.fuzzy_threshold,
    )
    if request.is_school:
        chosen["subjects"] = select_subjects(
            library.subjects,
            included,
            full,
            cfg.subjects_count,
            user_subjects=request.subjects,
            subject_slots=cfg.subject_slots,
            threshold=cfg.fuzzy_threshold,
        )
        chosen["roles_classic"], _ = select_roles(
            library.roles,
            chosen["fit_areas"],
            included,
            full,
            classic_count=cfg.graduate_roles_count,
            emerging_count=0,
        )
    else:
        chosen["roles_classic"], chosen["roles_emerging"] = select_roles(
            library.roles,
            chosen["fit_areas"],
            included,
            full,
            classic_count=cfg.roles_classic_count,
            emerging_count=cfg.roles_emerging_count,
        )

    item_archetypes: dict[str, dict[str, list[str]]] = {}
    item_hints: dict[str, dict[str, list[str]]] = {}
    for section, items in chosen.items():
        pool = section_subdims(allowed, SECTION_SUBDIM_GROUPS[section])
        item_archetypes[section] = item_archetype_map(items, names)
        item_hints[section] = item_hint_map(items, pool, cfg.hints_per_item)

    # Only the hints actually handed out count as allowed for the prose.
    used: list[str] = []
    for per_item in item_hints.values():
        for hints in per_item.values():
            for sd in hints:
                if sd not in used:
                    used.append(sd)

    plan = ReportPlan(
        status=request.status,
        subjects=list(request.subjects),
        selection=selection,
        sections={k: _titles(v) for k, v in chosen.items()},
        item_archetypes=item_archetypes,
        item_subdim_hints=item_hints,
        allowed_subdims=used,
    )
    logger.debug(
        "[select] plan status=%s included=%s sizes=%s",
        plan.status,
        names,
        {k: len(v) for k, v in plan.sections.items()},
    )
    return plan
