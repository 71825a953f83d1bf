from careerdna.models import ArchetypeScore, ContentItem, IncludedArchetype
from careerdna.services.selection import (
    match_user_subjects,
    norm_title,
    roles_for_fit_areas,
    select_fit_areas,
    select_roles,
    select_subjects,
    select_top,
)

INCLUDED = [
    IncludedArchetype(name="Achiever", score=85, weight=0.6),
    IncludedArchetype(name="Thinker", score=70, weight=0.4),
]
FULL = [ArchetypeScore(name="Achiever", score=85), ArchetypeScore(name="Thinker", score=70)]


def _item(title: str, *tags: str, **kw) -> ContentItem:
    return ContentItem(title=title, archetypes=tuple(tags), **kw)


def _titles(items) -> list[str]:
    return [it.title for it in items]


def test_select_top_swaps_in_missing_archetype():
    bank = [
        _item("Alpha Drive", "Achiever"),
        _item("Bravo Drive", "Achiever"),
        _item("Charlie Drive", "Achiever"),
        _item("Deep Analysis", "Thinker"),
    ]
    assert _titles(select_top(bank, INCLUDED, FULL, 2)) == ["Alpha Drive", "Deep Analysis"]


def test_coverage_keeps_sole_carriers():
    included = [
        IncludedArchetype(name="Achiever", score=85, weight=0.5),
        IncludedArchetype(name="Thinker", score=70, weight=0.3),
        IncludedArchetype(name="Visionary", score=65, weight=0.2),
    ]
    bank = [
        _item("Goal Setter", "Achiever"),
        _item("Analyst", "Thinker"),
        _item("Future Lens", "Visionary"),
        _item("Another Goal", "Achiever"),
    ]
    picked = select_top(bank, included, FULL, 3)
    assert _titles(picked) == ["Another Goal", "Future Lens", "Analyst"]


def test_coverage_skips_archetypes_without_candidates():
    included = INCLUDED + [IncludedArchetype(name="Visionary", score=65, weight=0.0)]
    bank = [_item("Alpha Drive", "Achiever"), _item("Deep Analysis", "Thinker"), _item("Bravo Drive", "Achiever")]
    assert _titles(select_top(bank, included, FULL, 2)) == ["Alpha Drive", "Deep Analysis"]


def test_empty_bank_and_zero_count():
    assert select_top([], INCLUDED, FULL, 5) == []
    assert select_top([_item("Alpha Drive", "Achiever")], INCLUDED, FULL, 0) == []


def test_duplicate_titles_are_selected_once():
    bank = [_item("Same", "Achiever"), _item("Same", "Achiever"), _item("Other", "Thinker")]
    assert _titles(select_top(bank, INCLUDED, FULL, 3)) == ["Same", "Other"]


SUBJECTS = [
    _item("Mathematics", "Thinker"),
    _item("Physics", "Thinker", "Explorer"),
    _item("Fine Art", "Creator"),
    _item("Music", "Creator"),
    _item("Business and Management", "Achiever"),
    _item("Economics", "Thinker", "Achiever"),
    _item("Accounting", "Organizer", "Achiever"),
]


def test_match_user_subjects_exact_then_fuzzy():
    matched = match_user_subjects(["fine art", "Musik", "Underwater Basket Weaving", "", "FINE ART"], SUBJECTS)
    assert _titles(matched) == ["Fine Art", "Music"]


def test_subject_slots_are_reserved_before_filler():
    picked = select_subjects(SUBJECTS, INCLUDED, FULL, 4, user_subjects=["fine art", "Musik"], subject_slots=3)
    assert _titles(picked) == ["Fine Art", "Music", "Economics", "Business and Management"]


def test_coverage_overrides_reservations_when_every_slot_is_reserved():
    bank = [
        _item("Fine Art", "Creator"),
        _item("Music", "Creator"),
        _item("Drama", "Creator"),
        _item("Economics", "Achiever"),
        _item("Mathematics", "Thinker"),
    ]
    picked = select_subjects(
        bank, INCLUDED, FULL, 3, user_subjects=["Fine Art", "Music", "Drama"], subject_slots=3
    )

    titles = _titles(picked)
    assert len(titles) == 3
    assert "Economics" in titles
    assert "Mathematics" in titles
    assert len({"Fine Art", "Music", "Drama"} & set(titles)) == 1


def test_subject_slots_are_capped():
    picked = select_subjects(
        SUBJECTS, INCLUDED, FULL, 4, user_subjects=["Fine Art", "Music", "Physics"], subject_slots=2
    )
    assert _titles(picked)[:2] == ["Fine Art", "Music"]
    assert "Physics" not in _titles(picked)[:2]
    assert len(picked) == 4


def test_subjects_without_user_input_follow_ranking():
    picked = select_subjects(SUBJECTS, INCLUDED, FULL, 3)
    assert _titles(picked) == ["Economics", "Business and Management", "Accounting"]


def test_fit_areas_related_to_user_subjects_come_first():
    fit_areas = [
        _item("Creative Industries", "Creator", "Visionary"),
        _item("Finance", "Achiever", "Thinker"),
        _item("Sales", "Achiever"),
        _item("Research", "Thinker"),
        _item("Arts Admin", "Organizer", "Creator"),
    ]
    picked = select_fit_areas(
        fit_areas, INCLUDED, FULL, 3, user_subjects=["Fine Art"], subjects_bank=SUBJECTS, subject_slots=3
    )
    assert _titles(picked) == ["Arts Admin", "Creative Industries", "Finance"]


def test_fit_areas_without_subjects_use_general_ranking():
    fit_areas = [_item("Finance", "Achiever", "Thinker"), _item("Sales", "Achiever"), _item("Research", "Thinker")]
    picked = select_fit_areas(fit_areas, INCLUDED, FULL, 2)
    assert _titles(picked) == ["Finance", "Sales"]


def test_roles_follow_selected_fit_areas():
    roles = [
        _item("Analyst", "Thinker", fit_area="Finance & Economics", kind="classic"),
        _item("Quant", "Thinker", "Achiever", fit_area="finance  &economics", kind="emerging"),
        _item("Designer", "Creator", fit_area="Design", kind="classic"),
        _item("Broker", "Achiever", fit_area="Finance & Economics", kind="classic"),
    ]
    fit_areas = [_item("Finance & Economics", "Achiever")]

    assert _titles(roles_for_fit_areas(roles, fit_areas)) == ["Analyst", "Quant", "Broker"]

    classic, emerging = select_roles(roles, fit_areas, INCLUDED, FULL, classic_count=5, emerging_count=5)
    assert _titles(classic) == ["Broker", "Analyst"]
    assert _titles(emerging) == ["Quant"]


def test_norm_title():
    assert norm_title("  Finance&Economics ") == "finance & economics"
    assert norm_title(None) == ""
