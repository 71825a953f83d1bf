from careerdna.models import UserSubdimScore
from careerdna.traits import (
    ARCHETYPES,
    SECTION_SUBDIM_GROUPS,
    SUBDIM_GROUPS,
    TRAIT_MATRIX,
    allowed_subdims,
    build_personal_weights,
    canon_subdim_name,
    canonical_archetype,
    normalize_personal_score,
    resolve_subdim_name,
    section_subdims,
    subdim_belongs_to,
)


def _rows(*pairs) -> list[UserSubdimScore]:
    return [UserSubdimScore(name=n, score=s) for n, s in pairs]


def test_matrix_shape():
    assert len(TRAIT_MATRIX) == 24
    for row in TRAIT_MATRIX.values():
        assert set(row) == set(ARCHETYPES)
        assert all(0.0 <= v <= 1.0 for v in row.values())
    grouped = [sd for members in SUBDIM_GROUPS.values() for sd in members]
    assert sorted(grouped) == sorted(TRAIT_MATRIX)


def test_every_section_has_groups():
    for groups in SECTION_SUBDIM_GROUPS.values():
        assert groups
        assert all(g in SUBDIM_GROUPS for g in groups)


def test_canonical_archetype_names():
    assert canonical_archetype("organiser") == "Organizer"
    assert canonical_archetype(" THINKER ") == "Thinker"
    assert canonical_archetype("wizard") is None
    assert canonical_archetype(None) is None


def test_subdim_name_resolution():
    assert canon_subdim_name("Curiosity  &Openness") == "curiosity & openness"
    assert canon_subdim_name("Extraversion / Sociability") == "extroversion/sociability"
    assert resolve_subdim_name("curiosity  &openness") == "Curiosity & Openness"
    assert resolve_subdim_name("Attention to Detail") == "Attention to Detail"
    assert resolve_subdim_name("Juggling") is None


def test_personal_score_scales():
    assert normalize_personal_score(0.45) == 0.45
    assert normalize_personal_score(80) == 0.8
    assert normalize_personal_score(150) == 1.0
    assert normalize_personal_score(-3) == 0.0


def test_membership_uses_any_affinity():
    assert subdim_belongs_to("Creative Expression", ["Creator"]) is True
    assert subdim_belongs_to("Creative Expression", ["Thinker", "Organizer"]) is False
    assert subdim_belongs_to("Unknown", ["Creator"]) is False


def test_personal_weights_filter_and_order():
    weights = build_personal_weights(
        _rows(
            ("Creative Expression", 80),
            ("attention to detail", 0.9),
            ("Juggling", 99),
            ("Team Collaboration", 95),
            ("Independent Working Approach", 25),
        ),
        ["Thinker", "Creator"],
    )
    assert list(weights.items()) == [("Attention to Detail", 0.9), ("Creative Expression", 0.8)]


def test_personal_weights_last_duplicate_wins():
    weights = build_personal_weights(
        _rows(("Creative Expression", 80), ("creative expression", 10)),
        ["Creator"],
    )
    assert weights == {}


def test_allowed_subdims_prefers_high_scores():
    assert allowed_subdims({"Perseverance": 0.9, "Creative Expression": 0.5}) == ["Perseverance"]
    assert allowed_subdims({"Perseverance": 0.4, "Creative Expression": 0.5}) == [
        "Creative Expression",
        "Perseverance",
    ]
    assert allowed_subdims({}) == []


def test_section_subdims_follow_group_order():
    allowed = ["Attention to Detail", "Perseverance", "Creative Expression"]
    assert section_subdims(allowed, ("what_you_love", "who_you_are")) == ["Creative Expression", "Perseverance"]
    assert section_subdims(allowed, ("how_you_work_best",)) == ["Attention to Detail"]
