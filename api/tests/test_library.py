import json
import logging

from careerdna.config import DATA_DIR
from careerdna.library import BANK_FILES, load_library, parse_items, parse_roles, read_bank_json
from careerdna.services.bank_validation import unlinked_role_fit_areas, validate_bank


def _write(path, name, data):
    (path / f"{name}.json").write_text(json.dumps(data), encoding="utf-8")


def test_shipped_banks_are_valid():
    fit_area_titles = set()
    for name in BANK_FILES:
        raw = read_bank_json(DATA_DIR, name)
        assert raw, name
        assert validate_bank(name, raw) == [], name
        if name == "fit_areas":
            fit_area_titles = {r["title"] for r in raw}
    assert unlinked_role_fit_areas(read_bank_json(DATA_DIR, "roles"), fit_area_titles) == []


def test_shipped_library_loads():
    lib = load_library(DATA_DIR)
    assert len(lib.strengths) >= 5
    assert len(lib.environments) >= 6
    assert len(lib.fit_areas) >= 6
    assert len(lib.subjects) >= 6
    assert {r.kind for r in lib.roles} == {"classic", "emerging"}
    assert {r.fit_area for r in lib.roles} <= {fa.title for fa in lib.fit_areas}


def test_missing_and_corrupt_banks_fall_back_to_empty(tmp_path, caplog):
    _write(tmp_path, "strengths", [{"title": "Planning", "archetypes": ["Organizer"]}])
    (tmp_path / "environments.json").write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        lib = load_library(tmp_path)

    assert [s.title for s in lib.strengths] == ["Planning"]
    assert lib.environments == ()
    assert lib.roles == ()
    messages = " ".join(r.getMessage() for r in caplog.records)
    assert "failed to parse" in messages
    assert "not found" in messages


def test_parse_items_cleans_tags():
    items = parse_items(
        [
            {"title": " Mixed ", "archetypes": ["Thinker", "Wizard", "Thinker", "Creator", "Explorer", "Achiever"]},
            {"title": "", "archetypes": ["Thinker"]},
            "not an item",
            {"title": "Untagged"},
        ]
    )
    assert [(i.title, i.archetypes) for i in items] == [
        ("Mixed", ("Thinker", "Creator", "Explorer")),
        ("Untagged", ()),
    ]


def test_parse_roles_sets_fit_area_and_kind():
    roles = parse_roles(
        [
            {
                "fit_area": "Technology & Software",
                "classic": [{"title": "Developer", "archetypes": ["Thinker"]}],
                "emerging": [{"title": "Cloud Engineer", "archetypes": ["Thinker", "Organizer"]}],
            },
            {"classic": [{"title": "Orphan", "archetypes": ["Thinker"]}]},
        ]
    )
    assert [(r.title, r.fit_area, r.kind) for r in roles] == [
        ("Developer", "Technology & Software", "classic"),
        ("Cloud Engineer", "Technology & Software", "emerging"),
    ]


def test_validate_bank_reports_problems():
    errors = validate_bank(
        "strengths",
        [
            {"title": "A", "archetypes": ["Thinker"]},
            {"title": "a", "archetypes": ["Thinker"]},
            {"title": "B", "archetypes": []},
            {"title": "C", "archetypes": ["Thinker", "Creator", "Explorer", "Achiever"]},
            {"title": "D", "archetypes": ["Wizard", "Creator", "Creator"]},
            {"archetypes": ["Thinker"]},
            7,
        ],
    )
    codes = [e["code"] for e in errors]
    assert codes == [
        "duplicate_title",
        "missing_archetypes",
        "too_many_archetypes",
        "unknown_archetype",
        "duplicate_archetype",
        "missing_title",
        "invalid_item",
    ]
    assert validate_bank("subjects", {"title": "x"})[0]["code"] == "invalid_schema"


def test_validate_roles_and_links():
    groups = [
        {"fit_area": "Known", "classic": [{"title": "A", "archetypes": ["Thinker"]}]},
        {"classic": []},
        {"fit_area": "Unknown Area", "emerging": []},
    ]
    assert [e["code"] for e in validate_bank("roles", groups)] == ["missing_fit_area"]
    assert unlinked_role_fit_areas(groups, {"known"}) == ["Unknown Area"]
