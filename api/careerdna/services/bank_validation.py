from __future__ import annotations

from typing import Any

from ..traits import ARCHETYPES

ITEM_BANKS = ("strengths", "environments", "fit_areas", "subjects")
ROLE_KINDS = ("classic", "emerging")
MAX_TAGS = 3


def _validate_tags(tags: Any, path: str) -> list[dict[str, Any]]:
    if not isinstance(tags, list) or not tags:
        return [{"code": "missing_archetypes", "path": path, "message": "archetypes must be a non-empty array"}]
    errors: list[dict[str, Any]] = []
    if len(tags) > MAX_TAGS:
        errors.append({"code": "too_many_archetypes", "path": path, "message": f"at most {MAX_TAGS} archetype tags allowed"})
    seen: set[str] = set()
    for idx, tag in enumerate(tags):
        if tag not in ARCHETYPES:
            errors.append({"code": "unknown_archetype", "path": f"{path}[{idx}]", "message": f"unknown archetype '{tag}'"})
        elif tag in seen:
            errors.append({"code": "duplicate_archetype", "path": f"{path}[{idx}]", "message": f"duplicate archetype '{tag}'"})
        seen.add(str(tag))
    return errors


def _validate_items(items: Any, path: str) -> list[dict[str, Any]]:
    if not isinstance(items, list):
        return [{"code": "invalid_schema", "path": path, "message": "bank must be an array"}]
    errors: list[dict[str, Any]] = []
    seen_titles: set[str] = set()
    for idx, item in enumerate(items):
        item_path = f"{path}[{idx}]"
        if not isinstance(item, dict):
            errors.append({"code": "invalid_item", "path": item_path, "message": "item must be an object"})
            continue
        title = item.get("title")
        if not isinstance(title, str) or not title.strip():
            errors.append({"code": "missing_title", "path": f"{item_path}.title", "message": "title is required"})
        elif title.strip().lower() in seen_titles:
            errors.append({"code": "duplicate_title", "path": f"{item_path}.title", "message": f"duplicate title '{title}'"})
        else:
            seen_titles.add(title.strip().lower())
        errors.extend(_validate_tags(item.get("archetypes"), f"{item_path}.archetypes"))
    return errors


def validate_roles(groups: Any) -> list[dict[str, Any]]:
    if not isinstance(groups, list):
        return [{"code": "invalid_schema", "path": "roles", "message": "roles must be an array"}]
    errors: list[dict[str, Any]] = []
    for idx, group in enumerate(groups):
        group_path = f"roles[{idx}]"
        if not isinstance(group, dict):
            errors.append({"code": "invalid_item", "path": group_path, "message": "role group must be an object"})
            continue
        fit_area = group.get("fit_area")
        if not isinstance(fit_area, str) or not fit_area.strip():
            errors.append({"code": "missing_fit_area", "path": f"{group_path}.fit_area", "message": "fit_area is required"})
        for kind in ROLE_KINDS:
            if kind in group:
                errors.extend(_validate_items(group.get(kind), f"{group_path}.{kind}"))
    return errors


def validate_bank(name: str, raw: Any) -> list[dict[str, Any]]:
    if name == "roles":
        return validate_roles(raw)
    return _validate_items(raw, name)


def unlinked_role_fit_areas(groups: Any, fit_area_titles: set[str]) -> list[str]:
    if not isinstance(groups, list):
        return []
    known = {t.strip().lower() for t in fit_area_titles}
    out: list[str] = []
    for group in groups:
        if not isinstance(group, dict):
            continue
        fa = str(group.get("fit_area") or "").strip()
        if fa and fa.lower() not in known and fa not in out:
            out.append(fa)
    return out
