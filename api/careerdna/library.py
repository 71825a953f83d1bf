import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from .config import DATA_DIR
from .models import ContentItem
from .services.bank_validation import ITEM_BANKS, ROLE_KINDS, validate_bank
from .traits import ARCHETYPES

logger = logging.getLogger(__name__)

BANK_FILES = {name: f"{name}.json" for name in (*ITEM_BANKS, "roles")}


@dataclass(frozen=True)
class CareerLibrary:
    strengths: tuple[ContentItem, ...] = ()
    environments: tuple[ContentItem, ...] = ()
    fit_areas: tuple[ContentItem, ...] = ()
    subjects: tuple[ContentItem, ...] = ()
    roles: tuple[ContentItem, ...] = ()


def read_bank_json(data_dir: Path, name: str) -> Any:
    path = data_dir / BANK_FILES[name]
    if not path.exists():
        logger.warning("[library] bank file not found at %s; using empty bank", str(path))
        return []
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError:
        logger.warning("[library] failed to parse %s; using empty bank", str(path))
        return []


def _tags(raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    out: list[str] = []
    for tag in raw:
        if tag in ARCHETYPES and tag not in out:
            out.append(tag)
    return tuple(out[:3])


def _item(raw: Any, *, fit_area: str | None = None, kind: str | None = None) -> ContentItem | None:
    if not isinstance(raw, dict):
        return None
    title = str(raw.get("title") or "").strip()
    if not title:
        return None
    sectors = raw.get("sectors") if isinstance(raw.get("sectors"), list) else []
    return ContentItem(
        title=title,
        archetypes=_tags(raw.get("archetypes")),
        fit_area=fit_area,
        kind=kind,
        sectors=tuple(str(s) for s in sectors),
    )


def parse_items(raw: Any) -> tuple[ContentItem, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(it for it in (_item(r) for r in raw) if it is not None)


def parse_roles(raw: Any) -> tuple[ContentItem, ...]:
    if not isinstance(raw, list):
        return ()
    out: list[ContentItem] = []
    for group in raw:
        if not isinstance(group, dict):
            continue
        fit_area = str(group.get("fit_area") or "").strip()
        if not fit_area:
            continue
        for kind in ROLE_KINDS:
            entries = group.get(kind) if isinstance(group.get(kind), list) else []
            for entry in entries:
                item = _item(entry, fit_area=fit_area, kind=kind)
                if item is not None:
                    out.append(item)
    return tuple(out)


def load_library(data_dir: Path | None = None) -> CareerLibrary:
    base = Path(data_dir) if data_dir else DATA_DIR
    parsed: dict[str, tuple[ContentItem, ...]] = {}
    for name in BANK_FILES:
        raw = read_bank_json(base, name)
        errors = validate_bank(name, raw)
        if errors:
            logger.warning("[library] %s has %d validation issue(s); first: %s", name, len(errors), errors[0]["message"])
        parsed[name] = parse_roles(raw) if name == "roles" else parse_items(raw)
    library = CareerLibrary(**parsed)
    logger.info(
        "[library] loaded strengths=%d environments=%d fit_areas=%d subjects=%d roles=%d",
        len(library.strengths),
        len(library.environments),
        len(library.fit_areas),
        len(library.subjects),
        len(library.roles),
    )
    return library


@lru_cache(maxsize=1)
def get_library() -> CareerLibrary:
    return load_library()
