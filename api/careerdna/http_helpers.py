import logging
import math
from typing import Any

from fastapi import HTTPException
from pydantic import ValidationError

from .models import ArchetypeScore, SummaryRequest, UserSubdimScore
from .schemas import SubdimScoreInput
from .traits import canonical_archetype

logger = logging.getLogger(__name__)

STATUSES = ("school", "undergraduate", "postgraduate")
STATUS_ALIASES = {
    "gcse": "school",
    "a-level": "school",
    "alevel": "school",
    "sixth form": "school",
    "sixth-form": "school",
    "undergrad": "undergraduate",
    "ug": "undergraduate",
    "postgrad": "postgraduate",
    "pg": "postgraduate",
    "masters": "postgraduate",
    "master": "postgraduate",
    "msc": "postgraduate",
    "mba": "postgraduate",
}


def normalize_status(raw: Any) -> str:
    s = str(raw or "").strip().lower()
    if s in STATUSES:
        return s
    return STATUS_ALIASES.get(s, "")


def normalize_subjects(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, list):
        return [str(x).strip() for x in raw if x is not None and str(x).strip()]
    if isinstance(raw, str):
        return [raw.strip()] if raw.strip() else []
    return []


def _to_score(value: Any, label: str) -> float:
    if isinstance(value, bool):
        raise HTTPException(status_code=400, detail=f"Score for {label} must be a number")
    try:
        score = float(value)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail=f"Score for {label} must be a number")
    if not math.isfinite(score):
        raise HTTPException(status_code=400, detail=f"Score for {label} must be finite")
    if score < 0 or score > 100:
        raise HTTPException(status_code=400, detail=f"Score for {label} must be between 0 and 100")
    return score


def parse_archetype_scores(raw: Any) -> tuple[ArchetypeScore, ...]:
    if isinstance(raw, dict):
        pairs = list(raw.items())
    elif isinstance(raw, list):
        pairs = []
        for row in raw:
            if not isinstance(row, dict):
                raise HTTPException(status_code=400, detail="Invalid or missing archetype data")
            pairs.append((row.get("name"), row.get("score")))
    else:
        raise HTTPException(status_code=400, detail="Invalid or missing archetype data")
    if not pairs:
        raise HTTPException(status_code=400, detail="Invalid or missing archetype data")

    scores: dict[str, float] = {}
    for name, value in pairs:
        canonical = canonical_archetype(name)
        if canonical is None:
            raise HTTPException(status_code=400, detail=f"Unknown archetype '{name}'")
        scores[canonical] = _to_score(value, canonical)
    return tuple(ArchetypeScore(name=n, score=s) for n, s in scores.items())


def parse_subdim_scores(raw: Any) -> tuple[UserSubdimScore, ...]:
    if not isinstance(raw, list):
        return ()
    out: list[UserSubdimScore] = []
    for row in raw:
        if not isinstance(row, dict):
            continue
        candidate = {
            "name": row.get("name") or row.get("title") or row.get("subdim") or "",
            "score": row.get("score", row.get("score_pct")),
        }
        try:
            parsed = SubdimScoreInput.model_validate(candidate)
        except ValidationError:
            logger.debug("[request] skipping malformed sub-dimension row %r", row)
            continue
        if not math.isfinite(parsed.score):
            continue
        out.append(UserSubdimScore(name=parsed.name, score=parsed.score))
    return tuple(out)


def parse_summary_request(payload: dict[str, Any]) -> SummaryRequest:
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    archetypes = payload.get("archetypes")
    if not archetypes or not isinstance(archetypes, (dict, list)):
        raise HTTPException(status_code=400, detail="Invalid or missing archetype data")

    status = normalize_status(payload.get("status"))
    if not status:
        raise HTTPException(status_code=400, detail="Invalid or missing status")

    if status == "school":
        subjects = normalize_subjects(payload.get("schoolSubjects"))
    else:
        uni = payload.get("uniSubject")
        uni = uni.strip() if isinstance(uni, str) else ""
        if not uni:
            raise HTTPException(status_code=400, detail="University subject must be a non-empty string")
        subjects = [uni]

    subdims = payload.get("subdims")
    if not (isinstance(subdims, list) and subdims):
        subdims = payload.get("subdimensions")

    age = payload.get("age")
    return SummaryRequest(
        archetype_scores=parse_archetype_scores(archetypes),
        status=status,
        subjects=tuple(subjects),
        subdim_scores=parse_subdim_scores(subdims),
        age="" if age is None else str(age).strip(),
    )
