from typing import Any

from pydantic import BaseModel, Field


class SubdimScoreInput(BaseModel):
    name: str = Field(min_length=1)
    score: float


class IncludedArchetypeOut(BaseModel):
    name: str
    weight: float


class PlanResponse(BaseModel):
    status: str
    subjects: list[str]
    includedArchetypes: list[IncludedArchetypeOut]
    selection: dict[str, Any]
    sections: dict[str, list[str]]
    itemArchetypes: dict[str, dict[str, list[str]]]
    itemSubdimHints: dict[str, dict[str, list[str]]]
    allowedSubdims: list[str]


class SummaryResponse(BaseModel):
    summary: str
    request_id: str
    plan: PlanResponse | None = None
