from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ArchetypeScore:
    name: str
    score: float


@dataclass(frozen=True)
class IncludedArchetype:
    name: str
    score: float
    weight: float


@dataclass(frozen=True)
class ExcludedArchetype:
    name: str
    score: float
    reason: str


@dataclass(frozen=True)
class ArchetypeSelection:
    included: tuple[IncludedArchetype, ...]
    excluded: tuple[ExcludedArchetype, ...] = ()
    dominance_note: str = ""

    @property
    def names(self) -> list[str]:
        return [a.name for a in self.included]

    @property
    def weights(self) -> dict[str, float]:
        return {a.name: a.weight for a in self.included}

    def to_dict(self) -> dict[str, Any]:
        return {
            "included": [{"name": a.name, "score": a.score, "weight": round(a.weight, 6)} for a in self.included],
            "excluded": [{"name": a.name, "score": a.score, "reason": a.reason} for a in self.excluded],
            "dominance_note": self.dominance_note,
        }


@dataclass(frozen=True)
class UserSubdimScore:
    name: str
    score: float


@dataclass(frozen=True)
class ContentItem:
    title: str
    archetypes: tuple[str, ...] = ()
    fit_area: str | None = None
    kind: str | None = None
    sectors: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoredItem:
    item: ContentItem
    score: float


@dataclass
class ReportPlan:
    status: str
    subjects: list[str]
    selection: ArchetypeSelection
    sections: dict[str, list[str]] = field(default_factory=dict)
    item_archetypes: dict[str, dict[str, list[str]]] = field(default_factory=dict)
    item_subdim_hints: dict[str, dict[str, list[str]]] = field(default_factory=dict)
    allowed_subdims: list[str] = field(default_factory=list)

    @property
    def included_names(self) -> list[str]:
        return self.selection.names

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "subjects": list(self.subjects),
            "includedArchetypes": [
                {"name": a.name, "weight": round(a.weight, 6)} for a in self.selection.included
            ],
            "selection": self.selection.to_dict(),
            "sections": {k: list(v) for k, v in self.sections.items()},
            "itemArchetypes": self.item_archetypes,
            "itemSubdimHints": self.item_subdim_hints,
            "allowedSubdims": list(self.allowed_subdims),
        }


@dataclass(frozen=True)
class SummaryRequest:
    archetype_scores: tuple[ArchetypeScore, ...]
    status: str
    subjects: tuple[str, ...] = ()
    subdim_scores: tuple[UserSubdimScore, ...] = ()
    age: str = ""

    @property
    def is_school(self) -> bool:
        return self.status == "school"

    def archetype_map(self) -> dict[str, float]:
        return {a.name: a.score for a in self.archetype_scores}
