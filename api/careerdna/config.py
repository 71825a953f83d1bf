import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

_default_data_dir = Path(__file__).resolve().parent / "data"
DATA_DIR = Path(os.getenv("CDNA_DATA_DIR", str(_default_data_dir)))

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "")
OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.7"))
OPENAI_TIMEOUT_SECONDS = float(os.getenv("OPENAI_TIMEOUT_SECONDS", "60"))
FALLBACK_MODELS = ["gpt-4o-mini", "gpt-4o"]

DEV_NO_LLM = os.getenv("CDNA_DEV_NO_LLM", "false").lower() == "true"
LOG_SUMMARY = os.getenv("CDNA_LOG_SUMMARY", "false").lower() == "true"
REORDER_OUTPUT = os.getenv("CDNA_REORDER_OUTPUT", "true").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "3000"))

ALLOWED_ORIGINS = [
    o.strip()
    for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]


@dataclass(frozen=True)
class ScoringConfig:
    top_k: int = 3
    min_include: float = 60.0
    auto_include: float = 80.0
    hard_bonus: float = 5.0
    weight_exponent: float = 1.7

    min_subdim_score: float = 0.30
    preferred_subdim_score: float = 0.60
    hints_per_item: int = 1
    fuzzy_threshold: float = 0.35

    strengths_count: int = 5
    environments_count: int = 6
    fit_areas_count: int = 6
    subjects_count: int = 6
    subject_slots: int = 3
    roles_classic_count: int = 5
    roles_emerging_count: int = 5
    graduate_roles_count: int = 4


def _coerce_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    types = {f.name: f.type for f in fields(ScoringConfig)}
    out: dict[str, Any] = {}
    for key, value in raw.items():
        name = str(key).strip().lower()
        if name not in types:
            continue
        caster = int if types[name] in (int, "int") else float
        try:
            out[name] = caster(value)
        except (TypeError, ValueError):
            continue
    return out


def load_scoring_config() -> ScoringConfig:
    cfg = ScoringConfig(
        top_k=int(os.getenv("CDNA_TOP_K", "3")),
        min_include=float(os.getenv("CDNA_MIN_INCLUDE", "60")),
        auto_include=float(os.getenv("CDNA_AUTO_INCLUDE", "80")),
        hard_bonus=float(os.getenv("CDNA_HARD_BONUS", "5")),
        weight_exponent=float(os.getenv("CDNA_WEIGHT_EXP", "1.7")),
        min_subdim_score=float(os.getenv("CDNA_MIN_SUBDIM_SCORE", "0.30")),
        preferred_subdim_score=float(os.getenv("CDNA_PREFERRED_SUBDIM_SCORE", "0.60")),
        hints_per_item=int(os.getenv("CDNA_HINTS_PER_ITEM", "1")),
        fuzzy_threshold=float(os.getenv("CDNA_FUZZY_THRESHOLD", "0.35")),
        strengths_count=int(os.getenv("CDNA_STRENGTHS_COUNT", "5")),
        environments_count=int(os.getenv("CDNA_ENVIRONMENTS_COUNT", "6")),
        fit_areas_count=int(os.getenv("CDNA_FIT_AREAS_COUNT", "6")),
        subjects_count=int(os.getenv("CDNA_SUBJECTS_COUNT", "6")),
        subject_slots=int(os.getenv("CDNA_SUBJECT_SLOTS", "3")),
        roles_classic_count=int(os.getenv("CDNA_ROLES_CLASSIC_COUNT", "5")),
        roles_emerging_count=int(os.getenv("CDNA_ROLES_EMERGING_COUNT", "5")),
        graduate_roles_count=int(os.getenv("CDNA_GRADUATE_ROLES_COUNT", "4")),
    )
    if os.getenv("SCORING_CONFIG_JSON"):
        try:
            overrides = json.loads(os.getenv("SCORING_CONFIG_JSON", "{}"))
        except json.JSONDecodeError:
            overrides = {}
        if isinstance(overrides, dict):
            cfg = replace(cfg, **_coerce_overrides(overrides))
    return cfg


SCORING_CONFIG = load_scoring_config()
