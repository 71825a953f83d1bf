import logging
import uuid
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from ..config import DEV_NO_LLM, LOG_SUMMARY, REORDER_OUTPUT, ScoringConfig
from ..deps import get_library, get_prose_generator, get_scoring_config
from ..http_helpers import parse_summary_request
from ..library import CareerLibrary
from ..schemas import PlanResponse, SummaryResponse
from ..services.llm import ProseGenerationError, ProseGenerator
from ..services.prompts import build_report_prompt
from ..services.reorder import reorder_sections
from ..services.report import build_report_plan

logger = logging.getLogger(__name__)

router = APIRouter()
scaffold_router = APIRouter()

DEV_SUMMARY = "# Summary\n\n1) Dev mode: LLM skipped."


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or uuid.uuid4().hex


@scaffold_router.get("/health")
def summary_scaffold_health() -> dict[str, str]:
    return {"status": "ok", "module": "summary"}


@router.get("/ping")
def ping() -> dict[str, bool]:
    return {"ok": True}


@router.post("/plan")
def create_plan(
    payload: dict[str, Any],
    library: CareerLibrary = Depends(get_library),
    config: ScoringConfig = Depends(get_scoring_config),
) -> dict[str, Any]:
    summary_request = parse_summary_request(payload)
    plan = build_report_plan(summary_request, library, config)
    return PlanResponse(**plan.to_dict()).model_dump()


@router.post("/summary")
def create_summary(
    payload: dict[str, Any],
    request: Request,
    debug: int = 0,
    library: CareerLibrary = Depends(get_library),
    config: ScoringConfig = Depends(get_scoring_config),
    generator: ProseGenerator = Depends(get_prose_generator),
) -> dict[str, Any]:
    rid = _request_id(request)
    summary_request = parse_summary_request(payload)
    plan = build_report_plan(summary_request, library, config)
    logger.info(
        "[request] %s status=%s included=%s",
        rid,
        plan.status,
        plan.included_names,
    )

    if DEV_NO_LLM:
        return SummaryResponse(summary=DEV_SUMMARY, request_id=rid, plan=plan.to_dict()).model_dump()

    prompt = build_report_prompt(plan, summary_request)
    try:
        summary = generator.generate(prompt)
    except ProseGenerationError as exc:
        logger.error("[request] %s prose generation failed: %s", rid, exc.attempts)
        raise HTTPException(
            status_code=502,
            detail={"message": "Failed to generate summary", "request_id": rid},
        )

    if REORDER_OUTPUT:
        summary = reorder_sections(summary, plan)
    if LOG_SUMMARY:
        logger.info("[request] %s full summary:\n%s", rid, summary)

    response = SummaryResponse(summary=summary, request_id=rid, plan=plan.to_dict() if debug else None)
    return response.model_dump(exclude_none=True)
