from fastapi import APIRouter, FastAPI

from .summary import router as summary_router, scaffold_router as summary_scaffold_router


def include_modular_routers(app: FastAPI) -> None:
    app.include_router(summary_router, prefix="/api", tags=["summary"])

    app.include_router(summary_scaffold_router, prefix="/_scaffold/summary", tags=["scaffold-summary"])


__all__ = ["include_modular_routers", "APIRouter"]
