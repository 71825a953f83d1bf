import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import ALLOWED_ORIGINS, DEV_NO_LLM, LOG_LEVEL, OPENAI_API_KEY, PORT
from .routes import include_modular_routers

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="CareerDNA API")
include_modular_routers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    rid = uuid.uuid4().hex
    request.state.request_id = rid
    started = time.perf_counter()
    logger.info(
        "[request] ➡ %s %s %s (origin=%s)",
        rid,
        request.method,
        request.url.path,
        request.headers.get("origin", "-"),
    )
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers["X-Request-Id"] = rid
    logger.info("[request] ⬅ %s %s (%.0fms)", rid, response.status_code, elapsed_ms)
    return response


@app.on_event("startup")
def startup() -> None:
    if DEV_NO_LLM:
        logger.warning("[request] dev mode: LLM calls are skipped")
    elif not OPENAI_API_KEY:
        logger.warning("[llm] OPENAI_API_KEY missing; summaries will be placeholders")


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "CareerDNA backend is running."


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT)
