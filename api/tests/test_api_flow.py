import re

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

import careerdna.main as m
from careerdna import deps
from careerdna.config import DATA_DIR
from careerdna.library import load_library
from careerdna.routes import summary as summary_routes
from careerdna.services.llm import ProseGenerationError

BODY = {
    "archetypes": {"Achiever": 85, "Thinker": 70, "Visionary": 55, "Connector": 20},
    "status": "undergraduate",
    "uniSubject": "Economics",
    "subdims": [{"name": "Perseverance", "score": 80}, {"name": "Attention to Detail", "score": 72}],
}


class _ReversingGenerator:
    """Echoes the prompt's strengths skeleton back in reverse order."""

    def __init__(self):
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        section = prompt.split("## Strengths\n", 1)[1].split("\n\n", 1)[0]
        bullets = [line + "Fits you." for line in section.splitlines()]
        return "## Summary\nIntro.\n\n## Strengths\n" + "\n".join(reversed(bullets)) + "\n"


class _FailingGenerator:
    def generate(self, prompt: str) -> str:
        raise ProseGenerationError("All models failed", attempts=[("gpt-4o-mini", "boom")])


@pytest.fixture
def client():
    library = load_library(DATA_DIR)
    m.app.dependency_overrides[deps.get_library] = lambda: library
    try:
        yield TestClient(m.app)
    finally:
        m.app.dependency_overrides.clear()


def _use_generator(gen) -> None:
    m.app.dependency_overrides[deps.get_prose_generator] = lambda: gen


def test_liveness_routes(client):
    assert client.get("/").text == "CareerDNA backend is running."
    assert client.get("/api/ping").json() == {"ok": True}
    assert client.get("/_scaffold/summary/health").json() == {"status": "ok", "module": "summary"}


def test_plan_endpoint(client):
    r = client.post("/api/plan", json=BODY)
    assert r.status_code == 200
    data = r.json()
    assert [a["name"] for a in data["includedArchetypes"]] == ["Achiever", "Thinker"]
    assert len(data["sections"]["strengths"]) == 5
    assert "subjects" not in data["sections"]
    reasons = {a["name"]: a["reason"] for a in data["selection"]["excluded"]}
    assert reasons["Visionary"] == "Below threshold 60%."


def test_summary_is_reordered_to_plan(client, monkeypatch):
    monkeypatch.setattr(summary_routes, "DEV_NO_LLM", False)
    monkeypatch.setattr(summary_routes, "REORDER_OUTPUT", True)
    gen = _ReversingGenerator()
    _use_generator(gen)

    r = client.post("/api/summary?debug=1", json=BODY)
    assert r.status_code == 200
    data = r.json()
    assert data["request_id"] == r.headers["X-Request-Id"]
    titles = re.findall(r"^\d+\) \*\*(.+?)\*\*", data["summary"], flags=re.M)
    assert titles == data["plan"]["sections"]["strengths"]
    assert "[META START]" in gen.prompts[0]


def test_summary_without_debug_hides_plan(client, monkeypatch):
    monkeypatch.setattr(summary_routes, "DEV_NO_LLM", False)
    _use_generator(_ReversingGenerator())
    data = client.post("/api/summary", json=BODY).json()
    assert set(data) == {"summary", "request_id"}


def test_dev_mode_skips_generator(client, monkeypatch):
    monkeypatch.setattr(summary_routes, "DEV_NO_LLM", True)
    _use_generator(_FailingGenerator())
    r = client.post("/api/summary", json=BODY)
    assert r.status_code == 200
    assert r.json()["summary"] == summary_routes.DEV_SUMMARY
    assert r.json()["plan"]["status"] == "undergraduate"


def test_generator_failure_is_502(client, monkeypatch):
    monkeypatch.setattr(summary_routes, "DEV_NO_LLM", False)
    _use_generator(_FailingGenerator())
    r = client.post("/api/summary", json=BODY)
    assert r.status_code == 502
    detail = r.json()["detail"]
    assert detail["message"] == "Failed to generate summary"
    assert detail["request_id"] == r.headers["X-Request-Id"]


@pytest.mark.parametrize(
    "patch",
    [
        {"status": "retired"},
        {"archetypes": {"Wizard": 90}},
        {"archetypes": {"Thinker": 140}},
        {"uniSubject": ""},
        {"archetypes": None},
    ],
)
def test_invalid_requests_are_400(client, patch):
    _use_generator(_FailingGenerator())
    r = client.post("/api/summary", json={**BODY, **patch})
    assert r.status_code == 400
    assert r.json()["detail"]
