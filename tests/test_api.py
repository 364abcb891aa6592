"""API tests: prompt engine, Gemini passthrough, health and metrics."""

import httpx
import pytest
from httpx import AsyncClient
from prometheus_client import REGISTRY

from app.gateway.gemini_client import MODEL_NOT_FOUND_HINT


def _make_httpx_response(status_code: int, json_data: dict | None = None, text: str = "") -> httpx.Response:
    request = httpx.Request("POST", "https://example.com")
    if json_data is not None:
        return httpx.Response(status_code, json=json_data, request=request)
    return httpx.Response(status_code, text=text, request=request)


# ==========================================================================
# Prompt engine endpoints
# ==========================================================================


@pytest.mark.asyncio
async def test_generate_variations(client: AsyncClient):
    response = await client.post(
        "/api/v1/generate-variations",
        json={
            "basePrompt": "Tell me about cats",
            "keywords": ["cats"],
            "examples": [{"input": "dogs", "output": "Loyal companions."}],
            "constraints": ["one paragraph"],
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["basePrompt"] == "Tell me about cats"
    assert [v["type"] for v in data["variations"]] == [
        "system-role:expert",
        "few-shot",
        "tight-constraints",
        "paraphrase",
        "keyword-injection",
    ]
    assert len({v["id"] for v in data["variations"]}) == 5
    few_shot = data["variations"][1]
    assert few_shot["prompt"].startswith("Example 1:\nInput: dogs\nOutput: Loyal companions.")
    assert set(few_shot["evaluation"]) == {
        "clarity",
        "specificity",
        "keywordCoverage",
        "testScore",
        "overall",
        "foundKeywords",
    }
    assert few_shot["evaluation"]["foundKeywords"] == ["cats"]


@pytest.mark.asyncio
async def test_generate_variations_minimal_body(client: AsyncClient):
    response = await client.post("/api/v1/generate-variations", json={"basePrompt": "Tell me about cats"})
    assert response.status_code == 200
    assert len(response.json()["variations"]) == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"basePrompt": ""}, {"basePrompt": None}])
async def test_generate_variations_requires_base_prompt(client: AsyncClient, body):
    response = await client.post("/api/v1/generate-variations", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "basePrompt required"}


@pytest.mark.asyncio
async def test_evaluate(client: AsyncClient):
    prompt = "Please provide output in exact JSON format, limit to 3 items."
    response = await client.post(
        "/api/v1/evaluate",
        json={"prompt": prompt, "keywords": ["JSON"], "testCases": [{"mustInclude": ["json", "items"]}]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["prompt"] == prompt
    assert data["evaluation"] == {
        "clarity": 71,
        "specificity": 100,
        "keywordCoverage": 100,
        "testScore": 100,
        "overall": 93,
        "foundKeywords": ["JSON"],
    }


@pytest.mark.asyncio
async def test_evaluate_requires_prompt(client: AsyncClient):
    response = await client.post("/api/v1/evaluate", json={"keywords": ["x"]})
    assert response.status_code == 400
    assert response.json() == {"error": "prompt required"}


@pytest.mark.asyncio
async def test_evaluate_rejects_wrong_types(client: AsyncClient):
    response = await client.post("/api/v1/evaluate", json={"prompt": "x", "keywords": "not-a-list"})
    assert response.status_code == 422


# ==========================================================================
# Gemini endpoints
# ==========================================================================


@pytest.mark.asyncio
async def test_gemini_requires_prompt_before_key(client: AsyncClient):
    response = await client.post("/api/v1/gemini", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "prompt required"}


@pytest.mark.asyncio
async def test_gemini_without_key(client: AsyncClient):
    response = await client.post("/api/v1/gemini", json={"prompt": "Hello"})
    assert response.status_code == 400
    assert response.json() == {"error": "GEMINI_API_KEY environment variable not set"}


@pytest.mark.asyncio
async def test_list_models_without_key(client: AsyncClient):
    response = await client.get("/api/v1/list-models")
    assert response.status_code == 400
    assert "GEMINI_API_KEY" in response.json()["error"]


@pytest.mark.asyncio
async def test_gemini_success(client: AsyncClient, configured_settings, mock_httpx):
    mock_httpx.post.return_value = _make_httpx_response(
        200, json_data={"candidates": [{"content": {"parts": [{"text": "Purr."}]}}]}
    )

    response = await client.post("/api/v1/gemini", json={"prompt": "Say something cat-like"})

    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "model": "gemini-2.5-flash-lite",
        "extracted": "Purr.",
        "raw": {"candidates": [{"content": {"parts": [{"text": "Purr."}]}}]},
    }
    assert mock_httpx.post.call_args[1]["headers"]["x-goog-api-key"] == configured_settings.gemini_api_key


@pytest.mark.asyncio
async def test_gemini_custom_model(client: AsyncClient, configured_settings, mock_httpx):
    output = {"output": [{"content": [{"parts": [{"text": "ok"}]}]}]}
    mock_httpx.post.return_value = _make_httpx_response(200, json_data=output)

    response = await client.post("/api/v1/gemini", json={"prompt": "Hi", "model": "gemini-2.5-pro"})

    assert response.json()["model"] == "gemini-2.5-pro"
    assert response.json()["extracted"] == "ok"
    assert "/models/gemini-2.5-pro:generateContent" in mock_httpx.post.call_args[0][0]


@pytest.mark.asyncio
async def test_gemini_model_not_found(client: AsyncClient, configured_settings, mock_httpx):
    mock_httpx.post.return_value = _make_httpx_response(404, text="not found")

    response = await client.post("/api/v1/gemini", json={"prompt": "Hi", "model": "nope"})

    assert response.status_code == 404
    assert response.json() == {"ok": False, "status": 404, "body": "not found", "hint": MODEL_NOT_FOUND_HINT}


@pytest.mark.asyncio
async def test_gemini_upstream_status_mirrored(client: AsyncClient, configured_settings, mock_httpx):
    mock_httpx.post.return_value = _make_httpx_response(429, text="quota")

    response = await client.post("/api/v1/gemini", json={"prompt": "Hi"})

    assert response.status_code == 429
    assert response.json() == {"ok": False, "status": 429, "body": "quota"}


@pytest.mark.asyncio
async def test_gemini_transport_failure(client: AsyncClient, configured_settings, mock_httpx):
    mock_httpx.post.side_effect = httpx.ConnectError("unreachable")

    response = await client.post("/api/v1/gemini", json={"prompt": "Hi"})

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "unreachable"}


@pytest.mark.asyncio
async def test_gemini_invalid_model_id(client: AsyncClient, configured_settings, mock_httpx):
    mock_httpx.post.side_effect = httpx.InvalidURL("Invalid non-printable ASCII character in URL")

    response = await client.post("/api/v1/gemini", json={"prompt": "Hi", "model": "bad\u0000model"})

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Invalid non-printable ASCII character in URL"}


@pytest.mark.asyncio
async def test_list_models(client: AsyncClient, configured_settings, mock_httpx):
    mock_httpx.get.return_value = _make_httpx_response(200, json_data={"models": []})

    response = await client.get("/api/v1/list-models")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "raw": {"models": []}}


@pytest.mark.asyncio
async def test_list_models_upstream_error(client: AsyncClient, configured_settings, mock_httpx):
    mock_httpx.get.return_value = _make_httpx_response(403, text="forbidden")

    response = await client.get("/api/v1/list-models")

    assert response.status_code == 403
    assert response.json() == {"ok": False, "status": 403, "body": "forbidden"}


# ==========================================================================
# Health & metrics
# ==========================================================================


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "gemini_configured": False}


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_metrics(client: AsyncClient):
    await client.post("/api/v1/generate-variations", json={"basePrompt": "Tell me about cats"})

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert 'prompt_variants_generated_total{type="paraphrase"}' in response.text
    assert "http_requests_total" in response.text


@pytest.mark.asyncio
async def test_generate_variations_counts_each_variant_type(client: AsyncClient):
    types = ["system-role:expert", "few-shot", "tight-constraints", "paraphrase", "keyword-injection"]
    before = {t: REGISTRY.get_sample_value("prompt_variants_generated_total", {"type": t}) or 0.0 for t in types}

    await client.post("/api/v1/generate-variations", json={"basePrompt": "Tell me about cats"})

    for t in types:
        assert REGISTRY.get_sample_value("prompt_variants_generated_total", {"type": t}) == before[t] + 1


@pytest.mark.asyncio
async def test_request_metrics_use_normalized_path(client: AsyncClient):
    labels = {"method": "GET", "path": "/exports/{file}", "status": "404"}
    before = REGISTRY.get_sample_value("http_requests_total", labels) or 0.0

    response = await client.get("/exports/missing_123.json")

    assert response.status_code == 404
    assert REGISTRY.get_sample_value("http_requests_total", labels) == before + 1
    scrape = {"method": "GET", "path": "/metrics", "status": "200"}
    assert REGISTRY.get_sample_value("http_requests_total", scrape) is None
