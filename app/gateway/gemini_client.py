"""Google Gemini REST client (generateContent + model listing).

One outbound request per call, no retries. Failures never raise: a
non-2xx answer is forwarded as UPSTREAM_ERROR with its status and body, a
network failure, an unusable request URL or an undecodable body becomes
TRANSPORT_ERROR.

Response text is pulled from one of two known layouts (see ResponseShape);
anything else is returned as pretty-printed JSON.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from app.core.config import Settings
from app.core.exceptions import ConfigError, InputError
from app.core.metrics import UPSTREAM_CALLS
from app.gateway.types import CallStatus, ExtractedText, ModelCallResult, ResponseShape

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash-lite"

MISSING_KEY_MESSAGE = "GEMINI_API_KEY environment variable not set"
MODEL_NOT_FOUND_HINT = (
    "Model not found. Call GET /api/v1/list-models to see available models and exact model IDs."
)


# ---------------------------------------------------------------------------
# Response shape handling
# ---------------------------------------------------------------------------

_SHAPE_KEYS = (
    ("candidates", ResponseShape.CANDIDATES),
    ("output", ResponseShape.OUTPUT),
)


def classify_response(data: Any) -> ResponseShape:
    """Which known layout ``data`` follows.

    The first entry must carry a ``content`` value. An empty list or object
    still counts; it just yields no text.
    """
    if isinstance(data, dict):
        for key, shape in _SHAPE_KEYS:
            items = data.get(key)
            if not isinstance(items, list) or not items or not isinstance(items[0], dict):
                continue
            if items[0].get("content") not in (None, "", 0, False):
                return shape
    return ResponseShape.UNRECOGNIZED


def _content_text(content: Any) -> str:
    """Concatenate ``parts[*].text``; multiple content blocks are joined by a blank line."""
    blocks = content if isinstance(content, list) else [content]
    texts = []
    for block in blocks:
        parts = block.get("parts") or []
        texts.append("".join(part.get("text") or "" for part in parts))
    return "\n\n".join(texts)


def pretty_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def extract_text(data: Any) -> ExtractedText:
    shape = classify_response(data)
    if shape is ResponseShape.UNRECOGNIZED:
        return ExtractedText(shape=shape, text=pretty_json(data))

    try:
        text = _content_text(data[shape.value][0]["content"])
    except (AttributeError, TypeError):
        logger.warning("Malformed %s content in Gemini response, returning raw JSON", shape.value)
        return ExtractedText(shape=ResponseShape.UNRECOGNIZED, text=pretty_json(data))
    return ExtractedText(shape=shape, text=text)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class GeminiClient:
    """Thin async client for the Gemini v1beta REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_BASE,
        timeout: float = 60.0,
        default_model: str = DEFAULT_MODEL,
    ):
        if not api_key:
            raise ConfigError(MISSING_KEY_MESSAGE)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_model = default_model

    @classmethod
    def from_settings(cls, settings: Settings) -> GeminiClient:
        return cls(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_api_base,
            timeout=settings.gemini_timeout,
            default_model=settings.gemini_default_model,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

    def generate_url(self, model: str) -> str:
        return f"{self.base_url}/models/{model}:generateContent"

    @property
    def models_url(self) -> str:
        return f"{self.base_url}/models"

    async def test_prompt(self, prompt: str | None, model: str | None = None) -> ModelCallResult:
        """Send ``prompt`` as a single content part and extract the reply text."""
        if not prompt:
            raise InputError("prompt required")
        model = model or self.default_model
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(self.generate_url(model), json=payload, headers=self._headers())

            if not resp.is_success:
                result = self._upstream_error(resp)
                if resp.status_code == 404:
                    result.hint = MODEL_NOT_FOUND_HINT
                logger.warning("Gemini generateContent failed for model %s: HTTP %d", model, resp.status_code)
                return self._record("generate", result)

            data = resp.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.exception("Gemini generateContent transport failure for model %s", model)
            return self._record("generate", self._transport_error(e))

        extracted = extract_text(data)
        logger.info("Gemini %s answered (%s shape, %d chars)", model, extracted.shape.value, len(extracted.text))
        return self._record(
            "generate",
            ModelCallResult(model=model, extracted=extracted.text, shape=extracted.shape, raw=data),
        )

    async def list_models(self) -> ModelCallResult:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.models_url, headers={"x-goog-api-key": self.api_key})

            if not resp.is_success:
                logger.warning("Gemini list models failed: HTTP %d", resp.status_code)
                return self._record("list_models", self._upstream_error(resp))

            data = resp.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.exception("Gemini list models transport failure")
            return self._record("list_models", self._transport_error(e))

        return self._record("list_models", ModelCallResult(raw=data))

    @staticmethod
    def _upstream_error(resp: httpx.Response) -> ModelCallResult:
        return ModelCallResult(status=CallStatus.UPSTREAM_ERROR, status_code=resp.status_code, body=resp.text)

    @staticmethod
    def _transport_error(exc: Exception) -> ModelCallResult:
        return ModelCallResult(status=CallStatus.TRANSPORT_ERROR, status_code=500, error=str(exc) or type(exc).__name__)

    @staticmethod
    def _record(operation: str, result: ModelCallResult) -> ModelCallResult:
        UPSTREAM_CALLS.labels(operation=operation, outcome=result.status.value).inc()
        return result
