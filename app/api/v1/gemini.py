"""Live testing against Google Gemini.

Provides:
  - POST /gemini: send a prompt to generateContent
  - GET /list-models: models available to the configured key

Both answer with the upstream status when Gemini rejects the call and with
500 on transport failures.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.exceptions import InputError
from app.core.rate_limit import UPSTREAM_LIMIT, limiter
from app.gateway.gemini_client import GeminiClient
from app.schemas.prompt_engine import GeminiTestRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["gemini"])


@router.post("/gemini")
@limiter.limit(UPSTREAM_LIMIT)
async def test_with_gemini(
    request: Request,
    body: GeminiTestRequest,
    settings: Settings = Depends(get_settings),
):
    if not body.prompt:
        raise InputError("prompt required")

    client = GeminiClient.from_settings(settings)
    result = await client.test_prompt(body.prompt, body.model)
    return JSONResponse(status_code=result.status_code, content=result.to_response_dict())


@router.get("/list-models")
@limiter.limit(UPSTREAM_LIMIT)
async def list_models(
    request: Request,
    settings: Settings = Depends(get_settings),
):
    client = GeminiClient.from_settings(settings)
    result = await client.list_models()
    return JSONResponse(status_code=result.status_code, content=result.to_response_dict())
