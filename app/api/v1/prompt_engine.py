"""API endpoints for the prompt engine.

Provides:
  - POST /generate-variations: five scored variants of a base prompt
  - POST /evaluate: heuristic scores for a single prompt
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from app.core.exceptions import InputError
from app.core.metrics import VARIANTS_GENERATED
from app.prompt_engine.evaluator import evaluate
from app.prompt_engine.pipeline import VariationPipeline
from app.schemas.prompt_engine import EvaluateRequest, GenerateVariationsRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["prompt-engine"])


@router.post("/generate-variations")
async def generate_variations(body: GenerateVariationsRequest):
    """Generate role, few-shot, constraint, paraphrase and keyword variants.

    Each variant is scored against the request keywords.
    """
    pipeline = VariationPipeline()
    variants = pipeline.run(
        body.base_prompt,
        keywords=body.keywords,
        examples=[e.to_example() for e in body.examples],
        constraints=body.constraints,
    )
    for variant in variants:
        VARIANTS_GENERATED.labels(type=variant.type.value).inc()
    return {
        "basePrompt": body.base_prompt,
        "variations": [v.to_dict() for v in variants],
    }


@router.post("/evaluate")
async def evaluate_prompt(body: EvaluateRequest):
    if not body.prompt:
        raise InputError("prompt required")
    evaluation = evaluate(
        body.prompt,
        keywords=body.keywords,
        test_cases=[t.to_test_case() for t in body.test_cases],
    )
    return {"prompt": body.prompt, "evaluation": evaluation.to_dict()}
