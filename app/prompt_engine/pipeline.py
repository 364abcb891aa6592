"""Variation pipeline: runs every template transformer on one base prompt.

Steps:
  1. Validate the base prompt (InputError when missing/empty)
  2. Apply the five transformers in fixed order
  3. Score each result with the evaluator (caller keywords, no test cases)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from app.core.exceptions import InputError
from app.prompt_engine.evaluator import evaluate
from app.prompt_engine.templates import (
    EXPERT_ROLE,
    add_few_shot,
    add_system_role,
    inject_keywords,
    paraphrase_prompt,
    tighten_instructions,
)
from app.prompt_engine.types import Example, Variant, VariantType

logger = logging.getLogger(__name__)


class VariationPipeline:
    """Builds the scored variant set for a base prompt."""

    def __init__(self, role: str = EXPERT_ROLE):
        self.role = role

    def _transformers(
        self,
        keywords: Sequence[str],
        examples: Sequence[Example],
        constraints: Sequence[str],
    ) -> list[tuple[VariantType, Callable[[str], str]]]:
        return [
            (VariantType.SYSTEM_ROLE_EXPERT, lambda p: add_system_role(p, self.role)),
            (VariantType.FEW_SHOT, lambda p: add_few_shot(p, examples)),
            (VariantType.TIGHT_CONSTRAINTS, lambda p: tighten_instructions(p, constraints)),
            (VariantType.PARAPHRASE, paraphrase_prompt),
            (VariantType.KEYWORD_INJECTION, lambda p: inject_keywords(p, keywords)),
        ]

    def run(
        self,
        base_prompt: str | None,
        keywords: Sequence[str] = (),
        examples: Sequence[Example] = (),
        constraints: Sequence[str] = (),
    ) -> list[Variant]:
        if not base_prompt:
            raise InputError("basePrompt required")

        variants: list[Variant] = []
        for variant_type, transform in self._transformers(keywords, examples, constraints):
            prompt = transform(base_prompt)
            variants.append(
                Variant(
                    type=variant_type,
                    prompt=prompt,
                    evaluation=evaluate(prompt, keywords),
                )
            )

        logger.info(
            "Generated %d variants (base len=%d, keywords=%d, examples=%d, constraints=%d)",
            len(variants),
            len(base_prompt),
            len(keywords),
            len(examples),
            len(constraints),
        )
        return variants


def generate_variations(
    base_prompt: str | None,
    keywords: Sequence[str] = (),
    examples: Sequence[Example] = (),
    constraints: Sequence[str] = (),
) -> list[Variant]:
    """Convenience wrapper around ``VariationPipeline().run``."""
    return VariationPipeline().run(base_prompt, keywords, examples, constraints)
