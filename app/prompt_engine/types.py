"""Core types for the prompt engine.

All types are immutable value objects. ``to_dict`` methods produce the
camelCase JSON shape used by the HTTP API and the export artifact.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class VariantType(str, Enum):
    """Strategy tag of a generated variant. Declaration order is output order."""

    SYSTEM_ROLE_EXPERT = "system-role:expert"
    FEW_SHOT = "few-shot"
    TIGHT_CONSTRAINTS = "tight-constraints"
    PARAPHRASE = "paraphrase"
    KEYWORD_INJECTION = "keyword-injection"


@dataclass(frozen=True)
class Example:
    """One input/output pair for a few-shot block."""

    input: str = ""
    output: str = ""


@dataclass(frozen=True)
class TestCase:
    """Passes when every term in ``must_include`` is a whole word of the prompt."""

    __test__ = False  # not a pytest test class

    must_include: tuple[str, ...] = ()


@dataclass(frozen=True)
class Evaluation:
    clarity: int
    specificity: int
    keyword_coverage: int
    test_score: int
    overall: int
    found_keywords: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "clarity": self.clarity,
            "specificity": self.specificity,
            "keywordCoverage": self.keyword_coverage,
            "testScore": self.test_score,
            "overall": self.overall,
            "foundKeywords": list(self.found_keywords),
        }


def new_variant_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Variant:
    """One rewritten prompt produced by a single strategy, with its scores."""

    type: VariantType
    prompt: str
    evaluation: Evaluation
    id: str = field(default_factory=new_variant_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "prompt": self.prompt,
            "evaluation": self.evaluation.to_dict(),
        }


@dataclass(frozen=True)
class ExportRecord:
    """Payload written by the export writer.

    ``variations`` are stored as received from the caller (serialized
    variant mappings), so a record round-trips through JSON unchanged.
    """

    base_prompt: str | None
    variations: list[dict[str, Any]]
    metadata: dict[str, Any]
    exported_at: datetime

    @property
    def exported_at_iso(self) -> str:
        """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
        return self.exported_at.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": self.metadata,
            "basePrompt": self.base_prompt,
            "variations": self.variations,
            "exportedAt": self.exported_at_iso,
        }
