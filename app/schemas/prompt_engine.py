"""Pydantic schemas for the prompt engine API.

Field names follow the camelCase JSON the UI sends; snake_case names are
accepted too. Required prompts are declared optional here so a missing
value reaches the core and comes back as a 400 InputError, not a 422.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.prompt_engine.types import Example, TestCase


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Nested inputs
# ---------------------------------------------------------------------------


class ExampleIn(_CamelModel):
    input: str = ""
    output: str = ""

    def to_example(self) -> Example:
        return Example(input=self.input, output=self.output)


class TestCaseIn(_CamelModel):
    must_include: list[str] = Field(default_factory=list, alias="mustInclude")

    def to_test_case(self) -> TestCase:
        return TestCase(must_include=tuple(self.must_include))


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class GenerateVariationsRequest(_CamelModel):
    base_prompt: str | None = Field(None, alias="basePrompt")
    keywords: list[str] = Field(default_factory=list)
    examples: list[ExampleIn] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)


class EvaluateRequest(_CamelModel):
    prompt: str | None = None
    keywords: list[str] = Field(default_factory=list)
    test_cases: list[TestCaseIn] = Field(default_factory=list, alias="testCases")


class GeminiTestRequest(_CamelModel):
    prompt: str | None = None
    model: str | None = Field(None, description="Gemini model id; defaults to GEMINI_DEFAULT_MODEL")


class ExportRequest(_CamelModel):
    project_name: str = Field("prompt-pack", alias="projectName")
    base_prompt: str | None = Field(None, alias="basePrompt")
    variations: list[dict[str, Any]] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
