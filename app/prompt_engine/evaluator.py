"""Heuristic prompt scoring.

Computes four independent 0–100 sub-scores and their mean:

  - clarity: penalizes distance from a target length
      clarity = clamp(round(100 - |TARGET_LENGTH - len| * CLARITY_SLOPE), CLARITY_FLOOR, 100)
  - specificity: presence of specificity-signaling terms
      specificity = min(100, matches * SPECIFICITY_PER_TERM + SPECIFICITY_BASE)
  - keyword coverage: % of caller keywords present as whole words
  - test score: % of test cases whose required terms are all present
  - overall: round(mean of the four)

The constants are hand-tuned proxies, not derived from any corpus.
All rounding is half-up.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from app.prompt_engine.matching import contains_word, find_words
from app.prompt_engine.types import Evaluation, TestCase

logger = logging.getLogger(__name__)

TARGET_LENGTH = 120
CLARITY_SLOPE = 0.5
CLARITY_FLOOR = 10

SPECIFICITY_TERMS = ("exact", "concise", "step-by-step", "numbered", "limit", "only", "format", "json")
SPECIFICITY_PER_TERM = 25
SPECIFICITY_BASE = 20

MAX_SCORE = 100


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _percentage(part: int, whole: int) -> int:
    if not whole:
        return 0
    return round_half_up(part / whole * 100)


def score_clarity(prompt: str) -> int:
    raw = round_half_up(MAX_SCORE - abs(TARGET_LENGTH - len(prompt)) * CLARITY_SLOPE)
    return max(CLARITY_FLOOR, min(MAX_SCORE, raw))


def score_specificity(prompt: str) -> int:
    matches = len(find_words(prompt, SPECIFICITY_TERMS))
    return min(MAX_SCORE, matches * SPECIFICITY_PER_TERM + SPECIFICITY_BASE)


def score_keyword_coverage(found: Sequence[str], keywords: Sequence[str]) -> int:
    return _percentage(len(found), len(keywords))


def case_passes(prompt: str, case: TestCase) -> bool:
    return all(contains_word(prompt, term) for term in case.must_include)


def score_test_cases(prompt: str, test_cases: Sequence[TestCase]) -> int:
    passed = sum(1 for case in test_cases if case_passes(prompt, case))
    return _percentage(passed, len(test_cases))


def evaluate(
    prompt: str,
    keywords: Sequence[str] = (),
    test_cases: Sequence[TestCase] = (),
) -> Evaluation:
    """Score a prompt. Deterministic; an empty prompt is valid input."""
    found_keywords = find_words(prompt, keywords)

    clarity = score_clarity(prompt)
    specificity = score_specificity(prompt)
    keyword_coverage = score_keyword_coverage(found_keywords, keywords)
    test_score = score_test_cases(prompt, test_cases)
    overall = round_half_up((clarity + specificity + keyword_coverage + test_score) / 4)

    logger.debug(
        "Evaluated prompt (len=%d): clarity=%d specificity=%d coverage=%d tests=%d overall=%d",
        len(prompt),
        clarity,
        specificity,
        keyword_coverage,
        test_score,
        overall,
    )

    return Evaluation(
        clarity=clarity,
        specificity=specificity,
        keyword_coverage=keyword_coverage,
        test_score=test_score,
        overall=overall,
        found_keywords=tuple(found_keywords),
    )
