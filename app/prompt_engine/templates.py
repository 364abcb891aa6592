"""Template transformers: each returns one rewritten version of a prompt.

All transformers are pure. Every one except ``paraphrase`` keeps the base
prompt verbatim and only adds framing around it.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.prompt_engine.matching import replace_word
from app.prompt_engine.types import Example

EXPERT_ROLE = "You are an expert assistant with deep domain knowledge."

FEW_SHOT_INSTRUCTION = "Now, given the user input, respond concisely."
CONCISION_DIRECTIVE = "Be concise and precise."
KEYWORDS_LABEL = "Keywords to include:"

# Paraphrase truncation: longer results are cut to PARAPHRASE_KEEP chars
PARAPHRASE_MAX_LENGTH = 120
PARAPHRASE_KEEP = 110
ELLIPSIS = "..."

_PARAPHRASE_SUBSTITUTIONS = (
    ("create", "Generate"),
    ("describe", "Summarize"),
)


def add_system_role(prompt: str, role: str = EXPERT_ROLE) -> str:
    return f"System: {role}\nUser: {prompt}"


def add_few_shot(prompt: str, examples: Sequence[Example] = ()) -> str:
    """Prefix numbered input/output examples. Identity when there are none."""
    if not examples:
        return prompt
    blocks = [
        f"Example {i}:\nInput: {example.input}\nOutput: {example.output}" for i, example in enumerate(examples, 1)
    ]
    few_shot = "\n\n".join(blocks)
    return f"{few_shot}\n\n{FEW_SHOT_INSTRUCTION}\nUser: {prompt}"


def tighten_instructions(prompt: str, constraints: Sequence[str] = ()) -> str:
    joined = "; ".join(constraints) + "; " if constraints else ""
    return f"Instruction: {joined}{CONCISION_DIRECTIVE}\nUser: {prompt}"


def paraphrase_prompt(prompt: str) -> str:
    """Lossy lexical rewrite.

    Drops "please", swaps a couple of imperative verbs and truncates long
    results. No attempt is made to keep the output grammatical, and the cut
    may land mid-word.
    """
    text = replace_word(prompt, "please", "").strip()
    for word, replacement in _PARAPHRASE_SUBSTITUTIONS:
        text = replace_word(text, word, replacement)
    if len(text) > PARAPHRASE_MAX_LENGTH:
        text = text[:PARAPHRASE_KEEP] + ELLIPSIS
    return text


def inject_keywords(prompt: str, keywords: Sequence[str] = ()) -> str:
    """Append a keyword line. Identity when there are no keywords."""
    if not keywords:
        return prompt
    return f"{prompt}\n\n{KEYWORDS_LABEL} {', '.join(keywords)}."
