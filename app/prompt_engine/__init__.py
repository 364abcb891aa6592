"""Prompt engine: generates and scores prompt variants.

Pipeline:
  1. Template transformers (role, few-shot, constraints, paraphrase, keywords)
  2. Heuristic evaluator (clarity, specificity, keyword coverage, test cases)
  3. Variation pipeline (runs 1 then 2 on one base prompt)
"""
