"""
First-successful-rule evaluator for the extraction selector cascades.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

RuleT = TypeVar("RuleT")
ResultT = TypeVar("ResultT")


def first_match(
    rules: Iterable[RuleT],
    evaluate: Callable[[RuleT], ResultT | None],
) -> ResultT | None:
    """
    Return the first non-None `evaluate(rule)` result in rule order.

    Evaluators report a miss by returning None; they are not expected to raise.
    """

    for rule in rules:
        result = evaluate(rule)
        if result is not None:
            return result
    return None
