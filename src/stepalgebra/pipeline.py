from __future__ import annotations

import logging
from typing import List, Tuple

from .directions import normalize_directions
from .expansion import expand, expand_to_rational_sum
from .expression import Expression, Operator
from .simplify import simplify, tidy

logger = logging.getLogger(__name__)

Stage = Tuple[str, Expression]


def contains_divide(expr: Expression) -> bool:
    for step in expr.steps:
        if step.op is Operator.DIVIDE:
            return True
        if isinstance(step.value, Expression) and contains_divide(step.value):
            return True
    return False


def _expand(expr: Expression) -> Expression:
    if contains_divide(expr):
        return expand_to_rational_sum(expr)
    return expand(expr)


def expand_and_simplify(expr: Expression) -> Expression:
    normalize_directions(expr)
    _expand(expr)
    simplify(expr)
    return tidy(expr)


def worked_stages(expr: Expression) -> List[Stage]:
    """Labelled snapshots of expand_and_simplify, skipping passes that changed nothing."""
    work = expr.copy()
    passes = [
        ("directions normalized", normalize_directions),
        ("expanded", _expand),
        ("like terms collected", simplify),
        ("tidied", tidy),
    ]
    stages: List[Stage] = [("given", work.copy())]
    for label, apply in passes:
        apply(work)
        if work != stages[-1][1]:
            stages.append((label, work.copy()))
    logger.debug("recorded %d stages", len(stages))
    return stages
