from __future__ import annotations

import logging
from typing import List, Optional

from .expression import Direction, Expression, Operator, ShapeError, Step, Value, is_number

logger = logging.getLogger(__name__)

COMMUTATIVE_OPS = {Operator.ADD, Operator.MULTIPLY}


def _carried_value(steps: List[Step]) -> Value:
    if len(steps) == 1 and steps[0].op is Operator.NONE:
        return steps[0].value
    return Expression(steps)


def _fold_left_steps(expr: Expression, reorder_commutative: bool) -> None:
    steps: List[Step] = []
    for step in expr.steps:
        if isinstance(step.value, Expression):
            _fold_left_steps(step.value, reorder_commutative)
        flip_only = step.op in COMMUTATIVE_OPS and not reorder_commutative
        if step.direction is Direction.RIGHT or not steps or flip_only:
            step.direction = Direction.RIGHT
            steps.append(step)
            continue
        # value OP acc: the value becomes the new seed
        steps = [Step(Operator.NONE, step.value), Step(step.op, _carried_value(steps))]
    expr.steps = steps


def normalize_directions(expr: Expression) -> Expression:
    _fold_left_steps(expr, reorder_commutative=False)
    return expr


def reading_order(expr: Expression) -> Expression:
    """Like normalize_directions, but left add and multiply steps also move their value in front."""
    _fold_left_steps(expr, reorder_commutative=True)
    return expr


def contains(value: Value, unknown: str) -> bool:
    if isinstance(value, Expression):
        return any(contains(step.value, unknown) for step in value.steps)
    return value == unknown


def _find_unknown(steps: List[Step], unknown: str) -> Optional[int]:
    for index, step in enumerate(steps):
        if contains(step.value, unknown):
            return index
    return None


def _standardised_steps(steps: List[Step], unknown: str) -> List[Step]:
    index = _find_unknown(steps, unknown)
    if index is None:
        raise ShapeError(f"{unknown!r} does not occur in the expression")
    holder = steps[index]
    if isinstance(holder.value, Expression):
        result = _standardised_steps(holder.value.steps, unknown)
    else:
        result = [Step(Operator.NONE, holder.value)]
    if index:
        flipped = Direction.RIGHT if holder.direction is Direction.LEFT else Direction.LEFT
        result.append(Step(holder.op, _carried_value(steps[:index]), flipped))
    for step in steps[index + 1 :]:
        if step.op is Operator.MULTIPLY and is_number(step.value):
            step.direction = Direction.LEFT
        result.append(step)
    return result


def standardise_linear(expr: Expression, unknown: str = "x") -> Expression:
    expr.steps = _standardised_steps(expr.steps, unknown)
    logger.debug("standardised around %r into %d steps", unknown, len(expr.steps))
    return expr
