from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

from .expression import (
    Expression,
    Operator,
    ShapeError,
    Step,
    Value,
    _wraps_single_value,
    factors_of,
    is_elementary,
    is_number,
    is_symbol,
    monomial,
)
from .rational import UNIT, rational, split_term

logger = logging.getLogger(__name__)


def _out_of_order(left: Value, right: Value) -> bool:
    if is_number(right):
        return not is_number(left)
    return is_symbol(left) and left > right


def simplify_monomial(expr: Expression) -> Expression:
    """Fold the numeric factors into one leading coefficient and sort the rest."""
    if not expr.is_monomial():
        raise ShapeError(f"Not a monomial: {expr!r}")
    values = factors_of(expr)
    numbers = [value for value in values if is_number(value)]
    factors = [value for value in values if not is_number(value)]
    if numbers:
        factors.insert(0, math.prod(numbers))
    expr.steps = monomial(*factors).steps
    while True:
        before = expr.copy()
        for left, right in zip(expr.steps, expr.steps[1:]):
            if _out_of_order(left.value, right.value):
                left.value, right.value = right.value, left.value
        if expr == before:
            return expr


def _canonical(value: Value) -> Optional[Tuple[int, List[str]]]:
    if is_elementary(value):
        mono = monomial(value)
    elif isinstance(value, Expression) and value.is_monomial():
        mono = simplify_monomial(value.copy())
    else:
        return None
    values = factors_of(mono)
    if is_number(values[0]):
        return values[0], values[1:]
    return UNIT, values


def similar(left: Value, right: Value) -> bool:
    left_form, right_form = _canonical(left), _canonical(right)
    if left_form is None or right_form is None:
        return False
    return left_form[1] == right_form[1]


def _signed_coefficient(step: Step, coefficient: int) -> int:
    return -coefficient if step.op is Operator.SUBTRACT else coefficient


def _emit(totals: List[Tuple[int, Expression]]) -> List[Step]:
    steps: List[Step] = []
    for total, value in totals:
        if not steps:
            steps.append(Step(Operator.NONE, value))
        elif total < 0:
            steps.append(Step(Operator.SUBTRACT, value))
        else:
            steps.append(Step(Operator.ADD, value))
    return steps or [Step(Operator.NONE, 0)]


def _collect_monomials(steps: List[Step]) -> List[Step]:
    pending = list(steps)
    totals: List[Tuple[int, Expression]] = []
    while pending:
        head = pending.pop(0)
        group = [head] + [step for step in pending if similar(head.value, step.value)]
        pending = [step for step in pending if not similar(head.value, step.value)]
        total = sum(_signed_coefficient(step, _canonical(step.value)[0]) for step in group)
        if total:
            symbols = _canonical(head.value)[1]
            coefficient = total if not totals else abs(total)
            totals.append((total, monomial(coefficient, *symbols)))
    return _emit(totals)


def _rational_key(step: Step) -> Tuple[Expression, Expression]:
    top, bottom = split_term(step.value)
    return top, simplify(bottom)


def _collect_rationals(steps: List[Step]) -> List[Step]:
    pending = [(step, _rational_key(step)) for step in steps]
    totals: List[Tuple[int, Expression]] = []
    while pending:
        head, (top, bottom) = pending.pop(0)

        def matches(key: Tuple[Expression, Expression]) -> bool:
            return similar(top, key[0]) and bottom == key[1]

        group = [(head, top)] + [(step, key[0]) for step, key in pending if matches(key)]
        pending = [(step, key) for step, key in pending if not matches(key)]
        total = sum(_signed_coefficient(step, _canonical(numerator)[0]) for step, numerator in group)
        if total:
            coefficient = total if not totals else abs(total)
            numerator = monomial(coefficient, *_canonical(top)[1])
            totals.append((total, rational(numerator, bottom)))
    return _emit(totals)


def simplify(expr: Expression) -> Expression:
    """Collect like terms of a monomial sum or a rational sum."""
    if not expr.steps:
        raise ShapeError("Cannot simplify an empty expression")
    if expr.is_monomial_sum():
        expr.steps = _collect_monomials(expr.steps)
    elif expr.is_rational_sum():
        expr.steps = _collect_rationals(expr.steps)
    else:
        raise ShapeError(f"Not a monomial sum or a rational sum: {expr!r}")
    logger.debug("collected into %d terms", len(expr.steps))
    return expr


def simplify_all_monomials(expr: Expression) -> Expression:
    if expr.is_monomial():
        return simplify_monomial(expr)
    for step in expr.steps:
        if isinstance(step.value, Expression):
            simplify_all_monomials(step.value)
    return expr


def simplify_all_sums(expr: Expression) -> Expression:
    if expr.steps and expr.is_monomial_sum():
        return simplify(expr)
    for step in expr.steps:
        if isinstance(step.value, Expression):
            simplify_all_sums(step.value)
    return expr


NEGATED = {
    Operator.NONE: Operator.SUBTRACT,
    Operator.ADD: Operator.SUBTRACT,
    Operator.SUBTRACT: Operator.ADD,
}


def _has_negative_unit(expr: Expression) -> bool:
    return expr.is_monomial() and len(expr.steps) > 1 and expr.steps[0].value == -UNIT


def tidy(expr: Expression) -> Expression:
    """Drop unit coefficients, unit denominators and single step wrappers.

    A leading -1 on a summed monomial moves onto the step's sign.
    """
    for step in expr.steps:
        if isinstance(step.value, Expression):
            tidy(step.value)
            if step.op in NEGATED and _has_negative_unit(step.value):
                step.value.steps = step.value.steps[1:]
                step.value.steps[0].op = Operator.NONE
                step.op = NEGATED[step.op]
            if _wraps_single_value(step.value):
                step.value = step.value.steps[0].value
    if expr.is_monomial() and len(expr.steps) > 1 and expr.steps[0].value == UNIT:
        expr.steps = expr.steps[1:]
        expr.steps[0].op = Operator.NONE
    last = expr.steps[-1] if len(expr.steps) > 1 else None
    if last is not None and last.op is Operator.DIVIDE and last.value == UNIT:
        expr.steps.pop()
    if _wraps_single_value(expr) and isinstance(expr.steps[0].value, Expression):
        expr.steps = expr.steps[0].value.steps
    return expr
