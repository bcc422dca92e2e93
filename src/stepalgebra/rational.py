from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .expression import (
    Expression,
    Operator,
    ShapeError,
    Step,
    Value,
    as_monomial,
    factors_of,
    is_elementary,
    is_negative,
    monomial,
)

logger = logging.getLogger(__name__)

UNIT = 1


def _is_unit(mono: Expression) -> bool:
    return len(mono.steps) == 1 and mono.steps[0].value == UNIT


def _leading(steps: List[Step]) -> List[Step]:
    if steps and steps[0].op is Operator.ADD:
        steps[0].op = Operator.NONE
    return steps


def _signed(negative: bool, first: bool) -> Operator:
    if negative:
        return Operator.SUBTRACT
    return Operator.NONE if first else Operator.ADD


def flip_step_signs(steps: List[Step]) -> List[Step]:
    for index, step in enumerate(steps):
        if index == 0:
            step.op = Operator.NONE if step.op is Operator.SUBTRACT else Operator.SUBTRACT
        elif step.op is Operator.ADD:
            step.op = Operator.SUBTRACT
        elif step.op is Operator.SUBTRACT:
            step.op = Operator.ADD
    return steps


def flip_signs(expr: Expression) -> Expression:
    flip_step_signs(expr.steps)
    return expr


def multiply_monomials(left: Value, right: Value) -> Expression:
    """Product of two monomials as a new monomial; a unit side is dropped."""
    left_mono, right_mono = as_monomial(left), as_monomial(right)
    if _is_unit(left_mono):
        return right_mono.copy()
    if _is_unit(right_mono):
        return left_mono.copy()
    return monomial(*factors_of(left_mono), *factors_of(right_mono))


def as_monomial_sum(value: Value) -> Expression:
    if is_elementary(value):
        return Expression([Step(Operator.NONE, monomial(value))])
    if isinstance(value, Expression):
        if value.is_monomial():
            return Expression([Step(Operator.NONE, value.copy())])
        if value.steps and value.is_monomial_sum():
            return Expression([Step(step.op, as_monomial(step.value).copy()) for step in value.steps])
    raise ShapeError(f"Not a monomial sum: {value!r}")


def multiply_monomial_sums(left: Value, right: Value) -> Expression:
    left_sum, right_sum = as_monomial_sum(left), as_monomial_sum(right)
    steps: List[Step] = []
    for outer in right_sum.steps:
        for inner in left_sum.steps:
            negative = is_negative(inner) != is_negative(outer)
            steps.append(Step(_signed(negative, not steps), multiply_monomials(inner.value, outer.value)))
    return Expression(steps)


def add_monomial_sums(left: Value, right: Value) -> Expression:
    steps = as_monomial_sum(left).steps
    for index, step in enumerate(as_monomial_sum(right).steps):
        if index == 0 and step.op is Operator.NONE:
            step.op = Operator.ADD
        steps.append(step)
    return Expression(steps)


def unit_sum() -> Expression:
    return Expression([Step(Operator.NONE, monomial(UNIT))])


def split_term(value: Value) -> Tuple[Expression, Expression]:
    """Numerator monomial and denominator monomial sum of a rational sum term."""
    if isinstance(value, Expression) and value.is_rational():
        top, bottom = value.steps
        return as_monomial(top.value).copy(), as_monomial_sum(bottom.value)
    return as_monomial(value).copy(), unit_sum()


def rational(numerator: Value, denominator: Value) -> Expression:
    return Expression([Step(Operator.NONE, numerator), Step(Operator.DIVIDE, denominator)])


def _require_rational_sum(expr: Expression, name: str) -> None:
    if not expr.is_rational_sum():
        raise ShapeError(f"{name} needs a rational sum, got {expr!r}")


def multiply_rational_sums(left: Expression, right: Expression) -> Expression:
    _require_rational_sum(left, "multiply_rational_sums")
    _require_rational_sum(right, "multiply_rational_sums")
    steps: List[Step] = []
    for outer in right.steps:
        right_top, right_bottom = split_term(outer.value)
        for inner in left.steps:
            left_top, left_bottom = split_term(inner.value)
            value = rational(
                multiply_monomials(left_top, right_top),
                multiply_monomial_sums(left_bottom, right_bottom),
            )
            negative = is_negative(inner) != is_negative(outer)
            steps.append(Step(Operator.SUBTRACT if negative else Operator.ADD, value))
    left.steps = _leading(steps)
    logger.debug("cross multiplied into %d rational terms", len(left.steps))
    return left


def rsum_to_rational(expr: Expression) -> Expression:
    if not expr.steps:
        raise ShapeError("Cannot fold an empty rational sum")
    _require_rational_sum(expr, "rsum_to_rational")
    numerator: Optional[Expression] = None
    denominator = unit_sum()
    for step in expr.steps:
        top, bottom = split_term(step.value)
        term = Expression([Step(_signed(is_negative(step), True), top)])
        if numerator is None:
            numerator, denominator = term, bottom
            continue
        numerator = add_monomial_sums(
            multiply_monomial_sums(numerator, bottom),
            multiply_monomial_sums(term, denominator),
        )
        denominator = multiply_monomial_sums(denominator, bottom)
    expr.steps = rational(numerator, denominator).steps
    logger.debug("folded into %d numerator terms over %d", len(numerator.steps), len(denominator.steps))
    return expr


def _require_fraction(expr: Expression, name: str) -> None:
    ops = [step.op for step in expr.steps]
    if ops != [Operator.NONE, Operator.DIVIDE]:
        raise ShapeError(f"{name} needs a single fraction, got {expr!r}")


def rational_to_rsum(expr: Expression) -> Expression:
    _require_fraction(expr, "rational_to_rsum")
    top, bottom = expr.steps
    if isinstance(top.value, Expression) and not top.value.is_monomial():
        if not top.value.steps or not top.value.is_monomial_sum():
            raise ShapeError(f"Numerator is not a monomial sum: {top.value!r}")
        terms = top.value.steps
    else:
        terms = [top]
    denominator = bottom.value
    expr.steps = [
        Step(term.op, rational(term.value, denominator.copy() if isinstance(denominator, Expression) else denominator))
        for term in terms
    ]
    return expr


def invert(expr: Expression) -> Expression:
    _require_fraction(expr, "invert")
    top, bottom = expr.steps
    top.value, bottom.value = bottom.value, top.value
    return expr
