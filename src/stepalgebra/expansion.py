from __future__ import annotations

import logging
from typing import List

from .directions import normalize_directions
from .expression import Expression, Operator, ShapeError, Step, Value, factors_of, is_negative, monomial
from .rational import (
    flip_step_signs,
    invert,
    multiply_rational_sums,
    rational,
    rational_to_rsum,
    rsum_to_rational,
    split_term,
)

logger = logging.getLogger(__name__)


def _splice(terms: List[Step], inner: List[Step]) -> None:
    for step in inner:
        if terms and step.op is Operator.NONE:
            step.op = Operator.ADD
        terms.append(step)


def _leading(terms: List[Step]) -> List[Step]:
    if terms and terms[0].op is Operator.ADD:
        terms[0].op = Operator.NONE
    return terms


def _with_factor(value: Value, factor: Value) -> Expression:
    if isinstance(value, Expression):
        value.steps.append(Step(Operator.MULTIPLY, factor))
        return value
    return monomial(value, factor)


def _distribute(terms: List[Step], multiplier: List[Step]) -> List[Step]:
    product: List[Step] = []
    for outer in multiplier:
        for inner in terms:
            negative = is_negative(inner) != is_negative(outer)
            value = monomial(*factors_of(inner.value), *factors_of(outer.value))
            product.append(Step(Operator.SUBTRACT if negative else Operator.ADD, value))
    return product


def _expand_steps(steps: List[Step]) -> List[Step]:
    terms: List[Step] = []
    for step in steps:
        if step.op is Operator.DIVIDE:
            raise ShapeError("expand cannot distribute a divide step, use expand_to_rational_sum")
        if step.op is Operator.MULTIPLY:
            if isinstance(step.value, Expression):
                terms = _distribute(terms, _expand_steps(step.value.steps))
            else:
                for term in terms:
                    term.value = _with_factor(term.value, step.value)
            continue
        if isinstance(step.value, Expression):
            inner = _expand_steps(step.value.steps)
            if step.op is Operator.SUBTRACT:
                flip_step_signs(inner)
        else:
            inner = [Step(step.op, step.value)]
        _splice(terms, inner)
    return _leading(terms)


def expand(expr: Expression) -> Expression:
    """Distribute every product over its sums, leaving a flat monomial sum."""
    if not expr.steps:
        raise ShapeError("Cannot expand an empty expression")
    normalize_directions(expr)
    expr.steps = _expand_steps(expr.steps)
    logger.debug("expanded into %d terms", len(expr.steps))
    return expr


def _as_rational(value: Value) -> Expression:
    return rational(*split_term(value))


def _rational_operand(value: Value) -> List[Step]:
    if isinstance(value, Expression):
        return _rational_steps(value.steps)
    return [Step(Operator.NONE, _as_rational(value))]


def _cross(terms: List[Step], multiplier: List[Step]) -> List[Step]:
    return multiply_rational_sums(Expression(terms), Expression(multiplier)).steps


def _rational_steps(steps: List[Step]) -> List[Step]:
    terms: List[Step] = []
    for step in steps:
        if step.op is Operator.MULTIPLY:
            terms = _cross(terms, _rational_operand(step.value))
            continue
        if step.op is Operator.DIVIDE:
            # invert and multiply
            divisor = Expression(_rational_operand(step.value))
            rational_to_rsum(invert(rsum_to_rational(divisor)))
            terms = _cross(terms, divisor.steps)
            continue
        if isinstance(step.value, Expression):
            inner = _rational_steps(step.value.steps)
            if step.op is Operator.SUBTRACT:
                flip_step_signs(inner)
        else:
            inner = [Step(step.op, _as_rational(step.value))]
        _splice(terms, inner)
    return _leading(terms)


def expand_to_rational_sum(expr: Expression) -> Expression:
    if not expr.steps:
        raise ShapeError("Cannot expand an empty expression")
    normalize_directions(expr)
    expr.steps = _rational_steps(expr.steps)
    logger.debug("expanded into %d rational terms", len(expr.steps))
    return expr
