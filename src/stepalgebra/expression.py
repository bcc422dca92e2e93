from __future__ import annotations

import ast
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Union


class Operator(Enum):
    NONE = "none"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


class Direction(Enum):
    RIGHT = "right"
    LEFT = "left"


SUM_OPS = {Operator.ADD, Operator.SUBTRACT}
PRODUCT_OPS = {Operator.MULTIPLY, Operator.DIVIDE}
LEADING_OPS = {Operator.NONE, Operator.SUBTRACT}

Value = Union[int, str, "Expression"]


class ShapeError(ValueError):
    pass


def is_number(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_symbol(value: object) -> bool:
    return isinstance(value, str)


def is_elementary(value: object) -> bool:
    return is_number(value) or is_symbol(value)


def is_negative(step: Step) -> bool:
    return step.op is Operator.SUBTRACT


@dataclass
class Step:
    op: Operator
    value: Value
    direction: Direction = Direction.RIGHT

    def copy(self) -> Step:
        value = self.value.copy() if isinstance(self.value, Expression) else self.value
        return Step(self.op, value, self.direction)


class Expression:
    """An ordered sequence of steps read left to right.

    The first step seeds the running result; every later step combines the
    running result with its value using the step operator. A compound value
    is itself an Expression owned by its step.
    """

    def __init__(self, steps: Optional[List[Step]] = None):
        self.steps: List[Step] = steps if steps is not None else []

    @classmethod
    def build(cls, description: Sequence) -> Expression:
        if isinstance(description, Expression):
            return description
        if not isinstance(description, (list, tuple)):
            raise ShapeError(f"Expected a sequence of steps, got {description!r}")
        return cls([_build_step(item) for item in description])

    @classmethod
    def from_literal(cls, text: str) -> Expression:
        try:
            description = ast.literal_eval(text)
        except (SyntaxError, ValueError) as exc:
            raise ShapeError(f"Not a literal step description: {text!r}") from exc
        return cls.build(description)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        return self.steps == other.steps

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, index):
        return self.steps[index]

    def __repr__(self) -> str:
        return f"Expression({self.steps!r})"

    def copy(self) -> Expression:
        return Expression([step.copy() for step in self.steps])

    # classification

    def is_monomial(self) -> bool:
        if not self.steps:
            return False
        if self.steps[0].op is not Operator.NONE:
            return False
        for index, step in enumerate(self.steps):
            if not is_elementary(step.value):
                return False
            if index and step.op is not Operator.MULTIPLY:
                return False
        return True

    def is_monomial_sum(self) -> bool:
        return self._is_sum_of(_is_monomial_term)

    def is_rational(self) -> bool:
        if len(self.steps) != 2:
            return False
        top, bottom = self.steps
        if top.op is not Operator.NONE or not _is_monomial_term(top.value):
            return False
        if bottom.op is not Operator.DIVIDE or bottom.direction is not Direction.RIGHT:
            return False
        if _is_monomial_term(bottom.value):
            return True
        return isinstance(bottom.value, Expression) and bool(bottom.value.steps) and bottom.value.is_monomial_sum()

    def is_rational_sum(self) -> bool:
        return self._is_sum_of(_is_rational_term)

    def _is_sum_of(self, is_term) -> bool:
        for index, step in enumerate(self.steps):
            if index == 0:
                if step.op not in LEADING_OPS:
                    return False
            elif step.op not in SUM_OPS or step.direction is not Direction.RIGHT:
                return False
            if not is_term(step.value):
                return False
        return True

    # structural passes

    def flatten(self) -> Expression:
        for step in self.steps:
            if isinstance(step.value, Expression):
                step.value.flatten()
                if _wraps_single_value(step.value):
                    step.value = step.value.steps[0].value
        if _wraps_single_value(self) and isinstance(self.steps[0].value, Expression):
            self.steps = self.steps[0].value.steps
        return self

    def similar(self, other: Value) -> bool:
        from .simplify import similar

        return similar(self, other)

    # rewrite passes

    def normalize_directions(self) -> Expression:
        from .directions import normalize_directions

        return normalize_directions(self)

    def standardise_linear(self, unknown: str = "x") -> Expression:
        from .directions import standardise_linear

        return standardise_linear(self, unknown)

    def expand(self) -> Expression:
        from .expansion import expand

        return expand(self)

    def expand_to_rational_sum(self) -> Expression:
        from .expansion import expand_to_rational_sum

        return expand_to_rational_sum(self)

    def simplify(self) -> Expression:
        from .simplify import simplify

        return simplify(self)

    def simplify_monomial(self) -> Expression:
        from .simplify import simplify_monomial

        return simplify_monomial(self)

    def simplify_all_monomials(self) -> Expression:
        from .simplify import simplify_all_monomials

        return simplify_all_monomials(self)

    def simplify_all_sums(self) -> Expression:
        from .simplify import simplify_all_sums

        return simplify_all_sums(self)

    def tidy(self) -> Expression:
        from .simplify import tidy

        return tidy(self)

    def multiply_rational_sums(self, other: Expression) -> Expression:
        from .rational import multiply_rational_sums

        return multiply_rational_sums(self, other)

    def rsum_to_rational(self) -> Expression:
        from .rational import rsum_to_rational

        return rsum_to_rational(self)

    def rational_to_rsum(self) -> Expression:
        from .rational import rational_to_rsum

        return rational_to_rsum(self)

    def flip_signs(self) -> Expression:
        from .rational import flip_signs

        return flip_signs(self)

    def expand_and_simplify(self) -> Expression:
        from .pipeline import expand_and_simplify

        return expand_and_simplify(self)

    def render(self) -> str:
        from .latex import render

        return render(self)


def _is_monomial_term(value: Value) -> bool:
    return is_elementary(value) or (isinstance(value, Expression) and value.is_monomial())


def _is_rational_term(value: Value) -> bool:
    return _is_monomial_term(value) or (isinstance(value, Expression) and value.is_rational())


def _wraps_single_value(expr: Expression) -> bool:
    return len(expr.steps) == 1 and expr.steps[0].op is Operator.NONE


def monomial(*factors: Value) -> Expression:
    if not factors:
        raise ShapeError("A monomial needs at least one factor")
    steps = [Step(Operator.NONE, factors[0])]
    steps.extend(Step(Operator.MULTIPLY, factor) for factor in factors[1:])
    return Expression(steps)


def as_monomial(value: Value) -> Expression:
    if isinstance(value, Expression):
        if not value.is_monomial():
            raise ShapeError(f"Not a monomial: {value!r}")
        return value
    return monomial(value)


def factors_of(value: Value) -> List[Value]:
    return [step.value for step in as_monomial(value).steps]


def _to_operator(op: object) -> Operator:
    if op is None:
        return Operator.NONE
    if isinstance(op, Operator):
        return op
    try:
        return Operator(op)
    except ValueError:
        raise ShapeError(f"Unknown operator: {op!r}") from None


def _to_direction(direction: object) -> Direction:
    if isinstance(direction, Direction):
        return direction
    try:
        return Direction(direction)
    except ValueError:
        raise ShapeError(f"Unknown direction: {direction!r}") from None


def _build_value(value: object) -> Value:
    if isinstance(value, Expression):
        return value.copy()
    if is_elementary(value):
        return value
    if isinstance(value, (list, tuple)):
        return Expression.build(value)
    raise ShapeError(f"Step value must be an int, a str or an expression, got {value!r}")


def _build_step(item: object) -> Step:
    if isinstance(item, Step):
        return item.copy()
    if not isinstance(item, (list, tuple)):
        raise ShapeError(f"Step description must be a sequence, got {item!r}")
    if len(item) == 2:
        op, value = item
        direction: object = Direction.RIGHT
    elif len(item) == 3:
        if isinstance(item[1], Direction):
            op, direction, value = item
        else:
            op, value, direction = item
    else:
        raise ShapeError(f"Step description must have 2 or 3 items, got {item!r}")
    return Step(_to_operator(op), _build_value(value), _to_direction(direction))
