from __future__ import annotations

from typing import List, Tuple

from .directions import reading_order
from .expression import PRODUCT_OPS, Expression, Operator, ShapeError, Step, Value

LEFT_BRACKET = r"\left("
RIGHT_BRACKET = r"\right)"
TIMES = r"\times"


def _bracket(text: str) -> str:
    return f"{LEFT_BRACKET}{text}{RIGHT_BRACKET}"


def _is_exposed_sum(value: Value) -> bool:
    return isinstance(value, Expression) and len(value.steps) > 1 and value.steps[-1].op not in PRODUCT_OPS


def _operand(value: Value) -> Tuple[str, bool]:
    if isinstance(value, Expression):
        return _render_steps(value.steps), _is_exposed_sum(value)
    return str(value), False


def _guarded(text: str, exposed: bool) -> str:
    if exposed or text.startswith("-"):
        return _bracket(text)
    return text


def _render_steps(steps: List[Step]) -> str:
    text = ""
    exposed = False
    for index, step in enumerate(steps):
        operand, operand_exposed = _operand(step.value)
        if index == 0:
            if step.op is Operator.SUBTRACT:
                text = "-" + _guarded(operand, operand_exposed)
            else:
                text, exposed = operand, operand_exposed
        elif step.op is Operator.ADD:
            text += "+" + _guarded(operand, operand_exposed)
            exposed = True
        elif step.op is Operator.SUBTRACT:
            text += "-" + _guarded(operand, operand_exposed)
            exposed = True
        elif step.op is Operator.MULTIPLY:
            if exposed:
                text = _bracket(text)
            operand = _guarded(operand, operand_exposed)
            if text[-1:].isdigit() and operand[:1].isdigit():
                operand = TIMES + operand
            text += operand
            exposed = False
        elif step.op is Operator.DIVIDE:
            text = rf"\frac{{{text}}}{{{operand}}}"
            exposed = False
        else:
            raise ShapeError(f"Operator {step.op.name} can only open an expression")
    return text


def render(expr: Expression) -> str:
    """LaTeX for the expression with only the brackets precedence needs."""
    work = expr.copy()
    reading_order(work)
    work.flatten()
    return _render_steps(work.steps)
