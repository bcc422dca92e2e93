import pytest
from hypothesis import given, settings
from strategies import everything

from stepalgebra import Direction, Expression, Operator, ShapeError, Step, as_monomial, is_elementary, monomial


def _nested_ids(expr):
    ids = []
    for step in expr:
        ids.append(id(step))
        if isinstance(step.value, Expression):
            ids.append(id(step.value))
            ids.extend(_nested_ids(step.value))
    return ids


def test_build_accepts_every_step_form():
    expr = Expression.build(
        [
            (None, 4),
            ("add", "x", "left"),
            (Operator.SUBTRACT, Direction.LEFT, 2),
            (Operator.MULTIPLY, [(None, "y"), ("add", 1)]),
        ]
    )
    assert [step.op for step in expr] == [Operator.NONE, Operator.ADD, Operator.SUBTRACT, Operator.MULTIPLY]
    assert [step.direction for step in expr] == [Direction.RIGHT, Direction.LEFT, Direction.LEFT, Direction.RIGHT]
    assert expr[3].value == Expression([Step(Operator.NONE, "y"), Step(Operator.ADD, 1)])


@pytest.mark.parametrize(
    "description",
    [
        "x",
        [(None,)],
        [("power", 2)],
        [(None, 1.5)],
        [(None, True)],
        [(None, 2), ("add", 3, "up")],
    ],
)
def test_build_rejects_malformed_descriptions(description):
    with pytest.raises(ShapeError):
        Expression.build(description)


def test_build_copies_embedded_nodes():
    shared = Expression.build([(None, "x"), ("add", 1)])
    step = Step(Operator.ADD, "y")
    expr = Expression.build([(None, shared), ("multiply", shared), step, step])
    assert expr[0].value == expr[1].value == shared
    assert expr[0].value is not expr[1].value
    assert expr[0].value is not shared
    assert expr[2] == expr[3] == step
    assert expr[2] is not expr[3]
    expr.expand()
    assert shared == Expression.build([(None, "x"), ("add", 1)])


def test_from_literal_reads_python_literals():
    expr = Expression.from_literal("[(None, 'x'), ('subtract', 5, 'left')]")
    assert expr == Expression([Step(Operator.NONE, "x"), Step(Operator.SUBTRACT, 5, Direction.LEFT)])


@pytest.mark.parametrize("text", ["x + 1", "[(None, 'x'),", "__import__('os')"])
def test_from_literal_rejects_code(text):
    with pytest.raises(ShapeError):
        Expression.from_literal(text)


def test_is_elementary():
    assert is_elementary(3)
    assert is_elementary("x")
    assert not is_elementary(True)
    assert not is_elementary(Expression())


def test_monomial_classification(build, mono):
    assert build(mono(2, "x", "y")).is_monomial()
    assert build([(None, "x")]).is_monomial()
    assert not build([(None, 2), ("add", "x")]).is_monomial()
    assert not build([(None, mono(2, "x"))]).is_monomial()
    assert not Expression().is_monomial()


def test_monomial_sum_classification(build, mono):
    assert Expression().is_monomial_sum()
    assert build([(None, mono(2, "x")), ("subtract", "y"), ("add", 4)]).is_monomial_sum()
    assert build([("subtract", "y"), ("add", mono(3, "z"))]).is_monomial_sum()
    assert not build([("add", "y")]).is_monomial_sum()
    assert not build([(None, 1), ("add", 2, "left")]).is_monomial_sum()
    assert not build([(None, [(None, 1), ("add", 2)])]).is_monomial_sum()


def test_rational_classification(build, mono, frac):
    denominator = [(None, mono(3, "x")), ("add", mono(4, "y"))]
    assert build(frac(mono(8, "a"), denominator)).is_rational()
    assert build(frac("x", 5)).is_rational()
    assert not build([(None, "x"), ("divide", 5, "left")]).is_rational()
    assert not build([(None, "x"), ("divide", [])]).is_rational()
    assert not build([(None, [(None, 1), ("add", "x")]), ("divide", 2)]).is_rational()
    assert not build([(None, "x"), ("divide", 5), ("add", 1)]).is_rational()


def test_rational_sum_classification(build, mono, frac):
    assert Expression().is_rational_sum()
    assert build([(None, frac("x", 5)), ("add", "y"), ("subtract", mono(2, "z"))]).is_rational_sum()
    assert not build([(None, "x"), ("multiply", [(None, "y"), ("add", 1)])]).is_rational_sum()


def test_equality_is_structural(build, mono):
    assert build(mono(2, "x")) == build(mono(2, "x"))
    assert build(mono(2, "x")) != build(mono("x", 2))
    assert build([(None, 1), ("add", 2, "left")]) != build([(None, 1), ("add", 2)])
    assert Expression() != 0


def test_copy_is_deep(build, mono):
    original = build([(None, mono(2, "x")), ("add", [(None, "y"), ("subtract", 3)])])
    duplicate = original.copy()
    assert duplicate == original
    duplicate[1].value[1].value = 4
    assert original[1].value[1].value == 3


def test_flatten_unwraps_single_step_values(build):
    expr = build([(None, [(None, [(None, "x")])]), ("add", [(None, 3)])])
    assert expr.flatten() == build([(None, "x"), ("add", 3)])


def test_flatten_takes_over_a_wrapped_expression(build):
    expr = build([(None, [(None, "x"), ("add", 3)])])
    assert expr.flatten() == build([(None, "x"), ("add", 3)])


def test_monomial_helpers(build):
    assert monomial(2, "x") == build([(None, 2), ("multiply", "x")])
    assert as_monomial("x") == build([(None, "x")])
    with pytest.raises(ShapeError):
        monomial()
    with pytest.raises(ShapeError):
        as_monomial(build([(None, 1), ("add", "x")]))


@settings(max_examples=60, deadline=None)
@given(everything)
def test_copy_round_trip(description):
    original = Expression.build(description)
    duplicate = original.copy()
    assert duplicate == original
    assert not set(_nested_ids(duplicate)) & set(_nested_ids(original))
