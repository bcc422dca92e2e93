from .directions import normalize_directions, reading_order, standardise_linear
from .expansion import expand, expand_to_rational_sum
from .expression import (
    Direction,
    Expression,
    Operator,
    ShapeError,
    Step,
    as_monomial,
    is_elementary,
    monomial,
)
from .latex import render
from .pipeline import contains_divide, expand_and_simplify, worked_stages
from .rational import (
    flip_signs,
    invert,
    multiply_rational_sums,
    rational_to_rsum,
    rsum_to_rational,
)
from .simplify import (
    similar,
    simplify,
    simplify_all_monomials,
    simplify_all_sums,
    simplify_monomial,
    tidy,
)

__all__ = [
    "Direction",
    "Expression",
    "Operator",
    "ShapeError",
    "Step",
    "as_monomial",
    "contains_divide",
    "expand",
    "expand_and_simplify",
    "expand_to_rational_sum",
    "flip_signs",
    "invert",
    "is_elementary",
    "monomial",
    "multiply_rational_sums",
    "normalize_directions",
    "rational_to_rsum",
    "reading_order",
    "render",
    "rsum_to_rational",
    "similar",
    "simplify",
    "simplify_all_monomials",
    "simplify_all_sums",
    "simplify_monomial",
    "standardise_linear",
    "tidy",
    "worked_stages",
]
