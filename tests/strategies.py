"""Hypothesis strategies producing step descriptions."""

from hypothesis import strategies as st

SYMBOLS = "abxyz"

elementary = st.one_of(st.integers(min_value=-9, max_value=9), st.sampled_from(SYMBOLS))


def _steps(values, ops, directions):
    later = st.tuples(st.sampled_from(ops), values, st.sampled_from(directions))
    return st.tuples(values, st.lists(later, max_size=2)).map(
        lambda parts: [(None, parts[0])] + [list(step) for step in parts[1]]
    )


def descriptions(ops=("add", "subtract", "multiply", "divide"), directions=("right", "left")):
    nested = st.recursive(elementary, lambda values: _steps(values, ops, directions), max_leaves=6)
    return _steps(nested, ops, directions)


divide_free = descriptions(ops=("add", "subtract", "multiply"))
everything = descriptions()

monomials = st.tuples(
    st.integers(min_value=1, max_value=5),
    st.lists(st.sampled_from(SYMBOLS), max_size=2),
).map(lambda parts: [(None, parts[0])] + [("multiply", symbol) for symbol in parts[1]])

monomial_sums = st.tuples(
    monomials,
    st.lists(st.tuples(st.sampled_from(["add", "subtract"]), monomials), max_size=1),
).map(lambda parts: [(None, parts[0])] + [list(term) for term in parts[1]])

rational_terms = st.tuples(
    st.sampled_from(["add", "subtract"]),
    monomials,
    monomial_sums,
).map(lambda parts: (parts[0], [(None, parts[1]), ("divide", parts[2])]))
