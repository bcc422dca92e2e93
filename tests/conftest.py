"""
Shared builders for the stepalgebra test suite.

Descriptions are plain nested lists, the same form Expression.build accepts.
"""

import pytest

from stepalgebra import Expression


def mono_description(*factors):
    return [(None, factors[0])] + [("multiply", factor) for factor in factors[1:]]


def frac_description(top, bottom):
    return [(None, top), ("divide", bottom)]


@pytest.fixture
def build():
    """Expression.build, so tests read as data."""
    return Expression.build


@pytest.fixture
def mono():
    return mono_description


@pytest.fixture
def frac():
    return frac_description
