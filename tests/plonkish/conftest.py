import pytest

from zkp.plonkish.example import PRIVATE_INPUTS, PUBLIC_INPUTS, build_example_circuit
from zkp.plonkish.field import FR


@pytest.fixture
def example_circuit():
    """out = (pub₀ + priv₀) · pub₁ + priv₀"""
    return build_example_circuit()


@pytest.fixture
def example_inputs():
    """(public, private) = ([3, 5], [7])"""
    return list(PUBLIC_INPUTS), list(PRIVATE_INPUTS)


@pytest.fixture
def example_trace():
    return [FR(v) for v in [3, 7, 10, 10, 5, 50, 50, 7, 57, 7, 5, 3]]


@pytest.fixture
def example_groups():
    return ((0, 11), (4, 10), (1, 7, 9), (2, 3), (5, 6))
