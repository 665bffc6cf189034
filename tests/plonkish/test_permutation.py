"""
Permutation argument tests: σ construction, accumulator, permutation identity
"""
import pytest

from zkp.plonkish.domain import EvaluationDomain
from zkp.plonkish.encoding import compute_trace_polynomial
from zkp.plonkish.field import FR
from zkp.plonkish.permutation import (
    build_permutation,
    compute_accumulator,
    permutation_evaluations,
    permutation_identity,
    permutation_identity_eval,
)
from zkp.plonkish.polynomial import divide_exact

BETA = FR(8)
GAMMA = FR(13)
ALPHA = FR(21)


@pytest.fixture
def domain(example_circuit):
    return EvaluationDomain.for_circuit(example_circuit)


@pytest.fixture
def sigma(example_circuit, domain):
    return build_permutation(example_circuit, domain.size)


def _accumulator(trace, sigma, domain):
    return compute_accumulator(
        domain.pad(trace), permutation_evaluations(sigma, domain), domain, BETA, GAMMA
    )


class TestBuildPermutation:
    def test_cycles(self, sigma):
        # (0, 11)
        assert sigma[0] == 11 and sigma[11] == 0
        # (1, 7, 9)
        assert sigma[1] == 7 and sigma[7] == 9 and sigma[9] == 1
        # (2, 3)
        assert sigma[2] == 3 and sigma[3] == 2

    def test_fixed_points(self, sigma):
        # output cell and padding are not in any set
        assert sigma[8] == 8
        assert all(sigma[i] == i for i in range(12, 16))

    def test_is_permutation(self, sigma):
        assert sorted(sigma) == list(range(16))

    def test_preserves_valid_trace(self, sigma, domain, example_trace):
        padded = domain.pad(example_trace)
        assert all(padded[i] == padded[sigma[i]] for i in range(domain.size))


class TestAccumulator:
    def test_starts_at_one(self, sigma, domain, example_trace):
        assert _accumulator(example_trace, sigma, domain)[0] == FR(1)

    def test_closes_for_valid_trace(self, sigma, domain, example_trace):
        z = _accumulator(example_trace, sigma, domain)
        padded = domain.pad(example_trace)
        sigma_evals = permutation_evaluations(sigma, domain)
        last = domain.size - 1
        closing = z[last] * (padded[last] + BETA * domain.element(last) + GAMMA) / (
            padded[last] + BETA * sigma_evals[last] + GAMMA
        )
        assert closing == FR(1)

    def test_identity_divisible_for_valid_trace(self, sigma, domain, example_trace):
        trace_poly = compute_trace_polynomial(example_trace, domain)
        z_poly = domain.interpolate(_accumulator(example_trace, sigma, domain))
        sigma_poly = domain.interpolate(permutation_evaluations(sigma, domain))
        identity = permutation_identity(
            trace_poly, z_poly, sigma_poly, domain, ALPHA, BETA, GAMMA
        )
        assert divide_exact(identity, domain.vanishing_polynomial()) is not None

    def test_identity_not_divisible_when_copy_broken(self, sigma, domain, example_trace):
        # cell 7 must equal cells 1 and 9
        bad_trace = list(example_trace)
        bad_trace[7] = FR(8)
        trace_poly = compute_trace_polynomial(bad_trace, domain)
        z_poly = domain.interpolate(_accumulator(bad_trace, sigma, domain))
        sigma_poly = domain.interpolate(permutation_evaluations(sigma, domain))
        identity = permutation_identity(
            trace_poly, z_poly, sigma_poly, domain, ALPHA, BETA, GAMMA
        )
        assert divide_exact(identity, domain.vanishing_polynomial()) is None

    def test_identity_eval_matches_polynomial(self, sigma, domain, example_trace):
        trace_poly = compute_trace_polynomial(example_trace, domain)
        z_poly = domain.interpolate(_accumulator(example_trace, sigma, domain))
        sigma_poly = domain.interpolate(permutation_evaluations(sigma, domain))
        identity = permutation_identity(
            trace_poly, z_poly, sigma_poly, domain, ALPHA, BETA, GAMMA
        )
        zeta = FR(99991)
        actual = permutation_identity_eval(
            trace_poly.evaluate(zeta),
            z_poly.evaluate(zeta),
            z_poly.evaluate(zeta * domain.omega),
            sigma_poly.evaluate(zeta),
            domain.lagrange_eval(0, zeta),
            zeta,
            ALPHA,
            BETA,
            GAMMA,
        )
        assert actual == identity.evaluate(zeta)
