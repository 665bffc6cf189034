"""
Tests for the commitment layer: SRS, KZG (single and batched openings), Transcript.
"""
import pytest

from zkp.plonkish.field import FR, G1, ec_mul, ec_add
from zkp.plonkish.kzg import (
    BatchOpening,
    batch_open,
    batch_verify,
    commit,
    open_polynomial,
    verify_opening,
)
from zkp.plonkish.polynomial import Polynomial
from zkp.plonkish.srs import SRS, derive_tau
from zkp.plonkish.transcript import Transcript


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def srs_small():
    """Small SRS for fast tests (max_degree=8)."""
    return SRS.generate(max_degree=8, seed=42)


# ─────────────────────────────────────────────────────────────────────
# SRS
# ─────────────────────────────────────────────────────────────────────

class TestSRS:
    def test_lengths(self, srs_small):
        assert len(srs_small.g1_powers) == 9
        assert len(srs_small.g2_powers) == 2
        assert srs_small.max_degree == 8

    def test_first_power_is_generator(self, srs_small):
        assert srs_small.g1_powers[0] == G1

    def test_deterministic_with_seed(self):
        a = SRS.generate(max_degree=2, seed=7)
        b = SRS.generate(max_degree=2, seed=7)
        assert a.g1_powers == b.g1_powers
        assert derive_tau(7) == derive_tau(7)
        assert derive_tau(7) != derive_tau(8)

    def test_powers_are_consecutive(self):
        srs = SRS.generate(max_degree=3, seed=5)
        tau = derive_tau(5)
        assert srs.g1_powers[2] == ec_mul(G1, FR(tau) * FR(tau))

    def test_max_degree_zero(self):
        with pytest.raises(ValueError):
            SRS.generate(max_degree=0, seed=1)


# ─────────────────────────────────────────────────────────────────────
# KZG
# ─────────────────────────────────────────────────────────────────────

class TestKZGCommit:
    def test_constant(self, srs_small):
        assert commit(Polynomial([FR(5)]), srs_small) == ec_mul(G1, 5)

    def test_zero_polynomial_is_infinity(self, srs_small):
        assert commit(Polynomial.zero(), srs_small) is None

    def test_linearity(self, srs_small):
        a = Polynomial([FR(1), FR(2), FR(3)])
        b = Polynomial([FR(4), FR(0), FR(6), FR(7)])
        assert commit(a + b, srs_small) == ec_add(commit(a, srs_small), commit(b, srs_small))

    def test_degree_exceeds_max(self, srs_small):
        with pytest.raises(ValueError):
            commit(Polynomial([FR(1)] * 10), srs_small)


class TestKZGOpening:
    def test_valid_opening(self, srs_small):
        poly = Polynomial([FR(3), FR(1), FR(4), FR(1), FR(5)])
        value, proof = open_polynomial(poly, FR(9), srs_small)
        assert value == poly.evaluate(FR(9))
        assert verify_opening(commit(poly, srs_small), proof, FR(9), value, srs_small)

    def test_wrong_evaluation(self, srs_small):
        poly = Polynomial([FR(3), FR(1), FR(4)])
        value, proof = open_polynomial(poly, FR(2), srs_small)
        assert not verify_opening(commit(poly, srs_small), proof, FR(2), value + FR(1), srs_small)


class TestKZGBatch:
    @pytest.fixture(scope="class")
    def batch(self, srs_small):
        polys_a = [Polynomial([FR(1), FR(2), FR(3)]), Polynomial([FR(7), FR(0), FR(0), FR(9)])]
        polys_b = [Polynomial([FR(2), FR(5)])]
        v = FR(17)
        za, zb = FR(11), FR(23)
        values_a, proof_a = batch_open(polys_a, za, v, srs_small)
        values_b, proof_b = batch_open(polys_b, zb, v, srs_small)
        return {
            "commitments_a": [commit(p, srs_small) for p in polys_a],
            "commitments_b": [commit(p, srs_small) for p in polys_b],
            "values_a": values_a,
            "values_b": values_b,
            "proof_a": proof_a,
            "proof_b": proof_b,
            "points": (za, zb),
            "v": v,
        }

    def _openings(self, batch, values_a=None):
        za, zb = batch["points"]
        return [
            BatchOpening(batch["commitments_a"], values_a or batch["values_a"], za, batch["proof_a"], batch["v"]),
            BatchOpening(batch["commitments_b"], batch["values_b"], zb, batch["proof_b"], batch["v"]),
        ]

    def test_combined_evaluation(self, batch):
        opening = self._openings(batch)[0]
        v = batch["v"]
        assert opening.combined_evaluation() == batch["values_a"][0] + v * batch["values_a"][1]

    def test_batch_verify(self, batch, srs_small):
        assert batch_verify(self._openings(batch), FR(5), srs_small)

    def test_batch_verify_rejects_wrong_value(self, batch, srs_small):
        bad = [batch["values_a"][0], batch["values_a"][1] + FR(1)]
        assert not batch_verify(self._openings(batch, bad), FR(5), srs_small)


# ─────────────────────────────────────────────────────────────────────
# Transcript
# ─────────────────────────────────────────────────────────────────────

class TestTranscript:
    def test_deterministic(self):
        a, b = Transcript(), Transcript()
        for t in (a, b):
            t.append_point(b"comm", G1)
            t.append_scalar(b"eval", FR(5))
        assert a.challenge_scalar(b"beta") == b.challenge_scalar(b"beta")

    def test_depends_on_data(self):
        a, b = Transcript(), Transcript()
        a.append_scalar(b"eval", FR(5))
        b.append_scalar(b"eval", FR(6))
        assert a.challenge_scalar(b"beta") != b.challenge_scalar(b"beta")

    def test_successive_challenges_differ(self):
        t = Transcript()
        t.append_int(b"n", 12)
        assert t.challenge_scalar(b"beta") != t.challenge_scalar(b"gamma")

    def test_infinity_point(self):
        t = Transcript()
        t.append_point(b"comm", None)
        assert isinstance(t.challenge_scalar(b"x"), FR)
