"""
Foundation module tests: field.py, polynomial.py, domain.py
"""
import pytest

from zkp.plonkish.field import (
    FR, CURVE_ORDER, G1,
    to_fr, to_fr_list, ec_mul, ec_add, ec_neg, is_on_g1,
    get_root_of_unity, get_roots_of_unity,
)
from zkp.plonkish.polynomial import Polynomial, fft, ifft, poly_div, divide_exact
from zkp.plonkish.domain import EvaluationDomain, next_power_of_2


# =====================================================================
# FR arithmetic
# =====================================================================

class TestFR:
    def test_modular_reduction(self):
        assert FR(CURVE_ORDER) == FR(0)
        assert FR(CURVE_ORDER + 7) == FR(7)

    def test_subtraction_wrap(self):
        assert FR(0) - FR(1) == FR(CURVE_ORDER - 1)

    def test_inverse(self):
        assert FR(7) * (FR(1) / FR(7)) == FR(1)

    def test_arithmetic_stays_in_fr(self):
        assert isinstance(FR(3) + FR(4), FR)
        assert isinstance(FR(3) * FR(4), FR)

    def test_to_fr(self):
        value = FR(5)
        assert to_fr(value) is value
        assert to_fr(5) == FR(5)
        assert to_fr_list([1, FR(2)]) == [FR(1), FR(2)]


class TestRootsOfUnity:
    @pytest.mark.parametrize("n", [1, 2, 4, 8, 16, 1024])
    def test_primitive(self, n):
        omega = get_root_of_unity(n)
        assert omega ** n == FR(1)
        if n > 1:
            assert omega ** (n // 2) != FR(1)

    def test_not_power_of_two(self):
        with pytest.raises(ValueError):
            get_root_of_unity(12)

    def test_too_large(self):
        with pytest.raises(ValueError):
            get_root_of_unity(1 << 29)

    def test_roots_are_distinct(self):
        roots = get_roots_of_unity(16)
        assert len(set(int(r) for r in roots)) == 16
        assert roots[0] == FR(1)


class TestCurve:
    def test_generator_on_curve(self):
        assert is_on_g1(G1)
        assert is_on_g1(ec_mul(G1, 12345))

    def test_infinity_is_valid(self):
        assert is_on_g1(None)

    def test_malformed_point(self):
        assert not is_on_g1((G1[0], G1[1] + G1[1]))
        assert not is_on_g1("garbage")

    def test_add_neg(self):
        p = ec_mul(G1, 7)
        assert ec_add(p, ec_neg(p)) is None


# =====================================================================
# Polynomial
# =====================================================================

class TestPolynomial:
    def test_trim(self):
        p = Polynomial([FR(1), FR(2), FR(0), FR(0)])
        assert p.degree == 1
        assert Polynomial([FR(0), FR(0)]).is_zero()

    def test_evaluate(self):
        p = Polynomial([FR(1), FR(2), FR(3)])
        assert p.evaluate(FR(2)) == FR(17)

    def test_arithmetic(self):
        a = Polynomial([FR(1), FR(1)])
        b = Polynomial([FR(0) - FR(1), FR(1)])
        # (x + 1)(x - 1) = x² - 1
        assert a * b == Polynomial([FR(0) - FR(1), FR(0), FR(1)])
        assert a + b == Polynomial([FR(0), FR(2)])
        assert a - a == Polynomial.zero()
        assert 2 * a == Polynomial([FR(2), FR(2)])

    def test_shift(self):
        p = Polynomial([FR(1), FR(2), FR(3)])
        assert p.shift(FR(2)) == Polynomial([FR(1), FR(4), FR(12)])
        point = FR(5)
        assert p.shift(FR(3)).evaluate(point) == p.evaluate(FR(3) * point)

    def test_vanishing(self):
        z = Polynomial.vanishing(4)
        for root in get_roots_of_unity(4):
            assert z.evaluate(root) == FR(0)

    def test_from_roots(self):
        p = Polynomial.from_roots([FR(2), FR(3)])
        assert p.evaluate(FR(2)) == FR(0)
        assert p.evaluate(FR(3)) == FR(0)
        assert p.degree == 2
        assert Polynomial.from_roots([]) == Polynomial.one()


class TestFFT:
    def test_fft_matches_evaluation(self):
        coeffs = [FR(i + 1) for i in range(8)]
        omega = get_root_of_unity(8)
        evals = fft(coeffs, omega)
        p = Polynomial(coeffs)
        for i, value in enumerate(evals):
            assert value == p.evaluate(omega ** i)

    def test_ifft_inverts_fft(self):
        coeffs = [FR(i * i + 3) for i in range(16)]
        omega = get_root_of_unity(16)
        assert ifft(fft(coeffs, omega), omega) == coeffs


class TestDivision:
    def test_exact(self):
        a = Polynomial.from_roots([FR(1), FR(2), FR(3)])
        b = Polynomial.from_roots([FR(2)])
        q, r = poly_div(a, b)
        assert r.is_zero()
        assert q == Polynomial.from_roots([FR(1), FR(3)])
        assert divide_exact(a, b) == q

    def test_not_exact(self):
        a = Polynomial.from_roots([FR(1), FR(2)]) + FR(1)
        assert divide_exact(a, Polynomial.from_roots([FR(2)])) is None

    def test_divide_by_zero(self):
        with pytest.raises(ValueError):
            poly_div(Polynomial.one(), Polynomial.zero())


# =====================================================================
# Evaluation domain
# =====================================================================

class TestDomain:
    @pytest.mark.parametrize("n, expected", [(1, 1), (3, 4), (12, 16), (16, 16), (17, 32)])
    def test_next_power_of_2(self, n, expected):
        assert next_power_of_2(n) == expected

    def test_for_cells(self):
        assert EvaluationDomain.for_cells(12).size == 16

    def test_interpolate_and_evaluate(self):
        domain = EvaluationDomain(16)
        values = [FR(v) for v in [3, 7, 10, 10, 5]]
        poly = domain.interpolate(values)
        evals = domain.evaluate(poly)
        assert evals[:5] == values
        assert all(e == FR(0) for e in evals[5:])

    def test_evaluate_folds_high_degree(self):
        domain = EvaluationDomain(4)
        # x^4 = 1 on the domain
        poly = Polynomial([FR(0), FR(0), FR(0), FR(0), FR(1)])
        assert domain.evaluate(poly) == [FR(1)] * 4

    def test_pad_too_long(self):
        with pytest.raises(ValueError):
            EvaluationDomain(4).pad([1, 2, 3, 4, 5])

    def test_lagrange_eval_matches_polynomial(self):
        domain = EvaluationDomain(8)
        zeta = FR(123456789)
        for i in range(8):
            assert domain.lagrange_eval(i, zeta) == domain.lagrange_polynomial(i).evaluate(zeta)

    def test_lagrange_eval_on_domain(self):
        domain = EvaluationDomain(8)
        assert domain.lagrange_eval(3, domain.element(3)) == FR(1)
        assert domain.lagrange_eval(3, domain.element(4)) == FR(0)

    def test_subset_vanishing(self):
        domain = EvaluationDomain(16)
        indices = [0, 3, 6]
        poly = domain.subset_vanishing_polynomial(indices)
        zeta = FR(987654321)
        assert poly.evaluate(zeta) == domain.subset_vanishing_eval(indices, zeta)
        for j in indices:
            assert poly.evaluate(domain.element(j)) == FR(0)
        assert poly.evaluate(domain.element(1)) != FR(0)

    def test_vanishing_eval(self):
        domain = EvaluationDomain(8)
        zeta = FR(42)
        assert domain.vanishing_eval(zeta) == domain.vanishing_polynomial().evaluate(zeta)
