"""
KZG 다항식 커밋먼트 스킴
=========================

  - 커밋:   C = p(τ)·G1 = Σ cᵢ·[τⁱ]₁
  - 열기:   y = p(z), π = [q(τ)]₁, q(x) = (p(x) - y) / (x - z)
  - 검증:   e(C - y·G1, G2) == e(π, [τ - z]₂)

**일괄 열기 (batch opening)**:
  같은 점 z에서 여러 다항식 p₀, p₁, ...을 열 때 챌린지 v로 묶는다:
      W(x) = Σ vⁱ·(pᵢ(x) - yᵢ) / (x - z)
      F = Σ vⁱ·Cᵢ,  E = Σ vⁱ·yᵢ
      e(W, [τ - z]₂) == e(F - E·G1, G2)

  서로 다른 점 z_j의 일괄 열기들은 챌린지 u로 다시 묶어
  페어링 두 번으로 검증한다:
      e(Σ u^j·W_j, [τ]₂) == e(Σ u^j·(z_j·W_j + F_j - E_j·G1), G2)

사용 예시:
    >>> C = commit(poly, srs)
    >>> y, proof = open_polynomial(poly, FR(7), srs)
    >>> verify_opening(C, proof, FR(7), y, srs)  # True
"""

from zkp.plonkish.field import FR, G1, ec_mul, ec_add, ec_neg, ec_pairing, to_fr
from zkp.plonkish.polynomial import Polynomial, poly_div


def commit(poly, srs):
    """다항식을 KZG 커밋한다.

    Raises:
        ValueError: 다항식 차수가 SRS 최대 차수를 초과할 때
    """
    if poly.degree > srs.max_degree:
        raise ValueError(
            f"다항식 차수 {poly.degree}가 SRS 최대 차수 {srs.max_degree}를 초과합니다"
        )
    result = None
    for i, coeff in enumerate(poly.coeffs):
        if coeff == FR(0):
            continue
        result = ec_add(result, ec_mul(srs.g1_powers[i], coeff))
    return result


def _opening_quotient(poly, point, value):
    """(p(x) - y) / (x - z)."""
    divisor = Polynomial([FR(0) - point, FR(1)])
    quotient, remainder = poly_div(poly - value, divisor)
    if not remainder.is_zero():
        raise ValueError("열기 증명 생성 실패: 나머지가 0이 아닙니다")
    return quotient


def open_polynomial(poly, point, srs):
    """p(z)를 열어 (y, π)를 반환한다."""
    point = to_fr(point)
    value = poly.evaluate(point)
    return value, commit(_opening_quotient(poly, point, value), srs)


def verify_opening(commitment, proof, point, evaluation, srs):
    """단일 KZG 열기 증명을 검증한다.

    e(C - y·G1, G2) == e(π, [τ]₂ - z·G2)
    """
    point = to_fr(point)
    evaluation = to_fr(evaluation)
    tau_minus_z = ec_add(srs.tau_g2, ec_neg(ec_mul(srs.g2_powers[0], point)))
    c_minus_y = ec_add(commitment, ec_neg(ec_mul(G1, evaluation)))
    lhs = ec_pairing(srs.g2_powers[0], c_minus_y)
    rhs = ec_pairing(tau_minus_z, proof)
    return lhs == rhs


def batch_open(polys, point, v, srs):
    """같은 점 z에서 여러 다항식을 v로 묶어 연다.

    Returns:
        tuple: ([yᵢ], W): 평가값 리스트와 일괄 열기 증명
    """
    point = to_fr(point)
    values = [p.evaluate(point) for p in polys]
    combined = Polynomial.zero()
    v_power = FR(1)
    for poly, value in zip(polys, values):
        combined = combined + (poly - value) * v_power
        v_power = v_power * v
    divisor = Polynomial([FR(0) - point, FR(1)])
    quotient, remainder = poly_div(combined, divisor)
    if not remainder.is_zero():
        raise ValueError("일괄 열기 증명 생성 실패: 나머지가 0이 아닙니다")
    return values, commit(quotient, srs)


class BatchOpening:
    """한 점에서의 일괄 열기 주장.

    속성:
        commitments: [Cᵢ]
        evaluations: [yᵢ]
        point: z
        proof: W
        v: 묶음 챌린지
    """

    def __init__(self, commitments, evaluations, point, proof, v):
        self.commitments = commitments
        self.evaluations = evaluations
        self.point = to_fr(point)
        self.proof = proof
        self.v = v

    def combined_commitment(self):
        """F = Σ vⁱ·Cᵢ"""
        result = None
        v_power = FR(1)
        for commitment in self.commitments:
            result = ec_add(result, ec_mul(commitment, v_power))
            v_power = v_power * self.v
        return result

    def combined_evaluation(self):
        """E = Σ vⁱ·yᵢ"""
        result = FR(0)
        v_power = FR(1)
        for evaluation in self.evaluations:
            result = result + to_fr(evaluation) * v_power
            v_power = v_power * self.v
        return result


def batch_verify(openings, u, srs):
    """여러 점의 일괄 열기를 u로 묶어 페어링 두 번으로 검증한다.

    e(Σ u^j·W_j, [τ]₂) == e(Σ u^j·(z_j·W_j + F_j - E_j·G1), G2)
    """
    lhs_point = None
    rhs_point = None
    u_power = FR(1)
    for opening in openings:
        lhs_point = ec_add(lhs_point, ec_mul(opening.proof, u_power))
        term = ec_mul(opening.proof, opening.point)
        term = ec_add(term, opening.combined_commitment())
        term = ec_add(term, ec_neg(ec_mul(G1, opening.combined_evaluation())))
        rhs_point = ec_add(rhs_point, ec_mul(term, u_power))
        u_power = u_power * u

    lhs = ec_pairing(srs.tau_g2, lhs_point)
    rhs = ec_pairing(srs.g2_powers[0], rhs_point)
    return lhs == rhs
