"""
평가 도메인 (Evaluation Domain)
=================================

H = {1, ω, ω², ..., ω^(N-1)}, N = next_power_of_2(n_cells).

셀 주소 j는 도메인 점 ω^j에 대응한다:
  - 배선 셀 3r, 3r+1, 3r+2 → ω^{3r}, ω^{3r+1}, ω^{3r+2}
  - 입력 셀 n_cells - k    → ω^{n_cells-k}
  - n_cells ≤ j < N        → 패딩 (값 0)

**소거 다항식**:
  - Z_H(x) = x^N - 1: 도메인 전체에서 0 (순열 항등식)
  - Z_S(x) = ∏_{j∈S} (x - ω^j): 부분 도메인 S에서 0
    (게이트 점 {ω^{3r}}, 공개 입력 점 {ω^{n_cells-k}})

사용 예시:
    >>> domain = EvaluationDomain(16)
    >>> poly = domain.interpolate([FR(3), FR(7)])
    >>> poly.evaluate(domain.element(1))  # FR(7)
"""

from zkp.plonkish.field import FR, get_root_of_unity, get_roots_of_unity, to_fr
from zkp.plonkish.polynomial import Polynomial, fft, ifft


def next_power_of_2(n):
    """n 이상의 가장 작은 2의 거듭제곱.

    예시:
        >>> next_power_of_2(12)  # 16
    """
    if n <= 1:
        return 1
    p = 1
    while p < n:
        p <<= 1
    return p


class EvaluationDomain:
    """2의 거듭제곱 크기의 곱셈 부분군 H.

    속성:
        size: N
        omega: N차 원시 단위근
        elements: [ω^0, ..., ω^(N-1)]
    """

    def __init__(self, size):
        # get_root_of_unity가 크기를 검증한다 (2의 거듭제곱, ≤ 2^28)
        self.omega = get_root_of_unity(size)
        self.size = size
        self.elements = get_roots_of_unity(size)

    @classmethod
    def for_cells(cls, n_cells):
        return cls(next_power_of_2(n_cells))

    @classmethod
    def for_circuit(cls, circuit):
        """회로의 전체 셀을 담는 도메인."""
        return cls.for_cells(circuit.n_cells)

    def element(self, index):
        """ω^index (index는 N으로 모듈러 축소)."""
        return self.elements[index % self.size]

    def pad(self, values, fill=None):
        """값 리스트를 N 길이로 0 패딩한다."""
        if len(values) > self.size:
            raise ValueError(
                f"값의 개수 {len(values)}가 도메인 크기 {self.size}를 초과합니다"
            )
        if fill is None:
            fill = FR(0)
        return [to_fr(v) for v in values] + [fill] * (self.size - len(values))

    def interpolate(self, values):
        """p(ω^j) = values[j] (j ≥ len(values)이면 0)인 N-1차 이하 다항식."""
        return Polynomial(ifft(self.pad(values), self.omega))

    def evaluate(self, poly):
        """p를 도메인 전체에서 평가한다.

        N차 이상의 계수는 x^N = 1로 접어서(fold) FFT 한다.
        """
        folded = [FR(0)] * self.size
        for i, c in enumerate(poly.coeffs):
            folded[i % self.size] = folded[i % self.size] + c
        return fft(folded, self.omega)

    def vanishing_polynomial(self):
        return Polynomial.vanishing(self.size)

    def vanishing_eval(self, zeta):
        """Z_H(ζ) = ζ^N - 1."""
        return to_fr(zeta) ** self.size - FR(1)

    def lagrange_eval(self, i, zeta):
        """L_i(ζ) = (ω^i / N) · (ζ^N - 1) / (ζ - ω^i).

        ζ가 도메인 점이면 크로네커 델타 값을 반환한다.
        """
        zeta = to_fr(zeta)
        omega_i = self.element(i)
        denominator = zeta - omega_i
        if denominator == FR(0):
            return FR(1)
        n_inv = FR(1) / FR(self.size)
        return n_inv * self.vanishing_eval(zeta) * omega_i / denominator

    def lagrange_polynomial(self, i):
        """L_i(x): ω^i에서 1, 나머지 도메인 점에서 0."""
        values = [FR(0)] * self.size
        values[i % self.size] = FR(1)
        return self.interpolate(values)

    def subset_vanishing_polynomial(self, indices):
        """Z_S(x) = ∏_{j∈indices} (x - ω^j)."""
        return Polynomial.from_roots([self.element(j) for j in indices])

    def subset_vanishing_eval(self, indices, zeta):
        """Z_S(ζ)를 다항식 구성 없이 계산한다."""
        zeta = to_fr(zeta)
        result = FR(1)
        for j in indices:
            result = result * (zeta - self.element(j))
        return result

    def __repr__(self):
        return f"EvaluationDomain(size={self.size})"
