"""
Plonkish 기반 모듈: 다항식(Polynomial) 클래스 및 FFT
======================================================

**Polynomial 클래스**:
  계수 표현 기반 다항식 p(x) = c₀ + c₁·x + c₂·x² + ...
  트레이스 T(x), 셀렉터 S(x), 공개 입력 V(x), 순열 Sσ(x),
  누적자 Z(x), 몫 다항식 Q(x)가 모두 이 클래스로 표현된다.

**FFT/IFFT**:
  평가 표현 ↔ 계수 표현 변환 (재귀 Cooley-Tukey radix-2).

**다항식 나눗셈 (poly_div)**:
  영점 검사(zero-test)의 몫 Q(x) = 항등식 / 소거 다항식 계산,
  KZG 열기 증명 (p(x) - p(z)) / (x - z) 계산에 사용된다.

사용 예시:
    >>> p = Polynomial([FR(1), FR(2), FR(3)])  # 1 + 2x + 3x²
    >>> p.evaluate(FR(2))  # FR(17)
    >>> p.shift(FR(2))     # p(2x) = 1 + 4x + 12x²
"""

from zkp.plonkish.field import FR, to_fr


class Polynomial:
    """유한체 FR 위의 다항식.

    coeffs = [c₀, c₁, c₂, ...] → c₀ + c₁x + c₂x² + ...
    최고차 계수가 0인 항은 생성 시 제거된다.
    """

    def __init__(self, coeffs=None):
        if coeffs is None:
            self.coeffs = [FR(0)]
        else:
            self.coeffs = [to_fr(c) for c in coeffs] or [FR(0)]
        self._trim()

    def _trim(self):
        while len(self.coeffs) > 1 and self.coeffs[-1] == FR(0):
            self.coeffs.pop()

    @property
    def degree(self):
        """다항식의 차수. 영 다항식의 차수는 0으로 정의한다."""
        return len(self.coeffs) - 1

    def is_zero(self):
        return len(self.coeffs) == 1 and self.coeffs[0] == FR(0)

    def evaluate(self, point):
        """Horner's method로 p(point)를 계산한다."""
        point = to_fr(point)
        result = FR(0)
        for coeff in reversed(self.coeffs):
            result = result * point + coeff
        return result

    def shift(self, factor):
        """p(factor · x)를 반환한다.

        계수 cᵢ → factorⁱ · cᵢ.
        게이트 항등식의 T(ω·x), T(ω²·x)와 누적자의 Z(ω·x)를 만든다.
        """
        factor = to_fr(factor)
        shifted = []
        power = FR(1)
        for coeff in self.coeffs:
            shifted.append(coeff * power)
            power = power * factor
        return Polynomial(shifted)

    def __add__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        size = max(len(self.coeffs), len(other.coeffs))
        result = []
        for i in range(size):
            a = self.coeffs[i] if i < len(self.coeffs) else FR(0)
            b = other.coeffs[i] if i < len(other.coeffs) else FR(0)
            result.append(a + b)
        return Polynomial(result)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        return self + (-other)

    def __rsub__(self, other):
        return (-self) + other

    def __neg__(self):
        return Polynomial([FR(0) - c for c in self.coeffs])

    def __mul__(self, other):
        """다항식 곱셈(O(n²) convolution) 또는 스칼라곱."""
        if isinstance(other, (int, FR)):
            other = to_fr(other)
            return Polynomial([c * other for c in self.coeffs])
        result = [FR(0)] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            if a == FR(0):
                continue
            for j, b in enumerate(other.coeffs):
                result[i + j] = result[i + j] + a * b
        return Polynomial(result)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        if not isinstance(other, Polynomial):
            return False
        return self.coeffs == other.coeffs

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c == FR(0):
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"

    def __len__(self):
        return len(self.coeffs)

    @classmethod
    def zero(cls):
        return cls([FR(0)])

    @classmethod
    def one(cls):
        return cls([FR(1)])

    @classmethod
    def x(cls):
        """항등 다항식 id(x) = x."""
        return cls([FR(0), FR(1)])

    @classmethod
    def vanishing(cls, n):
        """소거 다항식 Z_H(x) = x^n - 1."""
        coeffs = [FR(0)] * (n + 1)
        coeffs[0] = FR(0) - FR(1)
        coeffs[n] = FR(1)
        return cls(coeffs)

    @classmethod
    def from_roots(cls, roots):
        """∏ (x - rᵢ)를 반환한다.

        부분 도메인(게이트 점, 공개 입력 점)의 소거 다항식을 만든다.
        근이 없으면 상수 1이다.
        """
        result = cls.one()
        for root in roots:
            result = result * cls([FR(0) - to_fr(root), FR(1)])
        return result


# ─────────────────────────────────────────────────────────────────────
# FFT / IFFT
# ─────────────────────────────────────────────────────────────────────

def fft(coeffs, omega):
    """계수 → 평가값 [p(1), p(ω), ..., p(ω^{n-1})].

    len(coeffs)는 2의 거듭제곱이고 omega는 그 길이의 원시 단위근이다.
    """
    n = len(coeffs)
    if n == 1:
        return [to_fr(coeffs[0])]

    omega_sq = omega * omega
    even_vals = fft(coeffs[0::2], omega_sq)
    odd_vals = fft(coeffs[1::2], omega_sq)

    result = [FR(0)] * n
    omega_k = FR(1)
    half = n // 2
    for k in range(half):
        t = omega_k * odd_vals[k]
        result[k] = even_vals[k] + t
        result[k + half] = even_vals[k] - t
        omega_k = omega_k * omega
    return result


def ifft(evals, omega):
    """평가값 → 계수 (보간).

    ω^{-1}로 FFT를 수행한 뒤 n으로 나눈다.
    """
    n = len(evals)
    coeffs = fft(evals, FR(1) / omega)
    n_inv = FR(1) / FR(n)
    return [c * n_inv for c in coeffs]


# ─────────────────────────────────────────────────────────────────────
# 다항식 나눗셈
# ─────────────────────────────────────────────────────────────────────

def poly_div(a, b):
    """a(x) = b(x) · q(x) + r(x)인 (q, r)을 반환한다.

    Raises:
        ValueError: 제수가 영 다항식인 경우
    """
    if b.is_zero():
        raise ValueError("0으로 나눌 수 없습니다")

    remainder = list(a.coeffs)
    divisor = b.coeffs
    deg_b = len(divisor) - 1
    deg_a = len(remainder) - 1

    if deg_a < deg_b:
        return Polynomial.zero(), Polynomial(remainder)

    quotient = [FR(0)] * (deg_a - deg_b + 1)
    lead_inv = FR(1) / divisor[-1]

    for i in range(deg_a - deg_b, -1, -1):
        coeff = remainder[i + deg_b] * lead_inv
        quotient[i] = coeff
        if coeff == FR(0):
            continue
        for j in range(deg_b + 1):
            remainder[i + j] = remainder[i + j] - coeff * divisor[j]

    return Polynomial(quotient), Polynomial(remainder[:deg_b] or [FR(0)])


def divide_exact(a, b):
    """a(x) / b(x)를 계산하고, 나누어 떨어지지 않으면 None을 반환한다."""
    quotient, remainder = poly_div(a, b)
    if not remainder.is_zero():
        return None
    return quotient
