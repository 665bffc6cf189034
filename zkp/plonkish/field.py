"""
Plonkish 기반 모듈: 유한체(Finite Field) 및 타원곡선 연산
===========================================================

**유한체 FR**:
  bn128 곡선의 스칼라 필드. 회로의 모든 셀(cell) 값, 트레이스 다항식,
  셀렉터 다항식, 챌린지가 이 필드의 원소이다.
  - p - 1 = 2^28 × m (m은 홀수) → 최대 2^28 크기의 평가 도메인 지원

**타원곡선 연산**:
  KZG 커밋먼트와 페어링 검증을 위한 G1/G2 연산 (py_ecc 래퍼).

사용 예시:
    >>> from zkp.plonkish.field import FR, to_fr
    >>> to_fr(3) * FR(7)   # FR(21)
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소."""
    field_modulus = bn128.curve_order


CURVE_ORDER = bn128.curve_order

# FR*의 생성원. 단위근 ω = g^((p-1)/n) 계산에 사용한다.
MULTIPLICATIVE_GENERATOR = 5

# p - 1 = 2^28 · m
TWO_ADICITY = 28

G1 = bn128.G1
G2 = bn128.G2


def to_fr(value):
    """정수 또는 FR 값을 FR 원소로 변환한다."""
    if isinstance(value, FR):
        return value
    return FR(value)


def to_fr_list(values):
    """값 리스트를 FR 원소 리스트로 변환한다."""
    return [to_fr(v) for v in values]


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point."""
    if point is None:
        return None
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2. None은 무한원점."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원: -point."""
    return bn128.neg(point)


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2).

    주의:
        py_ecc.bn128.pairing의 인자 순서는 (G2, G1)이다.
    """
    if g2_point is None or g1_point is None:
        # 무한원점과의 페어링은 GT의 항등원
        return bn128.FQ12.one()
    return bn128.pairing(g2_point, g1_point)


def is_on_g1(point):
    """G1 위의 점인지 확인한다 (무한원점 포함).

    Verifier가 증명에 포함된 커밋먼트의 형식을 확인할 때 사용한다.
    """
    if point is None:
        return True
    try:
        return bn128.is_on_curve(point, bn128.b)
    except (TypeError, ValueError):
        return False


def get_root_of_unity(n):
    """n차 원시 단위근 ω를 반환한다.

    생성원 g = 5에 대해 ω = g^((p-1)/n). ω^n = 1이고 n보다 작은
    지수에서는 1이 되지 않는다.

    Args:
        n: 2의 거듭제곱, 2^28 이하

    Returns:
        FR: n차 원시 단위근

    Raises:
        ValueError: n이 2의 거듭제곱이 아니거나 2^28을 초과할 때
    """
    if n < 1 or (n & (n - 1)) != 0:
        raise ValueError(f"n은 2의 거듭제곱이어야 합니다: {n}")
    if n > (1 << TWO_ADICITY):
        raise ValueError(f"n은 2^{TWO_ADICITY} 이하여야 합니다: {n}")
    if n == 1:
        return FR(1)
    return FR(MULTIPLICATIVE_GENERATOR) ** ((CURVE_ORDER - 1) // n)


def get_roots_of_unity(n):
    """[1, ω, ω², ..., ω^(n-1)]을 반환한다."""
    omega = get_root_of_unity(n)
    roots = []
    current = FR(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots
