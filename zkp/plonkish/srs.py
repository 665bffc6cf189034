"""
Structured Reference String (SRS)
===================================

KZG 커밋먼트의 공개 파라미터. 비밀 값 τ로 생성하고 τ는 폐기한다.

  SRS = {
      G1 powers: [G1, τ·G1, τ²·G1, ..., τ^d·G1]
      G2 powers: [G2, τ·G2]
  }

SRS는 회로에 독립적이다. 최대 차수 d 이하의 모든 회로에서 재사용할 수 있으며,
setup()은 회로가 요구하는 차수가 d를 넘으면 DomainError를 낸다.

seed를 주면 τ를 결정론적으로 만든다 (테스트/데모용).
seed가 None이면 secrets로 τ를 뽑는다.

사용 예시:
    >>> srs = SRS.generate(max_degree=51, seed=42)
    >>> len(srs.g1_powers)  # 52
"""

import hashlib
import logging
import secrets

from zkp.plonkish.field import FR, G1, G2, ec_mul, CURVE_ORDER

logger = logging.getLogger(__name__)


def derive_tau(seed):
    """seed에서 τ ∈ [1, p)를 결정론적으로 도출한다."""
    digest = hashlib.sha256(b"plonkish-srs:" + str(seed).encode()).digest()
    return int.from_bytes(digest, "big") % (CURVE_ORDER - 1) + 1


class SRS:
    """KZG용 공개 파라미터.

    속성:
        g1_powers: [τⁱ·G1] (i = 0..max_degree)
        g2_powers: [G2, τ·G2]
        max_degree: 커밋 가능한 최대 다항식 차수
    """

    def __init__(self, g1_powers, g2_powers, max_degree):
        self.g1_powers = g1_powers
        self.g2_powers = g2_powers
        self.max_degree = max_degree

    @classmethod
    def generate(cls, max_degree, seed=None):
        """SRS를 생성한다.

        Args:
            max_degree: 지원할 최대 다항식 차수
            seed: 결정론적 τ를 위한 시드 (None이면 무작위)
        """
        if max_degree < 1:
            raise ValueError(f"max_degree는 1 이상이어야 합니다: {max_degree}")
        if seed is not None:
            tau = FR(derive_tau(seed))
        else:
            tau = FR(secrets.randbelow(CURVE_ORDER - 1) + 1)

        g1_powers = []
        tau_power = FR(1)
        for _ in range(max_degree + 1):
            g1_powers.append(ec_mul(G1, tau_power))
            tau_power = tau_power * tau

        g2_powers = [G2, ec_mul(G2, tau)]
        logger.debug("generated SRS with max_degree=%d", max_degree)
        return cls(g1_powers, g2_powers, max_degree)

    @property
    def tau_g2(self):
        """[τ]₂"""
        return self.g2_powers[1]

    def __repr__(self):
        return f"SRS(max_degree={self.max_degree})"
