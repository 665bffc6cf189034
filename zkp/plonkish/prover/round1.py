"""
Plonkish Prover Round 1: 트레이스 다항식 커밋먼트
===================================================

  ┌─────────────────────────────────────────────────┐
  │  입력:  트레이스 (길이 n_cells), 공개 파라미터    │
  │  출력:  트레이스 커밋먼트 [T]₁                    │
  └─────────────────────────────────────────────────┘

**트레이스 다항식**:
  T(ω^j) = trace[j] (j < n_cells), 패딩 위치는 0.

**블라인딩**:
  T'(x) = T(x) + (b₀ + b₁·x + b₂·x²)·Z_H(x)
  Z_H는 도메인 위에서 0이므로 H 위의 값은 그대로이다.
  T는 ζ, ωζ, ω²ζ 세 점에서 열리므로 계수 3개를 쓴다.

공개 파라미터(회로 크기, [S]₁, [Sσ]₁, 공개 입력)를 먼저 트랜스크립트에
흡수해서 이후 챌린지가 회로와 공개 입력에 묶이도록 한다.
"""

import secrets

from zkp.plonkish.encoding import compute_trace_polynomial
from zkp.plonkish.field import FR, CURVE_ORDER
from zkp.plonkish.kzg import commit
from zkp.plonkish.polynomial import Polynomial
from zkp.plonkish.setup import TRACE_BLINDING_TERMS, absorb_public_data


def random_blinding(count):
    """무작위 블라인딩 다항식 c₀ + c₁·x + ... (count개 계수)."""
    return Polynomial([FR(secrets.randbelow(CURVE_ORDER)) for _ in range(count)])


def execute(state):
    """Round 1을 실행한다: trace_poly와 [T]₁을 기록한다."""
    absorb_public_data(state.transcript, state.params, state.public_inputs)

    trace_poly = compute_trace_polynomial(state.trace, state.domain)
    blinding = random_blinding(TRACE_BLINDING_TERMS)
    state.trace_poly = trace_poly + blinding * state.domain.vanishing_polynomial()

    state.proof.trace_comm = commit(state.trace_poly, state.srs)
    state.transcript.append_point(b"trace_comm", state.proof.trace_comm)
