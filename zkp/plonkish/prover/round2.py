"""
Plonkish Prover Round 2: 순열 누적자 Z(x) 커밋먼트
====================================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: β, γ  (Fiat-Shamir)         │
  │  Prover → Verifier: [Z]₁                        │
  └─────────────────────────────────────────────────┘

**누적자**:
  Z(ω⁰) = 1
  Z(ω^{i+1}) = Z(ω^i) · (T_i + β·ω^i + γ) / (T_i + β·Sσ(ω^i) + γ)

  복사 제약이 지켜지면 분자와 분모의 전체 곱이 같아져 누적자가 1로 닫힌다.
  닫히지 않으면 Round 3의 순열 몫이 나누어 떨어지지 않는다.

**블라인딩**:
  Z'(x) = Z(x) + (c₀ + c₁·x)·Z_H(x)   (ζ, ωζ 두 점에서 열림)
"""

from zkp.plonkish.kzg import commit
from zkp.plonkish.permutation import compute_accumulator, permutation_evaluations
from zkp.plonkish.prover.round1 import random_blinding
from zkp.plonkish.setup import ACCUMULATOR_BLINDING_TERMS


def execute(state):
    """Round 2를 실행한다: accumulator_poly와 [Z]₁을 기록한다."""
    state.beta = state.transcript.challenge_scalar(b"beta")
    state.gamma = state.transcript.challenge_scalar(b"gamma")

    domain = state.domain
    z_evals = compute_accumulator(
        domain.pad(state.trace),
        permutation_evaluations(state.params.sigma, domain),
        domain,
        state.beta,
        state.gamma,
    )
    accumulator = domain.interpolate(z_evals)
    blinding = random_blinding(ACCUMULATOR_BLINDING_TERMS)
    state.accumulator_poly = accumulator + blinding * domain.vanishing_polynomial()

    state.proof.accumulator_comm = commit(state.accumulator_poly, state.srs)
    state.transcript.append_point(b"accumulator_comm", state.proof.accumulator_comm)
