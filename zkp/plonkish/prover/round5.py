"""
Plonkish Prover Round 5: 일괄 KZG 열기 증명
=============================================

  ┌──────────────────────────────────────────────────────┐
  │  Verifier → Prover: v  (Fiat-Shamir)                 │
  │  Prover → Verifier: [W_ζ]₁, [W_ωζ]₁, [W_ω²ζ]₁        │
  └──────────────────────────────────────────────────────┘

  | 점    | 함께 열리는 다항식                           |
  |-------|----------------------------------------------|
  | ζ     | T, Z, Q_gate, Q_perm, (Q_pub)                |
  | ωζ    | T, Z                                         |
  | ω²ζ   | T                                            |

각 점의 다항식들을 v의 거듭제곱으로 묶어 하나의 열기 증명을 만든다.
"""

from zkp.plonkish.kzg import batch_open


def opening_polynomials(state):
    """[(점, 다항식 리스트)]. 점 순서와 다항식 순서는 Verifier와 같아야 한다."""
    zeta = state.zeta
    omega = state.domain.omega
    at_zeta = [
        state.trace_poly,
        state.accumulator_poly,
        state.gate_quotient_poly,
        state.perm_quotient_poly,
    ]
    if state.pub_quotient_poly is not None:
        at_zeta.append(state.pub_quotient_poly)
    return [
        (zeta, at_zeta),
        (zeta * omega, [state.trace_poly, state.accumulator_poly]),
        (zeta * omega * omega, [state.trace_poly]),
    ]


def execute(state):
    """Round 5를 실행한다: 세 점의 일괄 열기 증명을 기록한다."""
    state.v = state.transcript.challenge_scalar(b"v")

    proofs = []
    for point, polys in opening_polynomials(state):
        _, proof = batch_open(polys, point, state.v, state.srs)
        proofs.append(proof)

    state.proof.W_zeta_comm, state.proof.W_zeta_omega_comm, state.proof.W_zeta_omega2_comm = proofs
