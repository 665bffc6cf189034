"""
Plonkish Prover Round 4: 평가값
=================================

  ┌──────────────────────────────────────────────────────┐
  │  Verifier → Prover: ζ  (Fiat-Shamir)                 │
  │  Prover → Verifier: T(ζ), T(ωζ), T(ω²ζ),             │
  │                     Z(ζ), Z(ωζ),                     │
  │                     Q_gate(ζ), Q_perm(ζ), Q_pub(ζ)   │
  └──────────────────────────────────────────────────────┘

S(ζ), Sσ(ζ), V(ζ)는 Verifier가 공개 정보로 직접 계산하므로 보내지 않는다.
"""


def execute(state):
    """Round 4를 실행한다: 평가값을 Proof에 기록하고 트랜스크립트에 추가한다."""
    state.zeta = state.transcript.challenge_scalar(b"zeta")

    zeta = state.zeta
    omega = state.domain.omega
    zeta_omega = zeta * omega
    zeta_omega2 = zeta_omega * omega

    proof = state.proof
    proof.trace_eval = state.trace_poly.evaluate(zeta)
    proof.trace_omega_eval = state.trace_poly.evaluate(zeta_omega)
    proof.trace_omega2_eval = state.trace_poly.evaluate(zeta_omega2)
    proof.accumulator_eval = state.accumulator_poly.evaluate(zeta)
    proof.accumulator_omega_eval = state.accumulator_poly.evaluate(zeta_omega)
    proof.gate_quotient_eval = state.gate_quotient_poly.evaluate(zeta)
    proof.perm_quotient_eval = state.perm_quotient_poly.evaluate(zeta)
    if state.pub_quotient_poly is not None:
        proof.pub_quotient_eval = state.pub_quotient_poly.evaluate(zeta)

    absorb_evaluations(state.transcript, proof)


def absorb_evaluations(transcript, proof):
    """Round 4 평가값을 정해진 순서로 트랜스크립트에 추가한다 (Verifier와 공유)."""
    transcript.append_scalar(b"trace_eval", proof.trace_eval)
    transcript.append_scalar(b"trace_omega_eval", proof.trace_omega_eval)
    transcript.append_scalar(b"trace_omega2_eval", proof.trace_omega2_eval)
    transcript.append_scalar(b"accumulator_eval", proof.accumulator_eval)
    transcript.append_scalar(b"accumulator_omega_eval", proof.accumulator_omega_eval)
    transcript.append_scalar(b"gate_quotient_eval", proof.gate_quotient_eval)
    transcript.append_scalar(b"perm_quotient_eval", proof.perm_quotient_eval)
    if proof.pub_quotient_eval is not None:
        transcript.append_scalar(b"pub_quotient_eval", proof.pub_quotient_eval)
