"""
Plonkish Prover Round 3: 몫 다항식 커밋먼트
=============================================

  ┌──────────────────────────────────────────────────────┐
  │  Verifier → Prover: α  (Fiat-Shamir)                 │
  │  Prover → Verifier: [Q_gate]₁, [Q_perm]₁, [Q_pub]₁   │
  └──────────────────────────────────────────────────────┘

세 항등식을 각자의 소거 다항식으로 나눈다 (영점 검사):

  | 항등식 | 다항식                                   | 소거 집합             |
  |--------|------------------------------------------|-----------------------|
  | gate   | S(T + T(ωx)) + (1-S)·T·T(ωx) - T(ω²x)    | {ω^{3r}}              |
  | perm   | Z(ωx)(T+βSσ+γ) - Z(T+βx+γ) + α·L₀(Z-1)   | H 전체 (x^N - 1)      |
  | public | T - V                                    | {ω^{n_cells-k}}       |

나머지가 0이 아니면 트레이스가 회로를 만족하지 않는 것이므로
ConstraintViolationError를 낸다. 공개 입력이 없으면 public 항등식은 생략한다.
"""

import logging

from zkp.plonkish.encoding import gate_identity
from zkp.plonkish.errors import ConstraintViolationError
from zkp.plonkish.kzg import commit
from zkp.plonkish.permutation import permutation_identity
from zkp.plonkish.polynomial import divide_exact

logger = logging.getLogger(__name__)


def _quotient(identity, numerator, vanishing):
    quotient = divide_exact(numerator, vanishing)
    if quotient is None:
        logger.debug("%s identity does not vanish on its domain", identity)
        raise ConstraintViolationError(identity)
    return quotient


def execute(state):
    """Round 3을 실행한다: 몫 다항식과 커밋먼트를 기록한다."""
    state.alpha = state.transcript.challenge_scalar(b"alpha")

    params = state.params
    domain = state.domain
    circuit = state.circuit

    gate = gate_identity(params.selector_poly, state.trace_poly, domain.omega)
    state.gate_quotient_poly = _quotient(
        "gate", gate, domain.subset_vanishing_polynomial(circuit.gate_ids())
    )

    perm = permutation_identity(
        state.trace_poly,
        state.accumulator_poly,
        params.sigma_poly,
        domain,
        state.alpha,
        state.beta,
        state.gamma,
    )
    state.perm_quotient_poly = _quotient("permutation", perm, domain.vanishing_polynomial())

    if circuit.n_pub > 0:
        state.pub_quotient_poly = _quotient(
            "public input",
            state.trace_poly - params.public_input_poly,
            domain.subset_vanishing_polynomial(circuit.public_input_ids()),
        )

    proof = state.proof
    proof.gate_quotient_comm = commit(state.gate_quotient_poly, state.srs)
    proof.perm_quotient_comm = commit(state.perm_quotient_poly, state.srs)
    state.transcript.append_point(b"gate_quotient_comm", proof.gate_quotient_comm)
    state.transcript.append_point(b"perm_quotient_comm", proof.perm_quotient_comm)
    if state.pub_quotient_poly is not None:
        proof.pub_quotient_comm = commit(state.pub_quotient_poly, state.srs)
        state.transcript.append_point(b"pub_quotient_comm", proof.pub_quotient_comm)
