"""
Plonkish Prover: 5-라운드 프로토콜 오케스트레이터
====================================================

witness 계산부터 KZG 열기 증명까지 증명 생성의 전체 흐름을 관리한다.

  ┌──────────────────────────────────────────────────────────┐
  │  Round 1: 트레이스 다항식 커밋                             │
  │  공개 파라미터 흡수 → Prover → Verifier: [T]₁             │
  ├──────────────────────────────────────────────────────────┤
  │  Round 2: 순열 누적자 Z(x) 커밋                            │
  │  Verifier → Prover: β, γ                                  │
  │  Prover → Verifier: [Z]₁                                  │
  ├──────────────────────────────────────────────────────────┤
  │  Round 3: 몫 다항식 커밋                                   │
  │  Verifier → Prover: α                                     │
  │  Prover → Verifier: [Q_gate]₁, [Q_perm]₁, [Q_pub]₁        │
  ├──────────────────────────────────────────────────────────┤
  │  Round 4: 평가값                                           │
  │  Verifier → Prover: ζ                                     │
  │  Prover → Verifier: T(ζ), T(ωζ), T(ω²ζ), Z(ζ), Z(ωζ),     │
  │                     Q_gate(ζ), Q_perm(ζ), Q_pub(ζ)        │
  ├──────────────────────────────────────────────────────────┤
  │  Round 5: 일괄 KZG 열기 증명                               │
  │  Verifier → Prover: v                                     │
  │  Prover → Verifier: [W_ζ]₁, [W_ωζ]₁, [W_ω²ζ]₁             │
  └──────────────────────────────────────────────────────────┘

사용 예시:
    >>> prover = Prover(circuit, params, [3, 5], [7])
    >>> proof = prover.prove()
"""

import logging

from zkp.plonkish.encoding import compute_trace_polynomial
from zkp.plonkish.errors import WitnessError
from zkp.plonkish.field import to_fr_list
from zkp.plonkish.transcript import Transcript
from zkp.plonkish.witness import check_input_lengths, compute_witness
from zkp.plonkish.prover import round1, round2, round3, round4, round5

logger = logging.getLogger(__name__)


class Proof:
    """Plonkish 증명 데이터 컨테이너.

    Round 1: trace_comm
    Round 2: accumulator_comm
    Round 3: gate_quotient_comm, perm_quotient_comm,
             pub_quotient_comm (공개 입력이 없으면 None)
    Round 4: trace_eval, trace_omega_eval, trace_omega2_eval,
             accumulator_eval, accumulator_omega_eval,
             gate_quotient_eval, perm_quotient_eval,
             pub_quotient_eval (공개 입력이 없으면 None)
    Round 5: W_zeta_comm, W_zeta_omega_comm, W_zeta_omega2_comm
    """

    def __init__(self):
        # Round 1
        self.trace_comm = None
        # Round 2
        self.accumulator_comm = None
        # Round 3
        self.gate_quotient_comm = None
        self.perm_quotient_comm = None
        self.pub_quotient_comm = None
        # Round 4
        self.trace_eval = None
        self.trace_omega_eval = None
        self.trace_omega2_eval = None
        self.accumulator_eval = None
        self.accumulator_omega_eval = None
        self.gate_quotient_eval = None
        self.perm_quotient_eval = None
        self.pub_quotient_eval = None
        # Round 5
        self.W_zeta_comm = None
        self.W_zeta_omega_comm = None
        self.W_zeta_omega2_comm = None


class ProverState:
    """라운드 간 공유되는 Prover 상태.

    속성 (입력):
        circuit, params, public_inputs, trace (길이 n_cells)

    속성 (라운드 간 생성):
        trace_poly: 블라인딩된 T(x) (Round 1)
        accumulator_poly: 블라인딩된 Z(x) (Round 2)
        gate_quotient_poly, perm_quotient_poly, pub_quotient_poly (Round 3)
        beta, gamma, alpha, zeta, v: 챌린지
    """

    def __init__(self, circuit, params, public_inputs, trace):
        self.circuit = circuit
        self.params = params
        self.public_inputs = public_inputs
        self.trace = trace

        self.transcript = Transcript()

        self.domain = params.domain
        self.srs = params.srs

        self.trace_poly = None
        self.accumulator_poly = None
        self.gate_quotient_poly = None
        self.perm_quotient_poly = None
        self.pub_quotient_poly = None

        self.beta = None
        self.gamma = None
        self.alpha = None
        self.zeta = None
        self.v = None

        self.proof = Proof()


class Prover:
    """회로, 공개 파라미터, 입력 값에서 증명을 만든다."""

    def __init__(self, circuit, params, public_inputs, private_inputs):
        if not params.matches(circuit):
            raise ValueError(f"{params!r}는 이 회로에 대해 만들어지지 않았습니다")
        self.circuit = circuit
        self.params = params
        self.public_inputs = to_fr_list(public_inputs)
        self.private_inputs = to_fr_list(private_inputs)
        self.trace = None

    def calculate_witness(self):
        """트레이스를 계산해 저장하고 반환한다."""
        check_input_lengths(self.circuit, self.public_inputs, self.private_inputs)
        self.trace = compute_witness(self.circuit, self.public_inputs, self.private_inputs)
        return self.trace

    def compute_trace_polynomial(self):
        """블라인딩하지 않은 트레이스 다항식 T(x).

        Raises:
            WitnessError: calculate_witness()를 먼저 호출하지 않았을 때
        """
        if self.trace is None:
            raise WitnessError("트레이스 다항식을 만들기 전에 witness를 계산해야 합니다")
        return compute_trace_polynomial(self.trace, self.params.domain)

    def prove(self):
        """5-라운드 프로토콜을 실행하여 Proof를 반환한다.

        Raises:
            WitnessError: witness 계산 실패
            ConstraintViolationError: 트레이스가 항등식을 만족하지 않을 때
        """
        if self.trace is None:
            self.calculate_witness()

        state = ProverState(self.circuit, self.params, self.public_inputs, self.trace)

        # Round 1: [T]₁
        round1.execute(state)
        logger.debug("round 1 complete")
        # Round 2: β, γ → [Z]₁
        round2.execute(state)
        logger.debug("round 2 complete")
        # Round 3: α → [Q_gate]₁, [Q_perm]₁, [Q_pub]₁
        round3.execute(state)
        logger.debug("round 3 complete")
        # Round 4: ζ → 평가값
        round4.execute(state)
        logger.debug("round 4 complete")
        # Round 5: v → [W_ζ]₁, [W_ωζ]₁, [W_ω²ζ]₁
        round5.execute(state)
        logger.debug("round 5 complete")

        logger.info(
            "proof generated: n_cells=%d domain=%d",
            self.circuit.n_cells, self.params.domain.size,
        )
        return state.proof
