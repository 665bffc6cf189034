"""
Plonkish Verifier
===================

**검증 과정**:
  1. 증명 형식 확인 (필드 누락, G1 밖의 점, 공개 입력 개수)
  2. Fiat-Shamir 트랜스크립트 재생 → β, γ, α, ζ, v, u
  3. 공개 정보로 S(ζ), Sσ(ζ), V(ζ), Z_H(ζ), L₀(ζ), Z_gate(ζ), Z_pub(ζ) 계산
  4. 세 항등식을 ζ에서 확인:
       gate:   G(ζ)             == Q_gate(ζ) · Z_gate(ζ)
       perm:   P(ζ)             == Q_perm(ζ) · Z_H(ζ)
       public: T(ζ) - V(ζ)      == Q_pub(ζ)  · Z_pub(ζ)
  5. 세 점(ζ, ωζ, ω²ζ)의 일괄 KZG 열기를 u로 묶어 페어링 두 번으로 확인

어느 단계라도 실패하면 False를 반환한다. 예외를 내지 않는다.

사용 예시:
    >>> Verifier(circuit, params, [3, 5]).verify(proof)  # True
"""

import logging

from zkp.plonkish.encoding import gate_identity_eval, public_input_eval
from zkp.plonkish.field import FR, is_on_g1, to_fr_list
from zkp.plonkish.kzg import BatchOpening, batch_verify
from zkp.plonkish.permutation import permutation_identity_eval
from zkp.plonkish.prover.round4 import absorb_evaluations
from zkp.plonkish.setup import absorb_public_data
from zkp.plonkish.transcript import Transcript

logger = logging.getLogger(__name__)

COMMITMENT_FIELDS = (
    "trace_comm",
    "accumulator_comm",
    "gate_quotient_comm",
    "perm_quotient_comm",
    "W_zeta_comm",
    "W_zeta_omega_comm",
    "W_zeta_omega2_comm",
)

EVALUATION_FIELDS = (
    "trace_eval",
    "trace_omega_eval",
    "trace_omega2_eval",
    "accumulator_eval",
    "accumulator_omega_eval",
    "gate_quotient_eval",
    "perm_quotient_eval",
)


class Verifier:
    """공개 정보(회로, 공개 파라미터, 공개 입력)만으로 증명을 검증한다."""

    def __init__(self, circuit, params, public_inputs):
        self.circuit = circuit
        self.params = params
        self.public_inputs = public_inputs

    def _reject(self, reason):
        logger.info("proof rejected: %s", reason)
        return False

    def _check_shape(self, proof):
        """형식 오류가 있으면 이유를, 없으면 None을 반환한다."""
        has_public = self.circuit.n_pub > 0
        commitments = list(COMMITMENT_FIELDS)
        evaluations = list(EVALUATION_FIELDS)
        if has_public:
            commitments.append("pub_quotient_comm")
            evaluations.append("pub_quotient_eval")
        else:
            if proof.pub_quotient_comm is not None or proof.pub_quotient_eval is not None:
                return "unexpected public input quotient"

        for name in commitments:
            point = getattr(proof, name, None)
            if point is None:
                return f"missing {name}"
            if not is_on_g1(point):
                return f"{name} is not a G1 point"
        for name in evaluations:
            value = getattr(proof, name, None)
            if not isinstance(value, FR):
                return f"missing or malformed {name}"
        return None

    def _replay(self, proof, public_inputs):
        """트랜스크립트를 재생해 (β, γ, α, ζ, v, u)를 복원한다."""
        transcript = Transcript()
        absorb_public_data(transcript, self.params, public_inputs)
        transcript.append_point(b"trace_comm", proof.trace_comm)

        beta = transcript.challenge_scalar(b"beta")
        gamma = transcript.challenge_scalar(b"gamma")
        transcript.append_point(b"accumulator_comm", proof.accumulator_comm)

        alpha = transcript.challenge_scalar(b"alpha")
        transcript.append_point(b"gate_quotient_comm", proof.gate_quotient_comm)
        transcript.append_point(b"perm_quotient_comm", proof.perm_quotient_comm)
        if proof.pub_quotient_comm is not None:
            transcript.append_point(b"pub_quotient_comm", proof.pub_quotient_comm)

        zeta = transcript.challenge_scalar(b"zeta")
        absorb_evaluations(transcript, proof)

        v = transcript.challenge_scalar(b"v")
        transcript.append_point(b"W_zeta_comm", proof.W_zeta_comm)
        transcript.append_point(b"W_zeta_omega_comm", proof.W_zeta_omega_comm)
        transcript.append_point(b"W_zeta_omega2_comm", proof.W_zeta_omega2_comm)
        u = transcript.challenge_scalar(b"u")
        return beta, gamma, alpha, zeta, v, u

    def verify(self, proof):
        """증명이 유효하면 True, 아니면 False."""
        circuit = self.circuit
        params = self.params
        domain = params.domain

        if proof is None:
            return self._reject("no proof")
        if len(self.public_inputs) != circuit.n_pub:
            return self._reject(
                f"expected {circuit.n_pub} public inputs, got {len(self.public_inputs)}"
            )
        if not params.matches(circuit):
            return self._reject("parameters do not match the circuit")
        reason = self._check_shape(proof)
        if reason is not None:
            return self._reject(reason)

        public_inputs = to_fr_list(self.public_inputs)
        beta, gamma, alpha, zeta, v, u = self._replay(proof, public_inputs)
        omega = domain.omega

        # ── 공개 정보로 계산하는 값 ──
        selector_eval = params.selector_poly.evaluate(zeta)
        sigma_eval = params.sigma_poly.evaluate(zeta)
        vanishing_eval = domain.vanishing_eval(zeta)
        l0_eval = domain.lagrange_eval(0, zeta)
        gate_vanishing_eval = domain.subset_vanishing_eval(circuit.gate_ids(), zeta)

        # ── 게이트 항등식 ──
        gate = gate_identity_eval(
            selector_eval, proof.trace_eval, proof.trace_omega_eval, proof.trace_omega2_eval
        )
        if gate != proof.gate_quotient_eval * gate_vanishing_eval:
            return self._reject("gate identity does not hold at zeta")

        # ── 순열 항등식 ──
        perm = permutation_identity_eval(
            proof.trace_eval,
            proof.accumulator_eval,
            proof.accumulator_omega_eval,
            sigma_eval,
            l0_eval,
            zeta,
            alpha,
            beta,
            gamma,
        )
        if perm != proof.perm_quotient_eval * vanishing_eval:
            return self._reject("permutation identity does not hold at zeta")

        # ── 공개 입력 항등식 ──
        if circuit.n_pub > 0:
            public_eval = public_input_eval(circuit, public_inputs, domain, zeta)
            pub_vanishing_eval = domain.subset_vanishing_eval(circuit.public_input_ids(), zeta)
            if proof.trace_eval - public_eval != proof.pub_quotient_eval * pub_vanishing_eval:
                return self._reject("public input identity does not hold at zeta")

        # ── 일괄 KZG 열기 ──
        zeta_commitments = [
            proof.trace_comm,
            proof.accumulator_comm,
            proof.gate_quotient_comm,
            proof.perm_quotient_comm,
        ]
        zeta_evaluations = [
            proof.trace_eval,
            proof.accumulator_eval,
            proof.gate_quotient_eval,
            proof.perm_quotient_eval,
        ]
        if circuit.n_pub > 0:
            zeta_commitments.append(proof.pub_quotient_comm)
            zeta_evaluations.append(proof.pub_quotient_eval)

        openings = [
            BatchOpening(zeta_commitments, zeta_evaluations, zeta, proof.W_zeta_comm, v),
            BatchOpening(
                [proof.trace_comm, proof.accumulator_comm],
                [proof.trace_omega_eval, proof.accumulator_omega_eval],
                zeta * omega,
                proof.W_zeta_omega_comm,
                v,
            ),
            BatchOpening(
                [proof.trace_comm],
                [proof.trace_omega2_eval],
                zeta * omega * omega,
                proof.W_zeta_omega2_comm,
                v,
            ),
        ]
        if not batch_verify(openings, u, params.srs):
            return self._reject("batched opening check failed")

        logger.debug("proof accepted")
        return True
