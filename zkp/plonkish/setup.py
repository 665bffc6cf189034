"""
Setup: 회로 전처리와 공개 파라미터
=====================================

회로와 공개 입력만으로 계산할 수 있는 다항식을 미리 만들고 커밋한다.

**출력물 (PublicParameters)**:
  - 도메인: N = next_power_of_2(n_cells), ω
  - 셀렉터 다항식 S(x)와 커밋먼트 [S]₁
  - 순열 σ, 순열 다항식 Sσ(x)와 커밋먼트 [Sσ]₁
  - 공개 입력 다항식 V(x)
  - KZG SRS

**차수 요구량**:
  블라인딩된 트레이스 T는 N+2차, 게이트 항등식 G(x)는 최대 3N+3차이므로
  SRS는 required_degree(N) = 3N + 3 이상을 지원해야 한다.

같은 (circuit, public_inputs, seed)에서 항상 같은 파라미터가 나온다.

사용 예시:
    >>> params = setup(circuit, [FR(3), FR(5)], seed=42)
    >>> params.domain.size  # 16
"""

import logging

from zkp.plonkish.domain import EvaluationDomain, next_power_of_2
from zkp.plonkish.encoding import (
    compute_public_input_polynomial,
    compute_selector_polynomial,
)
from zkp.plonkish.errors import DomainError, InputLengthError
from zkp.plonkish.field import TWO_ADICITY, to_fr_list
from zkp.plonkish.kzg import commit
from zkp.plonkish.permutation import build_permutation, permutation_evaluations
from zkp.plonkish.srs import SRS

logger = logging.getLogger(__name__)

# 블라인딩 계수 개수: T는 ζ, ωζ, ω²ζ 세 점에서, Z는 두 점에서 열린다.
TRACE_BLINDING_TERMS = 3
ACCUMULATOR_BLINDING_TERMS = 2


def required_degree(domain_size):
    """domain_size 도메인의 증명에 필요한 SRS 최대 차수."""
    return 3 * domain_size + TRACE_BLINDING_TERMS


class PublicParameters:
    """Prover와 Verifier가 공유하는 공개 파라미터.

    속성 (회로 정보):
        n_cells, n_rows, n_pub: 회로 크기
        selectors: 행별 Op 튜플 (matches()에서 회로와 비교)
        domain: EvaluationDomain
        sigma: 순열 σ (길이 N)

    속성 (다항식 + 커밋먼트):
        selector_poly, selector_comm: S(x), [S]₁
        sigma_poly, sigma_comm: Sσ(x), [Sσ]₁
        public_input_poly: V(x)
        public_inputs: setup에 사용한 공개 입력

    속성 (커밋먼트 스킴):
        srs: SRS
    """

    def __init__(
        self,
        domain,
        n_cells,
        n_rows,
        n_pub,
        selectors,
        selector_poly,
        selector_comm,
        sigma,
        sigma_poly,
        sigma_comm,
        public_inputs,
        public_input_poly,
        srs,
    ):
        self.domain = domain
        self.n_cells = n_cells
        self.n_rows = n_rows
        self.n_pub = n_pub
        self.selectors = tuple(selectors)
        self.selector_poly = selector_poly
        self.selector_comm = selector_comm
        self.sigma = sigma
        self.sigma_poly = sigma_poly
        self.sigma_comm = sigma_comm
        self.public_inputs = public_inputs
        self.public_input_poly = public_input_poly
        self.srs = srs

    def matches(self, circuit):
        """이 파라미터가 circuit에 대해 만들어졌는지 확인한다.

        크기뿐 아니라 행별 셀렉터와 복사 제약에서 나온 순열 σ까지 비교한다.
        """
        return (
            self.n_cells == circuit.n_cells
            and self.n_rows == circuit.n_rows
            and self.n_pub == circuit.n_pub
            and self.selectors == tuple(circuit.selectors)
            and self.sigma == build_permutation(circuit, self.domain.size)
        )

    def __repr__(self):
        return (
            f"PublicParameters(n_cells={self.n_cells}, n_rows={self.n_rows}, "
            f"domain={self.domain.size}, srs={self.srs.max_degree})"
        )


def absorb_public_data(transcript, params, public_inputs):
    """회로 크기, 전처리 커밋먼트, 공개 입력을 트랜스크립트에 추가한다.

    Prover와 Verifier가 첫 챌린지 전에 똑같이 호출한다.
    """
    transcript.append_int(b"n_cells", params.n_cells)
    transcript.append_int(b"n_rows", params.n_rows)
    transcript.append_int(b"domain_size", params.domain.size)
    transcript.append_point(b"selector_comm", params.selector_comm)
    transcript.append_point(b"sigma_comm", params.sigma_comm)
    for value in public_inputs:
        transcript.append_scalar(b"public_input", value)


def setup(circuit, public_inputs, max_degree=None, seed=None, srs=None):
    """회로와 공개 입력에서 PublicParameters를 만든다.

    Args:
        circuit: Circuit
        public_inputs: 공개 입력 값 리스트 (길이 n_pub)
        max_degree: 새로 생성할 SRS의 최대 차수 (기본값: required_degree(N))
        seed: SRS τ 시드 (None이면 무작위)
        srs: 미리 생성된 범용 SRS (주어지면 max_degree/seed는 무시)

    Returns:
        PublicParameters

    Raises:
        InputLengthError: 공개 입력 개수가 n_pub와 다를 때
        DomainError: 도메인이 2^28을 넘거나 SRS 차수가 부족할 때
    """
    if len(public_inputs) != circuit.n_pub:
        raise InputLengthError("public", circuit.n_pub, len(public_inputs))

    size = next_power_of_2(circuit.n_cells)
    if size > (1 << TWO_ADICITY):
        raise DomainError(
            f"회로 셀 {circuit.n_cells}개는 최대 도메인 2^{TWO_ADICITY}를 초과합니다",
            required=size,
            available=1 << TWO_ADICITY,
        )
    degree = required_degree(size)
    available = srs.max_degree if srs is not None else max_degree
    if available is not None and available < degree:
        raise DomainError(
            f"도메인 크기 {size}에는 SRS 차수 {degree} 이상이 필요합니다 (현재 {available})",
            required=degree,
            available=available,
        )

    domain = EvaluationDomain(size)
    logger.debug(
        "setup: n_cells=%d n_rows=%d domain=%d degree=%d",
        circuit.n_cells, circuit.n_rows, size, degree,
    )

    if srs is None:
        srs = SRS.generate(max_degree if max_degree is not None else degree, seed=seed)

    selector_poly = compute_selector_polynomial(circuit, domain)
    sigma = build_permutation(circuit, size)
    sigma_poly = domain.interpolate(permutation_evaluations(sigma, domain))
    public_inputs = to_fr_list(public_inputs)
    public_input_poly = compute_public_input_polynomial(circuit, public_inputs, domain)

    return PublicParameters(
        domain=domain,
        n_cells=circuit.n_cells,
        n_rows=circuit.n_rows,
        n_pub=circuit.n_pub,
        selectors=circuit.selectors,
        selector_poly=selector_poly,
        selector_comm=commit(selector_poly, srs),
        sigma=sigma,
        sigma_poly=sigma_poly,
        sigma_comm=commit(sigma_poly, srs),
        public_inputs=public_inputs,
        public_input_poly=public_input_poly,
        srs=srs,
    )
