"""
다항식 인코딩: 트레이스, 셀렉터, 공개 입력
=============================================

모든 다항식은 회로의 평가 도메인 H (크기 N = next_power_of_2(n_cells)) 위에서
정의되고, 셀 주소 j는 도메인 점 ω^j에 대응한다.

  | 다항식 | ω^j에서의 값                                   |
  |--------|------------------------------------------------|
  | T(x)   | trace[j] (j < n_cells), 0 (패딩)               |
  | S(x)   | j = 3r이면 ADD → 1, MUL → 0; 나머지 점은 0     |
  | V(x)   | j = n_cells - k이면 k번째 공개 입력, 나머지 0  |

**게이트 항등식** (셀렉터 규약 ADD = 1, MUL = 0):

    S(y)·(T(y) + T(ωy)) + (1 - S(y))·T(y)·T(ωy) - T(ω²y) = 0

  y = ω^{3r}에서 T(y), T(ωy), T(ω²y)가 r번째 행의 (lhs, rhs, out)이다.
  ADD이면 out = lhs + rhs, MUL이면 out = lhs · rhs.

**공개 입력 항등식**:

    T(y) - V(y) = 0,  y ∈ {ω^{n_cells-k} : k = 1..n_pub}

셀렉터와 공개 입력 다항식은 비공개 입력 없이 계산되므로 setup 단계에서 만든다.
"""

from zkp.plonkish.circuit import Op
from zkp.plonkish.errors import InputLengthError
from zkp.plonkish.field import FR, to_fr
from zkp.plonkish.polynomial import Polynomial

# 셀렉터 상수. gate_identity()와 같은 규약을 써야 한다.
ADD_SELECTOR = FR(1)
MUL_SELECTOR = FR(0)

SELECTOR_VALUES = {
    Op.ADD: ADD_SELECTOR,
    Op.MUL: MUL_SELECTOR,
}


def compute_trace_polynomial(trace, domain):
    """T(ω^j) = trace[j]인 N-1차 이하 다항식 (0 패딩 후 IFFT)."""
    return domain.interpolate(trace)


def selector_evaluations(circuit, domain):
    """S(x)의 도메인 평가값: 3r 위치에 Op 상수, 나머지 0."""
    evals = [FR(0)] * domain.size
    for row, op in enumerate(circuit.selectors):
        evals[3 * row] = SELECTOR_VALUES[op]
    return evals


def compute_selector_polynomial(circuit, domain):
    """셀렉터 다항식 S(x)."""
    return domain.interpolate(selector_evaluations(circuit, domain))


def public_input_evaluations(circuit, public_inputs, domain):
    """V(x)의 도메인 평가값.

    공개 입력은 역순으로 n_cells - 1에서 끝나도록 배치된다:
    k번째 공개 입력 → 위치 n_cells - k.
    """
    if len(public_inputs) != circuit.n_pub:
        raise InputLengthError("public", circuit.n_pub, len(public_inputs))
    evals = [FR(0)] * domain.size
    for cell_id, value in zip(circuit.public_input_ids(), public_inputs):
        evals[cell_id] = to_fr(value)
    return evals


def compute_public_input_polynomial(circuit, public_inputs, domain):
    """공개 입력 다항식 V(x)."""
    return domain.interpolate(public_input_evaluations(circuit, public_inputs, domain))


def public_input_eval(circuit, public_inputs, domain, zeta):
    """V(ζ) = Σₖ pubₖ · L_{n_cells-k}(ζ).

    다항식을 보간하지 않고 Lagrange 기저 평가만으로 계산한다 (Verifier용).
    """
    if len(public_inputs) != circuit.n_pub:
        raise InputLengthError("public", circuit.n_pub, len(public_inputs))
    result = FR(0)
    for cell_id, value in zip(circuit.public_input_ids(), public_inputs):
        result = result + to_fr(value) * domain.lagrange_eval(cell_id, zeta)
    return result


def gate_identity(selector, trace_poly, omega):
    """게이트 항등식 다항식 G(x).

    G(x) = S(x)·(T(x) + T(ωx)) + (1 - S(x))·T(x)·T(ωx) - T(ω²x)
    """
    lhs = trace_poly
    rhs = trace_poly.shift(omega)
    out = trace_poly.shift(omega * omega)
    return selector * (lhs + rhs) + (Polynomial.one() - selector) * (lhs * rhs) - out


def gate_identity_eval(selector_eval, lhs, rhs, out):
    """평가값 수준의 게이트 항등식 (Verifier용)."""
    return selector_eval * (lhs + rhs) + (FR(1) - selector_eval) * lhs * rhs - out
