"""
Plonkish 순열 인자 (Permutation Argument)
==========================================

복사 제약을 도메인 위치의 순열 σ로 인코딩하고 Grand Product로 증명한다.

**순열 σ**:
  트레이스는 한 열(column)이므로 위치는 도메인 인덱스 [0, N) 하나뿐이다.
  복사 제약 집합 [a₀ < a₁ < ... < a_k]마다 순환 하나:
      σ(a₀) = a₁, σ(a₁) = a₂, ..., σ(a_k) = a₀
  어떤 집합에도 속하지 않는 셀과 패딩 위치는 σ(i) = i.

  트레이스가 모든 복사 제약을 만족하면 T(ω^i) = T(ω^{σ(i)})이다.

**순열 다항식**: Sσ(ω^i) = ω^{σ(i)}

**누적자 Z(x)**:
  Z(ω⁰) = 1
  Z(ω^{i+1}) = Z(ω^i) · (T(ω^i) + β·ω^i + γ) / (T(ω^i) + β·Sσ(ω^i) + γ)
  σ가 T를 보존하면 전체 곱이 1이 되어 Z(ω^N) = Z(ω⁰) = 1로 닫힌다.

**항등식** (H 전체에서 0):
  Z(ωx)·(T(x) + β·Sσ(x) + γ) - Z(x)·(T(x) + β·x + γ)
  + α·L₀(x)·(Z(x) - 1)

사용 예시:
    >>> sigma = build_permutation(circuit, domain.size)
    >>> sigma_poly = domain.interpolate(permutation_evaluations(sigma, domain))
"""

from zkp.plonkish.field import FR
from zkp.plonkish.polynomial import Polynomial


def build_permutation(circuit, size):
    """복사 제약 집합에서 길이 size의 순열 σ를 만든다."""
    sigma = list(range(size))
    for group in circuit.copy_constraints:
        for i, cell_id in enumerate(group):
            sigma[cell_id] = group[(i + 1) % len(group)]
    return sigma


def permutation_evaluations(sigma, domain):
    """Sσ의 도메인 평가값 [ω^{σ(0)}, ..., ω^{σ(N-1)}]."""
    return [domain.element(target) for target in sigma]


def compute_accumulator(trace_evals, sigma_evals, domain, beta, gamma):
    """누적자 Z의 도메인 평가값 [Z(ω⁰)=1, ..., Z(ω^{N-1})].

    Args:
        trace_evals: 길이 N의 트레이스 (패딩 포함)
        sigma_evals: Sσ의 도메인 평가값
        domain: EvaluationDomain
        beta, gamma: 챌린지 (FR)
    """
    z_evals = [FR(1)]
    for i in range(domain.size - 1):
        num = trace_evals[i] + beta * domain.element(i) + gamma
        den = trace_evals[i] + beta * sigma_evals[i] + gamma
        z_evals.append(z_evals[-1] * num / den)
    return z_evals


def permutation_identity(trace_poly, accumulator, sigma_poly, domain, alpha, beta, gamma):
    """순열 항등식 다항식 P(x) (Z_H(x)로 나누어 떨어져야 함)."""
    x = Polynomial.x()
    z_shifted = accumulator.shift(domain.omega)
    copy_term = (
        z_shifted * (trace_poly + sigma_poly * beta + gamma)
        - accumulator * (trace_poly + x * beta + gamma)
    )
    boundary_term = domain.lagrange_polynomial(0) * (accumulator - FR(1))
    return copy_term + boundary_term * alpha


def permutation_identity_eval(
    trace_eval, z_eval, z_omega_eval, sigma_eval, l0_eval, zeta, alpha, beta, gamma
):
    """평가값 수준의 순열 항등식 (Verifier용)."""
    return (
        z_omega_eval * (trace_eval + beta * sigma_eval + gamma)
        - z_eval * (trace_eval + beta * zeta + gamma)
        + alpha * l0_eval * (z_eval - FR(1))
    )
