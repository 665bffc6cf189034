"""
Plonkish E2E 데모: out = (pub₀ + priv₀) · pub₁ + priv₀
=========================================================

pub = [3, 5], priv = [7] → out = (3 + 7) · 5 + 7 = 57

실행:
    python -m zkp.plonkish.example

흐름:
    1. 회로 구성 (CircuitBuilder)
    2. witness 계산
    3. setup (SRS + 셀렉터/순열/공개 입력 다항식)
    4. 증명 생성 (5-라운드)
    5. 증명 검증
    6. 조작된 증명과 잘못된 공개 입력으로 검증
"""

import copy

from zkp.plonkish.circuit import CircuitBuilder, InputConfig
from zkp.plonkish.field import FR
from zkp.plonkish.prover import Prover
from zkp.plonkish.setup import setup
from zkp.plonkish.verifier import Verifier
from zkp.plonkish.witness import compute_witness

PUBLIC_INPUTS = [FR(3), FR(5)]
PRIVATE_INPUTS = [FR(7)]


def build_example_circuit():
    """out = (pub₀ + priv₀) · pub₁ + priv₀ 회로 (3행, 12셀)."""
    builder = CircuitBuilder(InputConfig(n_pub=2, n_priv=1))
    (pub0, pub1), (priv0,) = builder.get_input_refs()
    total = builder.add_addition(pub0, priv0)
    product = builder.add_multiplication(total, pub1)
    builder.add_addition(product, priv0)
    return builder.build()


def main():
    print("=" * 60)
    print("  Plonkish Zero-Knowledge Proof Demo")
    print("  회로: out = (pub₀ + priv₀) · pub₁ + priv₀")
    print("=" * 60)

    # ── 1. 회로 구성 ──
    print("\n[1] 회로 구성...")
    circuit = build_example_circuit()
    print(f"    행 수: {circuit.n_rows}")
    print(f"    셀 수: {circuit.n_cells}")
    print(f"    복사 제약 집합: {list(circuit.copy_constraints)}")

    # ── 2. witness ──
    print("\n[2] witness 계산...")
    trace = compute_witness(circuit, PUBLIC_INPUTS, PRIVATE_INPUTS)
    print(f"    트레이스: {[int(v) for v in trace]}")
    print(f"    출력 셀 {circuit.output_id}: {int(trace[circuit.output_id])}")

    # ── 3. setup ──
    print("\n[3] setup...")
    params = setup(circuit, PUBLIC_INPUTS, seed=12345)
    print(f"    도메인 크기 N: {params.domain.size}")
    print(f"    SRS 최대 차수: {params.srs.max_degree}")

    # ── 4. 증명 생성 ──
    print("\n[4] 증명 생성 (5-라운드)...")
    proof = Prover(circuit, params, PUBLIC_INPUTS, PRIVATE_INPUTS).prove()
    print("    Round 1: [T]₁ 커밋")
    print("    Round 2: [Z]₁ 커밋 (순열 누적자)")
    print("    Round 3: [Q_gate]₁, [Q_perm]₁, [Q_pub]₁ 커밋")
    print("    Round 4: 평가값 산출")
    print("    Round 5: [W_ζ]₁, [W_ωζ]₁, [W_ω²ζ]₁ 열기 증명")

    # ── 5. 검증 ──
    print("\n[5] 증명 검증...")
    result = Verifier(circuit, params, PUBLIC_INPUTS).verify(proof)
    print(f"    검증 결과: {'성공 ✓' if result else '실패 ✗'}")

    # ── 6. 조작된 증명 / 잘못된 공개 입력 ──
    print("\n[6] 조작된 증명으로 검증 (trace_eval 변조)...")
    fake_proof = copy.copy(proof)
    fake_proof.trace_eval = proof.trace_eval + FR(1)
    tampered = Verifier(circuit, params, PUBLIC_INPUTS).verify(fake_proof)
    print(f"    검증 결과: {'성공 ✓' if tampered else '실패 ✗ (예상대로 실패)'}")

    print("\n    잘못된 공개 입력 [3, 6]으로 검증...")
    wrong_public = Verifier(circuit, params, [FR(3), FR(6)]).verify(proof)
    print(f"    검증 결과: {'성공 ✓' if wrong_public else '실패 ✗ (예상대로 실패)'}")

    print("\n" + "=" * 60)
    if result and not tampered and not wrong_public:
        print("  데모 완료: 모든 테스트 통과!")
    else:
        print("  데모 완료: 일부 테스트 실패")
    print("=" * 60)

    return result and not tampered and not wrong_public


if __name__ == "__main__":
    main()
