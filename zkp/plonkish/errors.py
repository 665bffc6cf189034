"""
Plonkish 오류 타입
===================

모든 오류는 ValueError의 하위 클래스이다. 메시지에는 셀 주소,
입력 인덱스, 피연산자 위치(LHS/RHS)만 담고 witness 값은 담지 않는다.

  | 단계     | 오류                           | 원인                          |
  |----------|--------------------------------|-------------------------------|
  | 회로 구성 | InputOutOfRangeError          | 입력 인덱스 ∉ [1, n_inputs]   |
  |          | WireOutOfRangeError           | 할당되지 않은 배선 셀 참조     |
  | witness  | InputLengthError              | 입력 값 개수 불일치            |
  |          | IncompleteTraceError          | 입력에서 도달할 수 없는 셀     |
  |          | CopyConstraintConflictError   | 같은 복사 그룹에 다른 값       |
  | setup    | DomainError                   | 도메인/SRS 차수 초과           |
  | prove    | ConstraintViolationError      | 항등식이 소거 다항식으로 안 나눠짐 |

검증 실패는 오류가 아니다: Verifier.verify()는 False를 반환한다.
"""


class CircuitError(ValueError):
    """회로 구성 단계의 오류."""


class InputOutOfRangeError(CircuitError):
    """입력 참조 인덱스가 [1, n_inputs] 범위를 벗어남."""

    def __init__(self, side, index):
        self.side = side
        self.index = index
        super().__init__(f"{side}: 입력 {index}이(가) 존재하지 않습니다 (input {index} does not exist)")


class WireOutOfRangeError(CircuitError):
    """배선 참조 주소가 아직 할당되지 않은 셀을 가리킴."""

    def __init__(self, side, address):
        self.side = side
        self.address = address
        super().__init__(f"{side}: 배선 {address}이(가) 존재하지 않습니다 (wire {address} does not exist)")


class WitnessError(ValueError):
    """witness 계산 단계의 오류."""


class InputLengthError(WitnessError):
    """공개/비공개 입력 값의 개수가 InputConfig와 다름."""

    def __init__(self, kind, expected, actual):
        self.kind = kind
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{kind} 입력은 {expected}개여야 하지만 {actual}개가 주어졌습니다"
        )


class IncompleteTraceError(WitnessError):
    """전파 후에도 값이 할당되지 않은 셀이 남음 (잘못 구성된 회로)."""

    def __init__(self, missing):
        self.missing = list(missing)
        shown = ", ".join(str(m) for m in self.missing[:8])
        if len(self.missing) > 8:
            shown += ", ..."
        super().__init__(
            f"트레이스가 불완전합니다: 셀 {len(self.missing)}개가 할당되지 않음 [{shown}]"
        )


class CopyConstraintConflictError(WitnessError):
    """하나의 복사 제약 그룹에 서로 다른 값이 할당됨."""

    def __init__(self, address):
        self.address = address
        super().__init__(f"셀 {address}의 복사 제약 그룹에 서로 다른 값이 할당되었습니다")


class DomainError(ValueError):
    """평가 도메인 또는 커밋먼트 스킴의 최대 차수를 초과함."""

    def __init__(self, message, required=None, available=None):
        self.required = required
        self.available = available
        super().__init__(message)


class ConstraintViolationError(ValueError):
    """항등식 다항식이 소거 다항식으로 나누어 떨어지지 않음."""

    def __init__(self, identity):
        self.identity = identity
        super().__init__(
            f"{identity} 항등식이 소거 다항식으로 나누어 떨어지지 않습니다. "
            "회로, 공개 입력 또는 witness에 오류가 있습니다."
        )
