"""
Fiat-Shamir Transcript
========================

Prover와 Verifier가 같은 순서로 같은 데이터를 추가하면 같은 챌린지를 얻는다.

**Plonkish 프로토콜의 챌린지**:
  공개 파라미터 + [T]₁ → β, γ   (순열 누적자)
  [Z]₁                 → α      (경계 제약 결합)
  [Q_gate], [Q_perm], [Q_pub] → ζ (평가 점)
  평가값들              → v      (일괄 열기)
  열기 증명들           → u      (페어링 결합, Verifier만 사용)

사용 예시:
    >>> t = Transcript()
    >>> t.append_point(b"trace_comm", commitment)
    >>> beta = t.challenge_scalar(b"beta")
"""

import hashlib

from zkp.plonkish.field import FR, CURVE_ORDER


class Transcript:
    """SHA-256 기반 Fiat-Shamir 트랜스크립트.

    모든 데이터는 레이블과 함께 추가된다 (도메인 분리).
    챌린지를 만들 때 해시 출력이 상태에 다시 추가되어 이후 챌린지에 반영된다.
    """

    def __init__(self, label=b"plonkish"):
        self.state = bytearray()
        self.state.extend(label)

    def append_int(self, label, value):
        """음이 아닌 정수(회로 크기 등)를 추가한다."""
        self.state.extend(label)
        self.state.extend(int(value).to_bytes(32, "big"))

    def append_scalar(self, label, scalar):
        """FR 원소를 32바이트 빅엔디안으로 추가한다."""
        self.state.extend(label)
        self.state.extend((int(scalar) % CURVE_ORDER).to_bytes(32, "big"))

    def append_point(self, label, point):
        """G1 점을 추가한다. 무한원점(None)은 64바이트의 0."""
        self.state.extend(label)
        if point is None:
            self.state.extend(b"\x00" * 64)
        else:
            x, y = point
            self.state.extend(int(x).to_bytes(32, "big"))
            self.state.extend(int(y).to_bytes(32, "big"))

    def challenge_scalar(self, label):
        """현재 상태의 SHA-256에서 FR 챌린지를 도출한다."""
        self.state.extend(label)
        digest = hashlib.sha256(bytes(self.state)).digest()
        self.state.extend(digest)
        return FR(int.from_bytes(digest, "big") % CURVE_ORDER)
