"""
Witness 엔진: 입력에서 모든 셀 값을 계산
==========================================

데이터 흐름(data-flow) 평가:

  1. 입력 값을 입력 셀과 그 복사 제약 그룹 전체에 할당한다.
  2. 어떤 행의 lhs, rhs가 모두 할당되고 out이 비어 있으면
     그 행의 out 주소를 FIFO 큐에 넣는다.
  3. 큐에서 주소를 꺼내 out = lhs (+|·) rhs를 계산하고,
     out의 복사 제약 그룹으로 전파하여 새로 준비된 행을 큐에 넣는다.
     출력 셀(마지막 행의 out)에서는 더 전파하지 않는다.
  4. 큐가 비었을 때 할당되지 않은 셀이 있으면 IncompleteTraceError.

각 행의 out은 같은 행의 lhs/rhs에만 의존하므로 한 번의 패스로 충분하다.
평가 순서는 회로와 입력이 같으면 항상 같다.

예시 (out = (pub₀ + priv₀) · pub₁ + priv₀, pub=[3,5], priv=[7]):
    >>> compute_witness(circuit, [3, 5], [7])
    [3, 7, 10, 10, 5, 50, 50, 7, 57, 7, 5, 3]   # FR 원소
"""

import logging
from collections import deque

from zkp.plonkish.errors import (
    CopyConstraintConflictError,
    IncompleteTraceError,
    InputLengthError,
)
from zkp.plonkish.field import to_fr

logger = logging.getLogger(__name__)


def check_input_lengths(circuit, public_inputs, private_inputs):
    """입력 값 개수가 InputConfig와 일치하는지 확인한다."""
    if len(public_inputs) != circuit.n_pub:
        raise InputLengthError("public", circuit.n_pub, len(public_inputs))
    if len(private_inputs) != circuit.n_priv:
        raise InputLengthError("private", circuit.n_priv, len(private_inputs))


class _TraceBuilder:
    """할당 중인 트레이스와 평가 큐."""

    def __init__(self, circuit):
        self.circuit = circuit
        self.trace = [None] * circuit.n_cells
        self.queue = deque()
        self.queued = set()

    def assign(self, cell_id, value):
        current = self.trace[cell_id]
        if current is not None:
            if current != value:
                raise CopyConstraintConflictError(cell_id)
            return
        self.trace[cell_id] = value
        if self.circuit.is_wire(cell_id):
            self._enqueue_if_ready(cell_id // 3)

    def assign_group(self, cell_id, value):
        """cell_id와 그 복사 제약 그룹 전체에 value를 할당한다."""
        group = self.circuit.get_copy_constraints(cell_id) or (cell_id,)
        if cell_id not in group:
            self.assign(cell_id, value)
        for member in group:
            self.assign(member, value)

    def _enqueue_if_ready(self, row):
        lhs, rhs, out = 3 * row, 3 * row + 1, 3 * row + 2
        if (
            self.trace[lhs] is not None
            and self.trace[rhs] is not None
            and self.trace[out] is None
            and out not in self.queued
        ):
            self.queue.append(out)
            self.queued.add(out)

    def drain(self):
        output_id = self.circuit.output_id
        while self.queue:
            cell_id = self.queue.popleft()
            if self.trace[cell_id] is not None:
                continue
            op = self.circuit.get_selector(cell_id // 3)
            value = op.apply(self.trace[cell_id - 2], self.trace[cell_id - 1])
            logger.debug("cell %d <- %s(cell %d, cell %d)", cell_id, op.name, cell_id - 2, cell_id - 1)

            self.trace[cell_id] = value
            if cell_id == output_id:
                continue
            self.assign_group(cell_id, value)

    def check_gates(self):
        """복사 그룹으로 미리 채워진 out 셀도 게이트 식을 만족해야 한다."""
        for row in range(self.circuit.n_rows):
            lhs, rhs, out = self.trace[3 * row:3 * row + 3]
            if lhs is None or rhs is None or out is None:
                continue
            if self.circuit.get_selector(row).apply(lhs, rhs) != out:
                raise CopyConstraintConflictError(3 * row + 2)


def compute_witness(circuit, public_inputs, private_inputs):
    """회로의 모든 셀 값을 계산한다.

    Args:
        circuit: Circuit
        public_inputs: 공개 입력 값 (선언 순서)
        private_inputs: 비공개 입력 값 (선언 순서)

    Returns:
        list[FR]: 길이 n_cells의 트레이스

    Raises:
        InputLengthError: 입력 개수가 InputConfig와 다를 때
        CopyConstraintConflictError: 한 복사 그룹에 다른 값이 들어올 때
        IncompleteTraceError: 입력에서 도달할 수 없는 셀이 남을 때
    """
    check_input_lengths(circuit, public_inputs, private_inputs)
    values = [to_fr(v) for v in public_inputs] + [to_fr(v) for v in private_inputs]

    builder = _TraceBuilder(circuit)
    for i, value in enumerate(values):
        builder.assign_group(circuit.input_id(i + 1), value)
    builder.drain()
    builder.check_gates()

    missing = [cell_id for cell_id, value in enumerate(builder.trace) if value is None]
    if missing:
        raise IncompleteTraceError(missing)

    logger.debug("witness complete: %d cells", circuit.n_cells)
    return builder.trace
