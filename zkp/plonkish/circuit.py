"""
Plonkish 회로 표현 (Circuit Representation)
=============================================

계산을 덧셈/곱셈 게이트의 행(row)과 셀 간 복사 제약으로 표현한다.

**셀 주소 (단일 평탄 배열)**:
  - 배선 셀: 3·row + {0, 1, 2} = (lhs, rhs, out)
  - 입력 셀: 배열의 마지막 n_inputs개. k번째 입력(1부터)은 주소 n_cells - k.
    공개 입력이 먼저, 그 다음 비공개 입력.
  - n_cells = n_inputs + 3·n_rows

**셀렉터**:
  행마다 Op.ADD (out = lhs + rhs) 또는 Op.MUL (out = lhs · rhs).

**복사 제약**:
  같은 값을 가져야 하는 셀 주소의 서로소 집합들.
  입력마다 하나의 집합으로 시작하며, 사용되지 않은 입력도 원소 1개짜리
  집합으로 남는다.

**예제 회로**: out = (pub₀ + priv₀) · pub₁ + priv₀  (n_pub=2, n_priv=1)

  입력 셀: | 9: priv₀ | 10: pub₁ | 11: pub₀ |

  | 행 | Op  | lhs      | rhs       | out    |
  |----|-----|----------|-----------|--------|
  | 0  | ADD | 0: pub₀  | 1: priv₀  | 2      |
  | 1  | MUL | 3: out₀  | 4: pub₁   | 5      |
  | 2  | ADD | 6: out₁  | 7: priv₀  | 8: out |

  복사 제약: {0,11}, {4,10}, {1,7,9}, {2,3}, {5,6}

사용 예시:
    >>> builder = CircuitBuilder(InputConfig(2, 1))
    >>> (pub0, pub1), (priv0,) = builder.get_input_refs()
    >>> out0 = builder.add_addition(pub0, priv0)
    >>> out1 = builder.add_multiplication(out0, pub1)
    >>> builder.add_addition(out1, priv0)
    >>> circuit = builder.build()
"""

import enum
import logging

from zkp.plonkish.errors import CircuitError, InputOutOfRangeError, WireOutOfRangeError

logger = logging.getLogger(__name__)


class Op(enum.Enum):
    """게이트 연산. 정확히 두 가지 경우만 존재한다."""
    ADD = "add"
    MUL = "mul"

    def apply(self, lhs, rhs):
        if self is Op.ADD:
            return lhs + rhs
        return lhs * rhs


class InputConfig:
    """회로가 받는 공개/비공개 입력의 개수."""

    def __init__(self, n_pub, n_priv):
        if n_pub < 0 or n_priv < 0:
            raise CircuitError(f"입력 개수는 음수일 수 없습니다: n_pub={n_pub}, n_priv={n_priv}")
        self.n_pub = n_pub
        self.n_priv = n_priv

    @property
    def total_input(self):
        return self.n_pub + self.n_priv

    def __eq__(self, other):
        if not isinstance(other, InputConfig):
            return NotImplemented
        return (self.n_pub, self.n_priv) == (other.n_pub, other.n_priv)

    def __hash__(self):
        return hash((self.n_pub, self.n_priv))

    def __repr__(self):
        return f"InputConfig(n_pub={self.n_pub}, n_priv={self.n_priv})"


class CellRef:
    """빌더 전용 셀 참조: Input(1부터 시작하는 입력 인덱스) 또는 Wire(배선 셀 주소).

    build() 시점에 절대 주소로 한 번만 해석되며, 완성된 Circuit에는 남지 않는다.
    """

    INPUT = "input"
    WIRE = "wire"

    __slots__ = ("kind", "index")

    def __init__(self, kind, index):
        if kind not in (CellRef.INPUT, CellRef.WIRE):
            raise CircuitError(f"알 수 없는 셀 참조 종류: {kind}")
        self.kind = kind
        self.index = index

    @classmethod
    def input(cls, index):
        return cls(cls.INPUT, index)

    @classmethod
    def wire(cls, address):
        return cls(cls.WIRE, address)

    @property
    def is_input(self):
        return self.kind == CellRef.INPUT

    @property
    def is_wire(self):
        return self.kind == CellRef.WIRE

    def resolve(self, n_cells):
        """절대 셀 주소: Wire(a) → a, Input(i) → n_cells - i."""
        if self.is_wire:
            return self.index
        return n_cells - self.index

    def __eq__(self, other):
        if not isinstance(other, CellRef):
            return NotImplemented
        return self.kind == other.kind and self.index == other.index

    def __hash__(self):
        return hash((self.kind, self.index))

    def __repr__(self):
        return f"{self.kind.capitalize()}({self.index})"


class Circuit:
    """완성된(불변) 회로 정의.

    CircuitBuilder.build()로만 생성한다. Setup, Prover, Verifier가
    읽기 전용으로 공유한다.

    속성:
        input_config: InputConfig
        selectors: 행별 Op 튜플 (길이 n_rows)
        copy_constraints: 정렬된 주소 튜플의 튜플
        n_cells, n_rows: 셀 수, 행 수
        output: 마지막 행의 out 주소 (3·n_rows - 1)
    """

    def __init__(self, input_config, selectors, copy_constraints, n_cells, n_rows, output):
        self.input_config = input_config
        self.selectors = tuple(selectors)
        self.copy_constraints = tuple(tuple(group) for group in copy_constraints)
        self.n_cells = n_cells
        self.n_rows = n_rows
        self.output = output
        # 주소 → 복사 제약 집합 인덱스 (O(1) 조회)
        self._group_of = {}
        for group_index, group in enumerate(self.copy_constraints):
            for cell_id in group:
                self._group_of[cell_id] = group_index

    @property
    def n_inputs(self):
        return self.input_config.total_input

    @property
    def n_pub(self):
        return self.input_config.n_pub

    @property
    def n_priv(self):
        return self.input_config.n_priv

    @property
    def output_id(self):
        return self.output

    @property
    def n_wire_cells(self):
        return 3 * self.n_rows

    def is_wire(self, cell_id):
        """배선 셀 주소인지 확인한다 (입력 셀이 아님)."""
        return 0 <= cell_id < self.n_wire_cells

    def input_id(self, index):
        """k번째 입력(1부터)의 셀 주소 n_cells - k."""
        return self.n_cells - index

    def public_input_ids(self):
        """공개 입력 셀 주소 (선언 순서)."""
        return [self.input_id(k) for k in range(1, self.n_pub + 1)]

    def gate_ids(self):
        """각 행의 lhs 셀 주소 3r (게이트 항등식의 평가 점)."""
        return [3 * row for row in range(self.n_rows)]

    def get_selector(self, row):
        """row번째 행의 Op. 범위를 벗어나면 None."""
        if 0 <= row < self.n_rows:
            return self.selectors[row]
        return None

    def get_copy_constraints(self, cell_id):
        """cell_id를 포함하는 복사 제약 집합. 어떤 집합에도 없으면 None."""
        group_index = self._group_of.get(cell_id)
        if group_index is None:
            return None
        return self.copy_constraints[group_index]

    def __repr__(self):
        return (
            f"Circuit(inputs={self.input_config}, n_rows={self.n_rows}, "
            f"n_cells={self.n_cells}, groups={len(self.copy_constraints)})"
        )


class CircuitBuilder:
    """게이트를 한 행씩 추가하고 배선 쌍을 기록하는 가변 빌더.

    build()로 정확히 한 번 소비되어 Circuit을 만든다.
    """

    def __init__(self, input_config):
        self.input_config = input_config
        self.current_row = 0
        self.ops = []
        # (CellRef, CellRef) 쌍: build() 전까지 해석하지 않음
        self.wiring_pairs = []
        self._built = False

    def get_input_refs(self):
        """(공개 입력 참조 리스트, 비공개 입력 참조 리스트)를 반환한다.

        인덱스는 1부터 시작하며 공개 입력 블록이 먼저 온다.
        """
        n_pub = self.input_config.n_pub
        n_priv = self.input_config.n_priv
        public_refs = [CellRef.input(i) for i in range(1, n_pub + 1)]
        private_refs = [CellRef.input(i) for i in range(n_pub + 1, n_pub + n_priv + 1)]
        return public_refs, private_refs

    def add_addition(self, lhs, rhs):
        """덧셈 게이트 추가: out = lhs + rhs. out 셀 참조를 반환한다."""
        return self._add_gate(Op.ADD, lhs, rhs)

    def add_multiplication(self, lhs, rhs):
        """곱셈 게이트 추가: out = lhs · rhs. out 셀 참조를 반환한다."""
        return self._add_gate(Op.MUL, lhs, rhs)

    def add_wire_constraint(self, x, y):
        """두 셀이 같은 값을 가져야 함을 기록한다 (build()에서 검증/해석)."""
        self._check_not_built()
        self.wiring_pairs.append((x, y))

    def _add_gate(self, op, lhs, rhs):
        self._check_not_built()
        self._validate_cell_ref(lhs, "LHS")
        self._validate_cell_ref(rhs, "RHS")

        self.ops.append(op)
        pos = self.current_row * 3
        self.current_row += 1

        self.wiring_pairs.append((lhs, CellRef.wire(pos)))
        self.wiring_pairs.append((rhs, CellRef.wire(pos + 1)))

        logger.debug("row %d: %s(%r, %r) -> Wire(%d)", self.current_row - 1, op.name, lhs, rhs, pos + 2)
        return CellRef.wire(pos + 2)

    def _validate_cell_ref(self, cell, side):
        if cell.is_input:
            if cell.index < 1 or cell.index > self.input_config.total_input:
                raise InputOutOfRangeError(side, cell.index)
        elif cell.index < 0 or cell.index >= self.current_row * 3:
            raise WireOutOfRangeError(side, cell.index)

    def _check_not_built(self):
        if self._built:
            raise CircuitError("이미 build()된 빌더는 다시 사용할 수 없습니다")

    def build(self):
        """복사 제약을 계산하고 불변 Circuit을 반환한다.

        1. 입력마다 원소 1개짜리 집합 {n_cells - k} (k = 1, 2, ...)
        2. 선언 순서대로 각 쌍 (x, y)를 접는다:
           - x가 속한 집합이 있으면 y를 추가
           - 아니면 y가 속한 집합에 x를 추가
           - 둘 다 없으면 새 집합 {x, y}
           - 둘이 서로 다른 집합에 있으면 앞선 집합으로 병합
        3. 각 집합을 정렬된 튜플로 확정

        Raises:
            CircuitError: 행이 하나도 없을 때, 또는 이미 build()된 경우
            InputOutOfRangeError / WireOutOfRangeError: add_wire_constraint로
                기록된 참조가 범위를 벗어날 때
        """
        self._check_not_built()
        if self.current_row == 0:
            raise CircuitError("행이 없는 회로는 빌드할 수 없습니다")

        n_inputs = self.input_config.total_input
        n_cells = n_inputs + self.current_row * 3

        for x_ref, y_ref in self.wiring_pairs:
            self._validate_cell_ref(x_ref, "x")
            self._validate_cell_ref(y_ref, "y")

        groups = []
        group_of = {}
        for input_number in range(1, n_inputs + 1):
            cell_id = n_cells - input_number
            group_of[cell_id] = len(groups)
            groups.append({cell_id})

        for x_ref, y_ref in self.wiring_pairs:
            x = x_ref.resolve(n_cells)
            y = y_ref.resolve(n_cells)
            gx = group_of.get(x)
            gy = group_of.get(y)

            if gx is not None and gy is not None:
                if gx == gy:
                    continue
                keep, drop = min(gx, gy), max(gx, gy)
                for cell_id in groups[drop]:
                    group_of[cell_id] = keep
                groups[keep] |= groups[drop]
                groups[drop] = None
            elif gx is not None:
                groups[gx].add(y)
                group_of[y] = gx
            elif gy is not None:
                groups[gy].add(x)
                group_of[x] = gy
            else:
                group_of[x] = group_of[y] = len(groups)
                groups.append({x, y})

        copy_constraints = [tuple(sorted(group)) for group in groups if group is not None]
        self._built = True

        logger.debug(
            "built circuit: %d rows, %d cells, %d copy groups",
            self.current_row, n_cells, len(copy_constraints),
        )
        return Circuit(
            input_config=self.input_config,
            selectors=self.ops,
            copy_constraints=copy_constraints,
            n_cells=n_cells,
            n_rows=self.current_row,
            output=self.current_row * 3 - 1,
        )
