"""
Witness engine tests: compute_witness (data-flow evaluation)
"""
import random

import pytest

from zkp.plonkish.circuit import Circuit, CircuitBuilder, InputConfig, Op
from zkp.plonkish.errors import (
    CopyConstraintConflictError,
    IncompleteTraceError,
    InputLengthError,
)
from zkp.plonkish.field import FR
from zkp.plonkish.witness import _TraceBuilder, compute_witness


def _gates_hold(circuit, trace):
    for row in range(circuit.n_rows):
        lhs, rhs, out = trace[3 * row:3 * row + 3]
        if circuit.get_selector(row).apply(lhs, rhs) != out:
            return False
    return True


def _copies_hold(circuit, trace):
    return all(
        len({int(trace[cell_id]) for cell_id in group}) == 1
        for group in circuit.copy_constraints
    )


class TestExampleWitness:
    def test_trace(self, example_circuit, example_inputs, example_trace):
        public, private = example_inputs
        assert compute_witness(example_circuit, public, private) == example_trace

    def test_accepts_ints(self, example_circuit, example_trace):
        assert compute_witness(example_circuit, [3, 5], [7]) == example_trace

    def test_output_value(self, example_circuit):
        trace = compute_witness(example_circuit, [3, 5], [7])
        assert trace[example_circuit.output_id] == FR(57)

    def test_deterministic(self, example_circuit):
        first = compute_witness(example_circuit, [11, 13], [17])
        second = compute_witness(example_circuit, [11, 13], [17])
        assert first == second

    def test_constraints_hold(self, example_circuit):
        trace = compute_witness(example_circuit, [2, 9], [4])
        assert _gates_hold(example_circuit, trace)
        assert _copies_hold(example_circuit, trace)


class TestInputLength:
    def test_too_few_public(self, example_circuit):
        with pytest.raises(InputLengthError) as excinfo:
            compute_witness(example_circuit, [3], [7])
        assert excinfo.value.kind == "public"
        assert excinfo.value.expected == 2
        assert excinfo.value.actual == 1

    def test_too_many_private(self, example_circuit):
        with pytest.raises(InputLengthError) as excinfo:
            compute_witness(example_circuit, [3, 5], [7, 8])
        assert excinfo.value.kind == "private"


class TestMalformedCircuits:
    def test_intermediate_output_propagates(self):
        builder = CircuitBuilder(InputConfig(2, 0))
        (a, b), _ = builder.get_input_refs()
        w0 = builder.add_addition(a, b)
        w1 = builder.add_multiplication(w0, w0)
        builder.add_addition(w1, a)
        circuit = builder.build()
        trace = compute_witness(circuit, [1, 2], [])
        assert trace[circuit.output_id] == FR(10)

    def test_incomplete_trace_lists_missing_cells(self):
        # row 1 reads its lhs only from the final output, which never propagates
        circuit = Circuit(
            InputConfig(1, 0),
            [Op.ADD, Op.ADD],
            copy_constraints=((0, 1, 4, 6), (3, 5)),
            n_cells=7,
            n_rows=2,
            output=5,
        )
        with pytest.raises(IncompleteTraceError) as excinfo:
            compute_witness(circuit, [3], [])
        assert excinfo.value.missing == [3, 5]

    def test_conflicting_copy_constraint(self):
        builder = CircuitBuilder(InputConfig(2, 0))
        (a, b), _ = builder.get_input_refs()
        builder.add_addition(a, b)
        builder.add_wire_constraint(a, b)
        circuit = builder.build()
        with pytest.raises(CopyConstraintConflictError):
            compute_witness(circuit, [3, 4], [])
        # equal values satisfy the same circuit
        assert compute_witness(circuit, [3, 3], [])[2] == FR(6)

    def test_prefilled_output_must_satisfy_gate(self):
        builder = CircuitBuilder(InputConfig(2, 0))
        (a, b), _ = builder.get_input_refs()
        out = builder.add_multiplication(a, b)
        builder.add_addition(out, a)
        # the first row's output is also tied to input 2
        builder.add_wire_constraint(out, b)
        circuit = builder.build()
        with pytest.raises(CopyConstraintConflictError):
            compute_witness(circuit, [3, 4], [])
        # a · b == b holds for a = 1
        trace = compute_witness(circuit, [1, 4], [])
        assert trace[circuit.output_id] == FR(5)


class TestRandomCircuits:
    @pytest.mark.parametrize("seed", range(5))
    def test_random_chain_completes(self, seed):
        rng = random.Random(seed)
        n_pub, n_priv = rng.randint(0, 3), rng.randint(1, 3)
        builder = CircuitBuilder(InputConfig(n_pub, n_priv))
        public, private = builder.get_input_refs()
        available = public + private
        for _ in range(rng.randint(1, 12)):
            lhs, rhs = rng.choice(available), rng.choice(available)
            if rng.random() < 0.5:
                available.append(builder.add_addition(lhs, rhs))
            else:
                available.append(builder.add_multiplication(lhs, rhs))
        circuit = builder.build()

        pub_values = [rng.randint(0, 1000) for _ in range(n_pub)]
        priv_values = [rng.randint(0, 1000) for _ in range(n_priv)]
        trace = compute_witness(circuit, pub_values, priv_values)

        assert len(trace) == circuit.n_cells
        assert all(value is not None for value in trace)
        assert _gates_hold(circuit, trace)
        assert _copies_hold(circuit, trace)
        for k, value in enumerate(pub_values + priv_values, start=1):
            assert trace[circuit.input_id(k)] == FR(value)


class TestQueue:
    def test_ready_row_is_queued_once(self, example_circuit):
        builder = _TraceBuilder(example_circuit)
        builder.assign_group(example_circuit.input_id(1), FR(3))
        builder.assign_group(example_circuit.input_id(3), FR(7))
        # re-assigning the same values makes row 0 ready again
        builder.assign_group(example_circuit.input_id(1), FR(3))
        builder.assign_group(example_circuit.input_id(3), FR(7))
        assert list(builder.queue) == [2]
        assert builder.queued == {2}

    def test_drain_fills_rows_in_order(self, example_circuit, example_trace):
        builder = _TraceBuilder(example_circuit)
        for k, value in enumerate([3, 5, 7], start=1):
            builder.assign_group(example_circuit.input_id(k), FR(value))
        builder.drain()
        assert builder.trace == example_trace
        assert builder.queued == {2, 5, 8}
