"""
tests/unit/test_types.py
========================
Tests for tunnelsat/core/types.py: stack sizing, Action variants, Step.
"""
import pytest

from tunnelsat.core.types import Action, MoveKind, Step, Symbol, stack_size


class TestStackSize:
    @pytest.mark.parametrize(
        "length,expected",
        [(0, 1), (1, 1), (2, 2), (3, 2), (4, 3), (10, 6), (11, 6)],
    )
    def test_floor_half_plus_one(self, length, expected):
        assert stack_size(length) == expected


class TestAction:
    def test_ten_closed_variants(self):
        assert len(list(Action)) == 10

    def test_kinds(self):
        assert Action.TRANSMIT_B.kind == MoveKind.TRANSMIT
        assert Action.PUSH_BA.kind == MoveKind.PUSH
        assert Action.POP_AB.kind == MoveKind.POP

    def test_deltas(self):
        assert Action.TRANSMIT_A.delta == 0
        assert Action.PUSH_AB.delta == 1
        assert Action.POP_BB.delta == -1

    def test_transmit_keeps_top(self):
        assert Action.TRANSMIT_B.before == Symbol.B
        assert Action.TRANSMIT_B.after == Symbol.B

    def test_push_reads_below_then_pushed(self):
        assert Action.PUSH_AB.before == Symbol.A
        assert Action.PUSH_AB.after == Symbol.B

    def test_pop_reads_remaining_then_popped(self):
        # POP_AB pops B and uncovers A
        assert Action.POP_AB.before == Symbol.B
        assert Action.POP_AB.after == Symbol.A

    def test_constructors(self):
        assert Action.transmit(Symbol.A) is Action.TRANSMIT_A
        assert Action.push(Symbol.B, Symbol.A) is Action.PUSH_BA
        assert Action.pop(Symbol.B, Symbol.A) is Action.POP_BA

    def test_constructors_invert_properties(self):
        for action in Action:
            if action.kind == MoveKind.TRANSMIT:
                assert Action.transmit(action.before) is action
            elif action.kind == MoveKind.PUSH:
                assert Action.push(action.before, action.after) is action
            else:
                assert Action.pop(action.after, action.before) is action

    def test_classify_every_action(self):
        for action in Action:
            assert Action.classify(action.delta, action.before, action.after) is action

    def test_classify_rejects_symbol_change_on_transmit(self):
        assert Action.classify(0, Symbol.A, Symbol.B) is None

    def test_classify_rejects_large_delta(self):
        assert Action.classify(2, Symbol.A, Symbol.A) is None
        assert Action.classify(-2, Symbol.A, Symbol.A) is None

    def test_string_value(self):
        assert str(Action.PUSH_AB) == "push_AB"
        assert Action("pop_BA") is Action.POP_BA


class TestStep:
    def test_frozen(self):
        step = Step(Action.TRANSMIT_A, 0, 1)
        with pytest.raises(Exception):
            step.source = 2

    def test_default_heights(self):
        step = Step(Action.TRANSMIT_A, 0, 1)
        assert step.source_height == 0
        assert step.target_height == 0

    def test_kind_and_str(self):
        step = Step(Action.PUSH_AB, 3, 4, 0, 1)
        assert step.kind == MoveKind.PUSH
        assert str(step) == "3 -[push_AB]-> 4"

    def test_equality(self):
        assert Step(Action.POP_AB, 1, 2, 1, 0) == Step(Action.POP_AB, 1, 2, 1, 0)
