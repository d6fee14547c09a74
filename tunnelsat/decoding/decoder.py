"""
tunnelsat/decoding/decoder.py
=============================
ModelDecoder — read the path back out of a satisfying model.

For each pos in [0, length):
    1. Scan every (node, height) at pos and at pos + 1 for a true x-variable.
    2. The height change picks the move kind: 0 transmit, +1 push, −1 pop.
    3. The symbols at (pos, src_height) and (pos + 1, tgt_height) pick the
       action within that kind.

Cost O(|V| · stack_size) model evaluations per position.

Models of a correct reduction always yield exactly one state per
position. When a model does not (wrong formula, foreign model), the
decoder by default logs a warning, takes the first candidate in scan
order (nodes ascending, then heights ascending) and stops at the first
position with no candidate. With strict=True it raises
ModelInconsistency instead.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import z3

from tunnelsat.core.exceptions import ModelInconsistency
from tunnelsat.core.types import Action, Step, Symbol, stack_size
from tunnelsat.network.base import TunnelNetwork
from tunnelsat.reduction.variables import VariableGenerator

logger = logging.getLogger(__name__)

State = Tuple[int, int]


class ModelDecoder:
    """Turn a model of the reduction into a list of Steps.

    Usage:
        decoder = ModelDecoder(network, reduction.variables, reduction.length)
        steps = decoder.decode(solver.model())
    """

    def __init__(
        self,
        network: TunnelNetwork,
        variables: VariableGenerator,
        length: int,
        strict: bool = False,
    ):
        self._network = network
        self._variables = variables
        self._length = length
        self._heights = stack_size(length)
        self.strict = strict

    # ─── PUBLIC API ────────────────────────────────────────────────

    def decode(self, model: z3.ModelRef) -> List[Step]:
        """Ordered list of `length` steps described by `model`.

        Shorter only when the model is inconsistent and strict is off.
        """
        steps: List[Step] = []
        for pos in range(self._length):
            step = self._decode_position(model, pos)
            if step is None:
                logger.warning(
                    "Decoding stopped at position %d: %d of %d steps recovered.",
                    pos, len(steps), self._length,
                )
                break
            steps.append(step)
        logger.info("Decoded %d step(s) from model.", len(steps))
        return steps

    def states_at(self, model: z3.ModelRef, pos: int) -> List[State]:
        """All (node, height) pairs true at `pos`, in scan order."""
        is_true = self._variables.is_true
        return [
            (node, h)
            for node in range(self._network.num_nodes)
            for h in range(self._heights)
            if is_true(model, self._variables.path_var(node, pos, h))
        ]

    # ─── INTERNALS ─────────────────────────────────────────────────

    def _decode_position(self, model: z3.ModelRef, pos: int) -> Optional[Step]:
        source = self._pick_state(model, pos)
        target = self._pick_state(model, pos + 1)
        if source is None or target is None:
            return None

        src, src_h = source
        tgt, tgt_h = target
        before = self._read_symbol(model, pos, src_h)
        after = self._read_symbol(model, pos + 1, tgt_h)
        action = Action.classify(tgt_h - src_h, before, after)
        if action is None:
            self._inconsistent(
                f"No action moves from height {src_h} ({before}) "
                f"to height {tgt_h} ({after}) at position {pos}.",
                pos,
                [source, target],
            )
            return None

        return Step(
            action=action,
            source=src,
            target=tgt,
            source_height=src_h,
            target_height=tgt_h,
        )

    def _pick_state(self, model: z3.ModelRef, pos: int) -> Optional[State]:
        states = self.states_at(model, pos)
        if len(states) == 1:
            return states[0]
        if not states:
            self._inconsistent(f"No (node, height) pair is true at position {pos}.", pos, [])
            return None
        self._inconsistent(
            f"{len(states)} (node, height) pairs are true at position {pos}: {states}.",
            pos,
            states,
        )
        return states[0]

    def _read_symbol(self, model: z3.ModelRef, pos: int, height: int) -> Symbol:
        is_true = self._variables.is_true
        has_a = is_true(model, self._variables.symbol_var(Symbol.A, pos, height))
        has_b = is_true(model, self._variables.symbol_var(Symbol.B, pos, height))
        if has_a != has_b:
            return Symbol.A if has_a else Symbol.B
        state = "both symbols" if has_a else "no symbol"
        self._inconsistent(
            f"Stack cell {height} holds {state} at position {pos}.", pos, []
        )
        return Symbol.A if has_a else Symbol.B

    def _inconsistent(self, message: str, pos: int, candidates: List[State]) -> None:
        if self.strict:
            raise ModelInconsistency(message, position=pos, candidates=candidates)
        logger.warning(message)


def decode_path(
    model: z3.ModelRef,
    network: TunnelNetwork,
    length: int,
    variables: Optional[VariableGenerator] = None,
    strict: bool = False,
) -> List[Step]:
    """One-shot decoding with a throwaway ModelDecoder.

    `variables` defaults to a fresh generator over Z3's main context,
    which names propositions exactly as build_reduction's default does.
    """
    decoder = ModelDecoder(network, variables or VariableGenerator(), length, strict=strict)
    return decoder.decode(model)
