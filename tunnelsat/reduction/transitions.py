"""
tunnelsat/reduction/transitions.py
==================================
Every move between consecutive positions follows a real edge and
respects the stack.

For pos < length, node u and height h:

    x(u, pos, h) → ∨ { move(u → v, a, pos, h) | a ∈ actions(u, v) }

with, writing S(p, k) for "cell k holds S at p" and keep(p, k) for
"cells 0..k are identical at p and p+1":

    TRANSMIT_X   x(v, pos+1, h)   ∧ X(pos, h)                   ∧ keep(pos, h)
    PUSH_XY      x(v, pos+1, h+1) ∧ X(pos, h) ∧ Y(pos+1, h+1)   ∧ keep(pos, h)
    POP_XY       x(v, pos+1, h−1) ∧ Y(pos, h) ∧ X(pos, h−1)     ∧ keep(pos, h−1)

Pushes need h + 1 < stack_size, pops need h > 0; moves outside those
bounds are never generated, so a state with no legal move is forced
false. Together with uniqueness this rules out every
(node, height) → (node', height') pair that is not an edge move.

The stack shape ties the y-variables to the height:

    x(u, pos, h) → cells 0..h hold exactly one symbol, cells above h are empty
"""

from __future__ import annotations

import logging
from typing import List

import z3

from tunnelsat.core.types import Action, MoveKind, Symbol, stack_size
from tunnelsat.network.base import TunnelNetwork
from tunnelsat.reduction.variables import VariableGenerator, conjunction, disjunction

logger = logging.getLogger(__name__)


def _keep_cells(variables: VariableGenerator, pos: int, top: int) -> List[z3.BoolRef]:
    """Cells 0..top unchanged between pos and pos + 1."""
    return [
        variables.symbol_var(s, pos, k) == variables.symbol_var(s, pos + 1, k)
        for k in range(top + 1)
        for s in Symbol
    ]


def move_formula(
    variables: VariableGenerator,
    action: Action,
    target: int,
    pos: int,
    height: int,
    heights: int,
) -> z3.BoolRef:
    """Formula for taking `action` to `target` from height `height` at `pos`.

    Returns False when the move would overflow or underflow the stack.
    """
    sym = variables.symbol_var
    if action.kind == MoveKind.TRANSMIT:
        parts = [
            variables.path_var(target, pos + 1, height),
            sym(action.before, pos, height),
        ]
        parts += _keep_cells(variables, pos, height)
    elif action.kind == MoveKind.PUSH:
        if height + 1 >= heights:
            return z3.BoolVal(False, variables.ctx)
        parts = [
            variables.path_var(target, pos + 1, height + 1),
            sym(action.before, pos, height),
            sym(action.after, pos + 1, height + 1),
        ]
        parts += _keep_cells(variables, pos, height)
    else:
        if height == 0:
            return z3.BoolVal(False, variables.ctx)
        parts = [
            variables.path_var(target, pos + 1, height - 1),
            sym(action.before, pos, height),
            sym(action.after, pos, height - 1),
        ]
        parts += _keep_cells(variables, pos, height - 1)
    return conjunction(parts, variables.ctx)


def _legal_actions(
    network: TunnelNetwork, source: int, target: int, height: int, heights: int
) -> List[Action]:
    """Actions of the edge that fit the stack bounds at `height`, by symbol."""
    actions: List[Action] = []
    for top in Symbol:
        if network.can_transmit(source, target, top):
            actions.append(Action.transmit(top))
        if height + 1 < heights:
            actions.extend(
                Action.push(top, pushed)
                for pushed in network.pushed_symbols(source, target, top)
            )
        if height > 0:
            actions.extend(
                Action.pop(remaining, top)
                for remaining in Symbol
                if network.can_pop(source, target, top, remaining)
            )
    return actions


def stack_shape_constraints(
    network: TunnelNetwork,
    variables: VariableGenerator,
    length: int,
) -> List[z3.BoolRef]:
    heights = stack_size(length)
    clauses: List[z3.BoolRef] = []
    for pos in range(length + 1):
        for h in range(heights):
            at_height = disjunction(
                [variables.path_var(n, pos, h) for n in range(network.num_nodes)],
                variables.ctx,
            )
            shape = [
                z3.Xor(
                    variables.symbol_var(Symbol.A, pos, k),
                    variables.symbol_var(Symbol.B, pos, k),
                )
                for k in range(h + 1)
            ]
            shape += [variables.empty_cell(pos, k) for k in range(h + 1, heights)]
            clauses.append(z3.Implies(at_height, conjunction(shape, variables.ctx)))
    return clauses


def transition_constraints(
    network: TunnelNetwork,
    variables: VariableGenerator,
    length: int,
) -> z3.BoolRef:
    heights = stack_size(length)
    clauses: List[z3.BoolRef] = []
    for pos in range(length):
        for source in range(network.num_nodes):
            out_edges = network.out_edges(source)
            for h in range(heights):
                moves = [
                    move_formula(variables, action, target, pos, h, heights)
                    for target, _ in out_edges
                    for action in _legal_actions(network, source, target, h, heights)
                ]
                clauses.append(
                    z3.Implies(
                        variables.path_var(source, pos, h),
                        disjunction(moves, variables.ctx),
                    )
                )
    clauses += stack_shape_constraints(network, variables, length)
    logger.debug("Transitions: %d clauses", len(clauses))
    return conjunction(clauses, variables.ctx)
