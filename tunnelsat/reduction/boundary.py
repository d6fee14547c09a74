"""
tunnelsat/reduction/boundary.py
===============================
Pins the two ends of the path.

    pos 0:       x(initial, 0, 0), every other (node, height) false, stack = [A]
    pos length:  x(final, length, 0), every other (node, height) false, stack = [A]

Starting and ending on the single-symbol stack makes every push along
the path matched by a later pop.
"""

from __future__ import annotations

import logging
from typing import List

import z3

from tunnelsat.core.types import Symbol, stack_size
from tunnelsat.network.base import TunnelNetwork
from tunnelsat.reduction.variables import VariableGenerator, conjunction

logger = logging.getLogger(__name__)


def endpoint_constraints(
    network: TunnelNetwork,
    variables: VariableGenerator,
    node: int,
    pos: int,
    heights: int,
) -> List[z3.BoolRef]:
    """Clauses fixing position `pos` to (node, height 0) with stack [A]."""
    clauses: List[z3.BoolRef] = [variables.path_var(node, pos, 0)]
    for other in range(network.num_nodes):
        for h in range(heights):
            if other == node and h == 0:
                continue
            clauses.append(z3.Not(variables.path_var(other, pos, h)))

    clauses.append(variables.holds_only(Symbol.A, pos, 0))
    for h in range(1, heights):
        clauses.append(variables.empty_cell(pos, h))
    return clauses


def boundary_constraints(
    network: TunnelNetwork,
    variables: VariableGenerator,
    length: int,
) -> z3.BoolRef:
    heights = stack_size(length)
    clauses = endpoint_constraints(network, variables, network.initial, 0, heights)
    clauses += endpoint_constraints(network, variables, network.final, length, heights)
    logger.debug("Boundary: %d clauses", len(clauses))
    return conjunction(clauses, variables.ctx)
