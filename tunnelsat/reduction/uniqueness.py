"""
tunnelsat/reduction/uniqueness.py
=================================
Exactly one (node, height) pair per position.

    ∀pos:  ∨_{n,h} x(n, pos, h)                       (some state)
           ∧_{(n,h) ≠ (n',h')} ¬(x(n,pos,h) ∧ x(n',pos,h'))   (no two states)

The decoder relies on this without re-checking it.
"""

from __future__ import annotations

import logging
from typing import List

import z3

from tunnelsat.core.types import stack_size
from tunnelsat.network.base import TunnelNetwork
from tunnelsat.reduction.variables import (
    VariableGenerator,
    at_most_one,
    conjunction,
    disjunction,
)

logger = logging.getLogger(__name__)


def uniqueness_constraints(
    network: TunnelNetwork,
    variables: VariableGenerator,
    length: int,
) -> z3.BoolRef:
    heights = stack_size(length)
    clauses: List[z3.BoolRef] = []
    for pos in range(length + 1):
        states = [
            variables.path_var(node, pos, h)
            for node in range(network.num_nodes)
            for h in range(heights)
        ]
        clauses.append(disjunction(states, variables.ctx))
        clauses.extend(at_most_one(states))
    logger.debug("Uniqueness: %d clauses", len(clauses))
    return conjunction(clauses, variables.ctx)
