"""
tunnelsat/reduction/simple_path.py
==================================
No node is visited twice.

    ∀n, ∀pos < pos':  ¬(occ(n, pos) ∧ occ(n, pos'))
    where occ(n, pos) = ∨_h x(n, pos, h)

Also bounds any satisfiable length by num_nodes − 1.
"""

from __future__ import annotations

import logging
from typing import List

import z3

from tunnelsat.core.types import stack_size
from tunnelsat.network.base import TunnelNetwork
from tunnelsat.reduction.variables import VariableGenerator, at_most_one, conjunction

logger = logging.getLogger(__name__)


def simple_path_constraints(
    network: TunnelNetwork,
    variables: VariableGenerator,
    length: int,
) -> z3.BoolRef:
    heights = stack_size(length)
    clauses: List[z3.BoolRef] = []
    for node in range(network.num_nodes):
        visits = [variables.occupancy(node, pos, heights) for pos in range(length + 1)]
        clauses.extend(at_most_one(visits))
    logger.debug("Simple path: %d clauses", len(clauses))
    return conjunction(clauses, variables.ctx)
