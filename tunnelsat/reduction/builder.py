"""
tunnelsat/reduction/builder.py
==============================
Conjoins the four sub-formulas into the complete reduction.

    Φ(G, n) = Boundary ∧ Uniqueness ∧ SimplePath ∧ Transitions

Φ(G, n) is satisfiable iff G has a simple path of exactly n moves from
the initial to the final node that starts and ends on stack [A] and
never exceeds stack_size(n) cells.

Formula size is O(n · |V|² · s²) for uniqueness plus
O(n · |V| · s · |E| · s) for transitions, with s = stack_size(n).
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import z3

from tunnelsat.core.types import stack_size
from tunnelsat.network.base import TunnelNetwork
from tunnelsat.reduction.boundary import boundary_constraints
from tunnelsat.reduction.simple_path import simple_path_constraints
from tunnelsat.reduction.transitions import transition_constraints
from tunnelsat.reduction.uniqueness import uniqueness_constraints
from tunnelsat.reduction.variables import VariableGenerator, conjunction

logger = logging.getLogger(__name__)

SubFormula = Callable[[TunnelNetwork, VariableGenerator, int], z3.BoolRef]

SUB_FORMULAS: "OrderedDict[str, SubFormula]" = OrderedDict(
    [
        ("boundary", boundary_constraints),
        ("uniqueness", uniqueness_constraints),
        ("simple_path", simple_path_constraints),
        ("transitions", transition_constraints),
    ]
)


@dataclass
class Reduction:
    """A built formula together with everything needed to read its models.

    Attributes:
        formula:    Conjunction of all parts.
        parts:      Sub-formula name → sub-formula, in build order.
        variables:  Generator the formula was built with; the decoder
                    must use the same one.
        length:     Number of moves of the sought path.
    """

    formula: z3.BoolRef
    length: int
    variables: VariableGenerator
    parts: Dict[str, z3.BoolRef] = field(default_factory=dict)

    @property
    def stack_size(self) -> int:
        return stack_size(self.length)

    @property
    def num_variables(self) -> int:
        return self.variables.size


def build_reduction(
    network: TunnelNetwork,
    length: int,
    variables: Optional[VariableGenerator] = None,
) -> Reduction:
    """Build Φ(network, length).

    Args:
        network:   Network to encode.
        length:    Exact number of moves of the path.
        variables: Generator to share with other formulas; a fresh one
                   over Z3's main context by default.
    """
    variables = variables or VariableGenerator()
    parts: Dict[str, z3.BoolRef] = OrderedDict()
    for name, build in SUB_FORMULAS.items():
        parts[name] = build(network, variables, length)

    formula = conjunction(parts.values(), variables.ctx)
    logger.debug(
        "Built reduction: %d nodes, length %d, stack size %d, %d variables",
        network.num_nodes, length, stack_size(length), variables.size,
    )
    return Reduction(formula=formula, length=length, variables=variables, parts=parts)
