"""
tunnelsat/decoding/renderer.py
==============================
TraceRenderer — diagnostic dump of a model, position by position.

For each position in [0, bound]:
    State:  every (node, height) pair set true (exactly one expected)
    Stack:  every cell as A, B, X (both symbols set) or blank (empty)

A cell holding a symbol above an empty cell, or a cell holding both
symbols, marks the stack at that position as ill-defined.

Nothing here raises: wrong counts and bad stacks are recorded as
warnings on the trace. Rendering reads only the model, so equal models
render to identical text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

import z3

from tunnelsat.core.types import Symbol, stack_size
from tunnelsat.network.base import TunnelNetwork
from tunnelsat.reduction.variables import VariableGenerator

logger = logging.getLogger(__name__)


class CellState(Enum):
    EMPTY    = " "
    A        = "A"
    B        = "B"
    CONFLICT = "X"


@dataclass
class PositionTrace:
    """Model contents at one position."""

    position: int
    states: List[Tuple[str, int]]  # (node name, height) pairs set true
    cells: List[CellState]         # bottom to top
    ill_defined: bool = False

    @property
    def warnings(self) -> List[str]:
        out: List[str] = []
        if not self.states:
            out.append("no (node, height) pair at this position")
        elif len(self.states) > 1:
            out.append(f"{len(self.states)} (node, height) pairs at this position")
        if self.ill_defined:
            out.append("ill-defined stack")
        return out

    @property
    def well_formed(self) -> bool:
        return not self.warnings

    def stack_column(self) -> str:
        return "".join(f"|{cell.value}" for cell in self.cells)


@dataclass
class StackTrace:
    """Per-position trace of a whole model."""

    bound: int
    positions: List[PositionTrace] = field(default_factory=list)

    @property
    def well_formed(self) -> bool:
        return all(p.well_formed for p in self.positions)

    @property
    def warning_count(self) -> int:
        return sum(len(p.warnings) for p in self.positions)

    def render(self) -> str:
        lines: List[str] = []
        for p in self.positions:
            lines.append(f"At pos {p.position}:")
            if p.states:
                lines.append(
                    "State: " + " ".join(f"({name},{h})" for name, h in p.states)
                )
            else:
                lines.append("State: -")
            lines.append(f"Stack: {p.stack_column()}")
            for warning in p.warnings:
                lines.append(f"Warning: {warning}")
        return "\n".join(lines)


class TraceRenderer:
    """Build StackTraces from models of a reduction.

    Usage:
        renderer = TraceRenderer(network, reduction.variables, reduction.length)
        print(renderer.render(solver.model()))
    """

    def __init__(self, network: TunnelNetwork, variables: VariableGenerator, bound: int):
        self._network = network
        self._variables = variables
        self._bound = bound
        self._heights = stack_size(bound)

    def trace(self, model: z3.ModelRef) -> StackTrace:
        result = StackTrace(bound=self._bound)
        for pos in range(self._bound + 1):
            result.positions.append(self._trace_position(model, pos))
        if not result.well_formed:
            logger.warning(
                "Model trace has %d warning(s) over %d positions.",
                result.warning_count, self._bound + 1,
            )
        return result

    def render(self, model: z3.ModelRef) -> str:
        return self.trace(model).render()

    def _trace_position(self, model: z3.ModelRef, pos: int) -> PositionTrace:
        is_true = self._variables.is_true
        states = [
            (self._network.node_name(node), h)
            for node in range(self._network.num_nodes)
            for h in range(self._heights)
            if is_true(model, self._variables.path_var(node, pos, h))
        ]

        cells: List[CellState] = []
        ill_defined = False
        above_top = False
        for h in range(self._heights):
            has_a = is_true(model, self._variables.symbol_var(Symbol.A, pos, h))
            has_b = is_true(model, self._variables.symbol_var(Symbol.B, pos, h))
            if has_a and has_b:
                cells.append(CellState.CONFLICT)
                ill_defined = True
            elif has_a or has_b:
                cells.append(CellState.A if has_a else CellState.B)
                if above_top:
                    ill_defined = True
            else:
                cells.append(CellState.EMPTY)
                above_top = True

        return PositionTrace(position=pos, states=states, cells=cells, ill_defined=ill_defined)
