"""
tunnelsat/reduction/variables.py
================================
Boolean propositions of the reduction.

    x(node, pos, height)    path is on `node` at `pos` with its stack top at `height`
    y(symbol, pos, height)  the stack cell `height` holds `symbol` at `pos`

Both y-variables of a cell false means the cell is empty.

Every proposition is created once per key and cached, so all
sub-formulas and the decoder refer to the same Z3 term. Z3 also
interns Bool constants by name within a context; the cache only
avoids rebuilding the name and AST wrapper on every call.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import z3

from tunnelsat.core.types import Symbol

logger = logging.getLogger(__name__)


class VariableGenerator:
    """Deterministic key → proposition mapping.

    Ranges (0 ≤ pos ≤ length, 0 ≤ height < stack_size) are a caller
    contract and are not checked here.
    """

    def __init__(self, ctx: Optional[z3.Context] = None):
        self.ctx = ctx
        self._path: Dict[Tuple[int, int, int], z3.BoolRef] = {}
        self._symbol: Dict[Tuple[Symbol, int, int], z3.BoolRef] = {}

    def path_var(self, node: int, pos: int, height: int) -> z3.BoolRef:
        key = (node, pos, height)
        var = self._path.get(key)
        if var is None:
            var = z3.Bool(f"x_{node}_{pos}_{height}", self.ctx)
            self._path[key] = var
        return var

    def symbol_var(self, symbol: Symbol, pos: int, height: int) -> z3.BoolRef:
        key = (symbol, pos, height)
        var = self._symbol.get(key)
        if var is None:
            var = z3.Bool(f"y_{symbol.value}_{pos}_{height}", self.ctx)
            self._symbol[key] = var
        return var

    def occupancy(self, node: int, pos: int, heights: int) -> z3.BoolRef:
        """`node` is on the path at `pos`, at any height below `heights`."""
        return disjunction([self.path_var(node, pos, h) for h in range(heights)], self.ctx)

    def empty_cell(self, pos: int, height: int) -> z3.BoolRef:
        return z3.And(
            z3.Not(self.symbol_var(Symbol.A, pos, height)),
            z3.Not(self.symbol_var(Symbol.B, pos, height)),
        )

    def holds_only(self, symbol: Symbol, pos: int, height: int) -> z3.BoolRef:
        """Cell holds `symbol` and not the other one."""
        other = Symbol.B if symbol == Symbol.A else Symbol.A
        return z3.And(
            self.symbol_var(symbol, pos, height),
            z3.Not(self.symbol_var(other, pos, height)),
        )

    @property
    def size(self) -> int:
        """Number of distinct propositions created so far."""
        return len(self._path) + len(self._symbol)

    # ─── MODEL EVALUATION ──────────────────────────────────────────

    @staticmethod
    def is_true(model: z3.ModelRef, var: z3.BoolRef) -> bool:
        """Truth value of `var` in `model`; unassigned variables read as false."""
        return z3.is_true(model.eval(var, model_completion=True))


# ─── FORMULA HELPERS ──────────────────────────────────────────────

def conjunction(parts: Iterable[z3.BoolRef], ctx: Optional[z3.Context] = None) -> z3.BoolRef:
    """And over any number of sub-formulas; True when empty."""
    items: List[z3.BoolRef] = list(parts)
    if not items:
        return z3.BoolVal(True, ctx)
    if len(items) == 1:
        return items[0]
    return z3.And(items)


def disjunction(parts: Iterable[z3.BoolRef], ctx: Optional[z3.Context] = None) -> z3.BoolRef:
    """Or over any number of sub-formulas; False when empty."""
    items: List[z3.BoolRef] = list(parts)
    if not items:
        return z3.BoolVal(False, ctx)
    if len(items) == 1:
        return items[0]
    return z3.Or(items)


def at_most_one(literals: List[z3.BoolRef]) -> List[z3.BoolRef]:
    """Pairwise exclusion clauses ¬(a ∧ b) for every pair of literals."""
    return [
        z3.Not(z3.And(literals[i], literals[j]))
        for i in range(len(literals))
        for j in range(i + 1, len(literals))
    ]
