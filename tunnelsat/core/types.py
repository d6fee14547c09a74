"""
tunnelsat/core/types.py
=======================
Foundation type system for tunnelsat.
Every module imports from here. No circular dependencies.

Model:
  - A path of `length` moves visits positions 0..length.
  - At each position the path sits on one node with its stack top at
    some height h ∈ [0, stack_size).
  - Each move either transmits (h' = h), pushes (h' = h + 1) or pops
    (h' = h − 1), over a stack alphabet of two symbols {A, B}.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


def stack_size(length: int) -> int:
    """Number of stack cells needed for a path of `length` moves.

    A path that returns to height 0 can push at most ⌊length/2⌋ times,
    so cells 0..⌊length/2⌋ always suffice.
    """
    return length // 2 + 1


# ─────────────────────────────────────────────
#  ENUMERATIONS
# ─────────────────────────────────────────────

class Symbol(Enum):
    """Stack alphabet."""
    A = "A"
    B = "B"

    def __str__(self) -> str:
        return self.value


class MoveKind(Enum):
    TRANSMIT = "transmit"
    PUSH     = "push"
    POP      = "pop"

    @property
    def delta(self) -> int:
        """Height change produced by a move of this kind."""
        return _KIND_DELTA[self]


_KIND_DELTA = {MoveKind.TRANSMIT: 0, MoveKind.PUSH: 1, MoveKind.POP: -1}


class Action(Enum):
    """Labelled move along an edge.

    Names read the two top cells bottom-to-top:
        TRANSMIT_X   top is X, stack unchanged
        PUSH_XY      top is X, Y is pushed on top of it
        POP_XY       top is Y, popping it uncovers X
    """
    TRANSMIT_A = "transmit_A"
    TRANSMIT_B = "transmit_B"
    PUSH_AA    = "push_AA"
    PUSH_AB    = "push_AB"
    PUSH_BA    = "push_BA"
    PUSH_BB    = "push_BB"
    POP_AA     = "pop_AA"
    POP_AB     = "pop_AB"
    POP_BA     = "pop_BA"
    POP_BB     = "pop_BB"

    @property
    def kind(self) -> MoveKind:
        return MoveKind(self.value.split("_")[0])

    @property
    def delta(self) -> int:
        return self.kind.delta

    @property
    def before(self) -> Symbol:
        """Top symbol at the source of the move."""
        letters = self.value.split("_")[1]
        if self.kind == MoveKind.POP:
            return Symbol(letters[1])
        return Symbol(letters[0])

    @property
    def after(self) -> Symbol:
        """Top symbol at the target of the move."""
        letters = self.value.split("_")[1]
        if self.kind == MoveKind.TRANSMIT:
            return Symbol(letters[0])
        if self.kind == MoveKind.PUSH:
            return Symbol(letters[1])
        return Symbol(letters[0])

    @classmethod
    def transmit(cls, top: Symbol) -> "Action":
        return cls(f"transmit_{top.value}")

    @classmethod
    def push(cls, below: Symbol, pushed: Symbol) -> "Action":
        return cls(f"push_{below.value}{pushed.value}")

    @classmethod
    def pop(cls, remaining: Symbol, popped: Symbol) -> "Action":
        return cls(f"pop_{remaining.value}{popped.value}")

    @classmethod
    def classify(cls, delta: int, before: Symbol, after: Symbol) -> Optional["Action"]:
        """Action for a height change and the top symbols around the move.

        Returns None when the combination is not a legal move
        (|delta| > 1, or a transmit whose top symbol changed).
        """
        if delta == 0:
            return cls.transmit(before) if before == after else None
        if delta == 1:
            return cls.push(before, after)
        if delta == -1:
            return cls.pop(after, before)
        return None

    def __str__(self) -> str:
        return self.value


# ─────────────────────────────────────────────
#  PATH TYPES
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class Step:
    """One decoded move: `action` along the edge source → target.

    Heights are the stack-top heights at both ends of the move.
    """
    action:        Action
    source:        int
    target:        int
    source_height: int = 0
    target_height: int = 0

    @property
    def kind(self) -> MoveKind:
        return self.action.kind

    def __str__(self) -> str:
        return f"{self.source} -[{self.action}]-> {self.target}"
