"""
tunnelsat/network/path_finder.py
================================
ExplicitPathFinder — exhaustive search for bounded tunnel paths.

Enumerates paths directly over (node, stack) states, with the same
rules the reduction encodes:
    - exactly `length` moves, no node visited twice
    - start at (initial, [A]) and end at (final, [A])
    - stack height stays below stack_size(length)

Exponential in `length`; intended as an oracle for small networks,
not as a replacement for the SAT route.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

from tunnelsat.core.types import Action, MoveKind, Step, Symbol, stack_size
from tunnelsat.network.base import TunnelNetwork

logger = logging.getLogger(__name__)

Stack = Tuple[Symbol, ...]


def apply_action(stack: Stack, action: Action, capacity: int) -> Optional[Stack]:
    """Stack after `action`, or None if the move is not applicable."""
    if not stack or stack[-1] != action.before:
        return None
    if action.kind == MoveKind.TRANSMIT:
        return stack
    if action.kind == MoveKind.PUSH:
        if len(stack) + 1 > capacity:
            return None
        return stack + (action.after,)
    if len(stack) < 2 or stack[-2] != action.after:
        return None
    return stack[:-1]


class ExplicitPathFinder:
    """Depth-first search for a path of exactly `length` moves.

    Usage:
        finder = ExplicitPathFinder(network)
        steps = finder.find(length=3)
        lengths = finder.feasible_lengths(max_length=6)
    """

    def __init__(self, network: TunnelNetwork):
        self._network = network

    def find(self, length: int) -> Optional[List[Step]]:
        """First path in DFS order (targets ascending, actions by name)."""
        start = self._network.initial
        capacity = stack_size(length)
        results: List[List[Step]] = []
        self._dfs(
            current=start,
            stack=(Symbol.A,),
            steps=[],
            visited={start},
            remaining=length,
            capacity=capacity,
            results=results,
            limit=1,
        )
        return results[0] if results else None

    def all_paths(self, length: int) -> List[List[Step]]:
        results: List[List[Step]] = []
        start = self._network.initial
        self._dfs(
            current=start,
            stack=(Symbol.A,),
            steps=[],
            visited={start},
            remaining=length,
            capacity=stack_size(length),
            results=results,
            limit=None,
        )
        return results

    def feasible_lengths(self, max_length: int) -> List[int]:
        """Every bound in [0, max_length] admitting at least one path."""
        return [n for n in range(max_length + 1) if self.find(n) is not None]

    def _dfs(
        self,
        current: int,
        stack: Stack,
        steps: List[Step],
        visited: Set[int],
        remaining: int,
        capacity: int,
        results: List[List[Step]],
        limit: Optional[int],
    ) -> None:
        if limit is not None and len(results) >= limit:
            return
        if remaining == 0:
            if current == self._network.final and stack == (Symbol.A,):
                results.append(list(steps))
            return
        # Every pushed cell must be popped before the end.
        if len(stack) - 1 > remaining:
            return
        for target, actions in self._network.out_edges(current):
            if target in visited:
                continue
            for action in sorted(actions, key=lambda a: a.value):
                new_stack = apply_action(stack, action, capacity)
                if new_stack is None:
                    continue
                step = Step(
                    action=action,
                    source=current,
                    target=target,
                    source_height=len(stack) - 1,
                    target_height=len(new_stack) - 1,
                )
                self._dfs(
                    target,
                    new_stack,
                    steps + [step],
                    visited | {target},
                    remaining - 1,
                    capacity,
                    results,
                    limit,
                )
