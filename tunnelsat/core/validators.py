"""
tunnelsat/core/validators.py
============================
Input and output validation utilities for tunnelsat.

Validates:
    - Network structure (indices, names, edge endpoints)
    - Path bounds at API boundaries
    - Decoded paths, by replaying them on a simulated stack

These validators run at API boundaries, not inside the encoding.
Structural checks return a list of error strings (empty = valid);
bad bounds raise TunnelSatError with structured context.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from tunnelsat.core.exceptions import TunnelSatError
from tunnelsat.core.types import MoveKind, Step, Symbol, stack_size
from tunnelsat.network.base import TunnelNetwork


# ─── NETWORK VALIDATION ───────────────────────────────────────────

def validate_network(network: TunnelNetwork) -> List[str]:
    """Validate a network. Returns list of error strings.

    Checks:
        1. At least one node
        2. Initial and final nodes are in range
        3. Node names are non-empty and unique
        4. Every edge endpoint is in range and every edge has an action
           (AdjacencyNetwork never lists an empty edge; other backends may)
    """
    errors: List[str] = []
    n = network.num_nodes

    if n == 0:
        return ["Network has no nodes"]

    for label, node in (("initial", network.initial), ("final", network.final)):
        if not 0 <= node < n:
            errors.append(f"{label.capitalize()} node {node} out of range [0, {n})")

    seen = set()
    for node in range(n):
        name = network.node_name(node)
        if not name:
            errors.append(f"Node {node} has an empty name")
        elif name in seen:
            errors.append(f"Duplicate node name '{name}'")
        seen.add(name)

    for source, target in network.edges():
        if not (0 <= source < n and 0 <= target < n):
            errors.append(f"Edge {source} -> {target} has an endpoint out of range")
            continue
        if not network.actions(source, target):
            errors.append(f"Edge {source} -> {target} carries no action")

    return errors


# ─── BOUND VALIDATION ─────────────────────────────────────────────

def validate_length(length: int) -> int:
    """Return `length` unchanged if it is a usable path bound.

    Raises:
        TunnelSatError: if length is not a non-negative int.
    """
    if isinstance(length, bool) or not isinstance(length, int):
        raise TunnelSatError(
            f"Path length must be an int, got {type(length).__name__}.",
            context={"length": length},
        )
    if length < 0:
        raise TunnelSatError(
            f"Path length must be >= 0, got {length}.",
            context={"length": length},
        )
    return length


# ─── PATH VALIDATION ──────────────────────────────────────────────

def validate_path(
    network: TunnelNetwork,
    steps: Sequence[Step],
    length: Optional[int] = None,
) -> List[str]:
    """Replay `steps` on the network. Returns list of error strings.

    Checks:
        1. Exactly `length` steps (when given)
        2. The path starts at the initial node and steps chain
        3. Every step's action is supported by its edge
        4. The action matches the simulated stack top, without overflow
           past stack_size(length) or popping the bottom cell
        5. Recorded heights match the simulated stack
        6. No node is visited twice
        7. The path ends at the final node with the stack back to [A]
    """
    errors: List[str] = []
    bound = len(steps) if length is None else length
    if len(steps) != bound:
        errors.append(f"Expected {bound} steps, got {len(steps)}")
    capacity = stack_size(bound)

    stack: List[Symbol] = [Symbol.A]
    current = network.initial
    visited = {current}

    for i, step in enumerate(steps):
        action = step.action
        if step.source != current:
            errors.append(f"Step {i}: starts at node {step.source}, expected {current}")
        if not network.has_action(step.source, step.target, action):
            errors.append(
                f"Step {i}: edge {step.source} -> {step.target} does not support {action}"
            )
        if step.source_height != len(stack) - 1:
            errors.append(
                f"Step {i}: source height {step.source_height}, "
                f"stack height is {len(stack) - 1}"
            )
        if stack[-1] != action.before:
            errors.append(f"Step {i}: {action} needs top {action.before}, found {stack[-1]}")

        if action.kind == MoveKind.PUSH:
            if len(stack) + 1 > capacity:
                errors.append(f"Step {i}: push overflows stack of {capacity} cells")
            stack.append(action.after)
        elif action.kind == MoveKind.POP:
            if len(stack) < 2:
                errors.append(f"Step {i}: pop on the bottom cell")
            else:
                stack.pop()
                if stack[-1] != action.after:
                    errors.append(
                        f"Step {i}: {action} uncovers {action.after}, found {stack[-1]}"
                    )

        if step.target_height != len(stack) - 1:
            errors.append(
                f"Step {i}: target height {step.target_height}, "
                f"stack height is {len(stack) - 1}"
            )
        if step.target in visited:
            errors.append(f"Step {i}: node {step.target} visited twice")
        visited.add(step.target)
        current = step.target

    if current != network.final:
        errors.append(f"Path ends at node {current}, expected {network.final}")
    if stack != [Symbol.A]:
        errors.append(
            "Path ends with stack [" + ", ".join(s.value for s in stack) + "], expected [A]"
        )

    return errors
