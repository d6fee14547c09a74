"""
tunnelsat/network/base.py
=========================
Abstract base class for tunnel networks.

The reduction never looks at how a network is stored: it only asks
which nodes exist, which edges leave a node, and which actions an
edge supports. Any backend implementing this interface can be encoded.

Contract:
    nodes are the integers 0 .. num_nodes − 1
    actions(u, v) is empty when there is no edge u → v
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import FrozenSet, Iterator, List, Tuple

from tunnelsat.core.types import Action, Symbol


class TunnelNetwork(ABC):
    """Queryable tunnel network interface.

    Implementors: AdjacencyNetwork, custom graph backends.
    """

    @property
    @abstractmethod
    def num_nodes(self) -> int:
        ...

    @property
    @abstractmethod
    def initial(self) -> int:
        """Node every path starts from."""
        ...

    @property
    @abstractmethod
    def final(self) -> int:
        """Node every path must end on."""
        ...

    @abstractmethod
    def node_name(self, node: int) -> str:
        ...

    @abstractmethod
    def edges(self) -> Iterator[Tuple[int, int]]:
        """Yield every (source, target) pair carrying at least one action."""
        ...

    @abstractmethod
    def actions(self, source: int, target: int) -> FrozenSet[Action]:
        """Actions supported by the edge source → target."""
        ...

    # ─── DERIVED QUERIES ───────────────────────────────────────────

    def has_action(self, source: int, target: int, action: Action) -> bool:
        return action in self.actions(source, target)

    def can_transmit(self, source: int, target: int, top: Symbol) -> bool:
        return self.has_action(source, target, Action.transmit(top))

    def pushed_symbols(self, source: int, target: int, top: Symbol) -> List[Symbol]:
        """Symbols the edge may push on top of `top`."""
        return [s for s in Symbol if self.has_action(source, target, Action.push(top, s))]

    def can_pop(self, source: int, target: int, popped: Symbol, remaining: Symbol) -> bool:
        return self.has_action(source, target, Action.pop(remaining, popped))

    def out_edges(self, node: int) -> List[Tuple[int, FrozenSet[Action]]]:
        """(target, actions) for every edge leaving `node`, ordered by target."""
        return sorted(
            ((target, self.actions(source, target))
             for source, target in self.edges()
             if source == node),
            key=lambda edge: edge[0],
        )

    def node_names(self) -> List[str]:
        return [self.node_name(n) for n in range(self.num_nodes)]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(nodes={self.num_nodes}, "
            f"initial={self.node_name(self.initial)!r}, "
            f"final={self.node_name(self.final)!r})"
        )
