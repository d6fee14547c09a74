"""
tunnelsat/network/graph.py
==========================
AdjacencyNetwork — in-memory tunnel network.

Storage:
    names:  node index → display name
    graph:  source → {target → frozenset of actions}

Built once, then queried by the reduction. Edge lookups are O(1);
enumerating the out-edges of a node is O(out-degree).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union

from tunnelsat.core.exceptions import NetworkError
from tunnelsat.core.types import Action
from tunnelsat.network.base import TunnelNetwork

logger = logging.getLogger(__name__)

ActionLike = Union[Action, str]


def parse_action(value: ActionLike) -> Action:
    """Accept an Action or its string value ("push_AB")."""
    if isinstance(value, Action):
        return value
    try:
        return Action(value)
    except ValueError:
        raise NetworkError(
            f"Unknown action '{value}'. "
            f"Must be one of {sorted(a.value for a in Action)}.",
            context={"action": value},
        ) from None


class AdjacencyNetwork(TunnelNetwork):
    """Dict-backed tunnel network.

    Usage:
        net = AdjacencyNetwork(["s", "a", "d"], initial="s", final="d")
        net.connect("s", "a", "push_AB")
        net.connect("a", "d", Action.POP_AB)
    """

    def __init__(
        self,
        names: Optional[Iterable[str]] = None,
        initial: Union[int, str] = 0,
        final: Union[int, str] = 0,
    ):
        self._names: List[str] = []
        self._index: Dict[str, int] = {}
        self._graph: Dict[int, Dict[int, FrozenSet[Action]]] = defaultdict(dict)
        for name in names or []:
            self.add_node(name)
        self._initial = 0
        self._final = 0
        if self._names:
            self.set_initial(initial)
            self.set_final(final)

    # ─── CONSTRUCTION ──────────────────────────────────────────────

    def add_node(self, name: str) -> int:
        """Append a node and return its index."""
        if not name:
            raise NetworkError("Node name must be non-empty.")
        if name in self._index:
            raise NetworkError(f"Duplicate node name '{name}'.", context={"node": name})
        node = len(self._names)
        self._names.append(name)
        self._index[name] = node
        return node

    def set_initial(self, node: Union[int, str]) -> None:
        self._initial = self._resolve(node)

    def set_final(self, node: Union[int, str]) -> None:
        self._final = self._resolve(node)

    def add_edge(self, source: int, target: int, actions: Iterable[ActionLike]) -> None:
        """Add actions to the edge source → target (merged with existing ones)."""
        source = self._resolve(source)
        target = self._resolve(target)
        parsed = frozenset(parse_action(a) for a in actions)
        if not parsed:
            return
        existing = self._graph[source].get(target, frozenset())
        self._graph[source][target] = existing | parsed

    def connect(self, source: str, target: str, *actions: ActionLike) -> None:
        """Name-based add_edge."""
        self.add_edge(self.node_index(source), self.node_index(target), actions)

    def node_index(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise NetworkError(f"Unknown node '{name}'.", context={"node": name}) from None

    def _resolve(self, node: Union[int, str]) -> int:
        if isinstance(node, str):
            return self.node_index(node)
        if not 0 <= node < len(self._names):
            raise NetworkError(
                f"Node index {node} out of range [0, {len(self._names)}).",
                context={"node": node},
            )
        return node

    # ─── TunnelNetwork INTERFACE ───────────────────────────────────

    @property
    def num_nodes(self) -> int:
        return len(self._names)

    @property
    def initial(self) -> int:
        return self._initial

    @property
    def final(self) -> int:
        return self._final

    def node_name(self, node: int) -> str:
        return self._names[node]

    def edges(self) -> Iterator[Tuple[int, int]]:
        for source in sorted(self._graph):
            for target in sorted(self._graph[source]):
                yield source, target

    def actions(self, source: int, target: int) -> FrozenSet[Action]:
        return self._graph.get(source, {}).get(target, frozenset())

    def out_edges(self, node: int) -> List[Tuple[int, FrozenSet[Action]]]:
        return sorted(self._graph.get(node, {}).items())

    @property
    def num_edges(self) -> int:
        return sum(len(targets) for targets in self._graph.values())
