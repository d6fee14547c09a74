"""
tunnelsat/network/loader.py
===========================
Load and save tunnel networks as JSON.

Format:
    {
      "nodes":   ["s", "a", "d"],
      "initial": "s",
      "final":   "d",
      "edges": [
        {"source": "s", "target": "a", "actions": ["push_AB"]},
        {"source": "a", "target": "d", "actions": ["pop_AB"]}
      ]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from tunnelsat.core.exceptions import NetworkError
from tunnelsat.network.base import TunnelNetwork
from tunnelsat.network.graph import AdjacencyNetwork

logger = logging.getLogger(__name__)


class NetworkLoader:
    """Build AdjacencyNetwork instances from JSON files or dicts."""

    @classmethod
    def from_json(cls, path: str) -> AdjacencyNetwork:
        try:
            data = json.loads(Path(path).read_text())
        except OSError as exc:
            raise NetworkError(
                f"Cannot read network file '{path}': {exc}", context={"path": str(path)}
            ) from exc
        except json.JSONDecodeError as exc:
            raise NetworkError(
                f"Invalid network file '{path}': {exc}", context={"path": str(path)}
            ) from exc
        network = cls.from_dict(data)
        logger.info(
            "Loaded network from %s: %d nodes, %d edges.",
            path, network.num_nodes, network.num_edges,
        )
        return network

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AdjacencyNetwork:
        if not isinstance(data, dict):
            raise NetworkError(
                f"Network definition must be an object, got {type(data).__name__}."
            )
        for key in ("nodes", "initial", "final"):
            if key not in data:
                raise NetworkError(f"Network definition is missing '{key}'.")
        network = AdjacencyNetwork(
            data["nodes"], initial=data["initial"], final=data["final"]
        )
        for item in data.get("edges", []):
            if not isinstance(item, dict):
                raise NetworkError(
                    f"Edge definition must be an object, got {item!r}.",
                    context={"edge": item},
                )
            try:
                source, target = item["source"], item["target"]
            except KeyError as exc:
                raise NetworkError(
                    f"Edge definition is missing {exc}.", context={"edge": item}
                ) from None
            network.connect(source, target, *item.get("actions", []))
        return network

    @classmethod
    def to_dict(cls, network: TunnelNetwork) -> Dict[str, Any]:
        return {
            "nodes": network.node_names(),
            "initial": network.node_name(network.initial),
            "final": network.node_name(network.final),
            "edges": [
                {
                    "source": network.node_name(source),
                    "target": network.node_name(target),
                    "actions": sorted(a.value for a in network.actions(source, target)),
                }
                for source, target in network.edges()
            ],
        }

    @classmethod
    def to_json(cls, network: TunnelNetwork, path: str) -> None:
        Path(path).write_text(json.dumps(cls.to_dict(network), indent=2))
