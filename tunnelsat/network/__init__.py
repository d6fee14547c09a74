"""tunnelsat/network — Network interface and the in-memory backend."""

from tunnelsat.network.base import TunnelNetwork
from tunnelsat.network.graph import AdjacencyNetwork
from tunnelsat.network.loader import NetworkLoader
from tunnelsat.network.path_finder import ExplicitPathFinder

__all__ = [
    "TunnelNetwork",
    "AdjacencyNetwork",
    "NetworkLoader",
    "ExplicitPathFinder",
]
