"""tunnelsat/api — High-level developer API."""

from tunnelsat.api.finder import PathResult, SolveStatus, TunnelPathFinder, find_path

__all__ = [
    "TunnelPathFinder",
    "PathResult",
    "SolveStatus",
    "find_path",
]
