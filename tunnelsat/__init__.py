"""
tunnelsat/__init__.py — Public API exports
"""

from tunnelsat.api.finder import PathResult, SolveStatus, TunnelPathFinder, find_path
from tunnelsat.core.config import DEFAULT_CONFIG, TunnelConfig
from tunnelsat.core.exceptions import (
    ModelInconsistency,
    NetworkError,
    PathValidationError,
    SolverError,
    TunnelSatError,
)
from tunnelsat.core.types import Action, MoveKind, Step, Symbol, stack_size
from tunnelsat.network.graph import AdjacencyNetwork
from tunnelsat.network.loader import NetworkLoader
from tunnelsat.version import __version__

__all__ = [
    "TunnelPathFinder",
    "PathResult",
    "SolveStatus",
    "find_path",
    "TunnelConfig",
    "DEFAULT_CONFIG",
    "Action",
    "MoveKind",
    "Step",
    "Symbol",
    "stack_size",
    "AdjacencyNetwork",
    "NetworkLoader",
    "TunnelSatError",
    "NetworkError",
    "ModelInconsistency",
    "PathValidationError",
    "SolverError",
    "__version__",
]
