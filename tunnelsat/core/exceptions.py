"""
tunnelsat/core/exceptions.py
============================
Custom exception hierarchy for tunnelsat.

All exceptions carry structured context so callers can
programmatically handle different failure modes.
"""

from __future__ import annotations
from typing import List, Optional, Tuple


class TunnelSatError(Exception):
    """Base exception for all tunnelsat errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.context = context or {}


class NetworkError(TunnelSatError):
    """Raised when a network definition is malformed or refers to
    unknown nodes or actions."""

    pass


class ModelInconsistency(TunnelSatError):
    """Raised by strict decoding when a model does not describe a single
    well-formed state at some position.

    `candidates` holds the (node, height) pairs found true at that
    position; it is empty when no pair was found.
    """

    def __init__(
        self,
        message: str,
        position: int,
        candidates: Optional[List[Tuple[int, int]]] = None,
    ):
        super().__init__(message, {"position": position})
        self.position = position
        self.candidates = list(candidates or [])


class PathValidationError(TunnelSatError):
    """Raised when a decoded path fails to replay against its network."""

    def __init__(self, message: str, errors: List[str]):
        super().__init__(message, {"errors": list(errors)})
        self.errors = list(errors)


class SolverError(TunnelSatError):
    """Raised when Z3 cannot decide an instance (status `unknown`)
    and the caller asked for a definite answer."""

    def __init__(self, message: str, length: int, reason: str = ""):
        super().__init__(message, {"length": length, "reason": reason})
        self.length = length
        self.reason = reason
