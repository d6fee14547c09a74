"""
tunnelsat/api/finder.py
=======================
The main developer-facing API for tunnelsat.

Wraps the whole round trip for one network:

    build Φ(G, n) → z3.Solver.check() → decode → validate → (trace)

Public API:
    finder = TunnelPathFinder(network)
    result = finder.find_path(4)
    result = finder.find_shortest()
    print(finder.explain(result))
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import z3

from tunnelsat.core.config import TunnelConfig
from tunnelsat.core.exceptions import PathValidationError, SolverError, TunnelSatError
from tunnelsat.core.types import Step
from tunnelsat.core.validators import validate_length, validate_network, validate_path
from tunnelsat.decoding.decoder import ModelDecoder
from tunnelsat.decoding.renderer import StackTrace, TraceRenderer
from tunnelsat.network.base import TunnelNetwork
from tunnelsat.reduction.builder import Reduction, build_reduction
from tunnelsat.reduction.variables import VariableGenerator

logger = logging.getLogger(__name__)


class SolveStatus(Enum):
    SAT     = "sat"
    UNSAT   = "unsat"
    UNKNOWN = "unknown"


@dataclass
class PathResult:
    """Outcome of solving one bound.

    Attributes:
        status:            Z3 verdict for Φ(G, length).
        length:            Bound that was solved.
        steps:             Decoded path (empty unless SAT).
        nodes:             Node names along the path, initial first.
        trace:             Per-position model dump, when tracing is enabled.
        validation_errors: Replay errors of the decoded path (empty = valid).
        elapsed_ms:        Wall time of build + solve + decode.
    """

    status: SolveStatus
    length: int
    steps: List[Step] = field(default_factory=list)
    nodes: List[str] = field(default_factory=list)
    trace: Optional[StackTrace] = None
    validation_errors: List[str] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def found(self) -> bool:
        return self.status == SolveStatus.SAT

    @property
    def valid(self) -> bool:
        return self.found and not self.validation_errors

    def summary(self) -> str:
        if self.status == SolveStatus.SAT:
            return f"Path of length {self.length}: " + " -> ".join(self.nodes)
        if self.status == SolveStatus.UNSAT:
            return f"No path of length {self.length}."
        return f"Solver could not decide length {self.length}."


class TunnelPathFinder:
    """Find bounded tunnel paths through a network with Z3.

    Args:
        network: Network to search; validated once on construction.
        config:  Solver, decoder, trace and search settings.

    Raises:
        TunnelSatError: if the network is structurally invalid.
    """

    def __init__(self, network: TunnelNetwork, config: Optional[TunnelConfig] = None):
        errors = validate_network(network)
        if errors:
            raise TunnelSatError(
                f"Invalid network: {errors[0]}", context={"errors": errors}
            )
        self.network = network
        self.config = config or TunnelConfig()

    # ─── BUILD & SOLVE ─────────────────────────────────────────────

    def build(self, length: int) -> Reduction:
        """Build Φ(network, length) over a fresh variable generator."""
        validate_length(length)
        return build_reduction(self.network, length, VariableGenerator())

    def find_path(self, length: int) -> PathResult:
        """Solve for a path of exactly `length` moves.

        Raises:
            SolverError:         if Z3 answers unknown and
                                 solver.raise_on_unknown is set.
            ModelInconsistency:  if decoding is strict and the model is malformed.
            PathValidationError: if decoding is strict and the path fails replay.
        """
        start = time.perf_counter()
        reduction = self.build(length)
        solver = self._make_solver()
        solver.add(reduction.formula)
        verdict = solver.check()

        if verdict == z3.unsat:
            result = PathResult(status=SolveStatus.UNSAT, length=length)
        elif verdict == z3.sat:
            result = self._read_model(reduction, solver.model())
        else:
            reason = solver.reason_unknown()
            logger.warning("Z3 returned UNKNOWN for length %d: %s", length, reason)
            if self.config.solver.raise_on_unknown:
                raise SolverError(
                    f"Z3 could not decide length {length}: {reason}",
                    length=length,
                    reason=reason,
                )
            result = PathResult(status=SolveStatus.UNKNOWN, length=length)

        result.elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.info(
            "Length %d: %s (%.1f ms)", length, result.status.value, result.elapsed_ms
        )
        return result

    def find_shortest(
        self,
        max_length: Optional[int] = None,
        min_length: Optional[int] = None,
    ) -> PathResult:
        """Try increasing bounds and return the first SAT result.

        Bounds default to config.search; an unset max_length means
        num_nodes − 1, the longest simple path. When no bound is SAT
        the result of the last bound tried is returned.
        """
        search = self.config.search
        lo = search.min_length if min_length is None else min_length
        hi = max_length
        if hi is None:
            hi = search.max_length
        if hi is None:
            hi = self.network.num_nodes - 1
        validate_length(lo)
        validate_length(hi)
        if hi < lo:
            raise TunnelSatError(
                f"Empty search range [{lo}, {hi}].",
                context={"min_length": lo, "max_length": hi},
            )

        result = None
        for length in range(lo, hi + 1):
            result = self.find_path(length)
            if result.found:
                return result
        return result

    # ─── REPORTING ─────────────────────────────────────────────────

    def explain(self, result: PathResult) -> str:
        """Human-readable report for a PathResult."""
        name = self.network.node_name
        lines = [
            "=" * 60,
            f"  Tunnel path search — {name(self.network.initial)} → "
            f"{name(self.network.final)}, length {result.length}",
            "=" * 60,
            "",
        ]
        if result.found:
            for i, step in enumerate(result.steps):
                lines.append(
                    f"  {i:>3}. {name(step.source)} -[{step.action}]-> {name(step.target)}"
                    f"   (height {step.source_height} → {step.target_height})"
                )
            if result.validation_errors:
                lines.append("")
                lines.append("── Validation errors ─────────────────────────────────────")
                lines.extend(f"  - {e}" for e in result.validation_errors)
        if result.trace is not None:
            lines.append("")
            lines.append("── Stack trace ───────────────────────────────────────────")
            lines.append(result.trace.render())
        lines.append("")
        lines.append(f"── {result.summary()}")
        lines.append("=" * 60)
        return "\n".join(lines)

    # ─── INTERNALS ─────────────────────────────────────────────────

    def _make_solver(self) -> z3.Solver:
        solver = z3.Solver()
        if self.config.solver.timeout_ms is not None:
            solver.set("timeout", self.config.solver.timeout_ms)
        if self.config.solver.random_seed is not None:
            solver.set("random_seed", self.config.solver.random_seed)
        return solver

    def _read_model(self, reduction: Reduction, model: z3.ModelRef) -> PathResult:
        decoder = ModelDecoder(
            self.network,
            reduction.variables,
            reduction.length,
            strict=self.config.decoder.strict,
        )
        steps = decoder.decode(model)
        result = PathResult(
            status=SolveStatus.SAT,
            length=reduction.length,
            steps=steps,
            nodes=self._node_names(steps),
        )

        if self.config.decoder.validate:
            result.validation_errors = validate_path(self.network, steps, reduction.length)
            if result.validation_errors:
                logger.warning(
                    "Decoded path failed validation: %s", result.validation_errors
                )
                if self.config.decoder.strict:
                    raise PathValidationError(
                        f"Decoded path of length {reduction.length} is invalid.",
                        result.validation_errors,
                    )

        if self.config.trace.enabled or self.config.trace.log_trace:
            trace = TraceRenderer(
                self.network, reduction.variables, reduction.length
            ).trace(model)
            if self.config.trace.enabled:
                result.trace = trace
            if self.config.trace.log_trace:
                logger.debug("Model trace:\n%s", trace.render())
        return result

    def _node_names(self, steps: List[Step]) -> List[str]:
        if not steps:
            return [self.network.node_name(self.network.initial)]
        return [self.network.node_name(steps[0].source)] + [
            self.network.node_name(s.target) for s in steps
        ]


def find_path(
    network: TunnelNetwork,
    length: int,
    config: Optional[TunnelConfig] = None,
) -> PathResult:
    """One-shot TunnelPathFinder(network, config).find_path(length)."""
    return TunnelPathFinder(network, config).find_path(length)
