"""
tunnelsat/core/config.py
========================
Global configuration for tunnelsat.
All tunables in one place.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SolverConfig:
    timeout_ms:       Optional[int] = None   # None = no Z3 timeout
    random_seed:      Optional[int] = None
    raise_on_unknown: bool          = False  # SolverError instead of UNKNOWN result


@dataclass
class DecoderConfig:
    strict:   bool = False   # ModelInconsistency instead of warnings
    validate: bool = True    # replay decoded steps against the network


@dataclass
class TraceConfig:
    enabled:   bool = False  # attach a StackTrace to every SAT result
    log_trace: bool = False  # emit the rendered trace at DEBUG level


@dataclass
class SearchConfig:
    min_length: int           = 0
    max_length: Optional[int] = None   # None → num_nodes − 1 (longest simple path)


@dataclass
class TunnelConfig:
    solver:  SolverConfig  = field(default_factory=SolverConfig)
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    trace:   TraceConfig   = field(default_factory=TraceConfig)
    search:  SearchConfig  = field(default_factory=SearchConfig)

    @classmethod
    def strict(cls) -> "TunnelConfig":
        """Fail loudly on anything a correct solver should never produce."""
        cfg = cls()
        cfg.decoder.strict = True
        cfg.solver.raise_on_unknown = True
        cfg.trace.enabled = True
        return cfg


# Singleton default config
DEFAULT_CONFIG = TunnelConfig()
