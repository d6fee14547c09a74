"""tunnelsat/reduction — Tunnel path → SAT reduction."""

from tunnelsat.reduction.boundary import boundary_constraints
from tunnelsat.reduction.builder import Reduction, build_reduction
from tunnelsat.reduction.simple_path import simple_path_constraints
from tunnelsat.reduction.transitions import transition_constraints
from tunnelsat.reduction.uniqueness import uniqueness_constraints
from tunnelsat.reduction.variables import VariableGenerator

__all__ = [
    "VariableGenerator",
    "Reduction",
    "build_reduction",
    "boundary_constraints",
    "uniqueness_constraints",
    "simple_path_constraints",
    "transition_constraints",
]
