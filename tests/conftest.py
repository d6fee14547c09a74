"""
tests/conftest.py
==================
Shared pytest fixtures for all tunnelsat tests.
"""

import pytest
import z3

from tunnelsat.core.types import Action
from tunnelsat.network.graph import AdjacencyNetwork
from tunnelsat.reduction.variables import VariableGenerator


# ─── NETWORKS ─────────────────────────────────────────────────────


@pytest.fixture
def two_node_network():
    """s → d transmitting either symbol."""
    net = AdjacencyNetwork(["s", "d"], initial="s", final="d")
    net.connect("s", "d", Action.TRANSMIT_A, Action.TRANSMIT_B)
    return net


@pytest.fixture
def tunnel_network():
    """s -push_AB-> a -transmit_B-> b -pop_AB-> d, plus a dead end s → x."""
    net = AdjacencyNetwork(["s", "a", "b", "d", "x"], initial="s", final="d")
    net.connect("s", "a", Action.PUSH_AB)
    net.connect("a", "b", Action.TRANSMIT_B)
    net.connect("b", "d", Action.POP_AB)
    net.connect("s", "x", Action.TRANSMIT_A)
    return net


@pytest.fixture
def nested_network():
    """Two nested pushes: heights 0, 1, 2, 1, 0."""
    net = AdjacencyNetwork(["s", "a", "b", "c", "d"], initial="s", final="d")
    net.connect("s", "a", Action.PUSH_AB)
    net.connect("a", "b", Action.PUSH_BA)
    net.connect("b", "c", Action.POP_BA)
    net.connect("c", "d", Action.POP_AB)
    return net


@pytest.fixture
def cycle_network():
    """s ⇄ a with a direct s → d; only length 1 works without revisits."""
    net = AdjacencyNetwork(["s", "a", "d"], initial="s", final="d")
    net.connect("s", "a", Action.TRANSMIT_A)
    net.connect("a", "s", Action.TRANSMIT_A)
    net.connect("s", "d", Action.TRANSMIT_A)
    return net


@pytest.fixture
def branching_network():
    """Several routes of different lengths and stack behaviour."""
    net = AdjacencyNetwork(["s", "p", "q", "r", "t", "d"], initial="s", final="d")
    net.connect("s", "p", Action.PUSH_AA, Action.PUSH_AB)
    net.connect("p", "q", Action.TRANSMIT_B, Action.PUSH_BB)
    net.connect("q", "r", Action.POP_AB, Action.POP_BB)
    net.connect("r", "d", Action.TRANSMIT_A)
    net.connect("q", "d", Action.POP_AA)
    net.connect("s", "t", Action.TRANSMIT_A)
    net.connect("t", "d", Action.POP_AA, Action.TRANSMIT_B)
    net.connect("p", "t", Action.POP_AA)
    return net


# ─── SOLVER HELPERS ───────────────────────────────────────────────


@pytest.fixture
def variables():
    return VariableGenerator()


@pytest.fixture
def solve():
    """Return a model of `formula`, or None when it is unsatisfiable."""
    def _solve(formula):
        solver = z3.Solver()
        solver.add(formula)
        if solver.check() != z3.sat:
            return None
        return solver.model()
    return _solve


@pytest.fixture
def make_model():
    """Model in which exactly the given propositions are true."""
    def _make(*true_vars):
        solver = z3.Solver()
        solver.add(*true_vars)
        assert solver.check() == z3.sat
        return solver.model()
    return _make
