"""
tests/integration/test_pipeline.py
==================================
End-to-end tests: network → reduction → Z3 → decoded, validated path.

The SAT route is cross-checked against the explicit-state search on
every bound up to the longest possible simple path.
"""
from unittest.mock import MagicMock, patch

import pytest
import z3

from tunnelsat import (
    Action,
    AdjacencyNetwork,
    NetworkLoader,
    PathResult,
    SolveStatus,
    TunnelConfig,
    TunnelPathFinder,
    find_path,
)
from tunnelsat.core.exceptions import (
    ModelInconsistency,
    PathValidationError,
    SolverError,
    TunnelSatError,
)
from tunnelsat.core.validators import validate_path
from tunnelsat.network.path_finder import ExplicitPathFinder


NETWORKS = [
    "two_node_network",
    "tunnel_network",
    "nested_network",
    "cycle_network",
    "branching_network",
]


class TestAgreesWithExplicitSearch:
    @pytest.mark.parametrize("fixture", NETWORKS)
    def test_same_feasible_lengths(self, fixture, request):
        network = request.getfixturevalue(fixture)
        finder = TunnelPathFinder(network)
        oracle = ExplicitPathFinder(network)
        for length in range(network.num_nodes):
            result = finder.find_path(length)
            assert result.found == (oracle.find(length) is not None), length
            if result.found:
                assert result.valid
                assert len(result.steps) == length


class TestFindPath:
    def test_two_node_scenario(self, two_node_network):
        result = find_path(two_node_network, 1)
        assert result.status == SolveStatus.SAT
        assert len(result.steps) == 1
        step = result.steps[0]
        assert step.action.kind.value == "transmit"
        assert (step.source, step.target) == (0, 1)
        assert result.nodes == ["s", "d"]

    def test_default_config_is_per_finder(self, two_node_network, tunnel_network):
        first = TunnelPathFinder(two_node_network)
        first.config.trace.enabled = True
        first.config.decoder.strict = True
        second = TunnelPathFinder(tunnel_network)
        assert second.config is not first.config
        assert second.config.trace.enabled is False
        assert second.config.decoder.strict is False
        assert second.find_path(3).trace is None

    def test_two_node_length_two_unsat(self, two_node_network):
        result = find_path(two_node_network, 2)
        assert result.status == SolveStatus.UNSAT
        assert result.steps == []
        assert not result.found

    def test_tunnel_nodes_and_summary(self, tunnel_network):
        result = TunnelPathFinder(tunnel_network).find_path(3)
        assert result.nodes == ["s", "a", "b", "d"]
        assert result.summary() == "Path of length 3: s -> a -> b -> d"
        assert result.elapsed_ms > 0.0

    def test_trace_attached_when_enabled(self, tunnel_network):
        config = TunnelConfig()
        config.trace.enabled = True
        result = TunnelPathFinder(tunnel_network, config).find_path(3)
        assert result.trace is not None
        assert result.trace.well_formed
        assert len(result.trace.positions) == 4

    def test_no_trace_by_default(self, tunnel_network):
        assert TunnelPathFinder(tunnel_network).find_path(3).trace is None

    def test_zero_length_self_loop_network(self):
        net = AdjacencyNetwork(["s"], initial="s", final="s")
        result = find_path(net, 0)
        assert result.found
        assert result.steps == []
        assert result.nodes == ["s"]

    def test_negative_length_rejected(self, two_node_network):
        with pytest.raises(TunnelSatError, match=">= 0"):
            find_path(two_node_network, -1)

    def test_invalid_network_rejected(self):
        with pytest.raises(TunnelSatError, match="Invalid network"):
            TunnelPathFinder(AdjacencyNetwork())

    def test_timeout_and_seed_accepted(self, nested_network):
        config = TunnelConfig()
        config.solver.timeout_ms = 10_000
        config.solver.random_seed = 7
        assert TunnelPathFinder(nested_network, config).find_path(4).found

    def test_loaded_network(self, tmp_path, tunnel_network):
        path = str(tmp_path / "tunnel.json")
        NetworkLoader.to_json(tunnel_network, path)
        result = find_path(NetworkLoader.from_json(path), 3)
        assert [s.action for s in result.steps] == [
            Action.PUSH_AB, Action.TRANSMIT_B, Action.POP_AB,
        ]


class TestFindShortest:
    def test_tunnel(self, tunnel_network):
        result = TunnelPathFinder(tunnel_network).find_shortest()
        assert result.found
        assert result.length == 3

    def test_branching(self, branching_network):
        result = TunnelPathFinder(branching_network).find_shortest()
        assert result.length == 4
        assert validate_path(branching_network, result.steps, 4) == []

    def test_unreachable_returns_last_bound(self):
        net = AdjacencyNetwork(["s", "a", "d"], initial="s", final="d")
        net.connect("s", "a", Action.TRANSMIT_A)
        result = TunnelPathFinder(net).find_shortest()
        assert result.status == SolveStatus.UNSAT
        assert result.length == 2

    def test_explicit_bounds(self, tunnel_network):
        finder = TunnelPathFinder(tunnel_network)
        assert not finder.find_shortest(max_length=2).found
        assert finder.find_shortest(min_length=3, max_length=3).found

    def test_config_bounds(self, tunnel_network):
        config = TunnelConfig()
        config.search.max_length = 2
        assert not TunnelPathFinder(tunnel_network, config).find_shortest().found

    def test_empty_range(self, tunnel_network):
        with pytest.raises(TunnelSatError, match="Empty search range"):
            TunnelPathFinder(tunnel_network).find_shortest(max_length=1, min_length=2)


class TestExplain:
    def test_sat_report(self, tunnel_network):
        finder = TunnelPathFinder(tunnel_network)
        report = finder.explain(finder.find_path(3))
        assert "s -[push_AB]-> a" in report
        assert "(height 1 → 0)" in report
        assert "── Path of length 3: s -> a -> b -> d" in report

    def test_unsat_report(self, two_node_network):
        finder = TunnelPathFinder(two_node_network)
        report = finder.explain(finder.find_path(2))
        assert "No path of length 2." in report

    def test_report_includes_trace(self, two_node_network):
        finder = TunnelPathFinder(two_node_network, TunnelConfig.strict())
        report = finder.explain(finder.find_path(1))
        assert "Stack trace" in report
        assert "At pos 1:" in report


class TestSolverOutcomes:
    def _unknown_solver(self):
        solver = MagicMock()
        solver.check.return_value = z3.unknown
        solver.reason_unknown.return_value = "timeout"
        return solver

    def test_unknown_status(self, two_node_network):
        finder = TunnelPathFinder(two_node_network)
        with patch.object(finder, "_make_solver", return_value=self._unknown_solver()):
            result = finder.find_path(1)
        assert result.status == SolveStatus.UNKNOWN
        assert "could not decide" in result.summary()

    def test_unknown_raises_when_configured(self, two_node_network):
        finder = TunnelPathFinder(two_node_network, TunnelConfig.strict())
        with patch.object(finder, "_make_solver", return_value=self._unknown_solver()):
            with pytest.raises(SolverError) as info:
                finder.find_path(1)
        assert info.value.reason == "timeout"

    def test_validation_errors_reported(self, two_node_network):
        finder = TunnelPathFinder(two_node_network)
        with patch("tunnelsat.api.finder.validate_path", return_value=["bad step"]):
            result = finder.find_path(1)
        assert result.found
        assert not result.valid
        assert result.validation_errors == ["bad step"]
        assert "bad step" in finder.explain(result)

    def test_validation_errors_raise_when_strict(self, two_node_network):
        finder = TunnelPathFinder(two_node_network, TunnelConfig.strict())
        with patch("tunnelsat.api.finder.validate_path", return_value=["bad step"]):
            with pytest.raises(PathValidationError):
                finder.find_path(1)

    def test_strict_decoding_of_foreign_model(self, two_node_network, make_model):
        finder = TunnelPathFinder(two_node_network, TunnelConfig.strict())
        reduction = finder.build(1)
        with pytest.raises(ModelInconsistency):
            finder._read_model(reduction, make_model())


class TestPathResult:
    def test_defaults(self):
        result = PathResult(status=SolveStatus.UNSAT, length=4)
        assert result.steps == []
        assert result.trace is None
        assert not result.valid
