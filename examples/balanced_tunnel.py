"""
examples/balanced_tunnel.py
===========================
Minimal tunnelsat example — a path that must push and later pop.

    s --push_AB--> a --transmit_B--> b --pop_AB--> d
    s --transmit_A--> x   (dead end)
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tunnelsat.api.finder import TunnelPathFinder
from tunnelsat.core.config import TunnelConfig
from tunnelsat.core.types import Action
from tunnelsat.network.graph import AdjacencyNetwork


def main():
    net = AdjacencyNetwork(["s", "a", "b", "d", "x"], initial="s", final="d")
    net.connect("s", "a", Action.PUSH_AB)
    net.connect("a", "b", Action.TRANSMIT_B)
    net.connect("b", "d", Action.POP_AB)
    net.connect("s", "x", Action.TRANSMIT_A)

    config = TunnelConfig()
    config.trace.enabled = True
    finder = TunnelPathFinder(net, config)

    result = finder.find_shortest()
    print(finder.explain(result))
    assert result.found and result.length == 3, "Should find the 3-move tunnel"
    assert [s.action for s in result.steps] == [
        Action.PUSH_AB, Action.TRANSMIT_B, Action.POP_AB,
    ]
    print("✓ Balanced tunnel found.")


if __name__ == "__main__":
    main()
