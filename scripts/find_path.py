#!/usr/bin/env python3
"""
scripts/find_path.py
====================
Search a tunnel network for a bounded path from the command line.

Usage:
    python scripts/find_path.py network.json --length 4
    python scripts/find_path.py network.json --shortest --max-length 8 --trace
"""
import argparse
import logging
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


def main(argv=None):
    parser = argparse.ArgumentParser(description="tunnelsat path search CLI")
    parser.add_argument("network", help="Path to network JSON")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--length", type=int,
                       help="Exact number of moves of the path")
    group.add_argument("--shortest", action="store_true",
                       help="Try every length from --min-length upwards")
    parser.add_argument("--min-length", type=int, default=0)
    parser.add_argument("--max-length", type=int, default=None)
    parser.add_argument("--timeout-ms", type=int, default=None)
    parser.add_argument("--trace", action="store_true",
                        help="Print the per-position stack trace")
    parser.add_argument("--strict", action="store_true",
                        help="Fail on malformed models instead of warning")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from tunnelsat.api.finder import TunnelPathFinder
    from tunnelsat.core.config import TunnelConfig
    from tunnelsat.core.exceptions import TunnelSatError
    from tunnelsat.network.loader import NetworkLoader

    config = TunnelConfig.strict() if args.strict else TunnelConfig()
    config.solver.timeout_ms = args.timeout_ms
    config.trace.enabled = config.trace.enabled or args.trace

    try:
        network = NetworkLoader.from_json(args.network)
        finder = TunnelPathFinder(network, config)
        if args.shortest:
            result = finder.find_shortest(
                max_length=args.max_length, min_length=args.min_length
            )
        else:
            result = finder.find_path(args.length)
    except TunnelSatError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(finder.explain(result))
    return 0 if result.found else 1


if __name__ == "__main__":
    sys.exit(main())
