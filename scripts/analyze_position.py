#!/usr/bin/env python3
"""Run Threat-Space Search on a position and print the winning variations.

Example:
    python scripts/analyze_position.py \
        --blacks g8 h8 i9 i10 \
        --turn black \
        --max-variations 3
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tssgomoku.board import point_to_algebraic
from tssgomoku.consts import BLACK, WHITE
from tssgomoku.state import get_state
from tssgomoku.tss import TSSConfig, tss_search
from tssgomoku.tss.tss_search import animate_variation


def setup_logging(verbose: bool) -> logging.Logger:
    """Setup logging for the script."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    return logging.getLogger(__name__)


def format_variation(variation) -> str:
    steps = []
    for move, replies in variation:
        forced = ",".join(point_to_algebraic(p) for p in sorted(replies))
        steps.append(f"{point_to_algebraic(move)}[{forced}]" if forced else point_to_algebraic(move))
    return " ".join(steps) if steps else "(already winning)"


def main():
    parser = argparse.ArgumentParser(description='Threat-Space Search position analysis')
    parser.add_argument('--blacks', nargs='*', default=[], help='Black stones, e.g. h8 i9')
    parser.add_argument('--whites', nargs='*', default=[], help='White stones, e.g. g7')
    parser.add_argument('--turn', choices=['black', 'white'], default='black',
                        help='Side to move')
    parser.add_argument('--max-nodes', type=int, default=None,
                        help='Node budget (unbounded if omitted)')
    parser.add_argument('--no-fallback', action='store_true',
                        help='Only explore immediate threats')
    parser.add_argument('--max-variations', type=int, default=5,
                        help='Number of variations to print')
    parser.add_argument('--animate', action='store_true',
                        help='Replay the shortest variation on the board')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')

    args = parser.parse_args()
    logger = setup_logging(args.verbose)

    turn = BLACK if args.turn == 'black' else WHITE
    state = get_state(args.blacks, args.whites, turn)
    print(state)

    config = TSSConfig(
        fallback_non_immediate=not args.no_fallback,
        max_nodes=args.max_nodes,
    )
    result = tss_search(state, config)

    logger.info("Potential win: %s", result.potential_win)
    logger.info("Nodes visited: %d", result.search_stats["nodes_visited"])
    if result.search_stats["budget_exhausted"]:
        logger.warning("Node budget exhausted, result may be incomplete")

    for i, variation in enumerate(result.variations[:args.max_variations], 1):
        print(f"{i:2d}. {format_variation(variation)}")

    if args.animate and result.variations:
        animate_variation(state.board, turn, result.variations[0])


if __name__ == '__main__':
    main()
