#!/usr/bin/env python3
"""Recommend a Jigsaw move with MCTS.

Runs the search on a background worker and logs progress while it runs,
the same way an interactive front end would poll it.

Usage:
    python experiments/run_search.py \
        --config configs/search.yaml \
        --board 0xF0F000 \
        --figure 4 \
        --iterations 50000
"""

import argparse
import logging
import time

from jigsaw_mcts.games.jigsaw import ALL_FIGURES, COLS, SKIP_ACTION, Jigsaw
from jigsaw_mcts.manager import SearchManager
from jigsaw_mcts.mcts.search import SearchConfig
from jigsaw_mcts.utils.config import load_config, merge_overrides
from jigsaw_mcts.utils.logging import setup_logging
from jigsaw_mcts.utils.seed import set_seed

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description="Recommend a Jigsaw move with MCTS")
    parser.add_argument("--config", type=str, default=None, help="YAML search config")
    parser.add_argument("--board", type=lambda s: int(s, 0), default=0,
                        help="Occupied cells as a 24-bit mask (bit 23 = top-left)")
    parser.add_argument("--figure", type=int, default=None,
                        help=f"Figure to place (0-{len(ALL_FIGURES) - 1}); random if omitted")
    parser.add_argument("--iterations", type=int, default=None, help="Iteration budget")
    parser.add_argument("--depth", type=int, default=None, help="Maximum search depth")
    parser.add_argument("--c", type=float, default=None, help="Exploration constant")
    parser.add_argument("--interval", type=int, default=None, help="Iterations between reports")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--poll", type=float, default=0.5, help="Seconds between progress logs")
    parser.add_argument("--verbose", action="store_true", help="Log every snapshot")
    parser.add_argument("--log-file", type=str, default=None, help="Also write logs to this file")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config, validate=False) if args.config else SearchConfig()
    config = merge_overrides(config, {
        "max_iterations": args.iterations,
        "max_depth": args.depth,
        "c": args.c,
        "callback_interval": args.interval,
        "seed": args.seed,
    })

    if args.seed is not None:
        set_seed(args.seed)

    if args.figure is None:
        state = Jigsaw(board=args.board)
    else:
        state = Jigsaw(board=args.board, figure_index=args.figure)

    try:
        config.validate()
        state.validate()
    except ValueError as e:
        parser.error(str(e))

    setup_logging(
        logging.INFO,
        log_file=args.log_file,
        search_level=logging.DEBUG if args.verbose else None
    )

    print(state.render())

    if state.has_finished():
        logger.info("Board is already full; nothing to recommend")
        return None

    manager = SearchManager(state)
    start = time.time()
    manager.compute(config)

    while not manager.wait(timeout=args.poll):
        logger.info(f"Progress: {manager.progress():.1%}, best so far: {manager.optimal_action()}")

    if manager.last_error is not None:
        raise RuntimeError("Search failed") from manager.last_error

    stats = manager.current_stats()
    action = manager.optimal_action()
    logger.info(f"Search took {time.time() - start:.1f}s")

    for candidate, visits in sorted(stats.actions, key=lambda item: -item[1]):
        share = visits / max(stats.total_visits, 1)
        label = "skip" if candidate == SKIP_ACTION else f"cell {candidate}"
        print(f"  {label:>8}: {visits:>8} visits ({share:.1%})")

    if action == SKIP_ACTION:
        print("Recommended: skip this figure")
    else:
        print(f"Recommended: place figure at cell {action} "
              f"(row {action // COLS}, col {action % COLS})")
    return action


if __name__ == "__main__":
    main()
