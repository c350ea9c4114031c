"""
Titan Circuits - Headless match runner

Entry point for the application. Starts a match and feeds the node ids
given on the command line to the board, one click each, in order.

    python main.py outer-0 outer-1 outer-2 ...
"""

import argparse
import logging
import sys

from PySide6.QtCore import QCoreApplication

from config import init_config, APP_NAME, APP_VERSION
from models.player import PlayerColor

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="titan-circuits", description=__doc__.splitlines()[1])
    parser.add_argument("clicks", nargs="*", metavar="NODE",
                        help="node ids to click, e.g. outer-0 middle-3")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log rejected actions as well")
    return parser


def main(argv: list[str] = None) -> int:
    """Main entry point for Titan Circuits."""
    args = build_parser().parse_args(argv)

    # Initialize configuration, directories and logging
    init_config(logging.DEBUG if args.verbose else logging.INFO)

    # Create application (required for the clock's Qt timers)
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)

    from app import TitanCircuitsApp
    circuits = TitanCircuitsApp()
    circuits.start_match()

    for node_id in args.clicks:
        outcome = circuits.click_node(node_id)
        if outcome is None:
            continue
        if not outcome.accepted:
            logger.warning("%s: %s", node_id, outcome.reason)
        if circuits.rules_engine.state.is_over:
            break

    snapshot = circuits.snapshot()
    red = snapshot.player(PlayerColor.RED)
    blue = snapshot.player(PlayerColor.BLUE)
    print(f"Phase: {snapshot.phase.value.title()}  Status: {snapshot.status.value}")
    print(f"Final Score - Red: {red.score}, Blue: {blue.score}")
    circuits.clock.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
