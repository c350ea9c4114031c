"""
Titan Circuits Configuration

Centralized settings, paths, and constants for the application.
"""

import logging
from pathlib import Path
from dataclasses import dataclass
import appdirs


# Application info
APP_NAME = "TitanCircuits"
APP_AUTHOR = "TitanCircuits"
APP_VERSION = "1.0.0"


@dataclass(frozen=True)
class Paths:
    """Application paths."""
    # Config directory (stores user preferences)
    config_dir: Path = Path(appdirs.user_config_dir(APP_NAME, APP_AUTHOR))

    # Log directory
    log_dir: Path = Path(appdirs.user_log_dir(APP_NAME, APP_AUTHOR))

    @property
    def log_file(self) -> Path:
        return self.log_dir / "titan_circuits.log"

    def ensure_directories(self) -> None:
        """Create all required directories."""
        for dir_path in [self.config_dir, self.log_dir]:
            dir_path.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class GameSettings:
    """Match rules and timing."""
    # Titans each player places before the movement phase
    max_titans: int = 4

    # Per-turn countdown in milliseconds
    turn_duration_ms: int = 30_000  # 30 seconds

    # Whole-match countdown in milliseconds
    match_duration_ms: int = 300_000  # 5 minutes

    # Countdown tick interval in milliseconds
    tick_interval_ms: int = 1_000


@dataclass(frozen=True)
class BoardSettings:
    """Fixed three-ring board tables."""
    nodes_per_ring: int = 6

    # Intra-ring edge weights, edge i joins node i and node (i + 1) % 6
    outer_weights: tuple[int, ...] = (1, 2, 3, 1, 1, 1)
    middle_weights: tuple[int, ...] = (6, 4, 1, 6, 5, 4)
    inner_weights: tuple[int, ...] = (8, 9, 8, 8, 8, 9)

    # Inter-ring edge weights, indexed by node index
    outer_middle_weights: tuple[int, ...] = (2, 2, 1, 1, 1, 5)
    middle_inner_weights: tuple[int, ...] = (5, 4, 9, 5, 8, 8)

    # Geometry for renderers only
    center: tuple[float, float] = (250.0, 250.0)
    outer_radius: float = 200.0
    middle_radius: float = 130.0
    inner_radius: float = 70.0


# Singleton instances
PATHS = Paths()
GAME_SETTINGS = GameSettings()
BOARD_SETTINGS = BoardSettings()

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, log_to_file: bool = True) -> None:
    """Install console and (optionally) file handlers on the root logger."""
    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_to_file:
        handlers.append(logging.FileHandler(PATHS.log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)


def init_config(level: int = logging.INFO) -> None:
    """Initialize configuration, create required directories, set up logging."""
    PATHS.ensure_directories()
    configure_logging(level)
