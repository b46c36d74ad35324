import logging
import logging.handlers
from pathlib import Path
from typing import Dict, Optional

PACKAGE_LOGGER = "src.faction_manager"

# The allocator logs every accepted upgrade at DEBUG, once per worker per tick
DEFAULT_MODULE_LEVELS = {
    "src.faction_manager.task_allocator": "INFO",
}


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def apply_module_levels(
    log_level: str = "INFO", module_levels: Optional[Dict[str, str]] = None
) -> None:
    """Set the faction manager's logger level, then per-module overrides."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(_level(log_level))
    levels = DEFAULT_MODULE_LEVELS if module_levels is None else module_levels
    for name, level in levels.items():
        logging.getLogger(name).setLevel(_level(level))


def setup_logging(
    log_level: str = "INFO",
    module_levels: Optional[Dict[str, str]] = None,
    log_dir: Optional[Path] = None,
) -> None:
    """Configure logging for the faction manager.

    Module levels are applied on every call; handlers are only attached
    the first time.
    """
    apply_module_levels(log_level, module_levels)

    # Root logger
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return  # Already configured

    log_dir = log_dir or Path(__file__).parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "faction_manager.log"

    root_logger.setLevel(_level(log_level))

    # One tick every few milliseconds adds up; rotate at 5MB, keep 3 backups
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3
    )
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(_level(log_level))

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info(
        "Logging initialized (level=%s, log=%s)", log_level, log_file
    )
