"""Run the faction manager against the in-memory world.

Usage:
    python -m src.faction_manager.run_manager [ticks] [settings_path]

Examples:
    python -m src.faction_manager.run_manager 50
    python -m src.faction_manager.run_manager 50 /path/to/settings.json
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from src.faction_manager.environment import InvalidEnvironmentData
from src.faction_manager.faction_controller import FactionController
from src.faction_manager.memory_environment import MemoryEnvironment
from src.faction_manager.models import RivalFactionInfo, SelfFactionInfo, TickReport
from src.faction_manager.settings import SettingsStore
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_demo_environment() -> MemoryEnvironment:
    """A small world: three idle workers and three rival factions."""
    env = MemoryEnvironment.with_workers("Slum Snakes", 3, max_workers=15)
    env.self_info = SelfFactionInfo("Slum Snakes", power=120.0)
    env.rivals = {
        "Slum Snakes": RivalFactionInfo(power=120.0),
        "The Syndicate": RivalFactionInfo(power=95.0),
        "Tetrads": RivalFactionInfo(power=40.0),
        "The Dark Army": RivalFactionInfo(power=0.0),
    }
    return env


def run_manager(
    ticks: Optional[int] = 50,
    settings_path: Optional[Path] = None,
    environment: Optional[MemoryEnvironment] = None,
) -> List[TickReport]:
    """Load settings and run the control loop.

    Args:
        ticks: Number of ticks to run. None runs forever.
        settings_path: JSON settings file. Defaults to
            ``data/faction_settings.json``.
        environment: World to manage. Defaults to the demo world.

    Returns:
        Reports of every completed tick.

    Raises:
        InvalidEnvironmentData: If the world's task table is unusable.
    """
    settings = SettingsStore(settings_path).load()
    env = environment or build_demo_environment()

    controller = FactionController(env, settings)
    reports = controller.run(max_ticks=ticks)

    if reports:
        last = reports[-1]
        logger.info(
            "Finished %d ticks: %d workers, mode %s",
            len(reports),
            last.worker_count,
            last.mode.name,
        )
    return reports


if __name__ == "__main__":
    ticks = int(sys.argv[1]) if len(sys.argv) > 1 else 50
    settings_path = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    setup_logging(SettingsStore(settings_path).load().log_level)

    try:
        reports = run_manager(ticks, settings_path)
    except InvalidEnvironmentData:
        logger.exception("Faction manager aborted")
        sys.exit(1)

    for report in reports[-1:]:
        print(f"Tick {report.tick} ({report.mode.name}):")
        for worker, task in report.assignments.items():
            print(f"  {worker}: {task}")
