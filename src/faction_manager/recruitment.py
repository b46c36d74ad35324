"""Recruitment of new workers."""

import logging
from typing import Iterable, Optional

from src.faction_manager.config import RECRUIT_NAME_PREFIX
from src.faction_manager.environment import Environment

logger = logging.getLogger(__name__)


class NameGenerator:
    """Produces worker names of the form ``<prefix>-<n>``."""

    def __init__(self, prefix: str = RECRUIT_NAME_PREFIX):
        self.prefix = prefix
        self._counter = 0

    def next_name(self, taken: Iterable[str]) -> str:
        """Next name not present in *taken*."""
        taken = set(taken)
        while True:
            self._counter += 1
            name = f"{self.prefix}-{self._counter}"
            if name not in taken:
                return name


class Recruiter:
    """Recruits a new worker whenever the environment allows it."""

    def __init__(self, environment: Environment, names: Optional[NameGenerator] = None):
        self.environment = environment
        self.names = names or NameGenerator()

    def maybe_recruit(self, existing: Iterable[str]) -> Optional[str]:
        """Try to recruit one worker.

        A failed recruitment is logged and otherwise ignored; the next
        tick simply tries again.

        Returns:
            The new worker's name, or None if nobody was recruited.
        """
        if not self.environment.can_recruit():
            return None

        name = self.names.next_name(existing)
        if not self.environment.recruit(name):
            logger.warning("Failed to recruit worker with name %s", name)
            return None

        logger.info("Recruited new worker %s", name)
        return name
