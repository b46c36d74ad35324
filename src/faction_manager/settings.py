"""Faction settings - tunables loaded from and saved to a JSON file."""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Dict, Optional

from src.faction_manager.config import (
    GROWTH_THRESHOLD,
    RECRUIT_NAME_PREFIX,
    SETTINGS_FILE,
    TERRITORY_ENGAGEMENT_THRESHOLD,
    TICK_INTERVAL_MS,
)

logger = logging.getLogger(__name__)


@dataclass
class FactionSettings:
    """Tunables of the control loop."""

    growth_threshold: int = GROWTH_THRESHOLD
    # Minimum chance to win a clash before territory engagement is enabled
    territory_engagement_threshold: float = TERRITORY_ENGAGEMENT_THRESHOLD
    tick_interval_ms: int = TICK_INTERVAL_MS
    recruit_name_prefix: str = RECRUIT_NAME_PREFIX
    # Also refuse upgrades that would leave the wanted budget below zero
    keep_budget_non_negative: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        if self.growth_threshold < 0:
            raise ValueError(
                f"growth_threshold must be non-negative, got {self.growth_threshold}"
            )
        if not 0.0 <= self.territory_engagement_threshold <= 1.0:
            raise ValueError(
                "territory_engagement_threshold must be in [0, 1], "
                f"got {self.territory_engagement_threshold}"
            )
        if self.tick_interval_ms < 0:
            raise ValueError(
                f"tick_interval_ms must be non-negative, got {self.tick_interval_ms}"
            )
        if not self.recruit_name_prefix:
            raise ValueError("recruit_name_prefix cannot be empty")

    @classmethod
    def from_dict(cls, data: Dict) -> "FactionSettings":
        """Build settings from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown settings: %s", sorted(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict:
        return asdict(self)


class SettingsStore:
    """Loads and saves FactionSettings as JSON."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path or SETTINGS_FILE

    def load(self) -> FactionSettings:
        """Load settings, falling back to defaults.

        A missing file yields defaults silently; a corrupt file yields
        defaults with a warning. Out-of-range values raise ValueError.
        """
        if not self.path.exists():
            logger.debug("No settings file at %s, using defaults", self.path)
            return FactionSettings()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt settings file %s: %s", self.path, e)
            return FactionSettings()

        if not isinstance(data, dict):
            logger.warning("Settings file %s does not hold an object", self.path)
            return FactionSettings()

        settings = FactionSettings.from_dict(data)
        logger.info("Loaded settings from %s", self.path)
        return settings

    def save(self, settings: FactionSettings) -> Path:
        """Write *settings* to the store's path."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)

        logger.info("Saved settings to %s", self.path)
        return self.path
