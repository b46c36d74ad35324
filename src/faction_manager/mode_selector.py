"""Mode selection - decide which strategy the faction follows this tick."""

import logging
from typing import Mapping, Optional

import pandas as pd

from src.faction_manager.config import (
    GROWTH_THRESHOLD,
    TERRITORY_ENGAGEMENT_THRESHOLD,
)
from src.faction_manager.environment import Environment, InvalidEnvironmentData
from src.faction_manager.models import Mode, RivalFactionInfo, SelfFactionInfo

logger = logging.getLogger(__name__)


class ModeSelector:
    """Chooses between GROWTH, CONTESTED and ECONOMY.

    Selecting CONTESTED also toggles territory engagement in the
    environment, depending on the chance to win a clash against the
    strongest rival.
    """

    def __init__(
        self,
        environment: Environment,
        growth_threshold: int = GROWTH_THRESHOLD,
        engagement_threshold: float = TERRITORY_ENGAGEMENT_THRESHOLD,
    ):
        self.environment = environment
        self.growth_threshold = growth_threshold
        self.engagement_threshold = engagement_threshold
        self.engagement_enabled: Optional[bool] = None

    def select_mode(
        self,
        worker_count: int,
        self_info: SelfFactionInfo,
        rival_infos: Mapping[str, RivalFactionInfo],
    ) -> Mode:
        """Select the mode for this tick.

        Raises:
            InvalidEnvironmentData: If a rival reports NaN power (checked
                only once the rival standings matter).
        """
        if worker_count < self.growth_threshold:
            return Mode.GROWTH

        top_rival = self.find_top_rival(self_info, rival_infos)
        if top_rival is None:
            return Mode.ECONOMY

        win_chance = self.environment.estimate_clash_win_probability(top_rival)
        enabled = win_chance > self.engagement_threshold
        self.environment.set_territory_engagement(enabled)

        if enabled != self.engagement_enabled:
            logger.info(
                "Territory engagement %s (%.1f%% to win against %s)",
                "enabled" if enabled else "disabled",
                win_chance * 100,
                top_rival,
            )
        self.engagement_enabled = enabled

        return Mode.CONTESTED

    @staticmethod
    def find_top_rival(
        self_info: SelfFactionInfo,
        rival_infos: Mapping[str, RivalFactionInfo],
    ) -> Optional[str]:
        """Name of the most powerful rival with positive power.

        The faction itself is excluded by name. Equal power is broken by
        name, alphabetically first wins.

        Returns:
            The rival's name, or None if no rival has any power left.
        """
        rivals = pd.DataFrame(
            [
                {"name": name, "power": float(info.power)}
                for name, info in rival_infos.items()
                if name != self_info.faction_name
            ],
            columns=["name", "power"],
        )

        nan_power = rivals["power"].isna()
        if nan_power.any():
            raise InvalidEnvironmentData(
                f"NaN power for rivals: {rivals.loc[nan_power, 'name'].tolist()}"
            )

        contenders = rivals.loc[rivals["power"] > 0].sort_values(
            ["power", "name"], ascending=[False, True], kind="stable"
        )
        if contenders.empty:
            return None
        return contenders.iloc[0]["name"]
