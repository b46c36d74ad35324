"""Contract between the faction manager and the host world."""

import logging
import math
from typing import Mapping, Optional, Protocol, Sequence

from src.faction_manager.models import (
    RivalFactionInfo,
    SelfFactionInfo,
    TaskDescriptor,
    WorkerInfo,
)

logger = logging.getLogger(__name__)


class InvalidEnvironmentData(Exception):
    """Raised when the environment reports data that cannot be ordered or used."""

    pass


class Environment(Protocol):
    """Operations the host world must expose to the control loop."""

    def sleep(self, duration_ms: int) -> None: ...

    def list_worker_names(self) -> Sequence[str]: ...

    def can_recruit(self) -> bool: ...

    def recruit(self, name: str) -> bool: ...

    def list_task_names(self) -> Sequence[str]: ...

    def get_task_descriptor(self, name: str) -> TaskDescriptor: ...

    def get_self_info(self) -> SelfFactionInfo: ...

    def get_worker_info(self, name: str) -> WorkerInfo: ...

    def get_rival_infos(self) -> Mapping[str, RivalFactionInfo]: ...

    def set_territory_engagement(self, enabled: bool) -> None: ...

    def estimate_clash_win_probability(self, rival_name: str) -> float: ...

    def set_worker_task(self, worker_name: str, task_name: str) -> bool: ...

    def has_advanced_formulas(self) -> bool: ...

    def estimate_risk_gain(
        self,
        self_info: SelfFactionInfo,
        worker_info: WorkerInfo,
        task: TaskDescriptor,
    ) -> float: ...


class RiskOracle:
    """Risk-gain estimates bound to a single per-tick faction snapshot.

    Only constructed once the environment reports advanced formulas, so
    holding a ``RiskOracle`` at all means per-worker risk deltas can be
    estimated.
    """

    def __init__(self, environment: Environment, self_info: SelfFactionInfo):
        self.environment = environment
        self.self_info = self_info
        self.calls = 0

    @classmethod
    def probe(
        cls, environment: Environment, self_info: SelfFactionInfo
    ) -> Optional["RiskOracle"]:
        """Return an oracle if the environment exposes advanced formulas."""
        if not environment.has_advanced_formulas():
            logger.debug("Advanced formulas unavailable; risk oracle disabled")
            return None
        return cls(environment, self_info)

    def __call__(self, worker: WorkerInfo, task: TaskDescriptor) -> float:
        self.calls += 1
        gain = float(
            self.environment.estimate_risk_gain(self.self_info, worker, task)
        )
        if math.isnan(gain):
            raise InvalidEnvironmentData(
                f"Risk gain for {worker.name} on {task.name!r} is NaN"
            )
        return gain
