"""In-memory environment - a self-contained world for demos and tests.

Holds workers, tasks and rival factions in plain dictionaries and applies
every action immediately. Risk gain is ``base_wanted_gain / skill``, or a
custom function passed in at construction.
"""

import time
from typing import Callable, Dict, List, Optional, Sequence

from src.faction_manager.config import TERRITORY_WARFARE_TASK
from src.faction_manager.models import (
    RivalFactionInfo,
    SelfFactionInfo,
    TaskDescriptor,
    WorkerInfo,
)

RiskFormula = Callable[[SelfFactionInfo, WorkerInfo, TaskDescriptor], float]

# A small, representative task table for a combat faction
DEFAULT_TASKS = [
    TaskDescriptor("Mug People", 0.00005, 3.6, 0.00005),
    TaskDescriptor("Deal Drugs", 0.00006, 15.0, 0.002),
    TaskDescriptor("Strongarm Civilians", 0.00004, 7.5, 0.02),
    TaskDescriptor("Run a Con", 0.00012, 45.0, 0.05),
    TaskDescriptor("Armed Robbery", 0.00014, 114.0, 0.1),
    TaskDescriptor("Human Trafficking", 0.004, 360.0, 1.25),
    TaskDescriptor("Terrorism", 0.01, 0.0, 6.0),
    TaskDescriptor("Vigilante Justice", 0.0, 0.0, 0.00001),
]


def _default_risk_formula(
    self_info: SelfFactionInfo, worker: WorkerInfo, task: TaskDescriptor
) -> float:
    return task.base_wanted_gain / worker.skill


class MemoryEnvironment:
    """Environment implementation backed by in-process state."""

    def __init__(
        self,
        self_info: SelfFactionInfo,
        tasks: Optional[Sequence[TaskDescriptor]] = None,
        workers: Optional[Sequence[WorkerInfo]] = None,
        rivals: Optional[Dict[str, RivalFactionInfo]] = None,
        win_probabilities: Optional[Dict[str, float]] = None,
        advanced_formulas: bool = True,
        max_workers: int = 12,
        risk_formula: Optional[RiskFormula] = None,
        real_sleep: bool = False,
    ):
        self.self_info = self_info
        self.tasks: Dict[str, TaskDescriptor] = {
            t.name: t for t in (DEFAULT_TASKS if tasks is None else tasks)
        }
        self.workers: Dict[str, WorkerInfo] = {w.name: w for w in workers or []}
        self.rivals: Dict[str, RivalFactionInfo] = dict(rivals or {})
        self.win_probabilities: Dict[str, float] = dict(win_probabilities or {})
        self.advanced_formulas = advanced_formulas
        self.max_workers = max_workers
        self.risk_formula = risk_formula or _default_risk_formula
        self.real_sleep = real_sleep

        self.territory_engagement: Optional[bool] = None
        self.rejected_tasks: set = set()
        self.slept_ms = 0
        self.risk_calls = 0
        self.task_changes: List[tuple] = []

    @classmethod
    def with_workers(cls, faction_name: str, count: int, **kwargs) -> "MemoryEnvironment":
        """Environment whose faction already has *count* idle workers."""
        workers = [
            WorkerInfo(name=f"worker-{i}", skill=1.0 + i * 0.1)
            for i in range(count)
        ]
        return cls(SelfFactionInfo(faction_name), workers=workers, **kwargs)

    # ------------------------------------------------------------------
    # Environment operations
    # ------------------------------------------------------------------

    def sleep(self, duration_ms: int) -> None:
        self.slept_ms += duration_ms
        if self.real_sleep:
            time.sleep(duration_ms / 1000)

    def list_worker_names(self) -> List[str]:
        return list(self.workers)

    def can_recruit(self) -> bool:
        return len(self.workers) < self.max_workers

    def recruit(self, name: str) -> bool:
        if name in self.workers or not self.can_recruit():
            return False
        self.workers[name] = WorkerInfo(name=name)
        return True

    def list_task_names(self) -> List[str]:
        return list(self.tasks)

    def get_task_descriptor(self, name: str) -> TaskDescriptor:
        return self.tasks[name]

    def get_self_info(self) -> SelfFactionInfo:
        return self.self_info

    def get_worker_info(self, name: str) -> WorkerInfo:
        worker = self.workers[name]
        return WorkerInfo(name=worker.name, task=worker.task, skill=worker.skill)

    def get_rival_infos(self) -> Dict[str, RivalFactionInfo]:
        return dict(self.rivals)

    def set_territory_engagement(self, enabled: bool) -> None:
        self.territory_engagement = enabled

    def estimate_clash_win_probability(self, rival_name: str) -> float:
        if rival_name in self.win_probabilities:
            return self.win_probabilities[rival_name]
        ours = self.self_info.power
        theirs = self.rivals[rival_name].power
        return ours / (ours + theirs) if ours + theirs > 0 else 0.0

    def set_worker_task(self, worker_name: str, task_name: str) -> bool:
        if worker_name not in self.workers or task_name in self.rejected_tasks:
            return False
        if task_name not in self.tasks and task_name != TERRITORY_WARFARE_TASK:
            return False
        self.workers[worker_name].task = task_name
        self.task_changes.append((worker_name, task_name))
        return True

    def has_advanced_formulas(self) -> bool:
        return self.advanced_formulas

    def estimate_risk_gain(
        self,
        self_info: SelfFactionInfo,
        worker_info: WorkerInfo,
        task: TaskDescriptor,
    ) -> float:
        if not self.advanced_formulas:
            raise RuntimeError("Advanced formulas are not available")
        self.risk_calls += 1
        return self.risk_formula(self_info, worker_info, task)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def remove_worker(self, name: str) -> None:
        """Drop a worker, as if it left the faction."""
        del self.workers[name]

    def current_tasks(self) -> Dict[str, Optional[str]]:
        """Map each worker to the task it is currently performing."""
        return {name: w.task for name, w in self.workers.items()}
