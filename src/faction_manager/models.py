"""Faction data models - workers, tasks, factions and per-tick results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from src.faction_manager.config import TERRITORY_WARFARE_TASK


class Mode(Enum):
    """Strategic mode the faction operates in for one tick."""

    GROWTH = "growth"  # gain respect so more workers can be recruited
    CONTESTED = "contested"  # take territory from rival factions
    ECONOMY = "economy"  # nothing left to take, make money


@dataclass(frozen=True)
class TaskDescriptor:
    """Yield rates of a single task type, per worker per unit time."""

    name: str
    base_respect_gain: float = 0.0
    base_money_gain: float = 0.0
    base_wanted_gain: float = 0.0
    is_hacking: bool = False


TERRITORY_WARFARE = TaskDescriptor(name=TERRITORY_WARFARE_TASK)


@dataclass
class WorkerInfo:
    """Snapshot of a single worker as reported by the environment."""

    name: str
    task: Optional[str] = None
    skill: float = 1.0


@dataclass(frozen=True)
class RivalFactionInfo:
    """Public information about a rival faction."""

    power: float


@dataclass(frozen=True)
class SelfFactionInfo:
    """Information about the faction this manager controls."""

    faction_name: str
    power: float = 0.0
    is_hacking: bool = False


@dataclass
class Allocation:
    """Result of assigning every worker to a task for one tick.

    ``assignments`` preserves worker enumeration order. The budget fields
    are ``None`` when no budget was computed (CONTESTED mode, or the
    risk formulas are unavailable).
    """

    mode: Mode
    assignments: Dict[str, TaskDescriptor] = field(default_factory=dict)
    initial_budget: Optional[float] = None
    remaining_budget: Optional[float] = None

    def task_names(self) -> Dict[str, str]:
        """Map each worker name to its assigned task name."""
        return {worker: task.name for worker, task in self.assignments.items()}

    def upgraded_workers(self, safe_task: TaskDescriptor) -> List[str]:
        """Workers that ended on something other than *safe_task*."""
        return [
            worker
            for worker, task in self.assignments.items()
            if task != safe_task
        ]


@dataclass
class TickReport:
    """Summary of one iteration of the control loop."""

    tick: int
    mode: Mode
    assignments: Dict[str, str]
    changed: List[str] = field(default_factory=list)
    failed_assignments: List[str] = field(default_factory=list)
    recruited: Optional[str] = None
    departed: List[str] = field(default_factory=list)
    remaining_budget: Optional[float] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def worker_count(self) -> int:
        """Number of workers assigned this tick."""
        return len(self.assignments)
