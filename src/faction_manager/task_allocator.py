"""Task allocation - assign every worker to a task for the current mode."""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from src.faction_manager.models import (
    TERRITORY_WARFARE,
    Allocation,
    Mode,
    TaskDescriptor,
    WorkerInfo,
)
from src.faction_manager.task_catalog import TaskCatalog

logger = logging.getLogger(__name__)

RiskGain = Callable[[WorkerInfo, TaskDescriptor], float]


class TaskAllocator:
    """Budget-constrained greedy allocation of workers to tasks.

    In GROWTH and ECONOMY modes every worker starts on the catalogue's
    safe task. The wanted budget is the summed risk gain of that baseline.
    Each worker in turn then takes the best-ranked task whose risk delta
    against the safe task satisfies ``budget + delta > 0``, and the delta
    is debited (``budget -= delta``) before the next worker is considered.

    With ``keep_budget_non_negative`` a candidate must additionally leave
    ``budget - delta >= 0``, so the running budget never drops below zero.
    """

    def __init__(self, catalog: TaskCatalog, keep_budget_non_negative: bool = False):
        self.catalog = catalog
        self.keep_budget_non_negative = keep_budget_non_negative

    def allocate(
        self,
        mode: Mode,
        workers: Sequence[WorkerInfo],
        risk_gain: Optional[RiskGain] = None,
    ) -> Allocation:
        """Assign a task to every worker.

        Args:
            mode: Strategy for this tick.
            workers: Worker snapshots, in priority order.
            risk_gain: Risk-gain estimator, or None when the environment
                cannot estimate risk; the safe-task baseline then stands.

        Returns:
            Allocation covering every worker exactly once.
        """
        if mode is Mode.CONTESTED:
            return Allocation(
                mode=mode,
                assignments={w.name: TERRITORY_WARFARE for w in workers},
            )
        if mode not in (Mode.GROWTH, Mode.ECONOMY):
            raise ValueError(f"Unhandled mode: {mode}")

        safe_task = self.catalog.safe_task()
        allocation = Allocation(
            mode=mode,
            assignments={w.name: safe_task for w in workers},
        )

        if risk_gain is None:
            return allocation

        candidates = self.catalog.ranked_candidates(mode)
        budget = self.compute_budget(workers, safe_task, risk_gain)
        allocation.initial_budget = budget

        for worker in workers:
            task, budget = self._upgrade_worker(
                worker, safe_task, candidates, budget, risk_gain
            )
            allocation.assignments[worker.name] = task

        allocation.remaining_budget = budget
        return allocation

    @staticmethod
    def compute_budget(
        workers: Sequence[WorkerInfo],
        safe_task: TaskDescriptor,
        risk_gain: RiskGain,
    ) -> float:
        """Summed risk gain of every worker performing *safe_task*."""
        return sum(risk_gain(worker, safe_task) for worker in workers)

    def accepts(self, budget: float, delta: float) -> bool:
        """Whether a candidate with risk *delta* may be taken from *budget*."""
        if budget + delta <= 0:
            return False
        if self.keep_budget_non_negative and budget - delta < 0:
            return False
        return True

    def _upgrade_worker(
        self,
        worker: WorkerInfo,
        safe_task: TaskDescriptor,
        candidates: List[TaskDescriptor],
        budget: float,
        risk_gain: RiskGain,
    ) -> Tuple[TaskDescriptor, float]:
        """Pick the first candidate accepted against *budget*.

        Returns:
            ``(task, budget_left)``; the safe task and an untouched budget
            if no candidate is accepted.
        """
        if not candidates:
            return safe_task, budget

        baseline = risk_gain(worker, safe_task)
        for candidate in candidates:
            delta = risk_gain(worker, candidate) - baseline
            if self.accepts(budget, delta):
                logger.debug(
                    "Set %s to %s, wanted budget %.4f - %.4f = %.4f",
                    worker.name,
                    candidate.name,
                    budget,
                    delta,
                    budget - delta,
                )
                return candidate, budget - delta

        return safe_task, budget
