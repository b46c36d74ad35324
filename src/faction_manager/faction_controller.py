"""Faction controller - orchestrates the per-tick control loop."""

import logging
from typing import List, Optional, Sequence

from src.faction_manager.environment import Environment, RiskOracle
from src.faction_manager.mode_selector import ModeSelector
from src.faction_manager.models import Allocation, Mode, TickReport, WorkerInfo
from src.faction_manager.recruitment import NameGenerator, Recruiter
from src.faction_manager.settings import FactionSettings
from src.faction_manager.task_allocator import TaskAllocator
from src.faction_manager.task_catalog import TaskCatalog

logger = logging.getLogger(__name__)


class FactionController:
    """Main controller for the faction's workers.

    Coordinates Recruiter (new workers), ModeSelector (strategy) and
    TaskAllocator (assignments), then pushes the resulting assignments
    back into the environment.

    Worker and faction state is read once per tick and every risk
    estimate of that tick is made against the same snapshot.
    """

    def __init__(
        self,
        environment: Environment,
        settings: Optional[FactionSettings] = None,
        catalog: Optional[TaskCatalog] = None,
    ):
        self.environment = environment
        self.settings = settings or FactionSettings()

        self_info = environment.get_self_info()
        self.catalog = catalog or TaskCatalog.from_environment(
            environment, is_hacking=self_info.is_hacking
        )

        self.selector = ModeSelector(
            environment,
            growth_threshold=self.settings.growth_threshold,
            engagement_threshold=self.settings.territory_engagement_threshold,
        )
        self.allocator = TaskAllocator(
            self.catalog,
            keep_budget_non_negative=self.settings.keep_budget_non_negative,
        )
        self.recruiter = Recruiter(
            environment, NameGenerator(self.settings.recruit_name_prefix)
        )

        self.known_workers = set(environment.list_worker_names())
        self.last_mode: Optional[Mode] = None
        self.tick_count = 0

        logger.info(
            "Managing faction %s with %d workers and %d tasks",
            self_info.faction_name,
            len(self.known_workers),
            len(self.catalog),
        )

    def run(self, max_ticks: Optional[int] = None) -> List[TickReport]:
        """Run the control loop.

        Sleeps for the tick interval before every tick. A tick that
        raises is logged and abandoned; the loop carries on with the next
        one.

        Args:
            max_ticks: Stop after this many ticks. None loops forever.

        Returns:
            Reports of the ticks that completed.
        """
        reports = []
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            ticks += 1
            self.environment.sleep(self.settings.tick_interval_ms)
            try:
                report = self.run_tick()
            except Exception:
                logger.exception("Tick %d failed", self.tick_count)
                continue
            if max_ticks is not None:
                reports.append(report)
        return reports

    def run_tick(self) -> TickReport:
        """Execute a single iteration: recruit, select mode, allocate, apply."""
        self.tick_count += 1

        recruited = self.recruiter.maybe_recruit(
            self.environment.list_worker_names()
        )
        names = list(self.environment.list_worker_names())
        departed = self._sync_known_workers(names)

        self_info = self.environment.get_self_info()
        rivals = self.environment.get_rival_infos()
        mode = self.selector.select_mode(len(names), self_info, rivals)

        if mode != self.last_mode:
            logger.info(
                "Switched mode: %s -> %s",
                self.last_mode.name if self.last_mode else None,
                mode.name,
            )
            self.last_mode = mode

        workers = [self.environment.get_worker_info(name) for name in names]

        oracle = None
        if mode is not Mode.CONTESTED:
            oracle = RiskOracle.probe(self.environment, self_info)

        allocation = self.allocator.allocate(mode, workers, oracle)
        changed, failed = self._apply(workers, allocation)

        return TickReport(
            tick=self.tick_count,
            mode=mode,
            assignments=allocation.task_names(),
            changed=changed,
            failed_assignments=failed,
            recruited=recruited,
            departed=departed,
            remaining_budget=allocation.remaining_budget,
        )

    def _sync_known_workers(self, names: Sequence[str]) -> List[str]:
        """Update the known-worker set; return workers that disappeared."""
        current = set(names)
        departed = sorted(self.known_workers - current)
        for name in departed:
            logger.warning("Worker %s is no longer part of the faction", name)
        self.known_workers = current
        return departed

    def _apply(self, workers: Sequence[WorkerInfo], allocation: Allocation):
        """Push assignments to the environment.

        Workers already on their target task are left alone.

        Returns:
            ``(changed, failed)`` lists of worker names.
        """
        changed, failed = [], []
        for worker in workers:
            task = allocation.assignments[worker.name]
            if worker.task == task.name:
                continue
            if self.environment.set_worker_task(worker.name, task.name):
                changed.append(worker.name)
            else:
                logger.warning(
                    "Failed to set %s to %s; keeping %s",
                    worker.name,
                    task.name,
                    worker.task,
                )
                failed.append(worker.name)

        if changed:
            logger.info(
                "Tick %d (%s): reassigned %d/%d workers",
                self.tick_count,
                allocation.mode.name,
                len(changed),
                len(workers),
            )
        return changed, failed
