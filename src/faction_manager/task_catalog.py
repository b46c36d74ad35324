"""Task catalogue - the immutable table of task types available to workers.

Fetched once at startup and kept as a DataFrame, one row per task:

- ``safe_task`` is the task with the lowest wanted gain (ties by name).
- ``ranked_candidates`` orders tasks by the metric a mode optimises.
"""

import logging
from typing import Dict, Iterable, List, Optional

import pandas as pd

from src.faction_manager.environment import Environment, InvalidEnvironmentData
from src.faction_manager.models import Mode, TaskDescriptor

logger = logging.getLogger(__name__)

# Metric column each ranked mode optimises
_MODE_METRIC = {
    Mode.GROWTH: "base_respect_gain",
    Mode.ECONOMY: "base_money_gain",
}

_COLUMNS = [
    "name",
    "base_respect_gain",
    "base_money_gain",
    "base_wanted_gain",
    "is_hacking",
]


class TaskCatalog:
    """Validated, read-only view over the available task descriptors."""

    def __init__(self, tasks: Iterable[TaskDescriptor]):
        self._tasks: Dict[str, TaskDescriptor] = {}
        for task in tasks:
            if task.name in self._tasks:
                raise InvalidEnvironmentData(f"Duplicate task name: {task.name!r}")
            self._tasks[task.name] = task

        self.frame = pd.DataFrame(
            [
                {
                    "name": t.name,
                    "base_respect_gain": float(t.base_respect_gain),
                    "base_money_gain": float(t.base_money_gain),
                    "base_wanted_gain": float(t.base_wanted_gain),
                    "is_hacking": bool(t.is_hacking),
                }
                for t in self._tasks.values()
            ],
            columns=_COLUMNS,
        )
        self._validate()
        self._safe_task = self._find_safe_task()

    @classmethod
    def from_environment(
        cls, environment: Environment, is_hacking: Optional[bool] = None
    ) -> "TaskCatalog":
        """Fetch every task descriptor from *environment*.

        Args:
            environment: The host world.
            is_hacking: If provided, keep only tasks whose ``is_hacking``
                flag matches (a faction can only perform tasks of its own
                kind).

        Raises:
            InvalidEnvironmentData: If no usable task remains.
        """
        tasks = [
            environment.get_task_descriptor(name)
            for name in environment.list_task_names()
        ]
        if is_hacking is not None:
            tasks = [t for t in tasks if t.is_hacking == is_hacking]

        catalog = cls(tasks)
        logger.info(
            "Loaded %d tasks; safe task is %r",
            len(catalog),
            catalog.safe_task().name,
        )
        return catalog

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def get(self, name: str) -> TaskDescriptor:
        """Look up a task by name."""
        return self._tasks[name]

    def safe_task(self) -> TaskDescriptor:
        """Task with the globally lowest wanted gain."""
        return self._safe_task

    def ranked_candidates(self, mode: Mode) -> List[TaskDescriptor]:
        """Tasks worth upgrading to in *mode*, best first.

        GROWTH keeps tasks with positive respect gain, ECONOMY those with
        positive money gain, each sorted descending by that metric. Ties
        keep catalogue order.

        Raises:
            ValueError: For modes that do not rank tasks (CONTESTED).
        """
        if mode not in _MODE_METRIC:
            raise ValueError(f"Mode {mode} does not rank tasks")
        metric = _MODE_METRIC[mode]

        ranked = self.frame.loc[self.frame[metric] > 0].sort_values(
            metric, ascending=False, kind="stable"
        )
        return [self._tasks[name] for name in ranked["name"]]

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _validate(self):
        if self.frame.empty:
            raise InvalidEnvironmentData("Task catalogue is empty")

        gains = self.frame[["base_respect_gain", "base_money_gain", "base_wanted_gain"]]
        nan_rows = gains.isna().any(axis=1)
        if nan_rows.any():
            raise InvalidEnvironmentData(
                f"NaN yield for tasks: {self.frame.loc[nan_rows, 'name'].tolist()}"
            )

        negative = (self.frame["base_respect_gain"] < 0) | (
            self.frame["base_money_gain"] < 0
        )
        if negative.any():
            raise InvalidEnvironmentData(
                "Negative respect/money yield for tasks: "
                f"{self.frame.loc[negative, 'name'].tolist()}"
            )

    def _find_safe_task(self) -> TaskDescriptor:
        ordered = self.frame.sort_values(
            ["base_wanted_gain", "name"], ascending=[True, True], kind="stable"
        )
        return self._tasks[ordered.iloc[0]["name"]]
