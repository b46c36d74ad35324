"""Shared fixtures for the faction manager test suite."""

import pytest

from src.faction_manager.models import TaskDescriptor
from src.faction_manager.task_catalog import TaskCatalog


@pytest.fixture
def tasks():
    """Safe task, three respect tasks, and two money-only tasks."""
    return [
        TaskDescriptor("Vigilante Justice", 0.0, 0.0, 0.0),
        TaskDescriptor("Terrorism", 3.0, 0.0, 3.0),
        TaskDescriptor("Human Trafficking", 2.0, 50.0, 2.0),
        TaskDescriptor("Mug People", 1.0, 5.0, 1.0),
        TaskDescriptor("Armed Robbery", 0.0, 20.0, 1.5),
        TaskDescriptor("Train Combat", 0.0, 0.0, 0.5),
    ]


@pytest.fixture
def catalog(tasks):
    return TaskCatalog(tasks)
