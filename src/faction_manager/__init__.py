from src.faction_manager.environment import (
    Environment,
    InvalidEnvironmentData,
    RiskOracle,
)
from src.faction_manager.faction_controller import FactionController
from src.faction_manager.memory_environment import MemoryEnvironment
from src.faction_manager.mode_selector import ModeSelector
from src.faction_manager.models import (
    TERRITORY_WARFARE,
    Allocation,
    Mode,
    RivalFactionInfo,
    SelfFactionInfo,
    TaskDescriptor,
    TickReport,
    WorkerInfo,
)
from src.faction_manager.recruitment import NameGenerator, Recruiter
from src.faction_manager.settings import FactionSettings, SettingsStore
from src.faction_manager.task_allocator import TaskAllocator
from src.faction_manager.task_catalog import TaskCatalog

__all__ = [
    "Allocation",
    "Environment",
    "FactionController",
    "FactionSettings",
    "InvalidEnvironmentData",
    "MemoryEnvironment",
    "Mode",
    "ModeSelector",
    "NameGenerator",
    "Recruiter",
    "RiskOracle",
    "RivalFactionInfo",
    "SelfFactionInfo",
    "SettingsStore",
    "TERRITORY_WARFARE",
    "TaskAllocator",
    "TaskCatalog",
    "TaskDescriptor",
    "TickReport",
    "WorkerInfo",
]
