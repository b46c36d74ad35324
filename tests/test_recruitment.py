"""Tests for recruitment and worker naming."""

import logging

from src.faction_manager.memory_environment import MemoryEnvironment
from src.faction_manager.models import SelfFactionInfo, WorkerInfo
from src.faction_manager.recruitment import NameGenerator, Recruiter


# ── Helpers ──────────────────────────────────────────────────────────


class _RefusingEnvironment(MemoryEnvironment):
    """Allows recruiting in principle but rejects every name."""

    def recruit(self, name):
        return False


def _make_environment(worker_names=(), max_workers=12, cls=MemoryEnvironment):
    return cls(
        SelfFactionInfo("Slum Snakes"),
        workers=[WorkerInfo(name) for name in worker_names],
        max_workers=max_workers,
    )


# ── Names ────────────────────────────────────────────────────────────


class TestNameGenerator:
    def test_sequential_names(self):
        names = NameGenerator()
        assert names.next_name([]) == "Recruit-1"
        assert names.next_name([]) == "Recruit-2"

    def test_skips_taken_names(self):
        names = NameGenerator("Member")
        assert names.next_name(["Member-1", "Member-2"]) == "Member-3"


# ── Recruiter ────────────────────────────────────────────────────────


class TestRecruiter:
    def test_recruits_when_allowed(self):
        env = _make_environment(["Recruit-1"])
        recruiter = Recruiter(env)
        name = recruiter.maybe_recruit(env.list_worker_names())

        assert name == "Recruit-2"
        assert "Recruit-2" in env.list_worker_names()

    def test_nothing_when_full(self):
        env = _make_environment(["a", "b"], max_workers=2)
        assert Recruiter(env).maybe_recruit(env.list_worker_names()) is None
        assert env.list_worker_names() == ["a", "b"]

    def test_failure_is_not_fatal(self, caplog):
        env = _make_environment(cls=_RefusingEnvironment)
        with caplog.at_level(logging.WARNING):
            name = Recruiter(env).maybe_recruit([])

        assert name is None
        assert "Failed to recruit worker with name Recruit-1" in caplog.text
