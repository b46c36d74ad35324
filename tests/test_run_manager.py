"""Tests for the command line runner."""

import json

from src.faction_manager.models import Mode
from src.faction_manager.run_manager import build_demo_environment, run_manager


class TestRunManager:
    def test_demo_world_grows(self, tmp_path):
        reports = run_manager(5, tmp_path / "missing.json")
        assert len(reports) == 5
        assert reports[-1].worker_count == 8
        assert all(r.mode is Mode.GROWTH for r in reports)

    def test_demo_world_turns_to_territory(self, tmp_path):
        env = build_demo_environment()
        reports = run_manager(12, tmp_path / "missing.json", environment=env)

        assert reports[-1].mode is Mode.CONTESTED
        assert set(reports[-1].assignments.values()) == {"Territory Warfare"}
        # 120 vs 95 power is not enough to risk a clash
        assert env.territory_engagement is False

    def test_settings_file_used(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"growth_threshold": 4, "tick_interval_ms": 7}))
        env = build_demo_environment()

        reports = run_manager(2, path, environment=env)
        assert reports[-1].mode is Mode.CONTESTED
        assert env.slept_ms == 14
