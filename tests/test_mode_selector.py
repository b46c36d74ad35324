"""Tests for mode selection and territory engagement."""

import math

import pytest

from src.faction_manager.environment import InvalidEnvironmentData
from src.faction_manager.memory_environment import MemoryEnvironment
from src.faction_manager.mode_selector import ModeSelector
from src.faction_manager.models import Mode, RivalFactionInfo, SelfFactionInfo


# ── Helpers ──────────────────────────────────────────────────────────

SELF = SelfFactionInfo("Slum Snakes", power=50.0)


def _rivals(**powers):
    rivals = {name.replace("_", " "): RivalFactionInfo(p) for name, p in powers.items()}
    rivals[SELF.faction_name] = RivalFactionInfo(SELF.power)
    return rivals


def _make_selector(win_probabilities=None, **kwargs):
    env = MemoryEnvironment(SELF, win_probabilities=win_probabilities)
    return ModeSelector(env, **kwargs), env


# ── Growth ───────────────────────────────────────────────────────────


class TestGrowth:
    @pytest.mark.parametrize("count", [0, 1, 11])
    def test_small_faction_grows(self, count):
        selector, _ = _make_selector()
        rivals = _rivals(Tetrads=1000.0, The_Syndicate=500.0)
        assert selector.select_mode(count, SELF, rivals) is Mode.GROWTH

    def test_growth_does_not_touch_engagement(self):
        selector, env = _make_selector()
        selector.select_mode(5, SELF, _rivals(Tetrads=10.0))
        assert env.territory_engagement is None

    def test_custom_threshold(self):
        selector, _ = _make_selector(growth_threshold=5)
        assert selector.select_mode(5, SELF, _rivals()) is Mode.ECONOMY


# ── Economy ──────────────────────────────────────────────────────────


class TestEconomy:
    def test_all_rivals_powerless(self):
        selector, _ = _make_selector()
        rivals = _rivals(Tetrads=0.0, The_Syndicate=0.0)
        assert selector.select_mode(12, SELF, rivals) is Mode.ECONOMY

    def test_no_rivals(self):
        selector, _ = _make_selector()
        assert selector.select_mode(20, SELF, {}) is Mode.ECONOMY

    def test_only_self_has_power(self):
        selector, env = _make_selector()
        assert selector.select_mode(12, SELF, _rivals(Tetrads=0.0)) is Mode.ECONOMY
        assert env.territory_engagement is None


# ── Contested ────────────────────────────────────────────────────────


class TestContested:
    def test_rival_with_power(self):
        selector, _ = _make_selector({"Tetrads": 0.5})
        assert selector.select_mode(12, SELF, _rivals(Tetrads=10.0)) is Mode.CONTESTED

    @pytest.mark.parametrize(
        "chance, expected",
        [(0.64, False), (0.65, False), (0.66, True), (1.0, True), (0.0, False)],
    )
    def test_engagement_threshold_is_exclusive(self, chance, expected):
        selector, env = _make_selector({"Tetrads": chance})
        selector.select_mode(12, SELF, _rivals(Tetrads=10.0))
        assert env.territory_engagement is expected

    def test_engagement_uses_top_rival(self):
        selector, env = _make_selector({"Tetrads": 0.9, "The Syndicate": 0.1})
        selector.select_mode(12, SELF, _rivals(Tetrads=10.0, The_Syndicate=20.0))
        assert env.territory_engagement is False

    def test_engagement_disabled_again(self):
        selector, env = _make_selector({"Tetrads": 0.9})
        rivals = _rivals(Tetrads=10.0)
        selector.select_mode(12, SELF, rivals)
        assert env.territory_engagement is True

        env.win_probabilities["Tetrads"] = 0.3
        selector.select_mode(12, SELF, rivals)
        assert env.territory_engagement is False
        assert selector.engagement_enabled is False


# ── Top rival ────────────────────────────────────────────────────────


class TestFindTopRival:
    def test_highest_power_wins(self):
        rivals = _rivals(Tetrads=10.0, The_Syndicate=30.0, Speakers=20.0)
        assert ModeSelector.find_top_rival(SELF, rivals) == "The Syndicate"

    def test_self_excluded_even_if_strongest(self):
        rivals = {
            "Slum Snakes": RivalFactionInfo(1000.0),
            "Tetrads": RivalFactionInfo(1.0),
        }
        assert ModeSelector.find_top_rival(SELF, rivals) == "Tetrads"

    def test_tie_broken_by_name(self):
        rivals = {
            "Tetrads": RivalFactionInfo(25.0),
            "Speakers": RivalFactionInfo(25.0),
            "The Syndicate": RivalFactionInfo(25.0),
        }
        assert ModeSelector.find_top_rival(SELF, rivals) == "Speakers"

    def test_tie_independent_of_insertion_order(self):
        forward = {"B": RivalFactionInfo(5.0), "A": RivalFactionInfo(5.0)}
        backward = {"A": RivalFactionInfo(5.0), "B": RivalFactionInfo(5.0)}
        assert ModeSelector.find_top_rival(SELF, forward) == "A"
        assert ModeSelector.find_top_rival(SELF, backward) == "A"

    def test_none_when_no_power(self):
        assert ModeSelector.find_top_rival(SELF, _rivals(Tetrads=0.0)) is None

    def test_nan_power_is_fatal(self):
        rivals = _rivals(Tetrads=10.0, The_Syndicate=math.nan)
        with pytest.raises(InvalidEnvironmentData, match="The Syndicate"):
            ModeSelector.find_top_rival(SELF, rivals)

    def test_nan_power_fatal_in_select_mode(self):
        selector, _ = _make_selector()
        with pytest.raises(InvalidEnvironmentData):
            selector.select_mode(12, SELF, _rivals(Tetrads=math.nan))
