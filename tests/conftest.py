import logging

import pytest

from territory_war.game import CombatEngine, MissionRegistry, TerritoryRegistry
from territory_war.utils.logger import war_logger

WAR_ENV_VARS = (
    'WAR_SEED', 'WAR_LOG_LEVEL', 'WAR_LOG_FILE', 'WAR_COLOR',
    'WAR_MAX_TERRITORIES', 'WAR_MAX_NEIGHBORS', 'WAR_MAX_MISSIONS',
)


class ScriptedDice:
    """Dice source that returns a fixed sequence of rolls."""

    def __init__(self, *rolls):
        self.rolls = list(rolls)
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        value = self.rolls.pop(0)
        assert a <= value <= b
        return value


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep WAR_* variables and logger state from leaking between tests."""
    for name in WAR_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr('territory_war.utils.config.load_dotenv', lambda *a, **kw: False)
    war_logger.console_level = logging.INFO
    war_logger.color = False
    war_logger.reset_stats()
    yield
    war_logger.close()


@pytest.fixture
def territories():
    return TerritoryRegistry()


@pytest.fixture
def missions():
    return MissionRegistry()


@pytest.fixture
def board(territories):
    """Amazônia (p1, 5) <-> Sertão (p2, 3) <-> Litoral (neutral, 2)."""
    amazonia = territories.create_territory("Amazônia", 1, 5)
    sertao = territories.create_territory("Sertão", 2, 3)
    litoral = territories.create_territory("Litoral", 0, 2)
    territories.add_neighbor(amazonia, sertao)
    territories.add_neighbor(sertao, amazonia)
    territories.add_neighbor(sertao, litoral)
    territories.add_neighbor(litoral, sertao)
    return amazonia, sertao, litoral


@pytest.fixture
def engine_with():
    """Factory for a CombatEngine whose dice return the given rolls in order."""
    def make(*rolls):
        return CombatEngine(ScriptedDice(*rolls))
    return make
