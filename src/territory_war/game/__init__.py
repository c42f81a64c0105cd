from .errors import (
    WarGameError,
    ResourceError,
    ReleasedError,
    UnknownTerritoryError,
    UnknownMissionError,
)
from .territory import NEUTRAL, Territory, TerritoryRegistry
from .mission import Mission, MissionRegistry
from .combat import AttackCheck, CombatEngine, CombatResult, can_attack, check_attack
from .lifecycle import ReleaseSummary, game_session, release_all

__all__ = [
    'WarGameError', 'ResourceError', 'ReleasedError', 'UnknownTerritoryError', 'UnknownMissionError',
    'NEUTRAL', 'Territory', 'TerritoryRegistry',
    'Mission', 'MissionRegistry',
    'AttackCheck', 'CombatEngine', 'CombatResult', 'can_attack', 'check_attack',
    'ReleaseSummary', 'game_session', 'release_all',
]
