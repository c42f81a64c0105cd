from contextlib import contextmanager
from typing import Iterator, Optional, Tuple
from dataclasses import dataclass

from .territory import TerritoryRegistry
from .mission import MissionRegistry
from .errors import ReleasedError
from ..utils.logger import war_logger


@dataclass
class ReleaseSummary:
    territories_released: int = 0
    missions_released: int = 0

    def to_dict(self) -> dict:
        return {
            'territories_released': self.territories_released,
            'missions_released': self.missions_released
        }


def release_all(territories: Optional[TerritoryRegistry],
                missions: Optional[MissionRegistry]) -> ReleaseSummary:
    """
    Release every territory and mission, then both registries.

    Each territory drops its name and its neighbor ids; the neighbors
    themselves are released through their own registry slot. A None
    registry is skipped. Releasing a registry a second time raises
    ReleasedError, after the other registry has still been released.
    """
    summary = ReleaseSummary()
    already_released = [
        name for name, registry in (('territory', territories), ('mission', missions))
        if registry is not None and registry.released
    ]

    if territories is not None and not territories.released:
        summary.territories_released = territories.release()

    if missions is not None and not missions.released:
        summary.missions_released = missions.release()

    war_logger.log_game_event(
        'released',
        f"Released {summary.territories_released} territories and "
        f"{summary.missions_released} missions"
    )

    if already_released:
        raise ReleasedError(
            f"Already released: {' and '.join(already_released)} registry"
        )
    return summary


@contextmanager
def game_session(settings=None) -> Iterator[Tuple[TerritoryRegistry, MissionRegistry]]:
    """Yield fresh registries and release them exactly once on exit."""
    if settings is not None:
        territories = TerritoryRegistry(
            max_territories=settings.max_territories,
            max_neighbors=settings.max_neighbors
        )
        missions = MissionRegistry(max_missions=settings.max_missions)
    else:
        territories = TerritoryRegistry()
        missions = MissionRegistry()

    try:
        yield territories, missions
    finally:
        release_all(
            territories if not territories.released else None,
            missions if not missions.released else None
        )
