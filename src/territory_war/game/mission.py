from typing import Dict, Iterator, List
from dataclasses import dataclass

from .errors import ReleasedError, ResourceError, UnknownMissionError


@dataclass
class Mission:
    mission_id: int
    description: str
    target_owner: int  # player the mission refers to, not validated
    released: bool = False

    def __setattr__(self, name, value):
        if getattr(self, 'released', False):
            raise ReleasedError(f"Mission #{self.mission_id} was already released")
        super().__setattr__(name, value)

    def ensure_active(self) -> None:
        if self.released:
            raise ReleasedError(f"Mission #{self.mission_id} was already released")

    def release(self) -> None:
        self.ensure_active()
        self.description = ""
        self.released = True

    def to_dict(self) -> dict:
        """Convert mission to dictionary for display."""
        self.ensure_active()
        return {
            'mission_id': self.mission_id,
            'description': self.description,
            'target_owner': self.target_owner
        }


class MissionRegistry:
    """Owns the strategic missions of a game. Missions have no link to territories."""

    def __init__(self, max_missions: int = 256):
        self.missions: Dict[int, Mission] = {}
        self.max_missions = max_missions
        self.released = False
        self._next_id = 1

    def _ensure_active(self) -> None:
        if self.released:
            raise ReleasedError("Mission registry was already released")

    def create_mission(self, description: str, target_owner: int) -> Mission:
        """Create a mission record and store it."""
        self._ensure_active()

        if not isinstance(description, str):
            raise ValueError("Mission description must be a string")
        if len(self.missions) >= self.max_missions:
            raise ResourceError(
                f"Cannot create mission: registry is full ({self.max_missions} missions)"
            )

        try:
            mission = Mission(
                mission_id=self._next_id,
                description=str(description),
                target_owner=target_owner
            )
            self.missions[mission.mission_id] = mission
        except MemoryError as e:
            raise ResourceError("Cannot allocate mission") from e

        self._next_id += 1
        return mission

    def get_mission(self, mission_id: int) -> Mission:
        self._ensure_active()
        try:
            return self.missions[mission_id]
        except KeyError:
            raise UnknownMissionError(f"No mission with id {mission_id}") from None

    def get_missions_for_owner(self, target_owner: int) -> List[Mission]:
        """Get missions that reference a given player."""
        self._ensure_active()
        return [m for m in self.missions.values() if m.target_owner == target_owner]

    def get_all_missions(self) -> List[Mission]:
        self._ensure_active()
        return list(self.missions.values())

    def release(self) -> int:
        """Release every mission, then the registry itself. Returns how many were released."""
        self._ensure_active()
        released = 0
        for mission_id in list(self.missions):
            self.missions.pop(mission_id).release()
            released += 1
        self.released = True
        return released

    def __len__(self) -> int:
        return len(self.missions)

    def __iter__(self) -> Iterator[Mission]:
        self._ensure_active()
        return iter(list(self.missions.values()))

    def to_dict(self) -> dict:
        self._ensure_active()
        return {
            mission_id: mission.to_dict()
            for mission_id, mission in self.missions.items()
        }
