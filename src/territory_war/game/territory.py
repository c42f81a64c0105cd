from typing import Dict, Iterator, List, Optional
from dataclasses import dataclass, field

from .errors import ReleasedError, ResourceError, UnknownTerritoryError

NEUTRAL = 0


@dataclass
class Territory:
    territory_id: int
    name: str
    owner: int = NEUTRAL  # 0 = neutral, 1..n = players
    armies: int = 0
    neighbors: List[int] = field(default_factory=list)  # territory ids, never owned
    released: bool = False

    def __setattr__(self, name, value):
        # Fields are frozen once the territory is released
        if getattr(self, 'released', False):
            raise ReleasedError(f"Territory #{self.territory_id} was already released")
        super().__setattr__(name, value)

    def ensure_active(self) -> None:
        """Raise ReleasedError if this territory was released."""
        if self.released:
            raise ReleasedError(f"Territory #{self.territory_id} was already released")

    def is_owned_by(self, player_id: int) -> bool:
        """Check if territory is owned by the specified player."""
        self.ensure_active()
        return self.owner == player_id

    def is_neutral(self) -> bool:
        self.ensure_active()
        return self.owner == NEUTRAL

    def is_adjacent_to(self, other: 'Territory') -> bool:
        """Check if an attack can go from this territory to another (directed)."""
        self.ensure_active()
        return any(neighbor_id == other.territory_id for neighbor_id in self.neighbors)

    def can_attack_from(self) -> bool:
        """Check if this territory can launch attacks (one army must stay behind)."""
        self.ensure_active()
        return self.armies >= 2

    def release(self) -> None:
        """Drop owned data and mark the territory unusable."""
        self.ensure_active()
        self.name = ""
        self.neighbors = []
        self.released = True

    def to_dict(self) -> dict:
        """Convert territory to dictionary for display."""
        self.ensure_active()
        return {
            'territory_id': self.territory_id,
            'name': self.name,
            'owner': self.owner,
            'armies': self.armies,
            'neighbors': self.neighbors.copy()
        }


class TerritoryRegistry:
    """
    Owns every territory of a game and the adjacency between them.

    Territories get a stable id on creation. Neighbor lists hold those ids,
    so a territory never owns its neighbors. Edges are directed: a road that
    goes both ways needs two add_neighbor calls, or one connect call.
    """

    def __init__(self, max_territories: int = 1024, max_neighbors: int = 64):
        self.territories: Dict[int, Territory] = {}
        self.max_territories = max_territories
        self.max_neighbors = max_neighbors
        self.released = False
        self._next_id = 1

    def _ensure_active(self) -> None:
        if self.released:
            raise ReleasedError("Territory registry was already released")

    def _ensure_member(self, territory: Territory) -> None:
        territory.ensure_active()
        if self.territories.get(territory.territory_id) is not territory:
            raise UnknownTerritoryError(
                f"Territory '{territory.name}' (#{territory.territory_id}) is not in this registry"
            )

    def create_territory(self, name: str, owner: int, armies: int) -> Territory:
        """Create a territory with an empty neighbor list and store it."""
        self._ensure_active()

        if not isinstance(name, str):
            raise ValueError("Territory name must be a string")
        if owner < 0:
            raise ValueError(f"Owner must be 0 (neutral) or a player id, got {owner}")
        if armies < 0:
            raise ValueError(f"Army count cannot be negative, got {armies}")
        if len(self.territories) >= self.max_territories:
            raise ResourceError(
                f"Cannot create territory '{name}': registry is full ({self.max_territories} territories)"
            )

        try:
            territory = Territory(
                territory_id=self._next_id,
                name=str(name),
                owner=owner,
                armies=armies
            )
            self.territories[territory.territory_id] = territory
        except MemoryError as e:
            raise ResourceError(f"Cannot allocate territory '{name}'") from e

        self._next_id += 1
        return territory

    def add_neighbor(self, territory: Territory, neighbor: Territory) -> None:
        """Append neighbor to territory's adjacency. Directed, no duplicate check."""
        self._ensure_active()
        self._ensure_member(territory)
        self._ensure_member(neighbor)

        if len(territory.neighbors) >= self.max_neighbors:
            raise ResourceError(
                f"Cannot add neighbor to '{territory.name}': "
                f"limit of {self.max_neighbors} neighbors reached"
            )

        try:
            territory.neighbors.append(neighbor.territory_id)
        except MemoryError as e:
            raise ResourceError(f"Cannot grow neighbor list of '{territory.name}'") from e

    def connect(self, first: Territory, second: Territory) -> None:
        """Add a road in both directions. Either both edges are added or none."""
        self._ensure_active()
        self._ensure_member(first)
        self._ensure_member(second)

        for territory in (first, second):
            if len(territory.neighbors) >= self.max_neighbors:
                raise ResourceError(
                    f"Cannot connect '{first.name}' and '{second.name}': "
                    f"'{territory.name}' already has {self.max_neighbors} neighbors"
                )

        self.add_neighbor(first, second)
        self.add_neighbor(second, first)

    def get_territory(self, territory_id: int) -> Territory:
        """Get a territory by id."""
        self._ensure_active()
        try:
            return self.territories[territory_id]
        except KeyError:
            raise UnknownTerritoryError(f"No territory with id {territory_id}") from None

    def get_territory_by_name(self, name: str) -> Optional[Territory]:
        """Get the first territory with the given name, if any."""
        self._ensure_active()
        for territory in self.territories.values():
            if territory.name == name:
                return territory
        return None

    def neighbors_of(self, territory: Territory) -> List[Territory]:
        """Resolve a territory's neighbor ids, in insertion order."""
        self._ensure_active()
        self._ensure_member(territory)
        return [self.territories[neighbor_id] for neighbor_id in territory.neighbors]

    def get_all_territories(self) -> List[Territory]:
        """Get all territories in creation order."""
        self._ensure_active()
        return list(self.territories.values())

    def get_territories_by_owner(self, player_id: int) -> List[Territory]:
        """Get all territories owned by a player (0 for neutral ones)."""
        self._ensure_active()
        return [t for t in self.territories.values() if t.owner == player_id]

    def release(self) -> int:
        """Release every territory, then the registry itself. Returns how many were released."""
        self._ensure_active()
        released = 0
        for territory_id in list(self.territories):
            territory = self.territories.pop(territory_id)
            territory.release()
            released += 1
        self.released = True
        return released

    def __len__(self) -> int:
        return len(self.territories)

    def __iter__(self) -> Iterator[Territory]:
        self._ensure_active()
        return iter(list(self.territories.values()))

    def to_dict(self) -> dict:
        """Convert all territories to dictionary keyed by name."""
        self._ensure_active()
        return {
            territory.name: territory.to_dict()
            for territory in self.territories.values()
        }
