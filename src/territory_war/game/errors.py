class WarGameError(Exception):
    """Base class for errors raised by the game core."""


class ResourceError(WarGameError):
    """A registry could not grow: capacity exhausted or allocation failed."""


class ReleasedError(WarGameError):
    """A territory, mission or registry was used after it was released."""


class UnknownTerritoryError(WarGameError, KeyError):
    """No territory with the given id or name lives in the registry."""


class UnknownMissionError(WarGameError, KeyError):
    """No mission with the given id lives in the registry."""
