import pytest

from territory_war.game import MissionRegistry, ReleasedError, ResourceError, UnknownMissionError


def test_create_mission(missions):
    mission = missions.create_mission("Eliminate player 2", 2)

    assert mission.description == "Eliminate player 2"
    assert mission.target_owner == 2
    assert missions.get_mission(mission.mission_id) is mission
    assert len(missions) == 1


def test_target_owner_is_not_validated(missions):
    mission = missions.create_mission("Hold the line", 42)

    assert mission.target_owner == 42


def test_lookups(missions):
    north = missions.create_mission("Conquer 3 territories in the North region", 0)
    eliminate = missions.create_mission("Eliminate player 2", 2)

    assert missions.get_all_missions() == [north, eliminate]
    assert list(missions) == [north, eliminate]
    assert missions.get_missions_for_owner(2) == [eliminate]
    assert missions.to_dict()[north.mission_id]['description'].startswith("Conquer")

    with pytest.raises(UnknownMissionError):
        missions.get_mission(999)


def test_create_mission_raises_resource_error_when_full():
    registry = MissionRegistry(max_missions=1)
    registry.create_mission("Only one", 1)

    with pytest.raises(ResourceError):
        registry.create_mission("One too many", 1)


def test_release(missions):
    mission = missions.create_mission("Eliminate player 2", 2)

    assert missions.release() == 1

    assert mission.released
    assert mission.description == ""
    with pytest.raises(ReleasedError):
        missions.create_mission("After release", 1)
    with pytest.raises(ReleasedError):
        mission.release()


def test_released_mission_rejects_further_use(missions):
    mission = missions.create_mission("Eliminate player 2", 2)
    missions.release()

    with pytest.raises(ReleasedError):
        mission.to_dict()
    with pytest.raises(ReleasedError):
        mission.target_owner = 3
    assert mission.target_owner == 2
