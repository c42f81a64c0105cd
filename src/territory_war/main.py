#!/usr/bin/env python3
import argparse
import sys
from typing import List, Optional

import colorama
from pydantic import ValidationError

from .game import (
    AttackCheck,
    CombatEngine,
    CombatResult,
    MissionRegistry,
    TerritoryRegistry,
    WarGameError,
    check_attack,
    game_session,
)
from .utils.config import load_settings
from .utils.logger import war_logger

DEFAULT_ATTACKER = "Amazônia"
DEFAULT_DEFENDER = "Sertão"


def build_demo_map(territories: TerritoryRegistry) -> None:
    """Three territories on a line: Amazônia <-> Sertão <-> Litoral."""
    amazonia = territories.create_territory("Amazônia", 1, 5)
    sertao = territories.create_territory("Sertão", 2, 3)
    litoral = territories.create_territory("Litoral", 0, 2)

    territories.connect(amazonia, sertao)
    territories.connect(sertao, litoral)

    for territory in territories:
        war_logger.log_game_event(
            'territory_created',
            f"{territory.name} (owner {territory.owner}, {territory.armies} armies)"
        )
    war_logger.log_game_event('road_built', "Roads: Amazônia <-> Sertão, Sertão <-> Litoral")


def build_demo_missions(missions: MissionRegistry) -> None:
    for description, target_owner in (
        ("Conquer 3 territories in the North region", 0),
        ("Eliminate player 2", 2),
    ):
        mission = missions.create_mission(description, target_owner)
        war_logger.log_game_event('mission_created', f"Mission #{mission.mission_id}: {mission.description}")


def run_attack(territories: TerritoryRegistry, engine: CombatEngine,
               attacker: str, defender: str, player_id: int) -> Optional[CombatResult]:
    """Validate one attack and, if it is allowed, resolve a single combat round."""
    from_territory = territories.get_territory_by_name(attacker)
    to_territory = territories.get_territory_by_name(defender)

    war_logger.log_game_event('attack', f"Player {player_id} attacks {defender} from {attacker}")

    verdict = check_attack(from_territory, to_territory, player_id)
    if verdict is not AttackCheck.VALID:
        war_logger.log_warning(
            f"Invalid attack: {verdict.message}. Only adjacent enemy territories "
            f"can be attacked, from a territory with at least 2 armies."
        )
        return None

    war_logger.log_info("Attack is valid. Resolving combat...")
    return engine.resolve_combat(from_territory, to_territory)


def print_board(territories: TerritoryRegistry, missions: MissionRegistry) -> None:
    print("Territories:")
    for territory in territories:
        neighbor_names = ", ".join(n.name for n in territories.neighbors_of(territory))
        print(f"  {territory.name}: owner {territory.owner}, {territory.armies} armies "
              f"(borders: {neighbor_names or 'none'})")
    print("Missions:")
    for mission in missions:
        print(f"  #{mission.mission_id} {mission.description} (target player {mission.target_owner})")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Run a single territory-war attack')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the dice (default: WAR_SEED or random)')
    parser.add_argument('--player', type=int, default=1,
                        help='Id of the attacking player (default: 1)')
    parser.add_argument('--attacker', default=DEFAULT_ATTACKER,
                        help=f'Territory to attack from (default: {DEFAULT_ATTACKER})')
    parser.add_argument('--defender', default=DEFAULT_DEFENDER,
                        help=f'Territory to attack (default: {DEFAULT_DEFENDER})')
    parser.add_argument('--log-level', default=None,
                        help='Console log level (default: WAR_LOG_LEVEL or INFO)')
    parser.add_argument('--log-file', default=None,
                        help='Write a detailed log to this file')
    parser.add_argument('--no-color', action='store_true',
                        help='Disable colored console output')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Build the demo map, try one attack, print the board and release everything."""
    args = parse_args(argv)
    colorama.just_fix_windows_console()

    try:
        settings = load_settings(
            seed=args.seed,
            log_level=args.log_level,
            log_file=args.log_file,
            color=False if args.no_color else None
        )
    except ValidationError as e:
        war_logger.log_error(str(e), "configuration")
        return 1

    war_logger.configure(settings)
    engine = CombatEngine.from_settings(settings)

    try:
        with game_session(settings) as (territories, missions):
            build_demo_map(territories)
            build_demo_missions(missions)
            run_attack(territories, engine, args.attacker, args.defender, args.player)
            print_board(territories, missions)
    except WarGameError as e:
        war_logger.log_error(str(e), "game")
        return 1
    finally:
        war_logger.log_debug(war_logger.stats_summary())
        war_logger.close()

    print("All territories and missions released. Exiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
