import random
from enum import Enum
from typing import Optional
from dataclasses import dataclass

from .territory import Territory
from ..utils.logger import war_logger

DIE_FACES = 6


class AttackCheck(Enum):
    VALID = "valid"
    MISSING_TERRITORY = "missing_territory"
    NOT_OWNER = "not_owner"
    OWN_TERRITORY = "own_territory"
    NOT_ENOUGH_ARMIES = "not_enough_armies"
    NOT_ADJACENT = "not_adjacent"

    @property
    def message(self) -> str:
        return ATTACK_CHECK_MESSAGES[self]


ATTACK_CHECK_MESSAGES = {
    AttackCheck.VALID: "Attack is valid",
    AttackCheck.MISSING_TERRITORY: "Invalid territory",
    AttackCheck.NOT_OWNER: "You don't own the attacking territory",
    AttackCheck.OWN_TERRITORY: "Cannot attack your own territory",
    AttackCheck.NOT_ENOUGH_ARMIES: "Need at least 2 armies to attack",
    AttackCheck.NOT_ADJACENT: "Territories are not adjacent",
}


def check_attack(from_territory: Optional[Territory], to_territory: Optional[Territory],
                 player_id: int) -> AttackCheck:
    """
    Work out whether player_id may attack to_territory from from_territory.
    Returns the first failing condition, or AttackCheck.VALID. Has no side effects.
    """
    if from_territory is None or to_territory is None:
        return AttackCheck.MISSING_TERRITORY

    from_territory.ensure_active()
    to_territory.ensure_active()

    if not from_territory.is_owned_by(player_id):
        return AttackCheck.NOT_OWNER

    if to_territory.is_owned_by(player_id):
        return AttackCheck.OWN_TERRITORY

    if not from_territory.can_attack_from():
        return AttackCheck.NOT_ENOUGH_ARMIES

    if not from_territory.is_adjacent_to(to_territory):
        return AttackCheck.NOT_ADJACENT

    return AttackCheck.VALID


def can_attack(from_territory: Optional[Territory], to_territory: Optional[Territory],
               player_id: int) -> bool:
    """Check if the attack is allowed."""
    return check_attack(from_territory, to_territory, player_id) is AttackCheck.VALID


@dataclass
class CombatResult:
    attack_roll: int
    defend_roll: int
    attacker_losses: int
    defender_losses: int
    territory_conquered: bool = False
    armies_moved: int = 0

    def to_dict(self) -> dict:
        """Convert combat result to dictionary."""
        return {
            'attack_roll': self.attack_roll,
            'defend_roll': self.defend_roll,
            'attacker_losses': self.attacker_losses,
            'defender_losses': self.defender_losses,
            'territory_conquered': self.territory_conquered,
            'armies_moved': self.armies_moved
        }


class CombatEngine:
    """Handles dice rolling and single-round combat resolution."""

    def __init__(self, rng=None):
        # Anything with randint(a, b) works, e.g. random.Random(seed)
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def from_settings(cls, settings) -> 'CombatEngine':
        """Create an engine whose dice are seeded from settings.seed (unseeded if None)."""
        return cls(random.Random(settings.seed))

    def roll_die(self) -> int:
        """Roll one six-sided die."""
        return self.rng.randint(1, DIE_FACES)

    def resolve_combat(self, from_territory: Territory, to_territory: Territory) -> CombatResult:
        """
        Resolve one round of combat: one die each, the loser loses one army.

        Ties go to the defender. If the defender drops to zero armies the
        attacker takes the territory and moves one army in. Callers must
        check can_attack first; the rules are not checked again here.
        """
        from_territory.ensure_active()
        to_territory.ensure_active()

        attack_roll = self.roll_die()
        defend_roll = self.roll_die()

        if attack_roll > defend_roll:
            remaining = to_territory.armies - 1
            if remaining <= 0:
                # Ownership and garrison change together, the defender never shows <= 0
                to_territory.owner, to_territory.armies = from_territory.owner, 1
                from_territory.armies -= 1
                result = CombatResult(attack_roll, defend_roll, 0, 1,
                                      territory_conquered=True, armies_moved=1)
            else:
                to_territory.armies = remaining
                result = CombatResult(attack_roll, defend_roll, 0, 1)
        else:
            from_territory.armies -= 1
            result = CombatResult(attack_roll, defend_roll, 1, 0)

        war_logger.log_combat_result(
            from_territory.name, to_territory.name, result,
            details=self.format_battle_result(result, from_territory, to_territory)
        )
        return result

    @staticmethod
    def format_battle_result(result: CombatResult, from_territory: Territory,
                             to_territory: Territory) -> str:
        """Format a battle result into a readable string, using the territories' current state."""
        message = f"Attacker rolled: {result.attack_roll} | Defender rolled: {result.defend_roll}\n"

        if result.territory_conquered:
            message += f"{to_territory.name} has been conquered by player {to_territory.owner}!"
        elif result.defender_losses:
            message += f"{to_territory.name} loses 1 army ({to_territory.armies} left)"
        else:
            message += f"{from_territory.name} loses 1 army ({from_territory.armies} left)"

        return message
