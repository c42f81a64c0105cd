"""End-to-end runs of the console program with fixed seeds."""

import random

from territory_war.main import main
from territory_war.utils.logger import war_logger


def first_rolls(seed):
    rng = random.Random(seed)
    return rng.randint(1, 6), rng.randint(1, 6)


def test_default_attack(capsys):
    attack_roll, defend_roll = first_rolls(3)

    assert main(['--seed', '3', '--no-color']) == 0

    captured = capsys.readouterr()
    assert "Player 1 attacks Sertão from Amazônia" in captured.err
    assert "Attack is valid" in captured.err
    assert f"Attacker rolled: {attack_roll} | Defender rolled: {defend_roll}" in captured.err
    assert captured.err.count("Attacker rolled:") == 1
    assert "rolled" not in captured.out
    if attack_roll > defend_roll:
        assert "Sertão loses 1 army (2 left)" in captured.err
        assert "Sertão: owner 2, 2 armies" in captured.out
    else:
        assert "Amazônia loses 1 army (4 left)" in captured.err
        assert "Amazônia: owner 1, 4 armies" in captured.out
    assert "Litoral: owner 0, 2 armies (borders: Sertão)" in captured.out
    assert "#2 Eliminate player 2 (target player 2)" in captured.out
    assert "Released 3 territories and 2 missions" in captured.err
    assert captured.out.rstrip().endswith("All territories and missions released. Exiting.")


def test_invalid_attack_skips_combat(capsys):
    assert main(['--attacker', 'Amazônia', '--defender', 'Litoral', '--no-color']) == 0

    captured = capsys.readouterr()
    assert "Invalid attack: Territories are not adjacent" in captured.err
    assert "rolled" not in captured.err
    assert "Amazônia: owner 1, 5 armies" in captured.out
    assert war_logger.game_stats['battles_fought'] == 0


def test_unknown_territory(capsys):
    assert main(['--defender', 'Pantanal', '--no-color']) == 0

    assert "Invalid attack: Invalid territory" in capsys.readouterr().err


def test_wrong_player(capsys):
    assert main(['--player', '2', '--no-color']) == 0

    assert "You don't own the attacking territory" in capsys.readouterr().err


def test_bad_configuration_exits_with_error(capsys):
    assert main(['--log-level', 'LOUD', '--no-color']) == 1

    assert "ERROR (configuration)" in capsys.readouterr().err


def test_resource_error_exits_with_error(monkeypatch, capsys):
    monkeypatch.setenv('WAR_MAX_TERRITORIES', '2')

    assert main(['--no-color']) == 1

    captured = capsys.readouterr()
    assert "ERROR (game)" in captured.err
    assert "registry is full" in captured.err
    assert "Exiting." not in captured.out


def test_log_file(tmp_path, capsys):
    log_file = tmp_path / "war.log"

    assert main(['--seed', '1', '--no-color', '--log-file', str(log_file)]) == 0

    content = log_file.read_text(encoding='utf-8')
    assert "ATTACK: Player 1 attacks Sertão from Amazônia" in content
    assert "RELEASED:" in content
