# -*- coding: utf-8 -*-
import logging
import sys
from datetime import datetime
from typing import Any, Optional

from colorama import Fore, Style


class WarLogger:
    """Console and file logger for the game with colored output and simple stats."""

    def __init__(self):
        self.color = True
        self.file_handler: Optional[logging.FileHandler] = None
        self.game_stats = {
            'territories_created': 0,
            'missions_created': 0,
            'attacks_attempted': 0,
            'battles_fought': 0,
            'territories_conquered': 0
        }
        self.setup_logging()

    def setup_logging(self):
        """Setup structured logging."""
        self.logger = logging.getLogger('territory_war')
        self.logger.setLevel(logging.DEBUG)
        if not any(isinstance(h, logging.NullHandler) for h in self.logger.handlers):
            self.logger.addHandler(logging.NullHandler())
        self.formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )
        self.console_level = logging.INFO

    def configure(self, settings) -> None:
        """Apply console level, color and optional log file from GameSettings."""
        self.console_level = getattr(logging, settings.log_level)
        self.color = settings.color

        if self.file_handler is not None:
            self.logger.removeHandler(self.file_handler)
            self.file_handler.close()
            self.file_handler = None

        if settings.log_file:
            try:
                self.file_handler = logging.FileHandler(settings.log_file, encoding='utf-8')
            except OSError as e:
                self.log_warning(f"Cannot open log file {settings.log_file}: {e}")
                return
            self.file_handler.setLevel(logging.DEBUG)
            self.file_handler.setFormatter(self.formatter)
            self.logger.addHandler(self.file_handler)

    def close(self) -> None:
        """Detach and close the file handler, if any."""
        if self.file_handler is not None:
            self.logger.removeHandler(self.file_handler)
            self.file_handler.close()
            self.file_handler = None

    def _paint(self, color: str, text: str) -> str:
        if not self.color:
            return text
        return f"{color}{text}{Style.RESET_ALL}"

    def _emit(self, level: int, color: str, text: str) -> None:
        if level >= self.console_level:
            print(self._paint(color, text), file=sys.stderr)

    def log_game_event(self, event_type: str, message: str):
        """Log significant game events."""
        timestamp = datetime.now().strftime('%H:%M:%S')

        color_map = {
            'territory_created': Fore.GREEN,
            'mission_created': Fore.BLUE,
            'road_built': Fore.CYAN,
            'attack': Fore.MAGENTA,
            'released': Fore.WHITE
        }
        color = color_map.get(event_type, Fore.WHITE)

        self._emit(logging.INFO, color, f"[{timestamp}] {message}")
        self.logger.info(f"{event_type.upper()}: {message}")

        stat_map = {
            'territory_created': 'territories_created',
            'mission_created': 'missions_created',
            'attack': 'attacks_attempted'
        }
        if event_type in stat_map:
            self.game_stats[stat_map[event_type]] += 1

    def log_combat_result(self, from_territory: str, to_territory: str, result: Any,
                          details: Optional[str] = None):
        """Log combat results with dice and losses. details replaces the default dice/outcome lines."""
        timestamp = datetime.now().strftime('%H:%M:%S')

        if result.territory_conquered:
            color = Fore.YELLOW
            outcome = f"{to_territory} conquered!"
            self.game_stats['territories_conquered'] += 1
        elif result.defender_losses:
            color = Fore.GREEN
            outcome = f"{to_territory} loses 1 army"
        else:
            color = Fore.RED
            outcome = f"{from_territory} loses 1 army"

        self._emit(logging.INFO, color, f"[{timestamp}] BATTLE: {from_territory} -> {to_territory}")
        if details:
            for line in details.splitlines():
                self._emit(logging.INFO, color, f"   {line}")
        else:
            self._emit(logging.INFO, Style.DIM,
                       f"   Attacker roll: {result.attack_roll} | Defender roll: {result.defend_roll}")
            self._emit(logging.INFO, color, f"   {outcome}")

        self.logger.info(
            f"BATTLE: {from_territory} -> {to_territory} "
            f"rolls {result.attack_roll}/{result.defend_roll}: {outcome}"
        )
        self.game_stats['battles_fought'] += 1

    def log_error(self, error: str, context: str = ""):
        """Log errors with prominent display."""
        timestamp = datetime.now().strftime('%H:%M:%S')
        context_str = f" ({context})" if context else ""

        self._emit(logging.ERROR, Fore.RED + Style.BRIGHT, f"[{timestamp}] ERROR{context_str}: {error}")
        self.logger.error(f"ERROR{context_str}: {error}")

    def log_info(self, message: str):
        """Log general information."""
        timestamp = datetime.now().strftime('%H:%M:%S')
        self._emit(logging.INFO, Fore.CYAN, f"[{timestamp}] {message}")
        self.logger.info(message)

    def log_debug(self, message: str):
        timestamp = datetime.now().strftime('%H:%M:%S')
        self._emit(logging.DEBUG, Style.DIM, f"[{timestamp}] {message}")
        self.logger.debug(message)

    def log_warning(self, message: str):
        """Log warnings."""
        timestamp = datetime.now().strftime('%H:%M:%S')
        self._emit(logging.WARNING, Fore.YELLOW, f"[{timestamp}] WARNING: {message}")
        self.logger.warning(message)

    def stats_summary(self) -> str:
        """One-line summary of what happened during the session."""
        return ", ".join(f"{key.replace('_', ' ')}: {value}" for key, value in self.game_stats.items())

    def reset_stats(self) -> None:
        for key in self.game_stats:
            self.game_stats[key] = 0

# Global logger instance
war_logger = WarLogger()
