"""
Arcade cabinet - Start screen, credits and screen switching.

Routes key events either to the start screen (coins, start) or to the
running game (thrusters, toggles, pause, quit). Showing the game screen
starts the engine; leaving it stops the engine.
"""

from enum import Enum
from typing import Callable, Dict, List
import logging

from galactictaxi.game import TaxiGame
from galactictaxi.taxi.controls import Key, normalize_key

logger = logging.getLogger(__name__)

INSERT_COIN_MESSAGE = "INSERT COIN TO BEGIN (PRESS KEYS 1 || 2)"

# Coin key -> credits added
COIN_KEYS: Dict[str, int] = {"1": 1, "2": 2}
RESET_CREDITS_KEY = "0"


class Screen(Enum):
    """Cabinet screens."""
    START = "start"
    GAME = "game"


class CabinetEvent(Enum):
    """Events published to listeners (sound, presentation)."""
    COIN_INSERTED = "coin_inserted"
    CREDITS_RESET = "credits_reset"
    GAME_STARTED = "game_started"
    GAME_QUIT = "game_quit"
    PAUSED = "paused"
    RESUMED = "resumed"


CabinetListener = Callable[[CabinetEvent, "ArcadeCabinet"], None]


class ArcadeCabinet:
    """Coin-operated front end for the taxi game.

    Usage:
        cabinet = ArcadeCabinet(TaxiGame())
        cabinet.key_down("1")      # insert coin
        cabinet.key_down("Enter")  # start, engine begins running
    """

    def __init__(self, game: TaxiGame | None = None):
        """Initialize cabinet.

        Args:
            game: Game to run. A default game is created if None.
        """
        self.game = game or TaxiGame()
        self._credits: int = 0
        self._screen = Screen.START
        self._listeners: List[CabinetListener] = []

    @property
    def credits(self) -> int:
        return self._credits

    @property
    def screen(self) -> Screen:
        return self._screen

    @property
    def in_game(self) -> bool:
        return self._screen is Screen.GAME

    @property
    def credit_message(self) -> str:
        """Text shown on the start screen."""
        if self._credits > 0:
            suffix = "S" if self._credits > 1 else ""
            return f"{self._credits} CREDIT{suffix}"
        return INSERT_COIN_MESSAGE

    def add_listener(self, listener: CabinetListener) -> None:
        """Subscribe to cabinet events.

        Args:
            listener: Function taking (event, cabinet)
        """
        self._listeners.append(listener)

    def _emit(self, event: CabinetEvent) -> None:
        for listener in self._listeners:
            listener(event, self)

    def key_down(self, key: str) -> None:
        """Route a key-down event.

        Args:
            key: Key name
        """
        key = normalize_key(key)
        if self.in_game:
            self._game_key_down(key)
        else:
            self._start_screen_key_down(key)

    def key_up(self, key: str) -> None:
        """Route a key-up event."""
        if self.in_game:
            self.game.handle_key_up(key)

    def _start_screen_key_down(self, key: str) -> None:
        if key in COIN_KEYS:
            self._credits += COIN_KEYS[key]
            logger.info("Coin inserted: %s", self.credit_message)
            self._emit(CabinetEvent.COIN_INSERTED)
        elif key == RESET_CREDITS_KEY:
            self._credits = 0
            self._emit(CabinetEvent.CREDITS_RESET)
        elif key == Key.ENTER.value and self._credits > 0:
            self._credits -= 1
            self.show_game()

    def _game_key_down(self, key: str) -> None:
        engine = self.game.engine
        if key == Key.ESCAPE.value:
            self.show_start()
        elif key == Key.PAUSE.value:
            if engine.is_paused:
                engine.resume()
                self._emit(CabinetEvent.RESUMED)
            elif engine.is_running:
                engine.pause()
                self._emit(CabinetEvent.PAUSED)
        elif key == Key.ENTER.value or key in COIN_KEYS or key == RESET_CREDITS_KEY:
            return
        else:
            self.game.handle_key_down(key)

    def show_game(self) -> None:
        """Switch to the game screen and start the engine."""
        if self.in_game:
            return
        self._screen = Screen.GAME
        logger.info("Game screen active (%d credits left)", self._credits)
        self._emit(CabinetEvent.GAME_STARTED)
        if not self.game.engine.is_running:
            self.game.engine.start()

    def show_start(self) -> None:
        """Switch back to the start screen and stop the engine."""
        if not self.in_game:
            return
        self._screen = Screen.START
        if self.game.engine.is_running:
            self.game.engine.stop()
        logger.info("Returned to start screen")
        self._emit(CabinetEvent.GAME_QUIT)
