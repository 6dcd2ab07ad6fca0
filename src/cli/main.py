"""
Text command loop.

Reads one command at a time, hands it to the GameService and prints the outcome.
Every screen shows its name in the prompt, ex. `[GAME] - player_1 turn > `
"""

import argparse
import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from src.api.models import GameResponse, NewGameRequest, PlayRequest
from src.core.config import DATABASE_URL, DEFAULT_BOARD_SIZE, SAVE_FILE
from src.core.exceptions import (
    GameError,
    HistoryExhaustedError,
    InvalidMoveError,
    InvalidRequestError,
    InvalidStateError,
)
from src.core.shared_types import GameMode, ProgramState, Status
from src.db.database import create_session_factory
from src.db.json_repository import JSONSnapshotRepository
from src.db.repository import SnapshotRepository
from src.db.sql_repository import SQLSnapshotRepository
from src.services.game_service import GameService
from src.treblecross.players import RandomBot

logger = logging.getLogger(__name__)

HELP_TEXT: dict[ProgramState, str] = {
    ProgramState.MAIN_MENU: "\n".join(
        [
            "start  - start a new game",
            "load   - load the saved game",
            "exit   - exit the program",
            "help   - show this list",
        ]
    ),
    ProgramState.PLAYING: "\n".join(
        [
            "play [position] - place a token on the board, ex. `play 3`",
            "undo            - take back your previous move (and the reply to it)",
            "redo            - put back the moves taken back last",
            "save            - save the game",
            "quit            - back to the main menu (the game is NOT saved)",
            "help            - show this list",
        ]
    ),
}


class CommandLoop:
    def __init__(
        self,
        service: GameService,
        read: Callable[[], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self.service = service
        self.read = read
        self.write = write

    def run(self) -> None:
        """Keep handling commands until the user exits (or input runs out)."""
        while self.service.state != ProgramState.EXIT:
            command = ""
            try:
                if self.service.state == ProgramState.MAIN_MENU:
                    command = self._ask(
                        ProgramState.MAIN_MENU, "Type `help` to get a list of commands"
                    )
                    self.handle_menu_command(command)
                elif self.service.state == ProgramState.PLAYING:
                    current_player = self.service.game_state().current_player
                    command = self._ask(ProgramState.PLAYING, f"- {current_player} turn")
                    self.handle_play_command(command)
                elif self.service.state == ProgramState.END_GAME:
                    self._announce_result(self.service.finish())
                else:
                    raise InvalidStateError(f"Unknown program state {self.service.state}")
            except EOFError:
                self.service.exit()
            except InvalidMoveError as error:
                self.write(f"{error} Type \"help\" to see a list of commands.")
            except InvalidRequestError as error:
                self.write(f"{error} Type \"help\" to see a list of commands.")
            except HistoryExhaustedError as error:
                self.write(str(error))
            except InvalidStateError as error:
                logger.warning("%s", error)
                self.write("Invalid state of app. Return to Main Menu.")
                self.service.quit()
            except GameError as error:
                self.write(str(error))
                self.write(
                    f"Unable to process `{command}`. Type \"help\" to see a list of commands."
                )

    def handle_menu_command(self, command: str) -> None:
        match command:
            case "start":
                self.setup_game()
            case "load":
                self.load_game()
            case "exit":
                self.service.exit()
            case "help":
                self.write(HELP_TEXT[ProgramState.MAIN_MENU])
            case _:
                raise InvalidRequestError(f"`{command}` is not a valid command.")

    def handle_play_command(self, command: str) -> None:
        match command:
            case "save":
                self.service.save()
                self.write("Saved game snapshot.")
            case "undo":
                self._show(self.service.undo())
            case "redo":
                self._show(self.service.redo())
            case "quit":
                self.service.quit()
            case "help":
                self.write(HELP_TEXT[ProgramState.PLAYING])
            case _ if command.startswith("play"):
                self._show(self.service.play(PlayRequest.from_command(command)))
            case _:
                raise InvalidRequestError(f"`{command}` is not a valid command.")

    def setup_game(self) -> None:
        """Prompts for a new game. Any invalid answer sends the user back to the main menu."""
        try:
            game_choice = self._ask(
                ProgramState.SETUP_GAME, "Select a game: (1) TrebleCross or (2) Othello"
            )
            if game_choice == "2":
                self.write("The game Othello is being developed.")
                return
            if game_choice != "1":
                raise InvalidRequestError(f"Invalid game choice `{game_choice}`.")

            mode_choice = self._ask(
                ProgramState.SETUP_GAME,
                "Select mode: (1) vs computer or (2) vs human - enter to set default mode 1?",
            ) or str(GameMode.VS_BOT.value)
            if mode_choice not in {str(mode.value) for mode in GameMode}:
                raise InvalidRequestError(f"Invalid game mode choice `{mode_choice}`.")
            game_mode = GameMode(int(mode_choice))

            size_input = self._ask(
                ProgramState.SETUP_GAME,
                f"Board size - enter to set default size {DEFAULT_BOARD_SIZE}?",
            ) or str(DEFAULT_BOARD_SIZE)
            if not size_input.isdigit():
                raise InvalidRequestError(f"Cannot parse board size `{size_input}`.")

            first_player = self._ask(
                ProgramState.PLAYING, "Name of player 1 - enter to set as `player_1`?"
            )
            second_player = ""
            if game_mode == GameMode.VS_HUMAN:
                second_player = self._ask(
                    ProgramState.PLAYING, "Name of player 2 - enter to set as `player_2`?"
                )

            request = NewGameRequest(
                game_mode=game_mode,
                board_size=int(size_input),
                first_player=first_player,
                second_player=second_player,
            )
        except InvalidRequestError as error:
            self.write(str(error))
            self.write("Back to main menu.")
            return

        response = self.service.start_game(request)
        self.write(response.rendered_board)
        self.write("Game start!")

    def load_game(self) -> None:
        response = self.service.load()
        if response is None:
            self.write("No saved game could be loaded. Back to main menu.")
            return
        self._show(response)

    # -- Internal helpers --
    def _ask(self, screen: ProgramState, message: str) -> str:
        self.write(f"[{screen}] {message} > ")
        return self.read().strip()

    def _show(self, response: GameResponse) -> None:
        self.write(response.rendered_board)

    def _announce_result(self, response: GameResponse) -> None:
        if response.status == Status.DRAW:
            self.write(f"[{ProgramState.PLAYING}] It's a Draw!")
        else:
            self.write(f"[{ProgramState.PLAYING}] {response.winner} won!")


def build_repository(
    store: str, save_file: str, database_url: str
) -> tuple[SnapshotRepository, Optional[Session]]:
    """The repository to save to, plus the database session to close afterwards (if any)."""
    if store == "sql":
        session = create_session_factory(database_url)()
        return SQLSnapshotRepository(session), session
    return JSONSnapshotRepository(save_file), None


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play TrebleCross in the terminal.")
    parser.add_argument("--store", choices=["json", "sql"], default="json")
    parser.add_argument("--save-file", default=SAVE_FILE)
    parser.add_argument("--database-url", default=DATABASE_URL)
    parser.add_argument("--seed", type=int, default=None, help="seed of the bot")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    repository, session = build_repository(args.store, args.save_file, args.database_url)
    service = GameService(repository, bot_factory=lambda: RandomBot(seed=args.seed))
    try:
        CommandLoop(service).run()
    finally:
        if session is not None:
            session.close()


if __name__ == "__main__":
    main()
