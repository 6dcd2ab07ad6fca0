"""Orchestration of communication from the command loop to the game logic and persistence layers (and the reverse direction)."""

import logging
from typing import Callable, Optional

from src.api.models import GameResponse, NewGameRequest, PlayRequest
from src.core.exceptions import InvalidStateError, RepositoryError
from src.core.shared_types import GameMode, ProgramState, Status, Variant
from src.db.repository import SnapshotRepository
from src.treblecross.game import Game
from src.treblecross.players import Player, RandomBot
from src.treblecross.rules import WIN_RULES

logger = logging.getLogger(__name__)


class GameService:
    """Owns the (single) active game and keeps track of which screen the program is on."""

    def __init__(
        self,
        repository: SnapshotRepository,
        variant: Variant = Variant.TREBLE_CROSS,
        bot_factory: Callable[[], Player] = RandomBot,
    ) -> None:
        self.repo = repository
        self.win_rule = WIN_RULES[variant]
        self.bot_factory = bot_factory
        self.game: Optional[Game] = None
        self.state = ProgramState.MAIN_MENU

    # -- Command loop logic ---
    def start_game(self, request: NewGameRequest) -> GameResponse:
        """Set up a new game, replacing the active one (if any)."""
        self.game = Game.new_game(
            opponent_is_bot=request.game_mode == GameMode.VS_BOT,
            board_size=request.board_size,
            player_ids=(request.first_player, request.second_player),
            win_rule=self.win_rule,
            bot=self.bot_factory(),
        )
        self._change_state(ProgramState.PLAYING)
        return self._create_game_response(self.game)

    def play(self, request: PlayRequest) -> GameResponse:
        """Current player places a token. (The bot replies within the same call.)"""
        game = self._active_game()
        status = game.make_move(request.column, request.row)
        if status != Status.PLAYING:
            self._change_state(ProgramState.END_GAME)
        return self._create_game_response(game)

    def undo(self) -> GameResponse:
        game = self._active_game()
        game.undo()
        return self._create_game_response(game)

    def redo(self) -> GameResponse:
        game = self._active_game()
        game.redo()
        if game.status != Status.PLAYING:
            self._change_state(ProgramState.END_GAME)
        return self._create_game_response(game)

    def save(self) -> None:
        """Overwrite the stored snapshot with the active game."""
        game = self._active_game()
        self.repo.save_snapshot(game.to_snapshot())

    def load(self) -> Optional[GameResponse]:
        """
        Restore the stored game.
        ----
        Anything going wrong here is not fatal: there is simply no game loaded, and we are back at the main menu.
        """
        try:
            snapshot = self.repo.load_snapshot()
            if snapshot is None:
                self._close_game()
                return None
            game = Game.from_snapshot(
                snapshot, win_rule=self.win_rule, bot=self.bot_factory()
            )
        except RepositoryError as error:
            logger.warning("Error loading game data: %s", error)
            self._close_game()
            return None

        self.game = game
        self._change_state(
            ProgramState.PLAYING
            if game.status == Status.PLAYING
            else ProgramState.END_GAME
        )
        return self._create_game_response(game)

    def quit(self) -> None:
        """Back to the main menu, without saving."""
        self._close_game()

    def finish(self) -> GameResponse:
        """The game has ended and the result has been shown: forget about it."""
        game = self._active_game()
        response = self._create_game_response(game)
        self._close_game()
        return response

    def game_state(self) -> GameResponse:
        return self._create_game_response(self._active_game())

    def exit(self) -> None:
        self._close_game()
        self._change_state(ProgramState.EXIT)

    # -- Internal helpers --
    def _active_game(self) -> Game:
        if self.game is None:
            raise InvalidStateError("Invalid state of app: there is no active game.")
        return self.game

    def _close_game(self) -> None:
        self.game = None
        self._change_state(ProgramState.MAIN_MENU)

    def _change_state(self, new_state: ProgramState) -> None:
        if new_state != self.state:
            logger.debug("Program state %s -> %s", self.state, new_state)
        self.state = new_state

    def _create_game_response(self, game: Game) -> GameResponse:
        return GameResponse(
            players=[player.id for player in game.players],
            current_player=game.current_player.id,
            current_turn=game.current_turn,
            status=game.status,
            winner=game.winner,
            board=game.board.to_grid(),
            rendered_board=game.board.render(),
            plies_on_board=game.record.cursor,
            plies_recorded=len(game.record),
        )
