"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating everything required to play a turn of the board game -->
passes the resulting Status to the service layer, which can then pass it onwards to the command loop.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.config import BOT_ID, DEFAULT_BOARD_ROWS, DEFAULT_PLAYER_IDS
from src.core.exceptions import (
    InvalidMoveError,
    InvalidStateError,
    NoLegalMovesError,
    SnapshotError,
)
from src.core.models import GameSnapshot
from src.core.shared_types import GameMode, Status
from src.treblecross.board import EMPTY, OCCUPIED, Board
from src.treblecross.players import HumanPlayer, MoveProposer, Player, RandomBot
from src.treblecross.record import NUMBER_OF_SEATS, Record
from src.treblecross.rules import WinRule, no_win, treble_cross_win
from src.treblecross.token import PlayToken

logger = logging.getLogger(__name__)

HUMAN_SEAT = 0
BOT_SEAT = 1


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    players: list[Player]
    board: Board
    record: Record = field(default_factory=Record)
    current_turn: int = 0
    opponent_is_bot: bool = False
    win_rule: WinRule = no_win
    status: Status = Status.PLAYING
    winner: Optional[str] = None
    current_player: Player = field(init=False)

    def __post_init__(self) -> None:
        if len(self.players) != NUMBER_OF_SEATS:
            raise InvalidStateError(
                f"A game needs exactly {NUMBER_OF_SEATS} players, got {len(self.players)}."
            )
        if self.opponent_is_bot and not isinstance(
            self.players[BOT_SEAT], MoveProposer
        ):
            raise InvalidStateError(
                f"Seat {BOT_SEAT} cannot propose moves: {self.players[BOT_SEAT]!r}"
            )
        self._set_turn(self.current_turn)

    @classmethod
    def new_game(
        cls,
        opponent_is_bot: bool,
        board_size: int,
        player_ids: tuple[str, str] = DEFAULT_PLAYER_IDS,
        win_rule: WinRule = treble_cross_win,
        bot: Optional[Player] = None,
    ) -> Self:
        """Empty board, first player to move. Against a bot the second name is ignored."""
        if board_size < 1:
            raise InvalidStateError(f"Board size must be positive, got {board_size}.")

        opponent: Player
        if opponent_is_bot:
            opponent = bot if bot is not None else RandomBot()
        else:
            opponent = HumanPlayer(player_ids[1])

        return cls(
            players=[HumanPlayer(player_ids[0]), opponent],
            board=Board.empty(board_size, DEFAULT_BOARD_ROWS),
            opponent_is_bot=opponent_is_bot,
            win_rule=win_rule,
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: GameSnapshot,
        win_rule: WinRule = treble_cross_win,
        bot: Optional[Player] = None,
    ) -> Self:
        """
        Rebuild a game from its stored snapshot.
        ----

        1. Seat 1 is a bot if it has the bot id (or no id at all)
        2. The board is taken over as stored
        3. The history starts with the cursor at 0 and is replayed, to find out how far it is reflected on the board
           and whether someone has already won. (Neither is stored.)
        """
        _validate_snapshot(snapshot)

        first_id, second_id = snapshot.player_ids
        assert first_id is not None  # checked by _validate_snapshot
        opponent: Player
        if second_id is None or second_id == BOT_ID:
            opponent = bot if bot is not None else RandomBot()
        else:
            opponent = HumanPlayer(second_id)

        opponent_is_bot = snapshot.game_mode == GameMode.VS_BOT
        if opponent_is_bot and not isinstance(opponent, MoveProposer):
            raise SnapshotError(
                f"Game mode {snapshot.game_mode} requires a bot in seat {BOT_SEAT}, found {second_id!r}."
            )

        game = cls(
            players=[HumanPlayer(first_id), opponent],
            board=Board.from_grid(snapshot.board),
            record=Record(
                actions=[PlayToken.from_model(action) for action in snapshot.actions]
            ),
            current_turn=snapshot.player_turn,
            opponent_is_bot=opponent_is_bot,
            win_rule=win_rule,
        )
        game._replay()
        return game

    def to_snapshot(self) -> GameSnapshot:
        """The full history gets stored, including plies that were undone (and could be redone)."""
        return GameSnapshot(
            player_ids=[player.id for player in self.players],
            player_turn=self.current_turn,
            game_mode=int(GameMode.VS_BOT if self.opponent_is_bot else GameMode.VS_HUMAN),
            board=self.board.to_grid(),
            actions=[token.to_model() for token in self.record.actions],
        )

    def make_move(self, column: int, row: int = 1) -> Status:
        """
        Attempt to make a move for the current player
        -----

        1. check the move is valid
        2. update the board
        3. update the history
        4. game over? --> the player who just moved has won (turn is NOT passed on)
        5. otherwise: let the bot reply, or hand the turn to the other player
        """
        self._assert_in_progress()

        token = self.current_player.play(column, row)
        if not self.validate_move(token):
            raise InvalidMoveError(
                f"`play {column}` is not a valid move on a board of {self.board.cols} cells."
            )

        self._apply(token)
        if self.win_rule(self.board):
            return self._declare_winner(token.player_id)

        if self.opponent_is_bot:
            return self._play_bot_turn()

        if self.board.is_full():
            return self._declare_draw()

        self._set_turn(1 - self.current_turn)
        return self.status

    def validate_move(self, token: PlayToken) -> bool:
        """Inside the board, and on an empty cell. Does not change anything."""
        if self.board.is_out_of_bound(token.row, token.column):
            return False

        if self.board.is_occupied(token.row, token.column):
            return False

        return True

    def undo(self) -> None:
        """
        Go back to the position right before the current player's previous move.

        NOTE: The turn indicator is left as is. Only the board content goes back.
        """
        self._assert_in_progress()
        current_cursor = self.record.cursor
        previous_cursor = self.record.step_back(self.current_turn)

        # last placed token gets removed first
        for head in range(current_cursor - 1, previous_cursor - 1, -1):
            self.board.remove(self.record.actions[head])
        logger.debug("Undo: cursor %d -> %d", current_cursor, previous_cursor)

    def redo(self) -> None:
        """Put back the round of moves that was undone last."""
        self._assert_in_progress()
        current_cursor = self.record.cursor
        next_cursor = self.record.step_forward()

        for head in range(current_cursor, next_cursor):
            self.board.place(self.record.actions[head])
        logger.debug("Redo: cursor %d -> %d", current_cursor, next_cursor)

        last_token = self.record.actions[next_cursor - 1]
        if self.win_rule(self.board):
            self._declare_winner(last_token.player_id)
        elif self.board.is_full():
            self._declare_draw()

    # -- PRIVATE HELPERS ---
    def _set_turn(self, turn: int) -> None:
        """Keep the turn indicator and the current player in sync"""
        self.current_turn = turn
        self.current_player = self.players[turn]

    def _assert_in_progress(self) -> None:
        if self.status != Status.PLAYING:
            raise InvalidStateError(f"Game is not in progress. status: {self.status}")

    def _apply(self, token: PlayToken) -> None:
        self.board.place(token)
        self.record.record_move(token)
        logger.debug(
            "%s played row %d, column %d", token.player_id, token.row, token.column
        )

    def _declare_winner(self, player_id: str) -> Status:
        self.status = Status.END_GAME
        self.winner = player_id
        logger.info("%s won the game", player_id)
        return self.status

    def _declare_draw(self) -> Status:
        self.status = Status.DRAW
        logger.info("Board is full without a winner: draw")
        return self.status

    # -- BOT HELPERS ---
    def _play_bot_turn(self) -> Status:
        """
        The bot answers right away, within the same call.
        ---

        Its candidate moves may be illegal: keep asking until one is valid.
        A full board means there is no valid candidate at all --> draw.
        """
        try:
            token = self._request_bot_move()
        except NoLegalMovesError:
            return self._declare_draw()

        self._set_turn(BOT_SEAT)
        self._apply(token)
        if self.win_rule(self.board):
            return self._declare_winner(token.player_id)

        if self.board.is_full():
            return self._declare_draw()

        self._set_turn(HUMAN_SEAT)
        return self.status

    def _request_bot_move(self) -> PlayToken:
        bot = self.players[BOT_SEAT]
        # for the typechecker: checked when the game was created
        assert isinstance(bot, MoveProposer)

        if self.board.is_full():
            raise NoLegalMovesError(f"{bot.id} has no cell left to play.")

        attempts = 0
        while True:
            attempts += 1
            candidate = bot.propose_move(self.board.rows, self.board.cols)
            if self.validate_move(candidate):
                logger.debug("%s found a valid move after %d attempt(s)", bot.id, attempts)
                return candidate

    # -- RESTORE HELPERS ---
    def _replay(self) -> None:
        """
        Walk the stored history over an empty board of the same size.
        ---

        * the cursor stops at the first ply that is not on the stored board (a redo tail that was saved along)
        * the first ply that completes a win ends the game, with that ply's player as the winner
        """
        replay_board = Board.empty(self.board.cols, self.board.rows)
        for token in self.record.actions:
            if not self.board.is_occupied(token.row, token.column):
                break
            if replay_board.is_occupied(token.row, token.column):
                raise SnapshotError(
                    f"Cell (row {token.row}, column {token.column}) is claimed twice in the history."
                )
            replay_board.place(token)
            self.record.cursor += 1
            if self.win_rule(replay_board):
                self._declare_winner(token.player_id)
                return

        # marks on the board that the history does not explain
        if self.win_rule(self.board):
            self._declare_winner(self.current_player.id)
        elif self.board.is_full():
            self._declare_draw()
        logger.debug(
            "Replayed %d of %d plies", self.record.cursor, len(self.record.actions)
        )


def _validate_snapshot(snapshot: GameSnapshot) -> None:
    """Reject snapshots that do not describe a game that could have been played."""
    if len(snapshot.player_ids) != NUMBER_OF_SEATS or snapshot.player_ids[0] is None:
        raise SnapshotError(f"Invalid player ids: {snapshot.player_ids!r}")

    if snapshot.player_turn not in range(NUMBER_OF_SEATS):
        raise SnapshotError(f"Invalid player turn: {snapshot.player_turn!r}")

    if snapshot.game_mode not in {mode.value for mode in GameMode}:
        raise SnapshotError(
            f"Invalid game mode: {snapshot.game_mode!r}. \nPick one from {','.join(str(mode.value) for mode in GameMode)}"
        )

    # the bot always replies within the same call: a saved vs-bot game is always the human's turn
    if snapshot.game_mode == GameMode.VS_BOT and snapshot.player_turn != HUMAN_SEAT:
        raise SnapshotError(
            f"Invalid player turn {snapshot.player_turn!r}: against a bot, seat {HUMAN_SEAT} is always to move."
        )

    grid = snapshot.board
    if not grid or not grid[0] or any(len(line) != len(grid[0]) for line in grid):
        raise SnapshotError("Board must be a non-empty rectangular grid.")

    if any(cell not in (EMPTY, OCCUPIED) for line in grid for cell in line):
        raise SnapshotError(f"Board cells must be {EMPTY} or {OCCUPIED}.")

    rows, cols = len(grid), len(grid[0])
    for action in snapshot.actions:
        if not (1 <= action.row <= rows and 1 <= action.column <= cols):
            raise SnapshotError(
                f"Action (row {action.row}, column {action.column}) is outside the {rows} x {cols} board."
            )
