"""Unit tests for /src/treblecross/players.py"""

from src.core.config import BOT_ID
from src.core.shared_types import PlayerKind
from src.treblecross.players import HumanPlayer, MoveProposer, RandomBot
from src.treblecross.token import PlayToken


def test_human_play_creates_token_with_own_id() -> None:
    player = HumanPlayer("alice")
    assert player.kind == PlayerKind.HUMAN
    assert player.play(4) == PlayToken(row=1, column=4, player_id="alice")
    assert player.play(2, row=3) == PlayToken(row=3, column=2, player_id="alice")


def test_human_is_not_a_move_proposer() -> None:
    assert not isinstance(HumanPlayer("alice"), MoveProposer)


def test_random_bot_defaults() -> None:
    bot = RandomBot()
    assert bot.id == BOT_ID
    assert bot.kind == PlayerKind.BOT
    assert isinstance(bot, MoveProposer)


def test_random_bot_stays_within_dimensions() -> None:
    """Candidates may be occupied cells, but always lie on a board of the requested size"""
    bot = RandomBot(seed=7)
    for _ in range(200):
        token = bot.propose_move(rows=2, cols=5)
        assert 1 <= token.row <= 2
        assert 1 <= token.column <= 5
        assert token.player_id == BOT_ID


def test_random_bot_is_reproducible_with_seed() -> None:
    bot_a, bot_b = RandomBot(seed=42), RandomBot(seed=42)
    assert [bot_a.propose_move(1, 10) for _ in range(20)] == [
        bot_b.propose_move(1, 10) for _ in range(20)
    ]
