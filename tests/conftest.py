import pytest

from lastline.game.board import BoardState
from lastline.game.rules import GameRules


@pytest.fixture
def board():
    return BoardState(size=4)


@pytest.fixture
def rules():
    return GameRules(size=4, exact_search=True)


@pytest.fixture
def small_rules():
    return GameRules(size=2, exact_search=True)


@pytest.fixture
def idx():
    """Map ``(row, col)`` to a point index on a board of the given size."""

    def _idx(row, col, size=4):
        return row * size + col

    return _idx


@pytest.fixture
def draw(idx):
    """Apply a segment between two ``(row, col)`` cells straight on a board."""

    def _draw(board, start, end, player=1):
        result = board.apply_move(player, idx(*start, board.size), idx(*end, board.size))
        assert result.legal, f"setup move {start}->{end} was rejected"
        return result

    return _draw
