import itertools

import pytest

from lastline.game.board import SEARCH_BUDGET, BoardState, Segment, opponent
from lastline.graph import is_forest


def test_fresh_board(board):
    assert len(board.points) == 16
    assert board.segments == []
    assert board.blocked == set()
    assert all(not neighbors for neighbors in board.connections.values())


def test_opponent():
    assert opponent(1) == 2
    assert opponent(2) == 1


def test_segment_joins_either_direction():
    segment = Segment(origin=0, target=5, player=1)
    assert segment.joins(0, 5)
    assert segment.joins(5, 0)
    assert not segment.joins(0, 4)
    assert segment.touches(5, 9)
    assert not segment.touches(1, 9)


def test_unknown_point_index(board):
    with pytest.raises(ValueError):
        board.point(16)
    with pytest.raises(ValueError):
        board.is_valid_move(0, 99)


def test_every_aligned_pair_is_legal_on_empty_board(board):
    for a, b in itertools.permutations(range(16), 2):
        assert board.is_valid_move(a, b) is _aligned(board, a, b)


def _aligned(board, a, b):
    pa, pb = board.point(a), board.point(b)
    dr, dc = abs(pa.row - pb.row), abs(pa.col - pb.col)
    return dr == 0 or dc == 0 or dr == dc


def test_same_point_is_rejected(board):
    assert not board.is_valid_move(5, 5)


def test_non_aligned_pair_always_rejected(board, idx, draw):
    origin, target = idx(0, 0), idx(2, 1)
    assert not board.is_valid_move(origin, target)
    draw(board, (3, 3), (3, 2))
    draw(board, (1, 3), (0, 3))
    assert not board.is_valid_move(origin, target)
    assert not board.is_valid_move(target, origin)


def test_straight_move_blocks_points_between(board, idx, draw):
    result = draw(board, (0, 0), (0, 3))
    assert set(result.blocked) == {idx(0, 1), idx(0, 2)}
    assert board.blocked == {idx(0, 1), idx(0, 2)}
    assert result.segment == Segment(origin=idx(0, 0), target=idx(0, 3), player=1)

    for blocked in (idx(0, 1), idx(0, 2)):
        for other in range(16):
            assert not board.is_valid_move(blocked, other)
            assert not board.is_valid_move(other, blocked)


def test_path_through_blocked_point_rejected(board, idx, draw):
    draw(board, (0, 1), (2, 1))
    assert board.is_blocked(idx(1, 1))
    # (1, 0) -> (1, 3) would run over (1, 1)
    assert not board.is_valid_move(idx(1, 0), idx(1, 3))


def test_duplicate_segment_rejected(board, idx, draw):
    draw(board, (1, 1), (2, 2))
    assert not board.is_valid_move(idx(1, 1), idx(2, 2))
    assert not board.is_valid_move(idx(2, 2), idx(1, 1))


def test_connections_are_mutual(board, idx, draw):
    draw(board, (1, 1), (2, 2))
    assert board.connections[idx(1, 1)] == {idx(2, 2)}
    assert board.connections[idx(2, 2)] == {idx(1, 1)}
    assert board.has_segment(idx(2, 2), idx(1, 1))


def test_closing_a_loop_rejected(board, idx, draw):
    draw(board, (0, 0), (0, 1))
    draw(board, (0, 1), (1, 1))
    assert not board.is_valid_move(idx(1, 1), idx(0, 0))
    assert not board.is_valid_move(idx(0, 0), idx(1, 1))


def test_crossing_an_unrelated_segment_rejected(board, idx, draw):
    draw(board, (0, 1), (1, 0))
    draw(board, (1, 1), (2, 2))
    # crosses (0,1)-(1,0) and only meets (1,1)-(2,2) at a shared end
    assert not board.is_valid_move(idx(0, 0), idx(1, 1))
    assert not board.is_valid_move(idx(1, 1), idx(0, 0))


def test_shared_endpoint_is_not_a_crossing(board, idx, draw):
    draw(board, (1, 1), (2, 2))
    assert board.is_valid_move(idx(0, 0), idx(1, 1))
    assert board.is_valid_move(idx(1, 1), idx(1, 2))


def test_passing_through_a_segment_end_is_a_crossing(board, idx, draw):
    draw(board, (1, 0), (1, 1))
    assert not board.is_valid_move(idx(0, 1), idx(2, 1))


def test_collinear_overlap_is_allowed(board, idx, draw):
    draw(board, (0, 1), (0, 2))
    assert board.is_valid_move(idx(0, 0), idx(0, 3))


def test_validity_is_symmetric(board, idx, draw):
    draw(board, (0, 0), (0, 3))
    draw(board, (0, 3), (2, 1))
    draw(board, (2, 1), (3, 1))
    for a, b in itertools.combinations(range(16), 2):
        assert board.is_valid_move(a, b) == board.is_valid_move(b, a)


def test_valid_start_points_on_empty_board(board):
    assert board.valid_start_points() == set(range(16))


def test_valid_start_points_after_first_diagonal(idx, draw):
    board = BoardState(size=2)
    draw(board, (0, 0), (1, 1))
    assert board.valid_start_points() == {idx(0, 0, 2), idx(1, 1, 2)}


def test_valid_start_points_are_open_path_ends(board, idx, draw):
    draw(board, (0, 0), (1, 1))
    draw(board, (1, 1), (1, 3))
    draw(board, (1, 3), (3, 3))
    expected = {
        index
        for index in range(16)
        if not board.is_blocked(index)
        and board.degree(index) <= 1
        and any(segment.touches(index, index) for segment in board.segments)
    }
    assert board.valid_start_points() == expected == {idx(0, 0), idx(3, 3)}


def test_blocked_endpoint_is_not_a_start(board, idx, draw):
    draw(board, (1, 0), (1, 1))
    # runs along the first segment, so (1, 1) is blocked without a crossing
    draw(board, (1, 0), (1, 2))
    assert board.is_blocked(idx(1, 1))
    assert board.valid_start_points() == {idx(1, 2)}


def _finish_small_board():
    board = BoardState(size=2)
    for origin, target in ((0, 3), (0, 1), (3, 2)):
        assert board.apply_move(1, origin, target).legal
    return board


def test_has_any_valid_move_exact():
    board = _finish_small_board()
    assert board.valid_start_points() == {1, 2}
    assert not board.has_any_valid_move(budget=None)
    assert not board.has_any_valid_move()


def test_has_any_valid_move_budget_answers_true_when_exhausted():
    board = _finish_small_board()
    assert board.has_any_valid_move(budget=3)


def test_has_any_valid_move_default_budget(board):
    assert SEARCH_BUDGET == 1000
    assert board.has_any_valid_move()


def test_apply_move_rejects_illegal(board, idx):
    result = board.apply_move(1, idx(0, 0), idx(2, 1))
    assert not result.legal
    assert result.error == "illegal_move"
    assert board.segments == []


def test_last_move_reports_winner():
    board = BoardState(size=2)
    assert board.apply_move(1, 0, 3).winner is None
    assert board.apply_move(2, 0, 1).winner is None
    assert board.apply_move(1, 3, 2).winner == 1


def test_forest_kept_after_every_move(board, idx, draw):
    moves = [((0, 0), (1, 1)), ((1, 1), (1, 2)), ((1, 2), (3, 0)), ((3, 0), (3, 3))]
    for start, end in moves:
        draw(board, start, end)
        assert is_forest(board.connections)


def test_snapshot(board, idx, draw):
    draw(board, (0, 0), (0, 3))
    state = board.snapshot()
    assert state["size"] == 4
    assert state["segments"] == [{"from": 0, "to": 3, "player": 1}]
    assert state["blocked"] == [1, 2]
    assert state["connections"][0] == [3]
    assert state["connections"][5] == []
