"""Turn handling and point-activation dispatch built on :mod:`lastline.game.board`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..grid import GRID_SIZE, Point
from .board import SEARCH_BUDGET, BoardState, MoveResult, PlayerId, Segment, opponent


LOG = logging.getLogger("lastline.rules")

PointRef = Union[int, Point]


class Phase(Enum):
    SELECTING = "selecting"
    ORIGIN_CHOSEN = "origin_chosen"
    FINISHED = "finished"


@dataclass
class TurnState:
    """Tracks per-match turn metadata beyond the raw board."""

    to_move: PlayerId = 1
    pending_origin: Optional[int] = None
    winner: Optional[PlayerId] = None

    @property
    def phase(self) -> Phase:
        if self.winner is not None:
            return Phase.FINISHED
        if self.pending_origin is not None:
            return Phase.ORIGIN_CHOSEN
        return Phase.SELECTING

    def swap_turn(self) -> None:
        self.pending_origin = None
        self.to_move = opponent(self.to_move)


def _index(point: PointRef) -> int:
    return point.index if isinstance(point, Point) else point


class GameRules:
    """Owns one match: the board, whose turn it is and the pending selection."""

    def __init__(self, size: int = GRID_SIZE, exact_search: bool = False) -> None:
        self.board = BoardState(size)
        self.turn = TurnState()
        self.search_budget: Optional[int] = None if exact_search else SEARCH_BUDGET

    def reset(self) -> None:
        self.board.reset()
        self.turn = TurnState()
        LOG.info("Match reset on a %dx%d grid", self.board.size, self.board.size)

    @property
    def phase(self) -> Phase:
        return self.turn.phase

    @property
    def finished(self) -> bool:
        return self.turn.phase is Phase.FINISHED

    @property
    def winner(self) -> Optional[PlayerId]:
        return self.turn.winner

    @property
    def selected(self) -> Optional[int]:
        return self.turn.pending_origin

    @property
    def segments(self) -> List[Segment]:
        return list(self.board.segments)

    def select_origin(self, point: PointRef) -> MoveResult:
        index = _index(point)
        if self.finished:
            return MoveResult(legal=False, error="game_over")
        if self.turn.pending_origin is not None:
            return MoveResult(legal=False, error="origin_already_chosen")

        if index not in self.board.valid_start_points():
            LOG.debug("Player %d cannot start at %d", self.turn.to_move, index)
            return MoveResult(legal=False, error="not_a_start_point")

        self.turn.pending_origin = index
        LOG.debug("Player %d selected %d", self.turn.to_move, index)
        return MoveResult(legal=True, selected=index)

    def attempt_move(self, point: PointRef) -> MoveResult:
        target = _index(point)
        origin = self.turn.pending_origin
        if origin is None or self.finished:
            return MoveResult(legal=False, error="no_origin")

        player = self.turn.to_move
        result = self.board.apply_move(player, origin, target, search_budget=self.search_budget)
        self.turn.pending_origin = None
        if not result.legal:
            LOG.debug("Player %d move %d-%d rejected", player, origin, target)
            return result

        LOG.debug("Player %d drew %d-%d, blocking %s", player, origin, target, list(result.blocked))
        if result.winner is not None:
            self.turn.winner = result.winner
            LOG.info("Player %d made the last move and wins", result.winner)
        else:
            self.turn.swap_turn()
        return result

    def handle_point_activation(self, point: PointRef) -> MoveResult:
        """Route a click on ``point`` to selection or move completion.

        Activations after the match is over and activations of blocked
        points are ignored outright; the latter keep any pending origin.
        """

        index = _index(point)
        self.board.point(index)

        if self.finished:
            return MoveResult(legal=False, error="game_over")
        if self.board.is_blocked(index):
            return MoveResult(legal=False, selected=self.turn.pending_origin, error="blocked_point")

        if self.turn.phase is Phase.SELECTING:
            return self.select_origin(index)
        return self.attempt_move(index)

    def status_text(self) -> str:
        if self.turn.winner is not None:
            winner = self.turn.winner
            return f"Player {winner} made the last move. Player {winner} wins!"
        return f"Player {self.turn.to_move}'s Turn"

    def snapshot(self) -> Dict[str, Any]:
        state = self.board.snapshot()
        state.update(
            to_move=self.turn.to_move,
            selected=self.turn.pending_origin,
            phase=self.turn.phase.value,
            winner=self.turn.winner,
        )
        return state


def init_match(grid_size: int = GRID_SIZE) -> GameRules:
    return GameRules(size=grid_size)


def handle_point_activation(match: GameRules, point: PointRef) -> GameRules:
    match.handle_point_activation(point)
    return match
