from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from ..geometry import intermediate_points, is_aligned_path, segments_intersect
from ..graph import would_create_cycle
from ..grid import GRID_SIZE, Point, generate, point_at


PlayerId = int

SEARCH_BUDGET = 1000


# Flip between players
def opponent(player: PlayerId) -> PlayerId:
    return 2 if player == 1 else 1


@dataclass(frozen=True)
class Segment:
    origin: int
    target: int
    player: PlayerId

    def joins(self, a: int, b: int) -> bool:
        return {self.origin, self.target} == {a, b}

    def touches(self, a: int, b: int) -> bool:
        # Shares at least one endpoint with a-b
        return self.origin in (a, b) or self.target in (a, b)


@dataclass
class MoveResult:
    legal: bool
    selected: Optional[int] = None
    segment: Optional[Segment] = None
    blocked: Tuple[int, ...] = ()
    winner: Optional[PlayerId] = None
    error: Optional[str] = None


class BoardState:
    def __init__(self, size: int = GRID_SIZE) -> None:
        self.size = size
        self.points: List[Point] = []
        self.segments: List[Segment] = []
        self.connections: Dict[int, Set[int]] = {}
        self.blocked: Set[int] = set()
        self.reset()

    def reset(self) -> None:
        # Fresh lattice, nothing drawn
        self.points = generate(self.size)
        self.segments = []
        self.connections = {point.index: set() for point in self.points}
        self.blocked = set()

    def point(self, index: int) -> Point:
        if not 0 <= index < len(self.points):
            raise ValueError(f"Unknown point index: {index}")
        return self.points[index]

    def point_at(self, row: int, col: int) -> Point:
        return point_at(self.points, self.size, row, col)

    def is_blocked(self, index: int) -> bool:
        return index in self.blocked

    def degree(self, index: int) -> int:
        return len(self.connections[index])

    def has_segment(self, a: int, b: int) -> bool:
        return any(segment.joins(a, b) for segment in self.segments)

    def between(self, a: int, b: int) -> List[int]:
        """Indices of the points strictly between ``a`` and ``b``."""

        inner = intermediate_points(self.point(a), self.point(b), self.points, self.size)
        return [point.index for point in inner]

    def crosses_existing(self, a: int, b: int) -> bool:
        candidate = (self.point(a), self.point(b))
        for segment in self.segments:
            if segment.touches(a, b):
                continue
            drawn = (self.points[segment.origin], self.points[segment.target])
            if segments_intersect(candidate, drawn):
                return True
        return False

    def is_valid_move(self, origin: int, target: int) -> bool:
        # Checks run cheapest first and stop at the first failure
        if origin == target or self.is_blocked(origin) or self.is_blocked(target):
            return False

        if self.has_segment(origin, target):
            return False

        if not is_aligned_path(self.point(origin), self.point(target)):
            return False

        if any(self.is_blocked(index) for index in self.between(origin, target)):
            return False

        if would_create_cycle(origin, target, self.connections):
            return False

        if self.crosses_existing(origin, target):
            return False

        return True

    def valid_start_points(self) -> Set[int]:
        if not self.segments:
            return {point.index for point in self.points if not self.is_blocked(point.index)}

        starts: Set[int] = set()
        for segment in self.segments:
            for end in (segment.origin, segment.target):
                if self.degree(end) <= 1 and not self.is_blocked(end):
                    starts.add(end)
        return starts

    def candidate_moves(self) -> Iterator[Tuple[int, int]]:
        for origin in sorted(self.valid_start_points()):
            for point in self.points:
                yield origin, point.index

    def has_any_valid_move(self, budget: Optional[int] = SEARCH_BUDGET) -> bool:
        """Report whether the player to move has at least one legal segment.

        After ``budget`` pair evaluations without a hit the search gives up
        and answers ``True``, so the match carries on. ``budget=None`` runs
        the full search, which on a square grid never exceeds
        ``len(points) ** 2`` evaluations.
        """

        for evaluated, (origin, target) in enumerate(self.candidate_moves()):
            if budget is not None and evaluated >= budget:
                return True
            if self.is_valid_move(origin, target):
                return True
        return False

    def apply_move(
        self,
        player: PlayerId,
        origin: int,
        target: int,
        search_budget: Optional[int] = SEARCH_BUDGET,
    ) -> MoveResult:
        # Draw a segment and report whether it ended the match
        if not self.is_valid_move(origin, target):
            return MoveResult(legal=False, error="illegal_move")

        segment = Segment(origin=origin, target=target, player=player)
        self.segments.append(segment)
        self.connections[origin].add(target)
        self.connections[target].add(origin)

        newly_blocked = tuple(
            index for index in self.between(origin, target) if index not in self.blocked
        )
        self.blocked.update(newly_blocked)

        winner = None
        if not self.has_any_valid_move(search_budget):
            winner = player

        return MoveResult(legal=True, segment=segment, blocked=newly_blocked, winner=winner)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "segments": [
                {"from": s.origin, "to": s.target, "player": s.player} for s in self.segments
            ],
            "blocked": sorted(self.blocked),
            "connections": {
                index: sorted(neighbors) for index, neighbors in self.connections.items()
            },
        }
