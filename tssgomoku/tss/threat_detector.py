"""Threat detection over the whole pattern catalog."""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Set

import numpy as np

from ..consts import MAX_DEFCON
from ..geometry import Point, point_is_on_line, point_set_on_line
from .pattern import Pattern, PatternCatalog, ThreatPri, get_catalog
from .pattern_search import (
    Match,
    search_board,
    search_board_next_sq,
    search_point,
    search_point_next_sq,
    search_point_own,
    search_point_own_next_sq,
)


@dataclass(frozen=True)
class Threat:
    """A pattern matched on a concrete board line."""

    m: Match
    pidx: int
    defcon: int
    critical_sqs: FrozenSet[Point]

    @classmethod
    def from_match(cls, m: Match, pattern: Pattern) -> "Threat":
        return cls(
            m=m,
            pidx=pattern.index,
            defcon=pattern.defcon,
            critical_sqs=frozenset(point_set_on_line(m[0], m[1], pattern.critical_sqs)),
        )

    def covers(self, point: Point) -> bool:
        """True if ``point`` lies on the matched segment."""
        return point_is_on_line(point, self.m[0], self.m[1], True)


def min_defcon(threats: Iterable[Threat]) -> int:
    """Most urgent defcon among threats, MAX_DEFCON if there are none."""
    return min((t.defcon for t in threats), default=MAX_DEFCON)


class ThreatDetector:
    """Runs the matching engine for every pattern in a priority class."""

    def __init__(self, catalog: Optional[PatternCatalog] = None):
        self.catalog = catalog if catalog is not None else get_catalog()

    def pattern(self, threat: Threat) -> Pattern:
        return self.catalog[threat.pidx]

    def search_all_board(self, board: np.ndarray, color: int, pri: ThreatPri) -> List[Threat]:
        """All threats for ``color`` anywhere on the board."""
        return [
            Threat.from_match(m, p)
            for p in self.catalog.by_pri(pri)
            for m in search_board(board, p.pattern, color)
        ]

    def search_all_point(self, board: np.ndarray, color: int, point: Point, pri: ThreatPri) -> List[Threat]:
        """All threats for ``color`` whose segment covers ``point``."""
        return [
            Threat.from_match(m, p)
            for p in self.catalog.by_pri(pri)
            for m in search_point(board, p.pattern, color, point)
        ]

    def search_all_point_own(self, board: np.ndarray, color: int, point: Point, pri: ThreatPri) -> List[Threat]:
        """All threats for ``color`` holding ``point`` as an own square."""
        return [
            Threat.from_match(m, p)
            for p in self.catalog.by_pri(pri)
            for m in search_point_own(board, p.pattern, color, point, p.own_sqs)
        ]

    def search_all_board_get_next_sqs(self, board: np.ndarray, color: int, pri: ThreatPri) -> Set[Point]:
        return {
            next_sq
            for p in self.catalog.by_pri(pri)
            for next_sq, _ in search_board_next_sq(board, p.pattern, color)
        }

    def search_all_point_get_next_sqs(
        self, board: np.ndarray, color: int, point: Point, pri: ThreatPri
    ) -> Set[Point]:
        return {
            next_sq
            for p in self.catalog.by_pri(pri)
            for next_sq, _ in search_point_next_sq(board, p.pattern, color, point)
        }

    def search_all_point_own_get_next_sqs(
        self, board: np.ndarray, color: int, point: Point, pri: ThreatPri
    ) -> Set[Point]:
        return {
            next_sq
            for p in self.catalog.by_pri(pri)
            for next_sq, _ in search_point_own_next_sq(board, p.pattern, color, point, p.own_sqs)
        }
