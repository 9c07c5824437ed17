"""Threat-Space Search.

The search works on a single shared board. Every node places its move (and,
when the threat can be answered, the opponent's replies on the critical
squares) for as long as the node is being explored, and removes them again
before returning. Callers get their board back unchanged.
"""

import logging
import time
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

import numpy as np

from ..board import board_to_str, stones_placed
from ..consts import ANIMATION_TIMESTEP_SECS, opponent
from ..geometry import Point
from .pattern import ThreatPri
from .threat_detector import Threat, ThreatDetector, min_defcon
from .tss_config import TSSConfig, get_default_config

logger = logging.getLogger(__name__)

# One step of a variation: our move and the opponent's forced replies.
VariationStep = Tuple[Point, FrozenSet[Point]]
Variation = List[VariationStep]


@dataclass
class SearchNode:
    """A node of the search tree.

    The root has no ``next_sq``. ``threats`` are the mover's immediate
    threats at the time the node was evaluated.
    """

    next_sq: Optional[Point] = None
    critical_sqs: FrozenSet[Point] = frozenset()
    potential_win: bool = False
    children: List["SearchNode"] = field(default_factory=list)
    threats: List[Threat] = field(default_factory=list)

    def count_nodes(self) -> int:
        return 1 + sum(child.count_nodes() for child in self.children)


@dataclass
class TSSResult:
    """Result of TSS search."""

    potential_win: bool = False
    variations: List[Variation] = field(default_factory=list)
    root: Optional[SearchNode] = None
    search_stats: Dict[str, Any] = None

    def __post_init__(self):
        if self.search_stats is None:
            self.search_stats = {}

    @property
    def best_move(self) -> Optional[Point]:
        """First move of the shortest winning variation."""
        for variation in self.variations:
            if variation:
                return variation[0][0]
        return None


class TSSSearcher:
    """Threat-Space Search implementation."""

    def __init__(self, config: Optional[TSSConfig] = None, detector: Optional[ThreatDetector] = None):
        self.config = config if config is not None else get_default_config()
        self.detector = detector if detector is not None else ThreatDetector()
        self.nodes_visited = 0
        self.budget_exhausted = False

    def search(self, board: np.ndarray, color: int) -> SearchNode:
        """Search for a forced win for ``color``, who is to move."""
        opp = opponent(color)
        self.nodes_visited = 0
        self.budget_exhausted = False

        threats_own = self.detector.search_all_board(board, color, ThreatPri.IMMEDIATE)
        threats_opp = self.detector.search_all_board(board, opp, ThreatPri.IMMEDIATE)

        # We move first, so a threat at least as urgent as the opponent's wins.
        if threats_own and min_defcon(threats_own) <= min_defcon(threats_opp):
            logger.debug("Position already won for %d (defcon %d)", color, min_defcon(threats_own))
            return SearchNode(potential_win=True, threats=threats_own)

        next_sqs = self.detector.search_all_board_get_next_sqs(board, color, ThreatPri.IMMEDIATE)
        children = self._expand(board, color, next_sqs, threats_own, threats_opp)
        return SearchNode(
            potential_win=any(child.potential_win for child in children),
            children=children,
            threats=threats_own,
        )

    def _budget_left(self) -> bool:
        if self.config.max_nodes is not None and self.nodes_visited >= self.config.max_nodes:
            if not self.budget_exhausted:
                logger.info("TSS node budget of %d exhausted", self.config.max_nodes)
            self.budget_exhausted = True
            return False
        return True

    def _expand(
        self,
        board: np.ndarray,
        color: int,
        next_sqs: Iterable[Point],
        threats_own: List[Threat],
        threats_opp: List[Threat],
    ) -> List[SearchNode]:
        children = []
        for next_sq in sorted(next_sqs):
            if not self._budget_left():
                break
            children.append(self._tss_next_sq(board, color, next_sq, threats_own, threats_opp))
        return children

    def _refresh(
        self,
        board: np.ndarray,
        color: int,
        point: Point,
        threats_own: List[Threat],
        threats_opp: List[Threat],
    ) -> Tuple[List[Threat], List[Threat]]:
        """Threat lists after the stone at ``point`` changed.

        Only matches covering ``point`` can change, so those are dropped and
        searched again.
        """
        opp = opponent(color)
        own = [t for t in threats_own if not t.covers(point)]
        own.extend(self.detector.search_all_point(board, color, point, ThreatPri.IMMEDIATE))
        other = [t for t in threats_opp if not t.covers(point)]
        other.extend(self.detector.search_all_point(board, opp, point, ThreatPri.IMMEDIATE))
        return own, other

    def _tss_next_sq(
        self,
        board: np.ndarray,
        color: int,
        next_sq: Point,
        threats_own: List[Threat],
        threats_opp: List[Threat],
    ) -> SearchNode:
        self.nodes_visited += 1
        opp = opponent(color)

        with stones_placed(board, color, [next_sq]):
            threats_own, threats_opp = self._refresh(board, color, next_sq, threats_own, threats_opp)
            md_own = min_defcon(threats_own)
            md_opp = min_defcon(threats_opp)

            if md_opp <= md_own:
                logger.debug("%s: opponent is faster (%d <= %d), pruned", next_sq, md_opp, md_own)
                return SearchNode(next_sq=next_sq, threats=threats_own)

            # md_own < md_opp, so at least one threat is pressing.
            pressing = [t for t in threats_own if t.defcon < md_opp]
            critical_sqs = frozenset.intersection(*(t.critical_sqs for t in pressing))

            if not critical_sqs:
                logger.debug("%s: no common defence, potential win", next_sq)
                return SearchNode(next_sq=next_sq, potential_win=True, threats=threats_own)

            forced = sorted(critical_sqs)
            with stones_placed(board, opp, forced):
                for csq in forced:
                    threats_own, threats_opp = self._refresh(board, color, csq, threats_own, threats_opp)
                md_own = min_defcon(threats_own)
                md_opp = min_defcon(threats_opp)

                if md_opp == 0 or md_opp < md_own:
                    logger.debug("%s: defence at %s counters (%d < %d), pruned", next_sq, forced, md_opp, md_own)
                    return SearchNode(next_sq=next_sq, critical_sqs=critical_sqs, threats=threats_own)

                next_sqs = self.detector.search_all_point_own_get_next_sqs(
                    board, color, next_sq, ThreatPri.IMMEDIATE
                )
                children = self._expand(board, color, next_sqs, threats_own, threats_opp)
                potential_win = any(child.potential_win for child in children)

                if not potential_win and self.config.fallback_non_immediate:
                    other_sqs = self.detector.search_all_point_own_get_next_sqs(
                        board, color, next_sq, ThreatPri.NON_IMMEDIATE
                    ) - next_sqs
                    other_children = self._expand(board, color, other_sqs, threats_own, threats_opp)
                    potential_win = any(child.potential_win for child in other_children)
                    children.extend(other_children)

        return SearchNode(
            next_sq=next_sq,
            critical_sqs=critical_sqs,
            potential_win=potential_win,
            children=children,
            threats=threats_own,
        )


def tss_board(board: np.ndarray, color: int, config: Optional[TSSConfig] = None) -> SearchNode:
    """Run Threat-Space Search for ``color`` on ``board``.

    The board is used as scratch space and is restored before returning.
    """
    return TSSSearcher(config).search(board, color)


def potential_win_variations(node: SearchNode) -> List[Variation]:
    """Winning move sequences below ``node``, in tree order.

    Each variation is a list of ``(move, forced replies)`` steps. A root that
    is won without any search yields a single empty variation.
    """
    if not node.potential_win:
        return []

    node_var: Variation = []
    if node.next_sq is not None:
        node_var.append((node.next_sq, node.critical_sqs))

    winning_children = [child for child in node.children if child.potential_win]
    if not winning_children:
        return [node_var]

    variations = []
    for child in winning_children:
        for child_var in potential_win_variations(child):
            variations.append(node_var + child_var)
    return variations


def extract_winning_variations(node: SearchNode, sort: bool = True) -> List[Variation]:
    """Winning variations, shortest first unless ``sort`` is False."""
    variations = potential_win_variations(node)
    if sort:
        variations.sort(key=len)
    return variations


def variation_frames(board: np.ndarray, color: int, variation: Variation) -> List[str]:
    """Board renderings while replaying a variation.

    One frame for the start, then one after each move and one after its
    forced replies. The board is restored afterwards.
    """
    opp = opponent(color)
    frames = [board_to_str(board)]
    with ExitStack() as stack:
        for move, replies in variation:
            stack.enter_context(stones_placed(board, color, [move]))
            frames.append(board_to_str(board))
            stack.enter_context(stones_placed(board, opp, sorted(replies)))
            frames.append(board_to_str(board))
    return frames


def animate_variation(
    board: np.ndarray,
    color: int,
    variation: Variation,
    timestep: float = ANIMATION_TIMESTEP_SECS,
):
    """Print a variation step by step."""
    for frame in variation_frames(board, color, variation):
        print(frame)
        time.sleep(timestep)


def tss_search(state, config: Optional[TSSConfig] = None) -> TSSResult:
    """
    Perform Threat-Space Search for the side to move in ``state``.

    Args:
        state (GameState): Board and side to move.
        config (TSSConfig): Search settings, module default if None.

    Returns:
        TSSResult: Result object containing:
            - potential_win (bool): True if a forced win was found.
            - variations (list): Winning variations, shortest first.
            - root (SearchNode): The search tree.
            - search_stats (dict): Nodes visited, time used, etc.
    """
    searcher = TSSSearcher(config)
    start_time = time.time() * 1000
    root = searcher.search(state.board, state.turn)
    variations = extract_winning_variations(root, sort=searcher.config.sort_variations)

    stats = {
        "nodes_visited": searcher.nodes_visited,
        "time_ms": time.time() * 1000 - start_time,
        "budget_exhausted": searcher.budget_exhausted,
        "num_variations": len(variations),
    }
    logger.info(
        "TSS: potential_win=%s, %d variations, %d nodes in %.1f ms",
        root.potential_win, len(variations), stats["nodes_visited"], stats["time_ms"],
    )
    return TSSResult(potential_win=root.potential_win, variations=variations, root=root, search_stats=stats)
