"""Integration tests for TSS on the tactical suite."""

import numpy as np
import pytest

from tssgomoku.board import stones_placed
from tssgomoku.consts import BLACK, EMPTY, WHITE
from tssgomoku.eval.tactical_tests import (
    ALL_TACTICAL_POSITIONS,
    evaluate_tactical_suite,
    get_tactical_positions,
)
from tssgomoku.state import Status, get_state
from tssgomoku.tss import TSSConfig, ThreatDetector, ThreatPri, min_defcon, tss_search


class TestTacticalSuite:
    """Run the curated positions end to end."""

    def test_full_suite(self):
        results = evaluate_tactical_suite()
        assert results["failures"] == []
        assert results["accuracy"] == 1.0
        assert results["total"] == len(ALL_TACTICAL_POSITIONS)

    def test_without_fallback(self):
        results = evaluate_tactical_suite(config=TSSConfig(fallback_non_immediate=False))
        followup = get_tactical_positions("non_immediate_followup")
        assert results["failures"] == [pos.description for pos in followup]
        assert results["by_category"]["four_then_four_three"] == {"correct": 1, "total": 1}

    def test_quick_check_on_decided_positions(self):
        config = TSSConfig.for_quick_check()
        for category in ("straight_four", "double_three", "four_three", "counter_threat"):
            assert evaluate_tactical_suite(config=config, category=category)["accuracy"] == 1.0

    def test_by_category(self):
        results = evaluate_tactical_suite(category="counter_threat", verbose=True)
        assert results["total"] == 1
        assert results["by_category"] == {"counter_threat": {"correct": 1, "total": 1}}

    def test_unknown_category(self):
        assert get_tactical_positions("no_such_category") == []
        assert evaluate_tactical_suite(category="no_such_category")["accuracy"] == 0

    @pytest.mark.parametrize("pos", ALL_TACTICAL_POSITIONS, ids=lambda p: p.category)
    def test_positions_are_ongoing(self, pos):
        assert pos.to_state().status == Status.ONGOING


class TestVariationReplay:
    """Play winning variations out on the board."""

    @pytest.mark.parametrize(
        "blacks,whites",
        [
            (("g8", "h8", "i9", "i10"), ()),
            (("e8", "f8", "g8", "h9", "h10"), ("d8",)),
        ],
    )
    def test_variations_are_playable(self, blacks, whites):
        state = get_state(list(blacks), list(whites), BLACK)
        result = tss_search(state)
        assert result.potential_win
        assert result.variations

        detector = ThreatDetector()
        for variation in result.variations:
            moves = [move for move, _ in variation]
            assert len(set(moves)) == len(moves)
            # The last move leaves no common defence
            assert variation[-1][1] == frozenset()

            board = state.board
            with stones_placed(board, BLACK, moves):
                own = detector.search_all_board(board, BLACK, ThreatPri.IMMEDIATE)
                assert own
                assert min_defcon(own) <= 2

        assert np.array_equal(state.board, get_state(list(blacks), list(whites), BLACK).board)

    def test_forced_replies_are_empty_squares(self):
        state = get_state(["e8", "f8", "g8"], ["d8"], BLACK)
        result = tss_search(state)
        assert result.root.children
        for node in result.root.children:
            assert node.next_sq not in node.critical_sqs
            for csq in node.critical_sqs:
                assert state.board[csq] == EMPTY

    def test_search_for_either_side(self):
        state = get_state(["h8", "i8", "j8"], ["c3", "d3", "e3", "f3"], BLACK)
        assert not tss_search(state).potential_win

        flipped = get_state(["h8", "i8", "j8"], ["c3", "d3", "e3", "f3"], WHITE)
        assert tss_search(flipped).potential_win
