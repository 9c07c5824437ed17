"""Unit tests for threat detection."""

import pytest

from tssgomoku.board import algebraic_to_point, get_board
from tssgomoku.consts import BLACK, MAX_DEFCON, WHITE
from tssgomoku.tss.pattern import ThreatPri, get_catalog
from tssgomoku.tss.threat_detector import Threat, ThreatDetector, min_defcon


def pts(*names):
    return {algebraic_to_point(n) for n in names}


@pytest.fixture
def open_three_board():
    return get_board(["h8", "i8", "j8"], [])


class TestThreat:
    """Test Threat records."""

    def test_from_match(self, catalog):
        p = catalog.by_name("P_3_ST")
        m = (algebraic_to_point("f8"), algebraic_to_point("l8"))
        threat = Threat.from_match(m, p)
        assert threat.pidx == p.index
        assert threat.defcon == 2
        assert threat.critical_sqs == frozenset(pts("g8", "k8"))

    def test_critical_sqs_follow_match_direction(self, catalog):
        p = catalog.by_name("P_4_A")
        m = (algebraic_to_point("l8"), algebraic_to_point("g8"))
        threat = Threat.from_match(m, p)
        assert threat.critical_sqs == frozenset(pts("g8"))

    def test_covers(self, catalog):
        p = catalog.by_name("P_3_ST")
        threat = Threat.from_match((algebraic_to_point("f8"), algebraic_to_point("l8")), p)
        assert threat.covers(algebraic_to_point("f8"))
        assert threat.covers(algebraic_to_point("i8"))
        assert not threat.covers(algebraic_to_point("m8"))
        assert not threat.covers(algebraic_to_point("i9"))

    def test_hashable(self, catalog):
        p = catalog.by_name("P_WIN")
        m = (algebraic_to_point("a1"), algebraic_to_point("e1"))
        assert len({Threat.from_match(m, p), Threat.from_match(m, p)}) == 1


class TestMinDefcon:
    def test_empty(self):
        assert min_defcon([]) == MAX_DEFCON

    def test_min(self, detector, straight_four_board):
        threats = detector.search_all_board(straight_four_board, BLACK, ThreatPri.ALL)
        assert min_defcon(threats) == 1


class TestThreatDetector:
    """Test catalog-wide searches."""

    def test_default_catalog(self):
        assert ThreatDetector().catalog is get_catalog()

    def test_open_three(self, detector, open_three_board):
        threats = detector.search_all_board(open_three_board, BLACK, ThreatPri.IMMEDIATE)
        assert len(threats) == 1
        assert detector.pattern(threats[0]).name == "P_3_ST"
        assert threats[0].critical_sqs == frozenset(pts("g8", "k8"))

    def test_no_threats_for_other_color(self, detector, open_three_board):
        assert detector.search_all_board(open_three_board, WHITE, ThreatPri.ALL) == []

    def test_straight_four(self, detector, straight_four_board):
        threats = detector.search_all_board(straight_four_board, BLACK, ThreatPri.IMMEDIATE)
        names = {detector.pattern(t).name for t in threats}
        assert "P_4_ST" in names
        four = next(t for t in threats if detector.pattern(t).name == "P_4_ST")
        assert four.critical_sqs == frozenset()

    def test_priority_split(self, detector, catalog):
        # Closed three: WE O O O E E
        board = get_board(["h8", "i8", "j8"], ["g8"])
        immediate = detector.search_all_board(board, BLACK, ThreatPri.IMMEDIATE)
        non_immediate = detector.search_all_board(board, BLACK, ThreatPri.NON_IMMEDIATE)
        assert immediate == []
        assert "P_3_C" in {catalog[t.pidx].name for t in non_immediate}

    def test_search_all_point(self, detector, open_three_board):
        assert len(detector.search_all_point(open_three_board, BLACK, algebraic_to_point("l8"), ThreatPri.IMMEDIATE)) == 1
        assert detector.search_all_point(open_three_board, BLACK, algebraic_to_point("h9"), ThreatPri.IMMEDIATE) == []

    def test_search_all_point_own(self, detector, open_three_board):
        assert len(detector.search_all_point_own(open_three_board, BLACK, algebraic_to_point("h8"), ThreatPri.IMMEDIATE)) == 1
        # Empty squares of the pattern are not own squares
        assert detector.search_all_point_own(open_three_board, BLACK, algebraic_to_point("g8"), ThreatPri.IMMEDIATE) == []

    def test_board_next_sqs(self, detector, open_three_board):
        next_sqs = detector.search_all_board_get_next_sqs(open_three_board, BLACK, ThreatPri.IMMEDIATE)
        assert pts("f8", "g8", "k8", "l8") <= next_sqs
        assert all(sq[0] == 8 for sq in next_sqs)

    def test_point_next_sqs(self, detector, open_three_board):
        next_sqs = detector.search_all_point_get_next_sqs(
            open_three_board, BLACK, algebraic_to_point("g8"), ThreatPri.IMMEDIATE
        )
        assert pts("g8", "k8") <= next_sqs

    def test_point_own_next_sqs(self, detector, open_three_board):
        own = detector.search_all_point_own_get_next_sqs(
            open_three_board, BLACK, algebraic_to_point("i8"), ThreatPri.IMMEDIATE
        )
        assert pts("f8", "g8", "k8", "l8") <= own
        empty = detector.search_all_point_own_get_next_sqs(
            open_three_board, BLACK, algebraic_to_point("g8"), ThreatPri.IMMEDIATE
        )
        assert empty == set()
