"""Pytest configuration and shared fixtures."""

import pytest

from tssgomoku.board import get_board, new_board
from tssgomoku.tss.pattern import get_catalog
from tssgomoku.tss.threat_detector import ThreatDetector


@pytest.fixture(scope="session")
def catalog():
    """The shared pattern catalog."""
    return get_catalog()


@pytest.fixture
def detector(catalog):
    """Threat detector bound to the shared catalog."""
    return ThreatDetector(catalog)


@pytest.fixture
def empty_board():
    """Empty 15x15 board with its wall border."""
    return new_board()


@pytest.fixture
def straight_four_board():
    """Black straight four on row 8, both ends open."""
    return get_board(["h8", "i8", "j8", "k8"], [])


@pytest.fixture
def double_three_board():
    """Black to make two open threes at i8."""
    return get_board(["g8", "h8", "i9", "i10"], [])


@pytest.fixture
def four_three_board():
    """Black to make a closed four and an open three at h8."""
    return get_board(["e8", "f8", "g8", "h9", "h10"], ["d8"])


@pytest.fixture
def counter_threat_board():
    """Black's four at k8 is blocked at l8, which gives white a straight four."""
    return get_board(["h8", "i8", "j8"], ["g8", "l5", "l6", "l7"])


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit test")
    config.addinivalue_line("markers", "integration: Integration test")
    config.addinivalue_line("markers", "performance: Performance test")
    config.addinivalue_line("markers", "slow: Slow test")
    config.addinivalue_line("markers", "tss: Threat-Space Search test")
    config.addinivalue_line("markers", "pattern: Pattern catalog or matching test")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add automatic markers."""
    for item in items:
        # Add markers based on file path
        if "performance" in str(item.fspath):
            item.add_marker(pytest.mark.performance)
            item.add_marker(pytest.mark.slow)

        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Add specific component markers
        if "tss" in item.name.lower():
            item.add_marker(pytest.mark.tss)

        if "pattern" in item.name.lower():
            item.add_marker(pytest.mark.pattern)
