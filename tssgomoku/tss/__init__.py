"""Threat-Space Search (TSS) module for tactical Gomoku analysis."""

from .pattern import Pattern, PatternCatalog, ThreatPri, get_catalog
from .threat_detector import Threat, ThreatDetector, min_defcon
from .tss_config import TSSConfig, get_default_config, set_default_config
from .tss_search import (
    SearchNode,
    TSSResult,
    TSSSearcher,
    extract_winning_variations,
    potential_win_variations,
    tss_board,
    tss_search,
)

__all__ = [
    "tss_board",
    "tss_search",
    "extract_winning_variations",
    "potential_win_variations",
    "SearchNode",
    "TSSResult",
    "TSSSearcher",
    "Pattern",
    "PatternCatalog",
    "ThreatPri",
    "get_catalog",
    "Threat",
    "ThreatDetector",
    "min_defcon",
    "TSSConfig",
    "get_default_config",
    "set_default_config",
]
