"""TSS configuration."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class TSSConfig:
    """Configuration for Threat-Space Search.

    The search itself has no depth limit; it terminates because every
    explored move adds a stone to a finite board. ``max_nodes`` lets a caller
    bound the work on busy boards.
    """

    # Try non-immediate candidates when no immediate one wins
    fallback_non_immediate: bool = True

    # Node budget for one search, None for unbounded
    max_nodes: Optional[int] = None

    # Order extracted variations shortest first
    sort_variations: bool = True

    def __post_init__(self):
        if self.max_nodes is not None and self.max_nodes <= 0:
            raise ValueError("max_nodes must be > 0 or None")

    @classmethod
    def for_analysis(cls) -> "TSSConfig":
        """Full, unbounded search."""
        return cls(fallback_non_immediate=True, max_nodes=None)

    @classmethod
    def for_quick_check(cls, max_nodes: int = 2000) -> "TSSConfig":
        """Bounded search over immediate candidates only.

        Args:
            max_nodes: Maximum number of candidate nodes to expand

        Returns:
            TSSConfig suitable for calling once per move in a game loop
        """
        return cls(fallback_non_immediate=False, max_nodes=max_nodes)


# Global default config (can be overridden)
DEFAULT_CONFIG = TSSConfig()


def set_default_config(config: TSSConfig):
    """Set the global default TSS config."""
    global DEFAULT_CONFIG
    DEFAULT_CONFIG = config


def get_default_config() -> TSSConfig:
    """Get the global default TSS config."""
    return DEFAULT_CONFIG
