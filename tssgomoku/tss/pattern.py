"""Threat pattern definitions and the pattern catalog.

Patterns are written from BLACK's point of view using the generic elements
in ``tssgomoku.consts`` (OWN is BLACK, ENEMY is WHITE). The matching engine
swaps the stone roles when searching for WHITE.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Dict, List, Sequence, Tuple

from ..consts import (
    DEFCON_RANGE,
    EMPTY,
    GEN_ELEMS,
    GEN_ELEMS_TO_NAMES,
    MAX_DEFCON,
    MDFIT,
    NOT_OWN,
    OWN,
    WALL_ENEMY,
    WIN_LENGTH,
)
from ..errors import PatternDefinitionError


class ThreatPri(Enum):
    """Which slice of the catalog to search."""

    ALL = "all"
    IMMEDIATE = "immediate"
    NON_IMMEDIATE = "non_immediate"


def degree(gen_pattern: Sequence[int]) -> int:
    """Max number of OWNs in a WIN_LENGTH window made only of OWN/EMPTY cells."""
    n = len(gen_pattern)
    max_owns = 0

    for i in range(n - WIN_LENGTH + 1):
        window = gen_pattern[i:i + WIN_LENGTH]
        if all(v == OWN or v == EMPTY for v in window):
            max_owns = max(max_owns, sum(1 for v in window if v == OWN))

    return max_owns


def defcon_from_degree(d: int) -> int:
    return MAX_DEFCON - d


def one_step_from_straight_threat(gen_pattern: Sequence[int]) -> bool:
    """True if filling a single EMPTY cell with OWN yields a straight four.

    A straight four is WIN_LENGTH - 1 OWNs in a row with an EMPTY cell on
    each side.
    """
    n = len(gen_pattern)
    length = WIN_LENGTH + 1
    straight = [EMPTY] + [OWN] * (length - 2) + [EMPTY]

    for idx, v in enumerate(gen_pattern):
        if v != EMPTY:
            continue
        candidate = list(gen_pattern)
        candidate[idx] = OWN
        for i in range(n - length + 1):
            if candidate[i:i + length] == straight:
                return True

    return False


@dataclass
class Pattern:
    """A one-dimensional threat template.

    Attributes:
        pattern: Generic elements, BLACK's point of view
        critical_sqs: EMPTY indices whose occupation by the opponent
            (jointly) neutralizes the threat
        name: Unique display name
        index: Ordinal position in the catalog
        own_sqs: Indices fixed to OWN
        empty_sqs: Critical squares first, then the other useful EMPTY indices
        defcon: MAX_DEFCON - degree; lower is more urgent
        immediate: Already at defcon < 2, or one move from a straight four
    """

    pattern: Tuple[int, ...]
    critical_sqs: Tuple[int, ...]
    name: str
    index: int
    own_sqs: Tuple[int, ...] = field(init=False)
    empty_sqs: Tuple[int, ...] = field(init=False)
    defcon: int = field(init=False)
    immediate: bool = field(init=False)

    def __post_init__(self):
        self.pattern = tuple(self.pattern)
        self.critical_sqs = tuple(self.critical_sqs)

        if not self.name:
            raise PatternDefinitionError("Pattern name must not be empty")
        if not self.pattern:
            raise PatternDefinitionError(f"{self.name}: pattern must not be empty")

        for elem in self.pattern:
            if elem not in GEN_ELEMS:
                raise PatternDefinitionError(f"{self.name}: unknown generic element {elem}")
            if elem != OWN and elem & OWN:
                raise PatternDefinitionError(
                    f"{self.name}: element {GEN_ELEMS_TO_NAMES[elem]} partly matches OWN"
                )

        if list(self.critical_sqs) != sorted(set(self.critical_sqs)):
            raise PatternDefinitionError(f"{self.name}: critical squares must be sorted and unique")

        length = len(self.pattern)
        for sq in self.critical_sqs:
            if not (0 <= sq < length and self.pattern[sq] == EMPTY):
                raise PatternDefinitionError(f"{self.name}: critical square {sq} is not an EMPTY cell")

        self._check_contiguous()

        self.own_sqs = tuple(i for i, v in enumerate(self.pattern) if v == OWN)
        other_empty_sqs = tuple(
            i for i, v in enumerate(self.pattern) if v == EMPTY and i not in self.critical_sqs
        )
        self.empty_sqs = self.critical_sqs + other_empty_sqs

        curr_degree = degree(self.pattern)
        self.defcon = defcon_from_degree(curr_degree)
        if self.defcon not in DEFCON_RANGE:
            raise PatternDefinitionError(f"{self.name}: defcon {self.defcon} out of range")

        # Every empty square has to be useful.
        for esq in self.empty_sqs:
            next_pattern = list(self.pattern)
            next_pattern[esq] = OWN
            if degree(next_pattern) <= curr_degree:
                raise PatternDefinitionError(
                    f"{self.name}: empty square {esq} does not raise the degree"
                )

        self.immediate = self.defcon < 2 or one_step_from_straight_threat(self.pattern)

    def _check_contiguous(self):
        # OWN/EMPTY cells must form a single run.
        started = ended = False
        for v in self.pattern:
            if v == OWN or v == EMPTY:
                if ended:
                    raise PatternDefinitionError(f"{self.name}: OWN/EMPTY cells are not contiguous")
                started = True
            elif started:
                ended = True

    def __len__(self) -> int:
        return len(self.pattern)

    def __str__(self) -> str:
        elems = " ".join(GEN_ELEMS_TO_NAMES[x] for x in self.pattern)
        return (
            f"{self.name} (index {self.index}): {elems}\n"
            f"  defcon: {self.defcon}, immediate: {self.immediate}\n"
            f"  critical_sqs: {list(self.critical_sqs)}, own_sqs: {list(self.own_sqs)}, "
            f"empty_sqs: {list(self.empty_sqs)}"
        )


E, O, NO, WE = EMPTY, OWN, NOT_OWN, WALL_ENEMY

# (name, cells, critical squares), in catalog order.
PATTERN_DEFINITIONS = (
    ("P_WIN", (O, O, O, O, O), ()),
    ("P_4_ST", (E, O, O, O, O, E), ()),
    ("P_4_A", (WE, O, O, O, O, E), (5,)),
    ("P_4_B", (NO, O, O, O, E, O), (4,)),
    ("P_4_C", (NO, O, O, E, O, O, NO), (3,)),
    ("P_3_ST", (E, E, O, O, O, E, E), (1, 5)),
    ("P_3_A", (WE, E, O, O, O, E, E), (1, 5, 6)),
    ("P_3_B", (E, O, O, E, O, E), (0, 3, 5)),
    ("P_3_C", (WE, O, O, O, E, E), (4, 5)),
    ("P_3_D", (WE, O, O, E, O, E), (3, 5)),
    ("P_3_E", (WE, O, E, O, O, E), (2, 5)),
    ("P_3_F", (WE, E, O, O, O, E, WE), (1, 5)),
    ("P_3_G", (NO, O, O, E, E, O), (3, 4)),
    ("P_3_H", (NO, O, E, O, E, O, NO), (2, 4)),
    ("P_2_A", (E, E, O, O, E, E), (0, 1, 4, 5)),
    ("P_2_B", (E, E, O, E, O, E, E), (0, 1, 3, 5, 6)),
    ("P_2_C", (E, O, E, E, O, E), (0, 2, 3, 5)),
)

del E, O, NO, WE


class PatternCatalog:
    """Immutable registry of threat patterns and their lookup tables."""

    def __init__(self, patterns: Sequence[Pattern]):
        self._patterns = tuple(patterns)

        for i, p in enumerate(self._patterns):
            if p.index != i:
                raise PatternDefinitionError(f"{p.name}: index {p.index} does not match position {i}")

        self._by_name: Dict[str, Pattern] = {}
        for p in self._patterns:
            if p.name in self._by_name:
                raise PatternDefinitionError(f"Duplicate pattern name: {p.name}")
            self._by_name[p.name] = p

        immediate = tuple(p for p in self._patterns if p.immediate)
        non_immediate = tuple(p for p in self._patterns if not p.immediate)

        max_defcon_imm = max((p.defcon for p in immediate), default=0)
        if max_defcon_imm != MDFIT:
            raise PatternDefinitionError(
                f"Max defcon among immediate patterns is {max_defcon_imm}, expected {MDFIT}"
            )

        self._by_pri = {
            ThreatPri.ALL: self._patterns,
            ThreatPri.IMMEDIATE: immediate,
            ThreatPri.NON_IMMEDIATE: non_immediate,
        }

        by_defcon: Dict[int, List[Pattern]] = {}
        for p in self._patterns:
            by_defcon.setdefault(p.defcon, []).append(p)
        self._by_defcon = {k: tuple(v) for k, v in by_defcon.items()}

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self):
        return iter(self._patterns)

    def __getitem__(self, index: int) -> Pattern:
        return self._patterns[index]

    def by_name(self, name: str) -> Pattern:
        return self._by_name[name]

    def by_defcon(self, defcon: int) -> Tuple[Pattern, ...]:
        return self._by_defcon.get(defcon, ())

    def by_pri(self, pri: ThreatPri) -> Tuple[Pattern, ...]:
        return self._by_pri[pri]

    @property
    def names(self) -> List[str]:
        return [p.name for p in self._patterns]


def build_catalog() -> PatternCatalog:
    patterns = [
        Pattern(pattern=cells, critical_sqs=csqs, name=name, index=i)
        for i, (name, cells, csqs) in enumerate(PATTERN_DEFINITIONS)
    ]
    return PatternCatalog(patterns)


@lru_cache(maxsize=None)
def get_catalog() -> PatternCatalog:
    """The shared catalog, built on first use."""
    return build_catalog()
