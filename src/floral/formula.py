"""Typed parts of a floral formula.

A floral formula summarises a flower in a few symbols: its symmetry, the
perianth (tepals, or sepals and petals), the stamens and the carpels, plus
the fruit. The notation follows:

- Floral Diagrams (Ronse De Craene, 2010)
- Plant Systematics, A Phylogenetic Approach (Judd et al., 4th Ed 2016)

Everything here is immutable. Parsing from the dataset lives in
``floral.dataset`` and string rendering in ``floral.render``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

# Finite counts above this are treated as "many"
INFINITE_THRESHOLD = 30

INFINITY_SYMBOL = "∞"
UNKNOWN_SYMBOL = "?"
STERILE_SYMBOL = "•"


class FlowerType(Enum):
    """Sexuality of the flowers a record describes."""

    BISEXUAL = "b"
    STAMINATE = "s"  # male only
    CARPELLATE = "c"  # female only

    @property
    def label(self) -> str:
        """Label used in the record header, e.g. "Bisexual"."""
        return self.name.capitalize()


class SymmetryKind(Enum):
    """Planes of symmetry of a flower."""

    RADIAL = "r"  # actinomorphic
    BILATERAL = "x"  # zygomorphic, see BILATERAL_ARROWS for the direction
    ASYMMETRIC = "a"
    SPIRAL = "s"
    DISYMMETRIC = "d"
    UNKNOWN = "?"


SYMMETRY_SYMBOLS = {
    SymmetryKind.RADIAL: "*",
    SymmetryKind.ASYMMETRIC: "↯",
    SymmetryKind.SPIRAL: "↻",
    SymmetryKind.DISYMMETRIC: "↔",
    SymmetryKind.UNKNOWN: UNKNOWN_SYMBOL,
}

# Direction of the plane of bilateral symmetry, keyed by dataset code
BILATERAL_ARROWS = {
    "up": "↑",
    "down": "↓",
    "left": "←",
    "right": "→",
    "upleft": "↖",
    "upright": "↗",
    "downleft": "↙",
    "downright": "↘",
}


@dataclass(frozen=True)
class Symmetry:
    """Floral symmetry, with a direction when bilateral."""

    kind: SymmetryKind
    direction: str | None = None

    def __post_init__(self) -> None:
        if self.kind is SymmetryKind.BILATERAL:
            if self.direction not in BILATERAL_ARROWS:
                raise ValueError(f"bilateral direction {self.direction!r} not recognised")
        elif self.direction is not None:
            raise ValueError(f"only bilateral symmetry takes a direction, got {self.direction!r}")

    @property
    def symbol(self) -> str:
        if self.kind is SymmetryKind.BILATERAL:
            return f"X({BILATERAL_ARROWS[self.direction]})"
        return SYMMETRY_SYMBOLS[self.kind]


# --- Part counts -------------------------------------------------------------


@dataclass(frozen=True)
class Single:
    """An exact number of parts."""

    value: int

    @property
    def symbol(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Range:
    """Between ``low`` and ``high`` parts. ``high`` of None is unbounded."""

    low: int
    high: int | None

    def __post_init__(self) -> None:
        if self.high is not None and self.low > self.high:
            raise ValueError(f"range {self.low}-{self.high} has low above high")

    @property
    def symbol(self) -> str:
        high = INFINITY_SYMBOL if self.high is None else str(self.high)
        return f"{self.low}-{high}"


@dataclass(frozen=True)
class Many:
    """Numerous parts (more than INFINITE_THRESHOLD)."""

    @property
    def symbol(self) -> str:
        return INFINITY_SYMBOL


@dataclass(frozen=True)
class Unknown:
    """The number of parts was not recorded."""

    @property
    def symbol(self) -> str:
        return UNKNOWN_SYMBOL


PartCount = Union[Single, Range, Many, Unknown]


@dataclass(frozen=True)
class Whorl:
    """One whorl of a floral part, e.g. the 5 in ``T5+1``."""

    count: PartCount
    sterile: bool = False

    @property
    def symbol(self) -> str:
        return self.count.symbol + (STERILE_SYMBOL if self.sterile else "")


# --- Floral parts ------------------------------------------------------------


class Part(Enum):
    """Floral organs that occur as whorls, valued by formula symbol."""

    TEPALS = "T"
    CALYX = "K"
    PETALS = "C"
    STAMENS = "A"
    CARPELS = "G"


# Formula order of the parts
PART_ORDER = (Part.TEPALS, Part.CALYX, Part.PETALS, Part.STAMENS, Part.CARPELS)


class Connation(Enum):
    """Fusion of the members of one floral part."""

    FREE = "free"
    FUSED = "fused"
    VARIABLE = "variable"  # fused in some members of the group only


class Ovary(Enum):
    """Position of the ovary relative to the other floral parts."""

    SUPERIOR = "s"
    INFERIOR = "i"
    BOTH = "both"  # superior in some members, inferior in others


@dataclass(frozen=True)
class FloralPart:
    """A floral part: its organ, whorls, connation and (for carpels) ovary."""

    part: Part
    whorls: tuple[Whorl, ...]
    connation: Connation = Connation.FREE
    ovary: Ovary | None = None

    def __post_init__(self) -> None:
        if not self.whorls:
            raise ValueError(f"{self.part.value} has no part count")
        if self.ovary is not None and self.part is not Part.CARPELS:
            raise ValueError(f"ovary position given for {self.part.value}")

    @property
    def is_fused(self) -> bool:
        return self.connation is not Connation.FREE


@dataclass(frozen=True)
class Tepals:
    """An undifferentiated perianth."""

    tepals: FloralPart

    def __post_init__(self) -> None:
        if self.tepals.part is not Part.TEPALS:
            raise ValueError(f"tepals recorded as {self.tepals.part.value}")

    @property
    def parts(self) -> tuple[FloralPart, ...]:
        return (self.tepals,)


@dataclass(frozen=True)
class SepalsPetals:
    """A perianth differentiated into calyx and corolla."""

    sepals: FloralPart
    petals: FloralPart

    def __post_init__(self) -> None:
        if self.sepals.part is not Part.CALYX:
            raise ValueError(f"sepals recorded as {self.sepals.part.value}")
        if self.petals.part is not Part.PETALS:
            raise ValueError(f"petals recorded as {self.petals.part.value}")

    @property
    def parts(self) -> tuple[FloralPart, ...]:
        return (self.sepals, self.petals)


Perianth = Union[Tepals, SepalsPetals]


@dataclass(frozen=True)
class Adnation:
    """Fusion between different floral parts.

    Attributes:
        parts: The floral parts fused to each other, in formula order.
        variable: Whether the adnation varies within the group described.
    """

    parts: tuple[Part, ...] = ()
    variable: bool = False

    def __post_init__(self) -> None:
        ordered = tuple(p for p in PART_ORDER if p in self.parts)
        object.__setattr__(self, "parts", ordered)

    @property
    def is_present(self) -> bool:
        return len(self.parts) > 1


@dataclass(frozen=True)
class FloralRecord:
    """One row of the formula dataset: a family's (or a variant's) formula.

    Several records may share a family, e.g. one for staminate and one for
    carpellate flowers.
    """

    order: str
    family: str
    sexuality: FlowerType
    symmetry: tuple[Symmetry, ...]
    perianth: Perianth
    stamens: FloralPart | None = None
    carpels: FloralPart | None = None
    fruit: tuple[str, ...] = ()
    adnation: Adnation = field(default_factory=Adnation)
    notes: str | None = None

    def __post_init__(self) -> None:
        if not self.order.strip():
            raise ValueError("order name is empty")
        if not self.family.strip():
            raise ValueError("family name is empty")
        if not self.symmetry:
            raise ValueError("no symmetry given")
        if self.stamens is not None and self.stamens.part is not Part.STAMENS:
            raise ValueError(f"stamens recorded as {self.stamens.part.value}")
        if self.carpels is not None and self.carpels.part is not Part.CARPELS:
            raise ValueError(f"carpels recorded as {self.carpels.part.value}")

        present = {p.part for p in self.parts}
        missing = [p.value for p in self.adnation.parts if p not in present]
        if missing:
            raise ValueError(f"adnation refers to missing parts: {', '.join(missing)}")

    @property
    def parts(self) -> tuple[FloralPart, ...]:
        """All floral parts present, in formula order."""
        parts = list(self.perianth.parts)
        if self.stamens is not None:
            parts.append(self.stamens)
        if self.carpels is not None:
            parts.append(self.carpels)
        return tuple(parts)
