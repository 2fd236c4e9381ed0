"""Render a FloralRecord as a compact floral formula.

The formula reads left to right: symmetry, perianth, androecium,
gynoecium, then the fruit after a semicolon:

    X(↑),T5+1,A1-2,̅G3;capsule

- Whorls of one part are joined with ``+``; sterile parts end with ``•``.
- Fused parts sit in parentheses, ``(A5)``; variably fused ones as ``(A5]``.
- The ovary position is a combining mark before ``G``: an overline for an
  inferior ovary, an underline for a superior one.

When two or more parts are adnate a second line joins them from below:

    *,T2,A2,̅G2;berry
      ╰──┴──╯
"""

from __future__ import annotations

import unicodedata
from typing import TYPE_CHECKING

from floral.formula import Connation, Ovary

if TYPE_CHECKING:
    from floral.formula import FloralPart, FloralRecord

OVERLINE = "\u0305"
UNDERLINE = "\u0332"

OVARY_MARKS = {
    Ovary.SUPERIOR: UNDERLINE,
    Ovary.INFERIOR: OVERLINE,
    Ovary.BOTH: OVERLINE + UNDERLINE,
}

# left end, right end, line, junction
ADNATION_CONSTANT = ("╰", "╯", "─", "┴")
ADNATION_VARIABLE = ("└", "┘", "┄", "┴")

SYMMETRY_SEPARATOR = " or "


def display_width(text: str) -> int:
    """Terminal columns taken by text; combining marks take none."""
    return sum(1 for ch in text if not unicodedata.combining(ch))


def render_symmetry(record: FloralRecord) -> str:
    return SYMMETRY_SEPARATOR.join(symmetry.symbol for symmetry in record.symmetry)


def render_part(part: FloralPart) -> str:
    """Render one floral part, e.g. ``(̅G3)`` or ``A2+5•``."""
    symbol = OVARY_MARKS.get(part.ovary, "") + part.part.value
    whorls = "+".join(whorl.symbol for whorl in part.whorls)

    if part.connation is Connation.VARIABLE:
        return f"({symbol}{whorls}]"
    if part.connation is Connation.FUSED:
        return f"({symbol}{whorls})"
    return symbol + whorls


def render_fruit(record: FloralRecord) -> str:
    return ",".join(record.fruit)


def formula_segments(record: FloralRecord) -> list[str]:
    """The comma-separated segments of the formula, fruit excluded."""
    return [render_symmetry(record)] + [render_part(part) for part in record.parts]


def render_formula_line(record: FloralRecord) -> str:
    """The one-line formula, without the adnation line."""
    line = ",".join(formula_segments(record))
    if record.fruit:
        line += ";" + render_fruit(record)
    return line


def adnation_columns(record: FloralRecord) -> list[int]:
    """Display columns of the symbols of the adnate parts."""
    columns = []
    column = display_width(render_symmetry(record)) + 1
    for part in record.parts:
        if part.part in record.adnation.parts:
            # skip the opening parenthesis of a fused part
            columns.append(column + (1 if part.is_fused else 0))
        column += display_width(render_part(part)) + 1
    return columns


def render_adnation(columns: list[int], variable: bool = False) -> str:
    """Draw the line joining the given columns, or "" for fewer than two."""
    if len(columns) < 2:
        return ""

    left, right, dash, junction = ADNATION_VARIABLE if variable else ADNATION_CONSTANT
    line = " " * columns[0] + left
    for i in range(1, len(columns)):
        line += dash * (columns[i] - columns[i - 1] - 1)
        line += right if i == len(columns) - 1 else junction
    return line


def render(record: FloralRecord) -> str:
    """Render the floral formula of a record.

    Pure and total over loaded records. Returns one line, or two when parts
    are adnate.
    """
    formula = render_formula_line(record)
    adnation = render_adnation(adnation_columns(record), record.adnation.variable)
    if adnation:
        return f"{formula}\n{adnation}"
    return formula
