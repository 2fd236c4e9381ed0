"""Loader for the floral formula dataset.

The dataset is a CSV file bundled with the package, one formula per row:

    order,family,flower_type,symmetry,tepals,calyx,petals,stamens,carpels,ovary,fruit,adnation,notes

Cells follow a small grammar:

- An empty cell or ``-`` means the field is absent.
- Multi-valued cells are separated by ``;``.
- Part cells (tepals to carpels) hold one token per whorl (``5``, ``2-4``,
  ``inf``, ``?``; a trailing ``s`` marks sterile parts as in ``5s``) plus
  the flags ``f`` (fused) and ``v`` (fusion varies). ``3;3;f`` is two fused
  whorls of three.
- Exactly one of ``tepals`` or ``calyx`` + ``petals`` must be filled in.

Loading is all or nothing: any bad row raises DatasetError.
"""

from __future__ import annotations

import csv
import logging
import os
import re
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

from floral.errors import DatasetError
from floral.formula import (
    BILATERAL_ARROWS,
    INFINITE_THRESHOLD,
    Adnation,
    Connation,
    FloralPart,
    FloralRecord,
    FlowerType,
    Many,
    Ovary,
    Part,
    PartCount,
    Range,
    SepalsPetals,
    Single,
    Symmetry,
    SymmetryKind,
    Tepals,
    Unknown,
    Whorl,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

# Bundled dataset, overridable with the FLORAL_DATA environment variable
DATA_PATH = Path(__file__).parent / "data" / "formulae.csv"
DATA_ENV_VAR = "FLORAL_DATA"

HEADER = [
    "order",
    "family",
    "flower_type",
    "symmetry",
    "tepals",
    "calyx",
    "petals",
    "stamens",
    "carpels",
    "ovary",
    "fruit",
    "adnation",
    "notes",
]

SEPARATOR = ";"
ABSENT = ("", "-")
INFINITY_TOKEN = "inf"
UNKNOWN_TOKEN = "?"
FUSED_FLAG = "f"
VARIABLE_FLAG = "v"
STERILE_SUFFIX = "s"

_NUMBER = re.compile(r"[0-9]+")


def _is_absent(cell: str) -> bool:
    return cell.strip() in ABSENT


def _split(cell: str) -> list[str]:
    return [token.strip() for token in cell.split(SEPARATOR)]


# --- Cell parsers ------------------------------------------------------------
# Each raises ValueError on bad input; load() turns that into DatasetError.


def _parse_number(token: str) -> int:
    if not _NUMBER.fullmatch(token):
        raise ValueError(f"part count {token!r} not recognised")
    return int(token)


def parse_count(token: str) -> PartCount:
    """Parse a count-or-range token: ``5``, ``2-4``, ``6-inf``, ``inf`` or ``?``.

    Finite values above INFINITE_THRESHOLD count as many.
    """
    token = token.strip()
    if token == UNKNOWN_TOKEN:
        return Unknown()
    if token == INFINITY_TOKEN:
        return Many()

    if "-" in token:
        low_str, _, high_str = token.partition("-")
        low = _parse_number(low_str)
        if low > INFINITE_THRESHOLD:
            raise ValueError(f"range {token!r} starts above {INFINITE_THRESHOLD}")
        if high_str == INFINITY_TOKEN:
            return Range(low, None)
        high = _parse_number(high_str)
        return Range(low, None if high > INFINITE_THRESHOLD else high)

    number = _parse_number(token)
    if number > INFINITE_THRESHOLD:
        return Many()
    return Single(number)


def parse_flower_type(cell: str) -> FlowerType:
    code = cell.strip()
    for flower_type in FlowerType:
        if flower_type.value == code:
            return flower_type
    raise ValueError(f"flower type {code!r} not recognised")


def parse_symmetry(cell: str) -> tuple[Symmetry, ...]:
    """Parse one or more symmetry codes, e.g. ``r`` or ``r;up``."""
    if _is_absent(cell):
        raise ValueError("symmetry is missing")

    symmetries = []
    for code in _split(cell):
        if code in BILATERAL_ARROWS:
            symmetries.append(Symmetry(SymmetryKind.BILATERAL, code))
            continue
        kind = next(
            (k for k in SymmetryKind if k is not SymmetryKind.BILATERAL and k.value == code),
            None,
        )
        if kind is None:
            raise ValueError(f"symmetry {code!r} not recognised")
        symmetries.append(Symmetry(kind))
    return tuple(symmetries)


def parse_ovary(cell: str) -> Ovary | None:
    """Parse an ovary position: ``s``, ``i``, or ``s;i`` for both."""
    if _is_absent(cell):
        return None

    positions = set()
    for code in _split(cell):
        if code == Ovary.SUPERIOR.value:
            positions.add(Ovary.SUPERIOR)
        elif code == Ovary.INFERIOR.value:
            positions.add(Ovary.INFERIOR)
        else:
            raise ValueError(f"ovary position {code!r} not recognised")

    if len(positions) > 1:
        return Ovary.BOTH
    return positions.pop()


def parse_part(cell: str, part: Part, ovary: Ovary | None = None) -> FloralPart | None:
    """Parse a floral part cell such as ``5``, ``3;3;f`` or ``9;3s``.

    Returns None when the cell is absent.
    """
    if _is_absent(cell):
        return None

    whorls = []
    fused = False
    variable = False
    for token in _split(cell):
        if token == FUSED_FLAG:
            fused = True
        elif token == VARIABLE_FLAG:
            variable = True
        elif token.endswith(STERILE_SUFFIX):
            whorls.append(Whorl(parse_count(token[: -len(STERILE_SUFFIX)]), sterile=True))
        else:
            whorls.append(Whorl(parse_count(token)))

    if variable:
        connation = Connation.VARIABLE
    elif fused:
        connation = Connation.FUSED
    else:
        connation = Connation.FREE

    return FloralPart(part, tuple(whorls), connation, ovary)


def parse_perianth(tepals: str, calyx: str, petals: str) -> Tepals | SepalsPetals:
    """Build the perianth from whichever of tepals or calyx + petals is set."""
    parsed_tepals = parse_part(tepals, Part.TEPALS)
    parsed_calyx = parse_part(calyx, Part.CALYX)
    parsed_petals = parse_part(petals, Part.PETALS)

    if parsed_tepals is not None:
        if parsed_calyx is not None or parsed_petals is not None:
            raise ValueError("perianth has both tepals and calyx/petals")
        return Tepals(parsed_tepals)

    if parsed_calyx is None or parsed_petals is None:
        raise ValueError("perianth needs either tepals or both calyx and petals")
    return SepalsPetals(parsed_calyx, parsed_petals)


def parse_fruit(cell: str) -> tuple[str, ...]:
    if _is_absent(cell):
        return ()
    return tuple(fruit for fruit in _split(cell) if fruit not in ABSENT)


def parse_adnation(cell: str) -> Adnation:
    """Parse adnated part symbols, e.g. ``C;A``, with ``v`` if it varies."""
    if _is_absent(cell):
        return Adnation()

    parts = []
    variable = False
    for code in _split(cell):
        if code == VARIABLE_FLAG:
            variable = True
            continue
        try:
            parts.append(Part(code))
        except ValueError:
            raise ValueError(f"adnation part {code!r} not recognised") from None
    return Adnation(tuple(parts), variable)


def parse_row(row: Sequence[str]) -> FloralRecord:
    """Parse one dataset row (in HEADER order) into a FloralRecord."""
    cells = dict(zip(HEADER, row))

    ovary = parse_ovary(cells["ovary"])
    carpels = parse_part(cells["carpels"], Part.CARPELS, ovary)
    if ovary is not None and carpels is None:
        raise ValueError("ovary position given without carpels")

    notes = cells["notes"].strip()

    return FloralRecord(
        order=cells["order"].strip(),
        family=cells["family"].strip(),
        sexuality=parse_flower_type(cells["flower_type"]),
        symmetry=parse_symmetry(cells["symmetry"]),
        perianth=parse_perianth(cells["tepals"], cells["calyx"], cells["petals"]),
        stamens=parse_part(cells["stamens"], Part.STAMENS),
        carpels=carpels,
        fruit=parse_fruit(cells["fruit"]),
        adnation=parse_adnation(cells["adnation"]),
        notes=notes if notes not in ABSENT else None,
    )


# --- Loading -----------------------------------------------------------------


def default_data_path() -> Path:
    """The dataset path: FLORAL_DATA if set, else the bundled file."""
    override = os.environ.get(DATA_ENV_VAR)
    return Path(override) if override else DATA_PATH


def load(path: str | Path | None = None) -> tuple[FloralRecord, ...]:
    """Load every record from the dataset, in file order.

    Args:
        path: CSV file to read. Defaults to default_data_path().

    Returns:
        The records as an immutable tuple.

    Raises:
        DatasetError: If the file is missing, its header is wrong, or any
            row fails to parse. Nothing is returned from a partly bad file.
    """
    data_path = Path(path) if path is not None else default_data_path()
    if not data_path.is_file():
        raise DatasetError("dataset file not found", path=data_path)

    logger.info("Loading floral formulae from %s", data_path)

    records = []
    try:
        with open(data_path, encoding="utf-8", newline="") as f:
            reader = csv.reader(f)

            header = next(reader, None)
            if header is None:
                raise DatasetError("dataset is empty", path=data_path)
            if [name.strip() for name in header] != HEADER:
                raise DatasetError(
                    f"unexpected header {','.join(header)!r}, expected {','.join(HEADER)!r}",
                    path=data_path,
                    line=1,
                )

            for row in reader:
                if not any(cell.strip() for cell in row):
                    continue
                if len(row) != len(HEADER):
                    raise DatasetError(
                        f"expected {len(HEADER)} fields, found {len(row)}",
                        path=data_path,
                        line=reader.line_num,
                    )
                try:
                    records.append(parse_row(row))
                except ValueError as err:
                    raise DatasetError(str(err), path=data_path, line=reader.line_num) from err
    except (csv.Error, UnicodeDecodeError) as err:
        raise DatasetError(f"unreadable dataset: {err}", path=data_path) from err

    logger.info("Loaded %d formulae", len(records))
    logger.debug("Formulae by order: %s", dict(count_by_order(records)))
    return tuple(records)


def count_by_order(records: Iterable[FloralRecord]) -> Counter[str]:
    """Count records per order."""
    return Counter(record.order for record in records)


def count_by_symmetry(records: Iterable[FloralRecord]) -> Counter[SymmetryKind]:
    """Count records per symmetry kind (a record may count under several)."""
    counts: Counter[SymmetryKind] = Counter()
    for record in records:
        counts.update({symmetry.kind for symmetry in record.symmetry})
    return counts
