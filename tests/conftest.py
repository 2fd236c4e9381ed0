import csv
from pathlib import Path

import pytest

from floral.dataset import HEADER, load, parse_row

# A plain bisexual flower: five sepals, petals and stamens, two fused carpels
BASE_ROW = {
    "order": "Testales",
    "family": "Testaceae",
    "flower_type": "b",
    "symmetry": "r",
    "tepals": "-",
    "calyx": "5",
    "petals": "5",
    "stamens": "5",
    "carpels": "2;f",
    "ovary": "s",
    "fruit": "capsule",
    "adnation": "-",
    "notes": "-",
}

BUNDLED_RECORD_COUNT = 70


@pytest.fixture(autouse=True)
def no_data_override(monkeypatch):
    """Keep a FLORAL_DATA set in the environment from leaking into tests."""
    monkeypatch.delenv("FLORAL_DATA", raising=False)


@pytest.fixture(scope="session")
def records():
    """The bundled dataset."""
    return load()


@pytest.fixture
def make_row():
    """Build a dataset row from BASE_ROW with some cells replaced."""

    def _make_row(**cells: str) -> list[str]:
        row = {**BASE_ROW, **cells}
        return [row[name] for name in HEADER]

    return _make_row


@pytest.fixture
def make_record(make_row):
    """Parse a record from BASE_ROW with some cells replaced."""

    def _make_record(**cells: str):
        return parse_row(make_row(**cells))

    return _make_record


@pytest.fixture
def write_dataset(tmp_path: Path):
    """Write rows (and a header) to a CSV file and return its path."""

    def _write_dataset(rows: list[list[str]], header: list[str] = HEADER) -> Path:
        path = tmp_path / "formulae.csv"
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
        return path

    return _write_dataset
