"""Tests for loading and parsing the floral formula dataset."""

import pytest

from floral.dataset import (
    DATA_PATH,
    HEADER,
    count_by_order,
    count_by_symmetry,
    load,
    parse_adnation,
    parse_count,
    parse_ovary,
    parse_part,
    parse_perianth,
    parse_symmetry,
)
from floral.errors import DatasetError
from floral.formula import (
    Adnation,
    Connation,
    FlowerType,
    Many,
    Ovary,
    Part,
    Range,
    SepalsPetals,
    Single,
    Symmetry,
    SymmetryKind,
    Tepals,
    Unknown,
    Whorl,
)

from conftest import BUNDLED_RECORD_COUNT


class TestBundledDataset:
    """The dataset shipped with the package."""

    def test_loads_every_row(self, records):
        """Should load one record per data row."""
        assert isinstance(records, tuple)
        assert len(records) == BUNDLED_RECORD_COUNT

    def test_names_are_non_empty(self, records):
        """Should give every record an order and a family."""
        for record in records:
            assert record.order.strip()
            assert record.family.strip()

    def test_one_perianth_per_record(self, records):
        """Should give every record either tepals or sepals and petals."""
        for record in records:
            assert isinstance(record.perianth, (Tepals, SepalsPetals))
            perianth_parts = {p.part for p in record.parts} & {Part.TEPALS, Part.CALYX, Part.PETALS}
            assert perianth_parts in ({Part.TEPALS}, {Part.CALYX, Part.PETALS})

    def test_every_record_has_symmetry(self, records):
        for record in records:
            assert record.symmetry

    def test_keeps_file_order(self, records):
        """Should return records in the order the file lists them."""
        assert records[0].family == "Amborellaceae"
        assert records[0].sexuality is FlowerType.STAMINATE
        assert records[1].sexuality is FlowerType.CARPELLATE
        assert records[-1].family == "Apiaceae"

    def test_load_is_repeatable(self, records):
        assert load() == records

    def test_orchid_row(self, records):
        """Should parse the orchid row field by field."""
        (orchid,) = [r for r in records if r.family == "Orchidaceae"]
        assert orchid.order == "Asparagales"
        assert orchid.symmetry == (Symmetry(SymmetryKind.BILATERAL, "up"),)
        assert orchid.perianth.tepals.whorls == (Whorl(Single(5)), Whorl(Single(1)))
        assert orchid.stamens.whorls == (Whorl(Range(1, 2)),)
        assert orchid.carpels.ovary is Ovary.INFERIOR
        assert orchid.fruit == ("capsule",)
        assert orchid.adnation == Adnation((Part.STAMENS, Part.CARPELS))
        assert orchid.notes.startswith("The median inner tepal")

    def test_absent_notes_are_none(self, records):
        (liliaceae,) = [r for r in records if r.family == "Liliaceae"]
        assert liliaceae.notes is None

    def test_environment_override(self, monkeypatch, make_row, write_dataset):
        """Should read the file named by FLORAL_DATA when no path is given."""
        path = write_dataset([make_row(family="Overrideaceae")])
        monkeypatch.setenv("FLORAL_DATA", str(path))

        records = load()

        assert [r.family for r in records] == ["Overrideaceae"]

    def test_explicit_path_wins_over_environment(self, monkeypatch, make_row, write_dataset):
        monkeypatch.setenv("FLORAL_DATA", "/nonexistent/formulae.csv")
        path = write_dataset([make_row()])

        assert len(load(path)) == 1

    def test_bundled_path_exists(self):
        assert DATA_PATH.is_file()


class TestLoadErrors:
    """A broken dataset fails as a whole with a located DatasetError."""

    def test_missing_file(self, tmp_path):
        path = tmp_path / "missing.csv"
        with pytest.raises(DatasetError) as excinfo:
            load(path)
        assert excinfo.value.path == path
        assert "not found" in str(excinfo.value)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(DatasetError, match="empty"):
            load(path)

    def test_wrong_header(self, make_row, write_dataset):
        header = HEADER[:-1] + ["comments"]
        path = write_dataset([make_row()], header=header)
        with pytest.raises(DatasetError, match="unexpected header") as excinfo:
            load(path)
        assert excinfo.value.line == 1

    def test_wrong_field_count(self, make_row, write_dataset):
        """Should report the line of a row with too few fields."""
        path = write_dataset([make_row(), make_row()[:-1]])
        with pytest.raises(DatasetError, match="expected 13 fields, found 12") as excinfo:
            load(path)
        assert excinfo.value.line == 3
        assert str(excinfo.value).startswith(f"{path}:3:")

    def test_bad_token_reports_line(self, make_row, write_dataset):
        path = write_dataset([make_row(), make_row(), make_row(stamens="five")])
        with pytest.raises(DatasetError, match="'five' not recognised") as excinfo:
            load(path)
        assert excinfo.value.line == 4

    @pytest.mark.parametrize("stamens", ["2|5", "2 or 5", "2/5"])
    def test_disjunctions_are_rejected(self, make_row, write_dataset, stamens):
        """Should refuse counts that offer alternatives instead of a range."""
        path = write_dataset([make_row(stamens=stamens)])
        with pytest.raises(DatasetError):
            load(path)

    def test_tepals_with_calyx(self, make_row, write_dataset):
        path = write_dataset([make_row(tepals="6")])
        with pytest.raises(DatasetError, match="both tepals and calyx"):
            load(path)

    def test_no_perianth(self, make_row, write_dataset):
        path = write_dataset([make_row(calyx="-", petals="-")])
        with pytest.raises(DatasetError, match="either tepals or both"):
            load(path)

    def test_ovary_without_carpels(self, make_row, write_dataset):
        path = write_dataset([make_row(carpels="-", ovary="s")])
        with pytest.raises(DatasetError, match="without carpels"):
            load(path)

    def test_adnation_of_missing_part(self, make_row, write_dataset):
        path = write_dataset([make_row(adnation="T;A")])
        with pytest.raises(DatasetError, match="missing parts: T"):
            load(path)

    def test_unknown_flower_type(self, make_row, write_dataset):
        path = write_dataset([make_row(flower_type="m")])
        with pytest.raises(DatasetError, match="flower type 'm'"):
            load(path)

    def test_empty_family(self, make_row, write_dataset):
        path = write_dataset([make_row(family=" ")])
        with pytest.raises(DatasetError, match="family name is empty"):
            load(path)

    def test_blank_rows_are_skipped(self, make_row, write_dataset):
        path = write_dataset([make_row(), [], [""] * len(HEADER), make_row(family="Otheraceae")])
        assert [r.family for r in load(path)] == ["Testaceae", "Otheraceae"]

    def test_error_message_without_line(self):
        assert str(DatasetError("bad")) == "bad"
        assert str(DatasetError("bad", path="data.csv")) == "data.csv: bad"
        assert str(DatasetError("bad", path="data.csv", line=7)) == "data.csv:7: bad"


class TestParseCount:
    """Count tokens: exact, ranges, many and unknown."""

    @pytest.mark.parametrize(
        "token, expected",
        [
            ("5", Single(5)),
            ("0", Single(0)),
            (" 3 ", Single(3)),
            ("2-4", Range(2, 4)),
            ("6-inf", Range(6, None)),
            ("5-35", Range(5, None)),
            ("inf", Many()),
            ("45", Many()),
            ("30", Single(30)),
            ("?", Unknown()),
        ],
    )
    def test_valid_tokens(self, token, expected):
        assert parse_count(token) == expected

    @pytest.mark.parametrize("token", ["", "five", "-3", "2-", "4-2", "40-50", "2.5", "2|5"])
    def test_invalid_tokens(self, token):
        with pytest.raises(ValueError):
            parse_count(token)


class TestParseCells:
    """The other cell parsers."""

    def test_part_with_whorls(self):
        part = parse_part("3;3;f", Part.TEPALS)
        assert part.whorls == (Whorl(Single(3)), Whorl(Single(3)))
        assert part.connation is Connation.FUSED

    def test_part_with_sterile_whorl(self):
        part = parse_part("9;3s", Part.STAMENS)
        assert part.whorls == (Whorl(Single(9)), Whorl(Single(3), sterile=True))
        assert part.connation is Connation.FREE

    def test_variable_flag_wins_over_fused(self):
        assert parse_part("5;f;v", Part.STAMENS).connation is Connation.VARIABLE

    def test_absent_part(self):
        assert parse_part("-", Part.STAMENS) is None
        assert parse_part("", Part.STAMENS) is None

    def test_flags_without_count(self):
        with pytest.raises(ValueError, match="no part count"):
            parse_part("f", Part.CARPELS)

    def test_carpels_carry_ovary(self):
        assert parse_part("2;f", Part.CARPELS, Ovary.SUPERIOR).ovary is Ovary.SUPERIOR

    def test_perianth_kinds(self):
        assert isinstance(parse_perianth("6", "-", "-"), Tepals)
        assert isinstance(parse_perianth("-", "5", "5"), SepalsPetals)

    def test_perianth_needs_both_calyx_and_petals(self):
        with pytest.raises(ValueError):
            parse_perianth("-", "5", "-")

    def test_symmetry_codes(self):
        assert parse_symmetry("r;up") == (
            Symmetry(SymmetryKind.RADIAL),
            Symmetry(SymmetryKind.BILATERAL, "up"),
        )
        assert parse_symmetry("s") == (Symmetry(SymmetryKind.SPIRAL),)
        assert parse_symmetry("downleft")[0].symbol == "X(↙)"

    @pytest.mark.parametrize("cell", ["-", "", "sideways", "x"])
    def test_bad_symmetry(self, cell):
        with pytest.raises(ValueError):
            parse_symmetry(cell)

    def test_ovary_positions(self):
        assert parse_ovary("s") is Ovary.SUPERIOR
        assert parse_ovary("i") is Ovary.INFERIOR
        assert parse_ovary("s;i") is Ovary.BOTH
        assert parse_ovary("-") is None
        with pytest.raises(ValueError):
            parse_ovary("m")

    def test_adnation(self):
        adnation = parse_adnation("A;C;v")
        assert adnation.parts == (Part.PETALS, Part.STAMENS)
        assert adnation.variable
        assert adnation.is_present
        assert not parse_adnation("-").is_present
        with pytest.raises(ValueError, match="'Z'"):
            parse_adnation("C;Z")


class TestCounts:
    def test_count_by_order(self, records):
        counts = count_by_order(records)
        assert counts["Rosales"] == 5
        assert counts["Asparagales"] == 3
        assert sum(counts.values()) == BUNDLED_RECORD_COUNT

    def test_count_by_symmetry(self, records):
        counts = count_by_symmetry(records)
        assert counts[SymmetryKind.SPIRAL] == 2
        assert counts[SymmetryKind.DISYMMETRIC] == 1
        # records with several symmetries count under each
        assert sum(counts.values()) > BUNDLED_RECORD_COUNT
