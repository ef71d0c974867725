"""Tests for GEDCOM parsing into the normalized family model."""

import pytest

from gedgraph.models import DateQualifier, Sex
from gedgraph.parsing import (
    ParseError,
    normalize_sex,
    parse_date,
    parse_gedcom,
    parse_gedcom_file,
    parse_name,
)


# ============================================================================
# Field conversion
# ============================================================================


class TestParseName:
    """Tests for splitting GEDCOM names."""

    def test_given_and_surname(self):
        assert parse_name("John /Doe/") == ("John", "Doe")

    def test_no_surname_segment(self):
        assert parse_name("Jane") == ("Jane", None)

    def test_multiple_given_names(self):
        assert parse_name("John Paul /Smith/ Jr.") == ("John Paul", "Smith")

    def test_surname_only(self):
        assert parse_name("/Windsor/") == (None, "Windsor")

    def test_empty(self):
        assert parse_name("") == (None, None)
        assert parse_name(None) == (None, None)

    def test_empty_slashes_keep_whole_value(self):
        assert parse_name("Anne //") == ("Anne //", None)


class TestNormalizeSex:
    """Tests for SEX normalization."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("M", Sex.MALE),
            ("m", Sex.MALE),
            ("F", Sex.FEMALE),
            ("female", Sex.FEMALE),
            ("X", Sex.OTHER),
            ("Other", Sex.OTHER),
            ("U", Sex.UNSPECIFIED),
            ("unknown", Sex.UNSPECIFIED),
        ],
    )
    def test_values(self, value, expected):
        assert normalize_sex(value) == expected

    def test_absent(self):
        assert normalize_sex(None) is None
        assert normalize_sex("") is None
        assert normalize_sex("  ") is None


class TestParseDate:
    """Tests for GEDCOM date parsing."""

    def test_day_month_year(self):
        date = parse_date("15 JUN 1980")
        assert (date.day, date.month, date.year) == (15, 6, 1980)
        assert date.text == "15 JUN 1980"
        assert date.qualifier is None

    def test_month_case_insensitive(self):
        assert parse_date("1 dec 1900").month == 12

    def test_year_only(self):
        date = parse_date("1980")
        assert date.year == 1980
        assert date.day is None
        assert date.month is None

    def test_unparseable_kept_verbatim(self):
        date = parse_date("circa 1980")
        assert date.day is None
        assert date.month is None
        assert date.year is None
        assert date.text == "circa 1980"

    def test_unknown_month_is_zero(self):
        date = parse_date("3 FOO 1901")
        assert date.month == 0
        assert date.day == 3
        assert date.year == 1901

    def test_month_year_is_text_only(self):
        date = parse_date("JUN 1980")
        assert date.year is None
        assert date.text == "JUN 1980"

    def test_two_digit_year_token_is_text_only(self):
        assert parse_date("80").year is None

    @pytest.mark.parametrize(
        "text, qualifier",
        [
            ("ABT 1855", DateQualifier.CIRCA),
            ("EST 1700", DateQualifier.ESTIMATED),
            ("BEF 1900", DateQualifier.BEFORE),
            ("AFT 1900", DateQualifier.AFTER),
            ("CAL 1810", DateQualifier.CALCULATED),
        ],
    )
    def test_qualifier_without_structured_fields(self, text, qualifier):
        date = parse_date(text)
        assert date.qualifier == qualifier
        assert date.year is None
        assert date.text == text

    def test_empty(self):
        assert parse_date("") is None
        assert parse_date(None) is None


# ============================================================================
# Whole documents
# ============================================================================


class TestParseGedcom:
    """Tests for parsing complete GEDCOM content."""

    def test_individual_fields(self):
        data = parse_gedcom(
            "0 @I1@ INDI\n"
            "1 NAME John /Smith/\n"
            "1 SEX M\n"
            "1 BIRT\n"
            "2 DATE 15 MAR 1850\n"
            "2 PLAC Boston\n"
            "1 DEAT\n"
            "2 DATE 1920\n"
            "1 FAMC @F0@\n"
            "1 FAMS @F1@\n"
            "1 FAMS @F2@\n"
        )
        assert len(data.individuals) == 1
        person = data.individuals[0]
        assert person.id == "@I1@"
        assert person.first_name == "John"
        assert person.last_name == "Smith"
        assert person.sex == Sex.MALE
        assert person.birth.date.year == 1850
        assert person.birth.date.month == 3
        assert person.birth.place == "Boston"
        assert person.birth.confirmed is True
        assert person.death.date.year == 1920
        assert person.famc == "@F0@"
        assert person.fams == ["@F1@", "@F2@"]

    def test_family_fields(self):
        data = parse_gedcom(
            "0 @F1@ FAM\n"
            "1 HUSB @I1@\n"
            "1 WIFE @I2@\n"
            "1 CHIL @I3@\n"
            "1 CHIL @I4@\n"
            "1 MARR\n"
            "2 DATE 5 MAY 1878\n"
            "2 PLAC Boston\n"
            "1 DIV\n"
            "2 DATE 1890\n"
        )
        family = data.families[0]
        assert family.id == "@F1@"
        assert family.husb == "@I1@"
        assert family.wife == "@I2@"
        assert family.children == ["@I3@", "@I4@"]
        assert family.marriage.date.day == 5
        assert family.marriage.place == "Boston"
        assert family.divorce.date.year == 1890

    def test_records_without_id_are_dropped(self):
        data = parse_gedcom(
            "0 INDI\n"
            "1 NAME Nobody\n"
            "0 @I1@ INDI\n"
            "1 NAME Somebody\n"
            "0 FAM\n"
            "1 HUSB @I1@\n"
        )
        assert [p.id for p in data.individuals] == ["@I1@"]
        assert data.families == []

    def test_duplicate_ids_keep_first(self):
        data = parse_gedcom("0 @I1@ INDI\n1 NAME First\n0 @I1@ INDI\n1 NAME Second\n")
        assert len(data.individuals) == 1
        assert data.individuals[0].first_name == "First"

    def test_document_order_preserved(self):
        data = parse_gedcom(
            "0 @I3@ INDI\n0 @F2@ FAM\n0 @I1@ INDI\n0 @F1@ FAM\n0 @I2@ INDI\n"
        )
        assert [p.id for p in data.individuals] == ["@I3@", "@I1@", "@I2@"]
        assert [f.id for f in data.families] == ["@F2@", "@F1@"]

    def test_vendor_tags_ignored(self):
        data = parse_gedcom("0 @I1@ INDI\n1 _UID 1234\n1 _APID 1,7602::0\n1 NAME Jane\n")
        assert data.individuals[0].first_name == "Jane"

    def test_last_name_record_wins(self):
        data = parse_gedcom("0 @I1@ INDI\n1 NAME Jane /Doe/\n1 NAME Janet /Roe/\n")
        person = data.individuals[0]
        assert (person.first_name, person.last_name) == ("Janet", "Roe")

    def test_last_famc_wins(self):
        data = parse_gedcom(
            "0 @I1@ INDI\n"
            "1 FAMC @F1@\n"
            "1 FAMC @F2@\n"
            "1 NAME A /B/\n"
            "1 NAME C /D/\n"
            "0 @F2@ FAM\n"
            "1 HUSB @X@\n"
        )
        person = data.individuals[0]
        assert person.famc == "@F2@"
        assert person.full_name == "C D"

    def test_note_split_before_conc_keeps_space(self):
        data = parse_gedcom("0 @I1@ INDI\n1 NOTE This is a \n2 CONC test\n")
        assert data.individuals[0].notes == ["This is a test"]

    def test_auxiliary_events_notes_and_images(self):
        data = parse_gedcom(
            "0 @I1@ INDI\n"
            "1 BAPM\n"
            "2 DATE 1 APR 1850\n"
            "1 BURI\n"
            "2 PLAC Salem\n"
            "1 NOTE Served in the navy\n"
            "2 CONT for ten years\n"
            "1 OBJE\n"
            "2 FILE photos/john.jpg\n"
            "2 TITL Portrait\n"
            "1 OBJE @M1@\n"
        )
        person = data.individuals[0]
        assert [e.type for e in person.events] == ["baptism", "burial"]
        assert person.events[0].date.month == 4
        assert person.events[1].place == "Salem"
        assert person.notes == ["Served in the navy\nfor ten years"]
        assert len(person.images) == 1
        assert person.images[0].url == "photos/john.jpg"
        assert person.images[0].title == "Portrait"

    def test_header_metadata(self, sample_data):
        assert sample_data.metadata.source == "TestSuite"
        assert sample_data.metadata.creator == "Test Suite Generator"
        assert sample_data.metadata.version == "5.5.1"
        assert sample_data.metadata.created == "1 JAN 2020"

    def test_default_metadata_without_header(self):
        assert parse_gedcom("0 @I1@ INDI\n").metadata.source == "GEDCOM"

    def test_bytes_input(self):
        data = parse_gedcom("0 @I1@ INDI\n1 NAME José /Núñez/\n".encode("utf-8"))
        assert data.individuals[0].first_name == "José"

    def test_malformed_input_degrades(self):
        data = parse_gedcom("this is not\na GEDCOM file\n")
        assert data.individuals == []
        assert data.families == []

    def test_undecodable_bytes_raise(self):
        with pytest.raises(ParseError) as excinfo:
            parse_gedcom(b"0 @I1@ INDI\n1 NAME \xff\xfe\xfa\n")
        assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)

    def test_non_text_raises(self):
        with pytest.raises(ParseError) as excinfo:
            parse_gedcom(12345)
        assert isinstance(excinfo.value.__cause__, TypeError)


class TestParseGedcomFile:
    """Tests for reading GEDCOM files from disk."""

    def test_sample_file(self, sample_data):
        assert [p.id for p in sample_data.individuals] == ["@I1@", "@I2@", "@I3@", "@I4@", "@I5@", "@I6@"]
        assert [f.id for f in sample_data.families] == ["@F1@", "@F2@"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseError) as excinfo:
            parse_gedcom_file(tmp_path / "missing.ged")
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_wrong_encoding(self, tmp_path):
        path = tmp_path / "latin.ged"
        path.write_bytes("0 @I1@ INDI\n1 NAME Zoë\n".encode("utf-16"))
        with pytest.raises(ParseError):
            parse_gedcom_file(path)

    def test_explicit_encoding(self, tmp_path):
        path = tmp_path / "latin.ged"
        path.write_bytes("0 @I1@ INDI\n1 NAME Zoë /Brontë/\n".encode("latin-1"))
        data = parse_gedcom_file(path, encoding="latin-1")
        assert data.individuals[0].last_name == "Brontë"
