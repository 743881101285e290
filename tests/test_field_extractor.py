import pytest

from groupnorm.cleaning import ValueCleaner
from groupnorm.formats import extract_fields
from groupnorm.formats import extractors
from groupnorm.formats.extractors import Column, lookup_column
from groupnorm.formats.field_extractor import parse_members


@pytest.mark.parametrize(
    "text,expected",
    [
        (None, 0),
        ("", 0),
        ("3543", 3543),
        ("3,543", 3543),
        ("1,20,000", 120000),
        ("12 400", 12400),
        ("75000 approx", 75000),
        ("about 500", 0),
        ("-5", 0),
    ],
)
def test_parse_members(text, expected):
    assert parse_members(text) == expected


def test_extract_fields_standard_row_is_fully_cleaned(standard_row):
    bag = extract_fields(standard_row, "Right Hindu Groups", 1, extractors.STANDARD, ValueCleaner())
    assert bag.serial == "1"
    assert bag.name == "Hindu Jagruti Sena"
    assert bag.members == 3543
    assert bag.facebook == "https://facebook.com/hjs"
    assert bag.twitter is None
    assert bag.instagram is None
    assert bag.youtube is None
    assert bag.address == "Mangaluru"
    assert bag.email == "hjs@example.org"
    assert bag.website is None
    assert bag.extras is None


def test_extract_fields_mixed_layout():
    row = {
        "SL No": 7.0,
        "Facebook Page Name": "",
        "ORG": "Karnataka Rakshana Vedike",
        "Facebook Page Link": "https://facebook.com/krv",
        "Twitter Link": "",
        "Twitter Usernmae": "@krv_official",
        "Location": "na",
        "Address": "Bengaluru",
        "Mobile Nomber": 9876500000,
        "Email ID": "krv@example.org",
        "Website": "https://krv.example.org",
        "JOB": "Activist",
    }
    bag = extract_fields(row, "Mixed", 1, extractors.MIXED, ValueCleaner())
    assert bag.serial == "7"
    assert bag.name == "Karnataka Rakshana Vedike"
    assert bag.members == 0
    assert bag.twitter == "@krv_official"
    # "na" is non-blank, so Location wins and then cleans to None
    assert bag.address is None
    assert bag.phone == "9876500000"
    assert bag.website == "https://krv.example.org"
    assert bag.extras == "Activist"


def test_extract_fields_minimal_layout_has_no_serial():
    row = {"POLITICAL AND RELEGIOUS  ORGANIZATIONS KARNATAKA": "Sri Rama Sene", "IN TWITTER": "@srs"}
    bag = extract_fields(row, "Mixed 2", 4, extractors.MIXED_MINIMAL, ValueCleaner())
    assert bag.serial is None
    assert bag.name == "Sri Rama Sene"
    assert bag.twitter == "@srs"
    assert bag.facebook is None


def test_lookup_column_tolerates_header_whitespace_and_case():
    row = {" Facebook Profile URL ": "fb", "ORGANISATION  TYPE": "x"}
    assert lookup_column(row, "Facebook Profile URL") == "fb"
    assert lookup_column(row, "Organisation Type") == "x"
    assert lookup_column(row, "Twitter") is None


def test_column_takes_first_non_blank_alternative():
    col = Column("Youtube ID", "Youtube")
    assert col({"Youtube ID": "  ", "Youtube": "yt"}, "RRP", 1) == "yt"
    assert col({"Youtube ID": "a", "Youtube": "b"}, "RRP", 1) == "a"
    assert col({}, "RRP", 1) is None


def test_mixed_job_column_is_cleaned():
    row = {"SL No": 3, "ORG": "Karnataka Rakshana Vedike", "JOB": " nil "}
    bag = extract_fields(row, "Mixed", 3, extractors.MIXED, ValueCleaner())
    assert bag.extras is None
    assert ("JOB",) in extractors.MIXED.expected_columns()
    assert extractors.STANDARD.extras is extractors.ABSENT
