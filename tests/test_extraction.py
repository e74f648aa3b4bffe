"""Tests for field extraction."""
import pytest
from tzlookup.core.extraction import extract_fields, extract_timezone
from tzlookup.core.models import ZoneFields


def test_extract_fields_full_result():
    """Test extraction of timezone and country fields."""
    fields = extract_fields([
        ("TimezoneIdPrefix", "Europe/"),
        ("TimezoneId", "Berlin"),
        ("CountryName", "Germany"),
        ("CountryAlpha2", "DE"),
    ])
    
    assert fields == ZoneFields("Europe/Berlin", "Germany", "DE")


def test_extract_fields_order_independent():
    fields = extract_fields([
        ("CountryAlpha2", "JP"),
        ("TimezoneId", "Tokyo"),
        ("TimezoneIdPrefix", "Asia/"),
    ])
    
    assert fields.timezone == "Asia/Tokyo"
    assert fields.country_alpha2 == "JP"
    assert fields.country_name is None


def test_extract_fields_prefix_only():
    """A prefix without an id discards the whole result, country fields included."""
    fields = extract_fields([
        ("TimezoneIdPrefix", "Africa/"),
        ("CountryName", "Uganda"),
        ("CountryAlpha2", "UG"),
    ])
    
    assert fields is None


def test_extract_fields_id_only():
    assert extract_fields([("TimezoneId", "Berlin"), ("CountryName", "Germany")]) is None


def test_extract_fields_empty():
    assert extract_fields([]) is None
    assert extract_timezone([]) is None


def test_extract_fields_ignores_unknown_fields():
    fields = extract_fields([
        ("OBJECTID", "17"),
        ("TimezoneIdPrefix", "America/"),
        ("Population", "12000"),
        ("TimezoneId", "Curacao"),
    ])
    
    assert fields == ZoneFields("America/Curacao")


def test_extract_fields_case_sensitive():
    """Field names must match exactly."""
    assert extract_fields([("timezoneidprefix", "Europe/"), ("TimezoneId", "Berlin")]) is None
    assert extract_timezone([("TimezoneIdPrefix", "Europe/"), ("TIMEZONEID", "Berlin")]) is None


def test_extract_fields_no_separator():
    """Prefix and id are concatenated as-is."""
    assert extract_timezone([("TimezoneIdPrefix", "Etc/"), ("TimezoneId", "GMT+5")]) == "Etc/GMT+5"
    assert extract_timezone([("TimezoneIdPrefix", ""), ("TimezoneId", "UTC")]) == "UTC"


def test_extract_fields_last_value_wins():
    fields = extract_fields([
        ("TimezoneIdPrefix", "Europe/"),
        ("TimezoneId", "Paris"),
        ("TimezoneId", "Brussels"),
    ])
    
    assert fields.timezone == "Europe/Brussels"


def test_extract_fields_skips_null_entries():
    fields = extract_fields([
        (None, "ignored"),
        ("CountryName", None),
        ("TimezoneIdPrefix", "Europe/"),
        ("TimezoneId", "Oslo"),
    ])
    
    assert fields == ZoneFields("Europe/Oslo")


@pytest.mark.parametrize("pairs,expected", [
    ([("TimezoneIdPrefix", "Europe/"), ("TimezoneId", "Berlin"), ("CountryName", "Germany")], "Europe/Berlin"),
    ([("TimezoneIdPrefix", "Africa/"), ("CountryName", "Uganda")], None),
    ([("CountryAlpha2", "DE")], None),
])
def test_extract_timezone_matches_extract_fields(pairs, expected):
    assert extract_timezone(pairs) == expected
    fields = extract_fields(pairs)
    assert (fields.timezone if fields else None) == expected


def test_extract_fields_accepts_generator():
    pairs = (pair for pair in [("TimezoneIdPrefix", "Asia/"), ("TimezoneId", "Kolkata")])
    assert extract_fields(pairs).timezone == "Asia/Kolkata"
