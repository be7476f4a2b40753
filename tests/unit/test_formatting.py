"""Unit tests for the shared field formatting helpers."""

import pytest

from cvgen.contexts.profile.json_resume import Location
from cvgen.contexts.rendering.formatting import (
    format_date,
    format_date_range,
    format_degree,
    format_location,
    join_names,
    safe_url,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        ("2020-01", "Jan 2020"),
        ("2020-01-15", "Jan 2020"),
        ("2020", "Jan 2020"),
        ("2021-12-31T08:00:00Z", "Dec 2021"),
        (" 2019-06 ", "Jun 2019"),
    ],
)
def test_format_date(value, expected):
    """Test month-year formatting of supported date shapes."""
    assert format_date(value) == expected


@pytest.mark.unit
def test_format_date_long_month():
    """Test long month names."""
    assert format_date("2020-09", "long") == "September 2020"


@pytest.mark.unit
@pytest.mark.parametrize("value", ["Summer 2019", "2020-13", "2021-02-30", "20-01", "soon"])
def test_unparseable_dates_pass_through(value):
    """Test invalid dates are returned verbatim instead of raising."""
    assert format_date(value) == value


@pytest.mark.unit
def test_format_date_missing():
    """Test missing dates format as empty strings."""
    assert format_date(None) == ""
    assert format_date("") == ""


@pytest.mark.unit
def test_date_range_open_ended():
    """Test an absent end date renders as Present."""
    assert format_date_range("2020-01", None) == "Jan 2020 – Present"


@pytest.mark.unit
def test_date_range_both_absent():
    """Test no dates renders nothing, not a lone dash."""
    assert format_date_range(None, None) == ""
    assert format_date_range("", "") == ""


@pytest.mark.unit
def test_date_range_closed():
    """Test both endpoints appear in order."""
    result = format_date_range("2019-06", "2021-03")

    assert result == "Jun 2019 – Mar 2021"
    assert result.index("Jun 2019") < result.index("Mar 2021")


@pytest.mark.unit
def test_date_range_end_only():
    """Test an end date without a start keeps the dash and the end."""
    assert format_date_range(None, "2021-03") == "– Mar 2021"


@pytest.mark.unit
def test_date_range_passes_through_free_text():
    """Test free-text endpoints survive inside a range."""
    assert format_date_range("Fall 2018", "2019-05", "long") == "Fall 2018 – May 2019"


@pytest.mark.unit
def test_join_names_skips_blanks():
    """Test empty and None parts are dropped without dangling separators."""
    assert join_names(["Acme", None, " ", "Remote"], " | ") == "Acme | Remote"
    assert join_names([None, ""]) == ""


@pytest.mark.unit
def test_format_location():
    """Test location formatting drops missing parts."""
    assert format_location(Location(city="Berlin", country_code="DE")) == "Berlin, DE"
    assert format_location(Location(city="", region="")) == ""
    assert format_location(None) == ""


@pytest.mark.unit
def test_format_degree():
    """Test the degree line with either part missing."""
    assert format_degree("BSc", "Physics") == "BSc in Physics"
    assert format_degree("BSc", None) == "BSc"
    assert format_degree(None, "Physics") == "Physics"
    assert format_degree(None, None) == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://jane.dev", "https://jane.dev"),
        (" http://example.com/cv ", "http://example.com/cv"),
        ("mailto:jane@x.com", "mailto:jane@x.com"),
        ("tel:+15550100", "tel:+15550100"),
        ("javascript:alert(1)", None),
        ("JavaScript:alert(1)", None),
        ("data:text/html,<b>x</b>", None),
        ("jane.dev", None),
        ("", None),
        (None, None),
    ],
)
def test_safe_url(url, expected):
    """Test only http, https, mailto and tel URLs are kept as link targets."""
    assert safe_url(url) == expected
