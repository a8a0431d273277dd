from datetime import date, datetime

from lyricsheet.dates import format_ymd, normalize_date, serial_to_date

# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def test_iso_text():
    assert normalize_date("2015-09-07") == "2015/9/7"


def test_canonical_text_unchanged():
    assert normalize_date("2015/9/7") == "2015/9/7"


def test_dotted_and_mixed_separators():
    assert normalize_date("2015.09.07") == "2015/9/7"
    assert normalize_date("2015-9/07") == "2015/9/7"


def test_cjk_date_text():
    assert normalize_date("2015年9月7日") == "2015/9/7"


def test_iso_datetime_text():
    assert normalize_date("2015-09-07T00:00:00") == "2015/9/7"


def test_compact_digits():
    assert normalize_date("20150907") == "2015/9/7"


def test_garbage_text_unchanged():
    assert normalize_date("TBD") == "TBD"


def test_bare_year_unchanged():
    assert normalize_date("2015") == "2015"


def test_impossible_date_unchanged():
    assert normalize_date("2015-13-40") == "2015-13-40"


def test_blank():
    assert normalize_date("") == ""
    assert normalize_date("   ") == ""
    assert normalize_date(None) == ""


# ---------------------------------------------------------------------------
# Serial numbers
# ---------------------------------------------------------------------------


def test_serial_number():
    assert normalize_date(42254) == "2015/9/7"


def test_serial_number_text():
    assert normalize_date("42254") == "2015/9/7"


def test_serial_with_time_fraction():
    assert normalize_date(42254.75) == "2015/9/7"
    assert normalize_date("42254.5") == "2015/9/7"


def test_number_outside_serial_range():
    assert normalize_date(12) == "12"
    assert normalize_date(2015.0) == "2015"
    assert normalize_date("99999") == "99999"


def test_serial_to_date_range():
    assert serial_to_date(42254) == date(2015, 9, 7)
    assert serial_to_date(19999) is None
    assert serial_to_date(60001) is None


# ---------------------------------------------------------------------------
# Native values
# ---------------------------------------------------------------------------


def test_native_date():
    assert normalize_date(date(2015, 9, 7)) == "2015/9/7"


def test_native_datetime():
    assert normalize_date(datetime(2019, 10, 22, 18, 0)) == "2019/10/22"


def test_format_ymd_has_no_leading_zeros():
    assert format_ymd(date(2001, 1, 2)) == "2001/1/2"
