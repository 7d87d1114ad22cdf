import pytest

from tzregion import DstTime, TzdbErr
from tzregion.PosixTz import decode_hms, decode_offset, decode_tzstr


def test_decode_hms():
    assert decode_hms("2") == 7200
    assert decode_hms("02:30") == 9000
    assert decode_hms("-1") == -3600
    assert decode_hms("+167") == 167 * 3600
    assert decode_hms("1:02:03") == 3723


def test_offsets_are_west_of_utc():
    assert decode_offset("5") == -18000
    assert decode_offset("-1") == 3600
    assert decode_offset("-5:30") == 19800


def test_northern_rule():
    rule = decode_tzstr("CET-1CEST,M3.5.0,M10.5.0/3")
    assert rule.offset == 3600
    assert rule.std_abbr == "CET"
    assert rule.dst_offset == 3600
    assert rule.dst_abbr == "CEST"
    assert rule.dst_start == DstTime(2, "l", 0, 0, 7200)
    assert rule.dst_end == DstTime(9, "l", 0, 0, 10800)
    assert not rule.is_southern()


def test_week_of_month_becomes_on_or_after():
    rule = decode_tzstr("EST5EDT,M3.2.0,M11.1.0")
    assert rule.offset == -18000
    assert rule.dst_start == DstTime(2, ">", 0, 8, 7200)
    assert rule.dst_end == DstTime(10, ">", 0, 1, 7200)


def test_southern_rule():
    rule = decode_tzstr("AEST-10AEDT,M10.1.0,M4.1.0/3")
    assert rule.offset == 36000
    assert rule.is_southern()


def test_quoted_names_and_negative_times():
    rule = decode_tzstr("<-02>2<-01>,M3.5.0/-1,M10.5.0/0")
    assert rule.offset == -7200
    assert rule.std_abbr == "-02"
    assert rule.dst_abbr == "-01"
    assert rule.dst_start.at_time == -3600
    assert rule.dst_end.at_time == 0


def test_fixed_offset():
    rule = decode_tzstr("<+0545>-5:45")
    assert rule.offset == 20700
    assert not rule.has_dst()
    assert rule.dst() is None


def test_julian_days():
    rule = decode_tzstr("XST3XDT,J60/0,J365/25")
    # J60 is 1 March whether or not the year is leap
    assert rule.dst_start == DstTime(2, "d", 0, 1, 0)
    assert rule.dst_end == DstTime(11, "d", 0, 31, 25 * 3600)


def test_zero_based_day_of_year():
    rule = decode_tzstr("XST3XDT,59,300")
    assert rule.dst_start == DstTime(0, "n", 0, 59, 7200)


def test_negative_dst():
    rule = decode_tzstr("IST-1GMT0,M10.5.0,M3.5.0/1")
    assert rule.offset == 3600
    assert rule.dst_offset == -3600
    assert rule.dst().offset == 0


def test_empty_footer_has_no_rule():
    assert decode_tzstr("") is None
    assert decode_tzstr(None) is None


@pytest.mark.parametrize("tzstr", ["garbage", "EST", "EST5EDT", "EST5EDT,M13.1.0,M11.1.0", "XST3XDT,J0,J365"])
def test_invalid(tzstr):
    with pytest.raises(TzdbErr):
        decode_tzstr(tzstr)
