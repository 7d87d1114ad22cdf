#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

"""
Decode POSIX TZ strings such as 'CET-1CEST,M3.5.0,M10.5.0/3'.

These appear as the footer of TZif v2+ files and describe transitions
after the last explicit one. Supports the 'M', 'J' and zero-based day
forms plus the RFC 8536 extensions (hours up to 167, negative times).
"""

import re

from .Err import TzdbErr
from .RuleTable import DstTime, TailRule

DST_OFFSET_DEFAULT = 3600
TIME_DEFAULT = 2 * 3600

_NAME = r'(?:<[A-Za-z0-9+\-]+>|[A-Za-z]{3,})'
_HMS = r'[+-]?\d{1,3}(?::\d{1,2}){0,2}'
_DATE = r'(?:M\d{1,2}\.\d\.\d|J\d{1,3}|\d{1,3})'

_TZ_RE = re.compile(
    r'(?P<std>' + _NAME + r')(?P<std_off>' + _HMS + r')'
    r'(?:(?P<dst>' + _NAME + r')(?P<dst_off>' + _HMS + r')?'
    r'(?:,(?P<start>' + _DATE + r')(?:/(?P<start_time>' + _HMS + r'))?'
    r',(?P<end>' + _DATE + r')(?:/(?P<end_time>' + _HMS + r'))?)?)?$')

# Cumulative days before each month in a non-leap year
_DAYS_BEFORE_MONTH = [0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365]


def decode_hms(s):
    """Decode [+-]hh[:mm[:ss]] into signed seconds"""
    sign = 1
    if s[0] in '+-':
        sign = -1 if s[0] == '-' else 1
        s = s[1:]
    fields = [int(f) for f in s.split(':')]
    while len(fields) < 3:
        fields.append(0)
    hours, mins, secs = fields
    if mins > 59 or secs > 59:
        raise TzdbErr(f"Invalid time: {s}")
    return sign * (hours * 3600 + mins * 60 + secs)


def decode_offset(s):
    """Offsets in TZ strings are 'west of UT' so negate them"""
    return -decode_hms(s)


def decode_name(s):
    return s[1:-1] if s.startswith('<') else s


def decode_date(expr, time):
    """Decode one rule date into a DstTime"""
    at_time = TIME_DEFAULT if time is None else decode_hms(time)

    if expr[0] == 'M':
        month, week, weekday = (int(f) for f in expr[1:].split('.'))
        if not 1 <= month <= 12 or not 1 <= week <= 5 or not 0 <= weekday <= 6:
            raise TzdbErr(f"Invalid M date: {expr}")
        if week == 5:
            return DstTime(month - 1, 'l', weekday, 0, at_time)
        return DstTime(month - 1, '>', weekday, 1 + 7 * (week - 1), at_time)

    if expr[0] == 'J':
        # Julian day 1-365, February 29 is never counted
        n = int(expr[1:])
        if not 1 <= n <= 365:
            raise TzdbErr(f"Invalid J date: {expr}")
        mon = 0
        while _DAYS_BEFORE_MONTH[mon + 1] < n:
            mon += 1
        return DstTime(mon, 'd', 0, n - _DAYS_BEFORE_MONTH[mon], at_time)

    n = int(expr)
    if not 0 <= n <= 365:
        raise TzdbErr(f"Invalid day of year: {expr}")
    return DstTime(0, 'n', 0, n, at_time)


def decode_tzstr(tzstr):
    """Decode a TZ string into a TailRule, or None for an empty string"""
    if tzstr is None:
        return None
    tzstr = tzstr.strip()
    if tzstr.startswith(':'):
        tzstr = tzstr[1:]
    if not tzstr:
        return None

    m = _TZ_RE.match(tzstr)
    if m is None:
        raise TzdbErr(f'Invalid TZ string "{tzstr}"')

    try:
        offset = decode_offset(m.group('std_off'))
        std_abbr = decode_name(m.group('std'))
        if m.group('dst') is None:
            return TailRule(offset, std_abbr)

        dst_abbr = decode_name(m.group('dst'))
        if m.group('dst_off') is not None:
            dst_total = decode_offset(m.group('dst_off'))
        else:
            dst_total = offset + DST_OFFSET_DEFAULT

        if m.group('start') is None:
            raise TzdbErr(f'TZ string "{tzstr}" has DST but no rules')

        start = decode_date(m.group('start'), m.group('start_time'))
        end = decode_date(m.group('end'), m.group('end_time'))
    except ValueError as e:
        raise TzdbErr(f'Invalid TZ string "{tzstr}"', e)

    if dst_total == offset:
        return TailRule(offset, std_abbr)
    return TailRule(offset, std_abbr, dst_total - offset, dst_abbr, start, end)
