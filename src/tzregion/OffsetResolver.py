#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import calendar
from bisect import bisect_right
from datetime import date

from .Err import UnsupportedRangeErr


# 0001-01-01T00:00:00Z and 10000-01-01T00:00:00Z as epoch seconds
MIN_INSTANT = -62135596800
MAX_INSTANT = 253402300800

_EPOCH_ORDINAL = date(1970, 1, 1).toordinal()
_SECS_PER_DAY = 86400


def check_range(instant):
    """Raise UnsupportedRangeErr unless instant lies in years 1 through 9999"""
    if instant < MIN_INSTANT or instant >= MAX_INSTANT:
        raise UnsupportedRangeErr(f"Instant out of supported range: {instant}")
    return instant


def _year_of(secs):
    """Calendar year of the local seconds value, clamped to 1..9999"""
    ordinal = _EPOCH_ORDINAL + secs // _SECS_PER_DAY
    if ordinal < 1:
        return 1
    if ordinal > date.max.toordinal():
        return 9999
    return date.fromordinal(ordinal).year


# ========================================================================
# DST Transition Calculator
# ========================================================================

def _py_weekday(weekday_ord):
    """Python uses Mon=0, Sun=6; rules use Sun=0, Sat=6"""
    return (weekday_ord - 1) % 7


def _weekday_in_month(year, month_ord, weekday_ord, count):
    """Get the first (count=1) or last (count=-1) occurrence of weekday in month.

    Args:
        year: year
        month_ord: month ordinal (0-11, 0=Jan)
        weekday_ord: weekday ordinal (0-6, 0=Sun)
        count: 1=first, -1=last

    Returns:
        day of month (1-31)
    """
    month = month_ord + 1
    target = _py_weekday(weekday_ord)
    if count == -1:
        _, last = calendar.monthrange(year, month)
        return last - (calendar.weekday(year, month, last) - target) % 7
    return 1 + (target - calendar.weekday(year, month, 1)) % 7


def _rule_date_ordinal(x, year):
    """Proleptic Gregorian ordinal of the day a DstTime falls on in year"""
    if x.on_mode == 'n':
        return date(year, 1, 1).toordinal() + x.on_day

    month = x.mon + 1

    if x.on_mode == 'd':
        return date(year, month, x.on_day).toordinal()

    if x.on_mode == 'l':
        return date(year, month, _weekday_in_month(year, x.mon, x.on_weekday, -1)).toordinal()

    # Anchor day may be past the end of the month, the weekday may then roll into the next one
    _, days = calendar.monthrange(year, month)
    anchor = date(year, month, min(x.on_day, days)).toordinal() + max(0, x.on_day - days)
    anchor_weekday = anchor % 7  # ordinal 1 (0001-01-01) is a Monday, Sun=0
    if x.on_mode == '>':
        return anchor + (x.on_weekday - anchor_weekday) % 7
    return anchor - (anchor_weekday - x.on_weekday) % 7


def transition_instant(x, year, std_offset, offset_before):
    """Epoch instant at which DstTime x occurs in year.

    Wall times are interpreted in offset_before, the offset in force just
    before the transition; standard times in std_offset.
    """
    local = (_rule_date_ordinal(x, year) - _EPOCH_ORDINAL) * _SECS_PER_DAY + x.at_time
    if x.at_mode == 'u':
        return local
    if x.at_mode == 's':
        return local - std_offset
    return local - offset_before


def year_transitions(rule, year):
    """DST (start, end) instants of a tail rule for the given year"""
    start = transition_instant(rule.dst_start, year, rule.offset, rule.offset)
    end = transition_instant(rule.dst_end, year, rule.offset, rule.offset + rule.dst_offset)
    return start, end


def resolve_tail(rule, instant):
    """Evaluate a tail rule at instant.

    Returns a Transition stamped with the instant the resulting period
    began, or with None when the rule has no DST.
    """
    std = rule.std()
    if not rule.has_dst():
        return std
    dst = rule.dst()

    year = _year_of(instant + rule.offset)
    candidates = []
    for y in (year - 1, year):
        if y < 1:
            continue
        start, end = year_transitions(rule, y)
        candidates.append((start, dst))
        candidates.append((end, std))
    candidates.sort(key=lambda c: c[0])

    best = None
    for at, info in candidates:
        if at <= instant:
            best = (at, info)
        else:
            break

    if best is None:
        # Before the first computable transition: the opposite of what comes next
        first = candidates[0][1]
        return std if first.dst else dst
    return best[1].since(best[0])


# ========================================================================
# Point-in-time lookup
# ========================================================================

def resolve(table, instant):
    """Resolve the Transition in force at instant (epoch seconds)."""
    check_range(instant)

    transitions = table.transitions()
    tail = table.tail()

    i = bisect_right(table.instants(), instant) - 1
    if i < 0:
        if not transitions and tail is not None:
            return resolve_tail(tail, instant)
        return table.initial()

    last = transitions[i]
    if i == len(transitions) - 1 and tail is not None and instant > last.instant:
        info = resolve_tail(tail, instant)
        if info.instant is None or info.instant < last.instant:
            return info.since(last.instant)
        return info
    return last


def resolve_offset(table, instant):
    """Whole-second UTC offset in force at instant"""
    return resolve(table, instant).offset


# ========================================================================
# Yearly views
# ========================================================================

def _probe(table, year):
    """Transitions in force at noon UTC on 1 January and 1 July of year"""
    jan = (date(year, 1, 1).toordinal() - _EPOCH_ORDINAL) * _SECS_PER_DAY + 43200
    jul = (date(year, 7, 1).toordinal() - _EPOCH_ORDINAL) * _SECS_PER_DAY + 43200
    return resolve(table, jan), resolve(table, jul)


def _std_dst(table, year):
    jan, jul = _probe(table, year)
    if jan.dst and not jul.dst:
        return jul, jan
    if jul.dst and not jan.dst:
        return jan, jul
    if jan.dst and jul.dst:
        return None, jan
    return jan, None


def std_offset(table, year):
    """Standard offset in seconds during year"""
    std, dst = _std_dst(table, year)
    if std is not None:
        return std.offset
    tail = table.tail()
    if tail is not None:
        return tail.offset
    return dst.offset


def dst_offset(table, year):
    """Daylight delta in seconds during year, None if no DST was observed"""
    std, dst = _std_dst(table, year)
    if dst is None:
        return None
    return dst.offset - std_offset(table, year)


def std_abbr(table, year):
    std, dst = _std_dst(table, year)
    if std is not None:
        return std.abbr
    tail = table.tail()
    return tail.std_abbr if tail is not None else dst.abbr


def dst_abbr(table, year):
    _, dst = _std_dst(table, year)
    return dst.abbr if dst is not None else None
