#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj
from .Err import TzdbErr


# ========================================================================
# DST Rule Classes
# ========================================================================

class DstTime(Obj):
    """Represents a DST transition time (e.g., 'last Sunday of March at 2:00 AM').

    Fields:
        mon: month (0-11, 0=Jan)
        on_mode: 'd'=specific day, 'l'=last weekday, '>'=weekday on or after,
                 '<'=weekday on or before, 'n'=zero-based day of year (Feb 29 counted)
        on_weekday: weekday (0-6, 0=Sun)
        on_day: day of month (1-31), or day of year (0-365) for 'n'
        at_time: seconds from local midnight, may be negative or past 24:00
        at_mode: 'w'=wall time, 's'=standard time, 'u'=UTC
    """

    MODES = ('d', 'l', '>', '<', 'n')
    AT_MODES = ('w', 's', 'u')

    def __init__(self, mon, on_mode, on_weekday, on_day, at_time, at_mode='w'):
        on_mode = chr(on_mode) if isinstance(on_mode, int) else on_mode
        at_mode = chr(at_mode) if isinstance(at_mode, int) else at_mode
        if on_mode not in DstTime.MODES:
            raise TzdbErr(f"Unknown on_mode: {on_mode!r}")
        if at_mode not in DstTime.AT_MODES:
            raise TzdbErr(f"Unknown at_mode: {at_mode!r}")
        if not 0 <= mon <= 11:
            raise TzdbErr(f"Month out of range: {mon}")
        if not 0 <= on_weekday <= 6:
            raise TzdbErr(f"Weekday out of range: {on_weekday}")
        self.mon = mon
        self.on_mode = on_mode
        self.on_weekday = on_weekday
        self.on_day = on_day
        self.at_time = at_time
        self.at_mode = at_mode

    def is_immutable(self):
        return True

    def equals(self, that):
        if not isinstance(that, DstTime):
            return False
        return (self.mon, self.on_mode, self.on_weekday, self.on_day, self.at_time, self.at_mode) == \
               (that.mon, that.on_mode, that.on_weekday, that.on_day, that.at_time, that.at_mode)

    def __eq__(self, other):
        return self.equals(other)

    def __hash__(self):
        return hash((self.mon, self.on_mode, self.on_weekday, self.on_day, self.at_time, self.at_mode))

    def to_str(self):
        return f"DstTime(mon={self.mon}, on={self.on_mode}{self.on_weekday}/{self.on_day}, at={self.at_time}{self.at_mode})"


class TailRule(Obj):
    """Periodic rule applied after the last explicit transition.

    Fields:
        offset: UTC offset in seconds (standard time)
        std_abbr: standard time abbreviation (e.g., 'GMT')
        dst_offset: DST delta in seconds added to offset (0 = no DST)
        dst_abbr: daylight time abbreviation (e.g., 'BST'), None if no DST
        dst_start: DstTime for DST start, None if no DST
        dst_end: DstTime for DST end, None if no DST
    """

    def __init__(self, offset, std_abbr, dst_offset=0, dst_abbr=None, dst_start=None, dst_end=None):
        if dst_offset != 0 and (dst_start is None or dst_end is None):
            raise TzdbErr(f"DST rule for {std_abbr} requires start and end times")
        self.offset = offset
        self.std_abbr = std_abbr
        self.dst_offset = dst_offset
        self.dst_abbr = dst_abbr if dst_offset != 0 else None
        self.dst_start = dst_start if dst_offset != 0 else None
        self.dst_end = dst_end if dst_offset != 0 else None

    def has_dst(self):
        return self.dst_start is not None

    def is_southern(self):
        """True if DST spans the new year (end month comes before start month)"""
        return self.has_dst() and self.dst_end.mon < self.dst_start.mon

    def std(self):
        """Transition-shaped info for standard time (instant unset)"""
        return Transition(None, self.offset, self.std_abbr, False)

    def dst(self):
        """Transition-shaped info for daylight time (instant unset), None if no DST"""
        if not self.has_dst():
            return None
        return Transition(None, self.offset + self.dst_offset, self.dst_abbr, True)

    def is_immutable(self):
        return True

    def to_str(self):
        if not self.has_dst():
            return f"TailRule({self.std_abbr} {self.offset})"
        return f"TailRule({self.std_abbr} {self.offset} / {self.dst_abbr} +{self.dst_offset})"


class Transition(Obj):
    """One (instant, offset, abbr, dst) entry; instant is None for the pre-history default"""

    def __init__(self, instant, offset, abbr, dst=False):
        self.instant = instant
        self.offset = offset
        self.abbr = abbr
        self.dst = bool(dst)

    def since(self, instant):
        """Copy of this info stamped with the instant it took effect"""
        return Transition(instant, self.offset, self.abbr, self.dst)

    def is_immutable(self):
        return True

    def equals(self, that):
        if not isinstance(that, Transition):
            return False
        return (self.instant, self.offset, self.abbr, self.dst) == (that.instant, that.offset, that.abbr, that.dst)

    def __eq__(self, other):
        return self.equals(other)

    def __hash__(self):
        return hash((self.instant, self.offset, self.abbr, self.dst))

    def to_str(self):
        return f"{self.instant}: {self.offset} {self.abbr}{' dst' if self.dst else ''}"

    def __repr__(self):
        return f"Transition({self.to_str()})"


class RuleTable(Obj):
    """Compiled offset history for a single canonical zone.

    transitions are strictly increasing by instant. initial applies before
    the first transition; tail applies after the last one.
    """

    def __init__(self, transitions, initial, tail=None):
        transitions = tuple(transitions)
        for prev, cur in zip(transitions, transitions[1:]):
            if cur.instant <= prev.instant:
                raise TzdbErr(f"Transitions not strictly increasing at {cur.instant}")
        if initial is None:
            if transitions:
                initial = transitions[0].since(None)
            elif tail is not None:
                initial = tail.std()
            else:
                raise TzdbErr("Rule table requires an initial offset, a transition or a tail rule")
        self._transitions = transitions
        self._instants = tuple(t.instant for t in transitions)
        self._initial = initial
        self._tail = tail

    @staticmethod
    def fixed(offset, abbr):
        """Table for a zone that never changes offset"""
        return RuleTable((), Transition(None, offset, abbr, False))

    def transitions(self):
        return self._transitions

    def instants(self):
        return self._instants

    def initial(self):
        return self._initial

    def tail(self):
        return self._tail

    def size(self):
        return len(self._transitions)

    def is_immutable(self):
        return True

    def to_str(self):
        return f"RuleTable({len(self._transitions)} transitions, tail={self._tail})"
