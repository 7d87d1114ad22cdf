#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from datetime import datetime, timezone
import zoneinfo

from . import IdentifierValidator
from . import OffsetResolver
from .Err import ArgErr, DateTimeErr, ParseErr, UnknownRegionErr
from .Obj import Obj
from .ZoneCatalog import ZoneCatalog

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_epoch_seconds(instant):
    """Epoch seconds from an int or an aware datetime (floored to whole seconds)"""
    if isinstance(instant, bool):
        raise ArgErr(f"Not an instant: {instant!r}")
    if isinstance(instant, int):
        return instant
    if isinstance(instant, datetime):
        if instant.tzinfo is None or instant.utcoffset() is None:
            raise ArgErr(f"Naive datetime has no instant: {instant}")
        delta = instant - _EPOCH
        return delta.days * 86400 + delta.seconds
    raise ArgErr(f"Not an instant: {type(instant).__name__}")


class ZoneOffset(Obj):
    """(zone id, offset, abbreviation) in force at an instant"""

    def __init__(self, zone_id, offset, abbr, dst, since=None):
        self._zone_id = zone_id
        self._offset = offset
        self._abbr = abbr
        self._dst = dst
        self._since = since

    def zone_id(self):
        return self._zone_id

    def offset(self):
        """Whole seconds east of UTC"""
        return self._offset

    def abbr(self):
        return self._abbr

    def dst(self):
        return self._dst

    def since(self):
        """Instant the offset took effect, None before the earliest record"""
        return self._since

    def is_immutable(self):
        return True

    def _key(self):
        return (self._zone_id, self._offset, self._abbr, self._dst, self._since)

    def __eq__(self, other):
        return isinstance(other, ZoneOffset) and self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def to_str(self):
        sign = '-' if self._offset < 0 else '+'
        secs = abs(self._offset)
        s = f"{self._zone_id} {sign}{secs // 3600:02d}:{secs // 60 % 60:02d}"
        if secs % 60:
            s += f":{secs % 60:02d}"
        return f"{s} {self._abbr}"


class TimeZoneRegion(Obj):
    """TimeZoneRegion is a geographic time zone identified by an IANA id.

    The id is kept exactly as given; aliases are resolved when rules are
    looked up, so US/Alaska and America/Anchorage are distinct values with
    identical offsets.
    """

    def __init__(self, id, catalog=None):
        self._id = id
        self._catalog = catalog

    @staticmethod
    def of(id, catalog=None):
        """Region for a known id.

        Raises MalformedIdentifierErr if id is not a well formed zone id and
        UnknownRegionErr if it is well formed but not in the catalog.
        """
        IdentifierValidator.validate(id, catalog)
        return TimeZoneRegion(id, catalog)

    @staticmethod
    def parse(text, catalog=None):
        """Region parsed from text; any failure is raised as ParseErr"""
        try:
            return TimeZoneRegion.of(text, catalog)
        except DateTimeErr as e:
            raise ParseErr.make_str("time-zone region", text, e)

    @staticmethod
    def from_str(text, checked=True):
        """Find region by id, returning None if not checked and invalid"""
        try:
            return TimeZoneRegion.parse(text)
        except ParseErr:
            if checked:
                raise
            return None

    @staticmethod
    def utc():
        """The UTC region"""
        return TimeZoneRegion.of("UTC")

    @staticmethod
    def all_identifiers(include_obsolete=False):
        """Every known zone id, obsolete ones only when asked"""
        return ZoneCatalog.cur().all_identifiers(include_obsolete)

    @staticmethod
    def identifiers_for_country(code):
        """Zone ids for an ISO 3166 alpha-2 code in the database's order"""
        return ZoneCatalog.cur().identifiers_for_country(code)

    def id(self):
        return self._id

    def catalog(self):
        """Catalog this region was validated against, else the shared one"""
        return self._catalog if self._catalog is not None else ZoneCatalog.cur()

    def canonical_id(self):
        return self.catalog().resolve_canonical(self._id)

    def is_obsolete(self):
        return self.catalog().is_obsolete(self._id)

    def _table(self):
        return self.catalog().table(self._id)

    def lookup(self, instant):
        """ZoneOffset in force at instant (epoch seconds or aware datetime)"""
        info = OffsetResolver.resolve(self._table(), to_epoch_seconds(instant))
        return ZoneOffset(self._id, info.offset, info.abbr, info.dst, info.instant)

    def offset(self, instant):
        """UTC offset in whole seconds at instant"""
        return OffsetResolver.resolve_offset(self._table(), to_epoch_seconds(instant))

    def abbr(self, instant):
        return self.lookup(instant).abbr()

    def is_dst(self, instant):
        return self.lookup(instant).dst()

    def std_offset(self, year):
        """Standard offset in seconds during year"""
        return OffsetResolver.std_offset(self._table(), year)

    def dst_offset(self, year):
        """Daylight savings delta in seconds during year, None if no DST"""
        return OffsetResolver.dst_offset(self._table(), year)

    def std_abbr(self, year):
        """Standard abbreviation like 'EST'"""
        return OffsetResolver.std_abbr(self._table(), year)

    def dst_abbr(self, year):
        """Daylight savings abbreviation like 'EDT', None if no DST"""
        return OffsetResolver.dst_abbr(self._table(), year)

    def to_native(self):
        """zoneinfo.ZoneInfo for this region"""
        try:
            return zoneinfo.ZoneInfo(self._id)
        except zoneinfo.ZoneInfoNotFoundError as e:
            raise UnknownRegionErr(f"No platform time zone for {self._id}", e)

    def to_str(self):
        return self._id

    def __repr__(self):
        return f"TimeZoneRegion({self._id!r})"

    def is_immutable(self):
        return True

    def is_equal_to(self, that):
        return isinstance(that, TimeZoneRegion) and self._id == that._id

    def equals(self, that):
        return self.is_equal_to(that)

    def __eq__(self, other):
        return self.is_equal_to(other)

    def __hash__(self):
        return hash(self._id)
