#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class Err(Exception, Obj):
    """Base error class"""

    def __init__(self, msg=None, cause=None):
        Exception.__init__(self, msg)
        self._msg = msg
        self._cause = cause
        if cause is not None:
            self.__cause__ = cause

    def msg(self):
        return self._msg if self._msg is not None else ""

    def cause(self):
        return self._cause

    def to_str(self):
        name = type(self).__name__
        if self._msg:
            return f"{name}: {self._msg}"
        return name

    def is_immutable(self):
        """Err objects are always immutable"""
        return True

    def __str__(self):
        return self.to_str()


class ArgErr(Err):
    """Argument error"""
    pass


class IOErr(Err):
    """I/O error"""
    pass


class TzdbErr(Err):
    """Time-zone database content could not be decoded or indexed"""
    pass


class DateTimeErr(Err):
    """Base of every date-time domain failure"""
    pass


class MalformedIdentifierErr(DateTimeErr):
    """Zone identifier does not match the Area/Location grammar"""

    @staticmethod
    def make_id(zone_id):
        return MalformedIdentifierErr(f"Invalid time-zone region id: '{zone_id}'")


class UnknownRegionErr(DateTimeErr):
    """Zone identifier is well formed but not in the catalog"""

    @staticmethod
    def make_id(zone_id):
        return UnknownRegionErr(f"Unknown time-zone region: '{zone_id}'")


class ParseErr(DateTimeErr):
    """Parse error"""

    @staticmethod
    def make_str(type_name, s, cause=None):
        return ParseErr(f"Invalid {type_name}: '{s}'", cause)


class UnsupportedRangeErr(DateTimeErr):
    """Instant lies outside the modeled range of years 1 to 9999"""
    pass
