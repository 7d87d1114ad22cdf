#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import re

from .Err import MalformedIdentifierErr, UnknownRegionErr

# Segments of [A-Za-z0-9_+-] separated by single slashes
_ID_RE = re.compile(r'[A-Za-z0-9_+\-]+(?:/[A-Za-z0-9_+\-]+)*')

# Fixed-offset notations such as Z, +01, -0130 or +01:00
_OFFSET_RE = re.compile(r'[Zz]|[+\-]\d.*')


def is_valid_syntax(id):
    """True if id matches the zone identifier grammar"""
    if not isinstance(id, str) or not id:
        return False
    if _OFFSET_RE.fullmatch(id):
        return False
    return _ID_RE.fullmatch(id) is not None


def check_syntax(id):
    """Raise MalformedIdentifierErr unless id is a well formed zone id"""
    if not is_valid_syntax(id):
        raise MalformedIdentifierErr.make_id(id)
    return id


def check_exists(id, catalog=None):
    """Raise UnknownRegionErr unless the catalog has an entry for id.

    Performs no syntax check; malformed ids are simply never cataloged.
    """
    if catalog is None:
        from .ZoneCatalog import ZoneCatalog
        catalog = ZoneCatalog.cur()
    if not isinstance(id, str) or not catalog.contains(id):
        raise UnknownRegionErr.make_id(id)
    return id


def validate(id, catalog=None):
    """Syntax check then existence check; the syntax failure wins"""
    check_syntax(id)
    return check_exists(id, catalog)
