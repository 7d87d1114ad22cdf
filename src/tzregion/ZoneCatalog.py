#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import threading
from types import MappingProxyType

from .AtomicRef import AtomicRef
from .CountryIndex import CountryIndex
from .Err import TzdbErr, UnknownRegionErr
from .Log import Log
from .Obj import Obj


# ========================================================================
# Catalog Entries
# ========================================================================

class CatalogEntry(Obj):
    """Either a Canonical zone owning a RuleTable or an Alias of one"""

    def __init__(self, id, obsolete=False):
        self._id = id
        self._obsolete = bool(obsolete)

    def id(self):
        return self._id

    def is_obsolete(self):
        return self._obsolete

    def is_alias(self):
        return False

    def is_immutable(self):
        return True

    def to_str(self):
        return self._id


class Canonical(CatalogEntry):
    """Zone id that owns its rule table"""

    def __init__(self, id, table, obsolete=False):
        super().__init__(id, obsolete)
        self._table = table

    def table(self):
        return self._table

    def canonical_id(self):
        return self._id

    def __repr__(self):
        return f"Canonical({self._id!r}{', obsolete' if self._obsolete else ''})"


class Alias(CatalogEntry):
    """Zone id redirecting to a canonical id"""

    def __init__(self, id, target, obsolete=True):
        super().__init__(id, obsolete)
        self._target = target

    def target(self):
        return self._target

    def canonical_id(self):
        return self._target

    def is_alias(self):
        return True

    def __repr__(self):
        return f"Alias({self._id!r} -> {self._target!r}{', obsolete' if self._obsolete else ''})"


# ========================================================================
# ZoneCatalog
# ========================================================================

class ZoneCatalog(Obj):
    """Immutable registry of canonical zones, aliases and the country index.

    A single catalog is shared process wide through cur(); it is built on
    first use and replaced only as a whole through swap().
    """

    _ref = AtomicRef()
    _lock = threading.Lock()
    _log = Log.get("tzregion")

    def __init__(self, entries, countries=None, version=None):
        by_id = {}
        for entry in entries:
            if entry.id() in by_id:
                raise TzdbErr(f"Duplicate zone id: {entry.id()}")
            by_id[entry.id()] = entry

        for entry in by_id.values():
            if not entry.is_alias():
                continue
            target = by_id.get(entry.target())
            if target is None:
                raise TzdbErr(f"Alias {entry.id()} points to unknown zone {entry.target()}")
            if target.is_alias():
                raise TzdbErr(f"Alias chain {entry.id()} -> {target.id()} -> {target.target()}")

        self._entries = MappingProxyType(by_id)
        self._all = tuple(sorted(by_id))
        self._current = tuple(i for i in self._all if not by_id[i].is_obsolete())
        self._countries = countries if countries is not None else CountryIndex.empty()
        self._version = version

    # ------------------------------------------------------------------
    # Process-wide instance
    # ------------------------------------------------------------------

    @staticmethod
    def cur():
        """The shared catalog, loading it from the configured source on first use"""
        catalog = ZoneCatalog._ref.val()
        if catalog is not None:
            return catalog

        with ZoneCatalog._lock:
            catalog = ZoneCatalog._ref.val()
            if catalog is None:
                from .TzdbSource import TzdbSource
                catalog = TzdbSource.from_config().load()
                ZoneCatalog._ref.val(catalog)
        return catalog

    @staticmethod
    def swap(catalog):
        """Atomically replace the shared catalog, returning the previous one"""
        if not isinstance(catalog, ZoneCatalog):
            from .Err import ArgErr
            raise ArgErr(f"Expected ZoneCatalog, not {type(catalog).__name__}")
        with ZoneCatalog._lock:
            old = ZoneCatalog._ref.get_and_set(catalog)
        ZoneCatalog._log.info(f"Swapped zone catalog {old} for {catalog}")
        return old

    @staticmethod
    def reset():
        """Drop the shared catalog so the next cur() reloads it"""
        with ZoneCatalog._lock:
            return ZoneCatalog._ref.get_and_set(None)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup(self, id, checked=True):
        """Exact match lookup of a CatalogEntry"""
        entry = self._entries.get(id)
        if entry is None and checked:
            raise UnknownRegionErr.make_id(id)
        return entry

    def contains(self, id):
        return id in self._entries

    def resolve_canonical(self, id):
        """Canonical id for id, following at most one alias hop"""
        return self.lookup(id).canonical_id()

    def table(self, id):
        """RuleTable for a canonical or alias id"""
        entry = self.lookup(id)
        if entry.is_alias():
            entry = self._entries[entry.target()]
        return entry.table()

    def is_obsolete(self, id):
        return self.lookup(id).is_obsolete()

    def all_identifiers(self, include_obsolete=False):
        """Sorted, duplicate-free zone ids; obsolete ones only when asked"""
        return self._all if include_obsolete else self._current

    def aliases_of(self, id):
        """Alias ids pointing at canonical id"""
        return tuple(i for i in self._all
                     if self._entries[i].is_alias() and self._entries[i].target() == id)

    def countries(self):
        return self._countries

    def identifiers_for_country(self, code):
        return self._countries.identifiers_for_country(code)

    def version(self):
        """Database version string, None if unknown"""
        return self._version

    def size(self):
        return len(self._entries)

    def is_immutable(self):
        return True

    def to_str(self):
        return f"ZoneCatalog(version={self._version}, {len(self._all)} zones)"
