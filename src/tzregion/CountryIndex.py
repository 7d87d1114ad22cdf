#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from types import MappingProxyType

from .Obj import Obj


class CountryIndex(Obj):
    """Maps ISO 3166 alpha-2 codes to zone ids in the source's declared order."""

    _empty = None

    def __init__(self, table=None):
        index = {}
        for code, ids in (table or {}).items():
            index[code] = tuple(dict.fromkeys(ids))
        self._index = MappingProxyType(index)

    @staticmethod
    def empty():
        if CountryIndex._empty is None:
            CountryIndex._empty = CountryIndex()
        return CountryIndex._empty

    @staticmethod
    def from_tab(text):
        """Parse zone.tab or zone1970.tab text.

        Columns are tab separated: codes, coordinates, zone id, comments.
        zone1970.tab lists several comma separated codes per zone.
        """
        table = {}
        for line in text.splitlines():
            if not line.strip() or line.startswith('#'):
                continue
            parts = line.split('\t')
            if len(parts) < 3:
                from .Err import TzdbErr
                raise TzdbErr(f"Invalid country table line: {line!r}")
            zone_id = parts[2].strip()
            for code in parts[0].split(','):
                table.setdefault(code.strip(), []).append(zone_id)
        return CountryIndex(table)

    def identifiers_for_country(self, code):
        """Zone ids for the country, empty for unknown codes"""
        return self._index.get(code, ())

    def countries(self):
        return tuple(sorted(self._index))

    def zone_ids(self):
        """Every zone id in the index, in first-seen order"""
        seen = {}
        for ids in self._index.values():
            for zone_id in ids:
                seen[zone_id] = None
        return tuple(seen)

    def restrict(self, known):
        """Copy keeping only zone ids in known"""
        return CountryIndex({code: [i for i in ids if i in known] for code, ids in self._index.items()})

    def size(self):
        return len(self._index)

    def is_immutable(self):
        return True

    def to_str(self):
        return f"CountryIndex({len(self._index)} countries)"
