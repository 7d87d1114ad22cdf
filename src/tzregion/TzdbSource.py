#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

"""
Load a ZoneCatalog from a compiled zoneinfo tree.

The tree is either the 'tzdata' distribution (tzdata/zoneinfo) or a
directory named by the tzdb.dir config key, such as /usr/share/zoneinfo.
"""

import importlib.resources
import time
from importlib import metadata
from pathlib import Path

from .CountryIndex import CountryIndex
from .Env import Env
from .Err import IOErr, TzdbErr
from .Log import Log, LogLevel
from .Obj import Obj
from .RuleTable import RuleTable
from .TzifReader import is_tzif, read_tzif
from .ZoneCatalog import Alias, Canonical, ZoneCatalog

UTC_ID = "UTC"

# Directories and files in system trees that duplicate or shadow real zones
_SKIP_DIRS = {"posix", "right"}
_SKIP_FILES = {"posixrules", "localtime"}


class TzdbSource(Obj):
    """Reads TZif files and the country table from a zoneinfo tree"""

    _log = Log.get("tzregion.tzdb")

    def __init__(self, root, country_table="zone.tab", version=None):
        self._root = root
        self._country_table = country_table
        self._version = version

    @staticmethod
    def from_package(package="tzdata", country_table="zone.tab"):
        """Source reading the zoneinfo tree shipped inside an installed package"""
        try:
            root = importlib.resources.files(package).joinpath("zoneinfo")
        except ModuleNotFoundError as e:
            raise IOErr(f"Time-zone database package not installed: {package}", e)
        try:
            version = metadata.version(package)
        except metadata.PackageNotFoundError:
            version = None
        return TzdbSource(root, country_table, version)

    @staticmethod
    def from_dir(path, country_table="zone.tab"):
        """Source reading a zoneinfo directory such as /usr/share/zoneinfo"""
        root = Path(path)
        if not root.is_dir():
            raise IOErr(f"Not a zoneinfo directory: {path}")
        version = None
        tzdata_zi = root / "tzdata.zi"
        if tzdata_zi.is_file():
            with tzdata_zi.open("r", encoding="ascii", errors="replace") as f:
                first = f.readline().split()
            if first[:2] == ["#", "version"] and len(first) > 2:
                version = first[2]
        return TzdbSource(root, country_table, version)

    @staticmethod
    def from_config(env=None):
        """Source selected by the tzdb.dir and tzdb.countryTable config keys"""
        env = env or Env.cur()

        level = env.config("log.level")
        if level:
            level = LogLevel.from_str(level)
            Log.get("tzregion").level(level)
            TzdbSource._log.level(level)

        country_table = env.config("tzdb.countryTable", "zone.tab")
        path = env.config("tzdb.dir")
        if path:
            return TzdbSource.from_dir(path, country_table)
        return TzdbSource.from_package("tzdata", country_table)

    def root(self):
        return self._root

    def version(self):
        return self._version

    # ------------------------------------------------------------------
    # Raw data
    # ------------------------------------------------------------------

    def read_zones(self):
        """Map of zone id to raw TZif bytes for every TZif file in the tree"""
        zones = {}
        self._walk(self._root, "", zones)
        return zones

    def _walk(self, node, prefix, zones):
        for child in sorted(node.iterdir(), key=lambda c: c.name):
            name = child.name
            if name.startswith(("_", ".")):
                continue
            if child.is_dir():
                if not prefix and name in _SKIP_DIRS:
                    continue
                self._walk(child, prefix + name + "/", zones)
                continue
            if name in _SKIP_FILES:
                continue
            data = child.read_bytes()
            if not is_tzif(data):
                self._log.debug(f"Skipping non-TZif file {prefix}{name}")
                continue
            zones[prefix + name] = data

    def read_countries(self):
        """CountryIndex parsed from the country table file"""
        table = self._root.joinpath(self._country_table)
        if not table.is_file():
            raise TzdbErr(f"Country table {self._country_table} not found in {self._root}")
        return CountryIndex.from_tab(table.read_text(encoding="utf-8"))

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def load(self):
        """Build a ZoneCatalog.

        Zones listed in the country table plus UTC are canonical. Every other
        zone is obsolete: an Alias of the first canonical zone with identical
        TZif bytes, otherwise a Canonical with its own table.
        """
        t0 = time.perf_counter()
        raw = self.read_zones()
        countries = self.read_countries()

        canonical_ids = []
        for zone_id in countries.zone_ids():
            if zone_id in raw:
                canonical_ids.append(zone_id)
            else:
                self._log.warn(f"Country table zone has no TZif file: {zone_id}")
        if UTC_ID not in canonical_ids:
            canonical_ids.append(UTC_ID)
        canonical_ids.sort()
        countries = countries.restrict(set(canonical_ids))

        entries = []
        by_bytes = {}
        for zone_id in canonical_ids:
            data = raw.get(zone_id)
            if data is None:
                table = RuleTable.fixed(0, UTC_ID)
            else:
                table = read_tzif(data, zone_id)
                by_bytes.setdefault(data, zone_id)
            entries.append(Canonical(zone_id, table))

        known = set(canonical_ids)
        alias_count = 0
        for zone_id in sorted(raw):
            if zone_id in known:
                continue
            data = raw[zone_id]
            target = by_bytes.get(data)
            if target is not None:
                entries.append(Alias(zone_id, target, obsolete=True))
                alias_count += 1
                continue
            try:
                table = read_tzif(data, zone_id)
            except TzdbErr as e:
                self._log.warn(f"Skipping undecodable zone {zone_id}", e)
                continue
            entries.append(Canonical(zone_id, table, obsolete=True))

        catalog = ZoneCatalog(entries, countries, self._version)
        self._log.info(
            f"Loaded tzdb {self._version or 'unknown'} from {self._root}: "
            f"{len(canonical_ids)} canonical, {alias_count} aliases, "
            f"{len(entries) - len(canonical_ids) - alias_count} obsolete zones, "
            f"{countries.size()} countries in {(time.perf_counter() - t0) * 1000:.0f}ms")
        return catalog
