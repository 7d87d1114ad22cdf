#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

# tzregion - IANA time-zone regions and offset resolution

# Base types
from .Obj import Obj

# Errors
from .Err import (
    Err, ArgErr, IOErr, TzdbErr, DateTimeErr,
    MalformedIdentifierErr, UnknownRegionErr, ParseErr, UnsupportedRangeErr,
)

# Environment
from .Env import Env
from .Log import Log, LogLevel, LogRec

# Rules
from .RuleTable import DstTime, TailRule, Transition, RuleTable
from .CountryIndex import CountryIndex
from .ZoneCatalog import CatalogEntry, Canonical, Alias, ZoneCatalog
from .TzdbSource import TzdbSource

# Regions
from .TimeZoneRegion import TimeZoneRegion, ZoneOffset
