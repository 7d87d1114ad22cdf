import struct

import pytest

from tzregion import (
    Alias,
    Canonical,
    CountryIndex,
    RuleTable,
    Transition,
    ZoneCatalog,
)
from tzregion.PosixTz import decode_tzstr

# London-like history: LMT until 1847, then GMT with BST in 1996 and a tail rule
LONDON_TYPES = [(-75, 0, "LMT"), (0, 0, "GMT"), (3600, 1, "BST")]
LONDON_TIMES = [-3852662325, 828234000, 846378000]
LONDON_INDICES = [1, 2, 1]
LONDON_FOOTER = "GMT0BST,M3.5.0/1,M10.5.0"


def build_tzif(times, indices, types, footer="", version=b"2"):
    """Encode a TZif file; v2+ files get an empty v1 block like zic -b slim writes"""
    chars = b""
    desig = []
    for _, _, abbr in types:
        desig.append(len(chars))
        chars += abbr.encode("ascii") + b"\0"

    def header(ver, timecnt, typecnt, charcnt):
        return b"TZif" + ver + b"\0" * 15 + struct.pack(">6L", 0, 0, 0, timecnt, typecnt, charcnt)

    def block(time_fmt):
        out = b"".join(struct.pack(">" + time_fmt, t) for t in times)
        out += bytes(indices)
        out += b"".join(struct.pack(">lBB", utoff, isdst, d) for (utoff, isdst, _), d in zip(types, desig))
        return out + chars

    if version == b"\0":
        return header(version, len(times), len(types), len(chars)) + block("l")

    v1 = header(version, 0, 1, 1) + struct.pack(">lBB", 0, 0, 0) + b"\0"
    v2 = header(version, len(times), len(types), len(chars)) + block("q")
    return v1 + v2 + b"\n" + footer.encode("ascii") + b"\n"


@pytest.fixture
def london_tzif():
    return build_tzif(LONDON_TIMES, LONDON_INDICES, LONDON_TYPES, LONDON_FOOTER)


@pytest.fixture
def london_table():
    transitions = []
    for t, i in zip(LONDON_TIMES, LONDON_INDICES):
        utoff, isdst, abbr = LONDON_TYPES[i]
        transitions.append(Transition(t, utoff, abbr, isdst))
    return RuleTable(transitions, Transition(None, -75, "LMT", False), decode_tzstr(LONDON_FOOTER))


@pytest.fixture
def mini_catalog(london_table):
    return ZoneCatalog(
        [
            Canonical("UTC", RuleTable.fixed(0, "UTC")),
            Canonical("Europe/London", london_table),
            Alias("GB", "Europe/London", obsolete=True),
            Alias("Etc/UTC", "UTC", obsolete=True),
            Canonical("Etc/GMT+5", RuleTable.fixed(-18000, "-05"), obsolete=True),
        ],
        CountryIndex({"GB": ["Europe/London"]}),
        "test",
    )


@pytest.fixture
def restore_catalog():
    """Put the shared catalog back the way the test found it"""
    saved = ZoneCatalog.reset()
    yield
    if saved is None:
        ZoneCatalog.reset()
    else:
        ZoneCatalog.swap(saved)


@pytest.fixture
def shared_mini_catalog(mini_catalog, restore_catalog):
    ZoneCatalog.swap(mini_catalog)
    return mini_catalog
