#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

"""
Decode TZif files (RFC 8536, versions 1 through 4) into RuleTables.

TZif files are compiled from the IANA database sources by zic. Each holds
the transition times of one zone plus, from version 2, a POSIX TZ string
footer that describes transitions beyond the last listed one.
"""

from .Err import TzdbErr
from .PosixTz import decode_tzstr
from .RuleTable import RuleTable, Transition
from .TzBuf import TzBuf

MAGIC = b'TZif'


class TzifHeader:
    """Counts from a TZif header"""

    def __init__(self, buf):
        magic = buf.read_bytes(4)
        if magic != MAGIC:
            raise TzdbErr(f"Not a TZif file, got magic {magic!r}")
        ver = buf.read()
        self.version = 1 if ver == 0 else ver - ord('0')
        buf.skip(15)
        self.isutcnt = buf.read_u4()
        self.isstdcnt = buf.read_u4()
        self.leapcnt = buf.read_u4()
        self.timecnt = buf.read_u4()
        self.typecnt = buf.read_u4()
        self.charcnt = buf.read_u4()
        if self.typecnt == 0 or self.charcnt == 0:
            raise TzdbErr("TZif data block needs at least one local time type")
        if self.isutcnt not in (0, self.typecnt) or self.isstdcnt not in (0, self.typecnt):
            raise TzdbErr("TZif indicator counts do not match type count")

    def block_size(self, time_size):
        return (self.timecnt * time_size + self.timecnt + self.typecnt * 6 + self.charcnt
                + self.leapcnt * (time_size + 4) + self.isstdcnt + self.isutcnt)


def _read_block(buf, hdr, time_size):
    """Read one data block into (transitions, type0)"""
    read_time = buf.read_s8 if time_size == 8 else buf.read_s4
    times = [read_time() for _ in range(hdr.timecnt)]
    indices = [buf.read() for _ in range(hdr.timecnt)]
    types = []
    for _ in range(hdr.typecnt):
        utoff = buf.read_s4()
        isdst = buf.read()
        desigidx = buf.read()
        types.append((utoff, isdst, desigidx))
    chars = buf.read_bytes(hdr.charcnt)
    buf.skip(hdr.leapcnt * (time_size + 4) + hdr.isstdcnt + hdr.isutcnt)

    def info(i):
        utoff, isdst, desigidx = types[i]
        end = chars.find(b'\0', desigidx)
        if desigidx >= len(chars) or end < 0:
            raise TzdbErr(f"Bad abbreviation index {desigidx}")
        return utoff, chars[desigidx:end].decode('ascii'), bool(isdst)

    transitions = []
    for t, idx in zip(times, indices):
        if idx >= hdr.typecnt:
            raise TzdbErr(f"Transition type index {idx} out of range")
        if transitions and t <= transitions[-1].instant:
            raise TzdbErr(f"Transition times not ascending at {t}")
        transitions.append(Transition(t, *info(idx)))

    return transitions, Transition(None, *info(0))


def read_tzif(data, name=None):
    """Decode TZif bytes into a RuleTable"""
    try:
        buf = TzBuf(data)
        hdr = TzifHeader(buf)
        if hdr.version < 2:
            transitions, initial = _read_block(buf, hdr, 4)
            return RuleTable(transitions, initial)

        buf.skip(hdr.block_size(4))
        hdr = TzifHeader(buf)
        transitions, initial = _read_block(buf, hdr, 8)
        footer = buf.read_rest().decode('ascii').strip('\n')
        return RuleTable(transitions, initial, decode_tzstr(footer))
    except TzdbErr as e:
        if name is None:
            raise
        raise TzdbErr(f"{name}: {e.msg()}", e)
    except UnicodeDecodeError as e:
        raise TzdbErr(f"{name or 'TZif'}: non-ASCII text", e)


def is_tzif(data):
    return data[:4] == MAGIC
