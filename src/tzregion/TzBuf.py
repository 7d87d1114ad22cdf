#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import struct

from .Err import TzdbErr


class TzBuf:
    """Simple binary buffer reader for parsing TZif data.

    Format is big-endian. Methods:
    - read(): read 1 unsigned byte
    - read_s4(): read 4-byte signed integer
    - read_s8(): read 8-byte signed integer
    - read_u4(): read 4-byte unsigned integer
    - read_bytes(n): read n raw bytes
    """

    _S4 = struct.Struct('>i')
    _S8 = struct.Struct('>q')
    _U4 = struct.Struct('>I')

    def __init__(self, data):
        self._data = bytes(data)
        self._pos = 0

    def remaining(self):
        return len(self._data) - self._pos

    def _take(self, n):
        if n < 0 or self._pos + n > len(self._data):
            raise TzdbErr("Unexpected end of stream")
        start = self._pos
        self._pos += n
        return self._data[start:self._pos]

    def read(self):
        """Read 1 unsigned byte"""
        return self._take(1)[0]

    def read_s4(self):
        """Read 4-byte signed integer (big-endian)"""
        return TzBuf._S4.unpack(self._take(4))[0]

    def read_s8(self):
        """Read 8-byte signed integer (big-endian)"""
        return TzBuf._S8.unpack(self._take(8))[0]

    def read_u4(self):
        """Read 4-byte unsigned integer (big-endian)"""
        return TzBuf._U4.unpack(self._take(4))[0]

    def read_bytes(self, n):
        return self._take(n)

    def skip(self, n):
        self._take(n)

    def read_rest(self):
        """Read every remaining byte"""
        return self._take(self.remaining())
