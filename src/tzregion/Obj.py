#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

class Obj:
    """Base class for tzregion value objects"""

    def equals(self, that):
        return self is that

    def compare(self, that):
        """Compare this object to that: -1, 0 or 1.

        Falls back to comparing to_str() when not equal.
        """
        if self is that or self.equals(that):
            return 0
        if that is None:
            return 1
        my_str, that_str = str(self), str(that)
        return (my_str > that_str) - (my_str < that_str)

    def __lt__(self, other):
        return self.compare(other) < 0

    def __le__(self, other):
        return self.compare(other) <= 0

    def __gt__(self, other):
        return self.compare(other) > 0

    def __ge__(self, other):
        return self.compare(other) >= 0

    def to_str(self):
        return f"{type(self).__name__}@{id(self):x}"

    def is_immutable(self):
        """Value types override this to return True"""
        return False

    def __str__(self):
        return self.to_str()
