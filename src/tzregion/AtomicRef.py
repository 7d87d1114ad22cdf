#
# AtomicRef
# Atomic reference used to publish immutable catalog snapshots
#

import threading
from .Obj import Obj


class AtomicRef(Obj):
    """AtomicRef provides atomic operations on an object reference.

    Values must be immutable. Attempting to store a mutable object
    will raise ArgErr.
    """

    # Sentinel to distinguish getter call from setter call with None
    _UNSET = object()

    def __init__(self, val=None):
        self._lock = threading.Lock()
        self._check_immutable(val)
        self.__val = val

    def _check_immutable(self, val):
        if val is None:
            return
        if isinstance(val, (str, int, float, bool, tuple, frozenset)):
            return
        if hasattr(val, 'is_immutable') and not val.is_immutable():
            from .Err import ArgErr
            raise ArgErr(f"AtomicRef value must be immutable: {type(val).__name__}")

    def val(self, new_val=_UNSET):
        """Getter/setter: ref.val() to get, ref.val(x) to set."""
        if new_val is AtomicRef._UNSET:
            with self._lock:
                return self.__val
        self._check_immutable(new_val)
        with self._lock:
            self.__val = new_val

    def get_and_set(self, val):
        """Atomically set to the given value and return the old value."""
        self._check_immutable(val)
        with self._lock:
            old = self.__val
            self.__val = val
            return old

    def compare_and_set(self, expect, update):
        """Atomically set to update if current value is expect."""
        self._check_immutable(update)
        with self._lock:
            if self.__val is expect:
                self.__val = update
                return True
            return False

    def to_str(self):
        val = self.val()
        if val is None:
            return "null"
        return str(val)
