#
# Log - Logging support for tzregion
#
import logging
from .Obj import Obj


class LogLevel(Obj):
    """
    LogLevel represents the severity of a log message.
    """

    _levels = {}

    def __init__(self, name, ordinal, py_level):
        self._name = name
        self._ordinal = ordinal
        self._py_level = py_level

    @staticmethod
    def from_str(name, checked=True):
        """Parse LogLevel from string"""
        name_lower = name.lower()
        if name_lower in LogLevel._levels:
            return LogLevel._levels[name_lower]
        if checked:
            from .Err import ParseErr
            raise ParseErr(f"Unknown log level: {name}")
        return None

    @staticmethod
    def vals():
        """Get all log level values"""
        return (LogLevel._debug, LogLevel._info, LogLevel._warn, LogLevel._err, LogLevel._silent)

    @staticmethod
    def debug():
        return LogLevel._debug

    @staticmethod
    def info():
        return LogLevel._info

    @staticmethod
    def warn():
        return LogLevel._warn

    @staticmethod
    def err():
        return LogLevel._err

    @staticmethod
    def silent():
        return LogLevel._silent

    def name(self):
        return self._name

    def to_str(self):
        return self._name

    def is_immutable(self):
        return True

    def compare(self, that):
        return (self._ordinal > that._ordinal) - (self._ordinal < that._ordinal)

    def __eq__(self, other):
        if not isinstance(other, LogLevel):
            return False
        return self._ordinal == other._ordinal

    def __hash__(self):
        return hash(self._ordinal)


LogLevel._debug = LogLevel("debug", 0, logging.DEBUG)
LogLevel._info = LogLevel("info", 1, logging.INFO)
LogLevel._warn = LogLevel("warn", 2, logging.WARNING)
LogLevel._err = LogLevel("err", 3, logging.ERROR)
LogLevel._silent = LogLevel("silent", 4, logging.CRITICAL + 10)

for _level in LogLevel.vals():
    LogLevel._levels[_level.name()] = _level


class LogRec(Obj):
    """
    LogRec represents a single log record.
    """

    def __init__(self, level, log_name, msg, err=None):
        self._level = level
        self._log_name = log_name
        self._msg = msg
        self._err = err

    def level(self):
        return self._level

    def msg(self):
        return self._msg

    def err(self):
        return self._err

    def to_str(self):
        return f"[{self._level.name()}] {self._log_name}: {self._msg}"


class Log(Obj):
    """
    Log routes tzregion diagnostics to the standard logging module.
    """

    _logs = {}
    _handlers = []

    def __init__(self, name, register=True):
        """Create a new log. If register=True, adds to global registry."""
        if not Log._is_valid_name(name):
            from .Err import ArgErr
            raise ArgErr(f"Invalid log name: {name}")

        if register and name in Log._logs:
            from .Err import ArgErr
            raise ArgErr(f"Log already registered: {name}")

        self._name = name
        self._level = LogLevel._info
        self._py_logger = logging.getLogger(name)

        if register:
            Log._logs[name] = self

    @staticmethod
    def _is_valid_name(name):
        """Validate log name - must be valid identifier characters"""
        if not name:
            return False
        for c in name:
            if not (c.isalnum() or c == '.' or c == '_'):
                return False
        return True

    @staticmethod
    def get(name):
        """Get or create a log by name"""
        if name in Log._logs:
            return Log._logs[name]
        return Log(name, True)

    def name(self):
        return self._name

    def level(self, value=None):
        """Get or set log level - called as log.level() or log.level(new_level)"""
        if value is None:
            return self._level
        self._level = value
        return None

    def is_enabled(self, level):
        return level >= self._level

    def debug(self, msg, err=None):
        if self.is_enabled(LogLevel._debug):
            self._log(LogLevel._debug, msg, err)

    def info(self, msg, err=None):
        if self.is_enabled(LogLevel._info):
            self._log(LogLevel._info, msg, err)

    def warn(self, msg, err=None):
        if self.is_enabled(LogLevel._warn):
            self._log(LogLevel._warn, msg, err)

    def err(self, msg, err=None):
        if self.is_enabled(LogLevel._err):
            self._log(LogLevel._err, msg, err)

    def _log(self, level, msg, err):
        rec = LogRec(level, self._name, msg, err)
        self.log(rec)

    def log(self, rec):
        """Log a record - can be overridden by subclasses"""
        for handler in Log._handlers:
            handler(rec)

        exc_info = None
        if rec._err is not None:
            exc_info = (type(rec._err), rec._err, rec._err.__traceback__)
        self._py_logger.log(rec._level._py_level, rec._msg, exc_info=exc_info)

    def to_str(self):
        return self._name

    @staticmethod
    def add_handler(handler):
        """Add a global log handler"""
        if not callable(handler):
            from .Err import ArgErr
            raise ArgErr("Log handler must be callable")
        Log._handlers.append(handler)

    @staticmethod
    def remove_handler(handler):
        """Remove a global log handler"""
        if handler in Log._handlers:
            Log._handlers.remove(handler)
