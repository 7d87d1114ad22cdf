#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import os
from .Obj import Obj


class Env(Obj):
    """Env exposes process environment and tzregion configuration"""

    _instance = None

    POD = "tzregion"

    @staticmethod
    def cur():
        if Env._instance is None:
            Env._instance = Env()
        return Env._instance

    def __init__(self, work_dir=None, environ=None):
        self._work_dir = work_dir
        self._environ = environ
        self._props_cache = {}

    def work_dir(self):
        """Get working directory used to resolve etc/ files"""
        return self._work_dir if self._work_dir is not None else os.getcwd()

    def vars(self):
        """Return environment variables as a dict"""
        return dict(self._environ if self._environ is not None else os.environ)

    def props(self, uri="config.props"):
        """Load props file etc/tzregion/{uri} relative to the working directory.

        Returns an empty dict if the file does not exist.
        """
        path = os.path.join(self.work_dir(), "etc", Env.POD, uri)
        try:
            mtime = os.path.getmtime(path)
        except OSError:
            return {}

        cached = self._props_cache.get(path)
        if cached is not None and cached[0] == mtime:
            return cached[1]

        with open(path, "r", encoding="utf-8") as f:
            props = Env.parse_props(f.read())
        self._props_cache[path] = (mtime, props)
        return props

    @staticmethod
    def parse_props(text):
        """Parse name=value lines, skipping blanks and // or # comments"""
        props = {}
        for line_num, line in enumerate(text.splitlines(), 1):
            line = line.strip()
            if not line or line.startswith("//") or line.startswith("#"):
                continue
            eq = line.find("=")
            if eq < 0:
                from .Err import ArgErr
                raise ArgErr(f"Invalid props line {line_num}: {line}")
            props[line[:eq].strip()] = line[eq + 1:].strip()
        return props

    @staticmethod
    def var_name(key):
        """Environment variable name for config key: tzdb.dir -> TZREGION_TZDB_DIR"""
        return f"{Env.POD}_{key}".replace(".", "_").upper()

    def config(self, key, def_val=None):
        """Get configuration value.

        Resolution order is environment variable, then etc/tzregion/config.props,
        then def_val.
        """
        val = self.vars().get(Env.var_name(key))
        if val:
            return val

        val = self.props().get(key)
        if val is not None:
            return val

        return def_val
