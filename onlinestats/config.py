import sys
from pathlib import Path

import toml
from more_itertools import flatten
from twisted.python import log

from onlinestats.errors import ConfigError

LOG_NAME = "latest.log"


class GenericDescriptor():
    def __set_name__(self, owner, name):
        self.public_name = name
        self.private_name = '_' + name

    def __get__(self, obj, objtype=None):
        value = getattr(obj, self.private_name)
        return value

    def __set__(self, obj, value):
        setattr(obj, self.private_name, value)


def default_log_path():
    log_path = Path.home()
    if sys.platform == "win32":
        log_path = log_path / "AppData" / "Roaming"
    return str(log_path / ".minecraft" / "logs" / LOG_NAME)


class Settings:
    __default_file__ = "config.toml"
    __search_path__ = [
        Path.cwd(),
        Path(Path.home(), '.config', 'onlinestats'),
    ]
    # toml key -> expected type
    __keys__ = {
        "log-path": str,
        "api-key": str,
        "quit-level": int,
        "timeout": (int, float),
    }
    log_path   = GenericDescriptor()
    api_key    = GenericDescriptor()
    quit_level = GenericDescriptor()  # read and written, not acted on
    timeout    = GenericDescriptor()

    def __init__(self):
        self.log_path   = default_log_path()
        self.api_key    = "INSERT_API_KEY_HERE"
        self.quit_level = 130
        self.timeout    = 10
        self.source     = None

    def as_dict(self):
        return {key: getattr(self, key.replace("-", "_")) for key in self.__keys__}

    def update(self, dict_obj):
        # keys may sit at the top level or inside any table
        top = [(k, v) for k, v in dict_obj.items() if not isinstance(v, dict)]
        tables = [iter(v.items()) for v in dict_obj.values() if isinstance(v, dict)]
        for key, val in flatten([top] + tables):
            if key not in self.__keys__:
                log.msg(f"ignoring unknown setting {key!r}")
                continue
            kind = self.__keys__[key]
            if isinstance(val, bool) or not isinstance(val, kind):
                raise ConfigError(f"setting {key!r} has the wrong type: {val!r}")
            setattr(self, key.replace("-", "_"), val)

    def normalize(self):
        log_path = Path(self.log_path)
        if log_path.name != LOG_NAME:
            log.msg(f"Log path is not pointing to {LOG_NAME}, pushing it to path")
            log_path = log_path / LOG_NAME
        self.log_path = str(log_path)

    def write_default(self, file_path):
        log.msg(f"Creating config file at {file_path}")
        try:
            with open(file_path, "w") as handle:
                toml.dump(self.as_dict(), handle)
        except (IOError, OSError) as e:
            raise ConfigError(f"could not create {file_path}: {e}")

    def from_file(self, file_path):
        try:
            self.update(toml.load(file_path))
        except (IOError, OSError, toml.TomlDecodeError) as e:
            log.err(None, f"parsing {file_path}: failed")
            raise ConfigError(f"could not read {file_path}: {e}")
        self.source = Path(file_path)
        self.normalize()

    def find(self):
        path_join = lambda p: Path(p, self.__default_file__).resolve()
        fexists = lambda f: f.exists()
        return next(filter(fexists, map(path_join, iter(self.__search_path__))), None)

    def fetch(self, file_path=None):
        """Load settings, creating a default file first if there is none."""
        if file_path is None:
            file_path = self.find() or Path.cwd() / self.__default_file__
        if not Path(file_path).exists():
            log.msg("Generating default config")
            self.write_default(file_path)
        self.from_file(file_path)
        return self
