import json
import os
from pathlib import Path

from ulidkit.fields.randomness import SeededRandomSource

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"
CONFIG_ENV = "ULIDKIT_CONFIG"


class GeneratorConfig:
    __slots__ = ("seed", "monotonic", "step", "max_batch")

    def __init__(self, seed=None, monotonic=False, step=1, max_batch=1000):
        self.seed = seed
        self.monotonic = monotonic
        self.step = step
        self.max_batch = max_batch

    def random_source(self):
        """None selects the default CSPRNG source."""
        if self.seed is None:
            return None
        return SeededRandomSource(self.seed)


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level", "crash_file")

    def __init__(self, level="INFO", crash_file="logs/crash.log"):
        self.level = level
        self.crash_file = crash_file


class Config:
    __slots__ = ("generator", "server", "logging")

    def __init__(self, generator=None, server=None, logging=None):
        self.generator = generator or GeneratorConfig()
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            GeneratorConfig(**d.get("generator", {})),
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
        )


def load_config(path=None):
    if path is None:
        path = os.environ.get(CONFIG_ENV)
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))
