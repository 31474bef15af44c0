"""Configuration Management Package

Looked up in order:

1. .gcarc in the current directory (project-specific)
2. .gcarc in the home directory (global default)
3. Built-in defaults

Environment variables (GCA_PROVIDER, GCA_MODEL, GCA_ENDPOINT, GCA_TIMEOUT)
override the file; command-line flags override both.
"""

import json
import os
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from commit_analyzer.llm import PROVIDERS

VALID_PROVIDERS = set(PROVIDERS)

ENV_OVERRIDES = {
    "GCA_PROVIDER": "provider",
    "GCA_MODEL": "model",
    "GCA_ENDPOINT": "endpoint",
    "GCA_TIMEOUT": "timeout",
}


@dataclass
class Config:
    """User configuration with sensible defaults."""
    provider: str = "auto"
    model: Optional[str] = None
    endpoint: Optional[str] = None
    timeout: int = 300
    update_changelog: bool = False
    no_verify: bool = False
    max_file_display: int = 8

    def validate(self) -> list[str]:
        """Reset invalid values to defaults and return a warning for each."""
        warnings = []
        defaults = Config()

        if not isinstance(self.provider, str) or self.provider not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.provider}', using '{defaults.provider}'")
            self.provider = defaults.provider

        for key in ("model", "endpoint"):
            value = getattr(self, key)
            if value is not None and not isinstance(value, str):
                warnings.append(f"Invalid {key} '{value}', using default")
                setattr(self, key, None)

        if not isinstance(self.timeout, int) or isinstance(self.timeout, bool) or self.timeout <= 0:
            warnings.append(f"Invalid timeout '{self.timeout}', using {defaults.timeout}")
            self.timeout = defaults.timeout

        if (not isinstance(self.max_file_display, int) or isinstance(self.max_file_display, bool)
                or self.max_file_display <= 0):
            warnings.append(f"Invalid max_file_display '{self.max_file_display}', using {defaults.max_file_display}")
            self.max_file_display = defaults.max_file_display

        for flag in ("update_changelog", "no_verify"):
            if not isinstance(getattr(self, flag), bool):
                warnings.append(f"Invalid {flag} '{getattr(self, flag)}', using {getattr(defaults, flag)}")
                setattr(self, flag, getattr(defaults, flag))

        return warnings

    def apply_env(self, environ: Optional[dict] = None) -> 'Config':
        environ = os.environ if environ is None else environ
        for var, key in ENV_OVERRIDES.items():
            value = environ.get(var)
            if not value:
                continue
            if key == "timeout":
                value = int(value) if value.isdigit() else value
            setattr(self, key, value)
        for warning in self.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return self

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Finds and loads the rc file once per process; ``load`` returns a copy."""

    CONFIG_FILENAME = ".gcarc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is None:
            self._config = self._find_and_load()
        return replace(self._config)

    def _find_and_load(self) -> Config:
        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config_path = path
                return self._load_from_file(path)
        return Config()

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top level must be an object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "get_config_path",
    "VALID_PROVIDERS",
    "ENV_OVERRIDES",
]
