# ============================================================================
# FILE: config.py
# RELPATH: bczip/src/bczip/core/config.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Configuration manager for codec, I/O and logging settings
# ============================================================================

"""
Configuration Manager for bczip.

Settings live in a small nested JSON document. The file is optional: when
it is absent the defaults apply and nothing is written. Keys this version
does not know are kept as they are.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from bczip.core.container import CodecRegistry
from bczip.core.exceptions import (
    ConfigLoadError,
    ConfigValidationError
)


DEFAULT_CONFIG_FILE = Path.home() / ".bczip.json"


class ConfigManager:
    """
    Manages bczip configuration.

    Attributes:
        config_file: Backing JSON file, or None for defaults only
        config: Current configuration dictionary
    """

    DEFAULT_CONFIG = {
        "codec": {
            "name": "zlib",
            "level": 9
        },
        "io": {
            "chunk_size": 65536
        },
        "logging": {
            "log_dir": "",
            "level": "WARNING"
        }
    }

    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to configuration file; loaded only if it exists
        """
        self.config_file = Path(config_file) if config_file else None
        self.config: Dict = self._deep_copy(self.DEFAULT_CONFIG)
        if self.config_file is not None and self.config_file.exists():
            self.load()

    @classmethod
    def from_default_location(cls) -> "ConfigManager":
        return cls(str(DEFAULT_CONFIG_FILE))

    def load(self) -> Dict:
        """
        Load configuration from file and merge it over the defaults.

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigLoadError: If file cannot be loaded or parsed
        """
        if self.config_file is None:
            raise ConfigLoadError("<none>", "No configuration file set")
        try:
            text = self.config_file.read_text(encoding='utf-8')
            data = json.loads(text)
        except FileNotFoundError:
            raise ConfigLoadError(str(self.config_file), "File not found")
        except json.JSONDecodeError as e:
            raise ConfigLoadError(str(self.config_file), f"Invalid JSON: {str(e)}")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigLoadError(str(self.config_file), str(e))

        if not isinstance(data, dict):
            raise ConfigLoadError(str(self.config_file), "Top-level value must be an object")

        self.config = self._merge(self._deep_copy(self.DEFAULT_CONFIG), data)
        return self.config

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Recursively overlay ``override`` onto ``base``."""
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = self._deep_copy(value)
        return base

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot-notation path.

        Args:
            key_path: Dot-separated path (e.g., 'codec.level')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def validate(self, registry=None) -> bool:
        """
        Validate configuration values.

        Args:
            registry: CodecRegistry used to check the codec name and level;
                      a default registry is built if omitted

        Returns:
            True if valid

        Raises:
            ConfigValidationError: If validation fails
        """
        self._validate_codec(registry)
        self._validate_chunk_size()
        self._validate_log_level()
        return True

    def _validate_codec(self, registry) -> None:
        registry = registry or CodecRegistry()
        name = self.get('codec.name')
        if name not in registry.list_codecs():
            raise ConfigValidationError(
                'codec.name',
                name,
                f"Must be one of: {', '.join(registry.list_codecs())}"
            )

        codec = registry.get(name, level=self.get('codec.level'))
        try:
            codec.validate_level()
        except ValueError as e:
            raise ConfigValidationError('codec.level', codec.level, str(e))

    def _validate_chunk_size(self) -> None:
        value = self.get('io.chunk_size')
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigValidationError(
                'io.chunk_size',
                value,
                "Must be a positive integer"
            )

    def _validate_log_level(self) -> None:
        value = self.get('logging.level')
        if not isinstance(value, str) or value.upper() not in self.LOG_LEVELS:
            raise ConfigValidationError(
                'logging.level',
                value,
                f"Must be one of: {', '.join(self.LOG_LEVELS)}"
            )

    def build_codec(self, registry=None):
        """Return the configured codec instance."""
        registry = registry or CodecRegistry()
        return registry.get(self.get('codec.name'), level=self.get('codec.level'))

    @property
    def chunk_size(self) -> int:
        return self.get('io.chunk_size', 65536)

    @property
    def log_dir(self) -> Optional[str]:
        return self.get('logging.log_dir') or None

    def _deep_copy(self, obj: Any) -> Any:
        """Deep copy a configuration object."""
        if isinstance(obj, dict):
            return {k: self._deep_copy(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._deep_copy(item) for item in obj]
        else:
            return obj

