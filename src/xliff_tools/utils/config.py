"""
Configuration for xliff-tools.

Settings live in a small JSON file (``xliff-tools.json`` by default) next to
the project being localized.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Optional

from .errors import ConfigurationError
from .io import write_text_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "xliff-tools.json"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class XliffConfig:
    """Settings shared by the command line tools."""

    # Document settings
    source_language: str = "en"
    datatype: str = "xml"

    # 新建文档时是否立即排序
    sort_new_documents: bool = True

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate field values after initialization."""
        if not self.source_language or not self.source_language.strip():
            logger.warning("source_language must not be empty, using 'en'")
            self.source_language = "en"
        if not self.datatype or not self.datatype.strip():
            logger.warning("datatype must not be empty, using 'xml'")
            self.datatype = "xml"
        level = str(self.log_level).upper()
        if level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                config_key="log_level",
                allowed=list(_LOG_LEVELS),
            )
        self.log_level = level


class ConfigManager:
    """Load and save an ``XliffConfig`` from a JSON file."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Path to config file. Defaults to ./xliff-tools.json
        """
        self.config_path = Path(config_path) if config_path else Path.cwd() / DEFAULT_CONFIG_NAME
        self.config = self.load()

    def load(self) -> XliffConfig:
        """Load configuration from file, falling back to defaults when unreadable."""
        if not self.config_path.exists():
            return XliffConfig()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to load config {self.config_path}: {e}, using defaults")
            return XliffConfig()
        except OSError as e:
            logger.warning(f"Config file I/O error: {e}, using defaults")
            return XliffConfig()

        if not isinstance(data, dict):
            logger.warning(f"Config {self.config_path} is not a JSON object, using defaults")
            return XliffConfig()

        # Filter out unknown keys to avoid TypeError
        valid_fields = {f.name for f in fields(XliffConfig)}
        unknown = sorted(set(data) - valid_fields)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")
        return XliffConfig(**{k: v for k, v in data.items() if k in valid_fields})

    def save(self) -> None:
        """Save configuration to file."""
        text = json.dumps(asdict(self.config), indent=2, ensure_ascii=False) + "\n"
        write_text_file(self.config_path, text)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return getattr(self.config, key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value (re-validated)."""
        if not hasattr(self.config, key):
            raise ConfigurationError(f"Unknown config key: {key}", config_key=key)
        data = asdict(self.config)
        data[key] = value
        self.config = XliffConfig(**data)
