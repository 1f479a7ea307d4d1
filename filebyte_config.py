#!/usr/bin/env python3
"""
Filebyte Configuration Manager

Persistent defaults for the command-line tool, stored as JSON in a
.filebyte directory (home directory unless FILEBYTE_HOME is set).
Command-line flags always override these values.
"""

import json
import logging
import os
import pathlib
from dataclasses import asdict, dataclass
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_HOME_ENV = "FILEBYTE_HOME"


@dataclass
class FilebyteConfig:
    """Default display and collection settings"""

    version: str = "1.0"
    size_unit: str = "auto"
    sort_by: Optional[str] = None
    color: bool = True
    detailed_permissions: bool = True
    show_hidden: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "FilebyteConfig":
        """Create from dictionary, falling back to defaults for missing keys"""
        defaults = cls()
        return cls(
            version=data.get("version", defaults.version),
            size_unit=data.get("size_unit", defaults.size_unit),
            sort_by=data.get("sort_by", defaults.sort_by),
            color=bool(data.get("color", defaults.color)),
            detailed_permissions=bool(data.get("detailed_permissions", defaults.detailed_permissions)),
            show_hidden=bool(data.get("show_hidden", defaults.show_hidden)),
        )


class ConfigManager:
    """Manages loading and saving filebyte configuration"""

    def __init__(self, config_dir: Optional[pathlib.Path] = None):
        """Initialize configuration manager

        Args:
            config_dir: Override default .filebyte directory location
        """
        if config_dir:
            self.config_dir = pathlib.Path(config_dir)
        elif os.environ.get(CONFIG_HOME_ENV):
            self.config_dir = pathlib.Path(os.environ[CONFIG_HOME_ENV])
        else:
            self.config_dir = pathlib.Path.home() / ".filebyte"

        self.config_file = self.config_dir / "config.json"

    def load(self) -> FilebyteConfig:
        """Load configuration from file"""
        if not self.config_file.exists():
            return FilebyteConfig()

        try:
            with self.config_file.open() as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("configuration root is not an object")
            return FilebyteConfig.from_dict(data)
        except (json.JSONDecodeError, OSError, ValueError) as e:
            # If config is corrupted, return default
            logger.warning("Ignoring unreadable configuration %s: %s", self.config_file, e)
            return FilebyteConfig()

    def save(self, config: FilebyteConfig):
        """Save configuration to file"""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with self.config_file.open("w") as f:
            json.dump(config.to_dict(), f, indent=2)

    def reset(self):
        """Reset configuration to default"""
        if self.config_file.exists():
            self.config_file.unlink()
