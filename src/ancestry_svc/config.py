"""Configuration for the ancestry service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# Environment variable naming a YAML config file for the HTTP app
CONFIG_ENV = "ANCESTRY_CONFIG"


@dataclass
class ServerConfig:
    """HTTP server configuration."""
    host: str = "0.0.0.0"
    port: int = 8060
    reload: bool = False


@dataclass
class HierarchyConfig:
    """Hierarchy configuration."""
    # Path to hierarchy definition file (YAML or JSON); demo hierarchy if unset
    definition_file: str | None = None


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Config:
    """Main configuration container."""
    server: ServerConfig = field(default_factory=ServerConfig)
    hierarchy: HierarchyConfig = field(default_factory=HierarchyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        """Create config from dictionary."""
        return cls(
            server=ServerConfig(**data.get("server", {})),
            hierarchy=HierarchyConfig(**data.get("hierarchy", {})),
            logging=LoggingConfig(**data.get("logging", {})),
        )

    @classmethod
    def from_yaml(cls, path: str) -> Config:
        """Load config from YAML file."""
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str) -> Config:
        """Load config from JSON file."""
        import json
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> Config:
        """Load config from the file named by ANCESTRY_CONFIG, or defaults."""
        path = os.environ.get(CONFIG_ENV)
        if not path:
            return cls()
        if path.endswith(".json"):
            return cls.from_json(path)
        return cls.from_yaml(path)
