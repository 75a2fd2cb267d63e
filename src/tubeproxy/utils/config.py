"""Configuration management."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .paths import static_root as bundled_static_root

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path.home() / "tubeproxy_settings.json"


@dataclass(frozen=True)
class ServerSettings:
    """Immutable settings the application object is built from."""
    host: str
    port: int
    static_root: Path
    user_agent: Optional[str]
    chunk_size: int


class Config:
    """Manages application configuration."""

    def __init__(self, config_file: Optional[Path] = None):
        if config_file is None:
            config_file = DEFAULT_CONFIG_FILE
        self.file = Path(config_file)
        self.data = {
            "host": "127.0.0.1",
            "port": 3000,
            "static_root": str(bundled_static_root()),
            "user_agent": None,
            "chunk_size": 1024 * 64,
        }
        self.load()

    def load(self):
        """Load configuration from file, keeping defaults for missing keys."""
        if not self.file.exists():
            return
        try:
            with open(self.file, 'r', encoding='utf-8') as f:
                self.data.update(json.load(f))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config file {self.file}: {e}")

    def update(self, **overrides):
        """Apply overrides (e.g. from the command line); None values are skipped."""
        for key, value in overrides.items():
            if value is not None:
                self.data[key] = value

    @property
    def host(self) -> str:
        return str(self.data["host"])

    @property
    def port(self) -> int:
        return int(self.data["port"])

    @property
    def static_root(self) -> Path:
        return Path(self.data["static_root"])

    @property
    def user_agent(self) -> Optional[str]:
        return self.data.get("user_agent") or None

    @property
    def chunk_size(self) -> int:
        return int(self.data["chunk_size"])

    def snapshot(self) -> ServerSettings:
        """Freeze the current values."""
        return ServerSettings(
            host=self.host,
            port=self.port,
            static_root=self.static_root,
            user_agent=self.user_agent,
            chunk_size=self.chunk_size,
        )
