"""Utility functions and classes for tubeproxy."""

from .config import Config, ServerSettings
from .paths import static_root
from .logging import setup_logging, log_error

__all__ = ["Config", "ServerSettings", "static_root", "setup_logging", "log_error"]
