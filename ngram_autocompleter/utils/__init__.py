# ngram_autocompleter/utils/__init__.py
# configuration and logging helpers shared by the engine, CLI and evaluation harness

from .config_manager import (
    AutocompleterError,
    ConfigurationError,
    Config,
    EngineConfig,
)
from .logger_utils import Log, configure_logging

__all__ = [
    "AutocompleterError",
    "ConfigurationError",
    "Config",
    "EngineConfig",
    "Log",
    "configure_logging",
]
