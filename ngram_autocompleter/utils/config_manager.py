# config_manager.py - engine knobs + JSON config manager

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict

logger = logging.getLogger(__name__)

STRATEGIES = ("exclusion", "multiplicative")


class AutocompleterError(Exception):
    """Base class for errors raised by ngram_autocompleter."""


class ConfigurationError(AutocompleterError, ValueError):
    """Invalid engine configuration (raised at construction/configuration time only)."""


@dataclass(frozen=True)
class EngineConfig:
    """
    Configurable knobs for model order, scoring, tokenisation and top-k behaviour.
    max_order is the n-gram length: 3 keeps trigrams, i.e. two words of context.
    """
    max_order: int = 3
    top_k: int = 5
    strategy: str = "exclusion"
    min_word_length: int = 1
    normalize_yo: bool = True
    letter_folds: Dict[str, str] = field(default_factory=dict)
    escape_cutoff: float = 1e-9  # exclusion backoff stops below this weight, 0 disables
    include_eos: bool = False  # offer "</S>" (end the sentence) as a suggestion
    keep_punctuation: bool = False  # emit commas, dashes etc. as tokens of their own

    def validate(self) -> "EngineConfig":
        for key in ("max_order", "top_k", "min_word_length"):
            val = getattr(self, key)
            if isinstance(val, bool) or not isinstance(val, int):
                raise ConfigurationError(f"{key} must be an int, got {val!r}")
        if self.max_order <= 0:
            raise ConfigurationError(f"max_order must be > 0, got {self.max_order}")
        if self.top_k < 0:
            raise ConfigurationError(f"top_k must be >= 0, got {self.top_k}")
        if self.min_word_length < 0:
            raise ConfigurationError(f"min_word_length must be >= 0, got {self.min_word_length}")
        if self.strategy not in STRATEGIES:
            raise ConfigurationError(
                f"unknown strategy {self.strategy!r}, expected one of {', '.join(STRATEGIES)}"
            )
        if isinstance(self.escape_cutoff, bool) or not isinstance(self.escape_cutoff, (int, float)):
            raise ConfigurationError(f"escape_cutoff must be a number, got {self.escape_cutoff!r}")
        if self.escape_cutoff < 0:
            raise ConfigurationError("escape_cutoff must be >= 0")
        for key in ("normalize_yo", "include_eos", "keep_punctuation"):
            if not isinstance(getattr(self, key), bool):
                raise ConfigurationError(f"{key} must be true or false, got {getattr(self, key)!r}")
        folds = self.letter_folds
        if not isinstance(folds, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in folds.items()):
            raise ConfigurationError(f"letter_folds must map strings to strings, got {folds!r}")
        return self


class Config:
    """
    JSON-backed settings file; writes the defaults out when the file is missing.
    With path=None the settings live in memory only.
    """

    def __init__(self, path="config.json"):
        self.path = path
        self.data: Dict[str, Any] = asdict(EngineConfig())
        self._load()

    def _load(self):
        if self.path is None:
            return
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    loaded = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("config %s unreadable, using defaults: %s", self.path, e)
                return
            if not isinstance(loaded, dict):
                logger.warning("config %s is not a JSON object, using defaults", self.path)
                return
            unknown = set(loaded) - set(self.data)
            if unknown:
                logger.warning("ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
            self.data.update({k: v for k, v in loaded.items() if k in self.data})
        else:
            self.save()

    def save(self):
        if self.path is None:
            return
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2, ensure_ascii=False)

    def show(self):
        for k, v in self.data.items():
            print(f"{k:15} = {v}")

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, val):
        if key not in self.data:
            raise ConfigurationError(f"No such option: {key}")
        current = self.data[key]
        if isinstance(current, bool) and isinstance(val, str):
            val = val.strip().lower() in ("1", "true", "yes", "on")
        elif isinstance(current, dict):
            if not isinstance(val, dict):
                raise ConfigurationError(f"{key} expects a mapping")
        else:
            try:
                val = type(current)(val)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"bad value for {key}: {val!r}") from e
        self.data[key] = val
        self.save()

    def to_engine_config(self, **overrides: Any) -> EngineConfig:
        """Validated EngineConfig from the stored settings; None overrides are skipped."""
        unknown = set(overrides) - set(self.data)
        if unknown:
            raise ConfigurationError(f"No such option: {', '.join(sorted(unknown))}")
        data = dict(self.data)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return EngineConfig(**data).validate()
