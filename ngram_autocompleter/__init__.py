"""
ngram_autocompleter - predictive-text engine.

Train on raw text, then ask for the most likely next words:

    from ngram_autocompleter import Autocompleter
    ac = Autocompleter()
    ac.train("the cat sat on the mat. the cat ran.")
    ac.predict("the cat")   # -> [Suggestion(word='sat', score=...), ...]
"""

from .context import Tokenizer, TokenizerConfig, Vocabulary, UNK_ID, BOS_ID, EOS_ID
from .core import (
    Autocompleter,
    ContextTrie,
    ExclusionBackoff,
    MultiplicativeBackoff,
    Suggestion,
    SuggestionRanker,
)
from .utils import AutocompleterError, ConfigurationError, EngineConfig

__all__ = [
    "Autocompleter",
    "ContextTrie",
    "ExclusionBackoff",
    "MultiplicativeBackoff",
    "Suggestion",
    "SuggestionRanker",
    "Tokenizer",
    "TokenizerConfig",
    "Vocabulary",
    "UNK_ID",
    "BOS_ID",
    "EOS_ID",
    "AutocompleterError",
    "ConfigurationError",
    "EngineConfig",
]

__version__ = "0.1.0"
