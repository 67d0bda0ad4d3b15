"""
ngram_autocompleter.core

The language-modelling engine.
Contains:
 - the sparse multi-order n-gram store (ContextTrie)
 - scoring strategies (ExclusionBackoff, MultiplicativeBackoff)
 - candidate generation and top-k ranking (SuggestionRanker)
 - the train/predict facade (Autocompleter)
"""

from .context_trie import ContextTrie, ContextNode
from .scoring import (
    ALPHA,
    ESCAPE_CUTOFF,
    ScoringStrategy,
    ExclusionBackoff,
    MultiplicativeBackoff,
    build_strategy,
)
from .ranker import Suggestion, SuggestionRanker
from .autocompleter import Autocompleter

__all__ = [
    "ContextTrie",
    "ContextNode",
    "ALPHA",
    "ESCAPE_CUTOFF",
    "ScoringStrategy",
    "ExclusionBackoff",
    "MultiplicativeBackoff",
    "build_strategy",
    "Suggestion",
    "SuggestionRanker",
    "Autocompleter",
]
