# ngram_autocompleter/core/protocols.py
"""
Protocol interfaces for the core components of the n-gram autocompleter.

The ranker and the scoring strategies depend on these rather than on the concrete classes,
so a strategy or store can be swapped (or mocked in tests) without touching
candidate generation or ranking.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Protocol, Sequence, Set, runtime_checkable
from typing_extensions import TypedDict

TokenID = int


class SuggestionDict(TypedDict):
    """Plain-dict shape of a Suggestion, as handed to UI glue."""
    word: str
    score: float


@runtime_checkable
class NGramStoreProtocol(Protocol):
    """
    Read/write surface of the context trie that training, scoring and candidate
    generation rely on. `find` returns a node with `counts`, `total` and
    `distinct`, or None for a context that was never observed.
    """

    def insert(self, ngram: Sequence[TokenID]) -> None:
        ...

    def find(self, context: Sequence[TokenID]) -> Optional[Any]:
        ...

    def count(self, ngram: Sequence[TokenID]) -> int:
        ...

    def context_count(self, context: Sequence[TokenID]) -> int:
        ...

    def total_tokens_observed(self) -> int:
        ...

    def candidates(self, context: Sequence[TokenID]) -> Set[TokenID]:
        """Tokens ever observed as the immediate continuation of `context`."""
        ...

    def continuations(self, context: Sequence[TokenID]) -> Iterable[TokenID]:
        """candidates(context) in first-seen order."""
        ...


@runtime_checkable
class ScoringStrategyProtocol(Protocol):
    """
    score(candidate, context) -> non-negative float.
    `context` holds at most max_order - 1 trailing tokens.
    """

    name: str

    def score(self, candidate: TokenID, context: Sequence[TokenID]) -> float:
        ...

    def score_many(self, candidates: Iterable[TokenID],
                   context: Sequence[TokenID]) -> Dict[TokenID, float]:
        ...
