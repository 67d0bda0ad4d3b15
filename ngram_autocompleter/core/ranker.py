# ngram_autocompleter/core/ranker.py
"""
SuggestionRanker - candidate generation, scoring and top-k selection.

Candidates come from the trie's candidate index rather than a vocabulary scan:
the trailing context and every shorter suffix of it (down to the empty context)
contribute the tokens ever seen right after them. That set is scored with the
active strategy, sorted by score desc then token id asc (first-seen order) and cut
to top_k, so identical state + identical input always give the same list.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, List, Sequence

from ngram_autocompleter.context.vocabulary import EOS_ID, Vocabulary
from ngram_autocompleter.core.protocols import NGramStoreProtocol, ScoringStrategyProtocol, SuggestionDict

logger = logging.getLogger(__name__)

TokenID = int
DEFAULT_TOP_K = 5


@dataclass(frozen=True)
class Suggestion:
    word: str
    score: float

    def as_dict(self) -> SuggestionDict:
        return SuggestionDict(**asdict(self))


class SuggestionRanker:
    """
    predict(context, top_k) -> ranked Suggestions (at most top_k).
    The strategy can be replaced at any time; nothing else here depends on it.
    """

    def __init__(self, trie: NGramStoreProtocol, vocabulary: Vocabulary,
                 strategy: ScoringStrategyProtocol, max_order: int,
                 include_eos: bool = False) -> None:
        self.trie = trie
        self.vocab = vocabulary
        self.strategy = strategy
        self.max_order = max_order
        self.include_eos = include_eos

    def context_for(self, context: Sequence[TokenID]) -> List[TokenID]:
        """
        Trailing context used for lookups: a closing </S> is dropped (every tokenized
        stream ends with one), then the last max_order - 1 tokens are kept.
        """
        ctx = list(context)
        if ctx and ctx[-1] == EOS_ID:
            ctx.pop()
        keep = self.max_order - 1
        return ctx[-keep:] if keep > 0 else []

    def generate_candidates(self, context: Sequence[TokenID]) -> List[TokenID]:
        """Union of continuations of `context` and all its suffixes, first-seen order."""
        seen: Dict[TokenID, None] = {}
        for start in range(len(context) + 1):
            for tok in self.trie.continuations(context[start:]):
                seen.setdefault(tok, None)
        return list(seen)

    def offered(self, tok: TokenID) -> bool:
        """Sentinels are never suggested, except </S> when include_eos is set."""
        if self.include_eos and tok == EOS_ID:
            return True
        return not self.vocab.is_special(tok)

    def predict(self, context: Sequence[TokenID], top_k: int = DEFAULT_TOP_K) -> List[Suggestion]:
        ctx = self.context_for(context)
        candidates = self.generate_candidates(ctx)
        if not candidates or top_k <= 0:
            return []

        scores = self.strategy.score_many(candidates, ctx)

        # sentinels still take part in scoring (exclusion mass), they are just not offered
        ranked = sorted(
            ((tok, sc) for tok, sc in scores.items() if self.offered(tok)),
            key=lambda kv: (-kv[1], kv[0]),
        )
        out = [Suggestion(self.vocab.word_of(tok), float(sc)) for tok, sc in ranked[:top_k]]
        logger.debug("ranked %d candidates for context %s -> %d suggestions",
                     len(candidates), ctx, len(out))
        return out

