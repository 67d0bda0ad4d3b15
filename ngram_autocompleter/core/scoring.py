# ngram_autocompleter/core/scoring.py
"""
Scoring strategies - turn sparse trie counts into per-candidate scores.

Both strategies share one contract:

    score(candidate, context) -> float >= 0

where `context` is cut to its trailing max_order - 1 tokens (the longest context
the trie can hold). Candidate generation and ranking never look inside a strategy,
so the two are interchangeable.

 - ExclusionBackoff (canonical): PPM-C escape scoring with the exclusion principle.
   Walks from the longest context down to order -1, handing each observed token
   count / (total + distinct) of the current weight and forwarding the escape
   mass distinct / (total + distinct) to the next shorter context. A token scored
   at a longer context is never scored again at a shorter one, and its counts are
   left out of total and distinct there. Over the whole vocabulary the scores sum to 1.
 - MultiplicativeBackoff ("stupid backoff", Brants et al. 2007): relative frequency
   of the longest observed n-gram, times ALPHA = 0.4 per order backed off.
   Not normalized, a ranking signal only.

Both loops are bounded by max_order, so there is no recursion depth to worry about.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple, Type

from ngram_autocompleter.context.vocabulary import Vocabulary
from ngram_autocompleter.core.protocols import NGramStoreProtocol
from ngram_autocompleter.utils.config_manager import ConfigurationError

logger = logging.getLogger(__name__)

TokenID = int
Context = Tuple[TokenID, ...]

ALPHA = 0.4  # stupid backoff discount per order
ESCAPE_CUTOFF = 1e-9  # exclusion backoff stops once the forwarded weight is this small


class ScoringStrategy:
    """Base class: context trimming and the per-query batch entrypoint."""

    name = "base"

    def __init__(self, trie: NGramStoreProtocol, max_order: int) -> None:
        if max_order <= 0:
            raise ConfigurationError(f"max_order must be > 0, got {max_order}")
        self.trie = trie
        self.max_order = max_order

    @classmethod
    def from_settings(cls, trie: NGramStoreProtocol, vocabulary: Vocabulary, max_order: int,
                      cutoff: Optional[float] = None,
                      alpha: Optional[float] = None) -> "ScoringStrategy":
        """Uniform constructor used by build_strategy; each strategy picks its own knobs."""
        raise NotImplementedError

    def trim(self, context: Sequence[TokenID]) -> Context:
        """Keep the trailing max_order - 1 tokens."""
        keep = self.max_order - 1
        if keep <= 0:
            return ()
        return tuple(context[-keep:])

    def score(self, candidate: TokenID, context: Sequence[TokenID]) -> float:
        raise NotImplementedError

    def score_many(self, candidates: Iterable[TokenID],
                   context: Sequence[TokenID]) -> Dict[TokenID, float]:
        """Score a whole candidate set against one context."""
        ctx = self.trim(context)
        return {c: self.score(c, ctx) for c in candidates}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_order={self.max_order})"


class ExclusionBackoff(ScoringStrategy):
    """
    PPM-C with full exclusion over a closed vocabulary.

    At a context node, over the tokens not excluded yet (`total` observations of
    `distinct` tokens):
        P(token)  = count / (total + distinct) * weight   (token not yet excluded)
        P(escape) = distinct / (total + distinct) * weight -> next shorter context
    A context that was never observed, or whose tokens are all excluded already,
    forwards its weight untouched.
    Order -1 spreads what is left evenly over every vocabulary id not yet scored.
    The reserved UNK id is never observed, so order -1 always has a taker and
    no mass is lost.
    """

    name = "exclusion"

    def __init__(self, trie: NGramStoreProtocol, vocabulary: Vocabulary, max_order: int,
                 cutoff: float = ESCAPE_CUTOFF) -> None:
        super().__init__(trie, max_order)
        self.vocab = vocabulary
        self.cutoff = float(cutoff)

    @classmethod
    def from_settings(cls, trie, vocabulary, max_order, cutoff=None, alpha=None):
        return cls(trie, vocabulary, max_order, cutoff=ESCAPE_CUTOFF if cutoff is None else cutoff)

    def distribution(self, context: Sequence[TokenID]) -> Tuple[Dict[TokenID, float], float]:
        """
        Run the escape walk once for `context`.

        Returns (assigned, residual): `assigned` maps every token that received mass at
        some context order (exactly the excluded set) to its score; every other
        vocabulary id scores `residual` (the order -1 share).
        """
        ctx = self.trim(context)
        assigned: Dict[TokenID, float] = {}
        weight = 1.0

        while True:
            if weight < self.cutoff:
                return assigned, 0.0

            node = self.trie.find(ctx)
            if node is not None and node.total > 0:
                # exclusion: tokens scored at a longer context drop out of this
                # node's statistics entirely
                fresh = [(tok, cnt) for tok, cnt in node.counts.items() if tok not in assigned]
                if fresh:
                    total = sum(cnt for _, cnt in fresh)
                    denom = total + len(fresh)
                    for tok, cnt in fresh:
                        assigned[tok] = cnt / denom * weight
                    weight *= len(fresh) / denom
            # else: pure escape, weight passes through unchanged

            if not ctx:
                break
            ctx = ctx[1:]

        if weight < self.cutoff:
            return assigned, 0.0

        # order -1
        unscored = len(self.vocab) - len(assigned)
        if unscored <= 0:
            return assigned, 0.0
        return assigned, weight / unscored

    def score(self, candidate: TokenID, context: Sequence[TokenID]) -> float:
        assigned, residual = self.distribution(context)
        return self._lookup(candidate, assigned, residual)

    def score_many(self, candidates: Iterable[TokenID],
                   context: Sequence[TokenID]) -> Dict[TokenID, float]:
        assigned, residual = self.distribution(context)
        return {c: self._lookup(c, assigned, residual) for c in candidates}

    def _lookup(self, candidate: TokenID, assigned: Dict[TokenID, float], residual: float) -> float:
        hit = assigned.get(candidate)
        if hit is not None:
            return hit
        if 0 <= candidate < len(self.vocab):
            return residual
        return 0.0


class MultiplicativeBackoff(ScoringStrategy):
    """
    Stupid backoff:
        S(w | h) = count(h + w) / count(h)     if count(h + w) > 0
                 = ALPHA * S(w | h[1:])        otherwise
        S(w)     = count(w) / N                (empty context)
    An observed n-gram never pays the ALPHA discount.
    """

    name = "multiplicative"

    def __init__(self, trie: NGramStoreProtocol, max_order: int, alpha: float = ALPHA) -> None:
        super().__init__(trie, max_order)
        self.alpha = float(alpha)

    @classmethod
    def from_settings(cls, trie, vocabulary, max_order, cutoff=None, alpha=None):
        return cls(trie, max_order, alpha=ALPHA if alpha is None else alpha)

    def score(self, candidate: TokenID, context: Sequence[TokenID]) -> float:
        ctx = self.trim(context)
        discount = 1.0
        while ctx:
            hits = self.trie.count(ctx + (candidate,))
            if hits > 0:
                denom = self.trie.context_count(ctx)
                return discount * hits / denom if denom > 0 else 0.0
            discount *= self.alpha
            ctx = ctx[1:]

        total = self.trie.total_tokens_observed()
        if total <= 0:
            return 0.0
        return discount * self.trie.count((candidate,)) / total


STRATEGY_REGISTRY: Dict[str, Type[ScoringStrategy]] = {
    ExclusionBackoff.name: ExclusionBackoff,
    MultiplicativeBackoff.name: MultiplicativeBackoff,
}


def build_strategy(name: str, trie: NGramStoreProtocol, vocabulary: Vocabulary, max_order: int,
                   cutoff: Optional[float] = None, alpha: Optional[float] = None) -> ScoringStrategy:
    """Instantiate a strategy by registry name."""
    key = (name or "").strip().lower()
    logger.debug("building scoring strategy %r (max_order=%d)", key, max_order)
    cls = STRATEGY_REGISTRY.get(key)
    if cls is None:
        raise ConfigurationError(
            f"unknown strategy {name!r}, expected one of {', '.join(sorted(STRATEGY_REGISTRY))}"
        )
    return cls.from_settings(trie, vocabulary, max_order, cutoff=cutoff, alpha=alpha)
