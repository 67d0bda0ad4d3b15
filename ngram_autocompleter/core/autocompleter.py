# autocompleter.py
"""
Autocompleter - application facade over the n-gram engine.

Owns the Tokenizer (and through it the Vocabulary), the ContextTrie, the active
scoring strategy and the SuggestionRanker. Small public API for UI/CLI/tests:
    train(text), train_many(lines), predict(text, top_k), predict_tokens(ids, top_k),
    id_of(word), word_of(id), set_strategy(name), stats()

Training slides a window over the token stream and inserts every n-gram of length
1..max_order ending at each position. It is purely additive: training the same text
twice doubles every count. Nothing is persisted, the model is rebuilt per process.
train/predict never raise on string input; bad configuration is rejected up front.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ngram_autocompleter.context.tokenizer import Tokenizer, TokenizerConfig
from ngram_autocompleter.context.vocabulary import TokenID
from ngram_autocompleter.core.context_trie import ContextTrie
from ngram_autocompleter.core.ranker import Suggestion, SuggestionRanker
from ngram_autocompleter.core.scoring import ScoringStrategy, build_strategy
from ngram_autocompleter.utils.config_manager import EngineConfig
from ngram_autocompleter.utils.logger_utils import Log

logger = logging.getLogger(__name__)


class Autocompleter:
    """Next-word prediction engine: train on raw text, rank continuations of a query."""

    def __init__(self, config: Optional[EngineConfig] = None,
                 strategy: Union[str, ScoringStrategy, None] = None) -> None:
        self.cfg = (config or EngineConfig()).validate()
        self.max_order = self.cfg.max_order

        self.tokenizer = Tokenizer(TokenizerConfig(
            normalize_yo=self.cfg.normalize_yo,
            min_word_length=self.cfg.min_word_length,
            letter_folds=dict(self.cfg.letter_folds),
            keep_punctuation=self.cfg.keep_punctuation,
        ))
        self.vocab = self.tokenizer.vocab
        self.trie = ContextTrie()
        self.strategy = self._resolve_strategy(strategy or self.cfg.strategy)
        self.ranker = SuggestionRanker(self.trie, self.vocab, self.strategy, self.max_order,
                                       include_eos=self.cfg.include_eos)
        logger.debug("autocompleter ready: order=%d strategy=%s", self.max_order, self.strategy.name)

    # -------------------------
    # Training
    # -------------------------
    def train(self, text: str) -> None:
        if not isinstance(text, str):
            logger.debug("train() ignoring non-str input of type %s", type(text).__name__)
            return
        if not text.strip():
            return
        with Log.time_block("Autocompleter.train"):
            tokens = self.tokenizer.tokenize(text, register=True)
            self.train_tokens(tokens)
        logger.debug("trained on %d tokens (vocab=%d, contexts=%d)",
                     len(tokens), len(self.vocab), len(self.trie))

    def train_many(self, lines: Iterable[str]) -> None:
        for ln in lines:
            self.train(ln)

    def train_tokens(self, tokens: Sequence[TokenID]) -> None:
        """Fold all n-grams of length 1..max_order of an id stream into the trie."""
        n = self.max_order
        for i in range(len(tokens)):
            for k in range(1, n + 1):
                start = i - k + 1
                if start < 0:
                    break
                self.trie.insert(tokens[start:i + 1])

    # -------------------------
    # Prediction
    # -------------------------
    def predict(self, text: str, top_k: Optional[int] = None) -> List[Suggestion]:
        """Rank likely next words after `text`. Unseen query words resolve to UNK."""
        if not isinstance(text, str):
            logger.debug("predict() ignoring non-str input of type %s", type(text).__name__)
            return []
        tokens = self.tokenizer.tokenize(text, register=False)
        return self.predict_tokens(tokens, top_k)

    def predict_tokens(self, context: Sequence[TokenID], top_k: Optional[int] = None) -> List[Suggestion]:
        k = self.cfg.top_k if top_k is None else top_k
        if isinstance(k, bool) or not isinstance(k, int):
            logger.warning("predict() got non-int top_k %r, using %d", k, self.cfg.top_k)
            k = self.cfg.top_k
        return self.ranker.predict(context, k)

    def suggest(self, text: str, top_k: Optional[int] = None) -> List[Dict[str, Any]]:
        """predict() as plain {word, score} dicts for UI glue."""
        return [s.as_dict() for s in self.predict(text, top_k)]

    # -------------------------
    # Vocabulary introspection
    # -------------------------
    def id_of(self, word: str) -> TokenID:
        return self.tokenizer.id_of(word)

    def word_of(self, tid: TokenID) -> str:
        return self.tokenizer.word_of(tid)

    def tokenize(self, text: str) -> List[TokenID]:
        """Query-side tokenisation (does not grow the vocabulary)."""
        return self.tokenizer.tokenize(text, register=False)

    # -------------------------
    # Strategy management
    # -------------------------
    def set_strategy(self, strategy: Union[str, ScoringStrategy]) -> ScoringStrategy:
        self.strategy = self._resolve_strategy(strategy)
        self.ranker.strategy = self.strategy
        logger.info("scoring strategy -> %s", self.strategy.name)
        return self.strategy

    def _resolve_strategy(self, strategy: Union[str, ScoringStrategy]) -> ScoringStrategy:
        if isinstance(strategy, str):
            return build_strategy(strategy, self.trie, self.vocab, self.max_order,
                                  cutoff=self.cfg.escape_cutoff)
        return strategy

    def stats(self) -> Dict[str, Any]:
        return {
            "max_order": self.max_order,
            "strategy": self.strategy.name,
            "vocab_size": len(self.vocab),
            "contexts": len(self.trie),
            "tokens_observed": self.trie.total_tokens_observed(),
        }
