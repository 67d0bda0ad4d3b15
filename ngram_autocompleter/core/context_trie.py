# context_trie.py
# Sparse multi-order n-gram counter (context trie).
# Every training write and every scoring read goes through this store.
# Nodes live in a flat arena and refer to each other by index.

from __future__ import annotations
from typing import Dict, KeysView, List, Optional, Sequence, Set

TokenID = int
ROOT = 0


class ContextNode:
    """
    One node per distinct context path from the root.
    counts: continuation token -> how often it followed this context
    total: running sum of counts
    children: token -> arena index of the context extended by that token
    """

    __slots__ = ("counts", "total", "children")

    def __init__(self) -> None:
        self.counts: Dict[TokenID, int] = {}
        self.total = 0
        self.children: Dict[TokenID, int] = {}

    @property
    def distinct(self) -> int:
        """Number of distinct continuations seen (the escape count of PPM-C)."""
        return len(self.counts)


class ContextTrie:
    """
    N-gram store keyed by token-id sequences.
     - insert(ngram): count ngram[-1] under the context ngram[:-1]
     - count(ngram): exact n-gram count, 0 when unseen
     - candidates(context): tokens ever observed right after `context`
     - total_tokens_observed(): number of unigram inserts (order-0 denominator)

    The candidate index is the key view of each node's counts, so a token is a
    candidate of C exactly when the n-gram C + token has been inserted.
    """

    def __init__(self) -> None:
        self._nodes: List[ContextNode] = [ContextNode()]

    # insertion -----------------------------------------------------
    def insert(self, ngram: Sequence[TokenID]) -> None:
        if not ngram:
            return
        idx = ROOT
        for tok in ngram[:-1]:
            node = self._nodes[idx]
            nxt = node.children.get(tok)
            if nxt is None:
                nxt = len(self._nodes)
                self._nodes.append(ContextNode())
                node.children[tok] = nxt
            idx = nxt

        node = self._nodes[idx]
        last = ngram[-1]
        node.counts[last] = node.counts.get(last, 0) + 1
        node.total += 1

    # lookup -----------------------------------------------------
    def find(self, context: Sequence[TokenID]) -> Optional[ContextNode]:
        """Read-only walk; None when the context path was never created."""
        idx = ROOT
        for tok in context:
            idx = self._nodes[idx].children.get(tok)
            if idx is None:
                return None
        return self._nodes[idx]

    def count(self, ngram: Sequence[TokenID]) -> int:
        if not ngram:
            return 0
        node = self.find(ngram[:-1])
        if node is None:
            return 0
        return node.counts.get(ngram[-1], 0)

    def context_count(self, context: Sequence[TokenID]) -> int:
        """How often `context` itself was observed as an n-gram."""
        return self.count(context)

    def total_tokens_observed(self) -> int:
        return self._nodes[ROOT].total

    def candidates(self, context: Sequence[TokenID]) -> Set[TokenID]:
        node = self.find(context)
        if node is None:
            return set()
        return set(node.counts)

    def continuations(self, context: Sequence[TokenID]) -> KeysView[TokenID]:
        """Insertion-ordered, allocation-free view of candidates(context)."""
        node = self.find(context)
        if node is None:
            return {}.keys()
        return node.counts.keys()

    def distinct_continuations(self, context: Sequence[TokenID]) -> int:
        node = self.find(context)
        return node.distinct if node is not None else 0

    # convenience/debugging -----------------------------------------------------
    def nodes(self) -> List[ContextNode]:
        """The arena itself (read-only by convention)."""
        return self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
