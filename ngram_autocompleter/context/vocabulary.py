# vocabulary.py
# Append-only word <-> token id table. Strings are stored once, everything
# downstream (trie, scoring, ranking) works on ints.

from __future__ import annotations
from typing import Dict, Iterator, List

TokenID = int

UNK = "<UNK>"
BOS = "<S>"
EOS = "</S>"

UNK_ID: TokenID = 0
BOS_ID: TokenID = 1
EOS_ID: TokenID = 2

SPECIAL_TOKENS = (UNK, BOS, EOS)


class Vocabulary:
    """
    Bidirectional mapping word <-> TokenID.
    Ids are handed out in first-seen order and never reused or removed.
    The three sentinels are registered on construction, so they always own ids 0, 1, 2.
    """

    __slots__ = ("_word_to_id", "_id_to_word")

    def __init__(self) -> None:
        self._word_to_id: Dict[str, TokenID] = {}
        self._id_to_word: List[str] = []
        for tok in SPECIAL_TOKENS:
            self.register(tok)

    def register(self, word: str) -> TokenID:
        """Return the id of `word`, appending it to the table if unseen."""
        tid = self._word_to_id.get(word)
        if tid is not None:
            return tid
        tid = len(self._id_to_word)
        self._word_to_id[word] = tid
        self._id_to_word.append(word)
        return tid

    def id_of(self, word: str) -> TokenID:
        return self._word_to_id.get(word, UNK_ID)

    def word_of(self, tid: TokenID) -> str:
        if 0 <= tid < len(self._id_to_word):
            return self._id_to_word[tid]
        return UNK

    def is_special(self, tid: TokenID) -> bool:
        return tid in (UNK_ID, BOS_ID, EOS_ID)

    def __contains__(self, word: str) -> bool:
        return word in self._word_to_id

    def __len__(self) -> int:
        return len(self._id_to_word)

    def __iter__(self) -> Iterator[TokenID]:
        return iter(range(len(self._id_to_word)))
