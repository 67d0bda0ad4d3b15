# ngram_autocompleter/context/tokenizer.py
# word tokenizer: raw text -> sentence-delimited stream of token ids

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .normalizer import YO_FOLDS, normalize_text
from .vocabulary import BOS_ID, EOS_ID, TokenID, Vocabulary

# letters/digits, optionally glued by internal hyphens, dashes or apostrophes ("well-known", "don't")
_WORD = r"[^\W_]+(?:[-‐–—'’][^\W_]+)*"
# runs of sentence-closing punctuation ("...", "?!", ";")
_BOUNDARY = r"[.!?;]+"

# any other single non-space symbol (commas, quotes, stray dashes)
_PUNCT = r"[^\w\s]|_"

_token_re = re.compile(rf"(?P<word>{_WORD})|(?P<boundary>{_BOUNDARY})|(?P<punct>{_PUNCT})")


@dataclass(frozen=True)
class TokenizerConfig:
    """
    Knobs for normalisation and filtering.
    normalize_yo: fold "ё" onto "е" (standard for Russian search/autocomplete)
    min_word_length: shorter words are skipped, digits are exempt
    letter_folds: extra letter -> replacement folds applied after lowercasing
    keep_punctuation: emit other punctuation (",", "\"", a stray "-") as tokens; off drops it
    """
    normalize_yo: bool = True
    min_word_length: int = 1
    letter_folds: Dict[str, str] = field(default_factory=dict)
    keep_punctuation: bool = False

    def folds(self) -> Dict[str, str]:
        out = dict(YO_FOLDS) if self.normalize_yo else {}
        out.update(self.letter_folds)
        return out


class Tokenizer:
    """
    Turns text into a flat list of token ids:
      - <S> opens the stream
      - each sentence boundary closes with </S> and opens the next sentence with <S>
      - the stream ends with </S> and never with a dangling <S>

    Owns its Vocabulary; training registers unseen words, querying does not.
    """

    def __init__(self, config: Optional[TokenizerConfig] = None,
                 vocabulary: Optional[Vocabulary] = None) -> None:
        self.cfg = config or TokenizerConfig()
        self.vocab = vocabulary if vocabulary is not None else Vocabulary()
        self._folds = self.cfg.folds()

    def normalize(self, text: str) -> str:
        return normalize_text(text, self._folds)

    def words(self, text: str) -> List[str]:
        """Normalised words of `text` after length filtering, boundaries dropped."""
        return [m.group("word") for m in _token_re.finditer(self.normalize(text))
                if m.group("word") and self._accept(m.group("word"))]

    def tokenize(self, text: str, register: bool = True) -> List[TokenID]:
        """
        Map `text` to token ids. With register=False unseen words resolve to UNK_ID
        and the vocabulary is left untouched.
        """
        out: List[TokenID] = [BOS_ID]
        at_sentence_start = True

        for m in _token_re.finditer(self.normalize(text)):
            word = m.group("word")
            if word:
                if not self._accept(word):
                    continue
                out.append(self.vocab.register(word) if register else self.vocab.id_of(word))
                at_sentence_start = False
            elif m.group("punct"):
                if not self.cfg.keep_punctuation:
                    continue
                mark = m.group("punct")
                out.append(self.vocab.register(mark) if register else self.vocab.id_of(mark))
                at_sentence_start = False
            elif not at_sentence_start:
                out.append(EOS_ID)
                out.append(BOS_ID)
                at_sentence_start = True

        if out[-1] == BOS_ID:
            out.pop()
        elif out[-1] != EOS_ID:
            out.append(EOS_ID)
        return out

    def id_of(self, word: str) -> TokenID:
        # exact hit first so sentinels ("<S>") are not lowercased away
        if word in self.vocab:
            return self.vocab.id_of(word)
        return self.vocab.id_of(self.normalize(word))

    def word_of(self, tid: TokenID) -> str:
        return self.vocab.word_of(tid)

    def _accept(self, word: str) -> bool:
        return word.isdigit() or len(word) >= self.cfg.min_word_length
