# ngram_autocompleter/context/__init__.py
# text-side components: normalisation, vocabulary and tokenisation

from .normalizer import normalize_text  # NFC + lowercase + letter folds
from .vocabulary import (
    Vocabulary,
    TokenID,
    UNK,
    BOS,
    EOS,
    UNK_ID,
    BOS_ID,
    EOS_ID,
)  # append-only word <-> id table and its sentinels
from .tokenizer import Tokenizer, TokenizerConfig  # text -> sentence-delimited id stream

__all__ = [
    "normalize_text",
    "Vocabulary",
    "TokenID",
    "UNK",
    "BOS",
    "EOS",
    "UNK_ID",
    "BOS_ID",
    "EOS_ID",
    "Tokenizer",
    "TokenizerConfig",
]
