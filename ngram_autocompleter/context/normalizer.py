# ngram_autocompleter/context/normalizer.py
import unicodedata
from typing import Mapping, Optional

# letter variants folded onto their plain counterpart ("ё" is written as "е" in most Russian text)
YO_FOLDS = {"ё": "е"}


def normalize_text(s: str, folds: Optional[Mapping[str, str]] = None) -> str:
    """
    Canonical form used for both training and querying:
    NFC composition, Unicode lowercasing, then optional letter folds.
    """
    if not s:
        return ""
    # compose decomposed sequences (e + combining diaeresis -> ё) before folding
    s = unicodedata.normalize("NFC", s)
    s = s.lower()
    if folds:
        for src, dst in folds.items():
            s = s.replace(src, dst)
    return s
