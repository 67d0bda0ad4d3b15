# tests/test_tokenizer.py
import pytest

from ngram_autocompleter.context.normalizer import normalize_text
from ngram_autocompleter.context.tokenizer import Tokenizer, TokenizerConfig
from ngram_autocompleter.context.vocabulary import (
    BOS,
    BOS_ID,
    EOS,
    EOS_ID,
    UNK,
    UNK_ID,
    Vocabulary,
)


@pytest.fixture
def tok():
    return Tokenizer()


def words_of(tok, ids):
    return [tok.word_of(i) for i in ids]


# vocabulary -----------------------------------------------------

def test_reserved_ids_come_first():
    v = Vocabulary()
    assert (v.id_of(UNK), v.id_of(BOS), v.id_of(EOS)) == (UNK_ID, BOS_ID, EOS_ID) == (0, 1, 2)
    assert len(v) == 3


def test_vocabulary_is_append_only_in_first_seen_order():
    v = Vocabulary()
    assert v.register("cat") == 3
    assert v.register("dog") == 4
    assert v.register("cat") == 3
    assert len(v) == 5
    assert v.word_of(4) == "dog"


def test_vocabulary_lookups_never_fail():
    v = Vocabulary()
    assert v.id_of("never-seen") == UNK_ID
    assert v.word_of(12345) == UNK
    assert v.word_of(-1) == UNK


# normalisation -----------------------------------------------------

def test_normalize_composes_lowercases_and_folds():
    decomposed = "\u0415\u0308\u041b\u041a\u0410"  # Cyrillic E + combining diaeresis, then LKA
    assert normalize_text(decomposed) == "ёлка"
    assert normalize_text(decomposed, {"ё": "е"}) == "елка"
    assert normalize_text("") == ""


def test_yo_folding_is_configurable():
    assert Tokenizer().words("Ёлка") == ["елка"]
    assert Tokenizer(TokenizerConfig(normalize_yo=False)).words("Ёлка") == ["ёлка"]


def test_extra_letter_folds():
    t = Tokenizer(TokenizerConfig(normalize_yo=False, letter_folds={"ß": "ss"}))
    assert t.words("Straße") == ["strasse"]


# segmentation -----------------------------------------------------

def test_hello_world_with_sentence_markers(tok):
    ids = tok.tokenize("Hello, world!")
    assert ids == [BOS_ID, tok.id_of("hello"), tok.id_of("world"), EOS_ID]
    assert words_of(tok, ids) == [BOS, "hello", "world", EOS]


def test_hyphens_and_apostrophes_stay_inside_words(tok):
    assert tok.words("A well-known author didn't come") == [
        "a", "well-known", "author", "didn't", "come"
    ]
    assert tok.words("rock’n’roll") == ["rock’n’roll"]


def test_dangling_hyphen_is_not_part_of_word(tok):
    assert tok.words("end- -start") == ["end", "start"]


def test_non_latin_letters_and_digits(tok):
    assert tok.words("Кое-что в 2024 году") == ["кое-что", "в", "2024", "году"]


def test_sentence_boundaries(tok):
    ids = tok.tokenize("One. Two")
    assert words_of(tok, ids) == [BOS, "one", EOS, BOS, "two", EOS]


def test_repeated_and_mixed_punctuation_is_one_boundary(tok):
    ids = tok.tokenize("wait?! what... ok; fine")
    assert words_of(tok, ids) == [
        BOS, "wait", EOS, BOS, "what", EOS, BOS, "ok", EOS, BOS, "fine", EOS
    ]


def test_leading_punctuation_does_not_open_empty_sentence(tok):
    assert words_of(tok, tok.tokenize("... hi")) == [BOS, "hi", EOS]


@pytest.mark.parametrize("text", ["", "   ", "...", "!?;", ", , ,"])
def test_empty_or_boundary_only_input(tok, text):
    assert tok.tokenize(text) == []


@pytest.mark.parametrize("text", [
    "hello",
    "hello.",
    "a. b. c",
    "first! second? third;",
    "x... y!!! z",
    ".. leading and trailing ..",
])
def test_stream_is_closed(tok, text):
    ids = tok.tokenize(text)
    assert ids[0] == BOS_ID
    assert ids[-1] == EOS_ID
    for i, t in enumerate(ids[:-1]):
        if t == EOS_ID:
            assert ids[i + 1] == BOS_ID


def test_min_word_length_exempts_digits():
    t = Tokenizer(TokenizerConfig(min_word_length=3))
    assert t.words("a big 7 cat in 42 ways") == ["big", "7", "cat", "42", "ways"]


def test_query_mode_does_not_grow_vocabulary(tok):
    tok.tokenize("the cat")
    size = len(tok.vocab)
    ids = tok.tokenize("the zebra", register=False)
    assert ids == [BOS_ID, tok.id_of("the"), UNK_ID, EOS_ID]
    assert len(tok.vocab) == size


def test_training_mode_registers_new_words(tok):
    size = len(tok.vocab)
    tok.tokenize("brand new words")
    assert len(tok.vocab) == size + 3


def test_id_of_normalizes_but_keeps_sentinels(tok):
    tok.tokenize("Ёж")
    assert tok.id_of("ЕЖ") == tok.id_of("еж") != UNK_ID
    assert tok.id_of(BOS) == BOS_ID
    assert tok.id_of(EOS) == EOS_ID


def test_special_ids():
    v = Vocabulary()
    cat = v.register("cat")
    assert all(v.is_special(t) for t in (UNK_ID, BOS_ID, EOS_ID))
    assert not v.is_special(cat)


def test_dashes_join_words_like_hyphens(tok):
    assert tok.words("north–south and well—known") == ["north–south", "and", "well—known"]
    assert tok.words("pause — then go") == ["pause", "then", "go"]


def test_punctuation_dropped_by_default(tok):
    ids = tok.tokenize("Hello, world!")
    assert words_of(tok, ids) == [BOS, "hello", "world", EOS]


def test_punctuation_kept_when_enabled():
    t = Tokenizer(TokenizerConfig(keep_punctuation=True))
    ids = t.tokenize('Hello, "world"! Bye')
    assert words_of(t, ids) == [BOS, "hello", ",", '"', "world", '"', EOS, BOS, "bye", EOS]
    # boundaries never become tokens, whatever the setting
    assert "!" not in t.vocab
    assert t.words("Hello, world") == ["hello", "world"]
