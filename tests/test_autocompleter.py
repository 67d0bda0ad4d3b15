# tests/test_autocompleter.py
# end-to-end behaviour of the train/predict facade

from collections import defaultdict

import pytest

from ngram_autocompleter import Autocompleter, ConfigurationError, EngineConfig
from ngram_autocompleter.context.vocabulary import BOS_ID, EOS_ID, UNK_ID
from ngram_autocompleter.core.scoring import ALPHA, ExclusionBackoff, MultiplicativeBackoff


def ngrams(tokens, max_order):
    for i in range(len(tokens)):
        for k in range(1, max_order + 1):
            if i - k + 1 >= 0:
                yield tuple(tokens[i - k + 1:i + 1])


# construction -----------------------------------------------------

@pytest.mark.parametrize("order", [0, -3])
def test_non_positive_order_is_rejected(order):
    with pytest.raises(ConfigurationError):
        Autocompleter(EngineConfig(max_order=order))
    with pytest.raises(ValueError):
        Autocompleter(EngineConfig(max_order=order))


def test_unknown_strategy_is_rejected():
    with pytest.raises(ConfigurationError):
        Autocompleter(EngineConfig(strategy="blend"))
    with pytest.raises(ConfigurationError):
        Autocompleter(strategy="blend")


def test_default_engine():
    ac = Autocompleter()
    assert ac.max_order == 3
    assert isinstance(ac.strategy, ExclusionBackoff)
    assert ac.stats() == {
        "max_order": 3,
        "strategy": "exclusion",
        "vocab_size": 3,
        "contexts": 1,
        "tokens_observed": 0,
    }


# training -----------------------------------------------------

def test_training_is_additive(sample_text):
    ac = Autocompleter(EngineConfig(max_order=3))
    ac.train(sample_text)
    tokens = ac.tokenize(sample_text)
    once = {ng: ac.trie.count(ng) for ng in ngrams(tokens, 3)}
    seen_once = ac.trie.total_tokens_observed()

    ac.train(sample_text)
    for ng, c in once.items():
        assert ac.trie.count(ng) == 2 * c
    assert ac.trie.total_tokens_observed() == 2 * seen_once


def test_all_orders_are_inserted():
    ac = Autocompleter(EngineConfig(max_order=3))
    ac.train("the cat sat")
    the, cat, sat = (ac.id_of(w) for w in ("the", "cat", "sat"))
    assert ac.trie.count([the]) == 1
    assert ac.trie.count([BOS_ID, the]) == 1
    assert ac.trie.count([BOS_ID, the, cat]) == 1
    assert ac.trie.count([cat, sat, EOS_ID]) == 1
    assert ac.trie.count([BOS_ID, the, cat, sat]) == 0  # longer than max_order
    assert ac.trie.total_tokens_observed() == 5  # <S> the cat sat </S>


def test_candidates_are_exactly_observed_continuations(trained, sample_text):
    tokens = trained.tokenize(sample_text)
    expected = defaultdict(set)
    for i, tok in enumerate(tokens):
        for length in range(0, trained.max_order):
            if i - length >= 0:
                expected[tuple(tokens[i - length:i])].add(tok)
    for ctx, conts in expected.items():
        assert trained.trie.candidates(ctx) == conts


@pytest.mark.parametrize("text", ["", "   ", "\n\t", "...", None, 42])
def test_train_ignores_empty_or_invalid_input(text):
    ac = Autocompleter()
    ac.train(text)
    assert ac.trie.total_tokens_observed() == 0
    assert len(ac.vocab) == 3


def test_train_many():
    ac = Autocompleter()
    ac.train_many(["the cat sat", "", "the dog ran"])
    assert ac.trie.count([ac.id_of("the")]) == 2


# prediction -----------------------------------------------------

def test_empty_model_predicts_nothing():
    ac = Autocompleter()
    ac.train("")
    assert ac.predict("anything") == []
    assert ac.predict("") == []


def test_predict_never_raises_on_odd_input(trained):
    assert trained.predict(None) == []
    assert trained.predict("") != []  # empty context backs off to unigrams
    for text in ("!!!", "zebra zebra", "\x00\x01", "😀 ok", "-" * 50):
        out = trained.predict(text)
        assert isinstance(out, list)
        assert all(s.score >= 0 for s in out)


def test_unknown_words_back_off_to_unigrams(trained):
    out = trained.predict("zebra giraffe")
    assert out
    assert "<UNK>" not in [s.word for s in out]
    assert "zebra" not in trained.vocab  # queries never grow the vocabulary


def test_predict_uses_trailing_context(trained):
    words = [s.word for s in trained.predict("the cat")]
    assert words[:3] == ["sat", "ran", "ate"]


def test_strategies_agree_on_clear_winner(trained):
    trained.set_strategy("multiplicative")
    assert [s.word for s in trained.predict("the cat")][:3] == ["sat", "ran", "ate"]
    assert trained.predict("the cat")[0].score == pytest.approx(0.5)


def test_sentinels_never_suggested(trained):
    for text in ("", "the", "the cat sat on the mat.", "the dog ran away"):
        for s in trained.predict(text, top_k=50):
            assert s.word not in ("<UNK>", "<S>", "</S>")


def test_eos_can_be_offered():
    ac = Autocompleter(EngineConfig(max_order=2, include_eos=True))
    ac.train("the cat sat.")
    assert ac.predict("sat")[0].word == "</S>"


def test_top_k(trained):
    assert len(trained.predict("the", top_k=1)) == 1
    assert len(trained.predict("the", top_k=3)) == 3
    assert trained.predict("the", top_k=0) == []
    assert len(trained.predict("the")) == 5
    assert len(trained.predict("the", top_k="3")) == 5  # non-int falls back to the default


def test_prediction_is_deterministic(sample_text):
    a = Autocompleter()
    b = Autocompleter()
    a.train(sample_text)
    b.train(sample_text)
    for text in ("the", "the cat", "a", "dog", ""):
        first = a.predict(text, top_k=10)
        assert a.predict(text, top_k=10) == first
        assert b.predict(text, top_k=10) == first


def test_suggest_returns_plain_dicts(trained):
    out = trained.suggest("the cat", top_k=2)
    assert [d["word"] for d in out] == ["sat", "ran"]
    assert set(out[0]) == {"word", "score"}


# scoring properties through the facade -----------------------------------------------------

def test_exclusion_mass_sums_to_one(exact):
    vocab_ids = range(len(exact.vocab))
    the, cat = exact.id_of("the"), exact.id_of("cat")
    for ctx in ([], [the], [the, cat], [UNK_ID], [cat, UNK_ID], [EOS_ID, BOS_ID]):
        total = sum(exact.strategy.score_many(vocab_ids, ctx).values())
        assert total == pytest.approx(1.0, abs=1e-9)


def test_default_cutoff_never_exceeds_one(trained):
    total = sum(trained.strategy.score_many(range(len(trained.vocab)), [trained.id_of("dog")]).values())
    assert total <= 1.0 + 1e-12


def test_single_continuation_bigram():
    ac = Autocompleter(EngineConfig(max_order=2, escape_cutoff=0.0))
    ac.train("the cat sat")
    the = ac.id_of("the")

    out = ac.predict_tokens([the])
    assert out[0].word == "cat"
    # [the] saw only "cat": count 1 of denominator 1 + 1, the rest escapes
    assert out[0].score == pytest.approx(0.5)
    assert [s.word for s in out] == ["cat", "the", "sat"]

    ac.set_strategy("multiplicative")
    out = ac.predict_tokens([the])
    assert out[0].word == "cat"
    assert out[0].score == pytest.approx(1.0)


def test_unseen_trigram_is_discounted_bigram():
    ac = Autocompleter(EngineConfig(max_order=3, strategy="multiplicative"))
    ac.train("the cat sat. " * 5 + "a cat ran.")
    the, cat, sat, ran = (ac.id_of(w) for w in ("the", "cat", "sat", "ran"))
    s = ac.strategy
    assert isinstance(s, MultiplicativeBackoff)
    assert ac.trie.count([the, cat]) == 5
    assert ac.trie.count([the, cat, ran]) == 0

    assert s.score(ran, [the, cat]) == pytest.approx(ALPHA * s.score(ran, [cat]))
    assert s.score(ran, [cat]) == pytest.approx(1 / 6)
    # observed trigram: plain relative frequency, no discount
    assert s.score(sat, [the, cat]) == pytest.approx(1.0)


# vocabulary introspection -----------------------------------------------------

def test_id_of_and_word_of(trained):
    cat = trained.id_of("cat")
    assert cat > EOS_ID
    assert trained.id_of("CAT") == cat
    assert trained.word_of(cat) == "cat"
    assert trained.id_of("unicorn") == UNK_ID
    assert trained.word_of(10_000) == "<UNK>"
    assert trained.id_of("<S>") == BOS_ID


def test_ids_follow_first_seen_order():
    ac = Autocompleter()
    ac.train("zeta alpha zeta beta")
    assert [ac.id_of(w) for w in ("zeta", "alpha", "beta")] == [3, 4, 5]


def test_set_strategy_accepts_instances(trained):
    custom = MultiplicativeBackoff(trained.trie, trained.max_order, alpha=0.1)
    assert trained.set_strategy(custom) is custom
    assert trained.ranker.strategy is custom
    with pytest.raises(ConfigurationError):
        trained.set_strategy("nope")


def test_punctuation_setting_reaches_the_tokenizer():
    ac = Autocompleter(EngineConfig(max_order=2, keep_punctuation=True))
    ac.train("well, well, well")
    assert [s.word for s in ac.predict("well")][:1] == [","]
