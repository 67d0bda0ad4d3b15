#!/usr/bin/env python3
"""
evaluation.py - Evaluation harness

- Trains an Autocompleter on a corpus training split (one passage per line).
- Walks every position of the held-out token streams and asks for the next word
  given the preceding context.
- Compares the scoring strategies on top-1 / top-k hit rate, MRR and latency.
- Writes a JSON summary report.

Usage:
python -m analytics.evaluation data/demo_corpus.txt --out results.json

"""
from __future__ import annotations

import argparse
import json
import time
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from ngram_autocompleter.context.vocabulary import BOS_ID, EOS_ID, UNK_ID
from ngram_autocompleter.core.autocompleter import Autocompleter
from ngram_autocompleter.utils.config_manager import STRATEGIES, EngineConfig


def load_corpus(path: Path) -> List[str]:
    """Load lines from corpus, strip whitespace and ignore empty lines."""
    with path.open("r", encoding="utf-8") as fh:
        lines = [ln.strip() for ln in fh if ln.strip()]
    return lines


def split_corpus(corpus: List[str], train_frac: float = 0.8) -> Tuple[List[str], List[str]]:
    """Deterministic train/test split."""
    n = max(1, int(len(corpus) * train_frac))
    return corpus[:n], corpus[n:]


def build_model_from_sentences(sentences: Iterable[str], max_order: int = 3) -> Autocompleter:
    """Train a fresh Autocompleter on the given sentences."""
    engine = Autocompleter(EngineConfig(max_order=max_order))
    engine.train_many(sentences)
    return engine


def _targets(tokens: Sequence[int]) -> Iterable[Tuple[Sequence[int], int]]:
    """(context, true_next) for every real word in a token stream."""
    for i, tok in enumerate(tokens):
        if tok in (BOS_ID, EOS_ID, UNK_ID):
            continue
        yield tokens[:i], tok


def evaluate_on_test(engine: Autocompleter, test_sentences: Iterable[str], top_k: int = 5,
                     strategies: Sequence[str] = STRATEGIES) -> Dict:
    """
    For each strategy: rank next-word suggestions at every known-word position of the
    test set and record whether the true word is ranked first / within top_k.
    Words never seen in training (UNK) cannot be predicted and are skipped.
    """
    pairs: List[Tuple[Sequence[int], str]] = []
    for s in test_sentences:
        toks = engine.tokenize(s)
        for ctx, tok in _targets(toks):
            pairs.append((ctx, engine.word_of(tok)))

    stats: Dict[str, Dict[str, float]] = {}
    original = engine.strategy
    try:
        for name in strategies:
            engine.set_strategy(name)
            top1 = hits = 0
            rr = 0.0
            t0 = time.perf_counter()
            for ctx, true_next in pairs:
                words = [s.word for s in engine.predict_tokens(ctx, top_k)]
                if true_next in words:
                    hits += 1
                    rank = words.index(true_next) + 1
                    rr += 1.0 / rank
                    if rank == 1:
                        top1 += 1
            elapsed = time.perf_counter() - t0
            total = len(pairs)
            stats[name] = {
                "total": total,
                "top1": top1,
                "hits": hits,
                "mrr": rr / total if total else 0.0,
                "time": elapsed,
            }
    finally:
        engine.set_strategy(original)
    return stats


def summarize_and_write(stats: Dict, out_path: Path, top_k: int = 5):
    """Write JSON summary and print summary to stdout."""
    with out_path.open("w", encoding="utf-8") as fh:
        json.dump(stats, fh, indent=2)

    def pct(h, t):
        return f"{(100.0 * h / t):.2f}%" if t else "N/A"

    print("=== Evaluation Summary ===")
    for name, st in stats.items():
        tot = st["total"]
        print(f"{name:14s} | top1: {pct(st['top1'], tot)} | top{top_k}: {pct(st['hits'], tot)} "
              f"| mrr: {st['mrr']:.4f} | avg time/query: {(st['time'] / tot if tot else 0):.6f}s")
    print("==========================")
    print(f"Full JSON written to: {out_path}")


def main():
    parser = argparse.ArgumentParser(description="Evaluate the n-gram autocompleter on a corpus")
    parser.add_argument("corpus", type=str, help="Path to corpus (one passage per line)")
    parser.add_argument("--out", type=str, default="evaluation_results.json", help="Output JSON file")
    parser.add_argument("--train-frac", type=float, default=0.8, help="Training fraction (0..1)")
    parser.add_argument("--order", type=int, default=3, help="n-gram order")
    parser.add_argument("--top-k", type=int, default=5, help="suggestions per query")
    args = parser.parse_args()

    corpus_path = Path(args.corpus)
    if not corpus_path.exists():
        print(f"Corpus not found: {corpus_path}")
        return

    corpus = load_corpus(corpus_path)
    train, test = split_corpus(corpus, train_frac=args.train_frac)
    print(f"Loaded {len(corpus)} lines: train={len(train)}, test={len(test)}")

    engine = build_model_from_sentences(train, max_order=args.order)
    stats = evaluate_on_test(engine, test, top_k=args.top_k)
    summarize_and_write(stats, Path(args.out), top_k=args.top_k)


if __name__ == "__main__":
    main()
