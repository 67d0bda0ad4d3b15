# tools/profile_suggest.py
"""
Small profiling harness for Autocompleter.predict.
Usage:
  python tools/profile_suggest.py --corpus data/demo_corpus.txt --iters 1000 --fragment "the quick brown"

Prints mean/median/std latency per strategy and a sample of suggestions.
"""
import argparse
import statistics
import time
from pathlib import Path

from ngram_autocompleter.core.autocompleter import Autocompleter
from ngram_autocompleter.utils.config_manager import EngineConfig


def measure(engine, fragment, warm, iters):
    for _ in range(warm):
        engine.predict(fragment)
    latencies = []
    for _ in range(iters):
        t0 = time.perf_counter()
        engine.predict(fragment)
        latencies.append((time.perf_counter() - t0) * 1000.0)  # ms
    return latencies


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--corpus", type=str, default="data/demo_corpus.txt", help="training text")
    parser.add_argument("--order", type=int, default=3, help="n-gram order")
    parser.add_argument("--warm", type=int, default=50, help="warmup iterations")
    parser.add_argument("--iters", type=int, default=500, help="measured iterations")
    parser.add_argument("--fragment", type=str, default="the quick brown", help="input fragment")
    args = parser.parse_args()

    engine = Autocompleter(EngineConfig(max_order=args.order))
    engine.train(Path(args.corpus).read_text(encoding="utf-8"))
    print("model:", engine.stats())

    for name in ("exclusion", "multiplicative"):
        engine.set_strategy(name)
        lat = measure(engine, args.fragment, args.warm, args.iters)
        print("%-14s mean=%.3f median=%.3f stdev=%.3f min=%.3f max=%.3f (ms)" % (
            name,
            statistics.mean(lat),
            statistics.median(lat),
            statistics.pstdev(lat),
            min(lat),
            max(lat),
        ))
        print("  sample:", [(s.word, round(s.score, 4)) for s in engine.predict(args.fragment)])


if __name__ == "__main__":
    main()
