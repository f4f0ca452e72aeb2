"""Benchmark helper for the naive search, split and replace scans."""
from __future__ import annotations

import argparse
import json
import statistics
from dataclasses import asdict, dataclass
from time import perf_counter
from typing import Callable, Sequence

from textvalue import TextValue


@dataclass(slots=True)
class ScanBenchmarkResult:
    operation: str
    source_chars: int
    token_chars: int
    runs: int
    median_ms: float
    best_ms: float


def _build_source(size: int, token: str) -> TextValue:
    # Near-misses of the token keep the inner confirmation loop busy.
    near_miss = token[:-1] + "_" if len(token) > 1 else "_"
    block = f"{near_miss} {near_miss} {token} "
    repeats = max(1, size // len(block))
    return TextValue.from_text(block * repeats)


def _time(operation: Callable[[], object], runs: int) -> list[float]:
    samples: list[float] = []
    for _ in range(runs):
        started = perf_counter()
        operation()
        samples.append((perf_counter() - started) * 1000)
    return samples


def run_benchmarks(sizes: Sequence[int], *, token: str, runs: int) -> list[ScanBenchmarkResult]:
    results: list[ScanBenchmarkResult] = []
    for size in sizes:
        source = _build_source(size, token)
        operations: dict[str, Callable[[], object]] = {
            "index_of": lambda: source.index_of(token + "!", 0),
            "last_index_of": lambda: source.last_index_of(token + "!"),
            "split": lambda: source.split(token),
            "replace": lambda: source.replace(token, token.upper()),
            "replace_first": lambda: source.replace_first(token, token.upper()),
        }
        for name, operation in operations.items():
            samples = _time(operation, runs)
            results.append(
                ScanBenchmarkResult(
                    operation=name,
                    source_chars=source.length,
                    token_chars=len(token),
                    runs=runs,
                    median_ms=statistics.median(samples),
                    best_ms=min(samples),
                )
            )
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Measure TextValue scan latency on generated sources.")
    parser.add_argument(
        "--size",
        action="append",
        type=int,
        metavar="CHARS",
        help="Approximate source size in characters; can be supplied multiple times.",
    )
    parser.add_argument("--token", default="bengal", help="Token searched for, split on and replaced.")
    parser.add_argument("--runs", type=int, default=5, help="Timed runs per operation.")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON results.")
    args = parser.parse_args()

    if not args.token:
        parser.error("--token must not be empty")
    sizes = args.size or [1_000, 10_000, 50_000]
    results = run_benchmarks(sizes, token=args.token, runs=max(1, args.runs))

    if args.json:
        print(json.dumps([asdict(result) for result in results], indent=2))
        return

    header = f"{'operation':<14} {'chars':>8} {'median ms':>10} {'best ms':>10}"
    print(header)
    print("-" * len(header))
    for result in results:
        print(
            f"{result.operation:<14} {result.source_chars:>8} {result.median_ms:>10.2f} {result.best_ms:>10.2f}"
        )


if __name__ == "__main__":
    main()
