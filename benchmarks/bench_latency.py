"""Benchmark: per-keystroke parse latency (p50/p95/mean).

An argument field re-parses its whole text on every edit.  This replays
typing a realistic ``a{sv}`` literal one character at a time, measuring
each parse of the partial text, most of which is invalid.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import dtui

_WARMUP: int = 20
_PASSES: int = 200

_SIGNATURE = "a{sv}"
_LITERAL = (
    '{"volume": "u"->42, "title": "s"->"Hello, world", '
    '"position": "(ii)"->(10, 20), "tags": "as"->["a", "b", "c"]}'
)


def bench_keystroke_latency() -> dict[str, object]:
    """Benchmark parsing every prefix of a literal, as while typing it.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    parser = dtui.compile(_SIGNATURE)
    prefixes = [_LITERAL[: i + 1] for i in range(len(_LITERAL))]

    # Warmup
    for _ in range(_WARMUP):
        for text in prefixes:
            parser.parse(text)

    latencies_ms: list[float] = []
    for _ in range(_PASSES):
        for text in prefixes:
            t0 = time.perf_counter()
            parser.parse(text)
            latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "dtui_keystroke_latency_a{sv}",
        "iterations": n,
        "total_seconds": round(total, 4),
        "ops_per_second": round(n / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


if __name__ == "__main__":
    result = bench_keystroke_latency()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
