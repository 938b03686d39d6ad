"""Benchmark: literal parse and format throughput.

Measures how many large array literals can be parsed, and how many parsed
values can be rendered back to literal text, per second.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import dtui

_ITERATIONS: int = 200
_FORMAT_ITERATIONS: int = 200

_SIGNATURE = "a(sud)"
_LITERAL = "[" + ", ".join(f'("item{i}", {i}, {i}.5)' for i in range(100)) + "]"


def bench_parse_throughput() -> dict[str, object]:
    """Benchmark parsing a 100-element array of structures.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    parser = dtui.compile(_SIGNATURE)
    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        parser.parse(_LITERAL)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "dtui_parse_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_format_throughput() -> dict[str, object]:
    """Benchmark rendering the parsed array back to literal text.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    value = dtui.parse(_SIGNATURE, _LITERAL)

    start = time.perf_counter()
    for _ in range(_FORMAT_ITERATIONS):
        dtui.format(value)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "dtui_format_throughput",
        "iterations": _FORMAT_ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_FORMAT_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _FORMAT_ITERATIONS * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_parse_throughput, "parse_throughput_baseline.json"),
        (bench_format_throughput, "format_throughput_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
