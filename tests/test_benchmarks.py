"""Structural tests for the dtui benchmark modules."""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent / "benchmarks"))


def test_bench_throughput_importable() -> None:
    """Verify bench_throughput module can be imported."""
    mod = importlib.import_module("bench_throughput")
    assert hasattr(mod, "bench_parse_throughput")
    assert hasattr(mod, "bench_format_throughput")


def test_bench_latency_importable() -> None:
    """Verify bench_latency module can be imported."""
    mod = importlib.import_module("bench_latency")
    assert hasattr(mod, "bench_keystroke_latency")


def test_parse_throughput_returns_expected_keys() -> None:
    """Verify bench_parse_throughput returns expected result keys."""
    from bench_throughput import bench_parse_throughput

    result = bench_parse_throughput()
    assert "operation" in result
    assert "iterations" in result
    assert "ops_per_second" in result
    assert "avg_latency_ms" in result
    assert float(result["ops_per_second"]) > 0  # type: ignore[arg-type]


def test_format_throughput_returns_expected_keys() -> None:
    """Verify bench_format_throughput returns expected result keys."""
    from bench_throughput import bench_format_throughput

    result = bench_format_throughput()
    assert "operation" in result
    assert "ops_per_second" in result
    assert "avg_latency_ms" in result


def test_keystroke_latency_percentiles_are_ordered() -> None:
    """Verify bench_keystroke_latency reports p50 <= p95."""
    from bench_latency import bench_keystroke_latency

    result = bench_keystroke_latency()
    assert float(result["p50_ms"]) <= float(result["p95_ms"])  # type: ignore[arg-type]
