"""Benchmark: gsh parse latency (p50/p95/mean).

Measures per-call latency for parsing a small script and a script with
many recoverable errors (the error-recovery path).
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import gsh

_WARMUP: int = 100
_ITERATIONS: int = 1_000

_MINIMAL_SCRIPT = """
agent Helper {
  model: claude
}
answer = "hello" | Helper
print(answer)
"""

_BROKEN_SCRIPT = "\n".join(
    [
        "x = 5; y = 10",
        "if x > 5) {",
        "  y = 1",
        "}",
        "mcp fs { 123: 4 }",
        "z = 5 & 3",
        "ok = true",
    ]
    * 10
)


def _measure(operation: str, source: str) -> dict[str, object]:
    for _ in range(_WARMUP):
        gsh.parse_program(source)

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        gsh.parse_program(source)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": operation,
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
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


def bench_parse_latency() -> dict[str, object]:
    """Benchmark parse latency on a minimal, well-formed script.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    return _measure("gsh_parse_latency_minimal", _MINIMAL_SCRIPT)


def bench_recovery_latency() -> dict[str, object]:
    """Benchmark parse latency when every few lines needs error recovery."""
    return _measure("gsh_parse_latency_recovery", _BROKEN_SCRIPT)


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    results = [bench_parse_latency(), bench_recovery_latency()]
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(results, fh, indent=2)
    print(f"Results saved to {output_path}")
