"""Benchmark: gsh tokenize and parse throughput.

Measures how many tokenize and parse operations complete per second
using the public gsh.tokenize() and gsh.parse() APIs.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import gsh

_ITERATIONS: int = 1_000
_TOKENIZE_ITERATIONS: int = 2_000

_SAMPLE_SCRIPT = '''
# Research pipeline
mcp filesystem {
  command: "npx",
  args: ["-y", "@modelcontextprotocol/server-filesystem", "/tmp"],
}

model claude {
  provider: "anthropic"
  model: "claude-sonnet"
  temperature: 0.2
}

agent Researcher {
  model: claude
  systemPrompt: """
    You research topics thoroughly.
    Cite your sources.
  """
  tools: [filesystem.read_file, filesystem.write_file]
}

tool summarize(text: string, limit: number): string {
  if (text.length > limit) {
    return text.slice(0, limit)
  }
  return text
}

topics = ["parsers", "agents", "shells"]
for (topic of topics) {
  try {
    notes = `Research ${topic}` | Researcher
    print(summarize(notes, 200) ?? "no notes")
  } catch (err) {
    print(err.message)
  }
}
'''


def _result(operation: str, iterations: int, total: float) -> dict[str, object]:
    result: dict[str, object] = {
        "operation": operation,
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "avg_latency_ms": round(total / iterations * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_parse_throughput() -> dict[str, object]:
    """Benchmark full parse (lex + parse) throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        gsh.parse(_SAMPLE_SCRIPT)
    return _result("gsh_parse_throughput", _ITERATIONS, time.perf_counter() - start)


def bench_tokenize_throughput() -> dict[str, object]:
    """Benchmark lexer-only throughput on the same script."""
    start = time.perf_counter()
    for _ in range(_TOKENIZE_ITERATIONS):
        gsh.tokenize(_SAMPLE_SCRIPT)
    return _result("gsh_tokenize_throughput", _TOKENIZE_ITERATIONS, time.perf_counter() - start)


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_parse_throughput, "parse_throughput_baseline.json"),
        (bench_tokenize_throughput, "tokenize_throughput_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
