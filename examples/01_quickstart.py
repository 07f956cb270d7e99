#!/usr/bin/env python3
"""Example: Quickstart for gsh-script

Minimal working example: parse a gsh script, inspect its statements,
format it to canonical style, dump the AST, and look at diagnostics
from a broken script.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install gsh-script
"""
from __future__ import annotations

import gsh
from gsh.ast import AstSerializer

GSH_SOURCE = '''
model claude {
  provider: "anthropic"
  temperature: 0.2
}

agent Writer {
  model: claude
  systemPrompt: """
    You write short, friendly summaries.
  """
}

topics = ["lexers", "parsers"]
for (topic of topics) {
  summary = `Summarize ${topic}` | Writer
  print(summary)
}
'''

BROKEN_SOURCE = '''
x = 5; y = 10
if x > 5) {
  y = 1
}
z = 5 & 3
'''


def main() -> None:
    print(f"gsh-script version: {gsh.__version__}")

    # Step 1: Parse gsh source into an AST
    program = gsh.parse(GSH_SOURCE)
    kinds = [type(s).__name__ for s in program.statements]
    print(f"Parsed {len(program.statements)} statements: {', '.join(kinds)}")

    # Step 2: Format to canonical style
    canonical = gsh.format(program)
    print(f"\nFormatted script ({len(canonical)} chars):")
    print(canonical)

    # Step 3: Dump the AST as JSON
    serializer = AstSerializer()
    print(serializer.to_json(program)[:200])

    # Step 4: Collect diagnostics without raising
    _, diagnostics = gsh.parse_program(BROKEN_SOURCE)
    print(f"\nBroken script: {len(diagnostics)} diagnostics")
    for diag in diagnostics:
        print(f"  [{diag.kind.name}] {diag.message}")


if __name__ == "__main__":
    main()
