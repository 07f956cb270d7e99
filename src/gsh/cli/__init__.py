"""Command-line interface for gsh-script.

``gsh.cli.main`` holds the Click group and every command; the console
script ``gsh-script`` points at ``gsh.cli.main:cli``.
"""
from __future__ import annotations
