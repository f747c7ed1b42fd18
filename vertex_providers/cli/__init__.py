"""vertex-providers debugging CLI (package entrypoint).

Public API re-exports:
- ``main``: CLI entrypoint callable
- ``build_parser``: argument parser factory
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import handle_run
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint; returns the process exit code."""
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    return handle_run(args)


__all__ = ["main", "build_parser"]
