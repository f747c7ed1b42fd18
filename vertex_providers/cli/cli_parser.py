"""CLI parser construction for vertex-providers.

This module wires argument shapes only. Handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ..config.defaults import VERTEX_CLI_DEFAULT_MAX_TOKENS


def _str2bool(v: str | None) -> bool:
    """Best-effort conversion of common truthy/falsey strings to bool.

    ``None`` (flag given without a value) maps to ``True``.
    """
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream`` flags to a parser.

    ``--stream`` accepts an optional boolean (``--stream``, ``--stream false``)
    and ``--no-stream`` is an explicit negation alias. Streaming is the default.
    """
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=True)
    grp.add_argument("--no-stream", dest="stream", action="store_false")


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI parser. No side effects, no I/O."""
    p = argparse.ArgumentParser(
        prog="vertex-providers",
        description="Send a prompt to Claude on Vertex AI (use --dry-run to inspect the request)",
    )
    p.add_argument("--prompt", default=None, help="User message text")
    p.add_argument("--system", default=None, help="Optional system instruction")
    p.add_argument("--max-tokens", type=int, default=VERTEX_CLI_DEFAULT_MAX_TOKENS)
    add_stream_flags(p)
    p.add_argument("--project", default=None, help="Google Cloud project id")
    p.add_argument("--location", default=None, help="Vertex region, e.g. us-east5")
    p.add_argument("--model", default=None, help="Vertex model id, e.g. claude-3-opus@20240229")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    p.add_argument("--log-file", default=None, help="Also write JSON logs to this file")
    p.add_argument("--debug", action="store_true", help="Log the request body")
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the endpoint and body as JSON without fetching a token or calling out",
    )
    return p


__all__ = ["add_stream_flags", "build_parser"]
