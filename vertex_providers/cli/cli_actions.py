"""CLI action handlers.

Purpose
-------
Turn parsed arguments into either a dry-run plan (no credentials, no network)
or one real adapter call whose output goes to stdout. Errors are printed as
JSON to stderr with a non-zero return code.

This module has no top-level side effects and is safe to import in tests.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Callable, Dict, Optional, TextIO

from pydantic import ValidationError

from ..base.cancellation import CancelledError
from ..base.errors import ProviderError
from ..base.logging import LogContext, configure_logger, get_logger, normalized_log_event
from ..base.models import GenerationRequest
from ..base.streaming import DONE_SENTINEL
from ..vertex import VertexClaudeProvider

ProviderFactory = Callable[..., VertexClaudeProvider]


def build_provider(args: argparse.Namespace, factory: ProviderFactory = VertexClaudeProvider) -> VertexClaudeProvider:
    """Instantiate the provider from CLI overrides (``None`` keeps configured values)."""
    return factory(project_id=args.project, location=args.location, model=args.model)


def build_generation_request(args: argparse.Namespace) -> GenerationRequest:
    """Validate the CLI prompt options into a single-turn request."""
    return GenerationRequest.from_options(
        {
            "messages": [{"role": "user", "content": args.prompt}],
            "system": args.system,
            "max_tokens": args.max_tokens,
            "stream": bool(args.stream),
        }
    )


def plan_run(args: argparse.Namespace, factory: ProviderFactory = VertexClaudeProvider) -> Dict[str, Any]:
    """Return the JSON-serializable plan of the call ``args`` describe, without I/O."""
    provider = build_provider(args, factory)
    return {
        "provider": provider.provider_name,
        "project_id": provider.project_id,
        "location": provider.location,
        "model": provider.model,
        "url": provider.endpoint_url,
        "body": provider.build_body(build_generation_request(args)),
    }


def fragment_text(fragment: Any) -> Optional[str]:
    """Return printable text carried by a progress fragment, if any.

    Batch outputs arrive as ``str``; Anthropic events arrive as dicts whose
    ``delta.text`` or ``content_block.text`` holds the text.
    """
    if isinstance(fragment, str):
        return None if fragment == DONE_SENTINEL else fragment
    if not isinstance(fragment, dict):
        return None
    for key in ("delta", "content_block"):
        inner = fragment.get(key)
        if isinstance(inner, dict) and isinstance(inner.get("text"), str):
            return inner["text"]
    return None


async def run_call(
    provider: VertexClaudeProvider,
    request: GenerationRequest,
    *,
    out: TextIO,
    debug: bool = False,
) -> None:
    """Execute one call, writing text to ``out`` as it arrives."""
    if not request.stream:
        for reply in await provider.complete(request, debug=debug):
            out.write(reply + "\n")
        return

    def _on_progress(fragment: Any) -> None:
        if fragment == DONE_SENTINEL:
            out.write("\n")
        elif (text := fragment_text(fragment)) is not None:
            out.write(text)
        out.flush()

    await provider.stream(request, _on_progress, debug=debug)


def _print_error(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, default=str), file=sys.stderr)


def execute(args: argparse.Namespace, factory: ProviderFactory = VertexClaudeProvider) -> int:
    """Run the call described by ``args``; return a process exit code.

    Exit codes: ``0`` success, ``1`` provider failure, ``2`` invalid input,
    ``130`` cancelled.
    """
    provider = build_provider(args, factory)
    logger = get_logger("vertex_providers.cli")
    ctx = LogContext(provider=provider.provider_name, model=provider.model, location=provider.location)
    try:
        request = build_generation_request(args)
    except ValidationError as e:
        _print_error({"error": str(e)})
        return 2
    normalized_log_event(logger, "cli.start", ctx, phase="start", attempt=1)
    try:
        asyncio.run(run_call(provider, request, out=sys.stdout, debug=args.debug))
    except ProviderError as e:
        normalized_log_event(
            logger, "cli.error", ctx, phase="finalize", error_code=e.code.value, emitted=False, error=e.message[:260]
        )
        _print_error({"error": e.message, "code": e.code.value, "http_status": e.http_status})
        return 1
    except CancelledError as e:
        _print_error({"error": str(e), "code": "cancelled"})
        return 130
    normalized_log_event(logger, "cli.finalize", ctx, phase="finalize", emitted=True)
    return 0


def handle_run(args: argparse.Namespace, factory: ProviderFactory = VertexClaudeProvider) -> int:
    """Apply logging flags, then print a plan (``--dry-run``) or execute."""
    if args.log_level or args.log_file:
        configure_logger(level=args.log_level, file_path=args.log_file)
    if not args.prompt:
        _print_error({"error": "--prompt is required"})
        return 2
    if args.max_tokens is None or args.max_tokens <= 0:
        _print_error({"error": "--max-tokens must be positive"})
        return 2
    if args.dry_run:
        print(json.dumps(plan_run(args, factory), indent=2))
        return 0
    return execute(args, factory)


__all__ = [
    "build_provider",
    "build_generation_request",
    "plan_run",
    "fragment_text",
    "run_call",
    "execute",
    "handle_run",
]
