"""Command line entry point: list the fallback order or generate text.

    python -m gemini_fallback models
    python -m gemini_fallback generate "Write a haiku" --temperature 0.2
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from gemini_fallback.container import Container
from gemini_fallback.domain.errors import AllModelsFailedError
from gemini_fallback.infrastructure.config import load_config
from gemini_fallback.shared.logging import setup_logging_from_config

log = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="gemini_fallback",
        description="Gemini text generation with sequential model fallback.",
    )
    parser.add_argument("--config-dir", type=Path, default=None, help="Directory with default.toml")
    parser.add_argument("--log-level", default=None, help="Override configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("models", help="Print models in fallback order")

    gen = sub.add_parser("generate", help="Generate text for a prompt")
    gen.add_argument("prompt")
    gen.add_argument("--temperature", type=float, default=None)
    gen.add_argument("--max-output-tokens", type=int, default=None)
    gen.add_argument("--timeout", type=int, default=None, help="Per-model timeout, ms")
    return parser


def _call_options(args: argparse.Namespace) -> dict:
    """Only the options given on the command line; the rest come from config."""
    options = {
        "temperature": args.temperature,
        "max_output_tokens": args.max_output_tokens,
        "timeout": args.timeout,
    }
    return {k: v for k, v in options.items() if v is not None}


async def _generate(container: Container, prompt: str, options: dict) -> int:
    async with container:
        try:
            text = await container.caller.generate(prompt, options)
        except AllModelsFailedError as e:
            log.error("generate_failed", models=list(e.models), attempts=len(e.errors))
            print(f"All Gemini models failed: {e}", file=sys.stderr)
            return 1
    print(text)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the CLI; returns the process exit code."""
    args = build_parser().parse_args(argv)
    config = load_config(args.config_dir)
    if args.log_level:
        config = config.model_copy(update={"log_level": args.log_level.upper()})
    setup_logging_from_config(config)
    container = Container(config)

    if args.command == "models":
        for model in container.caller.models:
            print(model)
        return 0

    log.info("generate_begin", models=list(container.caller.models))
    return asyncio.run(_generate(container, args.prompt, _call_options(args)))


if __name__ == "__main__":
    sys.exit(main())
