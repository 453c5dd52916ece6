"""CLI entry point for the Bedrock gateway."""

import argparse
import asyncio
import sys
from typing import Optional

from .api.client import BedrockGateway
from .config.settings import GatewaySettings
from .models.events import ContentDelta, ErrorChunk
from .observability.logging import configure_logging


async def stream_text(model: str, prompt: str, system: Optional[str] = None,
                      max_tokens: Optional[int] = None, temperature: Optional[float] = None,
                      top_p: Optional[float] = None) -> int:
    """Stream one answer to stdout. Returns the process exit code."""
    async with BedrockGateway.from_env() as gateway:
        stream = gateway.stream(
            [("user", prompt)],
            model,
            system_prompt=system,
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=top_p,
        )
        exit_code = 0
        try:
            async for chunk in stream:
                if isinstance(chunk, ContentDelta):
                    print(chunk.text, end='', flush=True)
                elif isinstance(chunk, ErrorChunk):
                    print(f"\nError [{chunk.to_dict()['kind']}]: {chunk.message}", file=sys.stderr)
                    exit_code = 1
        finally:
            await stream.aclose()
        print()
        return exit_code


def show_status() -> int:
    """Print which credential variant the environment configures."""
    credential = GatewaySettings.from_env().credential()
    if credential is None:
        print("Bedrock credentials not configured")
        return 1
    state = "complete" if credential.is_complete() else "incomplete"
    print(f"Auth method: {credential.auth_method} ({state})")
    print(f"Region: {credential.region}")
    return 0 if credential.is_complete() else 1


def main(argv=None) -> int:
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Bedrock Gateway CLI")
    parser.add_argument("--log-level", help="Log level (default: BEDROCK_LOG_LEVEL or WARNING)")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    stream_parser = subparsers.add_parser('stream', help='Stream a chat completion')
    stream_parser.add_argument('model', help='Bedrock model id (e.g., "anthropic.claude-3-haiku-20240307-v1:0")')
    stream_parser.add_argument('prompt', help='User message')
    stream_parser.add_argument('--system', help='System prompt')
    stream_parser.add_argument('--max-tokens', type=int, help='Maximum tokens to generate')
    stream_parser.add_argument('--temperature', type=float, help='Temperature (0.0-2.0)')
    stream_parser.add_argument('--top-p', type=float, help='Nucleus sampling (0.0-1.0)')

    subparsers.add_parser('status', help='Show configured credentials')

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == 'stream':
        return asyncio.run(stream_text(
            args.model,
            args.prompt,
            args.system,
            args.max_tokens,
            args.temperature,
            args.top_p,
        ))
    elif args.command == 'status':
        return show_status()
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
