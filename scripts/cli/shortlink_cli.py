#!/usr/bin/env python3
"""
Command-line interface for the link shortener store and bot.

Usage:
    python shortlink_cli.py shorten <url>
    python shortlink_cli.py resolve <short_code>
    python shortlink_cli.py info <short_code>
    python shortlink_cli.py list
    python shortlink_cli.py set-webhook <url>
    python shortlink_cli.py delete-webhook
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add repository root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from shortlink.database.redis_store import RedisStore
from shortlink.errors import ShortenerError
from shortlink.service import URLShortenerService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.telegram.notifier import TelegramNotifier
from shortlink.common.logging_config import setup_logging


def _print_result(data: dict) -> int:
    print(json.dumps({"success": True, **data}, indent=2))
    return 0


def _print_error(message: str) -> int:
    print(json.dumps({"success": False, "error": message}, indent=2), file=sys.stderr)
    return 1


class ShortlinkCLI:
    """Command-line interface for the link shortener."""

    def __init__(
        self,
        redis_url: Optional[str],
        bot_token: Optional[str] = None,
        code_length: int = 6,
        verbose: bool = False,
    ):
        """Initialize CLI."""
        self.redis_url = redis_url
        self.bot_token = bot_token
        self.code_length = code_length
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.service = None

    async def initialize(self):
        """Connect to the store and build the service."""
        if not self.redis_url:
            raise ShortenerError("A Redis URL is required (--redis-url or REDIS_URL)")

        store = RedisStore(redis_url=self.redis_url, logger=self.logger)
        await store.connect()

        self.service = URLShortenerService(
            store=store,
            short_code_generator=ShortCodeGenerator(default_length=self.code_length),
            logger=self.logger,
        )

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()

    async def shorten(self, url: str) -> int:
        link = await self.service.shorten(url)
        return _print_result({"link": link.to_dict()})

    async def resolve(self, short_code: str) -> int:
        # CLI lookups are not clicks
        original_url = await self.service.resolve(short_code, count_click=False)
        return _print_result({"short_code": short_code, "original_url": original_url})

    async def info(self, short_code: str) -> int:
        link = await self.service.get_link(short_code)
        return _print_result({"link": link.to_dict()})

    async def list_urls(self) -> int:
        links = await self.service.list_links()
        return _print_result({"count": len(links), "urls": [link.to_dict() for link in links]})

    async def set_webhook(self, url: str, delete: bool = False) -> int:
        if not self.bot_token:
            return _print_error("A bot token is required (--bot-token or TELEGRAM_BOT_TOKEN)")

        notifier = TelegramNotifier(bot_token=self.bot_token, logger=self.logger)
        try:
            if delete:
                await notifier.delete_webhook()
                return _print_result({"message": "Webhook deleted"})
            await notifier.set_webhook(url)
            return _print_result({"message": f"Webhook set to {url}"})
        finally:
            await notifier.close()


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Link shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Look up a short code without counting a click
  %(prog)s resolve aB3xYz

  # Point the Telegram bot at a deployment
  %(prog)s set-webhook https://short.example.com/
        """
    )

    parser.add_argument(
        "--redis-url",
        default=os.getenv("REDIS_URL"),
        help="Redis connection URL (default: from REDIS_URL env)"
    )

    parser.add_argument(
        "--bot-token",
        default=os.getenv("TELEGRAM_BOT_TOKEN"),
        help="Telegram bot token (default: from TELEGRAM_BOT_TOKEN env)"
    )

    parser.add_argument(
        "--code-length",
        type=int,
        default=int(os.getenv("SHORT_CODE_LENGTH", "6")),
        help="Length of generated short codes (default: 6)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    resolve_parser = subparsers.add_parser("resolve", help="Get original URL")
    resolve_parser.add_argument("short_code", help="Short code to lookup")

    info_parser = subparsers.add_parser("info", help="Show the stored record")
    info_parser.add_argument("short_code", help="Short code to show")

    subparsers.add_parser("list", help="List all short URLs")

    webhook_parser = subparsers.add_parser("set-webhook", help="Register the bot webhook")
    webhook_parser.add_argument("url", help="Public URL of the bot deployment")

    subparsers.add_parser("delete-webhook", help="Remove the bot webhook")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    cli = ShortlinkCLI(
        redis_url=args.redis_url,
        bot_token=args.bot_token,
        code_length=args.code_length,
        verbose=args.verbose,
    )

    try:
        if args.command == "set-webhook":
            return await cli.set_webhook(args.url)
        if args.command == "delete-webhook":
            return await cli.set_webhook("", delete=True)

        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "resolve":
            return await cli.resolve(args.short_code)
        elif args.command == "info":
            return await cli.info(args.short_code)
        elif args.command == "list":
            return await cli.list_urls()
        else:
            parser.print_help()
            return 1

    except ShortenerError as e:
        return _print_error(e.message)
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
