#!/usr/bin/env python3
"""
Command-line client for a running link shortener service.

Usage:
    link-shortener-cli shorten <url> [--validity MINUTES] [--custom-code CODE]
    link-shortener-cli inspect <shortcode>
    link-shortener-cli resolve <shortcode>
    link-shortener-cli stats
    link-shortener-cli health
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Any, Dict, Optional

import httpx

from .lib.common.logging_config import setup_logging


class LinkShortenerCLI:
    """Command-line interface talking to the service over HTTP."""

    def __init__(
        self,
        service_url: str,
        verbose: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        """Initialize CLI.

        Args:
            service_url: Base URL of the running service
            verbose: Verbose logging
            transport: Optional httpx transport (used by tests)
            timeout: Request timeout in seconds
        """
        self.service_url = service_url.rstrip("/")
        self.verbose = verbose
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.client = httpx.AsyncClient(
            base_url=self.service_url,
            transport=transport,
            timeout=timeout,
        )

    async def cleanup(self):
        """Close the HTTP client."""
        await self.client.aclose()

    def _print(self, payload: Dict[str, Any], error: bool = False) -> int:
        print(json.dumps(payload, indent=2), file=sys.stderr if error else sys.stdout)
        return 1 if error else 0

    def _print_failure(self, response: httpx.Response) -> int:
        try:
            body = response.json()
        except ValueError:
            body = {"detail": response.text}
        return self._print({
            "success": False,
            "status": response.status_code,
            "error": body.get("error", "HTTPError"),
            "detail": body.get("detail"),
        }, error=True)

    async def _request(self, method: str, path: str, **kwargs) -> Optional[httpx.Response]:
        self.logger.debug(f"{method} {self.service_url}{path}")
        try:
            return await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            self._print({"success": False, "error": f"Request failed: {e}"}, error=True)
            return None

    async def shorten(
        self,
        url: str,
        validity_minutes: Optional[float] = None,
        custom_code: Optional[str] = None,
    ) -> int:
        """Shorten a URL."""
        payload: Dict[str, Any] = {"originalUrl": url}
        if validity_minutes is not None:
            payload["validityMinutes"] = validity_minutes
        if custom_code:
            payload["customCode"] = custom_code

        response = await self._request("POST", "/shorturls", json=payload)
        if response is None:
            return 1
        if response.status_code != 201:
            return self._print_failure(response)

        data = response.json()
        return self._print({
            "success": True,
            **data,
            "message": f"Successfully shortened URL to: {data['shortUrl']}",
        })

    async def inspect(self, shortcode: str) -> int:
        """Show a link with its click history."""
        response = await self._request("GET", f"/shorturls/{shortcode}")
        if response is None:
            return 1
        if response.status_code != 200:
            return self._print_failure(response)

        return self._print({"success": True, **response.json()})

    async def resolve(self, shortcode: str, redirect_path: str = "/s") -> int:
        """Follow a short link one hop and print where it points.

        This counts as a visit.
        """
        prefix = "/" + redirect_path.strip("/") if redirect_path.strip("/") else ""
        response = await self._request("GET", f"{prefix}/{shortcode}", follow_redirects=False)
        if response is None:
            return 1
        if not response.is_redirect:
            return self._print_failure(response)

        return self._print({
            "success": True,
            "shortcode": shortcode,
            "originalUrl": response.headers.get("location"),
        })

    async def stats(self) -> int:
        """Show service statistics."""
        response = await self._request("GET", "/stats")
        if response is None:
            return 1
        if response.status_code != 200:
            return self._print_failure(response)

        return self._print({"success": True, "statistics": response.json()})

    async def health(self) -> int:
        """Check service health."""
        response = await self._request("GET", "/health")
        if response is None:
            return 1
        if response.status_code != 200:
            return self._print_failure(response)

        data = response.json()
        healthy = data.get("status") == "healthy"
        self._print({"success": healthy, "health": data}, error=not healthy)
        return 0 if healthy else 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Link Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL for 30 minutes
  %(prog)s shorten https://example.com/long/url

  # Shorten with custom code, valid for a day
  %(prog)s shorten https://example.com/long/url --custom-code mylink --validity 1440

  # Show clicks
  %(prog)s inspect mylink

  # Check health
  %(prog)s health
        """
    )

    parser.add_argument(
        "--service-url",
        default=os.getenv("LINK_SHORTENER_URL", "http://localhost:5000"),
        help="Service base URL (default: from LINK_SHORTENER_URL env or http://localhost:5000)"
    )

    parser.add_argument(
        "--redirect-path",
        default=os.getenv("PATH_PREFIX", "/s"),
        help="Path prefix of the redirect endpoint (default: /s)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--validity", type=float, help="Minutes the link stays active")
    shorten_parser.add_argument("--custom-code", help="Custom short code")

    inspect_parser = subparsers.add_parser("inspect", help="Show link analytics")
    inspect_parser.add_argument("shortcode", help="Short code to inspect")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a short code (counts as a visit)")
    resolve_parser.add_argument("shortcode", help="Short code to resolve")

    subparsers.add_parser("stats", help="Show service statistics")
    subparsers.add_parser("health", help="Check service health")

    return parser


async def run(args: argparse.Namespace, transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    """Execute a parsed command."""
    cli = LinkShortenerCLI(
        service_url=args.service_url,
        verbose=args.verbose,
        transport=transport,
    )

    try:
        if args.command == "shorten":
            return await cli.shorten(args.url, args.validity, args.custom_code)
        elif args.command == "inspect":
            return await cli.inspect(args.shortcode)
        elif args.command == "resolve":
            return await cli.resolve(args.shortcode, args.redirect_path)
        elif args.command == "stats":
            return await cli.stats()
        elif args.command == "health":
            return await cli.health()
        return 1
    finally:
        await cli.cleanup()


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
