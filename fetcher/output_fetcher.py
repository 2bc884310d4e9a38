"""
Judge Output Loading Module
===========================
Reads raw judge output from stdin, a local file, or an HTTP(S) URL.
Remote outputs are fetched with httpx.AsyncClient.
"""

import asyncio
import logging
import sys
from pathlib import Path

import httpx

DEFAULT_TIMEOUT = 60.0


class AnnotationBotError(Exception):
    pass


class OutputFetchError(AnnotationBotError):
    pass


class OutputFetcher:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT, transport: httpx.AsyncBaseTransport = None):
        self.client = httpx.AsyncClient(
            headers={
                "User-Agent": "kernel-annotation-bot"
            },
            follow_redirects=True,
            timeout=timeout,
            transport=transport
        )

    async def fetch(self, url: str) -> str:
        """Downloads the judge output at url and returns it as text."""
        try:
            resp = await self.client.get(url)
        except httpx.HTTPError as e:
            raise OutputFetchError(f"Failed to fetch {url}: {e}") from e

        if not resp.is_success:
            raise OutputFetchError(f"Failed to fetch {url}: HTTP {resp.status_code}")

        logging.info(f"Fetched {len(resp.content)} bytes from {url}")
        return resp.text

    async def close(self):
        """Closes the async client session."""
        await self.client.aclose()


async def fetch_outputs_async(url: str, timeout: float = DEFAULT_TIMEOUT,
                              transport: httpx.AsyncBaseTransport = None) -> str:
    fetcher = OutputFetcher(timeout=timeout, transport=transport)
    try:
        return await fetcher.fetch(url)
    finally:
        await fetcher.close()


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def read_outputs(source: str, timeout: float = DEFAULT_TIMEOUT,
                 transport: httpx.AsyncBaseTransport = None) -> str:
    """
    Loads raw judge output:
    1. "-" reads stdin
    2. http:// and https:// sources are downloaded
    3. Anything else is read as a UTF-8 file
    """
    if source == "-":
        return sys.stdin.read()

    if is_url(source):
        return asyncio.run(fetch_outputs_async(source, timeout=timeout, transport=transport))

    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise OutputFetchError(f"Failed to read {source}: {e}") from e
