"""Outbound link checks for postings that send clicks to employer sites."""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from .models import JobPosting

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "AmsterdamJobCatalog/0.1 (+link-check)"
DEFAULT_ACCEPT_HEADER = (
    "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
)
MAX_RETRY_AFTER_SECONDS = 10.0


@dataclass(slots=True)
class LinkStatus:
    """Outcome of requesting a posting's ``external_url``."""

    slug: str
    url: str
    status_code: int | None
    final_url: str | None
    ok: bool
    error: str | None


class _RateLimited(Exception):
    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"HTTP {response.status_code}")
        self.response = response


class LinkChecker:
    """Async checker with a concurrency limit and retries on transient errors."""

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        concurrency: int = 5,
        max_attempts: int = 3,
        timeout: float = 15.0,
        retry_wait_max: float = 6.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        self._max_attempts = max_attempts
        self._retry_wait_max = retry_wait_max
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={
                "User-Agent": user_agent,
                "Accept": DEFAULT_ACCEPT_HEADER,
                "Accept-Language": "en;q=0.9,nl;q=0.8",
            },
            timeout=httpx.Timeout(timeout),
            http2=True,
            follow_redirects=True,
        )
        self._semaphore = asyncio.Semaphore(concurrency)

    async def __aenter__(self) -> "LinkChecker":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def check(self, posting: JobPosting) -> LinkStatus:
        """Request *posting*'s external URL and report whether it resolves."""

        if not posting.external_url:
            raise ValueError(f"{posting.slug} has no external_url")

        url = _sanitize_url(posting.external_url)
        async with self._semaphore:
            try:
                response = await self._get_with_retries(url)
            except _RateLimited as exc:
                logger.info("Gave up on %s after repeated 429 responses", url)
                return self._build_status(posting.slug, url, exc.response)
            except httpx.HTTPError as exc:
                logger.debug("Request error for %s: %s", url, exc)
                return LinkStatus(
                    slug=posting.slug,
                    url=url,
                    status_code=None,
                    final_url=None,
                    ok=False,
                    error=str(exc) or exc.__class__.__name__,
                )

        return self._build_status(posting.slug, url, response)

    async def check_all(self, postings: Iterable[JobPosting]) -> list[LinkStatus]:
        """Check every posting with an external URL, keeping catalog order."""

        targets = [posting for posting in postings if posting.external_url]
        logger.info("Checking %d outbound links", len(targets))
        return list(await asyncio.gather(*(self.check(posting) for posting in targets)))

    async def _get_with_retries(self, url: str) -> httpx.Response:
        retrying = AsyncRetrying(
            retry=retry_if_exception_type((httpx.TransportError, _RateLimited)),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential_jitter(multiplier=0.5, max=self._retry_wait_max),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                response = await self._client.get(url)
                if response.status_code == 429:
                    delay = _retry_after_seconds(response)
                    if delay:
                        await asyncio.sleep(delay)
                    raise _RateLimited(response)
                return response
        raise AssertionError("unreachable")  # pragma: no cover

    @staticmethod
    def _build_status(slug: str, url: str, response: httpx.Response) -> LinkStatus:
        status = response.status_code
        ok = status < 400
        return LinkStatus(
            slug=slug,
            url=url,
            status_code=status,
            final_url=str(response.url),
            ok=ok,
            error=None if ok else f"HTTP {status}",
        )


def check_links(postings: Sequence[JobPosting], **kwargs) -> list[LinkStatus]:
    """Synchronous wrapper around :meth:`LinkChecker.check_all`."""

    async def _run() -> list[LinkStatus]:
        async with LinkChecker(**kwargs) as checker:
            return await checker.check_all(postings)

    return asyncio.run(_run())


def _retry_after_seconds(response: httpx.Response) -> float | None:
    retry_after = response.headers.get("Retry-After")
    if retry_after is None:
        return None
    try:
        delay = float(retry_after)
    except ValueError:
        return None
    return max(0.0, min(delay, MAX_RETRY_AFTER_SECONDS))


def _sanitize_url(url: str) -> str:
    """Strip control characters and encode literal spaces."""

    cleaned = re.sub(r"[\x00-\x1f\x7f]", "", url).strip()
    return cleaned.replace(" ", "%20")
