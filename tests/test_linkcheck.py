"""Tests for the outbound link checker, using httpx.MockTransport."""

import asyncio
import warnings

import httpx
import pytest

from job_catalog.linkcheck import LinkChecker, _sanitize_url


def _run(handler, postings, **kwargs):
    async def _go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            checker = LinkChecker(client=client, retry_wait_max=0, **kwargs)
            return await checker.check_all(postings)

    return asyncio.run(_go())


class TestLinkChecker:
    def test_reports_ok_and_broken_links(self, make_posting):
        def handler(request):
            if request.url.path == "/gone":
                return httpx.Response(404)
            return httpx.Response(200, text="<html>jobs</html>")

        postings = [
            make_posting(slug="live", external_url="https://example.com/jobs"),
            make_posting(slug="internal"),
            make_posting(slug="dead", external_url="https://example.com/gone"),
        ]
        results = _run(handler, postings)

        assert [r.slug for r in results] == ["live", "dead"]
        assert results[0].ok and results[0].status_code == 200
        assert results[0].final_url == "https://example.com/jobs"
        assert not results[1].ok
        assert results[1].error == "HTTP 404"

    def test_retries_transport_errors(self, make_posting):
        calls = {"count": 0}

        def handler(request):
            calls["count"] += 1
            if calls["count"] == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200)

        results = _run(handler, [make_posting(external_url="https://example.com/")])

        assert calls["count"] == 2
        assert results[0].ok

    def test_retry_backoff_emits_no_deprecation_warning(self, make_posting):
        calls = {"count": 0}

        def handler(request):
            calls["count"] += 1
            if calls["count"] == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200)

        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            results = _run(handler, [make_posting(external_url="https://example.com/")])

        assert results[0].ok

    def test_gives_up_after_max_attempts(self, make_posting):
        calls = {"count": 0}

        def handler(request):
            calls["count"] += 1
            raise httpx.ConnectError("connection refused", request=request)

        results = _run(handler, [make_posting(external_url="https://example.com/")], max_attempts=2)

        assert calls["count"] == 2
        assert not results[0].ok
        assert results[0].status_code is None
        assert "connection refused" in results[0].error

    def test_rate_limited_link(self, make_posting):
        calls = {"count": 0}

        def handler(request):
            calls["count"] += 1
            return httpx.Response(429, headers={"Retry-After": "0"})

        results = _run(handler, [make_posting(external_url="https://example.com/")], max_attempts=3)

        assert calls["count"] == 3
        assert results[0].status_code == 429
        assert not results[0].ok

    def test_check_requires_external_url(self, make_posting):
        async def _go():
            async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200))) as client:
                await LinkChecker(client=client).check(make_posting())

        with pytest.raises(ValueError):
            asyncio.run(_go())

    def test_rejects_bad_concurrency(self):
        with pytest.raises(ValueError):
            LinkChecker(concurrency=0)


def test_sanitize_url():
    assert _sanitize_url(" https://example.com/a b\n") == "https://example.com/a%20b"
