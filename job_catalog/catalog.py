"""In-memory catalog of job postings with lookup helpers."""

from __future__ import annotations

import dataclasses
import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from .data import RAW_JOBS
from .models import CatalogError, JobPosting
from .summary import compose_summary

logger = logging.getLogger(__name__)


class Catalog:
    """Ordered, read-only collection of finalized postings.

    Summaries are always derived from each posting's description and pay
    fields here; any ``summary`` set on a definition is overwritten.

    Raises:
        CatalogError: two postings share a slug.
    """

    __slots__ = ("_postings", "_by_slug")

    def __init__(self, postings: Iterable[JobPosting]) -> None:
        ordered = tuple(
            dataclasses.replace(posting, summary=compose_summary(posting))
            for posting in postings
        )
        by_slug: dict[str, JobPosting] = {}
        for posting in ordered:
            if posting.slug in by_slug:
                raise CatalogError(f"duplicate slug {posting.slug!r}")
            by_slug[posting.slug] = posting
        self._postings = ordered
        self._by_slug: Mapping[str, JobPosting] = MappingProxyType(by_slug)

    def __len__(self) -> int:
        return len(self._postings)

    def __iter__(self) -> Iterator[JobPosting]:
        return iter(self._postings)

    def __contains__(self, slug: object) -> bool:
        return isinstance(slug, str) and slug in self._by_slug

    def __repr__(self) -> str:
        return f"Catalog({len(self._postings)} postings)"

    def get_by_slug(self, slug: str) -> JobPosting | None:
        """Return the posting with exactly this slug, or ``None``."""

        if not isinstance(slug, str):
            return None
        return self._by_slug.get(slug)

    def list_all(self) -> tuple[JobPosting, ...]:
        return self._postings

    def list_featured(self) -> tuple[JobPosting, ...]:
        return tuple(posting for posting in self._postings if posting.featured)


def build_catalog(raw_postings: Iterable[JobPosting]) -> Catalog:
    """Freeze *raw_postings* into a catalog with derived summaries."""

    catalog = Catalog(raw_postings)
    logger.debug(
        "Built catalog with %d postings (%d featured)",
        len(catalog),
        len(catalog.list_featured()),
    )
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """Return the catalog built from the shipped listings."""

    return build_catalog(RAW_JOBS)


def get_job_by_slug(slug: str) -> JobPosting | None:
    return default_catalog().get_by_slug(slug)


def list_jobs() -> tuple[JobPosting, ...]:
    return default_catalog().list_all()


def list_featured_jobs() -> tuple[JobPosting, ...]:
    return default_catalog().list_featured()
