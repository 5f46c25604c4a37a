"""Short description helpers for the Amsterdam job catalog.

Builds the card text shown in list views from a posting's HTML description
and its per-gig / per-sale pay fields.
"""

from __future__ import annotations

import math
import re
from numbers import Real

from bs4 import BeautifulSoup

CURRENCY_SYMBOL = "€"
SUMMARY_SEPARATOR = " — "
SUMMARY_MAX_LENGTH = 180
ELLIPSIS = "…"

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_markup(html: str | None) -> str:
    """Quick HTML -> text: drop tags and collapse whitespace.

    This is a textual strip, not a parser. Entities such as ``&amp;`` are left
    untouched and an unbalanced ``<`` swallows everything up to the next ``>``.
    """

    if not html:
        return ""
    return _normalize_whitespace(_TAG_RE.sub(" ", html))


def first_sentence(text: str, max_len: int = SUMMARY_MAX_LENGTH) -> str:
    """Return *text* up to its first period, or a truncated excerpt.

    Only the raw index of the first ``.`` counts, so "€9.88" or "approx."
    ends the excerpt early.
    """

    dot = text.find(".")
    if dot != -1 and dot < max_len:
        return text[: dot + 1]
    if len(text) > max_len:
        return text[: max_len - 1] + ELLIPSIS
    return text


def format_money(amount: object) -> str | None:
    """Format a positive amount as ``€N``; anything else yields ``None``."""

    if isinstance(amount, bool) or not isinstance(amount, Real):
        return None
    if not amount > 0:
        return None
    return f"{CURRENCY_SYMBOL}{_format_number(amount)}"


def compose_summary(posting: object) -> str:
    """Assemble the short description for *posting*.

    Segments, in order: per-gig pay, per-sale pay, first sentence of the
    description. Missing attributes simply produce no segment.
    """

    parts: list[str] = []

    gig = _pay_segment(
        getattr(posting, "per_gig_amount", None),
        getattr(posting, "per_gig_amount_text", None),
        "per gig",
    )
    if gig:
        parts.append(gig)

    sale = _pay_segment(
        getattr(posting, "per_sale_amount", None),
        getattr(posting, "per_sale_amount_text", None),
        "per sale",
    )
    if sale:
        parts.append(sale)

    desc = first_sentence(strip_markup(getattr(posting, "description_html", None)))
    if desc:
        parts.append(desc)

    return SUMMARY_SEPARATOR.join(parts)


def html_to_text(html: str | None) -> str:
    """Return entity-decoded plain text using a real HTML parser."""

    if not html:
        return ""
    soup = BeautifulSoup(html, "lxml")
    return _normalize_whitespace(soup.get_text(" ", strip=True))


def _pay_segment(amount: object, fallback: str | None, label: str) -> str | None:
    money = format_money(amount)
    if money:
        return f"{money} {label}"
    return fallback or None


def _format_number(value: Real) -> str:
    # 15.0 renders as "15", 14.71 as "14.71"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _normalize_whitespace(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value).strip()
