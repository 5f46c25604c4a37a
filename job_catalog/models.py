"""Data models used across the Amsterdam job catalog."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .summary import format_money

LOCALITY = "Amsterdam"


class CatalogError(ValueError):
    """Raised when posting definitions are inconsistent."""


class Employment(str, Enum):
    """schema.org ``employmentType`` values."""

    PART_TIME = "PART_TIME"
    FULL_TIME = "FULL_TIME"
    CONTRACTOR = "CONTRACTOR"
    TEMPORARY = "TEMPORARY"
    INTERN = "INTERN"
    VOLUNTEER = "VOLUNTEER"


class Category(str, Enum):
    DELIVERY = "delivery"
    SALES = "sales"
    HOSPITALITY = "hospitality"
    RETAIL = "retail"
    TUTORING = "tutoring"
    EVENTS = "events"
    FIELDWORK = "fieldwork"


class PayUnit(str, Enum):
    HOUR = "HOUR"
    MONTH = "MONTH"


PAY_UNIT_LABELS = {
    PayUnit.HOUR: "per hour",
    PayUnit.MONTH: "per month",
}


@dataclass(frozen=True, slots=True)
class JobPosting:
    """A single job listing.

    ``summary`` is derived from the description and the commission fields by
    :class:`job_catalog.catalog.Catalog`; definitions leave it empty.
    """

    slug: str
    title: str
    org_name: str
    description_html: str
    employment_type: Employment
    date_posted: date
    categories: tuple[Category, ...]
    summary: str = ""

    # Base pay
    base_salary_min: Optional[float] = None
    base_salary_max: Optional[float] = None
    currency: Optional[str] = None
    pay_unit: Optional[PayUnit] = None

    # Commission style pay; numeric amounts win over the text labels
    per_gig_amount: Optional[float] = None
    per_sale_amount: Optional[float] = None
    per_gig_amount_text: Optional[str] = None
    per_sale_amount_text: Optional[str] = None

    address_locality: str = LOCALITY
    address_region: Optional[str] = None
    postal_code: Optional[str] = None
    street_address: Optional[str] = None
    area: Optional[str] = None

    english_friendly: bool = False
    duo: bool = False
    featured: bool = False
    work_hours: Optional[str] = None
    valid_through: Optional[date] = None

    # Clicking the card goes to this website instead of the detail page
    external_url: Optional[str] = None

    logo_url: Optional[str] = None
    logo_alt: Optional[str] = None
    hero_image_url: Optional[str] = None
    hero_image_alt: Optional[str] = None
    brand_color: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.slug:
            raise CatalogError("posting slug must not be empty")
        if self.address_locality != LOCALITY:
            raise CatalogError(
                f"{self.slug}: locality must be {LOCALITY!r}, got {self.address_locality!r}"
            )
        if not self.categories:
            raise CatalogError(f"{self.slug}: at least one category is required")

        # frozen dataclass, so coerce through object.__setattr__
        try:
            categories = tuple(Category(value) for value in self.categories)
            employment = Employment(self.employment_type)
            pay_unit = PayUnit(self.pay_unit) if self.pay_unit is not None else None
        except ValueError as exc:
            raise CatalogError(f"{self.slug}: {exc}") from exc
        object.__setattr__(self, "categories", categories)
        object.__setattr__(self, "employment_type", employment)
        object.__setattr__(self, "pay_unit", pay_unit)

    def link_target(self, detail_prefix: str = "/jobs/") -> str:
        """Return where a click on this posting should lead."""

        if self.external_url:
            return self.external_url
        return f"{detail_prefix}{self.slug}"

    def pay_range(self) -> str | None:
        """Human readable base pay, e.g. ``"€12–€20 per hour"``."""

        low = format_money(self.base_salary_min)
        high = format_money(self.base_salary_max)
        if low and high and low != high:
            amount = f"{low}–{high}"
        elif low:
            amount = low
        elif high:
            amount = f"up to {high}"
        else:
            return None

        unit = PAY_UNIT_LABELS.get(self.pay_unit) if self.pay_unit else None
        return f"{amount} {unit}" if unit else amount
