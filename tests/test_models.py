"""Tests for the JobPosting record."""

import dataclasses

import pytest

from job_catalog.models import Category, CatalogError, Employment, PayUnit


class TestValidation:
    def test_empty_categories_rejected(self, make_posting):
        with pytest.raises(CatalogError, match="category"):
            make_posting(categories=())

    def test_unknown_category_rejected(self, make_posting):
        with pytest.raises(CatalogError):
            make_posting(categories=("gardening",))

    def test_other_locality_rejected(self, make_posting):
        with pytest.raises(CatalogError, match="locality"):
            make_posting(address_locality="Rotterdam")

    def test_empty_slug_rejected(self, make_posting):
        with pytest.raises(CatalogError):
            make_posting(slug="")

    def test_catalog_error_is_value_error(self):
        assert issubclass(CatalogError, ValueError)

    def test_string_values_are_coerced(self, make_posting):
        posting = make_posting(
            categories=["sales", "events"],
            employment_type="TEMPORARY",
            pay_unit="HOUR",
        )
        assert posting.categories == (Category.SALES, Category.EVENTS)
        assert posting.employment_type is Employment.TEMPORARY
        assert posting.pay_unit is PayUnit.HOUR

    def test_postings_are_frozen(self, make_posting):
        posting = make_posting()
        with pytest.raises(dataclasses.FrozenInstanceError):
            posting.title = "Changed"


class TestLinkTarget:
    def test_external_url_wins(self, make_posting):
        posting = make_posting(external_url="https://example.com/apply")
        assert posting.link_target() == "https://example.com/apply"

    def test_internal_detail_route(self, make_posting):
        assert make_posting().link_target() == "/jobs/test-job"
        assert make_posting().link_target("/vacatures/") == "/vacatures/test-job"


class TestPayRange:
    def test_hourly_range(self, make_posting):
        posting = make_posting(base_salary_min=12, base_salary_max=20, pay_unit=PayUnit.HOUR)
        assert posting.pay_range() == "€12–€20 per hour"

    def test_equal_bounds_collapse(self, make_posting):
        posting = make_posting(base_salary_min=14.71, base_salary_max=14.71, pay_unit=PayUnit.HOUR)
        assert posting.pay_range() == "€14.71 per hour"

    def test_monthly_minimum_only(self, make_posting):
        posting = make_posting(base_salary_min=650, pay_unit=PayUnit.MONTH)
        assert posting.pay_range() == "€650 per month"

    def test_maximum_only(self, make_posting):
        assert make_posting(base_salary_max=20).pay_range() == "up to €20"

    def test_no_pay(self, make_posting):
        assert make_posting().pay_range() is None
