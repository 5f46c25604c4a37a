from datetime import date

import pytest

from job_catalog.models import Category, Employment, JobPosting


@pytest.fixture
def make_posting():
    """Factory for minimal postings; keyword overrides replace defaults."""

    def _make(**overrides) -> JobPosting:
        fields = {
            "slug": "test-job",
            "title": "Test Job",
            "org_name": "Test Org",
            "description_html": "<p>A test job. With details.</p>",
            "employment_type": Employment.PART_TIME,
            "date_posted": date(2026, 2, 14),
            "categories": (Category.RETAIL,),
        }
        fields.update(overrides)
        return JobPosting(**fields)

    return _make
