"""
Tests for filter normalization, fingerprinting and assistant filter updates.
"""
import pytest
from pydantic import ValidationError

from core.cache.fingerprint import FilterFingerprinter
from core.models import JobType, WorkMode
from core.search.filters import (
    FilterSpec,
    FilterUpdate,
    apply_filter_update,
    count_active_filters,
)


class TestFilterSpec:
    """Normalization applied when a FilterSpec is built."""

    def test_defaults(self):
        filters = FilterSpec()

        assert filters.query == ""
        assert filters.skills == ()
        assert filters.date_posted == "any"
        assert filters.job_type is None
        assert filters.work_mode is None
        assert filters.page == 1
        assert filters.page_size == 20

    def test_whitespace_collapsed(self):
        filters = FilterSpec(query="  senior   python  ", location=" New\tYork ")

        assert filters.query == "senior python"
        assert filters.location == "New York"

    def test_skills_deduplicated_and_sorted(self):
        filters = FilterSpec(skills=["react", " Python", "react", "", "AWS"])

        assert filters.skills == ("AWS", "Python", "react")

    def test_comma_separated_skills(self):
        assert FilterSpec(skills="python, django").skills == ("django", "python")

    @pytest.mark.parametrize("alias", ["fulltime", "full_time", "Full-time", "FULL TIME"])
    def test_job_type_aliases(self, alias):
        assert FilterSpec(job_type=alias).job_type == JobType.FULL_TIME

    def test_freelance_maps_to_contract(self):
        assert FilterSpec(job_type="freelance").job_type == JobType.CONTRACT

    def test_empty_values_mean_absent(self):
        filters = FilterSpec(job_type="", work_mode="", date_posted="", query=None)

        assert filters.job_type is None
        assert filters.work_mode is None
        assert filters.date_posted == "any"
        assert filters.query == ""

    def test_work_mode_parsed(self):
        assert FilterSpec(work_mode="On-site").work_mode == WorkMode.ONSITE

    @pytest.mark.parametrize("kwargs", [
        {"job_type": "volunteer"},
        {"work_mode": "moon"},
        {"date_posted": "yesterday"},
        {"page": 0},
        {"page_size": 101},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            FilterSpec(**kwargs)

    def test_frozen(self):
        filters = FilterSpec()

        with pytest.raises(ValidationError):
            filters.query = "python"


class TestFilterFingerprinter:
    """Cache keys depend only on the canonical filter values."""

    def test_01_equivalent_filters_share_fingerprint(self):
        a = FilterSpec(query="python  developer", skills=["Django", "aws"], job_type="fulltime")
        b = FilterSpec(query=" python developer", skills=["aws", "Django", "aws"], job_type="full-time")

        assert FilterFingerprinter.calculate(a) == FilterFingerprinter.calculate(b)

    def test_02_different_filters_differ(self):
        a = FilterSpec(query="python")
        b = FilterSpec(query="java")

        assert FilterFingerprinter.calculate(a) != FilterFingerprinter.calculate(b)

    def test_03_page_is_part_of_fingerprint(self):
        assert FilterFingerprinter.calculate(FilterSpec(page=1)) != FilterFingerprinter.calculate(FilterSpec(page=2))
        assert FilterFingerprinter.calculate(FilterSpec(page_size=10)) != FilterFingerprinter.calculate(FilterSpec())

    def test_04_fingerprint_is_sha256_hex(self):
        fingerprint = FilterFingerprinter.calculate(FilterSpec())

        assert len(fingerprint) == 64
        int(fingerprint, 16)

    def test_05_deterministic(self):
        filters = FilterSpec(query="react", location="Berlin")

        assert FilterFingerprinter.calculate(filters) == FilterFingerprinter.calculate(filters)


class TestApplyFilterUpdate:
    """Structured updates from the assistant."""

    def test_partial_update_keeps_other_fields(self):
        current = FilterSpec(query="python", location="Berlin", page=3)

        filters, band = apply_filter_update(current, "all", FilterUpdate(job_type="contract"))

        assert filters.query == "python"
        assert filters.location == "Berlin"
        assert filters.job_type == JobType.CONTRACT
        assert filters.page == 1
        assert band == "all"

    def test_band_only_update_keeps_page(self):
        current = FilterSpec(query="python", page=2)

        filters, band = apply_filter_update(current, "all", FilterUpdate(match_score="high"))

        assert filters == current
        assert band == "high"

    def test_clear_all_resets_everything(self):
        current = FilterSpec(query="python", skills=["aws"], work_mode="hybrid", page=4, page_size=50)

        filters, band = apply_filter_update(current, "medium", FilterUpdate(clear_all=True, query="ignored"))

        assert filters == FilterSpec(page_size=50)
        assert band == "all"

    def test_invalid_update_value_raises(self):
        with pytest.raises(ValidationError):
            apply_filter_update(FilterSpec(), "all", FilterUpdate(job_type="volunteer"))


class TestCountActiveFilters:

    def test_no_filters(self):
        assert count_active_filters(FilterSpec()) == 0

    def test_counts_each_non_default(self):
        filters = FilterSpec(
            query="python",
            skills=["aws", "django"],
            date_posted="lastWeek",
            job_type="contract",
            work_mode="remote",
            location="Berlin"
        )

        assert count_active_filters(filters, "high") == 7
