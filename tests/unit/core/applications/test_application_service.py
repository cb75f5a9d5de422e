"""
Tests for ApplicationService: creation, status updates and the timeline.
"""
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from core.applications.models import ApplicationStatus
from core.applications.repository import InMemoryApplicationRepository
from core.applications.service import INITIAL_NOTE, ApplicationService, parse_status
from core.applications.transitions import allowed_transitions, is_transition_allowed
from core.exceptions import (
    ConflictException,
    InvalidStatusException,
    InvalidTransitionException,
    NotFoundException,
)


@pytest.fixture
def service(utc_clock):
    return ApplicationService(InMemoryApplicationRepository(), clock=utc_clock)


@pytest.fixture
def strict_service(utc_clock):
    return ApplicationService(InMemoryApplicationRepository(), strict_transitions=True, clock=utc_clock)


def apply(service, owner="u1", job_id="remotive-1", **kwargs):
    return service.create(owner, job_id, "Python Developer", "TechCorp", **kwargs)


class TestCreate:

    def test_01_initial_state(self, service, utc_clock):
        app = apply(service, location="Worldwide", apply_url="https://x", match_score=82)

        assert app.id.startswith("app-")
        assert app.status == ApplicationStatus.APPLIED
        assert len(app.timeline) == 1
        assert app.timeline[0].status == ApplicationStatus.APPLIED
        assert app.timeline[0].note == INITIAL_NOTE
        assert app.created_at == app.updated_at == utc_clock.now
        assert app.match_score == 82

    def test_02_duplicate_is_conflict_with_existing(self, service):
        first = apply(service)

        with pytest.raises(ConflictException) as exc_info:
            apply(service)

        assert exc_info.value.existing.id == first.id
        assert len(service.list_by_owner("u1")) == 1

    def test_03_same_job_different_users(self, service):
        a = apply(service, owner="u1")
        b = apply(service, owner="u2")

        assert a.id != b.id

    def test_04_concurrent_duplicates_create_one(self, service):
        barrier = threading.Barrier(8)

        def attempt():
            barrier.wait()
            try:
                return apply(service)
            except ConflictException:
                return None

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: attempt(), range(8)))

        assert sum(1 for r in results if r is not None) == 1
        assert len(service.list_by_owner("u1")) == 1


class TestUpdateStatus:

    def test_01_appends_timeline_entry(self, service, utc_clock):
        app = apply(service)
        utc_clock.advance(60)

        updated = service.update_status(app.id, "interview", "Phone screen booked")

        assert updated.status == ApplicationStatus.INTERVIEW
        assert [e.status for e in updated.timeline] == [ApplicationStatus.APPLIED, ApplicationStatus.INTERVIEW]
        assert updated.timeline[-1].note == "Phone screen booked"
        assert updated.updated_at == utc_clock.now
        assert updated.created_at == app.created_at

    def test_02_default_note(self, service):
        app = apply(service)

        updated = service.update_status(app.id, ApplicationStatus.OFFER)

        assert updated.timeline[-1].note == "Status updated to offer"

    def test_03_invalid_status_checked_before_lookup(self, service):
        with pytest.raises(InvalidStatusException) as exc_info:
            service.update_status("missing", "ghosted")

        assert "Must be one of" in str(exc_info.value)

    def test_04_unknown_application(self, service):
        with pytest.raises(NotFoundException):
            service.update_status("missing", "interview")

    def test_05_permissive_allows_any_move(self, service):
        app = apply(service)
        service.update_status(app.id, "withdrawn")

        updated = service.update_status(app.id, "applied")

        assert updated.status == ApplicationStatus.APPLIED
        assert len(updated.timeline) == 3

    def test_06_timeline_never_goes_backwards(self, service, utc_clock):
        app = apply(service)
        utc_clock.advance(-3600)

        updated = service.update_status(app.id, "interview")

        assert updated.timeline[1].timestamp >= updated.timeline[0].timestamp

    def test_07_returned_copies_are_detached(self, service):
        app = apply(service)
        app.timeline.clear()

        assert len(service.get(app.id).timeline) == 1

    def test_08_concurrent_updates_keep_every_entry(self, service):
        app = apply(service)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: service.update_status(app.id, "interview", f"note {i}"), range(20)))

        assert len(service.get(app.id).timeline) == 21


class TestStrictTransitions:

    def test_01_documented_path(self, strict_service):
        app = apply(strict_service)

        strict_service.update_status(app.id, "interview")
        strict_service.update_status(app.id, "offer")
        final = strict_service.update_status(app.id, "withdrawn")

        assert final.status == ApplicationStatus.WITHDRAWN

    def test_02_illegal_move_rejected_without_change(self, strict_service):
        app = apply(strict_service)

        with pytest.raises(InvalidTransitionException):
            strict_service.update_status(app.id, "offer")

        assert len(strict_service.get(app.id).timeline) == 1

    def test_03_withdrawn_is_final(self, strict_service):
        app = apply(strict_service)
        strict_service.update_status(app.id, "withdrawn")

        with pytest.raises(InvalidTransitionException):
            strict_service.update_status(app.id, "applied")

    def test_04_allowed_transitions_per_mode(self, service, strict_service):
        permissive_app = apply(service)
        strict_app = apply(strict_service)

        assert service.allowed_transitions(permissive_app) == frozenset(
            s for s in ApplicationStatus if s != ApplicationStatus.APPLIED
        )
        assert strict_service.allowed_transitions(strict_app) == frozenset({
            ApplicationStatus.INTERVIEW, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN
        })

    def test_05_graph(self):
        S = ApplicationStatus
        assert is_transition_allowed(S.REJECTED, S.WITHDRAWN)
        assert not is_transition_allowed(S.OFFER, S.INTERVIEW)
        assert allowed_transitions(S.WITHDRAWN) == frozenset()


class TestQueries:

    def test_list_newest_first(self, service, utc_clock):
        apply(service, job_id="j1")
        utc_clock.advance(10)
        apply(service, job_id="j2")
        apply(service, job_id="j3")

        assert [a.job_id for a in service.list_by_owner("u1")] == ["j3", "j2", "j1"]

    def test_list_only_own(self, service):
        apply(service, owner="u1")
        apply(service, owner="u2", job_id="other")

        assert [a.owner_user_id for a in service.list_by_owner("u2")] == ["u2"]
        assert service.list_by_owner("nobody") == []

    def test_find_by_owner_and_job(self, service):
        app = apply(service)

        assert service.find_by_owner_and_job("u1", "remotive-1").id == app.id
        assert service.find_by_owner_and_job("u2", "remotive-1") is None

    def test_get_missing(self, service):
        with pytest.raises(NotFoundException):
            service.get("app-missing")

    def test_parse_status(self):
        assert parse_status("offer") == ApplicationStatus.OFFER
        with pytest.raises(InvalidStatusException):
            parse_status(None)
