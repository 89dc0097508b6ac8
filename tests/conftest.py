"""Shared fixtures for the Salesforce sync tests."""

from datetime import date, datetime, timezone

import pytest

from src.crm.models import Course, Staff, TimelineBlock


class FakeSalesforceClient:
    """Records create/update calls; raises a configured error if set."""

    def __init__(self, new_id="a0B000000000001", create_error=None, update_error=None):
        self.new_id = new_id
        self.create_error = create_error
        self.update_error = update_error
        self.created = []
        self.updated = []

    def create(self, sobject, fields):
        self.created.append((sobject, fields))
        if self.create_error is not None:
            raise self.create_error
        return self.new_id

    def update(self, sobject, record_id, fields):
        self.updated.append((sobject, record_id, fields))
        if self.update_error is not None:
            raise self.update_error
        return True


class FakeCourseStore:
    def __init__(self):
        self.saved = []

    def save(self, course):
        self.saved.append(dict(course.flags))


class FakeErrorReporter:
    def __init__(self):
        self.captured = []

    def capture(self, error, **extra):
        self.captured.append((error, extra))


@pytest.fixture
def course():
    return Course(
        id=42,
        slug="University/Biology_101_(Spring_2024)",
        title="Biology 101",
        url="https://en.wikipedia.org/wiki/Wikipedia:Wiki_Ed/University/Biology_101",
        type="ClassroomProgramCourse",
        end=datetime(2024, 5, 15, 23, 59, tzinfo=timezone.utc),
        timeline_start=datetime(2024, 1, 22, tzinfo=timezone.utc),
        expected_students=25,
        user_count=23,
        article_count=30,
        revision_count=812,
        view_sum=150000,
        upload_count=4,
        character_sum=62500,
        submitted_at=datetime(2023, 12, 1, 17, 30, tzinfo=timezone.utc),
        approved_at=datetime(2023, 12, 4, 9, 0, tzinfo=timezone.utc),
        tags=["yes_medical_topics", "working_in_groups"],
        staff=[Staff(username="Helaine (Wiki Ed)"), Staff(username="Ian (Wiki Ed)")],
        blocks=[
            TimelineBlock(
                title="Start drafting your contributions",
                calculated_date=date(2024, 3, 1),
                calculated_due_date=date(2024, 3, 8),
            ),
            TimelineBlock(
                title="Begin moving your work to Wikipedia",
                calculated_date=date(2024, 3, 25),
                calculated_due_date=date(2024, 4, 1),
            ),
        ],
    )


@pytest.fixture
def content_expert_ids():
    return {"Ian (Wiki Ed)": "0031a000002XyZq"}


@pytest.fixture
def fake_client():
    return FakeSalesforceClient()


@pytest.fixture
def fake_store():
    return FakeCourseStore()


@pytest.fixture
def fake_reporter():
    return FakeErrorReporter()
