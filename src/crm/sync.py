"""
Push a course to Salesforce: create the Course__c record the first time,
update it on every later push.
"""

from dataclasses import dataclass
from typing import Any, Optional

from src.util.logging import get_logger

from .client import RemoteNotFound, RemoteUnavailable
from .fields import (
    ContentExpertLookup,
    ProgramLookup,
    course_salesforce_fields,
    program_id,
)
from .models import SALESFORCE_ID_FLAG, Course

logger = get_logger(__name__)

COURSE_SOBJECT = "Course__c"

CREATED = "created"
UPDATED = "updated"
SUPPRESSED = "suppressed"


@dataclass
class SyncResult:
    status: str
    salesforce_id: Optional[str] = None
    outcome: Any = None
    error: Optional[BaseException] = None

    @property
    def has_result(self) -> bool:
        """False when the update failed and the error was only reported."""
        return self.status != SUPPRESSED


class CourseSalesforceSync:
    """
    Synchronizes courses with Salesforce.

    All collaborators are injected; nothing happens until push() is called.
    """

    def __init__(
        self,
        client,
        store,
        error_reporter,
        enabled: bool,
        dashboard_url: str,
        content_expert_ids: ContentExpertLookup,
        program_id_for: ProgramLookup = program_id,
    ):
        self.client = client
        self.store = store
        self.error_reporter = error_reporter
        self.enabled = enabled
        self.dashboard_url = dashboard_url
        self.content_expert_ids = content_expert_ids
        self.program_id_for = program_id_for

    def course_fields(self, course: Course):
        return course_salesforce_fields(
            course,
            self.dashboard_url,
            self.content_expert_ids,
            self.program_id_for,
        )

    def push(self, course: Course) -> Optional[SyncResult]:
        """
        Create or update the course's Salesforce record.

        Returns:
            SyncResult, or None when Salesforce sync is disabled
        """
        if not self.enabled:
            logger.debug(f"Salesforce sync disabled, skipping {course.slug}")
            return None

        salesforce_id = course.salesforce_id
        if salesforce_id:
            return self._update(course, salesforce_id)
        return self._create(course)

    def push_slug(self, slug: str) -> Optional[SyncResult]:
        """
        Load a course from the store and push it.

        The store is not read at all when Salesforce sync is disabled.
        """
        if not self.enabled:
            logger.debug(f"Salesforce sync disabled, not loading {slug}")
            return None
        return self.push(self.store.load(slug))

    def _create(self, course: Course) -> SyncResult:
        logger.info(f"Creating Salesforce record for course {course.slug}")
        salesforce_id = self.client.create(COURSE_SOBJECT, self.course_fields(course))
        course.flags[SALESFORCE_ID_FLAG] = salesforce_id
        self.store.save(course)
        return SyncResult(status=CREATED, salesforce_id=salesforce_id)

    def _update(self, course: Course, salesforce_id: str) -> SyncResult:
        logger.info(
            f"Updating Salesforce record {salesforce_id} for course {course.slug}"
        )
        try:
            outcome = self.client.update(
                COURSE_SOBJECT, salesforce_id, self.course_fields(course)
            )
        # An HTML error page means Salesforce is down; a 404 means the record
        # was deleted on the Salesforce side.
        except (RemoteUnavailable, RemoteNotFound) as e:
            self.error_reporter.capture(e, course=course.slug)
            return SyncResult(
                status=SUPPRESSED, salesforce_id=salesforce_id, error=e
            )
        return SyncResult(status=UPDATED, salesforce_id=salesforce_id, outcome=outcome)


def build_course_sync(client=None, store=None) -> CourseSalesforceSync:
    """Wire a CourseSalesforceSync from the process settings."""
    from src.settings import app_settings
    from src.util.sentry import SentryErrorReporter

    from .client import SalesforceClient
    from .content_experts import get_content_expert_registry
    from .store import TrackerCourseStore

    return CourseSalesforceSync(
        client=client or SalesforceClient.from_settings(),
        store=store or TrackerCourseStore.from_settings(),
        error_reporter=SentryErrorReporter(),
        enabled=app_settings.salesforce_sync_enabled,
        dashboard_url=app_settings.dashboard_url,
        content_expert_ids=get_content_expert_registry(),
    )
