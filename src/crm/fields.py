"""
Field mapping from a tracker course to the Salesforce Course__c object.

Everything here is a pure function of the course snapshot and the lookup
data passed in: no network access, no writes.
"""

import re
from typing import Any, Callable, Dict, FrozenSet, Optional, Protocol, Tuple

from src.util.date_utils import format_date, format_timestamp
from src.util.word_count import from_characters

from .models import Course, TimelineBlock

ProgramLookup = Callable[[Course], Optional[str]]


class ContentExpertLookup(Protocol):
    """Staff username -> Salesforce contact id (a dict or ContentExpertRegistry)."""

    def get(self, username: str, default: Optional[str] = None) -> Optional[str]:
        ...


WIKIDATA_SOURCE = "www.wikidata.org"

# (title matcher, assignment date field, due date field)
BLOCK_FIELDS: Tuple[Tuple[Any, str, str], ...] = (
    (
        re.compile("Draft your article|Start drafting your"),
        "Editing_in_sandboxes_assignment_date__c",
        "Editing_in_sandboxes_due_date__c",
    ),
    (
        "Begin moving your work to Wikipedia",
        "Editing_in_mainspace_assignment_date__c",
        "Editing_in_mainspace_due_date__c",
    ),
)

# Field -> tags; the field is True when the course has any of them
TAG_FIELDS: Dict[str, FrozenSet[str]] = {
    "Medical_or_Psychology_Articles__c": frozenset(
        {"yes_medical_topics", "maybe_medical_topics"}
    ),
    "Group_work__c": frozenset({"working_in_groups"}),
    "Interested_in_DYK_or_GA__c": frozenset({"dyk_and_ga"}),
}


def program_id(course: Course) -> Optional[str]:
    """Salesforce Program__c id for the course type, from settings."""
    from src.settings import salesforce_settings

    return salesforce_settings.program_id_for(course.type)


def dashboard_link(dashboard_url: str, slug: str) -> str:
    return f"https://{dashboard_url}/courses/{slug}"


def words_added_in_thousands(course: Course) -> float:
    return float(from_characters(course.character_sum)) / 1000


def block_date_fields(course: Course) -> Dict[str, str]:
    """Assignment and due dates of the sandbox and mainspace editing blocks."""
    fields = {}
    for matcher, assignment_field, due_field in BLOCK_FIELDS:
        block: Optional[TimelineBlock] = course.find_block_by_title(matcher)
        if block is None:
            continue
        if block.calculated_date is not None:
            fields[assignment_field] = format_date(block.calculated_date)
        if block.calculated_due_date is not None:
            fields[due_field] = format_date(block.calculated_due_date)
    return fields


def tag_fields(course: Course) -> Dict[str, bool]:
    course_tags = set(course.tags)
    return {
        field: bool(course_tags & tags) for field, tags in TAG_FIELDS.items()
    }


def wikidata_fields(course: Course) -> Dict[str, int]:
    """
    Wikidata contribution counts, or nothing at all when the course has no
    Wikidata statistics.
    """
    stats = (course.stats or {}).get(WIKIDATA_SOURCE)
    if stats is None:
        return {}
    return {
        "Wikidata_items_created__c": stats.get("items created", 0),
        "Wikidata_claims_added_removed_or_edited__c": (
            stats.get("claims created", 0)
            + stats.get("claims removed", 0)
            + stats.get("claims changed", 0)
        ),
        "Wikidata_references_added__c": stats.get("references added", 0),
    }


def content_expert(
    course: Course, content_expert_ids: ContentExpertLookup
) -> Optional[str]:
    """Salesforce id of the first staff member who is a content expert."""
    for staffer in course.staff:
        expert_id = content_expert_ids.get(staffer.username)
        if expert_id:
            return expert_id
    return None


def base_salesforce_fields(
    course: Course,
    dashboard_url: str,
    content_expert_ids: ContentExpertLookup,
    program_id_for: ProgramLookup = program_id,
) -> Dict[str, Any]:
    fields: Dict[str, Any] = {
        "Name": course.title,
        "Course_Page__c": course.url,
    }
    if course.end is not None:
        fields["Course_End_Date__c"] = format_date(course.end)
    fields.update(
        {
            "Course_Dashboard__c": dashboard_link(dashboard_url, course.slug),
            "Program__c": program_id_for(course),
            "Estimated_No_of_Participants__c": course.expected_students,
            "Articles_edited__c": course.article_count,
            "Total_edits__c": course.revision_count,
            "Words_added_in_thousands__c": words_added_in_thousands(course),
            "Article_views__c": course.view_sum,
            "No_of_Commons_uploads__c": course.upload_count,
            "Actual_No_of_Participants__c": course.user_count,
        }
    )
    if course.timeline_start is not None:
        fields["Assignment_Start_Date__c"] = format_date(course.timeline_start)
    fields.update(block_date_fields(course))
    fields.update(tag_fields(course))

    expert = content_expert(course, content_expert_ids)
    if expert is not None:
        fields["Content_Expert__c"] = expert

    fields["Stay_in_sandbox__c"] = course.stay_in_sandbox
    fields["No_sandboxes__c"] = course.no_sandboxes
    if course.submitted_at is not None:
        fields["Submitted_at__c"] = format_timestamp(course.submitted_at)
    if course.approved_at is not None:
        fields["Approved_at__c"] = format_timestamp(course.approved_at)
    return fields


def course_salesforce_fields(
    course: Course,
    dashboard_url: str,
    content_expert_ids: ContentExpertLookup,
    program_id_for: ProgramLookup = program_id,
) -> Dict[str, Any]:
    """
    Build the Course__c field mapping for a course.

    Args:
        course: Course snapshot
        dashboard_url: Dashboard host used for the Course_Dashboard__c link
        content_expert_ids: Staff username -> Salesforce contact id
        program_id_for: Course -> Program__c id lookup

    Returns:
        Dict[str, Any]: Salesforce field name -> value, in a stable order
    """
    fields = base_salesforce_fields(
        course, dashboard_url, content_expert_ids, program_id_for
    )
    if course.level:
        fields["Course_Level__c"] = course.level
    if course.format:
        fields["Course_Format__c"] = course.format
    if course.withdrawn:
        fields["Did_not_do_assignment__c"] = True
        fields["Status__c"] = "Complete"
    fields.update(wikidata_fields(course))
    return fields
