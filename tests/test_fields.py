"""Tests for the Course__c field mapping."""

from datetime import date

from src.crm.content_experts import (
    CONTENT_EXPERT_SETTING,
    ContentExpertRegistry,
    JsonSettingStore,
)
from src.crm.fields import course_salesforce_fields, wikidata_fields
from src.crm.models import Course, Staff, TimelineBlock

DASHBOARD = "dashboard.wikiedu.org"
WIKIDATA_KEYS = {
    "Wikidata_items_created__c",
    "Wikidata_claims_added_removed_or_edited__c",
    "Wikidata_references_added__c",
}


def program(course):
    return "a0f1a000000PrGm"


def build(course, content_expert_ids=None):
    if content_expert_ids is None:
        content_expert_ids = {}
    return course_salesforce_fields(course, DASHBOARD, content_expert_ids, program)


class TestBaseFields:
    def test_direct_copies_and_formatted_dates(self, course, content_expert_ids):
        fields = build(course, content_expert_ids)

        assert fields["Name"] == "Biology 101"
        assert fields["Course_Page__c"] == course.url
        assert fields["Course_End_Date__c"] == "2024-05-15"
        assert fields["Assignment_Start_Date__c"] == "2024-01-22"
        assert (
            fields["Course_Dashboard__c"]
            == "https://dashboard.wikiedu.org/courses/University/Biology_101_(Spring_2024)"
        )
        assert fields["Program__c"] == "a0f1a000000PrGm"
        assert fields["Estimated_No_of_Participants__c"] == 25
        assert fields["Actual_No_of_Participants__c"] == 23
        assert fields["Articles_edited__c"] == 30
        assert fields["Total_edits__c"] == 812
        assert fields["Article_views__c"] == 150000
        assert fields["No_of_Commons_uploads__c"] == 4
        assert fields["Submitted_at__c"] == "2023-12-01T17:30:00+00:00"
        assert fields["Approved_at__c"] == "2023-12-04T09:00:00+00:00"
        assert fields["Stay_in_sandbox__c"] is False
        assert fields["No_sandboxes__c"] is False

    def test_missing_dates_are_omitted(self):
        course = Course(slug="School/Course_(Term)", title="Course")

        fields = build(course)

        for key in (
            "Course_End_Date__c",
            "Assignment_Start_Date__c",
            "Submitted_at__c",
            "Approved_at__c",
        ):
            assert key not in fields

    def test_words_added_in_thousands(self, course):
        course.character_sum = 6250

        assert build(course)["Words_added_in_thousands__c"] == 1.25

    def test_words_added_without_characters(self):
        course = Course(slug="a/b", title="b")

        assert build(course)["Words_added_in_thousands__c"] == 0.0

    def test_sandbox_flags_pass_through(self, course):
        course.stay_in_sandbox = True
        course.no_sandboxes = True

        fields = build(course)

        assert fields["Stay_in_sandbox__c"] is True
        assert fields["No_sandboxes__c"] is True

    def test_same_course_gives_identical_mapping(self, course, content_expert_ids):
        first = build(course, content_expert_ids)
        second = build(course, content_expert_ids)

        assert first == second
        assert list(first) == list(second)


class TestConditionalFields:
    def test_level_and_format_only_when_present(self, course):
        fields = build(course)
        assert "Course_Level__c" not in fields
        assert "Course_Format__c" not in fields

        course.level = "Introductory"
        course.format = "In-person"
        fields = build(course)
        assert fields["Course_Level__c"] == "Introductory"
        assert fields["Course_Format__c"] == "In-person"

    def test_empty_level_is_omitted(self, course):
        course.level = ""

        assert "Course_Level__c" not in build(course)

    def test_withdrawn_course_is_complete(self, course):
        course.withdrawn = True

        fields = build(course)

        assert fields["Did_not_do_assignment__c"] is True
        assert fields["Status__c"] == "Complete"

    def test_active_course_has_no_status(self, course):
        fields = build(course)

        assert "Did_not_do_assignment__c" not in fields
        assert "Status__c" not in fields


class TestTimelineBlockFields:
    def test_located_blocks(self, course):
        fields = build(course)

        assert fields["Editing_in_sandboxes_assignment_date__c"] == "2024-03-01"
        assert fields["Editing_in_sandboxes_due_date__c"] == "2024-03-08"
        assert fields["Editing_in_mainspace_assignment_date__c"] == "2024-03-25"
        assert fields["Editing_in_mainspace_due_date__c"] == "2024-04-01"

    def test_alternate_sandbox_title(self, course):
        course.blocks = [
            TimelineBlock(
                title="Draft your article",
                calculated_date=date(2024, 2, 12),
                calculated_due_date=date(2024, 2, 19),
            )
        ]

        fields = build(course)

        assert fields["Editing_in_sandboxes_assignment_date__c"] == "2024-02-12"
        assert fields["Editing_in_sandboxes_due_date__c"] == "2024-02-19"

    def test_missing_blocks_are_omitted(self, course):
        course.blocks = [
            TimelineBlock(
                title="Welcome to your Wikipedia project",
                calculated_date=date(2024, 1, 22),
                calculated_due_date=date(2024, 1, 29),
            )
        ]

        fields = build(course)

        for key in (
            "Editing_in_sandboxes_assignment_date__c",
            "Editing_in_sandboxes_due_date__c",
            "Editing_in_mainspace_assignment_date__c",
            "Editing_in_mainspace_due_date__c",
        ):
            assert key not in fields


class TestTagFields:
    def test_medical_and_group_work(self, course):
        fields = build(course)

        assert fields["Medical_or_Psychology_Articles__c"] is True
        assert fields["Group_work__c"] is True
        assert fields["Interested_in_DYK_or_GA__c"] is False

    def test_maybe_medical_and_dyk(self, course):
        course.tags = ["maybe_medical_topics", "dyk_and_ga"]

        fields = build(course)

        assert fields["Medical_or_Psychology_Articles__c"] is True
        assert fields["Group_work__c"] is False
        assert fields["Interested_in_DYK_or_GA__c"] is True

    def test_no_tags_gives_false(self, course):
        course.tags = []

        fields = build(course)

        assert fields["Medical_or_Psychology_Articles__c"] is False
        assert fields["Group_work__c"] is False
        assert fields["Interested_in_DYK_or_GA__c"] is False


class TestWikidataFields:
    def test_no_wikidata_stats(self, course):
        course.stats = {"en.wikipedia.org": {"articles edited": 3}}

        fields = build(course)

        assert WIKIDATA_KEYS.isdisjoint(fields)

    def test_no_stats_at_all(self, course):
        assert wikidata_fields(course) == {}

    def test_claims_are_summed_with_missing_metrics_as_zero(self, course):
        course.stats = {
            "www.wikidata.org": {"claims created": 3, "claims removed": 1}
        }

        fields = build(course)

        assert fields["Wikidata_claims_added_removed_or_edited__c"] == 4
        assert fields["Wikidata_items_created__c"] == 0
        assert fields["Wikidata_references_added__c"] == 0

    def test_all_metrics(self, course):
        course.stats = {
            "www.wikidata.org": {
                "items created": 12,
                "claims created": 40,
                "claims removed": 2,
                "claims changed": 5,
                "references added": 9,
            }
        }

        fields = build(course)

        assert fields["Wikidata_items_created__c"] == 12
        assert fields["Wikidata_claims_added_removed_or_edited__c"] == 47
        assert fields["Wikidata_references_added__c"] == 9


class TestContentExpert:
    def test_first_matching_staff_member(self, course):
        ids = {
            "Helaine (Wiki Ed)": "0031a000001AAAA",
            "Ian (Wiki Ed)": "0031a000002BBBB",
        }

        assert build(course, ids)["Content_Expert__c"] == "0031a000001AAAA"

    def test_skips_staff_with_empty_ids(self, course):
        ids = {"Helaine (Wiki Ed)": "", "Ian (Wiki Ed)": "0031a000002BBBB"}

        assert build(course, ids)["Content_Expert__c"] == "0031a000002BBBB"

    def test_no_content_expert(self, course):
        course.staff = [Staff(username="Someone else")]

        assert "Content_Expert__c" not in build(course, {"Ian (Wiki Ed)": "x"})

    def test_registry_as_lookup(self, course, tmp_path):
        store = JsonSettingStore(tmp_path / "settings.json")
        store.find_or_create(
            CONTENT_EXPERT_SETTING, {"Ian (Wiki Ed)": "0031a000002BBBB"}
        )

        fields = build(course, ContentExpertRegistry(store))

        assert fields["Content_Expert__c"] == "0031a000002BBBB"
