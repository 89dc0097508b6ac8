"""
Course store backed by the tracker's table API (NocoDB style records
endpoint, authenticated with an xc-token header).
"""

import json
from typing import Any, Dict, Optional

import httpx

from src.util.logging import get_logger

from .models import Course

logger = get_logger(__name__)

# Columns holding JSON documents, which the table API may return as text
JSON_COLUMNS = ("tags", "staff", "stats", "blocks", "flags")


class CourseNotFound(LookupError):
    pass


class CourseStoreError(Exception):
    pass


def slug_filter(slug: str) -> str:
    """
    where clause matching a slug exactly. The value is double-quoted since
    slugs contain parentheses and commas.
    """
    escaped = slug.replace("\\", "\\\\").replace('"', '\\"')
    return f'(slug,eq,"{escaped}")'


def course_from_record(record: Dict[str, Any]) -> Course:
    data = dict(record)
    if "Id" in data:
        data["id"] = data.pop("Id")
    for column in JSON_COLUMNS:
        value = data.get(column)
        if isinstance(value, str):
            data[column] = json.loads(value) if value.strip() else None
    return Course.model_validate(data)


class TrackerCourseStore:
    """Loads courses by slug and saves their flags back."""

    def __init__(
        self,
        api_endpoint: str,
        token: str,
        table: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.records_url = f"{api_endpoint.rstrip('/')}/tables/{table}/records"
        self._http = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={
                "accept": "application/json",
                "content-type": "application/json",
                "xc-token": token,
            },
        )

    @classmethod
    def from_settings(cls, settings=None) -> "TrackerCourseStore":
        if settings is None:
            from src.settings import app_settings as settings

        return cls(
            api_endpoint=settings.api_endpoint,
            token=settings.xc_token,
            table=settings.courses_table,
            timeout=settings.api_timeout,
        )

    def close(self) -> None:
        self._http.close()

    def load(self, slug: str) -> Course:
        """
        Fetch a course by slug.

        Raises:
            CourseNotFound: No record has this slug
            CourseStoreError: The tracker API returned an error
        """
        response = self._http.get(
            self.records_url, params={"where": slug_filter(slug), "limit": 25}
        )
        if response.status_code != 200:
            raise CourseStoreError(
                f"Failed to load course {slug}: {response.status_code} - {response.text}"
            )
        # The filter is matched loosely by some table backends
        for record in response.json().get("list", []):
            if record.get("slug") == slug:
                return course_from_record(record)
        raise CourseNotFound(slug)

    def save(self, course: Course) -> None:
        """Persist the course flags."""
        if course.id is None:
            raise CourseStoreError(f"Course {course.slug} has no record id")
        response = self._http.patch(
            self.records_url, json=[{"Id": course.id, "flags": course.flags}]
        )
        if response.status_code != 200:
            raise CourseStoreError(
                f"Failed to save course {course.slug}: {response.status_code} - {response.text}"
            )
        logger.info(f"Saved flags for course {course.slug}")
