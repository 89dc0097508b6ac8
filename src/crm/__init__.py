"""
CRM module: synchronizes tracker courses with Salesforce.
"""

from .client import RemoteNotFound, RemoteUnavailable, SalesforceClient, SalesforceError
from .fields import course_salesforce_fields
from .models import Course, Staff, TimelineBlock
from .sync import CourseSalesforceSync, SyncResult, build_course_sync

__all__ = [
    "Course",
    "CourseSalesforceSync",
    "RemoteNotFound",
    "RemoteUnavailable",
    "SalesforceClient",
    "SalesforceError",
    "Staff",
    "SyncResult",
    "TimelineBlock",
    "build_course_sync",
    "course_salesforce_fields",
]
