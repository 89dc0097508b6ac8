from datetime import date, datetime
from typing import Any, Dict, List, Optional, Pattern, Union

from pydantic import BaseModel, Field, field_validator

SALESFORCE_ID_FLAG = "salesforce_id"


class Staff(BaseModel):
    username: str


class TimelineBlock(BaseModel):
    title: str
    calculated_date: Optional[date] = None
    calculated_due_date: Optional[date] = None


class Course(BaseModel):
    """Snapshot of a tracker course, as read from the course store."""

    id: Optional[int] = None
    slug: str
    title: str
    url: Optional[str] = None
    type: Optional[str] = None
    level: Optional[str] = None
    format: Optional[str] = None
    end: Optional[datetime] = None
    timeline_start: Optional[datetime] = None
    expected_students: int = 0
    user_count: int = 0
    article_count: int = 0
    revision_count: int = 0
    view_sum: int = 0
    upload_count: int = 0
    character_sum: int = 0
    withdrawn: bool = False
    stay_in_sandbox: bool = False
    no_sandboxes: bool = False
    submitted_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)
    staff: List[Staff] = Field(default_factory=list)
    # data source -> metric -> count, e.g. {"www.wikidata.org": {"items created": 3}}
    stats: Optional[Dict[str, Dict[str, int]]] = None
    blocks: List[TimelineBlock] = Field(default_factory=list)
    flags: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("tags", "staff", "blocks", mode="before")
    def none_as_empty(cls, v):
        return [] if v is None else v

    @field_validator("flags", mode="before")
    def none_as_empty_flags(cls, v):
        return {} if v is None else v

    @property
    def salesforce_id(self) -> Optional[str]:
        return self.flags.get(SALESFORCE_ID_FLAG) or None

    def find_block_by_title(
        self, matcher: Union[str, Pattern]
    ) -> Optional[TimelineBlock]:
        """First block whose title equals a literal matcher or matches a regex."""
        for block in self.blocks:
            if isinstance(matcher, str):
                if block.title == matcher:
                    return block
            elif matcher.search(block.title):
                return block
        return None
