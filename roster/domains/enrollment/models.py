# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data models for the enrollment domain.

Enrollment records are immutable snapshots of what the remote store
returned. The engine produces new snapshots with model_copy() when it
merges a confirmed write; nothing mutates a record in place.

Field aliases follow the remote wire format (course_variant, and the
embedded students/courses summaries), while Python code uses the
shorter attribute names.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from roster.domains.enrollment.status import EnrollmentStatus
from roster.utils.datetime import ensure_utc


class StudentSummary(BaseModel):
    """Student fields embedded in an enrollment row."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    eircode: str | None = None
    dob: date | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class CourseSummary(BaseModel):
    """Course fields embedded in an enrollment row."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str


class Enrollment(BaseModel):
    """An enrollment of one student in one course.

    Attributes:
        id: Opaque unique identifier.
        student_id: Enrolled student.
        course_id: Course enrolled in.
        status: Current pipeline or exit status.
        variant: Optional sub-classification within the course (e.g. a
            language track). Not unique.
        confirmed_date: Set while status is confirmed. Records edited
            outside the engine may violate this; they are corrected on
            the next write.
        invited_date: Invitation date, set while status is invited. Offered
            as the default when the enrollment is confirmed.
        notes: Free text.
        is_priority: Operator flag, sorts first inside status columns.
        created_at: Creation timestamp (UTC).
        student: Embedded student summary, if the store joined it.
        course: Embedded course summary, if the store joined it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str
    student_id: str
    course_id: str
    status: EnrollmentStatus
    variant: str | None = Field(default=None, alias="course_variant")
    confirmed_date: date | None = None
    invited_date: date | None = None
    notes: str | None = None
    is_priority: bool = False
    created_at: datetime
    student: StudentSummary | None = Field(default=None, alias="students")
    course: CourseSummary | None = Field(default=None, alias="courses")

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @property
    def group_key(self) -> tuple[str, str]:
        """Cascade group key: every variant of one student in one course."""
        return (self.student_id, self.course_id)
