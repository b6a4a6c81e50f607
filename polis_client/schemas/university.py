"""Entity DTOs for the university backend.

Scalars are optional because the backend owns required-field validation
and answers with VALIDATION_ERROR. A student holds at most one course.
Nested lists come back as null on the far side of a relation
(a teacher's courses carry no students) and read as empty lists.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from polis_client.schemas.common import CamelModel


class Student(CamelModel):
    id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    serial_number: str | None = None
    course: Course | None = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Teacher(CamelModel):
    id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    title: str | None = None
    courses: list[Course] = Field(default_factory=list)

    @field_validator("courses", mode="before")
    @classmethod
    def _null_courses(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Course(CamelModel):
    id: int | None = None
    code: str | None = None
    title: str | None = None
    description: str | None = None
    year: int | None = None
    teacher: Teacher | None = None
    students: list[Student] = Field(default_factory=list)

    @field_validator("students", mode="before")
    @classmethod
    def _null_students(cls, value: Any) -> Any:
        return [] if value is None else value


class CourseStudentAssoc(CamelModel):
    id_student: int
    id_course: int


class CourseTeacherAssoc(CamelModel):
    id_teacher: int
    id_course: int


Student.model_rebuild()
Teacher.model_rebuild()
Course.model_rebuild()
