from polis_client.schemas.common import (
    ErrorContext,
    ErrorSeverity,
    LongId,
    Pagination,
    RespSingle,
    RespSlice,
    ServerErrorCode,
    ServerStatus,
    SimpleStringFilter,
    Slice,
    SortDirection,
    Sorting,
)
from polis_client.schemas.university import (
    Course,
    CourseStudentAssoc,
    CourseTeacherAssoc,
    Student,
    Teacher,
)

__all__ = [
    "Course",
    "CourseStudentAssoc",
    "CourseTeacherAssoc",
    "ErrorContext",
    "ErrorSeverity",
    "LongId",
    "Pagination",
    "RespSingle",
    "RespSlice",
    "ServerErrorCode",
    "ServerStatus",
    "SimpleStringFilter",
    "Slice",
    "SortDirection",
    "Sorting",
    "Student",
    "Teacher",
]
