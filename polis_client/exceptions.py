"""Client error taxonomy and the user-facing message table.

Every failure the client can hit is raised as a ``PolisClientError``
subclass carrying a human-readable ``message`` and the backend error code.
Controllers surface ``exc.message`` verbatim.
"""

from polis_client.schemas.common import ServerErrorCode

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred."

ERROR_MESSAGES: dict[str, str] = {
    ServerErrorCode.VALIDATION_ERROR.value: "Validation error. Please check your input.",
    ServerErrorCode.STUDENT_NOT_FOUND.value: "Student not found.",
    ServerErrorCode.TEACHER_NOT_FOUND.value: "Teacher not found.",
    ServerErrorCode.COURSE_NOT_FOUND.value: "Course not found.",
    ServerErrorCode.DELETE_STUDENT_NOT_ALLOWED.value: "Cannot delete student. They are enrolled in courses.",
    ServerErrorCode.DELETE_TEACHER_NOT_ALLOWED.value: "Cannot delete teacher. They are assigned to courses.",
    ServerErrorCode.DELETE_COURSE_NOT_ALLOWED.value: "Cannot delete course. It has enrolled students.",
    ServerErrorCode.STUDENT_MISSING.value: "Student is missing or incomplete.",
    ServerErrorCode.TEACHER_MISSING.value: "Teacher is missing or incomplete.",
    ServerErrorCode.COURSE_MISSING.value: "Course is missing or incomplete.",
    ServerErrorCode.FILTER_MISSING.value: "Filter is missing or incomplete.",
    ServerErrorCode.UNKNOWN_ERROR.value: DEFAULT_ERROR_MESSAGE,
}


def message_for(code, server_message: str | None = None, fallback: str = DEFAULT_ERROR_MESSAGE) -> str:
    """Map a backend error code to its message.

    Known codes use the table. Otherwise the message the server sent with
    the failing status wins, then ``fallback``. The backend often leaves
    ``code`` null and only fills in ``message``.
    """
    if isinstance(code, ServerErrorCode):
        code = code.value
    if code is not None and str(code) in ERROR_MESSAGES:
        return ERROR_MESSAGES[str(code)]
    return server_message or fallback


class PolisClientError(Exception):
    """Base exception for polis-client errors."""

    def __init__(
        self,
        message: str,
        error_code: str = ServerErrorCode.UNKNOWN_ERROR.value,
        status_code: int | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(self.message)


class TransportError(PolisClientError):
    """No response was received (connection refused, DNS, timeout)."""

    def __init__(self, message: str = "Unable to reach the server. Check your connection."):
        super().__init__(message=message)


class HTTPStatusError(PolisClientError):
    """The backend answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        error_code: str | None = None,
        server_message: str | None = None,
    ):
        message = message_for(error_code, server_message, fallback=f"Server error: {status_code}")
        super().__init__(
            message=message,
            error_code=error_code or ServerErrorCode.UNKNOWN_ERROR.value,
            status_code=status_code,
        )


class ServerEnvelopeError(PolisClientError):
    """2xx response whose envelope reports an error or an ERROR/FATAL status."""

    def __init__(
        self,
        error_code: str | None,
        status_code: int | None = None,
        server_message: str | None = None,
    ):
        super().__init__(
            message=message_for(error_code, server_message),
            error_code=error_code or ServerErrorCode.UNKNOWN_ERROR.value,
            status_code=status_code,
        )


class ResponseFormatError(PolisClientError):
    """Response body could not be decoded into the expected envelope."""

    def __init__(self, status_code: int | None = None):
        super().__init__(
            message=DEFAULT_ERROR_MESSAGE,
            status_code=status_code,
        )


class PreconditionError(PolisClientError):
    """Local precondition failed; no request was sent."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="PRECONDITION_FAILED")
