from polis_client.services.base import EntityService
from polis_client.services.courses import CourseService
from polis_client.services.students import StudentService
from polis_client.services.teachers import TeacherService

__all__ = ["CourseService", "EntityService", "StudentService", "TeacherService"]
