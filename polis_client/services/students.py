"""Student endpoints, including the student-course association."""

import logging
from typing import Any

from polis_client.schemas.common import RespSingle
from polis_client.schemas.university import CourseStudentAssoc, Student
from polis_client.services.base import EntityService

logger = logging.getLogger(__name__)


class StudentService(EntityService[Student]):
    resource = "student"
    model = Student

    async def associate_course(self, student_id: int, course_id: int) -> RespSingle[Any]:
        logger.info(f"Associating student {student_id} to course {course_id}")
        return await self.client.post(
            "/associateStudentToCourse",
            CourseStudentAssoc(id_student=student_id, id_course=course_id),
            RespSingle[Any],
        )

    async def remove_course(self, student_id: int, course_id: int) -> RespSingle[Any]:
        logger.info(f"Removing student {student_id} from course {course_id}")
        return await self.client.post(
            "/removeStudentFromCourse",
            CourseStudentAssoc(id_student=student_id, id_course=course_id),
            RespSingle[Any],
        )
