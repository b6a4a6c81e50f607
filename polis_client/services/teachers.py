"""Teacher endpoints, including the teacher-course association."""

import logging
from typing import Any

from polis_client.schemas.common import RespSingle
from polis_client.schemas.university import CourseTeacherAssoc, Teacher
from polis_client.services.base import EntityService

logger = logging.getLogger(__name__)


class TeacherService(EntityService[Teacher]):
    resource = "teacher"
    model = Teacher

    async def associate_course(self, teacher_id: int, course_id: int) -> RespSingle[Any]:
        logger.info(f"Associating teacher {teacher_id} to course {course_id}")
        return await self.client.post(
            "/associateTeacherToCourse",
            CourseTeacherAssoc(id_teacher=teacher_id, id_course=course_id),
            RespSingle[Any],
        )

    async def remove_course(self, teacher_id: int, course_id: int) -> RespSingle[Any]:
        logger.info(f"Removing teacher {teacher_id} from course {course_id}")
        return await self.client.post(
            "/removeTeacherFromCourse",
            CourseTeacherAssoc(id_teacher=teacher_id, id_course=course_id),
            RespSingle[Any],
        )
