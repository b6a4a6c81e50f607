"""Course association changes driven by a course-selection screen.

The caller hands over the course ids the user ended up selecting; these
helpers work out which associate/remove calls are needed and send them.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from polis_client.exceptions import PreconditionError
from polis_client.schemas.university import Student, Teacher
from polis_client.services.students import StudentService
from polis_client.services.teachers import TeacherService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssociationChange:
    added: tuple[int, ...] = ()
    removed: tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


def diff_course_ids(current: Iterable[int], selected: Iterable[int]) -> AssociationChange:
    """Return the ids to add and to remove, each in the caller's order."""
    current = list(dict.fromkeys(current))
    selected = list(dict.fromkeys(selected))
    return AssociationChange(
        added=tuple(cid for cid in selected if cid not in current),
        removed=tuple(cid for cid in current if cid not in selected),
    )


async def sync_teacher_courses(
    service: TeacherService,
    teacher: Teacher,
    selected_ids: Iterable[int],
) -> AssociationChange:
    if teacher.id is None:
        raise PreconditionError("Save the teacher before assigning courses.")

    current = [c.id for c in teacher.courses if c.id is not None]
    change = diff_course_ids(current, selected_ids)
    if change.is_empty:
        return change

    calls = [service.associate_course(teacher.id, cid) for cid in change.added]
    calls += [service.remove_course(teacher.id, cid) for cid in change.removed]
    await asyncio.gather(*calls)

    logger.info(
        f"Updated course associations for teacher {teacher.id}: "
        f"{len(change.added)} added, {len(change.removed)} removed"
    )
    return change


async def sync_student_course(
    service: StudentService,
    student: Student,
    selected_id: int | None,
) -> AssociationChange:
    """Apply the one-course-per-student rule.

    A different selection associates the new course (the backend replaces
    the old one); an empty selection removes the current course.
    """
    if student.id is None:
        raise PreconditionError("Save the student before assigning a course.")

    current_id = student.course.id if student.course is not None else None

    if selected_id is not None and selected_id != current_id:
        await service.associate_course(student.id, selected_id)
        change = AssociationChange(added=(selected_id,))
    elif selected_id is None and current_id is not None:
        await service.remove_course(student.id, current_id)
        change = AssociationChange(removed=(current_id,))
    else:
        return AssociationChange()

    logger.info(f"Updated course association for student {student.id}: {change}")
    return change
