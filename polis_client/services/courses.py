from polis_client.schemas.university import Course
from polis_client.services.base import EntityService


class CourseService(EntityService[Course]):
    resource = "course"
    model = Course
