"""ApiGateway: the REST boundary, built explicitly from Settings.

    async with ApiGateway.from_settings(settings) as api:
        page = await api.students.filter(SimpleStringFilter())
"""

import httpx

from polis_client.api.client import ApiClient
from polis_client.config import Settings
from polis_client.services.base import EntityService
from polis_client.services.courses import CourseService
from polis_client.services.students import StudentService
from polis_client.services.teachers import TeacherService


class ApiGateway:
    def __init__(self, client: ApiClient):
        self.client = client
        self.students = StudentService(client)
        self.teachers = TeacherService(client)
        self.courses = CourseService(client)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ApiGateway":
        return cls(ApiClient.from_settings(settings, transport=transport))

    def service_for(self, resource: str) -> EntityService:
        """Look up a service by entity name (singular or plural)."""
        services = {
            "student": self.students,
            "teacher": self.teachers,
            "course": self.courses,
        }
        key = resource.lower().rstrip("s")
        if key not in services:
            raise ValueError(f"Unknown entity: {resource!r}")
        return services[key]

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "ApiGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
