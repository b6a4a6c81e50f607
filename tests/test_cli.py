"""CLI tests through the fake backend."""

import httpx
import pytest

from polis_client.cli import build_parser, describe, run
from polis_client.config import Settings
from polis_client.schemas.university import Course, Student
from tests.fake_server import create_app


@pytest.fixture
def cli_settings() -> Settings:
    return Settings(api_base_url="http://test", page_size=10)


@pytest.fixture
def transport(backend) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=create_app(backend))


@pytest.mark.unit
class TestDescribe:
    def test_student_line(self):
        student = Student(
            id=3, first_name="Anna", last_name="Neri", email="anna@polis.edu",
            course=Course(id=1, code="PHY101"),
        )
        assert describe(student) == "    3  Anna Neri  <anna@polis.edu>  [PHY101]"

    def test_unsaved_course_line(self):
        assert describe(Course(code="CS101", title="Programming")) == " None  CS101  Programming"


@pytest.mark.integration
@pytest.mark.asyncio
class TestRun:
    async def test_list_first_page(self, cli_settings, transport, capsys):
        args = build_parser().parse_args(["students", "list"])
        assert await run(args, cli_settings, transport=transport) == 0

        out = capsys.readouterr().out
        assert "Student01" in out
        assert "Student11" not in out
        assert "10 students (more available)" in out

    async def test_list_several_pages_with_search(self, cli_settings, transport, capsys):
        args = build_parser().parse_args(["students", "list", "--search", "rossi", "--pages", "3"])
        assert await run(args, cli_settings, transport=transport) == 0
        assert "\n5 students\n" in capsys.readouterr().out

    async def test_get(self, cli_settings, transport, capsys):
        args = build_parser().parse_args(["teachers", "get", "1"])
        assert await run(args, cli_settings, transport=transport) == 0
        assert '"lastName": "Lovelace"' in capsys.readouterr().out

    async def test_get_missing(self, cli_settings, transport, capsys):
        args = build_parser().parse_args(["courses", "get", "99"])
        assert await run(args, cli_settings, transport=transport) == 1
        assert "Error: Course id has not been found." in capsys.readouterr().err

    async def test_delete(self, cli_settings, transport, backend, capsys):
        args = build_parser().parse_args(["students", "delete", "7"])
        assert await run(args, cli_settings, transport=transport) == 0
        assert 7 not in backend.students
        assert "Deleted student 7" in capsys.readouterr().out

    async def test_delete_refused(self, cli_settings, transport, backend, capsys):
        args = build_parser().parse_args(["teachers", "delete", "1"])
        assert await run(args, cli_settings, transport=transport) == 1
        assert "The teacher has relationships and cannot be deleted." in capsys.readouterr().err
        assert 1 in backend.teachers
