"""Command-line access to the university backend.

Usage:
    python -m polis_client.cli students list                  # first page
    python -m polis_client.cli students list --search anna --pages 3
    python -m polis_client.cli teachers get 4
    python -m polis_client.cli courses delete 7

Environment variables:
    POLIS_API_BASE_URL - backend root (default http://localhost:8080)
"""

import argparse
import asyncio
import logging
import sys

from polis_client.config import Settings, settings as default_settings
from polis_client.controllers.list_controller import ListController
from polis_client.gateway import ApiGateway
from polis_client.schemas.university import Course, Student, Teacher

ENTITIES = ("students", "teachers", "courses")


def describe(entity) -> str:
    if isinstance(entity, Student):
        course = f"  [{entity.course.code}]" if entity.course and entity.course.code else ""
        email = f"  <{entity.email}>" if entity.email else ""
        return f"{entity.id!s:>5}  {entity.full_name}{email}{course}"
    if isinstance(entity, Teacher):
        title = f"{entity.title} " if entity.title else ""
        return f"{entity.id!s:>5}  {title}{entity.full_name}  ({len(entity.courses)} courses)"
    if isinstance(entity, Course):
        year = f" ({entity.year})" if entity.year else ""
        return f"{entity.id!s:>5}  {entity.code or '-'}  {entity.title or ''}{year}"
    return repr(entity)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="polis_client", description=__doc__.splitlines()[0])
    parser.add_argument("--base-url", help="Override POLIS_API_BASE_URL")
    parser.add_argument("--page-size", type=int, help="Override POLIS_PAGE_SIZE")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("entity", choices=ENTITIES)

    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List records page by page")
    list_cmd.add_argument("--search", default="", help="Free-text filter")
    list_cmd.add_argument("--pages", type=int, default=1, help="Pages to fetch (default 1)")

    get_cmd = commands.add_parser("get", help="Show one record")
    get_cmd.add_argument("id", type=int)

    delete_cmd = commands.add_parser("delete", help="Delete one record")
    delete_cmd.add_argument("id", type=int)

    return parser


async def run(args: argparse.Namespace, settings: Settings, transport=None) -> int:
    """Execute one CLI command; returns the process exit code."""
    async with ApiGateway.from_settings(settings, transport=transport) as api:
        service = api.service_for(args.entity)
        controller = ListController.for_service(service, page_size=settings.page_size)
        try:
            if args.command == "list":
                await controller.search(args.search)
                for _ in range(args.pages - 1):
                    if not controller.state.has_next:
                        break
                    await controller.load_more()
                for item in controller.state.items:
                    print(describe(item))
                if controller.state.error is None:
                    more = " (more available)" if controller.state.has_next else ""
                    print(f"\n{len(controller.state.items)} {args.entity}{more}")

            elif args.command == "get":
                entity = await controller.get(args.id)
                if entity is not None:
                    print(entity.model_dump_json(by_alias=True, indent=2, exclude_none=True))

            elif args.command == "delete":
                if await controller.delete(service.model(id=args.id)):
                    print(f"Deleted {service.resource} {args.id}")

            if controller.state.error is not None:
                print(f"Error: {controller.state.error}", file=sys.stderr)
                return 1
            return 0
        finally:
            controller.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.base_url:
        overrides["api_base_url"] = args.base_url
    if args.page_size:
        overrides["page_size"] = args.page_size
    settings = default_settings.model_copy(update=overrides)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
