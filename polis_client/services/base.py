"""Generic CRUD service over one backend entity.

Every entity exposes the same four calls:

    POST   /{entity}/filter   SimpleStringFilter -> RespSlice[E]
    POST   /{entity}/get      LongId             -> RespSingle[E]
    POST   /{entity}/upsert   E                  -> RespSingle[E]   (no id = create)
    DELETE /{entity}/{id}                        -> RespSingle[None]
"""

import logging
from typing import Any, Generic, TypeVar

from polis_client.api.client import ApiClient
from polis_client.exceptions import PreconditionError
from polis_client.schemas.common import LongId, RespSingle, RespSlice, SimpleStringFilter
from polis_client.schemas.university import Course, Student, Teacher

logger = logging.getLogger(__name__)

E = TypeVar("E", Student, Teacher, Course)


class EntityService(Generic[E]):
    resource: str
    model: type[E]

    def __init__(self, client: ApiClient):
        self.client = client

    async def filter(self, query: SimpleStringFilter) -> RespSlice[E]:
        return await self.client.post(
            f"/{self.resource}/filter", query, RespSlice[self.model]
        )

    async def get(self, entity_id: int) -> RespSingle[E]:
        return await self.client.post(
            f"/{self.resource}/get", LongId(id=entity_id), RespSingle[self.model]
        )

    async def upsert(self, entity: E) -> RespSingle[E]:
        action = "update" if entity.id is not None else "create"
        logger.info(f"Upserting {self.resource} ({action})", extra={"id": entity.id})
        return await self.client.post(
            f"/{self.resource}/upsert", entity, RespSingle[self.model]
        )

    async def delete(self, entity_id: int | None) -> RespSingle[Any]:
        if entity_id is None:
            raise PreconditionError(f"Cannot delete a {self.resource} that has no id.")
        logger.info(f"Deleting {self.resource} {entity_id}")
        return await self.client.delete(f"/{self.resource}/{entity_id}", RespSingle[Any])
