"""
Request router: operation name -> (request model, handler).

Payloads are validated against the operation's pydantic model and passed on as
named fields. Every outcome, including failures, comes back as a `Reply`.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from .errors import RosterError
from .schemas import (
    AccountCreate,
    AccountUpdate,
    Empty,
    OpenWindow,
    PersonnelFields,
    PersonnelQuery,
    PersonnelUpdate,
    Prompt,
    RecordId,
    Reply,
)
from .services.gateway import PersistenceGateway
from .shell import Shell

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    model: type[BaseModel]
    handler: Callable[[Any], Any]


class RequestRouter:
    def __init__(self, gateway: PersistenceGateway, shell: Shell):
        self.gateway = gateway
        self.shell = shell
        g = gateway
        self.routes: dict[str, Route] = {
            # users
            "get-users": Route(Empty, lambda r: g.list_accounts()),
            "add-users": Route(AccountCreate, lambda r: g.create_account(r.username, r.password, r.role)),
            "update-users": Route(AccountUpdate, lambda r: g.update_account(r.id, r.username, r.password, r.role)),
            "delete-users": Route(RecordId, lambda r: g.delete_account(r.id)),
            # policemen
            "get-policemen": Route(PersonnelQuery, lambda r: g.list_personnel(r.search, r.page_size, r.page_offset)),
            "get-policemen-by-id": Route(RecordId, lambda r: g.get_personnel(r.id)),
            "add-policemen": Route(PersonnelFields, lambda r: g.create_personnel(r.model_dump())),
            "update-policemen": Route(PersonnelUpdate, lambda r: g.update_personnel(r.id, r.model_dump(exclude={"id"}))),
            "delete-policemen": Route(RecordId, lambda r: g.delete_personnel(r.id)),
            # shell
            "open-win": Route(OpenWindow, lambda r: shell.open_window(r.hash)),
            "show-prompt": Route(Prompt, lambda r: shell.confirm(r.message)),
        }

    def operations(self) -> list[str]:
        return sorted(self.routes)

    def dispatch(self, operation: str, payload: dict | None = None) -> Reply:
        route = self.routes.get(operation)
        if route is None:
            return Reply.failure("unknown_operation", f"unknown operation: {operation}")
        try:
            request = route.model.model_validate(payload or {})
        except ValidationError as e:
            return Reply.failure("invalid_request", str(e))
        try:
            return Reply.success(route.handler(request))
        except RosterError as e:
            logger.warning("%s -> %s: %s", operation, e.code, e)
            return Reply.failure(e.code, str(e))
        except Exception as e:
            logger.exception("%s failed unexpectedly", operation)
            return Reply.failure(RosterError.code, str(e))

    async def invoke(self, operation: str, payload: dict | None = None) -> Reply:
        """Async entry for the bridge; the statement work happens in a worker thread."""
        return await asyncio.to_thread(self.dispatch, operation, payload)
