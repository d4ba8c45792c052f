from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request

from ..schemas import Reply

router = APIRouter()

STATUS_BY_CODE = {
    "unknown_operation": 404,
    "not_found": 404,
    "invalid_request": 422,
    "unavailable": 503,
    "storage_error": 500,
    "shell_error": 500,
    "internal_error": 500,
}


@router.get("/ipc")
def api_ipc_operations(request: Request):
    return {"operations": request.app.state.router.operations()}


@router.post("/ipc/{operation}", response_model=Reply)
async def api_ipc(operation: str, request: Request, payload: dict[str, Any] | None = Body(None)):
    reply = await request.app.state.router.invoke(operation, payload)
    if not reply.ok:
        raise HTTPException(status_code=STATUS_BY_CODE.get(reply.error.code, 500), detail=reply.error.model_dump())
    return reply
