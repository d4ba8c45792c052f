from __future__ import annotations

from fastapi import APIRouter

from ..config import API_TITLE, APP_VERSION

router = APIRouter(tags=["meta"])

VERSION_INFO = {"app": API_TITLE, "version": APP_VERSION}


@router.get("/health")
def api_health():
    return {"status": "ok"}


@router.get("/version")
def api_version():
    return dict(VERSION_INFO)
