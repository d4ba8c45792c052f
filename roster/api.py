"""
FastAPI bridge between the UI layer and the request router.
Build with `create_app(router, settings)`; `roster.main` owns the lifecycle.
"""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import API_TITLE, APP_VERSION, Settings
from .router import RequestRouter
from .routes import base as base_routes
from .routes import ipc as ipc_routes


def create_app(router: RequestRouter, settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(title=API_TITLE, version=APP_VERSION)
    app.state.router = router

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(base_routes.router)
    app.include_router(ipc_routes.router)
    return app
