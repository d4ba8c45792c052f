"""Launch the police roster: open the database, serve the bridge, open the main window.

Run through the `police-roster` script or `python -m roster.main`.
"""
from __future__ import annotations

import logging
import sys

from .api import create_app
from .config import load_settings
from .db import Database
from .router import RequestRouter
from .services.gateway import PersistenceGateway
from .errors import ShellError
from .shell import DesktopShell

logger = logging.getLogger(__name__)


def main() -> int:
    import uvicorn

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    gateway = PersistenceGateway(Database())
    init = gateway.initialize()
    if not init.ok:
        logger.error("Startup aborted, database unavailable at %s: %s", init.path, init.error)
        return 1

    shell = DesktopShell(settings.ui_url)
    app = create_app(RequestRouter(gateway, shell), settings)
    try:
        try:
            shell.open_main_window()
        except ShellError as e:
            logger.warning("Main window not opened: %s", e)
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    finally:
        gateway.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
