import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


class FakeShell:
    """Records shell calls instead of opening windows or dialogs."""

    def __init__(self, answer="OK Value"):
        self.answer = answer
        self.opened = []
        self.prompts = []

    def open_window(self, hash):
        self.opened.append(hash)

    def confirm(self, message):
        self.prompts.append(message)
        return self.answer


@pytest.fixture()
def tmp_db_path(tmp_path):
    return str(tmp_path / "roster_test.db")


@pytest.fixture()
def gateway(tmp_db_path):
    from roster.db import Database
    from roster.services.gateway import PersistenceGateway

    gw = PersistenceGateway(Database(tmp_db_path))
    assert gw.initialize().ok
    yield gw
    gw.shutdown()


@pytest.fixture()
def shell():
    return FakeShell()


@pytest.fixture()
def router(gateway, shell):
    from roster.router import RequestRouter
    return RequestRouter(gateway, shell)


@pytest.fixture()
def client(router):
    from fastapi.testclient import TestClient
    from roster.api import create_app
    return TestClient(create_app(router))


@pytest.fixture()
def make_personnel():
    return personnel_payload


def personnel_payload(**overrides):
    data = {
        "username": "Ahmed Hassan",
        "degree": "Sergeant",
        "police_no": "P-1001",
        "birth_date": "1990-04-12",
        "join_date": "2012-09-01",
        "address": "Cairo",
        "job": "Traffic",
        "image": None,
        "description": None,
    }
    data.update(overrides)
    return data
