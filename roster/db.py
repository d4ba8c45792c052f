from __future__ import annotations

# roster/db.py
import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from .config import is_packaged, is_test_env, project_root, read_config_yaml, user_data_dir
from .errors import GatewayUnavailable
from .repository import account_repo, personnel_repo

logger = logging.getLogger(__name__)

# DB 路径解析顺序：
# 1) 环境变量 ROSTER_DB_PATH（最高优先级）
# 2) config.yaml 的 test_db_path（当检测到测试环境时）
# 3) config.yaml 的 db_path
# 4) 打包部署：用户数据目录 databases/database.db
# 5) 开发环境：项目根 data/database.db
_DEV_DB = os.path.join(project_root(), "data", "database.db")


def get_db_path() -> str:
    env_path = os.environ.get("ROSTER_DB_PATH")
    cfg = read_config_yaml()
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")

    if env_path:
        path = env_path
    elif is_test_env() and isinstance(cfg_test, str) and cfg_test.strip():
        path = cfg_test.strip()
    elif isinstance(cfg_db, str) and cfg_db.strip():
        path = cfg_db.strip()
    elif is_packaged():
        path = os.path.join(user_data_dir(), "databases", "database.db")
    else:
        path = _DEV_DB

    # 确保目录存在
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@dataclass
class InitResult:
    ok: bool
    path: str
    error: str | None = None


class Database:
    """
    Owns the single SQLite connection of the process.

    Constructed explicitly by the entry point and handed to the gateway; nothing
    here is module-global. `connection()` serializes statement execution on the
    shared connection.
    """

    def __init__(self, path: str | None = None):
        self.path = path or get_db_path()
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> InitResult:
        conn = None
        try:
            conn = sqlite3.connect(self.path, check_same_thread=False, isolation_level=None)
            conn.row_factory = sqlite3.Row
            account_repo.ensure_schema(conn)
            personnel_repo.ensure_schema(conn)
        except sqlite3.Error as e:
            logger.error("Could not open database %s: %s", self.path, e)
            if conn is not None:
                conn.close()
            return InitResult(ok=False, path=self.path, error=str(e))
        self._conn = conn
        logger.info("Connected to the database at %s", self.path)
        return InitResult(ok=True, path=self.path)

    @contextmanager
    def connection(self, operation: str | None = None) -> Iterator[sqlite3.Connection]:
        with self._lock:
            if self._conn is None:
                raise GatewayUnavailable("database is not open", operation)
            yield self._conn

    def close(self):
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
        logger.info("Database connection is closed.")
