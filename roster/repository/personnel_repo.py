from __future__ import annotations

from sqlite3 import Connection
from typing import Optional

# 可写字段（id、created_at 除外），顺序即 SQL 参数顺序
MUTABLE_FIELDS = (
    "username",
    "degree",
    "police_no",
    "birth_date",
    "join_date",
    "address",
    "job",
    "image",
    "description",
)

COLUMNS = ("id",) + MUTABLE_FIELDS[:7] + ("created_at",) + MUTABLE_FIELDS[7:]


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS policemen (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL,
            degree TEXT NOT NULL,
            police_no TEXT NOT NULL,
            birth_date TEXT NOT NULL,
            join_date TEXT NOT NULL,
            address TEXT NOT NULL,
            job TEXT NOT NULL,
            created_at TEXT NOT NULL,
            image TEXT,
            description TEXT
        )
        """
    )


def insert(conn: Connection, fields: dict, created_at: str) -> int:
    cols = MUTABLE_FIELDS + ("created_at",)
    sql = "INSERT INTO policemen({}) VALUES({})".format(",".join(cols), ",".join(["?"] * len(cols)))
    cur = conn.execute(sql, [fields.get(c) for c in MUTABLE_FIELDS] + [created_at])
    return int(cur.lastrowid)


def update(conn: Connection, record_id: int, fields: dict) -> int:
    sql = "UPDATE policemen SET {} WHERE id=?".format(", ".join(f"{c}=?" for c in MUTABLE_FIELDS))
    cur = conn.execute(sql, [fields.get(c) for c in MUTABLE_FIELDS] + [record_id])
    return cur.rowcount


def delete(conn: Connection, record_id: int) -> int:
    cur = conn.execute("DELETE FROM policemen WHERE id=?", (record_id,))
    return cur.rowcount


def get_one(conn: Connection, record_id: int):
    sql = "SELECT {} FROM policemen WHERE id=?".format(", ".join(COLUMNS))
    return conn.execute(sql, (record_id,)).fetchone()


def _like_pattern(q: str) -> str:
    # % 和 _ 按字面匹配
    escaped = q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _filtered_query(q: Optional[str]) -> tuple[str, dict]:
    sql = "SELECT {} FROM policemen".format(", ".join(COLUMNS))
    params: dict = {}
    if q:
        sql += " WHERE (username LIKE :q ESCAPE '\\' OR police_no LIKE :q ESCAPE '\\')"
        params["q"] = _like_pattern(q)
    # id 作为同一天记录的次序，保证分页稳定
    sql += " ORDER BY created_at DESC, id DESC"
    return sql, params


def count_matching(conn: Connection, q: Optional[str]) -> int:
    sql, params = _filtered_query(q)
    row = conn.execute(f"SELECT COUNT(*) AS total FROM ({sql}) AS sub", params).fetchone()
    return int(row["total"] or 0)


def list_page(conn: Connection, q: Optional[str], limit: Optional[int], offset: int = 0):
    sql, params = _filtered_query(q)
    if limit is not None:
        sql += " LIMIT :limit OFFSET :offset"
        params.update(limit=limit, offset=offset)
    return conn.execute(sql, params).fetchall()
