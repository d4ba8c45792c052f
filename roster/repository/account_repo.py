from __future__ import annotations

from sqlite3 import Connection


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL,
            password TEXT NOT NULL,
            role TEXT
        )
        """
    )


def list_all(conn: Connection):
    return conn.execute("SELECT id, username, password, role FROM users").fetchall()


def insert(conn: Connection, username: str, password: str, role: str | None) -> int:
    cur = conn.execute(
        "INSERT INTO users(username, password, role) VALUES(?, ?, ?)",
        (username, password, role),
    )
    return int(cur.lastrowid)


def update(conn: Connection, account_id: int, username: str, password: str, role: str | None) -> int:
    cur = conn.execute(
        "UPDATE users SET username=?, password=?, role=? WHERE id=?",
        (username, password, role, account_id),
    )
    return cur.rowcount


def delete(conn: Connection, account_id: int) -> int:
    cur = conn.execute("DELETE FROM users WHERE id=?", (account_id,))
    return cur.rowcount
