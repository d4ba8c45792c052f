from __future__ import annotations

import pytest

from roster.db import Database
from roster.errors import GatewayUnavailable, RecordNotFound
from roster.services import gateway as gateway_mod
from roster.services.gateway import PersistenceGateway
from roster.services.utils import today_iso


# ---------------- accounts ----------------

def test_account_create_update_list(gateway):
    acc = gateway.create_account("alice", "secret123", "admin")
    assert acc["id"] is not None
    assert acc == {"id": acc["id"], "username": "alice", "role": "admin"}

    upd = gateway.update_account(acc["id"], "alice2", "secret123", "admin")
    assert upd["username"] == "alice2"

    rows = gateway.list_accounts()
    assert len(rows) == 1
    assert rows[0]["username"] == "alice2"
    assert rows[0]["password"] == "secret123"


def test_account_role_is_optional(gateway):
    acc = gateway.create_account("bob", "pw", None)
    assert gateway.list_accounts()[0]["role"] is None
    assert acc["role"] is None


def test_account_delete_and_not_found(gateway):
    acc = gateway.create_account("carol", "pw", "user")
    assert gateway.delete_account(acc["id"]) == {"success": True}
    assert gateway.list_accounts() == []
    with pytest.raises(RecordNotFound):
        gateway.delete_account(acc["id"])
    with pytest.raises(RecordNotFound):
        gateway.update_account(acc["id"], "x", "y", None)


# ---------------- personnel ----------------

def test_create_stamps_today_ignoring_client_value(gateway, make_personnel):
    rec = gateway.create_personnel(make_personnel(created_at="1999-01-01"))
    assert rec["created_at"] == today_iso()
    stored = gateway.get_personnel(rec["id"])
    assert stored["created_at"] == today_iso()
    assert stored["police_no"] == "P-1001"


def test_created_ids_are_unique(gateway, make_personnel):
    ids = {gateway.create_personnel(make_personnel(police_no=f"P-{i}"))["id"] for i in range(5)}
    assert len(ids) == 5


def test_update_keeps_id_and_created_at(gateway, make_personnel, monkeypatch):
    monkeypatch.setattr(gateway_mod, "today_iso", lambda: "2020-02-02")
    rec = gateway.create_personnel(make_personnel())
    monkeypatch.setattr(gateway_mod, "today_iso", lambda: "2024-06-06")

    out = gateway.update_personnel(rec["id"], make_personnel(username="Renamed", image="aGVsbG8="))
    assert out["id"] == rec["id"]
    assert "created_at" not in out

    stored = gateway.get_personnel(rec["id"])
    assert stored["id"] == rec["id"]
    assert stored["username"] == "Renamed"
    assert stored["image"] == "aGVsbG8="
    assert stored["created_at"] == "2020-02-02"


def test_update_missing_record(gateway, make_personnel):
    with pytest.raises(RecordNotFound):
        gateway.update_personnel(12345, make_personnel())


def test_delete_then_get_is_none(gateway, make_personnel):
    rec = gateway.create_personnel(make_personnel())
    assert gateway.delete_personnel(rec["id"]) == {"success": True}
    assert gateway.get_personnel(rec["id"]) is None
    with pytest.raises(RecordNotFound):
        gateway.delete_personnel(rec["id"])


def test_get_missing_returns_none(gateway):
    assert gateway.get_personnel(999) is None


def test_search_matches_name_or_badge(gateway, make_personnel):
    gateway.create_personnel(make_personnel(username="Omar Khaled", police_no="A-100"))
    gateway.create_personnel(make_personnel(username="Sara Adel", police_no="B-777"))
    gateway.create_personnel(make_personnel(username="Youssef", police_no="OMAR-9"))

    res = gateway.list_personnel("omar")
    names = sorted(r["username"] for r in res["rows"])
    assert names == ["Omar Khaled", "Youssef"]
    assert res["pagination"] == {"total_records": 2, "total_pages": 1}
    for r in res["rows"]:
        assert "omar" in r["username"].lower() or "omar" in r["police_no"].lower()


def test_search_empty_string_returns_all(gateway, make_personnel):
    for i in range(3):
        gateway.create_personnel(make_personnel(police_no=f"P-{i}"))
    assert gateway.list_personnel("")["pagination"]["total_records"] == 3


def test_pagination_seven_records(gateway, make_personnel):
    for i in range(7):
        gateway.create_personnel(make_personnel(police_no=f"P-{i}"))

    page1 = gateway.list_personnel(None, 5, 0)
    assert len(page1["rows"]) == 5
    assert page1["pagination"] == {"total_records": 7, "total_pages": 2}

    page2 = gateway.list_personnel(None, 5, 5)
    assert len(page2["rows"]) == 2
    assert page2["pagination"]["total_pages"] == 2

    seen = {r["id"] for r in page1["rows"]} | {r["id"] for r in page2["rows"]}
    assert len(seen) == 7


def test_page_beyond_end_keeps_total(gateway, make_personnel):
    for i in range(3):
        gateway.create_personnel(make_personnel(police_no=f"P-{i}"))
    res = gateway.list_personnel(None, 2, 10)
    assert res["rows"] == []
    assert res["pagination"] == {"total_records": 3, "total_pages": 2}


def test_without_page_size_everything_one_page(gateway, make_personnel):
    for i in range(6):
        gateway.create_personnel(make_personnel(police_no=f"P-{i}"))
    res = gateway.list_personnel()
    assert len(res["rows"]) == 6
    assert res["pagination"]["total_pages"] == 1


def test_ordered_by_created_at_desc(gateway, make_personnel, monkeypatch):
    for day in ("2023-01-01", "2024-01-01", "2022-01-01"):
        monkeypatch.setattr(gateway_mod, "today_iso", lambda d=day: d)
        gateway.create_personnel(make_personnel(police_no=day))
    rows = gateway.list_personnel()["rows"]
    assert [r["created_at"] for r in rows] == ["2024-01-01", "2023-01-01", "2022-01-01"]


def test_operations_on_unopened_handle(tmp_db_path, make_personnel):
    gw = PersistenceGateway(Database(tmp_db_path))
    with pytest.raises(GatewayUnavailable):
        gw.list_accounts()
    with pytest.raises(GatewayUnavailable):
        gw.create_personnel(make_personnel())
    gw.shutdown()


def test_initialize_twice_is_ok(gateway):
    assert gateway.initialize().ok


def test_search_wildcards_match_literally(gateway, make_personnel):
    gateway.create_personnel(make_personnel(username="Ahmed", police_no="P-1"))
    gateway.create_personnel(make_personnel(username="Sara", police_no="Q-2"))
    gateway.create_personnel(make_personnel(username="Mona", police_no="123"))

    for q in ("%", "_", "1_3", "\\"):
        res = gateway.list_personnel(q)
        assert res["rows"] == []
        assert res["pagination"]["total_records"] == 0

    rec = gateway.create_personnel(make_personnel(username="Hany", police_no="X_50%"))
    for q in ("_", "%", "X_5", "50%"):
        rows = gateway.list_personnel(q)["rows"]
        assert [r["id"] for r in rows] == [rec["id"]]
        for r in rows:
            assert q in r["username"] or q in r["police_no"]
