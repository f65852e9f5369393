import copy

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.db import dynamo
from app.main import app


class FakeStore:
    """In-memory stand-in for the DynamoDB tables, keyed like the real ones."""

    def __init__(self):
        self.users = {}
        self.fuel = {}
        self.toll = {}
        self.settings = {}
        self.fail_writes = False

    # users
    def get_user_by_email(self, email):
        return next((copy.deepcopy(u) for u in self.users.values() if u["email"] == email), None)

    def get_user_by_id(self, user_id):
        return copy.deepcopy(self.users.get(user_id))

    def put_user(self, item):
        if self.fail_writes:
            return False
        self.users[item["user_id"]] = copy.deepcopy(item)
        return True

    # records
    def _list(self, table, user_id, start_date, end_date):
        rows = [
            copy.deepcopy(r) for (owner, _), r in table.items()
            if owner == user_id and start_date <= r["date"] <= end_date
        ]
        rows.sort(key=lambda r: (r["date"], r.get("time") or ""), reverse=True)
        return rows

    def _put(self, table, item):
        if self.fail_writes:
            return False
        table[(item["user_id"], item["record_id"])] = copy.deepcopy(item)
        return True

    def _replace(self, table, item):
        key = (item["user_id"], item["record_id"])
        if self.fail_writes or key not in table:
            return None
        table[key] = copy.deepcopy(item)
        return copy.deepcopy(item)

    def install(self, monkeypatch):
        for name in ("get_user_by_email", "get_user_by_id", "put_user"):
            monkeypatch.setattr(dynamo, name, getattr(self, name))

        for kind, table in (("fuel", self.fuel), ("toll", self.toll)):
            monkeypatch.setattr(dynamo, f"list_{kind}_records",
                                lambda u, s, e, t=table: self._list(t, u, s, e))
            monkeypatch.setattr(dynamo, f"get_{kind}_record",
                                lambda u, r, t=table: copy.deepcopy(t.get((u, r))))
            monkeypatch.setattr(dynamo, f"put_{kind}_record",
                                lambda item, t=table: self._put(t, item))
            monkeypatch.setattr(dynamo, f"replace_{kind}_record",
                                lambda item, t=table: self._replace(t, item))
            monkeypatch.setattr(dynamo, f"delete_{kind}_record",
                                lambda u, r, t=table: t.pop((u, r), None) is not None)

        monkeypatch.setattr(dynamo, "get_setting",
                            lambda u, k, ym="": self.settings.get((u, k, ym)))
        monkeypatch.setattr(dynamo, "put_setting", self._put_setting)

    def _put_setting(self, user_id, key, value, year_month=""):
        if self.fail_writes:
            return False
        self.settings[(user_id, key, year_month)] = value
        return True


@pytest.fixture
def store(monkeypatch):
    fake = FakeStore()
    fake.install(monkeypatch)
    return fake


@pytest.fixture
def client(store):
    return TestClient(app)


def auth_headers(user_id="user-1"):
    token = create_access_token(data={"sub": user_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers():
    return auth_headers("user-1")


@pytest.fixture
def other_headers():
    return auth_headers("user-2")
