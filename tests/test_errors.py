import json
import sqlite3

import pytest
from sqlalchemy.exc import OperationalError

from database import commit
from errors import (
    AuthorizationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    ValidationKind,
    budget_app_error_handler,
)


class FailingSession:
    rolled_back = False

    async def commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    async def rollback(self):
        self.rolled_back = True


@pytest.mark.anyio
async def test_commit_failure_becomes_persistence_error(anyio_backend):
    session = FailingSession()
    with pytest.raises(PersistenceError):
        await commit(session)
    assert session.rolled_back


@pytest.mark.anyio
@pytest.mark.parametrize(
    "exc, status, body",
    [
        (PersistenceError(), 500, {"message": "Server Error"}),
        (AuthorizationError(), 403, {"message": "This action is unauthorized."}),
        (NotFoundError("Goal not found."), 404, {"message": "Goal not found."}),
        (
            ValidationError(ValidationKind.DUPLICATE, "The name has already been taken.", field="name"),
            422,
            {
                "message": "The name has already been taken.",
                "kind": "Duplicate",
                "errors": {"name": ["The name has already been taken."]},
            },
        ),
    ],
)
async def test_error_rendering(anyio_backend, exc, status, body):
    resp = await budget_app_error_handler(None, exc)
    assert resp.status_code == status
    assert json.loads(resp.body) == body


def test_read_failure_renders_server_error(client, alice, database_path):
    conn = sqlite3.connect(str(database_path))
    try:
        conn.execute("DROP TABLE allocations")
        conn.commit()
    finally:
        conn.close()

    resp = client.get("/allocations", headers=alice)
    assert resp.status_code == 500
    assert resp.json() == {"message": "Server Error"}
